"""Repository interfaces and result types."""

from .repository import CategoryRepository, TaskRepository
from .result import NotFound, Ok, Result, StorageError, is_ok, unwrap_or

__all__ = [
    "CategoryRepository",
    "TaskRepository",
    "Ok",
    "NotFound",
    "StorageError",
    "Result",
    "is_ok",
    "unwrap_or",
]
