"""tododesk domain models.

This package contains the Pydantic models for the core domain entities
(categories, tasks), their persistence identity, aggregate statistics and
the application configuration.
"""

from .category import DEFAULT_ICON, Category
from .config_models import AppConfig, OutputConfig
from .identity import Entity, Identity, Persisted, Unpersisted
from .stats import TaskStats
from .task import DUE_SOON_DAYS, Task

__all__ = [
    # Entities
    "Category",
    "Task",
    "TaskStats",
    # Identity
    "Entity",
    "Identity",
    "Persisted",
    "Unpersisted",
    # Constants
    "DEFAULT_ICON",
    "DUE_SOON_DAYS",
    # Config models
    "AppConfig",
    "OutputConfig",
]
