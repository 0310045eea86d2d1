"""Category data model."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from .identity import Entity

DEFAULT_ICON = "📁"


class Category(Entity):
    """Category grouping a set of tasks.

    Attributes:
        identity: Unpersisted until the repository inserts it
        name: Category name, trimmed and unique within the store
        icon: Emoji or glyph shown next to the name
    """

    name: str
    icon: str = DEFAULT_ICON

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Trim the name and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("Category name cannot be empty")
        return v

    @field_validator("icon", mode="before")
    @classmethod
    def default_icon(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_ICON
        return v

    @property
    def display_text(self) -> str:
        return f"{self.icon} {self.name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        if self.is_persisted != other.is_persisted:
            return False
        if self.is_persisted:
            return self.id == other.id
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.id) if self.is_persisted else hash(self.name)

    def __str__(self) -> str:
        return f"Category(id={self.id}, name={self.name!r}, icon={self.icon!r})"
