"""Task data model."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from pydantic import Field, field_validator

from .identity import Entity

# A pending task is "due soon" when its due date is at most this many days away.
DUE_SOON_DAYS = 3

DISPLAY_DATE_FORMAT = "%b %d, %Y"


class Task(Entity):
    """Task model representing a single to-do item.

    Attributes:
        identity: Unpersisted until the repository inserts it
        title: Required task title, trimmed
        description: Optional free text, empty string when absent
        category_id: Id of the owning category
        due_date: Optional calendar due date
        is_done: Completion status
        created_at: Creation date, defaults to today
    """

    title: str
    description: str = ""
    category_id: int
    due_date: date | None = None
    is_done: bool = False
    created_at: date = Field(default_factory=date.today)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Trim the title and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("Task title cannot be empty")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("created_at", mode="before")
    @classmethod
    def default_created_at(cls, v: Any) -> Any:
        return date.today() if v is None else v

    # ---- derived state ----

    def overdue_on(self, day: date) -> bool:
        """Whether the task is pending and its due date is strictly before ``day``."""
        if self.due_date is None or self.is_done:
            return False
        return self.due_date < day

    def due_soon_on(self, day: date) -> bool:
        """Whether the task is pending, not overdue, and due within DUE_SOON_DAYS of ``day``."""
        if self.due_date is None or self.is_done:
            return False
        return self.due_date <= day + timedelta(days=DUE_SOON_DAYS) and not self.overdue_on(day)

    @property
    def is_overdue(self) -> bool:
        return self.overdue_on(date.today())

    @property
    def is_due_soon(self) -> bool:
        return self.due_soon_on(date.today())

    def toggle_done(self) -> None:
        self.is_done = not self.is_done

    def matches_search(self, query: str | None) -> bool:
        """Case-insensitive substring match on title and description.

        A blank query matches every task.
        """
        if query is None or not query.strip():
            return True
        needle = query.strip().casefold()
        return needle in self.title.casefold() or needle in self.description.casefold()

    # ---- display helpers ----

    @property
    def formatted_due_date(self) -> str:
        if self.due_date is None:
            return "No due date"
        return self.due_date.strftime(DISPLAY_DATE_FORMAT)

    @property
    def formatted_created_at(self) -> str:
        return self.created_at.strftime(DISPLAY_DATE_FORMAT)

    @property
    def display_title(self) -> str:
        """Title prefixed with a status marker (done, overdue, due soon)."""
        if self.is_done:
            return f"✓ {self.title}"
        if self.is_overdue:
            return f"🔴 {self.title}"
        if self.is_due_soon:
            return f"🟡 {self.title}"
        return self.title

    # ---- object contract ----

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        if self.is_persisted != other.is_persisted:
            return False
        if self.is_persisted:
            return self.id == other.id
        return (self.title, self.category_id, self.created_at) == (
            other.title,
            other.category_id,
            other.created_at,
        )

    def __hash__(self) -> int:
        if self.is_persisted:
            return hash(self.id)
        return hash((self.title, self.category_id, self.created_at))

    def __str__(self) -> str:
        due = self.due_date.isoformat() if self.due_date else "none"
        return (
            f"Task(id={self.id}, title={self.title!r}, category_id={self.category_id}, "
            f"is_done={self.is_done}, due_date={due})"
        )
