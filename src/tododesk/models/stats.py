"""Aggregate task statistics."""

from __future__ import annotations

from pydantic import BaseModel, computed_field


class TaskStats(BaseModel):
    """Task counters shown in the summary views.

    Attributes:
        total: Number of tasks in the store
        completed: Tasks marked done
        pending: total - completed
        overdue: Pending tasks due today or earlier
    """

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def completion_percentage(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.completed * 100.0 / self.total

    def __str__(self) -> str:
        return (
            f"Tasks: {self.total} total | {self.completed} done "
            f"({self.completion_percentage:.1f}%) | {self.pending} pending | "
            f"{self.overdue} overdue"
        )
