"""Configuration models for tododesk.

The configuration is stored as JSON and validated with these models on load.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    show_completed: bool = Field(
        default=False, description="Include completed tasks in 'tasks list'"
    )


class AppConfig(BaseModel):
    """Main tododesk configuration."""

    database_path: str | None = Field(
        default=None,
        description="SQLite database file; None means the user data directory",
    )
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("database_path")
    @classmethod
    def validate_database_path(cls, v: str | None) -> str | None:
        """Treat blank paths as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()
