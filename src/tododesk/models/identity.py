"""Persistence identity shared by all stored entities.

An entity is either ``Unpersisted`` (built in memory, never written) or
``Persisted`` with the id the database assigned on insert. The state is a
tagged union rather than a magic ``-1`` id, so an entity can only move from
unpersisted to persisted once.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Unpersisted(BaseModel):
    """Identity of an entity that has not been written to the store."""

    model_config = ConfigDict(frozen=True)

    state: Literal["unpersisted"] = "unpersisted"


class Persisted(BaseModel):
    """Identity of an entity stored under a database-assigned id."""

    model_config = ConfigDict(frozen=True)

    state: Literal["persisted"] = "persisted"
    id: int = Field(gt=0)


Identity = Annotated[Unpersisted | Persisted, Field(discriminator="state")]


class Entity(BaseModel):
    """Base model for entities that carry a persistence identity."""

    model_config = ConfigDict(validate_assignment=True)

    identity: Identity = Field(default_factory=Unpersisted)

    @property
    def id(self) -> int | None:
        """Database id, or None while unpersisted."""
        if isinstance(self.identity, Persisted):
            return self.identity.id
        return None

    @property
    def is_persisted(self) -> bool:
        return isinstance(self.identity, Persisted)

    def mark_persisted(self, entity_id: int) -> None:
        """Record the id assigned by the repository on insert.

        Raises:
            ValueError: If the entity already has a persisted identity
        """
        if isinstance(self.identity, Persisted):
            raise ValueError(
                f"{type(self).__name__} is already persisted with id {self.identity.id}"
            )
        self.identity = Persisted(id=entity_id)
