"""
Database configuration types for Human IR.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .actions import Action


class Index(BaseModel):
    """A database index ("index Task by user and status")."""

    entity: str
    fields: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DatabaseConfig(BaseModel):
    """Database engine, indexes, and operational rules (backup, retention)."""

    engine: str | None = None
    indexes: list[Index] = Field(default_factory=list)
    rules: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
