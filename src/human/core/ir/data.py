"""
Data layer types for Human IR.

This module contains data models, their typed fields, and the
relations between models.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RelationKind(StrEnum):
    """Kinds of relation between data models."""

    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"
    HAS_MANY_THROUGH = "has_many_through"


class DataField(BaseModel):
    """
    A typed field within a data model.

    Attributes:
        name: Field name
        type: Semantic type (text, number, email, datetime, enum, ...)
        required: False only when declared optional
        unique: Value must be unique across records
        encrypted: Value is stored encrypted
        enum_values: Allowed values for enum fields
        default: Default value from "defaults to"
    """

    name: str
    type: str = "text"
    required: bool = True
    unique: bool = False
    encrypted: bool = False
    enum_values: list[str] = Field(default_factory=list)
    default: str | None = None

    model_config = ConfigDict(frozen=True)


class Relation(BaseModel):
    """
    A relationship between data models.

    The target is a plain name reference; whether it resolves to a
    declared model is checked downstream.

    Attributes:
        kind: belongs_to, has_many, or has_many_through
        target: Related model name
        through: Join model name for many-to-many
    """

    kind: RelationKind
    target: str
    through: str | None = None

    model_config = ConfigDict(frozen=True)


class DataModel(BaseModel):
    """
    A data entity with typed fields and relationships.

    Attributes:
        name: Model name
        fields: Fields in declaration order
        relations: Relations in declaration order
    """

    name: str
    fields: list[DataField] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_unique_field_names(self) -> DataModel:
        """Field names are unique within a model, ignoring case."""
        seen: set[str] = set()
        for f in self.fields:
            key = f.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate field '{f.name}' in data model '{self.name}'")
            seen.add(key)
        return self

    def get_field(self, name: str) -> DataField | None:
        """Get field by name (case-insensitive)."""
        for f in self.fields:
            if f.name.lower() == name.lower():
                return f
        return None
