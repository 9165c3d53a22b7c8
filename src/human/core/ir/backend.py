"""
Backend types for Human IR.

This module contains API endpoints, their parameters, and the structured
validation rules extracted from "check that ..." statements.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .actions import Action


class ValidationRuleKind(StrEnum):
    """Recognised validation rule kinds."""

    NOT_EMPTY = "not_empty"
    VALID_EMAIL = "valid_email"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    UNIQUE = "unique"
    FUTURE_DATE = "future_date"
    MATCHES = "matches"
    AUTHORIZATION = "authorization"


class Param(BaseModel):
    """An API input parameter."""

    name: str

    model_config = ConfigDict(frozen=True)


class ValidationRule(BaseModel):
    """
    A structured validation check.

    `rule` is usually a ValidationRuleKind value; "is a valid <x>" yields
    "valid_<x>", so the field is kept as a plain string.

    Attributes:
        field: Field being validated ("current_user" for authorization)
        rule: Rule kind
        value: Threshold, other field, or role expression
        message: Optional error message
    """

    field: str
    rule: str
    value: str | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class Endpoint(BaseModel):
    """
    A backend API operation.

    Attributes:
        name: Endpoint name
        auth: True when the block states "requires authentication"
        params: Accepted parameters in order
        validation: Validation rules extracted from check steps
        steps: Remaining classified steps
    """

    name: str
    auth: bool = False
    params: list[Param] = Field(default_factory=list)
    validation: list[ValidationRule] = Field(default_factory=list)
    steps: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
