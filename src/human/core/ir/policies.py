"""
Authorization types for Human IR.

A Policy is a named role bundle. Each rule keeps its original text next
to a best-effort structured parse; fields the parse could not establish
stay empty rather than guessed.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PolicyScope(StrEnum):
    """Record scope a rule applies to."""

    OWN = "own"
    ANY = "any"
    ALL = "all"


class PolicyRule(BaseModel):
    """
    A single permission or restriction.

    Attributes:
        text: Original rule text (without can/cannot)
        action: First word of the rule ("create", "view", ...)
        model: Singularized model noun ("task", "user", ...)
        scope: own / any / all, when stated
        limit: Numeric quota from "up to N ..."
        period: Quota period from "... per <period>"
        condition: Qualifier such as "completed"
    """

    text: str
    action: str | None = None
    model: str | None = None
    scope: PolicyScope | None = None
    limit: int | None = None
    period: str | None = None
    condition: str | None = None

    model_config = ConfigDict(frozen=True)


class Policy(BaseModel):
    """Authorization rules for a role."""

    name: str
    permissions: list[PolicyRule] = Field(default_factory=list)
    restrictions: list[PolicyRule] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
