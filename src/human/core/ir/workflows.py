"""
Event-driven types for Human IR: workflows, CI/CD pipelines, and
error handlers.

Workflows and pipelines share the "when X:" syntax; the builder routes
each block to exactly one of them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .actions import Action


class Workflow(BaseModel):
    """An event-driven action sequence ("when a user signs up:")."""

    trigger: str
    steps: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Pipeline(BaseModel):
    """A CI/CD pipeline triggered by code events ("when code is pushed:")."""

    trigger: str
    steps: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ErrorHandler(BaseModel):
    """Error recovery logic ("if database is unreachable:")."""

    condition: str
    steps: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
