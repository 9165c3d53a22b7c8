"""
Frontend types for Human IR: pages and reusable components.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .actions import Action


class Page(BaseModel):
    """A frontend page with display and interaction statements."""

    name: str
    content: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Prop(BaseModel):
    """
    An input parameter for a component.

    "task as Task" becomes Prop(name="task", type="Task").
    """

    name: str
    type: str | None = None

    model_config = ConfigDict(frozen=True)


class Component(BaseModel):
    """A reusable UI component."""

    name: str
    props: list[Prop] = Field(default_factory=list)
    content: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
