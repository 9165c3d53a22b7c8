"""
Action types for Human IR.

An Action is one classified statement inside a page, component,
endpoint, workflow, pipeline, or error-handler body.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ActionType(StrEnum):
    """Closed set of action categories consumed by code generators."""

    DISPLAY = "display"  # show/render something
    INTERACT = "interact"  # clicking, dragging, scrolling, hovering
    INPUT = "input"  # form element, search, dropdown, file upload
    NAVIGATE = "navigate"
    CONDITION = "condition"  # if/when/while/unless
    LOOP = "loop"  # each/every iteration
    QUERY = "query"  # fetch/get data
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    VALIDATE = "validate"
    RESPOND = "respond"  # API response
    SEND = "send"  # email/notification
    ASSIGN = "assign"
    ALERT = "alert"
    LOG = "log"  # logging/tracking
    DELAY = "delay"  # after X time
    RETRY = "retry"
    CONFIGURE = "configure"  # configuration setting, build/deploy
    UNCLASSIFIED = "unclassified"  # leading keyword not in the table


class Action(BaseModel):
    """
    A single classified statement.

    Attributes:
        type: Action category
        text: Original statement text, always preserved
        target: Entity or element being acted upon, when recognisable
        value: Value or destination, when recognisable
    """

    type: ActionType
    text: str
    target: str | None = None
    value: str | None = None

    model_config = ConfigDict(frozen=True)
