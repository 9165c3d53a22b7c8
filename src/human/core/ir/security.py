"""
Authentication and security types for Human IR.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .actions import Action


class AuthMethodType(StrEnum):
    """Authentication approaches."""

    JWT = "jwt"
    OAUTH = "oauth"
    CUSTOM = "custom"


class AuthMethod(BaseModel):
    """
    A specific authentication approach.

    Attributes:
        type: jwt, oauth, or custom
        provider: OAuth provider name ("Google", "GitHub")
        config: expiration, callback_url, or description
    """

    type: AuthMethodType
    provider: str | None = None
    config: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class Auth(BaseModel):
    """Authentication methods plus security rules (rate limits, CORS, ...)."""

    methods: list[AuthMethod] = Field(default_factory=list)
    rules: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
