"""
Integration types for Human IR.

This module contains third-party service connections declared with
"integrate with <Service>:" blocks.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class IntegrationType(StrEnum):
    """Integration categories generators have templates for."""

    EMAIL = "email"
    STORAGE = "storage"
    PAYMENT = "payment"
    MESSAGING = "messaging"
    OAUTH = "oauth"


class Integration(BaseModel):
    """
    A third-party service connection.

    Attributes:
        service: Service name as written ("SendGrid", "AWS S3")
        type: Inferred category; None means "use a generic template"
        credentials: Credential name -> environment variable
        config: region, bucket, sender_email, webhook_endpoint, channel, ...
        templates: Email template names
        purpose: Free-text purpose from "use for ..."
    """

    service: str
    type: IntegrationType | None = None
    credentials: dict[str, str] = Field(default_factory=dict)
    config: dict[str, str] = Field(default_factory=dict)
    templates: list[str] = Field(default_factory=list)
    purpose: str | None = None

    model_config = ConfigDict(frozen=True)
