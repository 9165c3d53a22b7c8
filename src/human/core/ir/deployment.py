"""
Build, deployment, architecture, and monitoring types for Human IR.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .actions import Action


class BuildConfig(BaseModel):
    """
    Target framework and deployment choices from "build with:".

    Attributes:
        frontend: e.g. "React with TypeScript"
        backend: e.g. "Node with Express"
        database: e.g. "PostgreSQL"
        deploy: e.g. "Docker"
    """

    frontend: str | None = None
    backend: str | None = None
    database: str | None = None
    deploy: str | None = None

    model_config = ConfigDict(frozen=True)


class Environment(BaseModel):
    """A deployment environment ("environment staging:")."""

    name: str
    config: dict[str, str] = Field(default_factory=dict)
    rules: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ArchitectureStyle(StrEnum):
    """Normalised architecture styles."""

    MONOLITH = "monolith"
    MICROSERVICES = "microservices"
    SERVERLESS = "serverless"


class ServiceDef(BaseModel):
    """A microservice within an architecture block."""

    name: str
    handles: str | None = None
    port: int | None = None
    models: list[str] = Field(default_factory=list)
    has_own_database: bool = False
    talks_to: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class GatewayDef(BaseModel):
    """An API gateway: path -> service routes plus gateway rules."""

    routes: dict[str, str] = Field(default_factory=dict)
    rules: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Architecture(BaseModel):
    """
    The application's architectural style.

    `style` is a normalised ArchitectureStyle value where one applies,
    otherwise the lowercased style text (e.g. "hybrid").
    """

    style: str
    services: list[ServiceDef] = Field(default_factory=list)
    gateway: GatewayDef | None = None
    broker: str | None = None

    model_config = ConfigDict(frozen=True)


class MonitoringKind(StrEnum):
    """Kinds of observability directive."""

    TRACK = "track"
    ALERT = "alert"
    LOG = "log"


class MonitoringRule(BaseModel):
    """
    An observability directive from a top-level statement.

    Attributes:
        kind: track, alert, or log
        metric: What to track or log
        channel: Alert channel ("Slack")
        condition: Alert trigger condition
        service: Log destination ("CloudWatch")
        duration: Log retention duration
    """

    kind: MonitoringKind
    metric: str | None = None
    channel: str | None = None
    condition: str | None = None
    service: str | None = None
    duration: str | None = None

    model_config = ConfigDict(frozen=True)
