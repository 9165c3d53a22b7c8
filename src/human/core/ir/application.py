"""
Application type for Human IR.

This module contains the root Application node. Given only this tree,
any code generator can produce a working application.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .backend import Endpoint
from .data import DataModel
from .database import DatabaseConfig
from .deployment import Architecture, BuildConfig, Environment, MonitoringRule
from .frontend import Component, Page
from .integrations import Integration
from .policies import Policy
from .security import Auth
from .theme import Theme
from .workflows import ErrorHandler, Pipeline, Workflow


class Application(BaseModel):
    """
    Complete, framework-agnostic application description.

    Built once per compile and never mutated afterwards. All children
    are owned by value; cross references (relation targets, index
    entities) are plain names.

    Attributes:
        name: Application name
        platform: web, mobile, desktop, api
        config: Build targets
        data: Data models
        pages: Frontend pages
        components: Reusable UI components
        apis: Backend endpoints
        policies: Role policies
        workflows: Business workflows
        theme: Visual theme
        auth: Authentication configuration
        database: Database configuration
        integrations: Third-party services
        environments: Deployment environments
        error_handlers: Error recovery blocks
        pipelines: CI/CD pipelines
        architecture: Architectural style
        monitoring: Observability directives
    """

    name: str = ""
    platform: str = ""
    config: BuildConfig | None = None
    data: list[DataModel] = Field(default_factory=list)
    pages: list[Page] = Field(default_factory=list)
    components: list[Component] = Field(default_factory=list)
    apis: list[Endpoint] = Field(default_factory=list)
    policies: list[Policy] = Field(default_factory=list)
    workflows: list[Workflow] = Field(default_factory=list)
    theme: Theme | None = None
    auth: Auth | None = None
    database: DatabaseConfig | None = None
    integrations: list[Integration] = Field(default_factory=list)
    environments: list[Environment] = Field(default_factory=list)
    error_handlers: list[ErrorHandler] = Field(default_factory=list)
    pipelines: list[Pipeline] = Field(default_factory=list)
    architecture: Architecture | None = None
    monitoring: list[MonitoringRule] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_model(self, name: str) -> DataModel | None:
        """Get data model by name."""
        for model in self.data:
            if model.name == name:
                return model
        return None

    def get_endpoint(self, name: str) -> Endpoint | None:
        """Get API endpoint by name."""
        for endpoint in self.apis:
            if endpoint.name == name:
                return endpoint
        return None

    def get_policy(self, name: str) -> Policy | None:
        """Get policy by role name."""
        for policy in self.policies:
            if policy.name == name:
                return policy
        return None
