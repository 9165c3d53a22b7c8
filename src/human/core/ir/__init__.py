"""
Human Intermediate Representation (IR) types.

This package contains all IR type definitions. Types are organized into
logical submodules; everything is re-exported here.
"""

# Actions
from .actions import (
    Action,
    ActionType,
)

# Application
from .application import (
    Application,
)

# Backend
from .backend import (
    Endpoint,
    Param,
    ValidationRule,
    ValidationRuleKind,
)

# Data
from .data import (
    DataField,
    DataModel,
    Relation,
    RelationKind,
)

# Database
from .database import (
    DatabaseConfig,
    Index,
)

# Build, deployment, architecture, monitoring
from .deployment import (
    Architecture,
    ArchitectureStyle,
    BuildConfig,
    Environment,
    GatewayDef,
    MonitoringKind,
    MonitoringRule,
    ServiceDef,
)

# Frontend
from .frontend import (
    Component,
    Page,
    Prop,
)

# Integrations
from .integrations import (
    Integration,
    IntegrationType,
)

# Policies
from .policies import (
    Policy,
    PolicyRule,
    PolicyScope,
)

# Security
from .security import (
    Auth,
    AuthMethod,
    AuthMethodType,
)

# Theme
from .theme import (
    Theme,
)

# Workflows
from .workflows import (
    ErrorHandler,
    Pipeline,
    Workflow,
)

__all__ = [
    # Actions
    "Action",
    "ActionType",
    # Application
    "Application",
    # Backend
    "Endpoint",
    "Param",
    "ValidationRule",
    "ValidationRuleKind",
    # Data
    "DataField",
    "DataModel",
    "Relation",
    "RelationKind",
    # Database
    "DatabaseConfig",
    "Index",
    # Deployment
    "Architecture",
    "ArchitectureStyle",
    "BuildConfig",
    "Environment",
    "GatewayDef",
    "MonitoringKind",
    "MonitoringRule",
    "ServiceDef",
    # Frontend
    "Component",
    "Page",
    "Prop",
    # Integrations
    "Integration",
    "IntegrationType",
    # Policies
    "Policy",
    "PolicyRule",
    "PolicyScope",
    # Security
    "Auth",
    "AuthMethod",
    "AuthMethodType",
    # Theme
    "Theme",
    # Workflows
    "ErrorHandler",
    "Pipeline",
    "Workflow",
]
