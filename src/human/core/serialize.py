"""
Serialization of the Application IR.

Two encodings are supported:

- JSON, a direct and complete encoding through pydantic. Decoding the
  JSON of a built Application yields an equal Application.
- YAML, a readable nested document with a fixed key order so regenerated
  output diffs cleanly from build to build.

The YAML path goes through an explicit value tree (NullValue, BoolValue,
NumberValue, StringValue, ArrayValue, ObjectValue). Key ordering and the
omission of empty values happen while building that tree; rendering it
back to plain data for PyYAML is then a straight walk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

import yaml
from pydantic import ValidationError

from .errors import SerializationError
from .ir import Application

logger = logging.getLogger(__name__)

# Preferred order of Application keys.
TOP_LEVEL_KEY_ORDER: tuple[str, ...] = (
    "name",
    "platform",
    "config",
    "data",
    "pages",
    "components",
    "apis",
    "policies",
    "workflows",
    "theme",
    "auth",
    "database",
    "integrations",
    "environments",
    "error_handlers",
    "pipelines",
    "architecture",
    "monitoring",
)

# Preferred order of keys in nested objects.
COMMON_KEY_ORDER: tuple[str, ...] = (
    "name",
    "type",
    "kind",
    "service",
    "trigger",
    "condition",
    "engine",
    "entity",
    "field",
    "rule",
    "value",
    "text",
    "target",
    "through",
    "required",
    "unique",
    "encrypted",
    "auth",
    "params",
    "validation",
    "steps",
    "content",
    "props",
    "fields",
    "relations",
    "permissions",
    "restrictions",
    "methods",
    "rules",
    "indexes",
    "credentials",
    "purpose",
    "config",
    "options",
    "colors",
    "fonts",
    "enum_values",
    "default",
    "message",
    "frontend",
    "backend",
    "database",
    "deploy",
    "provider",
)

_TOP_LEVEL_RANK = {key: i for i, key in enumerate(TOP_LEVEL_KEY_ORDER)}
_COMMON_RANK = {key: i for i, key in enumerate(COMMON_KEY_ORDER)}


# =============================================================================
# Value tree
# =============================================================================


@dataclass(frozen=True)
class NullValue:
    pass


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class NumberValue:
    value: int | float


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class ArrayValue:
    items: tuple[Value, ...]


@dataclass(frozen=True)
class ObjectValue:
    """Object with its entries already in output order."""

    entries: tuple[tuple[str, Value], ...]


Value = Union[NullValue, BoolValue, NumberValue, StringValue, ArrayValue, ObjectValue]


def _is_empty(data: Any) -> bool:
    return data is None or data == "" or data == [] or data == {}


def order_keys(keys: list[str], depth: int) -> list[str]:
    """
    Order object keys for output.

    Keys in the priority list for this depth come first, in list order;
    all other keys follow alphabetically.
    """
    rank = _TOP_LEVEL_RANK if depth == 0 else _COMMON_RANK
    return sorted(keys, key=lambda k: (0, rank[k], "") if k in rank else (1, 0, k))


def to_value(data: Any, depth: int = 0) -> Value:
    """
    Convert JSON-compatible data into a value tree.

    Empty values (None, "", [] and {}) inside objects are dropped.

    Raises:
        SerializationError: If data holds a type with no JSON equivalent
    """
    if data is None:
        return NullValue()
    if isinstance(data, bool):
        return BoolValue(data)
    if isinstance(data, int | float):
        return NumberValue(data)
    if isinstance(data, str):
        return StringValue(data)
    if isinstance(data, list | tuple):
        return ArrayValue(tuple(to_value(item, depth + 1) for item in data))
    if isinstance(data, dict):
        keys = [k for k, v in data.items() if not _is_empty(v)]
        return ObjectValue(
            tuple((k, to_value(data[k], depth + 1)) for k in order_keys(keys, depth))
        )
    raise SerializationError(f"Cannot serialize value of type {type(data).__name__}")


def from_value(value: Value) -> Any:
    """Convert a value tree back into plain Python data, keeping key order."""
    if isinstance(value, NullValue):
        return None
    if isinstance(value, BoolValue | NumberValue | StringValue):
        return value.value
    if isinstance(value, ArrayValue):
        return [from_value(item) for item in value.items]
    if isinstance(value, ObjectValue):
        return {key: from_value(item) for key, item in value.entries}
    raise SerializationError(f"Unknown value node: {value!r}")


# =============================================================================
# JSON
# =============================================================================


def to_json(app: Application) -> str:
    """Serialize an Application to indented JSON."""
    return app.model_dump_json(indent=2)


def from_json(text: str | bytes) -> Application:
    """
    Deserialize an Application from JSON.

    Raises:
        SerializationError: If the JSON is malformed or does not match the schema
    """
    try:
        return Application.model_validate_json(text)
    except ValidationError as e:
        raise SerializationError(f"Invalid application JSON: {e}") from e


# =============================================================================
# YAML
# =============================================================================


def to_yaml(app: Application) -> str:
    """Serialize an Application to YAML with deterministic key order."""
    tree = to_value(app.model_dump(mode="json"))
    return yaml.dump(
        from_value(tree),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def from_yaml(text: str) -> Application:
    """
    Deserialize an Application from YAML.

    Raises:
        SerializationError: If the YAML is malformed or does not match the schema
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SerializationError(f"Invalid application YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SerializationError(
            f"Invalid application YAML: expected a mapping, got {type(data).__name__}"
        )

    try:
        return Application.model_validate(data)
    except ValidationError as e:
        raise SerializationError(f"Invalid application schema: {e}") from e


FORMATS = ("yaml", "json")


def dump(app: Application, fmt: str = "yaml") -> str:
    """Serialize an Application in the named format."""
    if fmt == "json":
        return to_json(app)
    if fmt == "yaml":
        return to_yaml(app)
    raise SerializationError(f"Unknown output format '{fmt}' (expected one of: {', '.join(FORMATS)})")
