"""
Field extraction for data models.

Recognises the "has a ..." forms:
    has a name which is text
    has an email which is unique email
    has an optional bio which is text
    has a role which is either "user" or "admin"
    has a created datetime
    has a status which defaults to "active"
"""

from __future__ import annotations

import logging
import re

from .ir import DataField

logger = logging.getLogger(__name__)

TYPE_KEYWORDS = frozenset(
    {
        "text",
        "number",
        "decimal",
        "boolean",
        "date",
        "datetime",
        "email",
        "url",
        "file",
        "image",
        "json",
    }
)
MODIFIERS = frozenset({"optional", "unique", "encrypted"})
DEFAULT_TYPE = "text"

_QUOTED_RE = re.compile(r'"([^"]*)"')
_DEFAULT_RE = re.compile(r"\bdefaults?\s+to\s+(.+)$", re.IGNORECASE)


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def parse_field(text: str) -> DataField | None:
    """
    Extract a DataField from a "has a|an ..." statement.

    Args:
        text: Statement text

    Returns:
        DataField, or None when the statement is not a field declaration
    """
    tokens = text.split()
    lowered = [t.lower() for t in tokens]
    if len(tokens) < 2 or lowered[0] != "has" or lowered[1] == "many":
        return None

    i = 1
    if lowered[i] in ("a", "an"):
        i += 1

    modifiers: set[str] = set()
    while i < len(tokens) and lowered[i] in MODIFIERS:
        modifiers.add(lowered[i])
        i += 1
    if i >= len(tokens):
        logger.debug("Field declaration without a name: %r", text)
        return None

    name = tokens[i].strip(",.;:")
    i += 1

    field_type = DEFAULT_TYPE
    enum_values: list[str] = []

    if lowered[i : i + 2] == ["which", "is"]:
        i += 2
        while i < len(tokens) and lowered[i] in MODIFIERS:
            modifiers.add(lowered[i])
            i += 1
        if i < len(tokens) and lowered[i] == "either":
            enum_values = _QUOTED_RE.findall(" ".join(tokens[i + 1 :]))
            field_type = "enum"
        elif i < len(tokens) and lowered[i] not in ("defaults", "default"):
            field_type = lowered[i].strip(",.;:")
    elif i < len(tokens) and lowered[i] in TYPE_KEYWORDS:
        field_type = lowered[i]

    default = None
    if match := _DEFAULT_RE.search(text):
        default = _unquote(match.group(1))

    return DataField(
        name=name,
        type=field_type,
        required="optional" not in modifiers,
        unique="unique" in modifiers,
        encrypted="encrypted" in modifiers,
        enum_values=enum_values,
        default=default,
    )
