"""
Action classification for Human statements.

Maps a statement's leading keyword to an ActionType using a fixed,
ordered rule table. Matching is exact keyword lookup, never substring,
so "shows" and "showcase" do not fall into the display category by
accident. Classification is total: a keyword missing from the table
yields ActionType.UNCLASSIFIED.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .ir import Action, ActionType
from .parser import Statement, statement_kind


@dataclass(frozen=True)
class KeywordRule:
    """One row of the classification table."""

    keywords: frozenset[str]
    action_type: ActionType

    def matches(self, kind: str) -> bool:
        return kind in self.keywords


def _rule(action_type: ActionType, *keywords: str) -> KeywordRule:
    return KeywordRule(frozenset(keywords), action_type)


# Evaluated top to bottom; the first matching row wins.
CLASSIFICATION_RULES: tuple[KeywordRule, ...] = (
    _rule(ActionType.DISPLAY, "show", "display", "render"),
    _rule(ActionType.INTERACT, "clicking", "dragging", "scrolling", "hovering", "typing"),
    _rule(ActionType.INPUT, "there"),
    _rule(ActionType.NAVIGATE, "navigate", "navigates", "redirect"),
    _rule(ActionType.CONDITION, "if", "when", "while", "unless", "until"),
    _rule(ActionType.LOOP, "each", "every", "for"),
    _rule(ActionType.QUERY, "fetch", "get", "find", "load", "support", "paginate", "sort"),
    _rule(ActionType.CREATE, "create"),
    _rule(ActionType.UPDATE, "update", "set"),
    _rule(ActionType.DELETE, "delete", "remove"),
    _rule(ActionType.VALIDATE, "check", "validate"),
    _rule(ActionType.RESPOND, "respond"),
    _rule(ActionType.SEND, "send", "notify"),
    _rule(ActionType.ASSIGN, "assign"),
    _rule(ActionType.ALERT, "alert"),
    _rule(ActionType.LOG, "log", "track"),
    _rule(ActionType.DELAY, "after"),
    _rule(ActionType.RETRY, "retry"),
    _rule(ActionType.CONFIGURE, "run", "build", "deploy", "report"),
    _rule(
        ActionType.CONFIGURE,
        "method",
        "rate",
        "sanitize",
        "enable",
        "passwords",
        "all",
        "use",
        "index",
        "backup",
        "keep",
        "frontend",
        "backend",
        "database",
    ),
)

# Action types whose target is the first capitalized noun ("create a User ...")
_ENTITY_TARGET_TYPES = frozenset(
    {ActionType.CREATE, ActionType.UPDATE, ActionType.DELETE, ActionType.QUERY}
)
_DESTINATION_RE = re.compile(r"\b(?:navigates?|redirects?)\s+to\s+(.+)$", re.IGNORECASE)


def classify_kind(kind: str) -> ActionType:
    """Return the action type for a lowercase leading keyword."""
    for rule in CLASSIFICATION_RULES:
        if rule.matches(kind):
            return rule.action_type
    return ActionType.UNCLASSIFIED


def classify(statement: Statement) -> Action:
    """
    Convert a statement into a typed Action.

    The original text is always kept. Target and value are filled in
    only when the text makes them obvious.

    Args:
        statement: Statement with a lowercase kind and its full text

    Returns:
        Exactly one Action
    """
    kind = statement.kind or statement_kind(statement.text)
    action_type = classify_kind(kind)

    target = None
    if action_type in _ENTITY_TARGET_TYPES:
        target = _first_capitalized(statement.text)

    value = None
    if match := _DESTINATION_RE.search(statement.text):
        value = match.group(1).strip().rstrip(".")

    return Action(type=action_type, text=statement.text, target=target, value=value)


def classify_all(statements: list[Statement]) -> list[Action]:
    """Classify statements and their nested bodies in document order."""
    return [classify(s) for stmt in statements for s in stmt.walk()]


def _first_capitalized(text: str) -> str | None:
    """Return the first capitalized word after the leading keyword."""
    for word in text.split()[1:]:
        word = word.strip(",.;:!?\"'")
        if word.endswith("'s"):
            word = word[:-2]
        if word and word[0].isupper() and word.isalnum():
            return word
    return None
