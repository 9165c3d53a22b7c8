"""
Validation rule extraction for API endpoints.

Turns "check that <field> <predicate>" statements into structured
ValidationRule entries. Templates are tried most-specific first so a
generic phrase ("matches") cannot shadow a specific one. A statement
that matches no template is left alone and stays a plain step.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .ir import ValidationRule, ValidationRuleKind
from .parser import Statement

logger = logging.getLogger(__name__)

CHECK_KINDS = frozenset({"check", "validate"})


@dataclass(frozen=True)
class ValidationTemplate:
    """
    A predicate phrase and how to turn a matching statement into a rule.

    Attributes:
        phrase: Lowercase predicate marker; the field is the text before it
        build: Callable(field, lowered text, original text) -> rule or None
    """

    phrase: str
    build: Callable[[str, str, str], ValidationRule | None]


def extract_after(s: str, prefix: str) -> str:
    """Return the substring after the first occurrence of prefix."""
    idx = s.find(prefix)
    if idx == -1:
        return ""
    return s[idx + len(prefix) :].strip()


def extract_between(s: str, start: str, end: str) -> str:
    """Return the substring between the start and end markers."""
    s_idx = s.find(start)
    if s_idx == -1:
        return ""
    after = s[s_idx + len(start) :]
    e_idx = after.find(end)
    if e_idx == -1:
        return after
    return after[:e_idx]


def _simple(kind: ValidationRuleKind) -> Callable[[str, str, str], ValidationRule | None]:
    def build(field: str, lower: str, text: str) -> ValidationRule | None:
        return ValidationRule(field=field, rule=kind.value)

    return build


def _length(
    kind: ValidationRuleKind, start: str
) -> Callable[[str, str, str], ValidationRule | None]:
    def build(field: str, lower: str, text: str) -> ValidationRule | None:
        if " characters" not in lower:
            return None
        value = extract_between(lower, start, " characters").strip()
        if not value.isdigit():
            return None
        return ValidationRule(field=field, rule=kind.value, value=value)

    return build


def _valid_format(field: str, lower: str, text: str) -> ValidationRule | None:
    words = extract_after(lower, "is a valid ").split()
    if not words or not words[0].isalpha():
        return None
    return ValidationRule(field=field, rule=f"valid_{words[0]}")


def _matches(field: str, lower: str, text: str) -> ValidationRule | None:
    idx = lower.find(" matches ")
    other = text[idx + len(" matches ") :].strip()
    return ValidationRule(field=field, rule=ValidationRuleKind.MATCHES.value, value=other or None)


# Evaluated top to bottom; the first template that yields a rule wins.
VALIDATION_TEMPLATES: tuple[ValidationTemplate, ...] = (
    ValidationTemplate("is not empty", _simple(ValidationRuleKind.NOT_EMPTY)),
    ValidationTemplate("is a valid ", _valid_format),
    ValidationTemplate("is at least ", _length(ValidationRuleKind.MIN_LENGTH, "is at least ")),
    ValidationTemplate("is less than ", _length(ValidationRuleKind.MAX_LENGTH, "is less than ")),
    ValidationTemplate("is not already taken", _simple(ValidationRuleKind.UNIQUE)),
    ValidationTemplate("is in the future", _simple(ValidationRuleKind.FUTURE_DATE)),
    ValidationTemplate(" matches ", _matches),
)

AUTHORIZATION_SUBJECT = "current user is "


def field_before(text: str, predicate: str) -> str:
    """
    Extract the field name from "check that <field> <predicate>".

    Returns an empty string when the predicate is absent or nothing
    precedes it.
    """
    lower = text.lower()
    words = lower.split(None, 1)
    start = 0
    if words and words[0] in CHECK_KINDS:
        start = lower.find(words[0]) + len(words[0])
        rest = lower[start:]
        stripped = rest.lstrip()
        if stripped.startswith("that "):
            start += len(rest) - len(stripped) + len("that ")
    pred_idx = lower.find(predicate, start)
    if pred_idx == -1:
        return ""
    return text[start:pred_idx].strip()


def parse_validation(text: str) -> ValidationRule | None:
    """
    Extract a structured validation rule from a check statement.

    Args:
        text: Full statement text ("check that name is not empty")

    Returns:
        ValidationRule, or None when no template applies
    """
    lower = text.lower()

    for template in VALIDATION_TEMPLATES:
        if template.phrase not in lower:
            continue
        field = field_before(text, template.phrase)
        if not field:
            continue
        rule = template.build(field, lower, text)
        if rule is not None:
            return rule

    if AUTHORIZATION_SUBJECT in lower:
        return ValidationRule(
            field="current_user",
            rule=ValidationRuleKind.AUTHORIZATION.value,
            value=extract_after(lower, AUTHORIZATION_SUBJECT) or None,
        )

    logger.debug("No validation template matched: %r", text)
    return None


def extract_validations(
    statements: list[Statement],
) -> tuple[list[ValidationRule], list[Statement]]:
    """
    Split endpoint statements into validation rules and remaining steps.

    Only check statements are considered; each one that yields a rule is
    consumed. Order is preserved in both outputs.

    Returns:
        (validation rules, statements that remain steps)
    """
    rules: list[ValidationRule] = []
    remaining: list[Statement] = []
    for stmt in statements:
        if stmt.kind in CHECK_KINDS:
            rule = parse_validation(stmt.text)
            if rule is not None:
                rules.append(rule)
                continue
        remaining.append(stmt)
    return rules, remaining
