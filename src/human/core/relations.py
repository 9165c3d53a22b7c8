"""
Relation extraction for data models.

Recognises:
    belongs to a Team           -> belongs_to(Team)
    has many Post               -> has_many(Post)
    has many Tag through PostTag -> has_many_through(Tag, through=PostTag)

Parsing is positional token scanning. No existence or cycle checks are
made; targets are plain names.
"""

from __future__ import annotations

import logging

from .ir import Relation, RelationKind

logger = logging.getLogger(__name__)

ARTICLES = frozenset({"a", "an", "the", "one"})
_TOKEN_STRIP = ",.;:!?\"'"


def _clean(token: str) -> str:
    return token.strip(_TOKEN_STRIP)


def _next_capitalized(tokens: list[str], start: int) -> tuple[str | None, int]:
    """Return the next capitalized token at or after start, and its index."""
    for i in range(start, len(tokens)):
        word = _clean(tokens[i])
        if word.lower() == "through":
            break
        if word and word[0].isupper():
            return word, i
    return None, -1


def is_relation(text: str) -> bool:
    """True when the statement uses relation syntax."""
    words = text.lower().split()
    return words[:2] in (["belongs", "to"], ["has", "many"])


def extract_relation(text: str) -> Relation | None:
    """
    Extract a Relation from a data-model statement.

    Args:
        text: Statement text ("has many Tag through TaskTag")

    Returns:
        Relation, or None when the statement is not relation syntax or no
        capitalized target follows the keyword
    """
    tokens = text.split()
    lowered = [_clean(t).lower() for t in tokens]

    if lowered[:2] == ["belongs", "to"]:
        kind = RelationKind.BELONGS_TO
    elif lowered[:2] == ["has", "many"]:
        kind = RelationKind.HAS_MANY
    else:
        return None

    target, idx = _next_capitalized(tokens, 2)
    if target is None:
        logger.debug("Relation without a capitalized target: %r", text)
        return None

    through = None
    if kind == RelationKind.HAS_MANY and "through" in lowered[idx + 1 :]:
        through_idx = lowered.index("through", idx + 1)
        if through_idx + 1 < len(tokens):
            through = _clean(tokens[through_idx + 1]) or None
        if through:
            kind = RelationKind.HAS_MANY_THROUGH

    return Relation(kind=kind, target=target, through=through)
