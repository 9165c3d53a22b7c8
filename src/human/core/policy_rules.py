"""
Policy rule parsing.

Turns free-text permission and restriction sentences into a structured
PolicyRule (action, model, scope, limit, period, condition). Parsing is
best-effort: anything that cannot be established stays empty, and the
original text is always kept on the rule.

Examples:
    create up to 50 tasks per month  -> create / task, limit 50 per month
    view only their own tasks        -> view / task, scope own
    delete completed tasks           -> delete / task, condition completed
    view all users and their data    -> view / data, scope all
"""

from __future__ import annotations

import logging
import re

from .ir import PolicyRule, PolicyScope

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset(
    {
        "only",
        "their",
        "own",
        "any",
        "all",
        "of",
        "the",
        "a",
        "an",
        "and",
        "system",
        "up",
        "to",
        "per",
        "unlimited",
        "that",
        "which",
        "where",
        "are",
        "is",
    }
)

RELATIVE_CLAUSE = frozenset({"that", "which", "where"})

INVARIANT_NOUNS = frozenset({"data", "analytics", "media", "news", "status"})

OWN_SCOPE_PHRASES = ("only their own", "any of their own")

_QUOTA_RE = re.compile(r"\bup to (\d+)\b.*?\bper ([a-z]+)")
_WORD_STRIP = ",.;:!?\"'()"


def singularize(word: str) -> str:
    """Basic English singularization for model nouns."""
    if word in INVARIANT_NOUNS:
        return word
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith("ses") or word.endswith("xes"):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss") and len(word) > 1:
        return word[:-1]
    return word


def detect_scope(lower: str, words: list[str]) -> PolicyScope | None:
    """Resolve rule scope by priority: own, then any, then all."""
    if any(phrase in lower for phrase in OWN_SCOPE_PHRASES):
        return PolicyScope.OWN
    if "any" in words:
        return PolicyScope.ANY
    if "all" in words:
        return PolicyScope.ALL
    return None


def _is_noise(word: str, action: str) -> bool:
    return word in STOP_WORDS or word == action or word.isdigit()


def parse_policy_rule(text: str) -> PolicyRule:
    """
    Parse a policy rule's text into structured fields.

    Args:
        text: Rule text without the leading can/cannot

    Returns:
        PolicyRule carrying the original text and whatever could be parsed
    """
    lower = text.lower().strip()
    words = [w.strip(_WORD_STRIP) for w in lower.split()]
    words = [w for w in words if w]
    if not words:
        return PolicyRule(text=text)

    action = words[0]
    scope = detect_scope(lower, words)

    limit = None
    period = None
    if match := _QUOTA_RE.search(lower):
        limit = int(match.group(1))
        period = match.group(2)

    # A trailing relative clause ("tasks that are archived") is set aside
    # as a possible condition; "per <period>" never names the model.
    head, relative = words[1:], []
    for i, w in enumerate(head):
        if w in RELATIVE_CLAUSE:
            head, relative = head[:i], head[i + 1 :]
            break
    phrase: list[str] = []
    skip_next = False
    for w in head:
        if skip_next:
            skip_next = False
            continue
        if w == "per":
            skip_next = True
            continue
        phrase.append(w)

    model = None
    qualifiers: list[str] = []
    for i in range(len(phrase) - 1, -1, -1):
        if not _is_noise(phrase[i], action):
            model = singularize(phrase[i])
            # Qualifiers directly before the model: "delete completed tasks".
            for w in reversed(phrase[:i]):
                if w == "and":
                    break
                if not _is_noise(w, action):
                    qualifiers.insert(0, w)
            break

    if not qualifiers:
        qualifiers = [w for w in relative if not _is_noise(w, action)]
    condition = " ".join(qualifiers) or None

    if model is None:
        logger.debug("Policy rule without a recognisable model: %r", text)

    return PolicyRule(
        text=text,
        action=action,
        model=model,
        scope=scope,
        limit=limit,
        period=period,
        condition=condition,
    )
