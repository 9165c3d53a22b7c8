"""
Trigger classification for "when X:" blocks.

The same syntax declares business workflows ("when a user signs up:")
and CI/CD pipelines ("when code is pushed to main:"). This module is the
single place that decides which one a block is.
"""

from __future__ import annotations

PIPELINE_TRIGGER_PHRASES: tuple[str, ...] = (
    "code is pushed",
    "code is merged",
)


def is_pipeline_trigger(text: str) -> bool:
    """True when the trigger text describes a CI/CD code event."""
    lower = text.lower()
    return any(phrase in lower for phrase in PIPELINE_TRIGGER_PHRASES)
