"""
Integration handling: service-category inference and the statements of
an "integrate with <Service>:" block.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .ir import Integration, IntegrationType
from .parser import Statement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceCategory:
    """Keywords (lowercase substrings) identifying one integration category."""

    category: IntegrationType
    keywords: tuple[str, ...]


# Checked in this order; the first category with a matching keyword wins.
SERVICE_CATEGORIES: tuple[ServiceCategory, ...] = (
    ServiceCategory(
        IntegrationType.EMAIL, ("sendgrid", "mailgun", "ses", "postmark", "mailchimp")
    ),
    ServiceCategory(IntegrationType.STORAGE, ("s3", "gcs", "cloudinary", "minio")),
    ServiceCategory(IntegrationType.PAYMENT, ("stripe", "paypal", "braintree", "square")),
    ServiceCategory(IntegrationType.MESSAGING, ("slack", "discord", "twilio", "telegram")),
    ServiceCategory(IntegrationType.OAUTH, ("google", "github", "facebook", "auth0", "okta")),
)

ENV_VAR_MARKER = "from environment variable "
PURPOSE_PREFIX = "use for "

_CONFIG_RE = re.compile(r"^(?P<key>[A-Za-z][\w ]*?)\s+is\s+(?P<value>.+)$")
_TEMPLATE_RE = re.compile(r'^templates?\s+"(?P<name>[^"]+)"$', re.IGNORECASE)


def infer_integration_type(service: str) -> IntegrationType | None:
    """
    Classify a service name into an integration category.

    Returns:
        The category, or None for unknown services (generators fall back
        to a generic template)
    """
    s = service.lower()
    for entry in SERVICE_CATEGORIES:
        if any(keyword in s for keyword in entry.keywords):
            return entry.category
    return None


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def config_key(phrase: str) -> str:
    """Normalise a config phrase: "webhook endpoint" -> "webhook_endpoint"."""
    return "_".join(phrase.lower().split())


def build_integration(service: str, statements: list[Statement]) -> Integration:
    """
    Build an Integration from the body of an integrate block.

    Recognised statements:
        api key from environment variable SENDGRID_API_KEY
        region is "us-east-1"
        template "welcome"
        use for sending transactional emails
    """
    credentials: dict[str, str] = {}
    config: dict[str, str] = {}
    templates: list[str] = []
    purpose = None

    for stmt in statements:
        for s in stmt.walk():
            text = s.text
            lower = text.lower()
            if ENV_VAR_MARKER in lower:
                idx = lower.index(ENV_VAR_MARKER)
                key = text[:idx].strip()
                credentials[key] = text[idx + len(ENV_VAR_MARKER) :].strip()
            elif lower.startswith(PURPOSE_PREFIX):
                purpose = text[len(PURPOSE_PREFIX) :].strip()
            elif match := _TEMPLATE_RE.match(text):
                templates.append(match.group("name"))
            elif match := _CONFIG_RE.match(text):
                config[config_key(match.group("key"))] = _unquote(match.group("value"))
            else:
                logger.debug("Unrecognised statement in integration %s: %r", service, text)
                config[config_key(s.kind or text)] = text

    return Integration(
        service=service,
        type=infer_integration_type(service),
        credentials=credentials,
        config=config,
        templates=templates,
        purpose=purpose,
    )
