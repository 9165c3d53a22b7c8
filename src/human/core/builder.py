"""
IR builder: turns a statement tree into an Application.

Top-level blocks are dispatched by their leading keyword, in document
order, to the extractor for that block kind. The builder is lenient:
content it cannot classify is kept as text on an Action or in a catch-all
map. It fails only when the tree is structurally unusable, such as a named
block with no name or a data model with duplicate fields.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError

from . import ir
from .classify import classify, classify_all
from .errors import make_build_error
from .fields import parse_field
from .integrations import build_integration
from .parser import Program, Statement, parse_source
from .policy_rules import parse_policy_rule
from .relations import extract_relation, is_relation
from .themes import build_theme
from .triggers import is_pipeline_trigger
from .validation_rules import extract_validations

logger = logging.getLogger(__name__)

_LIST_SPLIT_RE = re.compile(r",|\band\b", re.IGNORECASE)

BUILD_TARGETS: tuple[tuple[str, str], ...] = (
    ("frontend using ", "frontend"),
    ("backend using ", "backend"),
    ("database using ", "database"),
    ("deploy to ", "deploy"),
)


def split_list(text: str) -> list[str]:
    """Split "a, b, and c" into ["a", "b", "c"]."""
    return [part.strip() for part in _LIST_SPLIT_RE.split(text) if part.strip()]


def _after(text: str, prefix: str) -> str:
    return text[len(prefix) :].strip()


def normalize_arch_style(style: str) -> str:
    """Map free-text architecture styles onto the generator styles."""
    lower = style.strip().lower()
    if "event-driven" in lower or "event driven" in lower or "microservice" in lower:
        return ir.ArchitectureStyle.MICROSERVICES.value
    if "serverless" in lower:
        return ir.ArchitectureStyle.SERVERLESS.value
    if "modular" in lower:
        return ir.ArchitectureStyle.MONOLITH.value
    return lower


def _leading_int(text: str) -> int | None:
    digits = re.match(r"\d+", text.strip())
    return int(digits.group()) if digits else None


def parse_auth_method(text: str) -> ir.AuthMethod:
    """
    Parse the text after "method".

    "JWT tokens that expire in 7 days" is a jwt method with an expiration;
    "Google OAuth with redirect to /auth/google/callback" is an oauth
    method. Anything else is kept as a custom method's description.
    """
    lower = text.lower()
    config: dict[str, str] = {}

    if "jwt" in lower:
        if "expire in " in lower:
            config["expiration"] = text[lower.index("expire in ") + len("expire in ") :].strip()
        return ir.AuthMethod(type=ir.AuthMethodType.JWT, config=config)

    if "oauth" in lower:
        idx = lower.index("oauth")
        provider = text[:idx].strip() or None
        if "redirect to " in lower:
            config["callback_url"] = text[lower.index("redirect to ") + len("redirect to ") :].strip()
        return ir.AuthMethod(type=ir.AuthMethodType.OAUTH, provider=provider, config=config)

    return ir.AuthMethod(type=ir.AuthMethodType.CUSTOM, config={"description": text})


def parse_index(text: str) -> ir.Index | None:
    """Parse "Task by user and status" (the text after "index")."""
    entity, sep, fields = text.partition(" by ")
    if not sep or not entity.strip():
        return None
    return ir.Index(
        entity=entity.strip(),
        fields=[f.strip() for f in fields.split(" and ") if f.strip()],
    )


def build_monitoring_rule(text: str) -> ir.MonitoringRule | None:
    """
    Interpret a top-level observability statement.

    Returns:
        MonitoringRule, or None when the statement is not a track, alert,
        log, or "keep logs for" directive
    """
    lower = text.lower()

    if lower.startswith("track "):
        return ir.MonitoringRule(kind=ir.MonitoringKind.TRACK, metric=_after(text, "track "))

    if lower.startswith("alert "):
        # "alert on Slack if error rate exceeds 5 percent"
        padded = text[len("alert ") - 1 :]
        padded_lower = padded.lower()
        channel = condition = None
        if " on " in padded_lower:
            target = padded[padded_lower.index(" on ") + len(" on ") :]
            idx = target.lower().find(" if ")
            if idx == -1:
                channel = target
            else:
                channel, condition = target[:idx], target[idx + len(" if ") :]
        elif " if " in padded_lower:
            condition = padded[padded_lower.index(" if ") + len(" if ") :]
        channel = channel.strip() if channel else None
        condition = condition.strip() if condition else None
        return ir.MonitoringRule(
            kind=ir.MonitoringKind.ALERT,
            channel=channel,
            condition=condition,
        )

    if lower.startswith("keep logs for "):
        return ir.MonitoringRule(
            kind=ir.MonitoringKind.LOG, duration=_after(text, "keep logs for ")
        )

    if lower.startswith("log "):
        # "log all api requests to CloudWatch"
        rest = text[len("log ") :]
        metric, sep, service = rest.partition(" to ")
        return ir.MonitoringRule(
            kind=ir.MonitoringKind.LOG,
            metric=metric.strip() or None,
            service=(service.strip() or None) if sep else None,
        )

    return None


class ApplicationBuilder:
    """
    Builds an Application from a Program.

    One builder is used for one build; the accumulated collections are
    handed to the immutable Application at the end.
    """

    def __init__(self, program: Program):
        self.program = program
        self.file: Path = program.file
        self.fields: dict[str, object] = {}
        self.collections: dict[str, list[object]] = {
            "data": [],
            "pages": [],
            "components": [],
            "apis": [],
            "policies": [],
            "workflows": [],
            "pipelines": [],
            "integrations": [],
            "environments": [],
            "error_handlers": [],
            "monitoring": [],
        }
        self.handlers: dict[str, Callable[[Statement], None]] = {
            "app": self._build_app,
            "build": self._build_config,
            "data": self._build_data,
            "page": self._build_page,
            "component": self._build_component,
            "api": self._build_endpoint,
            "policy": self._build_policy,
            "when": self._build_trigger_block,
            "theme": self._build_theme,
            "authentication": self._build_auth,
            "database": self._build_database,
            "integrate": self._build_integration,
            "environment": self._build_environment,
            "if": self._build_error_handler,
            "architecture": self._build_architecture,
        }

    def build(self) -> ir.Application:
        """
        Walk top-level statements and assemble the Application.

        Raises:
            BuildError: If a block is structurally unusable
        """
        for stmt in self.program.statements:
            handler = self.handlers.get(stmt.kind)
            if handler is not None:
                logger.debug("Line %d: %s block %r", stmt.line, stmt.kind, stmt.text)
                handler(stmt)
            else:
                self._build_top_level(stmt)

        try:
            return ir.Application(**self.fields, **self.collections)
        except ValidationError as e:
            raise make_build_error(f"Invalid application: {e}", self.file) from e

    # ── Helpers ──

    def _name(self, stmt: Statement, what: str) -> str:
        """Return the block name following the leading keyword."""
        name = stmt.rest.split(None, 1)[0] if stmt.rest else ""
        name = name.strip(",.;:\"'")
        if not name:
            raise make_build_error(f"{what} block is missing a name", self.file, stmt.line)
        return name

    def _set_single(self, key: str, value: object, stmt: Statement) -> None:
        if key in self.fields:
            logger.warning(
                "%s:%d: duplicate %s block replaces the earlier one", self.file, stmt.line, key
            )
        self.fields[key] = value

    # ── Top-level blocks ──

    def _build_app(self, stmt: Statement) -> None:
        # app TaskFlow is a web application
        tokens = stmt.text.split()
        name = tokens[1] if len(tokens) > 1 else ""
        platform = ""
        rest = [t.lower() for t in tokens[2:]]
        if rest[:1] == ["is"]:
            idx = 1
            if rest[idx : idx + 1] in (["a"], ["an"]):
                idx += 1
            if idx < len(rest):
                platform = rest[idx]
        self.fields["name"] = name
        self.fields["platform"] = platform

    def _build_config(self, stmt: Statement) -> None:
        targets: dict[str, str] = {}
        for s in stmt.walk_body():
            lower = s.text.lower()
            for prefix, key in BUILD_TARGETS:
                if lower.startswith(prefix):
                    targets[key] = _after(s.text, prefix)
                    break
            else:
                logger.debug("Unrecognised build statement: %r", s.text)
        self._set_single("config", ir.BuildConfig(**targets), stmt)

    def _build_data(self, stmt: Statement) -> None:
        name = self._name(stmt, "data")
        fields: list[ir.DataField] = []
        relations: list[ir.Relation] = []
        for s in stmt.walk_body():
            if is_relation(s.text):
                relation = extract_relation(s.text)
                if relation is not None:
                    relations.append(relation)
                else:
                    logger.warning(
                        "Dropped relation in data %s (line %d): %r has no capitalized target",
                        name,
                        s.line,
                        s.text,
                    )
            elif (data_field := parse_field(s.text)) is not None:
                fields.append(data_field)
            else:
                logger.debug("Unrecognised statement in data %s: %r", name, s.text)
        try:
            model = ir.DataModel(name=name, fields=fields, relations=relations)
        except ValidationError as e:
            message = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
            raise make_build_error(message, self.file, stmt.line) from e
        self.collections["data"].append(model)

    def _build_page(self, stmt: Statement) -> None:
        page = ir.Page(name=self._name(stmt, "page"), content=classify_all(stmt.body))
        self.collections["pages"].append(page)

    def _build_component(self, stmt: Statement) -> None:
        name = self._name(stmt, "component")
        props: list[ir.Prop] = []
        body: list[Statement] = []
        for s in stmt.body:
            if s.kind == "accepts":
                props.extend(self._parse_prop(raw) for raw in split_list(s.rest))
            else:
                body.append(s)
        component = ir.Component(name=name, props=props, content=classify_all(body))
        self.collections["components"].append(component)

    @staticmethod
    def _parse_prop(raw: str) -> ir.Prop:
        # "task as Task" -> Prop(task, Task)
        parts = raw.split()
        if len(parts) >= 3 and parts[1].lower() == "as":
            return ir.Prop(name=parts[0], type=parts[2])
        return ir.Prop(name=raw)

    def _build_endpoint(self, stmt: Statement) -> None:
        name = self._name(stmt, "api")
        auth = False
        params: list[ir.Param] = []
        body: list[Statement] = []
        for s in stmt.body:
            if s.kind == "requires" and s.rest.lower().startswith("authentication"):
                auth = True
            elif s.kind == "accepts":
                params.extend(ir.Param(name=p) for p in split_list(s.rest))
            else:
                body.append(s)

        validation, remaining = extract_validations(body)
        endpoint = ir.Endpoint(
            name=name,
            auth=auth,
            params=params,
            validation=validation,
            steps=classify_all(remaining),
        )
        logger.debug(
            "api %s: %d params, %d validation rules, %d steps",
            name,
            len(params),
            len(validation),
            len(endpoint.steps),
        )
        self.collections["apis"].append(endpoint)

    def _build_policy(self, stmt: Statement) -> None:
        name = self._name(stmt, "policy")
        permissions: list[ir.PolicyRule] = []
        restrictions: list[ir.PolicyRule] = []
        for s in stmt.walk_body():
            if s.kind == "can":
                permissions.append(parse_policy_rule(s.rest))
            elif s.kind == "cannot":
                restrictions.append(parse_policy_rule(s.rest))
            else:
                logger.debug("Ignoring non-rule statement in policy %s: %r", name, s.text)
        policy = ir.Policy(name=name, permissions=permissions, restrictions=restrictions)
        self.collections["policies"].append(policy)

    def _build_trigger_block(self, stmt: Statement) -> None:
        trigger = stmt.rest
        steps = classify_all(stmt.body)
        if is_pipeline_trigger(trigger):
            self.collections["pipelines"].append(ir.Pipeline(trigger=trigger, steps=steps))
        else:
            self.collections["workflows"].append(ir.Workflow(trigger=trigger, steps=steps))

    def _build_theme(self, stmt: Statement) -> None:
        self._set_single("theme", build_theme(stmt.body), stmt)

    def _build_auth(self, stmt: Statement) -> None:
        methods: list[ir.AuthMethod] = []
        rules: list[ir.Action] = []
        for s in stmt.walk_body():
            if s.kind == "method":
                methods.append(parse_auth_method(s.rest))
            else:
                rules.append(classify(s))
        self._set_single("auth", ir.Auth(methods=methods, rules=rules), stmt)

    def _build_database(self, stmt: Statement) -> None:
        engine = None
        indexes: list[ir.Index] = []
        rules: list[ir.Action] = []
        for s in stmt.walk_body():
            if s.kind == "use":
                engine = s.rest
            elif s.kind == "index" and (index := parse_index(s.rest)) is not None:
                indexes.append(index)
            else:
                rules.append(classify(s))
        self._set_single(
            "database", ir.DatabaseConfig(engine=engine, indexes=indexes, rules=rules), stmt
        )

    def _build_integration(self, stmt: Statement) -> None:
        # integrate with SendGrid
        service = stmt.rest
        if service.lower().split(None, 1)[:1] == ["with"]:
            service = _after(service, "with")
        if not service:
            raise make_build_error("integrate block is missing a service", self.file, stmt.line)
        self.collections["integrations"].append(build_integration(service, stmt.body))

    def _build_environment(self, stmt: Statement) -> None:
        name = self._name(stmt, "environment")
        config: dict[str, str] = {}
        rules: list[ir.Action] = []
        for s in stmt.walk_body():
            key, sep, value = s.text.partition(" is ")
            if sep:
                config[key.strip()] = value.strip()
            else:
                rules.append(classify(s))
        env = ir.Environment(name=name, config=config, rules=rules)
        self.collections["environments"].append(env)

    def _build_error_handler(self, stmt: Statement) -> None:
        handler = ir.ErrorHandler(condition=stmt.rest, steps=classify_all(stmt.body))
        self.collections["error_handlers"].append(handler)

    def _build_architecture(self, stmt: Statement) -> None:
        services: list[dict[str, object]] = []
        gateway: dict[str, object] | None = None
        broker = None
        current: dict[str, object] | None = None

        for s in stmt.walk_body():
            text, lower = s.text, s.text.lower()
            if lower.startswith("service "):
                current = {"name": _after(text, "service ").rstrip(":"), "models": [], "talks_to": []}
                services.append(current)
            elif lower.startswith("gateway"):
                gateway = {"routes": {}, "rules": []}
                current = None
            elif lower.startswith("message broker using "):
                broker = _after(text, "message broker using ")
            elif current is not None:
                self._apply_service_statement(current, text, lower)
            elif gateway is not None:
                self._apply_gateway_statement(gateway, text, lower)
            else:
                logger.debug("Unrecognised architecture statement: %r", text)

        architecture = ir.Architecture(
            style=normalize_arch_style(stmt.rest),
            services=[ir.ServiceDef(**svc) for svc in services],
            gateway=ir.GatewayDef(**gateway) if gateway is not None else None,
            broker=broker,
        )
        self._set_single("architecture", architecture, stmt)

    @staticmethod
    def _apply_service_statement(service: dict[str, object], text: str, lower: str) -> None:
        if lower.startswith("handles "):
            service["handles"] = _after(text, "handles ")
        elif lower.startswith("runs on port "):
            service["port"] = _leading_int(_after(text, "runs on port "))
        elif lower.startswith("owns ") or lower.startswith("manages "):
            models = text.split(None, 1)[1]
            service["models"].extend(m.strip() for m in models.split(",") if m.strip())
        elif lower.startswith("has its own database"):
            service["has_own_database"] = True
        elif lower.startswith("talks to "):
            target = _after(text, "talks to ")
            target = target[: target.lower().index(" to ")] if " to " in target.lower() else target
            service["talks_to"].append(target.strip())
        else:
            logger.debug("Unrecognised service statement: %r", text)

    @staticmethod
    def _apply_gateway_statement(gateway: dict[str, object], text: str, lower: str) -> None:
        if lower.startswith("routes "):
            # routes /api/users to UserService
            rest = _after(text, "routes ")
            idx = rest.lower().find(" to ")
            if idx != -1:
                gateway["routes"][rest[:idx].strip()] = rest[idx + len(" to ") :].strip()
        elif lower.startswith("handles ") or "rate limiting" in lower or "cors" in lower:
            gateway["rules"].append(text)
        else:
            logger.debug("Unrecognised gateway statement: %r", text)

    def _build_top_level(self, stmt: Statement) -> None:
        """Top-level statements outside any known block: monitoring directives."""
        for s in stmt.walk():
            rule = build_monitoring_rule(s.text)
            if rule is not None:
                self.collections["monitoring"].append(rule)
            else:
                logger.debug("Line %d: ignoring top-level statement %r", s.line, s.text)


def build_application(program: Program) -> ir.Application:
    """
    Build the Application IR from a statement tree.

    Args:
        program: Statement tree from the reader

    Returns:
        Immutable Application

    Raises:
        BuildError: If the tree is structurally unusable
    """
    app = ApplicationBuilder(program).build()
    logger.info(
        "Built application %r: %d models, %d pages, %d apis",
        app.name,
        len(app.data),
        len(app.pages),
        len(app.apis),
    )
    return app


def compile_source(text: str, file: Path | None = None) -> ir.Application:
    """
    Read and build source text in one step.

    Raises:
        ParseError: If the block structure is malformed
        BuildError: If the tree is structurally unusable
    """
    return build_application(parse_source(text, file))


__all__ = [
    "ApplicationBuilder",
    "build_application",
    "build_monitoring_rule",
    "compile_source",
    "normalize_arch_style",
    "parse_auth_method",
    "parse_index",
    "split_list",
]
