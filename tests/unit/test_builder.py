"""Tests for the IR builder."""

from __future__ import annotations

import logging

import pytest

from human.core import ir
from human.core.builder import (
    build_application,
    build_monitoring_rule,
    compile_source,
    normalize_arch_style,
    parse_auth_method,
    parse_index,
    split_list,
)
from human.core.errors import BuildError, ParseError
from human.core.parser import Program


class TestHelpers:
    @pytest.mark.parametrize(
        "text,items",
        [
            ("name, email, and password", ["name", "email", "password"]),
            ("title and description", ["title", "description"]),
            ("task_id", ["task_id"]),
            ("brand, category", ["brand", "category"]),
        ],
    )
    def test_split_list(self, text: str, items: list[str]):
        assert split_list(text) == items

    @pytest.mark.parametrize(
        "style,normalized",
        [
            ("microservices", "microservices"),
            ("Event-driven microservices", "microservices"),
            ("event driven", "microservices"),
            ("serverless", "serverless"),
            ("modular monolith", "monolith"),
            ("Monolith", "monolith"),
            ("hybrid", "hybrid"),
        ],
    )
    def test_normalize_arch_style(self, style: str, normalized: str):
        assert normalize_arch_style(style) == normalized

    def test_parse_index(self):
        assert parse_index("Task by user and status") == ir.Index(
            entity="Task", fields=["user", "status"]
        )
        assert parse_index("Task") is None

    def test_custom_auth_method(self):
        method = parse_auth_method("magic links sent by email")
        assert method.type == ir.AuthMethodType.CUSTOM
        assert method.config == {"description": "magic links sent by email"}

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("track page views", ir.MonitoringRule(kind="track", metric="page views")),
            (
                "alert on Slack if error rate exceeds 5 percent",
                ir.MonitoringRule(
                    kind="alert", channel="Slack", condition="error rate exceeds 5 percent"
                ),
            ),
            ("alert on PagerDuty", ir.MonitoringRule(kind="alert", channel="PagerDuty")),
            (
                "alert if disk is full",
                ir.MonitoringRule(kind="alert", condition="disk is full"),
            ),
            ("log errors", ir.MonitoringRule(kind="log", metric="errors")),
            ("keep logs for 90 days", ir.MonitoringRule(kind="log", duration="90 days")),
            ("source control using git", None),
        ],
    )
    def test_monitoring_rule(self, text: str, expected: ir.MonitoringRule | None):
        assert build_monitoring_rule(text) == expected


class TestEndToEnd:
    def test_signup_endpoint(self, taskflow_app: ir.Application):
        endpoint = taskflow_app.get_endpoint("SignUp")
        assert endpoint is not None

        assert endpoint.auth is False
        assert [p.name for p in endpoint.params] == ["name", "email", "password"]
        assert endpoint.validation == [
            ir.ValidationRule(field="name", rule="not_empty"),
            ir.ValidationRule(field="password", rule="min_length", value="8"),
        ]
        assert [s.type for s in endpoint.steps] == [ir.ActionType.CREATE, ir.ActionType.RESPOND]
        assert endpoint.steps[0].target == "User"

    def test_authenticated_endpoint(self, taskflow_app: ir.Application):
        endpoint = taskflow_app.get_endpoint("DeleteTask")
        assert endpoint is not None

        assert endpoint.auth is True
        assert [p.name for p in endpoint.params] == ["task_id"]
        assert endpoint.validation == [
            ir.ValidationRule(
                field="current_user", rule="authorization", value="the owner or an admin"
            )
        ]
        assert [s.type for s in endpoint.steps] == [ir.ActionType.DELETE, ir.ActionType.RESPOND]

    def test_app_header(self, taskflow_app: ir.Application):
        assert taskflow_app.name == "TaskFlow"
        assert taskflow_app.platform == "web"

    def test_build_config(self, taskflow_app: ir.Application):
        assert taskflow_app.config == ir.BuildConfig(
            frontend="React with TypeScript",
            backend="Node with Express",
            database="PostgreSQL",
            deploy="Docker",
        )

    def test_data_models(self, taskflow_app: ir.Application):
        assert [m.name for m in taskflow_app.data] == ["User", "Task"]

        user = taskflow_app.get_model("User")
        assert user is not None
        assert [f.name for f in user.fields] == ["name", "email", "bio", "role"]
        assert user.get_field("EMAIL").unique is True
        assert user.get_field("bio").required is False
        assert user.get_field("role").enum_values == ["user", "admin"]
        assert user.relations == [ir.Relation(kind="has_many", target="Task")]

        task = taskflow_app.get_model("Task")
        assert task.get_field("status").default == "pending"
        assert task.relations == [
            ir.Relation(kind="belongs_to", target="User"),
            ir.Relation(kind="has_many_through", target="Tag", through="TaskTag"),
        ]

    def test_pages_and_components(self, taskflow_app: ir.Application):
        page = taskflow_app.pages[0]
        assert page.name == "Dashboard"
        assert [a.type for a in page.content] == [ir.ActionType.DISPLAY, ir.ActionType.INTERACT]
        assert page.content[1].value == "TaskDetail"

        component = taskflow_app.components[0]
        assert component.name == "TaskCard"
        assert component.props == [ir.Prop(name="task", type="Task")]
        assert [a.text for a in component.content] == ["show the task title"]

    def test_policies(self, taskflow_app: ir.Application):
        policy = taskflow_app.get_policy("FreeUser")
        assert policy is not None

        assert [r.text for r in policy.permissions] == [
            "create up to 50 tasks per month",
            "view only their own tasks",
        ]
        assert policy.permissions[0].limit == 50
        assert policy.permissions[0].period == "month"
        assert policy.permissions[1].scope == ir.PolicyScope.OWN
        assert policy.restrictions[0].condition == "completed"

    def test_workflows_and_pipelines(self, taskflow_app: ir.Application):
        assert [w.trigger for w in taskflow_app.workflows] == ["a user signs up"]
        assert taskflow_app.workflows[0].steps[0].type == ir.ActionType.SEND

        assert [p.trigger for p in taskflow_app.pipelines] == ["code is pushed to main"]
        assert [s.type for s in taskflow_app.pipelines[0].steps] == [
            ir.ActionType.CONFIGURE,
            ir.ActionType.CONFIGURE,
        ]

    def test_theme(self, taskflow_app: ir.Application):
        theme = taskflow_app.theme
        assert theme is not None

        assert theme.design_system == "material"
        assert theme.colors == {"primary": "#6c5ce7"}
        assert theme.fonts == {"body": "Inter", "headings": "Poppins"}
        assert theme.border_radius == "smooth"
        assert theme.spacing == "comfortable"
        assert theme.dark_mode is True
        assert theme.options == {"dark mode": "supported", "animations": "are subtle"}

    def test_auth(self, taskflow_app: ir.Application):
        auth = taskflow_app.auth
        assert auth is not None

        assert auth.methods == [
            ir.AuthMethod(type="jwt", config={"expiration": "7 days"}),
            ir.AuthMethod(
                type="oauth", provider="Google", config={"callback_url": "/auth/google/callback"}
            ),
        ]
        assert [r.type for r in auth.rules] == [ir.ActionType.CONFIGURE]

    def test_database(self, taskflow_app: ir.Application):
        database = taskflow_app.database
        assert database is not None

        assert database.engine == "PostgreSQL"
        assert database.indexes == [ir.Index(entity="Task", fields=["user", "status"])]
        assert [r.text for r in database.rules] == ["backup daily at 3am"]

    def test_integrations(self, taskflow_app: ir.Application):
        integration = taskflow_app.integrations[0]

        assert integration.service == "SendGrid"
        assert integration.type == ir.IntegrationType.EMAIL
        assert integration.credentials == {"api key": "SENDGRID_API_KEY"}
        assert integration.templates == ["welcome"]
        assert integration.purpose == "sending transactional emails"

    def test_environments(self, taskflow_app: ir.Application):
        env = taskflow_app.environments[0]

        assert env.name == "staging"
        assert env.config == {"url": "staging.taskflow.example.com"}
        assert [r.text for r in env.rules] == ["use smaller instances"]

    def test_error_handlers(self, taskflow_app: ir.Application):
        handler = taskflow_app.error_handlers[0]

        assert handler.condition == "database is unreachable"
        assert [s.type for s in handler.steps] == [ir.ActionType.RETRY, ir.ActionType.ALERT]

    def test_monitoring(self, taskflow_app: ir.Application):
        assert [m.kind for m in taskflow_app.monitoring] == ["track", "alert", "log", "log"]
        assert taskflow_app.monitoring[2].service == "CloudWatch"
        assert taskflow_app.monitoring[3].duration == "30 days"

    def test_build_is_deterministic(self, taskflow_source: str):
        assert compile_source(taskflow_source) == compile_source(taskflow_source)


class TestArchitecture:
    SOURCE = """\
architecture: microservices
  service UserService:
    handles user accounts
    runs on port 3001
    owns User, Profile
    has its own database
  service TaskService:
    manages Task
    talks to UserService to verify users
  gateway:
    routes /api/users to UserService
    routes /api/tasks to TaskService
    handles rate limiting
  message broker using RabbitMQ
"""

    def test_services_gateway_and_broker(self):
        arch = compile_source(self.SOURCE).architecture
        assert arch is not None

        assert arch.style == "microservices"
        assert arch.services[0] == ir.ServiceDef(
            name="UserService",
            handles="user accounts",
            port=3001,
            models=["User", "Profile"],
            has_own_database=True,
        )
        assert arch.services[1].models == ["Task"]
        assert arch.services[1].talks_to == ["UserService"]
        assert arch.gateway == ir.GatewayDef(
            routes={"/api/users": "UserService", "/api/tasks": "TaskService"},
            rules=["handles rate limiting"],
        )
        assert arch.broker == "RabbitMQ"

    def test_style_only(self):
        arch = compile_source("architecture: serverless\n").architecture
        assert arch == ir.Architecture(style="serverless")


class TestLenientBuild:
    def test_empty_program(self):
        app = build_application(Program())
        assert app == ir.Application()

    def test_unknown_content_is_preserved(self):
        app = compile_source("page Home:\n  frobnicate the widgets\n")
        action = app.pages[0].content[0]

        assert action.type == ir.ActionType.UNCLASSIFIED
        assert action.text == "frobnicate the widgets"

    def test_relation_targets_are_not_checked(self):
        app = compile_source("data Task:\n  belongs to a Ghost\n")
        assert app.data[0].relations[0].target == "Ghost"

    def test_relation_without_target_is_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="human.core.builder"):
            app = compile_source("data User:\n  has many tasks\n")

        assert app.data[0].relations == []
        assert "has many tasks" in caplog.text

    def test_later_single_block_replaces_earlier(self):
        app = compile_source("theme:\n  spacing is compact\ntheme:\n  spacing is spacious\n")
        assert app.theme.spacing == "spacious"

    def test_application_is_immutable(self, taskflow_app: ir.Application):
        with pytest.raises(Exception):
            taskflow_app.name = "Other"  # type: ignore[misc]


class TestBuildErrors:
    def test_named_block_without_name(self):
        with pytest.raises(BuildError) as exc_info:
            compile_source("page:\n  show a greeting\n")

        assert "page block is missing a name" in str(exc_info.value)
        assert exc_info.value.context is not None
        assert exc_info.value.context.line == 1

    def test_integration_without_service(self):
        with pytest.raises(BuildError, match="missing a service"):
            compile_source("integrate with:\n  use for nothing\n")

    def test_duplicate_field_names(self):
        source = "data User:\n  has a name\n  has a Name which is text\n"
        with pytest.raises(BuildError, match="Duplicate field 'Name'"):
            compile_source(source)

    def test_structural_parse_error_aborts(self):
        with pytest.raises(ParseError):
            compile_source("data User:\napi SignUp:\n  respond ok\n")
