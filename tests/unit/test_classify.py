"""Tests for action classification."""

import pytest

from human.core.classify import (
    CLASSIFICATION_RULES,
    classify,
    classify_all,
    classify_kind,
)
from human.core.ir import ActionType
from human.core.parser import make_statement, parse_source

KEYWORD_TABLE = [
    ("show", ActionType.DISPLAY),
    ("display", ActionType.DISPLAY),
    ("render", ActionType.DISPLAY),
    ("clicking", ActionType.INTERACT),
    ("dragging", ActionType.INTERACT),
    ("scrolling", ActionType.INTERACT),
    ("hovering", ActionType.INTERACT),
    ("typing", ActionType.INTERACT),
    ("there", ActionType.INPUT),
    ("navigate", ActionType.NAVIGATE),
    ("navigates", ActionType.NAVIGATE),
    ("redirect", ActionType.NAVIGATE),
    ("if", ActionType.CONDITION),
    ("when", ActionType.CONDITION),
    ("while", ActionType.CONDITION),
    ("unless", ActionType.CONDITION),
    ("until", ActionType.CONDITION),
    ("each", ActionType.LOOP),
    ("every", ActionType.LOOP),
    ("for", ActionType.LOOP),
    ("fetch", ActionType.QUERY),
    ("get", ActionType.QUERY),
    ("find", ActionType.QUERY),
    ("load", ActionType.QUERY),
    ("support", ActionType.QUERY),
    ("paginate", ActionType.QUERY),
    ("sort", ActionType.QUERY),
    ("create", ActionType.CREATE),
    ("update", ActionType.UPDATE),
    ("set", ActionType.UPDATE),
    ("delete", ActionType.DELETE),
    ("remove", ActionType.DELETE),
    ("check", ActionType.VALIDATE),
    ("validate", ActionType.VALIDATE),
    ("respond", ActionType.RESPOND),
    ("send", ActionType.SEND),
    ("notify", ActionType.SEND),
    ("assign", ActionType.ASSIGN),
    ("alert", ActionType.ALERT),
    ("log", ActionType.LOG),
    ("track", ActionType.LOG),
    ("after", ActionType.DELAY),
    ("retry", ActionType.RETRY),
    ("run", ActionType.CONFIGURE),
    ("build", ActionType.CONFIGURE),
    ("deploy", ActionType.CONFIGURE),
    ("report", ActionType.CONFIGURE),
    ("method", ActionType.CONFIGURE),
    ("rate", ActionType.CONFIGURE),
    ("sanitize", ActionType.CONFIGURE),
    ("enable", ActionType.CONFIGURE),
    ("passwords", ActionType.CONFIGURE),
    ("all", ActionType.CONFIGURE),
    ("use", ActionType.CONFIGURE),
    ("index", ActionType.CONFIGURE),
    ("backup", ActionType.CONFIGURE),
    ("keep", ActionType.CONFIGURE),
    ("frontend", ActionType.CONFIGURE),
    ("backend", ActionType.CONFIGURE),
    ("database", ActionType.CONFIGURE),
]


class TestKeywordTable:
    @pytest.mark.parametrize("keyword,expected", KEYWORD_TABLE)
    def test_keyword(self, keyword: str, expected: ActionType):
        assert classify_kind(keyword) == expected
        assert classify(make_statement(f"{keyword} something")).type == expected

    def test_table_covers_every_rule_keyword(self):
        table_keywords = {keyword for keyword, _ in KEYWORD_TABLE}
        rule_keywords = {k for rule in CLASSIFICATION_RULES for k in rule.keywords}
        assert rule_keywords == table_keywords

    def test_keywords_are_unique_across_rules(self):
        seen: list[str] = [k for rule in CLASSIFICATION_RULES for k in rule.keywords]
        assert len(seen) == len(set(seen))


class TestFallback:
    @pytest.mark.parametrize("keyword", ["showcase", "shows", "frobnicate", "accepts", ""])
    def test_unknown_keyword_is_unclassified(self, keyword: str):
        assert classify_kind(keyword) == ActionType.UNCLASSIFIED

    def test_exact_match_not_substring(self):
        action = classify(make_statement("showcase the portfolio"))
        assert action.type == ActionType.UNCLASSIFIED
        assert action.text == "showcase the portfolio"


class TestEnrichment:
    def test_create_target(self):
        action = classify(make_statement("create a User with the given fields"))
        assert action.type == ActionType.CREATE
        assert action.target == "User"

    def test_query_target_strips_possessive(self):
        action = classify(make_statement("fetch the User's tasks"))
        assert action.target == "User"

    def test_no_target_for_display(self):
        assert classify(make_statement("show the Dashboard header")).target is None

    def test_navigation_destination(self):
        action = classify(make_statement("clicking a task navigates to TaskDetail"))
        assert action.type == ActionType.INTERACT
        assert action.value == "TaskDetail"

    def test_redirect_destination(self):
        action = classify(make_statement("redirect to the login page."))
        assert action.type == ActionType.NAVIGATE
        assert action.value == "the login page"

    def test_missing_enrichment_stays_empty(self):
        action = classify(make_statement("delete everything"))
        assert action.target is None
        assert action.value is None

    def test_classification_is_idempotent(self):
        stmt = make_statement("update the Task status")
        assert classify(stmt) == classify(stmt)


class TestClassifyAll:
    def test_flattens_nested_bodies(self):
        page = parse_source("page Home:\n  if logged in:\n    show the feed\n  show a footer\n")
        actions = classify_all(page.statements[0].body)

        assert [a.type for a in actions] == [
            ActionType.CONDITION,
            ActionType.DISPLAY,
            ActionType.DISPLAY,
        ]
        assert actions[1].text == "show the feed"
