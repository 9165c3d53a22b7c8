"""Tests for theme normalization."""

import pytest

from human.core.parser import parse_source
from human.core.themes import (
    DESIGN_SYSTEM_ALIASES,
    ThemeBuilder,
    build_theme,
    normalize_design_system,
    parse_font_entry,
)


class TestNormalizeDesignSystem:
    @pytest.mark.parametrize(
        "name,canonical",
        [
            ("Material UI", "material"),
            ("MUI", "material"),
            ("material design", "material"),
            ("Material", "material"),
            ("shadcn/ui", "shadcn"),
            ("Shadcn", "shadcn"),
            ("Tailwind CSS", "tailwind"),
            ("TailwindCSS", "tailwind"),
            ("Ant Design", "ant"),
            ("antd", "ant"),
            ("Chakra UI", "chakra"),
            ("Bootstrap", "bootstrap"),
            ("Untitled UI", "untitled"),
            ("  MUI  ", "material"),
        ],
    )
    def test_alias(self, name: str, canonical: str):
        assert normalize_design_system(name) == canonical

    def test_suffix_stripped_only_for_known_names(self):
        assert normalize_design_system("Bootstrap UI") == "bootstrap"
        assert normalize_design_system("Acme UI") == "acme ui"

    def test_unknown_passes_through_lowercased(self):
        assert normalize_design_system("Carbon") == "carbon"

    def test_aliases_do_not_overlap(self):
        names = [n for alias in DESIGN_SYSTEM_ALIASES for n in alias.names]
        assert len(names) == len(set(names))


class TestFonts:
    def test_multiple_roles(self):
        assert parse_font_entry("Inter for body and Poppins for headings") == {
            "body": "Inter",
            "headings": "Poppins",
        }

    def test_segment_without_role_is_ignored(self):
        assert parse_font_entry("Inter") == {}


class TestThemeBuilder:
    def test_recognised_properties(self):
        builder = ThemeBuilder()
        for text in [
            "design system is Material UI",
            "primary color is #6C5CE7",
            "font is Inter for body",
            "heading font is Poppins",
            "border radius is Smooth",
            "spacing is comfortable",
        ]:
            builder.add(text)
        theme = builder.build()

        assert theme.design_system == "material"
        assert theme.colors == {"primary": "#6c5ce7"}
        assert theme.fonts == {"body": "Inter", "heading": "Poppins"}
        assert theme.border_radius == "smooth"
        assert theme.spacing == "comfortable"
        assert theme.dark_mode is False
        assert theme.options == {}

    def test_dark_mode_keeps_its_text(self):
        builder = ThemeBuilder()
        builder.add("dark mode is supported and follows the system")
        theme = builder.build()

        assert theme.dark_mode is True
        assert theme.options == {"dark mode": "supported and follows the system"}

    def test_nothing_is_dropped(self):
        statements = [
            "animations is subtle",
            "icons are outlined",
            "use a compact layout",
            "font is Inter",
        ]
        builder = ThemeBuilder()
        for text in statements:
            builder.add(text)
        theme = builder.build()

        assert theme.options == {
            "animations": "subtle",
            "icons": "are outlined",
            "use": "a compact layout",
            "font": "Inter",
        }

    def test_repeated_option_keys_are_joined(self):
        builder = ThemeBuilder()
        builder.add("shadows is soft")
        builder.add("shadows is layered")
        assert builder.build().options == {"shadows": "soft; layered"}


def test_build_theme_flattens_nested_statements():
    program = parse_source("theme:\n  colors:\n    primary color is blue\n")

    theme = build_theme(program.statements[0].body)

    assert theme.colors == {"primary": "blue"}
    assert theme.options == {"colors": "colors"}


def test_bare_word_statement_keeps_its_text():
    builder = ThemeBuilder()
    builder.add("rounded")
    builder.add("spacing is compact")

    theme = builder.build()

    assert theme.options == {"rounded": "rounded"}
    assert theme.spacing == "compact"
