"""
Theme normalization.

Builds a Theme from the statements of a "theme:" block. Design-system
names are canonicalised through an alias table; colors, fonts, spacing,
border radius and dark mode are recognised from fixed statement shapes.
Every statement that does not fit a recognised shape lands in the
options map, so nothing in a theme block is ever dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .ir import Theme
from .parser import Statement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DesignSystemAlias:
    """Names (lowercase) that resolve to one canonical design-system id."""

    names: frozenset[str]
    canonical: str


def _alias(canonical: str, *names: str) -> DesignSystemAlias:
    return DesignSystemAlias(frozenset(names) | {canonical}, canonical)


DESIGN_SYSTEM_ALIASES: tuple[DesignSystemAlias, ...] = (
    _alias("material", "mui", "material ui", "material design"),
    _alias("shadcn", "shadcn/ui", "shadcn ui"),
    _alias("ant", "ant design", "antd"),
    _alias("chakra", "chakra ui"),
    _alias("bootstrap", "bootstrap css"),
    _alias("tailwind", "tailwindcss", "tailwind css"),
    _alias("untitled", "untitled ui"),
)

# Tried only after the full name failed to match.
_STRIPPABLE_SUFFIXES = (" css", " ui")


def _lookup_alias(name: str) -> str | None:
    for alias in DESIGN_SYSTEM_ALIASES:
        if name in alias.names:
            return alias.canonical
    return None


def normalize_design_system(name: str) -> str:
    """
    Map a user-facing design-system name to its canonical id.

    "Material UI" and "MUI" become "material", "shadcn/ui" becomes
    "shadcn". An unknown name is returned lowercased.
    """
    lower = name.strip().lower()
    canonical = _lookup_alias(lower)
    if canonical:
        return canonical
    for suffix in _STRIPPABLE_SUFFIXES:
        if lower.endswith(suffix):
            canonical = _lookup_alias(lower[: -len(suffix)])
            if canonical:
                return canonical
    return lower


def parse_font_entry(text: str) -> dict[str, str]:
    """Parse "Inter for body and Poppins for headings" into role -> font."""
    fonts: dict[str, str] = {}
    for segment in text.split(" and "):
        parts = segment.strip().split(" for ", 1)
        if len(parts) == 2 and parts[0].strip() and parts[1].strip():
            fonts[parts[1].strip()] = parts[0].strip()
    return fonts


def _split_is(text: str) -> tuple[str, str] | None:
    parts = text.split(" is ", 1)
    if len(parts) != 2:
        return None
    return parts[0].strip(), parts[1].strip()


class ThemeBuilder:
    """Accumulates theme properties statement by statement."""

    def __init__(self) -> None:
        self.design_system: str | None = None
        self.colors: dict[str, str] = {}
        self.fonts: dict[str, str] = {}
        self.spacing: str | None = None
        self.border_radius: str | None = None
        self.dark_mode = False
        self.options: dict[str, str] = {}

    def add(self, text: str) -> None:
        """Apply one theme statement."""
        lower = text.lower()

        if lower.startswith("design system is "):
            self.design_system = normalize_design_system(text[len("design system is ") :])
        elif lower.startswith("border radius is "):
            self.border_radius = lower[len("border radius is ") :].strip()
        elif lower.startswith("spacing is "):
            self.spacing = lower[len("spacing is ") :].strip()
        elif lower.startswith("dark mode is "):
            self.dark_mode = True
            self._add_option("dark mode", text[len("dark mode is ") :].strip())
        elif " color is " in lower:
            role, _, value = lower.partition(" color is ")
            if role.strip() and value.strip():
                self.colors[role.strip()] = value.strip()
            else:
                self._add_generic(text)
        elif lower.startswith("font is ") or " font is " in lower:
            self._add_font(text, lower)
        else:
            self._add_generic(text)

    def _add_font(self, text: str, lower: str) -> None:
        if lower.startswith("font is "):
            fonts = parse_font_entry(text[len("font is ") :].strip())
        else:
            # "heading font is Poppins"
            idx = lower.index(" font is ")
            role, family = text[:idx].strip(), text[idx + len(" font is ") :].strip()
            fonts = {role.lower(): family} if role and family else {}
        if fonts:
            self.fonts.update(fonts)
        else:
            self._add_generic(text)

    def _add_generic(self, text: str) -> None:
        pair = _split_is(text)
        if pair and pair[0]:
            self._add_option(*pair)
            return
        # A bare word ("rounded", a "colors:" sub-header) keeps itself as the value.
        key, _, rest = text.partition(" ")
        self._add_option(key.lower(), rest.strip() or text.strip())

    def _add_option(self, key: str, value: str) -> None:
        if key in self.options and self.options[key] != value:
            self.options[key] = f"{self.options[key]}; {value}"
        else:
            self.options[key] = value

    def build(self) -> Theme:
        return Theme(
            design_system=self.design_system,
            colors=self.colors,
            fonts=self.fonts,
            spacing=self.spacing,
            border_radius=self.border_radius,
            dark_mode=self.dark_mode,
            options=self.options,
        )


def build_theme(statements: list[Statement]) -> Theme:
    """
    Build a Theme from theme-block statements.

    Nested statements are flattened in document order.
    """
    builder = ThemeBuilder()
    for stmt in statements:
        for s in stmt.walk():
            builder.add(s.text)
    logger.debug(
        "Theme: design_system=%s, %d colors, %d fonts, %d options",
        builder.design_system,
        len(builder.colors),
        len(builder.fonts),
        len(builder.options),
    )
    return builder.build()
