"""
Theme types for Human IR.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Theme(BaseModel):
    """
    Visual configuration extracted from theme properties.

    Attributes:
        design_system: Canonical design-system id (material, shadcn, ant, ...)
        colors: Role -> color value ("primary" -> "#6c5ce7")
        fonts: Role -> font family ("body" -> "Inter")
        spacing: compact, comfortable, spacious
        border_radius: sharp, smooth, rounded, pill
        dark_mode: True when dark mode is mentioned
        options: Every other property, keyed by its leading phrase
    """

    design_system: str | None = None
    colors: dict[str, str] = Field(default_factory=dict)
    fonts: dict[str, str] = Field(default_factory=dict)
    spacing: str | None = None
    border_radius: str | None = None
    dark_mode: bool = False
    options: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
