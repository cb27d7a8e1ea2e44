"""Retro colour palette shared by every view of the desktop shell."""

from __future__ import annotations

from cdb_quizz.core.models import AppMode, Difficulty


class ColorPalette:
    """Centralized color definitions for the application."""

    # Text colors
    TEXT_PRIMARY = "#1F2937"      # Ink
    TEXT_SECONDARY = "#3D405B"    # Navy
    TEXT_MUTED = "#6B7280"
    TEXT_ON_ACCENT = "#FFFFFF"

    # Background colors
    BACKGROUND_PRIMARY = "#FAF8EE"    # Crema retro
    BACKGROUND_CARD = "#FFFBF0"
    BACKGROUND_SHEET = "#FFFFFF"

    # Accent colors
    ACCENT_CORAL = "#E07A5F"
    ACCENT_SAGE = "#81B29A"
    ACCENT_SAND = "#F2CC8F"
    ACCENT_SKY = "#98C1D9"
    ACCENT_NAVY = "#3D405B"

    # Status colors
    SUCCESS = "#81B29A"
    ERROR = "#E07A5F"
    WARNING = "#F2CC8F"

    # Border colors
    BORDER_PRIMARY = "#1F2937"
    BORDER_SOFT = "#D6D3C4"

    # Swipe hints
    HINT_LEFT = "#98C1D9"
    HINT_RIGHT = "#E07A5F"
    HINT_UP = "#81B29A"
    HINT_DOWN = "#F2CC8F"


_MODE_ACCENTS = {
    AppMode.IDIOMAS: ColorPalette.ACCENT_SKY,
    AppMode.CERVEZA: ColorPalette.ACCENT_SAND,
    AppMode.VINO: ColorPalette.ACCENT_CORAL,
    AppMode.L43: ColorPalette.ACCENT_SAND,
    AppMode.CULTURA: ColorPalette.ACCENT_SAGE,
    AppMode.LEGAL: ColorPalette.ACCENT_NAVY,
}

_DIFFICULTY_COLORS = {
    Difficulty.EASY: ColorPalette.ACCENT_SAGE,
    Difficulty.MEDIUM: ColorPalette.ACCENT_SAND,
    Difficulty.HARD: ColorPalette.ACCENT_CORAL,
}


def mode_accent(mode: AppMode) -> str:
    return _MODE_ACCENTS.get(mode, ColorPalette.ACCENT_CORAL)


def difficulty_color(label: str) -> str:
    """Badge colour for a difficulty label as shown on the card."""
    return _DIFFICULTY_COLORS[Difficulty.parse(label)]
