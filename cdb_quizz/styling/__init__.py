"""Styling module for the CdB Quizz desktop shell."""

from .color_palette import ColorPalette, difficulty_color, mode_accent
from .styles import Styles

__all__ = ["ColorPalette", "Styles", "difficulty_color", "mode_accent"]
