"""Qt UI components for the CdB Quizz desktop client."""

from .dialog_helpers import (
    confirm_reset_mode,
    confirm_reset_profile,
    show_error,
    show_info,
    show_warning,
)
from .main_window import CdbQuizzMainWindow
from .qt_scheduler import QtScheduler

__all__ = [
    "CdbQuizzMainWindow",
    "QtScheduler",
    "confirm_reset_mode",
    "confirm_reset_profile",
    "show_error",
    "show_info",
    "show_warning",
]
