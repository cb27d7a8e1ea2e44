"""Helper functions for common dialog patterns in the quiz UI."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget

from cdb_quizz.constants.ui_constants import RESET_MODE_QUESTION_TEMPLATE, RESET_PROFILE_QUESTION


def confirm_reset_profile(parent: QWidget) -> bool:
    """Show confirmation dialog for wiping the whole profile.

    Args:
        parent: Parent widget for the dialog

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Borrar progreso",
        RESET_PROFILE_QUESTION,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_reset_mode(parent: QWidget, mode_label: str) -> bool:
    """Show confirmation dialog for resetting one quiz mode.

    Args:
        parent: Parent widget for the dialog
        mode_label: Display name of the mode being reset

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Resetear estadísticas",
        RESET_MODE_QUESTION_TEMPLATE.format(mode=mode_label),
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    """Show information dialog."""
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Warning message
    """
    QMessageBox.warning(parent, title, message)
