"""Splash view shown while the intro timer runs."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from cdb_quizz.constants.about import APP_NAME, APP_SUBTITLE, APP_VERSION
from cdb_quizz.constants.ui_constants import INTRO_HINT
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.styling.styles import Styles


class IntroPanel(QWidget):
    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        title = QLabel(APP_NAME, self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_title_style())
        layout.addWidget(title)

        subtitle = QLabel(APP_SUBTITLE, self)
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(subtitle)

        layout.addStretch()
        hint = QLabel(f"{INTRO_HINT} · v{APP_VERSION}", self)
        hint.setAlignment(Qt.AlignCenter)
        layout.addWidget(hint)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self.quiz_manager.skip_intro()
        super().mousePressEvent(event)

    def refresh(self) -> None:
        pass
