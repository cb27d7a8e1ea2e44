"""Busy view shown while a deck is generated."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QProgressBar, QVBoxLayout, QWidget

from cdb_quizz.constants.ui_constants import LOADING_MESSAGE
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.styling.styles import Styles


class LoadingPanel(QWidget):
    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager

        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()
        self.message_label = QLabel(LOADING_MESSAGE, self)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.message_label)
        self.mode_label = QLabel(self)
        self.mode_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.mode_label)
        busy = QProgressBar(self)
        busy.setRange(0, 0)
        layout.addWidget(busy)
        layout.addStretch()

    def refresh(self) -> None:
        self.mode_label.setText(self.quiz_manager.app_mode.label)
