"""List of answered questions, newest first."""

from __future__ import annotations

from datetime import datetime

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QPushButton, QVBoxLayout, QWidget

from cdb_quizz.constants.ui_constants import BUTTON_BACK, EMPTY_HISTORY_MESSAGE, HISTORY_TITLE
from cdb_quizz.core.models import HistoryEntry
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.styling.styles import Styles


def format_entry(entry: HistoryEntry) -> str:
    mark = "✅" if entry.is_correct else "❌"
    when = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%d/%m %H:%M")
    line = f"{mark} [{entry.mode.label}] {entry.question_text}\n    {entry.selected_answer}"
    if not entry.is_correct:
        line += f" → {entry.correct_answer}"
    return f"{line}   ({when})"


class HistoryPanel(QWidget):
    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager

        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel(HISTORY_TITLE, self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        self.history_list = QListWidget(self)
        self.history_list.setAlternatingRowColors(True)
        self.history_list.setWordWrap(True)
        layout.addWidget(self.history_list, stretch=1)

        self.empty_label = QLabel(EMPTY_HISTORY_MESSAGE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        back_button = QPushButton(BUTTON_BACK, self)
        back_button.clicked.connect(self.quiz_manager.back_to_profile)
        layout.addWidget(back_button)

    def refresh(self) -> None:
        history = self.quiz_manager.profile.history
        self.history_list.clear()
        # Stored oldest first.
        for entry in reversed(history):
            self.history_list.addItem(QListWidgetItem(format_entry(entry)))
        self.empty_label.setVisible(not history)
        self.history_list.setVisible(bool(history))
