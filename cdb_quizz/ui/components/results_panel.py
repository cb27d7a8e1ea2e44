"""Component for the end-of-session summary."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from cdb_quizz.constants.ui_constants import (
    BUTTON_BACK,
    BUTTON_SHARE,
    DEFEAT_TITLE,
    RESULTS_DUEL_TEMPLATE,
    RESULTS_DURATION_TEMPLATE,
    RESULTS_SCORE_TEMPLATE,
    RESULTS_XP_TEMPLATE,
    VICTORY_TITLE,
)
from cdb_quizz.core.models import GameMode
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.styling.color_palette import ColorPalette
from cdb_quizz.styling.styles import Styles


class ResultsPanel(QWidget):
    """Shows score, XP, duel outcome and the backend save status."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_share: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_share = on_share
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        self.title_label = QLabel(self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_title_style())
        layout.addWidget(self.title_label)

        self.score_label = QLabel(self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.score_label)

        self.xp_label = QLabel(self)
        self.xp_label.setAlignment(Qt.AlignCenter)
        self.xp_label.setStyleSheet(f"color: {ColorPalette.ACCENT_SAGE}; font-size: 20pt; font-weight: bold;")
        layout.addWidget(self.xp_label)

        self.duel_label = QLabel(self)
        self.duel_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.duel_label)

        self.duration_label = QLabel(self)
        self.duration_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.duration_label)

        self.load_error_label = QLabel(self)
        self.load_error_label.setAlignment(Qt.AlignCenter)
        self.load_error_label.setWordWrap(True)
        self.load_error_label.setStyleSheet(f"color: {ColorPalette.ERROR};")
        layout.addWidget(self.load_error_label)

        self.save_label = QLabel(self)
        self.save_label.setAlignment(Qt.AlignCenter)
        self.save_label.setWordWrap(True)
        layout.addWidget(self.save_label)
        layout.addStretch()

        button_row = QHBoxLayout()
        share_button = QPushButton(BUTTON_SHARE, self)
        share_button.clicked.connect(self.on_share)
        button_row.addWidget(share_button)
        back_button = QPushButton(BUTTON_BACK, self)
        back_button.clicked.connect(self.quiz_manager.leave_results)
        button_row.addWidget(back_button)
        layout.addLayout(button_row)

    def refresh(self) -> None:
        summary = self.quiz_manager.summary
        if summary is None:
            return
        self.title_label.setText(VICTORY_TITLE if summary.victory else DEFEAT_TITLE)
        self.score_label.setText(
            RESULTS_SCORE_TEMPLATE.format(
                score=summary.score,
                total=summary.distinct_questions,
                accuracy=summary.accuracy_percent,
            )
        )
        self.xp_label.setText(RESULTS_XP_TEMPLATE.format(xp=summary.xp_earned))
        duel = summary.game_mode is GameMode.DUEL
        self.duel_label.setVisible(duel)
        if duel:
            self.duel_label.setText(
                RESULTS_DUEL_TEMPLATE.format(name=summary.opponent.name, opponent_score=summary.opponent_score)
            )
        self.duration_label.setText(RESULTS_DURATION_TEMPLATE.format(seconds=summary.duration_seconds))
        self.load_error_label.setText(self.quiz_manager.load_error or "")
        self.save_label.setText(self.quiz_manager.save_message or "")
