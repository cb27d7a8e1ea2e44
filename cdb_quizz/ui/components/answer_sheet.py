"""Answer modal shown after swiping a card up."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from cdb_quizz.constants.quiz_constants import PRONUNCIATION_BONUS_MIN_SCORE
from cdb_quizz.constants.ui_constants import (
    ANALYZING_MESSAGE,
    BUTTON_CONTINUE,
    BUTTON_LISTEN,
    BUTTON_RECORD,
    BUTTON_STOP_RECORDING,
    CORRECT_FEEDBACK,
    INCORRECT_FEEDBACK,
    PRONUNCIATION_BONUS_MESSAGE,
    PRONUNCIATION_RESULT_TEMPLATE,
    STOPWATCH_TEMPLATE,
)
from cdb_quizz.core.markdown_renderer import renderer
from cdb_quizz.core.models import Question
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.core.services.game_session import AnswerOutcome, AnswerSheet, PronunciationPhase
from cdb_quizz.styling.color_palette import ColorPalette
from cdb_quizz.styling.styles import Styles


class AnswerSheetWidget(QWidget):
    """Options, stopwatch, explanation and pronunciation controls for one card."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_record_toggle: Callable[[], None],
        on_listen: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_record_toggle = on_record_toggle
        self.on_listen = on_listen
        self._question: Question | None = None
        self.option_buttons: list[QPushButton] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.stopwatch_label = QLabel(self)
        self.stopwatch_label.setAlignment(Qt.AlignRight)
        layout.addWidget(self.stopwatch_label)

        self.question_label = QLabel(self)
        self.question_label.setTextFormat(Qt.RichText)
        self.question_label.setWordWrap(True)
        self.question_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.question_label)

        self.options_layout = QVBoxLayout()
        layout.addLayout(self.options_layout)

        self.feedback_label = QLabel(self)
        self.feedback_label.setAlignment(Qt.AlignCenter)
        self.feedback_label.setWordWrap(True)
        layout.addWidget(self.feedback_label)

        self.explanation_label = QLabel(self)
        self.explanation_label.setTextFormat(Qt.RichText)
        self.explanation_label.setWordWrap(True)
        layout.addWidget(self.explanation_label)

        # Pronunciation practice
        self.pronunciation_row = QWidget(self)
        pronunciation_layout = QHBoxLayout()
        pronunciation_layout.setContentsMargins(0, 0, 0, 0)
        self.pronunciation_row.setLayout(pronunciation_layout)
        self.listen_button = QPushButton(f"🔊 {BUTTON_LISTEN}", self.pronunciation_row)
        self.listen_button.clicked.connect(self.on_listen)
        pronunciation_layout.addWidget(self.listen_button)
        self.record_button = QPushButton(f"🎙 {BUTTON_RECORD}", self.pronunciation_row)
        self.record_button.clicked.connect(self.on_record_toggle)
        pronunciation_layout.addWidget(self.record_button)
        layout.addWidget(self.pronunciation_row)
        self.pronunciation_label = QLabel(self)
        self.pronunciation_label.setWordWrap(True)
        layout.addWidget(self.pronunciation_label)

        layout.addStretch()
        self.continue_button = QPushButton(BUTTON_CONTINUE, self)
        self.continue_button.setMinimumHeight(48)
        self.continue_button.clicked.connect(self.quiz_manager.continue_to_next)
        layout.addWidget(self.continue_button)

    def _rebuild_options(self, question: Question) -> None:
        for button in self.option_buttons:
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self.option_buttons = []
        for option in question.options:
            button = QPushButton(option, self)
            button.clicked.connect(lambda _checked=False, value=option: self.quiz_manager.select_answer(value))
            self.options_layout.addWidget(button)
            self.option_buttons.append(button)

    def refresh(self, question: Question, sheet: AnswerSheet) -> None:
        if question is not self._question:
            self._question = question
            self._rebuild_options(question)
            self.question_label.setText(renderer.render_inline(question.question_text))

        self.stopwatch_label.setText(STOPWATCH_TEMPLATE.format(seconds=sheet.elapsed_seconds))
        for button in self.option_buttons:
            option = button.text()
            if not sheet.revealed:
                state = "idle"
            elif option == question.correct_answer:
                state = "correct"
            elif option == sheet.selected_answer:
                state = "wrong"
            else:
                state = "dimmed"
            button.setStyleSheet(Styles.get_answer_option_style(state))
            button.setEnabled(not sheet.revealed)

        if sheet.outcome is AnswerOutcome.CORRECT:
            self.feedback_label.setText(CORRECT_FEEDBACK)
            self.feedback_label.setStyleSheet(f"color: {ColorPalette.SUCCESS}; font-weight: bold;")
        elif sheet.outcome is AnswerOutcome.INCORRECT:
            self.feedback_label.setText(INCORRECT_FEEDBACK.format(answer=question.correct_answer))
            self.feedback_label.setStyleSheet(f"color: {ColorPalette.ERROR}; font-weight: bold;")
        else:
            self.feedback_label.setText("")
        self.explanation_label.setText(
            renderer.wrap_document(renderer.render_fragment(question.explanation), font_size=12)
            if sheet.revealed
            else ""
        )
        self.continue_button.setEnabled(sheet.revealed and not sheet.exiting)

        self._refresh_pronunciation(sheet)

    def _refresh_pronunciation(self, sheet: AnswerSheet) -> None:
        available = self.quiz_manager.can_practice_pronunciation()
        self.pronunciation_row.setVisible(available)
        self.pronunciation_label.setVisible(available)
        if not available:
            return
        phase = sheet.pronunciation
        recording = phase is PronunciationPhase.RECORDING
        self.record_button.setText(f"⏹ {BUTTON_STOP_RECORDING}" if recording else f"🎙 {BUTTON_RECORD}")
        self.record_button.setEnabled(phase is not PronunciationPhase.ANALYZING)
        if phase is PronunciationPhase.ANALYZING:
            self.pronunciation_label.setText(ANALYZING_MESSAGE)
        elif phase is PronunciationPhase.DONE and sheet.feedback is not None:
            text = PRONUNCIATION_RESULT_TEMPLATE.format(score=sheet.feedback.score, feedback=sheet.feedback.feedback)
            if sheet.feedback.score > PRONUNCIATION_BONUS_MIN_SCORE:
                text = f"{text}\n{PRONUNCIATION_BONUS_MESSAGE}"
            self.pronunciation_label.setText(text)
        else:
            self.pronunciation_label.setText("")
