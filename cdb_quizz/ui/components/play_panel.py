"""Component for the playing view: card stack, swipe controls and answer sheet."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLayout,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cdb_quizz.constants.quiz_constants import OPPONENT_HIGHLIGHT_MS
from cdb_quizz.constants.ui_constants import (
    BUTTON_EXIT,
    DUEL_SCORE_TEMPLATE,
    REMAINING_TEMPLATE,
    SCORE_TEMPLATE,
    SWIPE_DOWN_LABEL,
    SWIPE_LEFT_LABEL,
    SWIPE_RIGHT_LABEL,
    SWIPE_UP_LABEL,
)
from cdb_quizz.core.models import ButtonLayout, GameMode, SwipeDirection
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.core.services.scheduler import Scheduler
from cdb_quizz.styling.color_palette import ColorPalette
from cdb_quizz.styling.styles import Styles
from cdb_quizz.ui.components.answer_sheet import AnswerSheetWidget
from cdb_quizz.ui.components.card_stack import CardStackWidget

_SWIPE_BUTTONS = (
    (SwipeDirection.LEFT, f"← {SWIPE_LEFT_LABEL}"),
    (SwipeDirection.DOWN, f"↓ {SWIPE_DOWN_LABEL}"),
    (SwipeDirection.UP, f"↑ {SWIPE_UP_LABEL}"),
    (SwipeDirection.RIGHT, f"{SWIPE_RIGHT_LABEL} →"),
)


class PlayPanel(QWidget):
    """UI component for an active session."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        scheduler: Scheduler,
        on_record_toggle: Callable[[], None],
        on_listen: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.scheduler = scheduler
        self.on_record_toggle = on_record_toggle
        self.on_listen = on_listen
        self._button_layout: ButtonLayout | None = None
        self._last_opponent_score = 0
        self.swipe_buttons: dict[SwipeDirection, QPushButton] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header = QHBoxLayout()
        self.score_label = QLabel(self)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        header.addWidget(self.score_label)
        self.remaining_label = QLabel(self)
        header.addWidget(self.remaining_label)
        header.addStretch()
        exit_button = QPushButton(BUTTON_EXIT, self)
        exit_button.clicked.connect(self.quiz_manager.abandon_session)
        header.addWidget(exit_button)
        layout.addLayout(header)

        self.duel_label = QLabel(self)
        layout.addWidget(self.duel_label)
        self._highlight_timer = QTimer(self)
        self._highlight_timer.setSingleShot(True)
        self._highlight_timer.setInterval(OPPONENT_HIGHLIGHT_MS)
        self._highlight_timer.timeout.connect(self._clear_opponent_highlight)

        # The answer sheet shares the grid cell with the cards so the
        # committed card stays visible underneath it.
        self.play_area = QWidget(self)
        play_layout = QGridLayout()
        play_layout.setContentsMargins(0, 0, 0, 0)
        self.play_area.setLayout(play_layout)

        self.cards_page = cards_page = QWidget(self.play_area)
        cards_layout = QVBoxLayout()
        cards_page.setLayout(cards_layout)
        self.card_stack = CardStackWidget(self.scheduler, self.quiz_manager.handle_swipe, cards_page)
        cards_layout.addWidget(self.card_stack, stretch=1)
        self.swipe_container = QWidget(cards_page)
        for direction, text in _SWIPE_BUTTONS:
            button = QPushButton(text, self.swipe_container)
            button.clicked.connect(lambda _checked=False, value=direction: self.card_stack.trigger(value))
            self.swipe_buttons[direction] = button
        cards_layout.addWidget(self.swipe_container)
        play_layout.addWidget(cards_page, 0, 0)

        self.answer_sheet = AnswerSheetWidget(
            self.quiz_manager,
            on_record_toggle=self.on_record_toggle,
            on_listen=self.on_listen,
            parent=self.play_area,
        )
        self.answer_sheet.setAutoFillBackground(True)
        self.answer_sheet.hide()
        play_layout.addWidget(self.answer_sheet, 0, 0, Qt.AlignBottom)
        layout.addWidget(self.play_area, stretch=1)

    def _apply_button_layout(self, button_layout: ButtonLayout) -> None:
        if button_layout is self._button_layout:
            return
        self._button_layout = button_layout
        old_layout = self.swipe_container.layout()
        if old_layout is not None:
            # Reparenting the old layout to a throwaway widget is how Qt drops it.
            QWidget().setLayout(old_layout)

        new_layout: QLayout
        buttons = [self.swipe_buttons[direction] for direction, _ in _SWIPE_BUTTONS]
        if button_layout is ButtonLayout.COMPACT:
            new_layout = QGridLayout()
            for position, button in enumerate(buttons):
                new_layout.addWidget(button, position // 2, position % 2)
        else:
            new_layout = QHBoxLayout()
            for button in buttons:
                if button_layout is ButtonLayout.SPREAD:
                    new_layout.addStretch()
                new_layout.addWidget(button)
            if button_layout is ButtonLayout.SPREAD:
                new_layout.addStretch()
        self.swipe_container.setLayout(new_layout)

    def refresh(self) -> None:
        session = self.quiz_manager.session
        if session is None:
            self.card_stack.clear()
            self._last_opponent_score = 0
            return
        settings = self.quiz_manager.profile.settings
        self._apply_button_layout(settings.button_layout)
        self.card_stack.set_border_radius(settings.card_border_radius)

        self.score_label.setText(SCORE_TEMPLATE.format(score=session.score))
        self.remaining_label.setText(REMAINING_TEMPLATE.format(remaining=session.deck.remaining()))
        self._refresh_duel(session.opponent_score)

        self.card_stack.set_cards(self.quiz_manager.visible_cards(), (id(session), session.deck.index))
        question = session.current_question
        sheet_open = session.sheet.open and question is not None
        if sheet_open:
            self.answer_sheet.refresh(question, session.sheet)
            self.answer_sheet.raise_()
        self.answer_sheet.setVisible(sheet_open)
        self.cards_page.setEnabled(not sheet_open)

    def _refresh_duel(self, opponent_score: int) -> None:
        duel = self.quiz_manager.game_mode is GameMode.DUEL
        self.duel_label.setVisible(duel)
        if not duel:
            return
        opponent = self.quiz_manager.opponent
        session = self.quiz_manager.session
        self.duel_label.setText(
            DUEL_SCORE_TEMPLATE.format(
                score=session.score if session else 0,
                opponent_score=opponent_score,
                avatar=opponent.avatar,
                name=opponent.name,
            )
        )
        if opponent_score > self._last_opponent_score:
            self.duel_label.setStyleSheet(f"background-color: {ColorPalette.ACCENT_CORAL}; font-weight: bold;")
            self._highlight_timer.start()
        self._last_opponent_score = opponent_score

    def _clear_opponent_highlight(self) -> None:
        self.duel_label.setStyleSheet("font-weight: bold;")
