"""Pre-game setup: language, topic, game mode, opponent and friend challenge."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cdb_quizz.constants.ui_constants import (
    BUTTON_BACK,
    BUTTON_CHALLENGE_EXPIRED,
    BUTTON_CREATE_CHALLENGE,
    BUTTON_SEND_CHALLENGE,
    BUTTON_START,
    CHALLENGE_CONNECTED_TEMPLATE,
    CHALLENGE_COUNTDOWN_TEMPLATE,
    CHALLENGE_LABEL,
    GAME_MODE_DUEL,
    GAME_MODE_LABEL,
    GAME_MODE_SOLO,
    LANGUAGE_LABEL,
    LOCKED_TOPIC_TEMPLATE,
    OPPONENT_LABEL,
    SETUP_TITLE,
    TOPIC_LABEL,
)
from cdb_quizz.core import progression
from cdb_quizz.core.catalog import OPPONENTS, TOPIC_LEVEL_LOCKS
from cdb_quizz.core.models import GameMode, Language, Opponent, Topic
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.core.services.challenge import ChallengeStatus
from cdb_quizz.styling.styles import Styles


class SetupPanel(QWidget):
    """UI component for configuring the next game."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_start_game: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_start_game = on_start_game
        self.language_buttons: dict[Language, QPushButton] = {}
        self.topic_buttons: dict[Topic, QPushButton] = {}
        self.opponent_buttons: dict[Opponent, QPushButton] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(SETUP_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        # Language learning only
        self.language_group = QGroupBox(LANGUAGE_LABEL, self)
        language_layout = QHBoxLayout()
        self.language_group.setLayout(language_layout)
        for language in Language:
            button = QPushButton(language.value, self.language_group)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, value=language: self.quiz_manager.select_language(value))
            self.language_buttons[language] = button
            language_layout.addWidget(button)
        layout.addWidget(self.language_group)

        self.topic_group = QGroupBox(TOPIC_LABEL, self)
        topic_layout = QGridLayout()
        self.topic_group.setLayout(topic_layout)
        for position, topic in enumerate(Topic):
            button = QPushButton(topic.value, self.topic_group)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, value=topic: self._handle_topic(value))
            self.topic_buttons[topic] = button
            topic_layout.addWidget(button, position // 2, position % 2)
        layout.addWidget(self.topic_group)

        mode_group = QGroupBox(GAME_MODE_LABEL, self)
        mode_layout = QHBoxLayout()
        mode_group.setLayout(mode_layout)
        self.solo_button = QPushButton(GAME_MODE_SOLO, mode_group)
        self.solo_button.setCheckable(True)
        self.solo_button.clicked.connect(lambda: self.quiz_manager.select_game_mode(GameMode.SOLO))
        mode_layout.addWidget(self.solo_button)
        self.duel_button = QPushButton(GAME_MODE_DUEL, mode_group)
        self.duel_button.setCheckable(True)
        self.duel_button.clicked.connect(lambda: self.quiz_manager.select_game_mode(GameMode.DUEL))
        mode_layout.addWidget(self.duel_button)
        layout.addWidget(mode_group)

        self.opponent_group = QGroupBox(OPPONENT_LABEL, self)
        opponent_layout = QHBoxLayout()
        self.opponent_group.setLayout(opponent_layout)
        for opponent in OPPONENTS:
            button = QPushButton(f"{opponent.avatar} {opponent.name}", self.opponent_group)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, value=opponent: self.quiz_manager.select_opponent(value))
            self.opponent_buttons[opponent] = button
            opponent_layout.addWidget(button)
        layout.addWidget(self.opponent_group)

        challenge_group = QGroupBox(CHALLENGE_LABEL, self)
        challenge_layout = QHBoxLayout()
        challenge_group.setLayout(challenge_layout)
        self.challenge_status_label = QLabel(self)
        challenge_layout.addWidget(self.challenge_status_label, stretch=1)
        self.challenge_button = QPushButton(BUTTON_CREATE_CHALLENGE, challenge_group)
        self.challenge_button.clicked.connect(self._handle_challenge_click)
        challenge_layout.addWidget(self.challenge_button)
        layout.addWidget(challenge_group)

        layout.addStretch()
        button_row = QHBoxLayout()
        back_button = QPushButton(BUTTON_BACK, self)
        back_button.clicked.connect(self.quiz_manager.back_to_profile)
        button_row.addWidget(back_button)
        self.start_button = QPushButton(BUTTON_START, self)
        self.start_button.setMinimumHeight(48)
        self.start_button.clicked.connect(self.on_start_game)
        button_row.addWidget(self.start_button, stretch=1)
        layout.addLayout(button_row)

    def _handle_topic(self, topic: Topic) -> None:
        if not self.quiz_manager.select_topic(topic):
            self.refresh()

    def _handle_challenge_click(self) -> None:
        status = self.quiz_manager.challenge.status
        if status is ChallengeStatus.IDLE:
            self.quiz_manager.start_challenge()
        elif status is ChallengeStatus.COUNTING:
            self.quiz_manager.send_challenge()

    def refresh(self) -> None:
        manager = self.quiz_manager
        level = manager.profile.level
        learning = manager.app_mode.is_language_learning
        self.title_label.setText(f"{SETUP_TITLE} · {manager.app_mode.label}")

        self.language_group.setVisible(learning)
        self.topic_group.setVisible(learning)
        for language, button in self.language_buttons.items():
            button.setChecked(language is manager.language)
        for topic, button in self.topic_buttons.items():
            locked = progression.is_topic_locked(topic, level)
            button.setEnabled(not locked)
            button.setText(
                LOCKED_TOPIC_TEMPLATE.format(topic=topic.value, level=TOPIC_LEVEL_LOCKS[topic])
                if locked
                else topic.value
            )
            button.setChecked(topic is manager.topic)

        duel = manager.game_mode is GameMode.DUEL
        self.solo_button.setChecked(not duel)
        self.duel_button.setChecked(duel)
        self.opponent_group.setVisible(duel)
        for opponent, button in self.opponent_buttons.items():
            button.setChecked(opponent == manager.opponent)

        self._refresh_challenge()
        self.start_button.setEnabled(manager.can_start())

    def _refresh_challenge(self) -> None:
        challenge = self.quiz_manager.challenge
        status = challenge.status
        if status is ChallengeStatus.COUNTING:
            self.challenge_status_label.setText(CHALLENGE_COUNTDOWN_TEMPLATE.format(seconds=challenge.seconds_left))
            self.challenge_button.setText(BUTTON_SEND_CHALLENGE)
            self.challenge_button.setEnabled(True)
        elif status is ChallengeStatus.EXPIRED:
            self.challenge_status_label.setText("")
            self.challenge_button.setText(BUTTON_CHALLENGE_EXPIRED)
            self.challenge_button.setEnabled(False)
        elif status is ChallengeStatus.CONNECTED:
            self.challenge_status_label.setText(
                CHALLENGE_CONNECTED_TEMPLATE.format(name=self.quiz_manager.opponent.name)
            )
            self.challenge_button.setText(BUTTON_CREATE_CHALLENGE)
            self.challenge_button.setEnabled(False)
        else:
            self.challenge_status_label.setText("")
            self.challenge_button.setText(BUTTON_CREATE_CHALLENGE)
            self.challenge_button.setEnabled(True)
