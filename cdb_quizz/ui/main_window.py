"""Qt main window: one page per view state of the quiz manager."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QGuiApplication, QKeyEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from cdb_quizz.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from cdb_quizz.constants.ui_constants import (
    AUDIO_ERROR_MESSAGE,
    SAVE_ERROR_MESSAGE,
    SHARE_COPIED_MESSAGE,
    SOUND_DISABLED_MESSAGE,
    WINDOW_MIN_HEIGHT,
    WINDOW_MIN_WIDTH,
    WINDOW_TITLE,
)
from cdb_quizz.core.models import Profile, SwipeDirection
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.core.services.game_session import PronunciationPhase, RecordingError
from cdb_quizz.core.services.question_source import GenerationRequest, placeholder_result
from cdb_quizz.core.state_machine import GameState
from cdb_quizz.styling.styles import Styles
from cdb_quizz.ui.async_runner import AsyncRunner
from cdb_quizz.ui.audio import MicrophoneRecorder, PcmPlayer
from cdb_quizz.ui.components.admin_panel import AdminPanel
from cdb_quizz.ui.components.history_panel import HistoryPanel
from cdb_quizz.ui.components.intro_panel import IntroPanel
from cdb_quizz.ui.components.leaderboard_panel import LeaderboardPanel
from cdb_quizz.ui.components.loading_panel import LoadingPanel
from cdb_quizz.ui.components.menu_panel import MenuPanel
from cdb_quizz.ui.components.play_panel import PlayPanel
from cdb_quizz.ui.components.profile_panel import ProfilePanel
from cdb_quizz.ui.components.results_panel import ResultsPanel
from cdb_quizz.ui.components.setup_panel import SetupPanel
from cdb_quizz.ui.dialog_helpers import show_error, show_info, show_warning
from cdb_quizz.ui.qt_scheduler import QtScheduler

logger = logging.getLogger(__name__)

_ARROW_KEYS = {
    Qt.Key_Left: SwipeDirection.LEFT,
    Qt.Key_Right: SwipeDirection.RIGHT,
    Qt.Key_Up: SwipeDirection.UP,
    Qt.Key_Down: SwipeDirection.DOWN,
}


class CdbQuizzMainWindow(QMainWindow):
    """Main Qt window. Views are driven entirely by :class:`QuizManager` state."""

    def __init__(self, quiz_manager: QuizManager, scheduler: QtScheduler) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumSize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT)

        self.quiz_manager = quiz_manager
        self.scheduler = scheduler
        self.runner = AsyncRunner(self)
        self.recorder = MicrophoneRecorder()
        self.player = PcmPlayer()
        self._shown_state: GameState | None = None
        self._background: str | None = None

        self._build_ui()
        self._apply_styles()
        self.quiz_manager.add_listener(self._refresh_view)
        self.quiz_manager.store.add_listener(self._handle_profile_changed)
        self._refresh_view()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.help_button = QPushButton("?", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)
        self.about_button = QPushButton("i", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)
        root_layout.addLayout(button_row)

        self.view_stack = QStackedWidget(self)
        self.play_panel = PlayPanel(
            self.quiz_manager,
            self.scheduler,
            on_record_toggle=self._handle_record_toggle,
            on_listen=self._handle_listen,
            parent=self,
        )
        self.panels: dict[GameState, QWidget] = {
            GameState.INTRO: IntroPanel(self.quiz_manager, self),
            GameState.PROFILE: ProfilePanel(self.quiz_manager, self),
            GameState.MENU: MenuPanel(self.quiz_manager, self),
            GameState.SETUP: SetupPanel(self.quiz_manager, on_start_game=self._handle_start_game, parent=self),
            GameState.LOADING: LoadingPanel(self.quiz_manager, self),
            GameState.PLAYING: self.play_panel,
            GameState.RESULTS: ResultsPanel(self.quiz_manager, on_share=self._handle_share, parent=self),
            GameState.LEADERBOARD: LeaderboardPanel(self.quiz_manager, self),
            GameState.HISTORY: HistoryPanel(self.quiz_manager, self),
            GameState.ADMIN: AdminPanel(self.quiz_manager, self),
        }
        for panel in self.panels.values():
            self.view_stack.addWidget(panel)
        root_layout.addWidget(self.view_stack, stretch=1)

    # --- State tracking ---

    def _refresh_view(self) -> None:
        state = self.quiz_manager.state
        if state is not self._shown_state:
            self._enter_state(self._shown_state, state)
            self._shown_state = state
        self.panels[state].refresh()

    def _enter_state(self, previous: GameState | None, state: GameState) -> None:
        self.view_stack.setCurrentWidget(self.panels[state])
        if previous is GameState.PLAYING:
            self.recorder.stop()
            self.player.stop()
            self.play_panel.refresh()
        if state is GameState.RESULTS:
            self.runner.submit(
                self.quiz_manager.submit_results(),
                self._handle_save_message,
                on_error=self._handle_save_failure,
            )

    def _handle_profile_changed(self, profile: Profile) -> None:
        if profile.settings.background_color != self._background:
            self._apply_styles()

    def _apply_styles(self) -> None:
        self._background = self.quiz_manager.profile.settings.background_color
        self.setStyleSheet(Styles.get_main_window_style(self._background))

    # --- Network work ---

    def _handle_start_game(self) -> None:
        request = self.quiz_manager.begin_loading()
        if request is None:
            return
        self.runner.submit(
            self.quiz_manager.fetch_deck(request),
            self.quiz_manager.complete_loading,
            on_error=lambda error: self._handle_load_failure(request, error),
        )

    def _handle_load_failure(self, request: GenerationRequest, error: BaseException) -> None:
        logger.error("Deck loading crashed: %s", error)
        self.quiz_manager.complete_loading(placeholder_result(request))

    def _handle_save_message(self, message: str) -> None:
        if message:
            self.quiz_manager.set_save_message(message)

    def _handle_save_failure(self, error: BaseException) -> None:
        logger.error("Saving the attempt crashed: %s", error)
        self.quiz_manager.set_save_message(SAVE_ERROR_MESSAGE)

    def _handle_record_toggle(self) -> None:
        session = self.quiz_manager.session
        if session is None:
            return
        if session.sheet.pronunciation is PronunciationPhase.RECORDING:
            audio = self.recorder.stop()
            target = self.quiz_manager.finish_recording()
            if target is None:
                return
            word, language = target
            self.runner.submit(
                self.quiz_manager.evaluate_recording(audio, self.recorder.mime_type, word, language),
                self.quiz_manager.apply_pronunciation_feedback,
            )
            return
        if not self.quiz_manager.begin_recording():
            return
        try:
            self.recorder.start()
        except RecordingError as exc:
            message = self.quiz_manager.recording_failed(exc)
            show_error(self, WINDOW_TITLE, message)

    def _handle_listen(self) -> None:
        if not self.quiz_manager.can_play_audio():
            show_info(self, WINDOW_TITLE, SOUND_DISABLED_MESSAGE)
            return
        self.runner.submit(self.quiz_manager.fetch_answer_audio(), self._play_audio)

    def _play_audio(self, pcm: bytes | None) -> None:
        if not pcm:
            show_warning(self, WINDOW_TITLE, AUDIO_ERROR_MESSAGE)
            return
        self.player.play(pcm)

    # --- Misc actions ---

    def _handle_share(self) -> None:
        QGuiApplication.clipboard().setText(self.quiz_manager.share_text())
        show_info(self, WINDOW_TITLE, SHARE_COPIED_MESSAGE)

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        direction = _ARROW_KEYS.get(event.key())
        session = self.quiz_manager.session
        if direction is not None and session is not None and not session.sheet.open:
            self.play_panel.card_stack.trigger(direction)
            return
        super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.recorder.stop()
        self.player.stop()
        self.runner.shutdown()
        super().closeEvent(event)
