"""Business logic for the quiz client, shared by the Qt shell and headless callers.

:class:`QuizManager` is the facade over the view-state machine, the active
:class:`GameSession`, the friend challenge and the :class:`ProfileStore`. It
runs on one thread. Network work is exposed as coroutines plus synchronous
``begin_*``/``complete_*`` halves, so the shell can run the coroutine on its
worker thread and hand the result back on the UI thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
import logging
import random
import time
from typing import Any, Callable

from cdb_quizz.constants.about import APP_NAME, SHARE_URL
from cdb_quizz.constants.network_constants import DEFAULT_QUIZ_SLUG
from cdb_quizz.constants.quiz_constants import (
    CONTINUE_EXIT_MS,
    INTRO_DELAY_MS,
    OPPONENT_HIT_CHANCE,
    PRONUNCIATION_BONUS_MIN_SCORE,
    PRONUNCIATION_BONUS_XP,
    STOPWATCH_TICK_MS,
    XP_PER_CORRECT,
)
from cdb_quizz.constants.ui_constants import (
    GLOBAL_LEADERBOARD_TAB,
    MICROPHONE_ERROR_MESSAGE,
    SAVE_ERROR_MESSAGE,
    SAVE_OK_TEMPLATE,
)
from cdb_quizz.core import progression
from cdb_quizz.core.catalog import OPPONENTS
from cdb_quizz.core.models import (
    AppMode,
    GameMode,
    HistoryEntry,
    Language,
    Opponent,
    Profile,
    PronunciationFeedback,
    Question,
    SwipeDirection,
    Topic,
)
from cdb_quizz.core.services.attempt_reporter import AttemptReporter, AttemptSaveError
from cdb_quizz.core.services.challenge import ChallengeStatus, FriendChallenge
from cdb_quizz.core.services.gemini_client import GeminiClient, GeminiError
from cdb_quizz.core.services.game_session import GameSession, PronunciationPhase, RecordingError
from cdb_quizz.core.services.leaderboard import Leaderboard, LeaderboardRow
from cdb_quizz.core.services.profile_store import Confirmation, ProfileStore
from cdb_quizz.core.services.question_source import (
    GenerationRequest,
    GenerationResult,
    QuestionSource,
    load_deck,
)
from cdb_quizz.core.services.scheduler import Scheduler, TimerGroup, TimerHandle
from cdb_quizz.core.state_machine import GameState, ViewStateMachine

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """What is left of a session once it reaches the results view."""

    mode: AppMode
    game_mode: GameMode
    score: int
    answered: int
    distinct_questions: int
    deck_length: int
    opponent: Opponent
    opponent_score: int
    duration_seconds: int
    victory: bool
    payload: dict[str, Any]

    @property
    def xp_earned(self) -> int:
        return self.score * XP_PER_CORRECT

    @property
    def accuracy_percent(self) -> int:
        if self.distinct_questions == 0:
            return 0
        return round(self.score / self.distinct_questions * 100)


def is_victory(game_mode: GameMode, score: int, opponent_score: int, distinct_questions: int) -> bool:
    if game_mode is GameMode.DUEL:
        return score > opponent_score
    return score * 2 >= distinct_questions


class QuizManager:
    """Facade for the quiz services: state machine, session, challenge and profile."""

    def __init__(
        self,
        store: ProfileStore,
        scheduler: Scheduler,
        question_source: QuestionSource,
        reporter: AttemptReporter | None = None,
        gemini: GeminiClient | None = None,
        quiz_slug: str = DEFAULT_QUIZ_SLUG,
        clock: Callable[[], int] = _now_ms,
        rng: random.Random | None = None,
        open_url: Callable[[str], None] = lambda url: None,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._question_source = question_source
        self._reporter = reporter
        self._gemini = gemini
        self._quiz_slug = quiz_slug
        self._clock = clock
        self._rng = rng or random.Random()

        self._machine = ViewStateMachine(scheduler)
        self._machine.add_listener(self._on_transition)
        self._sheet_timers = TimerGroup(scheduler)
        self._duel_timer: TimerHandle | None = None
        self._listeners: list[ChangeListener] = []

        self._app_mode = AppMode.CULTURA
        self._language: Language | None = None
        self._topic: Topic | None = None
        self._game_mode = GameMode.SOLO
        self._opponent = OPPONENTS[0]
        self._leaderboard = Leaderboard()
        self._leaderboard_tab: AppMode | str = GLOBAL_LEADERBOARD_TAB

        self._session: GameSession | None = None
        self._generation: GenerationResult | None = None
        self._summary: SessionSummary | None = None
        self._save_message: str | None = None

        self._challenge = FriendChallenge(
            scheduler,
            open_url=open_url,
            on_connected=self._use_friend_opponent,
            on_change=self._notify,
        )

    # --- Observers ---

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # --- Read-only state ---

    @property
    def state(self) -> GameState:
        return self._machine.state

    @property
    def profile(self) -> Profile:
        return self._store.profile

    @property
    def store(self) -> ProfileStore:
        return self._store

    @property
    def app_mode(self) -> AppMode:
        return self._app_mode

    @property
    def language(self) -> Language | None:
        return self._language

    @property
    def topic(self) -> Topic | None:
        return self._topic

    @property
    def game_mode(self) -> GameMode:
        return self._game_mode

    @property
    def opponent(self) -> Opponent:
        return self._opponent

    @property
    def session(self) -> GameSession | None:
        return self._session

    @property
    def challenge(self) -> FriendChallenge:
        return self._challenge

    @property
    def summary(self) -> SessionSummary | None:
        return self._summary

    @property
    def load_error(self) -> str | None:
        return self._generation.error_message if self._generation else None

    @property
    def save_message(self) -> str | None:
        return self._save_message

    @property
    def leaderboard_tab(self) -> AppMode | str:
        return self._leaderboard_tab

    def visible_cards(self) -> tuple[Question, ...]:
        if self._session is None:
            return ()
        return self._session.deck.window()

    def current_question(self) -> Question | None:
        return self._session.current_question if self._session else None

    # --- Navigation ---

    def start(self) -> None:
        """Show the intro and move to the profile once its delay has elapsed."""
        if self.state is GameState.INTRO:
            self._machine.timers.call_later(INTRO_DELAY_MS, partial(self._machine.transition, GameState.PROFILE))

    def skip_intro(self) -> None:
        if self.state is GameState.INTRO:
            self._machine.transition(GameState.PROFILE)

    def open_menu(self) -> None:
        self._machine.transition(GameState.MENU)

    def select_app_mode(self, mode: AppMode) -> None:
        if mode is not self._app_mode:
            self._language = None
            self._topic = None
        self._app_mode = mode
        self._machine.transition(GameState.PROFILE)

    def open_setup(self) -> None:
        self._machine.transition(GameState.SETUP)

    def open_leaderboard(self) -> None:
        self._machine.transition(GameState.LEADERBOARD)

    def open_history(self) -> None:
        self._machine.transition(GameState.HISTORY)

    def open_admin(self) -> None:
        self._machine.transition(GameState.ADMIN)

    def back_to_profile(self) -> None:
        """Leave any detour view. Playing sessions must use :meth:`abandon_session`."""
        if self.state is GameState.PLAYING:
            self.abandon_session()
            return
        self._machine.transition(GameState.PROFILE)

    def set_leaderboard_tab(self, tab: AppMode | str) -> None:
        self._leaderboard_tab = tab
        self._notify()

    def leaderboard_rows(self) -> list[LeaderboardRow]:
        return self._leaderboard.rows(self.profile, self._leaderboard_tab)

    # --- Setup ---

    def select_language(self, language: Language) -> None:
        self._language = language
        self._notify()

    def select_topic(self, topic: Topic) -> bool:
        if progression.is_topic_locked(topic, self.profile.level):
            return False
        self._topic = topic
        self._notify()
        return True

    def select_game_mode(self, game_mode: GameMode) -> None:
        if game_mode is self._game_mode:
            return
        self._game_mode = game_mode
        if game_mode is GameMode.DUEL:
            self._start_duel_timer()
        else:
            self._stop_duel_timer()
        self._notify()

    def select_opponent(self, opponent: Opponent) -> None:
        self._opponent = opponent
        self._start_duel_timer()
        self._notify()

    def can_start(self) -> bool:
        if self._app_mode.is_language_learning:
            return self._language is not None and self._topic is not None
        return True

    def begin_loading(self) -> GenerationRequest | None:
        """Enter ``loading`` and return the request to run, or ``None`` if blocked."""
        if self.state is not GameState.SETUP or not self.can_start():
            return None
        request = GenerationRequest(
            mode=self._app_mode,
            language=self._language if self._app_mode.is_language_learning else None,
            topic=self._topic if self._app_mode.is_language_learning else None,
            sources=tuple(self.profile.enabled_source_names(self._app_mode)),
        )
        self._machine.transition(GameState.LOADING)
        return request

    def complete_loading(self, result: GenerationResult) -> None:
        if self.state is not GameState.LOADING:
            logger.debug("Ignoring generation result outside loading")
            return
        if result.used_sources:
            self._store.dispatch(
                partial(progression.merge_discovered_sources, mode=self._app_mode, names=result.used_sources)
            )
        self._generation = result
        self._summary = None
        self._save_message = None
        self._session = GameSession.start(result.questions, started_at_ms=self._clock())
        self._machine.transition(GameState.PLAYING)
        if not result.questions:
            self._finish_session()

    async def fetch_deck(self, request: GenerationRequest) -> GenerationResult:
        """Network half of loading. Touches no state, so it may run on a worker thread."""
        return await load_deck(self._question_source, request)

    async def start_game(self) -> bool:
        """Run setup → loading → playing in one call."""
        request = self.begin_loading()
        if request is None:
            return False
        self.complete_loading(await self.fetch_deck(request))
        return True

    # --- Playing ---

    def handle_swipe(self, direction: SwipeDirection) -> None:
        session = self._session
        if self.state is not GameState.PLAYING or session is None or session.sheet.open:
            return
        if session.current_question is None:
            return
        if direction is SwipeDirection.UP:
            session.open_sheet()
            self._sheet_timers.cancel_all()
            self._sheet_timers.call_every(STOPWATCH_TICK_MS, self._tick_stopwatch)
            self._notify()
            return
        if direction is SwipeDirection.RIGHT:
            session.deck.discard()
        else:
            session.deck.defer()
        self._after_advance()

    def select_answer(self, option: str) -> HistoryEntry | None:
        session = self._session
        if self.state is not GameState.PLAYING or session is None:
            return None
        question = session.current_question
        if question is None or not session.sheet.open or session.sheet.revealed:
            return None
        self._sheet_timers.cancel_all()
        timestamp = self._clock()
        entry = progression.history_entry_for(question, option, self._app_mode, timestamp)
        self._store.dispatch(
            partial(
                progression.add_answer_result,
                question=question,
                selected_option=option,
                mode=self._app_mode,
                elapsed_seconds=session.sheet.elapsed_seconds,
                timestamp_ms=timestamp,
            )
        )
        session.record_answer(entry)
        self._notify()
        return entry

    def continue_to_next(self) -> bool:
        session = self._session
        if self.state is not GameState.PLAYING or session is None:
            return False
        if not session.sheet.revealed or session.sheet.exiting:
            return False
        session.sheet.exiting = True
        self._sheet_timers.call_later(CONTINUE_EXIT_MS, self._finish_continue)
        self._notify()
        return True

    def abandon_session(self) -> None:
        if self.state is not GameState.PLAYING:
            return
        logger.info("Session abandoned")
        self._machine.transition(GameState.PROFILE)

    def _tick_stopwatch(self) -> None:
        if self._session is not None:
            self._session.tick()
            self._notify()

    def _finish_continue(self) -> None:
        session = self._session
        if session is None:
            return
        session.close_sheet()
        session.deck.discard()
        self._after_advance()

    def _after_advance(self) -> None:
        if self._session is not None and self._session.is_complete():
            self._finish_session()
        else:
            self._notify()

    def _finish_session(self) -> None:
        session = self._session
        if session is None:
            return
        self._summary = SessionSummary(
            mode=self._app_mode,
            game_mode=self._game_mode,
            score=session.score,
            answered=session.answered,
            distinct_questions=session.deck.distinct_count(),
            deck_length=len(session.deck),
            opponent=self._opponent,
            opponent_score=session.opponent_score,
            duration_seconds=round(max(0, self._clock() - session.started_at_ms) / 1000),
            victory=is_victory(self._game_mode, session.score, session.opponent_score, session.deck.distinct_count()),
            payload=self._finish_payload(session),
        )
        self._machine.transition(GameState.RESULTS)

    # --- Duel ---

    def _start_duel_timer(self) -> None:
        self._stop_duel_timer()
        if self.state is GameState.PLAYING and self._game_mode is GameMode.DUEL:
            self._duel_timer = self._machine.timers.call_every(self._opponent.speed_ms, self._opponent_tick)

    def _stop_duel_timer(self) -> None:
        if self._duel_timer is not None:
            self._duel_timer.cancel()
            self._duel_timer = None

    def _opponent_tick(self) -> None:
        session = self._session
        if session is None or self.state is not GameState.PLAYING or self._game_mode is not GameMode.DUEL:
            return
        chance = OPPONENT_HIT_CHANCE.get(self._opponent.difficulty, OPPONENT_HIT_CHANCE["medium"])
        if self._rng.random() < chance:
            session.record_opponent_hit(self._clock())
            self._notify()

    # --- Friend challenge ---

    def start_challenge(self) -> bool:
        return self._challenge.start()

    def send_challenge(self) -> str | None:
        return self._challenge.send_invite()

    def reset_challenge(self) -> None:
        self._challenge.reset()

    def _use_friend_opponent(self, opponent: Opponent) -> None:
        if self.state is not GameState.SETUP:
            return
        self._opponent = opponent
        self._game_mode = GameMode.DUEL

    # --- Pronunciation ---

    def can_practice_pronunciation(self) -> bool:
        return (
            self._app_mode.is_language_learning
            and self._language is not None
            and self._session is not None
            and self._session.sheet.open
        )

    def begin_recording(self) -> bool:
        if not self.can_practice_pronunciation():
            return False
        sheet = self._session.sheet
        if sheet.pronunciation in (PronunciationPhase.RECORDING, PronunciationPhase.ANALYZING):
            return False
        sheet.pronunciation = PronunciationPhase.RECORDING
        sheet.feedback = None
        self._notify()
        return True

    def recording_failed(self, error: RecordingError) -> str:
        """Abort the recording and return the message to show in a blocking alert."""
        logger.warning("Recording failed: %s", error)
        if self._session is not None:
            self._session.sheet.pronunciation = PronunciationPhase.IDLE
        self._notify()
        return MICROPHONE_ERROR_MESSAGE

    def finish_recording(self) -> tuple[str, Language] | None:
        """Mark the sheet as analysing; returns the expected word and language."""
        session = self._session
        if session is None or session.sheet.pronunciation is not PronunciationPhase.RECORDING:
            return None
        question = session.current_question
        if question is None or self._language is None:
            session.sheet.pronunciation = PronunciationPhase.IDLE
            return None
        session.sheet.pronunciation = PronunciationPhase.ANALYZING
        self._notify()
        return question.correct_answer, self._language

    async def evaluate_recording(self, audio: bytes, mime_type: str, word: str, language: Language) -> PronunciationFeedback:
        if self._gemini is None:
            return PronunciationFeedback(score=0, feedback="No se pudo analizar el audio.")
        try:
            return await self._gemini.evaluate_pronunciation(audio, mime_type, word, language)
        except GeminiError as exc:
            logger.warning("Pronunciation evaluation failed: %s", exc)
            return PronunciationFeedback(score=0, feedback="Error de conexión.")

    def apply_pronunciation_feedback(self, feedback: PronunciationFeedback) -> bool:
        """Show the feedback and award the bonus. Returns True when XP was awarded."""
        session = self._session
        if session is None or session.sheet.pronunciation is not PronunciationPhase.ANALYZING:
            return False
        session.sheet.pronunciation = PronunciationPhase.DONE
        session.sheet.feedback = feedback
        awarded = feedback.score > PRONUNCIATION_BONUS_MIN_SCORE
        if awarded:
            self._store.dispatch(
                partial(progression.award_bonus_xp, mode=self._app_mode, amount=PRONUNCIATION_BONUS_XP)
            )
        self._notify()
        return awarded

    def can_play_audio(self) -> bool:
        return self.profile.settings.sound_enabled

    async def fetch_answer_audio(self) -> bytes | None:
        question = self.current_question()
        if self._gemini is None or question is None or self._language is None:
            return None
        try:
            return await self._gemini.synthesize_speech(question.correct_answer, self._language)
        except GeminiError as exc:
            logger.warning("Speech synthesis failed: %s", exc)
            return None

    # --- Results ---

    def share_text(self) -> str:
        score = self._summary.score if self._summary else 0
        return (
            f"¡He conseguido {score} aciertos y he ganado {score * XP_PER_CORRECT} XP "
            f"en {APP_NAME}! 🍻 {SHARE_URL}"
        )

    def _finish_payload(self, session: GameSession) -> dict[str, Any]:
        generation = self._generation
        language = generation.language if generation and generation.language else (
            self._language.value if self._language else "es"
        )
        topic = generation.topic if generation and generation.topic else (
            self._topic.value if self._topic else None
        )
        return {
            "slug": self._quiz_slug,
            "app_mode": self._app_mode.value,
            "language": language,
            "topic": topic,
            "duration_seconds": round(max(0, self._clock() - session.started_at_ms) / 1000),
            "score": round(session.accuracy_percent(), 2),
            "questions": [question.to_wire() for question in _unique(session.deck.questions())],
            "history": [
                {
                    "questionId": entry.question_id,
                    "selectedAnswer": entry.selected_answer,
                    "correctAnswer": entry.correct_answer,
                    "isCorrect": entry.is_correct,
                }
                for entry in session.answers
            ],
            "used_sources": list(generation.used_sources) if generation else [],
        }

    async def submit_results(self) -> str:
        """Send the finished session to the backend and return the status message.

        Only reads the summary; :meth:`set_save_message` publishes the result.
        Returns ``""`` when there is nothing to send or no backend configured.
        """
        summary = self._summary
        if summary is None or self._reporter is None:
            return ""
        try:
            attempt_id = await self._reporter.submit(summary.payload)
        except AttemptSaveError as exc:
            logger.warning("Could not save attempt: %s", exc.detail)
            return SAVE_ERROR_MESSAGE
        return SAVE_OK_TEMPLATE.format(attempt_id=attempt_id)

    async def report_results(self) -> str:
        message = await self.submit_results()
        if message:
            self.set_save_message(message)
        return message

    def set_save_message(self, message: str) -> None:
        if self.state is not GameState.RESULTS:
            return
        self._save_message = message
        self._notify()

    def leave_results(self) -> None:
        self._machine.transition(GameState.PROFILE)

    # --- Profile delegation ---

    def update_identity(self, nickname: str, avatar: str) -> Profile:
        return self._store.dispatch(partial(progression.update_identity, nickname=nickname, avatar=avatar))

    def update_settings(self, **changes: Any) -> Profile:
        return self._store.dispatch(partial(progression.update_settings, **changes))

    def toggle_source(self, mode: AppMode, source_id: str) -> Profile:
        return self._store.dispatch(partial(progression.toggle_quiz_source, mode=mode, source_id=source_id))

    def add_source(self, mode: AppMode, name: str) -> Profile:
        return self._store.dispatch(partial(progression.add_quiz_source, mode=mode, name=name))

    def reset_mode_stats(self, mode: AppMode, confirm: Confirmation) -> bool:
        return self._store.reset_mode_stats(mode, confirm)

    def reset_profile(self, confirm: Confirmation) -> bool:
        if not self._store.reset_profile(confirm):
            return False
        if self.state is GameState.ADMIN:
            self._machine.transition(GameState.PROFILE)
        return True

    # --- Internals ---

    def _on_transition(self, source: GameState, target: GameState) -> None:
        if source is GameState.PLAYING:
            self._sheet_timers.cancel_all()
            self._duel_timer = None
            self._session = None
        if source is GameState.SETUP:
            # A friend who has not connected yet is dropped once the game starts.
            if target is GameState.LOADING and self._challenge.status is ChallengeStatus.CONNECTED:
                self._challenge.cancel()
            else:
                self._challenge.reset()
        if source is GameState.RESULTS:
            self._summary = None
            self._save_message = None
        if target is GameState.PLAYING:
            self._start_duel_timer()
        self._notify()


def _unique(questions: tuple[Question, ...]) -> list[Question]:
    seen: set[int] = set()
    unique: list[Question] = []
    for question in questions:
        if id(question) not in seen:
            seen.add(id(question))
            unique.append(question)
    return unique
