"""Service for managing the active quiz session and answer sheet state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from cdb_quizz.core.models import HistoryEntry, PronunciationFeedback, Question
from cdb_quizz.core.services.deck import Deck


class RecordingError(Exception):
    """Raised when the microphone is denied or unavailable."""


class AnswerOutcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


class PronunciationPhase(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    ANALYZING = "analyzing"
    DONE = "done"


@dataclass(slots=True)
class AnswerSheet:
    """Per-question modal state, reset whenever a card is resolved."""

    open: bool = False
    elapsed_deciseconds: int = 0
    selected_answer: str | None = None
    outcome: AnswerOutcome | None = None
    exiting: bool = False
    pronunciation: PronunciationPhase = PronunciationPhase.IDLE
    feedback: PronunciationFeedback | None = None

    @property
    def revealed(self) -> bool:
        return self.outcome is not None

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_deciseconds / 10


@dataclass(slots=True)
class GameSession:
    """State of one played deck: scoring, the answer sheet and the duel opponent."""

    deck: Deck
    score: int = 0
    answered: int = 0
    opponent_score: int = 0
    opponent_last_score_ms: int | None = None
    started_at_ms: int = 0
    sheet: AnswerSheet = field(default_factory=AnswerSheet)
    answers: list[HistoryEntry] = field(default_factory=list)

    @classmethod
    def start(cls, questions: Iterable[Question], started_at_ms: int = 0) -> "GameSession":
        return cls(deck=Deck(questions), started_at_ms=started_at_ms)

    @property
    def current_question(self) -> Question | None:
        return self.deck.current

    def is_complete(self) -> bool:
        return self.deck.is_exhausted()

    def open_sheet(self) -> None:
        self.sheet = AnswerSheet(open=True)

    def tick(self) -> None:
        if self.sheet.open and not self.sheet.revealed:
            self.sheet.elapsed_deciseconds += 1

    def record_answer(self, entry: HistoryEntry) -> None:
        """Reveal the sheet for ``entry``. Only the first answer per card counts."""
        self.sheet.selected_answer = entry.selected_answer
        self.sheet.outcome = AnswerOutcome.CORRECT if entry.is_correct else AnswerOutcome.INCORRECT
        self.answered += 1
        if entry.is_correct:
            self.score += 1
        self.answers.append(entry)

    def close_sheet(self) -> None:
        self.sheet = AnswerSheet()

    def record_opponent_hit(self, now_ms: int) -> None:
        self.opponent_score += 1
        self.opponent_last_score_ms = now_ms

    def accuracy_percent(self) -> float:
        distinct = self.deck.distinct_count()
        if distinct == 0:
            return 0.0
        return self.score / distinct * 100
