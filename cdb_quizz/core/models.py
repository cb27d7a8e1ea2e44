"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class Difficulty(str, Enum):
    """Question difficulty as sent over the wire."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def label(self) -> str:
        return _DIFFICULTY_LABELS[self]

    @classmethod
    def parse(cls, value: object) -> "Difficulty":
        """Accept wire values and the localized labels; anything else is medium."""
        text = str(value or "").strip().lower()
        for difficulty, label in _DIFFICULTY_LABELS.items():
            if text in (difficulty.value, label.lower()):
                return difficulty
        return cls.MEDIUM


_DIFFICULTY_LABELS = {
    Difficulty.EASY: "Fácil",
    Difficulty.MEDIUM: "Medio",
    Difficulty.HARD: "Difícil",
}


class AppMode(str, Enum):
    """Quiz families offered by the application."""

    IDIOMAS = "IDIOMAS"
    CERVEZA = "CERVEZA"
    VINO = "VINO"
    L43 = "L43"
    CULTURA = "CULTURA"
    LEGAL = "LEGAL"

    @property
    def label(self) -> str:
        return _APP_MODE_LABELS[self]

    @property
    def is_language_learning(self) -> bool:
        return self is AppMode.IDIOMAS

    @classmethod
    def parse(cls, value: object, default: "AppMode | None" = None) -> "AppMode":
        text = str(value or "").strip()
        for mode, label in _APP_MODE_LABELS.items():
            if text in (mode.value, label):
                return mode
        if default is not None:
            return default
        raise ValueError(f"Unknown quiz mode: {value!r}")


_APP_MODE_LABELS = {
    AppMode.IDIOMAS: "CdB_ Idiomas",
    AppMode.CERVEZA: "CdB_ Cerveza",
    AppMode.VINO: "CdB_ Vino",
    AppMode.L43: "CdB_ L43",
    AppMode.CULTURA: "CdB_ Cultura de Bar",
    AppMode.LEGAL: "CdB_ Legal",
}


class Language(str, Enum):
    ENGLISH = "Inglés"
    FRENCH = "Francés"


class Topic(str, Enum):
    INGREDIENTS = "Ingredientes"
    DISHES = "Platos Típicos"
    MEAT = "Carnes"
    FISH = "Pescados y Mariscos"
    DRINKS = "Bebidas, Vinos y Cervezas"
    SERVICE = "Atención al Cliente"
    UTENSILS = "Utensilios y Menaje"


class GameMode(str, Enum):
    SOLO = "SOLO"
    DUEL = "DUEL"


class SwipeDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class SourceType(str, Enum):
    API = "API"
    DATABASE = "Database"
    MANUAL = "Manual"


class ButtonLayout(str, Enum):
    STANDARD = "standard"
    SPREAD = "spread"
    COMPACT = "compact"


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question. The correct answer is matched by exact text."""

    id: str
    question_text: str
    options: tuple[str, ...]
    correct_answer: str
    explanation: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    tags: tuple[str, ...] = ()

    def is_correct(self, selected_option: str) -> bool:
        return selected_option == self.correct_answer

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "questionText": self.question_text,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
            "difficulty": self.difficulty.value,
        }
        if self.tags:
            payload["tags"] = list(self.tags)
        return payload

    @classmethod
    def from_wire(cls, data: Mapping[str, Any], index: int = 0) -> "Question":
        """Build a question from a loosely-shaped JSON record.

        Missing ids become ``q{index + 1}`` and a bare ``text`` key is accepted in
        place of ``questionText``. Values are coerced to strings; nothing is
        validated beyond that.
        """
        raw_options = data.get("options")
        options = tuple(str(option) for option in raw_options) if isinstance(raw_options, list) else ()
        raw_tags = data.get("tags")
        tags = tuple(str(tag) for tag in raw_tags) if isinstance(raw_tags, list) else ()
        text = data.get("questionText", data.get("text", ""))
        return cls(
            id=str(data.get("id") or f"q{index + 1}"),
            question_text=str(text or ""),
            options=options,
            correct_answer=str(data.get("correctAnswer") or ""),
            explanation=str(data.get("explanation") or ""),
            difficulty=Difficulty.parse(data.get("difficulty")),
            tags=tags,
        )


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Immutable log record for one answered question."""

    question_id: str
    question_text: str
    selected_answer: str
    correct_answer: str
    is_correct: bool
    timestamp: int  # epoch milliseconds
    mode: AppMode


@dataclass(frozen=True, slots=True)
class QuizSource:
    """Named, toggleable provenance tag shown for a quiz mode."""

    id: str
    name: str
    type: SourceType
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class AppSettings:
    sound_enabled: bool = True
    background_color: str = "#FAF8EE"
    button_layout: ButtonLayout = ButtonLayout.STANDARD
    card_border_radius: int = 24


@dataclass(frozen=True, slots=True)
class Profile:
    """Snapshot of everything persisted for the local user."""

    nickname: str = "CamareroNovato"
    selected_avatar: str = "🥚"
    total_correct: int = 0
    total_time_seconds: float = 0.0
    xp: int = 0
    level: int = 1
    badges: tuple[str, ...] = ()
    history: tuple[HistoryEntry, ...] = ()
    xp_breakdown: Mapping[AppMode, int] = field(default_factory=dict)
    settings: AppSettings = field(default_factory=AppSettings)
    quiz_sources: Mapping[AppMode, tuple[QuizSource, ...]] = field(default_factory=dict)

    def mode_xp(self, mode: AppMode) -> int:
        return self.xp_breakdown.get(mode, 0)

    def sources_for(self, mode: AppMode) -> tuple[QuizSource, ...]:
        return tuple(self.quiz_sources.get(mode, ()))

    def enabled_source_names(self, mode: AppMode) -> list[str]:
        return [source.name for source in self.sources_for(mode) if source.enabled]


@dataclass(frozen=True, slots=True)
class Badge:
    id: str
    icon: str
    name: str
    description: str
    unlocked_at_level: int


@dataclass(frozen=True, slots=True)
class Avatar:
    icon: str
    level: int


@dataclass(frozen=True, slots=True)
class Opponent:
    """Simulated duel opponent; ``speed_ms`` is the interval between scoring attempts."""

    name: str
    avatar: str
    difficulty: str
    speed_ms: int


@dataclass(frozen=True, slots=True)
class PronunciationFeedback:
    score: float
    feedback: str


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    nickname: str
    xp: int
    level: int
    is_user: bool = False
    xp_breakdown: Mapping[AppMode, int] = field(default_factory=dict)
