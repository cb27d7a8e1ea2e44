"""Swipe gesture model for the question card stack.

This module is toolkit-independent: the Qt card widget feeds pointer events
into :class:`CardGesture` and paints whatever :meth:`CardGesture.pose` and
:func:`stack_layout` return.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Callable

from cdb_quizz.constants.quiz_constants import (
    CARD_DRAG_ROTATION_FACTOR,
    CARD_HINT_DISTANCE_PX,
    CARD_STACK_WINDOW,
    FLY_DISTANCE_PX,
    FLY_DURATION_MS,
    SWIPE_THRESHOLD_PX,
)
from cdb_quizz.core.models import Difficulty, SwipeDirection
from cdb_quizz.core.services.scheduler import Scheduler, TimerGroup

logger = logging.getLogger(__name__)

CommitCallback = Callable[[SwipeDirection], None]


class CardPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    FLYING = "flying"


@dataclass(frozen=True, slots=True)
class CardPose:
    """Rendering parameters of the top card for the current offset."""

    offset_x: float
    offset_y: float
    rotation: float
    hint_left: float
    hint_right: float
    hint_up: float
    hint_down: float


@dataclass(frozen=True, slots=True)
class StackSlot:
    """Static transform applied to a card below the top of the stack."""

    scale: float
    translate_y: float
    rotation: float
    opacity: float
    z_order: int


@dataclass(frozen=True, slots=True)
class CardContent:
    """Text shown on a card. Every field is empty rather than missing."""

    question_text: str
    difficulty_label: str
    font_size: int


def stack_layout(index: int) -> StackSlot | None:
    """Depth transform for the card at ``index``; ``None`` when not materialised."""
    if index < 0 or index >= CARD_STACK_WINDOW:
        return None
    if index == 0:
        return StackSlot(scale=1.0, translate_y=0.0, rotation=0.0, opacity=1.0, z_order=100)
    return StackSlot(
        scale=max(0.9, 1 - index * 0.05),
        translate_y=12 + index * 6,
        rotation=2.0 if index % 2 == 0 else -2.0,
        opacity=1 - index * 0.3,
        z_order=100 - index,
    )


def classify_swipe(dx: float, dy: float, threshold: float = SWIPE_THRESHOLD_PX) -> SwipeDirection | None:
    """Horizontal displacement wins over vertical; below threshold is no swipe."""
    if dx > threshold:
        return SwipeDirection.RIGHT
    if dx < -threshold:
        return SwipeDirection.LEFT
    if dy < -threshold:
        return SwipeDirection.UP
    if dy > threshold:
        return SwipeDirection.DOWN
    return None


def card_content(question: Any) -> CardContent:
    """Extract display text from a question-like object, tolerating gaps."""
    text = getattr(question, "question_text", None)
    if text is None and isinstance(question, dict):
        text = question.get("questionText") or question.get("text")
    text = str(text or "")

    raw_difficulty = getattr(question, "difficulty", None)
    if raw_difficulty is None and isinstance(question, dict):
        raw_difficulty = question.get("difficulty")
    label = raw_difficulty.label if isinstance(raw_difficulty, Difficulty) else str(raw_difficulty or "")

    length = len(text)
    if length < 30:
        font_size = 28
    elif length < 60:
        font_size = 24
    elif length < 100:
        font_size = 20
    else:
        font_size = 17
    return CardContent(question_text=text, difficulty_label=label, font_size=font_size)


def _fly_offset(direction: SwipeDirection) -> tuple[float, float]:
    if direction is SwipeDirection.LEFT:
        return (-FLY_DISTANCE_PX, 0.0)
    if direction is SwipeDirection.RIGHT:
        return (FLY_DISTANCE_PX, 0.0)
    if direction is SwipeDirection.DOWN:
        return (0.0, FLY_DISTANCE_PX)
    return (0.0, 0.0)


class CardGesture:
    """Drag/commit state of one card in the stack.

    Only the card at stack index 0 reacts to input. Left, right and down fly
    the card off-stage and commit once the fly-off timer fires; up recentres
    the card and commits immediately, since the answer sheet opens over it.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_commit: CommitCallback,
        stack_index: int = 0,
    ) -> None:
        self._timers = TimerGroup(scheduler)
        self._on_commit = on_commit
        self.stack_index = stack_index
        self._phase = CardPhase.IDLE
        self._start = (0.0, 0.0)
        self._offset = (0.0, 0.0)

    @property
    def phase(self) -> CardPhase:
        return self._phase

    @property
    def offset(self) -> tuple[float, float]:
        return self._offset

    @property
    def is_interactive(self) -> bool:
        return self.stack_index == 0 and self._phase is not CardPhase.FLYING

    def pointer_down(self, x: float, y: float) -> bool:
        if not self.is_interactive:
            return False
        self._phase = CardPhase.DRAGGING
        self._start = (x, y)
        self._offset = (0.0, 0.0)
        return True

    def pointer_move(self, x: float, y: float) -> None:
        if self._phase is not CardPhase.DRAGGING:
            return
        self._offset = (x - self._start[0], y - self._start[1])

    def pointer_up(self) -> SwipeDirection | None:
        if self._phase is not CardPhase.DRAGGING:
            return None
        self._phase = CardPhase.IDLE
        direction = classify_swipe(*self._offset)
        if direction is None:
            self._offset = (0.0, 0.0)
            return None
        self._commit(direction)
        return direction

    def trigger(self, direction: SwipeDirection) -> bool:
        """Force a swipe from a button; ignored unless this is the top card."""
        if not self.is_interactive:
            return False
        self._phase = CardPhase.IDLE
        self._commit(direction)
        return True

    def cancel(self) -> None:
        """Drop any pending fly-off without committing."""
        self._timers.cancel_all()
        self._phase = CardPhase.IDLE
        self._offset = (0.0, 0.0)

    def pose(self) -> CardPose:
        x, y = self._offset
        return CardPose(
            offset_x=x,
            offset_y=y,
            rotation=x * CARD_DRAG_ROTATION_FACTOR,
            hint_left=_hint(-x),
            hint_right=_hint(x),
            hint_up=_hint(-y),
            hint_down=_hint(y),
        )

    def _commit(self, direction: SwipeDirection) -> None:
        if direction is SwipeDirection.UP:
            self._offset = (0.0, 0.0)
            self._on_commit(direction)
            return
        self._offset = _fly_offset(direction)
        self._phase = CardPhase.FLYING
        self._timers.call_later(FLY_DURATION_MS, lambda: self._land(direction))

    def _land(self, direction: SwipeDirection) -> None:
        self._phase = CardPhase.IDLE
        logger.debug("Card committed %s", direction.value)
        self._on_commit(direction)


def _hint(distance: float) -> float:
    return max(0.0, min(distance / CARD_HINT_DISTANCE_PX, 1.0))
