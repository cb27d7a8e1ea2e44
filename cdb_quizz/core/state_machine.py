"""View-state machine for the quiz client."""

from __future__ import annotations

from enum import Enum
import logging
from types import MappingProxyType
from typing import Callable

from cdb_quizz.core.services.scheduler import Scheduler, TimerGroup

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    INTRO = "intro"
    PROFILE = "profile"
    MENU = "menu"
    SETUP = "setup"
    LOADING = "loading"
    PLAYING = "playing"
    RESULTS = "results"
    LEADERBOARD = "leaderboard"
    HISTORY = "history"
    ADMIN = "admin"


ALLOWED_TRANSITIONS = MappingProxyType({
    GameState.INTRO: frozenset({GameState.PROFILE}),
    GameState.PROFILE: frozenset({
        GameState.MENU,
        GameState.SETUP,
        GameState.LEADERBOARD,
        GameState.HISTORY,
        GameState.ADMIN,
    }),
    GameState.MENU: frozenset({GameState.PROFILE}),
    GameState.SETUP: frozenset({GameState.LOADING, GameState.PROFILE}),
    GameState.LOADING: frozenset({GameState.PLAYING}),
    GameState.PLAYING: frozenset({GameState.RESULTS, GameState.PROFILE}),
    GameState.RESULTS: frozenset({GameState.PROFILE}),
    GameState.LEADERBOARD: frozenset({GameState.PROFILE}),
    GameState.HISTORY: frozenset({GameState.PROFILE}),
    GameState.ADMIN: frozenset({GameState.PROFILE}),
})

TransitionListener = Callable[[GameState, GameState], None]


class IllegalTransitionError(Exception):
    """Raised when a transition is not listed in :data:`ALLOWED_TRANSITIONS`."""

    def __init__(self, source: GameState, target: GameState) -> None:
        super().__init__(f"Illegal transition {source.value} -> {target.value}")
        self.source = source
        self.target = target


class ViewStateMachine:
    """Tracks the current view state and owns the timers of that state.

    Every state gets a fresh :class:`TimerGroup`; the group is cancelled before
    the machine moves on, so callbacks scheduled while in a state can never
    run after the state has been left.
    """

    def __init__(self, scheduler: Scheduler, initial: GameState = GameState.INTRO) -> None:
        self._scheduler = scheduler
        self._state = initial
        self._timers = TimerGroup(scheduler)
        self._listeners: list[TransitionListener] = []

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def timers(self) -> TimerGroup:
        """Timers owned by the current state."""
        return self._timers

    def can_transition(self, target: GameState) -> bool:
        return target in ALLOWED_TRANSITIONS[self._state]

    def transition(self, target: GameState) -> None:
        if not self.can_transition(target):
            raise IllegalTransitionError(self._state, target)
        source = self._state
        self._timers.cancel_all()
        self._timers = TimerGroup(self._scheduler)
        self._state = target
        logger.debug("View state %s -> %s", source.value, target.value)
        for listener in list(self._listeners):
            listener(source, target)

    def add_listener(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: TransitionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
