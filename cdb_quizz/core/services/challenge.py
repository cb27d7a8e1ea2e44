"""Service for the "challenge a friend" countdown."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Callable
from urllib.parse import quote

from cdb_quizz.constants.about import CHALLENGE_SHARE_TEXT, CHALLENGE_SHARE_URL_TEMPLATE
from cdb_quizz.constants.quiz_constants import (
    CHALLENGE_CONNECT_DELAY_MS,
    CHALLENGE_COUNTDOWN_SECONDS,
    CHALLENGE_TICK_MS,
)
from cdb_quizz.core.catalog import FRIEND_OPPONENT
from cdb_quizz.core.models import Opponent
from cdb_quizz.core.services.scheduler import Scheduler, TimerGroup

logger = logging.getLogger(__name__)


class ChallengeStatus(str, Enum):
    IDLE = "idle"
    COUNTING = "counting"
    CONNECTED = "connected"
    EXPIRED = "expired"


class FriendChallenge:
    """Countdown waiting for an invited friend.

    ``start()`` opens a 30 second window. Sending the invite hands a share URL
    to ``open_url`` and, after a fixed delay, marks the challenge connected and
    reports the friend opponent through ``on_connected``. Once expired the
    challenge stays expired until :meth:`reset`.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        open_url: Callable[[str], None],
        on_connected: Callable[[Opponent], None],
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._timers = TimerGroup(scheduler)
        self._open_url = open_url
        self._on_connected = on_connected
        self._on_change = on_change
        self._status = ChallengeStatus.IDLE
        self._seconds_left = CHALLENGE_COUNTDOWN_SECONDS

    @property
    def status(self) -> ChallengeStatus:
        return self._status

    @property
    def seconds_left(self) -> int:
        return self._seconds_left

    def start(self) -> bool:
        if self._status is not ChallengeStatus.IDLE:
            return False
        self._status = ChallengeStatus.COUNTING
        self._seconds_left = CHALLENGE_COUNTDOWN_SECONDS
        self._timers.call_every(CHALLENGE_TICK_MS, self._tick)
        self._notify()
        return True

    def send_invite(self) -> str | None:
        """Open the share URL and schedule the simulated connection."""
        if self._status is not ChallengeStatus.COUNTING:
            return None
        url = share_url(CHALLENGE_SHARE_TEXT)
        self._open_url(url)
        self._timers.call_later(CHALLENGE_CONNECT_DELAY_MS, self._connect)
        return url

    def reset(self) -> None:
        self._timers.cancel_all()
        self._status = ChallengeStatus.IDLE
        self._seconds_left = CHALLENGE_COUNTDOWN_SECONDS
        self._notify()

    def cancel(self) -> None:
        """Stop pending timers without changing the status."""
        self._timers.cancel_all()

    def _tick(self) -> None:
        if self._status is not ChallengeStatus.COUNTING:
            return
        if self._seconds_left <= 1:
            self._seconds_left = 0
            self._status = ChallengeStatus.EXPIRED
            self._timers.cancel_all()
            logger.info("Friend challenge expired")
        else:
            self._seconds_left -= 1
        self._notify()

    def _connect(self) -> None:
        if self._status is not ChallengeStatus.COUNTING:
            return
        self._timers.cancel_all()
        self._status = ChallengeStatus.CONNECTED
        logger.info("Friend challenge connected")
        self._on_connected(FRIEND_OPPONENT)
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


def share_url(text: str) -> str:
    return CHALLENGE_SHARE_URL_TEMPLATE.format(text=quote(text, safe=""))
