"""Single owner of the current profile.

All mutations go through :meth:`ProfileStore.dispatch` with a pure command
(``Profile -> Profile``). The store recomputes badges, writes the whole
snapshot through the repository, then notifies listeners. Dispatches are
serialised by a lock so a background thread can never interleave with the UI.
"""

from __future__ import annotations

from functools import partial
import logging
from threading import RLock
from typing import Callable

from cdb_quizz.core import progression
from cdb_quizz.core.models import AppMode, Profile
from cdb_quizz.core.services.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

ProfileCommand = Callable[[Profile], Profile]
ProfileListener = Callable[[Profile], None]
Confirmation = Callable[[], bool]


class ProfileStore:
    def __init__(self, repository: ProfileRepository, initial: Profile | None = None) -> None:
        self._repository = repository
        self._lock = RLock()
        self._listeners: list[ProfileListener] = []
        loaded = initial if initial is not None else repository.load()
        self._profile = progression.recompute_badges(loaded)

    @property
    def profile(self) -> Profile:
        with self._lock:
            return self._profile

    def dispatch(self, command: ProfileCommand) -> Profile:
        with self._lock:
            updated = progression.recompute_badges(command(self._profile))
            if updated is self._profile:
                return updated
            self._repository.save(updated)
            self._profile = updated
            listeners = list(self._listeners)
        for listener in listeners:
            listener(updated)
        return updated

    def add_listener(self, listener: ProfileListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ProfileListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def reset_profile(self, confirm: Confirmation) -> bool:
        """Replace the profile with the defaults once ``confirm`` agrees."""
        if not confirm():
            return False
        logger.info("Resetting the whole profile")
        self.dispatch(progression.reset_profile)
        return True

    def reset_mode_stats(self, mode: AppMode, confirm: Confirmation) -> bool:
        if not confirm():
            return False
        logger.info("Resetting statistics for %s", mode.value)
        self.dispatch(partial(progression.reset_mode_stats, mode=mode))
        return True
