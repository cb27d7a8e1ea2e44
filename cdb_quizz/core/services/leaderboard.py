"""Service for building the leaderboard rankings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from cdb_quizz.constants.ui_constants import GLOBAL_LEADERBOARD_TAB
from cdb_quizz.core.catalog import MOCK_LEADERBOARD
from cdb_quizz.core.models import AppMode, LeaderboardEntry, Profile


@dataclass(slots=True)
class LeaderboardRow:
    """Immutable snapshot returned to consumers."""

    rank: int
    nickname: str
    xp: int
    level: int
    is_user: bool


class Leaderboard:
    """Ranks the local user against a fixed set of reference players."""

    def __init__(self, entries: Iterable[LeaderboardEntry] = MOCK_LEADERBOARD) -> None:
        self._entries = tuple(entries)

    def rows(self, profile: Profile, tab: AppMode | str = GLOBAL_LEADERBOARD_TAB) -> list[LeaderboardRow]:
        """Return every entry plus the user, sorted by global or per-mode XP."""
        mode = None if tab == GLOBAL_LEADERBOARD_TAB else AppMode.parse(tab)
        user = LeaderboardEntry(
            nickname=profile.nickname,
            xp=profile.xp,
            level=profile.level,
            is_user=True,
            xp_breakdown=dict(profile.xp_breakdown),
        )

        def score(entry: LeaderboardEntry) -> int:
            if mode is None:
                return entry.xp
            return entry.xp_breakdown.get(mode, 0)

        ranked = sorted((*self._entries, user), key=score, reverse=True)
        return [
            LeaderboardRow(
                rank=position,
                nickname=entry.nickname,
                xp=score(entry),
                level=entry.level,
                is_user=entry.is_user,
            )
            for position, entry in enumerate(ranked, start=1)
        ]

    def user_rank(self, profile: Profile, tab: AppMode | str = GLOBAL_LEADERBOARD_TAB) -> int:
        return next(row.rank for row in self.rows(profile, tab) if row.is_user)
