"""Pure progression rules: XP, levels, badges, history and quiz sources.

Every function takes a :class:`Profile` and returns a new one; nothing here
mutates its input or touches storage. :class:`ProfileStore` applies these as
commands and persists the result.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable
from uuid import uuid4

from cdb_quizz.constants.quiz_constants import (
    HISTORY_LIMIT,
    NICKNAME_MAX_LENGTH,
    XP_PER_CORRECT,
    XP_PER_INCORRECT,
    XP_PER_LEVEL,
)
from cdb_quizz.core.catalog import AVATARS, BADGES, TOPIC_LEVEL_LOCKS, default_profile
from cdb_quizz.core.models import (
    AppMode,
    AppSettings,
    Avatar,
    HistoryEntry,
    Profile,
    Question,
    QuizSource,
    SourceType,
    Topic,
)


def level_for_xp(xp: int) -> int:
    """Level is ``floor(xp / 500) + 1``; negative XP is treated as zero."""
    return max(0, xp) // XP_PER_LEVEL + 1


def level_progress(xp: int) -> float:
    """Fraction (0..1) of the way from the current level to the next."""
    return (max(0, xp) % XP_PER_LEVEL) / XP_PER_LEVEL


def xp_for_answer(is_correct: bool) -> int:
    return XP_PER_CORRECT if is_correct else XP_PER_INCORRECT


def _with_mode_xp(profile: Profile, mode: AppMode, gained: int) -> Profile:
    breakdown = dict(profile.xp_breakdown)
    breakdown[mode] = breakdown.get(mode, 0) + gained
    new_xp = profile.xp + gained
    return replace(profile, xp=new_xp, level=level_for_xp(new_xp), xp_breakdown=breakdown)


def history_entry_for(
    question: Question,
    selected_option: str,
    mode: AppMode,
    timestamp_ms: int,
) -> HistoryEntry:
    return HistoryEntry(
        question_id=question.id,
        question_text=question.question_text,
        selected_answer=selected_option,
        correct_answer=question.correct_answer,
        is_correct=question.is_correct(selected_option),
        timestamp=timestamp_ms,
        mode=mode,
    )


def add_answer_result(
    profile: Profile,
    question: Question,
    selected_option: str,
    mode: AppMode,
    elapsed_seconds: float,
    timestamp_ms: int,
) -> Profile:
    """Record one answered question: XP, level, history, totals."""
    entry = history_entry_for(question, selected_option, mode, timestamp_ms)
    is_correct = entry.is_correct
    updated = _with_mode_xp(profile, mode, xp_for_answer(is_correct))
    return replace(
        updated,
        total_correct=profile.total_correct + (1 if is_correct else 0),
        total_time_seconds=profile.total_time_seconds + max(0.0, elapsed_seconds),
        history=(profile.history + (entry,))[-HISTORY_LIMIT:],
    )


def award_bonus_xp(profile: Profile, mode: AppMode, amount: int) -> Profile:
    if amount <= 0:
        return profile
    return _with_mode_xp(profile, mode, amount)


def recompute_badges(profile: Profile) -> Profile:
    """Unlock every badge whose level threshold has been reached. Never revokes."""
    unlocked = list(profile.badges)
    for badge in BADGES:
        if profile.level >= badge.unlocked_at_level and badge.id not in unlocked:
            unlocked.append(badge.id)
    if len(unlocked) == len(profile.badges):
        return profile
    return replace(profile, badges=tuple(unlocked))


def reset_mode_stats(profile: Profile, mode: AppMode) -> Profile:
    """Remove one mode's XP and history. Badges and other modes are untouched."""
    new_xp = max(0, profile.xp - profile.mode_xp(mode))
    breakdown = {key: value for key, value in profile.xp_breakdown.items() if key != mode}
    return replace(
        profile,
        xp=new_xp,
        level=level_for_xp(new_xp),
        history=tuple(entry for entry in profile.history if entry.mode != mode),
        xp_breakdown=breakdown,
    )


def reset_profile(_profile: Profile | None = None) -> Profile:
    return default_profile()


def _replace_sources(profile: Profile, mode: AppMode, sources: Iterable[QuizSource]) -> Profile:
    quiz_sources = dict(profile.quiz_sources)
    quiz_sources[mode] = tuple(sources)
    return replace(profile, quiz_sources=quiz_sources)


def toggle_quiz_source(profile: Profile, mode: AppMode, source_id: str) -> Profile:
    sources = [
        replace(source, enabled=not source.enabled) if source.id == source_id else source
        for source in profile.sources_for(mode)
    ]
    return _replace_sources(profile, mode, sources)


def add_quiz_source(profile: Profile, mode: AppMode, name: str) -> Profile:
    """Append a manually entered source. Blank names are ignored."""
    cleaned = name.strip()
    if not cleaned:
        return profile
    source = QuizSource(id=f"src_manual_{uuid4().hex[:10]}", name=cleaned, type=SourceType.MANUAL)
    return _replace_sources(profile, mode, profile.sources_for(mode) + (source,))


def merge_discovered_sources(profile: Profile, mode: AppMode, names: Iterable[str]) -> Profile:
    """Append sources reported by the generator that are not known yet.

    Names are matched case-insensitively against existing entries (and against
    each other); existing entries keep their enabled flag.
    """
    current = profile.sources_for(mode)
    known = {source.name.lower() for source in current}
    added: list[QuizSource] = []
    for raw_name in names:
        name = str(raw_name).strip()
        if not name or name.lower() in known:
            continue
        known.add(name.lower())
        added.append(QuizSource(id=f"src_ai_{uuid4().hex[:10]}", name=name, type=SourceType.API))
    if not added:
        return profile
    return _replace_sources(profile, mode, current + tuple(added))


def unlocked_avatars(level: int) -> list[Avatar]:
    return [avatar for avatar in AVATARS if avatar.level <= level]


def is_topic_locked(topic: Topic, level: int) -> bool:
    required = TOPIC_LEVEL_LOCKS.get(topic)
    return required is not None and level < required


def update_identity(profile: Profile, nickname: str, avatar: str) -> Profile:
    cleaned = nickname.strip()
    if not cleaned:
        raise ValueError("Nickname must not be empty.")
    if avatar not in {item.icon for item in unlocked_avatars(profile.level)}:
        raise ValueError(f"Avatar {avatar!r} is not unlocked at level {profile.level}.")
    return replace(profile, nickname=cleaned[:NICKNAME_MAX_LENGTH], selected_avatar=avatar)


def update_settings(profile: Profile, **changes: object) -> Profile:
    settings: AppSettings = replace(profile.settings, **changes)
    return replace(profile, settings=settings)
