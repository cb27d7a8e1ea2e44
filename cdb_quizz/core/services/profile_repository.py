"""Service for reading and writing the persisted profile snapshot."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from cdb_quizz.constants.quiz_constants import PROFILE_SNAPSHOT_KEY
from cdb_quizz.core.catalog import default_profile
from cdb_quizz.core.models import (
    AppMode,
    AppSettings,
    ButtonLayout,
    HistoryEntry,
    Profile,
    QuizSource,
    SourceType,
)
from cdb_quizz.core.progression import level_for_xp

logger = logging.getLogger(__name__)


class ProfileStorageError(Exception):
    """Raised when the profile snapshot cannot be written."""


class ProfileRepository:
    """Stores the whole profile as one JSON document under a named key.

    There are no partial updates: :meth:`save` rewrites the snapshot. Loading
    fills in any field missing from an older snapshot with its default value.
    """

    def __init__(self, storage_dir: Path, key: str = PROFILE_SNAPSHOT_KEY) -> None:
        self._path = Path(storage_dir) / f"{key}.json"

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Profile:
        if not self._path.exists():
            return default_profile()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable profile snapshot %s: %s", self._path, exc)
            return default_profile()
        if not isinstance(raw, dict):
            logger.warning("Ignoring profile snapshot %s: not a JSON object", self._path)
            return default_profile()
        return profile_from_snapshot(raw)

    def save(self, profile: Profile) -> None:
        document = json.dumps(profile_to_snapshot(profile), ensure_ascii=False, indent=2)
        tmp_path = self._path.with_suffix(".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(document, encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            raise ProfileStorageError(f"Could not write profile snapshot to {self._path}") from exc

    def delete(self) -> None:
        self._path.unlink(missing_ok=True)


def profile_to_snapshot(profile: Profile) -> dict[str, Any]:
    return {
        "nickname": profile.nickname,
        "selectedAvatar": profile.selected_avatar,
        "totalCorrect": profile.total_correct,
        "totalTimeSeconds": profile.total_time_seconds,
        "xp": profile.xp,
        "level": profile.level,
        "badges": list(profile.badges),
        "history": [_history_to_dict(entry) for entry in profile.history],
        "xpBreakdown": {mode.value: xp for mode, xp in profile.xp_breakdown.items()},
        "settings": {
            "soundEnabled": profile.settings.sound_enabled,
            "backgroundColor": profile.settings.background_color,
            "buttonLayout": profile.settings.button_layout.value,
            "cardBorderRadius": profile.settings.card_border_radius,
        },
        "quizSources": {
            mode.value: [_source_to_dict(source) for source in sources]
            for mode, sources in profile.quiz_sources.items()
        },
    }


def profile_from_snapshot(data: Mapping[str, Any]) -> Profile:
    """Build a profile from a snapshot, replacing mistyped fields with defaults."""
    defaults = default_profile()
    xp = _as_int(data.get("xp"), defaults.xp)

    history = tuple(
        entry
        for entry in (_history_from_dict(item) for item in _as_list(data.get("history")) if isinstance(item, dict))
        if entry is not None
    )

    breakdown: dict[AppMode, int] = {}
    breakdown_raw = data.get("xpBreakdown")
    for key, value in (breakdown_raw.items() if isinstance(breakdown_raw, dict) else ()):
        try:
            breakdown[AppMode.parse(key)] = int(value)
        except (TypeError, ValueError):
            logger.debug("Dropping XP breakdown entry %r", key)

    sources_raw = data.get("quizSources")
    if isinstance(sources_raw, dict) and sources_raw:
        quiz_sources: dict[AppMode, tuple[QuizSource, ...]] = {}
        for key, items in sources_raw.items():
            try:
                mode = AppMode.parse(key)
            except ValueError:
                continue
            quiz_sources[mode] = tuple(_source_from_dict(item) for item in _as_list(items) if isinstance(item, dict))
    else:
        quiz_sources = dict(defaults.quiz_sources)

    return Profile(
        nickname=_as_str(data.get("nickname"), defaults.nickname),
        selected_avatar=_as_str(data.get("selectedAvatar"), defaults.selected_avatar),
        total_correct=_as_int(data.get("totalCorrect"), 0),
        total_time_seconds=_as_float(data.get("totalTimeSeconds"), 0.0),
        xp=xp,
        level=level_for_xp(xp),
        badges=tuple(str(badge) for badge in _as_list(data.get("badges"))),
        history=history,
        xp_breakdown=breakdown,
        settings=_settings_from_dict(data.get("settings"), defaults.settings),
        quiz_sources=quiz_sources,
    )


def _as_int(value: object, default: int) -> int:
    if isinstance(value, bool) or value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: object, default: float) -> float:
    if isinstance(value, bool) or value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_str(value: object, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def _as_list(value: object) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _history_to_dict(entry: HistoryEntry) -> dict[str, Any]:
    return {
        "questionId": entry.question_id,
        "questionText": entry.question_text,
        "selectedAnswer": entry.selected_answer,
        "correctAnswer": entry.correct_answer,
        "isCorrect": entry.is_correct,
        "timestamp": entry.timestamp,
        "mode": entry.mode.value,
    }


def _history_from_dict(item: Mapping[str, Any]) -> HistoryEntry | None:
    try:
        mode = AppMode.parse(item.get("mode"), default=AppMode.CULTURA)
        return HistoryEntry(
            question_id=str(item.get("questionId", "")),
            question_text=str(item.get("questionText", "")),
            selected_answer=str(item.get("selectedAnswer", "")),
            correct_answer=str(item.get("correctAnswer", "")),
            is_correct=bool(item.get("isCorrect", False)),
            timestamp=int(item.get("timestamp", 0) or 0),
            mode=mode,
        )
    except (TypeError, ValueError):
        return None


def _source_to_dict(source: QuizSource) -> dict[str, Any]:
    return {"id": source.id, "name": source.name, "type": source.type.value, "enabled": source.enabled}


def _source_from_dict(item: Mapping[str, Any]) -> QuizSource:
    try:
        source_type = SourceType(item.get("type", SourceType.MANUAL.value))
    except ValueError:
        source_type = SourceType.MANUAL
    return QuizSource(
        id=str(item.get("id", "")),
        name=str(item.get("name", "")),
        type=source_type,
        enabled=bool(item.get("enabled", True)),
    )


def _settings_from_dict(raw: object, defaults: AppSettings) -> AppSettings:
    if not isinstance(raw, dict):
        return defaults
    try:
        layout = ButtonLayout(raw.get("buttonLayout", defaults.button_layout.value))
    except ValueError:
        layout = defaults.button_layout
    return AppSettings(
        sound_enabled=bool(raw.get("soundEnabled", defaults.sound_enabled)),
        background_color=str(raw.get("backgroundColor") or defaults.background_color),
        button_layout=layout,
        card_border_radius=_as_int(raw.get("cardBorderRadius"), defaults.card_border_radius),
    )
