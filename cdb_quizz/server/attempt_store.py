"""SQLite storage for quiz definitions and finished attempts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import json
import logging
from pathlib import Path
from typing import Any, Sequence

import aiosqlite

from cdb_quizz.constants.network_constants import DEFAULT_QUIZ_SLUG

logger = logging.getLogger(__name__)

CREATE_SQL = """
CREATE TABLE IF NOT EXISTS quiz_definitions (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    slug             TEXT    NOT NULL UNIQUE,
    title            TEXT    NOT NULL,
    description      TEXT    DEFAULT '',
    app_mode         TEXT    NOT NULL,
    default_language TEXT,
    default_topic    TEXT,
    max_questions    INTEGER NOT NULL DEFAULT 10,
    active           INTEGER NOT NULL DEFAULT 1,
    created_at       TEXT    NOT NULL,
    updated_at       TEXT    NOT NULL
);
CREATE TABLE IF NOT EXISTS attempts (
    id                 INTEGER PRIMARY KEY AUTOINCREMENT,
    quiz_definition_id INTEGER NOT NULL,
    app_mode           TEXT    NOT NULL,
    language           TEXT,
    topic              TEXT,
    questions_payload  TEXT,
    history            TEXT,
    used_sources       TEXT,
    score              REAL,
    duration_seconds   INTEGER,
    completed          INTEGER NOT NULL DEFAULT 0,
    created_at         TEXT    NOT NULL,
    updated_at         TEXT    NOT NULL
);
"""


@dataclass(frozen=True, slots=True)
class QuizDefinition:
    id: int
    slug: str
    title: str
    app_mode: str
    default_language: str | None
    default_topic: str | None
    max_questions: int


@dataclass(frozen=True, slots=True)
class AttemptRecord:
    id: int
    quiz_definition_id: int
    app_mode: str
    language: str | None
    topic: str | None
    questions: list[Any]
    history: list[Any]
    used_sources: list[str]
    score: float | None
    duration_seconds: int | None
    completed: bool


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


class AttemptStore:
    """Async repository over one SQLite file. Tables are created on first use."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._ready = False

    async def init(self) -> None:
        if self._ready:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(self.path) as db:
            await db.executescript(CREATE_SQL)
            now = _timestamp()
            await db.execute(
                """INSERT OR IGNORE INTO quiz_definitions
                   (slug, title, description, app_mode, default_language, default_topic,
                    max_questions, created_at, updated_at)
                   VALUES (?,?,?,?,?,?,?,?,?)""",
                (DEFAULT_QUIZ_SLUG, "Cultura de Bar", "Historia de los bares", "CULTURA", "es", None, 10, now, now),
            )
            await db.commit()
        self._ready = True
        logger.info("Attempt store ready at %s", self.path)

    async def add_definition(
        self,
        slug: str,
        title: str,
        app_mode: str,
        default_language: str | None = None,
        default_topic: str | None = None,
        max_questions: int = 10,
    ) -> int:
        await self.init()
        now = _timestamp()
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(
                """INSERT INTO quiz_definitions
                   (slug, title, app_mode, default_language, default_topic, max_questions, created_at, updated_at)
                   VALUES (?,?,?,?,?,?,?,?)""",
                (slug, title, app_mode, default_language, default_topic, max_questions, now, now),
            )
            await db.commit()
            return cursor.lastrowid

    async def get_definition(self, slug: str | None) -> QuizDefinition | None:
        if not slug:
            return None
        await self.init()
        async with aiosqlite.connect(self.path) as db:
            async with db.execute(
                """SELECT id, slug, title, app_mode, default_language, default_topic, max_questions
                   FROM quiz_definitions WHERE slug = ? AND active = 1 LIMIT 1""",
                (slug,),
            ) as cursor:
                row = await cursor.fetchone()
        if row is None:
            return None
        return QuizDefinition(*row)

    async def insert_attempt(
        self,
        slug: str | None,
        app_mode: str | None,
        language: str | None,
        topic: str | None,
        questions: Sequence[Any],
        history: Sequence[Any],
        score: float | None,
        duration_seconds: int | None,
        used_sources: Sequence[str] = (),
    ) -> int:
        await self.init()
        definition = await self.get_definition(slug)
        now = _timestamp()
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(
                """INSERT INTO attempts
                   (quiz_definition_id, app_mode, language, topic, questions_payload, history,
                    used_sources, score, duration_seconds, completed, created_at, updated_at)
                   VALUES (?,?,?,?,?,?,?,?,?,?,?,?)""",
                (
                    definition.id if definition else 0,
                    app_mode or "CULTURA",
                    language,
                    topic,
                    json.dumps(list(questions), ensure_ascii=False),
                    json.dumps(list(history), ensure_ascii=False),
                    json.dumps(list(used_sources), ensure_ascii=False),
                    score,
                    duration_seconds,
                    1,
                    now,
                    now,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get_attempt(self, attempt_id: int) -> AttemptRecord | None:
        await self.init()
        async with aiosqlite.connect(self.path) as db:
            async with db.execute(
                """SELECT id, quiz_definition_id, app_mode, language, topic, questions_payload, history,
                          used_sources, score, duration_seconds, completed
                   FROM attempts WHERE id = ?""",
                (attempt_id,),
            ) as cursor:
                row = await cursor.fetchone()
        if row is None:
            return None
        return AttemptRecord(
            id=row[0],
            quiz_definition_id=row[1],
            app_mode=row[2],
            language=row[3],
            topic=row[4],
            questions=json.loads(row[5] or "[]"),
            history=json.loads(row[6] or "[]"),
            used_sources=json.loads(row[7] or "[]"),
            score=row[8],
            duration_seconds=row[9],
            completed=bool(row[10]),
        )
