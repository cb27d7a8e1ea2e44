"""FastAPI server exposing the ``cdb-quizz/v1`` endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
import logging
from threading import Thread
from typing import Any

import aiosqlite
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field
import uvicorn

from cdb_quizz.constants.about import APP_NAME, APP_VERSION
from cdb_quizz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT, REST_NAMESPACE
from cdb_quizz.core import prompts
from cdb_quizz.core.services.gemini_client import GeminiClient, GeminiError
from cdb_quizz.server.attempt_store import AttemptStore, QuizDefinition

logger = logging.getLogger(__name__)

MOCK_QUESTIONS: list[dict[str, Any]] = [
    {
        "id": "q1",
        "questionText": "What is the capital of France?",
        "options": ["Paris", "Berlin", "Madrid", "Rome"],
        "correctAnswer": "Paris",
        "explanation": "Paris is the capital and most populous city of France.",
        "difficulty": "easy",
    },
    {
        "id": "q2",
        "questionText": "Which planet is known as the Red Planet?",
        "options": ["Earth", "Mars", "Jupiter", "Saturn"],
        "correctAnswer": "Mars",
        "explanation": "Mars is often called the “Red Planet” because of its reddish appearance.",
        "difficulty": "medium",
    },
    {
        "id": "q3",
        "questionText": "In which year did the World War II end?",
        "options": ["1940", "1942", "1945", "1948"],
        "correctAnswer": "1945",
        "explanation": "World War II ended in 1945 with the surrender of the Axis powers.",
        "difficulty": "medium",
    },
]


class GeneratePayload(BaseModel):
    """Payload schema for deck generation."""

    slug: str | None = None


class FinishPayload(BaseModel):
    """Payload schema for a finished session."""

    slug: str | None = None
    app_mode: str | None = None
    language: str | None = None
    topic: str | None = None
    duration_seconds: int | None = None
    score: float | None = None
    questions: list[Any] = Field(default_factory=list)
    history: list[Any] = Field(default_factory=list)
    used_sources: list[str] = Field(default_factory=list)


def _get_store_dependency(store: AttemptStore):
    def dependency() -> AttemptStore:
        return store

    return dependency


async def _generate_questions(gemini: GeminiClient | None, definition: QuizDefinition | None) -> list[dict[str, Any]]:
    if gemini is None:
        return MOCK_QUESTIONS
    count = definition.max_questions if definition else 3
    prompt = prompts.server_prompt(
        count=count,
        topic=definition.default_topic if definition else None,
        language=(definition.default_language if definition else None) or "es",
        app_mode=definition.app_mode if definition else None,
    )
    try:
        questions, _ = await gemini.generate_questions(prompt)
    except GeminiError as exc:
        logger.warning("Falling back to mock questions: %s", exc)
        return MOCK_QUESTIONS
    return [question.to_wire() for question in questions]


def create_api_app(store: AttemptStore, gemini: GeminiClient | None = None) -> FastAPI:
    """Create a FastAPI application wired to the attempt store and optional Gemini client."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        await store.init()
        yield

    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION, lifespan=lifespan)
    store_dep = _get_store_dependency(store)
    prefix = f"/{REST_NAMESPACE}"

    @app.get(f"{prefix}/ping")
    def ping() -> dict[str, object]:
        return {"ok": True, "time": datetime.now().strftime("%Y-%m-%d %H:%M:%S")}

    @app.post(f"{prefix}/generate")
    async def generate(
        payload: GeneratePayload,
        attempts: AttemptStore = Depends(store_dep),
    ) -> dict[str, object]:
        definition = await attempts.get_definition(payload.slug)
        questions = await _generate_questions(gemini, definition)
        return {
            "ok": True,
            "slug": payload.slug,
            "questions": questions,
            "app_mode": definition.app_mode if definition else None,
            "language": definition.default_language if definition else None,
            "topic": definition.default_topic if definition else None,
        }

    @app.post(f"{prefix}/finish")
    async def finish(
        payload: FinishPayload,
        attempts: AttemptStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            attempt_id = await attempts.insert_attempt(
                slug=payload.slug,
                app_mode=payload.app_mode,
                language=payload.language,
                topic=payload.topic,
                questions=payload.questions,
                history=payload.history,
                score=payload.score,
                duration_seconds=payload.duration_seconds,
                used_sources=payload.used_sources,
            )
        except aiosqlite.Error as exc:
            logger.error("Failed to save attempt: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to save attempt.") from exc
        return {"ok": True, "intento_id": attempt_id}

    return app


def start_api_server(
    store: AttemptStore,
    gemini: GeminiClient | None = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(store, gemini)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="CdbQuizzApiServer", daemon=True)
    thread.start()
    return thread
