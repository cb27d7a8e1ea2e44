"""Question sources: where a deck comes from.

Two implementations share one contract. :class:`GeminiQuestionSource` prompts
the model directly; :class:`RestQuestionSource` asks the backend's
``/generate`` endpoint for the configured quiz slug. Both raise
:class:`QuestionSourceError` for every kind of failure, and
:func:`load_deck` turns that error into the placeholder deck so the session
always gets something to play.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import logging
from typing import Protocol

import aiohttp

from cdb_quizz.constants.network_constants import HTTP_TIMEOUT_SECONDS, REST_NAMESPACE
from cdb_quizz.constants.ui_constants import LOAD_ERROR_MESSAGE
from cdb_quizz.core import prompts
from cdb_quizz.core.catalog import PLACEHOLDER_QUESTION
from cdb_quizz.core.models import AppMode, Language, Question, Topic
from cdb_quizz.core.services.gemini_client import GeminiClient, GeminiError

logger = logging.getLogger(__name__)


class QuestionSourceError(Exception):
    """Raised when no usable deck could be obtained."""


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    mode: AppMode
    language: Language | None = None
    topic: Topic | None = None
    sources: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class GenerationResult:
    questions: tuple[Question, ...]
    used_sources: tuple[str, ...] = ()
    app_mode: AppMode | None = None
    language: str | None = None
    topic: str | None = None
    error_message: str | None = None

    @property
    def failed(self) -> bool:
        return self.error_message is not None


class QuestionSource(Protocol):
    async def fetch(self, request: GenerationRequest) -> GenerationResult: ...


@dataclass(slots=True)
class GeminiQuestionSource:
    client: GeminiClient

    async def fetch(self, request: GenerationRequest) -> GenerationResult:
        prompt = prompts.question_prompt(request.mode, request.language, request.topic, request.sources)
        try:
            questions, used_sources = await self.client.generate_questions(prompt)
        except GeminiError as exc:
            raise QuestionSourceError(str(exc)) from exc
        return GenerationResult(
            questions=tuple(questions),
            used_sources=tuple(used_sources),
            app_mode=request.mode,
            language=request.language.value if request.language else None,
            topic=request.topic.value if request.topic else None,
        )


@dataclass(slots=True)
class RestQuestionSource:
    rest_url: str
    slug: str
    timeout_seconds: float = HTTP_TIMEOUT_SECONDS
    _timeout: aiohttp.ClientTimeout = field(init=False)

    def __post_init__(self) -> None:
        self._timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

    @property
    def endpoint(self) -> str:
        return f"{self.rest_url.rstrip('/')}/{REST_NAMESPACE}/generate"

    async def fetch(self, request: GenerationRequest) -> GenerationResult:
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(self.endpoint, json={"slug": self.slug}) as response:
                    if response.status < 200 or response.status >= 300:
                        raise QuestionSourceError(f"Generate endpoint returned HTTP {response.status}")
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise QuestionSourceError(f"Generate request failed: {exc}") from exc

        if not isinstance(data, dict) or data.get("ok") is not True:
            raise QuestionSourceError("Generate endpoint did not report success.")
        raw_questions = data.get("questions")
        if not isinstance(raw_questions, list) or not raw_questions:
            raise QuestionSourceError("Generate endpoint returned no questions.")
        questions = tuple(
            Question.from_wire(item, index) for index, item in enumerate(raw_questions) if isinstance(item, dict)
        )
        if not questions:
            raise QuestionSourceError("Generate endpoint returned malformed questions.")
        raw_sources = data.get("used_sources")
        return GenerationResult(
            questions=questions,
            used_sources=tuple(str(name) for name in raw_sources) if isinstance(raw_sources, list) else (),
            app_mode=AppMode.parse(data.get("app_mode"), default=request.mode),
            language=data.get("language"),
            topic=data.get("topic"),
        )


def placeholder_result(request: GenerationRequest, message: str = LOAD_ERROR_MESSAGE) -> GenerationResult:
    return GenerationResult(
        questions=(PLACEHOLDER_QUESTION,),
        app_mode=request.mode,
        error_message=message,
    )


async def load_deck(source: QuestionSource, request: GenerationRequest) -> GenerationResult:
    """Fetch a deck, falling back to the placeholder deck on any source failure."""
    try:
        return await source.fetch(request)
    except QuestionSourceError as exc:
        logger.warning("Question generation failed for %s: %s", request.mode.value, exc)
        return placeholder_result(request)
