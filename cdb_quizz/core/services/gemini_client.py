"""Thin async client for the Gemini ``generateContent`` REST API."""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from typing import Any, Mapping

import aiohttp

from cdb_quizz.config.settings import Settings
from cdb_quizz.constants.network_constants import (
    GEMINI_API_BASE,
    GEMINI_TEXT_MODEL,
    GEMINI_TTS_MODEL,
    GEMINI_TTS_VOICE,
    HTTP_TIMEOUT_SECONDS,
)
from cdb_quizz.core import prompts
from cdb_quizz.core.models import Language, PronunciationFeedback, Question

logger = logging.getLogger(__name__)


class GeminiError(Exception):
    """Raised on transport failures, error statuses and unusable responses."""


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        api_base: str = GEMINI_API_BASE,
        model: str = GEMINI_TEXT_MODEL,
        tts_model: str = GEMINI_TTS_MODEL,
        timeout_seconds: float = HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._model = model
        self._tts_model = tts_model
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def generate_questions(self, prompt: str) -> tuple[list[Question], list[str]]:
        """Return the generated questions and the source names the model reports."""
        payload = await self.generate_json(prompt)
        raw_questions = payload.get("questions")
        if not isinstance(raw_questions, list) or not raw_questions:
            raise GeminiError("Response does not contain any questions.")
        questions = [
            Question.from_wire(item, index)
            for index, item in enumerate(raw_questions)
            if isinstance(item, dict)
        ]
        if not questions:
            raise GeminiError("Response does not contain valid questions.")
        raw_sources = payload.get("usedSources")
        used_sources = [str(name) for name in raw_sources] if isinstance(raw_sources, list) else []
        return questions, used_sources

    async def generate_json(self, prompt: str) -> dict[str, Any]:
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        response = await self._generate(self._model, body)
        return _parse_json_text(extract_text(response))

    async def evaluate_pronunciation(
        self,
        audio: bytes,
        mime_type: str,
        word: str,
        language: Language,
    ) -> PronunciationFeedback:
        body = {
            "contents": [{
                "parts": [
                    {"inlineData": {"mimeType": mime_type, "data": base64.b64encode(audio).decode("ascii")}},
                    {"text": prompts.pronunciation_prompt(word, language)},
                ],
            }],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        response = await self._generate(self._model, body)
        data = _parse_json_text(extract_text(response))
        try:
            score = float(data.get("score", 0))
        except (TypeError, ValueError) as exc:
            raise GeminiError("Pronunciation score is not a number.") from exc
        return PronunciationFeedback(score=max(0.0, min(score, 100.0)), feedback=str(data.get("feedback") or ""))

    async def synthesize_speech(self, text: str, language: Language) -> bytes:
        """Return raw 16-bit mono PCM for ``text``."""
        body = {
            "contents": [{"parts": [{"text": prompts.speech_prompt(text, language)}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {
                    "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": GEMINI_TTS_VOICE}},
                },
            },
        }
        response = await self._generate(self._tts_model, body)
        encoded = extract_inline_data(response)
        try:
            return base64.b64decode(encoded)
        except ValueError as exc:
            raise GeminiError("Audio payload is not valid base64.") from exc

    async def _generate(self, model: str, body: Mapping[str, Any]) -> dict[str, Any]:
        url = f"{self._api_base}/models/{model}:generateContent"
        logger.debug("Calling Gemini model %s", model)
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(url, params={"key": self._api_key}, json=body) as response:
                    if response.status < 200 or response.status >= 300:
                        detail = await response.text()
                        raise GeminiError(f"Gemini returned HTTP {response.status}: {detail[:200]}")
                    return await response.json(content_type=None)
        except aiohttp.ClientError as exc:
            raise GeminiError(f"Gemini request failed: {exc}") from exc
        except asyncio.TimeoutError as exc:
            raise GeminiError("Gemini request timed out.") from exc
        except ValueError as exc:
            raise GeminiError(f"Gemini response is not readable JSON: {exc}") from exc


def _candidate_parts(response: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    candidates = response.get("candidates") if isinstance(response, Mapping) else None
    if not isinstance(candidates, list) or not candidates:
        raise GeminiError("Gemini response is missing candidates.")
    parts: list[Mapping[str, Any]] = []
    for candidate in candidates:
        content = candidate.get("content") if isinstance(candidate, Mapping) else None
        candidate_parts = content.get("parts") if isinstance(content, Mapping) else None
        if isinstance(candidate_parts, list):
            parts.extend(part for part in candidate_parts if isinstance(part, Mapping))
    return parts


def extract_text(response: Mapping[str, Any]) -> str:
    """First non-empty text part across all candidates."""
    for part in _candidate_parts(response):
        text = part.get("text")
        if text:
            return str(text)
    raise GeminiError("Gemini response did not include text content.")


def extract_inline_data(response: Mapping[str, Any]) -> str:
    for part in _candidate_parts(response):
        inline = part.get("inlineData")
        if isinstance(inline, Mapping) and inline.get("data"):
            return str(inline["data"])
    raise GeminiError("Gemini response did not include audio content.")


def _parse_json_text(text: str) -> dict[str, Any]:
    cleaned = text.strip()
    # Models sometimes wrap JSON in a markdown fence despite the mime type.
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise GeminiError("Gemini text content is not valid JSON.") from exc
    if not isinstance(data, dict):
        raise GeminiError("Gemini JSON content is not an object.")
    return data


def gemini_client_from_settings(settings: Settings) -> GeminiClient | None:
    """Client configured from ``settings``, or ``None`` when no API key is set."""
    if not settings.has_gemini_key:
        return None
    return GeminiClient(
        api_key=settings.gemini_api_key,
        api_base=settings.gemini_api_base,
        model=settings.gemini_model,
        tts_model=settings.gemini_tts_model,
        timeout_seconds=settings.http_timeout_seconds,
    )
