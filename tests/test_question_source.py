"""
Tests for the REST and Gemini question sources.
"""
import json
import unittest

from aiohttp import web
from aiohttp.test_utils import TestServer

from cdb_quizz.constants.ui_constants import LOAD_ERROR_MESSAGE
from cdb_quizz.core.models import AppMode, Language, Topic
from cdb_quizz.core.services.gemini_client import GeminiError
from cdb_quizz.core.services.question_source import (
    GeminiQuestionSource,
    GenerationRequest,
    QuestionSourceError,
    RestQuestionSource,
    load_deck,
)
from tests.fixtures import FakeQuestionSource, make_questions


class FakeBackend:
    def __init__(self):
        self.status = 200
        self.body = {"ok": True, "questions": []}
        self.raw = None
        self.received = []

    def app(self):
        app = web.Application()
        app.router.add_post("/cdb-quizz/v1/generate", self.generate)
        return app

    async def generate(self, request):
        self.received.append(await request.json())
        if self.raw is not None:
            return web.Response(status=self.status, body=self.raw)
        return web.json_response(self.body, status=self.status)


class TestRestQuestionSource(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.backend = FakeBackend()
        self.server = TestServer(self.backend.app())
        await self.server.start_server()
        self.source = RestQuestionSource(str(self.server.make_url("/")), slug="cultura-de-bar")
        self.request = GenerationRequest(mode=AppMode.VINO)

    async def asyncTearDown(self):
        await self.server.close()

    async def test_fetch_posts_slug_and_parses_questions(self):
        self.backend.body = {
            "ok": True,
            "questions": [{"questionText": "¿Uva?", "options": ["A", "B"], "correctAnswer": "A", "difficulty": "easy"}],
            "used_sources": ["D.O. España"],
            "app_mode": "CULTURA",
            "language": "es",
            "topic": None,
        }
        result = await self.source.fetch(self.request)
        self.assertEqual(self.backend.received, [{"slug": "cultura-de-bar"}])
        self.assertEqual(result.questions[0].id, "q1")
        self.assertEqual(result.used_sources, ("D.O. España",))
        self.assertIs(result.app_mode, AppMode.CULTURA)
        self.assertEqual(result.language, "es")
        self.assertFalse(result.failed)

    async def test_unknown_app_mode_keeps_requested_mode(self):
        self.backend.body = {"ok": True, "questions": [{"id": "a"}], "app_mode": None}
        result = await self.source.fetch(self.request)
        self.assertIs(result.app_mode, AppMode.VINO)

    async def test_failures_raise_question_source_error(self):
        cases = {
            "not ok": ({"ok": False, "questions": [{"id": "a"}]}, 200, None),
            "no questions": ({"ok": True, "questions": []}, 200, None),
            "malformed": ({"ok": True, "questions": ["x"]}, 200, None),
            "http error": ({"ok": True}, 500, None),
            "not json": (None, 200, b"<html>"),
            "not utf-8": (None, 200, b"\xff\xfe"),
        }
        for label, (body, status, raw) in cases.items():
            with self.subTest(label):
                self.backend.body, self.backend.status, self.backend.raw = body, status, raw
                with self.assertRaises(QuestionSourceError):
                    await self.source.fetch(self.request)

    async def test_load_deck_falls_back_to_placeholder(self):
        self.backend.status = 503
        result = await load_deck(self.source, self.request)
        self.assertTrue(result.failed)
        self.assertEqual(result.error_message, LOAD_ERROR_MESSAGE)
        self.assertEqual([q.id for q in result.questions], ["err-1"])
        self.assertIs(result.app_mode, AppMode.VINO)

    async def test_load_deck_falls_back_on_undecodable_body(self):
        self.backend.raw = b"\xff\xfe"
        result = await load_deck(self.source, self.request)
        self.assertTrue(result.failed)
        self.assertEqual([q.id for q in result.questions], ["err-1"])

    def test_endpoint(self):
        source = RestQuestionSource("http://example.test/api/", slug="x")
        self.assertEqual(source.endpoint, "http://example.test/api/cdb-quizz/v1/generate")


class FakeGeminiClient:
    def __init__(self, error=None):
        self.error = error
        self.prompts = []

    async def generate_questions(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return make_questions(2), ["Oxford Dictionary API"]


class TestGeminiQuestionSource(unittest.IsolatedAsyncioTestCase):

    async def test_prompt_includes_language_topic_and_sources(self):
        client = FakeGeminiClient()
        source = GeminiQuestionSource(client)
        request = GenerationRequest(
            mode=AppMode.IDIOMAS,
            language=Language.FRENCH,
            topic=Topic.FISH,
            sources=("Oxford Dictionary API",),
        )
        result = await source.fetch(request)
        prompt = client.prompts[0]
        self.assertIn("Francés", prompt)
        self.assertIn("Pescados y Mariscos", prompt)
        self.assertIn("Oxford Dictionary API", prompt)
        self.assertEqual(len(result.questions), 2)
        self.assertEqual(result.language, "Francés")
        self.assertEqual(result.topic, "Pescados y Mariscos")

    async def test_gemini_error_becomes_source_error(self):
        source = GeminiQuestionSource(FakeGeminiClient(error=GeminiError("boom")))
        with self.assertRaises(QuestionSourceError):
            await source.fetch(GenerationRequest(mode=AppMode.CERVEZA))

    async def test_load_deck_passes_successful_results_through(self):
        source = FakeQuestionSource(make_questions(3), used_sources=["X"])
        result = await load_deck(source, GenerationRequest(mode=AppMode.L43))
        self.assertEqual(len(result.questions), 3)
        self.assertEqual(result.used_sources, ("X",))


if __name__ == "__main__":
    unittest.main()
