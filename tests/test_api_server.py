"""
Tests for the FastAPI backend and its SQLite attempt store.
"""
import asyncio
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from cdb_quizz.core.services.gemini_client import GeminiError
from cdb_quizz.server.api_server import MOCK_QUESTIONS, create_api_app
from cdb_quizz.server.attempt_store import AttemptStore
from tests.fixtures import make_questions


class FakeGemini:
    def __init__(self, error=None):
        self.error = error
        self.prompts = []

    async def generate_questions(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return make_questions(2), []


class ApiTestCase(unittest.TestCase):

    gemini = None

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.store = AttemptStore(Path(self._tmp.name) / "data" / "quizz.db")
        self.client = TestClient(create_api_app(self.store, self.gemini))


class TestEndpoints(ApiTestCase):

    def test_ping(self):
        response = self.client.get("/cdb-quizz/v1/ping")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["ok"])

    def test_generate_without_gemini_returns_mock_questions(self):
        response = self.client.post("/cdb-quizz/v1/generate", json={"slug": "cultura-de-bar"})
        body = response.json()
        self.assertTrue(body["ok"])
        self.assertEqual(body["questions"], MOCK_QUESTIONS)
        self.assertEqual(body["app_mode"], "CULTURA")
        self.assertEqual(body["language"], "es")

    def test_generate_unknown_slug(self):
        body = self.client.post("/cdb-quizz/v1/generate", json={"slug": "nope"}).json()
        self.assertTrue(body["ok"])
        self.assertIsNone(body["app_mode"])

    def test_finish_stores_attempt(self):
        payload = {
            "slug": "cultura-de-bar",
            "app_mode": "VINO",
            "language": "es",
            "topic": None,
            "duration_seconds": 42,
            "score": 66.67,
            "questions": [{"id": "q1"}],
            "history": [{"questionId": "q1", "isCorrect": True}],
            "used_sources": ["Guía Repsol"],
        }
        body = self.client.post("/cdb-quizz/v1/finish", json=payload).json()
        self.assertTrue(body["ok"])
        record = asyncio.run(self.store.get_attempt(body["intento_id"]))
        self.assertEqual(record.app_mode, "VINO")
        self.assertEqual(record.score, 66.67)
        self.assertEqual(record.duration_seconds, 42)
        self.assertEqual(record.history, [{"questionId": "q1", "isCorrect": True}])
        self.assertEqual(record.used_sources, ["Guía Repsol"])
        self.assertTrue(record.completed)
        self.assertNotEqual(record.quiz_definition_id, 0)

    def test_finish_with_empty_payload_uses_defaults(self):
        body = self.client.post("/cdb-quizz/v1/finish", json={}).json()
        record = asyncio.run(self.store.get_attempt(body["intento_id"]))
        self.assertEqual(record.app_mode, "CULTURA")
        self.assertEqual(record.quiz_definition_id, 0)
        self.assertEqual(record.questions, [])


class TestGenerateWithGemini(ApiTestCase):

    gemini = FakeGemini()

    def test_generated_questions_are_returned_on_the_wire(self):
        body = self.client.post("/cdb-quizz/v1/generate", json={"slug": "cultura-de-bar"}).json()
        self.assertEqual([q["id"] for q in body["questions"]], ["q1", "q2"])
        self.assertEqual(body["questions"][0]["questionText"], "Question q1?")
        self.assertIn("10", self.gemini.prompts[-1])


class TestGenerateFallback(ApiTestCase):

    gemini = FakeGemini(error=GeminiError("quota"))

    def test_gemini_failure_falls_back_to_mock(self):
        body = self.client.post("/cdb-quizz/v1/generate", json={}).json()
        self.assertEqual(body["questions"], MOCK_QUESTIONS)


class TestAttemptStore(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.store = AttemptStore(Path(self._tmp.name) / "quizz.db")

    async def test_default_definition_is_seeded_once(self):
        await self.store.init()
        await self.store.init()
        definition = await self.store.get_definition("cultura-de-bar")
        self.assertEqual(definition.app_mode, "CULTURA")
        self.assertEqual(definition.max_questions, 10)

    async def test_added_definition_is_found(self):
        await self.store.add_definition("vino-basico", "Vino básico", "VINO", "es", None, 5)
        definition = await self.store.get_definition("vino-basico")
        self.assertEqual(definition.title, "Vino básico")
        self.assertEqual(definition.max_questions, 5)
        self.assertIsNone(await self.store.get_definition(None))

    async def test_missing_attempt(self):
        self.assertIsNone(await self.store.get_attempt(999))


if __name__ == "__main__":
    unittest.main()
