"""
Unit tests for the domain models, prompts, markdown rendering and settings.
"""
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from cdb_quizz.config.settings import Settings
from cdb_quizz.core import prompts
from cdb_quizz.core.markdown_renderer import MarkdownRenderer
from cdb_quizz.core.models import AppMode, Difficulty, Language, Question, Topic
from cdb_quizz.styling import difficulty_color, mode_accent, ColorPalette


class TestQuestion(unittest.TestCase):

    def test_from_wire_tolerates_loose_records(self):
        question = Question.from_wire({"text": "¿Hola?", "options": [1, 2], "correctAnswer": 1}, index=4)
        self.assertEqual(question.id, "q5")
        self.assertEqual(question.question_text, "¿Hola?")
        self.assertEqual(question.options, ("1", "2"))
        self.assertEqual(question.correct_answer, "1")
        self.assertIs(question.difficulty, Difficulty.MEDIUM)

    def test_correct_answer_matches_exact_text(self):
        question = Question.from_wire({"options": ["Paris", "Roma"], "correctAnswer": "Paris"})
        self.assertTrue(question.is_correct("Paris"))
        self.assertFalse(question.is_correct("paris"))

    def test_wire_round_trip_keeps_tags(self):
        question = Question("a", "t", ("x", "y"), "x", "e", Difficulty.HARD, ("vino",))
        self.assertEqual(Question.from_wire(question.to_wire()), question)
        self.assertNotIn("tags", Question("b", "t", (), "").to_wire())


class TestEnums(unittest.TestCase):

    def test_difficulty_accepts_values_and_labels(self):
        self.assertIs(Difficulty.parse("easy"), Difficulty.EASY)
        self.assertIs(Difficulty.parse("Difícil"), Difficulty.HARD)
        self.assertIs(Difficulty.parse(" MEDIO "), Difficulty.MEDIUM)
        self.assertIs(Difficulty.parse("legendary"), Difficulty.MEDIUM)
        self.assertIs(Difficulty.parse(None), Difficulty.MEDIUM)

    def test_app_mode_parse(self):
        self.assertIs(AppMode.parse("VINO"), AppMode.VINO)
        self.assertIs(AppMode.parse("CdB_ Legal"), AppMode.LEGAL)
        self.assertIs(AppMode.parse("???", default=AppMode.CULTURA), AppMode.CULTURA)
        with self.assertRaises(ValueError):
            AppMode.parse("???")

    def test_only_idiomas_is_language_learning(self):
        self.assertEqual([mode for mode in AppMode if mode.is_language_learning], [AppMode.IDIOMAS])


class TestPrompts(unittest.TestCase):

    def test_mode_prompt_lists_sources(self):
        prompt = prompts.question_prompt(AppMode.LEGAL, sources=["Estatuto de los Trabajadores"])
        self.assertIn("abogado laboralista", prompt)
        self.assertIn("Estatuto de los Trabajadores.", prompt)
        self.assertIn("usedSources", prompt)
        self.assertIn("Genera 10 preguntas", prompt)

    def test_prompt_without_sources(self):
        prompt = prompts.question_prompt(AppMode.CERVEZA)
        self.assertIn("Use general authoritative knowledge sources.", prompt)

    def test_language_prompt(self):
        prompt = prompts.question_prompt(AppMode.IDIOMAS, Language.ENGLISH, Topic.UTENSILS, count=5)
        self.assertIn("aprender Inglés", prompt)
        self.assertIn('"Utensilios y Menaje"', prompt)
        self.assertIn("Genera 5 preguntas", prompt)

    def test_pronunciation_and_speech_prompts(self):
        self.assertIn('"beer"', prompts.pronunciation_prompt("beer", Language.ENGLISH))
        self.assertIn("Francés", prompts.speech_prompt("bière", Language.FRENCH))


class TestMarkdownRenderer(unittest.TestCase):

    def setUp(self):
        self.renderer = MarkdownRenderer()

    def test_emphasis_is_rendered(self):
        self.assertIn("<strong>Rioja</strong>", self.renderer.render_fragment("**Rioja**"))

    def test_raw_html_is_escaped(self):
        html = self.renderer.render_fragment("<script>alert(1)</script>")
        self.assertNotIn("<script>", html)

    def test_inline_has_no_paragraph(self):
        self.assertEqual(self.renderer.render_inline("*tapa*"), "<em>tapa</em>")
        self.assertEqual(self.renderer.render_inline("   "), "")
        self.assertEqual(self.renderer.render_fragment(None), "")


class TestStyling(unittest.TestCase):

    def test_accent_colours(self):
        self.assertEqual(mode_accent(AppMode.IDIOMAS), ColorPalette.ACCENT_SKY)
        self.assertEqual(difficulty_color("Difícil"), ColorPalette.ACCENT_CORAL)
        self.assertEqual(difficulty_color(""), ColorPalette.ACCENT_SAND)


class TestSettings(unittest.TestCase):

    def test_from_env_reads_dotenv_and_environment(self):
        with tempfile.TemporaryDirectory() as tmp:
            dotenv = Path(tmp) / ".env"
            dotenv.write_text("GEMINI_API_KEY=from-file\nCDB_QUIZZ_PORT=9001\n", encoding="utf-8")
            environ = {"CDB_QUIZZ_REST_URL": "http://api.test", "CDB_QUIZZ_EMBEDDED_SERVER": "no",
                       "CDB_QUIZZ_DATA_DIR": tmp, "CDB_QUIZZ_QUESTION_SOURCE": " REST "}
            with mock.patch.dict(os.environ, environ, clear=True):
                settings = Settings.from_env(dotenv)
        self.assertEqual(settings.gemini_api_key, "from-file")
        self.assertEqual(settings.server_port, 9001)
        self.assertEqual(settings.rest_url, "http://api.test/")
        self.assertFalse(settings.embedded_server)
        self.assertEqual(settings.db_path, Path(tmp) / "cdb_quizz.db")
        self.assertEqual(settings.question_source, "rest")
        self.assertFalse(settings.uses_gemini_directly)


if __name__ == "__main__":
    unittest.main()
