"""
Shared builders and fakes for the CdB Quizz test suite.
"""
from __future__ import annotations

import random

from cdb_quizz.core.catalog import default_profile
from cdb_quizz.core.models import AppMode, Difficulty, Profile, Question
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.core.services.profile_store import ProfileStore
from cdb_quizz.core.services.question_source import GenerationRequest, GenerationResult
from cdb_quizz.core.services.scheduler import ManualScheduler


def make_question(qid: str = "q1", correct: str = "A", text: str | None = None) -> Question:
    return Question(
        id=qid,
        question_text=text if text is not None else f"Question {qid}?",
        options=("A", "B", "C", "D"),
        correct_answer=correct,
        explanation=f"Because of {qid}.",
        difficulty=Difficulty.MEDIUM,
    )


def make_questions(count: int) -> list[Question]:
    return [make_question(f"q{index + 1}") for index in range(count)]


class MemoryRepository:
    """Stands in for ProfileRepository; keeps every saved snapshot."""

    def __init__(self, initial: Profile | None = None, fail_on_save: Exception | None = None):
        self.initial = initial or default_profile()
        self.saved: list[Profile] = []
        self.fail_on_save = fail_on_save

    def load(self) -> Profile:
        return self.initial

    def save(self, profile: Profile) -> None:
        if self.fail_on_save is not None:
            raise self.fail_on_save
        self.saved.append(profile)


class FakeQuestionSource:
    """Returns a fixed deck, or raises when ``error`` is set."""

    def __init__(self, questions=(), used_sources=(), error: Exception | None = None):
        self.questions = tuple(questions)
        self.used_sources = tuple(used_sources)
        self.error = error
        self.requests: list[GenerationRequest] = []

    async def fetch(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return GenerationResult(
            questions=self.questions,
            used_sources=self.used_sources,
            app_mode=request.mode,
        )


class FakeReporter:
    def __init__(self, attempt_id: int = 7, error: Exception | None = None):
        self.attempt_id = attempt_id
        self.error = error
        self.payloads: list[dict] = []

    async def submit(self, payload) -> int:
        self.payloads.append(dict(payload))
        if self.error is not None:
            raise self.error
        return self.attempt_id


def build_manager(
    questions=(),
    source: FakeQuestionSource | None = None,
    reporter=None,
    gemini=None,
    profile: Profile | None = None,
    seed: int = 1,
    opened_urls: list[str] | None = None,
    rng: random.Random | None = None,
) -> tuple[QuizManager, ManualScheduler, MemoryRepository]:
    scheduler = ManualScheduler()
    repository = MemoryRepository(profile)
    store = ProfileStore(repository)
    urls = opened_urls if opened_urls is not None else []
    manager = QuizManager(
        store=store,
        scheduler=scheduler,
        question_source=source or FakeQuestionSource(questions),
        reporter=reporter,
        gemini=gemini,
        clock=lambda: scheduler.now_ms,
        rng=rng or random.Random(seed),
        open_url=urls.append,
    )
    return manager, scheduler, repository


def go_to_setup(manager: QuizManager, mode: AppMode = AppMode.CULTURA) -> None:
    manager.skip_intro()
    if mode is not manager.app_mode:
        manager.open_menu()
        manager.select_app_mode(mode)
    manager.open_setup()
