"""Service holding the ordered question deck of an active session."""

from __future__ import annotations

from typing import Iterable

from cdb_quizz.constants.quiz_constants import CARD_STACK_WINDOW
from cdb_quizz.core.models import Question


class Deck:
    """Ordered, growable queue of questions plus the current index.

    Entries before the index have been resolved. Deferring a card re-appends
    the same object at the end, so the deck grows by one while the number of
    unresolved cards stays the same. Callers only ever see the front
    :meth:`window`, a read-only slice of at most three cards.
    """

    def __init__(self, questions: Iterable[Question] = ()) -> None:
        self._questions: list[Question] = list(questions)
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._questions)

    @property
    def current(self) -> Question | None:
        if self.is_exhausted():
            return None
        return self._questions[self._index]

    def window(self, size: int = CARD_STACK_WINDOW) -> tuple[Question, ...]:
        return tuple(self._questions[self._index:self._index + size])

    def remaining(self) -> int:
        return max(0, len(self._questions) - self._index)

    def is_exhausted(self) -> bool:
        return self._index >= len(self._questions)

    def discard(self) -> Question | None:
        """Resolve the current card without requeueing it."""
        question = self.current
        if question is not None:
            self._index += 1
        return question

    def defer(self) -> Question | None:
        """Move the current card to the back of the deck."""
        question = self.current
        if question is not None:
            self._questions.append(question)
            self._index += 1
        return question

    def distinct_count(self) -> int:
        return len({id(question) for question in self._questions})

    def questions(self) -> tuple[Question, ...]:
        return tuple(self._questions)
