"""Shared fixtures and test doubles for the quiz tests."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable, List, Optional

import pytest

from timed_quiz.data_models import Problem, QuizResult
from timed_quiz.session import QuizReporter


class ScriptedReader:
    """Hand back canned answers in order; raise EOFError once they run out.

    An item that is an exception instance is raised instead of returned. An item equal
    to `ScriptedReader.BLOCK` blocks until `release()` is called, then returns "late".
    """

    BLOCK = object()

    def __init__(self, answers: Iterable[object]):
        self._answers = list(answers)
        self._lock = threading.Lock()
        self._released = threading.Event()
        self.calls = 0

    def release(self) -> None:
        self._released.set()

    def __call__(self) -> str:
        with self._lock:
            self.calls += 1
            item = self._answers.pop(0) if self._answers else EOFError()
        if item is ScriptedReader.BLOCK:
            self._released.wait()
            return "late"
        if isinstance(item, BaseException):
            raise item
        return item  # type: ignore[return-value]


class RecordingReporter(QuizReporter):
    """Capture everything the runner would print."""

    def __init__(self) -> None:
        self.questions: List[tuple[int, str]] = []
        self.read_failures: List[int] = []
        self.timeouts = 0
        self.summary: Optional[QuizResult] = None

    def show_question(self, number: int, problem: Problem) -> None:
        self.questions.append((number, problem.question))

    def show_read_failure(self, number: int) -> None:
        self.read_failures.append(number)

    def show_timeout(self) -> None:
        self.timeouts += 1

    def show_summary(self, result: QuizResult) -> None:
        self.summary = result


@pytest.fixture
def arithmetic_problems() -> List[Problem]:
    return [Problem(question="2+2", answer="4"), Problem(question="3+3", answer="6")]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def scripted():
    """Build ScriptedReaders and make sure any blocked read is released at teardown."""
    readers: List[ScriptedReader] = []

    def factory(*answers: object) -> ScriptedReader:
        reader = ScriptedReader(answers)
        readers.append(reader)
        return reader

    yield factory
    for reader in readers:
        reader.release()


@pytest.fixture
def problems_csv(tmp_path: Path) -> Path:
    path = tmp_path / "problems.csv"
    path.write_text("2+2,4\n3+3, 6 \n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_config_env(monkeypatch):
    monkeypatch.delenv("TIMED_QUIZ_CONFIG_OVERRIDES", raising=False)
    monkeypatch.delenv("SEED", raising=False)


@pytest.fixture
def block() -> object:
    """Marker telling a ScriptedReader to block until released."""
    return ScriptedReader.BLOCK


@pytest.fixture
def make_reporter():
    return RecordingReporter
