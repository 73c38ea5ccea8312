from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Problem(BaseModel):
    """One question and its expected answer. The answer is trimmed on construction."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str

    @field_validator("answer")
    @classmethod
    def strip_answer(cls, value: str) -> str:
        return value.strip()

    def is_correct(self, given: str) -> bool:
        """Exact, case-sensitive match after trimming the given answer."""
        return given.strip() == self.answer


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"


class AnswerResult(BaseModel):
    """Outcome for a single question whose race resolved with input."""

    number: int = Field(ge=1, description="1-based position in display order.")
    question: str
    expected: str
    given: Optional[str] = None  # None => the read failed
    is_correct: bool


class QuizResult(BaseModel):
    """Final tally of a session."""

    correct: int = Field(ge=0)
    total: int = Field(ge=0)
    status: SessionStatus
    answers: List[AnswerResult] = Field(default_factory=list)

    @property
    def answered(self) -> int:
        return len(self.answers)

    @property
    def timed_out(self) -> bool:
        return self.status is SessionStatus.TIMED_OUT

    @property
    def score(self) -> float:
        return self.correct / self.total if self.total else 0.0
