from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from timed_quiz.data_models import AnswerResult, Problem, QuizResult, SessionStatus
from timed_quiz.session.pending import (
    Clock,
    Deadline,
    PendingAnswer,
    ReadLine,
    TimeLimit,
    limit_to_seconds,
)
from timed_quiz.session.reporter import ConsoleReporter, QuizReporter
from timed_quiz.utils.randomness import shuffle_problems

logger = logging.getLogger(__name__)

_TERMINAL = {SessionStatus.COMPLETED, SessionStatus.TIMED_OUT}


@dataclass
class QuizSession:
    """
    Mutable state of one run, owned by the session loop alone.

    Keeps `0 <= correct_count <= current_index <= len(problems)` and moves
    not_started -> running -> completed | timed_out, entering a terminal state once.
    """

    problems: List[Problem]
    correct_count: int = 0
    current_index: int = 0
    status: SessionStatus = SessionStatus.NOT_STARTED
    answers: List[AnswerResult] = field(default_factory=list)

    def start(self) -> None:
        if self.status is not SessionStatus.NOT_STARTED:
            raise RuntimeError(f"cannot start a session that is {self.status.value}")
        self.status = SessionStatus.RUNNING

    def record(self, given: Optional[str]) -> AnswerResult:
        """Score the current problem and advance to the next one."""
        if self.status is not SessionStatus.RUNNING:
            raise RuntimeError(f"cannot record an answer while {self.status.value}")
        if self.current_index >= len(self.problems):
            raise RuntimeError("every problem has already been answered")
        problem = self.problems[self.current_index]
        is_correct = given is not None and problem.is_correct(given)
        if is_correct:
            self.correct_count += 1
        self.current_index += 1
        answer = AnswerResult(
            number=self.current_index,
            question=problem.question,
            expected=problem.answer,
            given=given,
            is_correct=is_correct,
        )
        self.answers.append(answer)
        return answer

    def finish(self, status: SessionStatus) -> None:
        if status not in _TERMINAL:
            raise ValueError(f"{status.value} is not a terminal status")
        if self.status is not SessionStatus.RUNNING:
            raise RuntimeError(f"cannot finish a session that is {self.status.value}")
        self.status = status

    def result(self) -> QuizResult:
        if self.status not in _TERMINAL:
            raise RuntimeError("session has not finished")
        return QuizResult(
            correct=self.correct_count,
            total=len(self.problems),
            status=self.status,
            answers=list(self.answers),
        )


class QuizRunner:
    """
    Run a timed quiz: ask each problem in turn and race its answer against one deadline.

    For every problem the runner displays the question, starts a `PendingAnswer` read and
    blocks until either the answer or the session deadline arrives. An answer is scored
    and the loop advances; a deadline ends the session at once and the outstanding read
    is abandoned without being awaited. Read failures count as wrong answers.

    Parameters
    ----------
    read_line : Callable[[], str], default=input
        Blocking "read one line" capability. Called once per question on a reader thread.
    reporter : QuizReporter, optional
        Output collaborator; defaults to a `ConsoleReporter`.
    clock : Callable[[], float], default=time.monotonic
        Time source for the deadline and answer timestamps.
    rng : random.Random, optional
        Generator used when shuffling.
    """

    def __init__(
        self,
        read_line: ReadLine = input,
        reporter: Optional[QuizReporter] = None,
        *,
        clock: Clock = time.monotonic,
        rng: Optional[random.Random] = None,
    ):
        self.read_line = read_line
        self.reporter = reporter or ConsoleReporter()
        self.clock = clock
        self.rng = rng or random.Random()

    def run(
        self,
        problems: Sequence[Problem],
        time_limit: TimeLimit,
        shuffle: bool = False,
    ) -> QuizResult:
        seconds = limit_to_seconds(time_limit)
        ordered = shuffle_problems(problems, self.rng) if shuffle else list(problems)

        session = QuizSession(problems=ordered)
        deadline = Deadline(seconds, clock=self.clock)
        session.start()
        logger.info("Quiz started: %d problems, %.1fs limit", len(ordered), seconds)

        for index, problem in enumerate(ordered):
            number = index + 1
            self.reporter.show_question(number, problem)
            pending = PendingAnswer(index, self.read_line, clock=self.clock).start()
            arrival = pending.wait(deadline.remaining())
            while arrival is None and not deadline.expired():
                arrival = pending.wait(deadline.remaining())
            if arrival is None or deadline.expired(arrival.arrived_at):
                pending.abandon()
                session.finish(SessionStatus.TIMED_OUT)
                logger.info("Deadline fired during problem %d", number)
                self.reporter.show_timeout()
                break
            answer = session.record(arrival.answer)
            if answer.given is None:
                self.reporter.show_read_failure(number)
        else:
            session.finish(SessionStatus.COMPLETED)

        result = session.result()
        logger.info(
            "Quiz finished (%s): %d/%d correct", result.status.value, result.correct, result.total
        )
        self.reporter.show_summary(result)
        return result
