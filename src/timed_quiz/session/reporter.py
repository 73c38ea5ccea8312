from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console

from timed_quiz.data_models import Problem, QuizResult


class QuizReporter(ABC):
    """Output side of a session: questions, per-question notices, and the final score."""

    @abstractmethod
    def show_question(self, number: int, problem: Problem) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_read_failure(self, number: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_timeout(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_summary(self, result: QuizResult) -> None:
        raise NotImplementedError


class ConsoleReporter(QuizReporter):
    """Render the quiz to a terminal using Rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_question(self, number: int, problem: Problem) -> None:
        # Question text is user data; never interpret it as Rich markup.
        self.console.print(
            f"Problem #{number}: {problem.question} = ", end="", markup=False, highlight=False
        )

    def show_read_failure(self, number: int) -> None:
        self.console.print()
        self.console.print("[yellow]Failed to read answer.[/yellow]")

    def show_timeout(self) -> None:
        self.console.print()
        self.console.print("[bold red]Time is up![/bold red]")

    def show_summary(self, result: QuizResult) -> None:
        self.console.print(
            f"You scored [bold]{result.correct}[/bold] out of [bold]{result.total}[/bold]."
        )
