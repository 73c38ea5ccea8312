from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

from timed_quiz import __version__
from timed_quiz.config import Settings, load_settings
from timed_quiz.ingestion import ProblemSourceError
from timed_quiz.session import ConsoleReporter, outstanding_reads
from timed_quiz.system import QuizSystem

app = typer.Typer(help="Timed quiz over a CSV file of question,answer pairs.")
console = Console()


def _load_env() -> None:
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


def _apply_overrides(
    settings: Settings,
    csv_path: Optional[Path],
    limit: Optional[float],
    shuffle: Optional[bool],
    seed: Optional[int],
    log_level: Optional[str],
) -> Settings:
    """Return a copy of `settings` with any command-line values layered on top."""
    quiz_updates = {
        key: value
        for key, value in {
            "problems_path": csv_path,
            "time_limit_seconds": limit,
            "shuffle": shuffle,
            "seed": seed,
        }.items()
        if value is not None
    }
    updates = {}
    if quiz_updates:
        updates["quiz"] = settings.quiz.model_copy(update=quiz_updates)
    if log_level:
        updates["logging"] = settings.logging.model_copy(update={"level": log_level.upper()})
    return settings.model_copy(update=updates) if updates else settings


@app.command()
def run(
    csv_path: Optional[Path] = typer.Option(
        None, "--csv", help="A CSV file in the format of 'question,answer'."
    ),
    limit: Optional[float] = typer.Option(
        None, "--limit", min=0, help="Time limit for the whole quiz, in seconds."
    ),
    shuffle: Optional[bool] = typer.Option(
        None, "--shuffle/--no-shuffle", help="Shuffle the order of the questions."
    ),
    seed: Optional[int] = typer.Option(None, help="Seed for --shuffle."),
    config: Optional[Path] = typer.Option(None, help="Path to configuration YAML."),
    log_level: Optional[str] = typer.Option(None, help="Override the configured log level."),
):
    """
    Ask every question in the CSV file against a single countdown and print the score.

    Settings come from `load_settings` with command-line values layered on top. Problems
    are loaded before the clock starts; a missing or malformed file is reported and exits
    with status 1 without asking anything.
    """
    _load_env()
    try:
        settings = _apply_overrides(
            load_settings(config), csv_path, limit, shuffle, seed, log_level
        )
        system = QuizSystem(settings, reporter=ConsoleReporter(console))
        problems = system.load_problems()
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    except ProblemSourceError as exc:
        console.print(f"[red]Failed to parse the provided CSV file.[/red] {exc}", highlight=False)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]", highlight=False)
        raise typer.Exit(code=1) from exc

    system.run(problems)


@app.command()
def version():
    """Print the installed version."""
    console.print(f"timed-quiz {__version__}")


def main() -> None:
    """
    Console-script entry point.

    A read abandoned at the deadline can stay blocked on stdin forever. When one is
    still outstanding after the command returns, flush output and leave via `os._exit`
    so interpreter shutdown never contends with the blocked reader for stdin.
    """
    try:
        app()
        code = 0
    except SystemExit as exc:
        code = exc.code
    if outstanding_reads():
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(code if isinstance(code, int) else (0 if code is None else 1))
    sys.exit(code)


if __name__ == "__main__":
    main()
