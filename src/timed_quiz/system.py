from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from timed_quiz.config import Settings, load_settings
from timed_quiz.data_models import Problem, QuizResult
from timed_quiz.ingestion import load_problems
from timed_quiz.session import QuizReporter, QuizRunner
from timed_quiz.session.pending import ReadLine
from timed_quiz.utils.logging import bind_session, configure_logging, get_logger
from timed_quiz.utils.randomness import make_rng

logger = get_logger(__name__)


class QuizSystem:
    """
    Facade wiring configuration, the problem source, and the session runner together.

    Both the CLI and tests go through this class: it loads problems from the configured
    CSV file and hands them to a `QuizRunner` with the configured time limit and shuffle
    flag.

    Attributes
    ----------
    settings : Settings
        Validated configuration; the `quiz` section drives each run.
    runner : QuizRunner
        Session loop bound to the given reader and reporter.
    """

    def __init__(
        self,
        settings: Settings,
        read_line: Optional[ReadLine] = None,
        reporter: Optional[QuizReporter] = None,
    ):
        self.settings = settings
        configure_logging(settings.logging.level, settings.logging.use_json)
        rng = make_rng(settings.quiz.seed)
        if read_line is None:
            self.runner = QuizRunner(reporter=reporter, rng=rng)
        else:
            self.runner = QuizRunner(read_line, reporter=reporter, rng=rng)

    @classmethod
    def from_config(
        cls,
        config_path: str | Path | None = None,
        read_line: Optional[ReadLine] = None,
        reporter: Optional[QuizReporter] = None,
    ) -> "QuizSystem":
        """Build a system from a YAML config file (or defaults when none is given)."""
        return cls(load_settings(config_path), read_line=read_line, reporter=reporter)

    def load_problems(self) -> List[Problem]:
        """Parse the configured problem file. Raises before any session starts on failure."""
        path = self.settings.quiz.problems_path
        problems = load_problems(path)
        logger.info("problems_loaded", path=str(path), count=len(problems))
        return problems

    def run(self, problems: Optional[List[Problem]] = None) -> QuizResult:
        """Run one timed session over `problems`, loading them from disk when omitted."""
        if problems is None:
            problems = self.load_problems()
        quiz = self.settings.quiz
        with bind_session(
            total=len(problems),
            time_limit_seconds=quiz.time_limit_seconds,
            shuffle=quiz.shuffle,
        ):
            logger.info("session_starting")
            result = self.runner.run(problems, quiz.time_limit_seconds, shuffle=quiz.shuffle)
            logger.info(
                "session_finished",
                status=result.status.value,
                correct=result.correct,
                answered=result.answered,
            )
        return result
