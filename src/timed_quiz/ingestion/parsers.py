from __future__ import annotations

import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Type

from pydantic import ValidationError

from timed_quiz.data_models import Problem

logger = logging.getLogger(__name__)


class ProblemSourceError(ValueError):
    """Raised when a problem file cannot be read or is malformed."""


class Parser(ABC):
    """Abstract base for turning a raw problem file into `Problem` records."""

    extensions: List[str] = []

    @abstractmethod
    def parse(self, path: Path) -> List[Problem]:
        raise NotImplementedError


def parse_records(records: Iterable[Sequence[str]]) -> List[Problem]:
    """
    Convert `question,answer` rows into problems.

    Blank rows are skipped. Every remaining row must carry at least two fields and the
    same number of fields as the first row; extra columns are ignored.
    """
    problems: List[Problem] = []
    expected_width = None
    for line_no, record in enumerate(records, start=1):
        if not record:
            continue
        if expected_width is None:
            expected_width = len(record)
        if len(record) != expected_width:
            raise ProblemSourceError(
                f"record {line_no}: expected {expected_width} fields, got {len(record)}"
            )
        if len(record) < 2:
            raise ProblemSourceError(f"record {line_no}: expected 'question,answer'")
        try:
            problems.append(Problem(question=record[0], answer=record[1]))
        except ValidationError as exc:
            raise ProblemSourceError(f"record {line_no}: {exc}") from exc
    return problems


class CsvParser(Parser):
    extensions = [".csv"]

    def parse(self, path: Path) -> List[Problem]:
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as handle:
                return parse_records(csv.reader(handle))
        except (csv.Error, UnicodeDecodeError, OSError) as exc:
            raise ProblemSourceError(f"Failed to parse {path}: {exc}") from exc


def discover_parsers() -> Dict[str, Parser]:
    parser_classes: List[Type[Parser]] = [CsvParser]
    parsers: Dict[str, Parser] = {}
    for parser_cls in parser_classes:
        parser = parser_cls()
        for ext in parser.extensions:
            parsers[ext.lower()] = parser
    return parsers


def load_problems(path: Path) -> List[Problem]:
    """Parse a problem file, picking the parser from its extension."""
    if not path.exists():
        raise FileNotFoundError(f"Problem file not found: {path}")
    parsers = discover_parsers()
    parser = parsers.get(path.suffix.lower())
    if not parser:
        raise ProblemSourceError(f"No parser available for extension {path.suffix or '(none)'}")
    logger.info("Parsing %s with %s", path, parser.__class__.__name__)
    problems = parser.parse(path)
    logger.info("Loaded %d problems from %s", len(problems), path)
    return problems
