from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

import structlog

# Marks the handler installed here so reconfiguring replaces it instead of stacking.
_HANDLER_NAME = "timed-quiz-stderr"


class _CurrentStderrHandler(logging.StreamHandler):
    """Write to whatever `sys.stderr` is at emit time, so swapped streams are honored."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def configure_logging(
    level: str = "WARNING", json_output: bool = False, stream: Optional[TextIO] = None
) -> None:
    """
    Send stdlib and structlog output to stderr, never to the quiz's stdout.

    Questions are printed without a trailing newline while a read is pending, so a log
    line on stdout would land in the middle of the prompt. One stderr handler is
    installed on the root logger (replacing a previous one from this function), and
    structlog events carry any session fields bound with `bind_session`.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    target = stream if stream is not None else sys.stderr

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
    handler = logging.StreamHandler(stream) if stream is not None else _CurrentStderrHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(numeric_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        colors = bool(getattr(target, "isatty", lambda: False)())
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def bind_session(**fields):
    """Context manager attaching session fields (source, limit, ...) to every event inside it."""
    return structlog.contextvars.bound_contextvars(**fields)


def get_logger(name: Optional[str] = None):
    """Return a structlog logger that inherits the global configuration."""
    return structlog.get_logger(name)
