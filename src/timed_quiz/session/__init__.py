from .pending import Deadline, PendingAnswer, outstanding_reads
from .reporter import ConsoleReporter, QuizReporter
from .runner import QuizRunner, QuizSession

__all__ = [
    "ConsoleReporter",
    "Deadline",
    "PendingAnswer",
    "QuizReporter",
    "QuizRunner",
    "QuizSession",
    "outstanding_reads",
]
