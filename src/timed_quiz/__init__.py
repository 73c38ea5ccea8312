"""
Timed quiz runner.

Asks question/answer pairs loaded from a CSV file under one wall-clock deadline and
reports how many were answered correctly before time ran out.
"""

__version__ = "0.1.0"

from .config.loader import load_settings
from .data_models import Problem, QuizResult
from .session import QuizRunner

__all__ = ["Problem", "QuizResult", "QuizRunner", "__version__", "load_settings"]
