from .loader import load_settings
from .schema import LoggingConfig, QuizConfig, Settings

__all__ = ["LoggingConfig", "QuizConfig", "Settings", "load_settings"]
