from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuizConfig(BaseModel):
    """Session-level settings: where problems come from and how long the learner gets."""

    problems_path: Path = Field(Path("problems.csv"), description="CSV file of question,answer rows.")
    time_limit_seconds: float = Field(30.0, ge=0, description="Budget for the whole quiz.")
    shuffle: bool = Field(False, description="Shuffle problem order before the clock starts.")
    seed: Optional[int] = Field(None, description="Seed for the shuffle, mostly for tests.")


class LoggingConfig(BaseModel):
    """Controls for log output and format."""

    model_config = ConfigDict(populate_by_name=True)

    level: str = Field("WARNING")
    use_json: bool = Field(False, alias="json")

    @field_validator("level")
    @classmethod
    def known_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return normalized


class Settings(BaseModel):
    """Top-level project configuration aggregating all sub-settings."""

    project_name: str = Field("Timed Quiz")
    quiz: QuizConfig = Field(default_factory=QuizConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
