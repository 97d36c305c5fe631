"""
Configuration settings for the interview practice system.
All settings can be overridden via environment variables.
"""
import os
from typing import List
from dataclasses import dataclass, field


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class EvaluationConfig:
    """Keyword heuristic scoring parameters."""
    points_per_match: int = 2
    long_answer_threshold: int = 100
    very_long_answer_threshold: int = 300
    max_score: int = 10
    passing_score: int = 6  # Below this, remedial suggestions are added
    strength_point_limit: int = 2  # Only the first N matched points become strengths
    label_words: int = 3


@dataclass
class InterviewConfig:
    """Interview flow configuration."""
    default_question_count: int = field(
        default_factory=lambda: int(os.getenv("INTERVIEW_DEFAULT_QUESTION_COUNT", "3"))
    )
    max_question_count: int = 7

    # Simulated processing pause before an answer is evaluated
    evaluation_delay_seconds: float = field(
        default_factory=lambda: float(os.getenv("INTERVIEW_EVALUATION_DELAY", "1.5"))
    )

    # Summary aggregation
    summary_item_limit: int = 4


@dataclass
class APIConfig:
    """HTTP layer configuration."""
    title: str = "Interview Practice API"
    description: str = "Mock interview practice with heuristic answer feedback"
    version: str = "1.0.0"
    cors_origins: List[str] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", "*"))
    )


class Config:
    """Main configuration class combining all config sections."""

    def __init__(self):
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.evaluation = EvaluationConfig()
        self.interview = InterviewConfig()
        self.api = APIConfig()

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        return cls()


# Global config instance
config = Config()
