"""
Pydantic models for the interview practice system.
Covers the question bank records, answers with feedback, the session
snapshot and the request bodies accepted by the API.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from utils.config import config


class QuestionType(str, Enum):
    """Interview mode, also used as the type of each question."""
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SessionStatus(str, Enum):
    """
    Lifecycle status of an interview session.

    SETUP describes the configuration step before any session exists;
    a session object is always created directly in IN_PROGRESS.
    """
    SETUP = "setup"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# ========================================
# Question bank
# ========================================

class Question(BaseModel):
    """A canned interview question with its expected answer points."""
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    type: QuestionType
    category: str
    difficulty: Difficulty
    expected_answer_points: Tuple[str, ...] = ()


class RoleInfo(BaseModel):
    """A selectable target role and its optional domains."""
    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    domains: Tuple[str, ...] = ()


# ========================================
# Answers and feedback
# ========================================

class AnswerFeedback(BaseModel):
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class Evaluation(BaseModel):
    """Score and feedback produced by an evaluator for one answer."""
    score: int = Field(ge=0, le=10)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    @property
    def feedback(self) -> AnswerFeedback:
        return AnswerFeedback(
            strengths=list(self.strengths),
            improvements=list(self.improvements),
            suggestions=list(self.suggestions),
        )


class Answer(BaseModel):
    """A submitted response to one question."""
    question_id: str
    text: str
    score: int = Field(ge=0, le=10)
    feedback: AnswerFeedback
    timestamp: datetime = Field(default_factory=datetime.now)


# ========================================
# Session
# ========================================

class User(BaseModel):
    name: str
    role: str
    domain: Optional[str] = None


class SessionConfig(BaseModel):
    """Interview configuration, fixed once the session is created."""
    model_config = ConfigDict(frozen=True)

    role: str
    domain: Optional[str] = None
    mode: QuestionType
    question_count: int = Field(ge=0)


class SessionSummary(BaseModel):
    """Aggregate feedback computed when a session completes."""
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    overall_feedback: str = ""


class InterviewSession(BaseModel):
    """Read-only snapshot of an interview session."""
    id: str
    user: User
    config: SessionConfig
    questions: List[Question] = Field(default_factory=list)
    answers: List[Answer] = Field(default_factory=list)
    current_question_index: int = 0
    status: SessionStatus = SessionStatus.IN_PROGRESS
    start_time: datetime
    end_time: Optional[datetime] = None
    final_score: Optional[int] = None
    summary: Optional[SessionSummary] = None


# ========================================
# API request models
# ========================================

class StartInterviewRequest(BaseModel):
    user_name: str = Field(min_length=1)
    role: str = Field(min_length=1)
    domain: Optional[str] = None
    mode: QuestionType = QuestionType.TECHNICAL
    question_count: int = Field(
        default_factory=lambda: config.interview.default_question_count,
        ge=1,
        le=config.interview.max_question_count,
    )


class SubmitAnswerRequest(BaseModel):
    text: str
