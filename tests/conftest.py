# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from models.schemas import (
    Difficulty,
    Evaluation,
    Question,
    QuestionType,
    SessionConfig,
    User,
)
from interview.state import InterviewStateMachine
from utils.config import config


class FixedScoreEvaluator:
    """Scores an answer with the integer written in it."""

    def evaluate(self, question, answer_text):
        score = int(answer_text.strip())
        return Evaluation(
            score=score,
            strengths=[f"strength {question.id}"],
            improvements=[f"improvement {question.id}"],
            suggestions=[],
        )


def make_question(qid="q1", points=(), qtype=QuestionType.TECHNICAL):
    return Question(
        id=qid,
        text=f"Question {qid}?",
        type=qtype,
        category="Testing",
        difficulty=Difficulty.EASY,
        expected_answer_points=tuple(points),
    )


@pytest.fixture
def user():
    return User(name="Ada", role="software-engineer")


@pytest.fixture
def technical_config():
    return SessionConfig(role="software-engineer", mode=QuestionType.TECHNICAL, question_count=3)


@pytest.fixture
def three_questions():
    return [
        make_question("q1", ["Stack follows LIFO principle"]),
        make_question("q2", ["Queue follows FIFO principle"]),
        make_question("q3", ["Database design with mapping table"]),
    ]


@pytest.fixture
def scored_session(user, technical_config, three_questions):
    """Session whose answers are scored by their numeric text."""
    return InterviewStateMachine(
        user=user,
        session_config=technical_config,
        questions=three_questions,
        evaluator=FixedScoreEvaluator(),
    )


@pytest.fixture
def catalog_session(user, technical_config):
    """Session backed by the real question bank and keyword evaluator."""
    return InterviewStateMachine(user=user, session_config=technical_config)


@pytest.fixture
def no_delay(monkeypatch):
    monkeypatch.setattr(config.interview, "evaluation_delay_seconds", 0)


@pytest.fixture
def app(no_delay):
    """Create test app instance."""
    from main import create_app
    return create_app()


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)
