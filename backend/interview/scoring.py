"""
Answer scoring and evaluation system.
Scores free-text answers by loose keyword overlap with the expected
answer points of each question.
"""
import logging
from typing import List, Optional, Protocol

from models.schemas import Evaluation, Question, QuestionType
from utils.config import config, EvaluationConfig

logger = logging.getLogger(__name__)


class AnswerEvaluator(Protocol):
    """Anything that can turn a question and an answer into an Evaluation."""

    def evaluate(self, question: Question, answer_text: str) -> Evaluation:
        ...


class KeywordEvaluator:
    """
    Heuristic evaluator based on fuzzy keyword matching.

    Each expected answer point that shares a token with the answer (one
    token being a substring of the other) is worth a fixed number of
    points. Longer answers get a small bonus and the total is capped.
    """

    # Technical answers scoring below the passing mark
    TECHNICAL_REMEDIAL = [
        "Review fundamental concepts in this area",
        "Practice explaining technical concepts clearly",
    ]
    EXAMPLE_SUGGESTION = "Include concrete examples to illustrate your points"
    EXAMPLE_MARKERS = ("example", "for instance")

    STAR_SUGGESTION = "Use the STAR method: Situation, Task, Action, Result"
    STAR_MARKERS = ("situation", "context")
    DETAIL_SUGGESTION = "Provide more specific details about your actions and outcomes"

    def __init__(self, settings: Optional[EvaluationConfig] = None):
        self.settings = settings or config.evaluation

    @staticmethod
    def tokenize(text: str) -> List[str]:
        """Lowercase whitespace tokens. Blank input gives no tokens."""
        return text.lower().split()

    @staticmethod
    def point_matches(point_tokens: List[str], answer_tokens: List[str]) -> bool:
        """True if any point token and answer token contain one another."""
        return any(
            answer_word in word or word in answer_word
            for word in point_tokens
            for answer_word in answer_tokens
        )

    def point_label(self, point: str) -> str:
        """First few words of an expected point, used in feedback messages."""
        return " ".join(point.split(" ")[:self.settings.label_words])

    def length_bonus(self, answer_text: str) -> int:
        bonus = 0
        if len(answer_text) > self.settings.long_answer_threshold:
            bonus += 1
        if len(answer_text) > self.settings.very_long_answer_threshold:
            bonus += 1
        return bonus

    def evaluate(self, question: Question, answer_text: str) -> Evaluation:
        """
        Evaluate an answer against a question's expected points.

        Args:
            question: The question being answered
            answer_text: Raw answer text as typed by the candidate

        Returns:
            Evaluation with a 0-10 score and feedback lists
        """
        answer_tokens = self.tokenize(answer_text)

        score = 0
        strengths: List[str] = []
        improvements: List[str] = []

        for index, point in enumerate(question.expected_answer_points):
            if self.point_matches(self.tokenize(point), answer_tokens):
                score += self.settings.points_per_match
                if index < self.settings.strength_point_limit:
                    strengths.append(f"Good understanding of {self.point_label(point)}")
            else:
                improvements.append(f"Consider elaborating on {self.point_label(point)}")

        score += self.length_bonus(answer_text)
        score = max(0, min(score, self.settings.max_score))

        suggestions = self.suggest(question, answer_text, score)

        logger.debug(
            f"Evaluated answer for {question.id}: score={score}, "
            f"matched={len(question.expected_answer_points) - len(improvements)}"
            f"/{len(question.expected_answer_points)}"
        )

        return Evaluation(
            score=score,
            strengths=strengths,
            improvements=improvements,
            suggestions=suggestions,
        )

    def suggest(self, question: Question, answer_text: str, score: int) -> List[str]:
        """
        Build improvement suggestions for the question type.

        Marker checks are case-sensitive against the raw answer text.
        """
        suggestions: List[str] = []
        below_passing = score < self.settings.passing_score

        if question.type == QuestionType.TECHNICAL:
            if below_passing:
                suggestions.extend(self.TECHNICAL_REMEDIAL)
            if not any(marker in answer_text for marker in self.EXAMPLE_MARKERS):
                suggestions.append(self.EXAMPLE_SUGGESTION)
        else:
            if not any(marker in answer_text for marker in self.STAR_MARKERS):
                suggestions.append(self.STAR_SUGGESTION)
            if below_passing:
                suggestions.append(self.DETAIL_SUGGESTION)

        return suggestions
