"""
Session summary aggregation.
Reduces the answers of a finished interview into a final score and
aggregate feedback.
"""
import math
from typing import Iterable, List, Optional

from models.schemas import Answer, SessionSummary
from utils.config import config


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up."""
    return int(math.floor(value + 0.5))


def unique_in_order(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class SummaryAggregator:
    """
    Builds the end-of-interview summary from recorded answers.
    Only answered questions contribute; skipped ones have no Answer.
    """

    # Average score tiers, checked top down
    RECOMMENDATIONS = [
        (8, [
            "Continue practicing advanced topics",
            "Consider mentoring others to reinforce your knowledge",
        ]),
        (6, [
            "Focus on providing more detailed examples",
            "Practice system design and architecture questions",
        ]),
        (0, [
            "Practice more technical fundamentals",
            "Work on communication and explanation skills",
        ]),
    ]

    OVERALL_FEEDBACK = [
        (8, "Excellent performance! You demonstrate strong technical knowledge and communication skills."),
        (6, "Good performance with room for improvement. Focus on the areas highlighted below."),
        (0, "There's significant room for improvement. Consider additional preparation in the fundamental areas."),
    ]

    SCORE_LABELS = [
        (8, "Excellent"),
        (6, "Good"),
        (4, "Fair"),
        (0, "Needs Improvement"),
    ]

    @staticmethod
    def _pick(tiers, score: float):
        for threshold, value in tiers:
            if score >= threshold:
                return value
        return tiers[-1][1]

    @classmethod
    def average_score(cls, answers: List[Answer]) -> float:
        """Mean answer score, 0.0 when nothing was answered."""
        if not answers:
            return 0.0
        return sum(a.score for a in answers) / len(answers)

    @classmethod
    def calculate_final_score(cls, answers: List[Answer]) -> int:
        """Rounded mean of the recorded answer scores."""
        return round_half_up(cls.average_score(answers))

    @classmethod
    def get_score_label(cls, score: float) -> str:
        """Human-readable label for a 0-10 score."""
        return cls._pick(cls.SCORE_LABELS, score)

    @classmethod
    def generate_summary(
        cls,
        answers: List[Answer],
        item_limit: Optional[int] = None
    ) -> SessionSummary:
        """
        Aggregate feedback across all answers.

        Args:
            answers: Recorded answers, in submission order
            item_limit: Max strengths/improvements to keep

        Returns:
            SessionSummary with deduplicated strengths and improvements,
            tiered recommendations and an overall feedback sentence
        """
        limit = item_limit if item_limit is not None else config.interview.summary_item_limit
        avg_score = cls.average_score(answers)

        strengths = unique_in_order(s for a in answers for s in a.feedback.strengths)
        improvements = unique_in_order(i for a in answers for i in a.feedback.improvements)

        return SessionSummary(
            strengths=strengths[:limit],
            improvements=improvements[:limit],
            recommendations=list(cls._pick(cls.RECOMMENDATIONS, avg_score)),
            overall_feedback=cls._pick(cls.OVERALL_FEEDBACK, avg_score),
        )
