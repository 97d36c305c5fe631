"""
Question bank and role catalog.
Static lookup of canned questions keyed by role and interview mode.
"""
from typing import Dict, List, Optional, Any

from models.schemas import Difficulty, Question, QuestionType, RoleInfo


# Selectable roles, in display order
ROLES: List[RoleInfo] = [
    RoleInfo(
        value="software-engineer",
        label="Software Engineer",
        domains=("frontend", "backend", "fullstack", "mobile", "devops"),
    ),
    RoleInfo(
        value="product-manager",
        label="Product Manager",
        domains=("growth", "platform", "consumer", "b2b"),
    ),
    RoleInfo(
        value="data-analyst",
        label="Data Analyst",
        domains=("business-intelligence", "marketing", "finance", "operations"),
    ),
    RoleInfo(
        value="data-scientist",
        label="Data Scientist",
        domains=("machine-learning", "nlp", "computer-vision", "recommendations"),
    ),
    RoleInfo(
        value="ui-ux-designer",
        label="UI/UX Designer",
        domains=("web", "mobile", "enterprise", "consumer"),
    ),
]


QUESTION_BANK: Dict[str, List[Question]] = {
    "software-engineer-technical": [
        Question(
            id="se-tech-1",
            text="Explain the difference between a stack and a queue. When would you use each data structure?",
            type=QuestionType.TECHNICAL,
            category="Data Structures",
            difficulty=Difficulty.MEDIUM,
            expected_answer_points=(
                "Stack follows LIFO (Last In First Out) principle",
                "Queue follows FIFO (First In First Out) principle",
                "Stack use cases: function calls, undo operations, expression evaluation",
                "Queue use cases: task scheduling, breadth-first search, buffering",
            ),
        ),
        Question(
            id="se-tech-2",
            text="Design a simple URL shortener like bit.ly. What are the key components and how would you handle scale?",
            type=QuestionType.TECHNICAL,
            category="System Design",
            difficulty=Difficulty.HARD,
            expected_answer_points=(
                "URL encoding/decoding service",
                "Database design with mapping table",
                "Caching layer for popular URLs",
                "Load balancing and horizontal scaling",
                "Analytics and rate limiting",
            ),
        ),
        Question(
            id="se-tech-3",
            text="Write a function to find the longest palindromic substring in a given string.",
            type=QuestionType.TECHNICAL,
            category="Algorithms",
            difficulty=Difficulty.MEDIUM,
            expected_answer_points=(
                "Consider dynamic programming approach",
                "Expand around centers method",
                "Handle edge cases (empty string, single character)",
                "Time complexity analysis",
                "Space optimization considerations",
            ),
        ),
    ],
    "software-engineer-behavioral": [
        Question(
            id="se-beh-1",
            text="Tell me about a time when you had to work with a difficult team member. How did you handle the situation?",
            type=QuestionType.BEHAVIORAL,
            category="Teamwork",
            difficulty=Difficulty.MEDIUM,
            expected_answer_points=(
                "Clear situation description",
                "Specific actions taken",
                "Focus on communication and conflict resolution",
                "Measurable positive outcome",
                "Learning or growth from experience",
            ),
        ),
        Question(
            id="se-beh-2",
            text="Describe a project where you had to learn a new technology quickly. What was your approach?",
            type=QuestionType.BEHAVIORAL,
            category="Learning & Adaptability",
            difficulty=Difficulty.MEDIUM,
            expected_answer_points=(
                "Specific technology and context",
                "Structured learning approach",
                "Resource utilization",
                "Application of new knowledge",
                "Impact on project success",
            ),
        ),
    ],
    "product-manager-technical": [
        Question(
            id="pm-tech-1",
            text="How would you prioritize features for a new mobile app? Walk me through your framework.",
            type=QuestionType.TECHNICAL,
            category="Product Strategy",
            difficulty=Difficulty.MEDIUM,
            expected_answer_points=(
                "User impact and business value assessment",
                "Resource requirement evaluation",
                "Risk analysis and dependencies",
                "Data-driven decision making",
                "Stakeholder alignment process",
            ),
        ),
    ],
    "product-manager-behavioral": [
        Question(
            id="pm-beh-1",
            text="Tell me about a time when you had to make a difficult product decision with limited data.",
            type=QuestionType.BEHAVIORAL,
            category="Decision Making",
            difficulty=Difficulty.HARD,
            expected_answer_points=(
                "Clear context and constraints",
                "Decision-making process",
                "Stakeholder management",
                "Outcome measurement",
                "Lessons learned",
            ),
        ),
    ],
}


class QuestionCatalog:
    """
    Read-only access to the question bank and role catalog.
    """

    @staticmethod
    def bank_key(role: str, mode: QuestionType) -> str:
        """Build the question bank key for a role and mode."""
        return f"{role}-{QuestionType(mode).value}"

    @classmethod
    def get_questions(
        cls,
        role: str,
        mode: QuestionType,
        count: int = 3
    ) -> List[Question]:
        """
        Look up the questions for a role and mode.

        Args:
            role: Role value, e.g. "software-engineer"
            mode: Interview mode
            count: Maximum number of questions to return

        Returns:
            The first `count` questions in catalog order, or an empty
            list if the bank has nothing for this role and mode
        """
        if count <= 0:
            return []
        available = QUESTION_BANK.get(cls.bank_key(role, mode), [])
        return list(available[:count])

    @classmethod
    def available_count(cls, role: str, mode: QuestionType) -> int:
        """Number of questions the bank holds for a role and mode."""
        return len(QUESTION_BANK.get(cls.bank_key(role, mode), []))

    @classmethod
    def get_roles(cls) -> List[RoleInfo]:
        return list(ROLES)

    @classmethod
    def get_role(cls, value: str) -> Optional[RoleInfo]:
        """Get a role by its value."""
        for role in ROLES:
            if role.value == value:
                return role
        return None

    @classmethod
    def get_all_roles_info(cls) -> List[Dict[str, Any]]:
        """Get the role catalog with per-mode question availability."""
        return [
            {
                **role.model_dump(),
                "available_questions": {
                    mode.value: cls.available_count(role.value, mode)
                    for mode in QuestionType
                },
            }
            for role in ROLES
        ]
