"""
Interview state machine for managing interview flow.
Tracks the question pointer, recorded answers and session status.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Dict, Any, Optional

from models.schemas import (
    Answer,
    InterviewSession,
    Question,
    SessionConfig,
    SessionStatus,
    SessionSummary,
    StartInterviewRequest,
    User,
)
from interview.catalog import QuestionCatalog
from interview.scoring import AnswerEvaluator, KeywordEvaluator
from interview.summary import SummaryAggregator

logger = logging.getLogger(__name__)


class InterviewStateMachine:
    """
    Manages the state of an interview session.

    The session starts in progress at the first question and only moves
    forward. Answers are keyed by question id, so resubmitting replaces
    the previous answer. Advancing past the last question completes the
    session, after which it is read-only.
    """

    def __init__(
        self,
        user: User,
        session_config: SessionConfig,
        questions: Optional[List[Question]] = None,
        evaluator: Optional[AnswerEvaluator] = None,
        session_id: Optional[str] = None,
    ):
        """
        Initialize a new interview session.

        Args:
            user: The candidate taking the interview
            session_config: Role, mode and question count
            questions: Questions to ask; looked up in the catalog if omitted
            evaluator: Answer evaluator, defaults to the keyword heuristic
            session_id: Optional session ID
        """
        self.session_id = session_id or f"session-{uuid.uuid4().hex[:12]}"
        self.user = user
        self.session_config = session_config

        if questions is None:
            questions = QuestionCatalog.get_questions(
                session_config.role, session_config.mode, session_config.question_count
            )
        self.questions = tuple(questions[:session_config.question_count])

        self.evaluator: AnswerEvaluator = evaluator or KeywordEvaluator()

        # Progress
        self.answers: Dict[str, Answer] = {}
        self.current_question_index = 0
        self.status = SessionStatus.IN_PROGRESS

        # Timing
        self.start_time = datetime.now()
        self.end_time: Optional[datetime] = None

        # Set on completion
        self.final_score: Optional[int] = None
        self.summary: Optional[SessionSummary] = None

        logger.info(
            f"Created session {self.session_id}: role={session_config.role}, "
            f"mode={session_config.mode.value}, questions={len(self.questions)}"
        )

    @classmethod
    def from_request(
        cls,
        request: StartInterviewRequest,
        evaluator: Optional[AnswerEvaluator] = None
    ) -> "InterviewStateMachine":
        """Create a session from the setup form."""
        user = User(name=request.user_name, role=request.role, domain=request.domain)
        session_config = SessionConfig(
            role=request.role,
            domain=request.domain,
            mode=request.mode,
            question_count=request.question_count,
        )
        return cls(user=user, session_config=session_config, evaluator=evaluator)

    # ========================================
    # Read access
    # ========================================

    @property
    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    @property
    def current_question(self) -> Optional[Question]:
        """The question being asked, or None if there is none."""
        if 0 <= self.current_question_index < len(self.questions):
            return self.questions[self.current_question_index]
        return None

    @property
    def current_answer(self) -> Optional[Answer]:
        """The recorded answer for the current question, if any."""
        question = self.current_question
        if question is None:
            return None
        return self.answers.get(question.id)

    @property
    def is_last_question(self) -> bool:
        return self.current_question_index >= len(self.questions) - 1

    @property
    def progress_percent(self) -> float:
        if not self.questions:
            return 0.0
        return (self.current_question_index + 1) / len(self.questions) * 100

    def get_recorded_answers(self) -> List[Answer]:
        """
        Answers that belong to this session's questions.
        Answers for unknown question ids are ignored.
        """
        question_ids = {q.id for q in self.questions}
        recorded = []
        for question_id, answer in self.answers.items():
            if question_id in question_ids:
                recorded.append(answer)
            else:
                logger.warning(
                    f"Session {self.session_id}: ignoring answer for unknown question {question_id}"
                )
        return recorded

    # ========================================
    # Transitions
    # ========================================

    def _accepts_changes(self, intent: str) -> bool:
        if self.is_completed:
            logger.warning(f"Session {self.session_id} is completed; ignoring {intent}")
            return False
        return True

    def submit_answer(self, text: str, question_id: Optional[str] = None) -> Optional[Answer]:
        """
        Evaluate and record an answer for the current question.

        Replaces any earlier answer for the same question. Does not move
        to the next question.

        Args:
            text: The candidate's answer
            question_id: Question the answer was written for; the
                submission is ignored if it is no longer the current one

        Returns:
            The recorded answer, or None if the submission was ignored
        """
        if not self._accepts_changes("submit"):
            return None

        question = self.current_question
        if question is None:
            logger.debug(f"Session {self.session_id}: no current question to answer")
            return None

        if question_id is not None and question_id != question.id:
            logger.warning(
                f"Session {self.session_id}: answer for {question_id} arrived after "
                f"moving to {question.id}; ignoring"
            )
            return None

        if not text or not text.strip():
            logger.debug(f"Session {self.session_id}: empty answer ignored")
            return None

        evaluation = self.evaluator.evaluate(question, text)
        answer = Answer(
            question_id=question.id,
            text=text,
            score=evaluation.score,
            feedback=evaluation.feedback,
            timestamp=datetime.now(),
        )

        # Upsert: the newest answer for a question goes last
        self.answers.pop(question.id, None)
        self.answers[question.id] = answer

        logger.info(f"Session {self.session_id}: answer to {question.id} scored {answer.score}/10")
        return answer

    def retry_question(self) -> bool:
        """
        Discard the answer to the current question so it can be answered again.

        Returns:
            True if an answer was removed
        """
        if not self._accepts_changes("retry"):
            return False

        question = self.current_question
        if question is None or question.id not in self.answers:
            logger.debug(f"Session {self.session_id}: nothing to retry")
            return False

        del self.answers[question.id]
        logger.info(f"Session {self.session_id}: retrying {question.id}")
        return True

    def advance_question(self) -> bool:
        """
        Move to the next question, completing the session at the end.

        Returns:
            True if moved to another question, False if the session
            was completed (or already was)
        """
        if not self._accepts_changes("advance"):
            return False

        if not self.questions:
            logger.debug(f"Session {self.session_id}: no questions to advance through")
            return False

        if not self.is_last_question:
            self.current_question_index += 1
            logger.info(
                f"Session {self.session_id}: moved to question "
                f"{self.current_question_index + 1}/{len(self.questions)}"
            )
            return True

        self.complete_session()
        return False

    def skip_question(self) -> bool:
        """Move on without answering. Leaves no answer for the question."""
        question = self.current_question
        if question is not None and not self.is_completed:
            logger.info(f"Session {self.session_id}: skipping {question.id}")
        return self.advance_question()

    def complete_session(self) -> Optional[SessionSummary]:
        """
        Finish the interview, computing the final score and summary.

        Returns:
            The summary, or None if the session was already completed
        """
        if not self._accepts_changes("complete"):
            return None

        recorded = self.get_recorded_answers()
        self.final_score = SummaryAggregator.calculate_final_score(recorded)
        self.summary = SummaryAggregator.generate_summary(recorded)
        self.end_time = datetime.now()
        self.status = SessionStatus.COMPLETED

        logger.info(
            f"Session {self.session_id} completed: final score {self.final_score}/10 "
            f"from {len(recorded)} of {len(self.questions)} answers"
        )
        return self.summary

    # ========================================
    # Serialization
    # ========================================

    def to_session(self) -> InterviewSession:
        """Convert state machine to InterviewSession model."""
        return InterviewSession(
            id=self.session_id,
            user=self.user,
            config=self.session_config,
            questions=list(self.questions),
            answers=list(self.answers.values()),
            current_question_index=self.current_question_index,
            status=self.status,
            start_time=self.start_time,
            end_time=self.end_time,
            final_score=self.final_score,
            summary=self.summary,
        )

    def get_status(self) -> Dict[str, Any]:
        """Get current interview status."""
        question = self.current_question
        answer = self.current_answer

        return {
            "session_id": self.session_id,
            "status": self.status.value,
            "role": self.session_config.role,
            "domain": self.session_config.domain,
            "mode": self.session_config.mode.value,
            "question_number": self.current_question_index + 1 if question else 0,
            "total_questions": len(self.questions),
            "progress_percent": round(self.progress_percent, 1),
            "is_last_question": self.is_last_question,
            "current_question": question.model_dump(mode="json") if question else None,
            "current_answer": answer.model_dump(mode="json") if answer else None,
            "answered_questions": len(self.answers),
            "is_completed": self.is_completed,
        }
