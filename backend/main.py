"""
Interview Practice - FastAPI Backend

Mock interview practice with:
- Canned question bank per role and mode
- Heuristic keyword feedback on every answer
- Retry, skip and end-of-interview summary with JSON export
"""
import asyncio
import logging
import os
import sys
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from utils.config import config
from models.schemas import (
    SessionStatus,
    StartInterviewRequest,
    SubmitAnswerRequest,
)
from interview.catalog import QuestionCatalog
from interview.export import build_export_record, export_filename, export_summary_json
from interview.state import InterviewStateMachine
from interview.summary import SummaryAggregator

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ================================================================
# Session Management
# ================================================================

class SessionController:
    """
    Owns the single live interview session.
    Restarting replaces the session with a brand-new one.
    """

    def __init__(self):
        self.session: Optional[InterviewStateMachine] = None

    def start(self, request: StartInterviewRequest) -> InterviewStateMachine:
        """Create a new session, discarding any current one."""
        if self.session is not None:
            logger.info(f"Discarding session {self.session.session_id}")
        self.session = InterviewStateMachine.from_request(request)
        return self.session

    def current(self) -> InterviewStateMachine:
        """Get the current interview session."""
        if self.session is None:
            raise HTTPException(
                status_code=400,
                detail="No active interview session. Please start an interview first."
            )
        return self.session

    def clear(self):
        """Clear the current session."""
        self.session = None


def get_controller(request: Request) -> SessionController:
    return request.app.state.controller


def get_current_session(
    controller: SessionController = Depends(get_controller)
) -> InterviewStateMachine:
    return controller.current()


def _reject_if_completed(session: InterviewStateMachine):
    if session.is_completed:
        raise HTTPException(
            status_code=409,
            detail="The interview has been completed. Start a new interview to continue."
        )


def _completion_payload(session: InterviewStateMachine) -> Dict[str, Any]:
    return {
        "status": session.status.value,
        "final_score": session.final_score,
        "score_label": SummaryAggregator.get_score_label(session.final_score or 0),
        "summary": session.summary.model_dump() if session.summary else None,
    }


# ================================================================
# FastAPI App Initialization
# ================================================================

def create_app() -> FastAPI:
    app = FastAPI(
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.controller = SessionController()

    # ================================================================
    # API Endpoints
    # ================================================================

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "status": "running",
            "version": config.api.version,
            "service": config.api.title,
        }

    @app.get("/roles")
    async def list_roles():
        """Role catalog with question availability per mode."""
        return {"roles": QuestionCatalog.get_all_roles_info()}

    @app.get("/roles/{value}")
    async def get_role(value: str):
        role = QuestionCatalog.get_role(value)
        if role is None:
            raise HTTPException(status_code=404, detail=f"Unknown role: {value}")
        return role.model_dump()

    @app.post("/start-interview")
    async def start_interview(
        request: StartInterviewRequest,
        controller: SessionController = Depends(get_controller)
    ):
        """
        Start a new interview session.

        Args:
            request: Candidate name, role, optional domain, mode and count

        Returns:
            Session info with the first question
        """
        role = QuestionCatalog.get_role(request.role)
        if role is None:
            raise HTTPException(status_code=404, detail=f"Unknown role: {request.role}")
        if request.domain and request.domain not in role.domains:
            raise HTTPException(
                status_code=422,
                detail=f"Unknown domain for {role.value}: {request.domain}"
            )

        session = controller.start(request)
        return {
            "status": "Interview started",
            "session_id": session.session_id,
            "total_questions": len(session.questions),
            "interview": session.get_status(),
        }

    @app.get("/interview-status")
    async def get_interview_status(
        controller: SessionController = Depends(get_controller)
    ):
        """
        Get current interview status.

        Reports the setup status while no session exists.
        """
        if controller.session is None:
            return {"status": SessionStatus.SETUP.value, "session_id": None}
        return controller.session.get_status()

    @app.post("/submit-answer")
    async def submit_answer(
        request: SubmitAnswerRequest,
        session: InterviewStateMachine = Depends(get_current_session)
    ):
        """
        Evaluate and record an answer to the current question.

        Returns:
            The recorded answer with score and feedback
        """
        _reject_if_completed(session)
        if not request.text.strip():
            raise HTTPException(status_code=400, detail="Answer text cannot be empty.")

        question = session.current_question
        if question is None:
            raise HTTPException(status_code=409, detail="There is no question to answer.")

        # Simulated evaluation time; not cancellable once started
        if config.interview.evaluation_delay_seconds > 0:
            await asyncio.sleep(config.interview.evaluation_delay_seconds)

        _reject_if_completed(session)
        answer = session.submit_answer(request.text, question_id=question.id)
        if answer is None:
            raise HTTPException(
                status_code=409,
                detail=f"The interview moved past question {question.id} before the answer was evaluated."
            )

        return {
            "answer": answer.model_dump(mode="json"),
            "score_label": SummaryAggregator.get_score_label(answer.score),
            "interview": session.get_status(),
        }

    @app.post("/retry-question")
    async def retry_question(session: InterviewStateMachine = Depends(get_current_session)):
        """Discard the current answer so the question can be answered again."""
        _reject_if_completed(session)
        if not session.retry_question():
            raise HTTPException(status_code=409, detail="The current question has no answer to retry.")
        return {"status": "Answer cleared", "interview": session.get_status()}

    @app.post("/skip-question")
    async def skip_question(session: InterviewStateMachine = Depends(get_current_session)):
        """Move on without answering the current question."""
        _reject_if_completed(session)
        moved = session.skip_question()
        if not moved and not session.is_completed:
            raise HTTPException(status_code=409, detail="There is no question to skip.")

        response: Dict[str, Any] = {
            "interview_ended": session.is_completed,
            "interview": session.get_status(),
        }
        if session.is_completed:
            response.update(_completion_payload(session))
        return response

    @app.post("/next-question")
    async def next_question(session: InterviewStateMachine = Depends(get_current_session)):
        """
        Advance to the next question.

        At the last question this completes the interview and returns
        the final score and summary.
        """
        _reject_if_completed(session)
        moved = session.advance_question()
        if not moved and not session.is_completed:
            raise HTTPException(status_code=409, detail="There is no question to advance from.")

        response: Dict[str, Any] = {
            "interview_ended": session.is_completed,
            "interview": session.get_status(),
        }
        if session.is_completed:
            response.update(_completion_payload(session))
        return response

    @app.post("/end-interview")
    async def end_interview(session: InterviewStateMachine = Depends(get_current_session)):
        """End the interview early and compute the summary."""
        _reject_if_completed(session)
        session.complete_session()
        return _completion_payload(session)

    @app.get("/interview-summary")
    async def get_interview_summary(session: InterviewStateMachine = Depends(get_current_session)):
        """
        Full summary of a completed interview.

        Returns:
            Session snapshot, final score and export record
        """
        if not session.is_completed:
            raise HTTPException(status_code=409, detail="The interview is still in progress.")

        snapshot = session.to_session()
        return {
            **_completion_payload(session),
            "session": snapshot.model_dump(mode="json"),
            "export": build_export_record(snapshot),
        }

    @app.get("/interview-summary/export")
    async def export_interview_summary(session: InterviewStateMachine = Depends(get_current_session)):
        """Download the summary as a JSON file."""
        if not session.is_completed:
            raise HTTPException(status_code=409, detail="The interview is still in progress.")

        snapshot = session.to_session()
        return Response(
            content=export_summary_json(snapshot),
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{export_filename(snapshot)}"'},
        )

    @app.post("/reset-interview")
    async def reset_interview(controller: SessionController = Depends(get_controller)):
        """
        Reset interview state and return to setup.

        Returns:
            Confirmation message
        """
        controller.clear()
        return {"status": "Interview reset successfully"}

    return app


app = create_app()


# ================================================================
# Main Entry Point
# ================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
