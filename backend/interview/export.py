"""Summary export for completed interview sessions."""
import json
from datetime import date
from typing import Any, Dict, Optional

from models.schemas import InterviewSession, SessionStatus


def duration_minutes(session: InterviewSession) -> int:
    """Whole minutes between start and end, 0 if the session has no end."""
    if session.end_time is None:
        return 0
    return int((session.end_time - session.start_time).total_seconds() // 60)


def build_export_record(
    session: InterviewSession,
    completed_on: Optional[date] = None
) -> Dict[str, Any]:
    """
    Flatten a completed session into the exported summary record.

    Raises:
        ValueError: if the session has not been completed
    """
    if session.status != SessionStatus.COMPLETED:
        raise ValueError(f"Session {session.id} is not completed")

    completed_on = completed_on or date.today()
    return {
        "candidate": session.user.name,
        "role": session.config.role,
        "mode": session.config.mode.value,
        "duration": f"{duration_minutes(session)} minutes",
        "finalScore": f"{session.final_score or 0}/10",
        "questions": len(session.questions),
        "completed": completed_on.isoformat(),
        "summary": session.summary.model_dump() if session.summary else None,
    }


def export_filename(session: InterviewSession) -> str:
    return f"interview-summary-{session.id}.json"


def export_summary_json(session: InterviewSession, completed_on: Optional[date] = None) -> str:
    """Export record as pretty-printed JSON."""
    return json.dumps(build_export_record(session, completed_on), indent=2)
