# tests/test_api.py
import asyncio

import httpx
import pytest
from fastapi import status

from utils.config import config

STACK_ANSWER = "A stack follows LIFO and is used for undo operations, around 50 chars"


def start(client, **overrides):
    body = {
        "user_name": "Ada",
        "role": "software-engineer",
        "mode": "technical",
        "question_count": 3,
    }
    body.update(overrides)
    return client.post("/start-interview", json=body)


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "running"


def test_roles(client):
    roles = client.get("/roles").json()["roles"]
    assert [r["value"] for r in roles][:2] == ["software-engineer", "product-manager"]

    assert client.get("/roles/product-manager").json()["label"] == "Product Manager"
    assert client.get("/roles/astronaut").status_code == status.HTTP_404_NOT_FOUND


def test_status_reports_setup_without_session(client):
    assert client.get("/interview-status").json()["status"] == "setup"
    assert client.post("/submit-answer", json={"text": "hi"}).status_code == status.HTTP_400_BAD_REQUEST


def test_invalid_start_request(client):
    assert start(client, mode="casual").status_code == 422
    assert start(client, question_count=0).status_code == 422
    assert start(client, user_name="").status_code == 422


def test_start_interview(client):
    response = start(client, domain="backend")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_questions"] == 3
    assert data["interview"]["status"] == "in-progress"
    assert data["interview"]["current_question"]["id"] == "se-tech-1"
    assert data["interview"]["domain"] == "backend"


def test_submit_retry_and_empty_answer(client):
    start(client)

    assert client.post("/submit-answer", json={"text": "   "}).status_code == status.HTTP_400_BAD_REQUEST
    assert client.post("/retry-question").status_code == status.HTTP_409_CONFLICT

    response = client.post("/submit-answer", json={"text": STACK_ANSWER})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["answer"]["score"] == 8
    assert data["score_label"] == "Excellent"
    assert data["interview"]["question_number"] == 1
    assert data["interview"]["current_answer"]["question_id"] == "se-tech-1"

    response = client.post("/retry-question")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["interview"]["current_answer"] is None


def test_full_interview_flow(client):
    start(client)

    client.post("/submit-answer", json={"text": STACK_ANSWER})
    assert client.post("/next-question").json()["interview_ended"] is False
    assert client.post("/skip-question").json()["interview"]["question_number"] == 3
    assert client.get("/interview-summary").status_code == status.HTTP_409_CONFLICT

    data = client.post("/next-question").json()
    assert data["interview_ended"] is True
    assert data["final_score"] == 8
    assert data["summary"]["overall_feedback"].startswith("Excellent")

    assert client.post("/submit-answer", json={"text": "late"}).status_code == status.HTTP_409_CONFLICT
    assert client.post("/next-question").status_code == status.HTTP_409_CONFLICT

    summary = client.get("/interview-summary").json()
    assert summary["session"]["status"] == "completed"
    assert summary["export"]["finalScore"] == "8/10"
    assert summary["export"]["questions"] == 3

    export = client.get("/interview-summary/export")
    assert export.status_code == status.HTTP_200_OK
    assert "interview-summary-session-" in export.headers["content-disposition"]
    assert export.json()["candidate"] == "Ada"


def test_end_interview_early(client):
    start(client)
    data = client.post("/end-interview").json()
    assert data["status"] == "completed"
    assert data["final_score"] == 0
    assert data["score_label"] == "Needs Improvement"


def test_restart_and_reset(client):
    first = start(client).json()["session_id"]
    second = start(client, mode="behavioral").json()
    assert second["session_id"] != first
    assert second["total_questions"] == 2

    assert client.post("/reset-interview").status_code == status.HTTP_200_OK
    assert client.get("/interview-status").json()["status"] == "setup"


def test_start_rejects_unknown_role_and_domain(client):
    assert start(client, role="astronaut").status_code == status.HTTP_404_NOT_FOUND
    assert start(client, domain="quantum").status_code == 422
    assert client.get("/interview-status").json()["status"] == "setup"


async def _submit_while_advancing(app, question_count):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        await client.post("/start-interview", json={
            "user_name": "Ada",
            "role": "software-engineer",
            "mode": "technical",
            "question_count": question_count,
        })
        submit = asyncio.create_task(client.post("/submit-answer", json={"text": STACK_ANSWER}))
        await asyncio.sleep(0.05)
        advanced = await client.post("/next-question")
        submitted = await submit
    return advanced, submitted


@pytest.mark.asyncio
async def test_submit_during_delay_keeps_answer_with_its_question(app, monkeypatch):
    monkeypatch.setattr(config.interview, "evaluation_delay_seconds", 0.3)

    advanced, submitted = await _submit_while_advancing(app, question_count=3)

    assert advanced.json()["interview"]["current_question"]["id"] == "se-tech-2"
    assert submitted.status_code == status.HTTP_409_CONFLICT
    assert "se-tech-1" in submitted.json()["detail"]

    session = app.state.controller.session
    assert "se-tech-2" not in session.answers
    assert session.answers == {}


@pytest.mark.asyncio
async def test_submit_during_delay_after_completion(app, monkeypatch):
    monkeypatch.setattr(config.interview, "evaluation_delay_seconds", 0.3)

    advanced, submitted = await _submit_while_advancing(app, question_count=1)

    assert advanced.json()["interview_ended"] is True
    assert submitted.status_code == status.HTTP_409_CONFLICT
    assert "completed" in submitted.json()["detail"]
    assert app.state.controller.session.final_score == 0


@pytest.mark.asyncio
async def test_submit_with_delay_records_answer(app, monkeypatch):
    monkeypatch.setattr(config.interview, "evaluation_delay_seconds", 0.05)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        await client.post("/start-interview", json={"user_name": "Ada", "role": "software-engineer"})
        response = await client.post("/submit-answer", json={"text": STACK_ANSWER})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["answer"]["question_id"] == "se-tech-1"
