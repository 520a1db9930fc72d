from __future__ import annotations

import json
import os
from collections import deque
from typing import Any, Callable, Sequence

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["ORM_DB_URL"] = "sqlite:///./test.db"
    os.environ["ORM_USE_MYSQL"] = "false"
    os.environ["JWT_SECRET"] = "test-secret"
    os.environ.setdefault("CHAT_HISTORY_LIMIT", "20")

    # Ensure local .env cannot leak real credentials into tests.
    os.environ["ENVIRONMENT"] = "test"
    os.environ.pop("INFERENCE_API_KEY", None)


class QueuedInferenceClient:
    """Deterministic stand-in for the inference capability.

    Responses are served first-in first-out; dicts are encoded as JSON and
    exceptions are raised. Every call is recorded.
    """

    def __init__(self) -> None:
        self.responses: deque[Any] = deque()
        self.calls: list[dict[str, Any]] = []

    def queue(self, *responses: Any) -> "QueuedInferenceClient":
        for response in responses:
            if isinstance(response, (dict, list)):
                response = json.dumps(response)
            self.responses.append(response)
        return self

    def generate(self, messages: Sequence[dict], temperature: float) -> str:
        self.calls.append({"messages": [dict(m) for m in messages], "temperature": temperature})
        if not self.responses:
            raise AssertionError("unexpected inference call")
        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response


def complete_answers() -> dict[str, Any]:
    answers: dict[str, Any] = {
        "age": 19,
        "education_level": "Undergraduate",
        "current_field": "Computer Science",
        "goals": "Build software that helps people learn.",
        "work_environment": "Remote Work",
        "work_schedule": "Flexible Hours",
        "work_culture": ["Collaborative", "Innovative"],
        "values": ["Continuous Learning", "Making a Difference"],
        "motivation": "Solving Problems",
    }
    for key in (
        "interest_science",
        "interest_tech",
        "interest_arts",
        "interest_business",
        "interest_health",
        "interest_education",
        "interest_engineering",
        "interest_social",
    ):
        answers[key] = 3
    answers["interest_tech"] = 5
    for key in (
        "skill_analytical",
        "skill_communication",
        "skill_creativity",
        "skill_technical",
        "skill_leadership",
        "skill_teamwork",
        "skill_problem_solving",
        "skill_adaptability",
    ):
        answers[key] = 4
    return answers


def profile_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "personality_type": "Analytical Builder",
        "primary_strengths": ["Problem Solving", "Analytical Thinking"],
        "secondary_strengths": ["Teamwork"],
        "areas_for_improvement": ["Public Speaking"],
        "learning_style": "Hands-on",
        "work_environment_preference": "Remote Work",
        "career_interests": ["Technology & Computing", "Engineering"],
        "skill_summary": {
            "technical": [{"skill": "Python", "level": 7}],
            "soft": [{"skill": "Communication", "level": 6}],
        },
    }
    payload.update(overrides)
    return payload


def match_item(career: str, score: Any) -> dict[str, Any]:
    return {
        "career": career,
        "compatibility_score": score,
        "reasoning": f"{career} fits the profile.",
        "key_skills_aligned": ["Python"],
        "potential_challenges": ["Competitive field"],
        "education_requirements": ["Bachelor's degree"],
        "growth_opportunities": "Strong demand.",
    }


def matches_payload(*scores: Any) -> dict[str, Any]:
    scores = scores or (92, 81, 70)
    careers = ["Software Engineer", "Data Scientist", "UX Designer", "Product Manager"]
    return {"career_matches": [match_item(careers[i % len(careers)], s) for i, s in enumerate(scores)]}


def milestone_item(title: str, **overrides: Any) -> dict[str, Any]:
    item = {
        "title": title,
        "description": f"{title} description",
        "timeline": "1-3 months",
        "required_skills": ["Python"],
        "activities": ["Build a project"],
        "resources": ["Official documentation"],
    }
    item.update(overrides)
    return item


def roadmap_payload(milestones: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    if milestones is None:
        milestones = [milestone_item("Foundations"), milestone_item("Portfolio"), milestone_item("First role")]
    return {
        "career": "Software Engineer",
        "overview": "From fundamentals to a first engineering job.",
        "timeframe": "12 months",
        "milestones": milestones,
        "skills_to_acquire": [{"skill": "Git", "importance": "high", "suggested_resources": ["Pro Git"]}],
        "exams_certifications": [],
        "project_ideas": [{"title": "Study planner", "description": "A web app", "skills": ["Python"]}],
        "weekly_plan": {"focus": "Fundamentals", "activities": ["Practice 5 hours"]},
    }


def progress_payload(adjusted: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {
        "progress_summary": "Steady progress on fundamentals.",
        "achievement_level": "On track",
        "strengths": ["Consistency"],
        "areas_for_improvement": ["Testing"],
        "adjusted_milestones": adjusted or [],
        "feedback": "Keep going.",
        "motivation": "You are building momentum.",
        "next_steps": ["Start the portfolio project"],
    }


@pytest.fixture()
def inference() -> QueuedInferenceClient:
    return QueuedInferenceClient()


@pytest.fixture()
def client(inference: QueuedInferenceClient) -> Any:
    from career_guidance.database import Base, engine
    from career_guidance.main import create_app
    from career_guidance.routers.dependencies import get_inference_client

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app = create_app()
    app.dependency_overrides[get_inference_client] = lambda: inference
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def db_session(client: Any) -> Any:
    from career_guidance.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(client: Any) -> Callable[..., dict[str, str]]:
    """Create a user row and return bearer headers for it."""

    from career_guidance.database import SessionLocal
    from career_guidance.models.user import User
    from career_guidance.utils.jwt_handler import create_access_token

    def _make(email: str = "student@example.com") -> dict[str, str]:
        db = SessionLocal()
        try:
            user = User(email=email, name="Student", age=19, country="KR")
            db.add(user)
            db.commit()
            db.refresh(user)
            token = create_access_token(user.id)
        finally:
            db.close()
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture()
def auth_headers(make_user: Callable[..., dict[str, str]]) -> dict[str, str]:
    return make_user()


@pytest.fixture()
def onboarded(client: Any, inference: QueuedInferenceClient, auth_headers: dict[str, str]) -> dict[str, Any]:
    """A user who submitted the questionnaire and received three matches."""

    inference.queue(profile_payload(), matches_payload(92, 81, 70))
    resp = client.post("/api/intake/submit", json={"answers": complete_answers()}, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    inference.calls.clear()
    return {"headers": auth_headers, "profile": body["profile"], "matches": body["matches"]}


@pytest.fixture()
def roadmap(client: Any, inference: QueuedInferenceClient, onboarded: dict[str, Any]) -> dict[str, Any]:
    inference.queue(roadmap_payload())
    resp = client.post(
        "/api/roadmaps",
        json={"career_match_id": onboarded["matches"][0]["id"]},
        headers=onboarded["headers"],
    )
    assert resp.status_code == 201, resp.text
    inference.calls.clear()
    return resp.json()
