from __future__ import annotations

import json

from conftest import complete_answers, profile_payload
from career_guidance.models.career_profile import CareerProfileModel
from career_guidance.schemas.skill_level import SkillSummary


def test_profile_missing_before_intake(client, auth_headers) -> None:
    resp = client.get("/api/profile", headers=auth_headers)
    assert resp.status_code == 404


def test_resynthesis_replaces_the_single_profile(client, inference, auth_headers, db_session) -> None:
    inference.queue(profile_payload(), profile_payload(personality_type="Creative Communicator"))

    first = client.post("/api/profile", json={"answers": complete_answers()}, headers=auth_headers)
    assert first.status_code == 201, first.text
    second = client.post("/api/profile", json={"answers": complete_answers()}, headers=auth_headers)
    assert second.status_code == 201, second.text

    assert db_session.query(CareerProfileModel).count() == 1
    current = client.get("/api/profile", headers=auth_headers).json()
    assert current["personality_type"] == "Creative Communicator"
    assert current["id"] == first.json()["id"]


def test_schema_violation_keeps_previous_profile(client, inference, auth_headers) -> None:
    inference.queue(profile_payload())
    client.post("/api/profile", json={"answers": complete_answers()}, headers=auth_headers)

    inference.queue(profile_payload(primary_strengths=[]))
    resp = client.post("/api/profile", json={"answers": complete_answers()}, headers=auth_headers)
    assert resp.status_code == 502
    assert resp.json()["detail"]["error"] == "ProfileSynthesisError"

    current = client.get("/api/profile", headers=auth_headers).json()
    assert current["primary_strengths"] == ["Problem Solving", "Analytical Thinking"]


def test_skill_levels_outside_range_are_rejected(client, inference, auth_headers) -> None:
    bad = profile_payload(skill_summary={"technical": [{"skill": "Python", "level": 11}], "soft": []})
    inference.queue(bad)
    resp = client.post("/api/profile", json={"answers": complete_answers()}, headers=auth_headers)
    assert resp.status_code == 502


def test_fenced_payload_and_duplicate_interests(client, inference, auth_headers) -> None:
    payload = profile_payload(career_interests=["Engineering", "engineering ", "Technology & Computing"])
    inference.queue("```json\n" + json.dumps(payload) + "\n```")
    resp = client.post("/api/profile", json={"answers": complete_answers()}, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    assert resp.json()["career_interests"] == ["Engineering", "Technology & Computing"]


def test_prose_answer_is_a_schema_violation(client, inference, auth_headers) -> None:
    inference.queue("Sure! Here is your profile: you are great.")
    resp = client.post("/api/profile", json={"answers": complete_answers()}, headers=auth_headers)
    assert resp.status_code == 502


def test_skill_summary_levels() -> None:
    summary = SkillSummary.model_validate(
        {
            "technical": [{"skill": "Python", "level": 8}],
            "soft": [{"skill": "Python", "level": 3}, {"skill": "Teamwork", "level": 6}],
        }
    )
    assert summary.levels() == {"Python": 8, "Teamwork": 6}
