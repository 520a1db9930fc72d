from __future__ import annotations

from conftest import complete_answers, matches_payload, milestone_item, profile_payload, progress_payload, roadmap_payload


def test_intake_to_progress_feedback(client, inference, auth_headers) -> None:
    answers = complete_answers()
    answers.update(interest_tech=5, interest_business=2, skill_analytical=4)

    inference.queue(profile_payload(), matches_payload(88, 74, 61))
    submitted = client.post("/api/intake/submit", json={"answers": answers}, headers=auth_headers)
    assert submitted.status_code == 201, submitted.text
    body = submitted.json()

    assert "Technology & Computing" in body["profile"]["career_interests"]
    levels = [s["level"] for kind in ("technical", "soft") for s in body["profile"]["skill_summary"][kind]]
    assert all(isinstance(level, int) and 1 <= level <= 10 for level in levels)

    engineer = next(m for m in body["matches"] if m["career"] == "Software Engineer")
    assert engineer["compatibility_score"] >= 70

    inference.queue(
        roadmap_payload(
            [
                milestone_item("Foundations", timeline="0-3 months"),
                milestone_item("Portfolio", timeline="3-6 months"),
                milestone_item("Internship", timeline="6-12 months"),
            ]
        )
    )
    built = client.post("/api/roadmaps", json={"career_match_id": engineer["id"]}, headers=auth_headers)
    assert built.status_code == 201, built.text
    roadmap = built.json()
    assert [m["timeline"] for m in roadmap["milestones"]] == ["0-3 months", "3-6 months", "6-12 months"]

    first = roadmap["milestones"][0]["id"]
    toggled = client.patch(f"/api/milestones/{first}", json={"is_completed": True}, headers=auth_headers)
    assert toggled.status_code == 200

    inference.queue(progress_payload())
    progress = client.post(
        f"/api/roadmaps/{roadmap['id']}/progress",
        json={"participation": {"live_class_participation": 90, "questions_asked": 2, "assignments_completed": 3}},
        headers=auth_headers,
    )
    assert progress.status_code == 201, progress.text
    assert progress.json()["strengths"]

    refreshed = client.get(f"/api/roadmaps/{roadmap['id']}", headers=auth_headers).json()
    assert refreshed["completion_percentage"] == 33
    assert not inference.responses
