from __future__ import annotations

import pytest

from conftest import matches_payload
from career_guidance.models.career_match import CareerMatchModel


def test_matches_require_a_profile(client, inference, auth_headers) -> None:
    resp = client.post("/api/matches", json={}, headers=auth_headers)
    assert resp.status_code == 404
    assert inference.calls == []


def test_order_from_inference_is_preserved(client, inference, onboarded) -> None:
    inference.queue(matches_payload(40, 95, 60))
    resp = client.post("/api/matches", json={"user_info": {"age": 19}}, headers=onboarded["headers"])
    assert resp.status_code == 201, resp.text

    body = resp.json()
    assert [m["compatibility_score"] for m in body] == [40, 95, 60]
    assert [m["position"] for m in body] == [0, 1, 2]
    assert len({m["batch_id"] for m in body}) == 1


def test_out_of_range_score_rejects_whole_batch(client, inference, onboarded, db_session) -> None:
    before = db_session.query(CareerMatchModel).count()
    inference.queue(matches_payload(88, 101))

    resp = client.post("/api/matches", json={}, headers=onboarded["headers"])
    assert resp.status_code == 502
    assert resp.json()["detail"]["error"] == "InvalidMatchError"
    assert db_session.query(CareerMatchModel).count() == before


@pytest.mark.parametrize("score", [85.5, True, "NaN"])
def test_non_integer_score_rejects_whole_batch(client, inference, onboarded, db_session, score) -> None:
    before = db_session.query(CareerMatchModel).count()
    inference.queue(matches_payload(score, 70))

    resp = client.post("/api/matches", json={}, headers=onboarded["headers"])
    assert resp.status_code == 502
    assert resp.json()["detail"]["error"] == "InvalidMatchError"
    assert db_session.query(CareerMatchModel).count() == before


def test_integral_float_score_is_stored_as_int(client, inference, onboarded) -> None:
    inference.queue(matches_payload(85.0))
    resp = client.post("/api/matches", json={}, headers=onboarded["headers"])
    assert resp.status_code == 201, resp.text
    assert resp.json()[0]["compatibility_score"] == 85


def test_negative_score_is_rejected(client, inference, onboarded) -> None:
    inference.queue(matches_payload(-1))
    resp = client.post("/api/matches", json={}, headers=onboarded["headers"])
    assert resp.status_code == 502


def test_percent_suffix_is_accepted(client, inference, onboarded) -> None:
    inference.queue(matches_payload("85%", 100, 0))
    resp = client.post("/api/matches", json={}, headers=onboarded["headers"])
    assert resp.status_code == 201, resp.text
    assert [m["compatibility_score"] for m in resp.json()] == [85, 100, 0]


def test_empty_batch_is_a_schema_violation(client, inference, onboarded) -> None:
    inference.queue({"career_matches": []})
    resp = client.post("/api/matches", json={}, headers=onboarded["headers"])
    assert resp.status_code == 502


def test_batches_are_appended(client, inference, onboarded, db_session) -> None:
    inference.queue(matches_payload(77))
    resp = client.post("/api/matches", json={}, headers=onboarded["headers"])
    assert resp.status_code == 201
    new_batch = resp.json()[0]["batch_id"]

    assert db_session.query(CareerMatchModel).count() == 4

    latest = client.get("/api/matches", headers=onboarded["headers"]).json()
    assert [m["batch_id"] for m in latest] == [new_batch]

    everything = client.get("/api/matches", params={"all_batches": True}, headers=onboarded["headers"]).json()
    assert len(everything) == 4

    first_batch = onboarded["matches"][0]["batch_id"]
    earlier = client.get("/api/matches", params={"batch_id": first_batch}, headers=onboarded["headers"]).json()
    assert [m["career"] for m in earlier] == [m["career"] for m in onboarded["matches"]]


def test_matches_are_scoped_to_the_caller(client, onboarded, make_user) -> None:
    other = make_user("other@example.com")
    assert client.get("/api/matches", headers=other).json() == []
