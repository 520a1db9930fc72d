from __future__ import annotations

import pytest

from career_guidance.db.store import APPEND, SINGLETON, RecordNotFoundError, RecordStore, StoreError, lifecycle_of
from career_guidance.models import CareerMatchModel, CareerProfileModel, ChatMessageModel, User


def _profile(user_id: int, personality: str = "Explorer") -> dict:
    return {
        "user_id": user_id,
        "personality_type": personality,
        "primary_strengths": ["Curiosity"],
        "secondary_strengths": [],
        "areas_for_improvement": [],
        "learning_style": "Visual",
        "work_environment_preference": "Office Environment",
        "career_interests": ["Science & Research"],
        "skill_summary": {"technical": [], "soft": []},
    }


@pytest.fixture()
def store(db_session) -> RecordStore:
    return RecordStore(db_session)


@pytest.fixture()
def user_id(store: RecordStore) -> int:
    return store.insert(User, {"email": "store@example.com"})


def test_lifecycle_tags() -> None:
    assert lifecycle_of(CareerProfileModel) == SINGLETON
    assert lifecycle_of(CareerMatchModel) == APPEND


def test_singleton_save_replaces(store: RecordStore, user_id: int) -> None:
    first = store.save(CareerProfileModel, _profile(user_id))
    second = store.save(CareerProfileModel, _profile(user_id, "Maker"))

    assert first.id == second.id
    rows = store.query(CareerProfileModel, {"user_id": user_id})
    assert [r.personality_type for r in rows] == ["Maker"]


def test_append_save_keeps_history(store: RecordStore, user_id: int) -> None:
    store.save(ChatMessageModel, {"user_id": user_id, "is_user": True, "message": "one"})
    store.save(ChatMessageModel, {"user_id": user_id, "is_user": True, "message": "two"})

    rows = store.query(ChatMessageModel, {"user_id": user_id}, order=[ChatMessageModel.id])
    assert [r.message for r in rows] == ["one", "two"]
    assert store.query(ChatMessageModel, {"user_id": user_id}, limit=1)[0].message == "one"


def test_update_missing_record(store: RecordStore) -> None:
    with pytest.raises(RecordNotFoundError):
        store.update(ChatMessageModel, 404, {"message": "x"})


def test_constraint_violation_is_a_store_error(store: RecordStore, user_id: int) -> None:
    store.insert(CareerProfileModel, _profile(user_id))
    with pytest.raises(StoreError):
        store.insert(CareerProfileModel, _profile(user_id))

    # The session is usable again after the rollback.
    assert store.query_one(CareerProfileModel, {"user_id": user_id}) is not None
