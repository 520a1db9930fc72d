from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy.orm import Session

from career_guidance.db.store import RecordNotFoundError, RecordStore
from career_guidance.errors import RoadmapBuildError
from career_guidance.models.career_roadmap import CareerRoadmapModel, MilestoneModel
from career_guidance.schemas.match import CareerMatch
from career_guidance.schemas.profile import CareerProfile, UserInfo
from career_guidance.schemas.roadmap import CareerRoadmap, CareerRoadmapRead, MilestoneRead
from career_guidance.services import prompts
from career_guidance.services.inference import InferenceClient
from career_guidance.services.payloads import parse_structured_payload


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_roadmap(
    client: InferenceClient,
    match: CareerMatch,
    profile: CareerProfile,
    user_info: UserInfo,
) -> CareerRoadmap:
    """Expand one selected match into a milestone roadmap.

    Raises RoadmapBuildError if the output has no milestones or any milestone
    lacks required skills, activities or resources.
    """

    match_content = match.model_dump(mode="json", include=set(CareerMatch.model_fields))
    messages = prompts.build_messages(
        prompts.ROADMAP_INSTRUCTION,
        f"Create a detailed career roadmap for:\nCareer: {match.career}",
        {
            "Career Match": match_content,
            "User Information": user_info,
            "Profile Summary": prompts.profile_summary(profile),
        },
    )
    raw = client.generate(messages, temperature=prompts.ROADMAP_TEMPERATURE)
    try:
        return parse_structured_payload(raw, CareerRoadmap, RoadmapBuildError)
    except RoadmapBuildError as exc:
        logger.warning("roadmap.build schema violation career=%s: %s", match.career, exc)
        raise


def completion_percentage(milestones: Iterable[object]) -> int:
    items = list(milestones)
    if not items:
        return 0
    completed = sum(1 for m in items if getattr(m, "is_completed", False))
    return round(completed * 100 / len(items))


def to_roadmap_read(record: CareerRoadmapModel) -> CareerRoadmapRead:
    roadmap = CareerRoadmapRead.model_validate(record)
    return roadmap.model_copy(update={"completion_percentage": completion_percentage(roadmap.milestones)})


def save_roadmap(db: Session, user_id: int, career_match_id: int, roadmap: CareerRoadmap) -> CareerRoadmapRead:
    """Persist a new roadmap; roadmaps built earlier (for any match) are kept."""

    payload = roadmap.model_dump(mode="json", exclude={"milestones"})
    payload.update(user_id=user_id, career_match_id=career_match_id)
    payload["milestones"] = [
        MilestoneModel(
            position=position,
            is_completed=False,
            completed_at=None,
            **milestone.model_dump(mode="json"),
        )
        for position, milestone in enumerate(roadmap.milestones)
    ]
    record = RecordStore(db).save(CareerRoadmapModel, payload)
    logger.info(
        "roadmap.saved user_id=%s match_id=%s roadmap_id=%s milestones=%s",
        user_id,
        career_match_id,
        record.id,
        len(record.milestones),
    )
    return to_roadmap_read(record)


def get_roadmap_record(db: Session, user_id: int, roadmap_id: int) -> CareerRoadmapModel | None:
    return RecordStore(db).query_one(CareerRoadmapModel, {"id": roadmap_id, "user_id": user_id})


def get_roadmap(db: Session, user_id: int, roadmap_id: int) -> CareerRoadmapRead | None:
    record = get_roadmap_record(db, user_id, roadmap_id)
    if record is None:
        return None
    return to_roadmap_read(record)


def list_roadmaps(db: Session, user_id: int, career_match_id: int | None = None) -> list[CareerRoadmapRead]:
    filters: dict[str, object] = {"user_id": user_id}
    if career_match_id is not None:
        filters["career_match_id"] = career_match_id
    rows = RecordStore(db).query(
        CareerRoadmapModel,
        filters,
        order=[CareerRoadmapModel.created_at.desc(), CareerRoadmapModel.id.desc()],
    )
    return [to_roadmap_read(row) for row in rows]


def latest_roadmap_for_match(db: Session, user_id: int, career_match_id: int) -> CareerRoadmapRead | None:
    roadmaps = list_roadmaps(db, user_id, career_match_id)
    return roadmaps[0] if roadmaps else None


def set_milestone_completion(
    db: Session,
    user_id: int,
    milestone_id: int,
    completed: bool,
    now: datetime | None = None,
) -> MilestoneRead:
    """Move a milestone between pending and completed.

    Marking completed stamps `completed_at` with the latest time, even if it was
    already completed; marking pending clears it. Last write wins.
    """

    store = RecordStore(db)
    milestone = store.get(MilestoneModel, milestone_id)
    if milestone is None or milestone.roadmap.user_id != user_id:
        raise RecordNotFoundError(f"Milestone {milestone_id} not found")

    patch = {"is_completed": True, "completed_at": now or _utc_now()} if completed else {"is_completed": False, "completed_at": None}
    updated = store.update(MilestoneModel, milestone_id, patch)
    logger.info("milestone.completion user_id=%s milestone_id=%s completed=%s", user_id, milestone_id, completed)
    return MilestoneRead.model_validate(updated)
