from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from career_guidance.db.store import RecordStore
from career_guidance.errors import InvalidAdjustmentError
from career_guidance.models.progress_update import ProgressUpdateModel
from career_guidance.schemas.profile import CareerProfile
from career_guidance.schemas.progress import ParticipationMetrics, ProgressUpdate, ProgressUpdateRead, TestScore
from career_guidance.schemas.roadmap import CareerRoadmapRead, MilestoneRead
from career_guidance.services import prompts
from career_guidance.services.inference import InferenceClient
from career_guidance.services.payloads import parse_structured_payload


logger = logging.getLogger(__name__)


def _roadmap_outline(roadmap: CareerRoadmapRead) -> dict:
    return {
        "career": roadmap.career,
        "timeframe": roadmap.timeframe,
        "milestones": [
            {
                "id": m.id,
                "title": m.title,
                "timeline": m.timeline,
                "is_completed": m.is_completed,
            }
            for m in roadmap.milestones
        ],
    }


def _check_adjustments(update: ProgressUpdate, roadmap: CareerRoadmapRead) -> None:
    known = {m.id for m in roadmap.milestones}
    unknown = sorted({a.milestone_id for a in update.adjusted_milestones} - known)
    if unknown:
        raise InvalidAdjustmentError(
            f"Adjusted milestones {unknown} do not belong to roadmap {roadmap.id}"
        )


def adapt_progress(
    client: InferenceClient,
    roadmap: CareerRoadmapRead,
    completed_milestones: Sequence[MilestoneRead] | None,
    test_scores: Sequence[TestScore],
    participation: ParticipationMetrics,
    profile: CareerProfile,
) -> ProgressUpdate:
    """Produce adaptive feedback for a roadmap.

    `completed_milestones` defaults to the milestones already marked completed
    on the roadmap. Suggested timeline adjustments are advisory and must
    reference milestones of this roadmap, otherwise InvalidAdjustmentError.
    The roadmap itself is never modified.
    """

    if completed_milestones is None:
        completed_milestones = [m for m in roadmap.milestones if m.is_completed]

    messages = prompts.build_messages(
        prompts.PROGRESS_INSTRUCTION,
        "Analyze this user's progress and provide adaptive feedback:",
        {
            "Career Roadmap": _roadmap_outline(roadmap),
            "Completed Milestones": [{"id": m.id, "title": m.title} for m in completed_milestones],
            "Test Scores": list(test_scores),
            "Participation": participation,
            "Profile": prompts.profile_summary(profile),
        },
    )
    raw = client.generate(messages, temperature=prompts.PROGRESS_TEMPERATURE)
    update = parse_structured_payload(raw, ProgressUpdate)
    try:
        _check_adjustments(update, roadmap)
    except InvalidAdjustmentError as exc:
        logger.warning("progress.adapt rejected update roadmap_id=%s: %s", roadmap.id, exc)
        raise
    return update


def save_progress_update(db: Session, user_id: int, roadmap_id: int, update: ProgressUpdate) -> ProgressUpdateRead:
    payload = update.model_dump(mode="json")
    payload.update(user_id=user_id, roadmap_id=roadmap_id)
    record = RecordStore(db).save(ProgressUpdateModel, payload)
    logger.info("progress.saved user_id=%s roadmap_id=%s update_id=%s", user_id, roadmap_id, record.id)
    return ProgressUpdateRead.model_validate(record)


def list_progress_updates(db: Session, user_id: int, roadmap_id: int, limit: int | None = None) -> list[ProgressUpdateRead]:
    rows = RecordStore(db).query(
        ProgressUpdateModel,
        {"user_id": user_id, "roadmap_id": roadmap_id},
        order=[ProgressUpdateModel.created_at.desc(), ProgressUpdateModel.id.desc()],
        limit=limit,
    )
    return [ProgressUpdateRead.model_validate(row) for row in rows]


def get_latest_progress_update(db: Session, user_id: int, roadmap_id: int) -> ProgressUpdateRead | None:
    updates = list_progress_updates(db, user_id, roadmap_id, limit=1)
    return updates[0] if updates else None
