from __future__ import annotations

import logging
from uuid import uuid4

from sqlalchemy.orm import Session

from career_guidance.db.store import RecordStore
from career_guidance.errors import InvalidMatchError, SchemaViolationError
from career_guidance.models.career_match import CareerMatchModel
from career_guidance.schemas.match import CareerMatch, CareerMatchBatch, CareerMatchRead
from career_guidance.schemas.profile import CareerProfile, UserInfo
from career_guidance.services import prompts
from career_guidance.services.inference import InferenceClient
from career_guidance.services.payloads import parse_structured_payload


logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100


def _is_integral(score: object) -> bool:
    if isinstance(score, bool):
        return False
    if isinstance(score, int):
        return True
    return isinstance(score, float) and score.is_integer()


def _check_scores(matches: list[CareerMatch]) -> list[CareerMatch]:
    """Return the matches with integer scores, or raise InvalidMatchError."""

    checked = []
    for match in matches:
        score = match.compatibility_score
        if not _is_integral(score):
            raise InvalidMatchError(f"compatibility_score {score!r} for '{match.career}' is not an integer")
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise InvalidMatchError(
                f"compatibility_score {score} for '{match.career}' "
                f"is outside [{MIN_SCORE}, {MAX_SCORE}]"
            )
        checked.append(match.model_copy(update={"compatibility_score": int(score)}))
    return checked


def generate_matches(client: InferenceClient, profile: CareerProfile, user_info: UserInfo) -> list[CareerMatch]:
    """Derive ranked career matches from a profile.

    The order returned by the inference capability is kept as-is. The batch is
    rejected as a whole if it is empty or any score is not an integer in 0..100.
    """

    messages = prompts.build_messages(
        prompts.MATCHES_INSTRUCTION,
        "Generate career matches based on this profile:",
        {"User Information": user_info, "Profile Summary": prompts.profile_summary(profile)},
    )
    raw = client.generate(messages, temperature=prompts.MATCHES_TEMPERATURE)
    batch = parse_structured_payload(raw, CareerMatchBatch)
    if not batch.career_matches:
        raise SchemaViolationError("Inference returned no career matches")
    try:
        return _check_scores(batch.career_matches)
    except InvalidMatchError as exc:
        logger.warning("matches.generate rejected batch: %s", exc)
        raise


def save_matches(
    db: Session,
    user_id: int,
    matches: list[CareerMatch],
    profile_id: int | None = None,
) -> list[CareerMatchRead]:
    """Append one generated batch; earlier batches are left untouched."""

    matches = _check_scores(matches)
    batch_id = str(uuid4())
    records = []
    for position, match in enumerate(matches):
        payload = match.model_dump(mode="json")
        payload.update(user_id=user_id, profile_id=profile_id, batch_id=batch_id, position=position)
        records.append(payload)
    rows = RecordStore(db).add_all(CareerMatchModel, records)
    logger.info("matches.saved user_id=%s batch_id=%s count=%s", user_id, batch_id, len(rows))
    return [CareerMatchRead.model_validate(row) for row in rows]


def list_matches(
    db: Session,
    user_id: int,
    batch_id: str | None = None,
    latest_only: bool = True,
) -> list[CareerMatchRead]:
    store = RecordStore(db)
    if batch_id is None and latest_only:
        newest = store.query_one(
            CareerMatchModel,
            {"user_id": user_id},
            order=[CareerMatchModel.created_at.desc(), CareerMatchModel.id.desc()],
        )
        if newest is None:
            return []
        batch_id = newest.batch_id

    filters: dict[str, object] = {"user_id": user_id}
    if batch_id is not None:
        filters["batch_id"] = batch_id
    rows = store.query(
        CareerMatchModel,
        filters,
        order=[CareerMatchModel.created_at.desc(), CareerMatchModel.batch_id, CareerMatchModel.position],
    )
    return [CareerMatchRead.model_validate(row) for row in rows]


def get_match(db: Session, user_id: int, match_id: int) -> CareerMatchRead | None:
    row = RecordStore(db).query_one(CareerMatchModel, {"id": match_id, "user_id": user_id})
    if row is None:
        return None
    return CareerMatchRead.model_validate(row)
