# profile_service.py
import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from career_guidance.db.store import RecordStore
from career_guidance.errors import ProfileSynthesisError
from career_guidance.models.career_profile import CareerProfileModel
from career_guidance.schemas.profile import CareerProfile, CareerProfileRead, UserInfo
from career_guidance.services import prompts
from career_guidance.services.inference import InferenceClient
from career_guidance.services.intake_service import questionnaire_answers
from career_guidance.services.payloads import parse_structured_payload


logger = logging.getLogger(__name__)


def synthesize_profile(client: InferenceClient, answers: Mapping[str, Any], user_info: UserInfo) -> CareerProfile:
    """Turn a complete questionnaire into a CareerProfile.

    Raises ProfileSynthesisError when the inference output does not match the
    profile schema. Nothing is persisted here.
    """

    messages = prompts.build_messages(
        prompts.PROFILE_INSTRUCTION,
        "Please analyze these questionnaire results and create a career profile summary:",
        {
            "User Information": user_info,
            "Questionnaire Results": questionnaire_answers(answers),
        },
    )
    raw = client.generate(messages, temperature=prompts.PROFILE_TEMPERATURE)
    try:
        return parse_structured_payload(raw, CareerProfile, ProfileSynthesisError)
    except ProfileSynthesisError as exc:
        logger.warning("profile.synthesize schema violation: %s", exc)
        raise


def get_career_profile_record(db: Session, user_id: int) -> CareerProfileModel | None:
    return RecordStore(db).query_one(CareerProfileModel, {"user_id": user_id})


def get_career_profile(db: Session, user_id: int) -> CareerProfileRead | None:
    record = get_career_profile_record(db, user_id)
    if not record:
        return None
    return CareerProfileRead.model_validate(record)


def save_career_profile(db: Session, user_id: int, profile: CareerProfile) -> CareerProfileRead:
    """Replace the user's profile wholesale (one live profile per user)."""

    payload = profile.model_dump(mode="json")
    payload["user_id"] = user_id
    record = RecordStore(db).save(CareerProfileModel, payload)
    logger.info("profile.saved user_id=%s profile_id=%s", user_id, record.id)
    return CareerProfileRead.model_validate(record)
