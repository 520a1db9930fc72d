# profile.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from career_guidance.api.errors import GUIDANCE_ERRORS, to_http_exception
from career_guidance.database import get_db
from career_guidance.models.user import User
from career_guidance.routers.dependencies import get_current_user, get_inference_client
from career_guidance.schemas.intake import AptitudeSubmission
from career_guidance.schemas.profile import CareerProfileRead
from career_guidance.services import intake_service, profile_service
from career_guidance.services.inference import InferenceClient


router = APIRouter(prefix="/profile", tags=["profile"])


def require_profile(db: Session, user_id: int) -> CareerProfileRead:
    try:
        profile = profile_service.get_career_profile(db, user_id)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Career profile not found")
    return profile


@router.get("", response_model=CareerProfileRead)
def read_career_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CareerProfileRead:
    return require_profile(db, current_user.id)


@router.post("", response_model=CareerProfileRead, status_code=status.HTTP_201_CREATED)
def create_career_profile(
    payload: AptitudeSubmission,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: InferenceClient = Depends(get_inference_client),
) -> CareerProfileRead:
    """(Re)synthesize the profile; the previous one is replaced."""
    try:
        intake_service.validate_answers(payload.answers)
        user_info = intake_service.extract_user_info(payload.answers)
        profile = profile_service.synthesize_profile(client, payload.answers, user_info)
        return profile_service.save_career_profile(db, current_user.id, profile)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
