# intake.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from career_guidance.api.errors import GUIDANCE_ERRORS, to_http_exception
from career_guidance.database import get_db
from career_guidance.models.user import User
from career_guidance.routers.dependencies import get_current_user, get_inference_client
from career_guidance.schemas.intake import (
    AptitudeSubmission,
    IntakeSubmissionResponse,
    QuestionGroup,
    StepValidationRequest,
    StepValidationResult,
)
from career_guidance.services import intake_service, match_service, profile_service
from career_guidance.services.inference import InferenceClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/intake", tags=["intake"])


@router.get("/questions", response_model=list[QuestionGroup])
def list_question_groups() -> list[QuestionGroup]:
    return intake_service.get_question_groups()


@router.post("/steps/{step_index}/validate", response_model=StepValidationResult)
def validate_intake_step(
    step_index: int,
    payload: StepValidationRequest,
    current_user: User = Depends(get_current_user),
) -> StepValidationResult:
    try:
        return intake_service.validate_step(step_index, payload.answers)
    except IndexError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/submit", response_model=IntakeSubmissionResponse, status_code=status.HTTP_201_CREATED)
def submit_intake(
    payload: AptitudeSubmission,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: InferenceClient = Depends(get_inference_client),
) -> IntakeSubmissionResponse:
    """Validate the questionnaire, then synthesize the profile and first matches."""

    logger.info("intake.submit user_id=%s", current_user.id)
    try:
        intake_service.validate_answers(payload.answers)
        user_info = intake_service.extract_user_info(payload.answers)
        profile = profile_service.synthesize_profile(client, payload.answers, user_info)
        saved_profile = profile_service.save_career_profile(db, current_user.id, profile)
        matches = match_service.generate_matches(client, saved_profile, user_info)
        saved_matches = match_service.save_matches(db, current_user.id, matches, profile_id=saved_profile.id)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return IntakeSubmissionResponse(profile=saved_profile, matches=saved_matches)
