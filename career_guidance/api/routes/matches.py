# matches.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from career_guidance.api.errors import GUIDANCE_ERRORS, to_http_exception
from career_guidance.api.routes.profile import require_profile
from career_guidance.database import get_db
from career_guidance.models.user import User
from career_guidance.routers.dependencies import get_current_user, get_inference_client
from career_guidance.schemas.match import CareerMatchRead, GenerateMatchesRequest
from career_guidance.services import match_service
from career_guidance.services.inference import InferenceClient


router = APIRouter(prefix="/matches", tags=["matches"])


@router.post("", response_model=list[CareerMatchRead], status_code=status.HTTP_201_CREATED)
def create_matches(
    payload: GenerateMatchesRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: InferenceClient = Depends(get_inference_client),
) -> list[CareerMatchRead]:
    profile = require_profile(db, current_user.id)
    try:
        matches = match_service.generate_matches(client, profile, payload.user_info)
        return match_service.save_matches(db, current_user.id, matches, profile_id=profile.id)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.get("", response_model=list[CareerMatchRead])
def read_matches(
    batch_id: str | None = Query(default=None),
    all_batches: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[CareerMatchRead]:
    """Latest batch by default; `all_batches=true` returns the full history."""
    try:
        return match_service.list_matches(db, current_user.id, batch_id=batch_id, latest_only=not all_batches)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
