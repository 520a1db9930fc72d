# roadmaps.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from career_guidance.api.errors import GUIDANCE_ERRORS, to_http_exception
from career_guidance.api.routes.profile import require_profile
from career_guidance.database import get_db
from career_guidance.models.user import User
from career_guidance.routers.dependencies import get_current_user, get_inference_client
from career_guidance.schemas.course import CourseRecommendationRead, RecommendCoursesRequest
from career_guidance.schemas.progress import AdaptProgressRequest, ProgressUpdateRead
from career_guidance.schemas.roadmap import (
    BuildRoadmapRequest,
    CareerRoadmapRead,
    MilestoneCompletionUpdate,
    MilestoneRead,
)
from career_guidance.services import course_service, match_service, progress_service, roadmap_service
from career_guidance.services.inference import InferenceClient


logger = logging.getLogger(__name__)

router = APIRouter(tags=["roadmaps"])


def _require_roadmap(db: Session, user_id: int, roadmap_id: int) -> CareerRoadmapRead:
    try:
        roadmap = roadmap_service.get_roadmap(db, user_id, roadmap_id)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
    if roadmap is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Roadmap not found")
    return roadmap


@router.post("/roadmaps", response_model=CareerRoadmapRead, status_code=status.HTTP_201_CREATED)
def create_roadmap(
    payload: BuildRoadmapRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: InferenceClient = Depends(get_inference_client),
) -> CareerRoadmapRead:
    match = match_service.get_match(db, current_user.id, payload.career_match_id)
    if match is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Career match not found")
    profile = require_profile(db, current_user.id)

    logger.info("roadmap.build user_id=%s match_id=%s", current_user.id, match.id)
    try:
        roadmap = roadmap_service.build_roadmap(client, match, profile, payload.user_info)
        return roadmap_service.save_roadmap(db, current_user.id, match.id, roadmap)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.get("/roadmaps", response_model=list[CareerRoadmapRead])
def read_roadmaps(
    career_match_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[CareerRoadmapRead]:
    try:
        return roadmap_service.list_roadmaps(db, current_user.id, career_match_id)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.get("/roadmaps/{roadmap_id}", response_model=CareerRoadmapRead)
def read_roadmap(
    roadmap_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CareerRoadmapRead:
    return _require_roadmap(db, current_user.id, roadmap_id)


@router.patch("/milestones/{milestone_id}", response_model=MilestoneRead)
def update_milestone(
    milestone_id: int,
    payload: MilestoneCompletionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MilestoneRead:
    try:
        return roadmap_service.set_milestone_completion(db, current_user.id, milestone_id, payload.is_completed)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.post(
    "/roadmaps/{roadmap_id}/progress",
    response_model=ProgressUpdateRead,
    status_code=status.HTTP_201_CREATED,
)
def create_progress_update(
    roadmap_id: int,
    payload: AdaptProgressRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: InferenceClient = Depends(get_inference_client),
) -> ProgressUpdateRead:
    roadmap = _require_roadmap(db, current_user.id, roadmap_id)
    profile = require_profile(db, current_user.id)

    logger.info("progress.adapt user_id=%s roadmap_id=%s scores=%s", current_user.id, roadmap_id, len(payload.test_scores))
    try:
        update = progress_service.adapt_progress(
            client,
            roadmap,
            None,
            payload.test_scores,
            payload.participation,
            profile,
        )
        return progress_service.save_progress_update(db, current_user.id, roadmap_id, update)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.get("/roadmaps/{roadmap_id}/progress", response_model=list[ProgressUpdateRead])
def read_progress_updates(
    roadmap_id: int,
    limit: int = Query(default=20, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ProgressUpdateRead]:
    _require_roadmap(db, current_user.id, roadmap_id)
    try:
        return progress_service.list_progress_updates(db, current_user.id, roadmap_id, limit=limit)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.get("/roadmaps/{roadmap_id}/progress/latest", response_model=ProgressUpdateRead)
def read_latest_progress_update(
    roadmap_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProgressUpdateRead:
    _require_roadmap(db, current_user.id, roadmap_id)
    try:
        update = progress_service.get_latest_progress_update(db, current_user.id, roadmap_id)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
    if update is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No progress updates yet")
    return update


@router.post(
    "/roadmaps/{roadmap_id}/courses",
    response_model=CourseRecommendationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_course_recommendation(
    roadmap_id: int,
    payload: RecommendCoursesRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: InferenceClient = Depends(get_inference_client),
) -> CourseRecommendationRead:
    roadmap = _require_roadmap(db, current_user.id, roadmap_id)
    profile = require_profile(db, current_user.id)
    try:
        recommendation = course_service.recommend_courses(client, roadmap, profile, payload.platform_courses)
        return course_service.save_course_recommendation(db, current_user.id, roadmap_id, recommendation)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.get("/roadmaps/{roadmap_id}/courses/latest", response_model=CourseRecommendationRead)
def read_latest_course_recommendation(
    roadmap_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CourseRecommendationRead:
    _require_roadmap(db, current_user.id, roadmap_id)
    try:
        recommendation = course_service.get_latest_course_recommendation(db, current_user.id, roadmap_id)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
    if recommendation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No course recommendations yet")
    return recommendation
