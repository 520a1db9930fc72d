# course_service.py
import logging
from typing import Sequence

from sqlalchemy.orm import Session

from career_guidance.db.store import RecordStore
from career_guidance.errors import SchemaViolationError
from career_guidance.models.course_recommendation import CourseRecommendationModel
from career_guidance.schemas.course import CourseRecommendation, CourseRecommendationRead, PlatformCourse
from career_guidance.schemas.profile import CareerProfile
from career_guidance.schemas.roadmap import CareerRoadmapRead
from career_guidance.services import prompts
from career_guidance.services.inference import InferenceClient
from career_guidance.services.payloads import parse_structured_payload


logger = logging.getLogger(__name__)


def _pending_milestones(roadmap: CareerRoadmapRead) -> list[dict]:
    return [
        {"title": m.title, "timeline": m.timeline, "required_skills": m.required_skills}
        for m in roadmap.milestones
        if not m.is_completed
    ]


def recommend_courses(
    client: InferenceClient,
    roadmap: CareerRoadmapRead,
    profile: CareerProfile,
    platform_courses: Sequence[PlatformCourse],
) -> CourseRecommendation:
    """Pick platform courses that move the user towards the next milestones.

    Only courses from `platform_courses` may be recommended; anything else is a
    SchemaViolationError.
    """

    messages = prompts.build_messages(
        prompts.COURSES_INSTRUCTION,
        "Recommend platform courses based on this roadmap and profile:",
        {
            "Career": roadmap.career,
            "Upcoming Milestones": _pending_milestones(roadmap),
            "Profile Summary": prompts.profile_summary(profile),
            "Platform Courses": list(platform_courses),
        },
    )
    raw = client.generate(messages, temperature=prompts.COURSES_TEMPERATURE)
    recommendation = parse_structured_payload(raw, CourseRecommendation)

    offered = {course.course_id for course in platform_courses}
    unknown = [c.course_id for c in recommendation.recommended_courses if c.course_id not in offered]
    if unknown:
        logger.warning("courses.recommend unknown course ids roadmap_id=%s count=%s", roadmap.id, len(unknown))
        raise SchemaViolationError(f"Recommended courses are not offered on the platform: {unknown}")
    return recommendation


def save_course_recommendation(
    db: Session,
    user_id: int,
    roadmap_id: int,
    recommendation: CourseRecommendation,
) -> CourseRecommendationRead:
    payload = recommendation.model_dump(mode="json")
    payload.update(user_id=user_id, roadmap_id=roadmap_id)
    record = RecordStore(db).save(CourseRecommendationModel, payload)
    logger.info("courses.saved user_id=%s roadmap_id=%s recommendation_id=%s", user_id, roadmap_id, record.id)
    return CourseRecommendationRead.model_validate(record)


def get_latest_course_recommendation(db: Session, user_id: int, roadmap_id: int) -> CourseRecommendationRead | None:
    row = RecordStore(db).query_one(
        CourseRecommendationModel,
        {"user_id": user_id, "roadmap_id": roadmap_id},
        order=[CourseRecommendationModel.created_at.desc(), CourseRecommendationModel.id.desc()],
    )
    if row is None:
        return None
    return CourseRecommendationRead.model_validate(row)
