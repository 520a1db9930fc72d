# __init__.py
from career_guidance.schemas.chat import ChatMessageRead, ChatRequest, ChatResponse
from career_guidance.schemas.course import CourseRecommendation, CourseRecommendationRead, PlatformCourse, RecommendCoursesRequest
from career_guidance.schemas.intake import AptitudeSubmission, IntakeSubmissionResponse, QuestionField, QuestionGroup, StepValidationResult
from career_guidance.schemas.match import CareerMatch, CareerMatchRead, GenerateMatchesRequest
from career_guidance.schemas.profile import CareerProfile, CareerProfileRead, UserInfo
from career_guidance.schemas.progress import AdaptProgressRequest, ParticipationMetrics, ProgressUpdate, ProgressUpdateRead, TestScore
from career_guidance.schemas.roadmap import BuildRoadmapRequest, CareerRoadmap, CareerRoadmapRead, MilestonePlan, MilestoneRead
from career_guidance.schemas.skill_level import SkillLevel, SkillSummary
from career_guidance.schemas.user import TokenData

__all__ = [
	"ChatMessageRead",
	"ChatRequest",
	"ChatResponse",
	"CourseRecommendation",
	"CourseRecommendationRead",
	"PlatformCourse",
	"RecommendCoursesRequest",
	"AptitudeSubmission",
	"IntakeSubmissionResponse",
	"QuestionField",
	"QuestionGroup",
	"StepValidationResult",
	"CareerMatch",
	"CareerMatchRead",
	"GenerateMatchesRequest",
	"CareerProfile",
	"CareerProfileRead",
	"UserInfo",
	"AdaptProgressRequest",
	"ParticipationMetrics",
	"ProgressUpdate",
	"ProgressUpdateRead",
	"TestScore",
	"BuildRoadmapRequest",
	"CareerRoadmap",
	"CareerRoadmapRead",
	"MilestonePlan",
	"MilestoneRead",
	"SkillLevel",
	"SkillSummary",
	"TokenData",
]
