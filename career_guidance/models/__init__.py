# __init__.py
from career_guidance.models.career_match import CareerMatchModel
from career_guidance.models.career_profile import CareerProfileModel
from career_guidance.models.career_roadmap import CareerRoadmapModel, MilestoneModel
from career_guidance.models.chat_message import ChatMessageModel
from career_guidance.models.course_recommendation import CourseRecommendationModel
from career_guidance.models.progress_update import ProgressUpdateModel
from career_guidance.models.user import User

__all__ = [
	"User",
	"CareerProfileModel",
	"CareerMatchModel",
	"CareerRoadmapModel",
	"MilestoneModel",
	"ProgressUpdateModel",
	"CourseRecommendationModel",
	"ChatMessageModel",
]
