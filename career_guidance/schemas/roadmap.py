from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from career_guidance.schemas.common import Text
from career_guidance.schemas.profile import UserInfo


Importance = Literal["High", "Medium", "Low"]


class MilestonePlan(BaseModel):
    title: Text
    description: Text
    timeline: Text
    # Empty sequences are not a valid empty plan.
    required_skills: list[Text] = Field(min_length=1)
    activities: list[Text] = Field(min_length=1)
    resources: list[Text] = Field(min_length=1)


class SkillToAcquire(BaseModel):
    skill: Text
    importance: Importance
    suggested_resources: list[Text] = Field(default_factory=list)

    @field_validator("importance", mode="before")
    @classmethod
    def _normalize_importance(cls, v):
        if isinstance(v, str):
            return v.strip().capitalize()
        return v


class ExamCertification(BaseModel):
    name: Text
    description: str = ""
    timeline: str = ""
    preparation_tips: list[Text] = Field(default_factory=list)


class ProjectIdea(BaseModel):
    title: Text
    description: str = ""
    skills: list[Text] = Field(default_factory=list)


class WeeklyPlan(BaseModel):
    focus: Text
    activities: list[Text] = Field(default_factory=list)


class CareerRoadmap(BaseModel):
    career: Text
    overview: Text
    timeframe: Text
    milestones: list[MilestonePlan] = Field(min_length=1)
    skills_to_acquire: list[SkillToAcquire] = Field(default_factory=list)
    exams_certifications: list[ExamCertification] = Field(default_factory=list)
    project_ideas: list[ProjectIdea] = Field(default_factory=list)
    weekly_plan: WeeklyPlan


class MilestoneRead(MilestonePlan):
    id: int
    roadmap_id: int
    position: int
    is_completed: bool = False
    completed_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CareerRoadmapRead(BaseModel):
    id: int
    user_id: int
    career_match_id: int
    career: str
    overview: str
    timeframe: str
    milestones: list[MilestoneRead] = Field(default_factory=list)
    skills_to_acquire: list[SkillToAcquire] = Field(default_factory=list)
    exams_certifications: list[ExamCertification] = Field(default_factory=list)
    project_ideas: list[ProjectIdea] = Field(default_factory=list)
    weekly_plan: WeeklyPlan
    completion_percentage: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class BuildRoadmapRequest(BaseModel):
    career_match_id: int
    user_info: UserInfo = Field(default_factory=UserInfo)


class MilestoneCompletionUpdate(BaseModel):
    is_completed: bool
