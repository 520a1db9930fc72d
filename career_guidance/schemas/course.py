from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from career_guidance.schemas.common import Text


class PlatformCourse(BaseModel):
    course_id: str = Field(min_length=1)
    course_name: str = Field(min_length=1)
    description: str | None = None
    category: str | None = None


class RecommendedCourse(BaseModel):
    course_id: Text
    course_name: Text
    relevance: str = ""
    aligned_milestone: str | None = None
    priority: Literal["High", "Medium", "Low"] = "Medium"

    @field_validator("course_id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, v):
        if isinstance(v, str):
            return v.strip().capitalize()
        return v


class RecommendedTest(BaseModel):
    test_id: str | None = None
    test_name: Text
    relevance: str = ""


class RecommendedSession(BaseModel):
    session_id: str | None = None
    session_name: Text
    relevance: str = ""


class CourseRecommendation(BaseModel):
    recommended_courses: list[RecommendedCourse] = Field(default_factory=list)
    recommended_tests: list[RecommendedTest] = Field(default_factory=list)
    recommended_sessions: list[RecommendedSession] = Field(default_factory=list)
    suggested_learning_path: Text


class CourseRecommendationRead(CourseRecommendation):
    id: int
    user_id: int
    roadmap_id: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RecommendCoursesRequest(BaseModel):
    platform_courses: list[PlatformCourse] = Field(min_length=1, max_length=500)
