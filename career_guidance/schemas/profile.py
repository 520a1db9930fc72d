# profile.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from career_guidance.schemas.common import Text, dedupe_labels
from career_guidance.schemas.skill_level import SkillSummary


class UserInfo(BaseModel):
    age: int | None = Field(default=None, ge=0, le=130)
    education_level: str | None = None
    current_field: str | None = None
    goals: str | None = None


class CareerProfile(BaseModel):
    personality_type: Text
    primary_strengths: list[Text] = Field(min_length=1)
    secondary_strengths: list[Text] = Field(default_factory=list)
    areas_for_improvement: list[Text] = Field(default_factory=list)
    learning_style: Text
    work_environment_preference: Text
    career_interests: list[Text] = Field(min_length=1)
    skill_summary: SkillSummary

    @field_validator("career_interests", mode="before")
    @classmethod
    def _dedupe_interests(cls, v):
        return dedupe_labels(v)


class CareerProfileRead(CareerProfile):
    id: int
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
