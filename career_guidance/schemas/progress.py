from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from career_guidance.schemas.common import Text


class TestScore(BaseModel):
    __test__ = False  # keep pytest from collecting this model

    test_id: str = Field(min_length=1)
    score: float = Field(ge=0)
    max_score: float = Field(gt=0)
    date: datetime

    @model_validator(mode="after")
    def _score_within_max(self) -> "TestScore":
        if self.score > self.max_score:
            raise ValueError("score cannot exceed max_score")
        return self


class ParticipationMetrics(BaseModel):
    # Percentage of scheduled live classes attended.
    live_class_participation: float = Field(default=0, ge=0, le=100)
    questions_asked: int = Field(default=0, ge=0)
    assignments_completed: int = Field(default=0, ge=0)


class AdjustedMilestone(BaseModel):
    milestone_id: int
    adjusted_timeline: Text
    adjustment_reason: Text


class ProgressUpdate(BaseModel):
    progress_summary: Text
    achievement_level: Text
    strengths: list[Text] = Field(default_factory=list)
    areas_for_improvement: list[Text] = Field(default_factory=list)
    adjusted_milestones: list[AdjustedMilestone] = Field(default_factory=list)
    feedback: str = ""
    motivation: str = ""
    next_steps: list[Text] = Field(default_factory=list)


class ProgressUpdateRead(ProgressUpdate):
    id: int
    user_id: int
    roadmap_id: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AdaptProgressRequest(BaseModel):
    # Telemetry is supplied by the caller; this service does not collect it.
    test_scores: list[TestScore] = Field(default_factory=list, max_length=200)
    participation: ParticipationMetrics = Field(default_factory=ParticipationMetrics)
