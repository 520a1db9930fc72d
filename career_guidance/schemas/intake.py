from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from career_guidance.schemas.match import CareerMatchRead
from career_guidance.schemas.profile import CareerProfileRead


FieldType = Literal["text", "textarea", "number", "select", "multiselect", "rating"]


class QuestionField(BaseModel):
    id: str
    label: str
    type: FieldType
    options: list[str] = Field(default_factory=list)
    # Inclusive bounds for "number" fields.
    min_value: float | None = None
    max_value: float | None = None


class QuestionGroup(BaseModel):
    title: str
    description: str
    fields: list[QuestionField]


class StepValidationRequest(BaseModel):
    answers: dict[str, Any] = Field(default_factory=dict)


class StepValidationResult(BaseModel):
    step_index: int
    valid: bool
    missing_fields: list[str] = Field(default_factory=list)
    invalid_fields: list[str] = Field(default_factory=list)
    is_last_step: bool = False


class AptitudeSubmission(BaseModel):
    answers: dict[str, Any] = Field(default_factory=dict)


class IntakeSubmissionResponse(BaseModel):
    profile: CareerProfileRead
    matches: list[CareerMatchRead]
