from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, field_validator

from career_guidance.schemas.common import Text
from career_guidance.schemas.profile import UserInfo


class CareerMatch(BaseModel):
    career: Text
    # Kept loose here; the match generator rejects non-integers and values outside
    # 0..100 with InvalidMatchError.
    compatibility_score: StrictInt | StrictFloat | StrictBool
    reasoning: Text
    key_skills_aligned: list[Text] = Field(default_factory=list)
    potential_challenges: list[Text] = Field(default_factory=list)
    education_requirements: list[Text] = Field(default_factory=list)
    growth_opportunities: str = ""

    @field_validator("compatibility_score", mode="before")
    @classmethod
    def _parse_score(cls, v):
        # Models occasionally answer "85%".
        if isinstance(v, str):
            text = v.strip().rstrip("%").strip()
            for cast in (int, float):
                try:
                    return cast(text)
                except ValueError:
                    continue
            return text
        return v


class CareerMatchBatch(BaseModel):
    career_matches: list[CareerMatch]


class CareerMatchRead(CareerMatch):
    id: int
    user_id: int
    profile_id: int | None = None
    batch_id: str
    position: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class GenerateMatchesRequest(BaseModel):
    user_info: UserInfo = Field(default_factory=UserInfo)
