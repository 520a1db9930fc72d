from __future__ import annotations

from pydantic import BaseModel, Field

from career_guidance.schemas.common import Text


class SkillLevel(BaseModel):
    skill: Text
    level: int = Field(ge=1, le=10, description="1..10 (inclusive)")


class SkillSummary(BaseModel):
    technical: list[SkillLevel] = Field(default_factory=list)
    soft: list[SkillLevel] = Field(default_factory=list)

    def levels(self) -> dict[str, int]:
        # Technical entries win when the same skill appears in both categories.
        merged = {item.skill: item.level for item in self.soft}
        merged.update({item.skill: item.level for item in self.technical})
        return merged
