from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.sql import func

from career_guidance.database import Base
from career_guidance.db.store import APPEND


class CareerMatchModel(Base):
    __tablename__ = "career_matches"
    __lifecycle__ = APPEND

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    profile_id = Column(Integer, ForeignKey("career_profiles.id", ondelete="SET NULL"), nullable=True)

    # UUID string shared by every match from one generation call.
    batch_id = Column(String(36), nullable=False, index=True)
    # Order returned by the inference capability within the batch.
    position = Column(Integer, nullable=False, default=0)

    career = Column(String(255), nullable=False)
    compatibility_score = Column(Integer, nullable=False)
    reasoning = Column(Text, nullable=False)
    key_skills_aligned = Column(JSON, nullable=False, default=list)
    potential_challenges = Column(JSON, nullable=False, default=list)
    education_requirements = Column(JSON, nullable=False, default=list)
    growth_opportunities = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
