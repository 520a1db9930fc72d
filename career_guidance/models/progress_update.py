from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.sql import func

from career_guidance.database import Base
from career_guidance.db.store import APPEND


class ProgressUpdateModel(Base):
    __tablename__ = "career_progress_updates"
    __lifecycle__ = APPEND

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    roadmap_id = Column(Integer, ForeignKey("career_roadmaps.id", ondelete="CASCADE"), nullable=False, index=True)

    progress_summary = Column(Text, nullable=False)
    achievement_level = Column(String(255), nullable=False)
    strengths = Column(JSON, nullable=False, default=list)
    areas_for_improvement = Column(JSON, nullable=False, default=list)
    # Advisory only: list[{milestone_id, adjusted_timeline, adjustment_reason}]
    adjusted_milestones = Column(JSON, nullable=False, default=list)
    feedback = Column(Text, nullable=False)
    motivation = Column(Text, nullable=False)
    next_steps = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
