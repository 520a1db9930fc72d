from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from career_guidance.database import Base
from career_guidance.db.store import APPEND


class CareerRoadmapModel(Base):
    __tablename__ = "career_roadmaps"
    __lifecycle__ = APPEND

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    career_match_id = Column(Integer, ForeignKey("career_matches.id", ondelete="CASCADE"), nullable=False, index=True)

    career = Column(String(255), nullable=False)
    overview = Column(Text, nullable=False)
    timeframe = Column(String(255), nullable=False)
    # list[{skill, importance, suggested_resources}]
    skills_to_acquire = Column(JSON, nullable=False, default=list)
    # list[{name, description, timeline, preparation_tips}]
    exams_certifications = Column(JSON, nullable=False, default=list)
    # list[{title, description, skills}]
    project_ideas = Column(JSON, nullable=False, default=list)
    # {focus, activities}
    weekly_plan = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    milestones = relationship(
        "MilestoneModel",
        back_populates="roadmap",
        order_by="MilestoneModel.position",
        cascade="all, delete-orphan",
    )


class MilestoneModel(Base):
    __tablename__ = "career_milestones"

    id = Column(Integer, primary_key=True, index=True)
    roadmap_id = Column(Integer, ForeignKey("career_roadmaps.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    timeline = Column(String(255), nullable=False)
    required_skills = Column(JSON, nullable=False, default=list)
    activities = Column(JSON, nullable=False, default=list)
    resources = Column(JSON, nullable=False, default=list)

    # The only user-mutable state in the pipeline.
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    roadmap = relationship("CareerRoadmapModel", back_populates="milestones")
