from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, Text
from sqlalchemy.sql import func

from career_guidance.database import Base
from career_guidance.db.store import APPEND


class CourseRecommendationModel(Base):
    __tablename__ = "career_course_recommendations"
    __lifecycle__ = APPEND

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    roadmap_id = Column(Integer, ForeignKey("career_roadmaps.id", ondelete="CASCADE"), nullable=False, index=True)

    recommended_courses = Column(JSON, nullable=False, default=list)
    recommended_tests = Column(JSON, nullable=False, default=list)
    recommended_sessions = Column(JSON, nullable=False, default=list)
    suggested_learning_path = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
