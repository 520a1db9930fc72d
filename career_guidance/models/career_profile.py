# career_profile.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text, func
from sqlalchemy.orm import relationship
from career_guidance.database import Base
from career_guidance.db.store import SINGLETON


class CareerProfileModel(Base):
    __tablename__ = "career_profiles"
    __lifecycle__ = SINGLETON
    __singleton_key__ = "user_id"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    personality_type = Column(String(255), nullable=False)
    primary_strengths = Column(JSON, nullable=False, default=list)
    secondary_strengths = Column(JSON, nullable=False, default=list)
    areas_for_improvement = Column(JSON, nullable=False, default=list)
    learning_style = Column(Text, nullable=False)
    work_environment_preference = Column(Text, nullable=False)
    career_interests = Column(JSON, nullable=False, default=list)
    # {"technical": [{skill, level}], "soft": [{skill, level}]}
    skill_summary = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", backref="career_profile_record")
