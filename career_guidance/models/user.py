# user.py
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func
from career_guidance.database import Base


class User(Base):
    """Account row owned by the platform's account service.

    Only the columns the guidance pipeline reads are mapped here.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    age = Column(Integer, nullable=True)
    country = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
