from sqlalchemy import Column, Integer, String, Text, DateTime, Enum
from sqlalchemy.sql import func
from hr_training.core.database import Base
from hr_training.core.constants import CourseDifficultyEnum, CourseStatusEnum

class Course(Base):
    __tablename__ = "training_courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True, default="")
    cover_url = Column(String, nullable=True)
    category = Column(String, nullable=True)
    difficulty = Column(Enum(CourseDifficultyEnum), nullable=False, default=CourseDifficultyEnum.BEGINNER)
    estimated_minutes = Column(Integer, nullable=False, default=0)
    status = Column(Enum(CourseStatusEnum), nullable=False, default=CourseStatusEnum.DRAFT, index=True)
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=True)
