from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from hr_training.core.constants import CourseDifficultyEnum, CourseStatusEnum

class CourseBase(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    cover_url: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[CourseDifficultyEnum] = None
    estimated_minutes: Optional[int] = None
    status: Optional[CourseStatusEnum] = None

class CourseCreate(CourseBase):
    pass

class CourseUpdate(CourseBase):
    pass

class Course(BaseModel):
    id: int
    title: str
    description: Optional[str] = ""
    cover_url: Optional[str] = None
    category: Optional[str] = None
    difficulty: CourseDifficultyEnum
    estimated_minutes: int = 0
    status: CourseStatusEnum
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
