from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class LessonProgressUpdate(BaseModel):
    employee_id: int
    completed: bool = False
    last_position_seconds: Optional[int] = Field(default=None, ge=0)

class LessonProgress(BaseModel):
    id: int
    employee_id: int
    lesson_id: int
    is_completed: bool
    completed_at: Optional[datetime] = None
    last_position_seconds: Optional[int] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
