from pydantic import BaseModel, ConfigDict
from typing import Optional

class QuizCreate(BaseModel):
    title: Optional[str] = None
    pass_mark: Optional[int] = None
    time_limit_seconds: Optional[int] = None
    module_id: Optional[int] = None
    lesson_id: Optional[int] = None

class QuizUpdate(BaseModel):
    title: Optional[str] = None
    pass_mark: Optional[int] = None
    time_limit_seconds: Optional[int] = None

class Quiz(BaseModel):
    id: int
    title: str
    pass_mark: int
    time_limit_seconds: Optional[int] = None
    module_id: Optional[int] = None
    lesson_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
