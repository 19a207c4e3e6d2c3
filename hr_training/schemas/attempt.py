from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

class QuizSubmission(BaseModel):
    employee_id: int
    answers: Dict[int, Any] = Field(default_factory=dict)

class QuestionGrade(BaseModel):
    question_id: int
    submitted_answer: Optional[Any] = None
    is_correct: bool
    earned_points: int
    points: int

class GradingSummary(BaseModel):
    grading: List[QuestionGrade] = []
    earned_points: int = 0
    total_points: int = 0

class QuizAttempt(BaseModel):
    id: int
    employee_id: int
    quiz_id: int
    started_at: Optional[datetime] = None
    submitted_at: datetime
    score: int
    passed: bool

    model_config = ConfigDict(from_attributes=True)

class AttemptResult(BaseModel):
    attempt: QuizAttempt
    score: int
    passed: bool
    earned_points: int
    total_points: int
    pass_mark: int
    grading: List[QuestionGrade] = []
