from pydantic import BaseModel
from typing import Optional, List, Any

from hr_training.core.constants import QuestionTypeEnum
from hr_training.utils.helpers import safe_json_parse, normalize_list

class QuestionCreate(BaseModel):
    quiz_id: Optional[int] = None
    question_text: Optional[str] = None
    question_type: QuestionTypeEnum = QuestionTypeEnum.SINGLE
    options: Optional[List[str]] = None
    correct_answer: Optional[Any] = None
    points: Optional[int] = None

class QuestionUpdate(BaseModel):
    question_text: Optional[str] = None
    question_type: Optional[QuestionTypeEnum] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[Any] = None
    points: Optional[int] = None

class Question(BaseModel):
    id: int
    quiz_id: int
    question_text: str
    question_type: QuestionTypeEnum
    options: List[str] = []
    correct_answer: Optional[Any] = None
    points: int = 1

    @classmethod
    def from_row(cls, row) -> "Question":
        return cls(
            id=row.id,
            quiz_id=row.quiz_id,
            question_text=row.question_text,
            question_type=row.question_type,
            options=[str(option) for option in normalize_list(safe_json_parse(row.options_json, []))],
            correct_answer=safe_json_parse(row.correct_answer_json, None),
            points=int(row.points or 1),
        )
