"""Immutable nested views of a course, built once per read.

Ordering is resolved during assembly, so consumers never re-sort.
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Any
from datetime import datetime

from hr_training.core.constants import (
    CourseDifficultyEnum, CourseStatusEnum, LessonTypeEnum, QuestionTypeEnum
)
from hr_training.schemas.lesson import LessonResource
from hr_training.schemas.progress import LessonProgress
from hr_training.schemas.attempt import QuizAttempt

class QuestionNode(BaseModel):
    id: int
    quiz_id: int
    question_text: str
    question_type: QuestionTypeEnum
    options: List[str] = []
    correct_answer: Optional[Any] = None
    points: int = 1

    model_config = ConfigDict(frozen=True)

class QuizNode(BaseModel):
    id: int
    title: str
    pass_mark: int
    time_limit_seconds: Optional[int] = None
    module_id: Optional[int] = None
    lesson_id: Optional[int] = None
    questions: List[QuestionNode] = []

    model_config = ConfigDict(frozen=True)

class LessonNode(BaseModel):
    id: int
    module_id: int
    title: str
    sort_order: int
    lesson_type: LessonTypeEnum
    content_html: Optional[str] = None
    video_url: Optional[str] = None
    resources: List[LessonResource] = []
    quiz: Optional[QuizNode] = None

    model_config = ConfigDict(frozen=True)

class ModuleNode(BaseModel):
    id: int
    course_id: int
    title: str
    sort_order: int
    lessons: List[LessonNode] = []
    quiz: Optional[QuizNode] = None

    model_config = ConfigDict(frozen=True)

class CourseTree(BaseModel):
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
    modules: List[ModuleNode] = []

    model_config = ConfigDict(frozen=True)

    def lesson_ids(self) -> List[int]:
        return [lesson.id for module in self.modules for lesson in module.lessons]

    def quiz_ids(self) -> List[int]:
        ids = []
        for module in self.modules:
            if module.quiz:
                ids.append(module.quiz.id)
            ids.extend(lesson.quiz.id for lesson in module.lessons if lesson.quiz)
        return ids

class PlayerLessonNode(LessonNode):
    progress: Optional[LessonProgress] = None
    latest_attempt: Optional[QuizAttempt] = None

class PlayerModuleNode(ModuleNode):
    lessons: List[PlayerLessonNode] = []
    latest_attempt: Optional[QuizAttempt] = None

class CoursePlayer(CourseTree):
    employee_id: int
    modules: List[PlayerModuleNode] = []
