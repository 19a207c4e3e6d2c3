"""Deepest-first deletion of training content.

The store enforces no foreign-key cascade, so owned rows are removed
explicitly: questions and attempts before their quiz, quizzes and progress
before their lesson, lessons and module quizzes before their module. Nothing
here commits; callers run the whole purge as one unit of work. Every step
only deletes what it still finds, so a purge can be re-run safely.
"""
import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from hr_training.crud.lesson import lesson as crud_lesson
from hr_training.crud.module import module as crud_module
from hr_training.crud.quiz import quiz as crud_quiz
from hr_training.crud.question import question as crud_question
from hr_training.crud.attempt import quiz_attempt as crud_attempt
from hr_training.crud.progress import lesson_progress as crud_progress
from hr_training.crud.enrollment import enrollment as crud_enrollment
from hr_training.crud.course import course as crud_course
from hr_training.utils.helpers import unique_ids

logger = logging.getLogger(__name__)


def purge_quizzes(db: Session, quiz_ids: List[int]) -> Dict[str, int]:
    quiz_ids = unique_ids(quiz_ids)
    if not quiz_ids:
        return {"questions": 0, "attempts": 0, "quizzes": 0}
    return {
        "questions": crud_question.delete_in(db, column="quiz_id", values=quiz_ids, commit=False),
        "attempts": crud_attempt.delete_in(db, column="quiz_id", values=quiz_ids, commit=False),
        "quizzes": crud_quiz.delete_in(db, column="id", values=quiz_ids, commit=False),
    }


def purge_lessons(db: Session, lesson_ids: List[int]) -> Dict[str, int]:
    lesson_ids = unique_ids(lesson_ids)
    if not lesson_ids:
        return {"progress": 0, "lessons": 0}
    quiz_ids = [q.id for q in crud_quiz.get_by_lessons(db, lesson_ids=lesson_ids)]
    counts = purge_quizzes(db, quiz_ids)
    counts["progress"] = crud_progress.delete_in(db, column="lesson_id", values=lesson_ids, commit=False)
    counts["lessons"] = crud_lesson.delete_in(db, column="id", values=lesson_ids, commit=False)
    return counts


def purge_modules(db: Session, module_ids: List[int]) -> Dict[str, int]:
    module_ids = unique_ids(module_ids)
    if not module_ids:
        return {"modules": 0}
    lesson_ids = [l.id for l in crud_lesson.get_by_modules(db, module_ids=module_ids)]
    counts = purge_lessons(db, lesson_ids)
    module_quiz_ids = [q.id for q in crud_quiz.get_by_modules(db, module_ids=module_ids)]
    for key, value in purge_quizzes(db, module_quiz_ids).items():
        counts[key] = counts.get(key, 0) + value
    counts["modules"] = crud_module.delete_in(db, column="id", values=module_ids, commit=False)
    return counts


def purge_course(db: Session, course_id: int) -> Dict[str, int]:
    module_ids = [m.id for m in crud_module.get_by_course(db, course_id=course_id)]
    counts = purge_modules(db, module_ids)
    counts["enrollments"] = crud_enrollment.delete_in(db, column="course_id", values=[course_id], commit=False)
    counts["courses"] = crud_course.delete_in(db, column="id", values=[course_id], commit=False)
    return counts
