import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Set

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hr_training.core.constants import EmployeeCourseStatusEnum
from hr_training.core.decorators import service_result
from hr_training.crud.lesson import lesson as crud_lesson
from hr_training.crud.progress import lesson_progress as crud_progress
from hr_training.models.progress import LessonProgress as LessonProgressModel
from hr_training.schemas.progress import LessonProgress
from hr_training.services.course_index import CourseIndex
from hr_training.utils.clock import utcnow
from hr_training.utils.helpers import percentage

logger = logging.getLogger(__name__)


def completion_percent(completed: int, total: int) -> int:
    """Nearest-integer share of completed lessons; a course without lessons is 0."""
    return percentage(completed, total)


def completed_lesson_ids(progress_rows: Iterable[LessonProgressModel]) -> Set[int]:
    return {row.lesson_id for row in progress_rows if row.is_completed}


def course_completion_map(course_ids: Iterable[int], index: CourseIndex, completed: Set[int]) -> Dict[int, int]:
    completion = {}
    for course_id in course_ids:
        lesson_ids = index.lesson_ids_for(course_id)
        done = sum(1 for lesson_id in lesson_ids if lesson_id in completed)
        completion[course_id] = completion_percent(done, len(lesson_ids))
    return completion


def derive_employee_status(stored_status: Optional[str], completion: int, enrolled: bool = True) -> str:
    """Progress always overrides the stored enrollment status."""
    if completion >= 100:
        return EmployeeCourseStatusEnum.COMPLETED.value
    if completion > 0:
        return EmployeeCourseStatusEnum.IN_PROGRESS.value
    if not enrolled:
        return EmployeeCourseStatusEnum.AVAILABLE.value
    if stored_status is None:
        return EmployeeCourseStatusEnum.ASSIGNED.value
    return getattr(stored_status, "value", stored_status)


class ProgressService:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    @service_result()
    def record_lesson_progress(
        self,
        db: Session,
        employee_id: int,
        lesson_id: int,
        completed: bool = False,
        last_position_seconds: Optional[int] = None,
    ) -> LessonProgress:
        """Upsert the (employee, lesson) row.

        Completing stamps ``completed_at`` with the current time on every call,
        so a repeated completion moves the timestamp forward (last write wins).
        Un-completing clears it. A ``None`` position keeps the stored one.
        """
        if not employee_id or not lesson_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="employee_id and lesson_id are required.")

        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found.")

        now = self.clock()
        payload = {
            "employee_id": employee_id,
            "lesson_id": lesson_id,
            "is_completed": bool(completed),
            "completed_at": now if completed else None,
            "updated_at": now,
        }
        if last_position_seconds is not None:
            payload["last_position_seconds"] = max(int(last_position_seconds), 0)

        existing = crud_progress.get_by_employee_and_lesson(db, employee_id=employee_id, lesson_id=lesson_id)
        if existing:
            row = crud_progress.update(db, db_obj=existing, obj_in=payload)
        else:
            row = crud_progress.create(db, obj_in=payload)

        logger.info(f"Progress for employee {employee_id} on lesson {lesson_id}: completed={bool(completed)}")
        return LessonProgress.model_validate(row)


progress_service = ProgressService()
