import logging
from datetime import datetime
from typing import Callable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hr_training.core.constants import CourseDifficultyEnum, CourseStatusEnum
from hr_training.core.decorators import service_result
from hr_training.crud.course import course as crud_course
from hr_training.schemas.course import Course, CourseCreate, CourseUpdate
from hr_training.services.cascade import purge_course
from hr_training.utils.clock import utcnow

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    def _get_or_raise(self, db: Session, course_id: int):
        course = crud_course.get(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
        return course

    @service_result()
    def list_courses(self, db: Session, include_draft: bool = True) -> List[Course]:
        return [Course.model_validate(c) for c in crud_course.get_listing(db, include_draft=include_draft)]

    @service_result()
    def get_course(self, db: Session, course_id: int) -> Course:
        return Course.model_validate(self._get_or_raise(db, course_id))

    @service_result()
    def create_course(self, db: Session, course_in: CourseCreate, created_by: Optional[int] = None) -> Course:
        title = (course_in.title or "").strip()
        if not title:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Course title is required.")

        now = self.clock()
        course = crud_course.create(db, obj_in={
            "title": title,
            "description": course_in.description or "",
            "cover_url": course_in.cover_url or None,
            "category": course_in.category or None,
            "difficulty": course_in.difficulty or CourseDifficultyEnum.BEGINNER,
            "estimated_minutes": max(int(course_in.estimated_minutes or 0), 0),
            "status": course_in.status or CourseStatusEnum.DRAFT,
            "created_by": created_by,
            "created_at": now,
            "updated_at": now,
        })
        logger.info(f"Created course {course.id} '{title}'")
        return Course.model_validate(course)

    @service_result()
    def update_course(self, db: Session, course_id: int, course_in: CourseUpdate) -> Course:
        course = self._get_or_raise(db, course_id)

        update_data = course_in.model_dump(exclude_unset=True)
        if "title" in update_data:
            update_data["title"] = (update_data["title"] or "").strip()
            if not update_data["title"]:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Course title is required.")
        if "estimated_minutes" in update_data:
            update_data["estimated_minutes"] = max(int(update_data["estimated_minutes"] or 0), 0)
        for field in ("difficulty", "status"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)
        update_data["updated_at"] = self.clock()

        course = crud_course.update(db, db_obj=course, obj_in=update_data)
        logger.info(f"Updated course {course_id}")
        return Course.model_validate(course)

    @service_result()
    def delete_course(self, db: Session, course_id: int) -> dict:
        """Remove a course with all modules, lessons, quizzes, attempts, progress and enrollments."""
        self._get_or_raise(db, course_id)
        counts = purge_course(db, course_id)
        db.commit()
        logger.info(f"Deleted course {course_id}: {counts}")
        return counts


course_service = CourseService()
