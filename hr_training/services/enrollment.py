import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy import exc
from sqlalchemy.orm import Session

from hr_training.core.constants import EnrollmentStatusEnum
from hr_training.core.decorators import service_result
from hr_training.crud.course import course as crud_course
from hr_training.crud.employee import employee as crud_employee
from hr_training.crud.enrollment import enrollment as crud_enrollment
from hr_training.crud.lesson import lesson as crud_lesson
from hr_training.crud.module import module as crud_module
from hr_training.crud.progress import lesson_progress as crud_progress
from hr_training.schemas.course import Course
from hr_training.schemas.employee import Employee
from hr_training.schemas.enrollment import AssignmentResult, EmployeeCourse, Enrollment
from hr_training.services.course_index import CourseIndex
from hr_training.services.progress import completed_lesson_ids, course_completion_map, derive_employee_status
from hr_training.utils.clock import utcnow
from hr_training.utils.helpers import unique_ids

logger = logging.getLogger(__name__)


class EnrollmentService:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    @service_result()
    def assign(
        self,
        db: Session,
        course_id: int,
        employee_ids: List[int],
        assigned_by: Optional[int] = None,
        due_date: Optional[date] = None,
    ) -> AssignmentResult:
        """Enroll employees in a course. Pairs that already exist are counted as skipped."""
        clean_ids = unique_ids(employee_ids)
        if not course_id or not clean_ids:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="course_id and employee_ids are required.")

        if not crud_course.get(db, id=course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")

        existing = {
            row.employee_id
            for row in crud_enrollment.get_by_course_and_employees(db, course_id=course_id, employee_ids=clean_ids)
        }
        now = self.clock()
        rows = [
            {
                "employee_id": employee_id,
                "course_id": course_id,
                "assigned_by": assigned_by,
                "assigned_at": now,
                "due_date": due_date,
                "status": EnrollmentStatusEnum.ASSIGNED,
            }
            for employee_id in clean_ids
            if employee_id not in existing
        ]
        inserted = self._insert_enrollments(db, rows) if rows else 0

        result = AssignmentResult(inserted=inserted, skipped=len(clean_ids) - inserted)
        logger.info(f"Assigned course {course_id}: {result.inserted} inserted, {result.skipped} skipped")
        return result

    def _insert_enrollments(self, db: Session, rows: List[dict]) -> int:
        """Insert as one batch; a pair enrolled in the meantime makes it fall back to row by row."""
        try:
            crud_enrollment.create_many(db, objs_in=rows)
            return len(rows)
        except exc.IntegrityError:
            db.rollback()
            logger.warning(f"Enrollment batch for course {rows[0]['course_id']} hit an existing pair, inserting one by one")

        inserted = 0
        for row in rows:
            try:
                crud_enrollment.create(db, obj_in=row)
                inserted += 1
            except exc.IntegrityError:
                db.rollback()
        return inserted

    @service_result()
    def list_for_employee(self, db: Session, employee_id: int) -> List[EmployeeCourse]:
        """Published courses merged with the employee's enrollment and derived progress."""
        if not employee_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="employee_id is required.")

        courses = crud_course.get_published(db)
        course_ids = [c.id for c in courses]
        modules = crud_module.get_by_courses(db, course_ids=course_ids)
        lessons = crud_lesson.get_by_modules(db, module_ids=[m.id for m in modules])
        progress_rows = crud_progress.get_by_employee_and_lessons(
            db, employee_id=employee_id, lesson_ids=[l.id for l in lessons]
        )

        index = CourseIndex(modules, lessons)
        completion = course_completion_map(course_ids, index, completed_lesson_ids(progress_rows))

        enrollment_by_course = {}
        # newest first, so the first row per course wins
        for row in crud_enrollment.get_by_employee(db, employee_id=employee_id):
            enrollment_by_course.setdefault(row.course_id, row)

        result = []
        for course in courses:
            enrollment = enrollment_by_course.get(course.id)
            percent = completion.get(course.id, 0)
            result.append(EmployeeCourse(
                **Course.model_validate(course).model_dump(),
                completion_percent=percent,
                enrollment=Enrollment.model_validate(enrollment) if enrollment else None,
                employee_status=derive_employee_status(
                    enrollment.status if enrollment else None, percent, enrolled=enrollment is not None
                ),
            ))
        return result

    @service_result()
    def list_employees(self, db: Session) -> List[Employee]:
        return [Employee.model_validate(row) for row in crud_employee.get_all_by_name(db)]


enrollment_service = EnrollmentService()
