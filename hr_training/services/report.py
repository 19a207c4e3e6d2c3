"""Course-level and employee-level training analytics.

Every report reads whole tables once and joins them in memory through a
``CourseIndex``; attempts reach their course through quiz -> lesson -> module
or quiz -> module.
"""
import logging
from collections import defaultdict
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hr_training.core.constants import CourseStatusEnum
from hr_training.core.decorators import service_result
from hr_training.crud.attempt import quiz_attempt as crud_attempt
from hr_training.crud.course import course as crud_course
from hr_training.crud.employee import employee as crud_employee
from hr_training.crud.enrollment import enrollment as crud_enrollment
from hr_training.crud.lesson import lesson as crud_lesson
from hr_training.crud.module import module as crud_module
from hr_training.crud.progress import lesson_progress as crud_progress
from hr_training.crud.quiz import quiz as crud_quiz
from hr_training.models.attempt import QuizAttempt
from hr_training.schemas.report import CourseReportRow, DashboardStats, EmployeeReportRow, EmployeeResultRow
from hr_training.services.course_index import CourseIndex
from hr_training.services.progress import completion_percent, derive_employee_status
from hr_training.utils.clock import utcnow
from hr_training.utils.helpers import percentage, round_half_up

logger = logging.getLogger(__name__)

Pair = Tuple[int, int]


def attempt_stats(attempts: List[QuizAttempt]) -> Tuple[int, int]:
    """(average score, pass rate), both 0 when there are no attempts."""
    if not attempts:
        return 0, 0
    total_score = sum(int(a.score or 0) for a in attempts)
    passed = sum(1 for a in attempts if a.passed)
    return round_half_up(total_score / len(attempts)), percentage(passed, len(attempts))


def latest_attempt(attempts: Iterable[QuizAttempt]) -> Optional[QuizAttempt]:
    """Most recent by submission time, ties broken by the higher id."""
    return max(attempts, key=lambda a: (a.submitted_at or datetime.min, a.id or 0), default=None)


class ProgressFacts:
    """Per (employee, course) progress derived from raw progress rows."""

    def __init__(self, progress_rows, index: CourseIndex):
        self.index = index
        self.started: Set[Pair] = set()
        self.completed_lessons: Dict[Pair, Set[int]] = defaultdict(set)
        self.completed_at: Dict[Pair, datetime] = {}

        for row in progress_rows:
            course_id = index.course_for_lesson(row.lesson_id)
            if not course_id:
                continue
            key = (row.employee_id, course_id)
            self.started.add(key)
            if not row.is_completed:
                continue
            self.completed_lessons[key].add(row.lesson_id)
            if row.completed_at and (key not in self.completed_at or row.completed_at > self.completed_at[key]):
                self.completed_at[key] = row.completed_at

    def completion(self, employee_id: int, course_id: int) -> int:
        lesson_ids = self.index.lesson_ids_for(course_id)
        done = self.completed_lessons.get((employee_id, course_id), set())
        return completion_percent(sum(1 for lesson_id in lesson_ids if lesson_id in done), len(lesson_ids))

    def completion_date(self, employee_id: int, course_id: int) -> Optional[datetime]:
        if self.completion(employee_id, course_id) < 100:
            return None
        return self.completed_at.get((employee_id, course_id))

    def employees_in(self, course_id: int) -> Set[int]:
        return {employee_id for employee_id, cid in self.started if cid == course_id}


def group_attempts_by_course(attempts: Iterable[QuizAttempt], index: CourseIndex) -> Dict[Pair, List[QuizAttempt]]:
    grouped: Dict[Pair, List[QuizAttempt]] = defaultdict(list)
    for attempt in attempts:
        course_id = index.course_for_quiz(attempt.quiz_id)
        if course_id:
            grouped[(attempt.employee_id, course_id)].append(attempt)
    return grouped


class ReportService:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    def _load_index(self, db: Session) -> CourseIndex:
        return CourseIndex(crud_module.get_all(db), crud_lesson.get_all(db), crud_quiz.get_all(db))

    @service_result()
    def dashboard_stats(self, db: Session) -> DashboardStats:
        courses = crud_course.get_all(db)
        attempts = crud_attempt.get_all(db)
        published = sum(1 for c in courses if c.status == CourseStatusEnum.PUBLISHED)
        average_score, pass_rate = attempt_stats(attempts)
        return DashboardStats(
            total_courses=len(courses),
            published_courses=published,
            draft_courses=len(courses) - published,
            total_enrollments=crud_enrollment.count_all(db),
            total_attempts=len(attempts),
            average_score=average_score,
            pass_rate=pass_rate,
        )

    @service_result()
    def course_report(self, db: Session) -> List[CourseReportRow]:
        courses = crud_course.get_listing(db)
        index = self._load_index(db)
        facts = ProgressFacts(crud_progress.get_all(db), index)

        attempts_by_course: Dict[int, List[QuizAttempt]] = defaultdict(list)
        for (_, course_id), rows in group_attempts_by_course(crud_attempt.get_all(db), index).items():
            attempts_by_course[course_id].extend(rows)

        enrollments_by_course: Dict[int, int] = defaultdict(int)
        for row in crud_enrollment.get_all(db):
            enrollments_by_course[row.course_id] += 1

        rows = []
        for course in courses:
            started = facts.employees_in(course.id)
            completed = {employee_id for employee_id in started if facts.completion(employee_id, course.id) >= 100}
            course_attempts = attempts_by_course.get(course.id, [])
            average_score, pass_rate = attempt_stats(course_attempts)
            rows.append(CourseReportRow(
                course_id=course.id,
                title=course.title,
                status=course.status,
                enrollments=enrollments_by_course.get(course.id, 0),
                started=len(started),
                completed=len(completed),
                average_score=average_score,
                attempts=len(course_attempts),
                pass_rate=pass_rate,
            ))
        return rows

    @service_result()
    def employee_report(self, db: Session) -> List[EmployeeReportRow]:
        """One row per enrollment, sorted by employee name then course title.

        Enrollments whose course no longer exists are dropped; a missing
        employee row only leaves the identity columns empty.
        """
        employees = {e.id: e for e in crud_employee.get_all(db)}
        courses = {c.id: c for c in crud_course.get_all(db)}
        index = self._load_index(db)
        facts = ProgressFacts(crud_progress.get_all(db), index)
        attempts = group_attempts_by_course(crud_attempt.get_all(db), index)
        today = self.clock().date()

        rows = []
        for enrollment in crud_enrollment.get_all(db):
            course = courses.get(enrollment.course_id)
            if not course:
                continue
            employee = employees.get(enrollment.employee_id)
            key = (enrollment.employee_id, enrollment.course_id)
            row_attempts = attempts.get(key, [])
            latest = latest_attempt(row_attempts)
            percent = facts.completion(*key)

            rows.append(EmployeeReportRow(
                employee_id=enrollment.employee_id,
                employee_name=employee.name if employee else None,
                employee_email=employee.email if employee else None,
                department=employee.department if employee else None,
                course_id=course.id,
                course_title=course.title,
                course_status=course.status,
                assigned_at=enrollment.assigned_at,
                due_date=enrollment.due_date,
                completion_percent=percent,
                completion_date=facts.completion_date(*key),
                attempts=len(row_attempts),
                latest_score=int(latest.score or 0) if latest else None,
                pass_status=bool(latest.passed) if latest else None,
                status=derive_employee_status(enrollment.status, percent),
                overdue=bool(enrollment.due_date) and percent < 100 and enrollment.due_date < today,
                has_started=key in facts.started or bool(row_attempts),
            ))

        rows.sort(key=lambda r: ((r.employee_name or "").lower(), r.course_title.lower()))
        return rows

    @service_result()
    def employee_results(self, db: Session, employee_id: int) -> List[EmployeeResultRow]:
        """Courses the employee is enrolled in or has attempted, sorted by title."""
        if not employee_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="employee_id is required.")

        courses = {c.id: c for c in crud_course.get_all(db)}
        index = self._load_index(db)
        lesson_ids = list(index.course_by_lesson.keys())
        facts = ProgressFacts(
            crud_progress.get_by_employee_and_lessons(db, employee_id=employee_id, lesson_ids=lesson_ids), index
        )
        attempts = group_attempts_by_course(crud_attempt.get_by_employee(db, employee_id=employee_id), index)

        enrollment_status = {}
        for row in crud_enrollment.get_by_employee(db, employee_id=employee_id):
            enrollment_status.setdefault(row.course_id, row.status)

        tracked = list(enrollment_status.keys()) + [course_id for (_, course_id) in attempts.keys()]
        rows = []
        for course_id in dict.fromkeys(tracked):
            course = courses.get(course_id)
            if not course:
                continue
            course_attempts = attempts.get((employee_id, course_id), [])
            latest = latest_attempt(course_attempts)
            stored = enrollment_status.get(course_id)
            rows.append(EmployeeResultRow(
                course_id=course_id,
                course_title=course.title,
                completion_percent=facts.completion(employee_id, course_id),
                completion_date=facts.completion_date(employee_id, course_id),
                latest_score=int(latest.score or 0) if latest else None,
                pass_status=bool(latest.passed) if latest else None,
                attempts=len(course_attempts),
                enrollment_status=getattr(stored, "value", stored),
            ))

        rows.sort(key=lambda r: r.course_title.lower())
        return rows


report_service = ReportService()
