from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from hr_training.core.constants import EnrollmentStatusEnum
from hr_training.crud.progress import lesson_progress as crud_progress
from hr_training.services.course_index import CourseIndex
from hr_training.services.progress import (
    completion_percent, course_completion_map, derive_employee_status, progress_service
)
from tests.helpers.asserts import assert_failed, assert_ok
from tests.helpers.factories import make_course, make_employee, make_lesson, make_module


@pytest.mark.parametrize("completed,total,expected", [
    (0, 0, 0),
    (0, 4, 0),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (1, 200, 1),
    (1, 201, 0),
    (3, 3, 100),
])
def test_completion_percent_rounds_half_up(completed, total, expected):
    assert completion_percent(completed, total) == expected


def test_course_completion_map_counts_only_course_lessons(db_session: Session):
    first = make_course(db_session, "First")
    second = make_course(db_session, "Second")
    empty = make_course(db_session, "Empty")
    m1 = make_module(db_session, first.id)
    m2 = make_module(db_session, second.id)
    l1 = make_lesson(db_session, m1.id, sort_order=1)
    l2 = make_lesson(db_session, m1.id, sort_order=2)
    l3 = make_lesson(db_session, m2.id)

    index = CourseIndex([m1, m2], [l1, l2, l3])
    completion = course_completion_map([first.id, second.id, empty.id], index, {l1.id, l3.id})

    assert completion == {first.id: 50, second.id: 100, empty.id: 0}


@pytest.mark.parametrize("stored,completion,enrolled,expected", [
    (EnrollmentStatusEnum.ASSIGNED, 100, True, "completed"),
    (EnrollmentStatusEnum.COMPLETED, 40, True, "in_progress"),
    (EnrollmentStatusEnum.ASSIGNED, 0, True, "assigned"),
    (EnrollmentStatusEnum.IN_PROGRESS, 0, True, "in_progress"),
    (None, 0, True, "assigned"),
    (None, 0, False, "available"),
    (None, 50, False, "in_progress"),
])
def test_derive_employee_status(stored, completion, enrolled, expected):
    assert derive_employee_status(stored, completion, enrolled=enrolled) == expected


def test_record_progress_creates_then_updates_single_row(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    module = make_module(db_session, make_course(db_session).id)
    lesson = make_lesson(db_session, module.id)

    first = assert_ok(progress_service.record_lesson_progress(
        db_session, employee_id=employee.id, lesson_id=lesson.id, completed=False, last_position_seconds=42
    ))
    assert first.is_completed is False
    assert first.completed_at is None
    assert first.last_position_seconds == 42

    second = assert_ok(progress_service.record_lesson_progress(
        db_session, employee_id=employee.id, lesson_id=lesson.id, completed=True
    ))
    assert second.id == first.id
    assert second.is_completed is True
    assert second.completed_at == frozen_clock
    assert second.last_position_seconds == 42

    rows = crud_progress.get_by_employee_and_lessons(db_session, employee_id=employee.id, lesson_ids=[lesson.id])
    assert len(rows) == 1


def test_recompleting_restamps_completion_time(db_session: Session, monkeypatch):
    employee = make_employee(db_session)
    module = make_module(db_session, make_course(db_session).id)
    lesson = make_lesson(db_session, module.id)

    monkeypatch.setattr(progress_service, "clock", lambda: datetime(2024, 1, 1, 8, 0))
    progress_service.record_lesson_progress(db_session, employee_id=employee.id, lesson_id=lesson.id, completed=True)

    monkeypatch.setattr(progress_service, "clock", lambda: datetime(2024, 1, 2, 8, 0))
    row = assert_ok(progress_service.record_lesson_progress(db_session, employee_id=employee.id, lesson_id=lesson.id, completed=True))

    assert row.completed_at == datetime(2024, 1, 2, 8, 0)


def test_uncompleting_clears_completion_time(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    module = make_module(db_session, make_course(db_session).id)
    lesson = make_lesson(db_session, module.id)

    progress_service.record_lesson_progress(db_session, employee_id=employee.id, lesson_id=lesson.id, completed=True)
    row = assert_ok(progress_service.record_lesson_progress(db_session, employee_id=employee.id, lesson_id=lesson.id, completed=False))

    assert row.is_completed is False
    assert row.completed_at is None


def test_progress_on_unknown_lesson_is_not_found(db_session: Session, frozen_clock):
    employee = make_employee(db_session)

    assert_failed(
        progress_service.record_lesson_progress(db_session, employee_id=employee.id, lesson_id=999, completed=True),
        "NOT_FOUND", "Lesson not found."
    )


def test_unexpected_error_is_returned_as_failure(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    lesson = make_lesson(db_session, make_module(db_session, make_course(db_session).id).id)

    error = assert_failed(
        progress_service.record_lesson_progress(db_session, employee_id=employee.id, lesson_id=lesson.id,
                                                completed=False, last_position_seconds="12.5"),
        "INTERNAL_SERVER_ERROR"
    )
    assert "12.5" in error
    assert crud_progress.get_all(db_session) == []
