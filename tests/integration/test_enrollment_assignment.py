from datetime import date

from sqlalchemy.orm import Session

from hr_training.core.constants import CourseStatusEnum, EnrollmentStatusEnum
from hr_training.crud.enrollment import enrollment as crud_enrollment
from hr_training.services.enrollment import enrollment_service
from tests.helpers.asserts import assert_failed, assert_ok
from tests.helpers.factories import (
    make_course, make_employee, make_enrollment, make_lesson, make_module, make_progress
)


def test_assign_is_idempotent(db_session: Session, frozen_clock):
    course = make_course(db_session)
    a = make_employee(db_session, "Alan Turing")
    b = make_employee(db_session, "Barbara Liskov")

    first = assert_ok(enrollment_service.assign(db_session, course_id=course.id, employee_ids=[a.id, b.id, a.id],
                                                assigned_by=1, due_date=date(2024, 7, 1)))
    second = assert_ok(enrollment_service.assign(db_session, course_id=course.id, employee_ids=[a.id, b.id]))

    assert (first.inserted, first.skipped) == (2, 0)
    assert (second.inserted, second.skipped) == (0, 2)

    rows = crud_enrollment.get_all(db_session)
    assert len(rows) == 2
    assert all(row.status == EnrollmentStatusEnum.ASSIGNED for row in rows)
    assert all(row.assigned_at == frozen_clock for row in rows)
    assert all(row.due_date == date(2024, 7, 1) for row in rows)


def test_assign_counts_existing_pairs_as_skipped(db_session: Session, frozen_clock):
    course = make_course(db_session)
    a = make_employee(db_session, "Alan Turing")
    b = make_employee(db_session, "Barbara Liskov")
    make_enrollment(db_session, a.id, course.id)

    result = assert_ok(enrollment_service.assign(db_session, course_id=course.id, employee_ids=[a.id, b.id]))
    assert (result.inserted, result.skipped) == (1, 1)


def test_assign_skips_pair_enrolled_after_the_existence_check(db_session: Session, frozen_clock, monkeypatch):
    course = make_course(db_session)
    a = make_employee(db_session, "Alan Turing")
    b = make_employee(db_session, "Barbara Liskov")
    a_id, b_id = a.id, b.id
    make_enrollment(db_session, a_id, course.id)
    # another request enrolled a between the lookup and the insert
    monkeypatch.setattr(crud_enrollment, "get_by_course_and_employees", lambda db, **kwargs: [])

    result = assert_ok(enrollment_service.assign(db_session, course_id=course.id, employee_ids=[a_id, b_id]))

    assert (result.inserted, result.skipped) == (1, 1)
    assert sorted(row.employee_id for row in crud_enrollment.get_all(db_session)) == [a_id, b_id]


def test_assign_validation(db_session: Session, frozen_clock):
    assert_failed(enrollment_service.assign(db_session, course_id=1, employee_ids=[]),
                  "BAD_REQUEST", "course_id and employee_ids are required.")
    assert_failed(enrollment_service.assign(db_session, course_id=77, employee_ids=[1]),
                  "NOT_FOUND", "Course not found.")


def test_list_for_employee_derives_status_from_progress(db_session: Session):
    employee = make_employee(db_session)
    done = make_course(db_session, "Done")
    started = make_course(db_session, "Started")
    assigned = make_course(db_session, "Assigned")
    available = make_course(db_session, "Available")
    make_course(db_session, "Hidden draft", status=CourseStatusEnum.DRAFT)

    done_lesson = make_lesson(db_session, make_module(db_session, done.id).id)
    started_module = make_module(db_session, started.id)
    started_lessons = [make_lesson(db_session, started_module.id, sort_order=i) for i in (1, 2, 3)]

    # stored status says assigned, progress says otherwise
    make_enrollment(db_session, employee.id, done.id)
    make_enrollment(db_session, employee.id, started.id, status=EnrollmentStatusEnum.COMPLETED)
    make_enrollment(db_session, employee.id, assigned.id)
    make_progress(db_session, employee.id, done_lesson.id)
    make_progress(db_session, employee.id, started_lessons[0].id)

    courses = {c.title: c for c in assert_ok(enrollment_service.list_for_employee(db_session, employee_id=employee.id))}

    assert set(courses) == {"Done", "Started", "Assigned", "Available"}
    assert (courses["Done"].completion_percent, courses["Done"].employee_status) == (100, "completed")
    assert (courses["Started"].completion_percent, courses["Started"].employee_status) == (33, "in_progress")
    assert (courses["Assigned"].completion_percent, courses["Assigned"].employee_status) == (0, "assigned")
    assert courses["Available"].employee_status == "available"
    assert courses["Available"].enrollment is None
    assert courses["Assigned"].enrollment.course_id == assigned.id


def test_list_employees_orders_by_name(db_session: Session):
    make_employee(db_session, "Zed Shaw")
    make_employee(db_session, "Ada Lovelace")

    employees = assert_ok(enrollment_service.list_employees(db_session))
    assert [e.name for e in employees] == ["Ada Lovelace", "Zed Shaw"]
