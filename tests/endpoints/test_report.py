from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from hr_training.schemas.report import CourseReportRow, DashboardStats, EmployeeReportRow, EmployeeResultRow
from tests.helpers.asserts import api_call
from tests.helpers.contract import validate_response_schema
from tests.helpers.factories import make_employee


def test_report_endpoints(client: TestClient, db_session: Session, api_prefix: str):
    alice = make_employee(db_session, "Alice Smith")
    course = api_call(client, "POST", f"{api_prefix}/courses/", json={"title": "Ethics", "status": "published"}).json()["data"]
    module = api_call(client, "POST", f"{api_prefix}/modules/", json={"course_id": course["id"], "title": "M"}).json()["data"]
    lesson = api_call(client, "POST", f"{api_prefix}/lessons/", json={"module_id": module["id"], "title": "L"}).json()["data"]
    quiz = api_call(client, "POST", f"{api_prefix}/quizzes/", json={"title": "Q", "lesson_id": lesson["id"]}).json()["data"]
    question = api_call(client, "POST", f"{api_prefix}/quizzes/questions/", json={
        "quiz_id": quiz["id"], "question_text": "Pick a", "correct_answer": "a", "options": ["a", "b"]
    }).json()["data"]

    api_call(client, "POST", f"{api_prefix}/enrollments/", json={
        "course_id": course["id"], "employee_ids": [alice.id], "due_date": "2024-06-01"
    })
    api_call(client, "POST", f"{api_prefix}/quizzes/{quiz['id']}/attempts", json={
        "employee_id": alice.id, "answers": {str(question["id"]): "A"}
    })

    stats = api_call(client, "GET", f"{api_prefix}/reports/dashboard").json()["data"]
    validate_response_schema(stats, DashboardStats)
    assert (stats["total_attempts"], stats["average_score"], stats["pass_rate"]) == (1, 100, 100)

    courses = api_call(client, "GET", f"{api_prefix}/reports/courses").json()["data"]
    validate_response_schema(courses, CourseReportRow)
    assert courses[0]["enrollments"] == 1
    assert courses[0]["started"] == 0

    employees = api_call(client, "GET", f"{api_prefix}/reports/employees").json()["data"]
    validate_response_schema(employees, EmployeeReportRow)
    assert employees[0]["overdue"] is True
    assert employees[0]["has_started"] is True
    assert employees[0]["latest_score"] == 100

    results = api_call(client, "GET", f"{api_prefix}/reports/employees/{alice.id}/results").json()["data"]
    validate_response_schema(results, EmployeeResultRow)
    assert results[0]["course_title"] == "Ethics"
    assert results[0]["attempts"] == 1
