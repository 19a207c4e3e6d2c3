from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from hr_training.schemas.enrollment import EmployeeCourse
from tests.helpers.asserts import api_call
from tests.helpers.contract import validate_response_schema
from tests.helpers.factories import make_employee


def test_assign_and_list_employee_courses(client: TestClient, db_session: Session, api_prefix: str):
    alice = make_employee(db_session, "Alice Smith")
    bob = make_employee(db_session, "Bob Jones")
    course = api_call(client, "POST", f"{api_prefix}/courses/", json={"title": "Security", "status": "published"}).json()["data"]

    payload = {"course_id": course["id"], "employee_ids": [alice.id, bob.id, alice.id], "due_date": "2024-07-01"}
    first = api_call(client, "POST", f"{api_prefix}/enrollments/", json=payload).json()["data"]
    second = api_call(client, "POST", f"{api_prefix}/enrollments/", json=payload).json()["data"]
    assert first == {"inserted": 2, "skipped": 0}
    assert second == {"inserted": 0, "skipped": 2}

    courses = api_call(client, "GET", f"{api_prefix}/enrollments/employees/{alice.id}/courses").json()["data"]
    validate_response_schema(courses, EmployeeCourse)
    assert courses[0]["employee_status"] == "assigned"
    assert courses[0]["enrollment"]["due_date"] == "2024-07-01"

    employees = api_call(client, "GET", f"{api_prefix}/enrollments/employees").json()["data"]
    assert [e["name"] for e in employees] == ["Alice Smith", "Bob Jones"]


def test_assign_requires_employees(client: TestClient, api_prefix: str):
    course = api_call(client, "POST", f"{api_prefix}/courses/", json={"title": "Security"}).json()["data"]
    response = client.post(f"{api_prefix}/enrollments/", json={"course_id": course["id"], "employee_ids": []})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "course_id and employee_ids are required."
