from fastapi.testclient import TestClient

from hr_training.schemas.content_tree import CourseTree
from tests.helpers.asserts import api_call
from tests.helpers.contract import validate_response_schema


def test_course_crud_flow(client: TestClient, api_prefix: str):
    created = api_call(client, "POST", f"{api_prefix}/courses/", json={"title": "Onboarding", "category": "HR"})
    assert created.status_code == 201
    course = created.json()["data"]
    assert course["status"] == "draft"
    assert course["difficulty"] == "beginner"

    updated = api_call(client, "PUT", f"{api_prefix}/courses/{course['id']}", json={"status": "published"})
    assert updated.json()["data"]["status"] == "published"

    listed = api_call(client, "GET", f"{api_prefix}/courses/", params={"include_draft": False})
    assert [c["id"] for c in listed.json()["data"]] == [course["id"]]

    deleted = api_call(client, "DELETE", f"{api_prefix}/courses/{course['id']}")
    assert deleted.json()["data"]["courses"] == 1

    missing = client.get(f"{api_prefix}/courses/{course['id']}")
    assert missing.status_code == 404
    body = missing.json()
    assert body["error"]["code"] == "NOT_FOUND"
    assert body["error"]["message"] == "Course not found."
    assert body["request_id"]


def test_blank_title_is_bad_request(client: TestClient, api_prefix: str):
    response = client.post(f"{api_prefix}/courses/", json={"title": "  "})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Course title is required."


def test_invalid_enum_is_validation_error(client: TestClient, api_prefix: str):
    response = client.post(f"{api_prefix}/courses/", json={"title": "X", "difficulty": "impossible"})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_course_tree_and_player(client: TestClient, api_prefix: str):
    course = api_call(client, "POST", f"{api_prefix}/courses/", json={"title": "Privacy"}).json()["data"]
    module = api_call(client, "POST", f"{api_prefix}/modules/", json={"course_id": course["id"], "title": "Basics"}).json()["data"]
    lesson = api_call(client, "POST", f"{api_prefix}/lessons/", json={
        "module_id": module["id"], "title": "Why privacy", "content_html": "<p>hi</p>"
    }).json()["data"]

    tree = api_call(client, "GET", f"{api_prefix}/courses/{course['id']}/tree").json()["data"]
    validate_response_schema(tree, CourseTree)
    assert tree["modules"][0]["lessons"][0]["id"] == lesson["id"]

    api_call(client, "PUT", f"{api_prefix}/lessons/{lesson['id']}/progress", json={"employee_id": 3, "completed": True})
    player = api_call(client, "GET", f"{api_prefix}/courses/{course['id']}/player", params={"employee_id": 3}).json()["data"]
    assert player["employee_id"] == 3
    assert player["modules"][0]["lessons"][0]["progress"]["is_completed"] is True

    assert client.get(f"{api_prefix}/courses/999/tree").status_code == 404


def test_request_id_is_echoed(client: TestClient, api_prefix: str):
    response = client.get(f"{api_prefix}/courses/999", headers={"X-Request-ID": "req-42"})

    assert response.status_code == 404
    assert response.headers["X-Request-ID"] == "req-42"
    assert response.json()["request_id"] == "req-42"

    generated = client.get(f"{api_prefix}/courses/")
    assert generated.headers["X-Request-ID"]
