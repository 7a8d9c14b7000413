# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""End-to-end API tests through the FastAPI application.

Each test builds a fresh application on an in-memory database. Requests
identify the caller with the X-Telegram-Id header.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.core.config.settings import (
    DatabaseSettings,
    RateLimitSettings,
    Settings,
    StorageSettings,
    TelegramSettings,
)

pytestmark = pytest.mark.integration


def _settings(tmp_path, requests_per_minute: int = 1000) -> Settings:
    return Settings(
        environment="development",
        log_level="WARNING",
        database=DatabaseSettings(url="sqlite+aiosqlite:///:memory:"),
        telegram=TelegramSettings(bot_token=None),
        storage=StorageSettings(root=str(tmp_path / "uploads")),
        rate_limit=RateLimitSettings(requests_per_minute=requests_per_minute),
    )


@pytest.fixture
def client(tmp_path):
    """Create test client with the application lifespan running."""
    with TestClient(create_app(_settings(tmp_path))) as test_client:
        yield test_client


def as_user(identity: str) -> dict[str, str]:
    return {"X-Telegram-Id": identity}


def register(client: TestClient, identity: str, first_name: str, teacher: bool = False) -> dict:
    response = client.post(
        "/api/v1/users",
        json={"external_identity": identity, "first_name": first_name},
    )
    assert response.status_code in (200, 201)
    if teacher:
        response = client.put(
            "/api/v1/users/me/role", json={"role": "teacher"}, headers=as_user(identity)
        )
        assert response.status_code == 200
    return response.json()


@pytest.fixture
def course(client):
    """Register a teacher and a student and create a course the student joined."""
    register(client, "1001", "Tess", teacher=True)
    register(client, "2001", "Sam")
    response = client.post(
        "/api/v1/courses", json={"title": "Algo101"}, headers=as_user("1001")
    )
    assert response.status_code == 201
    data = response.json()
    joined = client.post(
        "/api/v1/courses/join",
        json={"access_code": data["access_code"].lower()},
        headers=as_user("2001"),
    )
    assert joined.status_code == 201
    return data


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"]["status"] == "healthy"
        assert body["notifications"]["message"].startswith("channel=log")
        assert "X-Request-Id" in response.headers

    def test_request_id_echoed(self, client):
        response = client.get("/health", headers={"X-Request-Id": "abc-123"})

        assert response.headers["X-Request-Id"] == "abc-123"


class TestUsers:
    """Tests for user registration and caller resolution."""

    def test_register_then_resolve(self, client):
        first = client.post("/api/v1/users", json={"external_identity": "42"})
        second = client.post("/api/v1/users", json={"external_identity": "42"})

        assert first.status_code == 201
        assert second.status_code == 200
        assert first.json()["id"] == second.json()["id"]
        assert first.json()["role"] == "student"

    def test_missing_identity_header(self, client):
        response = client.get("/api/v1/users/me")

        assert response.status_code == 401

    def test_unknown_identity(self, client):
        response = client.get("/api/v1/users/me", headers=as_user("999"))

        assert response.status_code == 401

    def test_invalid_role(self, client):
        register(client, "42", "Ada")

        response = client.put(
            "/api/v1/users/me/role", json={"role": "admin"}, headers=as_user("42")
        )

        assert response.status_code == 422


class TestCourses:
    """Tests for course endpoints and error mapping."""

    def test_student_cannot_create_course(self, client):
        register(client, "2001", "Sam")

        response = client.post(
            "/api/v1/courses", json={"title": "Algo101"}, headers=as_user("2001")
        )

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_join_twice_conflicts(self, client, course):
        response = client.post(
            "/api/v1/courses/join",
            json={"access_code": course["access_code"]},
            headers=as_user("2001"),
        )

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_unknown_code(self, client, course):
        response = client.post(
            "/api/v1/courses/join", json={"access_code": "NOPE2345"}, headers=as_user("2001")
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_my_courses(self, client, course):
        teacher_view = client.get("/api/v1/courses", headers=as_user("1001")).json()
        student_view = client.get("/api/v1/courses", headers=as_user("2001")).json()

        assert [c["id"] for c in teacher_view] == [course["id"]]
        assert [c["id"] for c in student_view] == [course["id"]]

    def test_students_visible_to_teacher_only(self, client, course):
        teacher_view = client.get(
            f"/api/v1/courses/{course['id']}/students", headers=as_user("1001")
        )
        student_view = client.get(
            f"/api/v1/courses/{course['id']}/students", headers=as_user("2001")
        )

        assert [s["student"]["external_identity"] for s in teacher_view.json()] == ["2001"]
        assert student_view.status_code == 403

    def test_outsider_cannot_read_course(self, client, course):
        register(client, "3001", "Olly")

        response = client.get(f"/api/v1/courses/{course['id']}", headers=as_user("3001"))

        assert response.status_code == 403

    def test_co_teacher_endpoints(self, client, course):
        co_teacher = register(client, "1002", "Cora", teacher=True)

        added = client.post(
            f"/api/v1/courses/{course['id']}/teachers",
            json={"user_id": co_teacher["id"]},
            headers=as_user("1001"),
        )
        listed = client.get(f"/api/v1/courses/{course['id']}/teachers", headers=as_user("1002"))
        removed = client.delete(
            f"/api/v1/courses/{course['id']}/teachers/{co_teacher['id']}",
            headers=as_user("1001"),
        )

        assert added.status_code == 201
        assert [t["is_owner"] for t in listed.json()] == [True, False]
        assert removed.status_code == 204


class TestAssignments:
    """Tests for the assignment workflow over HTTP."""

    def test_submit_and_grade(self, client, course):
        created = client.post(
            "/api/v1/assignments",
            json={"course_id": course["id"], "title": "HW1", "max_points": 100},
            headers=as_user("1001"),
        )
        assert created.status_code == 201
        assignment_id = created.json()["id"]

        submitted = client.post(
            f"/api/v1/assignments/{assignment_id}/submit",
            data={"content": "my answer"},
            files={"file": ("hw1.txt", b"print('hi')", "text/plain")},
            headers=as_user("2001"),
        )
        assert submitted.status_code == 201
        submission = submitted.json()
        assert submission["file_url"].startswith("/uploads/submissions/")

        too_high = client.post(
            f"/api/v1/assignments/submissions/{submission['id']}/grade",
            json={"grade": 150},
            headers=as_user("1001"),
        )
        assert too_high.status_code == 422
        assert too_high.json()["error"] == "validation_error"

        by_student = client.post(
            f"/api/v1/assignments/submissions/{submission['id']}/grade",
            json={"grade": 100},
            headers=as_user("2001"),
        )
        assert by_student.status_code == 403

        graded = client.post(
            f"/api/v1/assignments/submissions/{submission['id']}/grade",
            json={"grade": 90, "feedback": "Nice"},
            headers=as_user("1001"),
        )
        assert graded.status_code == 200
        assert graded.json()["grade"] == 90

        mine = client.get(
            f"/api/v1/assignments/{assignment_id}/my-submission", headers=as_user("2001")
        )
        assert mine.json()["feedback"] == "Nice"

        stored = client.get(submission["file_url"])
        assert stored.status_code == 200
        assert stored.content == b"print('hi')"

    def test_empty_submission(self, client, course):
        created = client.post(
            "/api/v1/assignments",
            json={"course_id": course["id"], "title": "HW1"},
            headers=as_user("1001"),
        )

        response = client.post(
            f"/api/v1/assignments/{created.json()['id']}/submit",
            data={"content": "  "},
            headers=as_user("2001"),
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_missing_assignment(self, client, course):
        response = client.get("/api/v1/assignments/missing", headers=as_user("2001"))

        assert response.status_code == 404


class TestAnnouncements:
    """Tests for announcements and comments over HTTP."""

    def test_post_comment_delete(self, client, course):
        posted = client.post(
            "/api/v1/announcements",
            json={"course_id": course["id"], "title": "Midterm date", "content": "Friday"},
            headers=as_user("1001"),
        )
        assert posted.status_code == 201
        announcement_id = posted.json()["id"]

        comment = client.post(
            f"/api/v1/announcements/{announcement_id}/comments",
            json={"content": "Which room?"},
            headers=as_user("2001"),
        )
        assert comment.status_code == 201
        comment_id = comment.json()["id"]

        foreign_delete = client.delete(f"/api/v1/comments/{comment_id}", headers=as_user("1001"))
        own_delete = client.delete(f"/api/v1/comments/{comment_id}", headers=as_user("2001"))

        assert foreign_delete.status_code == 403
        assert own_delete.status_code == 204
        listed = client.get(
            f"/api/v1/announcements/{announcement_id}/comments", headers=as_user("2001")
        )
        assert listed.json() == []


class TestMaterials:
    """Tests for material upload over HTTP."""

    def test_upload_and_list(self, client, course):
        uploaded = client.post(
            "/api/v1/materials",
            data={"course_id": course["id"], "title": "Lecture 1"},
            files={"file": ("slides.pdf", b"%PDF-1.4", "application/pdf")},
            headers=as_user("1001"),
        )
        listed = client.get(f"/api/v1/materials/course/{course['id']}", headers=as_user("2001"))

        assert uploaded.status_code == 201
        assert uploaded.json()["file_type"] == "pdf"
        assert [m["title"] for m in listed.json()] == ["Lecture 1"]


class TestRateLimit:
    """Tests for per-caller rate limiting."""

    def test_requests_over_limit_rejected(self, tmp_path):
        with TestClient(create_app(_settings(tmp_path, requests_per_minute=2))) as client:
            statuses = [client.get("/health").status_code for _ in range(3)]

        assert statuses[:2] == [200, 200]
        assert statuses[2] == 429

    def test_versioned_routes_limited(self, tmp_path):
        payload = {"external_identity": "2001", "first_name": "Sam"}
        with TestClient(create_app(_settings(tmp_path, requests_per_minute=2))) as client:
            responses = [client.post("/api/v1/users", json=payload) for _ in range(5)]

        assert [r.status_code for r in responses] == [201, 200, 429, 429, 429]
        assert responses[2].headers["Retry-After"] == "60"
        assert responses[2].json()["error"] == "rate_limited"

    def test_callers_counted_separately(self, tmp_path):
        with TestClient(create_app(_settings(tmp_path, requests_per_minute=1))) as client:
            first = client.get("/health", headers=as_user("2001"))
            second = client.get("/health", headers=as_user("2002"))
            repeat = client.get("/health", headers=as_user("2001"))

        assert (first.status_code, second.status_code, repeat.status_code) == (200, 200, 429)
