"""
Pytest configuration and fixtures
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

# Settings are read at app startup
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "service-key")
os.environ.setdefault("JWT_SECRET", "test-secret-for-grading-tokens-0001")

from app.core.config import Settings
from app.core.dependencies import get_grade_handler
from app.core.events import EventDispatcher
from app.core.security import create_access_token
from app.db.models import Assignment, Notification, Submission, TeacherProfile
from app.main import app
from app.modules.grades.handler import GradeSubmissionHandler
from app.modules.notifications.service import NotificationService

TEST_SECRET = "test-secret-for-grading-tokens-0001"
TEACHER_ID = "teacher-1"
OTHER_TEACHER_ID = "teacher-2"
STUDENT_ID = "student-1"
ASSIGNMENT_ID = "assignment-1"
SUBMISSION_ID = "submission-1"
FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class InMemoryRepository:
    """Stands in for Supabase. Hands out copies so unsaved edits are not visible."""

    def __init__(self):
        self.assignments: Dict[str, Assignment] = {}
        self.teachers: Dict[str, TeacherProfile] = {}
        self.notifications: List[Notification] = []
        self.save_count = 0
        self.fail_on: Optional[str] = None

    def _maybe_fail(self, operation: str):
        if self.fail_on == operation:
            raise ConnectionError(f"storage unavailable during {operation}")

    def load_assignment(self, assignment_id: str) -> Optional[Assignment]:
        self._maybe_fail("load_assignment")
        assignment = self.assignments.get(assignment_id)
        return assignment.model_copy(deep=True) if assignment else None

    def save_assignment(self, assignment: Assignment) -> None:
        self._maybe_fail("save_assignment")
        self.assignments[assignment.id] = assignment.model_copy(deep=True)
        self.save_count += 1

    def find_teacher(self, teacher_id: str) -> Optional[TeacherProfile]:
        self._maybe_fail("find_teacher")
        return self.teachers.get(teacher_id)

    def create_notification(self, notification: Notification) -> None:
        self._maybe_fail("create_notification")
        self.notifications.append(notification)


@pytest.fixture
def settings():
    return Settings(
        SUPABASE_URL="http://localhost:54321",
        SUPABASE_SERVICE_KEY="service-key",
        JWT_SECRET=TEST_SECRET,
    )


@pytest.fixture
def repository():
    repo = InMemoryRepository()
    repo.assignments[ASSIGNMENT_ID] = Assignment(
        id=ASSIGNMENT_ID,
        teacher_id=TEACHER_ID,
        title="Photosynthesis essay",
        submissions=[
            Submission(
                id=SUBMISSION_ID,
                student_id=STUDENT_ID,
                submitted_at=datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
                content="Plants turn light into sugar.",
            )
        ],
    )
    repo.teachers[TEACHER_ID] = TeacherProfile(id=TEACHER_ID, first_name="Ada", last_name="Lovelace")
    return repo


@pytest.fixture
def events(repository):
    dispatcher = EventDispatcher()
    NotificationService(repository).register(dispatcher)
    return dispatcher


@pytest.fixture
def handler(settings, repository, events):
    return GradeSubmissionHandler(settings, repository, events, clock=lambda: FIXED_NOW)


@pytest.fixture
def make_token():
    def _make_token(subject=TEACHER_ID, role="teacher", secret=TEST_SECRET, expires_delta=None):
        return create_access_token(subject, role, secret, expires_delta=expires_delta)
    return _make_token


@pytest.fixture
def teacher_token(make_token):
    return make_token()


@pytest.fixture
def expired_token(make_token):
    return make_token(expires_delta=timedelta(minutes=-5))


@pytest.fixture
def client(handler):
    app.dependency_overrides[get_grade_handler] = lambda: handler
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
