import logging
from typing import Callable, Optional, Protocol
from supabase import Client
from app.db.supabase import get_supabase
from app.db.models import Assignment, TeacherProfile, Notification

logger = logging.getLogger(__name__)


class AssignmentRepository(Protocol):
    """Storage operations the grading flow depends on."""

    def load_assignment(self, assignment_id: str) -> Optional[Assignment]: ...

    def save_assignment(self, assignment: Assignment) -> None: ...

    def find_teacher(self, teacher_id: str) -> Optional[TeacherProfile]: ...

    def create_notification(self, notification: Notification) -> None: ...


class SupabaseAssignmentRepository:
    """
    Supabase-backed repository.

    An assignment is one row of the `assignments` table; its submissions
    live in the `submissions` JSON column and are written back together
    with the row. Teachers are rows of `profiles` with role 'teacher'.
    """

    def __init__(self, client: Optional[Client] = None, connect: Callable[[], Client] = get_supabase):
        self._client = client
        self._connect = connect

    @property
    def client(self) -> Client:
        # connects on first query
        if self._client is None:
            self._client = self._connect()
        return self._client

    def load_assignment(self, assignment_id: str) -> Optional[Assignment]:
        result = self.client.table("assignments").select("*").eq("id", assignment_id).execute()
        if not result.data:
            return None
        return Assignment.model_validate(result.data[0])

    def save_assignment(self, assignment: Assignment) -> None:
        # Full replace of the row, last write wins
        row = assignment.model_dump(mode="json")
        self.client.table("assignments").upsert(row).execute()
        logger.debug("Saved assignment %s with %d submissions", assignment.id, len(assignment.submissions))

    def find_teacher(self, teacher_id: str) -> Optional[TeacherProfile]:
        result = self.client.table("profiles").select("id, first_name, last_name").eq("id", teacher_id).eq("role", "teacher").execute()
        if not result.data:
            return None
        return TeacherProfile(**result.data[0])

    def create_notification(self, notification: Notification) -> None:
        self.client.table("notifications").insert(notification.model_dump(mode="json")).execute()
