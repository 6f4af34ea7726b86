import logging
from app.core.events import EventDispatcher, SubmissionGraded
from app.db.models import Notification
from app.db.repository import AssignmentRepository

logger = logging.getLogger(__name__)

ASSIGNMENT_GRADED = "assignment_graded"


class NotificationService:
    """Tells students when one of their submissions has been graded."""

    def __init__(self, repository: AssignmentRepository):
        self.repository = repository

    def register(self, events: EventDispatcher) -> None:
        events.subscribe(SubmissionGraded, self.on_submission_graded)

    def on_submission_graded(self, event: SubmissionGraded) -> None:
        teacher = self.repository.find_teacher(event.teacher_id)
        if teacher is None:
            logger.info("Teacher %s not found, skipping graded notification", event.teacher_id)
            return

        notification = Notification(
            recipient_id=event.student_id,
            recipient_model="Student",
            sender_id=event.teacher_id,
            sender_model="Teacher",
            type=ASSIGNMENT_GRADED,
            message=f'{teacher.display_name} has graded your assignment "{event.assignment_title}"',
            related_doc_id=event.assignment_id,
            read=False,
        )
        self.repository.create_notification(notification)
        logger.info("Student notification created for %s", event.student_id)
