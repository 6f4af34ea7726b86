import logging
from datetime import datetime, timezone
from typing import Callable, Optional
from pydantic import ValidationError
from app.core.config import Settings
from app.core.errors import GradingError, Unauthenticated, Forbidden, InvalidInput, NotFound, InternalError
from app.core.events import EventDispatcher, SubmissionGraded
from app.core.security import InvalidTokenError, TokenIdentity, verify_access_token
from app.db.models import find_submission, grade_submission
from app.db.repository import AssignmentRepository
from app.schemas.grades import GradeRequest, GradeResponse, GradingOutcome

logger = logging.getLogger(__name__)

TEACHER_ROLE = "teacher"
INTERNAL_ERROR_MESSAGE = "Failed to grade submission"


class GradeSubmissionHandler:
    """
    Grades one submission of an assignment on behalf of its teacher.

    The checks run in a fixed order and stop at the first failure; nothing
    is written until all of them pass. On success the whole assignment is
    saved and a SubmissionGraded event is published. Subscribers to that
    event (the student notification) cannot change the outcome.
    """

    def __init__(
        self,
        settings: Settings,
        repository: AssignmentRepository,
        events: EventDispatcher,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.settings = settings
        self.repository = repository
        self.events = events
        self.clock = clock

    def handle(self, assignment_id: str, submission_id: str, token: Optional[str], body: bytes) -> GradingOutcome:
        logger.info("Processing grade for submission %s of assignment %s", submission_id, assignment_id)
        try:
            return self._grade(assignment_id, submission_id, token, body)
        except GradingError as e:
            logger.info("Grading rejected (%s): %s", e.kind.value, e.message)
            return GradingOutcome.failed(e.status_code, e.message)
        except Exception:
            logger.exception("Error grading submission %s of assignment %s", submission_id, assignment_id)
            return GradingOutcome.failed(InternalError.status_code, INTERNAL_ERROR_MESSAGE)

    def authenticate(self, token: Optional[str]) -> TokenIdentity:
        if not token:
            raise Unauthenticated("Unauthorized")
        try:
            identity = verify_access_token(token, self.settings.JWT_SECRET, self.settings.JWT_ALGORITHM)
        except InvalidTokenError as e:
            logger.warning("Token verification failed: %s", e)
            raise Unauthenticated("Invalid token")

        if identity.role != TEACHER_ROLE:
            raise Forbidden("Access denied - only teachers can grade assignments")
        return identity

    @staticmethod
    def parse_body(body: bytes) -> GradeRequest:
        try:
            request = GradeRequest.model_validate_json(body or b"{}")
        except ValidationError:
            raise InvalidInput("Grade and feedback are required")

        if request.grade is None or not request.feedback:
            raise InvalidInput("Grade and feedback are required")
        return request

    def _grade(self, assignment_id: str, submission_id: str, token: Optional[str], body: bytes) -> GradingOutcome:
        identity = self.authenticate(token)
        request = self.parse_body(body)

        assignment = self.repository.load_assignment(assignment_id)
        if assignment is None:
            raise NotFound("Assignment not found")

        if assignment.teacher_id != identity.subject:
            raise Forbidden("Not authorized to grade this assignment")

        submission = find_submission(assignment, submission_id)
        if submission is None:
            raise NotFound("Submission not found")

        grade_submission(submission, request.grade, request.feedback, self.clock())
        self.repository.save_assignment(assignment)
        logger.info("Assignment %s updated with grading information", assignment.id)

        self.events.publish(SubmissionGraded(
            assignment_id=assignment.id,
            assignment_title=assignment.title,
            submission_id=submission.id,
            student_id=submission.student_id,
            teacher_id=identity.subject,
            grade=submission.grade,
            graded_at=submission.graded_at,
        ))

        return GradingOutcome.ok(GradeResponse(message="Submission graded successfully", submission=submission))
