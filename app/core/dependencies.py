import logging
from app.core.config import get_settings
from app.core.errors import InternalError
from app.core.events import EventDispatcher
from app.db.repository import AssignmentRepository, SupabaseAssignmentRepository
from app.modules.grades.handler import GradeSubmissionHandler, INTERNAL_ERROR_MESSAGE
from app.modules.notifications.service import NotificationService

logger = logging.getLogger(__name__)

def get_repository() -> AssignmentRepository:
    """Repository over the shared Supabase client, connected lazily"""
    return SupabaseAssignmentRepository()

def get_event_dispatcher(repository: AssignmentRepository) -> EventDispatcher:
    """
    Dispatcher with the student notification consumer attached.
    Built per request so subscribers share the request's repository.
    """
    events = EventDispatcher()
    NotificationService(repository).register(events)
    return events

def get_grade_handler() -> GradeSubmissionHandler:
    """
    Build the grading handler for one request.

    Raises:
        InternalError: configuration could not be loaded or wiring failed
    """
    try:
        settings = get_settings()
        repository = get_repository()
        return GradeSubmissionHandler(settings, repository, get_event_dispatcher(repository))
    except Exception:
        logger.exception("Failed to build grading handler")
        raise InternalError(INTERNAL_ERROR_MESSAGE)
