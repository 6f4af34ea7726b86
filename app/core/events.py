import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class SubmissionGraded(BaseModel):
    """Emitted after a graded submission has been saved."""

    assignment_id: str
    assignment_title: str
    submission_id: str
    student_id: str
    teacher_id: str
    grade: Optional[Union[int, float]] = None
    graded_at: datetime
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EventDispatcher:
    """
    Synchronous in-process publisher.

    Subscribers are side effects of the operation that published the
    event: an exception raised by one of them is logged and swallowed, and
    the remaining subscribers still run.
    """

    def __init__(self):
        self._subscribers: Dict[Type[BaseModel], List[Callable]] = defaultdict(list)

    def subscribe(self, event_type: Type[BaseModel], handler: Callable) -> None:
        self._subscribers[event_type].append(handler)

    def publish(self, event: BaseModel) -> None:
        for handler in self._subscribers.get(type(event), []):
            try:
                handler(event)
            except Exception:
                logger.exception("Subscriber %r failed for %s", handler, type(event).__name__)
