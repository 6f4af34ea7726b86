from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Union
from datetime import datetime, date, timezone
from enum import Enum


class SubmissionStatus(str, Enum):
    SUBMITTED = "submitted"
    LATE = "late"
    GRADED = "graded"


# Submission model (embedded in Assignment.submissions)
class Submission(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    student_id: str
    submitted_at: Optional[datetime] = None
    content: Optional[str] = None
    file_url: Optional[str] = None
    status: SubmissionStatus = SubmissionStatus.SUBMITTED
    grade: Optional[Union[int, FiniteFloat]] = None
    feedback: Optional[str] = None
    graded_at: Optional[datetime] = None


# Assignment model, the aggregate root. Loaded and saved as a whole.
class Assignment(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    teacher_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    submissions: List[Submission] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("submissions", mode="before")
    @classmethod
    def null_submissions_as_empty(cls, value):
        return [] if value is None else value


# Teacher profile (profiles row with role 'teacher')
class TeacherProfile(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# Notification model
class Notification(BaseModel):
    recipient_id: str
    recipient_model: str = "Student"
    sender_id: str
    sender_model: str = "Teacher"
    type: str
    message: str
    related_doc_id: Optional[str] = None
    read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def find_submission(assignment: Assignment, submission_id: str) -> Optional[Submission]:
    """Return the embedded submission with the given id, or None."""
    for submission in assignment.submissions:
        if submission.id == submission_id:
            return submission
    return None


def grade_submission(
    submission: Submission,
    grade: Union[int, float],
    feedback: str,
    graded_at: Optional[datetime] = None,
) -> Submission:
    """Record a grade on the submission in place. Earlier grades are overwritten."""
    submission.grade = grade
    submission.feedback = feedback
    submission.status = SubmissionStatus.GRADED
    submission.graded_at = graded_at or datetime.now(timezone.utc)
    return submission
