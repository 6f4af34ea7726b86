from pydantic import BaseModel, FiniteFloat
from typing import Any, Dict, Optional, Union
from app.db.models import Submission

class GradeRequest(BaseModel):
    grade: Optional[Union[int, FiniteFloat]] = None  # 0 is a valid grade, NaN and Infinity are not
    feedback: Optional[str] = None

class GradeResponse(BaseModel):
    success: bool = True
    message: str
    submission: Submission

class ErrorResponse(BaseModel):
    success: bool = False
    error: str

class GradingOutcome(BaseModel):
    """Terminal result of one grading request: HTTP status plus JSON body."""
    status_code: int
    body: Dict[str, Any]

    @classmethod
    def ok(cls, response: GradeResponse) -> "GradingOutcome":
        return cls(status_code=200, body=response.model_dump(mode="json", by_alias=True))

    @classmethod
    def failed(cls, status_code: int, error: str) -> "GradingOutcome":
        return cls(status_code=status_code, body=ErrorResponse(error=error).model_dump())
