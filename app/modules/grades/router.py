from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from app.core.dependencies import get_grade_handler
from app.modules.grades.handler import GradeSubmissionHandler
from app.schemas.grades import GradeRequest, GradeResponse, ErrorResponse

router = APIRouter(tags=["Grades"])

@router.post(
    "/{assignment_id}/submissions/{submission_id}/grade",
    response_model=GradeResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)},
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": GradeRequest.model_json_schema()}}}},
)
async def grade_submission(
    assignment_id: str,
    submission_id: str,
    request: Request,
    handler: GradeSubmissionHandler = Depends(get_grade_handler),
):
    """
    Grade a student's submission. Only the teacher who owns the assignment can grade it.

    Body: `{"grade": number, "feedback": string}`. Grading again overwrites the
    previous grade and feedback. The student is notified on success.
    """
    token = request.cookies.get(handler.settings.AUTH_COOKIE_NAME)
    body = await request.body()
    # Supabase calls block, keep them off the event loop
    outcome = await run_in_threadpool(handler.handle, assignment_id, submission_id, token, body)
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
