"""
Submissions API Endpoints

Crowd-submitted predictions for a character:
- POST: store one prediction
- GET: recent predictions plus the per-month average

Every other verb is answered with 405 and `Allow: GET, POST`.
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db, require_schema
from core.exceptions import MethodNotAllowedError
from schemas import SubmissionCreated, SubmissionListResponse, SubmissionResponse, MonthAggregate
from services.submission_store import create_submission, list_submissions

ALLOWED_METHODS = ("GET", "POST")

router = APIRouter(
    prefix="/api/submissions",
    tags=["submissions"],
    dependencies=[Depends(require_schema)],
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubmissionCreated)
def create_submission_endpoint(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
):
    """
    Store a prediction.

    `character` defaults to the protagonist and `era` to "AF"; `year` is optional.
    """
    submission = create_submission(db, payload)
    return SubmissionCreated(ok=True, submission=SubmissionResponse.model_validate(submission))


@router.get("", response_model=SubmissionListResponse)
def list_submissions_endpoint(
    character: Optional[str] = Query(None, description="Character key (defaults to the protagonist)"),
    limit: Optional[str] = Query(None, description="Page size, default 500, capped at 2000"),
    db: Session = Depends(get_db),
):
    """
    Most recent predictions for a character, newest first, plus the
    average probability per month over all of that character's predictions.
    """
    result = list_submissions(db, character or settings.DEFAULT_CHARACTER, limit)
    return SubmissionListResponse(
        submissions=[SubmissionResponse.model_validate(s) for s in result["submissions"]],
        aggregates=[MonthAggregate(**a) for a in result["aggregates"]],
    )


@router.api_route(
    "",
    methods=["PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
def unsupported_method_endpoint():
    raise MethodNotAllowedError(ALLOWED_METHODS)
