"""
Submission Store

Persists crowd-submitted predictions and reads them back with a per-month
aggregate. Every write is a single INSERT, every read a single SELECT;
consistency under concurrent requests is left to the database.

Validation is done in one pass over the whole payload: all violated
constraints are reported together in a single InvalidPayload message and
nothing is written.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import InvalidPayloadError, StoreUnavailableError
from models import Submission
from schemas import SubmissionCreate

logger = logging.getLogger(__name__)


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        where = ".".join(str(p) for p in err.get("loc", ())) or "body"
        problems.append(f"{where}: {err.get('msg')}")
    return "; ".join(problems)


def validate_payload(raw: Any) -> SubmissionCreate:
    """
    Check a decoded JSON body against the submission constraints.

    Raises:
        InvalidPayloadError: listing every violated field
    """
    if isinstance(raw, SubmissionCreate):
        return raw
    if not isinstance(raw, dict):
        raise InvalidPayloadError("Expected a JSON object")
    try:
        return SubmissionCreate.model_validate(raw)
    except ValidationError as e:
        raise InvalidPayloadError(_format_validation_error(e)) from e


def create_submission(db: Session, payload: Union[Dict[str, Any], SubmissionCreate]) -> Submission:
    """
    Validate and insert one submission.

    Returns:
        The stored row, with server-assigned id and created_at loaded
    """
    data = validate_payload(payload)

    submission = Submission(**data.model_dump())
    db.add(submission)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Submission rejected by constraint: {e.orig}")
        raise InvalidPayloadError(str(e.orig)) from e
    except (OperationalError, InterfaceError) as e:
        db.rollback()
        logger.error(f"Submission insert failed: {e}")
        raise StoreUnavailableError() from e

    db.refresh(submission)
    logger.info(
        f"Submission {submission.id} stored for {submission.character}",
        extra={
            "extra_fields": {
                "submission_id": submission.id,
                "character": submission.character,
                "month_index": submission.month_index,
            }
        }
    )
    return submission


def resolve_limit(raw: Optional[Union[str, int]]) -> int:
    """
    Page size for a read.

    Missing/blank -> SUBMISSIONS_DEFAULT_LIMIT; otherwise clamped to
    [0, SUBMISSIONS_MAX_LIMIT]. Non-integers are rejected.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        limit = settings.SUBMISSIONS_DEFAULT_LIMIT
    else:
        try:
            limit = int(raw)
        except (TypeError, ValueError):
            raise InvalidPayloadError("limit must be an integer", field="limit")
    return max(0, min(limit, settings.SUBMISSIONS_MAX_LIMIT))


def monthly_aggregates(db: Session, character: str) -> List[Dict[str, Any]]:
    """Average probability and count per month_index over ALL of a character's rows."""
    rows = (
        db.query(
            Submission.month_index,
            func.min(Submission.month_name).label("month_name"),
            func.avg(Submission.probability).label("avg_probability"),
            func.count(Submission.id).label("count"),
        )
        .filter(Submission.character == character)
        .group_by(Submission.month_index)
        .order_by(Submission.month_index.asc())
        .all()
    )
    return [
        {
            "month_index": row.month_index,
            "month_name": row.month_name,
            "avg_probability": float(row.avg_probability),
            "count": int(row.count),
        }
        for row in rows
    ]


def list_submissions(db: Session, character: str, limit: Optional[int] = None) -> Dict[str, Any]:
    """
    Most recent submissions for `character` plus the monthly aggregate.

    The page is capped by `limit`; the aggregate never is.
    """
    limit = resolve_limit(limit)
    try:
        submissions = (
            db.query(Submission)
            .filter(Submission.character == character)
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .limit(limit)
            .all()
        )
        aggregates = monthly_aggregates(db, character)
    except (OperationalError, InterfaceError) as e:
        logger.error(f"Submission read failed: {e}")
        raise StoreUnavailableError() from e

    return {"submissions": submissions, "aggregates": aggregates}
