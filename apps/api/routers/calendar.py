"""
Calendar API Endpoints

Innworld weekday and month names for the submission form.
"""
from fastapi import APIRouter

from schemas import CalendarResponse
from services.calendar import calendar_payload

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("", response_model=CalendarResponse)
def get_calendar():
    return calendar_payload()
