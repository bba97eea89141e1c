from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, Strict, StrictStr
from datetime import datetime, date
from typing import Annotated, Any, Optional, List

from core.config import settings
from services.calendar import DAYS_PER_MONTH, DAYS_PER_WEEK, MONTHS_PER_YEAR


def _integral_float_to_int(value: Any) -> Any:
    # JSON has one number type: 50.0 is the integer 50, 50.5 is not
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# Strict otherwise: strings and booleans are not integers
JSONInt = Annotated[int, Strict(), BeforeValidator(_integral_float_to_int)]


class SubmissionCreate(BaseModel):
    """Inbound prediction. Unknown keys are dropped."""
    character: StrictStr = Field(default=settings.DEFAULT_CHARACTER, min_length=1, max_length=64)
    username: StrictStr = Field(min_length=1, max_length=50)
    cause: StrictStr = Field(min_length=1, max_length=280)
    probability: JSONInt = Field(ge=0, le=100)
    era: StrictStr = Field(default="AF", min_length=1, max_length=16)
    year: Optional[JSONInt] = Field(default=None, ge=0, le=99999)
    month_index: JSONInt = Field(ge=1, le=MONTHS_PER_YEAR)
    month_name: StrictStr = Field(min_length=1, max_length=64)
    day_of_month: JSONInt = Field(ge=1, le=DAYS_PER_MONTH)
    day_of_week_index: JSONInt = Field(ge=1, le=DAYS_PER_WEEK)
    day_of_week_name: StrictStr = Field(min_length=1, max_length=64)

    model_config = ConfigDict(extra="ignore")


class SubmissionResponse(BaseModel):
    id: int
    created_at: datetime
    character: str
    username: str
    cause: str
    probability: int
    era: str
    year: Optional[int] = None
    month_index: int
    month_name: str
    day_of_month: int
    day_of_week_index: int
    day_of_week_name: str

    model_config = ConfigDict(from_attributes=True)


class SubmissionCreated(BaseModel):
    ok: bool = True
    submission: SubmissionResponse


class MonthAggregate(BaseModel):
    month_index: int
    month_name: str
    avg_probability: float
    count: int


class SubmissionListResponse(BaseModel):
    submissions: List[SubmissionResponse]
    aggregates: List[MonthAggregate]


class RiskPointResponse(BaseModel):
    label: str
    value: int


class ProphecyResponse(BaseModel):
    character: str
    seed: str
    spoilers: bool
    share_url: str
    doom_percent: int
    confidence: int
    cause: str
    predicted_date: date
    is_never: bool
    display_date: str  # "NEVER (probably)" or YYYY-MM-DD
    monthly_risk: List[RiskPointResponse]


class ReseedResponse(BaseModel):
    seed: str
    share_url: str


class DayResponse(BaseModel):
    index: int
    name: str


class MonthResponse(BaseModel):
    index: int
    name: str
    season: Optional[str] = None
    known: bool


class CalendarResponse(BaseModel):
    days: List[DayResponse]
    months: List[MonthResponse]
    days_per_week: int
    weeks_per_month: int
    days_per_month: int
