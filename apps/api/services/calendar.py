"""
Innworld Calendar Reference Data

Static lookup tables shared by the submission form and the prophecy page:
an 8-day week and a 16-month year (four seasons of four months). Several
month names are not known from canon and are labelled as such.

Read-only. Submission validation ranges come from the sizes of these tables.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class InnDay:
    index: int
    name: str


@dataclass(frozen=True)
class InnMonth:
    index: int
    name: str
    season: Optional[str]
    known: bool


DAY_NAMES: Tuple[InnDay, ...] = (
    InnDay(1, "Beithday"),
    InnDay(2, "Saelsmorn"),
    InnDay(3, "— (3rd day, unknown)"),
    InnDay(4, "Nendas / Liriean"),
    InnDay(5, "Tirenv"),
    InnDay(6, "Lundas / Helday"),
    InnDay(7, "Laudas / Gnorna"),
    InnDay(8, "Zenze"),
)

MONTHS: Tuple[InnMonth, ...] = (
    InnMonth(1, "Caelhic (Spring 1)", "Spring", True),
    InnMonth(2, "— (Spring 2, unknown)", "Spring", False),
    InnMonth(3, "— (Spring 3, unknown)", "Spring", False),
    InnMonth(4, "Rerrk (Spring 4)", "Spring", True),
    InnMonth(5, "— (Summer 1, unknown)", "Summer", False),
    InnMonth(6, "— (Summer 2, unknown)", "Summer", False),
    InnMonth(7, "Solla? (Summer 3, ambiguous)", "Summer", False),
    InnMonth(8, "Weris? (Summer 4, ambiguous)", "Summer", False),
    InnMonth(9, "Evium (Autumn 1)", "Autumn", True),
    InnMonth(10, "— (Autumn 2, unknown)", "Autumn", False),
    InnMonth(11, "— (Autumn 3, unknown)", "Autumn", False),
    InnMonth(12, "— (Autumn 4, unknown)", "Autumn", False),
    InnMonth(13, "Liuwhe (Winter 1)", "Winter", True),
    InnMonth(14, "Mouring (Winter 2)", "Winter", True),
    InnMonth(15, "Elfebelfast (Winter 3)", "Winter", True),
    InnMonth(16, "— (Winter 4, unknown)", "Winter", False),
)

DAYS_PER_WEEK = len(DAY_NAMES)
WEEKS_PER_MONTH = 4
DAYS_PER_MONTH = DAYS_PER_WEEK * WEEKS_PER_MONTH
MONTHS_PER_YEAR = len(MONTHS)

_MONTHS_BY_INDEX = {m.index: m for m in MONTHS}
_DAYS_BY_INDEX = {d.index: d for d in DAY_NAMES}


def month_label(index: int) -> str:
    """Month name for a 1-based index, or "Month <index>" when unknown."""
    month = _MONTHS_BY_INDEX.get(index)
    return month.name if month else f"Month {index}"


def day_label(index: int) -> str:
    """Weekday name for a 1-based index, or "Day <index>" when unknown."""
    day = _DAYS_BY_INDEX.get(index)
    return day.name if day else f"Day {index}"


def calendar_payload() -> dict:
    return {
        "days": [{"index": d.index, "name": d.name} for d in DAY_NAMES],
        "months": [
            {"index": m.index, "name": m.name, "season": m.season, "known": m.known}
            for m in MONTHS
        ],
        "days_per_week": DAYS_PER_WEEK,
        "weeks_per_month": WEEKS_PER_MONTH,
        "days_per_month": DAYS_PER_MONTH,
    }
