"""
Prophecy Generator

Turns a seed string into a reproducible "prophecy" for a character:
doom percent, confidence, cause of death, predicted date and a twelve-month
risk series.

The generator is a pure function of (seed, allow_spoilers, now). Draws from
the seeded stream happen in a fixed order; the same seed on the same
calendar day always yields the same prophecy, which is what makes
`?seed=` share links work.

Note: the date span and the month labels are anchored to `now`, not to the
day the seed was minted, so a link opened on a later day shows a different
predicted date and chart. Existing links depend on this behaviour.
"""
import math
import secrets
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from services.seeded_random import SeededRandom


@dataclass(frozen=True)
class Cause:
    text: str
    spoiler: bool = False


# Order matters: `pick` indexes into the filtered pool.
CAUSES: Sequence[Cause] = (
    # Light/no-spoiler
    Cause("Refuses to retire; accountant raises Named‑Rank premiums until even fate gives up."),
    Cause("Duelist of Strings challenges a literal fate‑thread; becomes a metaphor and wanders off."),
    Cause("Scrying crash mid‑aria; error code: 'Destiny Not Found'."),
    Cause("Door duel. The Door wins. Eventually."),
    Cause("Commissioned to play for a city—accidentally inspires three revolutions and leaves before taxes arrive."),

    # Spoilers (New Lands arc)
    Cause("Barnethei schedules ‘just one’ retirement concert at the Haven; paperwork crit fails (permanent vacation).", spoiler=True),
    Cause("Colthei convinces him to solo during a storm on the New Lands. The storm solos back.", spoiler=True),
    Cause("Kraken‑Eater encore, strings vs. tentacles II. This time the audience brings towels.", spoiler=True),
    Cause("Valeterisa attempts to mathematically optimize a solo; a planar entity applauds and takes him to a seminar.", spoiler=True),
    Cause("Mihaela, Viecel, Eldertuin, Val—er—friends throw a 'please retire' party; he narrowly survives the speeches.", spoiler=True),
    Cause("Explorer’s Haven serves 'retire already' cake. It’s a trap: forms in triplicate.", spoiler=True),
    Cause("New Lands mana‑drain makes the violin sullen; Deniusth declares a tactical nap measured in decades.", spoiler=True),
    Cause("He out‑stares a Named rank, a Door, and destiny—only to trip over a dramatic entrance.", spoiler=True),
)

HORIZON_YEARS = 50
NEVER_THRESHOLD = 10
NEVER_THRESHOLD_NO_SPOILERS = 7
NEVER_LABEL = "NEVER (probably)"
RISK_WOBBLE = 30  # wobble is floor(r * 30) - 15, i.e. -15..14
RISK_AMPLITUDE = 10
RISK_MONTHS = 12

SHORT_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
SHORT_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class RiskPoint:
    label: str
    value: int


@dataclass(frozen=True)
class Prophecy:
    doom_percent: int
    confidence: int
    cause: str
    predicted_date: date
    is_never: bool
    monthly_risk: List[RiskPoint] = field(default_factory=list)

    @property
    def display_date(self) -> str:
        return format_prophecy_date(self)


def _add_years(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        # Feb 29 into a non-leap year rolls over to Mar 1
        return moment.replace(year=moment.year + years, month=3, day=1)


def cause_pool(allow_spoilers: bool, causes: Sequence[Cause] = CAUSES) -> List[Cause]:
    return [c for c in causes if allow_spoilers or not c.spoiler]


def generate(
    seed: str,
    allow_spoilers: bool,
    now: datetime,
    causes: Sequence[Cause] = CAUSES,
) -> Prophecy:
    """
    Build the prophecy for `seed`.

    Args:
        seed: Any string; typically "<character>-<date>" or a reseed value
        allow_spoilers: When False, spoiler-flagged causes are never chosen
            and the "never" threshold drops from 10 to 7
        now: Reference instant for the date span and month labels
        causes: Cause pool, in draw order

    Returns:
        Prophecy (total: every seed string produces one)
    """
    rng = SeededRandom.from_seed(seed)

    doom_percent = rng.between(0, 100)
    confidence = rng.between(40, 97)

    cause = rng.pick(cause_pool(allow_spoilers, causes)).text

    start = now + timedelta(days=1)
    end = _add_years(now, HORIZON_YEARS)
    span_days = math.floor((end - start).total_seconds() / 86400)
    day_offset = rng.between(0, span_days)
    predicted = start + timedelta(days=day_offset)

    threshold = NEVER_THRESHOLD if allow_spoilers else NEVER_THRESHOLD_NO_SPOILERS
    is_never = doom_percent < threshold or "never" in cause.lower()

    points = []
    for i in range(RISK_MONTHS):
        wobble = math.floor(rng.random() * RISK_WOBBLE) - RISK_WOBBLE // 2
        wave = math.sin((i / RISK_MONTHS) * math.pi * 2) * RISK_AMPLITUDE
        risk = max(0, min(100, doom_percent + wobble + wave))
        label = SHORT_MONTHS[(now.month - 1 + i) % 12]
        # half-up, not banker's rounding
        points.append(RiskPoint(label=label, value=math.floor(risk + 0.5)))

    return Prophecy(
        doom_percent=doom_percent,
        confidence=confidence,
        cause=cause,
        predicted_date=predicted.date(),
        is_never=is_never,
        monthly_risk=points,
    )


def format_prophecy_date(prophecy: Prophecy) -> str:
    if prophecy.is_never:
        return NEVER_LABEL
    return prophecy.predicted_date.isoformat()


def daily_seed(character: str, today: date) -> str:
    """Stable seed for `character` on `today`, e.g. "Deniusth-Sat Oct 17 2026"."""
    stamp = (
        f"{SHORT_WEEKDAYS[today.weekday()]} {SHORT_MONTHS[today.month - 1]} "
        f"{today.day:02d} {today.year:04d}"
    )
    return f"{character}-{stamp}"


def _base36(number: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    out = ""
    while number:
        number, rem = divmod(number, 36)
        out = digits[rem] + out
    return out or "0"


def fresh_seed(character: str, now: Optional[datetime] = None) -> str:
    """New seed from the wall clock plus a random suffix."""
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{character}-{millis}-{_base36(secrets.randbits(52))}"


def share_url(base_url: str, seed: str) -> str:
    """`base_url` with its `seed` query parameter set to `seed`."""
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "seed"]
    query.append(("seed", seed))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))
