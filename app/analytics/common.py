"""
Shared helpers for the analytics functions: field access on rows that may be
plain mappings or ORM objects, datetime normalisation and calendar periods.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping


def get_field(row: Any, name: str, default: Any = None) -> Any:
    if isinstance(row, Mapping):
        value = row.get(name, default)
    else:
        value = getattr(row, name, default)
    return default if value is None else value


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def to_number(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float, places: int = 0) -> float:
    """Round with halves going up, the way chart labels show them (12.5 -> 13, 2.25 -> 2.3)."""
    step = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))


# ─── Calendar periods ─────────────────────────────────────────────────────────
def start_of_day(now: datetime) -> datetime:
    return as_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    # Weeks start on Sunday (weekday() is 6 for Sunday)
    day = start_of_day(now)
    return day - timedelta(days=(day.weekday() + 1) % 7)


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)


def start_of_year(now: datetime) -> datetime:
    return start_of_day(now).replace(month=1, day=1)


def _end_of(start_next: datetime) -> datetime:
    return start_next - timedelta(microseconds=1)


def period_bounds(period: str, now: datetime) -> tuple[datetime, datetime] | None:
    """
    Inclusive (start, end) bounds of the current Daily/Weekly/Monthly/Yearly
    period containing ``now``. Returns None for "All" or an unknown period.
    """
    key = (period or "All").strip().lower()
    if key == "daily":
        start = start_of_day(now)
        return start, _end_of(start + timedelta(days=1))
    if key == "weekly":
        start = start_of_week(now)
        return start, _end_of(start + timedelta(days=7))
    if key == "monthly":
        start = start_of_month(now)
        if start.month == 12:
            nxt = start.replace(year=start.year + 1, month=1)
        else:
            nxt = start.replace(month=start.month + 1)
        return start, _end_of(nxt)
    if key == "yearly":
        start = start_of_year(now)
        return start, _end_of(start.replace(year=start.year + 1))
    return None


def within_period(value: Any, period: str, now: datetime) -> bool:
    bounds = period_bounds(period, now)
    if bounds is None:
        return True
    moment = to_datetime(value)
    if moment is None:
        return False
    start, end = bounds
    return start <= moment <= end
