"""Traffic offence reporting over rows from ``vehicle_offences``."""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from app.analytics.common import (
    get_field,
    to_datetime,
    to_number,
    utc_now,
    start_of_day,
    start_of_week,
)

CLEARED = "Cleared"
PENDING = "Pending"

SUGGESTION_FIELDS = ("vehicle_number", "offence", "charge")


def offence_time_filter(offences: Iterable[Any], time_filter: str, now: datetime | None = None) -> list:
    now = now or utc_now()
    key = (time_filter or "all").strip().lower()
    today = start_of_day(now)
    week_start = start_of_week(now)

    def keep(o) -> bool:
        when = to_datetime(get_field(o, "date"))
        if when is None:
            return False
        if key == "today":
            return when.date() == today.date()
        if key == "week":
            return when >= week_start
        if key == "month":
            return when.year == today.year and when.month == today.month
        if key == "year":
            return when.year == today.year
        return True

    if key not in ("today", "week", "month", "year"):
        return list(offences)
    return [o for o in offences if keep(o)]


def group_offences(offences: Iterable[Any]) -> dict[str, list]:
    grouped: dict[str, list] = {}
    for o in offences:
        grouped.setdefault(get_field(o, "vehicle_number", ""), []).append(o)
    return grouped


def offence_report(offences: Iterable[Any], top: int = 5) -> dict:
    offences = list(offences)
    grouped = group_offences(offences)

    vehicles = [
        {
            "vehicle":      vehicle,
            "count":        len(items),
            "totalCharge":  sum(to_number(get_field(o, "charge")) for o in items),
            "clearedCount": sum(1 for o in items if get_field(o, "status") == CLEARED),
            "pendingCount": sum(1 for o in items if get_field(o, "status") == PENDING),
        }
        for vehicle, items in grouped.items()
    ]
    vehicles.sort(key=lambda v: -v["count"])

    offence_types: dict[str, int] = {}
    status_distribution = {CLEARED: 0, PENDING: 0}
    for o in offences:
        name = get_field(o, "offence", "")
        offence_types[name] = offence_types.get(name, 0) + 1
        status = get_field(o, "status")
        if status in status_distribution:
            status_distribution[status] += 1

    return {
        "total":              len(offences),
        "topVehicles":        vehicles[:top],
        "vehicles":           vehicles,
        "offenceTypes":       offence_types,
        "statusDistribution": status_distribution,
        "grouped":            grouped,
    }


def charge_text(value: Any) -> str:
    """Render a charge the way it was typed: 50000 rather than 50000.00."""
    if value is None:
        return ""
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return str(value)
    if number == number.to_integral_value():
        return str(number.quantize(Decimal(1)))
    return str(number.normalize())


def offence_suggestions(offences: Iterable[Any], field: str, query: str | None = None) -> list[str]:
    """Distinct values of ``field`` in first-seen order, narrowed by ``query``."""
    if field not in SUGGESTION_FIELDS:
        raise ValueError(f"Unsupported suggestion field: {field}")

    if field == "charge":
        values = [charge_text(get_field(o, "charge")) for o in offences]
    else:
        values = [get_field(o, field, "") for o in offences]
    distinct = [v for v in dict.fromkeys(values) if v != ""]

    q = (query or "").lower()
    if not q:
        return distinct
    return [v for v in distinct if q in v.lower()]
