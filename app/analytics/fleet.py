"""
Trip analytics.

Every function here is pure: it takes trip rows (mappings or ORM objects
with the ``vehicle_tracking`` fields) plus a destination standards map and
returns plain dicts ready for JSON. Nothing here touches the database.

``standards`` is a map of lowercase destination -> {"fuel", "hours", "cost"},
as returned by ``destination_standard_service.get_standards_map``.
"""

import math
import re
from datetime import datetime
from typing import Any, Iterable, Mapping

from app.analytics.common import (
    get_field,
    to_datetime,
    to_number,
    utc_now,
    round_half_up,
    start_of_week,
    start_of_month,
    start_of_year,
)

REACHED = "Reached"
DEFAULT_TOLERANCE = 1.1

_EMPTY_STANDARD = {"fuel": 0.0, "hours": 0.0, "cost": 0.0}
_WHITESPACE = re.compile(r"\s+")


def clean_entry(entry: Any) -> dict:
    """Return a dict copy of a trip with vehicle number, destination and comment tidied."""
    if isinstance(entry, Mapping):
        data = dict(entry)
    else:
        data = {
            "id":                  get_field(entry, "id"),
            "vehicle_number":      get_field(entry, "vehicle_number"),
            "departure_time":      get_field(entry, "departure_time"),
            "arrival_time":        get_field(entry, "arrival_time"),
            "destination":         get_field(entry, "destination"),
            "route":               get_field(entry, "route"),
            "item":                get_field(entry, "item"),
            "fuel_used":           get_field(entry, "fuel_used"),
            "mileage":             get_field(entry, "mileage"),
            "comment":             get_field(entry, "comment"),
            "confirmation_status": get_field(entry, "confirmation_status", False),
        }
    data["vehicle_number"] = _WHITESPACE.sub(" ", (data.get("vehicle_number") or "").strip())
    data["destination"] = (data.get("destination") or "").strip()
    data["comment"] = (data.get("comment") or "").strip()
    return data


def is_reached(entry: Any) -> bool:
    return get_field(entry, "comment") == REACHED


def lookup_standard(standards: Mapping[str, Mapping], destination: str | None) -> dict:
    key = (destination or "").strip().lower()
    found = standards.get(key)
    if not found:
        return dict(_EMPTY_STANDARD)
    return {
        "fuel":  to_number(found.get("fuel")),
        "hours": to_number(found.get("hours")),
        "cost":  to_number(found.get("cost")),
    }


# ─── Filters ──────────────────────────────────────────────────────────────────
def filter_by_range(entries: Iterable[Any], time_range: str, now: datetime | None = None) -> list:
    """Keep entries departing on or after the start of the current week/month/year."""
    now = now or utc_now()
    key = (time_range or "all").strip().lower()
    starts = {"week": start_of_week, "month": start_of_month, "year": start_of_year}
    if key not in starts:
        return list(entries)

    start = starts[key](now)
    result = []
    for e in entries:
        departed = to_datetime(get_field(e, "departure_time"))
        if departed is not None and departed >= start:
            result.append(e)
    return result


def search_entries(entries: Iterable[Any], query: str | None) -> list:
    q = (query or "").strip().lower()
    if not q:
        return list(entries)
    return [
        e for e in entries
        if q in (get_field(e, "vehicle_number", "") or "").lower()
        or q in (get_field(e, "destination", "") or "").lower()
    ]


# ─── Per-trip ─────────────────────────────────────────────────────────────────
def trip_duration_hours(departure: Any, arrival: Any) -> float:
    """
    Whole hours plus the leftover whole minutes as a fraction.
    Both counts truncate toward zero, so partial minutes are dropped.
    """
    dep = to_datetime(departure)
    arr = to_datetime(arrival)
    if dep is None or arr is None:
        return 0.0
    seconds = (arr - dep).total_seconds()
    hours = math.trunc(seconds / 3600)
    minutes = math.trunc(seconds / 60)
    return hours + math.fmod(minutes, 60) / 60


def trip_status(
    entry: Any,
    standards: Mapping[str, Mapping],
    tolerance: float = DEFAULT_TOLERANCE,
) -> str:
    """Classify a trip as "onTime", "delayed" or "void"."""
    if not is_reached(entry):
        return "void"
    expected = lookup_standard(standards, get_field(entry, "destination"))["hours"]
    if not expected:
        return "void"
    actual = trip_duration_hours(get_field(entry, "departure_time"), get_field(entry, "arrival_time"))
    return "onTime" if actual <= expected * tolerance else "delayed"


def maintenance_advisory(mileage: float, trips: int) -> str:
    if mileage > 100000: return "Engine overhaul needed - immediate"
    if mileage > 50000:  return "Major service due - within 2 weeks"
    if mileage > 25000:  return "Routine maintenance - within 1 month"
    if trips > 50:       return "Inspect brakes and tires - soon"
    return "No immediate maintenance needed"


# ─── Aggregates ───────────────────────────────────────────────────────────────
def _status_counts(entries, standards, tolerance) -> dict:
    counts = {"onTime": 0, "delayed": 0, "void": 0}
    for e in entries:
        counts[trip_status(e, standards, tolerance)] += 1
    return counts


def calculate_kpis(
    entries: Iterable[Any],
    standards: Mapping[str, Mapping],
    tolerance: float = DEFAULT_TOLERANCE,
) -> dict:
    entries = list(entries)
    counts = _status_counts(entries, standards, tolerance)
    total_trips = sum(1 for e in entries if is_reached(e))
    total_entries = len(entries)

    return {
        "totalTrips":   total_trips,
        "totalEntries": total_entries,
        "onTime":       counts["onTime"],
        "delayed":      counts["delayed"],
        "void":         counts["void"],
        "onTimeRate":   counts["onTime"] / total_trips * 100 if total_trips else 0,
        "delayRate":    counts["delayed"] / total_trips * 100 if total_trips else 0,
        "voidRate":     (total_entries - total_trips) / total_entries * 100 if total_entries else 0,
    }


def vehicle_stats(
    entries: Iterable[Any],
    standards: Mapping[str, Mapping],
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[dict]:
    """One row per vehicle number, in the order vehicles are first seen."""
    vehicles: dict[str, dict] = {}

    for e in entries:
        number = get_field(e, "vehicle_number", "")
        destination = get_field(e, "destination", "")
        standard = lookup_standard(standards, destination)
        status = trip_status(e, standards, tolerance)
        reached = is_reached(e)

        row = vehicles.setdefault(number, {
            "vehicle":             number,
            "trips":               0,
            "onTime":              0,
            "delayed":             0,
            "void":                0,
            "totalFuel":           0.0,
            "totalMileage":        0.0,
            "totalCost":           0.0,
            "maintenanceAdvisory": "",
            "destinations":        {},
        })
        row["trips"] += 1
        row[status] += 1
        row["totalMileage"] += to_number(get_field(e, "mileage"))

        # Fuel and cost only count for trips that reached their destination
        if reached:
            row["totalFuel"] += standard["fuel"]
            row["totalCost"] += standard["cost"]

        dest = row["destinations"].setdefault(destination, {
            "trips": 0, "fuel": 0.0, "cost": 0.0, "onTime": 0, "delayed": 0,
        })
        dest["trips"] += 1
        if reached:
            dest["fuel"] += standard["fuel"]
            dest["cost"] += standard["cost"]
            if status == "onTime":
                dest["onTime"] += 1
            elif status == "delayed":
                dest["delayed"] += 1

    for row in vehicles.values():
        row["maintenanceAdvisory"] = maintenance_advisory(row["totalMileage"], row["trips"])
    return list(vehicles.values())


def route_performance(entries: Iterable[Any], standards: Mapping[str, Mapping]) -> list[dict]:
    """Reached trips grouped by destination, busiest first."""
    routes: dict[str, dict] = {}
    seen: dict[str, set] = {}

    for e in entries:
        if not is_reached(e):
            continue
        destination = get_field(e, "destination", "")
        standard = lookup_standard(standards, destination)
        route = routes.setdefault(destination, {
            "destination": destination,
            "vehicles":    0,
            "tripCount":   0,
            "totalFuel":   0.0,
            "totalCost":   0.0,
        })
        route["tripCount"] += 1
        route["totalFuel"] += standard["fuel"]
        route["totalCost"] += standard["cost"]
        seen.setdefault(destination, set()).add(get_field(e, "vehicle_number", ""))
        route["vehicles"] = len(seen[destination])

    return sorted(routes.values(), key=lambda r: -r["tripCount"])


def top_vehicles(stats: Iterable[Mapping], limit: int = 5) -> list[dict]:
    ranked = sorted(stats, key=lambda s: -s["trips"])[:limit]
    return [
        {
            "vehicle":    s["vehicle"],
            "trips":      s["trips"],
            "totalCost":  s["totalCost"],
            "totalFuel":  s["totalFuel"],
            "efficiency": round_half_up(s["totalMileage"] / s["totalFuel"], 1) if s["totalFuel"] > 0 else 0,
        }
        for s in ranked
    ]


def _percent(part: int, whole: int) -> int:
    return int(round_half_up(part / whole * 100)) if whole else 0


def vehicle_detail(
    vehicle: str,
    entries: Iterable[Any],
    standards: Mapping[str, Mapping],
    tolerance: float = DEFAULT_TOLERANCE,
) -> dict:
    """Performance summary for one vehicle over the given entries."""
    own = [e for e in entries if get_field(e, "vehicle_number") == vehicle]

    trips = []
    total_fuel = total_cost = 0.0
    destinations: dict[str, int] = {}
    for e in own:
        departed = to_datetime(get_field(e, "departure_time"))
        destination = get_field(e, "destination", "")
        trips.append({
            "id":          get_field(e, "id"),
            "date":        departed.strftime("%b %d") if departed else "",
            "duration":    trip_duration_hours(get_field(e, "departure_time"), get_field(e, "arrival_time")),
            "expected":    lookup_standard(standards, destination)["hours"],
            "destination": destination,
            "status":      trip_status(e, standards, tolerance),
        })
        if is_reached(e):
            standard = lookup_standard(standards, destination)
            total_fuel += standard["fuel"]
            total_cost += standard["cost"]
            destinations[destination] = destinations.get(destination, 0) + 1

    counts = _status_counts(own, standards, tolerance)
    completed = counts["onTime"] + counts["delayed"]
    return {
        "vehicle":        vehicle,
        "trips":          trips,
        "totalTrips":     len(own),
        "totalMileage":   sum(to_number(get_field(e, "mileage")) for e in own),
        "totalFuel":      total_fuel,
        "totalCost":      total_cost,
        "destinations":   destinations,
        "statusCounts":   counts,
        "onTimePercent":  _percent(counts["onTime"], completed),
        "delayedPercent": _percent(counts["delayed"], completed),
        "voidPercent":    _percent(counts["void"], len(own)),
    }


def destination_detail(
    stats: Iterable[Mapping],
    vehicle: str,
    destination: str,
    standards: Mapping[str, Mapping] | None = None,
) -> dict | None:
    """A vehicle's breakdown for one destination, or None if it never went there."""
    row = next((s for s in stats if s["vehicle"] == vehicle), None)
    if row is None:
        return None
    breakdown = row["destinations"].get(destination)
    if breakdown is None:
        return None
    return {
        "vehicle":        vehicle,
        "destination":    destination,
        **breakdown,
        "onTimePercent":  _percent(breakdown["onTime"], breakdown["trips"]),
        "delayedPercent": _percent(breakdown["delayed"], breakdown["trips"]),
        "standard":       lookup_standard(standards or {}, destination),
    }
