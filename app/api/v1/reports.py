from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.analytics import (
    filter_by_range,
    search_entries,
    calculate_kpis,
    vehicle_stats,
    route_performance,
    top_vehicles,
    vehicle_detail,
    destination_detail,
)
from app.config import settings
from app.database import get_db
from app.dependencies import get_fleet_user
from app.models.user import User
from app.schemas.common import success_response
from app.services.destination_standard_service import destination_standard_service
from app.services.offence_service import offence_service
from app.services.trip_service import trip_service
from app.utils.exceptions import NotFoundException

router = APIRouter(prefix="/reports")

TIME_RANGE_PATTERN  = "^(week|month|year|all)$"
TIME_FILTER_PATTERN = "^(today|week|month|year|all)$"


def _fleet_entries(db: Session, time_range: str, search: str | None) -> tuple[list, dict]:
    standards = destination_standard_service.get_standards_map(db)
    entries = filter_by_range(trip_service.analytics_entries(db), time_range)
    return search_entries(entries, search), standards


# ─── Fleet analytics ──────────────────────────────────────────────────────────
@router.get("/fleet-analytics", summary="Trip KPIs, per-vehicle stats and route performance")
def fleet_analytics(
    timeRange: str           = Query("week", pattern=TIME_RANGE_PATTERN),
    search:    Optional[str] = Query(None, description="Match vehicle number or destination"),
    db:        Session       = Depends(get_db),
    _:         User          = Depends(get_fleet_user),
):
    entries, standards = _fleet_entries(db, timeRange, search)
    tolerance = settings.ON_TIME_TOLERANCE
    stats = vehicle_stats(entries, standards, tolerance)

    return success_response("Fleet analytics generated", {
        "timeRange":        timeRange,
        "currency":         settings.CURRENCY,
        "kpis":             calculate_kpis(entries, standards, tolerance),
        "vehicleStats":     stats,
        "routePerformance": route_performance(entries, standards),
        "topVehicles":      top_vehicles(stats),
    })


@router.get("/fleet-analytics/vehicles/{vehicle}", summary="Performance summary for one vehicle")
def fleet_vehicle_detail(
    vehicle:   str,
    timeRange: str     = Query("week", pattern=TIME_RANGE_PATTERN),
    db:        Session = Depends(get_db),
    _:         User    = Depends(get_fleet_user),
):
    entries, standards = _fleet_entries(db, timeRange, None)
    detail = vehicle_detail(vehicle, entries, standards, settings.ON_TIME_TOLERANCE)
    return success_response("Vehicle summary generated", detail)


@router.get(
    "/fleet-analytics/vehicles/{vehicle}/destinations/{destination}",
    summary="One vehicle's performance on one destination",
)
def fleet_destination_detail(
    vehicle:     str,
    destination: str,
    timeRange:   str     = Query("week", pattern=TIME_RANGE_PATTERN),
    db:          Session = Depends(get_db),
    _:           User    = Depends(get_fleet_user),
):
    entries, standards = _fleet_entries(db, timeRange, None)
    stats = vehicle_stats(entries, standards, settings.ON_TIME_TOLERANCE)
    detail = destination_detail(stats, vehicle, destination, standards)
    if detail is None:
        raise NotFoundException(f"Trips for vehicle '{vehicle}' to '{destination}'")
    return success_response("Destination summary generated", detail)


# ─── Offences ─────────────────────────────────────────────────────────────────
@router.get("/offences", summary="Offence report: top vehicles, types and status")
def offences_report(
    timeFilter: str     = Query("all", pattern=TIME_FILTER_PATTERN),
    db:         Session = Depends(get_db),
    _:          User    = Depends(get_fleet_user),
):
    return success_response("Offence report generated", offence_service.report(db, timeFilter))


@router.get("/offences/vehicles/{vehicle}", summary="All offences for one vehicle")
def vehicle_offences(
    vehicle: str,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    return success_response("Vehicle offences retrieved", offence_service.vehicle_offences(db, vehicle))
