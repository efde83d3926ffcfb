"""
Pure aggregation functions behind the fleet and offence reports.
Nothing in this package opens a database session.
"""

from app.analytics.fleet import (
    clean_entry,
    filter_by_range,
    search_entries,
    trip_duration_hours,
    trip_status,
    calculate_kpis,
    vehicle_stats,
    maintenance_advisory,
    route_performance,
    top_vehicles,
    vehicle_detail,
    destination_detail,
)
from app.analytics.offences import (
    offence_time_filter,
    group_offences,
    offence_report,
    offence_suggestions,
)

__all__ = [
    "clean_entry",
    "filter_by_range",
    "search_entries",
    "trip_duration_hours",
    "trip_status",
    "calculate_kpis",
    "vehicle_stats",
    "maintenance_advisory",
    "route_performance",
    "top_vehicles",
    "vehicle_detail",
    "destination_detail",
    "offence_time_filter",
    "group_offences",
    "offence_report",
    "offence_suggestions",
]
