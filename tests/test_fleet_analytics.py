import unittest
from datetime import datetime, timezone

from app.analytics import (
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
from app.analytics.common import round_half_up
from app.services.destination_standard_service import DEFAULT_STANDARDS

STANDARDS = {d["destination"].lower(): d for d in DEFAULT_STANDARDS}

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def trip(vehicle, destination, dep, arr=None, comment="Reached", mileage=None):
    return {
        "vehicle_number": vehicle,
        "destination":    destination,
        "departure_time": dep,
        "arrival_time":   arr,
        "comment":        comment,
        "mileage":        mileage,
    }


class TestTripDuration(unittest.TestCase):
    def test_hours_and_minutes(self):
        self.assertEqual(trip_duration_hours("2024-05-13T08:00:00Z", "2024-05-13T13:30:00Z"), 5.5)

    def test_missing_arrival_is_zero(self):
        self.assertEqual(trip_duration_hours("2024-05-13T08:00:00Z", None), 0)
        self.assertEqual(trip_duration_hours(None, "2024-05-13T08:00:00Z"), 0)

    def test_partial_minutes_are_dropped(self):
        self.assertEqual(trip_duration_hours("2024-05-13T10:00:00Z", "2024-05-13T11:00:59Z"), 1.0)

    def test_negative_duration_truncates_toward_zero(self):
        self.assertEqual(trip_duration_hours("2024-05-13T10:00:00Z", "2024-05-13T08:30:00Z"), -1.5)

    def test_accepts_datetimes(self):
        dep = datetime(2024, 5, 13, 8, 0)
        arr = datetime(2024, 5, 13, 9, 15, tzinfo=timezone.utc)
        self.assertEqual(trip_duration_hours(dep, arr), 1.25)


class TestTripStatus(unittest.TestCase):
    def test_on_time_within_tolerance(self):
        # Kampala: 5 hours, tolerance allows 5.5
        e = trip("UAX 1", "Kampala", "2024-05-13T08:00:00Z", "2024-05-13T13:29:00Z")
        self.assertEqual(trip_status(e, STANDARDS), "onTime")

    def test_delayed_beyond_tolerance(self):
        e = trip("UAX 1", "Kampala", "2024-05-13T08:00:00Z", "2024-05-13T13:40:00Z")
        self.assertEqual(trip_status(e, STANDARDS), "delayed")

    def test_not_reached_is_void(self):
        e = trip("UAX 1", "Kampala", "2024-05-13T08:00:00Z", "2024-05-13T09:00:00Z", comment="Breakdown")
        self.assertEqual(trip_status(e, STANDARDS), "void")
        e["comment"] = ""
        self.assertEqual(trip_status(e, STANDARDS), "void")

    def test_unknown_destination_is_void(self):
        e = trip("UAX 1", "Nairobi", "2024-05-13T08:00:00Z", "2024-05-13T09:00:00Z")
        self.assertEqual(trip_status(e, STANDARDS), "void")

    def test_zero_hour_standard_is_void(self):
        standards = {"depot": {"fuel": 0, "hours": 0, "cost": 0}}
        e = trip("UAX 1", "Depot", "2024-05-13T08:00:00Z", "2024-05-13T09:00:00Z")
        self.assertEqual(trip_status(e, standards), "void")

    def test_destination_lookup_ignores_case_and_padding(self):
        e = trip("UAX 1", "  kampala ", "2024-05-13T08:00:00Z", "2024-05-13T10:00:00Z")
        self.assertEqual(trip_status(e, STANDARDS), "onTime")

    def test_custom_tolerance(self):
        e = trip("UAX 1", "Kampala", "2024-05-13T08:00:00Z", "2024-05-13T13:29:00Z")
        self.assertEqual(trip_status(e, STANDARDS, tolerance=1.0), "delayed")


class TestCleaningAndFilters(unittest.TestCase):
    def test_clean_entry(self):
        cleaned = clean_entry({
            "vehicle_number": "  UAX   123  B ",
            "destination":    " Kampala ",
            "comment":        None,
        })
        self.assertEqual(cleaned["vehicle_number"], "UAX 123 B")
        self.assertEqual(cleaned["destination"], "Kampala")
        self.assertEqual(cleaned["comment"], "")

    def test_clean_entry_trims_comment(self):
        self.assertEqual(clean_entry({"vehicle_number": "A", "destination": "B", "comment": " Reached "})["comment"],
                         "Reached")

    def test_filter_by_week_starts_sunday(self):
        entries = [
            trip("A", "Kampala", "2024-05-12T00:00:00Z"),   # Sunday
            trip("B", "Kampala", "2024-05-11T23:59:00Z"),   # Saturday before
        ]
        kept = filter_by_range(entries, "week", NOW)
        self.assertEqual([e["vehicle_number"] for e in kept], ["A"])

    def test_filter_by_month_and_year(self):
        entries = [
            trip("A", "Kampala", "2024-05-01T00:00:00Z"),
            trip("B", "Kampala", "2024-04-30T23:00:00Z"),
            trip("C", "Kampala", "2023-12-31T23:00:00Z"),
        ]
        self.assertEqual(len(filter_by_range(entries, "month", NOW)), 1)
        self.assertEqual(len(filter_by_range(entries, "year", NOW)), 2)
        self.assertEqual(len(filter_by_range(entries, "all", NOW)), 3)

    def test_search_matches_vehicle_or_destination(self):
        entries = [trip("UAX 100", "Kampala", NOW), trip("UBB 200", "Gulu", NOW)]
        self.assertEqual(len(search_entries(entries, "uax")), 1)
        self.assertEqual(len(search_entries(entries, "GULU")), 1)
        self.assertEqual(len(search_entries(entries, "")), 2)
        self.assertEqual(search_entries(entries, "nowhere"), [])


class TestAggregates(unittest.TestCase):
    def setUp(self):
        self.entries = [
            # A: Kampala on time, Jinja delayed (3h standard, 4h actual)
            trip("A", "Kampala", "2024-05-13T08:00:00Z", "2024-05-13T13:00:00Z", mileage=300),
            trip("A", "Jinja",   "2024-05-13T08:00:00Z", "2024-05-13T12:00:00Z", mileage=220),
            # B: not reached, and reached somewhere with no standard
            trip("B", "Kampala", "2024-05-14T08:00:00Z", None, comment="", mileage=None),
            trip("B", "Nairobi", "2024-05-14T08:00:00Z", "2024-05-14T20:00:00Z", mileage=900),
        ]

    def test_kpis(self):
        kpis = calculate_kpis(self.entries, STANDARDS)
        self.assertEqual(kpis["totalTrips"], 3)
        self.assertAlmostEqual(kpis["onTimeRate"], 100 / 3)
        self.assertAlmostEqual(kpis["delayRate"], 100 / 3)
        self.assertEqual(kpis["voidRate"], 25)

    def test_kpis_empty(self):
        kpis = calculate_kpis([], STANDARDS)
        self.assertEqual((kpis["totalTrips"], kpis["onTimeRate"], kpis["delayRate"], kpis["voidRate"]),
                         (0, 0, 0, 0))

    def test_vehicle_stats(self):
        stats = vehicle_stats(self.entries, STANDARDS)
        self.assertEqual([s["vehicle"] for s in stats], ["A", "B"])

        a, b = stats
        self.assertEqual((a["trips"], a["onTime"], a["delayed"], a["void"]), (2, 1, 1, 0))
        self.assertEqual(a["totalFuel"], 170 + 90)
        self.assertEqual(a["totalCost"], 70000 + 50000)
        self.assertEqual(a["totalMileage"], 520)
        self.assertEqual(a["destinations"]["Jinja"],
                         {"trips": 1, "fuel": 90, "cost": 50000, "onTime": 0, "delayed": 1})

        self.assertEqual((b["trips"], b["void"]), (2, 2))
        self.assertEqual(b["totalFuel"], 0)
        self.assertEqual(b["totalMileage"], 900)
        self.assertEqual(b["destinations"]["Kampala"]["trips"], 1)
        self.assertEqual(b["destinations"]["Kampala"]["fuel"], 0)
        self.assertEqual(b["maintenanceAdvisory"], "No immediate maintenance needed")

    def test_route_performance_counts_reached_only(self):
        entries = self.entries + [trip("C", "Kampala", "2024-05-14T08:00:00Z", "2024-05-14T12:00:00Z")]
        routes = route_performance(entries, STANDARDS)
        self.assertEqual(routes[0]["destination"], "Kampala")
        self.assertEqual(routes[0]["tripCount"], 2)
        self.assertEqual(routes[0]["vehicles"], 2)
        self.assertEqual(routes[0]["totalFuel"], 340)
        self.assertEqual({r["destination"] for r in routes}, {"Kampala", "Jinja", "Nairobi"})

    def test_top_vehicles_efficiency(self):
        stats = vehicle_stats(self.entries, STANDARDS)
        top = top_vehicles(stats)
        a = next(t for t in top if t["vehicle"] == "A")
        b = next(t for t in top if t["vehicle"] == "B")
        self.assertEqual(a["efficiency"], 2.0)
        self.assertEqual(b["efficiency"], 0)

    def test_top_vehicles_limit_and_order(self):
        entries = [trip(f"V{i}", "Kampala", NOW) for i in range(7) for _ in range(i + 1)]
        top = top_vehicles(vehicle_stats(entries, STANDARDS))
        self.assertEqual([t["vehicle"] for t in top], ["V6", "V5", "V4", "V3", "V2"])

    def test_vehicle_detail(self):
        detail = vehicle_detail("A", self.entries, STANDARDS)
        self.assertEqual(detail["totalTrips"], 2)
        self.assertEqual(detail["trips"][0]["date"], "May 13")
        self.assertEqual(detail["trips"][0]["duration"], 5.0)
        self.assertEqual(detail["destinations"], {"Kampala": 1, "Jinja": 1})
        self.assertEqual(detail["statusCounts"], {"onTime": 1, "delayed": 1, "void": 0})
        self.assertEqual(detail["totalFuel"], 260)
        self.assertEqual(detail["onTimePercent"], 50)

    def test_destination_detail(self):
        stats = vehicle_stats(self.entries, STANDARDS)
        detail = destination_detail(stats, "A", "Kampala", STANDARDS)
        self.assertEqual(detail["trips"], 1)
        self.assertEqual(detail["onTimePercent"], 100)
        self.assertEqual(detail["standard"]["hours"], 5)
        self.assertIsNone(destination_detail(stats, "A", "Gulu"))
        self.assertIsNone(destination_detail(stats, "Z", "Kampala"))


class TestHalfUpRounding(unittest.TestCase):
    def setUp(self):
        on_time = trip("UAX 1", "Jinja", "2024-05-13T08:00:00Z", "2024-05-13T10:00:00Z")
        delayed = [
            trip("UAX 1", "Jinja", f"2024-05-{d:02d}T08:00:00Z", f"2024-05-{d:02d}T13:00:00Z")
            for d in range(1, 8)
        ]
        self.entries = [on_time] + delayed

    def test_vehicle_percentages_round_halves_up(self):
        detail = vehicle_detail("UAX 1", self.entries, STANDARDS)
        self.assertEqual(detail["statusCounts"], {"onTime": 1, "delayed": 7, "void": 0})
        self.assertEqual(detail["onTimePercent"], 13)
        self.assertEqual(detail["delayedPercent"], 88)

    def test_destination_percentages_round_halves_up(self):
        stats = vehicle_stats(self.entries, STANDARDS)
        detail = destination_detail(stats, "UAX 1", "Jinja", STANDARDS)
        self.assertEqual(detail["onTimePercent"], 13)
        self.assertEqual(detail["delayedPercent"], 88)

    def test_efficiency_rounds_halves_up(self):
        standards = {"jinja": {"fuel": 100, "hours": 3, "cost": 50000}}
        e = trip("UAX 1", "Jinja", "2024-05-13T08:00:00Z", "2024-05-13T10:00:00Z", mileage=225)
        self.assertEqual(top_vehicles(vehicle_stats([e], standards))[0]["efficiency"], 2.3)

    def test_helper(self):
        self.assertEqual(round_half_up(12.5), 13)
        self.assertEqual(round_half_up(87.5), 88)
        self.assertEqual(round_half_up(2.25, 1), 2.3)
        self.assertEqual(round_half_up(2.24, 1), 2.2)


class TestMaintenanceAdvisory(unittest.TestCase):
    def test_thresholds(self):
        self.assertEqual(maintenance_advisory(100001, 0), "Engine overhaul needed - immediate")
        self.assertEqual(maintenance_advisory(100000, 0), "Major service due - within 2 weeks")
        self.assertEqual(maintenance_advisory(50000, 0), "Routine maintenance - within 1 month")
        self.assertEqual(maintenance_advisory(25000, 51), "Inspect brakes and tires - soon")
        self.assertEqual(maintenance_advisory(25000, 50), "No immediate maintenance needed")
