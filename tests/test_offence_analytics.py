import unittest
from datetime import datetime, timezone
from decimal import Decimal

from app.analytics import (
    offence_time_filter,
    group_offences,
    offence_report,
    offence_suggestions,
)

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def offence(vehicle, date, name="Speeding", charge="200000", status="Pending"):
    return {"vehicle_number": vehicle, "date": date, "offence": name, "charge": charge, "status": status}


class TestOffenceTimeFilter(unittest.TestCase):
    def setUp(self):
        self.offences = [
            offence("A", datetime(2024, 5, 15, 8, 0, tzinfo=timezone.utc)),   # today
            offence("A", datetime(2024, 5, 13, 9, 0, tzinfo=timezone.utc)),   # this week
            offence("B", datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc)),   # earlier this month
            offence("B", datetime(2024, 4, 2, 9, 0, tzinfo=timezone.utc)),    # earlier this year
            offence("C", datetime(2023, 12, 31, 9, 0, tzinfo=timezone.utc)),  # last year
        ]

    def test_filters(self):
        self.assertEqual(len(offence_time_filter(self.offences, "today", NOW)), 1)
        self.assertEqual(len(offence_time_filter(self.offences, "week", NOW)), 2)
        self.assertEqual(len(offence_time_filter(self.offences, "month", NOW)), 3)
        self.assertEqual(len(offence_time_filter(self.offences, "year", NOW)), 4)
        self.assertEqual(len(offence_time_filter(self.offences, "all", NOW)), 5)

    def test_accepts_iso_strings(self):
        rows = [offence("A", "2024-05-15T07:30:00Z"), offence("A", "2024-05-14T07:30:00+00:00")]
        self.assertEqual(len(offence_time_filter(rows, "today", NOW)), 1)


class TestOffenceReport(unittest.TestCase):
    def setUp(self):
        self.offences = [
            offence("UAX 1", NOW, "Speeding", Decimal("200000.00"), "Cleared"),
            offence("UAX 1", NOW, "Overloading", Decimal("500000.00"), "Pending"),
            offence("UAX 1", NOW, "Speeding", Decimal("200000.00"), "Pending"),
            offence("UBB 2", NOW, "Speeding", Decimal("2500.50"), "Cleared"),
        ]

    def test_grouping(self):
        grouped = group_offences(self.offences)
        self.assertEqual(list(grouped), ["UAX 1", "UBB 2"])
        self.assertEqual(len(grouped["UAX 1"]), 3)

    def test_report(self):
        report = offence_report(self.offences)
        top = report["topVehicles"]
        self.assertEqual(top[0]["vehicle"], "UAX 1")
        self.assertEqual(top[0]["count"], 3)
        self.assertEqual(top[0]["totalCharge"], 900000)
        self.assertEqual((top[0]["clearedCount"], top[0]["pendingCount"]), (1, 2))
        self.assertEqual(report["offenceTypes"], {"Speeding": 3, "Overloading": 1})
        self.assertEqual(report["statusDistribution"], {"Cleared": 2, "Pending": 2})
        self.assertEqual(report["total"], 4)

    def test_top_vehicles_capped_at_five(self):
        rows = [offence(f"V{i}", NOW) for i in range(8)]
        self.assertEqual(len(offence_report(rows)["topVehicles"]), 5)


class TestSuggestions(unittest.TestCase):
    def setUp(self):
        self.offences = [
            offence("UAX 100", NOW, "Speeding", Decimal("50000.00")),
            offence("uax 200", NOW, "Overloading", Decimal("2500.50")),
            offence("UAX 100", NOW, "Speeding", Decimal("50000.00")),
            offence("UBB 300", NOW, "No seatbelt", "15000"),
        ]

    def test_distinct_in_first_seen_order(self):
        self.assertEqual(offence_suggestions(self.offences, "vehicle_number"),
                         ["UAX 100", "uax 200", "UBB 300"])

    def test_case_insensitive_match(self):
        self.assertEqual(offence_suggestions(self.offences, "vehicle_number", "UaX"), ["UAX 100", "uax 200"])
        self.assertEqual(offence_suggestions(self.offences, "offence", "load"), ["Overloading"])

    def test_charges_match_as_text(self):
        self.assertEqual(offence_suggestions(self.offences, "charge"), ["50000", "2500.5", "15000"])
        self.assertEqual(offence_suggestions(self.offences, "charge", "500"), ["50000", "2500.5", "15000"])
        self.assertEqual(offence_suggestions(self.offences, "charge", "2500"), ["2500.5"])

    def test_unknown_field(self):
        with self.assertRaises(ValueError):
            offence_suggestions(self.offences, "driver")
