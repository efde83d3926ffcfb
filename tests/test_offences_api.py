from datetime import datetime, timezone

from tests.base import ApiTestCase


class OffenceTestCase(ApiTestCase):

    def create_offence(self, vehicle="UAX123", offence="Speeding", charge=200000, date=None, **extra):
        res = self.client.post("/api/v1/offences", json={
            "vehicleNumber": vehicle,
            "date":          date or datetime.now(timezone.utc).isoformat(),
            "offence":       offence,
            "charge":        charge,
            **extra,
        }, headers=self.fleet)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["data"]


class TestOffences(OffenceTestCase):

    def test_crud(self):
        o = self.create_offence(driver="Okello", location="Entebbe Road")
        self.assertEqual(o["status"], "Pending")
        self.assertEqual(o["charge"], 200000)

        res = self.client.put(f"/api/v1/offences/{o['id']}", json={"status": "Cleared"}, headers=self.fleet)
        self.assertEqual(res.json()["data"]["status"], "Cleared")
        self.assertEqual(res.json()["data"]["driver"], "Okello")

        res = self.client.delete(f"/api/v1/offences/{o['id']}", headers=self.fleet)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.client.get(f"/api/v1/offences/{o['id']}", headers=self.fleet).status_code, 404)

    def test_charge_must_be_positive(self):
        res = self.client.post("/api/v1/offences", json={
            "vehicleNumber": "UAX123", "date": "2024-05-13T08:00:00Z", "offence": "Speeding", "charge": 0,
        }, headers=self.fleet)
        self.assertEqual(res.status_code, 422)
        self.assertEqual(res.json()["error"]["details"][0]["field"], "charge")

    def test_unknown_status(self):
        res = self.client.post("/api/v1/offences", json={
            "vehicleNumber": "UAX123", "date": "2024-05-13T08:00:00Z", "offence": "Speeding",
            "charge": 10, "status": "Waived",
        }, headers=self.fleet)
        self.assertEqual(res.status_code, 422)

    def test_list_and_grouped(self):
        self.create_offence("UAX123", date="2024-05-10T08:00:00Z")
        self.create_offence("UBB456", date="2024-05-12T08:00:00Z")
        self.create_offence("UAX123", date="2024-05-14T08:00:00Z")

        rows = self.client.get("/api/v1/offences", headers=self.fleet).json()["data"]
        self.assertEqual([r["vehicleNumber"] for r in rows], ["UAX123", "UBB456", "UAX123"])

        grouped = self.client.get("/api/v1/offences/grouped", headers=self.fleet).json()["data"]
        self.assertEqual(len(grouped["UAX123"]), 2)
        self.assertEqual(len(grouped["UBB456"]), 1)

    def test_suggestions(self):
        self.create_offence("UAX123", "Speeding", 50000)
        self.create_offence("UAX999", "Overloading", 2500.5)
        self.create_offence("UBB456", "Speeding", 50000)

        res = self.client.get("/api/v1/offences/suggestions", params={"field": "vehicle_number", "q": "uax"},
                              headers=self.fleet)
        self.assertEqual(sorted(res.json()["data"]), ["UAX123", "UAX999"])

        res = self.client.get("/api/v1/offences/suggestions", params={"field": "charge"}, headers=self.fleet)
        self.assertEqual(sorted(res.json()["data"]), ["2500.5", "50000"])

        res = self.client.get("/api/v1/offences/suggestions", params={"field": "offence"}, headers=self.fleet)
        self.assertEqual(sorted(res.json()["data"]), ["Overloading", "Speeding"])

    def test_suggestions_field_is_restricted(self):
        res = self.client.get("/api/v1/offences/suggestions", params={"field": "driver"}, headers=self.fleet)
        self.assertEqual(res.status_code, 422)

    def test_inventory_user_is_forbidden(self):
        res = self.client.get("/api/v1/offences", headers=self.inventory)
        self.assertEqual(res.status_code, 403)


class TestOffenceReports(OffenceTestCase):

    def setUp(self):
        super().setUp()
        self.create_offence("UAX123", "Speeding", 200000)
        self.create_offence("UAX123", "Overloading", 500000, status="Cleared")
        self.create_offence("UBB456", "Speeding", 200000, date="2020-01-15T08:00:00Z")

    def test_report_all(self):
        res = self.client.get("/api/v1/reports/offences", headers=self.fleet)
        self.assertEqual(res.status_code, 200)
        data = res.json()["data"]
        self.assertEqual(data["timeFilter"], "all")
        self.assertEqual(data["total"], 3)
        self.assertEqual(data["topVehicles"][0]["vehicle"], "UAX123")
        self.assertEqual(data["topVehicles"][0]["totalCharge"], 700000)
        self.assertEqual(data["offenceTypes"], {"Speeding": 2, "Overloading": 1})
        self.assertEqual(data["statusDistribution"], {"Cleared": 1, "Pending": 2})
        self.assertEqual(data["grouped"]["UBB456"][0]["vehicleNumber"], "UBB456")

    def test_report_year(self):
        data = self.client.get("/api/v1/reports/offences", params={"timeFilter": "year"},
                               headers=self.fleet).json()["data"]
        self.assertEqual(data["total"], 2)
        self.assertNotIn("UBB456", data["grouped"])

    def test_vehicle_offences(self):
        data = self.client.get("/api/v1/reports/offences/vehicles/UAX123", headers=self.fleet).json()["data"]
        self.assertEqual(len(data), 2)
        self.assertEqual({o["offence"] for o in data}, {"Speeding", "Overloading"})
