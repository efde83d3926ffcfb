from tests.test_inventory_api import InventoryTestCase


class TestInventorySearch(InventoryTestCase):

    def setUp(self):
        super().setUp()
        self.supplier = self.create_supplier("Cemtech Supplies", contact="Moses", email="orders@cemtech.test")
        self.lpo = self.create_lpo("CEM-7", supplier_id=self.supplier["id"])
        self.item = self.stock_in(self.lpo["id"], "Cement", quantity=10).json()["data"]
        res = self.client.post("/api/v1/stock/out", json={"stockId": self.item["id"], "quantity": 2, "takenBy": "Moses"},
                               headers=self.inventory)
        self.assertEqual(res.status_code, 201, res.text)
        self.issuance = res.json()["data"]

    def search(self, q):
        res = self.client.get("/api/v1/search", params={"q": q}, headers=self.inventory)
        self.assertEqual(res.status_code, 200, res.text)
        return res.json()["data"]

    def test_matches_every_table_in_order(self):
        results = self.search("cem")
        self.assertEqual([r["type"] for r in results], ["supplier", "stock_item", "stock_out", "lpo"])
        self.assertEqual(results[0], {
            "type": "supplier", "id": self.supplier["id"],
            "name": "Cemtech Supplies", "extraInfo": "orders@cemtech.test",
        })
        self.assertEqual(results[1]["extraInfo"], "8 in stock")
        self.assertEqual(results[2]["extraInfo"], "Taken by Moses")
        self.assertEqual(results[3]["name"], "LPO #CEM-7")
        self.assertEqual(results[3]["extraInfo"], "Active")

    def test_contact_and_taken_by(self):
        results = self.search("MOSES")
        self.assertEqual([(r["type"], r["id"]) for r in results],
                         [("supplier", self.supplier["id"]), ("stock_out", self.issuance["id"])])

    def test_lpo_status(self):
        results = self.search("active")
        self.assertEqual([r["type"] for r in results], ["lpo"])

    def test_skips_deleted_items(self):
        self.client.delete(f"/api/v1/stock/items/{self.item['id']}", headers=self.inventory)
        types = [r["type"] for r in self.search("cement")]
        self.assertNotIn("stock_item", types)

    def test_blank_query(self):
        self.assertEqual(self.search("   "), [])
        res = self.client.get("/api/v1/search", headers=self.inventory)
        self.assertEqual(res.json()["data"], [])

    def test_fleet_forbidden(self):
        res = self.client.get("/api/v1/search", params={"q": "cem"}, headers=self.fleet)
        self.assertEqual(res.status_code, 403)
