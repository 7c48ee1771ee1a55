"""Integration tests for pricing and ledger endpoints."""

from fastapi.testclient import TestClient


class TestPricingEndpoints:

    def test_config(self, api_client: TestClient):
        data = api_client.get("/api/v1/config").json()

        assert data == {"tare_grams": 136, "rate_per_gram": 230, "currency": "TSh"}

    def test_resolve_valid(self, api_client: TestClient):
        data = api_client.post("/api/v1/weights/resolve", json={"expression": "1kg136"}).json()

        assert data["valid"] is True
        assert data["resolved_weight"] == 1136

    def test_resolve_invalid(self, api_client: TestClient):
        data = api_client.post("/api/v1/weights/resolve", json={"expression": "1;DROP"}).json()

        assert data["valid"] is False
        assert data["resolved_weight"] is None

    def test_quote(self, api_client: TestClient):
        data = api_client.post("/api/v1/weights/quote", json={"gross_weight": 1236}).json()

        assert data["net_weight"] == 1100
        assert data["price"] == 253000


class TestLedgerEndpoints:

    def test_add_from_expression(self, api_client: TestClient):
        response = api_client.post(
            "/api/v1/ledger/entries",
            json={"expression": "1kg236", "label": "Blue de Chanel"},
        )

        assert response.status_code == 201
        entry = response.json()
        assert entry["gross_weight"] == 1236
        assert entry["price"] == 253000
        assert entry["label"] == "Blue de Chanel"

    def test_add_from_weight_defaults_label(self, api_client: TestClient):
        entry = api_client.post("/api/v1/ledger/entries", json={"gross_weight": 636}).json()

        assert entry["label"] == "Item 1"
        assert entry["net_weight"] == 500

    def test_invalid_weight_is_rejected(self, api_client: TestClient, ledger):
        for body in ({"expression": "abc"}, {"gross_weight": 0}, {"expression": "100-200"}):
            response = api_client.post("/api/v1/ledger/entries", json=body)

            assert response.status_code == 400
            assert response.json()["error"]["code"] == "INVALID_WEIGHT"

        assert ledger.count() == 0

    def test_missing_weight_is_validation_error(self, api_client: TestClient):
        response = api_client.post("/api/v1/ledger/entries", json={"label": "X"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_ledger_summary_newest_first(self, api_client: TestClient):
        api_client.post("/api/v1/ledger/entries", json={"gross_weight": 636, "label": "A"})
        api_client.post("/api/v1/ledger/entries", json={"gross_weight": 1236, "label": "B"})

        data = api_client.get("/api/v1/ledger").json()

        assert data["count"] == 2
        assert [e["label"] for e in data["entries"]] == ["B", "A"]
        assert data["total_value"] == 368000
        assert data["currency"] == "TSh"

    def test_get_entry(self, api_client: TestClient):
        entry = api_client.post("/api/v1/ledger/entries", json={"gross_weight": 636}).json()

        assert api_client.get(f"/api/v1/ledger/entries/{entry['id']}").json() == entry

        missing = api_client.get("/api/v1/ledger/entries/le_missing")
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "NOT_FOUND"

    def test_clear(self, api_client: TestClient):
        api_client.post("/api/v1/ledger/entries", json={"gross_weight": 636})

        data = api_client.delete("/api/v1/ledger").json()

        assert data["count"] == 0
        assert data["total_value"] == 0
