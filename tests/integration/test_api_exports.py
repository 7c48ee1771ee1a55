"""Integration tests for export, capture and assistant endpoints."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def filled(api_client: TestClient):
    api_client.post("/api/v1/ledger/entries", json={"gross_weight": 636, "label": "X"})
    return api_client


class TestExportEndpoints:

    def test_csv(self, filled: TestClient):
        response = filled.get("/api/v1/exports/csv")

        assert response.status_code == 200
        assert response.text == (
            "Fragrance Name,Gross Weight (g),Net (ml),Total Price (TSh)\n"
            "X,636,500.00,115000"
        )

    def test_batch_text(self, filled: TestClient):
        text = filled.get("/api/v1/exports/text").text

        assert text == "1. X - 115,000 TSh\n\nTotal Batch Value: 115,000 TSh"

    def test_entry_text(self, filled: TestClient):
        entry_id = filled.get("/api/v1/ledger").json()["entries"][0]["id"]

        text = filled.get(f"/api/v1/exports/entries/{entry_id}/text").text

        assert text == "X | Gross: 636g | Total: 115,000 TSh"

    def test_clipboard(self, filled: TestClient):
        data = filled.get("/api/v1/exports/clipboard").json()

        assert data["count"] == 1
        assert data["csv_text"].endswith("X,636,500.00,115000")

    def test_xlsx_download(self, filled: TestClient):
        response = filled.get("/api/v1/exports/xlsx")

        assert response.status_code == 200
        assert "ScentValue_BatchExport_" in response.headers["content-disposition"]
        assert response.content[:2] == b"PK"

    def test_pdf_download(self, filled: TestClient):
        response = filled.get("/api/v1/exports/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "ScentValue_BatchReport_" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    @pytest.mark.parametrize("kind", ["xlsx", "pdf"])
    def test_empty_ledger_export(self, api_client: TestClient, kind):
        response = api_client.get(f"/api/v1/exports/{kind}")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMPTY_LEDGER"

    def test_unknown_format(self, filled: TestClient):
        assert filled.get("/api/v1/exports/docx").status_code == 400


class TestCaptureEndpoints:

    def test_upload_batch_scan_adds_entries(self, api_client: TestClient, ledger):
        response = api_client.post(
            "/api/v1/capture/scan",
            files={"image": ("sheet.jpg", b"\xff\xd8fake", "image/jpeg")},
            data={"mode": "batch"},
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["added"]) == 2
        assert ledger.count() == 2

    def test_upload_single_scan_returns_weight(self, api_client: TestClient, ledger):
        response = api_client.post(
            "/api/v1/capture/scan",
            files={"image": ("scale.jpg", b"\xff\xd8fake", "image/jpeg")},
            data={"mode": "single"},
        )

        assert response.json()["weight"] == 1236
        assert ledger.count() == 0

    def test_non_image_upload_is_rejected(self, api_client: TestClient):
        response = api_client.post(
            "/api/v1/capture/scan",
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 415
        assert response.json()["error"]["code"] == "UNSUPPORTED_MEDIA"

    def test_base64_scan(self, api_client: TestClient):
        response = api_client.post(
            "/api/v1/capture/scan-base64",
            json={"image_base64": "data:image/jpeg;base64,aGVsbG8=", "mode": "single"},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Detected Weight: 1236g"

    def test_base64_scan_rejects_garbage(self, api_client: TestClient):
        response = api_client.post(
            "/api/v1/capture/scan-base64",
            json={"image_base64": "not base64!!", "mode": "single"},
        )

        assert response.status_code == 400


class TestAssistantEndpoints:

    def test_ask(self, api_client: TestClient, stub_assistant):
        response = api_client.post("/api/v1/assistant/ask", json={"query": "What is the tare?"})

        assert response.status_code == 200
        assert response.json()["answer"] == "Net weight is gross minus 136g."
        assert stub_assistant.calls == ["ask"]

    def test_empty_query_is_rejected(self, api_client: TestClient):
        assert api_client.post("/api/v1/assistant/ask", json={"query": ""}).status_code == 400
