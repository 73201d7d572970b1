"""Integration tests for CSV import endpoint."""

import pytest
from httpx import AsyncClient

from ledger.config import settings

BASE = "/api/v1/transactions"

VALID_CSV = (
    "title, type, value, category\n"
    "Loan, income, 1500, Others\n"
    "Website Hosting, outcome, 50, Others\n"
    "Ice cream, outcome, 3, Food\n"
)


async def _upload(client: AsyncClient, content: bytes | str, filename: str = "import.csv"):
    if isinstance(content, str):
        content = content.encode("utf-8")
    return await client.post(
        f"{BASE}/import", files={"file": (filename, content, "text/csv")}
    )


class TestImportTransactions:
    """Test the CSV import endpoint."""

    @pytest.mark.asyncio
    async def test_import_valid_file(self, client: AsyncClient):
        response = await _upload(client, VALID_CSV)

        assert response.status_code == 201
        data = response.json()
        assert data["imported_count"] == 3
        assert data["categories_created"] == 2
        assert [t["title"] for t in data["transactions"]] == [
            "Loan",
            "Website Hosting",
            "Ice cream",
        ]
        assert data["transactions"][0]["category"]["title"] == "Others"

        listing = (await client.get(BASE)).json()
        assert listing["balance"] == {"income": 1500, "outcome": 53, "total": 1447}

    @pytest.mark.asyncio
    async def test_import_reuses_existing_categories(self, client: AsyncClient):
        await client.post(
            BASE, json={"title": "Salary", "value": 100, "type": "income", "category": "Food"}
        )

        data = (await _upload(client, VALID_CSV)).json()

        assert data["categories_created"] == 1
        categories = (await client.get("/api/v1/categories")).json()
        assert [c["title"] for c in categories["categories"]] == ["Food", "Others"]

    @pytest.mark.asyncio
    async def test_non_positive_value_rejects_batch(self, client: AsyncClient):
        content = (
            "title,type,value,category\n"
            "Salary,income,1000,Work\n"
            "Broken,outcome,0,Food\n"
        )

        response = await _upload(client, content)

        assert response.status_code == 400
        assert response.json()["error_code"] == "IMP_001"

        listing = (await client.get(BASE)).json()
        assert listing["transactions"] == []
        categories = (await client.get("/api/v1/categories")).json()
        assert categories["total"] == 0

    @pytest.mark.asyncio
    async def test_net_outcome_exceeding_balance(self, client: AsyncClient):
        content = (
            "title,type,value,category\n"
            "Gift,income,10,Others\n"
            "Trip,outcome,500,Travel\n"
        )

        response = await _upload(client, content)

        assert response.status_code == 400
        assert response.json()["error_code"] == "IMP_002"
        assert (await client.get(BASE)).json()["transactions"] == []

    @pytest.mark.asyncio
    async def test_net_outcome_within_balance(self, client: AsyncClient):
        await client.post(
            BASE, json={"title": "Salary", "value": 1000, "type": "income", "category": "Work"}
        )
        content = "title,type,value,category\nTrip,outcome,600,Travel\n"

        response = await _upload(client, content)

        assert response.status_code == 201
        assert (await client.get(f"{BASE}/balance")).json()["total"] == 400

    @pytest.mark.asyncio
    async def test_header_only_file(self, client: AsyncClient):
        response = await _upload(client, "title,type,value,category\n")

        assert response.status_code == 201
        assert response.json()["imported_count"] == 0

    @pytest.mark.asyncio
    async def test_malformed_row(self, client: AsyncClient):
        response = await _upload(client, "title,type,value,category\nSalary,income\n")

        assert response.status_code == 400
        assert response.json()["error_code"] == "IMP_003"

    @pytest.mark.asyncio
    async def test_value_finer_than_cents_rejects_batch(self, client: AsyncClient):
        content = (
            "title,type,value,category\n"
            "Salary,income,1000,Work\n"
            "Rounding,income,10.005,Work\n"
        )

        response = await _upload(client, content)

        assert response.status_code == 400
        assert response.json()["error_code"] == "IMP_003"
        assert (await client.get(BASE)).json()["transactions"] == []

    @pytest.mark.asyncio
    async def test_overlong_title_rejects_batch(self, client: AsyncClient):
        content = "title,type,value,category\n" + "T" * 300 + ",income,10,Work\n"

        response = await _upload(client, content)

        assert response.status_code == 400
        assert response.json()["error_code"] == "IMP_003"

    @pytest.mark.asyncio
    async def test_non_csv_file(self, client: AsyncClient):
        response = await _upload(client, VALID_CSV, filename="import.txt")

        assert response.status_code == 400
        assert response.json()["error_code"] == "IMP_004"

    @pytest.mark.asyncio
    async def test_file_too_large(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "csv_max_size_mb", 0)

        response = await _upload(client, VALID_CSV)

        assert response.status_code == 413
        assert response.json()["error_code"] == "IMP_005"

    @pytest.mark.asyncio
    async def test_missing_file_field(self, client: AsyncClient):
        response = await client.post(f"{BASE}/import")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"
