"""End-to-end tests for the analytics API over the ASGI transport."""

import re

import pytest
from httpx import ASGITransport, AsyncClient

from app.application.services import Dispatcher
from app.config import Settings
from app.infrastructure.dependencies import get_dispatcher
from app.main import create_app


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
def app():
    return create_app()


@pytest.mark.asyncio
async def test_new_revenue_month_is_reflected_in_metrics(app):
    async with _client(app) as client:
        created = await client.post("/api/revenue", json={"month": "Aug", "revenue": 55000, "prev": 50000})
        revenue = await client.get("/api/revenue")
        metrics = await client.get("/api/metrics")

    assert created.status_code == 201
    assert created.json()["ok"] is True
    assert created.json()["data"]["month"] == "Aug"
    assert [r["month"] for r in revenue.json()["data"]][-1] == "Aug"
    # 287300 seeded + 55000
    assert metrics.json()["data"]["revenue"]["value"] == 342.3
    assert metrics.json()["data"]["revenue"]["change"] == 14.1


@pytest.mark.asyncio
async def test_completed_transaction_increments_orders_by_one(app):
    async with _client(app) as client:
        before = (await client.get("/api/metrics")).json()["data"]["orders"]["value"]
        created = await client.post(
            "/api/transactions",
            json={"customer": "X", "product": "Y", "amount": 100, "status": "Completed"},
        )
        after = (await client.get("/api/metrics")).json()["data"]["orders"]["value"]

    assert created.status_code == 201
    assert re.fullmatch(r"#TXN-\d+", created.json()["data"]["id"])
    assert after == before + 1


@pytest.mark.asyncio
async def test_unknown_metric_is_404_and_metrics_unchanged(app):
    async with _client(app) as client:
        before = (await client.get("/api/metrics")).json()
        response = await client.put("/api/metrics/unknownkey", json={"value": 1})
        after = (await client.get("/api/metrics")).json()

    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": 'Unknown metric "unknownkey"'}
    assert before == after


@pytest.mark.asyncio
async def test_duplicate_month_is_rejected(app):
    async with _client(app) as client:
        response = await client.post("/api/revenue", json={"month": "Jan", "revenue": 1})
        listing = await client.get("/api/revenue")

    assert response.status_code == 400
    assert response.json()["error"] == 'Month "Jan" already exists'
    assert len(listing.json()["data"]) == 7


@pytest.mark.asyncio
async def test_transactions_listing_with_query_filters(app):
    async with _client(app) as client:
        response = await client.get(
            "/api/transactions", params={"status": "Completed", "search": "wireless", "limit": "1"}
        )

    data = response.json()["data"]
    assert response.status_code == 200
    assert len(data) == 1
    assert data[0]["id"] == "#TXN-8821"
    assert data[0]["date"] == "2026-02-21"
    assert data[0]["status"] == "Completed"


@pytest.mark.asyncio
async def test_products_listed_by_sales(app):
    async with _client(app) as client:
        await client.post("/api/products", json={"name": "MegaDock", "sales": 9000})
        response = await client.get("/api/products/")

    names = [p["name"] for p in response.json()["data"]]
    assert names[0] == "MegaDock"
    assert names[1] == "Wireless Pro"


@pytest.mark.asyncio
async def test_encoded_transaction_id_in_path(app):
    async with _client(app) as client:
        updated = await client.put("/api/transactions/%23TXN-8821", json={"amount": "300"})
        deleted = await client.delete("/api/transactions/%23TXN-8821")
        again = await client.delete("/api/transactions/%23TXN-8821")

    assert updated.json()["data"]["amount"] == 300
    assert deleted.status_code == 200
    assert again.status_code == 404
    assert again.json()["error"] == "Transaction not found"


@pytest.mark.asyncio
async def test_malformed_json_body_is_rejected(app):
    async with _client(app) as client:
        response = await client.post(
            "/api/products", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        listing = await client.get("/api/products")

    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Invalid JSON body"}
    assert len(listing.json()["data"]) == 5


@pytest.mark.asyncio
async def test_non_object_json_body_is_rejected(app):
    async with _client(app) as client:
        response = await client.post("/api/revenue", json=["Aug", 1])

    assert response.status_code == 400
    assert response.json()["error"] == "Request body must be a JSON object"


@pytest.mark.asyncio
async def test_empty_body_is_treated_as_empty_object(app):
    async with _client(app) as client:
        response = await client.post("/api/revenue")

    assert response.status_code == 400
    assert response.json()["error"] == "month and revenue required"


@pytest.mark.asyncio
async def test_unmatched_route_reports_method_and_path(app):
    async with _client(app) as client:
        response = await client.patch("/api/widgets/", json={})

    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "PATCH /api/widgets not found"}


@pytest.mark.asyncio
async def test_handler_crash_becomes_generic_500(app):
    class ExplodingDispatcher(Dispatcher):
        def dispatch(self, request):
            raise RuntimeError("store exploded: secret internals")

    app.dependency_overrides[get_dispatcher] = lambda: ExplodingDispatcher(app.state.record_store)

    async with _client(app) as client:
        response = await client.get("/api/metrics")

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Internal server error"}


@pytest.mark.asyncio
async def test_cors_preflight_is_answered(app):
    async with _client(app) as client:
        response = await client.options(
            "/api/revenue",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_unseeded_app_starts_empty():
    app = create_app(Settings(seed_sample_data=False, transaction_seq_start=1))

    async with _client(app) as client:
        revenue = await client.get("/api/revenue")
        txn = await client.post("/api/transactions", json={"customer": "A", "product": "B", "amount": 1})

    assert revenue.json() == {"ok": True, "data": []}
    assert txn.json()["data"]["id"] == "#TXN-1"
