from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from payment_allocator.main import app

METHODS = [
    {"id": "TRADITIONAL", "discount": 0, "limit": 100},
    {"id": "PUNKTY", "discount": 15, "limit": 100},
    {"id": "mZysk", "discount": 10, "limit": 100},
]


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_allocation_returns_summary_and_order_payments(client):
    payload = {
        "orders": [{"id": "ORDER1", "value": 100.00, "promotions": ["mZysk"]}],
        "paymentMethods": METHODS,
    }

    response = client.post("/v1/allocations", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["summary"] == [
        {"methodId": "TRADITIONAL", "paid": "0.00", "remaining": "100.00"},
        {"methodId": "PUNKTY", "paid": "85.00", "remaining": "15.00"},
        {"methodId": "mZysk", "paid": "0.00", "remaining": "100.00"},
    ]
    assert body["orders"] == [
        {"orderId": "ORDER1", "payments": [{"methodId": "PUNKTY", "amount": "85.00"}]},
    ]


def test_catalog_without_points_is_rejected(client):
    payload = {
        "orders": [{"id": "ORDER1", "value": 10}],
        "paymentMethods": [{"id": "CARD", "discount": 0, "limit": 100}],
    }

    response = client.post("/v1/allocations", json=payload)

    assert response.status_code == 422
    assert "PUNKTY" in response.json()["detail"]


def test_empty_catalog_is_rejected(client):
    response = client.post("/v1/allocations", json={"orders": [], "paymentMethods": []})

    assert response.status_code == 422


def test_invalid_discount_is_rejected(client):
    payload = {
        "orders": [],
        "paymentMethods": [{"id": "PUNKTY", "discount": 101, "limit": 100}],
    }

    response = client.post("/v1/allocations", json=payload)

    assert response.status_code == 422
