"""Shared fixtures and record factories for the payment allocator tests."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from payment_allocator.models import Order, PaymentMethod


@pytest.fixture
def method_factory():
    def _make(method_id: str, discount: int, limit) -> PaymentMethod:
        return PaymentMethod(id=method_id, discount=discount, limit=Decimal(str(limit)))

    return _make


@pytest.fixture
def order_factory():
    def _make(order_id: str, value, promotions=None) -> Order:
        return Order(id=order_id, value=Decimal(str(value)), promotions=promotions)

    return _make


@pytest.fixture
def example_methods(method_factory):
    """TRADITIONAL 0 %, PUNKTY 15 %, mZysk 10 %, all with a limit of 100."""
    return [
        method_factory("TRADITIONAL", 0, "100"),
        method_factory("PUNKTY", 15, "100"),
        method_factory("mZysk", 10, "100"),
    ]


@pytest.fixture
def example_orders(order_factory):
    return [order_factory("ORDER1", "100.00", ["mZysk"])]


@pytest.fixture
def write_json(tmp_path):
    def _write(name: str, payload) -> str:
        path = tmp_path / name
        path.write_text(json.dumps(payload) if not isinstance(payload, str) else payload, encoding="utf-8")
        return str(path)

    return _write
