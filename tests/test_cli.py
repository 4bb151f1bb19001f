from __future__ import annotations

import pytest
from click.testing import CliRunner

from payment_allocator.cli import main

METHODS = [
    {"id": "TRADITIONAL", "discount": 0, "limit": "100.00"},
    {"id": "PUNKTY", "discount": 15, "limit": "100.00"},
    {"id": "mZysk", "discount": 10, "limit": "100.00"},
]
ORDERS = [{"id": "ORDER1", "value": "100.00", "promotions": ["mZysk"]}]


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    # Keeps the log file out of the repository
    monkeypatch.chdir(tmp_path)


def test_prints_paid_total_per_method(write_json):
    orders = write_json("orders.json", ORDERS)
    methods = write_json("methods.json", METHODS)

    result = CliRunner().invoke(main, [orders, methods])

    assert result.exit_code == 0
    assert "TRADITIONAL paid=0.00" in result.output
    assert "PUNKTY paid=85.00" in result.output
    assert "mZysk paid=0.00" in result.output


def test_details_flag_prints_order_breakdown(write_json):
    orders = write_json("orders.json", ORDERS)
    methods = write_json("methods.json", METHODS)

    result = CliRunner().invoke(main, [orders, methods, "--details"])

    assert result.exit_code == 0
    assert "ORDER1:" in result.output
    assert "  PUNKTY -> 85.00" in result.output
    assert "card total=0.00" in result.output
    assert "All orders have been settled." in result.output


def test_missing_argument_is_a_usage_error(write_json):
    orders = write_json("orders.json", ORDERS)

    result = CliRunner().invoke(main, [orders])

    assert result.exit_code == 2


def test_unreadable_input_exits_with_failure(write_json, tmp_path):
    methods = write_json("methods.json", METHODS)

    result = CliRunner().invoke(main, [str(tmp_path / "nope.json"), methods])

    assert result.exit_code == 1


def test_catalog_without_points_exits_with_failure(write_json):
    orders = write_json("orders.json", ORDERS)
    methods = write_json("methods.json", [{"id": "CARD", "discount": 0, "limit": 10}])

    result = CliRunner().invoke(main, [orders, methods])

    assert result.exit_code == 1
