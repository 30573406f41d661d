"""
Tests for the read-only transaction service: filters, stats revenue and
revenue by payment provider.
"""

from __future__ import annotations

from unittest.mock import MagicMock

from marketplace_admin.domains.models import TransactionQueryParams
from marketplace_admin.services import transaction_service

from conftest import sent


def test_get_transactions_reads_payments_with_date_range(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [{"id": "p1"}], content_range="0-0/1")
    params = TransactionQueryParams(
        status="completed",
        payment_provider="stripe",
        date_from="2024-01-01T00:00:00",
        date_to="2024-01-31T23:59:59.999",
    )

    result = transaction_service.get_transactions(client, params)

    req = sent(http)
    assert req["url"].endswith("/rest/v1/payments")
    assert ("status", "eq.completed") in req["params"]
    assert ("payment_provider", "eq.stripe") in req["params"]
    assert ("created_at", "gte.2024-01-01T00:00:00") in req["params"]
    assert ("created_at", "lte.2024-01-31T23:59:59.999") in req["params"]
    assert result.total == 1


def test_sum_amounts_tolerates_missing_and_string_amounts() -> None:
    rows = [{"amount": 10.5}, {"amount": "4.5"}, {"amount": None}, {}]
    assert transaction_service.sum_amounts(rows) == 15.0


def test_get_transaction_stats_sums_completed_revenue(client, http: MagicMock, make_response) -> None:
    http.request.side_effect = [
        make_response(200, None, content_range="*/8"),
        make_response(200, None, content_range="*/2"),
        make_response(200, None, content_range="*/4"),
        make_response(200, None, content_range="*/1"),
        make_response(200, None, content_range="*/1"),
        make_response(200, [{"amount": 100}, {"amount": 25.25}, {"amount": 0}, {"amount": 74.75}]),
    ]

    stats = transaction_service.get_transaction_stats(client)

    assert stats.total == 8
    assert (stats.pending, stats.completed, stats.failed, stats.refunded) == (2, 4, 1, 1)
    assert stats.total_revenue == 200.0
    revenue_req = sent(http)
    assert revenue_req["method"] == "GET"
    assert ("status", "eq.completed") in revenue_req["params"]
    assert ("select", "amount") in revenue_req["params"]


def test_aggregate_by_provider_keeps_first_seen_order() -> None:
    rows = [
        {"payment_provider": "paypal", "amount": 10},
        {"payment_provider": "stripe", "amount": 5},
        {"payment_provider": "paypal", "amount": 2.5},
        {"payment_provider": None, "amount": 1},
    ]

    assert transaction_service.aggregate_by_provider(rows) == [
        {"provider": "paypal", "revenue": 12.5, "count": 2},
        {"provider": "stripe", "revenue": 5.0, "count": 1},
        {"provider": "unknown", "revenue": 1.0, "count": 1},
    ]


def test_get_revenue_by_provider(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(
        200,
        [{"payment_provider": "mpesa", "amount": 300}, {"payment_provider": "mpesa", "amount": 200}],
    )

    result = transaction_service.get_revenue_by_provider(client)

    assert result == [{"provider": "mpesa", "revenue": 500.0, "count": 2}]
    assert ("select", "payment_provider,amount") in sent(http)["params"]


def test_date_range_report_uses_large_page(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [], content_range="*/0")

    transaction_service.get_transactions_by_date_range(client, "2024-01-01", "2024-02-01")

    params = sent(http)["params"]
    assert ("limit", "1000") in params
    assert ("offset", "0") in params
