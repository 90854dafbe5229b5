"""Tests for the order summary and the session-flag password gate."""

from __future__ import annotations

from datetime import date

from evals_dashboard.auth import authenticate, check_password, is_authenticated, logout
from evals_dashboard.config import SESSION_FLAG_KEY
from evals_dashboard.models import Order
from evals_dashboard.orders import ORDERS, delivered_orders, summarize_orders


def _make_order(number: int, size: int, completed: bool) -> Order:
    return Order(
        id=number,
        client=f"Client {number}",
        display_code=f"C{number}",
        order_name=f"C{number}-01",
        problem_count=size,
        due_date=date(2026, 3, number),
        delivered_date=date(2026, 3, number) if completed else None,
        completed=completed,
    )


# ── Orders ──────────────────────────────────────────────────────────────────


def test_summarize_configured_orders() -> None:
    summary = summarize_orders(ORDERS)
    assert summary.order_count == 2
    assert summary.problem_count == 20
    assert summary.delivered_order_count == 1
    assert summary.delivered_problem_count == 10


def test_delivered_orders_filter() -> None:
    orders = [_make_order(1, 5, True), _make_order(2, 7, False), _make_order(3, 4, True)]
    assert [o.id for o in delivered_orders(orders)] == [1, 3]
    summary = summarize_orders(orders)
    assert summary.problem_count == 16
    assert summary.delivered_problem_count == 9


def test_summarize_no_orders() -> None:
    summary = summarize_orders([])
    assert summary.order_count == 0
    assert summary.delivered_problem_count == 0


# ── Session gate ────────────────────────────────────────────────────────────


def test_check_password() -> None:
    assert check_password("open sesame", expected="open sesame")
    assert not check_password("open", expected="open sesame")


def test_wrong_password_leaves_flag_unset() -> None:
    session: dict = {}
    assert authenticate(session, "nope", expected="right") is False
    assert not is_authenticated(session)
    assert SESSION_FLAG_KEY not in session


def test_authenticate_and_logout() -> None:
    session: dict = {}
    assert authenticate(session, "right", expected="right") is True
    assert is_authenticated(session)

    logout(session)
    assert not is_authenticated(session)
    logout(session)  # already logged out
