"""Client orders, maintained by hand.

Update ``ORDERS`` when an order is placed or delivered.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from evals_dashboard.models import Order

ORDERS: list[Order] = [
    Order(
        id=1,
        client="OpenAI",
        display_code="OAI",
        order_name="OAI-01",
        problem_count=10,
        due_date=date(2026, 2, 12),
        delivered_date=date(2026, 2, 11),
        completed=True,
    ),
    Order(
        id=2,
        client="Anthropic",
        display_code="A",
        order_name="A-01",
        problem_count=10,
        due_date=date(2026, 2, 19),
        delivered_date=None,
        completed=False,
    ),
]


@dataclass
class OrderSummary:
    order_count: int
    problem_count: int
    delivered_order_count: int
    delivered_problem_count: int


def delivered_orders(orders: list[Order]) -> list[Order]:
    return [o for o in orders if o.completed]


def summarize_orders(orders: list[Order]) -> OrderSummary:
    delivered = delivered_orders(orders)
    return OrderSummary(
        order_count=len(orders),
        problem_count=sum(o.problem_count for o in orders),
        delivered_order_count=len(delivered),
        delivered_problem_count=sum(o.problem_count for o in delivered),
    )
