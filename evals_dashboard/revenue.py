"""Weekly revenue attribution.

Week 1 starts on ``WEEK_ONE_START``. Reviewed problems are attributed to the
most recent full week ("last week"); during week 1 there is no full week yet,
so week 1 itself is used and labelled "this week".

    weekly_revenue  = attributed problems * PRICE_PER_PROBLEM
    annual_run_rate = weekly_revenue * 52
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from evals_dashboard.config import PRICE_PER_PROBLEM, WEEK_ONE_START, WEEKS_PER_YEAR
from evals_dashboard.models import Problem

THIS_WEEK = "this week"
LAST_WEEK = "last week"


@dataclass
class AttributionWindow:
    week: int
    start: date
    end: date  # inclusive
    label: str

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass
class RevenueSummary:
    current_week: int
    window: AttributionWindow
    problem_count: int
    weekly_revenue: int
    annual_run_rate: int


def current_week(today: date, anchor: date = WEEK_ONE_START) -> int:
    """1-based week number since ``anchor``; never below 1."""
    return max(1, (today - anchor).days // 7 + 1)


def week_bounds(week: int, anchor: date = WEEK_ONE_START) -> tuple[date, date]:
    start = anchor + timedelta(days=7 * (week - 1))
    return start, start + timedelta(days=6)


def attribution_window(today: date, anchor: date = WEEK_ONE_START) -> AttributionWindow:
    week = current_week(today, anchor)
    if week == 1:
        start, end = week_bounds(1, anchor)
        return AttributionWindow(week=1, start=start, end=end, label=THIS_WEEK)
    start, end = week_bounds(week - 1, anchor)
    return AttributionWindow(week=week - 1, start=start, end=end, label=LAST_WEEK)


def compute_revenue(
    problems: list[Problem],
    today: date,
    anchor: date = WEEK_ONE_START,
    price_per_problem: int = PRICE_PER_PROBLEM,
) -> RevenueSummary:
    window = attribution_window(today, anchor)
    count = sum(
        1 for p in problems
        if p.status.is_reviewed and window.contains(p.attributed_at.date())
    )
    weekly = count * price_per_problem
    return RevenueSummary(
        current_week=current_week(today, anchor),
        window=window,
        problem_count=count,
        weekly_revenue=weekly,
        annual_run_rate=weekly * WEEKS_PER_YEAR,
    )
