"""Contributor rollups and summary statistics.

Both are recomputed from scratch for every dataset; nothing here keeps
state between calls.

Key invariants:
    - One rollup per distinct non-empty contributor name, in order of first
      appearance in the source.
    - ``accepted_count`` only counts ``accepted`` records.
    - ``last_submitted_at`` is the latest ``submitted_at`` of any status.
    - ``acceptance_rate`` is 0 when nothing has been reviewed yet.
"""

from __future__ import annotations

import logging
from datetime import datetime

from evals_dashboard.config import TOP_CONTRIBUTORS
from evals_dashboard.models import ContributorRollup, Problem, ProblemStatus, Stats

logger = logging.getLogger(__name__)

SORT_FIELDS: tuple[str, ...] = ("name", "accepted_count", "last_submitted_at")

# Shown in the reviewed column while nothing has been reviewed yet.
EXAMPLE_PROBLEMS: list[Problem] = [
    Problem(
        id=0,
        title="Accepted Example",
        description="This is an example of an accepted problem submission",
        external_link="#",
        kit="xenium",
        contributor="Example Engineer",
        status=ProblemStatus.ACCEPTED,
        submitted_at=datetime.min,
    ),
    Problem(
        id=0,
        title="Rejected Example",
        description="This is an example of a rejected problem submission",
        external_link="#",
        kit="visium",
        contributor="Example Engineer",
        status=ProblemStatus.REJECTED,
        submitted_at=datetime.min,
    ),
]


# ── Rollups ─────────────────────────────────────────────────────────────────

def build_contributors(problems: list[Problem]) -> list[ContributorRollup]:
    """One ``ContributorRollup`` per distinct non-empty contributor."""
    by_name: dict[str, ContributorRollup] = {}

    for problem in problems:
        name = problem.contributor
        if not name:
            continue
        rollup = by_name.get(name)
        if rollup is None:
            rollup = by_name[name] = ContributorRollup(name=name)

        if problem.status is ProblemStatus.ACCEPTED:
            rollup.accepted_count += 1
        if problem.submitted_at > rollup.last_submitted_at:
            rollup.last_submitted_at = problem.submitted_at

    logger.debug("Built %d contributor rollups from %d problems", len(by_name), len(problems))
    return list(by_name.values())


def _rounded_percent(part: int, whole: int) -> int:
    """``round(100 * part / whole)`` with halves rounded up."""
    return (200 * part + whole) // (2 * whole)


def compute_stats(
    problems: list[Problem],
    contributors: list[ContributorRollup],
) -> Stats:
    pending = accepted = rejected = 0
    for problem in problems:
        if problem.status is ProblemStatus.ACCEPTED:
            accepted += 1
        elif problem.status is ProblemStatus.REJECTED:
            rejected += 1
        else:
            pending += 1

    reviewed = accepted + rejected
    rate = _rounded_percent(accepted, reviewed) if reviewed > 0 else 0

    return Stats(
        pending_count=pending,
        accepted_count=accepted,
        rejected_count=rejected,
        reviewed_count=reviewed,
        acceptance_rate=rate,
        total_contributors=len(contributors),
    )


# ── Display helpers ─────────────────────────────────────────────────────────

def split_by_review_state(
    problems: list[Problem],
) -> tuple[list[Problem], list[Problem]]:
    """Return ``(under_review, reviewed)`` preserving source order."""
    under_review = [p for p in problems if not p.status.is_reviewed]
    reviewed = [p for p in problems if p.status.is_reviewed]
    return under_review, reviewed


def sort_contributors(
    contributors: list[ContributorRollup],
    field: str = "accepted_count",
    descending: bool = True,
) -> list[ContributorRollup]:
    """Stable sort by one leaderboard column; ties keep source order."""
    if field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field {field!r}; expected one of {SORT_FIELDS}")
    return sorted(
        contributors,
        key=lambda c: getattr(c, field),
        reverse=descending,
    )


def top_contributor_names(
    contributors: list[ContributorRollup],
    n: int = TOP_CONTRIBUTORS,
) -> list[str]:
    """Names of the ``n`` contributors with the most accepted problems."""
    ranked = sort_contributors(contributors, "accepted_count", descending=True)
    return [c.name for c in ranked[:n]]
