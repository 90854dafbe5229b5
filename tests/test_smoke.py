"""Smoke tests for the Evaluations Dashboard package."""

from __future__ import annotations

import subprocess
import sys
from datetime import datetime

from evals_dashboard.models import Problem, ProblemStatus


def _make_problem(
    status: ProblemStatus = ProblemStatus.PENDING,
    submitted_at: datetime = datetime(2026, 1, 20),
    reviewed_at: datetime | None = None,
) -> Problem:
    return Problem(
        id=1,
        title="GSE000001",
        description="A paper",
        external_link="https://example.org/paper",
        kit="xenium",
        contributor="alice",
        status=status,
        submitted_at=submitted_at,
        reviewed_at=reviewed_at,
    )


# ── Smoke tests ─────────────────────────────────────────────────────────────


def test_module_entry_point() -> None:
    """``python -m evals_dashboard`` exits 0 and prints version info."""
    result = subprocess.run(
        [sys.executable, "-m", "evals_dashboard"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "evals_dashboard" in result.stdout


def test_imports() -> None:
    """All package modules are importable."""
    from evals_dashboard import __version__
    from evals_dashboard.aggregation import build_contributors  # noqa: F401
    from evals_dashboard.auth import authenticate  # noqa: F401
    from evals_dashboard.client import DataSourceClient  # noqa: F401
    from evals_dashboard.config import CSV_COLUMNS, MIRROR_BASE_URL, PROJECT_ROOT
    from evals_dashboard.orders import ORDERS  # noqa: F401
    from evals_dashboard.polling import PollScheduler  # noqa: F401
    from evals_dashboard.revenue import compute_revenue  # noqa: F401
    from evals_dashboard.sync import SyncClient  # noqa: F401

    assert isinstance(__version__, str)
    assert PROJECT_ROOT.exists()
    assert MIRROR_BASE_URL.startswith("https://")
    assert CSV_COLUMNS[0] == "id"
    assert len(CSV_COLUMNS) == 14


# ── Model tests ─────────────────────────────────────────────────────────────


def test_status_is_reviewed() -> None:
    assert ProblemStatus.ACCEPTED.is_reviewed
    assert ProblemStatus.REJECTED.is_reviewed
    assert not ProblemStatus.PENDING.is_reviewed


def test_attributed_at_prefers_reviewed_at() -> None:
    p = _make_problem(reviewed_at=datetime(2026, 1, 25))
    assert p.attributed_at == datetime(2026, 1, 25)


def test_attributed_at_falls_back_to_submitted_at() -> None:
    p = _make_problem(submitted_at=datetime(2026, 1, 20))
    assert p.attributed_at == datetime(2026, 1, 20)
