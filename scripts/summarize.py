"""CLI: Compute review stats and the contributor leaderboard from raw CSV data."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from evals_dashboard.aggregation import sort_contributors
from evals_dashboard.config import PROCESSED_DIR, RAW_DIR
from evals_dashboard.fallback import FALLBACK_CSV
from evals_dashboard.parsing import format_date
from evals_dashboard.revenue import compute_revenue
from evals_dashboard.sync import build_snapshot

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s"
)
logger = logging.getLogger(__name__)


def _latest_raw_file() -> Path | None:
    """Return the most recent raw CSV download."""
    files = sorted(RAW_DIR.glob("submissions_*.csv"))
    return files[-1] if files else None


def main() -> None:
    """Load the latest CSV, summarise it, and save to processed/."""
    raw_file = _latest_raw_file()
    if raw_file is None:
        logger.info("No raw data found, using the bundled dataset. Run: python scripts/fetch.py")
        csv_text = FALLBACK_CSV
    else:
        logger.info("Loading raw data from %s", raw_file)
        csv_text = raw_file.read_text()

    snapshot = build_snapshot(csv_text)
    stats = snapshot.stats
    logger.info("Parsed %d problems", len(snapshot.problems))

    leaderboard = sort_contributors(snapshot.contributors, "accepted_count")
    revenue = compute_revenue(snapshot.problems, date.today())

    PROCESSED_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    out_path = PROCESSED_DIR / f"summary_{timestamp}.json"

    serialized = {
        "_metadata": {
            "raw_file": str(raw_file) if raw_file else None,
            "computed_at": datetime.now(timezone.utc).isoformat(),
            "problem_count": len(snapshot.problems),
            "contributor_count": stats.total_contributors,
        },
        "stats": {
            "pending_count": stats.pending_count,
            "accepted_count": stats.accepted_count,
            "rejected_count": stats.rejected_count,
            "reviewed_count": stats.reviewed_count,
            "acceptance_rate": stats.acceptance_rate,
        },
        "revenue": {
            "current_week": revenue.current_week,
            "window_label": revenue.window.label,
            "window_start": revenue.window.start.isoformat(),
            "window_end": revenue.window.end.isoformat(),
            "problem_count": revenue.problem_count,
            "weekly_revenue": revenue.weekly_revenue,
            "annual_run_rate": revenue.annual_run_rate,
        },
        "leaderboard": [
            {
                "name": c.name,
                "accepted_count": c.accepted_count,
                "last_submitted_at": format_date(c.last_submitted_at),
            }
            for c in leaderboard
        ],
    }

    out_path.write_text(json.dumps(serialized, indent=2))
    logger.info("Saved summary → %s", out_path)

    print(
        f"\n{stats.pending_count} under review · {stats.reviewed_count} reviewed · "
        f"{stats.acceptance_rate}% accepted\n"
    )
    for i, c in enumerate(leaderboard, 1):
        print(
            f"  {i:2d}. {c.name:<25s}  Accepted={c.accepted_count:3d}  "
            f"Last={format_date(c.last_submitted_at)}"
        )
    print(
        f"\nRevenue {revenue.window.label} (week {revenue.window.week}): "
        f"${revenue.weekly_revenue:,} · run-rate ${revenue.annual_run_rate:,}/yr"
    )


if __name__ == "__main__":
    main()
