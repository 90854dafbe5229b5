"""Centralised configuration and constants."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path

# ── Paths ───────────────────────────────────────────────────────────────────
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
DATA_DIR: Path = PROJECT_ROOT / "data"
RAW_DIR: Path = DATA_DIR / "raw"
PROCESSED_DIR: Path = DATA_DIR / "processed"

# ── Data sources ────────────────────────────────────────────────────────────
GITHUB_TOKEN: str | None = os.getenv("GITHUB_TOKEN")
GITHUB_API_BASE: str = "https://api.github.com"
GITHUB_API_VERSION: str = "2022-11-28"
SUBMISSIONS_REPO: str = os.getenv("SUBMISSIONS_REPO", "latchbio/latch-internal-evals")
GITHUB_CSV_URL: str = (
    f"{GITHUB_API_BASE}/repos/{SUBMISSIONS_REPO}/contents/submissions.csv"
)
MIRROR_BASE_URL: str = os.getenv(
    "MIRROR_BASE_URL", "https://pub-cc67e139b4bc48d08ecda05c9046c36f.r2.dev"
)
MIRROR_CSV_PATH: str = "/submissions.csv"
SYNC_STATUS_PATH: str = "/sync-status.json"
REQUEST_TIMEOUT: int = 30  # seconds

# ── Manual sync workflow ────────────────────────────────────────────────────
DASHBOARD_REPO: str = os.getenv("DASHBOARD_REPO", "alfredoandere/evaluations_dashboard")
SYNC_WORKFLOW_FILE: str = "sync-submissions.yml"
SYNC_WORKFLOW_REF: str = "main"
SYNC_WORKFLOW_DISPATCH_URL: str = (
    f"{GITHUB_API_BASE}/repos/{DASHBOARD_REPO}"
    f"/actions/workflows/{SYNC_WORKFLOW_FILE}/dispatches"
)
SYNC_WORKFLOW_PAGE_URL: str = (
    f"https://github.com/{DASHBOARD_REPO}/actions/workflows/{SYNC_WORKFLOW_FILE}"
)

# ── CSV format ──────────────────────────────────────────────────────────────
CSV_COLUMNS: list[str] = [
    "id",
    "title",
    "paper_url",
    "data_url",
    "data_accession",
    "kit",
    "engineer",
    "reviewer",
    "status",
    "count",
    "notes",
    "created_at",
    "submitted_at",
    "done_at",
]
ACCEPTED_STATUS_ALIASES: frozenset[str] = frozenset(
    {"accepted", "complete", "completed", "done"}
)
REJECTED_STATUS_ALIASES: frozenset[str] = frozenset({"rejected", "failed"})

# ── Polling (seconds) ───────────────────────────────────────────────────────
POLL_INTERVAL_NORMAL: float = float(os.getenv("POLL_INTERVAL_NORMAL", "10"))
POLL_INTERVAL_FAST: float = float(os.getenv("POLL_INTERVAL_FAST", "3"))
FAST_POLL_DURATION: float = float(os.getenv("FAST_POLL_DURATION", "90"))
DATA_POLL_INTERVAL: float = float(os.getenv("DATA_POLL_INTERVAL", "30"))

# ── Revenue ─────────────────────────────────────────────────────────────────
WEEK_ONE_START: date = date.fromisoformat(os.getenv("WEEK_ONE_START", "2026-01-12"))
PRICE_PER_PROBLEM: int = int(os.getenv("PRICE_PER_PROBLEM", "1500"))
WEEKS_PER_YEAR: int = 52

# ── Dashboard ───────────────────────────────────────────────────────────────
TOTAL_ORDERS: int = 20  # from the sales team, updated by hand
TOP_CONTRIBUTORS: int = 3
DASHBOARD_PASSWORD: str = os.getenv("DASHBOARD_PASSWORD", "evaluations")
SESSION_FLAG_KEY: str = "eval_dashboard_auth"
SESSION_FLAG_VALUE: str = "authenticated"
