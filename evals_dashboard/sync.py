"""Dataset store and sync client.

The store keeps the last successfully loaded raw CSV text together with the
snapshot derived from it. ``SyncClient.sync`` only rebuilds the snapshot when
the fetched text differs from the retained text, so an unchanged remote never
causes a UI refresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from evals_dashboard.aggregation import build_contributors, compute_stats
from evals_dashboard.client import FetchError
from evals_dashboard.config import CSV_COLUMNS
from evals_dashboard.fallback import FALLBACK_CSV
from evals_dashboard.models import Snapshot
from evals_dashboard.parsing import parse_csv, parse_problems

logger = logging.getLogger(__name__)

FetchCsv = Callable[[], str]
FetchSyncStatus = Callable[[], dict[str, Any]]


class SyncFailure(RuntimeError):
    """A fetch failed; the retained snapshot is still the one to serve."""


@dataclass
class SyncResult:
    changed: bool
    snapshot: Snapshot


def build_snapshot(raw_text: str) -> Snapshot:
    """Run parser → normalizer → aggregator over one raw CSV text."""
    problems = parse_problems(parse_csv(raw_text, expected_columns=CSV_COLUMNS))
    contributors = build_contributors(problems)
    return Snapshot(
        problems=problems,
        contributors=contributors,
        stats=compute_stats(problems, contributors),
    )


def parse_sync_timestamp(value: str) -> datetime:
    """Parse the ISO-8601 ``lastSync`` value (``Z`` suffix allowed).

    Values without an offset are taken to be UTC.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class DatasetStore:
    """Last-loaded raw CSV text and its derived snapshot."""

    def __init__(self, raw_text: str = FALLBACK_CSV) -> None:
        self.raw_text = raw_text
        self.snapshot = build_snapshot(raw_text)

    def replace(self, raw_text: str, snapshot: Snapshot) -> None:
        self.raw_text = raw_text
        self.snapshot = snapshot


class SyncClient:
    """Fetches the CSV and the sync-status descriptor through injected callables."""

    def __init__(
        self,
        fetch_csv: FetchCsv,
        fetch_sync_status: FetchSyncStatus,
        store: DatasetStore | None = None,
    ) -> None:
        self._fetch_csv = fetch_csv
        self._fetch_sync_status = fetch_sync_status
        self.store = store if store is not None else DatasetStore()

    @property
    def snapshot(self) -> Snapshot:
        return self.store.snapshot

    def sync(self) -> SyncResult:
        """Fetch the CSV and rebuild the snapshot if its text changed.

        Raises ``SyncFailure`` when the fetch fails; the store is untouched.
        """
        try:
            raw_text = self._fetch_csv()
        except FetchError as exc:
            raise SyncFailure(f"CSV fetch failed: {exc}") from exc

        if raw_text == self.store.raw_text:
            logger.debug("CSV unchanged (%d bytes)", len(raw_text))
            return SyncResult(changed=False, snapshot=self.store.snapshot)

        snapshot = build_snapshot(raw_text)
        self.store.replace(raw_text, snapshot)
        logger.info(
            "Loaded %d problems from %d contributors",
            len(snapshot.problems),
            len(snapshot.contributors),
        )
        return SyncResult(changed=True, snapshot=snapshot)

    def fetch_last_sync(self) -> str | None:
        """Return the descriptor's ``lastSync`` value, or ``None`` if absent.

        Raises ``SyncFailure`` when the descriptor cannot be fetched.
        """
        try:
            body = self._fetch_sync_status()
        except FetchError as exc:
            raise SyncFailure(f"Sync status fetch failed: {exc}") from exc
        last_sync = body.get("lastSync")
        return str(last_sync) if last_sync else None
