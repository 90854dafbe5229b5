"""Poll scheduler: a two-mode state machine over the sync client.

    NORMAL ──trigger_manual_sync()──▶ FAST ──fast window elapsed──▶ NORMAL
                                       ▲  │
                                       └──┘ trigger_manual_sync() restarts the window

The scheduler owns no threads or timers. It keeps deadlines against an
injectable monotonic clock and ``tick()`` runs whatever is due, so the
Streamlit page, the terminal watcher and the tests all drive it the same way.

A changed ``lastSync`` in the status descriptor only clears ``is_syncing``;
leaving FAST mode is tied to the fast window alone.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable

from evals_dashboard.config import (
    DATA_POLL_INTERVAL,
    FAST_POLL_DURATION,
    POLL_INTERVAL_FAST,
    POLL_INTERVAL_NORMAL,
)
from evals_dashboard.models import PollMode, Snapshot, SyncState
from evals_dashboard.sync import SyncClient, SyncFailure, parse_sync_timestamp

logger = logging.getLogger(__name__)


class PollScheduler:
    """Drives status and CSV probes at a normal or a temporarily fast cadence."""

    def __init__(
        self,
        sync_client: SyncClient,
        *,
        normal_interval: float = POLL_INTERVAL_NORMAL,
        fast_interval: float = POLL_INTERVAL_FAST,
        fast_duration: float = FAST_POLL_DURATION,
        data_interval: float = DATA_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        on_snapshot_changed: Callable[[Snapshot], None] | None = None,
    ) -> None:
        self.state = SyncState()
        self._sync_client = sync_client
        self._normal_interval = normal_interval
        self._fast_interval = fast_interval
        self._fast_duration = fast_duration
        self._data_interval = data_interval
        self._clock = clock
        self._on_snapshot_changed = on_snapshot_changed

        self._running = False
        self._last_known_sync: str | None = None
        self._next_status_at: float | None = None
        self._next_data_at: float | None = None
        self._fast_until: float | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def snapshot(self) -> Snapshot:
        """Latest snapshot held by the sync client."""
        return self._sync_client.snapshot

    @property
    def interval(self) -> float:
        """Current status-probe interval in seconds."""
        if self.state.poll_mode is PollMode.FAST:
            return self._fast_interval
        return self._normal_interval

    # ── Transitions ─────────────────────────────────────────────────────

    def start(self) -> None:
        """Enter NORMAL mode and probe once right away."""
        if self._running:
            return
        self._running = True
        self.state.poll_mode = PollMode.NORMAL
        now = self._clock()
        self._probe_data()
        self._probe_status()
        self._next_status_at = now + self._normal_interval
        self._next_data_at = now + self._data_interval

    def stop(self) -> None:
        """Clear every deadline; later ticks do nothing."""
        self._running = False
        self._next_status_at = None
        self._next_data_at = None
        self._fast_until = None

    def trigger_manual_sync(self) -> None:
        """Mark a sync as in flight and poll fast until the window runs out."""
        if not self._running:
            raise RuntimeError("Poll scheduler is not running; call start() first.")
        now = self._clock()
        self.state.is_syncing = True
        self.state.poll_mode = PollMode.FAST
        self._fast_until = now + self._fast_duration
        self._next_status_at = now + self._fast_interval
        logger.info("Manual sync requested; fast polling for %.0fs", self._fast_duration)

    def _leave_fast_mode(self, now: float) -> None:
        self.state.poll_mode = PollMode.NORMAL
        self.state.is_syncing = False
        self._fast_until = None
        self._next_status_at = now + self._normal_interval
        logger.info("Fast polling window elapsed; back to normal cadence")

    # ── Ticks ───────────────────────────────────────────────────────────

    def tick(self) -> bool:
        """Run every probe that is due.

        Returns True when the CSV probe replaced the snapshot.
        """
        if not self._running:
            return False
        now = self._clock()

        if (
            self.state.poll_mode is PollMode.FAST
            and self._fast_until is not None
            and now >= self._fast_until
        ):
            self._leave_fast_mode(now)

        changed = False
        if self._next_status_at is not None and now >= self._next_status_at:
            self._probe_status()
            self._next_status_at = now + self.interval
        if self._next_data_at is not None and now >= self._next_data_at:
            changed = self._probe_data()
            self._next_data_at = now + self._data_interval
        return changed

    def seconds_until_next_tick(self) -> float:
        deadlines = [
            d for d in (self._next_status_at, self._next_data_at, self._fast_until)
            if d is not None
        ]
        if not deadlines:
            return self._normal_interval
        return max(0.0, min(deadlines) - self._clock())

    def run(
        self,
        sleep: Callable[[float], None] = time.sleep,
        should_stop: Callable[[], bool] = lambda: False,
    ) -> None:
        """Block, ticking whenever the next deadline comes due."""
        if not self._running:
            self.start()
        try:
            while not should_stop():
                sleep(self.seconds_until_next_tick())
                self.tick()
        finally:
            self.stop()

    # ── Probes ──────────────────────────────────────────────────────────

    def _probe_status(self) -> None:
        try:
            last_sync = self._sync_client.fetch_last_sync()
        except SyncFailure as exc:
            logger.warning("Sync status probe failed: %s", exc)
            return
        if last_sync is None:
            return
        try:
            timestamp = parse_sync_timestamp(last_sync)
        except ValueError:
            logger.warning("Ignoring malformed lastSync value %r", last_sync)
            return

        self.state.last_sync_timestamp = timestamp
        if self._last_known_sync and self._last_known_sync != last_sync:
            logger.info("Sync change detected: %s -> %s", self._last_known_sync, last_sync)
            self.state.is_syncing = False
        self._last_known_sync = last_sync

    def _probe_data(self) -> bool:
        try:
            result = self._sync_client.sync()
        except SyncFailure as exc:
            logger.warning("CSV probe failed, keeping last snapshot: %s", exc)
            return False
        if result.changed and self._on_snapshot_changed is not None:
            self._on_snapshot_changed(result.snapshot)
        return result.changed


def describe_sync_age(last_sync: datetime | None, now: datetime | None = None) -> str:
    """Human label for how long ago the remote sync ran."""
    if last_sync is None:
        return "checking..."
    if now is None:
        now = datetime.now(timezone.utc)
    diff_secs = (now - last_sync).total_seconds()
    if diff_secs < 60:
        return "just now"
    diff_mins = int(diff_secs // 60)
    if diff_mins < 60:
        return f"{diff_mins}m ago"
    return f"{diff_mins // 60}h ago"
