"""CLI: Poll the sync-status file and the CSV, logging every change."""

from __future__ import annotations

import argparse
import logging

from evals_dashboard.client import DataSourceClient, FetchError
from evals_dashboard.config import SYNC_WORKFLOW_PAGE_URL
from evals_dashboard.models import Snapshot
from evals_dashboard.polling import PollScheduler, describe_sync_age
from evals_dashboard.sync import SyncClient

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s"
)
logger = logging.getLogger(__name__)


def _log_snapshot(snapshot: Snapshot) -> None:
    stats = snapshot.stats
    logger.info(
        "Dataset changed: %d pending, %d accepted, %d rejected (%d%% accepted)",
        stats.pending_count,
        stats.accepted_count,
        stats.rejected_count,
        stats.acceptance_rate,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--trigger",
        action="store_true",
        help="Request a manual sync first and poll fast until it lands.",
    )
    args = parser.parse_args()

    with DataSourceClient() as client:
        sync_client = SyncClient(client.fetch_csv, client.fetch_sync_status)
        scheduler = PollScheduler(sync_client, on_snapshot_changed=_log_snapshot)
        scheduler.start()
        logger.info("Last remote sync: %s", describe_sync_age(scheduler.state.last_sync_timestamp))

        if args.trigger:
            scheduler.trigger_manual_sync()
            if client.authenticated:
                try:
                    client.dispatch_sync_workflow()
                except FetchError as exc:
                    logger.error("Failed to trigger sync: %s", exc)
            else:
                print(f"Run the sync workflow manually: {SYNC_WORKFLOW_PAGE_URL}")

        try:
            scheduler.run()
        except KeyboardInterrupt:
            logger.info("Stopped.")


if __name__ == "__main__":
    main()
