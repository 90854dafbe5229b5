"""CLI: Download the submissions CSV into data/raw/."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from evals_dashboard.client import DataSourceClient
from evals_dashboard.config import RAW_DIR

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s"
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Fetch the CSV once and save a timestamped copy."""
    RAW_DIR.mkdir(parents=True, exist_ok=True)
    with DataSourceClient() as client:
        source = "GitHub" if client.authenticated else "mirror"
        logger.info("Fetching submissions CSV from %s", source)
        csv_text = client.fetch_csv()

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    out_path = RAW_DIR / f"submissions_{timestamp}.csv"
    out_path.write_text(csv_text)
    logger.info("Saved %d bytes → %s", len(csv_text), out_path)


if __name__ == "__main__":
    main()
