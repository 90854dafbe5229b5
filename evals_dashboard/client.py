"""HTTP client for the submissions CSV, the sync-status file and the sync workflow."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from evals_dashboard.config import (
    GITHUB_API_VERSION,
    GITHUB_CSV_URL,
    GITHUB_TOKEN,
    MIRROR_BASE_URL,
    MIRROR_CSV_PATH,
    REQUEST_TIMEOUT,
    SYNC_STATUS_PATH,
    SYNC_WORKFLOW_DISPATCH_URL,
    SYNC_WORKFLOW_REF,
)

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """A request to the data source failed or returned an unusable body."""


class DataSourceClient:
    """Reads the submissions CSV from GitHub (with a token) or the public mirror.

    Without a token every read goes to the mirror; with one, the CSV is read
    straight from the GitHub contents API so it never lags behind the mirror.
    The sync-status file only exists on the mirror.
    """

    def __init__(
        self,
        token: str | None = None,
        mirror_base_url: str = MIRROR_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._token = token if token is not None else GITHUB_TOKEN
        self._mirror_base_url = mirror_base_url.rstrip("/")
        self._client = httpx.Client(timeout=REQUEST_TIMEOUT, transport=transport)

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    # ── Reads ───────────────────────────────────────────────────────────

    def fetch_csv(self) -> str:
        """Return the raw submissions CSV text."""
        if self._token:
            resp = self._request(
                "GET",
                GITHUB_CSV_URL,
                params={"ref": SYNC_WORKFLOW_REF},
                headers=self._github_headers("application/vnd.github.raw+json"),
            )
            logger.debug("Loaded CSV from GitHub (authenticated)")
        else:
            resp = self._request(
                "GET",
                f"{self._mirror_base_url}{MIRROR_CSV_PATH}",
                params={"t": _cache_buster()},
            )
            logger.debug("Loaded CSV from mirror")
        return resp.text

    def fetch_sync_status(self) -> dict[str, Any]:
        """Return the decoded ``sync-status.json`` document."""
        resp = self._request(
            "GET",
            f"{self._mirror_base_url}{SYNC_STATUS_PATH}",
            params={"t": _cache_buster()},
        )
        try:
            body = resp.json()
        except ValueError as exc:
            raise FetchError(f"Sync status is not valid JSON: {exc}") from exc
        if not isinstance(body, dict):
            raise FetchError(f"Sync status is not a JSON object: {body!r}")
        return body

    # ── Writes ──────────────────────────────────────────────────────────

    def dispatch_sync_workflow(self) -> None:
        """Ask GitHub Actions to regenerate the CSV and the status file now."""
        if not self._token:
            raise FetchError("GITHUB_TOKEN is required to dispatch the sync workflow.")
        self._request(
            "POST",
            SYNC_WORKFLOW_DISPATCH_URL,
            json={"ref": SYNC_WORKFLOW_REF},
            headers=self._github_headers("application/vnd.github+json"),
        )
        logger.info("Dispatched sync workflow on ref %s", SYNC_WORKFLOW_REF)

    # ── Helpers ─────────────────────────────────────────────────────────

    def _github_headers(self, accept: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": accept,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request; a transport error or non-2xx status is a ``FetchError``.

        There is no retry here: the poller simply tries again on its next tick.
        """
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise FetchError(f"{method} {url} failed: {exc}") from exc

        if not resp.is_success:
            raise FetchError(f"{method} {url} returned HTTP {resp.status_code}")
        return resp

    # ── Context manager ─────────────────────────────────────────────────

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> DataSourceClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def _cache_buster() -> int:
    return int(time.time() * 1000)
