"""Tests for the dataset store, the sync client and the HTTP data source."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

import httpx
import pytest

from evals_dashboard.client import DataSourceClient, FetchError
from evals_dashboard.config import GITHUB_CSV_URL, SYNC_WORKFLOW_DISPATCH_URL
from evals_dashboard.fallback import FALLBACK_CSV
from evals_dashboard.sync import (
    DatasetStore,
    SyncClient,
    SyncFailure,
    build_snapshot,
    parse_sync_timestamp,
)

CSV_V1 = (
    "id,title,paper_url,data_url,data_accession,kit,engineer,reviewer,"
    "status,count,notes,created_at,submitted_at,done_at\n"
    "1,a,,,GSE1,xenium,alice,,accepted,,,,2026-01-20,2026-01-22\n"
)
CSV_V2 = CSV_V1 + "2,b,,,GSE2,visium,bob,,qc,,,,2026-01-21,\n"
MIRROR = "https://mirror.example"


def _static(value):
    return lambda: value


def _raise(exc: Exception):
    def fetch():
        raise exc
    return fetch


# ── Dataset store ───────────────────────────────────────────────────────────


def test_store_starts_from_fallback() -> None:
    store = DatasetStore()
    assert store.raw_text == FALLBACK_CSV
    assert len(store.snapshot.problems) == 9
    assert store.snapshot.stats.pending_count == 9
    assert len(store.snapshot.contributors) == 7


def test_stores_are_independent() -> None:
    a = DatasetStore(CSV_V1)
    b = DatasetStore(CSV_V2)
    a.replace(CSV_V2, build_snapshot(CSV_V2))
    assert a.raw_text == b.raw_text
    assert a.snapshot is not b.snapshot


# ── Sync client ─────────────────────────────────────────────────────────────


def test_sync_same_text_twice_reports_unchanged() -> None:
    client = SyncClient(_static(CSV_V1), _static({}), store=DatasetStore(FALLBACK_CSV))

    first = client.sync()
    snapshot = client.snapshot
    second = client.sync()

    assert first.changed is True
    assert second.changed is False
    assert second.snapshot is snapshot
    assert client.store.raw_text == CSV_V1


def test_sync_fallback_text_is_unchanged() -> None:
    client = SyncClient(_static(FALLBACK_CSV), _static({}))
    assert client.sync().changed is False


def test_sync_replaces_snapshot_on_change() -> None:
    texts = iter([CSV_V1, CSV_V2])
    client = SyncClient(lambda: next(texts), _static({}))

    client.sync()
    result = client.sync()

    assert result.changed is True
    assert [p.id for p in result.snapshot.problems] == [1, 2]
    assert client.snapshot is result.snapshot
    assert result.snapshot.stats.acceptance_rate == 100


def test_sync_failure_keeps_last_snapshot() -> None:
    store = DatasetStore(CSV_V1)
    before = store.snapshot
    client = SyncClient(_raise(FetchError("boom")), _static({}), store=store)

    with pytest.raises(SyncFailure):
        client.sync()
    assert store.snapshot is before
    assert store.raw_text == CSV_V1


def test_fetch_last_sync() -> None:
    client = SyncClient(_static(CSV_V1), _static({"lastSync": "2026-01-30T10:00:00Z"}))
    assert client.fetch_last_sync() == "2026-01-30T10:00:00Z"


def test_fetch_last_sync_missing_field_is_none() -> None:
    client = SyncClient(_static(CSV_V1), _static({"other": 1}))
    assert client.fetch_last_sync() is None


def test_fetch_last_sync_failure() -> None:
    client = SyncClient(_static(CSV_V1), _raise(FetchError("down")))
    with pytest.raises(SyncFailure):
        client.fetch_last_sync()


def test_unexpected_fetch_error_is_not_wrapped() -> None:
    client = SyncClient(_raise(KeyError("lastSync")), _raise(TypeError("bad body")))
    with pytest.raises(KeyError):
        client.sync()
    with pytest.raises(TypeError):
        client.fetch_last_sync()


def test_build_snapshot_warns_on_reordered_header(caplog: pytest.LogCaptureFixture) -> None:
    text = "engineer,id\nalice,1\n"
    with caplog.at_level(logging.WARNING):
        snapshot = build_snapshot(text)
    assert "Unexpected CSV header" in caplog.text
    assert [c.name for c in snapshot.contributors] == ["alice"]


def test_build_snapshot_keeps_later_rows_after_broken_quote() -> None:
    text = CSV_V2.replace(
        "1,a,,,GSE1,xenium,alice,,accepted,,,",
        '1,a,,,GSE1,xenium,alice,,accepted,,"slide,',
    )
    client = SyncClient(_static(text), _static({}), store=DatasetStore(CSV_V1))
    result = client.sync()
    assert result.changed is True
    assert [p.id for p in result.snapshot.problems] == [1, 2]


def test_parse_sync_timestamp() -> None:
    expected = datetime(2026, 1, 30, 10, 0, tzinfo=timezone.utc)
    assert parse_sync_timestamp("2026-01-30T10:00:00Z") == expected
    assert parse_sync_timestamp("2026-01-30T10:00:00") == expected


# ── HTTP data source ────────────────────────────────────────────────────────


def _client(handler, token: str = "") -> DataSourceClient:
    return DataSourceClient(
        token=token,
        mirror_base_url=MIRROR,
        transport=httpx.MockTransport(handler),
    )


def test_fetch_csv_from_mirror() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=CSV_V1)

    with _client(handler) as client:
        assert client.fetch_csv() == CSV_V1

    assert seen[0].url.path == "/submissions.csv"
    assert "t" in seen[0].url.params
    assert "Authorization" not in seen[0].headers


def test_fetch_csv_from_github_with_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=CSV_V2)

    with _client(handler, token="secret") as client:
        assert client.authenticated
        assert client.fetch_csv() == CSV_V2

    request = seen[0]
    assert str(request.url).startswith(GITHUB_CSV_URL)
    assert request.url.params["ref"] == "main"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Accept"] == "application/vnd.github.raw+json"


def test_non_success_status_raises_fetch_error() -> None:
    with _client(lambda request: httpx.Response(503)) as client:
        with pytest.raises(FetchError, match="503"):
            client.fetch_csv()


def test_transport_error_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(FetchError):
            client.fetch_csv()


def test_fetch_sync_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/sync-status.json"
        return httpx.Response(200, json={"lastSync": "2026-01-30T10:00:00Z"})

    with _client(handler) as client:
        assert client.fetch_sync_status() == {"lastSync": "2026-01-30T10:00:00Z"}


def test_fetch_sync_status_rejects_bad_json() -> None:
    with _client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(FetchError):
            client.fetch_sync_status()


def test_dispatch_requires_token() -> None:
    with _client(lambda request: httpx.Response(204)) as client:
        with pytest.raises(FetchError):
            client.dispatch_sync_workflow()


def test_dispatch_posts_workflow_ref() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    with _client(handler, token="secret") as client:
        client.dispatch_sync_workflow()

    assert seen[0].method == "POST"
    assert str(seen[0].url) == SYNC_WORKFLOW_DISPATCH_URL
    assert json.loads(seen[0].content) == {"ref": "main"}


def test_sync_client_over_failing_http() -> None:
    with _client(lambda request: httpx.Response(500)) as client:
        sync_client = SyncClient(client.fetch_csv, client.fetch_sync_status)
        with pytest.raises(SyncFailure):
            sync_client.sync()
        assert sync_client.snapshot.stats.pending_count == 9
