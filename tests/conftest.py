"""
Shared pytest fixtures for the GCP stats toolkit tests.

This module provides:
- A fake Spanner database whose snapshot yields canned rows
- A fake BigQuery client that deduplicates streaming inserts by row id
- An httpx client backed by a fake metadata server
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import httpx
import pytest

INTERVAL_END = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

# Stands in for the client library default retry policy
LIBRARY_DEFAULT_RETRY = object()


def make_row(fingerprint: int = 1, interval_end: datetime = INTERVAL_END, text: str = "SELECT 1") -> list:
    """A result row ordered as QUERY_STATS_COLUMNS"""
    return [text, False, fingerprint, interval_end, 10, 0.5, 1.0, 8.0, 2.0, 0.25]


class FakeSnapshot:
    def __init__(self, rows, error: Optional[Exception] = None):
        self.rows = rows
        self.error = error
        self.calls: List[dict] = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute_sql(self, sql, retry=LIBRARY_DEFAULT_RETRY, timeout=None, **kwargs):
        self.calls.append({"sql": sql, "retry": retry, "timeout": timeout, "kwargs": kwargs})
        if self.error is not None:
            raise self.error
        return iter(self.rows)


class FakeDatabase:
    def __init__(self, rows=(), error: Optional[Exception] = None):
        self.fake_snapshot = FakeSnapshot(list(rows), error)

    def snapshot(self):
        return self.fake_snapshot


class FakeBigQueryClient:
    """Keeps the first row seen for each row id, as the streaming API does"""

    def __init__(self, errors: Optional[list] = None, exc: Optional[Exception] = None):
        self.errors = errors or []
        self.exc = exc
        self.calls: List[dict] = []
        self.tables: Dict[tuple, Dict[str, dict]] = {}

    def insert_rows(self, table, rows, selected_fields=None, row_ids=None, **kwargs):
        self.calls.append({
            'table': table,
            'rows': list(rows),
            'selected_fields': selected_fields,
            'row_ids': list(row_ids),
            'kwargs': kwargs,
        })
        if self.exc is not None:
            raise self.exc
        if self.errors:
            return self.errors
        stored = self.tables.setdefault((table.project, table.dataset_id, table.table_id), {})
        for row_id, row in zip(row_ids, rows):
            stored.setdefault(row_id, row)
        return []

    def visible_rows(self, project: str, dataset: str, table: str) -> List[dict]:
        return list(self.tables.get((project, dataset, table), {}).values())


@pytest.fixture
def fake_database() -> Callable[..., FakeDatabase]:
    return FakeDatabase


@pytest.fixture
def fake_bq_client() -> FakeBigQueryClient:
    return FakeBigQueryClient()


@pytest.fixture
def metadata_http() -> Callable[[Dict[str, object]], httpx.Client]:
    """
    Build an httpx client answering metadata paths from a dict.

    Every request is recorded on the returned client as ``seen_requests``.

    Values may be a string (200 response), an (status, body) tuple, or an
    exception class raised for the request. Unknown paths answer 404.
    """

    def factory(responses: Dict[str, object]) -> httpx.Client:
        seen: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            assert request.headers["Metadata-Flavor"] == "Google"
            path = request.url.path.removeprefix("/computeMetadata/v1/")
            value = responses.get(path)
            if isinstance(value, type) and issubclass(value, Exception):
                raise value("metadata unavailable", request=request)
            if isinstance(value, tuple):
                status, body = value
                return httpx.Response(status, text=body, headers={"Metadata-Flavor": "Google"})
            if value is None:
                return httpx.Response(404, text="not found", headers={"Metadata-Flavor": "Google"})
            return httpx.Response(200, text=value, headers={"Metadata-Flavor": "Google"})

        client = httpx.Client(transport=httpx.MockTransport(handler))
        client.seen_requests = seen
        return client

    return factory
