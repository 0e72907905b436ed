"""
Shared fixtures: small station-table and snapshot payloads in JMA format.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import httpx
import pytest

from amedasmap.client import AmedasClient

JST = timezone(timedelta(hours=9))
SNAPSHOT_TIME = datetime(2024, 1, 15, 12, 30, tzinfo=JST)

STATION_TABLE = {
    "44132": {
        "type": "A",
        "elems": "11112010",
        "lat": [35, 41.5],
        "lon": [139, 45.0],
        "alt": 25,
        "kjName": "東京",
        "knName": "トウキヨウ",
        "enName": "Tokyo",
    },
    "11001": {
        "type": "C",
        "elems": "11000000",
        "lat": [45, 31.2],
        "lon": [141, 56.1],
        "alt": 26,
        "kjName": "宗谷岬",
        "knName": "ソウヤミサキ",
        "enName": "Cape Soya",
    },
    "99999": {
        "lat": [35, 0.0],
        "lon": [135, 0.0],
        "kjName": "テーブルのみ",
    },
}

SNAPSHOT = {
    "44132": {
        "temp": [8.4, 0],
        "humidity": [41, 0],
        "precipitation10m": [0.0, 0],
        "precipitation1h": [0.0, 0],
        "precipitation3h": [0.0, 0],
        "precipitation24h": [0.5, 0],
        "sun1h": [1.0, 0],
        "snow": [None, 6],
        "wind": [3.2, 0],
        "windDirection": [8, 0],
    },
    "11001": {
        "temp": [-2.1, 1],
        "wind": [9.8, 0],
        "windDirection": [4, 5],
        "snow6h": [2, 0],
    },
}


def make_response(url: str, status_code: int = 200, **kwargs) -> httpx.Response:
    """Real httpx response bound to a GET request for ``url``."""
    return httpx.Response(status_code, request=httpx.Request("GET", url), **kwargs)


def route_responses(routes):
    """Side effect for a mocked ``get`` that answers by URL suffix."""

    async def _get(url, *args, **kwargs):
        for suffix, answer in routes.items():
            if url.endswith(suffix):
                if isinstance(answer, Exception):
                    raise answer
                if isinstance(answer, str):
                    return make_response(url, text=answer)
                return make_response(url, json=answer)
        return make_response(url, status_code=404)

    return _get


@pytest.fixture
def client():
    """Create a test client."""
    return AmedasClient(timeout=5)


@pytest.fixture
def mock_http(client):
    """Replace the client's httpx transport with an AsyncMock."""
    mock_client = AsyncMock()
    client._client = mock_client
    return mock_client
