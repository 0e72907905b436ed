"""
Tests for the AMeDAS HTTP client.
"""

from datetime import datetime
from unittest.mock import Mock

import httpx
import pytest

from amedasmap.client import AmedasClient, parse_latest_time
from amedasmap.config import ClientConfig
from amedasmap.exceptions import AmedasConnectionError, AmedasQueryError

from conftest import SNAPSHOT, SNAPSHOT_TIME, STATION_TABLE, make_response


class TestAmedasClient:
    """Test AmedasClient functionality."""

    def test_init(self, client):
        """Test client initialization."""
        assert client.timeout == 5
        assert client.base_url == "https://www.jma.go.jp/bosai/amedas"

    def test_config_override(self):
        config = ClientConfig(base_url="http://localhost:8000/amedas", timeout=2)
        client = AmedasClient(config=config)
        assert client.base_url == "http://localhost:8000/amedas"
        assert client.timeout == 2

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("AMEDAS_BASE_URL", "http://mirror.example/amedas/")
        monkeypatch.setenv("AMEDAS_TIMEOUT", "7.5")
        config = ClientConfig.from_env()
        assert config.base_url == "http://mirror.example/amedas"
        assert config.timeout == 7.5

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            ClientConfig(timeout=0)

    def test_snapshot_url(self, client):
        assert client.snapshot_url(SNAPSHOT_TIME) == (
            "https://www.jma.go.jp/bosai/amedas/data/map/20240115123000.json"
        )

    def test_snapshot_url_uses_jst_wall_clock(self, client):
        utc_instant = parse_latest_time("2024-01-15T03:30:00Z")
        assert client.snapshot_url(utc_instant).endswith("/data/map/20240115123000.json")
        assert client.snapshot_url(utc_instant) == client.snapshot_url(SNAPSHOT_TIME)

    def test_snapshot_url_naive_taken_as_jst(self, client):
        naive = SNAPSHOT_TIME.replace(tzinfo=None)
        assert client.snapshot_path(naive) == "data/map/20240115123000.json"

    @pytest.mark.asyncio
    async def test_get_latest_time(self, client, mock_http):
        mock_response = Mock()
        mock_response.text = "2024-01-15T12:30:00+09:00\n"
        mock_response.raise_for_status.return_value = None
        mock_http.get.return_value = mock_response

        timestamp = await client.get_latest_time()

        assert timestamp == SNAPSHOT_TIME
        mock_http.get.assert_called_once_with(
            "https://www.jma.go.jp/bosai/amedas/data/latest_time.txt"
        )

    @pytest.mark.asyncio
    async def test_get_station_table(self, client, mock_http):
        mock_response = Mock()
        mock_response.json.return_value = STATION_TABLE
        mock_response.raise_for_status.return_value = None
        mock_http.get.return_value = mock_response

        table = await client.get_station_table()

        assert set(table) == {"44132", "11001", "99999"}
        assert table["44132"].name == "東京"
        assert table["44132"].longitude == pytest.approx(139.75)

    @pytest.mark.asyncio
    async def test_get_snapshot(self, client, mock_http):
        url = client.snapshot_url(SNAPSHOT_TIME)
        mock_http.get.return_value = make_response(url, json=SNAPSHOT)

        snapshot = await client.get_snapshot(SNAPSHOT_TIME)

        assert list(snapshot) == ["44132", "11001"]
        mock_http.get.assert_called_once_with(url)

    @pytest.mark.asyncio
    async def test_snapshot_not_object(self, client, mock_http):
        url = client.snapshot_url(SNAPSHOT_TIME)
        mock_http.get.return_value = make_response(url, json=[1, 2, 3])

        with pytest.raises(AmedasQueryError, match="expected object"):
            await client.get_snapshot(SNAPSHOT_TIME)


class TestAmedasClientErrors:
    """Test translation of transport errors."""

    @pytest.mark.asyncio
    async def test_timeout(self, client, mock_http):
        mock_http.get.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(AmedasConnectionError, match="timed out after 5"):
            await client.get_latest_time()

    @pytest.mark.asyncio
    async def test_not_found(self, client, mock_http):
        mock_http.get.return_value = make_response(
            client.snapshot_url(SNAPSHOT_TIME), status_code=404
        )

        with pytest.raises(AmedasQueryError, match="No AMeDAS data"):
            await client.get_snapshot(SNAPSHOT_TIME)

    @pytest.mark.asyncio
    async def test_server_error(self, client, mock_http):
        mock_http.get.return_value = make_response(
            "https://www.jma.go.jp/bosai/amedas/const/amedastable.json",
            status_code=503,
        )

        with pytest.raises(AmedasConnectionError, match="temporarily unavailable"):
            await client.get_station_table()

    @pytest.mark.asyncio
    async def test_network_error(self, client, mock_http):
        mock_http.get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(AmedasConnectionError, match="Network error"):
            await client.get_station_table()

    @pytest.mark.asyncio
    async def test_invalid_json(self, client, mock_http):
        mock_http.get.return_value = make_response(
            "https://www.jma.go.jp/bosai/amedas/const/amedastable.json",
            text="<html>maintenance</html>",
        )

        with pytest.raises(AmedasQueryError, match="Invalid JSON"):
            await client.get_station_table()

    @pytest.mark.asyncio
    async def test_unparseable_latest_time(self, client, mock_http):
        mock_http.get.return_value = make_response(
            "https://www.jma.go.jp/bosai/amedas/data/latest_time.txt",
            text="not a date",
        )

        with pytest.raises(AmedasQueryError, match="Invalid latest time"):
            await client.get_latest_time()


class TestParseLatestTime:
    def test_offset(self):
        assert parse_latest_time("2024-01-15T12:30:00+09:00") == SNAPSHOT_TIME

    def test_naive(self):
        assert parse_latest_time("2024-01-15T12:30:00") == datetime(2024, 1, 15, 12, 30)

    def test_zulu(self):
        assert parse_latest_time("2024-01-15T03:30:00Z") == SNAPSHOT_TIME
