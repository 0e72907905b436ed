"""
AMeDAS client for the JMA "bosai" endpoints.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx

from .config import ClientConfig
from .exceptions import AmedasConnectionError, AmedasError, AmedasQueryError
from .extract import parse_station_table
from .models import StationInfo

logger = logging.getLogger(__name__)

SNAPSHOT_TIME_FORMAT = "%Y%m%d%H%M%S"

# Snapshot files are named by Japan Standard Time wall clock
JST = timezone(timedelta(hours=9))


def parse_latest_time(text: str) -> datetime:
    """
    Parse the latest-time endpoint body (e.g. ``2024-01-15T12:30:00+09:00``).

    Raises:
        AmedasQueryError: If the text is not an ISO-8601 timestamp
    """
    value = text.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise AmedasQueryError(f"Invalid latest time '{text.strip()}': {e}") from e


class AmedasClient:
    """
    Client for the AMeDAS station table and observation snapshots.

    Every request is bounded by the configured timeout; a hung endpoint
    surfaces as ``AmedasConnectionError`` instead of stalling the fetch.
    """

    def __init__(
        self, timeout: Optional[float] = None, config: Optional[ClientConfig] = None
    ):
        if config is None:
            config = ClientConfig.from_env(timeout=timeout)
        elif timeout is not None:
            config = ClientConfig(
                base_url=config.base_url, timeout=timeout, user_agent=config.user_agent
            )
        self.config = config
        self.timeout = config.timeout
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers={
                "User-Agent": config.user_agent,
                "Accept": "application/json, text/plain",
            },
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AmedasClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _get(self, path: str) -> httpx.Response:
        """GET a path below the base URL, translating transport errors."""
        url = f"{self.base_url}/{path}"

        try:
            response = await self._client.get(url)
            response.raise_for_status()
            return response

        except httpx.TimeoutException as e:
            raise AmedasConnectionError(
                f"Request to {url} timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise AmedasQueryError(f"No AMeDAS data at {url}") from e
            elif status == 429:
                raise AmedasConnectionError("Rate limit exceeded") from e
            elif status >= 500:
                raise AmedasConnectionError(
                    "AMeDAS service temporarily unavailable"
                ) from e
            else:
                raise AmedasConnectionError(f"HTTP error {status}: {e}") from e
        except httpx.RequestError as e:
            raise AmedasConnectionError(f"Network error: {e}") from e

    async def _get_json(self, path: str) -> Any:
        response = await self._get(path)
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise AmedasQueryError(f"Invalid JSON response from {path}: {e}") from e

    async def get_latest_time(self) -> datetime:
        """Timestamp of the most recent snapshot."""
        response = await self._get("data/latest_time.txt")
        return parse_latest_time(response.text)

    async def get_station_table(self) -> Dict[str, StationInfo]:
        """
        Get the static station table.

        Returns:
            Mapping of station code to StationInfo
        """
        data = await self._get_json("const/amedastable.json")
        if not isinstance(data, dict):
            raise AmedasQueryError(
                f"Station table is {type(data).__name__}, expected object"
            )

        try:
            return parse_station_table(data)
        except AmedasError:
            raise
        except Exception as e:
            raise AmedasQueryError(f"Failed to parse station table: {e}") from e

    def snapshot_path(self, timestamp: datetime) -> str:
        # Naive timestamps are taken as JST already
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(JST)
        return f"data/map/{timestamp.strftime(SNAPSHOT_TIME_FORMAT)}.json"

    def snapshot_url(self, timestamp: datetime) -> str:
        """Data URL of the snapshot taken at ``timestamp``."""
        return f"{self.base_url}/{self.snapshot_path(timestamp)}"

    async def get_snapshot(self, timestamp: datetime) -> Dict[str, Dict[str, Any]]:
        """
        Get the observation snapshot for ``timestamp``.

        Returns:
            Mapping of station code to raw ``{kind: [value, flag]}`` readings,
            in payload order
        """
        data = await self._get_json(self.snapshot_path(timestamp))
        if not isinstance(data, dict):
            raise AmedasQueryError(
                f"Snapshot is {type(data).__name__}, expected object"
            )

        logger.debug(f"Snapshot {timestamp.isoformat()}: {len(data)} stations")
        return data
