"""
One fetch cycle: latest timestamp, then station table and snapshot in parallel.

The timestamp is resolved first because the snapshot URL depends on it. The
station table and the snapshot are then requested concurrently and awaited
together; a failure in either branch is logged and recorded on the
``FetchResult`` while the other branch is still used.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Dict, Optional

from .client import AmedasClient
from .exceptions import AmedasError, AmedasQueryError
from .extract import join_snapshot
from .models import FetchResult, StationInfo
from .utils import add_sync_version

logger = logging.getLogger(__name__)

LATEST_TIME = "latest_time"
STATION_TABLE = "station_table"
SNAPSHOT = "snapshot"


@add_sync_version
async def fetch_latest_time(
    client: Optional[AmedasClient] = None,
) -> Optional[datetime]:
    """
    Timestamp of the most recent snapshot, or ``None`` if it could not be read.
    """
    if client is None:
        async with AmedasClient() as own_client:
            return await fetch_latest_time(client=own_client)

    return await _resolve_timestamp(client, {})


async def _resolve_timestamp(
    client: AmedasClient, errors: Dict[str, Exception]
) -> Optional[datetime]:
    """Latest snapshot time, recording a failure in ``errors``."""
    try:
        return await client.get_latest_time()
    except AmedasError as e:
        logger.warning(f"Could not resolve latest snapshot time: {e}")
        errors[LATEST_TIME] = e
        return None


@add_sync_version
async def fetch_stations(
    as_of: Optional[datetime] = None,
    client: Optional[AmedasClient] = None,
    raise_on_error: bool = False,
) -> FetchResult:
    """
    Fetch and join the station table with one observation snapshot.

    Args:
        as_of: Snapshot timestamp; the latest available one when omitted
        client: Optional AmedasClient to reuse; a temporary one otherwise
        raise_on_error: Raise the first failure instead of returning a
            degraded result

    Returns:
        FetchResult with one StationRecord per snapshot station, in snapshot
        order, plus any per-source errors

    Examples:
        # Latest snapshot
        result = await fetch_stations()
        temps = [r.temp for r in result if r.temp is not None]

        # Blocking call
        result = fetch_stations.sync()
    """
    if client is None:
        async with AmedasClient() as own_client:
            return await fetch_stations(
                as_of, client=own_client, raise_on_error=raise_on_error
            )

    errors: Dict[str, Exception] = {}
    timestamp = as_of
    if timestamp is None:
        timestamp = await _resolve_timestamp(client, errors)

    branches: Dict[str, Awaitable[Any]] = {STATION_TABLE: client.get_station_table()}
    if timestamp is not None:
        branches[SNAPSHOT] = client.get_snapshot(timestamp)
    else:
        # Without a timestamp there is no snapshot URL to request
        errors[SNAPSHOT] = AmedasQueryError("No snapshot timestamp available")

    results = await asyncio.gather(*branches.values(), return_exceptions=True)
    outcome: Dict[str, Any] = {}
    for source, result in zip(branches, results):
        if isinstance(result, Exception):
            logger.warning(f"Source '{source}' unavailable: {result}")
            errors[source] = result
        elif isinstance(result, BaseException):
            raise result
        else:
            outcome[source] = result

    table: Optional[Dict[str, StationInfo]] = outcome.get(STATION_TABLE)
    snapshot: Optional[Dict[str, Any]] = outcome.get(SNAPSHOT)

    if raise_on_error and errors:
        raise next(iter(errors.values()))

    records = join_snapshot(table, snapshot)
    logger.info(
        f"Fetched {len(records)} station records"
        + (f" for {timestamp.isoformat()}" if timestamp else "")
        + (f" with failed sources {sorted(errors)}" if errors else "")
    )
    return FetchResult(timestamp=timestamp, records=records, errors=errors)
