"""
Quality-gated extraction of snapshot readings into station records.

Snapshot readings arrive as ``[value, quality_flag]`` pairs; a flag of 0 means
the value was observed normally and anything else means missing or suspect.
"""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .models import SCALAR_KINDS, StationInfo, StationRecord, Wind

logger = logging.getLogger(__name__)

# Number of compass points used by the direction codes
COMPASS_POINTS = 16

# Snapshot key carrying the compass code paired with the "wind" speed entry
WIND_DIRECTION_KEY = "windDirection"


def quality_value(entry: Any) -> Optional[float]:
    """
    Return the value of a ``[value, flag]`` entry when its flag is exactly 0.

    Missing entries, malformed entries, null or non-finite values and any
    non-zero flag all give ``None``. A value of 0 with flag 0 is returned as 0.
    """
    if not isinstance(entry, Sequence) or isinstance(entry, str) or len(entry) < 2:
        return None
    value, flag = entry[0], entry[1]
    if flag != 0 or value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def direction_to_degrees(code: float) -> float:
    """Convert a 16-point compass code to a bearing in degrees."""
    return code * 360.0 / COMPASS_POINTS


def wind_from_entries(speed_entry: Any, direction_entry: Any) -> Optional[Wind]:
    """Build a ``Wind`` only when both speed and direction pass the quality gate."""
    speed = quality_value(speed_entry)
    code = quality_value(direction_entry)
    if speed is None or code is None:
        return None
    return Wind(speed=speed, direction=direction_to_degrees(code))


def degrees_minutes(pair: Sequence[float]) -> float:
    """Sum a ``[degrees, minutes]`` pair into decimal degrees."""
    degrees, minutes = pair[0], pair[1]
    return float(degrees) + float(minutes) / 60.0


def parse_station_info(code: str, entry: Mapping[str, Any]) -> StationInfo:
    """
    Build ``StationInfo`` from one station-table entry.

    Raises:
        ValueError: If the coordinates are missing, malformed or out of range
    """
    try:
        longitude = degrees_minutes(entry["lon"])
        latitude = degrees_minutes(entry["lat"])
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Station {code} has malformed coordinates: {e}") from e

    if not -180.0 <= longitude <= 180.0 or not -90.0 <= latitude <= 90.0:
        raise ValueError(
            f"Station {code} coordinates out of range: ({longitude}, {latitude})"
        )

    altitude = entry.get("alt")
    return StationInfo(
        code=code,
        name=entry.get("kjName", code),
        longitude=longitude,
        latitude=latitude,
        en_name=entry.get("enName"),
        altitude=float(altitude) if altitude is not None else None,
    )


def parse_station_table(data: Mapping[str, Any]) -> Dict[str, StationInfo]:
    """Parse the station-table payload, skipping entries that do not parse."""
    table: Dict[str, StationInfo] = {}
    skipped = 0
    for code, entry in data.items():
        try:
            table[code] = parse_station_info(code, entry)
        except ValueError as e:
            skipped += 1
            logger.warning(f"Skipping station table entry: {e}")

    logger.debug(f"Parsed station table: {len(table)} stations, {skipped} skipped")
    return table


def build_record(
    code: str, observation: Mapping[str, Any], station: Optional[StationInfo] = None
) -> StationRecord:
    """Apply the quality gate to one station's snapshot readings."""
    values: Dict[str, Optional[float]] = {
        kind: quality_value(observation.get(kind)) for kind in SCALAR_KINDS
    }
    wind = wind_from_entries(
        observation.get("wind"), observation.get(WIND_DIRECTION_KEY)
    )
    return StationRecord(
        code=code,
        name=station.name if station else None,
        coordinates=station.coordinates if station else None,
        wind=wind,
        **values,
    )


def join_snapshot(
    table: Optional[Mapping[str, StationInfo]],
    snapshot: Optional[Mapping[str, Mapping[str, Any]]],
) -> List[StationRecord]:
    """
    Join the station table onto the snapshot.

    The snapshot drives iteration: one record per snapshot code, in snapshot
    order. Table-only stations produce nothing; snapshot codes without a
    table entry keep ``name`` and ``coordinates`` as ``None``. A station
    whose readings are not an object is logged and kept with every reading
    set to ``None``.
    """
    if not snapshot:
        return []

    table = table or {}
    records = []
    unmatched = 0
    for code, observation in snapshot.items():
        station = table.get(code)
        if station is None:
            unmatched += 1
        if observation is None:
            observation = {}
        elif not isinstance(observation, Mapping):
            logger.warning(
                f"Station {code} readings are {type(observation).__name__}, "
                "expected object; treating as no data"
            )
            observation = {}
        records.append(build_record(code, observation, station))

    if unmatched:
        logger.debug(f"{unmatched} snapshot stations have no station table entry")
    return records
