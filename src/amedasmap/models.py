"""
Data models for AMeDAS station metadata, observations and encoded points.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

# Measurement kinds in snapshot key form, in display order
MEASUREMENT_KINDS = (
    "precipitation10m",
    "precipitation1h",
    "precipitation3h",
    "precipitation24h",
    "wind",
    "temp",
    "sun1h",
    "snow",
    "snow6h",
    "snow12h",
    "snow24h",
    "humidity",
)

SCALAR_KINDS = tuple(kind for kind in MEASUREMENT_KINDS if kind != "wind")

Coordinates = Tuple[float, float]
RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class StationInfo:
    """Static metadata for one AMeDAS station."""

    code: str
    name: str
    longitude: float
    latitude: float
    en_name: Optional[str] = None
    altitude: Optional[float] = None

    @property
    def coordinates(self) -> Coordinates:
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class Wind:
    """Quality-checked wind reading: speed in m/s, direction in degrees."""

    speed: float
    direction: float


@dataclass(frozen=True)
class StationRecord:
    """
    One station's static metadata joined with its snapshot readings.

    Every measurement field is ``None`` when the station did not report the
    kind or its quality flag was not 0.
    """

    code: str
    name: Optional[str]
    coordinates: Optional[Coordinates]
    precipitation10m: Optional[float] = None
    precipitation1h: Optional[float] = None
    precipitation3h: Optional[float] = None
    precipitation24h: Optional[float] = None
    wind: Optional[Wind] = None
    temp: Optional[float] = None
    sun1h: Optional[float] = None
    snow: Optional[float] = None
    snow6h: Optional[float] = None
    snow12h: Optional[float] = None
    snow24h: Optional[float] = None
    humidity: Optional[float] = None

    def get(self, kind: str) -> Union[float, Wind, None]:
        """Return the reading for a measurement kind."""
        if kind not in MEASUREMENT_KINDS:
            raise KeyError(f"Unknown measurement kind '{kind}'")
        return getattr(self, kind)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a plain dict, splitting wind into speed and direction."""
        longitude, latitude = self.coordinates or (None, None)
        row: Dict[str, Any] = {
            "code": self.code,
            "name": self.name,
            "longitude": longitude,
            "latitude": latitude,
        }
        for kind in SCALAR_KINDS:
            row[kind] = getattr(self, kind)
        row["wind_speed"] = self.wind.speed if self.wind else None
        row["wind_direction"] = self.wind.direction if self.wind else None
        return row


@dataclass(frozen=True)
class EncodedPoint:
    """Render-ready encoding of one station for one measurement kind."""

    code: str
    name: Optional[str]
    coordinates: Optional[Coordinates]
    normalized_value: Optional[float]
    raw_value: Optional[float]
    unit: str
    color: RGBA
    elevation: float = 0.0
    icon: Optional[str] = None
    angle: float = 0.0
    direction: Optional[float] = None

    @property
    def has_data(self) -> bool:
        return self.normalized_value is not None

    def to_dict(self) -> Dict[str, Any]:
        longitude, latitude = self.coordinates or (None, None)
        return {
            "code": self.code,
            "name": self.name,
            "longitude": longitude,
            "latitude": latitude,
            "normalized_value": self.normalized_value,
            "raw_value": self.raw_value,
            "unit": self.unit,
            "color": self.color,
            "elevation": self.elevation,
            "icon": self.icon,
            "angle": self.angle,
            "direction": self.direction,
        }


@dataclass
class FetchResult:
    """
    Outcome of one fetch cycle.

    ``errors`` maps the failed source (``"latest_time"``, ``"station_table"``
    or ``"snapshot"``) to the exception that stopped it. Records are still
    returned for whatever could be joined.
    """

    timestamp: Optional[datetime]
    records: List[StationRecord] = field(default_factory=list)
    errors: Dict[str, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[StationRecord]:
        return iter(self.records)
