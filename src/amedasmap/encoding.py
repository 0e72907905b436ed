"""
Visual encoding of station records for a selected measurement kind.

``encode`` is a pure function of its inputs: re-running it on the same
records and kind gives an identical list, so it can be called on every
selection change without re-fetching.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from .catalog import MEASUREMENT_CATALOG, MeasurementSetting, get_setting, validate_catalog
from .color import normalize
from .exceptions import CatalogError
from .models import RGBA, EncodedPoint, StationRecord

logger = logging.getLogger(__name__)

# Alpha for points with data; points without data use NO_DATA_COLOR
OPAQUE = 255
NO_DATA_COLOR: RGBA = (255, 255, 255, 32)

# Icons for vector kinds
ICON_ARROW = "arrow"
ICON_CALM = "calm"

DEFAULT_ELEVATION_SCALE = 50000.0

LAYER_STYLES = ("column", "grid", "scatter", "icon")


@dataclass(frozen=True)
class EncodingContext:
    """The current selection driving an encoding pass."""

    kind: str = "temp"
    layer: str = "column"
    catalog: Mapping[str, MeasurementSetting] = field(
        default_factory=lambda: MEASUREMENT_CATALOG
    )
    elevation_scale: float = DEFAULT_ELEVATION_SCALE

    def __post_init__(self) -> None:
        if self.layer not in LAYER_STYLES:
            raise ValueError(
                f"Unsupported layer '{self.layer}'. Available: {list(LAYER_STYLES)}"
            )
        validate_catalog(self.catalog)
        setting = get_setting(self.kind, self.catalog)
        if self.layer == "icon" and not setting.is_vector:
            raise CatalogError(
                f"The icon layer needs a directional kind, got '{self.kind}'"
            )

    @property
    def setting(self) -> MeasurementSetting:
        return get_setting(self.kind, self.catalog)


def _color(setting: MeasurementSetting, fraction: Optional[float]) -> RGBA:
    rgb = setting.color_fn(fraction) if fraction is not None else None
    if rgb is None:
        return NO_DATA_COLOR
    r, g, b = rgb
    return (r, g, b, OPAQUE)


def encode_record(
    record: StationRecord,
    setting: MeasurementSetting,
    elevation_scale: float = DEFAULT_ELEVATION_SCALE,
) -> EncodedPoint:
    """Encode one record for the measurement described by ``setting``."""
    if setting.is_vector:
        wind = record.wind
        raw_value = wind.speed if wind is not None else None
        direction = wind.direction if wind is not None else None
    else:
        raw_value = record.get(setting.kind)  # type: ignore[assignment]
        direction = None

    fraction = normalize(raw_value, setting.min, setting.max)
    elevation = fraction * elevation_scale if fraction is not None else 0.0

    icon = None
    angle = 0.0
    if setting.is_vector:
        # Compass code 0 reads as calm as well as north; treated as calm here
        if fraction is None or direction is None or direction == 0.0:
            icon = ICON_CALM
        else:
            icon = ICON_ARROW
        if direction is not None:
            angle = 180.0 - direction

    return EncodedPoint(
        code=record.code,
        name=record.name,
        coordinates=record.coordinates,
        normalized_value=fraction,
        raw_value=raw_value,
        unit=setting.display_unit,
        color=_color(setting, fraction),
        elevation=elevation,
        icon=icon,
        angle=angle,
        direction=direction,
    )


def encode(
    records: Iterable[StationRecord],
    kind: str,
    catalog: Optional[Mapping[str, MeasurementSetting]] = None,
    elevation_scale: float = DEFAULT_ELEVATION_SCALE,
) -> List[EncodedPoint]:
    """
    Encode every record for ``kind``.

    Args:
        records: Station records, e.g. from ``fetch_stations``
        kind: Measurement kind (``"temp"``, ``"wind"``, ``"precipitation1h"``, ...)
        catalog: Measurement catalog; the built-in one when omitted
        elevation_scale: Elevation given to a normalized value of 1.0

    Returns:
        One EncodedPoint per record, in input order. Records without data
        for ``kind`` are kept and coloured with ``NO_DATA_COLOR``.

    Raises:
        CatalogError: If ``kind`` is not in the catalog
    """
    setting = get_setting(kind, catalog)
    points = [encode_record(record, setting, elevation_scale) for record in records]
    logger.debug(
        f"Encoded {len(points)} points for '{kind}', "
        f"{sum(1 for p in points if p.has_data)} with data"
    )
    return points


def encode_context(
    records: Iterable[StationRecord], context: EncodingContext
) -> List[EncodedPoint]:
    """Encode records for the selection held by ``context``."""
    return encode(records, context.kind, context.catalog, context.elevation_scale)


def to_dataframe(
    items: Sequence[Union[StationRecord, EncodedPoint]], library: str = "pandas"
) -> Any:
    """
    Convert station records or encoded points to a pandas DataFrame.

    Wind readings are split into ``wind_speed`` and ``wind_direction``
    columns; coordinates into ``longitude`` and ``latitude``.
    """
    if library.lower() != "pandas":
        raise ValueError(f"Unsupported library: {library}. Only 'pandas' is supported.")

    try:
        import pandas as pd
    except ImportError:
        raise ImportError(
            "pandas is required for DataFrame conversion. Install with: pip install pandas"
        ) from None

    rows = [item.to_dict() for item in items]
    df = pd.DataFrame(rows)
    if not df.empty and "code" in df.columns:
        df = df.set_index("code", drop=False)
    return df
