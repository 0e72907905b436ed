"""
Python client for live JMA AMeDAS observations and their map encoding.

Fetch the latest station snapshot, quality-gate it into station records and
encode a selected measurement as colours, elevations and wind icons.
"""

try:
    from importlib import metadata

    __version__ = metadata.version(__name__)
except Exception:
    __version__ = "unknown"

from .catalog import (
    MEASUREMENT_CATALOG,
    VECTOR_KINDS,
    MeasurementSetting,
    get_setting,
    validate_catalog,
)
from .client import AmedasClient
from .color import hsv_to_rgb, hue_color, mix, normalize
from .config import ClientConfig
from .encoding import (
    LAYER_STYLES,
    NO_DATA_COLOR,
    EncodingContext,
    encode,
    encode_context,
    to_dataframe,
)
from .exceptions import (
    AmedasConnectionError,
    AmedasError,
    AmedasQueryError,
    CatalogError,
)
from .extract import build_record, direction_to_degrees, join_snapshot, quality_value
from .fetch import fetch_latest_time, fetch_stations
from .models import (
    MEASUREMENT_KINDS,
    EncodedPoint,
    FetchResult,
    StationInfo,
    StationRecord,
    Wind,
)
from .sync import AsyncSyncBridge, fetch_latest_time_sync, fetch_stations_sync

__all__ = [
    # Client and configuration
    "AmedasClient",
    "ClientConfig",
    # Fetching
    "fetch_latest_time",
    "fetch_stations",
    "fetch_latest_time_sync",
    "fetch_stations_sync",
    "AsyncSyncBridge",
    # Extraction
    "build_record",
    "direction_to_degrees",
    "join_snapshot",
    "quality_value",
    # Models
    "MEASUREMENT_KINDS",
    "EncodedPoint",
    "FetchResult",
    "StationInfo",
    "StationRecord",
    "Wind",
    # Catalog
    "MEASUREMENT_CATALOG",
    "VECTOR_KINDS",
    "MeasurementSetting",
    "get_setting",
    "validate_catalog",
    # Colour and encoding
    "normalize",
    "mix",
    "hsv_to_rgb",
    "hue_color",
    "LAYER_STYLES",
    "NO_DATA_COLOR",
    "EncodingContext",
    "encode",
    "encode_context",
    "to_dataframe",
    # Exceptions
    "AmedasError",
    "AmedasConnectionError",
    "AmedasQueryError",
    "CatalogError",
]
