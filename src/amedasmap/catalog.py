"""
Measurement catalog: display names, units, observable ranges and colour ramps.
"""

import math
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple, Union

from .color import hue_color
from .exceptions import CatalogError
from .models import MEASUREMENT_KINDS, RGB

ColorFn = Callable[[Optional[float]], Optional[RGB]]
Unit = Union[str, Tuple[str, str]]

# Kinds whose reading carries a direction as well as a magnitude
VECTOR_KINDS = frozenset({"wind"})


@dataclass(frozen=True)
class MeasurementSetting:
    """How one measurement kind is labelled, scaled and coloured."""

    kind: str
    name: str
    unit: Unit
    min: float
    max: float
    color_fn: ColorFn = hue_color

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise CatalogError(
                f"Range for '{self.kind}' must be finite, got [{self.min}, {self.max}]"
            )
        if self.min == self.max:
            raise CatalogError(
                f"Range for '{self.kind}' has zero width: min == max == {self.min}"
            )

    @property
    def is_vector(self) -> bool:
        return self.kind in VECTOR_KINDS

    @property
    def display_unit(self) -> str:
        """Unit of the magnitude (the speed unit for vector kinds)."""
        if isinstance(self.unit, tuple):
            return self.unit[0]
        return self.unit


MEASUREMENT_CATALOG: Mapping[str, MeasurementSetting] = {
    setting.kind: setting
    for setting in (
        MeasurementSetting("precipitation10m", "10分間降水量", "mm", 0.0, 20.0),
        MeasurementSetting("precipitation1h", "1時間降水量", "mm", 0.0, 50.0),
        MeasurementSetting("precipitation3h", "3時間降水量", "mm", 0.0, 100.0),
        MeasurementSetting("precipitation24h", "24時間降水量", "mm", 0.0, 300.0),
        MeasurementSetting("wind", "風向・風速", ("m/s", "°"), 0.0, 20.0),
        MeasurementSetting("temp", "気温", "℃", -20.0, 40.0),
        MeasurementSetting("sun1h", "日照時間", "h", 0.0, 1.0),
        MeasurementSetting("snow", "積雪深", "cm", 0.0, 300.0),
        MeasurementSetting("snow6h", "6時間降雪量", "cm", 0.0, 30.0),
        MeasurementSetting("snow12h", "12時間降雪量", "cm", 0.0, 50.0),
        MeasurementSetting("snow24h", "24時間降雪量", "cm", 0.0, 80.0),
        MeasurementSetting("humidity", "湿度", "%", 0.0, 100.0),
    )
}


def validate_catalog(catalog: Mapping[str, MeasurementSetting]) -> None:
    """
    Check a catalog before it is used for encoding.

    Raises:
        CatalogError: If a key is not a known kind, does not match its
            setting, or a range is unusable
    """
    for kind, setting in catalog.items():
        if kind not in MEASUREMENT_KINDS:
            raise CatalogError(
                f"Unknown measurement kind '{kind}'. Available: {list(MEASUREMENT_KINDS)}"
            )
        if setting.kind != kind:
            raise CatalogError(
                f"Catalog key '{kind}' holds the setting for '{setting.kind}'"
            )
        if setting.is_vector and not isinstance(setting.unit, tuple):
            raise CatalogError(
                f"Vector kind '{kind}' needs a (magnitude, direction) unit pair"
            )


def get_setting(
    kind: str, catalog: Optional[Mapping[str, MeasurementSetting]] = None
) -> MeasurementSetting:
    """Look up the setting for ``kind``, raising ``CatalogError`` if absent."""
    if catalog is None:
        catalog = MEASUREMENT_CATALOG
    try:
        return catalog[kind]
    except KeyError:
        raise CatalogError(
            f"Unsupported measurement kind '{kind}'. Available: {list(catalog.keys())}"
        ) from None
