"""
Tests for the measurement catalog.
"""

import pytest

from amedasmap.catalog import (
    MEASUREMENT_CATALOG,
    MeasurementSetting,
    get_setting,
    validate_catalog,
)
from amedasmap.color import hue_color
from amedasmap.exceptions import CatalogError
from amedasmap.models import MEASUREMENT_KINDS


class TestMeasurementCatalog:
    def test_covers_every_kind(self):
        assert set(MEASUREMENT_CATALOG) == set(MEASUREMENT_KINDS)
        assert len(MEASUREMENT_CATALOG) == 12

    def test_builtin_catalog_is_valid(self):
        validate_catalog(MEASUREMENT_CATALOG)

    def test_wind_has_unit_pair(self):
        wind = MEASUREMENT_CATALOG["wind"]
        assert wind.is_vector
        assert wind.unit == ("m/s", "°")
        assert wind.display_unit == "m/s"

    def test_default_color_fn(self):
        assert MEASUREMENT_CATALOG["temp"].color_fn is hue_color


class TestMeasurementSetting:
    def test_zero_width_range_fails_fast(self):
        with pytest.raises(CatalogError, match="zero width"):
            MeasurementSetting("temp", "気温", "℃", 10.0, 10.0)

    def test_non_finite_range_fails_fast(self):
        with pytest.raises(CatalogError, match="finite"):
            MeasurementSetting("temp", "気温", "℃", 0.0, float("inf"))


class TestValidateCatalog:
    def test_unknown_kind(self):
        catalog = {"pressure": MeasurementSetting("pressure", "気圧", "hPa", 950, 1050)}
        with pytest.raises(CatalogError, match="Unknown measurement kind"):
            validate_catalog(catalog)

    def test_mismatched_key(self):
        catalog = {"temp": MeasurementSetting("humidity", "湿度", "%", 0, 100)}
        with pytest.raises(CatalogError, match="holds the setting"):
            validate_catalog(catalog)

    def test_wind_needs_unit_pair(self):
        catalog = {"wind": MeasurementSetting("wind", "風速", "m/s", 0, 20)}
        with pytest.raises(CatalogError, match="unit pair"):
            validate_catalog(catalog)


class TestGetSetting:
    def test_known_kind(self):
        assert get_setting("humidity").unit == "%"

    def test_unknown_kind(self):
        with pytest.raises(CatalogError, match="Unsupported measurement kind"):
            get_setting("visibility")

    def test_custom_catalog(self):
        custom = {"temp": MeasurementSetting("temp", "気温", "℃", -10.0, 30.0)}
        assert get_setting("temp", custom).min == -10.0
