"""
Tests for map projections resolved with pyproj.
"""
import math

import numpy as np
import pytest

from gridcrs.axes.axis import Axis, AxisKind
from gridcrs.axes.completion import CalendarCompleter
from gridcrs.exceptions import InvalidArgumentError
from gridcrs.globals import configs
from gridcrs.referencing.datum import SPHERE, SphericalDatum
from gridcrs.referencing.identified import WORLD
from gridcrs.referencing.projection import PyprojProjectionProvider


@pytest.fixture
def provider():
    return PyprojProjectionProvider()


class TestMercator:
    def test_identification(self, provider, mercator):
        handle = provider.resolve(mercator)
        assert handle.code == "mercator"
        assert str(handle) == "netCDF:mercator"
        assert "Mercator" in handle.method
        assert handle.domain_of_validity.equals(WORLD)

    def test_sphere_radius(self, provider, mercator):
        """One degree of longitude on the equator is R * pi / 180 metres."""
        handle = provider.resolve(mercator)
        x, y = handle.forward(1.0, 0.0)
        assert float(x) == pytest.approx(configs.EARTH_RADIUS * math.pi / 180.0, rel=1e-9)
        assert float(y) == pytest.approx(0.0, abs=1e-6)

    def test_declared_ellipsoid_is_ignored(self, provider, mercator):
        wgs84 = dict(mercator, semi_major_axis=6378137.0, inverse_flattening=298.257223563)
        x_sphere, _ = provider.resolve(mercator).forward(10.0, 0.0)
        x_declared, _ = provider.resolve(wgs84).forward(10.0, 0.0)
        assert float(x_declared) == pytest.approx(float(x_sphere))

    def test_datum_is_used(self, provider, mercator):
        small = SphericalDatum("Small", 1000.0)
        x, _ = provider.resolve(mercator, small).forward(180.0, 0.0)
        assert float(x) == pytest.approx(1000.0 * math.pi)

    def test_forward_inverse_consistency(self, provider, mercator):
        rng = np.random.default_rng(20240501)
        lon = rng.uniform(-180.0, 180.0, 500)
        lat = rng.uniform(-80.0, 80.0, 500)
        handle = provider.resolve(mercator)

        x, y = handle.forward(lon, lat)
        lon2, lat2 = handle.inverse(x, y)

        np.testing.assert_allclose(lon2, lon, atol=1e-6)
        np.testing.assert_allclose(lat2, lat, atol=1e-6)


class TestResolve:
    @pytest.mark.parametrize("parameters", [
        None,
        {},
        "",
        {"grid_mapping_name": "latitude_longitude"},
        {"standard_parallel": 0.0},
    ])
    def test_no_projection(self, provider, parameters):
        assert provider.resolve(parameters) is None

    def test_geographic_code(self, provider):
        assert provider.resolve("EPSG:4326") is None

    def test_epsg_code(self, provider):
        handle = provider.resolve("EPSG:3857")
        assert handle.code == "WGS 84 / Pseudo-Mercator"
        assert handle.datum is SPHERE
        west, south, east, north = handle.domain_of_validity.bounds
        assert south > -90.0 and north < 90.0

    def test_lambert_parameters(self, provider):
        handle = provider.resolve({
            "grid_mapping_name": "lambert_conformal_conic",
            "standard_parallel": [33.0, 45.0],
            "longitude_of_central_meridian": -97.0,
            "latitude_of_projection_origin": 40.0,
        })
        assert handle.code == "lambert_conformal_conic"
        assert handle.parameters
        x, y = handle.forward(-97.0, 40.0)
        assert float(x) == pytest.approx(0.0, abs=1e-6)
        assert float(y) == pytest.approx(0.0, abs=1e-6)

    def test_garbage(self, provider):
        with pytest.raises(InvalidArgumentError):
            provider.resolve("not a projection at all")


class TestCalendarCompleter:
    def _axis(self, units="days since 2000-01-01"):
        return Axis.regular("time", AxisKind.TIME, start=0, increment=1, size=3, units=units)

    def test_calendar_attribute(self):
        axis = CalendarCompleter().complete(self._axis(), {"time": {"calendar": "360_DAY"}})
        assert axis.calendar == "360_day"
        assert axis.units == "days since 2000-01-01"

    def test_default_calendar(self):
        axis = CalendarCompleter("julian").complete(self._axis(), {})
        assert axis.calendar == "julian"

    def test_not_a_time_reference(self):
        with pytest.raises(ValueError):
            CalendarCompleter().complete(self._axis("metres"), {})
