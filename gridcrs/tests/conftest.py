import pytest

from gridcrs.axes.axis import Axis, AxisKind, GridCoordinateSystem


@pytest.fixture
def make_axis():
    """Factory for regular axes: make_axis("lat", AxisKind.LATITUDE, start=-90, step=1, n=181)."""
    def _make(name, kind, *, start=0.0, step=1.0, n=10, units=""):
        return Axis.regular(name, kind, start=start, increment=step, size=n, units=units)
    return _make


@pytest.fixture
def time_height_lat_lon(make_axis):
    """The common 4-D layout, in file order."""
    return [
        make_axis("time", AxisKind.TIME, start=0, step=6, n=4, units="hours since 2000-01-01 00:00:00"),
        make_axis("height", AxisKind.HEIGHT, start=10, step=10, n=5, units="m"),
        make_axis("lat", AxisKind.LATITUDE, start=-90, step=0.5, n=361, units="degrees_north"),
        make_axis("lon", AxisKind.LONGITUDE, start=-180, step=0.5, n=720, units="degrees_east"),
    ]


@pytest.fixture
def mercator():
    return {
        "grid_mapping_name": "mercator",
        "longitude_of_projection_origin": 0.0,
        "standard_parallel": 0.0,
        "false_easting": 0.0,
        "false_northing": 0.0,
    }


@pytest.fixture
def recorded_warnings():
    """A warning sink that keeps (message, cause) pairs."""
    seen = []

    def _warn(msg, cause=None):
        seen.append((msg, cause))

    _warn.seen = seen
    return _warn


def coordinate_system(axes, name="grid", projection=None):
    return GridCoordinateSystem(name=name, axes=axes, projection=projection)


@pytest.fixture
def make_cs():
    return coordinate_system
