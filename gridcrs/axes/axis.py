"""
gridcrs/axes/axis.py

One-dimensional coordinate axes as decoded from a gridded dataset, and the
coordinate system that holds them in file order.

Axes are stored slow-varying first (time, height, lat, lon), which is the
order found in netCDF and GeoTIFF files. Reversing that order is the job of
the referencing layer, not of this module.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable

import numpy as np

from gridcrs.exceptions import InvalidArgumentError
from gridcrs.globals import configs


class AxisKind(Enum):
    LONGITUDE = "Lon"
    LATITUDE = "Lat"
    GENERIC_X = "GeoX"
    GENERIC_Y = "GeoY"
    HEIGHT = "Height"
    PRESSURE = "Pressure"
    GENERIC_VERTICAL = "GeoZ"
    TIME = "Time"
    RUN_TIME = "RunTime"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, text: str | AxisKind | None) -> AxisKind:
        """Resolve a kind from its enum name, netCDF axis type or common alias."""
        if text is None:
            return cls.UNKNOWN
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower().replace("-", "_").replace(" ", "_")
        kind = _KIND_ALIASES.get(key)
        if kind is None:
            raise InvalidArgumentError(
                f"Unknown axis kind '{text}'. Known kinds: {[k.value for k in cls]}"
            )
        return kind


_KIND_ALIASES: dict[str, AxisKind] = {}
for _kind in AxisKind:
    _KIND_ALIASES[_kind.name.lower()] = _kind
    _KIND_ALIASES[_kind.value.lower()] = _kind
_KIND_ALIASES.update({
    "lon": AxisKind.LONGITUDE, "x_lon": AxisKind.LONGITUDE,
    "lat": AxisKind.LATITUDE,
    "x": AxisKind.GENERIC_X, "projection_x_coordinate": AxisKind.GENERIC_X,
    "y": AxisKind.GENERIC_Y, "projection_y_coordinate": AxisKind.GENERIC_Y,
    "z": AxisKind.GENERIC_VERTICAL, "vertical": AxisKind.GENERIC_VERTICAL,
    "t": AxisKind.TIME,
    "reftime": AxisKind.RUN_TIME,
})
del _kind


@dataclass(frozen=True, eq=False)
class Axis:
    """A 1-D coordinate axis.

    Regular axes are fully described by ``start``, ``increment`` and ``size``.
    Irregular axes keep their explicit ``values``; ``start`` and ``increment``
    are then the first value and the mean spacing.
    """
    name: str
    kind: AxisKind | None
    units: str = ""
    start: float = float("nan")
    increment: float = float("nan")
    size: int = 0
    is_regular: bool = True
    values: np.ndarray | None = field(default=None, repr=False)
    calendar: str | None = None

    @classmethod
    def regular(
        cls,
        name: str,
        kind: AxisKind | str | None,
        *,
        start: float,
        increment: float,
        size: int,
        units: str = "",
    ) -> Axis:
        if size < 1:
            raise InvalidArgumentError(f"Axis '{name}' must have at least one sample, got {size}.")
        return cls(
            name=name,
            kind=AxisKind.parse(kind) if kind is not None else None,
            units=units,
            start=float(start),
            increment=float(increment),
            size=int(size),
            is_regular=True,
        )

    @classmethod
    def from_values(
        cls,
        name: str,
        kind: AxisKind | str | None,
        values: Iterable[float],
        *,
        units: str = "",
    ) -> Axis:
        """Build an axis from explicit coordinates, detecting regular spacing."""
        arr = np.array(values if isinstance(values, np.ndarray) else list(values), dtype=float)
        if arr.ndim != 1:
            raise InvalidArgumentError(f"Axis '{name}' is not one-dimensional (shape {arr.shape}).")
        if arr.size == 0:
            raise InvalidArgumentError(f"Axis '{name}' has no values.")
        arr.setflags(write=False)

        n = arr.size
        if n < 2:
            start, increment, regular = float(arr[0]), 0.0, True
        else:
            start = float(arr[0])
            increment = float((arr[-1] - arr[0]) / (n - 1))
            regular = bool(np.allclose(np.diff(arr), increment, rtol=configs.REGULAR_RTOL, atol=0.0))
        return cls(
            name=name,
            kind=AxisKind.parse(kind) if kind is not None else None,
            units=units,
            start=start,
            increment=increment,
            size=n,
            is_regular=regular,
            values=arr,
        )

    def coordinates(self) -> np.ndarray:
        """All coordinate values along this axis."""
        if self.values is not None:
            return self.values
        return self.start + self.increment * np.arange(self.size, dtype=float)

    def with_calendar(self, calendar: str) -> Axis:
        return replace(self, calendar=calendar)


def _is_lat_lon_projection(projection: Any) -> bool:
    if projection is None:
        return True
    if isinstance(projection, dict):
        return projection.get("grid_mapping_name") == "latitude_longitude"
    return False


@dataclass(frozen=True, eq=False)
class GridCoordinateSystem:
    """The whole set of axes of a dataset variable, in file (slow-varying first) order.

    ``projection`` holds whatever the projection provider understands: a CF
    grid-mapping dict, a WKT/PROJ string or an EPSG code.
    """
    name: str
    axes: tuple[Axis, ...]
    projection: Any = None

    def __post_init__(self):
        object.__setattr__(self, "axes", tuple(self.axes))

    @property
    def rank(self) -> int:
        return len(self.axes)

    def _find(self, kind: AxisKind) -> Axis | None:
        return next((a for a in self.axes if a is not None and a.kind is kind), None)

    @property
    def is_lat_lon(self) -> bool:
        """Latitude and longitude axes present, with no real map projection."""
        return (
            self._find(AxisKind.LATITUDE) is not None
            and self._find(AxisKind.LONGITUDE) is not None
            and _is_lat_lon_projection(self.projection)
        )

    @property
    def is_geo_xy(self) -> bool:
        """Projection x and y axes present, with a map projection to interpret them."""
        return (
            self._find(AxisKind.GENERIC_X) is not None
            and self._find(AxisKind.GENERIC_Y) is not None
            and not _is_lat_lon_projection(self.projection)
        )


__all__ = ["AxisKind", "Axis", "GridCoordinateSystem"]
