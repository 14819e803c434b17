"""Datums: the spherical geodetic datum and vertical datum types."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pyproj

from gridcrs.axes.axis import AxisKind
from gridcrs.globals import configs


@dataclass(frozen=True)
class SphericalDatum:
    """A geodetic datum on a sphere.

    Grid files do not state their datum and the projection formulas used for
    them are spherical, so a sphere is presumed rather than WGS84. The datum
    also serves as the base geographic CRS of projected CRS.
    """
    name: str = configs.SPHERE_NAME
    radius: float = configs.EARTH_RADIUS

    @property
    def code(self) -> str:
        return self.name

    def to_pyproj(self) -> pyproj.CRS:
        """Longitude/latitude CRS on this sphere."""
        return pyproj.CRS.from_proj4(f"+proj=longlat +R={self.radius!r} +no_defs +type=crs")


SPHERE = SphericalDatum()


class VerticalDatumType(Enum):
    BAROMETRIC = "barometric"
    GEOIDAL = "geoidal"
    ELLIPSOIDAL = "ellipsoidal"
    OTHER_SURFACE = "other_surface"

    @classmethod
    def for_axis_kind(cls, kind: AxisKind | None) -> VerticalDatumType:
        if kind is AxisKind.PRESSURE:
            return cls.BAROMETRIC
        if kind is AxisKind.HEIGHT:
            return cls.GEOIDAL
        if kind is AxisKind.GENERIC_VERTICAL:
            return cls.ELLIPSOIDAL
        return cls.OTHER_SURFACE


__all__ = ["SphericalDatum", "SPHERE", "VerticalDatumType"]
