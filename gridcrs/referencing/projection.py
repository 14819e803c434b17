"""
gridcrs/referencing/projection.py

Map projections for projected grid CRS, evaluated with pyproj.

A projected CRS only carries projection *parameters* (a CF grid-mapping
dict, a WKT/PROJ string or an EPSG code). The provider turns them into a
:class:`ProjectionHandle` the first time the conversion is requested.
"""
from __future__ import annotations

import math
from typing import Any, Protocol

import numpy as np
import pyproj
from pyproj.enums import TransformDirection
from pyproj.exceptions import CRSError
from shapely.geometry import Polygon, box

from gridcrs.exceptions import InvalidArgumentError
from gridcrs.referencing.datum import SPHERE, SphericalDatum
from gridcrs.referencing.identified import WORLD, IdentifiedObject

# CF ellipsoid attributes dropped in favour of the asserted sphere
_ELLIPSOID_KEYS = (
    "semi_major_axis",
    "semi_minor_axis",
    "inverse_flattening",
    "reference_ellipsoid_name",
    "horizontal_datum_name",
    "geographic_crs_name",
    "prime_meridian_name",
    "longitude_of_prime_meridian",
    "crs_wkt",
)


class ProjectionProvider(Protocol):
    def resolve(self, parameters: Any, datum: SphericalDatum = SPHERE) -> ProjectionHandle | None:
        ...


class ProjectionHandle(IdentifiedObject):
    """Conversion from (longitude, latitude) on the base sphere to projected (x, y)."""

    def __init__(self, target: pyproj.CRS, *, datum: SphericalDatum = SPHERE, name: str | None = None):
        self.target_crs = target
        self.datum = datum
        self.source_crs = target.geodetic_crs or datum.to_pyproj()
        self._name = name or target.name
        self._transformer = pyproj.Transformer.from_crs(self.source_crs, target, always_xy=True)

    @property
    def code(self) -> str:
        return self._name

    @property
    def on_datum(self) -> bool:
        """True when forward/inverse run on the asserted sphere.

        CF grid mappings are always rebuilt on the sphere. WKT, PROJ and EPSG
        definitions keep their own ellipsoid, which then differs from
        :attr:`datum`.
        """
        ellipsoid = self.source_crs.ellipsoid
        if ellipsoid is None:
            return False
        return (
            math.isclose(ellipsoid.semi_major_metre, self.datum.radius)
            and math.isclose(ellipsoid.semi_minor_metre, self.datum.radius)
        )

    @property
    def method(self) -> str:
        op = self.target_crs.coordinate_operation
        return op.method_name if op is not None else self._name

    @property
    def parameters(self) -> dict[str, float]:
        op = self.target_crs.coordinate_operation
        if op is None:
            return {}
        return {p.name: p.value for p in op.params}

    @property
    def domain_of_validity(self) -> Polygon:
        area = self.target_crs.area_of_use
        if area is None:
            return WORLD
        return box(area.west, area.south, area.east, area.north)

    def forward(self, lon, lat):
        """Project longitude/latitude (degrees) to x/y."""
        x, y = self._transformer.transform(np.asarray(lon, dtype=float), np.asarray(lat, dtype=float))
        return x, y

    def inverse(self, x, y):
        """Unproject x/y back to longitude/latitude (degrees)."""
        lon, lat = self._transformer.transform(
            np.asarray(x, dtype=float), np.asarray(y, dtype=float),
            direction=TransformDirection.INVERSE,
        )
        return lon, lat

    def __repr__(self):
        return f"ProjectionHandle({self._name!r}, method={self.method!r})"


class PyprojProjectionProvider:
    """Resolve projection parameters with pyproj.

    CF grid-mapping dicts are built on the given sphere whatever ellipsoid
    they declare. Strings and EPSG codes are taken as they are.
    """

    def resolve(self, parameters: Any, datum: SphericalDatum = SPHERE) -> ProjectionHandle | None:
        if parameters is None or (isinstance(parameters, (dict, str)) and not parameters):
            return None
        try:
            if isinstance(parameters, dict):
                mapping = parameters.get("grid_mapping_name")
                if mapping in (None, "latitude_longitude"):
                    return None
                cf = {k: v for k, v in parameters.items() if k not in _ELLIPSOID_KEYS}
                cf["earth_radius"] = datum.radius
                target = pyproj.CRS.from_cf(cf)
                name = mapping
            else:
                target = pyproj.CRS.from_user_input(parameters)
                name = None
        except CRSError as exc:
            raise InvalidArgumentError(f"Cannot build a projection from {parameters!r}") from exc
        if not target.is_projected:
            return None
        return ProjectionHandle(target, datum=datum, name=name)


DEFAULT_PROVIDER = PyprojProjectionProvider()


__all__ = [
    "ProjectionProvider",
    "ProjectionHandle",
    "PyprojProjectionProvider",
    "DEFAULT_PROVIDER",
]
