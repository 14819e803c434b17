"""
gridcrs/referencing/crs.py

Coordinate reference systems built from the axes of a gridded dataset.

Axis order
----------
The order of axes exposed by every CRS here is the reverse of the order in
the wrapped coordinate system. Files store axes as (time, height, latitude,
longitude) while referencing software expects (longitude, latitude, height,
time). ``crs.axis(0)`` is therefore the last axis of the file.

Restrictions
------------
- Only 1-D axes are supported.
- Files do not declare their geodetic datum. Geographic and projected CRS
  assume a sphere (not WGS84) because the projection formulas used for such
  grids are spherical. The datum is injected through :func:`wrap`.
- The axes of the wrapped coordinate system must not change during the
  lifetime of the CRS.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Sequence

import cf_units

from gridcrs.axes.axis import Axis, GridCoordinateSystem
from gridcrs.axes.completion import AxisCompleter, CalendarCompleter
from gridcrs.exceptions import IllegalStateError, InvalidArgumentError
from gridcrs.globals import configs, logutil
from gridcrs.referencing.cache import LazyCell
from gridcrs.referencing.classifier import AxisGroup, GroupCategory, Unclassifiable, classify
from gridcrs.referencing.datum import SPHERE, SphericalDatum, VerticalDatumType
from gridcrs.referencing.identified import IdentifiedObject
from gridcrs.referencing.projection import DEFAULT_PROVIDER, ProjectionHandle, ProjectionProvider
from gridcrs.referencing.transform import (
    DEFAULT_FACTORY,
    AffineTransform,
    LinearTransformFactory,
    build_transform,
)


class GridCRS(IdentifiedObject):
    """A CRS over some or all axes of a :class:`GridCoordinateSystem`.

    Used as is when the axes could not be split into components: it then
    makes no geodetic claim and only carries the axes and the grid geometry.

    Parameters
    ----------
    cs
        The wrapped coordinate system. Its dimension may be larger than the
        dimension of this CRS, since one coordinate system can be split into
        several components.
    axes
        The axes of this CRS, in file order unless ``reverse`` is false.
    """

    def __init__(
        self,
        cs: GridCoordinateSystem,
        axes: Sequence[Axis],
        *,
        reverse: bool = True,
        factory: LinearTransformFactory = DEFAULT_FACTORY,
    ):
        if cs is None:
            raise InvalidArgumentError("A coordinate system is required.")
        self._cs = cs
        axes = tuple(axes)
        self._axes = axes[::-1] if reverse else axes
        self._factory = factory
        self._grid_to_crs = LazyCell(lambda: build_transform(self._axes, 0, len(self._axes), factory=self._factory))

    @property
    def delegate(self) -> GridCoordinateSystem:
        return self._cs

    @property
    def code(self) -> str:
        return self._cs.name

    @property
    def coordinate_system(self) -> GridCRS:
        return self

    @property
    def dimension(self) -> int:
        return len(self._axes)

    @property
    def axes(self) -> tuple[Axis, ...]:
        return self._axes

    def _check(self, dimension: int) -> int:
        if not 0 <= dimension < self.dimension:
            raise IndexError(f"Dimension {dimension} is out of range [0, {self.dimension}).")
        return dimension

    def axis(self, dimension: int) -> Axis:
        """Axis at ``dimension``, counted in reversed (fast-varying first) order."""
        return self._axes[self._check(dimension)]

    def size(self, dimension: int) -> int:
        return self._axes[self._check(dimension)].size

    def low(self, dimension: int) -> int:
        """Minimum inclusive grid index along ``dimension``, always 0."""
        self._check(dimension)
        return 0

    def high(self, dimension: int) -> int:
        """Maximum inclusive grid index along ``dimension``."""
        return self.low(dimension) + self.size(dimension) - 1

    def grid_to_crs(self, lower: int | None = None, upper: int | None = None) -> AffineTransform | None:
        """Transform from grid indices to CRS coordinates, or ``None`` if the axes are not regular.

        Without arguments the transform covers every dimension and is computed
        once. With ``lower``/``upper`` it covers ``[lower, upper)`` only.
        """
        if lower is None and upper is None:
            return self._grid_to_crs.get()
        lower = 0 if lower is None else lower
        upper = self.dimension if upper is None else upper
        return build_transform(self._axes, lower, upper, factory=self._factory)

    def __repr__(self):
        return f"{type(self).__name__}({self}, dimension={self.dimension})"


class GeographicCRS(GridCRS):
    """Latitude/longitude CRS on the sphere.

    Normally two-dimensional, but 1 or more than 2 axes happen when an
    unusual file could not be split any further.
    """

    def __init__(self, datum: SphericalDatum, cs: GridCoordinateSystem, axes: Sequence[Axis], **kwargs):
        super().__init__(cs, axes, **kwargs)
        self._datum = datum

    @property
    def datum(self) -> SphericalDatum:
        return self._datum


class ProjectedCRS(GridCRS):
    """Projected x/y CRS whose base is the spherical geographic CRS.

    The projection is resolved from the coordinate system parameters when
    first needed.
    """

    def __init__(
        self,
        datum: SphericalDatum,
        cs: GridCoordinateSystem,
        axes: Sequence[Axis],
        *,
        provider: ProjectionProvider = DEFAULT_PROVIDER,
        warn: Callable[..., None] = logutil.warn,
        **kwargs,
    ):
        super().__init__(cs, axes, **kwargs)
        self._datum = datum
        self._provider = provider
        self._warn = warn
        self._projection = LazyCell(self._resolve_projection)

    def _resolve_projection(self) -> ProjectionHandle:
        handle = self._provider.resolve(self._cs.projection, self._datum)
        if handle is None:
            raise IllegalStateError("Projection is unspecified.")
        if not handle.on_datum:
            self._warn(f"Projection '{handle.code}' of {self} keeps its own ellipsoid instead of {self._datum.name}")
        return handle

    @property
    def datum(self) -> SphericalDatum:
        return self._datum

    @property
    def base_crs(self) -> SphericalDatum:
        """The spherical geographic CRS; same object as :attr:`datum`."""
        return self._datum

    @property
    def conversion_from_base(self) -> ProjectionHandle:
        """The map projection.

        Raises :class:`IllegalStateError` if the coordinate system defines none.
        """
        return self._projection.get()

    @property
    def domain_of_validity(self):
        return self.conversion_from_base.domain_of_validity


class VerticalCRS(GridCRS):
    def __init__(self, cs: GridCoordinateSystem, axis: Axis, **kwargs):
        super().__init__(cs, (axis,), **kwargs)
        self._datum_type = VerticalDatumType.for_axis_kind(axis.kind)

    @property
    def datum_type(self) -> VerticalDatumType:
        return self._datum_type


class TemporalCRS(GridCRS):
    """Time CRS whose origin comes from the ``"<unit> since <epoch>"`` axis units.

    Raises :class:`InvalidArgumentError` at construction if the units are not
    such an expression.
    """

    def __init__(self, cs: GridCoordinateSystem, axis: Axis, **kwargs):
        super().__init__(cs, (axis,), **kwargs)
        symbol = axis.units
        calendar = axis.calendar or configs.DEFAULT_CALENDAR
        try:
            unit = cf_units.Unit(symbol, calendar=calendar)
            if not unit.is_time_reference():
                raise ValueError(f"'{symbol}' has no reference epoch")
            origin = unit.num2date(0, only_use_cftime_datetimes=False)
            step = unit.num2date(1, only_use_cftime_datetimes=False) - origin
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown unit symbol: {symbol}") from exc
        self._origin = origin
        self._unit_seconds = step.total_seconds()
        self._calendar = unit.calendar

    @property
    def origin(self) -> datetime:
        """Date and time origin of the temporal datum (naive, UTC)."""
        return self._origin

    @property
    def unit_seconds(self) -> float:
        """Length in seconds of one unit along the time axis."""
        return self._unit_seconds

    @property
    def calendar(self) -> str:
        return self._calendar


class CompoundCRS(GridCRS):
    """Several components side by side; axes are the concatenation of theirs."""

    def __init__(self, cs: GridCoordinateSystem, components: Sequence[GridCRS], **kwargs):
        components = tuple(components)
        axes = [a for c in components for a in c.axes]
        super().__init__(cs, axes, reverse=False, **kwargs)
        self._components = components

    @property
    def components(self) -> tuple[GridCRS, ...]:
        return self._components


DEFAULT_COMPLETER = CalendarCompleter()


def _component(
    group: AxisGroup,
    cs: GridCoordinateSystem,
    *,
    datum: SphericalDatum,
    provider: ProjectionProvider,
    factory: LinearTransformFactory,
    warn: Callable[..., None],
) -> GridCRS:
    category = group.category
    if category is GroupCategory.VERTICAL:
        return VerticalCRS(cs, group.axes[0], factory=factory)
    if category is GroupCategory.TEMPORAL:
        return TemporalCRS(cs, group.axes[0], factory=factory)
    if category is GroupCategory.GEOGRAPHIC:
        return GeographicCRS(datum, cs, group.axes, factory=factory)
    if category is GroupCategory.PROJECTED:
        return ProjectedCRS(datum, cs, group.axes, provider=provider, warn=warn, factory=factory)
    raise InvalidArgumentError(f"No CRS component for {category}")


def wrap(
    cs: GridCoordinateSystem | None,
    *,
    dataset: Any = None,
    completer: AxisCompleter | None = DEFAULT_COMPLETER,
    provider: ProjectionProvider = DEFAULT_PROVIDER,
    datum: SphericalDatum = SPHERE,
    factory: LinearTransformFactory = DEFAULT_FACTORY,
    warn: Callable[..., None] = logutil.warn,
    verbose: bool = False,
) -> GridCRS | None:
    """Build the CRS of a grid coordinate system.

    The axes are split into geographic, projected, vertical and temporal
    components in the order they are found. One component is returned as
    is; several are wrapped in a :class:`CompoundCRS`. If some axis cannot be
    classified, the whole coordinate system becomes a single geographic or
    projected CRS when it looks like one, or a plain :class:`GridCRS`.

    Parameters
    ----------
    cs
        Coordinate system to wrap; ``None`` gives ``None``.
    dataset
        Variable attributes of the originating file (``{name: {attr: value}}``),
        used to complete time axes. Optional.
    completer, provider, factory
        Collaborators for time axes, map projections and affine matrices.
    datum
        Geodetic datum of geographic and projected components.
    warn
        Sink for non-fatal anomalies.
    """
    if cs is None:
        return None
    axes = cs.axes
    result = classify(axes, completer=completer, dataset=dataset, warn=warn)

    if isinstance(result, Unclassifiable) or len(result) == 0:
        if verbose and isinstance(result, Unclassifiable):
            logutil.info(f"Not splitting {cs.name}: {result.reason}")
        if cs.is_lat_lon:
            return GeographicCRS(datum, cs, axes, factory=factory)
        if cs.is_geo_xy:
            return ProjectedCRS(datum, cs, axes, provider=provider, warn=warn, factory=factory)
        return GridCRS(cs, axes, factory=factory)

    components = [
        _component(group, cs, datum=datum, provider=provider, factory=factory, warn=warn)
        for group in result
    ]
    if verbose:
        logutil.info(f"Split {cs.name} into {[g.category.value for g in result]}")
    if len(components) == 1:
        return components[0]
    return CompoundCRS(cs, components, factory=factory)


__all__ = [
    "GridCRS",
    "GeographicCRS",
    "ProjectedCRS",
    "VerticalCRS",
    "TemporalCRS",
    "CompoundCRS",
    "DEFAULT_COMPLETER",
    "wrap",
]
