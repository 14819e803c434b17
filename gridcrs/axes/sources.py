"""
gridcrs/axes/sources.py

Build a :class:`GridCoordinateSystem` from something that describes axes:
a grid configuration (YAML) or a georeferenced raster read with rasterio.
"""
from __future__ import annotations

from pathlib import Path

import rasterio

from gridcrs.axes.axis import Axis, AxisKind, GridCoordinateSystem
from gridcrs.exceptions import InvalidArgumentError
from gridcrs.globals.config_models import AxisConfig, GridConfig
from gridcrs.globals.logutil import info


#-- CONFIGURATION --#
def axis_from_config(cfg: AxisConfig) -> Axis:
    kind = AxisKind.parse(cfg.kind) if cfg.kind is not None else None
    if cfg.is_explicit:
        return Axis.from_values(cfg.name, kind, cfg.values, units=cfg.units)
    return Axis.regular(
        cfg.name, kind,
        start=cfg.start, increment=cfg.increment, size=cfg.size,
        units=cfg.units,
    )

def axes_from_config(config: GridConfig) -> GridCoordinateSystem:
    """Coordinate system described by a :class:`GridConfig` (axes in file order)."""
    return GridCoordinateSystem(
        name=config.name,
        axes=[axis_from_config(a) for a in config.axes],
        projection=config.projection,
    )


#-- RASTERS --#
def axes_from_raster(path: Path | str, verbose: bool = False) -> GridCoordinateSystem:
    """Row (y) and column (x) axes of a raster, sampled at pixel centres.

    Geographic rasters give latitude/longitude axes, projected ones give
    generic y/x axes with the raster CRS as projection. A raster without CRS
    gives axes of unknown kind.
    """
    path = Path(path)
    with rasterio.open(path) as src:
        t = src.transform
        crs = src.crs
        width, height = src.width, src.height

    if t.b != 0 or t.d != 0:
        raise InvalidArgumentError(f"{path.name}: rotated or sheared grids are not supported ({t!r}).")

    projection = None
    if not crs:
        y_kind = x_kind = AxisKind.UNKNOWN
        y_units = x_units = ""
    elif crs.is_geographic:
        y_kind, x_kind = AxisKind.LATITUDE, AxisKind.LONGITUDE
        y_units, x_units = "degrees_north", "degrees_east"
    else:
        y_kind, x_kind = AxisKind.GENERIC_Y, AxisKind.GENERIC_X
        y_units = x_units = crs.linear_units or ""
        projection = crs.to_wkt()

    y = Axis.regular("y", y_kind, start=t.f + t.e / 2, increment=t.e, size=height, units=y_units)
    x = Axis.regular("x", x_kind, start=t.c + t.a / 2, increment=t.a, size=width, units=x_units)
    if verbose:
        info(f"{path.name}: {height}x{width} grid, CRS {crs}")
    return GridCoordinateSystem(name=path.stem, axes=(y, x), projection=projection)


__all__ = ["axis_from_config", "axes_from_config", "axes_from_raster"]
