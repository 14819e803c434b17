from .axis import AxisKind, Axis, GridCoordinateSystem
from .completion import AxisCompleter, CalendarCompleter
from .sources import axes_from_config, axes_from_raster

__all__ = [
    "AxisKind",
    "Axis",
    "GridCoordinateSystem",
    "AxisCompleter",
    "CalendarCompleter",
    "axes_from_config",
    "axes_from_raster",
]
