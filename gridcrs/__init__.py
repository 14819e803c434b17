from . import globals
from .globals import configs, directories

from .exceptions import GridCRSError, InvalidArgumentError, IllegalStateError, TransformFactoryError
from .axes import Axis, AxisKind, GridCoordinateSystem, axes_from_config, axes_from_raster
from .referencing import classify, wrap, build_transform, nice
