"""Referencing objects built from grid axes.

Modules:
 - classifier: split axes into geographic/projected/vertical/temporal groups
 - crs: CRS components and ``wrap``, the entry point
 - transform: grid-to-CRS affine transforms and the ``nice`` rounding fix
 - projection: pyproj backed map projections
 - datum, identified, cache: supporting pieces
"""
from .classifier import AxisGroup, GroupCategory, Grouped, Unclassifiable, classify
from .crs import (
    CompoundCRS,
    GeographicCRS,
    GridCRS,
    ProjectedCRS,
    TemporalCRS,
    VerticalCRS,
    wrap,
)
from .datum import SPHERE, SphericalDatum, VerticalDatumType
from .projection import ProjectionHandle, PyprojProjectionProvider
from .transform import AffineTransform, LinearTransformFactory, build_transform, nice

__all__ = [
    "AxisGroup",
    "GroupCategory",
    "Grouped",
    "Unclassifiable",
    "classify",
    "GridCRS",
    "GeographicCRS",
    "ProjectedCRS",
    "VerticalCRS",
    "TemporalCRS",
    "CompoundCRS",
    "wrap",
    "SPHERE",
    "SphericalDatum",
    "VerticalDatumType",
    "ProjectionHandle",
    "PyprojProjectionProvider",
    "AffineTransform",
    "LinearTransformFactory",
    "build_transform",
    "nice",
]
