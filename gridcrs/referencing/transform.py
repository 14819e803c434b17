"""
gridcrs/referencing/transform.py

Grid-to-CRS affine transforms.

A grid cell index ``(i, j, ...)`` maps to CRS coordinates through a
homogeneous ``(n+1)×(n+1)`` matrix whose diagonal holds the axis spacings
and whose last column holds the axis origins. Only regular axes qualify;
a transform is either total over the requested dimensions or absent.
"""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from affine import Affine

from gridcrs.axes.axis import Axis
from gridcrs.exceptions import IllegalStateError, InvalidArgumentError, TransformFactoryError
from gridcrs.globals import configs


def nice(value: float) -> float:
    """Workaround rounding errors found in netCDF files.

    Values within ``EPS`` of a multiple of 1/360 are snapped to that
    multiple, so a step of 1/3 degree stored imprecisely becomes exactly
    ``120/360``.
    """
    tf = value * configs.NICE_FACTOR
    ti = float(np.rint(tf))
    if abs(tf - ti) <= configs.EPS:
        value = ti / configs.NICE_FACTOR
    return value


class AffineTransform:
    """An affine map backed by a homogeneous matrix (read-only)."""

    __slots__ = ("_matrix",)

    def __init__(self, matrix: np.ndarray):
        m = np.array(matrix, dtype=float)
        m.setflags(write=False)
        self._matrix = m

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def source_dimension(self) -> int:
        return self._matrix.shape[1] - 1

    @property
    def target_dimension(self) -> int:
        return self._matrix.shape[0] - 1

    @property
    def scales(self) -> np.ndarray:
        n = self.target_dimension
        return np.diag(self._matrix)[:n].copy()

    @property
    def offsets(self) -> np.ndarray:
        return self._matrix[:-1, -1].copy()

    def transform(self, points) -> np.ndarray:
        """Apply to one point (shape ``(n,)``) or many (shape ``(k, n)``)."""
        pts = np.asarray(points, dtype=float)
        single = pts.ndim == 1
        pts = np.atleast_2d(pts)
        if pts.shape[1] != self.source_dimension:
            raise InvalidArgumentError(
                f"Expected points of dimension {self.source_dimension}, got {pts.shape[1]}."
            )
        out = pts @ self._matrix[:-1, :-1].T + self._matrix[:-1, -1]
        return out[0] if single else out

    def inverse(self) -> AffineTransform:
        try:
            return AffineTransform(np.linalg.inv(self._matrix))
        except np.linalg.LinAlgError as exc:
            raise IllegalStateError("Transform is not invertible.") from exc

    def to_affine(self) -> Affine:
        """The 2-D case as an ``affine.Affine`` (as used by rasterio)."""
        if self.source_dimension != 2 or self.target_dimension != 2:
            raise IllegalStateError(
                f"Only 2-D transforms convert to Affine, this one is {self.source_dimension}-D."
            )
        m = self._matrix
        return Affine(m[0, 0], m[0, 1], m[0, 2], m[1, 0], m[1, 1], m[1, 2])

    def __eq__(self, other):
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return self._matrix.shape == other._matrix.shape and bool(np.array_equal(self._matrix, other._matrix))

    def __hash__(self):
        return hash((self._matrix.shape, self._matrix.tobytes()))

    def __repr__(self):
        rows = "; ".join(" ".join(f"{v:g}" for v in row) for row in self._matrix)
        return f"AffineTransform([{rows}])"


class LinearTransformFactory:
    """Builds :class:`AffineTransform` objects from homogeneous matrices."""

    def create_affine_transform(self, matrix) -> AffineTransform:
        m = np.asarray(matrix, dtype=float)
        if m.ndim != 2 or m.shape[0] != m.shape[1] or m.shape[0] < 1:
            raise TransformFactoryError(f"Affine matrix must be square, got shape {m.shape}.")
        if not np.all(np.isfinite(m)):
            raise TransformFactoryError("Affine matrix contains non-finite values.")
        last_row = np.zeros(m.shape[1])
        last_row[-1] = 1.0
        if not np.array_equal(m[-1], last_row):
            raise TransformFactoryError(f"Last matrix row must be {last_row.tolist()}, got {m[-1].tolist()}.")
        return AffineTransform(m)


DEFAULT_FACTORY = LinearTransformFactory()


def build_transform(
    axes: Sequence[Axis],
    lower: int,
    upper: int,
    *,
    factory: LinearTransformFactory = DEFAULT_FACTORY,
) -> AffineTransform | None:
    """Grid-to-CRS transform for ``axes[lower:upper]``, or ``None`` if any of them is not regular.

    Zero or non-finite spacing and non-finite origins count as not regular.

    ``axes`` must already be in CRS order (fast-varying first).
    """
    if lower < 0 or upper > len(axes) or upper < lower:
        raise InvalidArgumentError("Illegal range")
    num_dimensions = upper - lower
    matrix = np.identity(num_dimensions + 1)
    for i in range(num_dimensions):
        axis = axes[lower + i]
        if not axis.is_regular:
            return None
        scale = axis.increment
        if not math.isfinite(scale) or scale == 0 or not math.isfinite(axis.start):
            return None
        matrix[i, i] = nice(scale)
        matrix[i, num_dimensions] = nice(axis.start)
    try:
        return factory.create_affine_transform(matrix)
    except TransformFactoryError as exc:
        raise IllegalStateError(str(exc)) from exc


__all__ = [
    "nice",
    "AffineTransform",
    "LinearTransformFactory",
    "DEFAULT_FACTORY",
    "build_transform",
]
