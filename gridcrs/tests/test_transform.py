"""
Tests for grid-to-CRS affine transforms and the 1/360 rounding cleanup.
"""
import math

import numpy as np
import pytest
from affine import Affine

from gridcrs.axes.axis import Axis, AxisKind
from gridcrs.exceptions import IllegalStateError, InvalidArgumentError, TransformFactoryError
from gridcrs.referencing.transform import (
    AffineTransform,
    LinearTransformFactory,
    build_transform,
    nice,
)


class TestNice:
    def test_third_of_degree(self):
        assert nice(1.0 / 3.0) == 120.0 / 360.0

    def test_noise_below_threshold_is_removed(self):
        assert nice(1.0 / 3.0 + 1e-13) == 120.0 / 360.0

    def test_noise_above_threshold_is_kept(self):
        value = 1.0 / 3.0 + 1e-9
        assert nice(value) == value

    def test_unrelated_value_unchanged(self):
        assert nice(0.123456789) == 0.123456789

    @pytest.mark.parametrize("value", [0.25, -0.5, 10.25, 0.0])
    def test_exact_multiples_unchanged(self, value):
        assert nice(value) == value


class TestBuildTransform:
    def test_projected_grid(self, make_axis):
        """Two 0.1-spaced axes starting at 0 give a diagonal matrix with zero offsets."""
        axes = [
            make_axis("x", AxisKind.GENERIC_X, start=0.0, step=0.1, n=100),
            make_axis("y", AxisKind.GENERIC_Y, start=0.0, step=0.1, n=100),
        ]
        result = build_transform(axes, 0, 2)

        np.testing.assert_allclose(result.matrix, [
            [0.1, 0.0, 0.0],
            [0.0, 0.1, 0.0],
            [0.0, 0.0, 1.0],
        ])
        assert result.source_dimension == result.target_dimension == 2

    def test_offsets_and_scales(self, make_axis):
        axes = [
            make_axis("lon", AxisKind.LONGITUDE, start=-180.0, step=1.0 / 3.0, n=1080),
            make_axis("lat", AxisKind.LATITUDE, start=90.0, step=-0.25, n=721),
            make_axis("time", AxisKind.TIME, start=6.0, step=6.0, n=4),
        ]
        result = build_transform(axes, 0, 3)

        assert result.scales.tolist() == [120.0 / 360.0, -0.25, 6.0]
        assert result.offsets.tolist() == [-180.0, 90.0, 6.0]
        assert result.matrix[-1].tolist() == [0.0, 0.0, 0.0, 1.0]

    def test_sub_range(self, make_axis):
        axes = [
            make_axis("lon", AxisKind.LONGITUDE, start=0.0, step=2.0),
            make_axis("lat", AxisKind.LATITUDE, start=-10.0, step=5.0),
            make_axis("h", AxisKind.HEIGHT, start=100.0, step=50.0),
        ]
        result = build_transform(axes, 1, 3)
        assert result.scales.tolist() == [5.0, 50.0]
        assert result.offsets.tolist() == [-10.0, 100.0]

    def test_empty_range_is_identity(self, make_axis):
        result = build_transform([make_axis("x", AxisKind.GENERIC_X)], 1, 1)
        assert result.matrix.tolist() == [[1.0]]

    def test_irregular_axis_gives_none(self, make_axis):
        axes = [
            make_axis("lon", AxisKind.LONGITUDE),
            Axis.from_values("lat", AxisKind.LATITUDE, [0.0, 1.0, 3.0, 7.0]),
        ]
        assert build_transform(axes, 0, 2) is None
        assert build_transform(axes, 0, 1) is not None

    @pytest.mark.parametrize("step", [0.0, math.nan])
    def test_degenerate_spacing_gives_none(self, make_axis, step):
        axes = [make_axis("x", AxisKind.GENERIC_X, step=step)]
        assert build_transform(axes, 0, 1) is None

    @pytest.mark.parametrize("start, step", [
        (math.nan, 1.0),
        (math.inf, 1.0),
        (0.0, math.inf),
        (0.0, -math.inf),
    ])
    def test_non_finite_axis_gives_none(self, make_axis, start, step):
        axes = [make_axis("x", AxisKind.GENERIC_X, start=start, step=step)]
        assert build_transform(axes, 0, 1) is None

    @pytest.mark.parametrize("lower, upper", [(-1, 1), (0, 3), (2, 1)])
    def test_illegal_range(self, make_axis, lower, upper):
        axes = [make_axis("x", AxisKind.GENERIC_X), make_axis("y", AxisKind.GENERIC_Y)]
        with pytest.raises(InvalidArgumentError, match="Illegal range"):
            build_transform(axes, lower, upper)

    def test_factory_failure_becomes_illegal_state(self, make_axis):
        class RefusingFactory:
            def create_affine_transform(self, matrix):
                raise TransformFactoryError("no")

        with pytest.raises(IllegalStateError) as excinfo:
            build_transform([make_axis("x", AxisKind.GENERIC_X)], 0, 1, factory=RefusingFactory())
        assert isinstance(excinfo.value.__cause__, TransformFactoryError)


class TestLinearTransformFactory:
    @pytest.mark.parametrize("matrix", [
        [[1.0, 0.0]],
        [[1.0, np.nan], [0.0, 1.0]],
        [[1.0, 0.0], [0.5, 1.0]],
    ])
    def test_rejects_non_affine_matrices(self, matrix):
        with pytest.raises(TransformFactoryError):
            LinearTransformFactory().create_affine_transform(matrix)


class TestAffineTransform:
    def _transform(self):
        return AffineTransform([[0.5, 0.0, 10.0], [0.0, -0.5, 50.0], [0.0, 0.0, 1.0]])

    def test_transform_points(self):
        t = self._transform()
        assert t.transform([0, 0]).tolist() == [10.0, 50.0]
        assert t.transform([[2, 4], [1, 1]]).tolist() == [[11.0, 48.0], [10.5, 49.5]]

    def test_wrong_point_dimension(self):
        with pytest.raises(InvalidArgumentError):
            self._transform().transform([1.0, 2.0, 3.0])

    def test_inverse(self):
        t = self._transform()
        grid = t.inverse().transform(t.transform([[3.0, 7.0]]))
        np.testing.assert_allclose(grid, [[3.0, 7.0]])

    def test_singular_inverse(self):
        with pytest.raises(IllegalStateError):
            AffineTransform(np.zeros((3, 3))).inverse()

    def test_to_affine(self):
        assert self._transform().to_affine() == Affine(0.5, 0.0, 10.0, 0.0, -0.5, 50.0)

    def test_to_affine_needs_two_dimensions(self):
        with pytest.raises(IllegalStateError):
            AffineTransform(np.identity(4)).to_affine()

    def test_matrix_is_read_only(self):
        with pytest.raises(ValueError):
            self._transform().matrix[0, 0] = 2.0

    def test_equality(self):
        assert self._transform() == self._transform()
        assert hash(self._transform()) == hash(self._transform())
