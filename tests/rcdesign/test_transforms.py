"""Tests for the vertex-buffer transform passes."""

from __future__ import annotations

import math

import numpy as np
import pytest

from rcdesign.geometry import transforms


@pytest.fixture
def points() -> np.ndarray:
    return np.array(
        [
            [0.1, 0.01, -0.5],
            [-0.1, -0.01, -0.5],
            [0.1, 0.02, 0.0],
            [-0.1, -0.02, 0.0],
            [0.1, 0.01, 0.5],
            [-0.1, -0.01, 0.5],
        ]
    )


class TestSweep:
    def test_zero_sweep_is_identity(self, points: np.ndarray) -> None:
        out = transforms.apply_sweep(points, 0.0)
        np.testing.assert_array_equal(out, points)
        assert out is not points

    def test_tips_move_aft(self, points: np.ndarray) -> None:
        out = transforms.apply_sweep(points, 45.0)
        np.testing.assert_allclose(out[0, 0], 0.1 - 0.5)
        np.testing.assert_allclose(out[4, 0], 0.1 - 0.5)
        # Root untouched, Y/Z untouched
        np.testing.assert_allclose(out[2], points[2])
        np.testing.assert_allclose(out[:, 1:], points[:, 1:])

    def test_forward_sweep(self, points: np.ndarray) -> None:
        out = transforms.apply_sweep(points, -30.0)
        assert out[0, 0] > points[0, 0]

    def test_input_not_modified(self, points: np.ndarray) -> None:
        before = points.copy()
        transforms.apply_sweep(points, 30.0)
        np.testing.assert_array_equal(points, before)


class TestTaper:
    def test_tip_scaled_by_ratio(self, points: np.ndarray) -> None:
        out = transforms.apply_taper(points, 0.5)
        np.testing.assert_allclose(out[4, :2], points[4, :2] * 0.5)
        np.testing.assert_allclose(out[0, :2], points[0, :2] * 0.5)

    def test_root_unchanged(self, points: np.ndarray) -> None:
        out = transforms.apply_taper(points, 0.5)
        np.testing.assert_allclose(out[2], points[2])

    def test_span_untouched(self, points: np.ndarray) -> None:
        out = transforms.apply_taper(points, 0.3)
        np.testing.assert_allclose(out[:, 2], points[:, 2])

    def test_taper_one_is_identity(self, points: np.ndarray) -> None:
        np.testing.assert_allclose(transforms.apply_taper(points, 1.0), points)

    def test_flat_input(self) -> None:
        flat = np.array([[1.0, 1.0, 0.0], [2.0, 2.0, 0.0]])
        np.testing.assert_allclose(transforms.apply_taper(flat, 0.5), flat)


class TestRigidTransforms:
    def test_center_on_centroid(self, points: np.ndarray) -> None:
        out = transforms.center_on_centroid(points + 3.0)
        np.testing.assert_allclose(out.mean(axis=0), 0.0, atol=1e-12)

    def test_rotate_x_quarter_turn(self) -> None:
        out = transforms.rotate_x([[0.0, 1.0, 0.0]], 90.0)
        np.testing.assert_allclose(out, [[0.0, 0.0, 1.0]], atol=1e-12)

    def test_rotate_z_quarter_turn(self) -> None:
        out = transforms.rotate_z([[1.0, 0.0, 0.0]], 90.0)
        np.testing.assert_allclose(out, [[0.0, 1.0, 0.0]], atol=1e-12)

    def test_rotation_preserves_length(self, points: np.ndarray) -> None:
        out = transforms.rotate_x(points, 37.0)
        np.testing.assert_allclose(np.linalg.norm(out, axis=1), np.linalg.norm(points, axis=1))

    def test_mirror_z(self, points: np.ndarray) -> None:
        out = transforms.mirror_z(points)
        np.testing.assert_allclose(out[:, 2], -points[:, 2])
        np.testing.assert_allclose(out[:, :2], points[:, :2])

    def test_translate(self) -> None:
        out = transforms.translate([[0.0, 0.0, 0.0]], (1.0, 2.0, 3.0))
        np.testing.assert_allclose(out, [[1.0, 2.0, 3.0]])
        assert math.isclose(float(out.sum()), 6.0)
