"""
Tests for point/segment distance and envelope helpers.
"""

import pytest
import numpy as np
from bingrid_lib.spatial.geometry import (
    point_to_segment_distance,
    points_to_segment_distances,
    segment_envelope,
    in_envelope,
)


def test_distance_to_segment_interior():
    a = np.array([0.0, 0.0])
    b = np.array([10.0, 0.0])

    assert point_to_segment_distance(np.array([5.0, 3.0]), a, b) == pytest.approx(3.0)
    assert point_to_segment_distance(np.array([5.0, 0.0]), a, b) == pytest.approx(0.0)


def test_distance_clamps_to_endpoints():
    """Test points beyond the segment are measured to the nearest endpoint."""
    a = np.array([0.0, 0.0])
    b = np.array([10.0, 0.0])

    assert point_to_segment_distance(np.array([13.0, 4.0]), a, b) == pytest.approx(5.0)
    assert point_to_segment_distance(np.array([-3.0, -4.0]), a, b) == pytest.approx(5.0)


def test_distance_to_degenerate_segment():
    a = np.array([1.0, 1.0, 1.0])

    d = point_to_segment_distance(np.array([1.0, 3.0, 1.0]), a, a.copy())
    assert d == pytest.approx(2.0)

    d = points_to_segment_distances(np.array([[1.0, 1.0, 4.0]]), a, a.copy())
    assert d.tolist() == pytest.approx([3.0])


def test_vectorized_matches_scalar():
    rng = np.random.default_rng(7)
    a, b = rng.normal(size=(2, 3))
    points = rng.normal(scale=3.0, size=(50, 3))

    expected = [point_to_segment_distance(p, a, b) for p in points]
    assert points_to_segment_distances(points, a, b).tolist() == pytest.approx(expected)


def test_envelope_is_componentwise():
    lo, hi = segment_envelope(np.array([4.0, 1.0]), np.array([2.0, 3.0]), 0.5)

    assert lo.tolist() == [1.5, 0.5]
    assert hi.tolist() == [4.5, 3.5]


def test_in_envelope_inclusive():
    lo = np.array([0.0, 0.0])
    hi = np.array([1.0, 2.0])
    points = np.array([
        [0.0, 0.0],
        [1.0, 2.0],
        [0.5, 2.1],
        [-0.1, 1.0],
    ])

    assert in_envelope(points, lo, hi).tolist() == [True, True, False, False]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
