"""
Distance and containment helpers shared by the grid queries.
"""

import numpy as np


def point_to_segment_distance(
    point: np.ndarray,
    start: np.ndarray,
    end: np.ndarray,
) -> float:
    """
    Compute minimum distance from point to the finite segment [start, end].

    The projection parameter is clamped to [0, 1], so points beyond either
    endpoint are measured to that endpoint. A zero-length segment reduces to
    point-to-point distance.
    """
    v = end - start
    length_sq = np.dot(v, v)

    if length_sq < 1e-20:
        return float(np.linalg.norm(point - start))

    t = np.dot(point - start, v) / length_sq
    t = np.clip(t, 0.0, 1.0)

    closest = start + t * v

    return float(np.linalg.norm(point - closest))


def points_to_segment_distances(
    points: np.ndarray,
    start: np.ndarray,
    end: np.ndarray,
) -> np.ndarray:
    """Vectorized :func:`point_to_segment_distance` for an (n, ndim) array."""
    points = np.atleast_2d(points)
    v = end - start
    length_sq = np.dot(v, v)

    if length_sq < 1e-20:
        return np.linalg.norm(points - start, axis=1)

    t = (points - start) @ v / length_sq
    t = np.clip(t, 0.0, 1.0)

    closest = start + t[:, None] * v

    return np.linalg.norm(points - closest, axis=1)


def segment_envelope(
    start: np.ndarray,
    end: np.ndarray,
    tol: float = 0.0,
):
    """Axis-aligned box spanned by two points, expanded by ``tol``."""
    lo = np.minimum(start, end) - tol
    hi = np.maximum(start, end) + tol
    return lo, hi


def in_envelope(points: np.ndarray, lo: np.ndarray, hi: np.ndarray) -> np.ndarray:
    """Inclusive containment mask of an (n, ndim) array in box [lo, hi]."""
    points = np.atleast_2d(points)
    return np.all((points >= lo) & (points <= hi), axis=1)
