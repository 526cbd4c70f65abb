"""Spatial binning for nearest-point and segment-proximity queries."""

from .grid_index import SpatialGrid
from .geometry import (
    point_to_segment_distance,
    points_to_segment_distances,
    segment_envelope,
    in_envelope,
)

__all__ = [
    "SpatialGrid",
    "point_to_segment_distance",
    "points_to_segment_distances",
    "segment_envelope",
    "in_envelope",
]
