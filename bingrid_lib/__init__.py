"""
Bin Grid Library - uniform binning index for 2D/3D point search

Stores (id, coordinate) entries in a uniform grid of bins over a bounding
box and answers two queries:

- nearest stored entry to a point (scanning only the point's own bin)
- entries within a tolerance of a line segment

Example Usage:
    from bingrid_lib import SpatialGrid

    grid = SpatialGrid(xi=(0, 0), xf=(10, 10), ndiv=5)
    grid.insert((1, 1), 1)
    grid.insert((9, 9), 2)

    grid.find_nearest((0.5, 0.5))                      # 1
    grid.find_along_segment((0, 0), (10, 10), 1.5)     # {1, 2}
"""

__version__ = "1.0.0"

from .core.types import Entry, Bin
from .core.result import (
    OperationResult,
    OperationStatus,
    ErrorCode,
    GridError,
    InvalidDimensionError,
    IndexOutOfBoundsError,
)

from .spatial.grid_index import SpatialGrid
from .spatial.geometry import point_to_segment_distance

from .params.grid_params import GridParams
from .params.validation import validate_params, validate_and_warn

__all__ = [
    "Entry",
    "Bin",
    "OperationResult",
    "OperationStatus",
    "ErrorCode",
    "GridError",
    "InvalidDimensionError",
    "IndexOutOfBoundsError",
    "SpatialGrid",
    "point_to_segment_distance",
    "GridParams",
    "validate_params",
    "validate_and_warn",
]
