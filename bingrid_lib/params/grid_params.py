"""Grid configuration.

A GridParams describes the geometry of a SpatialGrid: its bounding box
and the number of divisions per axis.
"""

from dataclasses import dataclass, field
from typing import List, Sequence
import numpy as np


@dataclass
class GridParams:
    """Bounding box and division count for a SpatialGrid."""

    xi: List[float] = field(default_factory=lambda: [0.0, 0.0])
    xf: List[float] = field(default_factory=lambda: [1.0, 1.0])
    ndiv: int = 10

    def __post_init__(self):
        self.xi = [float(v) for v in self.xi]
        self.xf = [float(v) for v in self.xf]

    @property
    def ndim(self) -> int:
        return len(self.xi)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"xi": list(self.xi), "xf": list(self.xf), "ndiv": self.ndiv}

    @classmethod
    def from_dict(cls, d: dict) -> "GridParams":
        """Create from dictionary."""
        return cls(xi=d["xi"], xf=d["xf"], ndiv=d.get("ndiv", 10))

    @classmethod
    def from_points(
        cls,
        points: Sequence[Sequence[float]],
        ndiv: int = 10,
        padding: float = 0.0,
        min_extent: float = 1e-6,
    ) -> "GridParams":
        """
        Fit a bounding box around a point cloud.

        Parameters
        ----------
        points : array-like, shape (n_points, ndim)
            Points the grid must cover
        ndiv : int
            Number of divisions per axis
        padding : float
            Fraction of each axis extent added on both sides
        min_extent : float
            Axes flatter than this are widened to it, centered on the points

        Returns
        -------
        params : GridParams
        """
        pts = np.asarray(points, dtype=float)
        if pts.ndim != 2 or len(pts) == 0:
            raise ValueError("points must be a non-empty (n_points, ndim) array")

        lo = pts.min(axis=0)
        hi = pts.max(axis=0)

        pad = (hi - lo) * padding
        lo = lo - pad
        hi = hi + pad

        flat = (hi - lo) < min_extent
        mid = (hi + lo) / 2.0
        lo[flat] = mid[flat] - min_extent / 2.0
        hi[flat] = mid[flat] + min_extent / 2.0

        return cls(xi=lo.tolist(), xf=hi.tolist(), ndiv=ndiv)
