"""
Uniform grid-based binning index for nearest-point and segment queries.
"""

import json
import logging
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple
import numpy as np

from ..core.types import Bin, Entry
from ..core.result import (
    ErrorCode,
    IndexOutOfBoundsError,
    InvalidDimensionError,
    OperationResult,
)
from .geometry import (
    in_envelope,
    point_to_segment_distance,
    points_to_segment_distances,
    segment_envelope,
)

logger = logging.getLogger(__name__)


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


class SpatialGrid:
    """
    Uniform 2D/3D grid of bins over a bounding box.

    The box [xi, xf] is cut into ``ndiv`` equal divisions along every axis,
    plus one slack row of bins per axis so that points lying exactly on the
    upper faces still map to a valid bin. Bins are only allocated once a
    point is inserted into them.

    Bin indices are row-major with axis 0 varying fastest::

        idx = i + j * N[0] + k * N[0] * N[1]

    The index performs no locking; concurrent writers must synchronize
    externally.
    """

    def __init__(self, xi: Sequence[float], xf: Sequence[float], ndiv: int = 10):
        """
        Initialize the grid geometry.

        Parameters
        ----------
        xi : sequence of float
            Lower corner of the bounding box (length 2 or 3)
        xf : sequence of float
            Upper corner of the bounding box (same length as ``xi``)
        ndiv : int
            Number of divisions along each axis

        Raises
        ------
        InvalidDimensionError
            If ``xi`` and ``xf`` differ in length or are not 2D/3D
        ValueError
            If ``ndiv`` is not a positive integer or the box is degenerate
        """
        xi = np.array(xi, dtype=float)
        xf = np.array(xf, dtype=float)

        if xi.ndim != 1 or xf.ndim != 1 or len(xi) != len(xf):
            raise InvalidDimensionError(
                f"xi and xf must have the same length (got {xi.shape} and {xf.shape})"
            )
        if len(xi) not in (2, 3):
            raise InvalidDimensionError(
                f"Grid dimension must be 2 or 3 (got {len(xi)})"
            )
        if isinstance(ndiv, bool) or int(ndiv) != ndiv or ndiv < 1:
            raise ValueError(f"ndiv must be a positive integer (got {ndiv})")

        lengths = xf - xi
        if not np.all(lengths > 0):
            raise ValueError(
                f"Bounding box must have positive extent along every axis "
                f"(xi={xi.tolist()}, xf={xf.tolist()})"
            )

        sizes = lengths / int(ndiv)
        counts = (lengths / sizes).astype(int) + 1

        self.ndim = len(xi)
        self.ndiv = int(ndiv)
        self._xi = _readonly(xi)
        self._xf = _readonly(xf)
        self._lengths = _readonly(lengths)
        self._sizes = _readonly(sizes)
        self._counts = _readonly(counts)

        self._strides = [1]
        for n in counts[:-1]:
            self._strides.append(self._strides[-1] * int(n))
        self.num_bins = self._strides[-1] * int(counts[-1])

        self._bins: Dict[int, Bin] = {}
        self._num_entries = 0

        logger.debug(
            "Created %dD grid: xi=%s xf=%s sizes=%s counts=%s (%d bins)",
            self.ndim, xi.tolist(), xf.tolist(), sizes.tolist(),
            counts.tolist(), self.num_bins,
        )

    @classmethod
    def from_params(cls, params) -> "SpatialGrid":
        """Create a grid from a :class:`~bingrid_lib.params.GridParams`."""
        return cls(params.xi, params.xf, params.ndiv)

    @property
    def xi(self) -> np.ndarray:
        """Lower corner of the bounding box."""
        return self._xi

    @property
    def xf(self) -> np.ndarray:
        """Upper corner of the bounding box."""
        return self._xf

    @property
    def lengths(self) -> np.ndarray:
        """Box length along each axis."""
        return self._lengths

    @property
    def sizes(self) -> np.ndarray:
        """Bin size along each axis."""
        return self._sizes

    @property
    def counts(self) -> np.ndarray:
        """Number of bins along each axis (including the slack row)."""
        return self._counts

    @property
    def num_entries(self) -> int:
        return self._num_entries

    def __len__(self) -> int:
        return self._num_entries

    def __repr__(self) -> str:
        return (
            f"SpatialGrid(ndim={self.ndim}, xi={self._xi.tolist()}, "
            f"xf={self._xf.tolist()}, ndiv={self.ndiv}, entries={self._num_entries})"
        )

    def __str__(self) -> str:
        return json.dumps([b.to_dict() for b in self.iter_bins()])

    def _as_point(self, point: Sequence[float], name: str = "point") -> np.ndarray:
        x = np.array(point, dtype=float)
        if x.shape != (self.ndim,):
            raise ValueError(
                f"{name} must have {self.ndim} coordinates (got shape {x.shape})"
            )
        return x

    def _index_of(self, x: np.ndarray) -> Optional[int]:
        # NaN coordinates fail both comparisons and are reported out of range
        if not np.all((x >= self._xi) & (x <= self._xf)):
            return None
        cells = ((x - self._xi) / self._sizes).astype(int)
        return sum(int(c) * s for c, s in zip(cells, self._strides))

    def _check_index(self, idx: int) -> None:
        if idx < 0 or idx >= self.num_bins:
            raise IndexOutOfBoundsError(
                f"Bin index {idx} is outside the bin table [0, {self.num_bins})"
            )

    def bin_index(self, point: Sequence[float]) -> Optional[int]:
        """
        Compute the flat index of the bin containing a point.

        Returns
        -------
        idx : int or None
            Bin index, or None if the point lies outside the bounding box
        """
        return self._index_of(self._as_point(point))

    def cell_coords(self, idx: int) -> Tuple[int, ...]:
        """Decode a flat bin index into per-axis cell coordinates."""
        self._check_index(idx)
        n0 = int(self._counts[0])
        nxy = n0 * int(self._counts[1])
        coords = (idx % n0, (idx % nxy) // n0)
        if self.ndim == 3:
            coords += (idx // nxy,)
        return coords

    def bin_corner(self, idx: int) -> np.ndarray:
        """Lower corner of bin ``idx``."""
        return self._xi + np.array(self.cell_coords(idx)) * self._sizes

    def bin_center(self, idx: int) -> np.ndarray:
        """Geometric center of bin ``idx``."""
        return self.bin_corner(idx) + self._sizes / 2.0

    def get_bin(self, idx: int) -> Optional[Bin]:
        """Get the bin at ``idx``, or None if nothing was inserted there."""
        return self._bins.get(idx)

    def nonempty_indices(self) -> List[int]:
        """Indices of all materialized bins, ascending."""
        return sorted(self._bins)

    def iter_bins(self) -> Iterator[Bin]:
        """Iterate over materialized bins in index order."""
        for idx in self.nonempty_indices():
            yield self._bins[idx]

    def iter_entries(self) -> Iterator[Entry]:
        """Iterate over all stored entries, bin by bin."""
        for b in self.iter_bins():
            yield from b.entries

    def insert(self, point: Sequence[float], entry_id: int) -> OperationResult:
        """
        Store an entry {point, entry_id}.

        Duplicate coordinates and duplicate ids are both kept.

        Returns
        -------
        result : OperationResult
            Success with new_ids['bin_index'], or failure with
            ErrorCode.OUT_OF_RANGE if the point lies outside the box

        Raises
        ------
        IndexOutOfBoundsError
            If the computed index does not fit the bin table
        TypeError
            If ``entry_id`` is not an integer
        """
        x = self._as_point(point)
        idx = self._index_of(x)

        if idx is None:
            logger.debug("Rejected entry %s: point %s out of range", entry_id, x.tolist())
            return OperationResult.failure(
                f"Point {x.tolist()} is outside the bounding box",
                code=ErrorCode.OUT_OF_RANGE,
                metadata={"entry_id": entry_id},
            )

        self._check_index(idx)

        # bad ids raise here, before the bin table is touched
        entry = Entry.create(entry_id, x)

        target = self._bins.get(idx)
        if target is None:
            target = Bin(idx)
            self._bins[idx] = target
        target.append(entry)
        self._num_entries += 1

        return OperationResult.success(
            f"Inserted entry {entry_id} into bin {idx}",
            new_ids={"entry_id": entry_id, "bin_index": idx},
        )

    def clear(self) -> None:
        """Remove all bins and entries. The grid geometry is kept."""
        logger.debug("Clearing %d entries from %d bins", self._num_entries, len(self._bins))
        self._bins = {}
        self._num_entries = 0

    def find_nearest(self, point: Sequence[float]) -> Optional[int]:
        """
        Find the id of the stored entry closest to ``point``.

        Only the bin containing ``point`` is scanned, so an entry sitting
        just across a bin boundary is never reported even when it is the
        true nearest neighbor. Ties go to the entry inserted first.

        Returns
        -------
        entry_id : int or None
            None if the point is out of range or its bin is empty
        """
        x = self._as_point(point)
        idx = self._index_of(x)
        if idx is None:
            return None

        self._check_index(idx)

        b = self._bins.get(idx)
        if b is None or len(b) == 0:
            return None

        dist_sq = np.sum((b.coords() - x) ** 2, axis=1)
        return b.entries[int(np.argmin(dist_sq))].id

    def select_bins(
        self,
        start: Sequence[float],
        end: Sequence[float],
        tol: float = 0.0,
    ) -> List[int]:
        """
        Indices of materialized bins whose centers lie near a segment.

        A bin is selected when its center is within
        ``max(0.9 * max(sizes), half_diagonal + tol)`` of the segment, which
        never drops a bin that holds an entry within ``tol`` of it.
        """
        a = self._as_point(start, "start")
        b = self._as_point(end, "end")
        return self._select_bins(a, b, tol)

    def _select_bins(self, a: np.ndarray, b: np.ndarray, tol: float) -> List[int]:
        half_diagonal = 0.5 * float(np.linalg.norm(self._sizes))
        bin_tol = max(0.9 * float(np.max(self._sizes)), half_diagonal + tol)

        return [
            idx for idx in self.nonempty_indices()
            if len(self._bins[idx]) > 0
            and point_to_segment_distance(self.bin_center(idx), a, b) <= bin_tol
        ]

    def find_along_segment(
        self,
        start: Sequence[float],
        end: Sequence[float],
        tol: float,
    ) -> Set[int]:
        """
        Find ids of entries lying close to the segment [start, end].

        An entry qualifies when its distance to the finite segment is at most
        ``tol`` and it lies inside the axis-aligned box spanned by ``start``
        and ``end`` expanded by ``tol``.

        Parameters
        ----------
        start, end : sequence of float
            Segment endpoints
        tol : float
            Distance tolerance (>= 0)

        Returns
        -------
        ids : set of int
        """
        if tol < 0:
            raise ValueError(f"tol must be non-negative (got {tol})")

        a = self._as_point(start, "start")
        b = self._as_point(end, "end")
        lo, hi = segment_envelope(a, b, tol)

        ids: Set[int] = set()
        for idx in self._select_bins(a, b, tol):
            candidates = self._bins[idx]
            coords = candidates.coords()
            keep = (points_to_segment_distances(coords, a, b) <= tol) & in_envelope(coords, lo, hi)
            ids.update(e.id for e, k in zip(candidates.entries, keep) if k)

        return ids

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "xi": self._xi.tolist(),
            "xf": self._xf.tolist(),
            "ndiv": self.ndiv,
            "bins": [b.to_dict() for b in self.iter_bins()],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "SpatialGrid":
        """
        Create from dictionary.

        Entries are re-inserted, so their bin indices are recomputed from
        the coordinates.
        """
        grid = cls(d["xi"], d["xf"], d["ndiv"])
        for bin_data in d.get("bins", []):
            for entry in Bin.from_dict(bin_data).entries:
                result = grid.insert(entry.x, entry.id)
                if result.is_failure():
                    raise ValueError(result.message)
        return grid
