"""
Record types stored by the binning index.
"""

import operator
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import numpy as np


@dataclass(frozen=True)
class Entry:
    """Stored (id, coordinate) pair."""

    id: int
    x: Tuple[float, ...]

    @classmethod
    def create(cls, entry_id: int, coords: Sequence[float]) -> "Entry":
        """
        Create an entry holding a private copy of ``coords``.

        Raises TypeError if ``entry_id`` is not an integer (floats are not
        truncated).
        """
        return cls(operator.index(entry_id), tuple(float(c) for c in coords))

    @property
    def ndim(self) -> int:
        return len(self.x)

    def to_array(self) -> np.ndarray:
        """Convert to numpy array (a new array on every call)."""
        return np.array(self.x, dtype=float)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"id": self.id, "x": list(self.x)}

    @classmethod
    def from_dict(cls, d: dict) -> "Entry":
        """Create from dictionary."""
        return cls.create(d["id"], d["x"])


@dataclass
class Bin:
    """
    One grid cell holding the entries that fall inside it.

    Entries keep insertion order.
    """

    idx: int
    entries: List[Entry] = field(default_factory=list)

    def append(self, entry: Entry) -> None:
        """Add an entry at the end of the bin."""
        self.entries.append(entry)

    def ids(self) -> List[int]:
        """Get entry ids in insertion order."""
        return [entry.id for entry in self.entries]

    def coords(self) -> np.ndarray:
        """Stack entry coordinates into an (n_entries, ndim) array."""
        return np.array([entry.x for entry in self.entries], dtype=float)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "idx": self.idx,
            "entries": [entry.to_dict() for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Bin":
        """Create from dictionary."""
        return cls(
            idx=d["idx"],
            entries=[Entry.from_dict(e) for e in d.get("entries", [])],
        )
