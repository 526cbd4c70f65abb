"""Core records and result types for the binning index."""

from .types import Entry, Bin
from .result import (
    OperationResult,
    OperationStatus,
    ErrorCode,
    GridError,
    InvalidDimensionError,
    IndexOutOfBoundsError,
)

__all__ = [
    "Entry",
    "Bin",
    "OperationResult",
    "OperationStatus",
    "ErrorCode",
    "GridError",
    "InvalidDimensionError",
    "IndexOutOfBoundsError",
]
