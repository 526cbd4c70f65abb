"""
Operation result types and errors for the binning index.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
from enum import Enum


class OperationStatus(Enum):
    """Status of an operation."""
    SUCCESS = "success"
    FAILURE = "failure"


class ErrorCode(Enum):
    """Standard error codes reported by index operations."""
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INVALID_DIMENSION = "INVALID_DIMENSION"
    INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"


class GridError(Exception):
    """Base class for binning index errors."""

    code: Optional[ErrorCode] = None


class InvalidDimensionError(GridError, ValueError):
    """Corner vectors differ in length, or dimension is not 2 or 3."""

    code = ErrorCode.INVALID_DIMENSION


class IndexOutOfBoundsError(GridError, IndexError):
    """A computed bin index fell outside the allocated bin table."""

    code = ErrorCode.INDEX_OUT_OF_BOUNDS


@dataclass
class OperationResult:
    """
    Structured result from an index operation.

    Failures that the caller is expected to handle (e.g. a point outside
    the bounding box) are reported here instead of being raised.
    """

    status: OperationStatus
    message: str = ""
    new_ids: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    error_codes: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def is_success(self) -> bool:
        """Check if operation was successful."""
        return self.status == OperationStatus.SUCCESS

    def is_failure(self) -> bool:
        """Check if operation failed."""
        return self.status == OperationStatus.FAILURE

    def has_error(self, code: ErrorCode) -> bool:
        """Check whether ``code`` was recorded."""
        return code.value in self.error_codes

    def add_error(self, error: str, code: Optional[ErrorCode] = None) -> None:
        """Add an error message with optional error code."""
        self.errors.append(error)
        if code is not None:
            self.error_codes.append(code.value)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (JSON-safe)."""
        return {
            "status": self.status.value,
            "message": self.message,
            "new_ids": self.new_ids,
            "errors": self.errors,
            "error_codes": self.error_codes,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "OperationResult":
        """Create from dictionary."""
        return cls(
            status=OperationStatus(d["status"]),
            message=d.get("message", ""),
            new_ids=d.get("new_ids", {}),
            errors=d.get("errors", []),
            error_codes=d.get("error_codes", []),
            metadata=d.get("metadata", {}),
        )

    @classmethod
    def success(cls, message: str = "", **kwargs) -> "OperationResult":
        """Create a success result."""
        return cls(status=OperationStatus.SUCCESS, message=message, **kwargs)

    @classmethod
    def failure(
        cls,
        message: str = "",
        code: Optional[ErrorCode] = None,
        **kwargs,
    ) -> "OperationResult":
        """Create a failure result, recording ``message`` as an error."""
        result = cls(status=OperationStatus.FAILURE, message=message, **kwargs)
        result.add_error(message, code)
        return result
