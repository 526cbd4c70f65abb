"""Grid configuration and validation."""

from .grid_params import GridParams

from .validation import (
    validate_params,
    validate_and_warn,
    PARAM_BOUNDS,
    MAX_BIN_ASPECT_RATIO,
)

__all__ = [
    "GridParams",
    # Validation
    "validate_params",
    "validate_and_warn",
    "PARAM_BOUNDS",
    "MAX_BIN_ASPECT_RATIO",
]
