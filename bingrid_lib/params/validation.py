"""Grid parameter validation with bounds checking.

Catches box and division settings that would fail at grid construction
or produce a grid that searches poorly.
"""

import logging
from typing import List, Tuple

from .grid_params import GridParams

logger = logging.getLogger(__name__)


PARAM_BOUNDS = {
    "ndiv": (1, 10000, "divisions"),
    "ndim": (2, 3, "dimensions"),
}

# Bin sizes along different axes differing by more than this make the
# segment search select many bins far from the segment.
MAX_BIN_ASPECT_RATIO = 10.0


def validate_params(params: GridParams) -> Tuple[bool, List[str]]:
    """
    Validate GridParams against bounds.

    Parameters
    ----------
    params : GridParams
        Parameters to validate

    Returns
    -------
    is_valid : bool
        True if all parameters are valid
    warnings : list of str
        List of validation warnings/errors
    """
    warnings = []

    values = {"ndiv": params.ndiv, "ndim": params.ndim}
    for param_name, (min_val, max_val, unit) in PARAM_BOUNDS.items():
        value = values[param_name]

        if value < min_val:
            warnings.append(
                f"{param_name} = {value} {unit} is below minimum {min_val} {unit}"
            )
        elif value > max_val:
            warnings.append(
                f"{param_name} = {value} {unit} exceeds maximum {max_val} {unit}"
            )

    if len(params.xi) != len(params.xf):
        warnings.append(
            f"xi has {len(params.xi)} coordinates but xf has {len(params.xf)}"
        )
        return False, warnings

    lengths = [hi - lo for lo, hi in zip(params.xi, params.xf)]
    for axis, length in enumerate(lengths):
        if not length > 0:
            warnings.append(
                f"axis {axis}: xf ({params.xf[axis]}) must be greater than xi ({params.xi[axis]})"
            )

    if all(length > 0 for length in lengths):
        ratio = max(lengths) / min(lengths)
        if ratio > MAX_BIN_ASPECT_RATIO:
            warnings.append(
                f"bin aspect ratio {ratio:.1f} exceeds {MAX_BIN_ASPECT_RATIO}, "
                "segment searches will scan many distant bins"
            )

    is_valid = len(warnings) == 0
    return is_valid, warnings


def validate_and_warn(params: GridParams) -> GridParams:
    """
    Validate parameters and log warnings.

    Parameters
    ----------
    params : GridParams
        Parameters to validate

    Returns
    -------
    params : GridParams
        Same parameters (for chaining)
    """
    is_valid, warnings = validate_params(params)

    if not is_valid:
        logger.warning("Grid parameter validation warnings (%d):", len(warnings))
        for warning in warnings:
            logger.warning("  - %s", warning)

    return params
