"""
Numerical precision constants and element-type round-tripping.

Every kernel in the engine computes in float64, whatever the stored
element type. Results are converted back to the caller's element type on
the way out: floating types are cast, integer and bool types are truncated
toward zero first. This mirrors what a fixed-precision array library does
when it stores a float result in an integer buffer.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Default tolerance for considering values as zero (absolute)
DEFAULT_ATOL: float = 1e-14


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a floating dtype.

    Integer and bool dtypes compute in float64, so they report float64's
    epsilon.
    """
    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.floating):
        dtype = np.dtype(np.float64)
    return float(np.finfo(dtype).eps)


def to_float64(array: NDArray[Any]) -> NDArray[np.float64]:
    """Return a float64 copy of array (never a view of the input)."""
    return np.array(array, dtype=np.float64, copy=True)


def result_dtype(*arrays: NDArray[Any]) -> np.dtype:
    """Element type of an operation combining the given arrays."""
    return np.result_type(*arrays)


def restore_dtype(values: NDArray[np.float64] | float, dtype: np.dtype) -> NDArray[Any]:
    """
    Convert float64 results back to the stored element type.

    Args:
        values: float64 result (array or scalar)
        dtype: Target element type

    Returns:
        Array of dtype. Integer and bool targets are truncated toward zero;
        non-finite values cannot be represented in those types and are
        left to numpy's cast rules.
    """
    values = np.asarray(values, dtype=np.float64)
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.floating):
        return values.astype(dtype)
    with np.errstate(invalid='ignore'):
        return np.trunc(values).astype(dtype)


def is_close(
    a: float | NDArray[np.floating[Any]],
    b: float | NDArray[np.floating[Any]],
    rtol: float = 1e-12,
    atol: float = DEFAULT_ATOL
) -> bool | NDArray[np.bool_]:
    """
    Check if values are numerically close.

    Uses the formula: |a - b| <= atol + rtol * |b|
    """
    return np.abs(a - b) <= atol + rtol * np.abs(b)
