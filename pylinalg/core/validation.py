"""
Input validation utilities for pylinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Every public operation runs its
validators before any numerical work starts.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - The stored element type is preserved; float64 conversion happens
      later, inside the kernels
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import (
    DimensionError,
    NotSquareError,
    ValidationError,
)


def check_array(array: ArrayLike, name: str) -> NDArray:
    """
    Validate and convert input to a real numeric numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric
    data) and complex input, which the engine has no representation for.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with a bool, integer or floating dtype

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} is not supported, expected real data"
        )

    if result.dtype != np.bool_ and not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result


def check_finite(array: NDArray, name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray, ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            ndim=array.ndim,
            supported=f"{ndim}D",
        )


def check_supported_ndim(array: NDArray, supported: Iterable[int], name: str) -> None:
    """
    Verify array dimensionality is one of the supported values.

    Raises:
        DimensionError: If array.ndim is not in supported
    """
    supported = tuple(supported)
    if array.ndim not in supported:
        allowed = ", ".join(f"{d}D" for d in supported)
        raise DimensionError(
            f"{name}: unsupported dimension {array.ndim}D, expected one of {allowed}",
            ndim=array.ndim,
            supported=allowed,
        )


def check_min_ndim(array: NDArray, min_ndim: int, name: str) -> None:
    """
    Verify array has at least min_ndim dimensions.

    Raises:
        DimensionError: If array has fewer dimensions
    """
    if array.ndim < min_ndim:
        raise DimensionError(
            f"{name}: expected at least {min_ndim}D array, got {array.ndim}D "
            f"with shape {array.shape}",
            ndim=array.ndim,
            supported=f">={min_ndim}D",
        )


def check_square(array: NDArray, name: str) -> None:
    """
    Verify the trailing two axes form a square matrix.

    Args:
        array: Array with at least 2 dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has fewer than 2 dimensions
        NotSquareError: If the last two axes differ in size
    """
    check_min_ndim(array, 2, name)
    rows, cols = array.shape[-2:]
    if rows != cols:
        raise NotSquareError(
            f"{name}: last two dimensions must be square, got {rows}x{cols} "
            f"(shape {array.shape})",
            shape=array.shape,
        )


def check_min_size(array: NDArray, min_size: int, name: str) -> None:
    """
    Verify each side of the trailing matrix is at least min_size.

    Raises:
        DimensionError: If either trailing axis is smaller than min_size
    """
    rows, cols = array.shape[-2:]
    if rows < min_size or cols < min_size:
        raise DimensionError(
            f"{name}: matrix must be at least {min_size}x{min_size}, got {rows}x{cols}",
            ndim=array.ndim,
            supported=f">={min_size}x{min_size}",
        )
