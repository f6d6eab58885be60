"""
Matrix/vector views over the trailing two axes of an array.

Helpers that turn a 2-d array into row or column collections and back,
the strict diagonal-dominance test used to stop the QR eigenvalue
iteration, and the batch-splitting primitive every batched operation
is built on. All helpers return copies.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ShapeError
from pylinalg.core.validation import check_ndim, check_square, check_supported_ndim


def to_matrix(array: NDArray[Any]) -> list[NDArray[Any]]:
    """
    Split a 2-d array into its rows, in row-major order.

    Raises:
        DimensionError: If array is not exactly 2-d
    """
    check_ndim(array, 2, 'array')
    return [row.copy() for row in array]


def from_matrix(rows: Sequence[NDArray[Any]]) -> NDArray[Any]:
    """
    Rebuild a 2-d array from a sequence of rows.

    The shape is taken from the number of rows and the length of the first
    row; rows are not checked individually.

    Raises:
        ShapeError: If the total element count does not fill rows x cols
    """
    n_rows, n_cols = len(rows), len(rows[0])
    flat = np.concatenate([np.asarray(row).ravel() for row in rows])
    if flat.size != n_rows * n_cols:
        raise ShapeError(
            f"rows: {flat.size} elements cannot fill a {n_rows}x{n_cols} matrix",
            shape_1=(flat.size,),
            shape_2=(n_rows, n_cols),
        )
    return flat.reshape(n_rows, n_cols)


def get_rows(array: NDArray[Any]) -> list[NDArray[Any]]:
    """
    Split a matrix into its rows.

    For 1-d input every element becomes its own single-element row.
    """
    check_supported_ndim(array, (1, 2), 'array')
    if array.ndim == 1:
        return [array[i:i + 1].copy() for i in range(array.shape[0])]
    return [array[i].copy() for i in range(array.shape[0])]


def get_columns(array: NDArray[Any]) -> list[NDArray[Any]]:
    """Split a 2-d matrix into its columns."""
    check_ndim(array, 2, 'array')
    return [array[:, j].copy() for j in range(array.shape[1])]


def is_convergent(array: NDArray[Any]) -> bool:
    """
    Strict row diagonal dominance, evaluated in float64.

    True iff every |a[i, i]| is strictly greater than the sum of the
    magnitudes of the other entries in row i.
    """
    check_ndim(array, 2, 'array')
    check_square(array, 'array')
    magnitudes = np.abs(np.asarray(array, dtype=np.float64))
    diagonal = np.diag(magnitudes)
    off_diagonal = magnitudes.sum(axis=1) - diagonal
    return bool(np.all(diagonal > off_diagonal))


def split_batches(array: NDArray[Any]) -> list[NDArray[Any]]:
    """
    Split an array of rank >= 2 into its 2-d batch slices.

    Leading axes are flattened in row-major order; the returned list
    preserves that order so results can be mapped back by index.
    """
    matrix_shape = array.shape[-2:]
    flat = array.reshape((-1,) + matrix_shape)
    return [flat[i].copy() for i in range(flat.shape[0])]


def stack_batches(
    slices: Sequence[NDArray[Any]],
    batch_shape: tuple[int, ...],
) -> NDArray[Any]:
    """Inverse of split_batches for slices that all share one shape."""
    stacked = np.stack(list(slices))
    return stacked.reshape(batch_shape + stacked.shape[1:])
