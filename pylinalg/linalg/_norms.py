"""
Determinant, matrix rank and vector/matrix norms.

The determinant is computed by its own Gaussian elimination, separate
from the LU used by the solver, so solve() can use it as an independent
singularity check. An exactly zero pivot column short-circuits to 0.

The singular-value matrix norms (2, -2, 'nuc') run the Gram-matrix
SVD per matrix and raise ConvergenceError if it hits its iteration cap.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Union

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.precision import machine_epsilon
from pylinalg.core.exceptions import ConvergenceError, ParameterError
from pylinalg.linalg._products import outer, vdot
from pylinalg.linalg._svd import svd_decompose

NormOrd = Union[int, float, str, None]


def determinant(a: NDArray[np.float64]) -> float:
    """Determinant of a square float64 matrix."""
    n = a.shape[0]
    if n == 1:
        return float(a[0, 0])
    if n == 2:
        return float(a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0])

    work = a.copy()
    sign = 1.0
    det = 1.0
    for j in range(n):
        pivot = j + int(np.argmax(np.abs(work[j:, j])))
        if work[pivot, j] == 0.0:
            return 0.0
        if pivot != j:
            work[[j, pivot]] = work[[pivot, j]]
            sign = -sign
        det *= work[j, j]
        if j + 1 < n:
            multipliers = work[j + 1:, j] / work[j, j]
            work[j + 1:, j:] = work[j + 1:, j:] - outer(multipliers, work[j, j:])
    return sign * det


def rank(a: NDArray[np.float64], tol: float | None = None) -> int:
    """
    Numerical rank of a 2-d float64 matrix.

    Counts the pivots of a partially pivoted elimination whose magnitude
    exceeds tol (default max(shape) * eps * max|a|).
    """
    n_rows, n_cols = a.shape
    if a.size == 0:
        return 0
    if tol is None:
        scale = float(np.max(np.abs(a)))
        tol = max(a.shape) * machine_epsilon(np.float64) * scale

    work = a.copy()
    row = 0
    for col in range(n_cols):
        if row >= n_rows:
            break
        pivot = row + int(np.argmax(np.abs(work[row:, col])))
        if abs(work[pivot, col]) <= tol:
            continue
        if pivot != row:
            work[[row, pivot]] = work[[pivot, row]]
        if row + 1 < n_rows:
            multipliers = work[row + 1:, col] / work[row, col]
            work[row + 1:, col:] = work[row + 1:, col:] - outer(multipliers, work[row, col:])
        row += 1
    return row


def parse_ord(ord: NormOrd) -> int | float | str | None:
    """
    Normalize a norm order.

    Accepts None, numbers, and the strings 'inf', '-inf', 'fro', 'nuc' or
    an integer written as a string.

    Raises:
        ParameterError: For anything else
    """
    if ord is None:
        return None
    if isinstance(ord, str):
        key = ord.strip().lower()
        if key in ('inf', '-inf'):
            return float(key)
        if key in ('fro', 'nuc'):
            return key
        try:
            return int(key)
        except ValueError:
            raise ParameterError(
                f"ord: must be one of 'inf', '-inf', 'fro', 'nuc' or an integer, got {ord!r}",
                param='ord',
            ) from None
    if isinstance(ord, (bool, np.bool_)) or not isinstance(ord, (int, float, np.number)):
        raise ParameterError(f"ord: unsupported norm order {ord!r}", param='ord')
    return ord


def _normalize_axis(axis: int | Sequence[int], ndim: int) -> tuple[int, ...]:
    if isinstance(axis, (int, np.integer)):
        axis = (int(axis),)
    normalized = []
    for ax in axis:
        if not -ndim <= ax < ndim:
            raise ParameterError(
                f"axis: {ax} is out of bounds for array of dimension {ndim}",
                param='axis',
            )
        normalized.append(ax % ndim)
    return tuple(normalized)


def _vector_norm(x: NDArray[np.float64], ord: Any, axis: int) -> NDArray[np.float64]:
    if ord is None or ord == 2:
        return np.sqrt(np.sum(x * x, axis=axis))
    if isinstance(ord, str):
        raise ParameterError(f"ord: invalid norm order {ord!r} for vectors", param='ord')
    if ord == np.inf:
        return np.max(np.abs(x), axis=axis)
    if ord == -np.inf:
        return np.min(np.abs(x), axis=axis)
    if ord == 0:
        return np.sum(x != 0, axis=axis).astype(np.float64)
    if ord == 1:
        return np.sum(np.abs(x), axis=axis)
    with np.errstate(divide='ignore'):
        return np.sum(np.abs(x) ** ord, axis=axis) ** (1.0 / ord)


def _singular_value_norm(
    x: NDArray[np.float64], ord: Any, row_axis: int, col_axis: int
) -> NDArray[np.float64]:
    """Spectral (2), smallest singular value (-2) or nuclear ('nuc') norm."""
    reduce = {2: np.max, -2: np.min, 'nuc': np.sum}[ord]
    moved = np.moveaxis(x, (row_axis, col_axis), (-2, -1))
    matrices = moved.reshape((-1,) + moved.shape[-2:])
    out = np.empty(matrices.shape[0])
    for index, matrix in enumerate(matrices):
        outcome = svd_decompose(matrix, compute_vectors=False)
        if not outcome.converged:
            raise ConvergenceError(
                f"ord: singular values did not converge after "
                f"{outcome.iterations} iterations",
                iterations=outcome.iterations,
                reason='max_iterations',
                batch_index=index if matrices.shape[0] > 1 else None,
            )
        out[index] = reduce(outcome.s)
    return out.reshape(moved.shape[:-2])


def _matrix_norm(x: NDArray[np.float64], ord: Any, row_axis: int, col_axis: int) -> NDArray[np.float64]:
    if row_axis == col_axis:
        raise ParameterError("axis: duplicate axes given", param='axis')
    if ord is None or ord == 'fro':
        return np.sqrt(np.sum(x * x, axis=(row_axis, col_axis)))
    if ord in ('nuc', 2, -2):
        return _singular_value_norm(x, ord, row_axis, col_axis)
    if ord in (1, -1):
        reduce = np.max if ord == 1 else np.min
        col_after = col_axis - 1 if col_axis > row_axis else col_axis
        return reduce(np.sum(np.abs(x), axis=row_axis), axis=col_after)
    if ord in (np.inf, -np.inf):
        reduce = np.max if ord == np.inf else np.min
        row_after = row_axis - 1 if row_axis > col_axis else row_axis
        return reduce(np.sum(np.abs(x), axis=col_axis), axis=row_after)
    raise ParameterError(f"ord: invalid norm order {ord!r} for matrices", param='ord')


def norm(
    x: NDArray[np.float64],
    ord: NormOrd = None,
    axis: int | Sequence[int] | None = None,
    keepdims: bool = False,
) -> NDArray[np.float64]:
    """
    Vector or matrix norm (float64 kernel).

    With ord and axis both None this is the 2-norm of the flattened
    array. One axis selects a vector norm, two axes a matrix norm.

    Raises:
        ParameterError: For invalid orders, duplicate or too many axes
    """
    ord = parse_ord(ord)

    if axis is None:
        if ord is None or (x.ndim == 2 and ord == 'fro') or (x.ndim == 1 and ord == 2):
            result = np.sqrt(vdot(x, x))
            if keepdims:
                result = result.reshape((1,) * x.ndim)
            return result
        axes = tuple(range(x.ndim))
    else:
        axes = _normalize_axis(axis, x.ndim)

    if len(axes) == 1:
        result = _vector_norm(x, ord, axes[0])
    elif len(axes) == 2:
        result = _matrix_norm(x, ord, axes[0], axes[1])
    else:
        raise ParameterError(
            f"axis: improper number of dimensions to norm ({len(axes)})",
            param='axis',
        )

    if keepdims:
        result = np.expand_dims(result, tuple(sorted(axes)))
    return np.asarray(result, dtype=np.float64)
