"""
Dot/product engine.

Generalized batched products built from one primitive: the table of
pairwise inner products between a set of row vectors and a set of column
vectors, formed from elementwise products and sums in float64.

The underscore-free functions here are float64 kernels with full shape
validation; the public wrappers in solvers.py add element-type handling.
The QR, Hessenberg and eigen modules call the kernels directly.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ParameterError, ShapeError

TensorAxes = int | tuple[Sequence[int] | int, Sequence[int] | int]


def _not_aligned(shape_a, shape_b, dim_a: int, dim_b: int) -> ParameterError:
    return ParameterError(
        f"shapes {shape_a} and {shape_b} not aligned: "
        f"{shape_a[dim_a]} (dim {dim_a}) != {shape_b[dim_b]} (dim {dim_b})",
        param='other',
    )


def pairwise_inner(rows: NDArray[np.float64], cols: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    All inner products between two sets of equal-length vectors.

    Args:
        rows: (m, k) array, one vector per row
        cols: (p, k) array, one vector per row

    Returns:
        (m, p) array with out[i, j] = sum(rows[i] * cols[j])

    The sum is accumulated per output entry, so memory stays O(m p)
    rather than O(m p k).
    """
    return np.einsum('ik,jk->ij', rows, cols)


def matmul_2d(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Standard (n, k) x (k, m) matrix product."""
    if a.shape[1] != b.shape[0]:
        raise _not_aligned(a.shape, b.shape, 1, 0)
    return pairwise_inner(a, b.T)


def dot(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Generalized dot product (float64 kernel).

    Dispatch:
        - either operand holds a single element: elementwise scale
        - 1-d . 1-d: inner product, lengths must match
        - 2-d . 2-d: matrix product
        - 1-d with higher rank: contraction against a's last axis /
          b's second-to-last axis
        - n-d . m-d: a's last axis against b's second-to-last axis; the
          result has shape a.shape[:-1] + b.shape[:-2] + b.shape[-1:]

    Raises:
        ParameterError: If the contracted axes differ in size
    """
    if a.size == 1 or b.size == 1:
        return np.multiply(a, b)

    if a.ndim == 1 and b.ndim == 1:
        if a.shape[0] != b.shape[0]:
            raise _not_aligned(a.shape, b.shape, 0, 0)
        return np.asarray(np.sum(a * b))

    if a.ndim == 2 and b.ndim == 2:
        return matmul_2d(a, b)

    if a.ndim == 1:
        k = a.shape[0]
        if b.shape[-2] != k:
            raise _not_aligned(a.shape, b.shape, 0, b.ndim - 2)
        cols = np.moveaxis(b, -2, -1).reshape(-1, k)
        out = pairwise_inner(a[np.newaxis, :], cols)[0]
        return out.reshape(b.shape[:-2] + b.shape[-1:])

    if b.ndim == 1:
        k = b.shape[0]
        if a.shape[-1] != k:
            raise _not_aligned(a.shape, b.shape, a.ndim - 1, 0)
        rows = a.reshape(-1, k)
        out = pairwise_inner(rows, b[np.newaxis, :])[:, 0]
        return out.reshape(a.shape[:-1])

    k = a.shape[-1]
    if b.shape[-2] != k:
        raise _not_aligned(a.shape, b.shape, a.ndim - 1, b.ndim - 2)
    rows = a.reshape(-1, k)
    cols = np.moveaxis(b, -2, -1).reshape(-1, k)
    out = pairwise_inner(rows, cols)
    return out.reshape(a.shape[:-1] + b.shape[:-2] + b.shape[-1:])


def vdot(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Inner product of the flattened operands."""
    if a.size != b.size:
        raise ParameterError(
            f"vdot: operands must have the same number of elements, "
            f"got {a.size} and {b.size}",
            param='other',
        )
    return np.asarray(np.sum(a.ravel() * b.ravel()))


def inner(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Inner product over the last axis of both operands.

    The result has shape a.shape[:-1] + b.shape[:-1].
    """
    if a.ndim == 0 or b.ndim == 0:
        return np.multiply(a, b)
    k = a.shape[-1]
    if b.shape[-1] != k:
        raise _not_aligned(a.shape, b.shape, a.ndim - 1, b.ndim - 1)
    out = pairwise_inner(a.reshape(-1, k), b.reshape(-1, k))
    return out.reshape(a.shape[:-1] + b.shape[:-1])


def outer(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Outer product of the flattened operands, shape (a.size, b.size)."""
    return a.ravel()[:, np.newaxis] * b.ravel()[np.newaxis, :]


def matmul(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Matrix product with broadcast batch axes.

    1-d operands are promoted to a row (a) or column (b) matrix and the
    promoted axis is removed from the result.

    Raises:
        ParameterError: If an operand is 0-d or the contracted axes differ
        ShapeError: If the batch axes do not broadcast
    """
    if a.ndim == 0 or b.ndim == 0:
        raise ParameterError(
            "matmul: operands must be at least 1-d, use dot for scaling",
            param='other',
        )

    a2 = a[np.newaxis, :] if a.ndim == 1 else a
    b2 = b[:, np.newaxis] if b.ndim == 1 else b
    if a2.shape[-1] != b2.shape[-2]:
        raise _not_aligned(a.shape, b.shape, a.ndim - 1, max(b.ndim - 2, 0))

    try:
        batch_shape = np.broadcast_shapes(a2.shape[:-2], b2.shape[:-2])
    except ValueError as e:
        raise ShapeError(
            f"matmul: batch dimensions {a2.shape[:-2]} and {b2.shape[:-2]} "
            f"cannot be broadcast together",
            shape_1=a.shape,
            shape_2=b.shape,
        ) from e

    n, m = a2.shape[-2], b2.shape[-1]
    a_slices = np.broadcast_to(a2, batch_shape + a2.shape[-2:]).reshape((-1,) + a2.shape[-2:])
    b_slices = np.broadcast_to(b2, batch_shape + b2.shape[-2:]).reshape((-1,) + b2.shape[-2:])
    if a_slices.shape[0] == 0:
        out = np.zeros(batch_shape + (n, m))
    else:
        out = np.stack([matmul_2d(x, y) for x, y in zip(a_slices, b_slices)])
        out = out.reshape(batch_shape + (n, m))

    if a.ndim == 1:
        out = out[..., 0, :]
    if b.ndim == 1:
        out = out[..., 0]
    return out


def _normalize_axes(axes: Sequence[int] | int, ndim: int, name: str) -> list[int]:
    if isinstance(axes, (int, np.integer)):
        axes = [int(axes)]
    normalized = []
    for axis in axes:
        if not -ndim <= axis < ndim:
            raise ParameterError(
                f"tensordot: axis {axis} is out of bounds for {name} with {ndim} dimensions",
                param='axes',
            )
        normalized.append(axis % ndim)
    return normalized


def tensordot(a: NDArray[np.float64], b: NDArray[np.float64], axes: TensorAxes = 2) -> NDArray[np.float64]:
    """
    Sum products over the given axes of a and b.

    Args:
        axes: An int N (last N axes of a against the first N axes of b)
              or a pair (axes_a, axes_b) of equal-length axis sequences

    Raises:
        ParameterError: If axes are out of bounds or malformed
        ShapeError: If the paired axes differ in count or size
    """
    if isinstance(axes, (int, np.integer)):
        if axes < 0 or axes > a.ndim or axes > b.ndim:
            raise ParameterError(
                f"tensordot: axes={axes} is invalid for operands with "
                f"{a.ndim} and {b.ndim} dimensions",
                param='axes',
            )
        a_axes = list(range(a.ndim - axes, a.ndim))
        b_axes = list(range(axes))
    else:
        try:
            raw_a, raw_b = axes
        except (TypeError, ValueError) as e:
            raise ParameterError(
                "tensordot: axes must be an int or a pair of axis sequences",
                param='axes',
            ) from e
        a_axes = _normalize_axes(raw_a, a.ndim, 'a')
        b_axes = _normalize_axes(raw_b, b.ndim, 'b')

    if len(a_axes) != len(b_axes):
        raise ShapeError(
            f"tensordot: {len(a_axes)} axes of a paired with {len(b_axes)} axes of b",
            shape_1=a.shape,
            shape_2=b.shape,
        )
    for ax_a, ax_b in zip(a_axes, b_axes):
        if a.shape[ax_a] != b.shape[ax_b]:
            raise ShapeError(
                f"tensordot: shape mismatch for sum, a axis {ax_a} has size "
                f"{a.shape[ax_a]}, b axis {ax_b} has size {b.shape[ax_b]}",
                shape_1=a.shape,
                shape_2=b.shape,
            )

    free_a = [k for k in range(a.ndim) if k not in a_axes]
    free_b = [k for k in range(b.ndim) if k not in b_axes]
    n_contract = math.prod(a.shape[k] for k in a_axes)
    n_free_a = math.prod(a.shape[k] for k in free_a)
    n_free_b = math.prod(b.shape[k] for k in free_b)

    at = np.transpose(a, free_a + a_axes).reshape(n_free_a, n_contract)
    bt = np.transpose(b, b_axes + free_b).reshape(n_contract, n_free_b)
    out = matmul_2d(at, bt)
    return out.reshape(tuple(a.shape[k] for k in free_a) + tuple(b.shape[k] for k in free_b))

