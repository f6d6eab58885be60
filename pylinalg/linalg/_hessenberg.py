"""
Householder reduction to upper Hessenberg form.

Used as preprocessing for the QR eigenvalue iteration: the reduced matrix
is similar to the input (same eigenvalues) and has zeros below its first
sub-diagonal.
"""

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.precision import is_close
from pylinalg.core.compute.tolerances import HOUSEHOLDER_ATOL
from pylinalg.linalg._products import dot, outer, vdot


def householder_vector(x: NDArray[np.float64]) -> NDArray[np.float64] | None:
    """
    Unit vector v such that (I - 2vv')x is a multiple of e1.

    The sign of x[0] is added to the leading entry so the subtraction never
    cancels (sign(0) counts as +1). Returns None when v is ~0, i.e. there is
    nothing to reflect.
    """
    x_norm = float(np.sqrt(vdot(x, x)))
    v = x.copy()
    v[0] += np.copysign(x_norm, x[0])
    v_norm = float(np.sqrt(vdot(v, v)))
    if is_close(v_norm, 0.0, rtol=0.0, atol=HOUSEHOLDER_ATOL):
        return None
    return v / v_norm


def hessenberg(a: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Similarity-reduce a square float64 matrix to upper Hessenberg form.

    For each column k = 0..n-3 the entries below the sub-diagonal are
    annihilated by a reflection applied from the left to the trailing
    rows, then from the right to the trailing columns.

    Args:
        a: Square 2-d float64 matrix (validated by caller)

    Returns:
        New matrix H with H[i, j] == 0 for i > j + 1
    """
    n = a.shape[0]
    h = a.copy()

    for k in range(n - 2):
        v = householder_vector(h[k + 1:, k])
        if v is None:
            h[k + 2:, k] = 0.0
            continue

        block = h[k + 1:, k:]
        h[k + 1:, k:] = block - 2.0 * outer(v, dot(v, block))

        block = h[:, k + 1:]
        h[:, k + 1:] = block - 2.0 * outer(dot(block, v), v)

        h[k + 2:, k] = 0.0

    return h
