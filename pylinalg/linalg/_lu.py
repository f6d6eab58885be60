"""
LU decomposition with partial pivoting and triangular substitution.

Doolittle factorization P A = L U: L is unit lower triangular, U upper
triangular, P the row permutation chosen by partial pivoting (at each
column the remaining row with the largest-magnitude entry becomes the
pivot row).

Solving runs forward substitution L Y = P B followed by back substitution
U X = Y. Every right-hand-side column is independent; they are processed
together as the columns of one 2-d array.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pylinalg.linalg._products import matmul_2d


@dataclass(frozen=True)
class LUFactors:
    """
    Result of LU decomposition with partial pivoting.

    Attributes:
        L: Unit lower triangular matrix (n x n)
        U: Upper triangular matrix (n x n)
        perm: Row permutation, (P B)[i] == B[perm[i]]
        n_swaps: Number of row exchanges performed
    """
    L: NDArray[np.float64]
    U: NDArray[np.float64]
    perm: NDArray[np.intp]
    n_swaps: int


def lu_decompose(
    a: NDArray[np.float64],
    pivot_floor: float | None = None,
) -> LUFactors:
    """
    Factor a square float64 matrix as P A = L U.

    Args:
        a: Square 2-d float64 matrix
        pivot_floor: If given, pivots smaller in magnitude are replaced by
            this value (keeping their sign). Without it zero pivots are not
            guarded; callers check singularity first.
    """
    n = a.shape[0]
    lower = np.identity(n)
    upper = a.copy()
    perm = np.arange(n)
    n_swaps = 0

    for j in range(n):
        pivot = j + int(np.argmax(np.abs(upper[j:, j])))
        if pivot != j:
            upper[[j, pivot]] = upper[[pivot, j]]
            lower[[j, pivot], :j] = lower[[pivot, j], :j]
            perm[[j, pivot]] = perm[[pivot, j]]
            n_swaps += 1

        if pivot_floor is not None and abs(upper[j, j]) < pivot_floor:
            upper[j, j] = pivot_floor if upper[j, j] >= 0 else -pivot_floor

        for i in range(j + 1, n):
            factor = upper[i, j] / upper[j, j]
            lower[i, j] = factor
            upper[i, j:] = upper[i, j:] - factor * upper[j, j:]

    return LUFactors(L=lower, U=upper, perm=perm, n_swaps=n_swaps)


def forward_substitution(lower: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Solve L Y = B for unit lower triangular L; B is (n, k)."""
    n = lower.shape[0]
    y = np.zeros_like(b)
    for i in range(n):
        y[i] = b[i] - matmul_2d(lower[i:i + 1, :i], y[:i])[0]
    return y


def back_substitution(upper: NDArray[np.float64], y: NDArray[np.float64]) -> NDArray[np.float64]:
    """Solve U X = Y for upper triangular U; Y is (n, k)."""
    n = upper.shape[0]
    x = np.zeros_like(y)
    for i in range(n - 1, -1, -1):
        x[i] = (y[i] - matmul_2d(upper[i:i + 1, i + 1:], x[i + 1:])[0]) / upper[i, i]
    return x


def lu_null_vector(factors: LUFactors) -> NDArray[np.float64]:
    """
    Approximate null vector of a (nearly) singular factored matrix.

    The entry at the smallest pivot of U is fixed to 1, later entries to 0,
    and the leading block is back-substituted, so U x vanishes except
    for that pivot's own (tiny) row. Since P A = L U with L and P
    invertible, A x is equally small. Not normalized.
    """
    upper = factors.U
    n = upper.shape[0]
    k = int(np.argmin(np.abs(np.diag(upper))))
    x = np.zeros(n)
    x[k] = 1.0
    if k > 0:
        x[:k] = back_substitution(upper[:k, :k], -upper[:k, k:k + 1])[:, 0]
    return x


def lu_solve(factors: LUFactors, b: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Solve A X = B given the factors of A.

    Args:
        factors: Output of lu_decompose(A)
        b: Right-hand side, shape (n,) or (n, k)

    Returns:
        X with the same shape as b
    """
    columns = b.reshape(b.shape[0], -1)
    y = forward_substitution(factors.L, columns[factors.perm])
    x = back_substitution(factors.U, y)
    return x.reshape(b.shape)
