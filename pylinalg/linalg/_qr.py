"""
QR factorization by Gram-Schmidt orthogonalization.

Q is built column by column: each column of A has its projection onto
every previously produced residual removed, and the remaining residual
is normalized. R follows as Q' A.

A column whose residual vanishes (rank-deficient input) has no direction
of its own. Instead of normalizing a zero vector into NaN, the basis is
completed with the unit vector least represented in the current basis,
so Q stays orthogonal and Q R still reproduces A; the corresponding
diagonal entry of R is ~0. Such columns are reported in
deficient_columns.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.tolerances import QR_RANK_RTOL
from pylinalg.linalg._products import dot, vdot
from pylinalg.linalg._view import from_matrix, get_columns


@dataclass(frozen=True)
class GramSchmidtResult:
    """
    Factors of one square matrix.

    Attributes:
        Q: Matrix with orthonormal columns (n x n)
        R: Upper triangular matrix (n x n), R = Q' A
        deficient_columns: Columns whose residual vanished (numerically)
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    deficient_columns: tuple[int, ...]


def project(u: NDArray[np.float64], a: NDArray[np.float64]) -> NDArray[np.float64]:
    """Projection of a onto u: (u'a / u'u) u."""
    return (vdot(u, a) / vdot(u, u)) * u


def _complete_basis(basis: list[NDArray[np.float64]], n: int) -> NDArray[np.float64]:
    """Unit vector orthogonal to every vector in basis (orthonormal)."""
    best, best_norm = None, -1.0
    for i in range(n):
        candidate = np.zeros(n)
        candidate[i] = 1.0
        # two passes keep the result orthogonal to working precision
        for _ in range(2):
            for e in basis:
                candidate = candidate - vdot(e, candidate) * e
        norm = float(np.sqrt(vdot(candidate, candidate)))
        if norm > best_norm:
            best, best_norm = candidate, norm
    return best / best_norm


def gram_schmidt(a: NDArray[np.float64]) -> GramSchmidtResult:
    """
    Factor a square float64 matrix as A = QR.

    Args:
        a: Square 2-d float64 matrix, at least 2x2 (validated by caller)

    Returns:
        GramSchmidtResult with Q, R and the rank-deficient columns
    """
    n = a.shape[0]
    residuals: list[NDArray[np.float64]] = []
    basis: list[NDArray[np.float64]] = []
    deficient = []

    for j, column in enumerate(get_columns(a)):
        v = column
        for u in residuals:
            v = v - project(u, v)

        norm = float(np.sqrt(vdot(v, v)))
        column_norm = float(np.sqrt(vdot(column, column)))
        if norm > QR_RANK_RTOL * column_norm:
            residuals.append(v)
            basis.append(v / norm)
        else:
            deficient.append(j)
            e = _complete_basis(basis, n)
            residuals.append(e)
            basis.append(e)

    q = from_matrix(basis).T.copy()
    r = dot(q.T, a)
    return GramSchmidtResult(Q=q, R=r, deficient_columns=tuple(deficient))
