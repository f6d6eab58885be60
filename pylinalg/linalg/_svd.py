"""
Singular value decomposition through the Gram matrix.

The eigen-decomposition A'A = V diag(s^2) V' comes from the accumulated
symmetric QR iteration; singular values are the square roots of its
eigenvalues in descending order and the left vectors are u_i = A v_i / s_i.
Columns of U for (numerically) zero singular values have no such
direction; Gram-Schmidt completes them to an orthonormal basis.

Squaring A halves the attainable relative accuracy of small singular
values (about sqrt(eps) * s_max), which is the price of reusing the
eigenvalue machinery.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.precision import EPSILON_64
from pylinalg.core.compute.tolerances import EIGEN_MAX_ITER, SVD_OFFDIAG_RTOL
from pylinalg.linalg._eigen import frobenius, symmetric_qr_iteration
from pylinalg.linalg._products import dot
from pylinalg.linalg._qr import gram_schmidt


@dataclass(frozen=True)
class SVDResult:
    """
    Singular value decomposition of one matrix, A = U diag(s) Vt.

    Attributes:
        U: Left singular vectors in columns, or None if not requested
        s: Singular values, descending
        Vt: Right singular vectors in rows, or None if not requested
        converged: Whether the Gram-matrix iteration met its tolerance
        iterations: Number of QR steps on the Gram matrix
    """
    U: NDArray[np.float64] | None
    s: NDArray[np.float64]
    Vt: NDArray[np.float64] | None
    converged: bool
    iterations: int


def svd_decompose(
    a: NDArray[np.float64],
    max_iter: int = EIGEN_MAX_ITER,
    compute_vectors: bool = True,
) -> SVDResult:
    """
    SVD of a 2-d float64 matrix.

    Args:
        a: 2-d float64 matrix; must be square when compute_vectors is set
        max_iter: Cap on QR steps for the Gram matrix
        compute_vectors: Also build U and Vt

    Returns:
        SVDResult; for rectangular input (values only) there are
        min(m, n) singular values
    """
    work = a.T if a.shape[0] < a.shape[1] else a
    gram = dot(work.T, work)
    tol = SVD_OFFDIAG_RTOL * frobenius(gram)
    outcome = symmetric_qr_iteration(gram, max_iter=max_iter, tol=tol)

    order = np.argsort(-outcome.eigenvalues, kind='stable')
    s = np.sqrt(np.clip(outcome.eigenvalues[order], 0.0, None))

    if not compute_vectors:
        return SVDResult(
            U=None, s=s, Vt=None,
            converged=outcome.converged, iterations=outcome.iterations,
        )

    v = outcome.eigenvectors[:, order]
    cutoff = s[0] * max(a.shape) * EPSILON_64
    columns = np.zeros_like(a)
    for i, value in enumerate(s):
        if value > cutoff:
            columns[:, i] = dot(a, v[:, i]) / value
    u = gram_schmidt(columns).Q

    return SVDResult(
        U=u, s=s, Vt=v.T.copy(),
        converged=outcome.converged, iterations=outcome.iterations,
    )
