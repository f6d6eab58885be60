"""
Unshifted QR eigenvalue iteration.

The matrix is first reduced to Hessenberg form; each step factors
H = QR, recombines H <- RQ (a similarity transform) and re-reduces.
Eigenvalues are read off the diagonal once the stopping criterion holds
or the iteration cap is reached.

Stopping criteria:
    - default: strict row diagonal dominance of H (is_convergent). Cheap,
      but it can stop while sub-diagonal entries are still sizeable.
    - tol: every sub-diagonal entry of H is at most tol in magnitude.

Complex-conjugate eigenvalue pairs never satisfy either criterion; such
matrices run to the cap and the diagonal does not hold eigenvalues.

symmetric_qr_iteration is the variant used for Gram matrices A'A: no
Hessenberg step, and the orthogonal factors are accumulated so the
eigenvectors come out of the iteration itself.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.tolerances import (
    EIGEN_MAX_ITER,
    EIGENVECTOR_MAX_STEPS,
    EIGENVECTOR_PIVOT_FLOOR,
    EIGENVECTOR_RESIDUAL_RTOL,
    EIGENVECTOR_STEP_TOL,
)
from pylinalg.linalg._hessenberg import hessenberg
from pylinalg.linalg._lu import lu_decompose, lu_null_vector, lu_solve
from pylinalg.linalg._products import dot, vdot
from pylinalg.linalg._qr import gram_schmidt
from pylinalg.linalg._view import is_convergent


@dataclass(frozen=True)
class IterationResult:
    """
    Outcome of the QR iteration on one matrix.

    Attributes:
        eigenvalues: Diagonal of the final iterate, in diagonal order
        final: Final Hessenberg iterate
        converged: Whether the stopping criterion held before the cap
        iterations: Number of QR steps performed
    """
    eigenvalues: NDArray[np.float64]
    final: NDArray[np.float64]
    converged: bool
    iterations: int


@dataclass(frozen=True)
class SymmetricIterationResult:
    """
    Outcome of the accumulated QR iteration on a symmetric matrix.

    Attributes:
        eigenvalues: Diagonal of the final iterate, in diagonal order
        eigenvectors: Accumulated orthogonal factors; column i belongs
            to eigenvalues[i]
        converged: Whether the off-diagonal tolerance held before the cap
        iterations: Number of QR steps performed
    """
    eigenvalues: NDArray[np.float64]
    eigenvectors: NDArray[np.float64]
    converged: bool
    iterations: int


def frobenius(a: NDArray[np.float64]) -> float:
    return float(np.sqrt(vdot(a, a)))


def has_converged(h: NDArray[np.float64], tol: float | None = None) -> bool:
    """Stopping criterion of the QR iteration (see module docstring)."""
    if tol is None:
        return is_convergent(h)
    return float(np.max(np.abs(np.diag(h, k=-1)))) <= tol


def qr_iteration(
    a: NDArray[np.float64],
    max_iter: int = EIGEN_MAX_ITER,
    tol: float | None = None,
) -> IterationResult:
    """
    Run the unshifted QR iteration on a square float64 matrix.

    Args:
        a: Square 2-d float64 matrix, at least 2x2 (validated by caller)
        max_iter: Maximum number of QR steps
        tol: Sub-diagonal tolerance; None selects the diagonal-dominance test

    Returns:
        IterationResult; converged is False when the cap was reached
    """
    h = hessenberg(a)
    converged = False
    iterations = 0

    while iterations < max_iter:
        factors = gram_schmidt(h)
        h = hessenberg(dot(factors.R, factors.Q))
        iterations += 1
        if has_converged(h, tol):
            converged = True
            break

    return IterationResult(
        eigenvalues=np.diag(h).copy(),
        final=h,
        converged=converged,
        iterations=iterations,
    )


def _off_diagonal_max(h: NDArray[np.float64]) -> float:
    return float(np.max(np.abs(h - np.diag(np.diag(h)))))


def symmetric_qr_iteration(
    s: NDArray[np.float64],
    max_iter: int = EIGEN_MAX_ITER,
    tol: float = 0.0,
) -> SymmetricIterationResult:
    """
    Eigen-decompose a symmetric float64 matrix by accumulated QR steps.

    Each step is H <- R Q = Q' H Q with V <- V Q, so S = V H V' holds
    throughout. The iteration stops once every off-diagonal entry of H is
    at most tol in magnitude. H is re-symmetrized after every step.

    Unshifted iteration separates eigenvalues of different magnitude; it
    is meant for positive semi-definite input such as A'A.
    """
    n = s.shape[0]
    h = s.copy()
    v = np.identity(n)
    iterations = 0
    converged = _off_diagonal_max(h) <= tol

    while not converged and iterations < max_iter:
        factors = gram_schmidt(h)
        h = dot(factors.R, factors.Q)
        h = 0.5 * (h + h.T)
        v = dot(v, factors.Q)
        iterations += 1
        converged = _off_diagonal_max(h) <= tol

    return SymmetricIterationResult(
        eigenvalues=np.diag(h).copy(),
        eigenvectors=v,
        converged=converged,
        iterations=iterations,
    )


def _unit(x: NDArray[np.float64]) -> NDArray[np.float64]:
    return x / np.sqrt(vdot(x, x))


def residual(a: NDArray[np.float64], x: NDArray[np.float64], value: float) -> float:
    """||A x - value x||."""
    r = dot(a, x) - value * x
    return float(np.sqrt(vdot(r, r)))


def eigenvector(a: NDArray[np.float64], value: float) -> NDArray[np.float64]:
    """
    Unit eigenvector of a for an (approximate) eigenvalue.

    First solves (A - value I) x = 1 and normalizes x. The shifted matrix
    is singular by construction, so its zero pivots are lifted to a tiny
    floor instead of being rejected; the solve then amplifies the
    eigenvector direction (one inverse-iteration step).

    That step fails when the ones vector has no component along the
    eigenvector (e.g. it is another eigenvector, or orthogonal to this one
    for symmetric A). When the residual ||A x - value x|| is not small,
    the solve restarts from the null vector of the LU factors and runs
    inverse iteration with the same shift until the iterate settles.
    For an inexact value this yields the eigenvector of the eigenvalue
    nearest to it, with a residual of about the eigenvalue error.
    """
    n = a.shape[0]
    scale = max(frobenius(a), 1.0)
    shifted = a - value * np.identity(n)
    factors = lu_decompose(shifted, pivot_floor=EIGENVECTOR_PIVOT_FLOOR * scale)

    x = _unit(lu_solve(factors, np.ones(n)))
    if residual(a, x, value) <= EIGENVECTOR_RESIDUAL_RTOL * scale:
        return x

    x = _unit(lu_null_vector(factors))
    for _ in range(EIGENVECTOR_MAX_STEPS):
        y = _unit(lu_solve(factors, x))
        if vdot(x, y) < 0:
            y = -y
        step = float(np.sqrt(vdot(y - x, y - x)))
        x = y
        if step <= EIGENVECTOR_STEP_TOL:
            break
    return x


def eigenvectors(a: NDArray[np.float64], values: NDArray[np.float64]) -> NDArray[np.float64]:
    """Eigenvector matrix with one unit eigenvector per column."""
    return np.column_stack([eigenvector(a, float(value)) for value in values])
