"""
Public linear-algebra API.

Every function validates its inputs before any numerical work, computes in
float64 and returns results in the input's element type (integer and
bool results are truncated toward zero). Arrays of rank > 2 are batches of
matrices over their trailing two axes; slices are processed in order and
the first failing slice aborts the call.

Products:       dot, vdot, inner, outer, matmul, tensordot
Decompositions: qr, eigvals, eig, svd
Solvers:        solve, inv
Matrix scalars: det, matrix_rank, norm
"""

from __future__ import annotations

import warnings
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.precision import restore_dtype, result_dtype, to_float64
from pylinalg.core.compute.tolerances import EIGEN_MAX_ITER, SINGULAR_DET_THRESHOLD
from pylinalg.core.exceptions import (
    ConvergenceWarning,
    ParameterError,
    ShapeError,
    SingularMatrixError,
)
from pylinalg.core.validation import (
    check_array,
    check_finite,
    check_min_size,
    check_square,
    check_supported_ndim,
)
from pylinalg.linalg import _norms, _products
from pylinalg.linalg._lu import lu_decompose, lu_solve
from pylinalg.linalg._view import split_batches
from pylinalg.linalg.backends.cpu import CPULinalgBackend
from pylinalg.linalg.design import MatrixDesign
from pylinalg.linalg.solution import EigenSolution, QRSolution, SVDSolution


BackendChoice = Literal['auto', 'cpu']


def _get_backend(backend: BackendChoice) -> CPULinalgBackend:
    """Select backend based on preference."""
    if backend in ('auto', 'cpu'):
        return CPULinalgBackend()
    raise ParameterError(f"backend: unknown backend {backend!r}", param='backend')


def _ensure_design(a: ArrayLike | MatrixDesign, name: str = 'a') -> MatrixDesign:
    """Convert raw array to MatrixDesign if needed."""
    if isinstance(a, MatrixDesign):
        return a
    return MatrixDesign.from_array(a, name=name)


def _product_operands(a: ArrayLike, b: ArrayLike) -> tuple[NDArray, NDArray, np.dtype]:
    a = check_array(a, 'a')
    b = check_array(b, 'b')
    return to_float64(a), to_float64(b), result_dtype(a, b)


# ═══════════════════════════════════════════════════════════════════════
# Products
# ═══════════════════════════════════════════════════════════════════════

def dot(a: ArrayLike, b: ArrayLike) -> NDArray[Any]:
    """
    Generalized dot product.

    Parameters
    ----------
    a, b : array-like
        Real numeric arrays of any rank.

    Returns
    -------
    ndarray
        - a or b holding a single element: the other operand scaled
        - 1-d . 1-d: the inner product (0-d array)
        - 2-d . 2-d: the matrix product
        - otherwise: a's last axis contracted with b's second-to-last,
          shape a.shape[:-1] + b.shape[:-2] + b.shape[-1:]

    Raises
    ------
    ParameterError
        If the contracted axes differ in size.
    """
    a, b, dtype = _product_operands(a, b)
    return restore_dtype(_products.dot(a, b), dtype)


def vdot(a: ArrayLike, b: ArrayLike) -> NDArray[Any]:
    """Inner product of the flattened operands (0-d array)."""
    a, b, dtype = _product_operands(a, b)
    return restore_dtype(_products.vdot(a, b), dtype)


def inner(a: ArrayLike, b: ArrayLike) -> NDArray[Any]:
    """Inner product over the last axis, shape a.shape[:-1] + b.shape[:-1]."""
    a, b, dtype = _product_operands(a, b)
    return restore_dtype(_products.inner(a, b), dtype)


def outer(a: ArrayLike, b: ArrayLike) -> NDArray[Any]:
    """Outer product of the flattened operands, shape (a.size, b.size)."""
    a, b, dtype = _product_operands(a, b)
    return restore_dtype(_products.outer(a, b), dtype)


def matmul(a: ArrayLike, b: ArrayLike) -> NDArray[Any]:
    """
    Matrix product with broadcast batch axes.

    Raises
    ------
    ParameterError
        If an operand is 0-d or the contracted axes differ.
    ShapeError
        If the batch axes cannot be broadcast together.
    """
    a, b, dtype = _product_operands(a, b)
    return restore_dtype(_products.matmul(a, b), dtype)


def tensordot(a: ArrayLike, b: ArrayLike, axes: _products.TensorAxes = 2) -> NDArray[Any]:
    """
    Sum products over selected axes.

    Parameters
    ----------
    axes : int or (sequence, sequence)
        N contracts the last N axes of a with the first N axes of b; a
        pair lists the axes of a and of b to contract, in matching order.
    """
    a, b, dtype = _product_operands(a, b)
    return restore_dtype(_products.tensordot(a, b, axes=axes), dtype)


# ═══════════════════════════════════════════════════════════════════════
# Decompositions
# ═══════════════════════════════════════════════════════════════════════

def qr(
    a: ArrayLike | MatrixDesign,
    *,
    backend: BackendChoice = 'auto',
) -> QRSolution:
    """
    QR factorization by Gram-Schmidt orthogonalization.

    Parameters
    ----------
    a : array-like or MatrixDesign
        Square matrix, at least 2x2, or a batch of them.
    backend : str
        'auto' or 'cpu'.

    Returns
    -------
    QRSolution
        One (Q, R) pair per batch slice with A = QR. Rank-deficient
        slices produce a warning on the solution, not an error.

    Raises
    ------
    DimensionError
        If a has fewer than 2 dimensions or is smaller than 2x2.
    NotSquareError
        If the trailing axes differ in size.
    """
    design = _ensure_design(a)
    check_square(design.data, 'a')
    check_min_size(design.data, 2, 'a')
    check_finite(design.data, 'a')

    result = _get_backend(backend).qr(design)
    return QRSolution(_result=result, _design=design)


def _run_eig(
    a: ArrayLike | MatrixDesign,
    compute_vectors: bool,
    max_iter: int,
    tol: float | None,
    strict: bool,
    backend: BackendChoice,
) -> EigenSolution:
    design = _ensure_design(a)
    check_square(design.data, 'a')
    check_min_size(design.data, 2, 'a')
    check_finite(design.data, 'a')
    if max_iter < 1:
        raise ParameterError(f"max_iter: must be >= 1, got {max_iter}", param='max_iter')
    if tol is not None and not tol > 0:
        raise ParameterError(f"tol: must be positive, got {tol}", param='tol')

    result = _get_backend(backend).eig(
        design,
        compute_vectors=compute_vectors,
        max_iter=max_iter,
        tol=tol,
        strict=strict,
    )

    for message in result.warnings:
        warnings.warn(message, ConvergenceWarning, stacklevel=3)

    return EigenSolution(_result=result, _design=design)


def eigvals(
    a: ArrayLike | MatrixDesign,
    *,
    max_iter: int = EIGEN_MAX_ITER,
    tol: float | None = None,
    strict: bool = False,
    backend: BackendChoice = 'auto',
) -> EigenSolution:
    """
    Eigenvalues by the unshifted QR iteration.

    The matrix is reduced to Hessenberg form, then H <- RQ (with H = QR)
    is repeated until the stopping criterion holds or max_iter is reached.
    Eigenvalues are read off the diagonal in diagonal order (not sorted).

    Parameters
    ----------
    a : array-like or MatrixDesign
        Square matrix, at least 2x2, or a batch of them.
    max_iter : int
        Iteration cap per slice.
    tol : float or None
        Stop once every sub-diagonal entry is at most tol in magnitude.
        None (default) stops as soon as the iterate is strictly diagonally
        dominant, which is fast but only accurate to a few digits.
    strict : bool
        Raise ConvergenceError when a slice reaches max_iter. Otherwise
        the slice is marked converged=False and a ConvergenceWarning is
        emitted.
    backend : str
        'auto' or 'cpu'.

    Returns
    -------
    EigenSolution
        One (values, None) pair per batch slice.

    Notes
    -----
    Only real eigenvalues are supported. Complex-conjugate pairs never
    satisfy the stopping criterion and surface as non-convergence.
    """
    return _run_eig(a, False, max_iter, tol, strict, backend)


def eig(
    a: ArrayLike | MatrixDesign,
    *,
    max_iter: int = EIGEN_MAX_ITER,
    tol: float | None = None,
    strict: bool = False,
    backend: BackendChoice = 'auto',
) -> EigenSolution:
    """
    Eigenvalues and eigenvectors.

    Eigenvalues as in eigvals(). For each eigenvalue lambda the eigenvector
    is the normalized solution of (A - lambda I) x = 1, stored as a column
    of the eigenvector matrix. When that solve does not yield an
    eigenvector (the ones vector lacks a component along it), the vector
    is recovered by inverse iteration from the null vector of the LU
    factors of A - lambda I.

    Returns
    -------
    EigenSolution
        One (values, vectors) pair per batch slice.

    Notes
    -----
    Pairs are only as accurate as the eigenvalues. Under the default
    diagonal-dominance stop the values may be off in the first or second
    decimal; each vector is then the eigenvector of the true eigenvalue
    nearest its value, so ||A v - lambda v|| is about the eigenvalue
    error. Pass tol (e.g. 1e-12) for pairs accurate to working precision.
    """
    return _run_eig(a, True, max_iter, tol, strict, backend)


def svd(
    a: ArrayLike | MatrixDesign,
    *,
    max_iter: int = EIGEN_MAX_ITER,
    strict: bool = False,
    backend: BackendChoice = 'auto',
) -> SVDSolution:
    """
    Singular value decomposition A = U diag(s) Vt.

    A'A is diagonalized by the QR iteration with accumulated transforms;
    s holds the square roots of its eigenvalues in descending order,
    Vt the corresponding eigenvectors as rows, and U = A V diag(s)^-1
    completed to an orthonormal basis where s is zero.

    Parameters
    ----------
    a : array-like or MatrixDesign
        Square matrix, at least 2x2, or a batch of them.
    max_iter : int
        Iteration cap for the Gram matrix of each slice.
    strict : bool
        Raise ConvergenceError when a slice reaches max_iter instead of
        emitting a ConvergenceWarning.
    backend : str
        'auto' or 'cpu'.

    Returns
    -------
    SVDSolution
        One (U, s, Vt) triple per batch slice.

    Notes
    -----
    Working through A'A limits small singular values to an absolute
    accuracy of roughly sqrt(eps) * max(s).
    """
    design = _ensure_design(a)
    check_square(design.data, 'a')
    check_min_size(design.data, 2, 'a')
    check_finite(design.data, 'a')
    if max_iter < 1:
        raise ParameterError(f"max_iter: must be >= 1, got {max_iter}", param='max_iter')

    result = _get_backend(backend).svd(design, max_iter=max_iter, strict=strict)

    for message in result.warnings:
        warnings.warn(message, ConvergenceWarning, stacklevel=2)

    return SVDSolution(_result=result, _design=design)


# ═══════════════════════════════════════════════════════════════════════
# Linear systems
# ═══════════════════════════════════════════════════════════════════════

def _split_rhs(a: NDArray, b: NDArray) -> tuple[list[NDArray], tuple[int, ...]]:
    """
    Pair right-hand sides with the batch slices of a.

    Returns the per-slice right-hand sides (in batch order) and the shape of
    one slice's solution.
    """
    n = a.shape[-1]
    batch_shape = a.shape[:-2]
    n_batches = int(np.prod(batch_shape, dtype=np.int64))

    if batch_shape:
        if b.ndim == a.ndim - 1 and b.shape == a.shape[:-1]:
            return list(b.reshape(-1, n)), (n,)
        if b.ndim == a.ndim and b.shape[:-2] == batch_shape and b.shape[-2] == n:
            return split_batches(b), b.shape[-2:]

    check_supported_ndim(b, (1, 2), 'b')
    if b.shape[0] != n:
        raise ShapeError(
            f"b: leading dimension {b.shape[0]} does not match the {n}x{n} "
            f"system matrix",
            shape_1=a.shape,
            shape_2=b.shape,
        )
    return [b] * n_batches, b.shape


def solve(a: ArrayLike, b: ArrayLike) -> NDArray[Any]:
    """
    Solve A X = B by LU decomposition with partial pivoting.

    Parameters
    ----------
    a : array-like
        Square matrix, or a batch of square matrices.
    b : array-like
        Right-hand side(s): a vector (n,) or matrix (n, k) shared by every
        slice, or, for batched a, one vector or matrix per slice
        (shape a.shape[:-1] or a.shape[:-2] + (n, k)).

    Returns
    -------
    ndarray
        X in the common element type of a and b.

    Raises
    ------
    DimensionError, NotSquareError
        If a is not a (batch of) square matrices.
    ShapeError
        If b does not match a.
    SingularMatrixError
        If |det(A)| of a slice is below 1e-12.
    """
    a = check_array(a, 'a')
    b = check_array(b, 'b')
    check_square(a, 'a')
    check_finite(a, 'a')
    check_finite(b, 'b')
    dtype = result_dtype(a, b)

    rhs, slice_shape = _split_rhs(a, b)
    batch_shape = a.shape[:-2]
    out = np.empty((len(rhs),) + tuple(slice_shape))

    for index, (matrix, rhs_slice) in enumerate(zip(split_batches(a), rhs)):
        matrix = to_float64(matrix)
        determinant = _norms.determinant(matrix)
        if abs(determinant) < SINGULAR_DET_THRESHOLD:
            name = f"a[{index}]" if batch_shape else 'a'
            raise SingularMatrixError(
                f"{name}: matrix is singular, |det| = {abs(determinant):.3e} "
                f"< {SINGULAR_DET_THRESHOLD:g}",
                matrix_name=name,
                determinant=determinant,
                threshold=SINGULAR_DET_THRESHOLD,
            )
        out[index] = lu_solve(lu_decompose(matrix), to_float64(rhs_slice))

    return restore_dtype(out.reshape(batch_shape + tuple(slice_shape)), dtype)


def inv(a: ArrayLike) -> NDArray[Any]:
    """
    Matrix inverse, computed as solve(A, I) for every slice.

    Raises
    ------
    SingularMatrixError
        If |det(A)| of a slice is below 1e-12.
    """
    a = check_array(a, 'a')
    check_square(a, 'a')
    identity = np.broadcast_to(np.identity(a.shape[-1], dtype=a.dtype), a.shape)
    return solve(a, identity)


# ═══════════════════════════════════════════════════════════════════════
# Matrix scalars
# ═══════════════════════════════════════════════════════════════════════

def det(a: ArrayLike) -> NDArray[Any]:
    """
    Determinant by Gaussian elimination with partial pivoting.

    Returns a scalar for one matrix and an array of shape a.shape[:-2]
    for a batch.
    """
    a = check_array(a, 'a')
    check_square(a, 'a')
    values = np.array(
        [_norms.determinant(to_float64(m)) for m in split_batches(a)],
        dtype=np.float64,
    )
    return restore_dtype(values.reshape(a.shape[:-2]), a.dtype)[()]


def matrix_rank(a: ArrayLike, tol: float | None = None) -> NDArray[np.intp] | int:
    """
    Numerical rank from the pivots of a partially pivoted elimination.

    Pivots at most tol in magnitude count as zero; the default tolerance is
    max(M, N) * eps * max|A| per slice. Arrays with fewer than 2
    dimensions have rank 1 unless every element is zero.
    """
    a = check_array(a, 'a')
    if tol is not None and tol < 0:
        raise ParameterError(f"tol: must be non-negative, got {tol}", param='tol')
    if a.ndim < 2:
        return int(np.any(a != 0))
    ranks = [_norms.rank(to_float64(m), tol=tol) for m in split_batches(a)]
    if a.ndim == 2:
        return ranks[0]
    return np.array(ranks, dtype=np.intp).reshape(a.shape[:-2])


def norm(
    x: ArrayLike,
    ord: _norms.NormOrd = None,
    axis: int | tuple[int, ...] | None = None,
    keepdims: bool = False,
) -> NDArray[np.float64] | float:
    """
    Vector or matrix norm.

    Parameters
    ----------
    x : array-like
        Real numeric array.
    ord : {None, int, float, 'inf', '-inf', 'fro', 'nuc'}
        Order of the norm. None is the 2-norm for vectors and the
        Frobenius norm for matrices. For matrices 2 and -2 are the largest
        and smallest singular value and 'nuc' their sum.
    axis : int, 2-tuple of int or None
        One axis computes vector norms, two axes matrix norms. None uses
        the flattened array when ord is None, otherwise all axes of a 1-d
        or 2-d x.
    keepdims : bool
        Keep the normed axes as size-one dimensions.

    Raises
    ------
    ParameterError
        For unsupported orders and invalid axes.
    ConvergenceError
        If the singular values of a matrix do not converge (orders 2, -2
        and 'nuc').
    """
    x = check_array(x, 'x')
    result = _norms.norm(to_float64(x), ord=ord, axis=axis, keepdims=keepdims)
    if result.ndim == 0:
        return float(result)
    return result
