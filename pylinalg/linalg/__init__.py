"""
Linear-algebra module.

Gram-Schmidt QR, QR-iteration eigenvalues and singular values, LU
solves and generalized products over NumPy arrays. Arrays of rank > 2
are batches of matrices over their trailing two axes.

Public API:
    dot(a, b)          - Generalized (batched) dot product
    vdot, inner, outer - Flattened / last-axis / outer products
    matmul(a, b)       - Matrix product with broadcast batch axes
    tensordot(a, b)    - Contraction over selected axes
    qr(a)              - QR factorization (Gram-Schmidt)
    eigvals(a)         - Eigenvalues (unshifted QR iteration)
    eig(a)             - Eigenvalues and eigenvectors
    svd(a)             - Singular value decomposition (via A'A)
    solve(a, b)        - Linear systems (LU with partial pivoting)
    inv(a)             - Matrix inverse
    det(a)             - Determinant
    matrix_rank(a)     - Numerical rank
    norm(x)            - Vector and matrix norms
"""

from pylinalg.linalg.design import MatrixDesign
from pylinalg.linalg.solution import (
    EigenPair,
    EigenParams,
    EigenSolution,
    QRFactors,
    QRParams,
    QRSolution,
    SVDFactors,
    SVDParams,
    SVDSolution,
)
from pylinalg.linalg.solvers import (
    dot,
    vdot,
    inner,
    outer,
    matmul,
    tensordot,
    qr,
    eigvals,
    eig,
    svd,
    solve,
    inv,
    det,
    matrix_rank,
    norm,
)

__all__ = [
    "dot",
    "vdot",
    "inner",
    "outer",
    "matmul",
    "tensordot",
    "qr",
    "eigvals",
    "eig",
    "svd",
    "solve",
    "inv",
    "det",
    "matrix_rank",
    "norm",
    "MatrixDesign",
    "QRFactors",
    "QRParams",
    "QRSolution",
    "EigenPair",
    "EigenParams",
    "EigenSolution",
    "SVDFactors",
    "SVDParams",
    "SVDSolution",
]
