"""
pylinalg: a numeric n-dimensional array linear-algebra engine for Python.

Pure, in-memory linear algebra over NumPy arrays: Gram-Schmidt QR,
QR-iteration eigenvalues with Hessenberg preprocessing, LU solves with
partial pivoting, inversion, singular values and generalized batched
products. Every operation accepts a batch of matrices in its leading dimensions.

Submodules:
    linalg: Products, decompositions, solvers and norms
    core: Exceptions, validation, result envelope, tolerances
"""

__version__ = "0.1.0"

from pylinalg import linalg

__all__ = [
    "__version__",
    "linalg",
]
