"""
Tolerances, thresholds and iteration caps.

This module is the configuration surface of the engine: every default
that changes numerical behaviour lives here and is passed down as a
keyword argument by the public functions.

Tolerance tiers describe precision expectations for the different
algorithms and are used by the test suite and the rank estimate:
- Direct methods (LU, Gram-Schmidt, products) in float64
- The unshifted QR eigenvalue iteration with an explicit tolerance
- The QR eigenvalue iteration under the diagonal-dominance heuristic
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Direct float64 algorithms: LU solve, Gram-Schmidt QR, products
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, direct methods',
)

# Direct float64 algorithms on ill-conditioned input (cond > 1e4)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

# QR eigenvalue iteration run to an explicit sub-diagonal tolerance
CPU_FP64_ITERATIVE = ToleranceTier(
    rtol=1e-8,
    atol=1e-9,
    name='cpu_fp64_iterative',
    description='QR iteration with explicit sub-diagonal tolerance',
)

# QR eigenvalue iteration stopped by the diagonal-dominance heuristic.
# The heuristic stops as soon as every row is dominated by its diagonal,
# which typically leaves eigenvalues accurate to a few digits only.
CPU_FP64_HEURISTIC = ToleranceTier(
    rtol=5e-2,
    atol=5e-2,
    name='cpu_fp64_heuristic',
    description='QR iteration stopped by diagonal dominance',
)

# Hard cap on QR eigenvalue iterations per matrix
EIGEN_MAX_ITER = 10000

# |det(A)| below this absolute value makes solve() raise SingularMatrixError
SINGULAR_DET_THRESHOLD = 1e-12

# Gram-Schmidt residuals at most this fraction of their column's norm mark
# the column as linearly dependent on the earlier ones
QR_RANK_RTOL = 1e-12

# Householder vectors with a norm below this are treated as zero and the
# reflection is skipped
HOUSEHOLDER_ATOL = 1e-14

# Relative floor for zero pivots when recovering eigenvectors from the
# singular system (A - lambda I) x = 1
EIGENVECTOR_PIVOT_FLOOR = 1e-14

# An eigenvector candidate is accepted once ||A x - lambda x|| is at most
# this fraction of max(||A||_F, 1)
EIGENVECTOR_RESIDUAL_RTOL = 1e-10

# Inverse-iteration refinement of an eigenvector stops once successive
# unit iterates differ by at most this much, or after this many steps
EIGENVECTOR_STEP_TOL = 1e-13
EIGENVECTOR_MAX_STEPS = 50

# Relative off-diagonal tolerance of the Gram-matrix iteration behind the
# singular value decomposition (scaled by ||A'A||_F)
SVD_OFFDIAG_RTOL = 1e-13


def select_tolerance(
    method: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given algorithm."""
    if method == 'qr_iteration':
        return CPU_FP64_ITERATIVE
    if method == 'qr_iteration_heuristic':
        return CPU_FP64_HEURISTIC
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
