"""
Generic result container for pylinalg decompositions.

The Result class provides a standardized envelope that all decomposition
results use. This enables shared tooling for timing, reproducibility and
diagnostics while allowing each decomposition to define its own payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (converged, iterations, diagnostics)
    - timing is optional (don't burden unit tests)
    - provenance for reproducibility (versions, algorithm)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, Any]:
    """Generate minimal provenance metadata."""
    import numpy as np
    import pylinalg
    return {
        'pylinalg_version': pylinalg.__version__,
        'numpy_version': np.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for linear-algebra computations.

    Type Parameters:
        P: The decomposition-specific payload type

    Attributes:
        params: Decomposition payload (factors, eigenpairs, ...)
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions used to produce the result

    Examples:
        >>> # Direct method (no convergence notion)
        >>> Result(
        ...     params=QRParams(factors=(...)),
        ...     info={'method': 'gram_schmidt', 'n_batches': 1},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_gram_schmidt'
        ... )

        >>> # Iterative method
        >>> Result(
        ...     params=EigenParams(pairs=(...)),
        ...     info={'method': 'qr_iteration', 'converged': (True,), 'iterations': (2,)},
        ...     timing={'total_seconds': 0.5, 'qr_iteration': 0.4},
        ...     backend_name='cpu_qr_iteration'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, Any] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
