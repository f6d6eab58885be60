"""
Core protocols for pylinalg.

These define structural interfaces that backend implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) to allow
flexibility while maintaining type safety.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Backends are stateless; all options arrive as arguments
"""

from typing import Protocol, Any, runtime_checkable

from pylinalg.core.result import Result


@runtime_checkable
class Backend(Protocol):
    """
    Protocol for decomposition backends.

    Each backend knows how to take a MatrixDesign and produce a
    Result envelope for the batched QR factorization, the QR eigenvalue
    iteration and the singular value decomposition. The backend handles
    all algorithm-specific computation; public functions only validate
    and dispatch.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Example: 'cpu_linalg'
        """
        ...

    def qr(self, design: Any) -> Result[Any]:
        """
        Factor every batch slice of the design.

        Raises:
            DimensionError: If the design is not a batch of square matrices
        """
        ...

    def eig(
        self,
        design: Any,
        *,
        compute_vectors: bool,
        max_iter: int,
        tol: float | None,
        strict: bool,
    ) -> Result[Any]:
        """
        Run the QR eigenvalue iteration on every batch slice.

        Raises:
            ConvergenceError: If strict and a slice hits the iteration cap
        """
        ...

    def svd(
        self,
        design: Any,
        *,
        max_iter: int,
        strict: bool,
    ) -> Result[Any]:
        """
        Singular value decomposition of every batch slice.

        Raises:
            ConvergenceError: If strict and a slice hits the iteration cap
        """
        ...
