"""
Exception hierarchy for pylinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinalgError(Exception):
    """Base exception for all pylinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Operation is not defined for the number of dimensions of its input.

    Raised when an array has an unsupported number of dimensions, or when
    a matrix is smaller than an algorithm requires.

    Attributes:
        ndim: Number of dimensions of the offending array
        supported: Human-readable description of what is supported
    """

    def __init__(
        self,
        message: str,
        ndim: int | None = None,
        supported: str | None = None
    ):
        super().__init__(message)
        self.ndim = ndim
        self.supported = supported


class NotSquareError(DimensionError):
    """
    The trailing two axes of an array do not form a square matrix.

    Attributes:
        shape: Full shape of the offending array
    """

    def __init__(self, message: str, shape: tuple[int, ...] | None = None):
        super().__init__(message, ndim=len(shape) if shape is not None else None)
        self.shape = shape


class ShapeError(ValidationError):
    """
    Array shapes are mismatched, not broadcastable or not concatenable.

    Attributes:
        shape_1: Shape of the first operand
        shape_2: Shape of the second operand
    """

    def __init__(
        self,
        message: str,
        shape_1: tuple[int, ...] | None = None,
        shape_2: tuple[int, ...] | None = None
    ):
        super().__init__(message)
        self.shape_1 = shape_1
        self.shape_2 = shape_2


class ParameterError(ValidationError):
    """
    A parameter does not match the operation's requirements.

    Raised for misaligned contraction axes in products and for invalid
    option values (norm order, axes).

    Attributes:
        param: Name of the offending parameter
    """

    def __init__(self, message: str, param: str | None = None):
        super().__init__(message)
        self.param = param


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the
    determinant magnitude is below the singularity threshold.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        determinant: Determinant that failed the check, if computed
        threshold: Absolute threshold the determinant was compared against
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        determinant: float | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.determinant = determinant
        self.threshold = threshold


class ConvergenceError(PyLinalgError):
    """
    Iterative algorithm failed to converge.

    Raised by the QR eigenvalue iteration when strict mode is requested
    and the iteration cap is reached before the stopping criterion holds.

    Attributes:
        iterations: Number of iterations completed
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met, if any
        batch_index: Index of the failing batch slice, if batched
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        reason: str | None = None,
        threshold: float | None = None,
        batch_index: int | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.reason = reason
        self.threshold = threshold
        self.batch_index = batch_index


class ConvergenceWarning(RuntimeWarning):
    """Emitted when an iteration stops at its cap without converging."""
    pass
