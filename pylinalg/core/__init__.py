"""
Core infrastructure for pylinalg.

This module provides shared abstractions and utilities used by the
linear-algebra engine.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision and tolerance configuration
"""

from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result
from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    NotSquareError,
    ShapeError,
    ParameterError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
    ConvergenceWarning,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "NotSquareError",
    "ShapeError",
    "ParameterError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
    "ConvergenceWarning",
]
