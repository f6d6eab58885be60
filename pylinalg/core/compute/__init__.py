"""
Shared compute infrastructure for pylinalg.

This module provides timing utilities, precision helpers and the
tolerance/iteration-cap configuration shared by all linear-algebra kernels.

IMPORTANT: This is NOT where algorithms live. Those go in pylinalg.linalg.
This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    precision: Machine epsilon and float64 element-type round-tripping
    tolerances: Tolerance tiers, thresholds and iteration caps
"""

from pylinalg.core.compute.timing import Timer, timed
from pylinalg.core.compute.precision import (
    EPSILON_64,
    restore_dtype,
    to_float64,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Precision
    "EPSILON_64",
    "restore_dtype",
    "to_float64",
]
