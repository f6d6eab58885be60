"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype preservation, rejection of object,
      complex and non-numeric data
    - check_finite: NaN/Inf detection
    - check_ndim / check_supported_ndim / check_min_ndim: dimensionality
    - check_square: trailing axes must be square
    - check_min_size: minimum matrix size
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import DimensionError, NotSquareError, ValidationError
from pylinalg.core.validation import (
    check_array,
    check_finite,
    check_min_ndim,
    check_min_size,
    check_ndim,
    check_square,
    check_supported_ndim,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray without changing the element type."""

    def test_list_to_array(self):
        result = check_array([[1.0, 2.0], [3.0, 4.0]], "a")
        assert isinstance(result, np.ndarray)
        assert result.shape == (2, 2)

    def test_int_dtype_preserved(self):
        arr = np.array([1, 2, 3], dtype=np.int32)
        assert check_array(arr, "a").dtype == np.int32

    def test_float32_preserved(self):
        arr = np.array([1.0, 2.0], dtype=np.float32)
        assert check_array(arr, "a").dtype == np.float32

    def test_bool_accepted(self):
        assert check_array([True, False], "a").dtype == np.bool_

    def test_scalar_becomes_0d(self):
        assert check_array(3.0, "a").ndim == 0

    def test_complex_rejected(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array(np.array([1 + 2j]), "a")

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="a:"):
            check_array(np.array(["x", "y"]), "a")

    def test_object_rejected(self):
        with pytest.raises(ValidationError, match="object"):
            check_array(np.array([1, "a", None], dtype=object), "a")

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError):
            check_array([[1.0, 2.0], [3.0]], "a")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "a")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match=r"1 NaN, 2 Inf"):
            check_finite(np.array([np.nan, np.inf, -np.inf, 0.0]), "a")

    def test_int_array_passes(self):
        check_finite(np.array([1, 2, 3]), "a")


# ═══════════════════════════════════════════════════════════════════════
# Dimensionality
# ═══════════════════════════════════════════════════════════════════════


class TestDimensionChecks:

    def test_check_ndim_passes(self):
        check_ndim(np.zeros((2, 2)), 2, "a")

    def test_check_ndim_fails(self):
        with pytest.raises(DimensionError, match="expected 2D") as exc_info:
            check_ndim(np.zeros(3), 2, "a")
        assert exc_info.value.ndim == 1

    def test_supported_ndim(self):
        check_supported_ndim(np.zeros(3), (1, 2), "b")
        with pytest.raises(DimensionError, match="1D, 2D"):
            check_supported_ndim(np.zeros((2, 2, 2)), (1, 2), "b")

    def test_min_ndim(self):
        check_min_ndim(np.zeros((2, 2, 2)), 2, "a")
        with pytest.raises(DimensionError, match="at least 2D"):
            check_min_ndim(np.zeros(4), 2, "a")


# ═══════════════════════════════════════════════════════════════════════
# Square / size
# ═══════════════════════════════════════════════════════════════════════


class TestCheckSquare:

    def test_square_passes(self):
        check_square(np.zeros((3, 3)), "a")
        check_square(np.zeros((5, 3, 3)), "a")

    def test_rectangular_fails(self):
        with pytest.raises(NotSquareError, match="2x3") as exc_info:
            check_square(np.zeros((2, 3)), "a")
        assert exc_info.value.shape == (2, 3)

    def test_batched_rectangular_fails(self):
        with pytest.raises(NotSquareError):
            check_square(np.zeros((4, 3, 2)), "a")

    def test_1d_is_dimension_error(self):
        with pytest.raises(DimensionError):
            check_square(np.zeros(3), "a")

    def test_min_size(self):
        check_min_size(np.zeros((2, 2)), 2, "a")
        with pytest.raises(DimensionError, match="at least 2x2"):
            check_min_size(np.zeros((1, 1)), 2, "a")
