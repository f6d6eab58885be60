"""
Tests for the pylinalg exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyLinalgError)
    - Diagnostic attributes on DimensionError, NotSquareError, ShapeError,
      ParameterError, SingularMatrixError, ConvergenceError
    - Default attribute values (None for optional attributes)
    - ConvergenceWarning is a RuntimeWarning, not an exception of the tree
"""

import warnings

import pytest

from pylinalg.core.exceptions import (
    ConvergenceError,
    ConvergenceWarning,
    DimensionError,
    NotSquareError,
    NumericalError,
    ParameterError,
    PyLinalgError,
    ShapeError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyLinalgError."""

    def test_validation_error_is_pylinalg_error(self):
        with pytest.raises(PyLinalgError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong rank")

    def test_not_square_is_dimension_error(self):
        with pytest.raises(DimensionError):
            raise NotSquareError("not square", shape=(2, 3))

    def test_shape_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise ShapeError("mismatch")

    def test_parameter_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise ParameterError("misaligned")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_convergence_error_is_not_numerical_error(self):
        """ConvergenceError inherits from PyLinalgError, not NumericalError."""
        err = ConvergenceError("did not converge", iterations=100)
        assert isinstance(err, PyLinalgError)
        assert not isinstance(err, NumericalError)

    def test_shape_error_is_not_dimension_error(self):
        assert not isinstance(ShapeError("x"), DimensionError)


# ═══════════════════════════════════════════════════════════════════════
# Validation errors
# ═══════════════════════════════════════════════════════════════════════


class TestValidationErrors:
    """Validation errors carry the offending shapes and parameters."""

    def test_dimension_error_attributes(self):
        err = DimensionError("a: expected 2D, got 1D", ndim=1, supported="2D")
        assert "expected 2D" in str(err)
        assert err.ndim == 1
        assert err.supported == "2D"

    def test_dimension_error_defaults(self):
        err = DimensionError("wrong rank")
        assert err.ndim is None
        assert err.supported is None

    def test_not_square_records_shape(self):
        err = NotSquareError("a: 2x3", shape=(4, 2, 3))
        assert err.shape == (4, 2, 3)
        assert err.ndim == 3

    def test_not_square_without_shape(self):
        err = NotSquareError("a: not square")
        assert err.shape is None
        assert err.ndim is None

    def test_shape_error_attributes(self):
        err = ShapeError("cannot broadcast", shape_1=(2, 3), shape_2=(4,))
        assert err.shape_1 == (2, 3)
        assert err.shape_2 == (4,)

    def test_parameter_error_attributes(self):
        err = ParameterError("ord: invalid", param="ord")
        assert err.param == "ord"
        assert ParameterError("x").param is None


# ═══════════════════════════════════════════════════════════════════════
# SingularMatrixError
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries determinant diagnostics."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "a is singular",
            matrix_name="a",
            determinant=1e-15,
            threshold=1e-12,
        )
        assert str(err) == "a is singular"
        assert err.matrix_name == "a"
        assert err.determinant == 1e-15
        assert err.threshold == 1e-12

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.determinant is None
        assert err.threshold is None


# ═══════════════════════════════════════════════════════════════════════
# ConvergenceError / ConvergenceWarning
# ═══════════════════════════════════════════════════════════════════════


class TestConvergence:
    """ConvergenceError carries iteration diagnostics."""

    def test_all_attributes(self):
        err = ConvergenceError(
            "QR iteration did not converge",
            iterations=10000,
            reason="max_iterations",
            threshold=1e-12,
            batch_index=3,
        )
        assert err.iterations == 10000
        assert err.reason == "max_iterations"
        assert err.threshold == 1e-12
        assert err.batch_index == 3

    def test_defaults_are_none(self):
        err = ConvergenceError("no", iterations=5)
        assert err.reason is None
        assert err.threshold is None
        assert err.batch_index is None

    def test_warning_is_runtime_warning(self):
        assert issubclass(ConvergenceWarning, RuntimeWarning)
        assert not issubclass(ConvergenceWarning, PyLinalgError)

    def test_warning_can_be_caught(self):
        with pytest.warns(ConvergenceWarning, match="cap"):
            warnings.warn("stopped at cap", ConvergenceWarning)
