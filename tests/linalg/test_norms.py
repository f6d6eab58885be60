"""
Tests for det(), matrix_rank() and norm().

Validates:
    - Determinant: closed form, elimination with sign flips, batches
    - Rank from elimination pivots, tolerance handling, 1-d input
    - Vector and matrix norms against numpy.linalg.norm
    - Spectral and nuclear norms from singular values
    - ParameterError for unsupported orders and invalid axes
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import DimensionError, NotSquareError, ParameterError
from pylinalg.linalg import det, matrix_rank, norm
from pylinalg.linalg._norms import parse_ord


# ═══════════════════════════════════════════════════════════════════════
# det()
# ═══════════════════════════════════════════════════════════════════════


class TestDet:

    def test_two_by_two(self):
        assert det(np.array([[1.0, 2.0], [3.0, 4.0]])) == pytest.approx(-2.0)

    def test_permutation_sign(self):
        p = np.array([[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        assert det(p) == pytest.approx(-1.0)

    def test_matches_numpy(self, rng):
        a = rng.standard_normal((5, 5))
        assert det(a) == pytest.approx(np.linalg.det(a), rel=1e-10)

    def test_singular_is_zero(self, singular_matrix):
        assert det(singular_matrix) == 0.0

    def test_one_by_one(self):
        assert det(np.array([[7.0]])) == 7.0

    def test_batched(self, rng):
        a = rng.standard_normal((2, 3, 4, 4))
        result = det(a)
        assert result.shape == (2, 3)
        np.testing.assert_allclose(result, np.linalg.det(a), rtol=1e-10)

    def test_integer_dtype(self):
        result = det(np.array([[2, 1], [1, 3]]))
        assert result == 5
        assert np.issubdtype(np.asarray(result).dtype, np.integer)

    def test_product_of_eigenvalues(self, spd_matrix):
        assert det(spd_matrix) == pytest.approx(9.0 * 5.0 * 2.0 * 0.5, rel=1e-10)

    def test_requires_matrix(self):
        with pytest.raises(DimensionError):
            det(np.ones(3))
        with pytest.raises(NotSquareError):
            det(np.ones((2, 3)))


# ═══════════════════════════════════════════════════════════════════════
# matrix_rank()
# ═══════════════════════════════════════════════════════════════════════


class TestMatrixRank:

    def test_full_rank(self, rng):
        assert matrix_rank(rng.standard_normal((4, 4))) == 4

    def test_rank_deficient(self):
        a = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
        assert matrix_rank(a) == 2

    def test_rectangular(self, rng):
        assert matrix_rank(rng.standard_normal((3, 5))) == 3
        assert matrix_rank(rng.standard_normal((5, 3))) == 3

    def test_zero_matrix(self):
        assert matrix_rank(np.zeros((3, 3))) == 0

    def test_vectors(self):
        assert matrix_rank(np.array([0.0, 0.0])) == 0
        assert matrix_rank(np.array([0.0, 1.0])) == 1
        assert matrix_rank(5.0) == 1

    def test_explicit_tolerance(self):
        a = np.diag([1.0, 1e-6])
        assert matrix_rank(a) == 2
        assert matrix_rank(a, tol=1e-3) == 1

    def test_negative_tolerance(self):
        with pytest.raises(ParameterError):
            matrix_rank(np.eye(2), tol=-1.0)

    def test_batched(self):
        a = np.stack([np.eye(3), np.diag([1.0, 1.0, 0.0])])
        np.testing.assert_array_equal(matrix_rank(a), [3, 2])


# ═══════════════════════════════════════════════════════════════════════
# norm()
# ═══════════════════════════════════════════════════════════════════════


class TestNorm:

    def test_default_is_flattened_two_norm(self, rng):
        x = rng.standard_normal((2, 3, 4))
        result = norm(x)
        assert isinstance(result, float)
        assert result == pytest.approx(np.sqrt(np.sum(x * x)))

    @pytest.mark.parametrize("ord", [None, 1, 2, 3, 0, np.inf, -np.inf, 0.5])
    def test_vector_orders(self, rng, ord):
        x = rng.standard_normal(6)
        assert norm(x, ord=ord) == pytest.approx(np.linalg.norm(x, ord=ord))

    @pytest.mark.parametrize("ord", [None, 'fro', 1, -1, np.inf, -np.inf])
    def test_matrix_orders(self, rng, ord):
        a = rng.standard_normal((3, 4))
        assert norm(a, ord=ord) == pytest.approx(np.linalg.norm(a, ord=ord))

    def test_string_orders(self, rng):
        x = rng.standard_normal(5)
        assert norm(x, ord='inf') == pytest.approx(np.max(np.abs(x)))
        assert norm(x, ord='-inf') == pytest.approx(np.min(np.abs(x)))
        assert norm(x, ord='3') == pytest.approx(np.linalg.norm(x, ord=3))

    def test_vector_axis(self, rng):
        a = rng.standard_normal((3, 4))
        np.testing.assert_allclose(norm(a, axis=1), np.linalg.norm(a, axis=1))
        np.testing.assert_allclose(norm(a, ord=1, axis=0), np.linalg.norm(a, ord=1, axis=0))

    def test_batched_matrix_axes(self, rng):
        a = rng.standard_normal((2, 3, 4))
        np.testing.assert_allclose(
            norm(a, ord=np.inf, axis=(1, 2)), np.linalg.norm(a, ord=np.inf, axis=(1, 2))
        )
        np.testing.assert_allclose(
            norm(a, ord=1, axis=(2, 1)), np.linalg.norm(a, ord=1, axis=(2, 1))
        )

    def test_keepdims(self, rng):
        a = rng.standard_normal((3, 4))
        assert norm(a, axis=1, keepdims=True).shape == (3, 1)
        assert norm(a, keepdims=True).shape == (1, 1)

    def test_integer_input_returns_float(self):
        assert norm(np.array([3, 4])) == 5.0

    def test_singular_value_orders_diagonal(self):
        a = np.diag([3.0, -4.0])
        assert norm(a, ord=2) == pytest.approx(4.0)
        assert norm(a, ord=-2) == pytest.approx(3.0)
        assert norm(a, ord='nuc') == pytest.approx(7.0)

    @pytest.mark.parametrize("ord", [2, -2, 'nuc'])
    def test_singular_value_orders(self, rng, ord):
        a = rng.standard_normal((3, 4))
        assert norm(a, ord=ord) == pytest.approx(np.linalg.norm(a, ord=ord), rel=1e-8)
        assert norm(a.T, ord=ord) == pytest.approx(np.linalg.norm(a.T, ord=ord), rel=1e-8)

    def test_spectral_batched_axes(self, rng):
        a = rng.standard_normal((3, 2, 3))
        np.testing.assert_allclose(
            norm(a, ord=2, axis=(0, 2)), np.linalg.norm(a, ord=2, axis=(0, 2)), rtol=1e-8
        )

    def test_nuclear_for_vector_axis(self):
        with pytest.raises(ParameterError):
            norm(np.ones(3), ord='nuc', axis=0)

    def test_invalid_string(self):
        with pytest.raises(ParameterError):
            norm(np.ones(3), ord='max')

    def test_fro_for_vector_axis(self):
        with pytest.raises(ParameterError):
            norm(np.ones(3), ord='fro', axis=0)

    def test_duplicate_axes(self):
        with pytest.raises(ParameterError, match="duplicate"):
            norm(np.ones((2, 2)), axis=(1, 1))

    def test_too_many_axes(self):
        with pytest.raises(ParameterError):
            norm(np.ones((2, 2, 2)), ord=1)

    def test_axis_out_of_bounds(self):
        with pytest.raises(ParameterError):
            norm(np.ones((2, 2)), axis=2)


class TestParseOrd:

    def test_passthrough(self):
        assert parse_ord(None) is None
        assert parse_ord(2) == 2

    def test_strings(self):
        assert parse_ord(' INF ') == np.inf
        assert parse_ord('nuc') == 'nuc'
        assert parse_ord('-2') == -2

    def test_bool_rejected(self):
        with pytest.raises(ParameterError):
            parse_ord(True)
