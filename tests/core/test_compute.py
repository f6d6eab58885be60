"""
Tests for the shared compute infrastructure.

Validates:
    - Timer: accumulating sections, counts, error on misuse
    - precision: float64 copies, element-type round trip with truncation
    - tolerances: tier selection and configuration constants
"""

import time

import numpy as np
import pytest

from pylinalg.core.compute.precision import (
    EPSILON_64,
    is_close,
    machine_epsilon,
    restore_dtype,
    result_dtype,
    to_float64,
)
from pylinalg.core.compute.timing import Timer, timed
from pylinalg.core.compute.tolerances import (
    CPU_FP64,
    CPU_FP64_HEURISTIC,
    CPU_FP64_ILL_CONDITIONED,
    CPU_FP64_ITERATIVE,
    EIGEN_MAX_ITER,
    SINGULAR_DET_THRESHOLD,
    select_tolerance,
)


# ═══════════════════════════════════════════════════════════════════════
# Timer
# ═══════════════════════════════════════════════════════════════════════


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        for _ in range(3):
            with timer.section('step'):
                time.sleep(0.001)
        timer.stop()
        result = timer.result()
        assert timer.count('step') == 3
        assert result['step'] >= 0.003
        assert result['total_seconds'] >= result['step']

    def test_unknown_section_count_is_zero(self):
        assert Timer().count('missing') == 0

    def test_result_before_stop_raises(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_stop_before_start_raises(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_section_recorded_on_exception(self):
        timer = Timer()
        with pytest.raises(ValueError):
            with timer.section('failing'):
                raise ValueError("boom")
        assert timer.count('failing') == 1

    def test_timed_context_manager(self):
        with timed() as timer:
            pass
        assert timer.result()['total_seconds'] >= 0.0


# ═══════════════════════════════════════════════════════════════════════
# Precision
# ═══════════════════════════════════════════════════════════════════════


class TestPrecision:

    def test_epsilon(self):
        assert EPSILON_64 == np.finfo(np.float64).eps
        assert machine_epsilon(np.float32) == np.finfo(np.float32).eps
        assert machine_epsilon(np.int64) == EPSILON_64

    def test_to_float64_copies(self):
        a = np.array([1.0, 2.0])
        b = to_float64(a)
        b[0] = 99.0
        assert a[0] == 1.0
        assert to_float64(np.array([1, 2])).dtype == np.float64

    def test_restore_float_dtype(self):
        out = restore_dtype(np.array([1.5, 2.25]), np.float32)
        assert out.dtype == np.float32
        np.testing.assert_array_equal(out, [1.5, 2.25])

    def test_restore_int_truncates_toward_zero(self):
        out = restore_dtype(np.array([1.9, -1.9, 2.0]), np.int64)
        assert out.dtype == np.int64
        np.testing.assert_array_equal(out, [1, -1, 2])

    def test_restore_bool(self):
        out = restore_dtype(np.array([0.4, 1.0, 2.0]), np.bool_)
        np.testing.assert_array_equal(out, [False, True, True])

    def test_restore_scalar(self):
        out = restore_dtype(3.7, np.int32)
        assert out.ndim == 0
        assert out == 3

    def test_result_dtype(self):
        assert result_dtype(np.array([1]), np.array([1.0])) == np.float64
        assert result_dtype(np.array([1], np.int32), np.array([1], np.int32)) == np.int32

    def test_is_close(self):
        assert is_close(1.0, 1.0 + 1e-15)
        assert not is_close(1.0, 1.1)


# ═══════════════════════════════════════════════════════════════════════
# Tolerances
# ═══════════════════════════════════════════════════════════════════════


class TestTolerances:

    def test_constants(self):
        assert EIGEN_MAX_ITER == 10000
        assert SINGULAR_DET_THRESHOLD == 1e-12

    def test_select_direct(self):
        assert select_tolerance('lu') is CPU_FP64
        assert select_tolerance('lu', is_ill_conditioned=True) is CPU_FP64_ILL_CONDITIONED

    def test_select_iterative(self):
        assert select_tolerance('qr_iteration') is CPU_FP64_ITERATIVE
        assert select_tolerance('qr_iteration_heuristic') is CPU_FP64_HEURISTIC

    def test_tiers_ordered(self):
        assert CPU_FP64.rtol < CPU_FP64_ITERATIVE.rtol < CPU_FP64_HEURISTIC.rtol
