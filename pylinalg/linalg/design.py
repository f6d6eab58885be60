"""
MatrixDesign: batch-of-matrices wrapper for the decomposition backends.

Wraps an array of rank >= 2 whose trailing two axes are the matrix and
whose leading axes form the batch. The stored element type is kept so
results can be converted back to it; slices are handed out as float64.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.precision import to_float64
from pylinalg.core.exceptions import DimensionError
from pylinalg.core.validation import check_array, check_min_ndim
from pylinalg.linalg._view import split_batches


@dataclass(frozen=True)
class MatrixDesign:
    """
    Design for batched matrix decompositions.

    Immutable after construction. Slices are produced in row-major batch
    order, which is also the order of every per-slice result.

    Construction:
        MatrixDesign.from_array(data)
    """
    _data: NDArray[Any]
    _batch_shape: tuple[int, ...]
    _n_rows: int
    _n_cols: int

    @classmethod
    def from_array(cls, data: ArrayLike, name: str = 'a') -> MatrixDesign:
        """
        Build MatrixDesign from array-like data.

        Parameters
        ----------
        data : array-like
            Real numeric array with at least 2 dimensions.
        name : str
            Parameter name used in error messages.
        """
        array = check_array(data, name)
        check_min_ndim(array, 2, name)
        if 0 in array.shape[:-2]:
            raise DimensionError(
                f"{name}: batch axes must be non-empty, got shape {array.shape}",
                ndim=array.ndim,
                supported="non-empty batch",
            )
        return cls._build(array)

    @classmethod
    def _build(cls, data: NDArray[Any]) -> MatrixDesign:
        """Internal builder; data is already validated."""
        n_rows, n_cols = data.shape[-2:]
        return cls(
            _data=data.copy(),
            _batch_shape=tuple(data.shape[:-2]),
            _n_rows=int(n_rows),
            _n_cols=int(n_cols),
        )

    @property
    def data(self) -> NDArray[Any]:
        """Stored array, in its original element type."""
        return self._data

    @property
    def dtype(self) -> np.dtype:
        """Element type results are converted back to."""
        return self._data.dtype

    @property
    def shape(self) -> tuple[int, ...]:
        return self._data.shape

    @property
    def batch_shape(self) -> tuple[int, ...]:
        """Leading (batch) axes; () for a single matrix."""
        return self._batch_shape

    @property
    def n_batches(self) -> int:
        """Number of matrices in the batch."""
        return int(np.prod(self._batch_shape, dtype=np.int64))

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def n_cols(self) -> int:
        return self._n_cols

    @property
    def is_square(self) -> bool:
        return self._n_rows == self._n_cols

    @property
    def is_batched(self) -> bool:
        return len(self._batch_shape) > 0

    def iter_slices(self) -> Iterator[NDArray[np.float64]]:
        """Yield every matrix of the batch as an independent float64 copy."""
        for matrix in split_batches(self._data):
            yield to_float64(matrix)

    def __repr__(self) -> str:
        batch = f", batch={self._batch_shape}" if self._batch_shape else ""
        return (
            f"MatrixDesign(rows={self._n_rows}, cols={self._n_cols}"
            f"{batch}, dtype={self.dtype})"
        )
