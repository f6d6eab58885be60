"""
Decomposition solution types.

Contains the per-slice payloads and the user-facing solution wrappers.
The wrappers behave as ordered sequences with one entry per batch slice,
so a single matrix unpacks directly:

    Q, R = qr(a)[0]
    values, vectors = eig(a)[0]
    U, s, Vt = svd(a)[0]
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.precision import restore_dtype
from pylinalg.core.result import Result
from pylinalg.linalg._view import stack_batches

if TYPE_CHECKING:
    from pylinalg.linalg.design import MatrixDesign


@dataclass(frozen=True)
class QRFactors:
    """Q and R of one matrix, in float64."""
    Q: NDArray[np.float64]
    R: NDArray[np.float64]
    deficient_columns: tuple[int, ...] = ()

    def __iter__(self) -> Iterator[NDArray[np.float64]]:
        return iter((self.Q, self.R))


@dataclass(frozen=True)
class QRParams:
    """
    Parameter payload for the QR factorization.

    This is the immutable data computed by backends, one entry per batch
    slice in batch order.
    """
    factors: tuple[QRFactors, ...]


@dataclass(frozen=True)
class EigenPair:
    """
    Eigenvalues and (optionally) eigenvectors of one matrix.

    Eigenvalues are in diagonal order of the final iterate, not sorted.
    Eigenvectors are unit columns: vectors[:, i] belongs to values[i].
    """
    values: NDArray[np.float64]
    vectors: NDArray[np.float64] | None
    converged: bool
    iterations: int

    def __iter__(self) -> Iterator[NDArray[np.float64] | None]:
        return iter((self.values, self.vectors))


@dataclass(frozen=True)
class EigenParams:
    """Parameter payload for the QR eigenvalue iteration."""
    pairs: tuple[EigenPair, ...]


@dataclass(frozen=True)
class SVDFactors:
    """
    U, singular values and Vt of one matrix, in float64.

    Singular values are descending; A = U diag(s) Vt.
    """
    U: NDArray[np.float64]
    s: NDArray[np.float64]
    Vt: NDArray[np.float64]
    converged: bool
    iterations: int

    def __iter__(self) -> Iterator[NDArray[np.float64]]:
        return iter((self.U, self.s, self.Vt))


@dataclass(frozen=True)
class SVDParams:
    """Parameter payload for the singular value decomposition."""
    factors: tuple[SVDFactors, ...]


class _BatchedSolution:
    """Sequence behaviour and Result accessors shared by the solutions."""

    _result: Result[Any]
    _design: 'MatrixDesign'

    def _entries(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def __len__(self) -> int:
        return len(self._entries())

    def _restore(self, entry: Any) -> tuple[Any, ...]:
        dtype = self._design.dtype
        return tuple(None if x is None else restore_dtype(x, dtype) for x in entry)

    def __getitem__(self, index: int) -> tuple[Any, ...]:
        return self._restore(self._entries()[index])

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        for entry in self._entries():
            yield self._restore(entry)

    def _stack(self, arrays: list[NDArray[np.float64]]) -> NDArray[Any]:
        stacked = stack_batches(arrays, self._design.batch_shape)
        return restore_dtype(stacked, self._design.dtype)

    @property
    def batch_shape(self) -> tuple[int, ...]:
        return self._design.batch_shape

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def provenance(self) -> dict[str, Any]:
        return self._result.provenance


@dataclass
class QRSolution(_BatchedSolution):
    """
    User-facing QR results.

    Iterating yields one (Q, R) tuple per batch slice. Entries and the
    stacked Q and R properties carry the input's element type; the float64
    factors stay available through .factors.
    """
    _result: Result[QRParams]
    _design: 'MatrixDesign'

    def _entries(self) -> tuple[QRFactors, ...]:
        return self._result.params.factors

    @property
    def factors(self) -> tuple[QRFactors, ...]:
        return self._result.params.factors

    @property
    def Q(self) -> NDArray[Any]:
        """Orthogonal factors stacked to the input's shape."""
        return self._stack([f.Q for f in self.factors])

    @property
    def R(self) -> NDArray[Any]:
        """Upper triangular factors stacked to the input's shape."""
        return self._stack([f.R for f in self.factors])

    @property
    def deficient_columns(self) -> tuple[tuple[int, ...], ...]:
        """Per slice, the columns found linearly dependent on earlier ones."""
        return tuple(f.deficient_columns for f in self.factors)

    @property
    def is_rank_deficient(self) -> bool:
        return any(self.deficient_columns)

    def __repr__(self) -> str:
        n = self._design.n_rows
        deficient = ", rank_deficient" if self.is_rank_deficient else ""
        return f"QRSolution(n={n}, n_batches={len(self)}{deficient})"


@dataclass
class EigenSolution(_BatchedSolution):
    """
    User-facing eigenvalue results.

    Iterating yields one (values, vectors) tuple per batch slice; vectors
    is None when only eigenvalues were requested.
    """
    _result: Result[EigenParams]
    _design: 'MatrixDesign'

    def _entries(self) -> tuple[EigenPair, ...]:
        return self._result.params.pairs

    @property
    def pairs(self) -> tuple[EigenPair, ...]:
        return self._result.params.pairs

    @property
    def eigenvalues(self) -> NDArray[Any]:
        """Eigenvalues, shape batch_shape + (n,)."""
        return self._stack([p.values for p in self.pairs])

    @property
    def eigenvectors(self) -> NDArray[Any] | None:
        """Eigenvectors in columns, shape batch_shape + (n, n), or None."""
        if any(p.vectors is None for p in self.pairs):
            return None
        return self._stack([p.vectors for p in self.pairs])

    @property
    def converged(self) -> bool:
        """Whether every slice met the stopping criterion."""
        return all(p.converged for p in self.pairs)

    @property
    def iterations(self) -> tuple[int, ...]:
        return tuple(p.iterations for p in self.pairs)

    def __repr__(self) -> str:
        n = self._design.n_rows
        vectors = "values+vectors" if self.eigenvectors is not None else "values"
        return (
            f"EigenSolution(n={n}, n_batches={len(self)}, computed={vectors}, "
            f"converged={self.converged})"
        )


@dataclass
class SVDSolution(_BatchedSolution):
    """
    User-facing singular value decomposition results.

    Iterating yields one (U, s, Vt) tuple per batch slice, with
    A = U @ diag(s) @ Vt and s in descending order.
    """
    _result: Result[SVDParams]
    _design: 'MatrixDesign'

    def _entries(self) -> tuple[SVDFactors, ...]:
        return self._result.params.factors

    @property
    def factors(self) -> tuple[SVDFactors, ...]:
        return self._result.params.factors

    @property
    def U(self) -> NDArray[Any]:
        """Left singular vectors in columns, shape batch_shape + (n, n)."""
        return self._stack([f.U for f in self.factors])

    @property
    def singular_values(self) -> NDArray[Any]:
        """Singular values, descending, shape batch_shape + (n,)."""
        return self._stack([f.s for f in self.factors])

    @property
    def Vt(self) -> NDArray[Any]:
        """Right singular vectors in rows, shape batch_shape + (n, n)."""
        return self._stack([f.Vt for f in self.factors])

    @property
    def converged(self) -> bool:
        return all(f.converged for f in self.factors)

    @property
    def iterations(self) -> tuple[int, ...]:
        return tuple(f.iterations for f in self.factors)

    def __repr__(self) -> str:
        n = self._design.n_rows
        return (
            f"SVDSolution(n={n}, n_batches={len(self)}, "
            f"converged={self.converged})"
        )
