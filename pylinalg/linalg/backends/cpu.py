"""
CPU reference backend for the batched decompositions (QR, eigen, SVD).

Every slice is processed independently, in batch order, in float64. A
failing slice aborts the call and its exception propagates unchanged.
"""

from __future__ import annotations

from pylinalg.core.compute.timing import Timer
from pylinalg.core.exceptions import ConvergenceError
from pylinalg.core.result import Result
from pylinalg.linalg._eigen import eigenvectors, qr_iteration
from pylinalg.linalg._qr import gram_schmidt
from pylinalg.linalg._svd import svd_decompose
from pylinalg.linalg.design import MatrixDesign
from pylinalg.linalg.solution import (
    EigenPair,
    EigenParams,
    QRFactors,
    QRParams,
    SVDFactors,
    SVDParams,
)


def _slice_label(design: MatrixDesign, index: int) -> str:
    return f"batch slice {index}" if design.is_batched else "matrix"


class CPULinalgBackend:
    """CPU reference backend for QR, eigenvalues and singular values."""

    @property
    def name(self) -> str:
        return 'cpu_linalg'

    def qr(self, design: MatrixDesign) -> Result[QRParams]:
        """
        Gram-Schmidt QR of every slice.

        Rank-deficient slices are not an error: their basis is completed
        and a warning naming the dependent columns is recorded.
        """
        timer = Timer()
        timer.start()

        factors = []
        warnings_list: list[str] = []

        for index, a in enumerate(design.iter_slices()):
            with timer.section('gram_schmidt'):
                gs = gram_schmidt(a)
            if gs.deficient_columns:
                warnings_list.append(
                    f"{_slice_label(design, index)}: rank deficient, columns "
                    f"{list(gs.deficient_columns)} are linearly dependent on "
                    f"earlier columns"
                )
            factors.append(QRFactors(Q=gs.Q, R=gs.R, deficient_columns=gs.deficient_columns))

        timer.stop()

        return Result(
            params=QRParams(factors=tuple(factors)),
            info={
                'method': 'gram_schmidt',
                'n_batches': design.n_batches,
                'rank_deficient': tuple(bool(f.deficient_columns) for f in factors),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def eig(
        self,
        design: MatrixDesign,
        *,
        compute_vectors: bool = False,
        max_iter: int = 10000,
        tol: float | None = None,
        strict: bool = False,
    ) -> Result[EigenParams]:
        """
        Unshifted QR iteration on every slice.

        Parameters
        ----------
        design : MatrixDesign
            Batch of square matrices, at least 2x2.
        compute_vectors : bool
            Also recover one unit eigenvector per eigenvalue.
        max_iter : int
            Iteration cap per slice.
        tol : float or None
            Sub-diagonal tolerance; None stops on diagonal dominance.
        strict : bool
            Raise ConvergenceError instead of recording a warning when a
            slice reaches the cap.
        """
        timer = Timer()
        timer.start()

        pairs = []
        warnings_list: list[str] = []

        for index, a in enumerate(design.iter_slices()):
            with timer.section('qr_iteration'):
                outcome = qr_iteration(a, max_iter=max_iter, tol=tol)

            if not outcome.converged:
                message = (
                    f"{_slice_label(design, index)}: QR iteration did not converge "
                    f"after {outcome.iterations} iterations; the diagonal may not "
                    f"hold eigenvalues (complex eigenvalues are not supported)"
                )
                if strict:
                    raise ConvergenceError(
                        message,
                        iterations=outcome.iterations,
                        reason='max_iterations',
                        threshold=tol,
                        batch_index=index if design.is_batched else None,
                    )
                warnings_list.append(message)

            vectors = None
            if compute_vectors:
                with timer.section('eigenvectors'):
                    vectors = eigenvectors(a, outcome.eigenvalues)

            pairs.append(EigenPair(
                values=outcome.eigenvalues,
                vectors=vectors,
                converged=outcome.converged,
                iterations=outcome.iterations,
            ))

        timer.stop()

        return Result(
            params=EigenParams(pairs=tuple(pairs)),
            info={
                'method': 'qr_iteration',
                'criterion': 'diagonal_dominance' if tol is None else 'subdiagonal_tol',
                'converged': tuple(p.converged for p in pairs),
                'iterations': tuple(p.iterations for p in pairs),
                'n_batches': design.n_batches,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def svd(
        self,
        design: MatrixDesign,
        *,
        max_iter: int = 10000,
        strict: bool = False,
    ) -> Result[SVDParams]:
        """
        Singular value decomposition of every slice via its Gram matrix.

        Non-convergence of the Gram-matrix iteration is handled as in eig().
        """
        timer = Timer()
        timer.start()

        factors = []
        warnings_list: list[str] = []

        for index, a in enumerate(design.iter_slices()):
            with timer.section('gram_iteration'):
                outcome = svd_decompose(a, max_iter=max_iter)

            if not outcome.converged:
                message = (
                    f"{_slice_label(design, index)}: Gram matrix iteration did not "
                    f"converge after {outcome.iterations} iterations; singular "
                    f"values may be inaccurate"
                )
                if strict:
                    raise ConvergenceError(
                        message,
                        iterations=outcome.iterations,
                        reason='max_iterations',
                        batch_index=index if design.is_batched else None,
                    )
                warnings_list.append(message)

            factors.append(SVDFactors(
                U=outcome.U,
                s=outcome.s,
                Vt=outcome.Vt,
                converged=outcome.converged,
                iterations=outcome.iterations,
            ))

        timer.stop()

        return Result(
            params=SVDParams(factors=tuple(factors)),
            info={
                'method': 'gram_qr_iteration',
                'converged': tuple(f.converged for f in factors),
                'iterations': tuple(f.iterations for f in factors),
                'n_batches': design.n_batches,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
