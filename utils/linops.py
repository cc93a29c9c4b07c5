# utils/linops.py
from __future__ import annotations
import warnings

import numpy as np
import scipy.linalg as la
import scipy.sparse as sp
import scipy.sparse.linalg as sla

from core.exceptions import InvalidMatrixError, SingularMatrixError
from utils.logging_config import get_logger

logger = get_logger(__name__)

# smallest reciprocal 1-norm condition number accepted as invertible
DEFAULT_TOL = np.finfo(float).eps


class LinearOperator:
    """
    Wraps either a dense or sparse factorisation and exposes a .solve(b) method.

    Factorisation happens once in the constructor, followed by a LAPACK-style
    estimate of the reciprocal condition number ``rcond``. A matrix with
    ``rcond < tol`` is reported as SingularMatrixError instead of producing a
    solution made of rounding noise; ``tol=0`` only rejects exact zero pivots.
    """
    __slots__ = ("_solve", "shape", "rcond")

    def __init__(self, A: "sp.spmatrix|np.ndarray", assume_posdef=False, check_finite=True,
                 tol: float = DEFAULT_TOL):
        self.shape = A.shape
        if sp.issparse(A):
            self._factor_sparse(A)
        else:
            A = np.asarray(A)
            if not (assume_posdef and self._factor_cholesky(A, check_finite)):
                self._factor_lu(A, check_finite)

        if self.rcond < tol:
            raise SingularMatrixError(
                f"Singular matrix: reciprocal condition number {self.rcond:.3g} < tol {tol:.3g}"
            )

    def _factor_sparse(self, A):
        A = A.tocsc()
        if not np.issubdtype(A.dtype, np.inexact):
            A = A.astype(np.float64)                       # SuperLU needs float/complex data
        try:
            fac = sla.splu(A)
        except RuntimeError as e:                          # "Factor is exactly singular"
            raise SingularMatrixError(f"Singular matrix: {e}") from e
        self._solve = fac.solve                            # SuperLU solve

        # ||A^-1||_1 estimated from solves with the factors (Higham/Tisseur)
        inv_op = sla.LinearOperator(
            A.shape, dtype=A.dtype,
            matvec=fac.solve,
            rmatvec=lambda x: fac.solve(x, trans="H"),
        )
        self.rcond = 1.0 / (sla.norm(A, 1) * sla.onenormest(inv_op))

    def _factor_cholesky(self, A, check_finite) -> bool:
        # cho_factor reads only one triangle
        if not np.allclose(A, A.conj().T, equal_nan=True):
            raise InvalidMatrixError("assume_posdef requires a symmetric (Hermitian) matrix")
        try:
            c, lower = la.cho_factor(A, lower=True, check_finite=check_finite)   # dense Cholesky
        except np.linalg.LinAlgError as e:
            logger.debug("Cholesky failed (%s); falling back to LU.", e)
            return False
        pocon, = la.get_lapack_funcs(("pocon",), (c,))
        self.rcond, _ = pocon(c, np.linalg.norm(A, 1), uplo="L")
        self._solve = lambda b: la.cho_solve((c, lower), b, check_finite=check_finite)
        return True

    def _factor_lu(self, A, check_finite):
        with warnings.catch_warnings():
            # lu_factor only warns on an exactly zero pivot; checked below
            warnings.simplefilter("ignore", la.LinAlgWarning)
            lu, piv = la.lu_factor(A, check_finite=check_finite)                 # dense LU
        zero = np.flatnonzero(np.diagonal(lu) == 0)
        if zero.size:
            raise SingularMatrixError(
                f"Singular matrix: diagonal number {zero[0] + 1} of U is exactly zero"
            )
        gecon, = la.get_lapack_funcs(("gecon",), (lu,))
        self.rcond, _ = gecon(lu, np.linalg.norm(A, 1), norm="1")
        self._solve = lambda b: la.lu_solve((lu, piv), b, check_finite=check_finite)

    def __call__(self, rhs):
        return self._solve(rhs)

    def solve(self, rhs: "np.ndarray") -> "np.ndarray":
        return self._solve(rhs)
