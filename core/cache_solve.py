# core/cache_solve.py
"""
Memoized inversion of the matrix stored in a MatrixHolder.
"""
import numpy as np

from core.matrix_holder import MatrixHolder
from utils.linops import LinearOperator, DEFAULT_TOL
from utils.logging_config import get_logger

logger = get_logger(__name__)


def cache_solve(holder: MatrixHolder, *, assume_posdef: bool = False,
                check_finite: bool = True, tol: float = DEFAULT_TOL) -> np.ndarray:
    """
    Return the inverse of the matrix held by *holder*, computing it at most once.

    A cached inverse is returned as is; the holder clears it whenever the
    matrix is replaced, so it is never checked against the current matrix.
    On a miss the matrix is factorised and ``A X = I`` is solved for X, which
    is stored back into the holder.

    Args:
        holder: The MatrixHolder to invert.
        assume_posdef: Use a Cholesky instead of an LU factorisation.
        check_finite: Forwarded to SciPy; reject inf/nan entries.
        tol: Reject matrices whose reciprocal condition number is below this.

    The keyword arguments only apply when the inverse has to be computed.

    The inverse is stored read-only so callers cannot corrupt the cache.

    Raises:
        SingularMatrixError: if the stored matrix has no inverse. The cache
            is left empty so a later call can retry after set_matrix.
    """
    with holder.lock:
        inverse = holder.get_cached_inverse()
        if inverse is not None:
            logger.info("cache hit: returning cached inverse")
            return inverse

        data = holder.get_matrix()
        n = data.shape[0]
        logger.debug("cache miss: computing inverse of %dx%d matrix", n, n)

        identity = np.eye(n)
        solver = LinearOperator(data, assume_posdef=assume_posdef,
                                check_finite=check_finite, tol=tol)
        inverse = solver.solve(identity)             # A X = I
        inverse.setflags(write=False)
        holder.set_cached_inverse(inverse)
        return inverse
