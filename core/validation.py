# core/validation.py
"""
Shape validation for matrices handed to a MatrixHolder.
The same rule guards construction and every later set_matrix call: the value
must be present, two-dimensional, numeric, non-empty and square.
"""
from typing import Any, Union

import numpy as np
import scipy.sparse as sp

from core.exceptions import InvalidMatrixError


def validate_square_matrix(value: Any) -> Union[np.ndarray, sp.csc_matrix]:
    """
    Check that *value* is a non-empty square matrix and return a private copy.

    Dense input (nested lists, tuples, ndarrays) comes back as an ndarray,
    SciPy sparse input as a CSC matrix.

    Raises:
        InvalidMatrixError with a descriptive message if validation fails.
    """
    if value is None:
        raise InvalidMatrixError("No matrix specified")

    if sp.issparse(value):
        matrix = sp.csc_matrix(value, copy=True)
    else:
        try:
            matrix = np.array(value)
        except ValueError as e:
            # ragged nested sequences
            raise InvalidMatrixError(f"Matrix is not rectangular: {e}") from e

    if matrix.ndim != 2:
        raise InvalidMatrixError(f"Matrix must be 2-D, got {matrix.ndim} dimension(s)")

    rows, cols = matrix.shape
    if rows == 0:
        raise InvalidMatrixError("Empty matrix specified")
    if rows != cols:
        raise InvalidMatrixError(f"Non-square matrix specified ({rows}x{cols})")

    if not np.issubdtype(matrix.dtype, np.number):
        raise InvalidMatrixError(f"Matrix must be numeric, got dtype '{matrix.dtype}'")

    return matrix
