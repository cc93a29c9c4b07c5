# core/exceptions.py
import numpy as np


class CacheMatrixError(Exception):
    """Base exception for CacheMatrix errors."""
    pass

class InvalidMatrixError(CacheMatrixError, ValueError):
    """Raised when a matrix is missing, not 2-D, empty or not square."""
    pass

class SingularMatrixError(CacheMatrixError, np.linalg.LinAlgError):
    """Raised when the stored matrix has no inverse."""
    pass

class MatrixConfigError(CacheMatrixError):
    """Raised when a matrix file cannot be read or fails schema validation."""
    pass
