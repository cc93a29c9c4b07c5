# core/matrix_holder.py
"""
Mutable matrix container with a single cached inverse slot.

Replacing the matrix always clears the cached inverse under the same lock, so
a reader can never see a new matrix next to an inverse computed for the old
one. Matrices are copied on the way in and on the way out; callers only ever
hold copies and cannot change the stored matrix behind the holder's back.
"""
from __future__ import annotations
import threading
from typing import Any, Optional, Tuple

import numpy as np

from core.validation import validate_square_matrix
from utils.logging_config import get_logger

logger = get_logger(__name__)


class MatrixHolder:
    """
    Holds a validated square matrix and, optionally, its inverse.

    The holder does not compute anything; ``core.cache_solve.cache_solve``
    fills the inverse slot and is trusted to keep it consistent.
    """

    def __init__(self, matrix: Any) -> None:
        self.lock = threading.RLock()
        self._matrix = validate_square_matrix(matrix)
        self._inverse: Optional[np.ndarray] = None

    def __repr__(self) -> str:
        n = self._matrix.shape[0]
        state = "cached" if self._inverse is not None else "empty"
        return f"MatrixHolder({n}x{n}, inverse={state})"

    @property
    def shape(self) -> Tuple[int, int]:
        with self.lock:
            return self._matrix.shape

    @property
    def has_cached_inverse(self) -> bool:
        with self.lock:
            return self._inverse is not None

    def get_matrix(self):
        """Return a copy of the stored matrix."""
        with self.lock:
            return self._matrix.copy()

    def set_matrix(self, matrix: Any) -> None:
        """
        Replace the stored matrix and drop the cached inverse.

        Raises:
            InvalidMatrixError: if *matrix* is missing, empty or not square.
                The holder is left untouched in that case.
        """
        new_matrix = validate_square_matrix(matrix)
        with self.lock:
            self._matrix = new_matrix
            if self._inverse is not None:
                logger.debug("Matrix replaced; cached inverse invalidated.")
            self._inverse = None

    def get_cached_inverse(self) -> Optional[np.ndarray]:
        with self.lock:
            return self._inverse

    def set_cached_inverse(self, inverse: Optional[np.ndarray]) -> None:
        with self.lock:
            self._inverse = inverse

    def clear_cached_inverse(self) -> None:
        self.set_cached_inverse(None)
