import logging

import numpy as np
import pytest

import core.cache_solve
from core.matrix_holder import MatrixHolder
from utils.linops import LinearOperator


@pytest.fixture
def matrix_2x2():
    return np.array([[3.0, 0.0], [1.0, 2.0]])

@pytest.fixture
def matrix_3x3():
    return np.array([[3.0, 0.0, 0.0], [1.0, 1.0, 0.0], [1.0, 1.0, 2.0]])

@pytest.fixture
def singular_matrix():
    return np.array([[1.0, 2.0], [2.0, 4.0]])

@pytest.fixture
def holder(matrix_2x2):
    return MatrixHolder(matrix_2x2)

@pytest.fixture
def solve_calls(monkeypatch):
    """
    Count how many times cache_solve builds a LinearOperator (one per miss).
    """
    calls = []

    class CountingOperator(LinearOperator):
        __slots__ = ()

        def __init__(self, A, **kwargs):
            calls.append(A.shape)
            super().__init__(A, **kwargs)

    monkeypatch.setattr(core.cache_solve, "LinearOperator", CountingOperator)
    return calls

@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog

@pytest.fixture
def restore_root_logger():
    """Undo setup_logging() calls made inside a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
