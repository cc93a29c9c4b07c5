# inout/matrix_file.py
"""
Load and validate YAML matrix files for the cache_solve driver.

    matrix:
      - [3, 0]
      - [1, 2]
    solver:
      assume_posdef: false
      tol: 1.0e-12
    updates:
      - [[3, 0, 0], [1, 1, 0], [1, 1, 2]]
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from cerberus import Validator

from core.exceptions import MatrixConfigError
from utils.linops import DEFAULT_TOL
from utils.logging_config import get_logger

logger = get_logger(__name__)

_ROW_SCHEMA = {'type': 'list', 'schema': {'type': 'number'}}
_MATRIX_SCHEMA = {'type': 'list', 'schema': _ROW_SCHEMA}

# Cerberus schema for a matrix file; squareness is checked by MatrixHolder
MATRIX_FILE_SCHEMA: Dict[str, Any] = {
    'matrix': dict(_MATRIX_SCHEMA, required=True),
    'solver': {
        'type': 'dict',
        'required': False,
        'default': {},
        'schema': {
            'assume_posdef': {'type': 'boolean', 'default': False},
            'check_finite': {'type': 'boolean', 'default': True},
            'tol': {'type': 'float', 'coerce': float, 'min': 0.0},
        },
    },
    'updates': {
        'type': 'list',
        'required': False,
        'default': [],
        'schema': _MATRIX_SCHEMA,
    },
}


@dataclass
class SolverOptions:
    assume_posdef: bool = False
    check_finite: bool = True
    tol: float = DEFAULT_TOL


@dataclass
class MatrixConfig:
    matrix: List[List[float]]
    solver: SolverOptions = field(default_factory=SolverOptions)
    updates: List[List[List[float]]] = field(default_factory=list)


def parse_matrix_config(raw: Any) -> MatrixConfig:
    """
    Validate an already-parsed document against MATRIX_FILE_SCHEMA.

    Raises:
        MatrixConfigError: If schema validation fails.
    """
    if not isinstance(raw, dict):
        raise MatrixConfigError(f"Matrix file must contain a mapping, got {type(raw).__name__}")

    validator = Validator(MATRIX_FILE_SCHEMA, allow_unknown=False)
    if not validator.validate(raw):
        raise MatrixConfigError(f"Matrix file schema validation errors: {validator.errors}")
    doc: Dict[str, Any] = validator.document

    solver = doc.get('solver') or {}
    return MatrixConfig(
        matrix=doc['matrix'],
        solver=SolverOptions(
            assume_posdef=solver.get('assume_posdef', False),
            check_finite=solver.get('check_finite', True),
            tol=solver.get('tol', DEFAULT_TOL),
        ),
        updates=doc.get('updates') or [],
    )


def load_matrix_config(path: Union[str, Path]) -> MatrixConfig:
    """
    Load a YAML matrix file, validate its schema, and return a MatrixConfig.

    Raises:
        MatrixConfigError: If file read fails or schema validation fails.
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise MatrixConfigError(f"Failed to read matrix YAML '{path}': {e}") from e

    config = parse_matrix_config(raw)
    logger.debug("Loaded %s: %d row(s), %d update(s)", path, len(config.matrix), len(config.updates))
    return config
