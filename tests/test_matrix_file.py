import pytest
import yaml

from inout.matrix_file import load_matrix_config, parse_matrix_config, SolverOptions
from utils.linops import DEFAULT_TOL
from core.exceptions import MatrixConfigError


def _write(tmp_path, doc, name="matrix.yml"):
    path = tmp_path / name
    with open(path, "w") as f:
        yaml.dump(doc, f)
    return path

def test_load_minimal(tmp_path):
    path = _write(tmp_path, {"matrix": [[3, 0], [1, 2]]})
    config = load_matrix_config(path)
    assert config.matrix == [[3, 0], [1, 2]]
    assert config.solver == SolverOptions()
    assert config.updates == []

def test_load_full(tmp_path):
    doc = {
        "matrix": [[4.0, 1.0], [1.0, 3.0]],
        "solver": {"assume_posdef": True, "check_finite": False},
        "updates": [[[3, 0, 0], [1, 1, 0], [1, 1, 2]]],
    }
    config = load_matrix_config(str(_write(tmp_path, doc)))
    assert config.solver.assume_posdef is True
    assert config.solver.check_finite is False
    assert config.solver.tol == DEFAULT_TOL
    assert config.updates == [[[3, 0, 0], [1, 1, 0], [1, 1, 2]]]

def test_partial_solver_section_uses_defaults():
    config = parse_matrix_config({"matrix": [[1]], "solver": {"assume_posdef": True}})
    assert config.solver.assume_posdef is True
    assert config.solver.check_finite is True

@pytest.mark.parametrize("doc", [
    {},                                             # missing matrix
    {"matrix": "not a list"},
    {"matrix": [[1, "x"], [2, 3]]},
    {"matrix": [[1]], "extra": 1},                  # unknown key
    {"matrix": [[1]], "solver": {"method": "qr"}},
    {"matrix": [[1]], "solver": {"tol": -1.0}},
    {"matrix": [[1]], "updates": [[["a"]]]},
])
def test_schema_errors(doc):
    with pytest.raises(MatrixConfigError):
        parse_matrix_config(doc)

def test_non_mapping_document():
    with pytest.raises(MatrixConfigError):
        parse_matrix_config([[1, 2], [3, 4]])

def test_missing_file(tmp_path):
    with pytest.raises(MatrixConfigError):
        load_matrix_config(tmp_path / "nope.yml")

def test_malformed_yaml(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("matrix: [[1, 2]\n")
    with pytest.raises(MatrixConfigError):
        load_matrix_config(path)

def test_non_square_passes_schema():
    # squareness is enforced by MatrixHolder, not by the file schema
    config = parse_matrix_config({"matrix": [[1, 2, 3]]})
    assert config.matrix == [[1, 2, 3]]

def test_solver_tol(tmp_path):
    path = tmp_path / "matrix.yml"
    path.write_text("matrix: [[1]]\nsolver:\n  tol: 1.0e-12\n")
    assert load_matrix_config(path).solver.tol == 1e-12
