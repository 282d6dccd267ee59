import json
import logging

import pytest

from exact_simplex.cli import main

MODEL = {"c": [1, 1], "A": [[1, 1], [1, 0], [0, 1]], "b": [4, 2, 3], "senses": ["<=", "<=", "<="]}


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def model_path(tmp_path):
    def write(model):
        path = tmp_path / "model.json"
        path.write_text(json.dumps(model))
        return str(path)
    return write


def test_prints_optimal_result(model_path, capsys):
    assert main([model_path(MODEL), "--no-verbose"]) == 0
    out = capsys.readouterr().out
    assert "Status: optimal" in out
    assert "Optimal value: 4" in out
    assert "Solution x: ['2', '2']" in out
    assert "alternate optimal" in out


def test_sense_flag_overrides_json(model_path, capsys):
    model = dict(MODEL, senses=[">=", "<=", "<="], maximize=True)
    assert main([model_path(model), "--no-verbose", "--sense", "min", "--rule", "bland"]) == 0
    assert "Optimal value: 4" in capsys.readouterr().out


def test_unbounded_exit_code(model_path, capsys):
    model = {"c": [1, 0], "A": [[0, 1]], "b": [3], "senses": ["<="]}
    assert main([model_path(model), "--no-verbose"]) == 1
    assert "Status: unbounded" in capsys.readouterr().out


def test_feasibility_mode(model_path, capsys):
    model = {"c": [0, 0], "A": [[1, 1]], "b": [5], "senses": ["="]}
    assert main([model_path(model), "--no-verbose", "--feasibility"]) == 0
    out = capsys.readouterr().out
    assert "Status: feasible" in out
    assert "Point x: ['5', '0']" in out

    model = {"c": [0], "A": [[1], [1]], "b": [1, 2], "senses": ["<=", ">="]}
    assert main([model_path(model), "--no-verbose", "--feasibility"]) == 1
    assert "Status: infeasible" in capsys.readouterr().out


def test_export_lp(model_path, tmp_path):
    target = tmp_path / "model.lp"
    assert main([model_path(MODEL), "--no-verbose", "--export-lp", str(target)]) == 0
    text = target.read_text()
    assert text.startswith("Maximize\n\t cost: +1 x1 +1 x2 \nSubject to\n")
    assert text.endswith("End")


@pytest.mark.parametrize("model", [
    {"c": [1]},
    {"c": [1], "A": [1], "b": [1], "senses": ["<="]},
    {"c": [True], "A": [[1]], "b": [1], "senses": ["<="]},
    [MODEL],
])
def test_bad_model_exit_code(model_path, model, capsys):
    assert main([model_path(model), "--no-verbose"]) == 2
    assert "Could not read LP" in capsys.readouterr().out


def test_export_lp_to_missing_directory(model_path, tmp_path, capsys):
    target = tmp_path / "missing" / "model.lp"
    assert main([model_path(MODEL), "--no-verbose", "--export-lp", str(target)]) == 2
    assert "Could not write LP" in capsys.readouterr().out
    assert not target.exists()


def test_debug_log_shows_dictionaries(model_path, capsys):
    assert main([model_path(MODEL), "--log-level", "DEBUG"]) == 0
    out = capsys.readouterr().out
    assert "Pivot 1: x1 enters, x4 leaves" in out
    assert "x6 = 4 - 1 x3" in out
