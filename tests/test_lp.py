import json
from fractions import Fraction

import pytest

from exact_simplex.lp import LP, load_lp, solve
from exact_simplex.model import Relation, Sense
from exact_simplex.pivot import PivotRule


def make_lp(**overrides):
    cfg = dict(c=[1, 1], A=[[1, 1], [1, 0], [0, 1]], b=[4, 2, 3], senses=["<=", "<=", "<="])
    cfg.update(overrides)
    return LP(**cfg)


def test_to_problem_drops_zero_coefficients():
    objective, constraints = make_lp(c=[0, 2]).to_problem()
    assert objective.sense is Sense.MAX
    assert objective.terms == ((2, 2),)
    assert constraints[1].lhs == ((1, 1),)
    assert [pc.relation for pc in constraints] == [Relation.LEQ] * 3


def test_equality_sense_spellings():
    _, constraints = make_lp(senses=["=", "==", ">="]).to_problem()
    assert [pc.relation for pc in constraints] == [Relation.EQ, Relation.EQ, Relation.GEQ]


@pytest.mark.parametrize("overrides", [
    dict(senses=["<=", "<"]),
    dict(senses=["<=", "<=", "=<"]),
    dict(A=[[1, 1], [1], [0, 1]]),
    dict(b=[4, 2]),
    dict(A=[1, 1, 1]),
    dict(A=[[1, 1], 7, [0, 1]]),
    dict(c=[True, 1]),
    dict(b=[4, 2, None]),
    dict(senses="<="),
])
def test_validate_rejects_bad_models(overrides):
    with pytest.raises(ValueError):
        make_lp(**overrides).validate()


def test_from_dict_requires_an_object():
    with pytest.raises(ValueError):
        LP.from_dict([1, 2, 3])
    with pytest.raises(ValueError, match="missing LP field"):
        LP.from_dict({"c": [1]})


def test_solve_dense_model():
    res = solve(make_lp())
    assert res.optimal_value == 4
    assert sum(res.solution_for(make_lp().variables)) == 4


def test_solve_minimize():
    res = solve(make_lp(c=[2, 3], senses=[">=", "<=", "<="], maximize=False), rule=PivotRule.BLAND)
    # x1 is cheaper but capped at 2
    assert res.optimal_value == 10
    assert res.solution_for([1, 2]) == [2, 2]


def test_load_lp_reads_floats_exactly(tmp_path):
    path = tmp_path / "model.json"
    path.write_text(json.dumps({"c": [0.1, 1], "A": [[1, 0.5]], "b": [2.5], "senses": ["<="]}))

    lp = load_lp(str(path))
    objective, constraints = lp.to_problem()
    assert lp.maximize is True
    assert objective.terms[0] == (1, Fraction(1, 10))
    assert constraints[0].rhs == Fraction(5, 2)
    assert load_lp(str(path), maximize=False).maximize is False


def test_missing_field_is_a_value_error():
    with pytest.raises(ValueError):
        LP.from_dict({"c": [1]})
