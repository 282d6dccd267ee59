from fractions import Fraction

from exact_simplex.model import Relation, eq, geq, leq
from exact_simplex.normalize import simplify_system


def test_duplicates_are_removed():
    system = [leq([(1, 1)], 4), leq([(1, 1)], 4), geq([(2, 1)], 1)]
    assert simplify_system(system) == [leq([(1, 1)], 4), geq([(2, 1)], 1)]


def test_expressions_are_folded_and_sorted():
    (pc,) = simplify_system([leq([(2, 1), (1, 1), (2, 1)], 4)])
    assert pc.lhs == ((1, Fraction(1)), (2, Fraction(2)))


def test_leq_and_geq_with_same_sides_become_equality():
    e = [(1, 1), (2, 1)]
    system = [leq(e, 4), geq([(1, 1)], 1), geq(e, 4)]
    assert simplify_system(system) == [eq(e, 4), geq([(1, 1)], 1)]


def test_equality_absorbs_matching_inequalities():
    e = [(1, 2)]
    assert simplify_system([eq(e, 3), leq(e, 3), geq(e, 3)]) == [eq(e, 3)]
    assert simplify_system([geq(e, 3), eq(e, 3)]) == [eq(e, 3)]


def test_different_rhs_is_not_merged():
    system = [leq([(1, 1)], 4), geq([(1, 1)], 3)]
    assert simplify_system(system) == system


def test_idempotent():
    e = [(1, 1), (3, -1)]
    system = [
        leq(e, 2), geq(e, 2), eq(e, 2), leq([(2, 1)], 5), leq([(2, 1)], 5),
        geq([(2, 1), (2, 1)], 1), geq([(2, 2)], 1), eq([(1, 1)], 0),
    ]
    once = simplify_system(system)
    assert simplify_system(once) == once
    assert [pc.relation for pc in once] == [Relation.EQ, Relation.LEQ, Relation.GEQ, Relation.EQ]
