from __future__ import annotations

"""
Standard form construction for the two-phase method.

Every constraint becomes an equality. ``<=`` rows get a slack with coefficient
+1, ``>=`` rows a slack with coefficient -1; the slack is the candidate basic
variable of its row. Rows whose candidate would start out negative, and rows
that were equalities already, get an artificial variable instead so that
setting every other variable to zero is a feasible starting point.

Fresh ids are minted from ``max_var`` and the new maximum is returned, so each
solve owns its own id space.
"""

from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import InvariantViolation
from .model import (
    CONSTANT, Dictionary, Objective, PolyConstraint, Relation, Sense, Tableau, fold_terms,
)

StandardRow = Tuple[Optional[int], PolyConstraint]


def system_in_standard_form(
    system: Iterable[PolyConstraint], max_var: int
) -> Tuple[List[StandardRow], List[int], int]:
    """Add slack variables; returns (rows, slack ids, new max id)."""
    rows: List[StandardRow] = []
    slack_vars: List[int] = []
    for pc in system:
        if pc.relation is Relation.EQ:
            rows.append((None, pc))
            continue
        max_var += 1
        coeff = Fraction(1) if pc.relation is Relation.LEQ else Fraction(-1)
        rows.append((max_var, PolyConstraint(Relation.EQ, pc.lhs + ((max_var, coeff),), pc.rhs)))
        slack_vars.append(max_var)
    return rows, slack_vars, max_var


def _keeps_candidate(coeff: Fraction, rhs: Fraction) -> bool:
    # the candidate equals rhs / coeff once every other variable is zero
    if rhs == 0:
        return True
    if rhs > 0:
        return coeff >= 0
    return coeff <= 0


def system_with_artificial_vars(
    rows: Iterable[StandardRow], max_var: int
) -> Tuple[Tableau, List[int], int]:
    """Give every row a basic variable; returns (tableau, artificial ids, new max id)."""
    tableau: Tableau = {}
    artificial_vars: List[int] = []
    for candidate, pc in rows:
        lhs = dict(fold_terms(pc.lhs))
        if candidate is not None:
            if candidate not in lhs:
                raise InvariantViolation(f"basic candidate x{candidate} missing from its row")
            if _keeps_candidate(lhs[candidate], pc.rhs):
                tableau[candidate] = (lhs, pc.rhs)
                continue
        max_var += 1
        lhs[max_var] = Fraction(1) if pc.rhs >= 0 else Fraction(-1)
        tableau[max_var] = (lhs, pc.rhs)
        artificial_vars.append(max_var)
    return tableau, artificial_vars, max_var


def create_artificial_objective(dictionary: Dictionary, artificial_vars: Iterable[int]) -> Objective:
    """Maximize the negated sum of the artificial variables' rows."""
    artificial = set(artificial_vars)
    negated: List[Tuple[int, Fraction]] = []
    for basic_var, row in dictionary.items():
        if basic_var in artificial:
            negated.extend((v, -c) for v, c in row.items())
    terms = [(v, c) for v, c in fold_terms(negated) if v not in artificial]
    return Objective(Sense.MAX, tuple(terms))


def strip_vars(dictionary: Dictionary, variables: Iterable[int]) -> Dictionary:
    drop = set(variables)
    return {
        basic_var: {v: c for v, c in row.items() if v not in drop}
        for basic_var, row in dictionary.items()
    }


def constant_of(row: Dict[int, Fraction]) -> Fraction:
    return row.get(CONSTANT, Fraction(0))
