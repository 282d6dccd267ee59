from fractions import Fraction
from typing import List

from .model import CONSTANT, Dictionary, Objective, Tableau, fold_terms
from .rational import fmt_out


def tableau_to_dictionary(tableau: Tableau) -> Dictionary:
    """Solve every tableau row for its basic variable.

    ``2 x1 + 4 x3 = 8`` with basic ``x1`` becomes ``x1 = 4 - 2 x3``, stored as
    ``{CONSTANT: 4, 3: -2}``.
    """
    dictionary: Dictionary = {}
    for basic_var, (lhs, rhs) in tableau.items():
        basic_coeff = Fraction(lhs.get(basic_var, 1))
        row = {CONSTANT: rhs / basic_coeff}
        for var, coeff in lhs.items():
            if var != basic_var:
                row[var] = -coeff / basic_coeff
        dictionary[basic_var] = row
    return dictionary


def dictionary_to_tableau(dictionary: Dictionary) -> Tableau:
    """Move non-basic terms back to the left; the constant becomes the rhs."""
    tableau: Tableau = {}
    for basic_var, row in dictionary.items():
        lhs = {basic_var: Fraction(1)}
        for var, coeff in row.items():
            if var != CONSTANT:
                lhs[var] = -coeff
        tableau[basic_var] = (lhs, row.get(CONSTANT, Fraction(0)))
    return tableau


def create_objective_dict(objective: Objective, objective_var: int) -> Dictionary:
    """Objective row keyed by ``objective_var``; minimization is negated."""
    sign = 1 if objective.is_max else -1
    return {objective_var: {v: sign * c for v, c in fold_terms(objective.terms)}}


def format_dictionary(dictionary: Dictionary) -> str:
    lines: List[str] = []
    for basic_var, row in dictionary.items():
        parts = [fmt_out(row.get(CONSTANT, 0))]
        for var in sorted(v for v in row if v != CONSTANT):
            coeff = row[var]
            sign = "-" if coeff < 0 else "+"
            parts.append(f"{sign} {fmt_out(abs(coeff))} x{var}")
        lines.append(f"x{basic_var} = " + " ".join(parts))
    return "\n".join(lines)
