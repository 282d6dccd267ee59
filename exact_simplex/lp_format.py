"""Render a problem in the CPLEX-style LP format read by SoPlex.

SoPlex does not accept numerator/denominator pairs, so every rational is written
as a signed decimal, truncated after ``digits`` places when it does not terminate.
"""

from typing import Iterable, List

from .model import Objective, PolyConstraint, Relation, Term
from .rational import F, Num

DIGITS = 100

_RELATIONS = {Relation.LEQ: "<=", Relation.GEQ: ">=", Relation.EQ: "=="}


def rational_as_decimal(value: Num, digits: int = DIGITS) -> str:
    fr = F(value)
    num, den = fr.numerator, fr.denominator
    if den == 1:
        return f"+{num}" if num >= 0 else str(num)
    whole, rest = divmod(abs(num), den)
    decimals: List[str] = []
    while rest and len(decimals) < digits:
        digit, rest = divmod(10 * rest, den)
        decimals.append(str(digit))
    sign = "-" if num < 0 else "+"
    return f"{sign}{whole}." + "".join(decimals)


def terms_to_lp(terms: Iterable[Term], digits: int = DIGITS) -> str:
    return "".join(f"{rational_as_decimal(c, digits)} x{v} " for v, c in terms)


def translate_to_lp(objective: Objective, constraints: Iterable[PolyConstraint], digits: int = DIGITS) -> str:
    header = "Maximize" if objective.is_max else "Minimize"
    blocks = [f"{header}\n\t cost: {terms_to_lp(objective.terms, digits)}", "Subject to"]
    body = ""
    for i, pc in enumerate(constraints, start=1):
        body += (
            f"\t c_{i}: \n"
            f"\t\t{terms_to_lp(pc.lhs, digits)}\n"
            f"\t\t{_RELATIONS[pc.relation]} {rational_as_decimal(pc.rhs, digits)}\n"
        )
    blocks.append(body)
    blocks.append("End")
    return "\n".join(blocks)
