"""
Constraint model shared by every stage of the solver.

- A linear expression is a tuple of (variable id, Fraction) pairs.
- Variable ids are positive integers; CONSTANT (-1) keys the constant term
  in dictionary rows and is never a real variable.
- A tableau maps each basic variable to (lhs coefficients, rhs).
- A dictionary maps each basic variable to its row solved for that variable:
  non-basic coefficients plus the CONSTANT entry. The first row is the objective.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from operator import itemgetter
from typing import Dict, Iterable, List, Tuple

from .rational import F, Num, fmt_out

CONSTANT = -1

Term = Tuple[int, Fraction]
LinearExpr = Tuple[Term, ...]
Row = Dict[int, Fraction]
Tableau = Dict[int, Tuple[Row, Fraction]]
Dictionary = Dict[int, Row]


class Relation(Enum):
    LEQ = "<="
    GEQ = ">="
    EQ = "=="

    @classmethod
    def parse(cls, text: str) -> "Relation":
        if text == "=":
            return cls.EQ
        try:
            return cls(text)
        except ValueError:
            raise ValueError("sense must be one of <=, >=, =") from None


class Sense(Enum):
    MAX = "max"
    MIN = "min"


def check_var(var: int) -> int:
    if isinstance(var, bool) or not isinstance(var, int) or var <= 0:
        raise ValueError(f"variable ids must be positive integers, got {var!r}")
    return var


def linear_expr(terms: Iterable[Tuple[int, Num]]) -> LinearExpr:
    return tuple((check_var(v), F(c)) for v, c in terms)


def fold_terms(terms: Iterable[Term]) -> List[Term]:
    """Sort terms by variable id and sum the coefficients of repeated ids."""
    folded: List[Term] = []
    for var, coeff in sorted(terms, key=itemgetter(0)):
        if folded and folded[-1][0] == var:
            folded[-1] = (var, folded[-1][1] + coeff)
        else:
            folded.append((var, coeff))
    return folded


def show_terms(terms: Iterable[Term]) -> str:
    return " + ".join(f"{fmt_out(c)} x{v}" for v, c in terms) or "0"


@dataclass(frozen=True)
class PolyConstraint:
    relation: Relation
    lhs: LinearExpr
    rhs: Fraction

    def variables(self) -> List[int]:
        return [v for v, _ in self.lhs]

    def folded(self) -> "PolyConstraint":
        return PolyConstraint(self.relation, tuple(fold_terms(self.lhs)), self.rhs)

    def is_satisfied_by(self, values: Dict[int, Fraction]) -> bool:
        """Check the constraint for an assignment; missing ids count as zero."""
        total = sum((c * values.get(v, 0) for v, c in self.lhs), Fraction(0))
        if self.relation is Relation.LEQ:
            return total <= self.rhs
        if self.relation is Relation.GEQ:
            return total >= self.rhs
        return total == self.rhs

    def __str__(self) -> str:
        return f"{show_terms(self.lhs)} {self.relation.value} {fmt_out(self.rhs)}"


def leq(terms: Iterable[Tuple[int, Num]], rhs: Num) -> PolyConstraint:
    return PolyConstraint(Relation.LEQ, linear_expr(terms), F(rhs))


def geq(terms: Iterable[Tuple[int, Num]], rhs: Num) -> PolyConstraint:
    return PolyConstraint(Relation.GEQ, linear_expr(terms), F(rhs))


def eq(terms: Iterable[Tuple[int, Num]], rhs: Num) -> PolyConstraint:
    return PolyConstraint(Relation.EQ, linear_expr(terms), F(rhs))


@dataclass(frozen=True)
class Objective:
    sense: Sense
    terms: LinearExpr

    @property
    def is_max(self) -> bool:
        return self.sense is Sense.MAX

    def with_terms(self, terms: Iterable[Term]) -> "Objective":
        return Objective(self.sense, tuple(terms))

    def value_at(self, values: Dict[int, Fraction]) -> Fraction:
        return sum((c * values.get(v, 0) for v, c in self.terms), Fraction(0))

    def __str__(self) -> str:
        return f"{self.sense.value}: {show_terms(self.terms)}"


def maximize(terms: Iterable[Tuple[int, Num]]) -> Objective:
    return Objective(Sense.MAX, linear_expr(terms))


def minimize(terms: Iterable[Tuple[int, Num]]) -> Objective:
    return Objective(Sense.MIN, linear_expr(terms))


def max_var_id(constraints: Iterable[PolyConstraint], *extra: Iterable[int]) -> int:
    """Largest variable id used by the constraints (and any extra ids), 0 if none."""
    ids = [v for pc in constraints for v in pc.variables()]
    for more in extra:
        ids.extend(more)
    return max(ids, default=0)
