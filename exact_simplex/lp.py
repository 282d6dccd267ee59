from __future__ import annotations

"""
Dense LP front end.

Input contract (JSON or programmatic):
- c: objective coefficients for the original variables (length n)
- A: constraint coefficients (m x n)
- b: right-hand sides (length m)
- senses: entries in {"<=", ">=", "=", "=="}
- maximize: bool (True for max, False for min)

Variable x_j (1-based) is variable id j in the constraint model.
"""

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Tuple

from .model import Objective, PolyConstraint, Relation, Sense
from .pivot import PivotRule
from .rational import F, Num
from .simplex import SimplexResult, solve_system


@dataclass
class LP:
    c: List[Num]
    A: List[List[Num]]
    b: List[Num]
    senses: List[str]
    maximize: bool = True

    @property
    def variables(self) -> List[int]:
        return list(range(1, len(self.c) + 1))

    def validate(self) -> None:
        for name in ("c", "A", "b", "senses"):
            if not isinstance(getattr(self, name), list):
                raise ValueError(f"{name} must be a list")
        n = len(self.c)
        if len(self.A) != len(self.b) or len(self.A) != len(self.senses):
            raise ValueError("A, b and senses must have the same number of rows")
        for i, row in enumerate(self.A):
            if not isinstance(row, list):
                raise ValueError(f"row {i + 1} of A must be a list")
            if len(row) != n:
                raise ValueError(f"row {i + 1} of A has {len(row)} coefficients, expected {n}")
        for v in self.c + self.b + [v for row in self.A for v in row]:
            try:
                F(v)
            except TypeError as e:
                raise ValueError(f"bad coefficient {v!r}: {e}") from None
        for s in self.senses:
            Relation.parse(s)

    def to_problem(self) -> Tuple[Objective, List[PolyConstraint]]:
        self.validate()
        sense = Sense.MAX if self.maximize else Sense.MIN
        objective = Objective(sense, tuple((j, F(v)) for j, v in enumerate(self.c, start=1) if F(v) != 0))
        constraints = []
        for row, rhs, s in zip(self.A, self.b, self.senses):
            lhs = tuple((j, F(v)) for j, v in enumerate(row, start=1) if F(v) != 0)
            constraints.append(PolyConstraint(Relation.parse(s), lhs, F(rhs)))
        return objective, constraints

    @classmethod
    def from_dict(cls, cfg: dict, maximize: Optional[bool] = None) -> "LP":
        try:
            return cls(
                c=cfg["c"],
                A=cfg["A"],
                b=cfg["b"],
                senses=cfg["senses"],
                maximize=bool(cfg.get("maximize", True)) if maximize is None else maximize,
            )
        except KeyError as e:
            raise ValueError(f"missing LP field {e}") from None
        except TypeError:
            raise ValueError("LP model must be a JSON object") from None


def load_lp(path: str, maximize: Optional[bool] = None) -> LP:
    with open(path, "r") as f:
        # floats as Decimal so they become exact fractions
        cfg = json.load(f, parse_float=Decimal)
    return LP.from_dict(cfg, maximize=maximize)


def solve(lp: LP, rule: PivotRule = PivotRule.DANTZIG, max_iterations: Optional[int] = None) -> SimplexResult:
    objective, constraints = lp.to_problem()
    return solve_system(objective, constraints, rule=rule, max_iterations=max_iterations)
