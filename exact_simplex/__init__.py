"""Exact two-phase simplex over rational numbers."""

from .errors import InvariantViolation, IterationLimitExceeded
from .lp import LP, load_lp, solve
from .model import (
    CONSTANT, Objective, PolyConstraint, Relation, Sense, eq, geq, leq, maximize, minimize,
)
from .pivot import PivotRule
from .simplex import SimplexResult, find_feasible_solution, solve_system, two_phase_simplex

__all__ = [
    "CONSTANT", "InvariantViolation", "IterationLimitExceeded", "LP", "Objective",
    "PivotRule", "PolyConstraint", "Relation", "Sense", "SimplexResult", "eq",
    "find_feasible_solution", "geq", "leq", "load_lp", "maximize", "minimize", "solve",
    "solve_system", "two_phase_simplex",
]
