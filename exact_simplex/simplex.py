from __future__ import annotations

"""
Two-phase simplex over exact rationals.

- Supports max/min by converting to max internally.
- Constraints: <=, >=, == over non-negative variables.
- Phase I maximizes minus the sum of the artificial variables; a non-zero
  optimum means the system is infeasible.
- Phase II optimizes the real objective, projected onto the Phase I basis.
- Detects infeasible and unbounded cases.

Programmatic API:
- find_feasible_solution(constraints) -> assignment or None
- two_phase_simplex(objective, constraints) -> (objective var, assignment) or None
- solve_system(objective, constraints) -> SimplexResult with an explicit status
"""

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .dictionary import create_objective_dict, dictionary_to_tableau, tableau_to_dictionary
from .errors import InvariantViolation
from .model import CONSTANT, Dictionary, Objective, PolyConstraint, fold_terms, max_var_id
from .normalize import simplify_system
from .pivot import PivotRule, pivot, simplex_pivot
from .standard_form import (
    constant_of, create_artificial_objective, strip_vars, system_in_standard_form,
    system_with_artificial_vars,
)

logger = logging.getLogger(__name__)

Assignment = Dict[int, Fraction]


@dataclass
class SimplexResult:
    status: str  # optimal | infeasible | unbounded
    optimal_value: Optional[Fraction]
    assignment: Optional[Assignment]  # basic original variables and the objective var
    objective_var: Optional[int]
    iterations: int
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def optimal(self) -> bool:
        return self.status == "optimal"

    def solution_for(self, var_ids: Iterable[int]) -> Optional[List[Fraction]]:
        """Values for the given ids; non-basic variables are zero."""
        if self.assignment is None:
            return None
        return [self.assignment.get(v, Fraction(0)) for v in var_ids]


@dataclass
class _StandardSystem:
    dictionary: Dictionary
    slack_vars: List[int]
    artificial_vars: List[int]
    objective_var: int


def _prepare(constraints: Iterable[PolyConstraint], extra_vars: Sequence[int] = ()) -> _StandardSystem:
    system = simplify_system(constraints)
    max_var = max_var_id(system, extra_vars)
    rows, slack_vars, max_var = system_in_standard_form(system, max_var)
    tableau, artificial_vars, max_var = system_with_artificial_vars(rows, max_var)
    logger.debug(
        "Standard form: %d rows, slack vars %s, artificial vars %s",
        len(tableau), slack_vars, artificial_vars,
    )
    return _StandardSystem(tableau_to_dictionary(tableau), slack_vars, artificial_vars, max_var + 1)


def _drive_out_artificials(dictionary: Dictionary, artificial_vars: Set[int]) -> Dictionary:
    # Basic artificials are at zero after a feasible phase I; swapping one for any
    # other variable of its row is a degenerate pivot. Rows with no such variable
    # are linear combinations of the others and can go.
    for basic_var in [v for v in dictionary if v in artificial_vars]:
        row = dictionary[basic_var]
        candidates = [v for v, c in row.items() if v != CONSTANT and v not in artificial_vars and c != 0]
        if candidates:
            logger.debug("Pivoting artificial x%d out of the basis for x%d", basic_var, candidates[0])
            dictionary = pivot(basic_var, candidates[0], dictionary)
        else:
            logger.debug("Dropping redundant row of artificial x%d", basic_var)
            dictionary = {v: r for v, r in dictionary.items() if v != basic_var}
    return dictionary


def _phase_one(
    std: _StandardSystem, rule: PivotRule, max_iterations: Optional[int]
) -> Tuple[Optional[Dictionary], int]:
    """Run phase I; returns (dictionary without artificial variables, pivots) or (None, pivots)."""
    logger.info("Starting phase 1 with %d artificial variables", len(std.artificial_vars))
    artificial_objective = create_artificial_objective(std.dictionary, std.artificial_vars)
    start = {**create_objective_dict(artificial_objective, std.objective_var), **std.dictionary}
    outcome = simplex_pivot(start, rule=rule, max_iterations=max_iterations)
    if not outcome.optimal:
        raise InvariantViolation("phase 1 objective is bounded by zero but pivoting reported unbounded")
    objective_row = outcome.dictionary.get(std.objective_var)
    if objective_row is None:
        raise InvariantViolation("objective row not found in phase 1 dictionary")
    if constant_of(objective_row) != 0:
        logger.info("Phase 1 optimum is %s, system is infeasible", constant_of(objective_row))
        return None, outcome.iterations
    artificial = set(std.artificial_vars)
    dictionary = _drive_out_artificials(outcome.dictionary, artificial)
    return strip_vars(dictionary, artificial), outcome.iterations


def _values(dictionary: Dictionary, exclude: Set[int]) -> Assignment:
    return {
        basic_var: rhs
        for basic_var, (_, rhs) in dictionary_to_tableau(dictionary).items()
        if basic_var not in exclude
    }


def find_feasible_solution(
    constraints: Iterable[PolyConstraint],
    rule: PivotRule = PivotRule.DANTZIG,
    max_iterations: Optional[int] = None,
) -> Optional[Assignment]:
    """Any non-negative assignment satisfying the constraints, or None.

    The assignment holds the basic original and slack variables; every variable
    missing from it is zero.
    """
    std = _prepare(constraints)
    if not std.artificial_vars:
        return _values(std.dictionary, set())
    dictionary, _ = _phase_one(std, rule, max_iterations)
    if dictionary is None:
        return None
    return _values(dictionary, {std.objective_var})


def _project_objective(objective: Objective, dictionary: Dictionary) -> Objective:
    terms: List[Tuple[int, Fraction]] = []
    for var, coeff in objective.terms:
        row = dictionary.get(var)
        if row is None:
            terms.append((var, coeff))
        else:
            terms.extend((v, c * coeff) for v, c in row.items())
    return objective.with_terms(fold_terms(terms))


def _alternate_optima(dictionary: Dictionary, objective_var: int) -> List[int]:
    # non-basic variables whose increase leaves the objective unchanged
    objective_row = dictionary[objective_var]
    non_basic = {v for row in dictionary.values() for v in row if v != CONSTANT} - set(dictionary)
    return sorted(v for v in non_basic if objective_row.get(v, 0) == 0)


def solve_system(
    objective: Objective,
    constraints: Iterable[PolyConstraint],
    rule: PivotRule = PivotRule.DANTZIG,
    max_iterations: Optional[int] = None,
) -> SimplexResult:
    """Optimize ``objective`` subject to ``constraints`` with the two-phase method."""
    std = _prepare(constraints, [v for v, _ in objective.terms])
    objective_var = std.objective_var
    iterations = 0
    phases = 1

    if std.artificial_vars:
        phase1, iterations = _phase_one(std, rule, max_iterations)
        if phase1 is None:
            return SimplexResult("infeasible", None, None, None, iterations, {"phases": 1})
        dictionary = {v: row for v, row in phase1.items() if v != objective_var}
        objective = _project_objective(objective, dictionary)
        phases = 2
        logger.info("Starting phase 2")
    else:
        dictionary = std.dictionary

    start = {**create_objective_dict(objective, objective_var), **dictionary}
    remaining = None if max_iterations is None else max_iterations - iterations
    outcome = simplex_pivot(start, rule=rule, max_iterations=remaining)
    iterations += outcome.iterations
    if not outcome.optimal:
        logger.info("Objective is unbounded along x%d", outcome.entering)
        return SimplexResult(
            "unbounded", None, None, None, iterations,
            {"phases": phases, "unbounded_var": outcome.entering},
        )

    values = _values(outcome.dictionary, set(std.slack_vars) | set(std.artificial_vars))
    if not objective.is_max:
        # we maximized -objective
        values[objective_var] = -values[objective_var]
    alt_vars = _alternate_optima(outcome.dictionary, objective_var)
    logger.info("Optimal value %s after %d pivots", values[objective_var], iterations)
    return SimplexResult(
        "optimal", values[objective_var], values, objective_var, iterations,
        {"phases": phases, "alternate_optimal": bool(alt_vars), "alt_zero_rc_vars": alt_vars},
    )


def two_phase_simplex(
    objective: Objective,
    constraints: Iterable[PolyConstraint],
    rule: PivotRule = PivotRule.DANTZIG,
    max_iterations: Optional[int] = None,
) -> Optional[Tuple[int, Assignment]]:
    """Optimal (objective var, assignment) pair, or None if infeasible or unbounded.

    The assignment maps each basic original variable to its value and the
    objective var to the optimal objective value.
    """
    result = solve_system(objective, constraints, rule=rule, max_iterations=max_iterations)
    if not result.optimal:
        return None
    return result.objective_var, result.assignment
