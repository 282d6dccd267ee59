import logging
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import List, Optional, Tuple

from .dictionary import format_dictionary
from .errors import InvariantViolation, IterationLimitExceeded
from .model import CONSTANT, Dictionary, Row, fold_terms

logger = logging.getLogger(__name__)


class PivotRule(Enum):
    # largest objective coefficient enters; ratio ties go to the last row scanned
    DANTZIG = "dantzig"
    # smallest eligible ids on both sides; cannot cycle
    BLAND = "bland"


@dataclass(frozen=True)
class PivotOutcome:
    status: str  # optimal | unbounded
    dictionary: Dictionary
    iterations: int
    entering: Optional[int] = None  # variable with no bounding row when unbounded

    @property
    def optimal(self) -> bool:
        return self.status == "optimal"


def choose_entering(objective_row: Row, rule: PivotRule = PivotRule.DANTZIG) -> Optional[int]:
    best_var = None
    best_coeff = Fraction(0)
    for var in sorted(v for v in objective_row if v != CONSTANT):
        coeff = objective_row[var]
        if coeff <= 0:
            continue
        if rule is PivotRule.BLAND:
            return var
        if best_var is None or coeff > best_coeff:
            best_var, best_coeff = var, coeff
    return best_var


def choose_leaving(
    rows: List[Tuple[int, Row]], entering: int, rule: PivotRule = PivotRule.DANTZIG
) -> Optional[int]:
    """Ratio test over the constraint rows.

    Only rows where ``entering`` has a negative coefficient bound its increase.
    ``constant / coeff`` is at most zero for those rows and the binding row is the
    one with the largest value.
    """
    best_var = None
    best_ratio = None
    for basic_var, row in rows:
        coeff = row.get(entering)
        constant = row.get(CONSTANT, Fraction(0))
        if coeff is None or coeff >= 0 or constant < 0:
            continue
        ratio = constant / coeff
        if best_ratio is None or ratio > best_ratio:
            best_var, best_ratio = basic_var, ratio
        elif ratio == best_ratio:
            if rule is PivotRule.DANTZIG or basic_var < best_var:
                best_var = basic_var
    return best_var


def pivot(leaving: int, entering: int, dictionary: Dictionary) -> Dictionary:
    """Exchange ``leaving`` (basic) for ``entering`` (non-basic).

    The leaving row is solved for the entering variable and substituted into
    every other row that mentions it. Coefficients that cancel stay as zeros.
    """
    basic_row = dictionary[leaving]
    if entering not in basic_row:
        raise InvariantViolation(f"x{entering} does not appear in the row of x{leaving}")
    divisor = -basic_row[entering]
    terms = [(leaving, Fraction(-1))] + [(v, c) for v, c in basic_row.items() if v != entering]
    pivot_row = {v: c / divisor for v, c in fold_terms(terms)}

    updated: Dictionary = {}
    for basic_var, row in dictionary.items():
        if basic_var == leaving:
            updated[entering] = pivot_row
        elif entering in row:
            scale = row[entering]
            combined = [(v, scale * c) for v, c in pivot_row.items()]
            combined += [(v, c) for v, c in row.items() if v != entering]
            updated[basic_var] = dict(fold_terms(combined))
        else:
            updated[basic_var] = row
    return updated


def simplex_pivot(
    dictionary: Dictionary,
    rule: PivotRule = PivotRule.DANTZIG,
    max_iterations: Optional[int] = None,
) -> PivotOutcome:
    """Pivot until the first (objective) row has no positive coefficient.

    Returns an ``unbounded`` outcome when an improving variable has no row
    limiting it. ``max_iterations`` caps the number of pivots.
    """
    iterations = 0
    while True:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Dictionary after %d pivots:\n%s", iterations, format_dictionary(dictionary))
        rows = list(dictionary.items())
        objective_row = rows[0][1]
        entering = choose_entering(objective_row, rule)
        if entering is None:
            logger.debug("No positive objective coefficient left, dictionary is optimal")
            return PivotOutcome("optimal", dictionary, iterations)
        leaving = choose_leaving(rows[1:], entering, rule)
        if leaving is None:
            logger.debug("Ratio test failed for x%d, objective is unbounded", entering)
            return PivotOutcome("unbounded", dictionary, iterations, entering=entering)
        if max_iterations is not None and iterations >= max_iterations:
            raise IterationLimitExceeded(iterations)
        iterations += 1
        logger.debug("Pivot %d: x%d enters, x%d leaves", iterations, entering, leaving)
        dictionary = pivot(leaving, entering, dictionary)
