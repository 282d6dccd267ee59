from typing import Iterable, List

from .model import PolyConstraint, Relation


def simplify_system(constraints: Iterable[PolyConstraint]) -> List[PolyConstraint]:
    """Remove duplicate constraints, then merge matching pairs into equalities.

    A constraint and any later constraint with a different relation over the same
    lhs and rhs (e.g. ``x1 + x2 <= 4`` and ``x1 + x2 >= 4``) collapse into one
    ``==`` constraint at the position of the first one.
    """
    unique: List[PolyConstraint] = []
    for pc in constraints:
        pc = pc.folded()
        if pc not in unique:
            unique.append(pc)

    reduced: List[PolyConstraint] = []
    pending = unique
    while pending:
        pc, rest = pending[0], pending[1:]
        matching = [
            other for other in rest
            if other.relation is not pc.relation and other.lhs == pc.lhs and other.rhs == pc.rhs
        ]
        if matching:
            reduced.append(PolyConstraint(Relation.EQ, pc.lhs, pc.rhs))
            pending = [other for other in rest if other not in matching]
        else:
            reduced.append(pc)
            pending = rest
    return reduced
