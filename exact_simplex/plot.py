"""Feasible region plot for two-variable models."""

from itertools import combinations
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .lp import LP
from .model import Relation
from .rational import F, fmt_out
from .simplex import SimplexResult

TOL = 1e-9

Point = Tuple[float, float]


def _lines(lp: LP) -> List[Tuple[float, float, float]]:
    return [(float(F(row[0])), float(F(row[1])), float(F(rhs))) for row, rhs in zip(lp.A, lp.b)]


def _feasible(lp: LP, p: Point) -> bool:
    x, y = p
    if x < -TOL or y < -TOL:
        return False
    for (a1, a2, rhs), s in zip(_lines(lp), lp.senses):
        lhs = a1 * x + a2 * y
        relation = Relation.parse(s)
        if relation is Relation.LEQ and lhs > rhs + TOL:
            return False
        if relation is Relation.GEQ and lhs < rhs - TOL:
            return False
        if relation is Relation.EQ and abs(lhs - rhs) > TOL:
            return False
    return True


def basic_feasible_points(lp: LP) -> List[Point]:
    """Feasible intersections of constraint lines and the axes."""
    lines = _lines(lp) + [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    points: List[Point] = []
    for (a1, a2, b1), (c1, c2, b2) in combinations(lines, 2):
        det = a1 * c2 - a2 * c1
        if abs(det) < 1e-12:
            continue
        p = ((b1 * c2 - a2 * b2) / det, (a1 * b2 - b1 * c1) / det)
        if _feasible(lp, p) and not any(abs(p[0] - q[0]) < 1e-7 and abs(p[1] - q[1]) < 1e-7 for q in points):
            points.append(p)
    return points


def plot_2d(lp: LP, res: Optional[SimplexResult] = None):
    """Constraints, shaded feasible region, BFS points and the iso-profit line.

    Returns None when the model does not have exactly two variables or the
    feasible region is empty.
    """
    if len(lp.c) != 2:
        return None
    bfs = basic_feasible_points(lp)
    if not bfs:
        return None

    xs = [p[0] for p in bfs]
    ys = [p[1] for p in bfs]
    xmax, ymax = max(xs) * 1.2 + 1, max(ys) * 1.2 + 1
    grid_x = np.linspace(0.0, xmax, 400)

    fig, ax = plt.subplots(figsize=(6, 6))
    colors = plt.rcParams['axes.prop_cycle'].by_key()['color']
    for i, ((a1, a2, rhs), s) in enumerate(zip(_lines(lp), lp.senses)):
        c = colors[i % len(colors)]
        label = f"c_{i + 1}: {a1:g}x1 + {a2:g}x2 {s} {rhs:g}"
        if abs(a2) < 1e-12:
            ax.axvline(rhs / a1 if abs(a1) > 1e-12 else 0.0, color=c, alpha=0.7, label=label)
        else:
            ax.plot(grid_x, (rhs - a1 * grid_x) / a2, color=c, alpha=0.7, label=label)

    X, Y = np.meshgrid(np.linspace(0.0, xmax, 200), np.linspace(0.0, ymax, 200))
    mask = np.ones_like(X, dtype=bool)
    for (a1, a2, rhs), s in zip(_lines(lp), lp.senses):
        lhs = a1 * X + a2 * Y
        relation = Relation.parse(s)
        if relation is Relation.LEQ:
            mask &= lhs <= rhs + TOL
        elif relation is Relation.GEQ:
            mask &= lhs >= rhs - TOL
        else:
            mask &= np.abs(lhs - rhs) <= TOL
    ax.contourf(X, Y, mask, levels=[0.5, 1.5], colors=['#e8f7ff'], alpha=0.5)

    if res is not None and res.optimal:
        xopt, yopt = (float(v) for v in res.solution_for(lp.variables))
        zopt = float(res.optimal_value)
        c1, c2 = float(F(lp.c[0])), float(F(lp.c[1]))
        if abs(c2) < 1e-12:
            ax.axvline(zopt / c1 if abs(c1) > 1e-12 else 0.0, color='red', linestyle='--', label='iso-profit')
        else:
            ax.plot(grid_x, (zopt - c1 * grid_x) / c2, 'r--', label='iso-profit')
        ax.plot([xopt], [yopt], 'ro', label='optimal')
        ax.annotate(f"Z* = {fmt_out(res.optimal_value)}", (xopt, yopt), textcoords="offset points", xytext=(8, 8))

        if res.details.get('alternate_optimal'):
            edge = sorted(p for p in bfs if abs(c1 * p[0] + c2 * p[1] - zopt) <= 1e-6)
            if len(edge) >= 2:
                (x1, y1), (x2, y2) = edge[0], edge[-1]
                ax.plot([x1, x2], [y1, y2], color='red', linewidth=3, alpha=0.6, label='optimal edge')

    ax.scatter(xs, ys, s=25, color='#444444', alpha=0.9, label='BFS')
    ax.set_xlim(0.0, xmax)
    ax.set_ylim(0.0, ymax)
    ax.set_xlabel('x1')
    ax.set_ylabel('x2')
    ax.set_title('Constraints, Feasible Region, Iso-profit')
    ax.legend(loc='best', fontsize=8)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig
