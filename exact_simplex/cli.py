import argparse
import logging
from typing import List, Optional

from .errors import IterationLimitExceeded
from .logger_config import setup_logger
from .lp import load_lp, solve
from .lp_format import translate_to_lp
from .pivot import PivotRule
from .rational import fmt_out
from .simplex import find_feasible_solution

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Exact two-phase simplex over rational numbers")
    p.add_argument("json", help="Path to JSON file describing the LP")
    p.add_argument("--sense", choices=["max", "min"], default=None, help="Objective sense (default: use JSON or max)")
    p.add_argument("--rule", choices=[r.value for r in PivotRule], default=PivotRule.DANTZIG.value,
                   help="Pivot rule; bland never cycles on degenerate problems")
    p.add_argument("--max-iterations", type=int, default=None, help="Give up after this many pivots")
    p.add_argument("--feasibility", action="store_true", help="Only look for a feasible point")
    p.add_argument("--export-lp", metavar="PATH", help="Also write the problem in SoPlex LP format")
    p.add_argument("--no-verbose", action="store_true", help="Only log warnings and errors")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING"], default=None,
                   help="DEBUG shows the dictionary after every pivot")
    p.add_argument("--graph", action="store_true", help="Plot constraints and iso-profit (2 variables only)")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = args.log_level or ("WARNING" if args.no_verbose else "INFO")
    setup_logger(getattr(logging, level))

    maximize = None if args.sense is None else args.sense == "max"
    try:
        lp = load_lp(args.json, maximize=maximize)
        objective, constraints = lp.to_problem()
    except (OSError, ValueError) as e:
        logger.error("Could not read LP from %s: %s", args.json, e)
        return 2

    if args.export_lp:
        try:
            with open(args.export_lp, "w") as f:
                f.write(translate_to_lp(objective, constraints))
        except OSError as e:
            logger.error("Could not write LP to %s: %s", args.export_lp, e)
            return 2
        logger.info("LP written to %s", args.export_lp)

    rule = PivotRule(args.rule)
    try:
        if args.feasibility:
            point = find_feasible_solution(constraints, rule=rule, max_iterations=args.max_iterations)
        else:
            res = solve(lp, rule=rule, max_iterations=args.max_iterations)
    except IterationLimitExceeded as e:
        logger.error("%s", e)
        return 3

    if args.feasibility:
        print("\n=== Feasibility ===")
        if point is None:
            print("Status: infeasible")
            return 1
        print("Status: feasible")
        print("Point x:", [fmt_out(point.get(v, 0)) for v in lp.variables])
        return 0

    print("\n=== Result ===")
    print("Status:", res.status)
    if res.optimal:
        print("Optimal value:", fmt_out(res.optimal_value))
        print("Solution x:", [fmt_out(v) for v in res.solution_for(lp.variables)])
    print("Iterations:", res.iterations)
    if res.optimal and res.details.get('alternate_optimal'):
        print("Note: Infinite many optimal solutions (alternate optimal).")
        print("Zero reduced-cost nonbasic vars:", [f"x{v}" for v in res.details['alt_zero_rc_vars']])
    if args.graph:
        from .plot import plot_2d
        import matplotlib.pyplot as plt

        fig = plot_2d(lp, res)
        if fig is None:
            print("Graph only supports 2 variables with a non-empty feasible region.")
        else:
            plt.show()
    return 0 if res.optimal else 1


if __name__ == "__main__":
    raise SystemExit(main())
