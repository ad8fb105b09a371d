"""
gridant/cli.py
──────────────
Command-line front end.

    gridant MATRIX --start 55 --goal 22 --iterations 2000 --seed 7

Prints the best length and path:

    Best path length: 41.0
    Best path cost: 134.0
    Best path: 55 45 35 34 33 23 22

Exit codes:
    0 → the colony ran (whether or not the goal was reached).
    1 → the matrix could not be read.
    2 → bad arguments (argparse) or invalid start/goal/parameters.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from gridant.loader import MatrixLoadError
from gridant.planner import format_path, plan_route_from_file
from gridant.shared.models import ColonyParams, RouteRequest

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = ColonyParams()
    parser = argparse.ArgumentParser(
        prog="gridant",
        description="Ant colony route search on a weighted grid.",
    )
    parser.add_argument("matrix", type=Path, help="Adjacency matrix file")
    parser.add_argument("--start", type=int, default=0, help="Start node index")
    parser.add_argument("--goal", type=int, default=1, help="Goal node index")
    parser.add_argument("--iterations", type=int, default=defaults.iterations)
    parser.add_argument("--trail", type=float, default=defaults.c,
                        help="Initial trail value c")
    parser.add_argument("--alpha", type=float, default=defaults.alpha)
    parser.add_argument("--beta", type=float, default=defaults.beta)
    parser.add_argument("--evaporation", type=float, default=defaults.evaporation,
                        help="Fraction of trail retained per iteration")
    parser.add_argument("--q", type=float, default=defaults.q, help="Deposit numerator")
    parser.add_argument("--ant-factor", type=float, default=defaults.ant_factor)
    parser.add_argument("--pr", type=float, default=defaults.pr,
                        help="Probability of a random move")
    parser.add_argument("--width", type=int, default=defaults.grid_width,
                        help="Grid width")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--exact-pow", action="store_true",
                        help="Use exact exponentiation")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        request = RouteRequest(
            start_node=args.start,
            goal_node=args.goal,
            params=ColonyParams(
                c=args.trail,
                alpha=args.alpha,
                beta=args.beta,
                evaporation=args.evaporation,
                q=args.q,
                ant_factor=args.ant_factor,
                pr=args.pr,
                iterations=args.iterations,
                grid_width=args.width,
                seed=args.seed,
                exact_pow=args.exact_pow,
            ),
        )
    except ValidationError as exc:
        logger.error("Invalid parameters:\n%s", exc)
        return 2

    try:
        result = plan_route_from_file(args.matrix, request)
    except MatrixLoadError as exc:
        logger.error("%s", exc)
        return 1
    except ValueError as exc:
        logger.error("Invalid request: %s", exc)
        return 2

    print(f"Best path length: {result.length}")
    print(f"Best path cost: {result.path_cost}")
    print(f"Best path:{format_path(result.path)}")
    if not result.reached_goal:
        print(f"Goal {result.goal_node} was not reached.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
