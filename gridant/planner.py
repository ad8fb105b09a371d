"""
gridant/planner.py
──────────────────
The routing service: validates a request, runs the colony, logs the outcome.

The two entry points
─────────────────────
1. plan_route(weights, request)
     The weight matrix is already in memory (load bias applied).
     Builds a Colony, runs it, logs a one-line summary.

2. plan_route_from_file(path, request)
     Loads the matrix with gridant.loader first. A MatrixLoadError
     propagates unchanged — the caller decides how to report it.

Error handling contract
────────────────────────
  MatrixLoadError: the input could not be read. Raised before any colony
                   state exists.
  ValueError:      start/goal out of range, bad matrix, topology mismatch.
  Goal not reached: NOT an error. Logged as a warning; the result's
                   reached_goal flag is False and the path is the cheapest
                   partial path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from numpy.typing import ArrayLike

from gridant.loader import load_weight_matrix
from gridant.shared.models import RouteRequest, RouteResult
from gridant_core.colony import Colony

logger = logging.getLogger(__name__)


def plan_route(
    weights: ArrayLike,
    request: Optional[RouteRequest] = None,
) -> RouteResult:
    """
    Find a low-cost route from request.start_node to request.goal_node.

    Args:
        weights: n × n biased weight matrix.
        request: Start/goal and colony parameters. Defaults to RouteRequest().

    Returns:
        RouteResult for the best path found.

    Raises:
        ValueError: on invalid matrix or node indices.
    """
    request = request or RouteRequest()
    colony = Colony(
        weights,
        start_node=request.start_node,
        goal_node=request.goal_node,
        params=request.params,
    )
    result = colony.run()

    logger.info(
        "plan_route: %d → %d, length %.4f over %d edges "
        "(%d ants × %d iterations, %.2fms)",
        result.start_node, result.goal_node, result.length, result.n_edges,
        result.n_ants, result.iterations, result.elapsed_ms,
    )
    if not result.reached_goal:
        logger.warning(
            "plan_route: no ant reached goal %d; best partial path ends at %d.",
            result.goal_node, result.path[-1],
        )
    return result


def plan_route_from_file(
    path: Union[str, Path],
    request: Optional[RouteRequest] = None,
) -> RouteResult:
    """Load a matrix file, then plan_route() on it."""
    weights = load_weight_matrix(path)
    return plan_route(weights, request)


def format_path(path: List[int]) -> str:
    """Render a path as space-prefixed node indices: ' 0 1 3'."""
    return "".join(f" {node}" for node in path)
