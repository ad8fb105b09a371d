"""
gridant_core/colony.py
──────────────────────
The Colony: orchestrates all ants across all iterations.

How the colony works
─────────────────────
  1. Creates a TrailMatrix at the constant c (the colony's long-term memory).
  2. For each iteration:
       a. spawn_ants()    — a fresh population, every ant on the start node.
       b. move_ants()     — lock-step: every live ant takes ONE step, then
                            the next tick starts. Ants that reach the goal
                            are complete; ants with nowhere to go die and
                            reset their own path's trail back to c.
       c. update_trails() — evaporate everything, then every ant (dead or
                            alive) deposits Q / path_length on its edges.
       d. best-tracker    — keep the cheapest path seen so far, complete
                            or not.
  3. After the budget: returns the best path across ALL iterations.

There is no early exit. The iteration count is the only termination rule.

Why lock-step?
  All ants read the same trail matrix during a tick. The only writes
  between ticks are dead-ant resets; the reinforcement write happens once,
  after every ant has stopped moving. That ordering is the phase barrier.

Cost bookkeeping
─────────────────
Every weight carries a +1 load bias (so no edge is free). The colony
compares raw lengths — 1 + Σ biased weights — and corrects only when it
builds the RouteResult. See RouteResult for the three reported costs.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from gridant.shared.models import ColonyParams, RouteResult
from gridant_core.ant import Ant
from gridant_core.fastpow import PowerFunction, resolve_power
from gridant_core.pheromone import TrailMatrix
from gridant_core.topology import GridTopology

logger = logging.getLogger(__name__)


def validate_weights(weights: ArrayLike) -> NDArray[np.float64]:
    """
    Coerce `weights` to a float64 matrix and check it is usable.

    Raises:
        ValueError: not 2-D, not square, empty, non-finite or negative.
    """
    matrix = np.asarray(weights, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Weight matrix must be square, got shape {matrix.shape}")
    if matrix.shape[0] == 0:
        raise ValueError("Weight matrix must not be empty.")
    if not np.all(np.isfinite(matrix)):
        raise ValueError("Weight matrix contains non-finite values.")
    if np.any(matrix < 0.0):
        raise ValueError("Weight matrix contains negative values.")
    return matrix


class Colony:
    """
    Runs the full ant colony and returns the best RouteResult.

    Usage:
        colony = Colony(weights, start_node=55, goal_node=22)
        result = colony.run()

    The step methods (spawn_ants, move_ants, update_trails) are public so a
    caller can drive single iterations and inspect `trails` in between.

    Attributes:
        trails       : TrailMatrix — created by reset(), None before.
        n_ants       : int         — population size per iteration.
        last_run_ms  : float       — duration of the last run() call.
    """

    def __init__(
        self,
        weights: ArrayLike,
        start_node: int,
        goal_node: int,
        params: Optional[ColonyParams] = None,
        topology: Optional[GridTopology] = None,
        power: Optional[PowerFunction] = None,
    ) -> None:
        """
        Args:
            weights:    n × n non-negative finite matrix, load bias applied.
            start_node: Node every ant starts on, in [0, n).
            goal_node:  Node ants try to reach, in [0, n).
            params:     Run parameters. Defaults to ColonyParams().
            topology:   Grid layout. Defaults to a params.grid_width-wide grid.
            power:      Power strategy. Defaults from params.exact_pow.

        Raises:
            ValueError: on a bad matrix, out-of-range nodes, or a topology
                        built for a different node count.
        """
        self._weights = validate_weights(weights)
        self._n_nodes = self._weights.shape[0]
        self._params = params or ColonyParams()

        for name, node in (("start_node", start_node), ("goal_node", goal_node)):
            if not 0 <= node < self._n_nodes:
                raise ValueError(
                    f"{name}={node} is outside [0, {self._n_nodes})"
                )
        self._start = start_node
        self._goal = goal_node

        if topology is None:
            topology = GridTopology(self._n_nodes, self._params.grid_width)
        elif topology.n_nodes != self._n_nodes:
            raise ValueError(
                f"Topology is for {topology.n_nodes} nodes, "
                f"weight matrix has {self._n_nodes}"
            )
        self._topology = topology
        self._power = power or resolve_power(self._params.exact_pow)

        n_ants = int(self._n_nodes * self._params.ant_factor)
        if n_ants < 1:
            logger.warning(
                "ant_factor=%.3f gives 0 ants for %d nodes; using 1 ant.",
                self._params.ant_factor, self._n_nodes,
            )
            n_ants = 1
        self.n_ants: int = n_ants

        self.trails: Optional[TrailMatrix] = None
        self._rng: np.random.Generator = np.random.default_rng(self._params.seed)
        self.last_run_ms: float = 0.0

    # ── Iteration steps ────────────────────────────────────────────────────────

    def reset(self) -> TrailMatrix:
        """Start a run: trail back to c, random generator reseeded."""
        self.trails = TrailMatrix(self._n_nodes, self._params.c)
        self._rng = np.random.default_rng(self._params.seed)
        return self.trails

    def spawn_ants(self) -> List[Ant]:
        """A fresh population, every ant on the start node."""
        ants = [Ant(self._start, self._topology) for _ in range(self.n_ants)]
        if self._start == self._goal:
            for ant in ants:
                ant.complete = True
        return ants

    def move_ants(self, ants: List[Ant]) -> None:
        """
        Advance every live ant one step per tick until all are complete.

        At most n − 1 ticks: a path that never revisits a node has at most
        n − 1 edges.
        """
        trails = self._require_trails()
        view = trails.read_view()

        for _tick in range(self._n_nodes - 1):
            active = [ant for ant in ants if not ant.complete]
            if not active:
                break

            for ant in active:
                chosen = ant.select_next(
                    view, self._weights, self._params, self._rng, self._power
                )
                if chosen is None:
                    ant.kill()
                    trails.reset_path(ant.path)
                    logger.debug(
                        "Ant died at node %d after %d steps; trail reset.",
                        ant.position, len(ant.path) - 1,
                    )
                    continue

                ant.visit(chosen)
                if chosen == self._goal:
                    ant.complete = True

    def update_trails(self, ants: List[Ant]) -> None:
        """Evaporate, then every ant deposits Q / path_length on its edges."""
        trails = self._require_trails()
        trails.evaporate(self._params.evaporation)
        for ant in ants:
            trails.deposit_path(ant.path, self._params.q / ant.path_length(self._weights))

    # ── Main loop ─────────────────────────────────────────────────────────────

    def run(self) -> RouteResult:
        """
        Execute the full iteration budget and return the best path found.

        Returns:
            RouteResult. reached_goal is False when no ant ever arrived; the
            path is then the cheapest partial path any ant walked.
        """
        start = time.perf_counter()
        self.reset()

        best_path: Optional[List[int]] = None
        best_length: float = float("inf")
        history: List[float] = []

        for iteration in range(self._params.iterations):
            ants = self.spawn_ants()
            self.move_ants(ants)
            self.update_trails(ants)

            for ant in ants:
                length = ant.path_length(self._weights)
                if best_path is None or length < best_length:
                    best_length = length
                    best_path = list(ant.path)
                    logger.debug(
                        "Iteration %d: new best raw length %.4f (%d edges)",
                        iteration, best_length, len(best_path) - 1,
                    )
            history.append(best_length)

        self.last_run_ms = (time.perf_counter() - start) * 1000.0

        if best_path is None:
            raise RuntimeError("Colony.run() finished without observing any ant.")
        n_edges = len(best_path) - 1
        return RouteResult(
            path=best_path,
            length=best_length - self._n_nodes,
            raw_length=best_length,
            path_cost=best_length - 1.0 - n_edges,
            reached_goal=best_path[-1] == self._goal,
            start_node=self._start,
            goal_node=self._goal,
            n_nodes=self._n_nodes,
            n_ants=self.n_ants,
            iterations=self._params.iterations,
            history=history,
            elapsed_ms=self.last_run_ms,
        )

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _require_trails(self) -> TrailMatrix:
        if self.trails is None:
            raise RuntimeError("Colony.reset() must be called before stepping.")
        return self.trails

    @property
    def topology(self) -> GridTopology:
        return self._topology

    @property
    def params(self) -> ColonyParams:
        return self._params

    @property
    def weights(self) -> NDArray[np.float64]:
        return self._weights

    def __repr__(self) -> str:
        return (
            f"Colony(nodes={self._n_nodes}, ants={self.n_ants}, "
            f"start={self._start}, goal={self._goal}, "
            f"last_run_ms={self.last_run_ms:.2f})"
        )
