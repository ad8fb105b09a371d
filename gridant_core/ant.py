"""
gridant_core/ant.py
───────────────────
One ant: walks the grid from the start node, one step per colony tick.

What does an ant do?
─────────────────────
An ant is one independent, stochastic attempt at a route. At each tick it
looks at the (at most four) grid neighbours of its current node, drops the
ones it has already visited, and picks one of the rest — not always the
best, but more likely the better ones. 80 ants per iteration explore
slightly different routes; the trail matrix learns from all of them.

The two inputs to every decision
──────────────────────────────────
1. Trail (τ)  — what did previous ants learn?
   Read from the colony's TrailMatrix through a read-only view.

2. Edge cost (w) — what does the map say right now?
   η = 1 / w. The weight matrix is fixed for the whole run.

The selection rule
───────────────────
  a. With probability pr: jump to a uniformly random unvisited neighbour.
     If there is none, fall through to (b) instead of giving up.
  b. P(i → j) = τ[i][j]^α × η[i][j]^β / Σ_k(τ[i][k]^α × η[i][k]^β)
     over the unvisited neighbours k of i. Σ = 0 → no move.
  c. Roulette wheel: draw r ∈ [0, 1), walk neighbours in LEFT, UP, RIGHT,
     DOWN order accumulating probability, take the first with
     cumulative ≥ r.
  d. Rounding fallback: if the wheel overshoots (cumsum[-1] < r by a
     rounding hair), take the first unvisited neighbour.
  e. No unvisited neighbour at all → None. The colony kills the ant.

Lifecycle
─────────
The ant is single-use: the colony creates a fresh population every
iteration and discards it after the trail update and best-tracking.
"""

from __future__ import annotations

from typing import List, Optional, Set

import numpy as np
from numpy.typing import NDArray

from gridant.shared.models import ColonyParams
from gridant_core.fastpow import PowerFunction, approx_pow
from gridant_core.topology import GridTopology

ETA_EPSILON: float = 1e-9
"""Floor on edge weights inside η = 1 / w.
Loaded weights are ≥ 1 after the load bias, but a caller may hand the
colony an unbiased matrix containing zeros.
"""


class Ant:
    """
    Builds one path from the start node using trail + edge cost.

    Attributes:
        path     : List[int] — nodes reached so far, path[0] is the start.
        visited  : Set[int]  — same nodes, for O(1) membership tests.
        dead     : bool      — True once the ant hit a dead end.
        complete : bool      — True once the ant reached the goal OR died.
    """

    def __init__(self, start_node: int, topology: GridTopology) -> None:
        self._topology = topology
        self.path: List[int] = []
        self.visited: Set[int] = set()
        self.dead: bool = False
        self.complete: bool = False
        self.visit(start_node)

    # ── State transitions ──────────────────────────────────────────────────────

    def visit(self, node: int) -> None:
        """Append `node` to the path and mark it visited."""
        self.path.append(node)
        self.visited.add(node)

    def kill(self) -> None:
        """Mark the ant dead. Dead ants are also complete: they stop moving."""
        self.dead = True
        self.complete = True

    # ── Node selection ─────────────────────────────────────────────────────────

    def candidates(self) -> List[int]:
        """Unvisited grid neighbours of the current node, in probe order."""
        return [
            j for j in self._topology.neighbors(self.position)
            if j not in self.visited
        ]

    def select_next(
        self,
        trails: NDArray[np.float64],
        weights: NDArray[np.float64],
        params: ColonyParams,
        rng: np.random.Generator,
        power: PowerFunction = approx_pow,
    ) -> Optional[int]:
        """
        Choose the next node, or None if the ant is stuck.

        Args:
            trails:  Read-only view of the colony's trail matrix.
            weights: The (biased) weight matrix.
            params:  Run parameters; alpha, beta and pr are read here.
            rng:     The run's random generator. Two draws per call at most
                     (one for the jump test, one for the jump or the wheel).
            power:   Power strategy used for τ^α and η^β.

        Returns:
            int: chosen neighbour, or None when no unvisited neighbour
            exists or every neighbour has zero desirability.
        """
        candidates = self.candidates()

        # (a) occasional purely random move
        if rng.random() < params.pr and candidates:
            return candidates[int(rng.integers(len(candidates)))]

        if not candidates:
            return None

        # (b) desirability over unvisited neighbours
        i = self.position
        tau = trails[i, candidates]
        eta = 1.0 / np.maximum(weights[i, candidates], ETA_EPSILON)
        numerators = power(tau, params.alpha) * power(eta, params.beta)
        total = float(numerators.sum())

        if not total > 0.0:
            return None

        probabilities = numerators / total

        # (c) roulette wheel: first index with cumsum ≥ r
        cumsum = np.cumsum(probabilities)
        chosen = int(np.searchsorted(cumsum, rng.random()))
        if chosen < len(candidates):
            return candidates[chosen]

        # (d) rounding fallback
        return candidates[0]

    # ── Results ───────────────────────────────────────────────────────────────

    def path_length(self, weights: NDArray[np.float64]) -> float:
        """
        1 + Σ weights along the path.

        The base of 1 keeps a zero-edge path (start == goal) from dividing
        by zero in the deposit Q / length.
        """
        if len(self.path) < 2:
            return 1.0
        rows = np.asarray(self.path[:-1], dtype=np.intp)
        cols = np.asarray(self.path[1:], dtype=np.intp)
        return 1.0 + float(weights[rows, cols].sum())

    @property
    def position(self) -> int:
        """The node the ant is standing on."""
        return self.path[-1]

    @property
    def tour(self) -> List[Optional[int]]:
        """The path padded to n_nodes slots; unreached slots are None."""
        padding = self._topology.n_nodes - len(self.path)
        return list(self.path) + [None] * padding

    def __repr__(self) -> str:
        return (
            f"Ant(at={self.position}, steps={len(self.path) - 1}, "
            f"dead={self.dead}, complete={self.complete})"
        )
