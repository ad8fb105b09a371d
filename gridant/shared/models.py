"""
gridant/shared/models.py
────────────────────────
The single source of truth for every data structure that crosses the
boundary between the colony engine and its callers.

Reading guide
-------------
Read top-to-bottom.

  ColonyParams  → the algorithm knobs. Immutable for the length of a run.
  RouteRequest  → "find me a route from A to B with these knobs".
  RouteResult   → what the colony hands back: best path plus its costs.

The weight matrix itself is NOT a model. It is a plain float64 numpy array
(n × n) — wrapping it in pydantic would copy and re-validate 10 000 floats
for a 100-node grid on every call for no benefit.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 1: ALGORITHM PARAMETERS
# ─────────────────────────────────────────────────────────────────────────────

class ColonyParams(BaseModel):
    """
    The tunable constants of one colony run.

    Defaults follow Dorigo's Ant System paper, with a random-jump
    probability added on top.

    Fields:
        c            → Initial trail on every directed edge. Also the value a
                       dead ant's path is reset to.
        alpha        → Trail exponent. τ^alpha: how much the colony's
                       memory drives each step.
        beta         → Cost-preference exponent. (1/w)^beta: how strongly an
                       ant prefers the cheap edge in front of it.
                       beta=5 makes a 2× cheaper edge 32× more attractive.
        evaporation  → Multiplicative decay applied to every trail value
                       once per iteration. 0.5 halves the trail.
                       Note: this is the RETAINED fraction, not the lost one.
        q            → Deposit numerator. Each ant adds q / path_length to
                       every edge it walked.
        ant_factor   → Population size = int(n_nodes × ant_factor).
        pr           → Probability that an ant ignores trail and cost and
                       jumps to a uniformly random unvisited neighbour.
        iterations   → Fixed iteration budget. No early exit.
        grid_width   → Width of the implicit grid the node indices live on.
        seed         → Seed for the run's random generator. None = fresh
                       entropy on every run.
        exact_pow    → Use numpy.power instead of the bit-trick
                       approximation in the desirability formula.
    """
    model_config = ConfigDict(frozen=True)

    c: float = Field(1.0, gt=0, description="Initial trail value on every edge")
    alpha: float = Field(1.0, ge=0, description="Trail preference exponent")
    beta: float = Field(5.0, ge=0, description="Cost preference exponent")
    evaporation: float = Field(
        0.5, ge=0.0, le=1.0,
        description="Fraction of trail retained after each iteration"
    )
    q: float = Field(500.0, gt=0, description="Trail deposit numerator")
    ant_factor: float = Field(
        0.8, gt=0,
        description="Number of ants = int(n_nodes * ant_factor), at least 1"
    )
    pr: float = Field(
        0.3, ge=0.0, le=1.0,
        description="Probability of a purely random move to an unvisited neighbour"
    )
    iterations: int = Field(1000, ge=1, description="Fixed iteration budget")
    grid_width: int = Field(10, ge=1, description="Width of the node grid")
    seed: Optional[int] = Field(None, description="Random seed. None = nondeterministic.")
    exact_pow: bool = Field(
        False,
        description="Use exact exponentiation instead of the fast approximation"
    )


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 2: REQUEST / RESULT
# ─────────────────────────────────────────────────────────────────────────────

class RouteRequest(BaseModel):
    """
    A request to route from start_node to goal_node.

    Node indices are range-checked against the matrix by the colony, not
    here — the model does not know n.
    """
    start_node: int = Field(0, ge=0, description="Index of the node every ant starts on")
    goal_node: int = Field(1, ge=0, description="Index of the node ants try to reach")
    params: ColonyParams = Field(default_factory=ColonyParams)


class RouteResult(BaseModel):
    """
    The best path a colony run produced.

    Three costs are reported because the loader biases every weight by +1:

        raw_length → 1 + Σ biased edge weights. This is what the colony
                     compares internally and what drives trail deposits.
        length     → raw_length − n_nodes. How the reference program
                     reports cost. Exact only when the path has n−1 edges.
        path_cost  → raw_length − 1 − n_edges. The true sum of the
                     unbiased edge weights along the path.

    The colony never guarantees the goal is reached. A run in which no ant
    ever arrives still returns its cheapest partial path; check
    reached_goal before trusting the route.
    """
    path: List[int] = Field(..., description="Node indices, path[0] is the start node")
    length: float = Field(..., description="raw_length minus n_nodes")
    raw_length: float = Field(..., description="Biased length used for comparisons")
    path_cost: float = Field(..., description="Sum of unbiased edge weights along path")
    reached_goal: bool
    start_node: int
    goal_node: int
    n_nodes: int = Field(..., ge=1)
    n_ants: int = Field(..., ge=1)
    iterations: int = Field(..., ge=0)
    history: List[float] = Field(
        default_factory=list,
        description="Best raw_length after each iteration (non-increasing)"
    )
    elapsed_ms: float = Field(0.0, ge=0.0)

    @property
    def n_edges(self) -> int:
        """Number of edges walked along the best path."""
        return max(len(self.path) - 1, 0)
