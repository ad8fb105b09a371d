"""
gridant_core — ant colony route search on a weighted grid.

Public API:
    Colony        — run the colony, returns a RouteResult
    GridTopology  — node index → up to four grid neighbours
    TrailMatrix   — the colony's trail (pheromone) memory
    approx_pow / exact_pow — power strategies for the desirability formula

Usage:
    from gridant_core import Colony

    colony = Colony(weights, start_node=55, goal_node=22)
    result = colony.run()
    if not result.reached_goal:
        ...                       # caller's responsibility
"""

from gridant_core.colony import Colony, validate_weights
from gridant_core.fastpow import approx_pow, exact_pow
from gridant_core.pheromone import TrailMatrix
from gridant_core.topology import Direction, GridTopology

__all__ = [
    "Colony",
    "validate_weights",
    "approx_pow",
    "exact_pow",
    "TrailMatrix",
    "Direction",
    "GridTopology",
]
