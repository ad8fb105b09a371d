"""
gridant_core/topology.py
────────────────────────
Node index → grid neighbours.

Layout
──────
Nodes are laid out row-major on a grid of fixed width:

      col:  0   1   2  …  w-1
    row 0:  0   1   2  …  w-1
    row 1:  w  w+1 w+2 … 2w-1
    …

  row(i) = i // width
  col(i) = i %  width

Every node has at most four neighbours, probed in a fixed order:
LEFT, UP, RIGHT, DOWN. The order matters — the ant's roulette wheel and
its rounding fallback both walk neighbours in this order.

Boundaries
──────────
  LEFT   invalid when col(i) == 0
  UP     invalid when row(i) == 0
  RIGHT  invalid when col(i) == width - 1
  DOWN   invalid when row(i) == height - 1, or when i + width ≥ n_nodes

The last DOWN rule covers node counts that are not a multiple of the width:
the final row is short, and nodes above the missing cells simply have one
neighbour fewer. That is accepted behaviour, not an error.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import List, Optional

GRID_WIDTH: int = 10
"""Grid width used when the caller does not supply one."""


class Direction(IntEnum):
    """The four grid moves, in probe order."""
    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


class GridTopology:
    """
    Pure neighbour function over a width × height grid of n_nodes indices.

    Stateless after construction — safe to share between every ant of every
    iteration.
    """

    def __init__(
        self,
        n_nodes: int,
        width: int = GRID_WIDTH,
        height: Optional[int] = None,
    ) -> None:
        """
        Args:
            n_nodes: Number of nodes (matrix size). Must be ≥ 1.
            width:   Columns per row. Must be ≥ 1.
            height:  Rows. Defaults to ceil(n_nodes / width), the smallest
                     grid that holds every node.

        Raises:
            ValueError: on non-positive dimensions, or a grid too small to
                        hold n_nodes.
        """
        if n_nodes < 1:
            raise ValueError(f"GridTopology requires n_nodes≥1, got {n_nodes}")
        if width < 1:
            raise ValueError(f"GridTopology requires width≥1, got {width}")
        if height is None:
            height = math.ceil(n_nodes / width)
        if height < 1 or width * height < n_nodes:
            raise ValueError(
                f"A {width}×{height} grid cannot hold {n_nodes} nodes"
            )
        self._n_nodes = n_nodes
        self._width = width
        self._height = height

    def neighbor(self, node: int, direction: Direction) -> Optional[int]:
        """Return the neighbour of `node` in `direction`, or None at a boundary."""
        width = self._width
        if direction == Direction.LEFT:
            if node % width != 0:
                return node - 1
        elif direction == Direction.UP:
            if node >= width:
                return node - width
        elif direction == Direction.RIGHT:
            if (node + 1) % width != 0 and node + 1 < self._n_nodes:
                return node + 1
        elif direction == Direction.DOWN:
            below = node + width
            if node // width < self._height - 1 and below < self._n_nodes:
                return below
        return None

    def neighbors(self, node: int) -> List[int]:
        """All valid neighbours of `node`, in LEFT, UP, RIGHT, DOWN order."""
        result: List[int] = []
        for direction in Direction:
            j = self.neighbor(node, direction)
            if j is not None:
                result.append(j)
        return result

    def row(self, node: int) -> int:
        return node // self._width

    def col(self, node: int) -> int:
        return node % self._width

    @property
    def n_nodes(self) -> int:
        return self._n_nodes

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __repr__(self) -> str:
        return (
            f"GridTopology(n_nodes={self._n_nodes}, "
            f"width={self._width}, height={self._height})"
        )
