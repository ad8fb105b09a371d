"""
gridant_core/pheromone.py
─────────────────────────
The trail matrix: the colony's shared, persistent memory.

What is the trail?
──────────────────
Ants deposit trail on the edges they walk. Shorter paths earn larger
deposits, so over many iterations cheap routes accumulate trail and attract
more ants — without any ant having a global view of the grid.

  τ[i][j] = trail on the directed edge i → j.

Three forces act on the matrix:
  1. Evaporation — global forgetting. Every value is multiplied by the
                   retained fraction once per iteration.
  2. Deposit     — positive reinforcement. Every ant adds Q / path_length
                   to each edge it walked.
  3. Reset       — dead-end penalty. An ant that gets stuck erases the
                   reinforcement on its own path by resetting every edge
                   back to the initial value c.

Matrix layout
─────────────
  Shape : (n_nodes, n_nodes), float64.
  Most cells are never touched — an ant can only move between grid
  neighbours — but a dense array keeps indexing O(1) and the evaporation
  step a single vectorised multiply.

Phase barrier
─────────────
The matrix is owned by the Colony. Ants never hold a writeable reference:
they receive read_view(), a numpy view with writeable=False. Writes happen
only through evaporate(), deposit_path() and reset_path(), all called by
the colony between ant moves. Any attempt by an ant to write through its
view raises ValueError from numpy.

Invariant: no value is ever negative. Evaporation multiplies by a factor in
[0, 1]; deposits are non-negative; resets write c > 0.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray


class TrailMatrix:
    """
    A 2D numpy array τ[n_nodes][n_nodes] of trail levels.

    Used by:
        Ant.select_next()  → reads read_view() through the desirability formula.
        Colony.run()       → calls reset_path(), evaporate(), deposit_path().
        Tests              → call snapshot() to inspect internal state.
    """

    def __init__(self, n_nodes: int, initial: float) -> None:
        """
        Initialise a uniform trail matrix.

        Args:
            n_nodes: Matrix size. Must be ≥ 1.
            initial: The constant c every edge starts at. Must be > 0.

        Raises:
            ValueError: on a non-positive size or initial value.
        """
        if n_nodes < 1:
            raise ValueError(f"TrailMatrix requires n_nodes≥1, got {n_nodes}")
        if initial <= 0.0:
            raise ValueError(f"TrailMatrix requires initial>0, got {initial}")
        self._n_nodes = n_nodes
        self._initial = float(initial)
        self._matrix: NDArray[np.float64] = np.full(
            (n_nodes, n_nodes), self._initial, dtype=np.float64
        )
        self._view: NDArray[np.float64] = self._matrix.view()
        self._view.flags.writeable = False

    # ── Core operations ────────────────────────────────────────────────────────

    def evaporate(self, retained: float) -> None:
        """
        Multiply every cell by `retained` in-place.

        Args:
            retained: Fraction kept, in [0, 1]. 0.5 halves every value.

        Raises:
            ValueError: if retained is outside [0, 1] — a factor above 1
                        would grow the trail, a negative one would flip it.
        """
        if not 0.0 <= retained <= 1.0:
            raise ValueError(f"Evaporation factor must be in [0, 1], got {retained}")
        self._matrix *= retained

    def deposit_path(self, path: Sequence[int], amount: float) -> None:
        """
        Add `amount` to every edge path[k] → path[k+1].

        Guards:
            amount ≤ 0 → skip. A negative deposit would break the
            non-negativity invariant.
        """
        if amount <= 0.0 or len(path) < 2:
            return
        rows = np.asarray(path[:-1], dtype=np.intp)
        cols = np.asarray(path[1:], dtype=np.intp)
        # Ants never revisit a node, so no edge repeats within one path.
        self._matrix[rows, cols] += amount

    def reset_path(self, path: Sequence[int]) -> None:
        """Set every edge path[k] → path[k+1] back to the initial value c."""
        if len(path) < 2:
            return
        rows = np.asarray(path[:-1], dtype=np.intp)
        cols = np.asarray(path[1:], dtype=np.intp)
        self._matrix[rows, cols] = self._initial

    def read_view(self) -> NDArray[np.float64]:
        """
        Return the live matrix as a NON-WRITEABLE view.

        Ants read current values through it without copying; writes through
        the view raise ValueError.
        """
        return self._view

    def get(self, i: int, j: int) -> float:
        return float(self._matrix[i, j])

    # ── Inspection & testing ───────────────────────────────────────────────────

    def snapshot(self) -> NDArray[np.float64]:
        """Return a deep copy of the current matrix state."""
        return self._matrix.copy()

    # ── Properties ────────────────────────────────────────────────────────────

    @property
    def shape(self) -> tuple[int, int]:
        return (self._n_nodes, self._n_nodes)

    @property
    def n_nodes(self) -> int:
        return self._n_nodes

    @property
    def initial(self) -> float:
        """The constant c the matrix started at."""
        return self._initial

    def __repr__(self) -> str:
        return (
            f"TrailMatrix(n_nodes={self._n_nodes}, "
            f"min={self._matrix.min():.4f}, max={self._matrix.max():.4f}, "
            f"mean={self._matrix.mean():.4f})"
        )
