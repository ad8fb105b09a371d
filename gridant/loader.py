"""
gridant/loader.py
─────────────────
Text file → biased weight matrix.

File format
───────────
A full adjacency matrix. Columns separated by whitespace, rows by newlines.
Every entry parses as a float and must be ≥ 0. Blank lines are skipped.

    0 3 0 0
    3 0 1 0
    0 1 0 7
    0 0 7 0

The load bias
─────────────
Every entry is incremented by 1 on load so that no edge is free. The
colony's reported `length` subtracts n again; `path_cost` subtracts exactly
one per edge walked. See RouteResult.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

LOAD_BIAS: float = 1.0
"""Added to every weight on load to forbid zero-cost edges."""


class MatrixLoadError(Exception):
    """
    Raised when a weight matrix cannot be read or is malformed.

    The run never starts on a MatrixLoadError; no partial state exists.

    Attributes:
        source: Path or label of the input that failed.
        reason: Human-readable cause.
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load weight matrix from {source}: {reason}")


def parse_weight_matrix(text: str, source: str = "<string>") -> NDArray[np.float64]:
    """
    Parse matrix text and apply the load bias.

    Args:
        text:   Whitespace/newline separated matrix.
        source: Label used in error messages.

    Returns:
        float64 array of shape (n, n), every entry ≥ LOAD_BIAS.

    Raises:
        MatrixLoadError: empty input, non-numeric token, ragged or
                         non-square rows, negative or non-finite entries.
    """
    rows: List[List[float]] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        tokens = line.split()
        if not tokens:
            continue
        try:
            rows.append([float(token) for token in tokens])
        except ValueError as exc:
            raise MatrixLoadError(source, f"line {line_no}: {exc}") from exc

    if not rows:
        raise MatrixLoadError(source, "no rows found")

    n = len(rows)
    for row_no, row in enumerate(rows, start=1):
        if len(row) != n:
            raise MatrixLoadError(
                source,
                f"row {row_no} has {len(row)} columns, expected {n} (matrix must be square)",
            )

    matrix = np.array(rows, dtype=np.float64)
    if not np.all(np.isfinite(matrix)):
        raise MatrixLoadError(source, "matrix contains non-finite values")
    if np.any(matrix < 0.0):
        raise MatrixLoadError(source, "matrix contains negative weights")

    return matrix + LOAD_BIAS


def load_weight_matrix(path: Union[str, Path]) -> NDArray[np.float64]:
    """
    Read and parse a matrix file.

    Raises:
        MatrixLoadError: the file cannot be opened or decoded, or its
                         content is malformed (see parse_weight_matrix).
    """
    path = Path(path)
    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise MatrixLoadError(str(path), str(exc)) from exc

    matrix = parse_weight_matrix(text, source=str(path))
    logger.debug("Loaded %d×%d weight matrix from %s", *matrix.shape, path)
    return matrix
