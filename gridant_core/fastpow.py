"""
gridant_core/fastpow.py
───────────────────────
Cheap exponentiation for the ant's desirability formula.

Why approximate?
────────────────
Every step of every ant evaluates τ^α × (1/w)^β for up to four neighbours.
With 80 ants × 99 steps × 4 neighbours × thousands of iterations, the power
function is the hottest call in the program. The output only feeds a
roulette wheel, so what matters is the RANKING of neighbours, not the exact
value. A 10–25% relative error does not change which edge is preferred.

The bit trick
─────────────
For a positive IEEE-754 double, the high 32 bits are (roughly) a fixed-point
encoding of log2(a):

    hi(a) ≈ 2^20 × (log2(a) + 1023)

So a^b can be approximated by scaling the high word around the encoding of
1.0 and reinterpreting the bits:

    x = hi(a)
    y = b × (x − POW_MAGIC) + POW_MAGIC
    a^b ≈ double with high word y, low word 0

POW_MAGIC is slightly below 0x3FF00000 (the high word of 1.0) to centre the
error of the linear log approximation. See Martin Ankerl's
"Optimized pow() approximation for Java and C/C++" (2007).

Accuracy
────────
  • exponent = 1  → exact up to the dropped low word (≈1e-6 relative).
  • exponent = 5  → typically within ±20%.
  • Monotone in the base for any fixed positive exponent.
  • Non-positive bases return 0.0 (a zero trail has zero desirability).

Strategy boundary
─────────────────
Both approx_pow and exact_pow satisfy PowerFunction. The ant receives one as
a parameter; swapping accuracy for speed never touches the decision rule.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

POW_MAGIC: int = 1072632447
"""Centre of the linear log2 approximation (just below hi(1.0) = 1072693248)."""

_INT32_MIN: int = -(2 ** 31)
_INT32_MAX: int = 2 ** 31 - 1

PowerFunction = Callable[[ArrayLike, float], NDArray[np.float64]]
"""(base, exponent) → base ** exponent, elementwise, float64."""


def approx_pow(base: ArrayLike, exponent: float) -> NDArray[np.float64]:
    """
    Approximate base ** exponent using the double's bit layout.

    Args:
        base:     Scalar or array of float64 bases. Non-positive → 0.0.
        exponent: Scalar exponent.

    Returns:
        float64 array with the same shape as np.atleast_1d(base).

    NumPy operations:
        .view(np.int64) >> 32   reinterpret bits, keep the high word.
        np.trunc + np.clip      mirror a saturating (int) cast.
        (y << 32).view(float64) rebuild a double from the new high word.
    """
    values = np.ascontiguousarray(np.atleast_1d(base), dtype=np.float64)
    high = (values.view(np.int64) >> 32).astype(np.float64)

    scaled = exponent * (high - POW_MAGIC) + POW_MAGIC
    y = np.clip(np.trunc(scaled), _INT32_MIN, _INT32_MAX).astype(np.int64)
    # A negative high word decodes to a negative double; desirability can't be.
    result = np.maximum(np.left_shift(y, 32).view(np.float64), 0.0)

    return np.where(values > 0.0, result, 0.0)


def exact_pow(base: ArrayLike, exponent: float) -> NDArray[np.float64]:
    """Exact base ** exponent via numpy.power; non-positive bases → 0.0."""
    values = np.atleast_1d(np.asarray(base, dtype=np.float64))
    safe = np.where(values > 0.0, values, 1.0)
    return np.where(values > 0.0, np.power(safe, exponent), 0.0)


def resolve_power(exact: bool) -> PowerFunction:
    """Pick the power strategy for a run."""
    return exact_pow if exact else approx_pow
