"""L2 normalization for generated vectors."""

from __future__ import annotations

import math


def l2_norm(vec: list[float]) -> float:
    return math.sqrt(sum(x * x for x in vec))


def l2_normalize(vec: list[float]) -> list[float]:
    """
    Return a new unit-length vector. A zero vector is returned unchanged
    (divisor falls back to 1.0) rather than dividing by zero.
    """
    n = l2_norm(vec) or 1.0
    return [x / n for x in vec]
