"""Uniform sampling over half-open ranges."""

from __future__ import annotations

import random


def rand(
    minimum: float | None = None,
    maximum: float | None = None,
    *,
    rng: random.Random | None = None,
) -> float:
    """Return a uniform float in ``[minimum, maximum)``.

    With one argument the range is ``[0, minimum)``; with none it is ``[0, 1)``.
    """
    if minimum is None:
        minimum, maximum = 0.0, 1.0
    elif maximum is None:
        minimum, maximum = 0.0, minimum
    source = rng if rng is not None else random
    return float(minimum) + source.random() * (float(maximum) - float(minimum))


def make_rng(seed: int | None) -> random.Random:
    """Seeded generator for reproducible scenes; OS entropy when ``seed`` is None."""
    return random.Random(seed)


__all__ = ["make_rng", "rand"]
