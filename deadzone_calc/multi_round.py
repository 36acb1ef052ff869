"""Cumulative damage over several identical rounds."""
from __future__ import annotations

from typing import Mapping, Tuple
import logging

import numpy as np

from .errors import InvalidArgumentError
from .probability import ProbMap

logger = logging.getLogger(__name__)


def _to_dense(dist: Mapping[int, float]) -> Tuple[int, np.ndarray]:
    lo = min(dist)
    hi = max(dist)
    dense = np.zeros(hi - lo + 1, dtype=float)
    for key, prob in dist.items():
        dense[key - lo] += prob
    return lo, dense


def calc_multi_round_damage(single_round: Mapping[int, float], num_rounds: int) -> ProbMap:
    """R-fold self-convolution of a single-round damage distribution.

    ``num_rounds == 1`` returns a copy of the input unchanged.  Keys are
    signed damage, so the result spans ``R * min`` to ``R * max``.
    """
    if num_rounds < 1:
        raise InvalidArgumentError(f"num_rounds must be >= 1, got {num_rounds}")
    if num_rounds == 1 or not single_round:
        return dict(single_round)

    lo, base = _to_dense(single_round)
    acc = base
    for _ in range(num_rounds - 1):
        acc = np.convolve(acc, base)
    offset = lo * num_rounds
    logger.debug("extended %d-key distribution over %d rounds", len(single_round), num_rounds)
    return {offset + i: float(p) for i, p in enumerate(acc) if p > 0.0}


__all__ = ["calc_multi_round_damage"]
