"""Helpers for sparse integer -> probability mappings."""
from __future__ import annotations

from typing import Dict, List, MutableMapping, Mapping, Tuple
import logging
import math

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

ProbMap = Dict[int, float]

MASS_TOLERANCE = 1e-6


def add_to_map_value(mapping: MutableMapping[int, float], key: int, amount: float) -> None:
    mapping[key] = mapping.get(key, 0) + amount


def normalize_map_values(mapping: MutableMapping[int, float], divisor: float) -> None:
    if divisor == 0:
        raise InvalidArgumentError("Cannot normalise a probability map by zero")
    for key in mapping:
        mapping[key] = mapping[key] / divisor


def binomial_pmf(n: int, k: int, p: float) -> float:
    """P(exactly ``k`` successes in ``n`` Bernoulli(``p``) trials).

    The binomial coefficient is an exact integer, so only the two power terms
    are floating point; this stays accurate for pools far larger than any dice
    count the calculator sees.
    """
    if n < 0 or k < 0 or k > n:
        raise InvalidArgumentError(f"binomial_pmf needs 0 <= k <= n, got n={n}, k={k}")
    if not 0.0 <= p <= 1.0:
        raise InvalidArgumentError(f"binomial_pmf needs 0 <= p <= 1, got p={p}")
    if p == 0.0:
        return 1.0 if k == 0 else 0.0
    if p == 1.0:
        return 1.0 if k == n else 0.0
    return math.comb(n, k) * (p ** k) * ((1.0 - p) ** (n - k))


def total_mass(mapping: Mapping[int, float]) -> float:
    return math.fsum(mapping.values())


def check_mass(mapping: Mapping[int, float], tol: float = MASS_TOLERANCE) -> bool:
    """Return True when the map sums to 1 within ``tol``; log a warning otherwise."""
    mass = total_mass(mapping)
    if abs(mass - 1.0) > tol:
        logger.warning("probability mass drifted to %.9f (tolerance %g)", mass, tol)
        return False
    return True


def expected_value(mapping: Mapping[int, float]) -> float:
    return math.fsum(k * v for k, v in mapping.items())


def sorted_items(mapping: Mapping[int, float]) -> List[Tuple[int, float]]:
    return sorted(mapping.items())


def cumulative_at_least(mapping: Mapping[int, float]) -> ProbMap:
    """P(X >= k) for every key ``k`` in the map."""
    out: ProbMap = {}
    running = 0.0
    for key, prob in sorted(mapping.items(), reverse=True):
        running += prob
        out[key] = running
    return out


__all__ = [
    "ProbMap",
    "MASS_TOLERANCE",
    "add_to_map_value",
    "normalize_map_values",
    "binomial_pmf",
    "total_mass",
    "check_mass",
    "expected_value",
    "sorted_items",
    "cumulative_at_least",
]
