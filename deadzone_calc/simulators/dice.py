"""Monte Carlo dice simulation for a single combatant.

Dice are exploding d8s: a die succeeds when its pip meets the combatant's dice
stat, and every natural 8 is rolled again and scored as an extra outcome.
After the pool is rolled, up to ``num_rerolls`` failed dice are rerolled once.
:func:`make_success_probs` turns repeated pool rolls into a success-count
distribution.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging
import random

from ..errors import ExplosionLimitError
from ..models import Combatant, PIP_HI, PIP_LO
from ..probability import ProbMap, add_to_map_value, normalize_map_values

logger = logging.getLogger(__name__)

# Chance of 200 consecutive 8s is 8**-200; hitting this means the RNG is broken.
MAX_EXPLOSIONS = 200


@dataclass(frozen=True)
class Sf:
    """Successes and failures from one roll."""

    s: int = 0
    f: int = 0

    def __add__(self, other: "Sf") -> "Sf":
        return Sf(self.s + other.s, self.f + other.f)


def roll_pip(rng: random.Random) -> int:
    return rng.randint(PIP_LO, PIP_HI)


def simulated_sf_from_single_roll(dice_stat: int, rng: random.Random) -> Sf:
    successes = 0
    failures = 0
    for _ in range(MAX_EXPLOSIONS):
        pip = roll_pip(rng)
        if pip >= dice_stat:
            successes += 1
        else:
            failures += 1
        if pip != PIP_HI:
            return Sf(successes, failures)
    raise ExplosionLimitError(f"die exploded more than {MAX_EXPLOSIONS} times in a row")


def _roll_pool(num_dice: int, dice_stat: int, rng: random.Random) -> Sf:
    sf = Sf()
    for _ in range(num_dice):
        sf = sf + simulated_sf_from_single_roll(dice_stat, rng)
    return sf


def simulated_num_successes_from_multi_roll(
    num_dice: int,
    dice_stat: int,
    num_rerolls: int = 0,
    rng: Optional[random.Random] = None,
) -> int:
    rng = rng or random.Random()
    first = _roll_pool(num_dice, dice_stat, rng)
    if num_rerolls == 0:
        return first.s
    # Rerolled dice can explode but never earn further rerolls.
    rerolled = _roll_pool(min(num_rerolls, first.f), dice_stat, rng)
    return first.s + rerolled.s


def make_success_probs(
    combatant: Combatant,
    num_simulations: int,
    rng: Optional[random.Random] = None,
) -> ProbMap:
    rng = rng or random.Random()
    success_counts: ProbMap = {}
    for _ in range(num_simulations):
        num_successes = simulated_num_successes_from_multi_roll(
            combatant.num_dice,
            combatant.dice_stat,
            combatant.num_rerolls,
            rng,
        )
        add_to_map_value(success_counts, num_successes, 1)
    normalize_map_values(success_counts, num_simulations)
    logger.debug(
        "simulated %d pools for %s: %d distinct success counts",
        num_simulations, combatant.name or "combatant", len(success_counts),
    )
    return success_counts


__all__ = [
    "Sf",
    "MAX_EXPLOSIONS",
    "roll_pip",
    "simulated_sf_from_single_roll",
    "simulated_num_successes_from_multi_roll",
    "make_success_probs",
]
