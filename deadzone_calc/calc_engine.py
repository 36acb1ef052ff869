"""Damage distribution for one attacker/defender exchange.

:func:`calc_dmg_probs` is the entry point.  Both sides roll their dice pools
(Monte Carlo, see :mod:`deadzone_calc.simulators.dice`); the difference in
successes is the raw damage, positive when the attacker wins the exchange and
negative when the defender fights back.  Raw damage is then reduced by the
receiver's shield dice (exact binomial), by armor net of the giver's armor
piercing, and finally increased by the giver's toxic damage.
"""
from __future__ import annotations

from typing import Optional
import logging
import random

from .errors import InvalidArgumentError
from .models import Combatant, CombatOptions
from .multi_round import calc_multi_round_damage
from .probability import ProbMap, add_to_map_value, binomial_pmf, check_mass
from .simulators.dice import make_success_probs

logger = logging.getLogger(__name__)

# Chance that a single shield die blocks one point of damage (3 faces of 8).
SINGLE_SHIELD_PROB = 0.375


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def calc_dmg_probs(
    attacker: Combatant,
    defender: Combatant,
    options: Optional[CombatOptions] = None,
    rng: Optional[random.Random] = None,
    shield_prob: float = SINGLE_SHIELD_PROB,
) -> ProbMap:
    """Map of signed damage -> probability.

    ``rng`` overrides the generator built from ``options.seed``.
    """
    options = options or CombatOptions()
    attacker.validate()
    defender.validate()
    options.validate()
    if not 0.0 <= shield_prob <= 1.0:
        raise InvalidArgumentError(f"shield_prob must be in [0, 1], got {shield_prob}")
    rng = rng or random.Random(options.seed)

    atk_success_probs = make_success_probs(attacker, options.num_simulations, rng)
    def_success_probs = make_success_probs(defender, options.num_simulations, rng)
    dmg_probs: ProbMap = {}

    for atk_successes, atk_prob in atk_success_probs.items():
        for def_successes, def_prob in def_success_probs.items():
            orig_dmg = atk_successes - def_successes
            if not options.attacker_can_be_damaged:
                orig_dmg = max(0, orig_dmg)

            giver, receiver = (attacker, defender) if orig_dmg >= 0 else (defender, attacker)
            net_armor = max(0, receiver.armor - giver.ap)
            num_shield_dice = 0 if orig_dmg == 0 else receiver.num_shield_dice
            atk_and_def_prob = atk_prob * def_prob

            for shield_successes in range(num_shield_dice + 1):
                shield_p = (
                    1.0
                    if num_shield_dice == 0
                    else binomial_pmf(num_shield_dice, shield_successes, shield_prob)
                )
                post_shield = max(0, abs(orig_dmg) - shield_successes)
                post_armor = max(0, post_shield - net_armor)
                post_toxic = post_armor + giver.toxic_dmg
                add_to_map_value(
                    dmg_probs, _sign(orig_dmg) * post_toxic, atk_and_def_prob * shield_p
                )

    check_mass(dmg_probs)
    if options.num_rounds > 1:
        dmg_probs = calc_multi_round_damage(dmg_probs, options.num_rounds)
    return dmg_probs


__all__ = ["SINGLE_SHIELD_PROB", "calc_dmg_probs"]
