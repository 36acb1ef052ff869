import pytest

from deadzone_calc.errors import InvalidArgumentError
from deadzone_calc.models import Combatant, CombatOptions


def test_combatant_from_camel_case_preset():
    c = Combatant.from_dict({
        "numDice": 3, "diceStat": 5, "numRerolls": 1, "armor": 2,
        "ap": 1, "numShieldDice": 2, "toxicDmg": 1, "name": "Reaper",
    })
    assert c == Combatant(3, 5, 1, 2, 1, 2, 1, "Reaper")
    assert Combatant.from_dict(c.to_dict()) == c


def test_options_coercion():
    o = CombatOptions.from_dict({"numSimulations": "1e4", "attackerCanBeDamaged": "false", "seed": "3"})
    assert o == CombatOptions(num_simulations=10000, num_rounds=1, attacker_can_be_damaged=False, seed=3)


@pytest.mark.parametrize("kwargs", [{"dice_stat": 0}, {"dice_stat": 9}, {"armor": -1}, {"num_rerolls": -2}])
def test_combatant_validation(kwargs):
    with pytest.raises(InvalidArgumentError):
        Combatant(**kwargs).validate()


def test_bad_value_is_invalid_argument():
    with pytest.raises(InvalidArgumentError):
        Combatant.from_dict({"numDice": "lots"})
