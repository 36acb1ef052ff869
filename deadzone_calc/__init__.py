"""Deadzone calculator: damage probability distributions for dice combat exchanges."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"
__all__ = [
    "calc_dmg_probs",
    "SINGLE_SHIELD_PROB",
    "Combatant",
    "CombatOptions",
    "InvalidArgumentError",
    "make_success_probs",
    "calc_multi_round_damage",
    "binomial_pmf",
    "build_damage_report",
    "__version__",
]

_EXPORTS = {
    "calc_dmg_probs": ("calc_engine", "calc_dmg_probs"),
    "SINGLE_SHIELD_PROB": ("calc_engine", "SINGLE_SHIELD_PROB"),
    "Combatant": ("models", "Combatant"),
    "CombatOptions": ("models", "CombatOptions"),
    "InvalidArgumentError": ("errors", "InvalidArgumentError"),
    "make_success_probs": ("simulators.dice", "make_success_probs"),
    "calc_multi_round_damage": ("multi_round", "calc_multi_round_damage"),
    "binomial_pmf": ("probability", "binomial_pmf"),
    "build_damage_report": ("reports.damage_report", "build_damage_report"),
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module_name, attr_name = _EXPORTS[name]
        module = import_module(f".{module_name}", __name__)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(__all__)))
