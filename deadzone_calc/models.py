"""Combatant profiles and combat options.

Both types are plain frozen dataclasses.  They are read-only for the duration
of one damage calculation; :meth:`validate` enforces the preconditions the
engine relies on and :meth:`from_dict` accepts either snake_case keys or the
camelCase keys used by saved presets (``numDice``, ``diceStat`` ...).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

from .errors import InvalidArgumentError

PIP_LO = 1
PIP_HI = 8

_CAMEL_KEYS = {
    "numDice": "num_dice",
    "diceStat": "dice_stat",
    "numRerolls": "num_rerolls",
    "numShieldDice": "num_shield_dice",
    "toxicDmg": "toxic_dmg",
    "numSimulations": "num_simulations",
    "numRounds": "num_rounds",
    "attackerCanBeDamaged": "attacker_can_be_damaged",
}


def _normalise_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in (data or {}).items():
        key = _CAMEL_KEYS.get(k, k).replace("-", "_")
        out[key] = v
    return out


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "on", "✓")
    return bool(value)


def _require_non_negative(owner: str, name: str, value: int) -> None:
    if value < 0:
        raise InvalidArgumentError(f"{owner}.{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class Combatant:
    """Dice and defence profile for one side of an exchange."""

    num_dice: int = 1
    dice_stat: int = 4
    num_rerolls: int = 0
    armor: int = 0
    ap: int = 0
    num_shield_dice: int = 0
    toxic_dmg: int = 0
    name: str = ""

    def validate(self) -> "Combatant":
        owner = self.name or "combatant"
        for attr in ("num_dice", "num_rerolls", "armor", "ap", "num_shield_dice", "toxic_dmg"):
            _require_non_negative(owner, attr, getattr(self, attr))
        if not PIP_LO <= self.dice_stat <= PIP_HI:
            raise InvalidArgumentError(
                f"{owner}.dice_stat must be in [{PIP_LO}, {PIP_HI}], got {self.dice_stat}"
            )
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Combatant":
        d = _normalise_keys(data)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown combatant fields: {', '.join(unknown)}")
        try:
            return cls(
                num_dice=int(d.get("num_dice", 1)),
                dice_stat=int(d.get("dice_stat", 4)),
                num_rerolls=int(d.get("num_rerolls", 0)),
                armor=int(d.get("armor", 0)),
                ap=int(d.get("ap", 0)),
                num_shield_dice=int(d.get("num_shield_dice", 0)),
                toxic_dmg=int(d.get("toxic_dmg", 0)),
                name=str(d.get("name", "")),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Invalid combatant value: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CombatOptions:
    num_simulations: int = 1000
    num_rounds: int = 1
    attacker_can_be_damaged: bool = True
    seed: int | None = None

    def validate(self) -> "CombatOptions":
        if self.num_simulations <= 0:
            raise InvalidArgumentError(
                f"num_simulations must be > 0, got {self.num_simulations}"
            )
        if self.num_rounds < 1:
            raise InvalidArgumentError(f"num_rounds must be >= 1, got {self.num_rounds}")
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CombatOptions":
        d = _normalise_keys(data)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown option fields: {', '.join(unknown)}")
        seed = d.get("seed")
        try:
            return cls(
                num_simulations=int(float(d.get("num_simulations", 1000))),
                num_rounds=int(d.get("num_rounds", 1)),
                attacker_can_be_damaged=_coerce_bool(d.get("attacker_can_be_damaged", True)),
                seed=None if seed is None else int(seed),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Invalid option value: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Choice lists offered by the option controls of the interactive front end.
SIMULATION_CHOICES = [1, 100, 1_000, 10_000, 100_000, 1_000_000]
ROUND_CHOICES = list(range(1, 10))

__all__ = [
    "Combatant",
    "CombatOptions",
    "PIP_LO",
    "PIP_HI",
    "SIMULATION_CHOICES",
    "ROUND_CHOICES",
]
