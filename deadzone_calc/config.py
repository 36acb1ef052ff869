from __future__ import annotations
from typing import Any, Dict, Iterable, Tuple
import os

import yaml

from .calc_engine import SINGLE_SHIELD_PROB
from .errors import InvalidArgumentError
from .models import Combatant, CombatOptions

DEFAULT_ENV_PREFIX = "DEADZONE_CALC__"


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_one(path: str) -> Dict[str, Any]:
    # YAML is a superset of JSON, so one parser covers both file kinds
    with open(path, "r", encoding="utf-8") as f:
        d = yaml.safe_load(f)
    if d is None:
        return {}
    if not isinstance(d, dict):
        raise InvalidArgumentError(f"Config file {path!r} must contain a mapping")
    return d


def load_configs(paths: Iterable[str] | None) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    for p in (paths or []):
        cfg = _deep_merge(cfg, _load_one(p))
    return cfg


def env_overrides(prefix: str = DEFAULT_ENV_PREFIX) -> Dict[str, Any]:
    # Nested via double underscores: DEADZONE_CALC__OPTIONS__NUM_SIMULATIONS=5000
    out: Dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith(prefix):
            continue
        parts = k[len(prefix):].split("__")
        cur = out
        for i, part in enumerate(parts):
            key = part.lower()
            if i == len(parts) - 1:
                cur[key] = _coerce(v)
            else:
                cur = cur.setdefault(key, {})
    return out


def _coerce(s: str) -> Any:
    t = s.strip().lower()
    if t in ("true", "false"):
        return t == "true"
    try:
        if "." in t or "e" in t:
            return float(t)
        return int(t)
    except ValueError:
        return s


def apply_cli_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    return _deep_merge(base, overrides or {})


def _side(cfg: Dict[str, Any], role: str) -> Combatant:
    data = dict(cfg.get(role) or {})
    data.setdefault("name", role)
    return Combatant.from_dict(data)


def build_scenario(cfg: Dict[str, Any]) -> Tuple[Combatant, Combatant, CombatOptions, float]:
    """Turn a merged config into the arguments of ``calc_dmg_probs``."""
    attacker = _side(cfg, "attacker")
    defender = _side(cfg, "defender")
    options = CombatOptions.from_dict(cfg.get("options") or {})
    engine = cfg.get("engine") or {}
    try:
        shield_prob = float(engine.get("shield_prob", SINGLE_SHIELD_PROB))
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid engine.shield_prob: {exc}") from exc
    return attacker, defender, options, shield_prob


__all__ = [
    "DEFAULT_ENV_PREFIX",
    "load_configs",
    "env_overrides",
    "apply_cli_overrides",
    "build_scenario",
    "_deep_merge",
]
