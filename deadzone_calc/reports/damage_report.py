from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping
from datetime import datetime, timezone
import json

from ..models import Combatant, CombatOptions
from ..probability import cumulative_at_least, expected_value, sorted_items, total_mass


@dataclass
class DamageRow:
    damage: int
    probability: float
    at_least: float


@dataclass
class DamageReport:
    timestamp: str
    attacker: Dict[str, Any]
    defender: Dict[str, Any]
    options: Dict[str, Any]
    shield_prob: float
    rows: List[DamageRow]
    expected_damage: float
    attacker_deals_damage: float
    defender_deals_damage: float
    total_mass: float

    def to_json(self) -> str:
        d = asdict(self)
        return json.dumps(d, indent=2, sort_keys=False)

    def to_markdown(self) -> str:
        lines = []
        atk_name = self.attacker.get("name") or "attacker"
        def_name = self.defender.get("name") or "defender"
        lines.append(f"# Damage Report ({atk_name} vs {def_name})")
        lines.append(f"- **Timestamp:** {self.timestamp}")
        lines.append(
            f"- **Simulations:** {self.options.get('num_simulations')}  |  "
            f"**Rounds:** {self.options.get('num_rounds')}  |  "
            f"**Fight back:** {'yes' if self.options.get('attacker_can_be_damaged') else 'no'}  |  "
            f"**Seed:** {self.options.get('seed')}"
        )
        lines.append("\n## Summary")
        lines.append(f"- expected damage: {self.expected_damage:+.3f}")
        lines.append(f"- P(attacker deals damage): {self.attacker_deals_damage:.3f}")
        lines.append(f"- P(defender deals damage): {self.defender_deals_damage:.3f}")
        lines.append("\n## Distribution")
        lines.append("| damage | P(damage) | P(>= damage) |")
        lines.append("|---:|---:|---:|")
        for row in self.rows:
            lines.append(f"| {row.damage} | {row.probability:.4f} | {row.at_least:.4f} |")
        return "\n".join(lines)


def build_damage_report(
    attacker: Combatant,
    defender: Combatant,
    options: CombatOptions,
    dmg_probs: Mapping[int, float],
    shield_prob: float,
) -> DamageReport:
    timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    at_least = cumulative_at_least(dmg_probs)
    rows = [
        DamageRow(damage=int(k), probability=float(p), at_least=float(at_least[k]))
        for k, p in sorted_items(dmg_probs)
    ]
    return DamageReport(
        timestamp=timestamp,
        attacker=attacker.to_dict(),
        defender=defender.to_dict(),
        options=options.to_dict(),
        shield_prob=float(shield_prob),
        rows=rows,
        expected_damage=expected_value(dmg_probs),
        attacker_deals_damage=sum(p for k, p in dmg_probs.items() if k > 0),
        defender_deals_damage=sum(p for k, p in dmg_probs.items() if k < 0),
        total_mass=total_mass(dmg_probs),
    )


__all__ = ["DamageRow", "DamageReport", "build_damage_report"]
