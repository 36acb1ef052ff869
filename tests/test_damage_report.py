import json

from deadzone_calc.models import Combatant, CombatOptions
from deadzone_calc.reports.damage_report import build_damage_report


def make_report():
    return build_damage_report(
        Combatant(name="Strider"),
        Combatant(name="Plague"),
        CombatOptions(num_simulations=100, seed=1),
        {-1: 0.2, 0: 0.5, 2: 0.3},
        0.375,
    )


def test_report_summary_values():
    r = make_report()
    assert [row.damage for row in r.rows] == [-1, 0, 2]
    assert abs(r.expected_damage - 0.4) < 1e-9
    assert abs(r.attacker_deals_damage - 0.3) < 1e-9
    assert abs(r.defender_deals_damage - 0.2) < 1e-9
    assert abs(r.rows[1].at_least - 0.8) < 1e-9
    assert r.timestamp.endswith("Z")


def test_report_renderings():
    r = make_report()
    md = r.to_markdown()
    assert "Strider vs Plague" in md
    assert "| 2 | 0.3000 | 0.3000 |" in md
    data = json.loads(r.to_json())
    assert data["options"]["seed"] == 1
    assert len(data["rows"]) == 3
