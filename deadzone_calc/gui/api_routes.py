"""API routes for the damage calculator."""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..calc_engine import SINGLE_SHIELD_PROB, calc_dmg_probs
from ..errors import InvalidArgumentError
from ..models import Combatant, CombatOptions, ROUND_CHOICES, SIMULATION_CHOICES
from ..reports.damage_report import build_damage_report

router = APIRouter()


# Request/Response models
class CalcRequest(BaseModel):
    attacker: Dict[str, Any] = Field(default_factory=dict)
    defender: Dict[str, Any] = Field(default_factory=dict)
    options: Dict[str, Any] = Field(default_factory=dict)
    shield_prob: Optional[float] = None


class DistributionRow(BaseModel):
    damage: int
    probability: float
    at_least: float


class CalcResponse(BaseModel):
    rows: List[DistributionRow]
    expected_damage: float
    attacker_deals_damage: float
    defender_deals_damage: float
    total_mass: float
    options: Dict[str, Any]


@router.get("/defaults")
async def defaults() -> Dict[str, Any]:
    """Default profiles and the option choices a front end should offer."""
    return {
        "combatant": Combatant().to_dict(),
        "options": CombatOptions().to_dict(),
        "shield_prob": SINGLE_SHIELD_PROB,
        "choices": {
            "num_simulations": SIMULATION_CHOICES,
            "num_rounds": ROUND_CHOICES,
            "attacker_can_be_damaged": [True, False],
        },
    }


@router.post("/calc", response_model=CalcResponse)
def calc(request: CalcRequest) -> CalcResponse:
    """Compute the damage distribution for one attacker/defender pairing."""
    shield_prob = SINGLE_SHIELD_PROB if request.shield_prob is None else request.shield_prob
    try:
        attacker = Combatant.from_dict({"name": "attacker", **request.attacker})
        defender = Combatant.from_dict({"name": "defender", **request.defender})
        options = CombatOptions.from_dict(request.options)
        dmg_probs = calc_dmg_probs(attacker, defender, options, shield_prob=shield_prob)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=422, detail=str(e))

    report = build_damage_report(attacker, defender, options, dmg_probs, shield_prob)
    return CalcResponse(
        rows=[DistributionRow(damage=r.damage, probability=r.probability, at_least=r.at_least)
              for r in report.rows],
        expected_damage=report.expected_damage,
        attacker_deals_damage=report.attacker_deals_damage,
        defender_deals_damage=report.defender_deals_damage,
        total_mass=report.total_mass,
        options=report.options,
    )
