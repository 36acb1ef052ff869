from __future__ import annotations
import argparse, logging, sys, time
from typing import Any, Dict, List, Tuple

from .calc_engine import calc_dmg_probs
from .config import DEFAULT_ENV_PREFIX, load_configs, env_overrides, apply_cli_overrides, build_scenario
from .errors import InvalidArgumentError
from .models import Combatant, CombatOptions
from .probability import expected_value
from .reports.damage_report import build_damage_report

_STAT_FLAGS = (
    # flag suffix, Combatant field
    ("dice", "num_dice"),
    ("stat", "dice_stat"),
    ("rerolls", "num_rerolls"),
    ("armor", "armor"),
    ("ap", "ap"),
    ("shields", "num_shield_dice"),
    ("toxic", "toxic_dmg"),
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="python -m deadzone_calc.cli",
        description="Deadzone damage odds calculator"
    )
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    sub = p.add_subparsers(dest="cmd")

    # calc
    ca = sub.add_parser("calc", help="Compute the damage distribution once and print it")
    _add_common_args(ca)
    ca.add_argument("--report", type=str, default=None, help="Path to save report (.json or .md)")
    ca.add_argument("--print-md", action="store_true", help="Print Markdown report to stdout")

    # bench
    bn = sub.add_parser("bench", help="Run several seeds to measure Monte Carlo spread/perf")
    _add_common_args(bn)
    bn.add_argument("--seeds", type=int, default=8, help="Number of seeds")
    bn.add_argument("--out", type=str, default=None, help="Save benchmark JSON")

    args = p.parse_args(argv)
    if getattr(args, "cmd", None) is None:
        p.print_help()
        sys.exit(2)
    return args


def _add_common_args(ap: argparse.ArgumentParser) -> None:
    for side in ("atk", "def"):
        for suffix, field_name in _STAT_FLAGS:
            ap.add_argument(f"--{side}-{suffix}", dest=f"{side}_{field_name}", type=int, default=None)
    ap.add_argument("--sims", type=int, default=None, help="Monte Carlo trials per combatant")
    ap.add_argument("--rounds", type=int, default=None)
    ap.add_argument("--no-fight-back", dest="fight_back", action="store_false", default=None,
                    help="Defender successes cannot damage the attacker")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--shield-prob", dest="shield_prob", type=float, default=None)
    ap.add_argument("--config", type=str, action="append", default=[], help="YAML/JSON config files (merged)")
    ap.add_argument("--env-prefix", type=str, default=DEFAULT_ENV_PREFIX, help="Env prefix for overrides")


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {"attacker": {}, "defender": {}, "options": {}, "engine": {}}
    for side, role in (("atk", "attacker"), ("def", "defender")):
        for _, field_name in _STAT_FLAGS:
            val = getattr(args, f"{side}_{field_name}")
            if val is not None:
                out[role][field_name] = val
    if args.sims is not None:
        out["options"]["num_simulations"] = args.sims
    if args.rounds is not None:
        out["options"]["num_rounds"] = args.rounds
    if args.fight_back is not None:
        out["options"]["attacker_can_be_damaged"] = args.fight_back
    if args.seed is not None:
        out["options"]["seed"] = args.seed
    if args.shield_prob is not None:
        out["engine"]["shield_prob"] = args.shield_prob
    return out


def _scenario(args: argparse.Namespace) -> Tuple[Combatant, Combatant, CombatOptions, float]:
    cfg = load_configs(args.config)
    cfg = apply_cli_overrides(cfg, env_overrides(args.env_prefix))
    cfg = apply_cli_overrides(cfg, _cli_overrides(args))
    return build_scenario(cfg)


def _calc_once(args: argparse.Namespace) -> Dict[str, Any]:
    attacker, defender, options, shield_prob = _scenario(args)
    dmg_probs = calc_dmg_probs(attacker, defender, options, shield_prob=shield_prob)
    report = build_damage_report(attacker, defender, options, dmg_probs, shield_prob)
    return {"dmg_probs": dmg_probs, "report": report}


def _bench(args: argparse.Namespace) -> Dict[str, Any]:
    attacker, defender, base_options, shield_prob = _scenario(args)
    seeds = int(args.seeds)
    zero_probs: List[float] = []
    means: List[float] = []
    t0 = time.perf_counter()

    for s in range(seeds):
        options = CombatOptions(
            num_simulations=base_options.num_simulations,
            num_rounds=base_options.num_rounds,
            attacker_can_be_damaged=base_options.attacker_can_be_damaged,
            seed=s,
        )
        dmg_probs = calc_dmg_probs(attacker, defender, options, shield_prob=shield_prob)
        zero_probs.append(dmg_probs.get(0, 0.0))
        means.append(expected_value(dmg_probs))

    t1 = time.perf_counter()
    sims_total = seeds * base_options.num_simulations * 2
    elapsed = max(1e-9, t1 - t0)

    return {
        "seeds": seeds,
        "p_zero_min": min(zero_probs) if zero_probs else 0.0,
        "p_zero_max": max(zero_probs) if zero_probs else 0.0,
        "mean_damage": sum(means)/len(means) if means else 0.0,
        "mean_damage_spread": (max(means) - min(means)) if means else 0.0,
        "sims": base_options.num_simulations,
        "sims_per_sec": sims_total / elapsed
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        if args.cmd == "calc":
            res = _calc_once(args)
            report = res["report"]
            if args.report:
                if args.report.endswith(".json"):
                    with open(args.report, "w", encoding="utf-8") as f:
                        f.write(report.to_json())
                elif args.report.endswith(".md"):
                    with open(args.report, "w", encoding="utf-8") as f:
                        f.write(report.to_markdown())
                else:
                    print("Report path must end with .json or .md", file=sys.stderr)
            if args.print_md:
                print(report.to_markdown())
            else:
                for row in report.rows:
                    print(f"{row.damage:>4}  {row.probability:.4f}  (>= {row.at_least:.4f})")
                print(f"expected damage: {report.expected_damage:+.3f}")
            return 0

        if args.cmd == "bench":
            out = _bench(args)
            if args.out:
                import json
                with open(args.out, "w", encoding="utf-8") as f:
                    json.dump(out, f, indent=2)
            print(out)
            return 0
    except InvalidArgumentError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
