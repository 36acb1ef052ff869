import json

from deadzone_calc.cli import main


def test_calc_writes_json_report(tmp_path, capsys):
    out = tmp_path / "report.json"
    rc = main([
        "calc", "--atk-dice", "3", "--atk-stat", "4", "--def-dice", "2",
        "--def-shields", "1", "--sims", "300", "--seed", "3", "--report", str(out),
    ])
    assert rc == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert abs(data["total_mass"] - 1.0) < 1e-6
    assert data["attacker"]["num_dice"] == 3
    assert "expected damage" in capsys.readouterr().out


def test_calc_markdown_without_fight_back(capsys):
    rc = main(["calc", "--sims", "200", "--seed", "1", "--no-fight-back", "--rounds", "2", "--print-md"])
    assert rc == 0
    md = capsys.readouterr().out
    assert "# Damage Report" in md
    assert "**Fight back:** no" in md
    assert "| -" not in md


def test_calc_reads_config_file(tmp_path, capsys):
    cfg = tmp_path / "scenario.yaml"
    cfg.write_text("attacker:\n  numDice: 0\ndefender:\n  numDice: 0\n", encoding="utf-8")
    rc = main(["calc", "--config", str(cfg), "--sims", "50"])
    assert rc == 0
    assert "   0  1.0000" in capsys.readouterr().out


def test_invalid_stat_exit_code(capsys):
    rc = main(["calc", "--atk-stat", "9"])
    assert rc == 2
    assert "dice_stat" in capsys.readouterr().err


def test_bench_summary(tmp_path):
    out = tmp_path / "bench.json"
    rc = main(["bench", "--seeds", "3", "--sims", "100", "--out", str(out)])
    assert rc == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["seeds"] == 3
    assert 0.0 <= data["p_zero_min"] <= data["p_zero_max"] <= 1.0
