"""CLI command tests for bracketry."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import yaml
from typer.testing import CliRunner

from bracketry.cli import app

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"
ENV = {"COLUMNS": "200"}


def _copy_config_tree(tmp_path: Path) -> Path:
    destination = tmp_path / "config"
    shutil.copytree(CONFIG_DIR, destination)
    return destination


def _invoke(*args: str):
    runner = CliRunner()
    return runner.invoke(app, list(args), env=ENV, catch_exceptions=False)


def test_cli_validate_happy_path(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    result = _invoke("validate", "--config-dir", str(config_dir))
    assert result.exit_code == 0
    assert "Configs OK" in result.stdout


def test_cli_validate_reports_broken_result_log(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    path = config_dir / "tournaments" / "spring-cup.yaml"
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    data["results"].append({"match": 6, "scores": [1, 0]})
    path.write_text(yaml.safe_dump(data), encoding="utf-8")

    result = _invoke("validate", "--config-dir", str(config_dir))
    assert result.exit_code == 1
    assert "Config error" in result.stdout


def test_cli_verbose_logs_replay(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    result = _invoke("--verbose", "validate", "--config-dir", str(config_dir))
    assert result.exit_code == 0
    assert "Replaying" in result.stdout


def test_cli_options_lists_system_options() -> None:
    result = _invoke("options", "double_elimination")
    assert result.exit_code == 0
    assert "bracket_reset" in result.stdout
    assert "sequential" in result.stdout


def test_cli_options_unknown_system() -> None:
    result = _invoke("options", "swiss")
    assert result.exit_code == 1
    assert "Unknown tournament system" in result.stdout


def test_cli_show_tournament(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    result = _invoke("show", "spring-cup", "--config-dir", str(config_dir))
    assert result.exit_code == 0
    assert "Tournament: spring-cup" in result.stdout
    assert "Single elimination" in result.stdout
    assert "Semifinals" in result.stdout
    assert "bye" in result.stdout


def test_cli_show_double_elimination(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    result = _invoke("show", "autumn-open", "--config-dir", str(config_dir))
    assert result.exit_code == 0
    assert "Winners bracket" in result.stdout
    assert "Losers bracket" in result.stdout
    assert "Grand final" in result.stdout


def test_cli_show_unknown_tournament(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    result = _invoke("show", "winter-league", "--config-dir", str(config_dir))
    assert result.exit_code == 1
    assert "Tournament not found" in result.stdout


def test_cli_standings_order(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    result = _invoke("standings", "spring-cup", "--config-dir", str(config_dir))
    assert result.exit_code == 0
    assert result.stdout.index("Carol") < result.stdout.index("Dave") < result.stdout.index("Erin")


def test_cli_report_until_champion(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    common = ["--config-dir", str(config_dir)]

    result = _invoke("report", "spring-cup", "--match", "4", "--scores", "3-1", *common)
    assert result.exit_code == 0
    assert "Recorded match 4" in result.stdout

    result = _invoke("report", "spring-cup", "--match", "6", "--scores", "0:2", *common)
    assert result.exit_code == 0
    assert "Champion: Carol" in result.stdout

    data = yaml.safe_load((config_dir / "tournaments" / "spring-cup.yaml").read_text(encoding="utf-8"))
    assert data["results"][-2:] == [{"match": 4, "scores": [3, 1]}, {"match": 6, "scores": [0, 2]}]


def test_cli_report_rejects_tie_without_winner(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    path = config_dir / "tournaments" / "spring-cup.yaml"
    before = path.read_text(encoding="utf-8")

    result = _invoke("report", "spring-cup", "--match", "4", "--scores", "1-1", "--config-dir", str(config_dir))

    assert result.exit_code == 1
    assert "inconsistent" in result.stdout
    assert path.read_text(encoding="utf-8") == before


def test_cli_report_tie_with_explicit_winner(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    result = _invoke(
        "report", "spring-cup", "--match", "4", "--scores", "1-1", "--winner", "1", "--config-dir", str(config_dir)
    )
    assert result.exit_code == 0
    data = yaml.safe_load((config_dir / "tournaments" / "spring-cup.yaml").read_text(encoding="utf-8"))
    assert data["results"][-1] == {"match": 4, "scores": [1, 1], "winner": 1}


def test_cli_report_rejects_malformed_scores(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    result = _invoke("report", "spring-cup", "--match", "4", "--scores", "three", "--config-dir", str(config_dir))
    assert result.exit_code == 2


def test_cli_export_and_inspect(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    output = tmp_path / "exports" / "autumn.json"

    result = _invoke("export", "autumn-open", "--output", str(output), "--config-dir", str(config_dir))
    assert result.exit_code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["entrants"] == ["Falcons", "Herons", "Kestrels", "Ospreys"]
    assert len(payload["matches"]) == 7

    result = _invoke("inspect", str(output))
    assert result.exit_code == 0
    assert "Double elimination" in result.stdout
    assert "Falcons" in result.stdout


def test_cli_inspect_rejects_malformed_export(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    output = tmp_path / "autumn.json"
    _invoke("export", "autumn-open", "--output", str(output), "--config-dir", str(config_dir))
    payload = json.loads(output.read_text(encoding="utf-8"))

    payload["matches"][0][0] = {"entrant": 0, "score": "x"}
    output.write_text(json.dumps(payload), encoding="utf-8")
    assert _invoke("inspect", str(output)).exit_code == 1

    payload["matches"][0] = [
        {"entrant": 0, "score": -4, "winner": True},
        {"entrant": 1, "score": 0, "winner": True},
    ]
    output.write_text(json.dumps(payload), encoding="utf-8")
    assert _invoke("inspect", str(output)).exit_code == 1
