"""Tests for tournament file loading and validation."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
import yaml

from bracketry.config_loader import (
    ConfigError,
    ResultCfg,
    collect_configs,
    dump_tournament,
    load_tournament,
    validate_configs,
)

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


def _copy_config_tree(tmp_path: Path) -> Path:
    destination = tmp_path / "config"
    shutil.copytree(CONFIG_DIR, destination)
    return destination


def _edit(path: Path, **changes: object) -> None:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    data.update(changes)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_full_config_suite_valid(tmp_path: Path) -> None:
    """The shipped sample tournaments validate end-to-end."""
    config_dir = _copy_config_tree(tmp_path)
    tournaments = collect_configs(config_dir)
    validate_configs(tournaments)
    assert sorted(tournaments) == ["autumn-open", "spring-cup"]

    tournament = load_tournament("spring-cup", config_dir)
    assert tournament.system == "single_elimination"
    assert tournament.options == {"third_place_match": True, "seeding": "standard"}
    assert tournament.results[0] == ResultCfg(match=1, scores=(2, 1))


def test_load_tournament_by_path(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    tournament = load_tournament(Path("autumn-open.yaml"), config_dir)
    assert tournament.name == "autumn-open"


def test_unknown_tournament_is_reported(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    with pytest.raises(ConfigError) as excinfo:
        load_tournament("winter-league", config_dir)
    assert "Tournament not found" in str(excinfo.value)


def test_unknown_system_fails_schema(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    _edit(config_dir / "tournaments" / "spring-cup.yaml", system="swiss")
    with pytest.raises(ConfigError) as excinfo:
        collect_configs(config_dir)
    assert "system" in str(excinfo.value)


def test_unknown_option_is_rejected(tmp_path: Path) -> None:
    """Options are checked against the schema of the chosen system."""
    config_dir = _copy_config_tree(tmp_path)
    _edit(config_dir / "tournaments" / "spring-cup.yaml", options={"bracket_reset": False})
    tournaments = collect_configs(config_dir)
    with pytest.raises(ConfigError) as excinfo:
        validate_configs(tournaments)
    assert "options.bracket_reset" in str(excinfo.value)
    assert "unknown key" in str(excinfo.value)


def test_duplicate_entrants_are_rejected(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    _edit(config_dir / "tournaments" / "autumn-open.yaml", entrants=["Falcons", "Herons", "Falcons"], results=[])
    tournaments = collect_configs(config_dir)
    with pytest.raises(ConfigError) as excinfo:
        validate_configs(tournaments)
    assert "entrants[2]" in str(excinfo.value)


def test_duplicate_tournament_names_are_rejected(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    shutil.copy(config_dir / "tournaments" / "spring-cup.yaml", config_dir / "tournaments" / "spring-copy.yaml")
    with pytest.raises(ConfigError) as excinfo:
        collect_configs(config_dir)
    assert "Duplicate tournament identifier 'spring-cup'" in str(excinfo.value)


def test_invalid_yaml_is_reported(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    (config_dir / "tournaments" / "broken.yaml").write_text("name: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        collect_configs(config_dir)
    assert "Invalid YAML" in str(excinfo.value)


def test_result_needs_two_scores(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    _edit(config_dir / "tournaments" / "spring-cup.yaml", results=[{"match": 1, "scores": [2]}])
    with pytest.raises(ConfigError) as excinfo:
        collect_configs(config_dir)
    assert "results/0/scores" in str(excinfo.value)


def test_missing_tournament_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        collect_configs(tmp_path)


def test_dump_round_trip(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    original = load_tournament("spring-cup", config_dir)
    target = config_dir / "tournaments" / "spring-cup.yaml"
    target.unlink()

    dump_tournament(original, target)

    assert load_tournament("spring-cup", config_dir) == original


@pytest.mark.parametrize(
    ("result", "flags"),
    [
        (ResultCfg(match=0, scores=(2, 1)), [True, False]),
        (ResultCfg(match=0, scores=(0, 3)), [False, True]),
        (ResultCfg(match=0, scores=(1, 1), winner=1), [False, True]),
        (ResultCfg(match=0, scores=(1, 1)), [False, False]),
    ],
)
def test_result_winner_defaults_to_higher_score(result: ResultCfg, flags: list[bool]) -> None:
    assert [score.winner for score in result.as_scores()] == flags
