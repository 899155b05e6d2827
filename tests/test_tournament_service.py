"""Tests for replaying tournament files through the engine."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from bracketry.application.service import TournamentService
from bracketry.config_loader import ConfigError, ResultCfg, TournamentCfg, load_tournament

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


def _copy_config_tree(tmp_path: Path) -> Path:
    destination = tmp_path / "config"
    shutil.copytree(CONFIG_DIR, destination)
    return destination


def test_build_replays_results() -> None:
    cfg = load_tournament("spring-cup", CONFIG_DIR)
    tournament = TournamentService().build(cfg)

    final = tournament.get_match(6)
    assert final[0].is_tbd
    assert tournament.entrants[final[1].index] == "Carol"
    third_place = tournament.get_match(7)
    assert tournament.entrants[third_place[1].index] == "Bob"
    assert tournament.champion() is None


def test_record_appends_and_persists() -> None:
    written: list[TournamentCfg] = []

    def _writer(cfg: TournamentCfg, path: Path | None) -> Path:
        written.append(cfg)
        return cfg.path

    cfg = load_tournament("spring-cup", CONFIG_DIR)
    recorded = TournamentService(writer=_writer).record(cfg, ResultCfg(match=4, scores=(3, 1)))

    assert len(recorded.config.results) == 3
    assert written == [recorded.config]
    final = recorded.tournament.get_match(6)
    assert [recorded.tournament.entrants[spot.index] for spot in final] == ["Alice", "Carol"]


def test_record_writes_tournament_file(tmp_path: Path) -> None:
    config_dir = _copy_config_tree(tmp_path)
    cfg = load_tournament("autumn-open", config_dir)

    TournamentService().record(cfg, ResultCfg(match=3, scores=(0, 2)))

    reloaded = load_tournament("autumn-open", config_dir)
    assert reloaded.results[-1] == ResultCfg(match=3, scores=(0, 2))


@pytest.mark.parametrize(
    ("result", "message"),
    [
        (ResultCfg(match=4, scores=(1, 1)), "inconsistent scores"),
        (ResultCfg(match=6, scores=(1, 0)), "not ready"),
        (ResultCfg(match=40, scores=(1, 0)), "out of range"),
    ],
)
def test_record_rejects_bad_results(result: ResultCfg, message: str) -> None:
    cfg = load_tournament("spring-cup", CONFIG_DIR)
    with pytest.raises(ConfigError) as excinfo:
        TournamentService(writer=lambda cfg, path: cfg.path).record(cfg, result, persist=False)
    assert "results[2]" in str(excinfo.value)
    assert message in str(excinfo.value)


def test_broken_result_log_points_at_entry(tmp_path: Path) -> None:
    cfg = load_tournament("spring-cup", CONFIG_DIR)
    broken = TournamentCfg(
        path=cfg.path,
        name=cfg.name,
        description=cfg.description,
        system=cfg.system,
        entrants=cfg.entrants,
        options=cfg.options,
        results=[cfg.results[0], ResultCfg(match=0, scores=(1, 0))],
    )
    with pytest.raises(ConfigError) as excinfo:
        TournamentService().build(broken)
    assert "results[1]" in str(excinfo.value)


def test_export_and_restore(tmp_path: Path) -> None:
    cfg = load_tournament("autumn-open", CONFIG_DIR)
    service = TournamentService()
    output = service.export(cfg, tmp_path / "autumn.json")

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["name"] == "autumn-open"
    assert payload["system"] == "double_elimination"

    restored = service.restore(output)
    assert restored.matches == service.build(cfg).matches


def test_restore_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        TournamentService().restore(tmp_path / "missing.json")
