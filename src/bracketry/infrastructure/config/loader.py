"""Tournament file loading coordinating schema validation and parsing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import yaml

from bracketry.domain.config import ConfigError, ResultCfg, TournamentCfg

from .schema import definition_ref
from .validators import (
    build_validator,
    format_error,
    tournament_payload,
    validate_configs,
    validate_with_schema,
)

__all__ = ["collect_configs", "load_tournament", "dump_tournament", "validate_configs"]

logger = logging.getLogger(__name__)

TOURNAMENT_DIR = "tournaments"


def _read_yaml(path: Path) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem error propagation
        raise ConfigError(format_error(path, "<file>", str(exc))) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(format_error(path, "<root>", f"Invalid YAML: {exc}")) from exc
    if not isinstance(data, Mapping):
        raise ConfigError(format_error(path, "<root>", "Top-level document must be a mapping."))
    return data


def _ensure_unique(name: str, seen: Dict[str, Path], path: Path, kind: str) -> None:
    existing = seen.get(name)
    if existing is not None:
        raise ConfigError(
            format_error(
                path,
                "name",
                f"Duplicate {kind} identifier '{name}' already defined in {existing}",
            )
        )
    seen[name] = path


def _build_result(data: Mapping[str, Any]) -> ResultCfg:
    first, second = data["scores"]
    winner = data.get("winner")
    return ResultCfg(
        match=int(data["match"]),
        scores=(int(first), int(second)),
        winner=int(winner) if winner is not None else None,
    )


def _build_tournament(data: Mapping[str, Any], path: Path) -> TournamentCfg:
    options = data.get("options") or {}
    return TournamentCfg(
        path=path,
        name=str(data["name"]),
        description=str(data["description"]),
        system=str(data["system"]),
        entrants=[str(entrant) for entrant in data["entrants"]],
        options=dict(options),
        results=[_build_result(entry) for entry in data.get("results") or []],
        notes=data.get("notes"),
    )


def _gather(directory: Path) -> Iterable[Path]:
    if not directory.exists():
        raise ConfigError(format_error(directory, "<dir>", "Required configuration directory is missing."))
    return sorted(directory.glob("*.yaml"))


def collect_configs(base_dir: Path) -> dict[str, TournamentCfg]:
    base_dir = base_dir.resolve()
    validator = build_validator()

    tournaments: dict[str, TournamentCfg] = {}
    seen_tournaments: dict[str, Path] = {}

    for path in _gather(base_dir / TOURNAMENT_DIR):
        data = _read_yaml(path)
        validate_with_schema(validator, data, definition_ref("tournament"), path)
        cfg = _build_tournament(data, path)
        _ensure_unique(cfg.name, seen_tournaments, path, "tournament")
        tournaments[cfg.name] = cfg
        logger.debug("Loaded tournament '%s' from %s", cfg.name, path)

    return tournaments


def load_tournament(identifier: str | Path, base_dir: Path | None = None) -> TournamentCfg:
    """Load a tournament file by path or name."""

    base_dir = base_dir or Path.cwd()
    tournaments = collect_configs(base_dir)
    validate_configs(tournaments)

    if isinstance(identifier, str) and identifier in tournaments:
        return tournaments[identifier]

    candidate = Path(identifier) if not isinstance(identifier, Path) else identifier
    candidate = candidate if candidate.is_absolute() else base_dir / TOURNAMENT_DIR / candidate
    candidate = candidate.resolve()

    for cfg in tournaments.values():
        if cfg.path.resolve() == candidate:
            return cfg

    raise ConfigError(format_error(candidate, "name", "Tournament not found."))


def dump_tournament(cfg: TournamentCfg, path: Path | None = None) -> Path:
    """Write *cfg* back to YAML, to its own file unless *path* is given."""

    target = path or cfg.path
    payload = tournament_payload(cfg)
    ordered = {
        key: payload[key]
        for key in ("name", "description", "system", "options", "entrants", "results", "notes")
        if key in payload
    }
    try:
        target.write_text(yaml.safe_dump(ordered, sort_keys=False, allow_unicode=True), encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem error propagation
        raise ConfigError(format_error(target, "<file>", str(exc))) from exc
    logger.debug("Wrote tournament '%s' to %s", cfg.name, target)
    return target
