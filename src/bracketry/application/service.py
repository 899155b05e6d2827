"""Application service replaying tournament files through the engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable

from bracketry.domain.config import ConfigError, ResultCfg, TournamentCfg
from bracketry.errors import EngineError
from bracketry.infrastructure.config.loader import dump_tournament
from bracketry.infrastructure.config.validators import format_error
from bracketry.infrastructure.storage import StorageError, read_tournament, write_tournament
from bracketry.tournament import Tournament

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recorded:
    """Outcome of recording a result: the updated file and the live bracket."""

    config: TournamentCfg
    tournament: Tournament[str]


class TournamentService:
    """Builds brackets from tournament files and keeps their result logs."""

    def __init__(
        self,
        *,
        writer: Callable[[TournamentCfg, Path | None], Path] = dump_tournament,
    ) -> None:
        self._writer = writer

    def create(self, cfg: TournamentCfg) -> Tournament[str]:
        try:
            return Tournament(cfg.system, cfg.entrants, cfg.options)
        except ValueError as exc:
            raise ConfigError(format_error(cfg.path, "system", str(exc))) from exc
        except EngineError as exc:
            raise ConfigError(format_error(cfg.path, "<root>", str(exc))) from exc

    def build(self, cfg: TournamentCfg) -> Tournament[str]:
        """Create the bracket of *cfg* and replay its result log in order."""

        tournament = self.create(cfg)
        logger.debug("Replaying %d results for '%s'", len(cfg.results), cfg.name)
        for position, result in enumerate(cfg.results):
            self._apply(cfg, tournament, result, f"results[{position}]")
        return tournament

    def record(self, cfg: TournamentCfg, result: ResultCfg, *, persist: bool = True) -> Recorded:
        """Append *result* to the log of *cfg* once it replays cleanly."""

        tournament = self.build(cfg)
        self._apply(cfg, tournament, result, f"results[{len(cfg.results)}]")
        updated = replace(cfg, results=[*cfg.results, result])
        if persist:
            self._writer(updated, None)
        logger.debug("Recorded result for match %d in '%s'", result.match, cfg.name)
        return Recorded(config=updated, tournament=tournament)

    def export(self, cfg: TournamentCfg, output: Path) -> Path:
        tournament = self.build(cfg)
        return write_tournament(output, tournament, name=cfg.name)

    def restore(self, path: Path) -> Tournament[str]:
        try:
            return read_tournament(path)
        except StorageError as exc:
            raise ConfigError(format_error(path, "<root>", str(exc))) from exc
        except OSError as exc:
            raise ConfigError(format_error(path, "<file>", str(exc))) from exc

    @staticmethod
    def _apply(cfg: TournamentCfg, tournament: Tournament[str], result: ResultCfg, field: str) -> None:
        try:
            tournament.report_result(result.match, result.as_scores())
        except EngineError as exc:
            raise ConfigError(format_error(cfg.path, field, str(exc))) from exc


__all__ = ["Recorded", "TournamentService"]
