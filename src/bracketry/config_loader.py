"""Convenience layer over the tournament file utilities."""

from __future__ import annotations

from bracketry.domain.config import ConfigError, ResultCfg, TournamentCfg
from bracketry.infrastructure.config.loader import collect_configs, dump_tournament, load_tournament
from bracketry.infrastructure.config.validators import validate_configs

__all__ = [
    "ConfigError",
    "ResultCfg",
    "TournamentCfg",
    "collect_configs",
    "dump_tournament",
    "validate_configs",
    "load_tournament",
]
