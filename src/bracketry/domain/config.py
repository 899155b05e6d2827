"""Domain models representing tournament files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from bracketry.matches import EntrantScore


class ConfigError(Exception):
    """Raised when tournament files fail validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


@dataclass(frozen=True, kw_only=True)
class ResultCfg:
    """One entry of a tournament's result log."""

    match: int
    scores: Tuple[int, int]
    winner: Optional[int] = None

    def winner_slot(self) -> Optional[int]:
        """Explicit winner, or the slot with the higher score. Ties yield ``None``."""

        if self.winner is not None:
            return self.winner
        first, second = self.scores
        if first == second:
            return None
        return 0 if first > second else 1

    def as_scores(self) -> List[EntrantScore]:
        winner = self.winner_slot()
        return [
            EntrantScore(score=score, winner=slot == winner)
            for slot, score in enumerate(self.scores)
        ]


@dataclass(frozen=True, kw_only=True)
class TournamentCfg:
    path: Path = field(repr=False, compare=False)
    name: str
    description: str
    system: str
    entrants: List[str]
    options: Mapping[str, Any] = field(default_factory=dict)
    results: List[ResultCfg] = field(default_factory=list)
    notes: str | None = None


__all__ = [
    "ConfigError",
    "ResultCfg",
    "TournamentCfg",
]
