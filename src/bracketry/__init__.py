"""Deterministic tournament bracket engine.

The engine builds single and double elimination brackets, resolves byes,
propagates results, computes standings and describes the bracket layout as a
render tree. It performs no I/O; the CLI and configuration layers live in
:mod:`bracketry.interfaces` and :mod:`bracketry.infrastructure`.
"""

from __future__ import annotations

from .entrants import Entrants
from .errors import (
    EngineError,
    FrozenRegistry,
    InconsistentScores,
    IndexOutOfRange,
    InvalidEntrant,
    InvalidEntrantCount,
    InvalidNumberOfMatches,
    InvalidOption,
    UnreadyMatch,
)
from .matches import EntrantScore, EntrantSpot, Match, Matches, Node, SpotKind
from .options import OptionKind, OptionValues, TournamentOption, TournamentOptions
from .render import Column, Element, MatchRef, Position, PositionKind, Row
from .standings import Standings, StandingsEntry
from .systems import DoubleElimination, GrandFinalState, NextMatches, SingleElimination, System
from .tournament import Tournament, TournamentKind

__version__ = "0.3.0"

__all__ = [
    "Entrants",
    "EngineError",
    "FrozenRegistry",
    "InconsistentScores",
    "IndexOutOfRange",
    "InvalidEntrant",
    "InvalidEntrantCount",
    "InvalidNumberOfMatches",
    "InvalidOption",
    "UnreadyMatch",
    "EntrantScore",
    "EntrantSpot",
    "Match",
    "Matches",
    "Node",
    "SpotKind",
    "OptionKind",
    "OptionValues",
    "TournamentOption",
    "TournamentOptions",
    "Column",
    "Element",
    "MatchRef",
    "Position",
    "PositionKind",
    "Row",
    "Standings",
    "StandingsEntry",
    "DoubleElimination",
    "GrandFinalState",
    "NextMatches",
    "SingleElimination",
    "System",
    "Tournament",
    "TournamentKind",
]
