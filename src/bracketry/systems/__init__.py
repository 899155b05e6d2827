"""Builtin bracket systems."""

from __future__ import annotations

from .base import NextMatches, ScoreInput, System, round_count
from .double_elimination import DoubleElimination, GrandFinalState
from .seeding import SEEDING_MODES, seed_slots, standard_order
from .single_elimination import SingleElimination

__all__ = [
    "NextMatches",
    "ScoreInput",
    "System",
    "round_count",
    "SingleElimination",
    "DoubleElimination",
    "GrandFinalState",
    "SEEDING_MODES",
    "seed_slots",
    "standard_order",
]
