"""Persistence of materialized match trees."""

from __future__ import annotations

from .codec import (
    FORMAT_VERSION,
    StorageError,
    matches_from_data,
    matches_to_data,
    read_tournament,
    tournament_from_data,
    tournament_to_data,
    write_tournament,
)

__all__ = [
    "FORMAT_VERSION",
    "StorageError",
    "matches_from_data",
    "matches_to_data",
    "read_tournament",
    "tournament_from_data",
    "tournament_to_data",
    "write_tournament",
]
