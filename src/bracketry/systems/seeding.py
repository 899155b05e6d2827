"""Seeding rules placing entrants into the first round of a bracket."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..matches import EntrantSpot, Match

SEQUENTIAL = "sequential"
STANDARD = "standard"

SEEDING_MODES: Tuple[str, ...] = (SEQUENTIAL, STANDARD)


def standard_order(size: int) -> List[int]:
    """Return 1-based seeds in bracket order for a bracket of *size* slots.

    Seed 1 meets seed ``size``, and the two top seeds can only meet in the
    final: ``[1, 8, 4, 5, 2, 7, 3, 6]`` for eight slots.
    """

    order = [1]
    while len(order) < size:
        mirror = len(order) * 2 + 1
        order = [seed for top in order for seed in (top, mirror - top)]
    return order


def seed_slots(entrants: int, size: int, mode: str = SEQUENTIAL) -> List[Optional[int]]:
    """Map every first-round slot to an entrant index, ``None`` marks a bye."""

    if mode == SEQUENTIAL:
        return [slot if slot < entrants else None for slot in range(size)]
    if mode == STANDARD:
        return [seed - 1 if seed <= entrants else None for seed in standard_order(size)]
    raise ValueError(f"unknown seeding mode '{mode}'")


def first_round(entrants: int, size: int, mode: str = SEQUENTIAL) -> List[Match]:
    """Build the ``size // 2`` opening matches for *entrants* entrants."""

    slots = seed_slots(entrants, size, mode)
    spots = [EntrantSpot.empty() if slot is None else EntrantSpot.entrant(slot) for slot in slots]
    return [Match(spots[i : i + 2]) for i in range(0, size, 2)]


__all__ = [
    "SEQUENTIAL",
    "STANDARD",
    "SEEDING_MODES",
    "standard_order",
    "seed_slots",
    "first_round",
]
