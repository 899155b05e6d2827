"""Single elimination brackets."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..errors import IndexOutOfRange
from ..matches import Match
from ..options import TournamentOptions
from ..render import Column, Element, MatchRef, Position, Row, round_columns
from .base import NextMatches, System, T, round_count
from .seeding import SEEDING_MODES, SEQUENTIAL, first_round

logger = logging.getLogger(__name__)


def round_label(round_index: int, rounds: int) -> str:
    remaining = rounds - round_index
    if remaining == 1:
        return "Final"
    if remaining == 2:
        return "Semifinals"
    if remaining == 3:
        return "Quarterfinals"
    return f"Round {round_index + 1}"


class SingleElimination(System[T]):
    """A single elimination bracket.

    Round ``k`` occupies the indices ``2^R - 2^(R-k) .. 2^R - 2^(R-k-1) - 1``
    where ``R`` is the number of rounds. With the ``third_place_match``
    option an additional match for the semifinal losers follows the final.
    """

    kind = "single_elimination"

    @classmethod
    def options_schema(cls) -> TournamentOptions:
        return (
            TournamentOptions.builder()
            .option("third_place_match", "Include a match for the third place", False)
            .option("seeding", "Placement of entrants in the first round", SEQUENTIAL, choices=SEEDING_MODES)
            .build()
        )

    def _configure(self) -> None:
        entrants = len(self._entrants)
        self._rounds = round_count(entrants)
        self._size = 1 << self._rounds
        # At least 3 entrants are required for a third place match.
        self._third_place = bool(self._options["third_place_match"]) and entrants > 2
        self._match_count = self._size - 1 + (1 if self._third_place else 0)
        logger.debug("Layout: %d rounds, %d matches", self._rounds, self._match_count)

    def _seed(self) -> List[Match]:
        if self._rounds == 0:
            return []
        matches = first_round(len(self._entrants), self._size, self._options["seeding"])
        while len(matches) < self._match_count:
            matches.append(Match.pending())
        return matches

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    @property
    def rounds(self) -> int:
        return self._rounds

    def round_sizes(self) -> Tuple[int, ...]:
        return tuple(self._size >> (k + 1) for k in range(self._rounds))

    def round_start(self, round_index: int) -> int:
        return self._size - (self._size >> round_index)

    def round_of(self, index: int) -> Tuple[int, int]:
        """Return ``(round, position)`` of a bracket match."""

        for round_index in range(self._rounds):
            start = self.round_start(round_index)
            if index < start + (self._size >> (round_index + 1)):
                return round_index, index - start
        raise IndexOutOfRange(index, self._size - 1)

    @property
    def final_index(self) -> Optional[int]:
        return self._size - 2 if self._rounds else None

    @property
    def third_place_index(self) -> Optional[int]:
        return self._size - 1 if self._third_place else None

    def next_matches(self, index: int) -> NextMatches:
        if not 0 <= index < self._match_count:
            raise IndexOutOfRange(index, self._match_count)
        if index in (self.final_index, self.third_place_index):
            return NextMatches()

        round_index, position = self.round_of(index)
        winner = (self.round_start(round_index + 1) + position // 2, position % 2)
        loser = None
        if self._third_place and round_index == self._rounds - 2:
            loser = (self.third_place_index, position % 2)
        return NextMatches(winner=winner, loser=loser)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def champion(self) -> Optional[int]:
        if self._rounds == 0:
            return 0
        final = self._matches[self.final_index]
        winner = final.winner_slot
        if winner is None:
            return None
        return final[winner].index

    def is_done(self) -> bool:
        if self.champion() is None:
            return False
        if self._third_place:
            third = self._matches[self.third_place_index]
            return third.is_reported or third.is_bye
        return True

    def render(self) -> Element:
        labels = tuple(round_label(k, self._rounds) for k in range(self._rounds))
        columns = list(round_columns(0, self.round_sizes(), labels))
        if self._third_place and columns:
            final = columns[-1]
            columns[-1] = Column(
                final.children + (MatchRef(self.third_place_index, Position.bottom(0)),),
                label=final.label,
                position=final.position,
            )
        return Row(tuple(columns))


__all__ = ["SingleElimination", "round_label"]
