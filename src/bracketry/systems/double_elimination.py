"""Double elimination brackets.

Layout of the match list for ``R`` winners rounds (``size = 2^R``):

- ``0 .. size - 2``: the winners bracket, laid out like a single elimination
  bracket,
- ``size - 1 .. 2 * size - 4``: the losers bracket with ``2 * (R - 1)``
  rounds. Even rounds pair off survivors, odd rounds take in the losers
  dropping down from winners round ``(j + 1) // 2``,
- the grand final, followed by the reserved bracket reset match when the
  ``bracket_reset`` option is enabled.

All offsets are computed once when the bracket is generated.
"""

from __future__ import annotations

import logging
from enum import Enum
from itertools import accumulate
from typing import List, Optional, Tuple

from ..errors import IndexOutOfRange
from ..matches import EntrantSpot, Match
from ..options import TournamentOptions
from ..render import Column, Element, MatchRef, Position, Row, round_columns
from .base import NextMatches, SpotWrite, System, T, round_count
from .seeding import SEEDING_MODES, SEQUENTIAL, first_round

logger = logging.getLogger(__name__)


class GrandFinalState(str, Enum):
    FIRST_MATCH_PENDING = "first_match_pending"
    RESET_PENDING = "reset_pending"
    DONE = "done"


class DoubleElimination(System[T]):
    """A double elimination bracket with an optional bracket reset."""

    kind = "double_elimination"

    @classmethod
    def options_schema(cls) -> TournamentOptions:
        return (
            TournamentOptions.builder()
            .option(
                "bracket_reset",
                "Play a second grand final if the losers bracket champion wins the first",
                True,
            )
            .option("seeding", "Placement of entrants in the first round", SEQUENTIAL, choices=SEEDING_MODES)
            .build()
        )

    def _configure(self) -> None:
        self._rounds = round_count(len(self._entrants))
        self._size = 1 << self._rounds
        self._reset = bool(self._options["bracket_reset"])

        if self._rounds == 0:
            self._winners_sizes: Tuple[int, ...] = ()
            self._losers_sizes: Tuple[int, ...] = ()
            self._losers_starts: Tuple[int, ...] = ()
            self._grand_final: Optional[int] = None
            self._reset_index: Optional[int] = None
            self._match_count = 0
            return

        self._winners_sizes = tuple(self._size >> (k + 1) for k in range(self._rounds))
        self._losers_sizes = tuple(self._size >> (2 + j // 2) for j in range(2 * (self._rounds - 1)))
        self._lower_bracket_index = self._size - 1
        self._losers_starts = tuple(
            self._lower_bracket_index + offset
            for offset in accumulate((0,) + self._losers_sizes[:-1])
        ) if self._losers_sizes else ()
        self._grand_final = self._lower_bracket_index + sum(self._losers_sizes)
        self._reset_index = self._grand_final + 1 if self._reset else None
        self._match_count = self._grand_final + (2 if self._reset else 1)
        logger.debug(
            "Layout: %d winners rounds, %d losers rounds, grand final at %d",
            self._rounds,
            len(self._losers_sizes),
            self._grand_final,
        )

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

    @property
    def lower_bracket_index(self) -> Optional[int]:
        """Index of the first losers bracket match, ``None`` without one."""

        return self._lower_bracket_index if self._losers_sizes else None

    @property
    def grand_final_index(self) -> Optional[int]:
        return self._grand_final

    @property
    def reset_index(self) -> Optional[int]:
        return self._reset_index

    def winners_round_start(self, round_index: int) -> int:
        return self._size - (self._size >> round_index)

    def _locate(self, index: int, starts: Tuple[int, ...], sizes: Tuple[int, ...]) -> Tuple[int, int]:
        for round_index, (start, size) in enumerate(zip(starts, sizes)):
            if start <= index < start + size:
                return round_index, index - start
        raise IndexOutOfRange(index, self._match_count)

    def winners_round_of(self, index: int) -> Tuple[int, int]:
        starts = tuple(self.winners_round_start(k) for k in range(self._rounds))
        return self._locate(index, starts, self._winners_sizes)

    def losers_round_of(self, index: int) -> Tuple[int, int]:
        return self._locate(index, self._losers_starts, self._losers_sizes)

    def _drop_position(self, round_index: int, position: int) -> Tuple[int, int]:
        """Losers bracket destination for the loser of a winners bracket match.

        Round 0 losers pair off in the first losers round. Later rounds drop
        into slot 1 of losers round ``2k - 1``, reversing the order on every
        other round so dropped entrants land on the far side of the opponents
        they already beat.

        Swapping halves on even rounds clears rematches in the second drop
        round of a 32 entrant bracket but adds them two rounds later, so
        even rounds keep the straight order.
        """

        if round_index == 0:
            return self._losers_starts[0] + position // 2, position % 2
        count = self._winners_sizes[round_index]
        target = count - 1 - position if round_index % 2 == 1 else position
        return self._losers_starts[2 * round_index - 1] + target, 1

    def next_matches(self, index: int) -> NextMatches:
        if not 0 <= index < self._match_count:
            raise IndexOutOfRange(index, self._match_count)

        if index >= self._grand_final:
            return NextMatches()

        if index < self._size - 1:
            round_index, position = self.winners_round_of(index)
            if round_index == self._rounds - 1:
                winner = (self._grand_final, 0)
            else:
                winner = (self.winners_round_start(round_index + 1) + position // 2, position % 2)
            if self._losers_sizes:
                loser = self._drop_position(round_index, position)
            else:
                loser = (self._grand_final, 1)
            return NextMatches(winner=winner, loser=loser)

        round_index, position = self.losers_round_of(index)
        if round_index == len(self._losers_sizes) - 1:
            winner = (self._grand_final, 1)
        elif round_index % 2 == 0:
            winner = (self._losers_starts[round_index + 1] + position, 0)
        else:
            winner = (self._losers_starts[round_index + 1] + position // 2, position % 2)
        return NextMatches(winner=winner)

    def _outputs(self, index: int) -> List[SpotWrite]:
        if index != self._grand_final or self._reset_index is None:
            return super()._outputs(index)

        # The reset match is only populated when the losers bracket champion
        # takes the first grand final.
        grand_final = self._matches[index]
        if grand_final.winner_slot == 1:
            spots = (
                EntrantSpot.entrant(grand_final[0].index),  # type: ignore[arg-type]
                EntrantSpot.entrant(grand_final[1].index),  # type: ignore[arg-type]
            )
        else:
            spots = (EntrantSpot.tbd(), EntrantSpot.tbd())
        return [(self._reset_index, slot, spot) for slot, spot in enumerate(spots)]

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def state(self) -> GrandFinalState:
        if self._rounds == 0:
            return GrandFinalState.DONE
        winner = self._matches[self._grand_final].winner_slot
        if winner is None:
            return GrandFinalState.FIRST_MATCH_PENDING
        if winner == 0 or self._reset_index is None:
            return GrandFinalState.DONE
        if self._matches[self._reset_index].is_reported:
            return GrandFinalState.DONE
        return GrandFinalState.RESET_PENDING

    def champion(self) -> Optional[int]:
        if self.state() is not GrandFinalState.DONE:
            return None
        if self._rounds == 0:
            return 0
        decider = self._matches[self._grand_final]
        if decider.winner_slot == 1 and self._reset_index is not None:
            decider = self._matches[self._reset_index]
        return decider[decider.winner_slot].index  # type: ignore[index]

    def render(self) -> Element:
        winners_labels = tuple(
            "Winners final" if k == self._rounds - 1 else f"Winners round {k + 1}"
            for k in range(self._rounds)
        )
        losers_labels = tuple(
            "Losers final" if j == len(self._losers_sizes) - 1 else f"Losers round {j + 1}"
            for j in range(len(self._losers_sizes))
        )

        brackets = [
            Row(
                round_columns(0, self._winners_sizes, winners_labels),
                label="Winners bracket",
                position=Position.space_around(),
            )
        ]
        if self._losers_sizes:
            brackets.append(
                Row(
                    round_columns(self._lower_bracket_index, self._losers_sizes, losers_labels),
                    label="Losers bracket",
                    position=Position.space_around(),
                )
            )

        if self._grand_final is None:
            return Row((Column(tuple(brackets), position=Position.space_around()),))

        # Align the grand final with the winners final: the winners bracket
        # takes size / 2 of size / 2 + size / 4 rows.
        if self._losers_sizes:
            first_winners, first_losers = self._winners_sizes[0], self._losers_sizes[0]
            offset = round(100 * first_winners / (first_winners + first_losers) / 2)
        else:
            offset = 50
        finals = [MatchRef(self._grand_final, Position.top(offset))]
        if self._reset_index is not None:
            finals.append(MatchRef(self._reset_index, Position.top(offset)))

        return Row(
            (
                Column(tuple(brackets), position=Position.space_around()),
                Column(tuple(finals), label="Grand final", position=Position.space_around()),
            )
        )


__all__ = ["DoubleElimination", "GrandFinalState"]
