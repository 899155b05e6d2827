"""Shared machinery for elimination bracket systems.

Every system owns an :class:`~bracketry.entrants.Entrants` registry, its
option values and a fully shaped :class:`~bracketry.matches.Matches` tree.
Systems only describe their topology (:meth:`System.next_matches`) and how
round 0 is seeded; reporting, byes and cascade invalidation live here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import (
    ClassVar,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from ..entrants import Entrants
from ..errors import (
    InconsistentScores,
    InvalidEntrant,
    InvalidEntrantCount,
    InvalidNumberOfMatches,
    UnreadyMatch,
)
from ..matches import EntrantScore, EntrantSpot, Match, Matches
from ..options import OptionValue, OptionValues, TournamentOptions, coerce_values
from ..render import Element
from ..standings import Standings, win_loss_standings

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S", bound="System")

ScoreInput = Union[EntrantScore, Tuple[int, bool]]
Destination = Tuple[int, int]
SpotWrite = Tuple[int, int, EntrantSpot]


@dataclass(frozen=True)
class NextMatches:
    """Where the winner and loser of a match are sent, as ``(match, slot)``."""

    winner: Optional[Destination] = None
    loser: Optional[Destination] = None


def round_count(entrants: int) -> int:
    """Number of rounds needed for *entrants*: ``ceil(log2(n))``, 0 for ``n <= 1``."""

    if entrants <= 1:
        return 0
    return (entrants - 1).bit_length()


def check_score(index: int, data: EntrantScore) -> None:
    """Reject a score that is not a non-negative integer."""

    if isinstance(data.score, bool) or not isinstance(data.score, int):
        raise InconsistentScores(index, f"score must be an integer, got {data.score!r}")
    if data.score < 0:
        raise InconsistentScores(index, f"score must not be negative, got {data.score}")


def normalize_scores(index: int, scores: Sequence[ScoreInput]) -> Tuple[EntrantScore, EntrantScore]:
    """Turn caller supplied per-slot scores into two :class:`EntrantScore`."""

    if len(scores) != 2:
        raise InconsistentScores(index, f"expected scores for 2 spots, got {len(scores)}")

    result: List[EntrantScore] = []
    for item in scores:
        if isinstance(item, EntrantScore):
            data = item
        else:
            try:
                score, winner = item
            except (TypeError, ValueError) as exc:
                raise InconsistentScores(
                    index, f"expected a (score, winner) pair, got {item!r}"
                ) from exc
            data = EntrantScore(score=score, winner=bool(winner))
        check_score(index, data)
        result.append(data)

    winners = sum(1 for data in result if data.winner)
    if winners == 0:
        raise InconsistentScores(index, "no spot is marked as winner")
    if winners > 1:
        raise InconsistentScores(index, "both spots are marked as winner")
    return result[0], result[1]


def match_outputs(match: Match) -> Tuple[EntrantSpot, EntrantSpot]:
    """Return the ``(winner, loser)`` spots a match currently forwards.

    A reported match forwards its entrants, a bye forwards its sole occupant
    (which may itself still be pending) and a permanent empty loser. Any other
    match forwards two pending spots.
    """

    if match.is_ready:
        winner = match.winner_slot
        if winner is None:
            return EntrantSpot.tbd(), EntrantSpot.tbd()
        return (
            EntrantSpot.entrant(match[winner].index),  # type: ignore[arg-type]
            EntrantSpot.entrant(match[1 - winner].index),  # type: ignore[arg-type]
        )

    first, second = match
    if first.is_empty or second.is_empty:
        other = second if first.is_empty else first
        if other.is_entrant:
            other = EntrantSpot.entrant(other.index)  # type: ignore[arg-type]
        return other, EntrantSpot.empty()

    return EntrantSpot.tbd(), EntrantSpot.tbd()


class System(ABC, Generic[T]):
    """Base class of all bracket systems."""

    kind: ClassVar[str]
    minimum_entrants: ClassVar[int] = 1

    _entrants: Entrants[T]
    _options: OptionValues
    _matches: Matches
    _match_count: int

    def __init__(
        self,
        entrants: Iterable[T],
        options: Mapping[str, OptionValue] | None = None,
    ) -> None:
        self._setup(entrants, options)
        logger.debug(
            "Creating new %s bracket with %d entrants", type(self).__name__, len(self._entrants)
        )
        self._matches = Matches(self._seed())
        self._propagate(range(len(self._matches)))
        logger.debug("Created %s bracket with %d matches", type(self).__name__, len(self._matches))

    def _setup(self, entrants: Iterable[T], options: Mapping[str, OptionValue] | None) -> None:
        registry = entrants.frozen_copy() if isinstance(entrants, Entrants) else Entrants(entrants).freeze()
        if len(registry) < self.minimum_entrants:
            raise InvalidEntrantCount(len(registry), self.minimum_entrants)
        self._entrants = registry
        self._options = coerce_values(options, self.options_schema())
        logger.debug("Using options: %s", dict(self._options))
        self._configure()

    @classmethod
    def resume(
        cls: Type[S],
        entrants: Iterable[T],
        matches: Iterable[Match],
        options: Mapping[str, OptionValue] | None = None,
    ) -> S:
        """Rebuild a system from a previously materialized match tree."""

        system = cls.__new__(cls)
        system._setup(entrants, options)
        tree = Matches(match.copy() for match in matches)
        logger.debug(
            "Resuming %s bracket with %d entrants and %d matches",
            cls.__name__,
            len(system._entrants),
            len(tree),
        )
        if len(tree) != system._match_count:
            raise InvalidNumberOfMatches(expected=system._match_count, found=len(tree))
        for index, match in enumerate(tree):
            winners = 0
            for spot in match:
                if spot.node is None:
                    continue
                if not 0 <= spot.node.index < len(system._entrants):
                    raise InvalidEntrant(spot.node.index, len(system._entrants))
                check_score(index, spot.node.data)
                winners += bool(spot.node.data.winner)
            if winners > 1:
                raise InconsistentScores(index, "both spots are marked as winner")
        system._matches = tree
        return system

    # ------------------------------------------------------------------
    # Topology, implemented per system
    # ------------------------------------------------------------------
    @classmethod
    @abstractmethod
    def options_schema(cls) -> TournamentOptions:
        """Return the options accepted by this system."""

    @abstractmethod
    def _configure(self) -> None:
        """Compute the fixed layout of the bracket from entrants and options."""

    @abstractmethod
    def _seed(self) -> List[Match]:
        """Return the initial, fully shaped list of matches."""

    @abstractmethod
    def next_matches(self, index: int) -> NextMatches:
        """Return where the winner and loser of match *index* are sent."""

    @abstractmethod
    def render(self) -> Element:
        """Return the render tree describing the topology of this system."""

    @abstractmethod
    def champion(self) -> Optional[int]:
        """Return the index of the overall winner once it is decided."""

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def entrants(self) -> Entrants[T]:
        return self._entrants

    @property
    def matches(self) -> Matches:
        return self._matches.copy()

    @property
    def options(self) -> OptionValues:
        return self._options

    def get_match(self, index: int) -> Match:
        return self._matches[index].copy()

    def is_done(self) -> bool:
        return self.champion() is not None

    def standings(self) -> Standings:
        return win_loss_standings(self._matches)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def report_result(self, index: int, scores: Sequence[ScoreInput]) -> None:
        """Record the result of match *index* and propagate it downstream.

        Re-reporting overwrites the previous result. Downstream matches that
        depended on a previous winner or loser are reset.
        """

        match = self._matches[index]
        if not match.is_ready:
            raise UnreadyMatch(index)
        first, second = normalize_scores(index, scores)

        logger.debug("Reporting result for match %d: %s, %s", index, first, second)
        updated = Match(
            [
                EntrantSpot.entrant(match[0].index, first),  # type: ignore[arg-type]
                EntrantSpot.entrant(match[1].index, second),  # type: ignore[arg-type]
            ]
        )
        self._apply(index, updated)

    def reset_result(self, index: int) -> None:
        """Clear the result of match *index* and everything depending on it."""

        match = self._matches[index]
        if not match.is_ready:
            raise UnreadyMatch(index)
        logger.debug("Resetting match %d", index)
        self._apply(index, match.cleared())

    def _apply(self, index: int, updated: Match) -> None:
        snapshot = self._matches.snapshot()
        try:
            self._matches.replace(index, updated)
            self._propagate([index])
        except Exception:
            self._matches.restore(snapshot)
            raise

    def _outputs(self, index: int) -> List[SpotWrite]:
        """Spots that match *index* writes into downstream matches."""

        next_matches = self.next_matches(index)
        winner, loser = match_outputs(self._matches[index])
        writes: List[SpotWrite] = []
        if next_matches.winner is not None:
            writes.append((*next_matches.winner, winner))
        if next_matches.loser is not None:
            writes.append((*next_matches.loser, loser))
        return writes

    def _settle(self, index: int) -> None:
        """Flag the sole occupant of a bye as its winner."""

        match = self._matches[index]
        first, second = match
        if first.is_empty == second.is_empty:
            return
        slot = 1 if first.is_empty else 0
        spot = match[slot]
        if spot.node is not None and not spot.node.data.winner:
            match[slot] = EntrantSpot.entrant(spot.node.index, EntrantScore(winner=True))

    def _propagate(self, start: Iterable[int]) -> None:
        """Push the outputs of *start* forward until no spot changes."""

        queue = deque(start)
        while queue:
            index = queue.popleft()
            self._settle(index)
            for target, slot, spot in self._outputs(index):
                current = self._matches[target]
                if current[slot].same_occupant(spot):
                    continue
                if current.is_reported:
                    logger.debug("Invalidating result of match %d", target)
                updated = current.cleared()
                updated[slot] = spot
                self._matches.replace(target, updated)
                queue.append(target)


__all__ = [
    "NextMatches",
    "ScoreInput",
    "System",
    "check_score",
    "match_outputs",
    "normalize_scores",
    "round_count",
]
