"""Match tree primitives: spots, nodes, matches and the indexed match list."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import IndexOutOfRange


@dataclass(frozen=True)
class EntrantScore:
    """A score and a winner flag attached to an entrant within one match."""

    score: int = 0
    winner: bool = False


@dataclass(frozen=True)
class Node:
    """A resolved reference to an entrant together with its per-match data."""

    index: int
    data: EntrantScore = field(default_factory=EntrantScore)

    def with_data(self, data: EntrantScore) -> Node:
        return replace(self, data=data)


class SpotKind(str, Enum):
    ENTRANT = "entrant"
    EMPTY = "empty"
    TBD = "tbd"


@dataclass(frozen=True)
class EntrantSpot:
    """A spot within a match.

    A spot either holds an entrant, is permanently empty (a bye that never
    receives an opponent) or is still to be decided by an upstream match.
    """

    kind: SpotKind
    node: Optional[Node] = None

    @classmethod
    def entrant(cls, index: int, data: EntrantScore | None = None) -> EntrantSpot:
        return cls(SpotKind.ENTRANT, Node(index, data or EntrantScore()))

    @classmethod
    def empty(cls) -> EntrantSpot:
        return _EMPTY

    @classmethod
    def tbd(cls) -> EntrantSpot:
        return _TBD

    @property
    def is_entrant(self) -> bool:
        return self.kind is SpotKind.ENTRANT

    @property
    def is_empty(self) -> bool:
        return self.kind is SpotKind.EMPTY

    @property
    def is_tbd(self) -> bool:
        return self.kind is SpotKind.TBD

    @property
    def index(self) -> Optional[int]:
        """Entrant index held by this spot, ``None`` for byes and pending spots."""

        return self.node.index if self.node is not None else None

    def same_occupant(self, other: EntrantSpot) -> bool:
        """Compare spots by occupant only, ignoring per-match data."""

        return self.kind is other.kind and self.index == other.index

    def __repr__(self) -> str:
        if self.node is None:
            return f"EntrantSpot.{self.kind.name}"
        return f"EntrantSpot.ENTRANT({self.node.index}, {self.node.data})"


_EMPTY = EntrantSpot(SpotKind.EMPTY)
_TBD = EntrantSpot(SpotKind.TBD)


class Match:
    """A match between exactly two spots."""

    __slots__ = ("entrants",)

    def __init__(self, entrants: Iterable[EntrantSpot]) -> None:
        spots = list(entrants)
        if len(spots) != 2:
            raise ValueError(f"a match holds exactly two spots, got {len(spots)}")
        self.entrants: List[EntrantSpot] = spots

    @classmethod
    def pending(cls) -> Match:
        return cls([EntrantSpot.tbd(), EntrantSpot.tbd()])

    def __getitem__(self, slot: int) -> EntrantSpot:
        return self.entrants[slot]

    def __setitem__(self, slot: int, spot: EntrantSpot) -> None:
        self.entrants[slot] = spot

    def __iter__(self) -> Iterator[EntrantSpot]:
        return iter(self.entrants)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Match):
            return NotImplemented
        return self.entrants == other.entrants

    def __repr__(self) -> str:
        return f"Match({self.entrants!r})"

    def copy(self) -> Match:
        return Match(self.entrants)

    @property
    def is_ready(self) -> bool:
        """Both spots hold an entrant, so a result can be reported."""

        return all(spot.is_entrant for spot in self.entrants)

    @property
    def is_bye(self) -> bool:
        return any(spot.is_empty for spot in self.entrants)

    @property
    def winner_slot(self) -> Optional[int]:
        """Slot of the reported winner, ``None`` while no result is recorded."""

        if not self.is_ready:
            return None
        flags = [spot.node.data.winner for spot in self.entrants]  # type: ignore[union-attr]
        if flags.count(True) != 1:
            return None
        return flags.index(True)

    @property
    def is_reported(self) -> bool:
        return self.winner_slot is not None

    def cleared(self) -> Match:
        """Return a copy with the per-entrant data reset to defaults."""

        spots = [
            EntrantSpot.entrant(spot.node.index) if spot.node is not None else spot
            for spot in self.entrants
        ]
        return Match(spots)


class Matches:
    """The ordered match tree of a bracket with bounds-checked access."""

    def __init__(self, matches: Iterable[Match] = ()) -> None:
        self._items: List[Match] = list(matches)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Match]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Match:
        return self._items[self.check(index)]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Matches):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Matches({self._items!r})"

    def check(self, index: int) -> int:
        """Validate *index* against the tree and return it unchanged."""

        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"match indices must be integers, got {type(index).__name__}")
        if not 0 <= index < len(self._items):
            raise IndexOutOfRange(index, len(self._items))
        return index

    def get(self, index: int) -> Optional[Match]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def set_spot(self, index: int, slot: int, spot: EntrantSpot) -> None:
        self._items[self.check(index)][slot] = spot

    def replace(self, index: int, match: Match) -> None:
        self._items[self.check(index)] = match

    def snapshot(self) -> Tuple[Match, ...]:
        return tuple(match.copy() for match in self._items)

    def restore(self, snapshot: Tuple[Match, ...]) -> None:
        self._items = [match.copy() for match in snapshot]

    def copy(self) -> Matches:
        return Matches(match.copy() for match in self._items)


__all__ = [
    "EntrantScore",
    "Node",
    "SpotKind",
    "EntrantSpot",
    "Match",
    "Matches",
]
