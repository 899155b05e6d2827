"""Ranked standings tables derived from a match tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Tuple, Union

from .matches import Matches

EntryValue = Union[int, float, str]


@dataclass(frozen=True)
class StandingsEntry:
    """One row of a standings table: an entrant index and its value columns."""

    index: int
    values: Tuple[EntryValue, ...]


class Standings:
    """An ordered standings table with named value columns."""

    def __init__(self, keys: Iterable[str], entries: Iterable[StandingsEntry]) -> None:
        self._keys: Tuple[str, ...] = tuple(keys)
        self._entries: Tuple[StandingsEntry, ...] = tuple(entries)

    @classmethod
    def builder(cls) -> StandingsBuilder:
        return StandingsBuilder()

    def keys(self) -> Tuple[str, ...]:
        return self._keys

    def __iter__(self) -> Iterator[StandingsEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, position: int) -> StandingsEntry:
        return self._entries[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Standings):
            return NotImplemented
        return self._keys == other._keys and self._entries == other._entries

    def __repr__(self) -> str:
        return f"Standings(keys={self._keys!r}, entries={self._entries!r})"

    def as_dict(self, index: int) -> Dict[str, EntryValue]:
        """Return the value columns of entrant *index* keyed by column name."""

        for entry in self._entries:
            if entry.index == index:
                return dict(zip(self._keys, entry.values))
        raise KeyError(index)


class StandingsBuilder:
    def __init__(self) -> None:
        self._keys: List[str] = []
        self._entries: List[StandingsEntry] = []

    def key(self, key: str) -> StandingsBuilder:
        self._keys.append(key)
        return self

    def entry(self, index: int, *values: EntryValue) -> StandingsBuilder:
        if len(values) != len(self._keys):
            raise ValueError(f"expected {len(self._keys)} values, got {len(values)}")
        self._entries.append(StandingsEntry(index=index, values=tuple(values)))
        return self

    def sort(self, key: Callable[[StandingsEntry], object]) -> StandingsBuilder:
        self._entries.sort(key=key)
        return self

    def build(self) -> Standings:
        return Standings(self._keys, self._entries)


@dataclass
class _Record:
    wins: int = 0
    losses: int = 0
    points: int = 0


def win_loss_standings(matches: Matches) -> Standings:
    """Rank every entrant with at least one reported match.

    Rows are ordered by wins (descending), then losses (ascending), then the
    entrant index. Byes and pending matches never count.
    """

    records: Dict[int, _Record] = {}
    for match in matches:
        winner = match.winner_slot
        if winner is None:
            continue
        for slot, spot in enumerate(match):
            node = spot.node
            record = records.setdefault(node.index, _Record())  # type: ignore[union-attr]
            record.points += node.data.score  # type: ignore[union-attr]
            if slot == winner:
                record.wins += 1
            else:
                record.losses += 1

    builder = Standings.builder().key("wins").key("losses").key("points")
    for index, record in records.items():
        builder.entry(index, record.wins, record.losses, record.points)
    builder.sort(key=lambda entry: (-entry.values[0], entry.values[1], entry.index))
    return builder.build()


__all__ = [
    "EntryValue",
    "StandingsEntry",
    "Standings",
    "StandingsBuilder",
    "win_loss_standings",
]
