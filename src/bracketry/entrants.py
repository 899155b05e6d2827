"""Ordered, index-addressed registry of tournament entrants."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, List, Optional, TypeVar, overload

from .errors import FrozenRegistry

T = TypeVar("T")


class Entrants(Generic[T]):
    """A list of entrants addressed by their position.

    Entrants are only ever appended. Once a bracket system consumed the
    registry it is frozen, since reordering would invalidate the seeding.
    """

    def __init__(self, entrants: Iterable[T] = ()) -> None:
        self._items: List[T] = list(entrants)
        self._frozen = False

    def get(self, index: int) -> Optional[T]:
        """Return the entrant at *index* or ``None`` when it does not exist."""

        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def append(self, entrant: T) -> None:
        if self._frozen:
            raise FrozenRegistry("entrants cannot be added once a bracket has been generated")
        self._items.append(entrant)

    def freeze(self) -> Entrants[T]:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def frozen_copy(self) -> Entrants[T]:
        return Entrants(self._items).freeze()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> List[T]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entrants):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Entrants({self._items!r})"


__all__ = ["Entrants"]
