"""Layout-agnostic render trees.

A bracket system describes its topology with three kinds of elements:

- a :class:`Column` stacks its children vertically,
- a :class:`Row` lines its children up horizontally,
- a :class:`MatchRef` is a leaf pointing at a match by index.

Renderers fetch the live match data separately through the index. The tree
only depends on the topology of a system, so building it twice without
changes yields equal trees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple, Union


class PositionKind(str, Enum):
    START = "start"
    END = "end"
    SPACE_AROUND = "space_around"
    SPACE_BETWEEN = "space_between"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Position:
    """A layout hint. Renderers are free to ignore it.

    ``TOP`` and ``BOTTOM`` pin an element at ``offset`` percent from the
    respective edge of its container.
    """

    kind: PositionKind
    offset: int = 0

    @classmethod
    def start(cls) -> Position:
        return cls(PositionKind.START)

    @classmethod
    def end(cls) -> Position:
        return cls(PositionKind.END)

    @classmethod
    def space_around(cls) -> Position:
        return cls(PositionKind.SPACE_AROUND)

    @classmethod
    def space_between(cls) -> Position:
        return cls(PositionKind.SPACE_BETWEEN)

    @classmethod
    def top(cls, percent: int) -> Position:
        return cls(PositionKind.TOP, _percent(percent))

    @classmethod
    def bottom(cls, percent: int) -> Position:
        return cls(PositionKind.BOTTOM, _percent(percent))


def _percent(value: int) -> int:
    if not 0 <= value <= 100:
        raise ValueError(f"position offset must be a percentage, got {value}")
    return value


@dataclass(frozen=True)
class MatchRef:
    index: int
    position: Optional[Position] = None


@dataclass(frozen=True)
class Row:
    children: Tuple[Element, ...] = field(default_factory=tuple)
    label: Optional[str] = None
    position: Optional[Position] = None

    def __iter__(self) -> Iterator[Element]:
        return iter(self.children)


@dataclass(frozen=True)
class Column:
    children: Tuple[Element, ...] = field(default_factory=tuple)
    label: Optional[str] = None
    position: Optional[Position] = None

    def __iter__(self) -> Iterator[Element]:
        return iter(self.children)


Element = Union[Row, Column, MatchRef]


def iter_match_refs(element: Element) -> Iterator[MatchRef]:
    """Yield every :class:`MatchRef` of *element* in document order."""

    stack = [element]
    while stack:
        current = stack.pop()
        if isinstance(current, MatchRef):
            yield current
        else:
            stack.extend(reversed(current.children))


def round_columns(
    start: int,
    sizes: Tuple[int, ...],
    labels: Tuple[str, ...],
) -> Tuple[Column, ...]:
    """Build one evenly spaced column per round of consecutive match indices."""

    columns = []
    index = start
    for size, label in zip(sizes, labels):
        refs = tuple(MatchRef(i) for i in range(index, index + size))
        columns.append(Column(refs, label=label, position=Position.space_around()))
        index += size
    return tuple(columns)


__all__ = [
    "PositionKind",
    "Position",
    "MatchRef",
    "Row",
    "Column",
    "Element",
    "iter_match_refs",
    "round_columns",
]
