"""A tournament over the closed set of builtin bracket systems."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Generic, Iterable, Mapping, Optional, Sequence, Type

from .entrants import Entrants
from .matches import Match, Matches
from .options import OptionValue, OptionValues, TournamentOptions
from .render import Element
from .standings import Standings
from .systems import DoubleElimination, NextMatches, ScoreInput, SingleElimination, System
from .systems.base import T


class TournamentKind(str, Enum):
    SINGLE_ELIMINATION = "single_elimination"
    DOUBLE_ELIMINATION = "double_elimination"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


SYSTEMS: Dict[TournamentKind, Type[System]] = {
    TournamentKind.SINGLE_ELIMINATION: SingleElimination,
    TournamentKind.DOUBLE_ELIMINATION: DoubleElimination,
}


def system_class(kind: TournamentKind | str) -> Type[System]:
    """Return the system implementing *kind*."""

    try:
        return SYSTEMS[TournamentKind(kind)]
    except ValueError as exc:
        known = ", ".join(k.value for k in TournamentKind)
        raise ValueError(f"Unknown tournament system '{kind}'. Available: {known}") from exc


class _kind_or_own:
    """Call *func* with an explicit kind, defaulting to the instance's own kind."""

    def __init__(self, func: Callable[[TournamentKind | str], TournamentOptions]) -> None:
        self._func = func
        self.__doc__ = func.__doc__

    def __get__(self, instance: Any, owner: type) -> Callable[..., TournamentOptions]:
        if instance is None:
            return self._func

        def bound(kind: TournamentKind | str | None = None) -> TournamentOptions:
            return self._func(kind if kind is not None else instance.kind)

        return bound


class Tournament(Generic[T]):
    """A bracket of any builtin kind, dispatching to the matching system."""

    def __init__(
        self,
        kind: TournamentKind | str,
        entrants: Iterable[T],
        options: Mapping[str, OptionValue] | None = None,
    ) -> None:
        system = system_class(kind)
        self.kind = TournamentKind(kind)
        self._inner: System[T] = system(entrants, options)

    @classmethod
    def resume(
        cls,
        kind: TournamentKind | str,
        entrants: Iterable[T],
        matches: Iterable[Match],
        options: Mapping[str, OptionValue] | None = None,
    ) -> Tournament[T]:
        system = system_class(kind)
        tournament = cls.__new__(cls)
        tournament.kind = TournamentKind(kind)
        tournament._inner = system.resume(entrants, matches, options)
        return tournament

    @_kind_or_own
    def options_schema(kind: TournamentKind | str) -> TournamentOptions:
        """Options accepted by *kind*, or by this tournament when called on an instance."""

        return system_class(kind).options_schema()

    @property
    def system(self) -> System[T]:
        return self._inner

    @property
    def entrants(self) -> Entrants[T]:
        return self._inner.entrants

    @property
    def matches(self) -> Matches:
        return self._inner.matches

    @property
    def options(self) -> OptionValues:
        return self._inner.options

    def get_match(self, index: int) -> Match:
        return self._inner.get_match(index)

    def next_matches(self, index: int) -> NextMatches:
        return self._inner.next_matches(index)

    def report_result(self, index: int, scores: Sequence[ScoreInput]) -> None:
        self._inner.report_result(index, scores)

    def reset_result(self, index: int) -> None:
        self._inner.reset_result(index)

    def standings(self) -> Standings:
        return self._inner.standings()

    def render(self) -> Element:
        return self._inner.render()

    def champion(self) -> Optional[int]:
        return self._inner.champion()

    def is_done(self) -> bool:
        return self._inner.is_done()

    def __repr__(self) -> str:
        return f"Tournament(kind={self.kind.value!r}, entrants={len(self.entrants)})"


__all__ = ["TournamentKind", "SYSTEMS", "system_class", "Tournament"]
