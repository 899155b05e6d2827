"""Tests for the tournament facade over the builtin systems."""

from __future__ import annotations

import pytest

from bracketry import (
    DoubleElimination,
    InvalidEntrantCount,
    InvalidOption,
    SingleElimination,
    Tournament,
    TournamentKind,
)


@pytest.mark.parametrize(
    ("kind", "system"),
    [
        ("single_elimination", SingleElimination),
        (TournamentKind.DOUBLE_ELIMINATION, DoubleElimination),
    ],
)
def test_dispatches_to_system(kind: str, system: type) -> None:
    tournament = Tournament(kind, ["a", "b", "c", "d"])
    assert isinstance(tournament.system, system)
    assert tournament.entrants == ["a", "b", "c", "d"]
    assert tournament.matches == tournament.system.matches


def test_unknown_kind_lists_available_systems() -> None:
    with pytest.raises(ValueError) as excinfo:
        Tournament("round_robin", ["a", "b"])
    assert "single_elimination" in str(excinfo.value)
    assert "double_elimination" in str(excinfo.value)


def test_errors_surface_unchanged() -> None:
    with pytest.raises(InvalidEntrantCount):
        Tournament("double_elimination", [])
    with pytest.raises(InvalidOption):
        Tournament("single_elimination", ["a", "b"], {"bracket_reset": True})


def test_options_schema_by_kind() -> None:
    assert list(Tournament.options_schema("double_elimination")) == ["bracket_reset", "seeding"]
    assert list(Tournament.options_schema("single_elimination")) == ["seeding", "third_place_match"]


def test_play_through_facade() -> None:
    tournament = Tournament("single_elimination", ["a", "b"])
    assert tournament.next_matches(0).winner is None
    tournament.report_result(0, [(0, False), (1, True)])
    assert tournament.champion() == 1
    assert tournament.is_done()
    assert tournament.standings()[0].index == 1

    tournament.reset_result(0)
    assert tournament.champion() is None


def test_resume_keeps_kind() -> None:
    original = Tournament("double_elimination", ["a", "b", "c"], {"bracket_reset": False})
    original.report_result(0, [(1, True), (0, False)])

    resumed = Tournament.resume("double_elimination", ["a", "b", "c"], original.matches, {"bracket_reset": False})

    assert resumed.kind is TournamentKind.DOUBLE_ELIMINATION
    assert resumed.matches == original.matches
    assert resumed.options == original.options
    assert repr(resumed) == "Tournament(kind='double_elimination', entrants=3)"


def test_kind_labels() -> None:
    assert TournamentKind.SINGLE_ELIMINATION.label == "Single elimination"


def test_options_schema_on_instance() -> None:
    tournament = Tournament("double_elimination", ["a", "b"])
    assert list(tournament.options_schema()) == ["bracket_reset", "seeding"]
    assert list(tournament.options_schema("single_elimination")) == ["seeding", "third_place_match"]
