"""Tests for standings tables."""

from __future__ import annotations

import pytest

from bracketry import DoubleElimination, SingleElimination, Standings

WIN = [(2, True), (1, False)]
LOSS = [(0, False), (3, True)]


def _played() -> SingleElimination:
    bracket = SingleElimination(["Alice", "Bob", "Carol", "Dave", "Erin"])
    bracket.report_result(0, WIN)  # Alice beats Bob
    bracket.report_result(1, LOSS)  # Dave beats Carol
    bracket.report_result(4, LOSS)  # Dave beats Alice
    return bracket


def test_standings_order_and_values() -> None:
    standings = _played().standings()

    assert standings.keys() == ("wins", "losses", "points")
    assert [entry.index for entry in standings] == [3, 0, 1, 2]
    assert standings.as_dict(3) == {"wins": 2, "losses": 0, "points": 6}
    assert standings.as_dict(0) == {"wins": 1, "losses": 1, "points": 2}


def test_byes_do_not_count() -> None:
    standings = _played().standings()
    with pytest.raises(KeyError):
        standings.as_dict(4)


def test_standings_are_deterministic() -> None:
    bracket = _played()
    assert bracket.standings() == bracket.standings()


def test_win_loss_totals_match_reported_results() -> None:
    bracket = DoubleElimination([f"team-{index}" for index in range(8)])
    for index in (0, 1, 2, 3, 4, 5, 7, 8):
        bracket.report_result(index, WIN)

    standings = bracket.standings()
    reported = sum(1 for match in bracket.matches if match.is_reported)
    assert reported == 8
    assert sum(entry.values[0] for entry in standings) == reported
    assert sum(entry.values[1] for entry in standings) == reported


def test_empty_standings_before_any_result() -> None:
    standings = SingleElimination(["a", "b", "c"]).standings()
    assert len(standings) == 0
    assert standings == Standings(("wins", "losses", "points"), ())


def test_builder_checks_value_count() -> None:
    builder = Standings.builder().key("wins")
    with pytest.raises(ValueError):
        builder.entry(0, 1, 2)
