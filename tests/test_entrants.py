"""Tests for the entrant registry."""

from __future__ import annotations

import pytest

from bracketry import Entrants, FrozenRegistry, SingleElimination


def test_append_and_lookup() -> None:
    entrants: Entrants[str] = Entrants()
    entrants.append("Alice")
    entrants.append("Bob")

    assert len(entrants) == 2
    assert entrants[1] == "Bob"
    assert entrants.get(0) == "Alice"
    assert entrants.get(2) is None
    assert entrants.get(-1) is None
    assert entrants == ["Alice", "Bob"]


def test_frozen_registry_rejects_append() -> None:
    entrants = Entrants(["Alice"]).freeze()
    with pytest.raises(FrozenRegistry):
        entrants.append("Bob")
    assert list(entrants) == ["Alice"]


def test_system_freezes_its_own_copy() -> None:
    """The caller keeps an open registry while the bracket holds a frozen one."""
    entrants = Entrants(["Alice", "Bob", "Carol"])
    bracket = SingleElimination(entrants)

    assert not entrants.frozen
    assert bracket.entrants.frozen
    entrants.append("Dave")
    assert len(bracket.entrants) == 3
    with pytest.raises(FrozenRegistry):
        bracket.entrants.append("Erin")
