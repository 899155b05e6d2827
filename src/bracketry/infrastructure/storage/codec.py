"""JSON codec for match trees.

A spot is stored as ``"empty"``, ``"tbd"`` or an object
``{"entrant": index, "score": n, "winner": bool}``; a match is a list of two
spots. Exported tournaments carry their system, options and entrants so they
can be resumed without replaying results.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from bracketry.errors import EngineError
from bracketry.matches import EntrantScore, EntrantSpot, Match
from bracketry.tournament import Tournament

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class StorageError(Exception):
    """Raised when stored data cannot be decoded into a tournament."""


def _spot_to_data(spot: EntrantSpot) -> Any:
    if spot.node is None:
        return spot.kind.value
    return {"entrant": spot.node.index, "score": spot.node.data.score, "winner": spot.node.data.winner}


def _spot_from_data(data: Any) -> EntrantSpot:
    if data == "empty":
        return EntrantSpot.empty()
    if data == "tbd":
        return EntrantSpot.tbd()
    if not isinstance(data, Mapping) or "entrant" not in data:
        raise StorageError(f"Unrecognised spot: {data!r}")
    index = data["entrant"]
    if isinstance(index, bool) or not isinstance(index, int):
        raise StorageError(f"Entrant index must be an integer, got {index!r}")
    score = data.get("score", 0)
    if isinstance(score, bool) or not isinstance(score, int) or score < 0:
        raise StorageError(f"Score must be a non-negative integer, got {score!r}")
    winner = data.get("winner", False)
    if not isinstance(winner, bool):
        raise StorageError(f"Winner flag must be a boolean, got {winner!r}")
    return EntrantSpot.entrant(index, EntrantScore(score=score, winner=winner))


def matches_to_data(matches: Iterable[Match]) -> List[List[Any]]:
    return [[_spot_to_data(spot) for spot in match] for match in matches]


def matches_from_data(data: Iterable[Any]) -> List[Match]:
    result: List[Match] = []
    for position, entry in enumerate(data):
        if not isinstance(entry, list) or len(entry) != 2:
            raise StorageError(f"Match {position} must be a list of two spots")
        result.append(Match(_spot_from_data(spot) for spot in entry))
    return result


def tournament_to_data(tournament: Tournament[str], *, name: str | None = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "version": FORMAT_VERSION,
        "system": tournament.kind.value,
        "options": dict(tournament.options),
        "entrants": list(tournament.entrants),
        "matches": matches_to_data(tournament.matches),
        "champion": tournament.champion(),
    }
    if name is not None:
        payload = {"name": name, **payload}
    return payload


def tournament_from_data(data: Mapping[str, Any]) -> Tournament[str]:
    version = data.get("version")
    if version != FORMAT_VERSION:
        raise StorageError(f"Unsupported format version {version!r}; expected {FORMAT_VERSION}")
    for key in ("system", "entrants", "matches"):
        if key not in data:
            raise StorageError(f"Missing key '{key}'")
    matches = matches_from_data(data["matches"])
    try:
        return Tournament.resume(data["system"], data["entrants"], matches, data.get("options"))
    except (EngineError, ValueError) as exc:
        raise StorageError(str(exc)) from exc


def write_tournament(path: Path, tournament: Tournament[str], *, name: str | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(tournament_to_data(tournament, name=name), fh, indent=2)
    logger.debug("Exported %d matches to %s", len(tournament.matches), path)
    return path


def read_tournament(path: Path) -> Tournament[str]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise StorageError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise StorageError(f"{path}: top-level document must be an object")
    return tournament_from_data(data)


__all__ = [
    "FORMAT_VERSION",
    "StorageError",
    "matches_to_data",
    "matches_from_data",
    "tournament_to_data",
    "tournament_from_data",
    "write_tournament",
    "read_tournament",
]
