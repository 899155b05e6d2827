"""Error taxonomy shared by every bracket system."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all errors raised by the bracket engine."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidEntrantCount(EngineError):
    """Raised when a system cannot be built for the given number of entrants."""

    def __init__(self, count: int, minimum: int = 1) -> None:
        super().__init__(f"invalid number of entrants: {count} (at least {minimum} required)")
        self.count = count
        self.minimum = minimum


class InvalidOption(EngineError):
    """Raised when supplied option values do not match the declared schema."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"invalid option '{key}': {message}")
        self.key = key


class IndexOutOfRange(EngineError, IndexError):
    """Raised when a match index lies outside of the match tree."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"match index {index} is out of range for {length} matches")
        self.index = index
        self.length = length


class UnreadyMatch(EngineError):
    """Raised when a result is reported against a match with a bye or pending slot."""

    def __init__(self, index: int) -> None:
        super().__init__(f"match {index} is not ready: both spots must hold an entrant")
        self.index = index


class InconsistentScores(EngineError):
    """Raised when reported scores do not name exactly one winner."""

    def __init__(self, index: int, message: str) -> None:
        super().__init__(f"inconsistent scores for match {index}: {message}")
        self.index = index


class InvalidNumberOfMatches(EngineError):
    """Raised when resuming from a match tree with the wrong shape."""

    def __init__(self, expected: int, found: int) -> None:
        super().__init__(f"invalid number of matches: expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class InvalidEntrant(EngineError):
    """Raised when a resumed match refers to an entrant that does not exist."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(
            f"invalid entrant: match refers to entrant at {index} but only {length} entrants are given"
        )
        self.index = index
        self.length = length


class FrozenRegistry(EngineError):
    """Raised when entrants are appended after a system consumed the registry."""


__all__ = [
    "EngineError",
    "InvalidEntrantCount",
    "InvalidOption",
    "IndexOutOfRange",
    "UnreadyMatch",
    "InconsistentScores",
    "InvalidNumberOfMatches",
    "InvalidEntrant",
    "FrozenRegistry",
]
