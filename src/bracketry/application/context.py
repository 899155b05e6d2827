"""Application-wide context for dependency resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from .service import TournamentService


@dataclass
class ApplicationContext:
    """Simple container that wires application services."""

    console: Console
    service: TournamentService

    @classmethod
    def create(cls, console: Optional[Console] = None) -> ApplicationContext:
        console = console or Console()
        return cls(console=console, service=TournamentService())


__all__ = ["ApplicationContext"]
