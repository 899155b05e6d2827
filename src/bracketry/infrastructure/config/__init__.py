"""Tournament file loading and validation."""

from __future__ import annotations

from .loader import collect_configs, dump_tournament, load_tournament
from .validators import validate_configs

__all__ = ["collect_configs", "dump_tournament", "load_tournament", "validate_configs"]
