"""Schema utilities for tournament file validation."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Mapping

import yaml

SCHEMA_FILE = Path(__file__).resolve().parent / "schemas" / "config-schema.json"


@lru_cache(maxsize=1)
def load_schema() -> Mapping[str, object]:
    schema_text = SCHEMA_FILE.read_text(encoding="utf-8")
    return yaml.safe_load(schema_text)


def definition_ref(name: str) -> str:
    """JSON pointer to a named definition of the bundled schema."""

    return f"#/$defs/{name}"


__all__ = ["load_schema", "definition_ref", "SCHEMA_FILE"]
