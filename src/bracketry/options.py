"""Typed per-system configuration.

Bracket systems may accept additional configuration that changes their
behaviour, e.g. adding a match for the third place or disabling the bracket
reset of a double elimination grand final. A system declares its options as
:class:`TournamentOptions`; callers supply plain :class:`OptionValues` which
are checked against a JSON schema derived from the declaration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from jsonschema import Draft202012Validator, ValidationError

from .errors import InvalidOption

OptionValue = Any


class OptionKind(str, Enum):
    BOOL = "bool"
    I64 = "i64"
    U64 = "u64"
    STRING = "string"

    @classmethod
    def of(cls, value: OptionValue) -> OptionKind:
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.U64 if value >= 0 else cls.I64
        if isinstance(value, str):
            return cls.STRING
        raise TypeError(f"unsupported option value type: {type(value).__name__}")


_JSON_TYPES: Dict[OptionKind, Dict[str, Any]] = {
    OptionKind.BOOL: {"type": "boolean"},
    OptionKind.I64: {"type": "integer", "minimum": -(2**63), "maximum": 2**63 - 1},
    OptionKind.U64: {"type": "integer", "minimum": 0, "maximum": 2**64 - 1},
    OptionKind.STRING: {"type": "string"},
}


@dataclass(frozen=True)
class TournamentOption:
    """A declared option: human readable name, default value and type."""

    name: str
    value: OptionValue
    kind: OptionKind
    choices: Optional[Tuple[str, ...]] = None

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {**_JSON_TYPES[self.kind], "title": self.name, "default": self.value}
        if self.choices is not None:
            schema["enum"] = list(self.choices)
        return schema


class TournamentOptions(Mapping[str, TournamentOption]):
    """The options accepted by a bracket system, keyed by stable identifiers."""

    def __init__(self, options: Mapping[str, TournamentOption] | None = None) -> None:
        self._options: Dict[str, TournamentOption] = dict(options or {})

    @classmethod
    def builder(cls) -> OptionsBuilder:
        return OptionsBuilder()

    def __getitem__(self, key: str) -> TournamentOption:
        return self._options[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._options))

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"TournamentOptions({self._options!r})"

    def defaults(self) -> OptionValues:
        return OptionValues({key: option.value for key, option in self._options.items()})

    def to_json_schema(self) -> Dict[str, Any]:
        return {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "type": "object",
            "properties": {key: option.json_schema() for key, option in self._options.items()},
            "additionalProperties": False,
        }


class OptionsBuilder:
    """Fluent helper used by systems to declare their options."""

    def __init__(self) -> None:
        self._options: Dict[str, TournamentOption] = {}

    def option(
        self,
        key: str,
        name: str,
        default: OptionValue,
        *,
        kind: OptionKind | None = None,
        choices: Tuple[str, ...] | None = None,
    ) -> OptionsBuilder:
        kind = kind or OptionKind.of(default)
        if choices is not None and default not in choices:
            raise ValueError(f"default {default!r} of option '{key}' is not one of {choices}")
        self._options[key] = TournamentOption(name=name, value=default, kind=kind, choices=choices)
        return self

    def build(self) -> TournamentOptions:
        return TournamentOptions(self._options)


class OptionValues(Mapping[str, OptionValue]):
    """Plain key-value option settings supplied by a caller."""

    def __init__(self, values: Mapping[str, OptionValue] | None = None) -> None:
        self._values: Dict[str, OptionValue] = dict(values or {})

    def __getitem__(self, key: str) -> OptionValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"OptionValues({self._values!r})"

    def merge(self, options: TournamentOptions) -> OptionValues:
        """Check the values against *options* and fill in missing defaults."""

        validator = Draft202012Validator(options.to_json_schema())
        errors = sorted(validator.iter_errors(self._values), key=lambda err: list(err.path))
        if errors:
            raise _to_invalid_option(errors[0])

        merged = {key: option.value for key, option in options.items()}
        merged.update(self._values)
        return OptionValues(merged)


def _to_invalid_option(error: ValidationError) -> InvalidOption:
    if error.validator == "additionalProperties":
        unknown = sorted(set(error.instance) - set(error.schema.get("properties", {})))
        key = unknown[0] if unknown else "<root>"
        return InvalidOption(key, "unknown key")
    key = "/".join(str(part) for part in error.path) or "<root>"
    return InvalidOption(key, error.message)


def coerce_values(values: Mapping[str, OptionValue] | None, options: TournamentOptions) -> OptionValues:
    """Merge caller supplied *values* (or nothing) with the declared *options*."""

    if values is None:
        return options.defaults()
    if not isinstance(values, OptionValues):
        values = OptionValues(values)
    return values.merge(options)


__all__ = [
    "OptionKind",
    "OptionValue",
    "TournamentOption",
    "TournamentOptions",
    "OptionsBuilder",
    "OptionValues",
    "coerce_values",
]
