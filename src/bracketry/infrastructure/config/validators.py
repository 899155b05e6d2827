"""Validation helpers for tournament file domain objects."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Dict, Mapping

from jsonschema import Draft202012Validator, ValidationError

from bracketry.domain.config import ConfigError, TournamentCfg
from bracketry.errors import InvalidOption
from bracketry.options import coerce_values
from bracketry.tournament import system_class

from .schema import definition_ref, load_schema


def build_validator() -> Draft202012Validator:
    return Draft202012Validator(load_schema())


def format_error(path: Path, field: str, message: str) -> str:
    location = f"[cyan]{path}[/cyan]"
    target = f" → [magenta]{field}[/magenta]" if field else ""
    return f"[bold red]Config error[/bold red]: {location}{target} {message}"


def validate_with_schema(
    validator: Draft202012Validator,
    instance: Mapping[str, object],
    ref: str,
    path: Path,
) -> None:
    try:
        validator.evolve(schema={"$ref": ref}).validate(instance)
    except ValidationError as exc:
        field = "/".join(str(part) for part in exc.path)
        field_display = field or "<root>"
        raise ConfigError(format_error(path, field_display, exc.message)) from exc


def dataclass_payload(instance: object) -> Mapping[str, object]:
    data = asdict(instance)
    data.pop("path", None)
    return {key: value for key, value in data.items() if value is not None}


def tournament_payload(cfg: TournamentCfg) -> Dict[str, object]:
    """Plain mapping of *cfg* in the shape of the tournament file."""

    payload = dict(dataclass_payload(cfg))
    payload["options"] = dict(cfg.options)
    results = []
    for result in cfg.results:
        entry: Dict[str, object] = {"match": result.match, "scores": list(result.scores)}
        if result.winner is not None:
            entry["winner"] = result.winner
        results.append(entry)
    payload["results"] = results
    return payload


def validate_options(cfg: TournamentCfg) -> None:
    """Check the options of *cfg* against the schema declared by its system."""

    try:
        schema = system_class(cfg.system).options_schema()
    except ValueError as exc:
        raise ConfigError(format_error(cfg.path, "system", str(exc))) from exc
    try:
        coerce_values(cfg.options, schema)
    except InvalidOption as exc:
        raise ConfigError(format_error(cfg.path, f"options.{exc.key}", str(exc))) from exc


def validate_configs(tournaments: Mapping[str, TournamentCfg]) -> None:
    validator = build_validator()

    for cfg in tournaments.values():
        validate_with_schema(validator, tournament_payload(cfg), definition_ref("tournament"), cfg.path)
        validate_options(cfg)
        seen: Dict[str, int] = {}
        for position, entrant in enumerate(cfg.entrants):
            if entrant in seen:
                raise ConfigError(
                    format_error(
                        cfg.path,
                        f"entrants[{position}]",
                        f"Entrant '{entrant}' is already listed at position {seen[entrant]}.",
                    )
                )
            seen[entrant] = position


__all__ = [
    "build_validator",
    "format_error",
    "validate_with_schema",
    "dataclass_payload",
    "tournament_payload",
    "validate_options",
    "validate_configs",
]
