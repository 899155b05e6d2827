"""Command line interface for bracketry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from bracketry.application.context import ApplicationContext
from bracketry.config_loader import (
    ConfigError,
    ResultCfg,
    TournamentCfg,
    collect_configs,
    load_tournament,
    validate_configs,
)
from bracketry.matches import EntrantSpot, Match
from bracketry.render import Column, Element, MatchRef, Row
from bracketry.tournament import Tournament, TournamentKind, system_class

app = typer.Typer(help="CLI for bracketry tournament files and elimination brackets.")
console = Console()


def _config_dir_option(default: str = "config") -> Path:
    return Path(default)


def _handle_config_error(exc: ConfigError) -> None:
    console.print(str(exc))
    raise typer.Exit(code=1) from exc


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    _configure_logging(verbose)


def _load_and_validate(config_dir: Path) -> dict[str, TournamentCfg]:
    try:
        tournaments = collect_configs(config_dir)
        validate_configs(tournaments)
        return tournaments
    except ConfigError as exc:
        _handle_config_error(exc)
        raise  # pragma: no cover


def _load_one(name: str, config_dir: Path) -> TournamentCfg:
    try:
        return load_tournament(name, config_dir)
    except ConfigError as exc:
        _handle_config_error(exc)
        raise  # pragma: no cover


def _build(context: ApplicationContext, cfg: TournamentCfg) -> Tournament[str]:
    try:
        return context.service.build(cfg)
    except ConfigError as exc:
        _handle_config_error(exc)
        raise  # pragma: no cover


@app.command()
def validate(
    config_dir: Path = typer.Option(
        default=_config_dir_option(),
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        help="Directory containing the tournaments/ folder.",
    )
) -> None:
    """Validate tournament files and replay their results."""

    tournaments = _load_and_validate(config_dir)
    context = ApplicationContext.create(console=console)
    for cfg in tournaments.values():
        _build(context, cfg)
    console.print(f"[green]Configs OK[/green] ({len(tournaments)} tournaments)")


@app.command()
def options(
    system: str = typer.Argument(..., help="Bracket system, e.g. single_elimination."),
) -> None:
    """List the options accepted by a bracket system."""

    try:
        schema = system_class(system).options_schema()
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"Options – {TournamentKind(system).label}")
    table.add_column("Key", justify="left")
    table.add_column("Name", justify="left")
    table.add_column("Type", justify="left")
    table.add_column("Default", justify="left")
    table.add_column("Choices", justify="left")
    for key, option in schema.items():
        choices = ", ".join(option.choices) if option.choices else "—"
        table.add_row(key, option.name, option.kind.value, str(option.value), choices)
    console.print(table)


@app.command()
def show(
    name: str = typer.Argument(..., help="Name of the tournament or path to its file."),
    config_dir: Path = typer.Option(
        default=_config_dir_option(),
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        help="Directory containing the tournaments/ folder.",
    ),
) -> None:
    """Display a tournament and its current bracket."""

    cfg = _load_one(name, config_dir)
    context = ApplicationContext.create(console=console)
    tournament = _build(context, cfg)
    _print_tournament_details(cfg, tournament)
    _print_bracket(tournament)


def _print_tournament_details(cfg: TournamentCfg, tournament: Tournament[str]) -> None:
    console.print(f"[bold]Tournament:[/bold] {escape(cfg.name)}")
    console.print(f"Description: {escape(cfg.description)}")
    console.print("")

    table = Table(title="Tournament Overview")
    table.add_column("Field", justify="left")
    table.add_column("Value", justify="left")
    table.add_row("System", tournament.kind.label)
    table.add_row("Options", ", ".join(f"{key}={value}" for key, value in tournament.options.items()))
    table.add_row("Entrants", escape(", ".join(tournament.entrants)))
    table.add_row("Matches", str(len(tournament.matches)))
    table.add_row("Results", str(len(cfg.results)))
    champion = tournament.champion()
    table.add_row("Champion", escape(tournament.entrants[champion]) if champion is not None else "—")
    console.print(table)


def _spot_label(spot: EntrantSpot, names: Sequence[str], reported: bool) -> str:
    if spot.is_empty:
        return "[dim]bye[/dim]"
    if spot.node is None:
        return "[dim]TBD[/dim]"
    label = escape(names[spot.node.index])
    if reported:
        label = f"{label} ({spot.node.data.score})"
        if spot.node.data.winner:
            label = f"[bold green]{label}[/bold green]"
    return label


def _match_label(index: int, match: Match, names: Sequence[str]) -> str:
    reported = match.is_reported
    first, second = (_spot_label(spot, names, reported) for spot in match)
    return f"[dim]#{index}[/dim] {first} vs {second}"


def _leaf_columns(element: Element) -> List[Column] | None:
    if not isinstance(element, Row):
        return None
    columns = [child for child in element if isinstance(child, Column)]
    if len(columns) != len(element.children):
        return None
    if not all(isinstance(ref, MatchRef) for column in columns for ref in column):
        return None
    return columns


def bracket_tables(tournament: Tournament[str], element: Element | None = None) -> List[Table]:
    """Lay out the render tree of *tournament* as one table per bracket section."""

    element = element if element is not None else tournament.render()
    names = list(tournament.entrants)
    matches = tournament.matches
    tables: List[Table] = []

    def _table(title: str | None, columns: Sequence[Column]) -> Table:
        table = Table(title=title)
        for column in columns:
            table.add_column(column.label or "", justify="left")
        depth = max((len(column.children) for column in columns), default=0)
        for row in range(depth):
            cells = []
            for column in columns:
                if row < len(column.children):
                    ref = column.children[row]
                    cells.append(_match_label(ref.index, matches[ref.index], names))  # type: ignore[union-attr]
                else:
                    cells.append("")
            table.add_row(*cells)
        return table

    stack: List[Element] = [element]
    while stack:
        current = stack.pop()
        if isinstance(current, MatchRef):
            continue
        leaves = _leaf_columns(current)
        if leaves is not None:
            if leaves:
                tables.append(_table(current.label, leaves))
            continue
        if isinstance(current, Column) and current.children and all(
            isinstance(child, MatchRef) for child in current
        ):
            tables.append(_table(current.label, [current]))
            continue
        stack.extend(reversed(current.children))
    return tables


def _print_bracket(tournament: Tournament[str]) -> None:
    tables = bracket_tables(tournament)
    if not tables:
        console.print("[dim]No matches to play.[/dim]")
    for table in tables:
        console.print(table)


@app.command()
def standings(
    name: str = typer.Argument(..., help="Name of the tournament or path to its file."),
    config_dir: Path = typer.Option(
        default=_config_dir_option(),
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        help="Directory containing the tournaments/ folder.",
    ),
) -> None:
    """Print the standings of a tournament."""

    cfg = _load_one(name, config_dir)
    context = ApplicationContext.create(console=console)
    tournament = _build(context, cfg)
    table_data = tournament.standings()

    table = Table(title=f"Standings – {escape(cfg.name)}")
    table.add_column("#", justify="right")
    table.add_column("Entrant", justify="left")
    for key in table_data.keys():
        table.add_column(key.capitalize(), justify="right")
    for rank, entry in enumerate(table_data, start=1):
        table.add_row(
            str(rank),
            escape(tournament.entrants[entry.index]),
            *(str(value) for value in entry.values),
        )
    console.print(table)


def parse_scores(value: str) -> tuple[int, int]:
    """Parse ``A-B`` (or ``A:B``) into two non-negative scores."""

    separator = ":" if ":" in value else "-"
    parts = value.split(separator)
    if len(parts) != 2:
        raise typer.BadParameter(f"Expected scores as 'A-B', got '{value}'.")
    try:
        first, second = (int(part.strip()) for part in parts)
    except ValueError as exc:
        raise typer.BadParameter(f"Scores must be integers, got '{value}'.") from exc
    if first < 0 or second < 0:
        raise typer.BadParameter("Scores must not be negative.")
    return first, second


@app.command()
def report(
    name: str = typer.Argument(..., help="Name of the tournament or path to its file."),
    match: int = typer.Option(..., "--match", min=0, help="Index of the match to report."),
    scores: str = typer.Option(..., "--scores", help="Scores of both spots as 'A-B'."),
    winner: int | None = typer.Option(
        None,
        "--winner",
        min=0,
        max=1,
        help="Winning slot (0 or 1). Defaults to the higher score.",
    ),
    config_dir: Path = typer.Option(
        default=_config_dir_option(),
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        help="Directory containing the tournaments/ folder.",
    ),
) -> None:
    """Report a match result and append it to the tournament file."""

    cfg = _load_one(name, config_dir)
    result = ResultCfg(match=match, scores=parse_scores(scores), winner=winner)
    context = ApplicationContext.create(console=console)
    try:
        recorded = context.service.record(cfg, result)
    except ConfigError as exc:
        _handle_config_error(exc)
        return

    tournament = recorded.tournament
    console.print(
        f"[green]Recorded match {match}[/green] – {_match_label(match, tournament.get_match(match), list(tournament.entrants))}"
    )
    champion = tournament.champion()
    if champion is not None:
        console.print(f"[bold]Champion:[/bold] {escape(tournament.entrants[champion])}")


@app.command()
def export(
    name: str = typer.Argument(..., help="Name of the tournament or path to its file."),
    output: Path = typer.Option(
        ...,
        "--output",
        file_okay=True,
        dir_okay=False,
        writable=True,
        help="Destination JSON file for the match tree.",
    ),
    config_dir: Path = typer.Option(
        default=_config_dir_option(),
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        help="Directory containing the tournaments/ folder.",
    ),
) -> None:
    """Export the replayed match tree of a tournament as JSON."""

    cfg = _load_one(name, config_dir)
    context = ApplicationContext.create(console=console)
    try:
        path = context.service.export(cfg, output)
    except ConfigError as exc:
        _handle_config_error(exc)
        return
    console.print(f"[green]Exported {escape(cfg.name)} to {path}[/green]")


@app.command()
def inspect(
    source: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="JSON file written by the export command.",
    ),
) -> None:
    """Resume an exported match tree and display its bracket."""

    context = ApplicationContext.create(console=console)
    try:
        tournament = context.service.restore(source)
    except ConfigError as exc:
        _handle_config_error(exc)
        return
    console.print(f"[bold]{tournament.kind.label}[/bold] with {len(tournament.entrants)} entrants")
    _print_bracket(tournament)
    champion = tournament.champion()
    if champion is not None:
        console.print(f"[bold]Champion:[/bold] {escape(tournament.entrants[champion])}")


def main(argv: Iterable[str] | None = None) -> None:
    """Invoke the Typer application."""
    app(args=list(argv) if argv is not None else None)


if __name__ == "__main__":
    main()
