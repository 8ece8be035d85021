"""
Command-line interface for argument-map outcomes.

Usage:
    sophistree-outcomes outcomes <map.json>                 # Basis and justification outcomes
    sophistree-outcomes conclusions <map.json> [-o out]     # Conclusion groups
    sophistree-outcomes reconcile <map.json> [-o out]       # Merge fresh conclusions into the map
    sophistree-outcomes validate <map.json>                 # Report snapshot problems
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from outcome_pipeline.settings import get_settings
from sophistree_argument import (
    ArgumentMap,
    BasisOutcome,
    EditKind,
    JustificationOutcome,
    OutcomeError,
    validate_snapshot,
)

app = typer.Typer(
    name="sophistree-outcomes",
    help="Argument-map outcome evaluation and conclusion summaries",
)
console = Console()
err_console = Console(stderr=True)

OUTCOME_STYLES = {
    BasisOutcome.PRESUMED: "cyan",
    BasisOutcome.UNPROVEN: "yellow",
    BasisOutcome.PROVEN: "green",
    BasisOutcome.DISPROVEN: "red",
    BasisOutcome.CONTRADICTORY: "magenta",
    JustificationOutcome.VALID: "green",
    JustificationOutcome.INVALID: "red",
    JustificationOutcome.UNKNOWN: "yellow",
}

EDIT_STYLES = {
    EditKind.INSERT: "green",
    EditKind.REPLACE: "yellow",
    EditKind.DELETE: "red",
}


@app.callback()
def _configure_logging():
    """Route library logging through rich at the configured level."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _styled(outcome: BasisOutcome | JustificationOutcome) -> str:
    style = OUTCOME_STYLES[outcome]
    return f"[{style}]{outcome.value}[/{style}]"


def _load(path: Path) -> ArgumentMap:
    try:
        return ArgumentMap.load(path)
    except OSError as exc:
        console.print(f"[red]Cannot read {path}: {exc}[/red]")
        raise typer.Exit(1)
    except ValidationError as exc:
        console.print(f"[red]Invalid argument map {path}:[/red]")
        console.print(str(exc), markup=False)
        raise typer.Exit(1)


def _fail(exc: OutcomeError) -> None:
    console.print(f"[red][{exc.error_type.value}] {exc}[/red]")
    raise typer.Exit(1)


@app.command()
def outcomes(
    path: Path = typer.Argument(..., help="Argument map JSON file"),
):
    """
    Show the outcome of every entity.

    Propositions, compounds and excerpts get a basis outcome; justifications
    get a justification outcome.
    """
    settings = get_settings()
    argument_map = _load(path)
    try:
        result = argument_map.evaluate()
    except OutcomeError as exc:
        _fail(exc)

    entities_by_id = {entity.id: entity for entity in argument_map.entities}

    table = Table(title="Basis Outcomes", show_header=True, header_style="bold cyan")
    table.add_column("Entity", style="cyan")
    table.add_column("Type")
    table.add_column("Outcome", justify="center")
    for entity_id, outcome in result.basis_outcomes.items():
        table.add_row(entity_id, entities_by_id[entity_id].type, _styled(outcome))
    console.print(table)

    if settings.show_justifications and result.justification_outcomes:
        table = Table(title="Justification Outcomes", show_header=True, header_style="bold cyan")
        table.add_column("Justification", style="cyan")
        table.add_column("Basis")
        table.add_column("Target")
        table.add_column("Polarity")
        table.add_column("Outcome", justify="center")
        for justification_id, outcome in result.justification_outcomes.items():
            justification = entities_by_id[justification_id]
            table.add_row(
                justification_id,
                justification.basis_id,
                justification.target_id,
                justification.polarity.value,
                _styled(outcome),
            )
        console.print(table)


@app.command()
def conclusions(
    path: Path = typer.Argument(..., help="Argument map JSON file"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the conclusion groups as JSON"
    ),
):
    """
    Compute the conclusions of a map.

    Conclusions are grouped by the sources their propositions appear in.
    """
    settings = get_settings()
    argument_map = _load(path)
    try:
        groups = argument_map.compute_conclusions()
    except OutcomeError as exc:
        _fail(exc)

    if output:
        payload = [group.to_wire() for group in groups]
        output.write_text(json.dumps(payload, indent=settings.json_indent), encoding="utf-8")
        console.print(f"[green]✓ Wrote {len(groups)} conclusion groups to {output}[/green]")
        return

    if not groups:
        console.print("[dim]No conclusions[/dim]")
        return

    table = Table(title="Conclusions", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Conclusions")
    table.add_column("Appears in")
    table.add_column("Justified by")
    for index, group in enumerate(groups, start=1):
        table.add_row(
            str(index),
            "\n".join(
                f"{info.proposition_id}: {_styled(info.outcome)}" for info in group.proposition_infos
            ),
            "\n".join(group.appearance_info.source_names + group.appearance_info.domains) or "-",
            "\n".join(
                group.media_excerpt_justification_info.source_names
                + group.media_excerpt_justification_info.domains
            ) or "-",
        )
    console.print(table)


@app.command()
def reconcile(
    path: Path = typer.Argument(..., help="Argument map JSON file"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the updated map as JSON"
    ),
):
    """
    Merge freshly computed conclusions into the map's persisted list.

    Unchanged groups are kept as they are; only the needed inserts,
    replacements and deletions are applied.
    """
    settings = get_settings()
    argument_map = _load(path)
    try:
        edits = argument_map.refresh_conclusions()
    except OutcomeError as exc:
        _fail(exc)

    if not edits:
        console.print("[green]✓ Conclusions up to date[/green]")
    else:
        console.print(f"[yellow]Applied {len(edits)} edits:[/yellow]")
        for edit in edits:
            style = EDIT_STYLES[edit.kind]
            console.print(f"  [{style}]{edit.describe()}[/{style}]")

    if output:
        output.write_text(argument_map.to_json(indent=settings.json_indent), encoding="utf-8")
        console.print(f"[green]✓ Wrote updated map to {output}[/green]")


@app.command()
def validate(
    path: Path = typer.Argument(..., help="Argument map JSON file"),
):
    """
    Validate a map.

    Checks:
    - Hard constraints (unique ids, resolvable references, no cycles)
    - Soft constraints (appearance excerpts, compound atoms and usage)
    """
    argument_map = _load(path)
    result = validate_snapshot(argument_map.entities)

    if not result.has_hard_errors and not result.has_soft_warnings:
        console.print("[green]✓ No problems found[/green]")
        return

    table = Table(title="Validation", show_header=True, header_style="bold cyan")
    table.add_column("Severity", justify="center")
    table.add_column("Check", style="cyan")
    table.add_column("Message")
    for error in result.hard_errors:
        table.add_row("[red]error[/red]", error.check_name, error.message)
    for warning in result.soft_warnings:
        table.add_row("[yellow]warning[/yellow]", warning.check_name, warning.message)
    console.print(table)

    if result.has_hard_errors:
        raise typer.Exit(1)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
