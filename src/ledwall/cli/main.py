"""Typer CLI for LED wall planning."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from ledwall.application import PlanWallCommand, WallPlanOutput
from ledwall.application.config import (
    ConfigError,
    PlanConfiguration,
    cells_to_config,
    config_to_cells,
    config_to_variants,
    config_to_wall,
    dump_config,
    load_config,
    validate_config,
)
from ledwall.cli.commands import (
    display_load_error,
    display_validation_result,
    validate_command,
)
from ledwall.domain import DEFAULT_PROCESSORS
from ledwall.infrastructure import (
    DataPlanFormatter,
    JsonPlanExporter,
    PowerPlanFormatter,
    TotalsFormatter,
    WallGridFormatter,
)
from ledwall.logging_config import setup_logging

OUTPUT_FORMATS = ("text", "json")

app = typer.Typer(
    name="ledwall",
    help="Plan LED video wall layouts, data runs and power circuits.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _load_or_exit(config_file: Path) -> PlanConfiguration:
    try:
        return load_config(config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _plan_or_exit(
    command: PlanWallCommand,
    config: PlanConfiguration,
    master: WallPlanOutput | None = None,
) -> WallPlanOutput:
    output = command.execute_config(config, master=master)
    if not output.is_valid:
        for error in output.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)
    return output


def _format_text(output: WallPlanOutput, labels_by_id: dict[str, str]) -> str:
    sections = []
    if output.mirrored_from:
        sections.append(f"Mirrored from wall {output.mirrored_from}")
    sections.append(DataPlanFormatter().format(output.data_plan, labels_by_id))  # type: ignore[arg-type]
    sections.append(PowerPlanFormatter().format(output.power_plan, labels_by_id))  # type: ignore[arg-type]
    sections.append(TotalsFormatter().format(output.totals))  # type: ignore[arg-type]
    if output.warnings:
        sections.append(
            "\n".join(["WARNINGS", "=" * 70, *(f"  - {w}" for w in output.warnings)])
        )
    return "\n\n".join(sections)


@app.command()
def plan(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON wall plan file"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the plan to this file instead of stdout"),
    ] = None,
    master_file: Annotated[
        Path | None,
        typer.Option("--master", "-m", help="Master wall plan file for a mirror wall"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log planning details to stderr"),
    ] = False,
) -> None:
    """Generate the data plan, power plan and totals for a wall."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: Unknown format '{output_format}'. Choose from: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    command = PlanWallCommand()
    master_output = None
    if master_file is not None:
        master_output = _plan_or_exit(command, _load_or_exit(master_file))

    output = _plan_or_exit(command, _load_or_exit(config_file), master_output)

    if output_format == "json":
        exporter = JsonPlanExporter()
        if master_output is not None:
            content = exporter.export_many([master_output, output])
        else:
            content = exporter.export(output)
    else:
        labels_by_id = {cell.id: cell.label for cell in output.cells}
        if master_output is not None:
            for cell in master_output.cells:
                labels_by_id.setdefault(cell.id, cell.label)
        content = _format_text(output, labels_by_id)

    if output_file is not None:
        output_file.write_text(content + "\n", encoding="utf-8")
        typer.echo(f"Plan written to {output_file}")
    else:
        typer.echo(content)


@app.command()
def autofill(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON wall plan file"),
    ],
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the filled plan here instead of in place"),
    ] = None,
) -> None:
    """Fill a wall from its autofill section and save the cells explicitly."""
    config = _load_or_exit(config_file)

    if config.cells:
        typer.echo("Error: Wall already lists cells; remove them to auto-fill.", err=True)
        raise typer.Exit(code=1)
    if config.autofill is None:
        typer.echo("Error: Config has no autofill section.", err=True)
        raise typer.Exit(code=1)

    result = validate_config(config)
    if not result.is_valid:
        display_validation_result(result)
        raise typer.Exit(code=1)

    wall = config_to_wall(config)
    cells = config_to_cells(config, wall, config_to_variants(config))
    filled = config.model_copy(update={"cells": cells_to_config(cells), "autofill": None})

    target = output_file or config_file
    try:
        dump_config(filled, target)
    except OSError as e:
        typer.echo(f"Error: Could not write {target}: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"Placed {len(cells)} cabinets on the "
        f"{wall.width_units}x{wall.height_units} grid of {wall.id}; wrote {target}"
    )


@app.command()
def grid(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON wall plan file"),
    ],
) -> None:
    """Show an ASCII map of the wall's cells."""
    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    if not result.is_valid:
        display_validation_result(result)
        raise typer.Exit(code=1)

    wall = config_to_wall(config)
    cells = config_to_cells(config, wall, config_to_variants(config))
    typer.echo(WallGridFormatter().format(wall, cells))


@app.command()
def processors() -> None:
    """List the built-in processor catalog."""
    lines = [
        f"{'Id':<8} {'Model':<18} {'Ports':<7} {'A8s px/port':<13} {'A10s px/port'}",
        "-" * 60,
    ]
    for processor in DEFAULT_PROCESSORS:
        lines.append(
            f"{processor.id:<8} {processor.model_name:<18} {processor.ethernet_ports:<7} "
            f"{processor.max_pixels_per_port_a8s:<13,} {processor.max_pixels_per_port_a10s:,}"
        )
    typer.echo("\n".join(lines))


if __name__ == "__main__":
    app()
