"""Validate command for checking wall plan files.

Checks a JSON wall plan for syntax and schema errors, then for layout
problems (unknown variants, cells off the grid, overlapping cabinets)
and suspicious IMAG settings.
"""

from pathlib import Path
from typing import Annotated

import typer

from ledwall.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def _echo_issue(path: str, message: str, detail: str | None = None, err: bool = False) -> None:
    typer.echo(f"  {path}: {message}", err=err)
    if detail:
        typer.echo(f"      {detail}", err=err)


def display_load_error(error: ConfigError) -> None:
    """Print why a wall plan file could not be loaded, to stderr."""
    typer.echo("Could not load wall plan:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  No wall plan file at {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  File is not valid JSON", err=True)
        for detail in error.details:
            typer.echo(
                f"      line {detail.get('line', '?')}, column {detail.get('column', '?')}: "
                f"{detail.get('message', 'unknown problem')}",
                err=True,
            )
    elif error.error_type == "validation":
        for detail in error.details:
            value = detail.get("value")
            shown = (
                f"got {value!r}"
                if value is not None and not isinstance(value, (dict, list))
                else None
            )
            _echo_issue(detail.get("path", "?"), str(detail.get("message")), shown, err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Wall plan rejected.", err=True)


def display_validation_result(result: ValidationResult) -> None:
    """Print blocking problems, advisories and a one-line verdict."""
    if result.errors:
        typer.echo(f"Blocking problems ({len(result.errors)}):", err=True)
        for error in result.errors:
            shown = f"got {error.value!r}" if error.value is not None else None
            _echo_issue(error.path, error.message, shown, err=True)
        typer.echo()

    if result.warnings:
        typer.echo(f"Advisories ({len(result.warnings)}):")
        for warning in result.warnings:
            hint = f"hint: {warning.suggestion}" if warning.suggestion else None
            _echo_issue(warning.path, warning.message, hint)
        typer.echo()

    if result.errors:
        typer.echo(
            f"Wall plan rejected: {len(result.errors)} blocking problem(s), "
            f"{len(result.warnings)} advisory(ies).",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Wall plan usable with {len(result.warnings)} advisory(ies).")
    else:
        typer.echo("Wall plan OK.")


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON wall plan file to check"),
    ],
) -> None:
    """Check a wall plan file before planning it.

    Exit codes:
        0 - Wall plan is clean
        1 - Wall plan has blocking problems and cannot be planned
        2 - Wall plan can be planned but has advisories

    Example:
        ledwall validate main-wall.json
    """
    typer.echo(f"Checking {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
