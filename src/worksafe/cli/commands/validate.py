"""Validate command for checking assessment request files.

This module provides the `validate` command that checks a JSON request
file for syntax, schema and input errors without running the engine.
"""

from pathlib import Path
from typing import Annotated

import typer

from worksafe.application.config import ConfigError, check_inputs, load_config


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON request file to validate"),
    ],
) -> None:
    """Validate an assessment request file.

    Checks the request file for:
    - JSON syntax errors
    - Schema errors (unknown assessment, unsupported version, extra keys)
    - Input errors (missing required fields, out-of-range values)
    - Input keys the assessment does not use

    Exit codes:
        0 - Request is valid with no warnings
        1 - Request has errors (cannot be run)
        2 - Request is valid but has warnings

    Example:
        worksafe validate noise.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
        unused = check_inputs(config, config_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    if unused:
        typer.echo("Warnings:")
        for key in unused:
            typer.echo(f"  inputs.{key}: not used by {config.assessment.value}")
        typer.echo()
        typer.echo(f"Validation passed with {len(unused)} warning(s)")
        raise typer.Exit(code=2)

    typer.echo("Validation passed. Request is valid.")


def _display_load_error(error: ConfigError) -> None:
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    elif error.error_type == "input":
        for detail in error.details:
            typer.echo(f"  {detail['path']}: {detail['message']}", err=True)
            allowed = detail.get("allowed")
            if allowed is not None:
                allowed = ", ".join(allowed) if isinstance(allowed, list) else allowed
                typer.echo(f"    Allowed: {allowed}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    if error.error_type == "input":
        typer.echo(f"Validation failed: {len(error.details)} error(s)", err=True)
    else:
        typer.echo("Validation failed.", err=True)
