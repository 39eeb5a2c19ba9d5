"""Typer CLI for workplace safety assessments."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from worksafe.application import AssessmentOutput, RunAssessmentCommand
from worksafe.application.config import ConfigError, load_config
from worksafe.cli.commands import validate_command
from worksafe.domain.services import AssessmentService
from worksafe.infrastructure import AssessmentJsonExporter, AssessmentReportFormatter


class OutputFormat(str, Enum):
    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"


app = typer.Typer(
    name="worksafe",
    help="Workplace safety assessments: fall protection, heat stress, incident rates, "
    "noise exposure, PPE selection and training needs.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Workplace safety assessment calculators."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _render(output: AssessmentOutput, output_format: OutputFormat, title: str | None = None) -> str:
    if output_format == OutputFormat.JSON:
        return AssessmentJsonExporter().export(output)
    formatter = AssessmentReportFormatter(markdown=output_format == OutputFormat.MARKDOWN)
    return formatter.format(output, title=title)


def _emit(text: str, output_file: Path | None) -> None:
    if output_file is None:
        typer.echo(text)
        return
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(text, encoding="utf-8")
    typer.echo(f"Report written to {output_file}")


def _exit_on_errors(output: AssessmentOutput) -> None:
    if output.is_valid:
        return
    for error in output.errors:
        typer.echo(f"Error: {error}", err=True)
    for detail in output.field_errors:
        allowed = detail.get("allowed")
        if allowed is not None:
            allowed_text = ", ".join(allowed) if isinstance(allowed, list) else allowed
            typer.echo(f"  Allowed for {detail['field']}: {allowed_text}", err=True)
    raise typer.Exit(code=1)


def _parse_pairs(pairs: list[str]) -> dict[str, str]:
    inputs: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            typer.echo(f"Error: input '{pair}' must be in key=value form", err=True)
            raise typer.Exit(code=1)
        inputs[key.strip()] = value.strip()
    return inputs


@app.command()
def run(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON request file"),
    ],
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format (overrides the request file)"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to this file"),
    ] = None,
) -> None:
    """Run the assessment described by a request file.

    Example:
        worksafe run heat.json --format json
    """
    try:
        config = load_config(config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    output = RunAssessmentCommand().execute_config(config)
    _exit_on_errors(output)

    fmt = output_format or OutputFormat(config.output.format)
    destination = output_file or (
        Path(config.output.output_file) if config.output.output_file else None
    )
    _emit(_render(output, fmt, title=config.title), destination)


@app.command()
def calc(
    kind: Annotated[
        str,
        typer.Argument(help="Assessment to run (see 'worksafe engines')"),
    ],
    inputs: Annotated[
        list[str] | None,
        typer.Option("--input", "-i", help="Input as key=value; repeat for each field"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TEXT,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to this file"),
    ] = None,
) -> None:
    """Run an assessment from command-line inputs.

    Example:
        worksafe calc noise_exposure -i noise_level=100 -i exposure_duration=2
    """
    output = RunAssessmentCommand().execute(kind, _parse_pairs(inputs or []))
    _exit_on_errors(output)
    _emit(_render(output, output_format), output_file)


@app.command()
def engines() -> None:
    """List available assessments and their inputs."""
    for entry in AssessmentService().available_assessments():
        typer.echo(entry["assessment"])
        for spec in entry["fields"]:
            marker = "*" if spec["required"] else " "
            detail = spec.get("range") or ""
            if "choices" in spec:
                detail = "|".join(spec["choices"])
            default = f" [default: {spec['default']}]" if "default" in spec else ""
            typer.echo(f"  {marker} {spec['name']:<24} {spec['kind']:<9} {detail}{default}")
        typer.echo()
    typer.echo("* required")


if __name__ == "__main__":
    app()
