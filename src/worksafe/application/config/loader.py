"""Assessment request loading.

A request is a JSON object naming the assessment, its raw inputs and the
output options. Every failure is raised as ``ConfigError``; its
``error_type`` says which stage failed:

- ``file_not_found`` / ``file_read_error``: the file could not be read
- ``json_parse``: the text is not valid JSON
- ``validation``: the request does not match ``AssessmentConfiguration``
- ``input``: the inputs fail the chosen engine's field checks

Inputs are only checked against the engine by ``check_inputs``; running
a request reports input errors through the command output instead.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from worksafe.application.config.schema import AssessmentConfiguration
from worksafe.domain.services import AssessmentService, InputValidationError

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a request cannot be loaded or checked.

    Attributes:
        message: The primary error message.
        error_type: Failing stage (file_not_found, file_read_error,
            json_parse, validation or input).
        path: Path to the request file, if the request came from one.
        details: One entry per problem. JSON errors carry line, column
            and message; schema errors carry path, message and value;
            input errors carry path, message, constraint and allowed.
    """

    def __init__(
        self,
        message: str,
        error_type: str,
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic error location, e.g. ``inputs.regulations[0]``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path or "(request)"


def _read_json(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(
            f"Request file not found: {path}", "file_not_found", path
        ) from None
    except OSError as e:
        raise ConfigError(
            f"Error reading request file: {path}: {e.strerror or e}", "file_read_error", path
        ) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in request file: {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from None


def parse_request(data: Any, path: Path | None = None) -> AssessmentConfiguration:
    """Validate decoded request data against the request schema.

    Args:
        data: Decoded JSON value; anything but an object is rejected.
        path: Source file, carried into the error for reporting.

    Raises:
        ConfigError: With error_type ``validation``.
    """
    try:
        return AssessmentConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {"path": _json_path(err["loc"]), "message": err["msg"], "value": err.get("input")}
            for err in e.errors()
        ]
        lines = ["Request validation failed:"]
        lines.extend(f"  - {d['path']}: {d['message']}" for d in details)
        raise ConfigError("\n".join(lines), "validation", path, details) from None


def load_config(path: Path) -> AssessmentConfiguration:
    """Load a request file and validate it against the request schema.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    config = parse_request(_read_json(path), path)
    logger.debug(f"Loaded {config.assessment.value} request from {path}")
    return config


def check_inputs(
    config: AssessmentConfiguration, path: Path | None = None
) -> tuple[str, ...]:
    """Run the request's inputs through its engine's field checks.

    Returns:
        Input keys the engine does not declare, sorted.

    Raises:
        ConfigError: With error_type ``input`` on the first failing field.
    """
    validator = AssessmentService().engine(config.assessment).validator
    try:
        validator.validate(config.inputs)
    except InputValidationError as e:
        detail: dict[str, Any] = {
            "path": f"inputs.{e.field}",
            "message": e.message,
            "constraint": e.constraint,
            "allowed": e.allowed,
        }
        raise ConfigError(
            f"Invalid request inputs: {detail['path']}: {e.message}", "input", path, [detail]
        ) from e
    return tuple(sorted(set(config.inputs) - set(validator.field_names)))
