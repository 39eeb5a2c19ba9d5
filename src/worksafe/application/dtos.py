"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from worksafe.domain.services.assessment import AssessmentResult
from worksafe.domain.value_objects import AssessmentKind


@dataclass
class AssessmentInput:
    """Input DTO naming an assessment and its raw inputs."""

    kind: str
    inputs: dict[str, Any] = field(default_factory=dict)

    def validate(self) -> list[str]:
        """Validate the request shape and return list of error messages.

        Field values are checked by the engine itself.
        """
        errors: list[str] = []
        valid_kinds = [k.value for k in AssessmentKind]
        if self.kind.strip().lower().replace("-", "_") not in valid_kinds:
            errors.append(f"Assessment must be one of: {', '.join(valid_kinds)}")
        if not isinstance(self.inputs, dict):
            errors.append("Inputs must be a mapping of field names to values")
        return errors


@dataclass
class AssessmentOutput:
    """Output DTO holding either a result or the errors that prevented one.

    Attributes:
        kind: Requested assessment kind.
        result: Engine result record, None when the run failed.
        errors: Human-readable error messages.
        field_errors: Structured validation errors (field, constraint,
            message, allowed).
    """

    kind: str
    result: AssessmentResult | None = None
    errors: list[str] = field(default_factory=list)
    field_errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the assessment ran successfully."""
        return len(self.errors) == 0 and self.result is not None
