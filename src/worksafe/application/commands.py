"""Application commands (use cases) for running assessments."""

from __future__ import annotations

import logging
from typing import Any

from worksafe.domain.services import (
    AssessmentService,
    InputValidationError,
    UnknownAssessmentError,
)

from .config import AssessmentConfiguration
from .dtos import AssessmentInput, AssessmentOutput

logger = logging.getLogger(__name__)


class RunAssessmentCommand:
    """Command to validate inputs and run one assessment.

    Failures never raise; they are returned in ``AssessmentOutput.errors``
    so callers can render them the same way as results.
    """

    def __init__(self, service: AssessmentService | None = None) -> None:
        self.service = service or AssessmentService()

    def execute(self, kind: str, inputs: dict[str, Any]) -> AssessmentOutput:
        """Execute the assessment.

        Args:
            kind: Assessment kind name (e.g., "heat_stress").
            inputs: Raw engine inputs.

        Returns:
            AssessmentOutput with the result, or with errors if the kind is
            unknown or the inputs are invalid.
        """
        request = AssessmentInput(kind=kind, inputs=inputs)
        errors = request.validate()
        if errors:
            return AssessmentOutput(kind=kind, errors=errors)

        try:
            result = self.service.calculate(kind, inputs)
        except UnknownAssessmentError as e:
            return AssessmentOutput(kind=kind, errors=[str(e)])
        except InputValidationError as e:
            logger.debug(f"Validation failed for {kind}: {e.message}")
            return AssessmentOutput(
                kind=kind, errors=[e.message], field_errors=[e.to_dict()]
            )

        return AssessmentOutput(kind=result.kind.value, result=result)

    def execute_config(self, config: AssessmentConfiguration) -> AssessmentOutput:
        """Execute the assessment described by a loaded request file."""
        return self.execute(config.assessment.value, config.inputs)
