"""Domain layer - assessment engines and value objects."""

from .services import (
    AssessmentService,
    ComplianceReport,
    InputValidationError,
    UnknownAssessmentError,
)
from .value_objects import AssessmentKind, Industry

__all__ = [
    "AssessmentKind",
    "AssessmentService",
    "ComplianceReport",
    "Industry",
    "InputValidationError",
    "UnknownAssessmentError",
]
