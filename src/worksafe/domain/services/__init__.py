"""Domain services for workplace safety assessments.

This package provides:
- Declarative input validation shared by every engine
- The assessment engines and their facade
"""

from .assessment import (
    AssessmentResult,
    AssessmentService,
    ClassificationResult,
    ComplianceReport,
    ConfigurationGap,
    UnknownAssessmentError,
)
from .validation import (
    CrossFieldRule,
    FieldKind,
    FieldSpec,
    InputValidationError,
    InputValidator,
)

__all__ = [
    "AssessmentResult",
    "AssessmentService",
    "ClassificationResult",
    "ComplianceReport",
    "ConfigurationGap",
    "CrossFieldRule",
    "FieldKind",
    "FieldSpec",
    "InputValidationError",
    "InputValidator",
    "UnknownAssessmentError",
]
