"""Infrastructure layer - report formatters and exporters."""

from .formatters import (
    ADVISORY_DISCLAIMER,
    AssessmentJsonExporter,
    AssessmentReportFormatter,
)

__all__ = [
    "ADVISORY_DISCLAIMER",
    "AssessmentJsonExporter",
    "AssessmentReportFormatter",
]
