"""Application layer - use cases and orchestration."""

from .commands import RunAssessmentCommand
from .dtos import AssessmentInput, AssessmentOutput

__all__ = [
    "AssessmentInput",
    "AssessmentOutput",
    "RunAssessmentCommand",
]
