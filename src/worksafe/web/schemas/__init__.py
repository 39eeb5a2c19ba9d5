"""Pydantic schemas for the REST API."""

from worksafe.web.schemas.requests import AssessmentRequest
from worksafe.web.schemas.responses import (
    AssessmentCatalogSchema,
    AssessmentResponseSchema,
    ErrorResponseSchema,
    FieldSchema,
)

__all__ = [
    # Requests
    "AssessmentRequest",
    # Responses
    "AssessmentCatalogSchema",
    "AssessmentResponseSchema",
    "ErrorResponseSchema",
    "FieldSchema",
]
