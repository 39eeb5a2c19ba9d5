"""Response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class FieldSchema(BaseModel):
    """One declared engine input."""

    name: str
    kind: str
    required: bool
    range: str | None = None
    choices: list[str] | None = None
    default: Any = None


class AssessmentEntrySchema(BaseModel):
    assessment: str
    fields: list[FieldSchema]


class AssessmentCatalogSchema(BaseModel):
    """Available assessments."""

    table_version: str = Field(..., description="Threshold table version")
    assessments: list[AssessmentEntrySchema]


class AssessmentResponseSchema(BaseModel):
    """Result of an assessment run."""

    assessment: str = Field(..., description="Assessment kind")
    table_version: str = Field(..., description="Threshold table version")
    result: dict[str, Any] = Field(..., description="Serialized result record")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
