"""Request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AssessmentRequest(BaseModel):
    """Body of an assessment run.

    Input values are checked by the engine, not here.
    """

    model_config = ConfigDict(extra="forbid")

    inputs: dict[str, Any] = Field(
        default_factory=dict, description="Raw engine inputs keyed by field name"
    )
