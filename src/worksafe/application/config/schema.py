"""Pydantic schema for assessment request files.

A request file names one assessment, carries its raw inputs and says how
the result should be rendered. Input values are not validated here; the
engine's own validator owns their bounds so file, CLI and API callers
all see the same field errors.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from worksafe.domain.value_objects import AssessmentKind

# Supported schema versions for request files
# Version 1.0: Initial schema with assessment, inputs and output
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class OutputConfig(BaseModel):
    """Configuration for report format and destination.

    Attributes:
        format: Report format (text, markdown or json).
        output_file: Path the report is written to; stdout when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    format: Literal["text", "markdown", "json"] = "text"
    output_file: str | None = Field(default=None, description="Report destination")


class AssessmentConfiguration(BaseModel):
    """Root model for an assessment request file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0").
        assessment: Which assessment to run.
        title: Optional report title.
        inputs: Raw engine inputs keyed by field name.
        output: Output configuration.

    Example:
        >>> config = AssessmentConfiguration(
        ...     schema_version="1.0",
        ...     assessment="noise_exposure",
        ...     inputs={"noise_level": 100, "exposure_duration": 2},
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    assessment: AssessmentKind
    title: str | None = Field(default=None, max_length=200)
    inputs: dict[str, Any] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("assessment", mode="before")
    @classmethod
    def normalize_assessment(cls, v: Any) -> Any:
        """Allow hyphenated kind names (e.g., "heat-stress")."""
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v
