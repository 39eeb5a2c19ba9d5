"""Unit tests for RunAssessmentCommand and its DTOs."""

from __future__ import annotations

import pytest

from worksafe.application import AssessmentInput, AssessmentOutput, RunAssessmentCommand
from worksafe.application.config import parse_request
from worksafe.domain.services.assessment import NoiseExposureResult


@pytest.fixture
def command() -> RunAssessmentCommand:
    return RunAssessmentCommand()


class TestAssessmentInput:
    """Tests for request-shape validation."""

    def test_valid(self) -> None:
        assert AssessmentInput(kind="Heat-Stress", inputs={}).validate() == []

    def test_unknown_kind(self) -> None:
        errors = AssessmentInput(kind="radon").validate()

        assert len(errors) == 1
        assert errors[0].startswith("Assessment must be one of: fall_protection")

    def test_inputs_must_be_mapping(self) -> None:
        errors = AssessmentInput(kind="noise_exposure", inputs=[1, 2]).validate()  # type: ignore[arg-type]
        assert errors == ["Inputs must be a mapping of field names to values"]


class TestRunAssessmentCommand:
    """Tests for command execution."""

    def test_success(self, command: RunAssessmentCommand, noise_inputs: dict) -> None:
        output = command.execute("noise-exposure", noise_inputs)

        assert output.is_valid
        assert output.kind == "noise_exposure"
        assert isinstance(output.result, NoiseExposureResult)
        assert output.errors == []

    def test_unknown_kind(self, command: RunAssessmentCommand) -> None:
        output = command.execute("radon", {})

        assert not output.is_valid
        assert output.result is None
        assert output.errors[0].startswith("Assessment must be one of:")

    def test_field_errors(self, command: RunAssessmentCommand) -> None:
        output = command.execute(
            "fall_protection", {"fall_height": 6, "lanyard_length": 1.8, "surface_type": "lava"}
        )

        assert not output.is_valid
        assert output.errors == [output.field_errors[0]["message"]]
        assert output.field_errors[0]["field"] == "surface_type"
        assert output.field_errors[0]["constraint"] == "choice"
        assert "water" in output.field_errors[0]["allowed"]

    def test_missing_required_field(self, command: RunAssessmentCommand) -> None:
        output = command.execute("noise_exposure", {"noise_level": 90})

        assert output.errors == ["exposure_duration is required"]
        assert output.field_errors[0]["constraint"] == "required"

    def test_execute_config(self, command: RunAssessmentCommand) -> None:
        config = parse_request(
            {
                "schema_version": "1.0",
                "assessment": "personal-hydration",
                "inputs": {"body_weight": 70, "temperature": 20},
            }
        )
        output = command.execute_config(config)

        assert output.is_valid
        assert output.kind == "personal_hydration"
        assert output.result.daily_liters == pytest.approx(3.15)

    def test_output_without_result_is_invalid(self) -> None:
        assert not AssessmentOutput(kind="noise_exposure").is_valid
