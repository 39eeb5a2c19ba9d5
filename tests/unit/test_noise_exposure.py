"""Unit tests for the noise exposure engine."""

from __future__ import annotations

import pytest

from worksafe.domain.services.assessment import NoiseExposureEngine
from worksafe.domain.services.validation import InputValidationError


@pytest.fixture
def engine() -> NoiseExposureEngine:
    return NoiseExposureEngine()


class TestNoiseDose:
    """Tests for permissible time, dose and TWA."""

    def test_hundred_db_for_two_hours(
        self, engine: NoiseExposureEngine, noise_inputs: dict
    ) -> None:
        metrics = engine.calculate(noise_inputs).metrics

        assert metrics.permissible_time == pytest.approx(0.25)
        assert metrics.daily_dose == pytest.approx(800.0)
        assert metrics.weekly_dose == pytest.approx(800.0)
        assert metrics.twa == pytest.approx(94.0)

    def test_criterion_level_is_full_dose(self, engine: NoiseExposureEngine) -> None:
        metrics = engine.calculate({"noise_level": 85, "exposure_duration": 8}).metrics

        assert metrics.permissible_time == pytest.approx(8.0)
        assert metrics.daily_dose == pytest.approx(100.0)
        assert metrics.twa == pytest.approx(85.0)

    def test_weekly_dose_scales_with_days(self, engine: NoiseExposureEngine) -> None:
        metrics = engine.calculate(
            {"noise_level": 85, "exposure_duration": 8, "work_days": 6}
        ).metrics
        assert metrics.weekly_dose == pytest.approx(120.0)

    def test_exchange_rate(self, engine: NoiseExposureEngine) -> None:
        """Every 3 dB halves the permissible time."""
        assert engine.permissible_time(88.0) == pytest.approx(engine.permissible_time(85.0) / 2)

    def test_louder_never_lowers_dose(self, engine: NoiseExposureEngine) -> None:
        doses = [engine.dose(4.0, level) for level in (70.0, 85.0, 95.0, 110.0)]
        assert doses == sorted(doses)

    def test_zero_duration_rejected(self, engine: NoiseExposureEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate({"noise_level": 90, "exposure_duration": 0})
        assert exc_info.value.field == "exposure_duration"

    def test_noise_level_out_of_range(self, engine: NoiseExposureEngine) -> None:
        with pytest.raises(InputValidationError):
            engine.calculate({"noise_level": 150, "exposure_duration": 1})


class TestNoiseClassification:
    """Tests for the dose bands and compliance findings."""

    def test_high_risk(self, engine: NoiseExposureEngine, noise_inputs: dict) -> None:
        result = engine.calculate(noise_inputs)

        assert result.classification.label == "High Risk"
        assert result.action_required == "Required"
        assert "Post warning signs" in result.recommendations
        assert result.compliance.violations == (
            "Daily noise dose exceeds OSHA permissible exposure (100%)",
        )

    def test_full_dose_is_moderate(self, engine: NoiseExposureEngine) -> None:
        result = engine.calculate({"noise_level": 85, "exposure_duration": 8})

        assert result.classification.label == "Moderate Risk"
        assert result.compliance.is_compliant
        assert result.compliance.has_warnings

    def test_low_risk(self, engine: NoiseExposureEngine) -> None:
        result = engine.calculate({"noise_level": 70, "exposure_duration": 4})

        assert result.metrics.daily_dose == pytest.approx(1.5625)
        assert result.metrics.twa == pytest.approx(67.0)
        assert result.classification.label == "Low Risk"
        assert result.action_required == "None"
        assert result.compliance.warnings == ()

    def test_effective_hearing_protection(
        self, engine: NoiseExposureEngine, noise_inputs: dict
    ) -> None:
        result = engine.calculate(
            {**noise_inputs, "hearing_protection": True, "protection_rating": 20}
        )

        assert result.metrics.protected_level == pytest.approx(80.0)
        assert result.metrics.protected_dose < 100
        assert result.protection_effective
        assert result.compliance.is_compliant
        # Classification stays on the unprotected dose
        assert result.classification.label == "High Risk"

    def test_protection_without_rating_warns(
        self, engine: NoiseExposureEngine, noise_inputs: dict
    ) -> None:
        result = engine.calculate({**noise_inputs, "hearing_protection": "yes"})

        assert not result.protection_effective
        assert result.metrics.protected_dose == result.metrics.daily_dose
        assert "Hearing protection in use without a noise reduction rating" in (
            result.compliance.warnings
        )

    def test_reference_levels(self, engine: NoiseExposureEngine, noise_inputs: dict) -> None:
        levels = dict(engine.calculate(noise_inputs).reference_levels)
        assert levels[90] == "OSHA PEL (8 hours)"
