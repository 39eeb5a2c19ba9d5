"""OSHA 1910.95 noise exposure engine.

Permissible exposure time follows the 3 dB exchange rate used by the
hearing conservation criterion level of 85 dBA over 8 hours:

    T    = 8 / 2 ** ((L - 85) / 3)     hours
    Dose = duration / T * 100          percent
    TWA  = 85 + 3 * log2(Dose / 100)   dBA
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from worksafe.domain.value_objects import AssessmentKind

from ..validation import FieldKind, FieldSpec, InputValidator
from .models import (
    AssessmentResult,
    ClassificationResult,
    ComplianceReport,
    ConfigurationGap,
)
from .tables import DEFAULT_NOISE_EXPOSURE_TABLES, NoiseExposureTables

logger = logging.getLogger(__name__)

NOISE_EXPOSURE_FIELDS = (
    FieldSpec("noise_level", FieldKind.NUMBER, required=True, minimum=50, maximum=140),
    FieldSpec(
        "exposure_duration", FieldKind.NUMBER, required=True,
        minimum=0, exclusive_minimum=True, maximum=24,
    ),
    FieldSpec("work_days", FieldKind.INTEGER, minimum=1, maximum=7, default=5),
    FieldSpec("hearing_protection", FieldKind.BOOLEAN, default=False),
    FieldSpec("protection_rating", FieldKind.NUMBER, minimum=0, maximum=50, default=0.0),
)


@dataclass(frozen=True)
class NoiseExposureInput:
    """Validated noise inputs (dBA, hours, NRR dB)."""

    noise_level: float
    exposure_duration: float
    work_days: int
    hearing_protection: bool
    protection_rating: float


@dataclass(frozen=True)
class NoiseExposureMetrics:
    """Derived noise exposure quantities.

    Attributes:
        permissible_time: Allowed hours at the measured level.
        daily_dose: Unprotected daily dose (%).
        weekly_dose: Dose over the work week against a 5-day standard week (%).
        twa: 8-hour time-weighted average (dBA).
        protected_level: Level at the ear with protection applied (dBA).
        protected_dose: Daily dose with protection applied (%).
    """

    permissible_time: float
    daily_dose: float
    weekly_dose: float
    twa: float
    protected_level: float
    protected_dose: float

    def as_dict(self) -> dict[str, float]:
        return {
            "permissible_time": self.permissible_time,
            "daily_dose": self.daily_dose,
            "weekly_dose": self.weekly_dose,
            "twa": self.twa,
            "protected_level": self.protected_level,
            "protected_dose": self.protected_dose,
        }


@dataclass(frozen=True)
class NoiseExposureResult(AssessmentResult):
    """Complete noise exposure assessment."""

    kind: ClassVar[AssessmentKind] = AssessmentKind.NOISE_EXPOSURE

    inputs: NoiseExposureInput
    metrics: NoiseExposureMetrics
    classification: ClassificationResult
    action_required: str
    protection_effective: bool
    compliance: ComplianceReport
    recommendations: tuple[str, ...]
    reference_levels: tuple[tuple[int, str], ...] = ()
    gaps: tuple[ConfigurationGap, ...] = field(default_factory=tuple)


class NoiseExposureEngine:
    """Noise dose and TWA calculator.

    Args:
        tables: Dose model constants and risk bands.
    """

    def __init__(
        self, tables: NoiseExposureTables = DEFAULT_NOISE_EXPOSURE_TABLES
    ) -> None:
        self.tables = tables
        self.validator = InputValidator(NOISE_EXPOSURE_FIELDS)

    def calculate(self, inputs: Mapping[str, Any]) -> NoiseExposureResult:
        """Run the full noise exposure assessment.

        Raises:
            InputValidationError: If any input is missing or out of range.
        """
        data = NoiseExposureInput(**self.validator.validate(inputs))
        t = self.tables

        permissible = self.permissible_time(data.noise_level)
        daily_dose = self.dose(data.exposure_duration, data.noise_level)
        weekly_dose = (
            data.exposure_duration * data.work_days
            / (permissible * t.standard_work_days) * 100
        )

        protected_level = data.noise_level
        protected_dose = daily_dose
        protection_effective = False
        if data.hearing_protection and data.protection_rating > 0:
            protected_level = max(0.0, data.noise_level - data.protection_rating)
            protected_dose = self.dose(data.exposure_duration, protected_level)
            protection_effective = protected_dose < 100

        twa = self.twa(daily_dose)
        rank, band = next(
            (i, b) for i, b in enumerate(t.bands) if b.upper is None or daily_dose <= b.upper
        )
        classification = ClassificationResult(
            band.label, rank, f"Action required: {band.action_required}", score=daily_dose
        )
        metrics = NoiseExposureMetrics(
            permissible_time=permissible,
            daily_dose=daily_dose,
            weekly_dose=weekly_dose,
            twa=twa,
            protected_level=protected_level,
            protected_dose=protected_dose,
        )
        logger.debug(
            f"Noise assessment: {data.noise_level} dB for {data.exposure_duration} h "
            f"-> dose={daily_dose:.1f}% twa={twa:.1f}"
        )
        return NoiseExposureResult(
            inputs=data,
            metrics=metrics,
            classification=classification,
            action_required=band.action_required,
            protection_effective=protection_effective,
            compliance=self.check_compliance(metrics, data, protection_effective),
            recommendations=band.recommendations,
            reference_levels=t.reference_levels,
        )

    def permissible_time(self, level: float) -> float:
        """Allowed exposure hours at ``level`` dBA."""
        t = self.tables
        return t.criterion_hours / 2 ** ((level - t.criterion_level_db) / t.exchange_rate_db)

    def dose(self, duration: float, level: float) -> float:
        return duration / self.permissible_time(level) * 100

    def twa(self, dose: float) -> float:
        """8-hour TWA equivalent of a daily dose."""
        t = self.tables
        return t.criterion_level_db + t.exchange_rate_db * math.log2(dose / 100)

    def check_compliance(
        self,
        metrics: NoiseExposureMetrics,
        data: NoiseExposureInput,
        protection_effective: bool,
    ) -> ComplianceReport:
        violations: list[str] = []
        warnings: list[str] = []
        compliant: list[str] = []

        if metrics.daily_dose > 100:
            if protection_effective:
                warnings.append(
                    "Daily dose exceeds 100% unprotected - hearing protection "
                    "brings exposure within limits"
                )
            else:
                violations.append("Daily noise dose exceeds OSHA permissible exposure (100%)")
        else:
            compliant.append("Daily noise dose within OSHA permissible exposure")

        if metrics.twa >= self.tables.action_level_db:
            warnings.append(
                "TWA at or above 85 dBA action level - hearing conservation program required"
            )
        else:
            compliant.append("TWA below 85 dBA action level")

        if data.hearing_protection and data.protection_rating <= 0:
            warnings.append("Hearing protection in use without a noise reduction rating")

        return ComplianceReport(tuple(violations), tuple(warnings), tuple(compliant))


__all__ = [
    "NOISE_EXPOSURE_FIELDS",
    "NoiseExposureEngine",
    "NoiseExposureInput",
    "NoiseExposureMetrics",
    "NoiseExposureResult",
]
