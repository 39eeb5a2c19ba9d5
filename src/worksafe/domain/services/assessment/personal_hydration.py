"""Personal daily water requirement for a worker."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from worksafe.domain.value_objects import ActivityLevel, AssessmentKind

from ..validation import FieldKind, FieldSpec, InputValidator
from .models import AssessmentResult, ConfigurationGap
from .tables import DEFAULT_HYDRATION_TABLES, HydrationTables, UrineColor, lookup

logger = logging.getLogger(__name__)

PERSONAL_HYDRATION_FIELDS = (
    FieldSpec(
        "body_weight", FieldKind.NUMBER, required=True,
        minimum=0, exclusive_minimum=True, maximum=300,
    ),
    FieldSpec(
        "activity_level", FieldKind.ENUM,
        choices=ActivityLevel, default=ActivityLevel.MODERATE,
    ),
    FieldSpec("temperature", FieldKind.NUMBER, required=True, minimum=-20, maximum=50),
)


@dataclass(frozen=True)
class PersonalHydrationInput:
    body_weight: float
    activity_level: ActivityLevel
    temperature: float


@dataclass(frozen=True)
class PersonalHydrationResult(AssessmentResult):
    """Daily and per-hour water intake with the urine color guide.

    Attributes:
        daily_liters: Total daily water requirement.
        hourly_liters: Intake per hour over an 8-hour shift.
        pre_shift_liters: Intake before the shift.
        post_shift_liters: Intake after the shift.
        urine_color_guide: Six-step hydration self-check guide.
    """

    kind: ClassVar[AssessmentKind] = AssessmentKind.PERSONAL_HYDRATION

    inputs: PersonalHydrationInput
    daily_liters: float
    hourly_liters: float
    pre_shift_liters: float
    post_shift_liters: float
    urine_color_guide: tuple[UrineColor, ...]
    recommendations: tuple[str, ...]
    classification: None = None
    compliance: None = None
    gaps: tuple[ConfigurationGap, ...] = field(default_factory=tuple)


class PersonalHydrationEngine:
    """Computes an individual's daily water needs from weight, activity and heat."""

    def __init__(self, tables: HydrationTables = DEFAULT_HYDRATION_TABLES) -> None:
        self.tables = tables
        self.validator = InputValidator(PERSONAL_HYDRATION_FIELDS)

    def calculate(self, inputs: Mapping[str, Any]) -> PersonalHydrationResult:
        """Compute the personal hydration plan.

        Raises:
            InputValidationError: If any input is missing or out of range.
        """
        data = PersonalHydrationInput(**self.validator.validate(inputs))
        gaps: list[ConfigurationGap] = []
        t = self.tables

        daily = self.daily_liters(data.body_weight, data.activity_level, data.temperature, gaps)
        logger.debug(f"Personal hydration: {daily:.2f} L/day")

        return PersonalHydrationResult(
            inputs=data,
            daily_liters=daily,
            hourly_liters=daily / t.work_hours_per_day,
            pre_shift_liters=t.pre_shift_liters,
            post_shift_liters=t.post_shift_liters,
            urine_color_guide=t.urine_color_guide,
            recommendations=(
                f"Drink {daily:.2f} liters over the day",
                f"Drink {daily / t.work_hours_per_day:.2f} liters per hour during work",
                f"Drink {t.pre_shift_liters:.1f} liters before and "
                f"{t.post_shift_liters:.1f} liters after the shift",
            ),
            gaps=tuple(gaps),
        )

    def daily_liters(
        self,
        body_weight: float,
        activity_level: ActivityLevel,
        temperature: float,
        gaps: list[ConfigurationGap] | None = None,
    ) -> float:
        """Daily requirement: 30 mL/kg scaled by activity, +4% per degree above 25 C."""
        t = self.tables
        multiplier = lookup(
            "activity_multipliers",
            t.activity_multipliers,
            activity_level,
            1.0,
            gaps if gaps is not None else [],
        )
        milliliters = body_weight * t.ml_per_kg * multiplier
        if temperature > t.heat_threshold_c:
            milliliters *= 1 + (temperature - t.heat_threshold_c) * t.heat_increase_per_degree
        return milliliters / 1000


__all__ = [
    "PERSONAL_HYDRATION_FIELDS",
    "PersonalHydrationEngine",
    "PersonalHydrationInput",
    "PersonalHydrationResult",
]
