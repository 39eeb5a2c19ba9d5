"""Heat stress assessment engine.

Computes the Wet Bulb Globe Temperature (WBGT), a Rothfusz heat index,
an estimated sweat rate, an ACGIH-style work-rest schedule and a
hydration plan, then bands heat illness risk and checks the OSHA
General Duty Clause, Cal/OSHA and Washington L&I heat thresholds.

WBGT:
    Indoor (globe measured):   0.7 * wet bulb + 0.3 * globe
    Outdoor (globe estimated): 0.7 * wet bulb + 0.2 * globe + 0.1 * dry bulb
    where the estimated globe is dry bulb plus a solar load offset.

Risk and work-rest bands share the WBGT edges 26/28/30/32 C; a value
equal to an edge belongs to the lower band.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from worksafe.domain.value_objects import (
    Acclimatization,
    AssessmentKind,
    ClothingType,
    SolarLoad,
    WorkIntensity,
)

from ..validation import CrossFieldRule, FieldKind, FieldSpec, InputValidator
from .models import (
    AssessmentResult,
    ClassificationResult,
    ComplianceReport,
    ConfigurationGap,
)
from .tables import DEFAULT_HEAT_STRESS_TABLES, HeatStressTables, lookup

logger = logging.getLogger(__name__)

HEAT_STRESS_FIELDS = (
    FieldSpec("dry_bulb", FieldKind.NUMBER, required=True, minimum=-20, maximum=60),
    FieldSpec("wet_bulb", FieldKind.NUMBER, required=True, minimum=-20, maximum=60),
    FieldSpec("globe_temp", FieldKind.NUMBER, minimum=-20, maximum=100),
    FieldSpec("humidity", FieldKind.NUMBER, required=True, minimum=0, maximum=100),
    FieldSpec("wind_speed", FieldKind.NUMBER, minimum=0, maximum=50, default=0.0),
    FieldSpec("solar_load", FieldKind.ENUM, choices=SolarLoad, default=SolarLoad.NONE),
    FieldSpec(
        "work_intensity", FieldKind.ENUM,
        choices=WorkIntensity, default=WorkIntensity.MODERATE,
    ),
    FieldSpec("clothing", FieldKind.ENUM, choices=ClothingType, default=ClothingType.NONE),
    FieldSpec(
        "acclimatization", FieldKind.ENUM,
        choices=Acclimatization, default=Acclimatization.PARTIAL,
    ),
)

HEAT_STRESS_CROSS_CHECKS = (
    CrossFieldRule(
        "wet_bulb",
        lambda values: values["wet_bulb"] <= values["dry_bulb"],
        "wet_bulb cannot exceed dry_bulb",
    ),
)


@dataclass(frozen=True)
class HeatStressInput:
    """Validated heat stress inputs (degrees Celsius, percent, m/s)."""

    dry_bulb: float
    wet_bulb: float
    globe_temp: float | None
    humidity: float
    wind_speed: float
    solar_load: SolarLoad
    work_intensity: WorkIntensity
    clothing: ClothingType
    acclimatization: Acclimatization


@dataclass(frozen=True)
class HeatStressMetrics:
    """Derived heat stress quantities.

    Attributes:
        wbgt: Wet Bulb Globe Temperature (C).
        globe_temp_used: Measured or estimated globe temperature (C).
        heat_index: Rothfusz heat index.
        sweat_rate: Estimated sweat loss (L/hr).
        risk_score: Combined heat risk score.
    """

    wbgt: float
    globe_temp_used: float
    heat_index: float
    sweat_rate: float
    risk_score: float

    def as_dict(self) -> dict[str, float]:
        return {
            "wbgt": self.wbgt,
            "globe_temp_used": self.globe_temp_used,
            "heat_index": self.heat_index,
            "sweat_rate": self.sweat_rate,
            "risk_score": self.risk_score,
        }


@dataclass(frozen=True)
class WorkRestAdjustment:
    """One applied step of the work-rest adjustment pipeline."""

    step: str
    delta: float
    work_percentage_after: float


@dataclass(frozen=True)
class WorkRestSchedule:
    """Recommended work-rest regime.

    Attributes:
        base_work_percentage: Work share from the WBGT band alone.
        work_percentage: Work share after adjustments (0-100).
        rest_percentage: 100 minus the work share.
        cycle: Cycle label of the WBGT band.
        max_work_minutes: Maximum work minutes per hour.
        adjustments: Adjustment steps in the order applied.
    """

    base_work_percentage: float
    work_percentage: float
    rest_percentage: float
    cycle: str
    max_work_minutes: float
    adjustments: tuple[WorkRestAdjustment, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.work_percentage <= 100:
            raise ValueError("work_percentage must be between 0 and 100")


@dataclass(frozen=True)
class HydrationPlan:
    """Fluid replacement plan for an 8-hour shift (liters)."""

    hourly_loss: float
    daily_loss: float
    recommended_intake: float
    pre_shift: float
    during_work: float
    per_hour: float

    serialized_properties: ClassVar[tuple[str, ...]] = ("schedule",)

    @property
    def schedule(self) -> str:
        return f"Drink {self.per_hour:.2f}L per hour during work"


@dataclass(frozen=True)
class HeatRiskDetail:
    """Symptoms and action text of the final heat risk band."""

    base_level: str
    symptoms: str
    action: str


@dataclass(frozen=True)
class HeatStressResult(AssessmentResult):
    """Complete heat stress assessment."""

    kind: ClassVar[AssessmentKind] = AssessmentKind.HEAT_STRESS

    inputs: HeatStressInput
    metrics: HeatStressMetrics
    classification: ClassificationResult
    risk_detail: HeatRiskDetail
    work_rest: WorkRestSchedule
    hydration: HydrationPlan
    compliance: ComplianceReport
    recommendations: tuple[str, ...]
    gaps: tuple[ConfigurationGap, ...] = field(default_factory=tuple)


class HeatStressEngine:
    """WBGT-based heat stress calculator.

    Args:
        tables: Band edges, sweat model and compliance thresholds.
    """

    def __init__(self, tables: HeatStressTables = DEFAULT_HEAT_STRESS_TABLES) -> None:
        self.tables = tables
        self.validator = InputValidator(HEAT_STRESS_FIELDS, HEAT_STRESS_CROSS_CHECKS)
        # Work-rest adjustments, applied in order with clamping after each
        self.work_rest_steps: tuple[
            tuple[str, Callable[[HeatStressInput], float]], ...
        ] = (
            ("intensity", self._intensity_adjustment),
            ("acclimatization", self._acclimatization_adjustment),
        )

    def calculate(self, inputs: Mapping[str, Any]) -> HeatStressResult:
        """Run the full heat stress assessment.

        Raises:
            InputValidationError: If any input is missing or out of range.
        """
        data = HeatStressInput(**self.validator.validate(inputs))
        gaps: list[ConfigurationGap] = []

        globe = self.globe_temperature(data.dry_bulb, data.globe_temp, data.solar_load)
        wbgt = self.wbgt(
            data.dry_bulb, data.wet_bulb, globe, indoor=data.globe_temp is not None
        )
        heat_index = self.heat_index(data.dry_bulb, data.humidity)
        sweat_rate = self.sweat_rate(wbgt, data.work_intensity, data.clothing, gaps)
        schedule = self.work_rest_schedule(wbgt, data)
        hydration = self.hydration_plan(sweat_rate, schedule)
        classification, detail = self.classify_risk(
            wbgt, heat_index, data.work_intensity, data.acclimatization
        )
        compliance = self.check_compliance(wbgt, classification.label)

        metrics = HeatStressMetrics(
            wbgt=wbgt,
            globe_temp_used=globe,
            heat_index=heat_index,
            sweat_rate=sweat_rate,
            risk_score=classification.score or 0.0,
        )
        logger.debug(
            f"Heat assessment: wbgt={wbgt:.1f} heat_index={heat_index:.1f} "
            f"risk={classification.label}"
        )
        return HeatStressResult(
            inputs=data,
            metrics=metrics,
            classification=classification,
            risk_detail=detail,
            work_rest=schedule,
            hydration=hydration,
            compliance=compliance,
            recommendations=self.recommend(classification.label, schedule, hydration, wbgt),
            gaps=tuple(gaps),
        )

    def globe_temperature(
        self, dry_bulb: float, globe_temp: float | None, solar_load: SolarLoad
    ) -> float:
        """Measured globe temperature, or dry bulb plus the solar offset."""
        if globe_temp is not None:
            return globe_temp
        return dry_bulb + self.tables.solar_globe_offsets.get(solar_load, 0.0)

    @staticmethod
    def wbgt(dry_bulb: float, wet_bulb: float, globe: float, *, indoor: bool) -> float:
        if indoor:
            return 0.7 * wet_bulb + 0.3 * globe
        return 0.7 * wet_bulb + 0.2 * globe + 0.1 * dry_bulb

    def heat_index(self, temperature: float, humidity: float) -> float:
        """Rothfusz regression evaluated on Celsius and percent humidity."""
        c1, c2, c3, c4, c5, c6, c7, c8, c9 = self.tables.heat_index_coefficients
        t, r = temperature, humidity
        return (
            c1
            + c2 * t
            + c3 * r
            + c4 * t * r
            + c5 * t * t
            + c6 * r * r
            + c7 * t * t * r
            + c8 * t * r * r
            + c9 * t * t * r * r
        )

    def sweat_rate(
        self,
        wbgt: float,
        intensity: WorkIntensity,
        clothing: ClothingType,
        gaps: list[ConfigurationGap] | None = None,
    ) -> float:
        """Estimated sweat loss in liters per hour."""
        gaps = gaps if gaps is not None else []
        model = lookup(
            "sweat_rate_models", self.tables.sweat_rate_models, intensity,
            None, gaps, fallback=f"{self.tables.default_sweat_rate} L/hr",
        )
        if model is None:
            base = self.tables.default_sweat_rate
        else:
            base = model[0] + wbgt * model[1]
        factor = lookup("clothing_factors", self.tables.clothing_factors, clothing, 1.0, gaps)
        return base * factor

    def work_rest_schedule(
        self, wbgt: float, data: HeatStressInput
    ) -> WorkRestSchedule:
        """Work-rest regime from the WBGT band, then the adjustment pipeline."""
        band = next(
            b for b in self.tables.work_rest_bands if b.upper is None or wbgt <= b.upper
        )
        work = band.work_percentage
        applied: list[WorkRestAdjustment] = []
        for step, adjust in self.work_rest_steps:
            delta = adjust(data)
            if delta:
                work = min(100.0, max(0.0, work + delta))
                applied.append(WorkRestAdjustment(step, delta, work))

        return WorkRestSchedule(
            base_work_percentage=band.work_percentage,
            work_percentage=work,
            rest_percentage=100.0 - work,
            cycle=band.cycle,
            max_work_minutes=work / 100 * 60,
            adjustments=tuple(applied),
        )

    def _intensity_adjustment(self, data: HeatStressInput) -> float:
        return self.tables.intensity_adjustments.get(data.work_intensity, 0.0)

    def _acclimatization_adjustment(self, data: HeatStressInput) -> float:
        return self.tables.acclimatization_adjustments.get(data.acclimatization, 0.0)

    def hydration_plan(
        self, sweat_rate: float, schedule: WorkRestSchedule
    ) -> HydrationPlan:
        t = self.tables
        daily_loss = sweat_rate * t.work_hours_per_day * schedule.work_percentage / 100
        recommended = daily_loss * t.intake_multiplier
        # Pre-shift intake can exceed the whole need when no work is allowed
        during_work = max(0.0, recommended - t.pre_shift_liters)
        return HydrationPlan(
            hourly_loss=sweat_rate,
            daily_loss=daily_loss,
            recommended_intake=recommended,
            pre_shift=t.pre_shift_liters,
            during_work=during_work,
            per_hour=during_work / t.work_hours_per_day,
        )

    def classify_risk(
        self,
        wbgt: float,
        heat_index: float,
        intensity: WorkIntensity,
        acclimatization: Acclimatization,
    ) -> tuple[ClassificationResult, HeatRiskDetail]:
        """Band heat risk by WBGT, then shift it for acclimatization.

        Acclimatized workers move down one band from Very High or High;
        unacclimatized workers move up one band from Low or Moderate.
        """
        bands = self.tables.risk_bands
        base = next(b for b in bands if b.upper is None or wbgt <= b.upper)

        label = base.label
        if acclimatization == Acclimatization.ACCLIMATIZED:
            label = self.tables.acclimatized_shifts.get(label, label)
        elif acclimatization == Acclimatization.UNACCLIMATIZED:
            label = self.tables.unacclimatized_shifts.get(label, label)

        rank, final = next((i, b) for i, b in enumerate(bands) if b.label == label)
        score = wbgt + heat_index / 10 + self.tables.intensity_risk_points.get(intensity, 0.0)
        return (
            ClassificationResult(final.label, rank, final.action, score=score),
            HeatRiskDetail(base_level=base.label, symptoms=final.symptoms, action=final.action),
        )

    def check_compliance(self, wbgt: float, risk_level: str) -> ComplianceReport:
        t = self.tables
        violations: list[str] = []
        warnings: list[str] = []
        compliant: list[str] = []

        if risk_level in ("Extreme Risk", "Very High Risk"):
            violations.append("OSHA General Duty Clause violation - Serious hazard present")
        else:
            compliant.append("No serious heat hazard under OSHA General Duty Clause")

        if wbgt >= t.cal_osha_program_wbgt:
            warnings.append("Cal/OSHA requires written heat illness prevention program")
        if wbgt >= t.cal_osha_rest_wbgt:
            violations.append(
                "Cal/OSHA requires mandatory 10-minute cool-down rest every 2 hours"
            )
        if wbgt >= t.wa_precaution_wbgt:
            warnings.append("WA L&I requires additional precautions at 29°C WBGT")

        return ComplianceReport(tuple(violations), tuple(warnings), tuple(compliant))

    def recommend(
        self,
        risk_level: str,
        schedule: WorkRestSchedule,
        hydration: HydrationPlan,
        wbgt: float,
    ) -> tuple[str, ...]:
        recs = [
            "Provide cool drinking water (10-15°C)",
            "Train workers on heat illness recognition",
            "Establish buddy system for heat monitoring",
        ]
        if risk_level in ("Moderate Risk", "High Risk"):
            recs.append(f"Implement work-rest schedule: {schedule.cycle}")
            recs.append("Provide shaded or air-conditioned rest areas")
            recs.append("Monitor workers for heat illness symptoms")
        if risk_level in ("High Risk", "Very High Risk"):
            recs.append("Assign dedicated heat safety observer")
            recs.append("Provide cooling vests or other personal cooling")
            recs.append("Schedule hardest work for cooler parts of day")
        if risk_level == "Extreme Risk":
            recs.append("STOP ALL WORK IN HEAT")
            recs.append("Implement emergency response plan")
            recs.append("Provide immediate cooling facilities")

        recs.append(f"Hydration: {hydration.schedule}")
        recs.append(
            f"Drink {hydration.pre_shift:.1f}L before shift, "
            f"{hydration.during_work:.2f}L during work"
        )

        if wbgt > self.tables.acclimatization_program_wbgt:
            recs.append("Implement 7-day acclimatization program for new workers")
            recs.append("Gradually increase workload over first week")

        recs.append("Provide light-colored, loose-fitting clothing")
        recs.append("Allow for removal of unnecessary PPE during breaks")
        return tuple(recs)


__all__ = [
    "HEAT_STRESS_FIELDS",
    "HeatRiskDetail",
    "HeatStressEngine",
    "HeatStressInput",
    "HeatStressMetrics",
    "HeatStressResult",
    "HydrationPlan",
    "WorkRestAdjustment",
    "WorkRestSchedule",
]
