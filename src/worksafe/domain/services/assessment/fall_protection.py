"""Fall protection clearance and OSHA 1926.502 compliance engine.

Computes free fall, total fall and required clearance distances, the
arresting impact force, a clearance safety factor heuristic, and a banded
fall risk score. Compliance checks follow OSHA 1926.502(d)(16): free fall
limited to 1.8 m (6 ft) and arresting force limited to 8 kN (1800 lbf).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from worksafe.domain.value_objects import AssessmentKind, FallSystemType, SurfaceType

from ..validation import FieldKind, FieldSpec, InputValidator
from .models import (
    AssessmentResult,
    ClassificationResult,
    ComplianceReport,
    ConfigurationGap,
)
from .tables import (
    DEFAULT_FALL_PROTECTION_TABLES,
    FallProtectionTables,
    classify_band,
    classify_floor,
    lookup,
)

logger = logging.getLogger(__name__)

FALL_PROTECTION_FIELDS = (
    FieldSpec(
        "fall_height", FieldKind.NUMBER, required=True,
        minimum=0, exclusive_minimum=True, maximum=300,
    ),
    FieldSpec(
        "lanyard_length", FieldKind.NUMBER, required=True,
        minimum=0, exclusive_minimum=True, maximum=10,
    ),
    FieldSpec(
        "deceleration_distance", FieldKind.NUMBER,
        minimum=0, exclusive_minimum=True, maximum=10, default=1.0,
    ),
    FieldSpec("worker_weight", FieldKind.NUMBER, minimum=30, maximum=250, default=100.0),
    FieldSpec("anchor_height", FieldKind.NUMBER, minimum=0, maximum=300, default=0.0),
    FieldSpec(
        "surface_type", FieldKind.ENUM, choices=SurfaceType, default=SurfaceType.CONCRETE
    ),
    FieldSpec(
        "system_type", FieldKind.ENUM, choices=FallSystemType, default=FallSystemType.ARREST
    ),
)


@dataclass(frozen=True)
class FallProtectionInput:
    """Validated fall protection inputs (meters, kilograms)."""

    fall_height: float
    lanyard_length: float
    deceleration_distance: float
    worker_weight: float
    anchor_height: float
    surface_type: SurfaceType
    system_type: FallSystemType


@dataclass(frozen=True)
class FallProtectionMetrics:
    """Derived fall protection quantities.

    Attributes:
        free_fall_distance: Distance fallen before the system engages (m).
        total_fall_distance: Free fall plus deceleration distance (m).
        clearance_required: Clearance needed below the working level (m).
        impact_force: Arresting force on the worker (N).
        safety_factor: Assumed available clearance over required clearance.
        risk_score: Combined fall risk score.
    """

    free_fall_distance: float
    total_fall_distance: float
    clearance_required: float
    impact_force: float
    safety_factor: float
    risk_score: float

    def as_dict(self) -> dict[str, float]:
        return {
            "free_fall_distance": self.free_fall_distance,
            "total_fall_distance": self.total_fall_distance,
            "clearance_required": self.clearance_required,
            "impact_force": self.impact_force,
            "safety_factor": self.safety_factor,
            "risk_score": self.risk_score,
        }


@dataclass(frozen=True)
class FallProtectionResult(AssessmentResult):
    """Complete fall protection assessment."""

    kind: ClassVar[AssessmentKind] = AssessmentKind.FALL_PROTECTION

    inputs: FallProtectionInput
    metrics: FallProtectionMetrics
    classification: ClassificationResult
    safety_factor_rating: ClassificationResult
    compliance: ComplianceReport
    recommendations: tuple[str, ...]
    gaps: tuple[ConfigurationGap, ...] = field(default_factory=tuple)


class FallProtectionEngine:
    """Fall clearance, impact force and compliance calculator.

    Args:
        tables: Threshold tables; defaults to the current OSHA values.
    """

    def __init__(
        self, tables: FallProtectionTables = DEFAULT_FALL_PROTECTION_TABLES
    ) -> None:
        self.tables = tables
        self.validator = InputValidator(FALL_PROTECTION_FIELDS)

    def validate(self, inputs: Mapping[str, Any]) -> FallProtectionInput:
        """Validate raw inputs into a typed input record."""
        return FallProtectionInput(**self.validator.validate(inputs))

    def calculate(self, inputs: Mapping[str, Any]) -> FallProtectionResult:
        """Run the full fall protection assessment.

        Raises:
            InputValidationError: If any input is missing or out of range.
        """
        data = self.validate(inputs)
        gaps: list[ConfigurationGap] = []

        free_fall = self.free_fall_distance(
            data.fall_height, data.anchor_height, data.lanyard_length
        )
        total_fall = free_fall + data.deceleration_distance
        clearance = self.clearance_required(total_fall, data.surface_type, gaps)
        impact = self.impact_force(
            data.worker_weight, free_fall, data.deceleration_distance
        )
        safety_factor = self.safety_factor(data.fall_height, clearance)
        classification = self.classify_risk(data.fall_height, free_fall, impact)

        metrics = FallProtectionMetrics(
            free_fall_distance=free_fall,
            total_fall_distance=total_fall,
            clearance_required=clearance,
            impact_force=impact,
            safety_factor=safety_factor,
            risk_score=classification.score or 0.0,
        )
        compliance = self.check_compliance(free_fall, impact, data.system_type)
        recommendations = self.recommend(data, metrics, compliance)

        logger.debug(
            f"Fall assessment: free_fall={free_fall:.2f}m impact={impact:.1f}N "
            f"risk={classification.label}"
        )
        return FallProtectionResult(
            inputs=data,
            metrics=metrics,
            classification=classification,
            safety_factor_rating=self.rate_safety_factor(safety_factor),
            compliance=compliance,
            recommendations=recommendations,
            gaps=tuple(gaps),
        )

    def free_fall_distance(
        self, fall_height: float, anchor_height: float, lanyard_length: float
    ) -> float:
        """Free fall distance including harness stretch, never negative."""
        return max(
            0.0,
            fall_height - anchor_height + lanyard_length + self.tables.harness_stretch_m,
        )

    def clearance_required(
        self,
        total_fall_distance: float,
        surface_type: SurfaceType,
        gaps: list[ConfigurationGap] | None = None,
    ) -> float:
        """Clearance below the work level for the given landing surface."""
        surface_factor = lookup(
            "surface_factors",
            self.tables.surface_factors,
            surface_type,
            self.tables.default_surface_factor,
            gaps if gaps is not None else [],
            fallback=f"default surface factor {self.tables.default_surface_factor} m",
        )
        return (
            total_fall_distance
            + self.tables.safety_margin_m
            + self.tables.d_ring_shift_m
            + surface_factor
        )

    def impact_force(
        self, worker_weight: float, free_fall: float, deceleration_distance: float
    ) -> float:
        """Arresting force in newtons."""
        return worker_weight * self.tables.gravity * free_fall / deceleration_distance

    def safety_factor(self, fall_height: float, clearance_required: float) -> float:
        """Heuristic ratio of assumed available clearance to required clearance.

        Available clearance is assumed to be 1.5x the fall height; no site
        measurement is involved.
        """
        available = fall_height * self.tables.available_clearance_ratio
        return available / clearance_required

    def rate_safety_factor(self, safety_factor: float) -> ClassificationResult:
        rank, label, description = classify_floor(
            safety_factor,
            self.tables.safety_factor_floors,
            ("Insufficient", "Required clearance exceeds assumed available clearance"),
        )
        return ClassificationResult(label, rank, description, score=safety_factor)

    def classify_risk(
        self, fall_height: float, free_fall: float, impact_force: float
    ) -> ClassificationResult:
        """Band the combined fall risk score (edges exclusive)."""
        score = fall_height / 3 + free_fall / 2 + impact_force / 2000
        rank, band = classify_band(score, self.tables.risk_bands, inclusive=False)
        return ClassificationResult(band.label, rank, band.description, score=score)

    def check_compliance(
        self, free_fall: float, impact_force: float, system_type: FallSystemType
    ) -> ComplianceReport:
        """OSHA 1926.502 free fall, arresting force and system checks."""
        t = self.tables
        violations: list[str] = []
        warnings: list[str] = []
        compliant: list[str] = []

        if free_fall > t.max_free_fall_m:
            violations.append("Free fall distance exceeds OSHA limit of 1.8m (6ft)")
        else:
            compliant.append("Free fall distance within OSHA limits")

        if impact_force > t.max_impact_force_n:
            violations.append("Impact force exceeds OSHA limit of 8kN (1800 lbf)")
        elif impact_force > t.impact_warning_n:
            warnings.append(
                "Impact force approaching OSHA limit - consider shock absorber"
            )
        else:
            compliant.append("Impact force within OSHA limits")

        if system_type == FallSystemType.PERSONAL and free_fall > t.personal_max_free_fall_m:
            warnings.append(
                "Personal fall arrest system should limit free fall to 0.6m (2ft)"
            )
        if system_type == FallSystemType.RESTRAINT and free_fall > 0:
            violations.append("Fall restraint system should prevent any free fall")

        return ComplianceReport(tuple(violations), tuple(warnings), tuple(compliant))

    def recommend(
        self,
        data: FallProtectionInput,
        metrics: FallProtectionMetrics,
        compliance: ComplianceReport,
    ) -> tuple[str, ...]:
        t = self.tables
        recs = [
            "Inspect all fall protection equipment before each use",
            "Ensure proper training for all workers at heights",
            "Develop rescue plan for fallen workers",
        ]
        if data.fall_height > t.guardrail_height_m:
            recs.append("Use guardrails or safety nets for work above 3 meters")
        if data.fall_height > t.tie_off_height_m:
            recs.append("Implement 100% tie-off policy for work above 6 meters")

        if metrics.free_fall_distance > t.max_free_fall_m:
            recs.append("Reduce lanyard length to limit free fall distance")
            recs.append("Consider using self-retracting lifelines")
        if (
            metrics.free_fall_distance > t.personal_max_free_fall_m
            and data.system_type == FallSystemType.PERSONAL
        ):
            recs.append("Use shorter lanyard or reposition anchor point")

        if metrics.impact_force > t.impact_warning_n:
            recs.append("Use shock-absorbing lanyard to reduce impact force")
            recs.append("Ensure anchor point can withstand 22kN (5000 lbf)")

        if metrics.clearance_required > data.fall_height * t.clearance_ratio_trigger:
            recs.append("Increase working height to ensure adequate clearance")
            recs.append("Consider using horizontal lifeline system")

        if compliance.violations:
            recs.append("Immediately address OSHA compliance violations")
        if compliance.warnings:
            recs.append("Address OSHA warning items promptly")

        if data.system_type == FallSystemType.RESTRAINT:
            recs.append("Ensure restraint system prevents reaching fall edge")
        elif data.system_type == FallSystemType.ARREST:
            recs.append("Verify clearance below working area is sufficient")
            recs.append("Test rescue equipment and procedures regularly")

        return tuple(recs)


__all__ = [
    "FALL_PROTECTION_FIELDS",
    "FallProtectionEngine",
    "FallProtectionInput",
    "FallProtectionMetrics",
    "FallProtectionResult",
]
