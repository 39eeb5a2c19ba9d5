"""OSHA incident rate engine.

Rates normalize injury counts by hours worked:

    TRIR  = recordable x 200,000 / hours   (100 full-time workers, 1 year)
    DART  = lost time  x 200,000 / hours
    LTIFR = lost time  x 1,000,000 / hours

Rates are compared against industry benchmarks, combined into a 100-point
performance score, and paired with an improvement target and a cost
estimate.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from worksafe.domain.value_objects import AssessmentKind, Industry, ReportingPeriod

from ..validation import CrossFieldRule, FieldKind, FieldSpec, InputValidator
from .models import (
    AssessmentResult,
    ClassificationResult,
    ComplianceReport,
    ConfigurationGap,
)
from .tables import (
    DEFAULT_INCIDENT_RATE_TABLES,
    IncidentRateTables,
    IndustryBenchmark,
    classify_floor,
    lookup,
    resolve_industry,
)

logger = logging.getLogger(__name__)

INCIDENT_RATE_FIELDS = (
    FieldSpec("recordable_injuries", FieldKind.INTEGER, minimum=0, default=0),
    FieldSpec("lost_time_injuries", FieldKind.INTEGER, minimum=0, default=0),
    FieldSpec(
        "total_hours_worked", FieldKind.NUMBER, required=True,
        minimum=0, exclusive_minimum=True,
    ),
    FieldSpec("total_employees", FieldKind.INTEGER, minimum=1, default=1),
    FieldSpec(
        "industry", FieldKind.OPEN_ENUM, choices=Industry, default=Industry.GENERAL
    ),
    FieldSpec(
        "period", FieldKind.ENUM, choices=ReportingPeriod, default=ReportingPeriod.ANNUAL
    ),
)

INCIDENT_RATE_CROSS_CHECKS = (
    CrossFieldRule(
        "lost_time_injuries",
        lambda values: values["lost_time_injuries"] <= values["recordable_injuries"],
        "Lost time injuries cannot exceed recordable injuries.",
    ),
)


@dataclass(frozen=True)
class IncidentRateInput:
    recordable_injuries: int
    lost_time_injuries: int
    total_hours_worked: float
    total_employees: int
    industry: Industry
    period: ReportingPeriod


@dataclass(frozen=True)
class IncidentRateMetrics:
    """Computed incident rates.

    Attributes:
        trir: Total Recordable Incident Rate.
        dart: Days Away, Restricted or Transferred rate.
        ltifr: Lost Time Injury Frequency Rate.
        severity_rate: Lost time share of recordables (%).
        frequency_rate: Recordables per million hours.
        avg_hours_per_employee: Hours worked per employee.
    """

    trir: float
    dart: float
    ltifr: float
    severity_rate: float
    frequency_rate: float
    avg_hours_per_employee: float

    def as_dict(self) -> dict[str, float]:
        return {
            "trir": self.trir,
            "dart": self.dart,
            "ltifr": self.ltifr,
            "severity_rate": self.severity_rate,
            "frequency_rate": self.frequency_rate,
            "avg_hours_per_employee": self.avg_hours_per_employee,
        }


@dataclass(frozen=True)
class BenchmarkComparison:
    """A rate compared with its industry benchmark."""

    level: str
    rate: float
    benchmark: float
    difference: float
    percentage: float


@dataclass(frozen=True)
class ImprovementTarget:
    """TRIR reduction needed to reach the industry target."""

    target: float
    reduction: float
    percentage: float


@dataclass(frozen=True)
class CostImpact:
    """Estimated injury cost (USD)."""

    direct: float
    indirect: float
    total: float
    per_injury: float


@dataclass(frozen=True)
class IncidentRateResult(AssessmentResult):
    """Complete incident rate analysis."""

    kind: ClassVar[AssessmentKind] = AssessmentKind.INCIDENT_RATE

    inputs: IncidentRateInput
    metrics: IncidentRateMetrics
    benchmark: IndustryBenchmark
    trir_comparison: BenchmarkComparison
    dart_comparison: BenchmarkComparison
    classification: ClassificationResult
    improvement: ImprovementTarget
    cost_impact: CostImpact
    compliance: ComplianceReport
    recommendations: tuple[str, ...]
    gaps: tuple[ConfigurationGap, ...] = field(default_factory=tuple)


class IncidentRateEngine:
    """Incident rate, benchmark and performance calculator.

    Args:
        tables: Rate multipliers, benchmarks and cost model.
    """

    def __init__(
        self, tables: IncidentRateTables = DEFAULT_INCIDENT_RATE_TABLES
    ) -> None:
        self.tables = tables
        self.validator = InputValidator(INCIDENT_RATE_FIELDS, INCIDENT_RATE_CROSS_CHECKS)

    def calculate(self, inputs: Mapping[str, Any]) -> IncidentRateResult:
        """Run the full incident rate analysis.

        Raises:
            InputValidationError: If any input is missing or inconsistent.
        """
        values = self.validator.validate(inputs)
        gaps: list[ConfigurationGap] = []
        values["industry"] = resolve_industry(values["industry"], gaps)
        data = IncidentRateInput(**values)

        metrics = self.rates(data)
        benchmark = self.benchmark_for(data.industry, gaps)
        performance = self.assess_performance(metrics, benchmark)
        trir_comparison = self.compare(metrics.trir, benchmark.trir)
        dart_comparison = self.compare(metrics.dart, benchmark.dart)

        logger.debug(
            f"Incident rates: trir={metrics.trir:.2f} dart={metrics.dart:.2f} "
            f"ltifr={metrics.ltifr:.2f} rating={performance.label}"
        )
        return IncidentRateResult(
            inputs=data,
            metrics=metrics,
            benchmark=benchmark,
            trir_comparison=trir_comparison,
            dart_comparison=dart_comparison,
            classification=performance,
            improvement=self.improvement_needed(metrics.trir, benchmark.target),
            cost_impact=self.cost_impact(data.recordable_injuries, data.lost_time_injuries),
            compliance=self.check_benchmarks(metrics, benchmark),
            recommendations=self.recommend(data, metrics, performance.label),
            gaps=tuple(gaps),
        )

    def rates(self, data: IncidentRateInput) -> IncidentRateMetrics:
        t = self.tables
        hours = data.total_hours_worked
        recordable = data.recordable_injuries
        lost_time = data.lost_time_injuries
        return IncidentRateMetrics(
            trir=recordable * t.osha_hours_base / hours,
            dart=lost_time * t.osha_hours_base / hours,
            ltifr=lost_time * t.ltifr_hours_base / hours,
            severity_rate=(lost_time / recordable * 100) if recordable else 0.0,
            frequency_rate=recordable / hours * 1_000_000,
            avg_hours_per_employee=hours / data.total_employees,
        )

    def benchmark_for(
        self, industry: Industry, gaps: list[ConfigurationGap] | None = None
    ) -> IndustryBenchmark:
        fallback = self.tables.fallback_industry
        return lookup(
            "incident_benchmarks",
            self.tables.benchmarks,
            industry,
            self.tables.benchmarks[fallback],
            gaps if gaps is not None else [],
            fallback=f"{fallback.value} benchmark",
        )

    def compare(self, rate: float, benchmark: float) -> BenchmarkComparison:
        """Rate a value against a benchmark (ratio edges inclusive)."""
        level = self.tables.comparison_fallback
        for ratio, label in self.tables.comparison_bands:
            if rate <= benchmark * ratio:
                level = label
                break
        difference = rate - benchmark
        return BenchmarkComparison(
            level=level,
            rate=rate,
            benchmark=benchmark,
            difference=difference,
            percentage=difference / benchmark * 100,
        )

    def performance_score(
        self, metrics: IncidentRateMetrics, benchmark: IndustryBenchmark
    ) -> int:
        t = self.tables
        score = 0
        if metrics.trir <= benchmark.target:
            score += 30
        elif metrics.trir <= benchmark.trir:
            score += 20
        else:
            score += 10

        if metrics.dart <= benchmark.target * t.dart_target_ratio:
            score += 30
        elif metrics.dart <= benchmark.dart:
            score += 20
        else:
            score += 10

        for limit, points in t.ltifr_points:
            if metrics.ltifr <= limit:
                score += points
                break
        else:
            score += t.ltifr_fallback_points
        return score

    def assess_performance(
        self, metrics: IncidentRateMetrics, benchmark: IndustryBenchmark
    ) -> ClassificationResult:
        score = self.performance_score(metrics, benchmark)
        rank, label, description = classify_floor(
            score, self.tables.rating_floors, self.tables.rating_fallback
        )
        return ClassificationResult(label, rank, description, score=float(score))

    @staticmethod
    def improvement_needed(trir: float, target: float) -> ImprovementTarget:
        reduction = trir - target
        percentage = reduction / trir * 100 if trir else 0.0
        return ImprovementTarget(target=target, reduction=reduction, percentage=percentage)

    def cost_impact(self, recordable: int, lost_time: int) -> CostImpact:
        t = self.tables
        direct = recordable * t.recordable_cost + lost_time * t.lost_time_cost
        total = direct * t.indirect_multiplier
        return CostImpact(
            direct=direct,
            indirect=direct * (t.indirect_multiplier - 1),
            total=total,
            per_injury=total / (recordable or 1),
        )

    def check_benchmarks(
        self, metrics: IncidentRateMetrics, benchmark: IndustryBenchmark
    ) -> ComplianceReport:
        """Benchmark findings; incident rates carry no hard regulatory limit."""
        warnings: list[str] = []
        compliant: list[str] = []
        if metrics.trir > benchmark.trir:
            warnings.append(
                f"TRIR {metrics.trir:.2f} exceeds industry benchmark of {benchmark.trir}"
            )
        else:
            compliant.append("TRIR at or below industry benchmark")
        if metrics.dart > benchmark.dart:
            warnings.append(
                f"DART rate {metrics.dart:.2f} exceeds industry benchmark of {benchmark.dart}"
            )
        else:
            compliant.append("DART rate at or below industry benchmark")
        return ComplianceReport(warnings=tuple(warnings), compliant=tuple(compliant))

    def recommend(
        self, data: IncidentRateInput, metrics: IncidentRateMetrics, rating: str
    ) -> tuple[str, ...]:
        recs: list[str] = []
        if data.recordable_injuries > 0:
            recs.append("Conduct incident investigation for all recordable injuries")
            recs.append("Implement corrective actions based on root cause analysis")
        if data.lost_time_injuries > 0:
            recs.append("Review lost time incidents with senior management")
            recs.append("Implement return-to-work programs")

        if metrics.trir > self.tables.trir_training_trigger:
            recs.append("Strengthen safety training programs")
            recs.append("Increase safety inspections and audits")
            recs.append("Implement behavior-based safety programs")
        if metrics.dart > self.tables.dart_ergonomics_trigger:
            recs.append("Focus on ergonomic improvements")
            recs.append("Implement job hazard analysis for high-risk tasks")
            recs.append("Enhance first aid and medical response capabilities")

        if rating == "Needs Improvement":
            recs.append("Develop comprehensive safety improvement plan")
            recs.append("Increase management safety walkthroughs")
            recs.append("Consider hiring safety consultant")
            recs.append("Benchmark against industry leaders")
        elif rating == "World Class":
            recs.append("Maintain current safety programs")
            recs.append("Share best practices within organization")
            recs.append("Consider safety certification (ISO 45001)")

        recs.append("Review industry-specific safety standards and regulations")
        recs.append("Participate in industry safety groups and forums")
        return tuple(recs)


__all__ = [
    "BenchmarkComparison",
    "CostImpact",
    "INCIDENT_RATE_FIELDS",
    "ImprovementTarget",
    "IncidentRateEngine",
    "IncidentRateInput",
    "IncidentRateMetrics",
    "IncidentRateResult",
]
