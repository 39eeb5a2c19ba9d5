"""Safety training needs engine.

Builds the mandatory and recommended course lists for an organization,
sizes the training hours over a three-year cycle, and prices the program
by delivery method. The current program is scored for effectiveness and
checked against jurisdiction minimums, and the investment is weighed
against injury, turnover and productivity savings. When a department is
given, its own course needs are assessed from its risk level, incident
history and skill gaps.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from worksafe.domain.value_objects import (
    AssessmentKind,
    CompanySize,
    Department,
    DepartmentRisk,
    ExperienceLevel,
    IncidentHistory,
    Industry,
    Location,
    Regulation,
    SkillGap,
    TrainingFrequency,
    TrainingMethod,
)

from ..validation import FieldKind, FieldSpec, InputValidator
from .models import (
    AssessmentResult,
    ClassificationResult,
    ComplianceReport,
    ConfigurationGap,
)
from .tables import (
    DEFAULT_TRAINING_NEEDS_TABLES,
    TrainingNeedsTables,
    classify_floor,
    lookup,
    resolve_industry,
)

logger = logging.getLogger(__name__)

TRAINING_NEEDS_FIELDS = (
    FieldSpec("total_employees", FieldKind.INTEGER, required=True, minimum=1),
    FieldSpec(
        "company_size", FieldKind.ENUM, choices=CompanySize, default=CompanySize.MEDIUM
    ),
    FieldSpec(
        "industry", FieldKind.OPEN_ENUM, choices=Industry, default=Industry.GENERAL
    ),
    FieldSpec("location", FieldKind.ENUM, choices=Location, default=Location.USA),
    FieldSpec("new_hires", FieldKind.INTEGER, minimum=0, default=0),
    FieldSpec("turnover_rate", FieldKind.NUMBER, minimum=0, maximum=1, default=0.0),
    FieldSpec(
        "experience_level", FieldKind.ENUM,
        choices=ExperienceLevel, default=ExperienceLevel.INTERMEDIATE,
    ),
    FieldSpec("current_training_hours", FieldKind.NUMBER, minimum=0, default=0.0),
    FieldSpec(
        "training_frequency", FieldKind.ENUM,
        choices=TrainingFrequency, default=TrainingFrequency.YEARLY,
    ),
    FieldSpec(
        "training_method", FieldKind.ENUM,
        choices=TrainingMethod, default=TrainingMethod.IN_PERSON,
    ),
    FieldSpec("certification_required", FieldKind.BOOLEAN, default=False),
    FieldSpec("regulations", FieldKind.ENUM_SET, choices=Regulation),
    FieldSpec("department", FieldKind.OPEN_ENUM, choices=Department),
    FieldSpec(
        "department_risk", FieldKind.ENUM,
        choices=DepartmentRisk, default=DepartmentRisk.MEDIUM,
    ),
    FieldSpec(
        "incident_history", FieldKind.ENUM,
        choices=IncidentHistory, default=IncidentHistory.OCCASIONAL,
    ),
    FieldSpec("skill_gaps", FieldKind.ENUM, choices=SkillGap, default=SkillGap.MODERATE),
)


@dataclass(frozen=True)
class TrainingNeedsInput:
    total_employees: int
    company_size: CompanySize
    industry: Industry
    location: Location
    new_hires: int
    turnover_rate: float
    experience_level: ExperienceLevel
    current_training_hours: float
    training_frequency: TrainingFrequency
    training_method: TrainingMethod
    certification_required: bool
    regulations: frozenset[Regulation]
    department: Department | str | None
    department_risk: DepartmentRisk
    incident_history: IncidentHistory
    skill_gaps: SkillGap


@dataclass(frozen=True)
class TrainingNeeds:
    """Courses the organization needs, in catalog order."""

    mandatory: tuple[str, ...]
    recommended: tuple[str, ...]

    serialized_properties: ClassVar[tuple[str, ...]] = ("total_modules",)

    @property
    def total_modules(self) -> int:
        return len(self.mandatory) + len(self.recommended)


@dataclass(frozen=True)
class TrainingHours:
    """Per-employee training hours over the three-year cycle.

    Attributes:
        mandatory: Experience-adjusted mandatory hours.
        recommended: Experience-adjusted recommended hours.
        certification: Certification preparation hours.
        total: Cycle total.
        annual_per_employee: Total spread over the cycle years.
        quarterly_per_employee: Annual hours over four quarters.
    """

    mandatory: float
    recommended: float
    certification: float
    total: float
    annual_per_employee: float
    quarterly_per_employee: float


@dataclass(frozen=True)
class TrainingCosts:
    """Program cost breakdown (USD)."""

    method: TrainingMethod
    direct: float
    productivity: float
    employee: float
    development: float
    total: float
    per_employee: float
    annual: float


@dataclass(frozen=True)
class TrainingEffectiveness:
    """Current program effectiveness inputs (percentages)."""

    coverage: float
    method_factor: float
    frequency_factor: float


@dataclass(frozen=True)
class TrainingROI:
    """Three-year return on the training investment.

    Attributes:
        injury_savings: Annual savings from prevented injuries.
        turnover_savings: Annual savings from reduced turnover.
        productivity_savings: Annual productivity gain.
        total_benefits: Annual benefit total.
        roi: Three-year return (%).
        payback_years: Years of benefits needed to recover the cost.
        cost_benefit_ratio: Annual benefits over annualized cost.
    """

    injury_savings: float
    turnover_savings: float
    productivity_savings: float
    total_benefits: float
    roi: float
    payback_years: float
    cost_benefit_ratio: float


@dataclass(frozen=True)
class TrainingPhase:
    name: str
    duration: str
    courses: tuple[str, ...]
    hours: float
    priority: str


@dataclass(frozen=True)
class TrainingPlan:
    """Phased rollout with timeline, resources and evaluation methods."""

    phases: tuple[TrainingPhase, ...]
    timeline: Mapping[str, str]
    resources: tuple[str, ...]
    evaluation: tuple[str, ...]


@dataclass(frozen=True)
class DepartmentNeedsAssessment:
    """Courses one department needs, with the standing assessment advice.

    Attributes:
        department: Department assessed; unlisted names are kept as given.
        needs: Department courses followed by risk, incident and skill
            gap additions.
        recommendations: How to schedule and verify the training.
    """

    department: Department | str
    needs: tuple[str, ...]
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class TrainingNeedsResult(AssessmentResult):
    """Complete training needs analysis."""

    kind: ClassVar[AssessmentKind] = AssessmentKind.TRAINING_NEEDS

    inputs: TrainingNeedsInput
    needs: TrainingNeeds
    hours: TrainingHours
    costs: TrainingCosts
    effectiveness: TrainingEffectiveness
    classification: ClassificationResult
    compliance: ComplianceReport
    minimum_annual_hours: float
    documentation: tuple[str, ...]
    roi: TrainingROI
    plan: TrainingPlan
    department_assessment: DepartmentNeedsAssessment | None
    recommendations: tuple[str, ...]
    gaps: tuple[ConfigurationGap, ...] = field(default_factory=tuple)


class TrainingNeedsEngine:
    """Training needs, cost, effectiveness and ROI calculator.

    Args:
        tables: Course catalogs, hour and cost tables, ROI assumptions.
    """

    def __init__(
        self, tables: TrainingNeedsTables = DEFAULT_TRAINING_NEEDS_TABLES
    ) -> None:
        self.tables = tables
        self.validator = InputValidator(TRAINING_NEEDS_FIELDS)

    def calculate(self, inputs: Mapping[str, Any]) -> TrainingNeedsResult:
        """Run the full training needs analysis.

        Raises:
            InputValidationError: If any input is missing or out of range.
        """
        values = self.validator.validate(inputs)
        gaps: list[ConfigurationGap] = []
        values["industry"] = resolve_industry(values["industry"], gaps)
        data = TrainingNeedsInput(**values)

        needs = self.training_needs(data, gaps)
        hours = self.training_hours(needs, data.experience_level, data.certification_required)
        costs = self.training_costs(hours, data.training_method, data.total_employees, gaps)
        effectiveness, classification = self.assess_effectiveness(
            data.current_training_hours,
            hours.total,
            data.training_method,
            data.training_frequency,
        )
        minimum_hours = lookup(
            "minimum_annual_hours",
            self.tables.minimum_annual_hours,
            data.location,
            self.tables.default_minimum_annual_hours,
            gaps,
        )
        compliance = self.check_compliance(needs, hours, data.regulations, minimum_hours)
        documentation = self.tables.documentation if data.regulations else ()
        roi = self.training_roi(
            costs.total, data.total_employees, data.industry, data.turnover_rate, gaps
        )
        department_assessment = None
        if data.department is not None:
            department_assessment = self.department_needs(
                data.department,
                data.department_risk,
                data.incident_history,
                data.skill_gaps,
                gaps,
            )

        logger.debug(
            f"Training needs: {needs.total_modules} modules, {hours.total:.1f} h, "
            f"${costs.total:,.0f}, effectiveness={classification.label}"
        )
        return TrainingNeedsResult(
            inputs=data,
            needs=needs,
            hours=hours,
            costs=costs,
            effectiveness=effectiveness,
            classification=classification,
            compliance=compliance,
            minimum_annual_hours=minimum_hours,
            documentation=documentation,
            roi=roi,
            plan=self.training_plan(needs, hours),
            department_assessment=department_assessment,
            recommendations=self.recommend(classification, compliance, roi, costs),
            gaps=tuple(gaps),
        )

    def training_needs(
        self, data: TrainingNeedsInput, gaps: list[ConfigurationGap] | None = None
    ) -> TrainingNeeds:
        t = self.tables
        gaps = gaps if gaps is not None else []
        mandatory = list(t.baseline_courses)
        mandatory.extend(
            lookup("industry_courses", t.industry_courses, data.industry, (), gaps,
                   fallback="no industry courses")
        )
        # Catalog order, not the order regulations were selected in
        for regulation in Regulation:
            if regulation in data.regulations:
                mandatory.extend(t.regulation_courses.get(regulation, ()))

        recommended: list[str] = []
        if data.company_size in (CompanySize.LARGE, CompanySize.VERY_LARGE):
            recommended.extend(t.leadership_courses)
        if data.new_hires > data.total_employees * t.new_hire_ratio_trigger:
            recommended.extend(t.onboarding_courses)
        return TrainingNeeds(mandatory=tuple(mandatory), recommended=tuple(recommended))

    def department_needs(
        self,
        department: Department | str,
        risk: DepartmentRisk = DepartmentRisk.MEDIUM,
        incidents: IncidentHistory = IncidentHistory.OCCASIONAL,
        skill_gaps: SkillGap = SkillGap.MODERATE,
        gaps: list[ConfigurationGap] | None = None,
    ) -> DepartmentNeedsAssessment:
        """Assess the courses one department needs.

        Unlisted departments get the general course set. High risk,
        frequent incidents and significant skill gaps each append their
        own courses after the department set.
        """
        t = self.tables
        needs = list(
            lookup(
                "department_courses",
                t.department_courses,
                department,
                t.general_department_courses,
                gaps if gaps is not None else [],
                fallback="general department courses",
            )
        )
        if risk == DepartmentRisk.HIGH:
            needs.extend(t.high_risk_courses)
        if incidents == IncidentHistory.FREQUENT:
            needs.extend(t.frequent_incident_courses)
        if skill_gaps == SkillGap.SIGNIFICANT:
            needs.extend(t.skill_gap_courses)
        return DepartmentNeedsAssessment(
            department=department,
            needs=tuple(needs),
            recommendations=t.department_recommendations,
        )

    def course_hours(self, courses: tuple[str, ...]) -> float:
        t = self.tables
        return sum(t.course_hours.get(course, t.default_course_hours) for course in courses)

    def training_hours(
        self,
        needs: TrainingNeeds,
        experience_level: ExperienceLevel,
        certification_required: bool,
    ) -> TrainingHours:
        t = self.tables
        factor = t.experience_factors.get(experience_level, 1.0)
        mandatory = self.course_hours(needs.mandatory) * factor
        recommended = self.course_hours(needs.recommended) * factor
        certification = t.certification_hours if certification_required else 0.0
        total = mandatory + recommended + certification
        annual = total / t.cycle_years
        return TrainingHours(
            mandatory=mandatory,
            recommended=recommended,
            certification=certification,
            total=total,
            annual_per_employee=annual,
            quarterly_per_employee=annual / 4,
        )

    def training_costs(
        self,
        hours: TrainingHours,
        method: TrainingMethod,
        total_employees: int,
        gaps: list[ConfigurationGap] | None = None,
    ) -> TrainingCosts:
        t = self.tables
        factors = lookup(
            "method_cost_factors",
            t.method_cost_factors,
            method,
            t.method_cost_factors[t.fallback_method],
            gaps if gaps is not None else [],
            fallback=f"{t.fallback_method.value} cost factors",
        )
        direct = sum(factors.values()) * hours.total
        productivity = total_employees * hours.total * t.productivity_rate
        employee = total_employees * hours.annual_per_employee * t.employee_rate
        development = (
            hours.total * t.development_rate if method in t.development_methods else 0.0
        )
        total = direct + productivity + employee + development
        return TrainingCosts(
            method=method,
            direct=direct,
            productivity=productivity,
            employee=employee,
            development=development,
            total=total,
            per_employee=total / total_employees,
            annual=total / t.cycle_years,
        )

    def assess_effectiveness(
        self,
        current_hours: float,
        required_hours: float,
        method: TrainingMethod,
        frequency: TrainingFrequency,
    ) -> tuple[TrainingEffectiveness, ClassificationResult]:
        """Score = coverage% x method factor x frequency factor."""
        t = self.tables
        coverage = min(100.0, current_hours / required_hours * 100) if required_hours else 100.0
        method_factor = t.method_effectiveness.get(method, t.default_method_effectiveness)
        frequency_factor = t.frequency_effectiveness.get(
            frequency, t.default_frequency_effectiveness
        )
        score = coverage * method_factor * frequency_factor
        rank, label, description = classify_floor(
            score, t.effectiveness_floors, t.effectiveness_fallback
        )
        effectiveness = TrainingEffectiveness(
            coverage=coverage,
            method_factor=method_factor * 100,
            frequency_factor=frequency_factor * 100,
        )
        return effectiveness, ClassificationResult(label, rank, description, score=score)

    def check_compliance(
        self,
        needs: TrainingNeeds,
        hours: TrainingHours,
        regulations: frozenset[Regulation],
        minimum_hours: float,
    ) -> ComplianceReport:
        t = self.tables
        violations: list[str] = []
        warnings: list[str] = []
        compliant: list[str] = []

        if hours.annual_per_employee < minimum_hours:
            violations.append(
                f"Training hours ({hours.annual_per_employee:.1f}) below "
                f"{minimum_hours:g} hour minimum"
            )
        else:
            compliant.append(f"Annual training hours meet {minimum_hours:g} hour minimum")

        if not needs.mandatory:
            warnings.append("No mandatory training identified - review requirements")

        if Regulation.OSHA in regulations and hours.total < t.osha_recommended_hours:
            warnings.append("OSHA recommends minimum 40 hours of safety training")

        if Regulation.ISO45001 in regulations:
            if t.iso_required_course in needs.mandatory:
                compliant.append("ISO 45001 OH&S management system training included")
            else:
                violations.append("ISO 45001 requires OH&S management system training")

        return ComplianceReport(tuple(violations), tuple(warnings), tuple(compliant))

    def training_roi(
        self,
        total_cost: float,
        total_employees: int,
        industry: Industry,
        turnover_rate: float,
        gaps: list[ConfigurationGap] | None = None,
    ) -> TrainingROI:
        t = self.tables
        injury_cost = lookup(
            "injury_costs",
            t.injury_costs,
            industry,
            t.injury_costs[t.fallback_injury_industry],
            gaps if gaps is not None else [],
            fallback=f"{t.fallback_injury_industry.value} injury cost",
        )
        injury = total_employees * t.baseline_injury_rate * injury_cost * t.injury_reduction
        turnover = (
            total_employees * turnover_rate * t.turnover_replacement_cost * t.turnover_reduction
        )
        productivity = total_employees * t.average_salary * t.productivity_improvement
        benefits = injury + turnover + productivity
        return TrainingROI(
            injury_savings=injury,
            turnover_savings=turnover,
            productivity_savings=productivity,
            total_benefits=benefits,
            roi=(benefits * t.cycle_years - total_cost) / total_cost * 100,
            payback_years=total_cost / benefits,
            cost_benefit_ratio=benefits / (total_cost / t.cycle_years),
        )

    def training_plan(self, needs: TrainingNeeds, hours: TrainingHours) -> TrainingPlan:
        t = self.tables
        phases = [
            TrainingPhase(
                "Phase 1: Mandatory Compliance", "Months 1-6",
                needs.mandatory[:6], hours.mandatory * 0.5, "High",
            ),
            TrainingPhase(
                "Phase 2: Core Safety Skills", "Months 7-12",
                needs.mandatory[6:], hours.mandatory * 0.5, "High",
            ),
        ]
        if needs.recommended:
            phases.append(
                TrainingPhase(
                    "Phase 3: Advanced & Specialized", "Year 2",
                    needs.recommended, hours.recommended, "Medium",
                )
            )
        phases.append(
            TrainingPhase(
                "Phase 4: Refresher & Certification", "Year 3",
                ("Annual Refresher Training", "Certification Renewal"),
                hours.total * 0.2, "Ongoing",
            )
        )
        return TrainingPlan(
            phases=tuple(phases),
            timeline=t.timeline,
            resources=t.resources,
            evaluation=t.evaluation_methods,
        )

    @staticmethod
    def recommend(
        effectiveness: ClassificationResult,
        compliance: ComplianceReport,
        roi: TrainingROI,
        costs: TrainingCosts,
    ) -> tuple[str, ...]:
        recs = [
            "Develop written training program and policies",
            "Maintain detailed training records for all employees",
            "Conduct regular training needs assessments",
        ]
        if effectiveness.label in ("Poor", "Very Poor"):
            recs.append("Increase training hours to meet minimum requirements")
            recs.append("Consider blended learning approach for better retention")
            recs.append("Implement more frequent refresher training")

        if not compliance.is_compliant:
            recs.append("Address compliance violations immediately")
            recs.extend(f"Fix: {violation}" for violation in compliance.violations)

        if roi.roi > 100:
            recs.append("Training investment shows excellent ROI - consider expanding program")
        elif roi.roi < 50:
            recs.append("Optimize training methods to improve ROI")

        if costs.total > 100_000:
            recs.append("Consider online training to reduce costs")
            recs.append("Negotiate volume discounts with training providers")
            recs.append("Develop in-house training capabilities")

        recs.append("Implement Kirkpatrick model for training evaluation")
        recs.append("Use competency-based assessment methods")
        recs.append("Provide train-the-trainer programs")
        recs.append("Consider Learning Management System (LMS) for tracking")
        recs.append("Use mobile learning for remote employees")
        recs.append("Implement virtual reality for high-risk scenario training")
        return tuple(recs)


__all__ = [
    "DepartmentNeedsAssessment",
    "TRAINING_NEEDS_FIELDS",
    "TrainingCosts",
    "TrainingEffectiveness",
    "TrainingHours",
    "TrainingNeeds",
    "TrainingNeedsEngine",
    "TrainingNeedsInput",
    "TrainingNeedsResult",
    "TrainingPhase",
    "TrainingPlan",
    "TrainingROI",
]
