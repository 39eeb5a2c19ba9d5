"""Unit tests for the training needs engine."""

from __future__ import annotations

from dataclasses import replace

import pytest

from worksafe.domain.services.assessment import TrainingNeedsEngine
from worksafe.domain.services.assessment.tables import (
    DEFAULT_TRAINING_NEEDS_TABLES,
    frozen,
)
from worksafe.domain.services.assessment.training_needs import TrainingHours, TrainingNeeds
from worksafe.domain.services.validation import InputValidationError
from worksafe.domain.value_objects import (
    Department,
    DepartmentRisk,
    IncidentHistory,
    Industry,
    Regulation,
    SkillGap,
    TrainingFrequency,
    TrainingMethod,
)


@pytest.fixture
def engine() -> TrainingNeedsEngine:
    return TrainingNeedsEngine()


@pytest.fixture
def construction_inputs() -> dict[str, object]:
    return {
        "total_employees": 100,
        "company_size": "large",
        "industry": "construction",
        "new_hires": 20,
        "experience_level": "novice",
        "current_training_hours": 100,
        "training_frequency": "monthly",
        "training_method": "blended",
        "certification_required": True,
        "regulations": ["osha", "iso45001"],
    }


def _hours(annual: float) -> TrainingHours:
    return TrainingHours(
        mandatory=annual * 3,
        recommended=0.0,
        certification=0.0,
        total=annual * 3,
        annual_per_employee=annual,
        quarterly_per_employee=annual / 4,
    )


class TestCourseLists:
    """Tests for mandatory and recommended courses."""

    def test_general_baseline_only(self, engine: TrainingNeedsEngine) -> None:
        result = engine.calculate({"total_employees": 100})

        assert len(result.needs.mandatory) == 12
        assert result.needs.recommended == ()
        assert result.needs.total_modules == 12
        assert [gap.table for gap in result.gaps] == ["industry_courses"]

    def test_unlisted_industry_gets_general_courses(self, engine: TrainingNeedsEngine) -> None:
        result = engine.calculate({"total_employees": 100, "industry": "utilities"})

        assert result.inputs.industry == Industry.GENERAL
        assert len(result.needs.mandatory) == 12
        assert [(gap.table, gap.key) for gap in result.gaps] == [
            ("industries", "utilities"),
            ("industry_courses", "general"),
        ]
        general = engine.calculate({"total_employees": 100})
        assert result.roi == general.roi

    def test_industry_regulation_and_growth_courses(
        self, engine: TrainingNeedsEngine, construction_inputs: dict
    ) -> None:
        needs = engine.calculate(construction_inputs).needs

        assert needs.mandatory[12:17] == (
            "Scaffold Safety",
            "Excavation Safety",
            "Crane Safety",
            "Steel Erection",
            "Powered Industrial Trucks",
        )
        assert needs.mandatory[-3:] == (
            "OH&S Management System",
            "Risk Assessment Training",
            "Incident Investigation",
        )
        assert needs.recommended[0] == "Safety Leadership Training"
        assert needs.recommended[-1] == "On-the-Job Training"
        assert needs.total_modules == 27

    def test_regulation_courses_follow_catalog_order(self, engine: TrainingNeedsEngine) -> None:
        first = engine.calculate({"total_employees": 10, "regulations": ["dot", "rcra"]})
        second = engine.calculate({"total_employees": 10, "regulations": "rcra,dot"})

        assert first.needs == second.needs
        assert first.needs.mandatory[-3:] == (
            "Hazardous Waste Management",
            "Waste Minimization",
            "Hazardous Materials Transportation",
        )

    def test_few_new_hires_no_onboarding(self, engine: TrainingNeedsEngine) -> None:
        needs = engine.calculate({"total_employees": 100, "new_hires": 10}).needs
        assert "New Employee Orientation" not in needs.recommended

    def test_turnover_rate_is_a_fraction(self, engine: TrainingNeedsEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate({"total_employees": 100, "turnover_rate": 15})
        assert exc_info.value.field == "turnover_rate"

    def test_employees_required(self, engine: TrainingNeedsEngine) -> None:
        with pytest.raises(InputValidationError):
            engine.calculate({"industry": "construction"})


class TestHoursAndCosts:
    """Tests for training hours and the cost model."""

    def test_baseline_hours(self, engine: TrainingNeedsEngine) -> None:
        hours = engine.calculate({"total_employees": 100}).hours

        assert hours.mandatory == pytest.approx(62.0)
        assert hours.total == pytest.approx(62.0)
        assert hours.annual_per_employee == pytest.approx(62.0 / 3)
        assert hours.quarterly_per_employee == pytest.approx(62.0 / 12)

    def test_experience_and_certification(
        self, engine: TrainingNeedsEngine, construction_inputs: dict
    ) -> None:
        hours = engine.calculate(construction_inputs).hours

        assert hours.mandatory == pytest.approx(213.0)
        assert hours.recommended == pytest.approx(138.0)
        assert hours.certification == 40.0
        assert hours.total == pytest.approx(391.0)

    def test_in_person_costs(self, engine: TrainingNeedsEngine) -> None:
        costs = engine.calculate({"total_employees": 100}).costs

        assert costs.direct == pytest.approx(15_500.0)
        assert costs.productivity == pytest.approx(310_000.0)
        assert costs.employee == pytest.approx(72_333.333, rel=1e-6)
        assert costs.development == 0.0
        assert costs.total == pytest.approx(397_833.333, rel=1e-6)
        assert costs.per_employee == pytest.approx(3_978.333, rel=1e-6)

    def test_development_cost_for_online(self, engine: TrainingNeedsEngine) -> None:
        costs = engine.training_costs(_hours(10.0), TrainingMethod.ONLINE, 10)

        assert costs.direct == pytest.approx(190.0 * 30)
        assert costs.development == pytest.approx(150.0 * 30)

    def test_more_employees_never_cheaper(self, engine: TrainingNeedsEngine) -> None:
        totals = [
            engine.calculate({"total_employees": n}).costs.total for n in (1, 10, 100, 1000)
        ]
        assert totals == sorted(totals)


class TestEffectivenessAndCompliance:
    """Tests for effectiveness scoring and compliance checks."""

    def test_no_current_training_is_very_poor(self, engine: TrainingNeedsEngine) -> None:
        result = engine.calculate({"total_employees": 100})

        assert result.effectiveness.coverage == 0.0
        assert result.classification.label == "Very Poor"
        assert "Increase training hours to meet minimum requirements" in result.recommendations

    def test_full_coverage(self, engine: TrainingNeedsEngine) -> None:
        effectiveness, classification = engine.assess_effectiveness(
            200.0, 62.0, TrainingMethod.BLENDED, TrainingFrequency.DAILY
        )
        assert effectiveness.coverage == 100.0
        assert effectiveness.method_factor == pytest.approx(90.0)
        assert classification.score == pytest.approx(85.5)
        assert classification.label == "Good"

    def test_minimum_hours_violation(self, engine: TrainingNeedsEngine) -> None:
        report = engine.check_compliance(
            TrainingNeeds(("Hazard Communication",), ()), _hours(5.0), frozenset(), 10.0
        )
        assert report.violations == ("Training hours (5.0) below 10 hour minimum",)

    def test_osha_forty_hour_warning(self, engine: TrainingNeedsEngine) -> None:
        result = engine.calculate(
            {"total_employees": 10, "experience_level": "expert", "regulations": ["osha"]}
        )

        assert result.hours.total == pytest.approx(37.2)
        assert "OSHA recommends minimum 40 hours of safety training" in (
            result.compliance.warnings
        )

    def test_iso_course_included(
        self, engine: TrainingNeedsEngine, construction_inputs: dict
    ) -> None:
        compliance = engine.calculate(construction_inputs).compliance

        assert compliance.is_compliant
        assert "ISO 45001 OH&S management system training included" in compliance.compliant

    def test_iso_course_missing(self) -> None:
        tables = replace(DEFAULT_TRAINING_NEEDS_TABLES, regulation_courses=frozen({}))
        result = TrainingNeedsEngine(tables).calculate(
            {"total_employees": 10, "regulations": ["iso45001"]}
        )

        assert "ISO 45001 requires OH&S management system training" in (
            result.compliance.violations
        )
        assert "Address compliance violations immediately" in result.recommendations

    def test_documentation_only_with_regulations(self, engine: TrainingNeedsEngine) -> None:
        assert engine.calculate({"total_employees": 10}).documentation == ()
        assert len(
            engine.calculate({"total_employees": 10, "regulations": ["dot"]}).documentation
        ) == 3

    def test_unlisted_location_uses_default_minimum(self, engine: TrainingNeedsEngine) -> None:
        result = engine.calculate(
            {"total_employees": 10, "industry": "construction", "location": "other"}
        )

        assert result.minimum_annual_hours == 8.0
        assert [gap.table for gap in result.gaps] == ["minimum_annual_hours"]


class TestROIAndPlan:
    """Tests for the return on investment and the phased plan."""

    def test_roi(self, engine: TrainingNeedsEngine) -> None:
        roi = engine.calculate({"total_employees": 100}).roi

        assert roi.injury_savings == pytest.approx(60_000.0)
        assert roi.turnover_savings == 0.0
        assert roi.productivity_savings == pytest.approx(250_000.0)
        assert roi.total_benefits == pytest.approx(310_000.0)
        assert roi.roi == pytest.approx(133.767, abs=0.01)
        assert roi.payback_years == pytest.approx(1.2833, abs=1e-3)

    def test_turnover_savings(self, engine: TrainingNeedsEngine) -> None:
        roi = engine.training_roi(100_000.0, 100, engine.tables.fallback_injury_industry, 0.2)
        assert roi.turnover_savings == pytest.approx(60_000.0)

    def test_plan_without_recommended_courses(self, engine: TrainingNeedsEngine) -> None:
        plan = engine.calculate({"total_employees": 100}).plan

        assert [phase.name for phase in plan.phases] == [
            "Phase 1: Mandatory Compliance",
            "Phase 2: Core Safety Skills",
            "Phase 4: Refresher & Certification",
        ]
        assert len(plan.phases[0].courses) == 6
        assert plan.phases[-1].hours == pytest.approx(62.0 * 0.2)

    def test_plan_with_recommended_courses(
        self, engine: TrainingNeedsEngine, construction_inputs: dict
    ) -> None:
        plan = engine.calculate(construction_inputs).plan

        assert len(plan.phases) == 4
        assert plan.phases[2].priority == "Medium"
        assert plan.phases[2].hours == pytest.approx(138.0)

    def test_recommendations_order(self, engine: TrainingNeedsEngine) -> None:
        recs = engine.calculate({"total_employees": 100}).recommendations

        assert recs[0] == "Develop written training program and policies"
        assert "Training investment shows excellent ROI - consider expanding program" in recs
        assert "Consider online training to reduce costs" in recs
        assert recs[-1] == "Implement virtual reality for high-risk scenario training"

    def test_regulation_enum_covers_catalog(self) -> None:
        assert set(DEFAULT_TRAINING_NEEDS_TABLES.regulation_courses) <= set(Regulation)


# =============================================================================
# Department needs assessment
# =============================================================================


class TestDepartmentNeeds:
    """Tests for the per-department needs assessment."""

    @pytest.mark.parametrize(
        ("department", "first", "last"),
        [
            (Department.PRODUCTION, "Machine Safety", "Emergency Procedures"),
            (Department.MAINTENANCE, "Confined Space", "Fall Protection"),
            (Department.LABORATORY, "Chemical Safety", "Waste Management"),
            (Department.WAREHOUSE, "Powered Industrial Trucks", "Ergonomics"),
            (Department.OFFICE, "Ergonomics", "Workplace Violence"),
        ],
    )
    def test_department_courses(
        self, engine: TrainingNeedsEngine, department: Department, first: str, last: str
    ) -> None:
        gaps: list = []
        assessment = engine.department_needs(department, gaps=gaps)

        assert len(assessment.needs) == 4
        assert assessment.needs[0] == first
        assert assessment.needs[-1] == last
        assert gaps == []

    def test_unlisted_department_gets_general_courses(self, engine: TrainingNeedsEngine) -> None:
        gaps: list = []
        assessment = engine.department_needs("shipping", gaps=gaps)

        assert assessment.department == "shipping"
        assert assessment.needs == ("General Safety Awareness", "Emergency Procedures", "PPE")
        assert [(gap.table, gap.key) for gap in gaps] == [("department_courses", "shipping")]

    def test_high_risk_additions(self, engine: TrainingNeedsEngine) -> None:
        assessment = engine.department_needs(Department.OFFICE, risk=DepartmentRisk.HIGH)
        assert assessment.needs[4:] == (
            "Risk Assessment",
            "Incident Investigation",
            "Safety Leadership",
        )

    def test_frequent_incident_additions(self, engine: TrainingNeedsEngine) -> None:
        assessment = engine.department_needs(
            Department.OFFICE, incidents=IncidentHistory.FREQUENT
        )
        assert assessment.needs[4:] == (
            "Root Cause Analysis",
            "Behavior-Based Safety",
            "Safety Observation",
        )

    def test_significant_skill_gap_additions(self, engine: TrainingNeedsEngine) -> None:
        assessment = engine.department_needs(Department.OFFICE, skill_gaps=SkillGap.SIGNIFICANT)
        assert assessment.needs[4:] == (
            "On-the-Job Training",
            "Mentorship Program",
            "Skills Assessment",
        )

    def test_lower_levels_add_nothing(self, engine: TrainingNeedsEngine) -> None:
        assessment = engine.department_needs(
            Department.WAREHOUSE,
            risk=DepartmentRisk.MEDIUM,
            incidents=IncidentHistory.OCCASIONAL,
            skill_gaps=SkillGap.MODERATE,
        )
        assert len(assessment.needs) == 4

    def test_all_additions_in_order(self, engine: TrainingNeedsEngine) -> None:
        result = engine.calculate(
            {
                "total_employees": 40,
                "department": "Maintenance",
                "department_risk": "high",
                "incident_history": "frequent",
                "skill_gaps": "significant",
            }
        )
        assessment = result.department_assessment

        assert assessment is not None
        assert assessment.department == Department.MAINTENANCE
        assert len(assessment.needs) == 13
        assert assessment.needs[4] == "Risk Assessment"
        assert assessment.needs[7] == "Root Cause Analysis"
        assert assessment.needs[10] == "On-the-Job Training"
        assert assessment.recommendations[0] == "Prioritize high-risk area training first"
        assert len(assessment.recommendations) == 5

    def test_no_department_skips_assessment(self, engine: TrainingNeedsEngine) -> None:
        assert engine.calculate({"total_employees": 40}).department_assessment is None

    def test_bad_risk_level_rejected(self, engine: TrainingNeedsEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate(
                {"total_employees": 40, "department": "office", "department_risk": "extreme"}
            )
        assert exc_info.value.field == "department_risk"
        assert exc_info.value.allowed == ["low", "medium", "high"]

    def test_department_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_TRAINING_NEEDS_TABLES.department_courses[Department.OFFICE] = ()  # type: ignore[index]
