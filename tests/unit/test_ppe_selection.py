"""Unit tests for the PPE selection engine.

These tests verify:
- Hazard scoring and duration scaling
- Required categories from hazard triggers and score gates
- Selector priority order per category
- Protection, standards, comfort and cost ratings
"""

from __future__ import annotations

import pytest

from worksafe.domain.services.assessment import PPEItem, PPESelectionEngine
from worksafe.domain.services.assessment.ppe_selection import (
    DEFAULT_SELECTORS,
    select_body,
    select_hand,
    select_head,
    select_respiratory,
)
from worksafe.domain.services.validation import InputValidationError
from worksafe.domain.value_objects import (
    HazardSeverity,
    HazardType,
    Industry,
    PPECategory,
    ProtectionLevel,
)


@pytest.fixture
def engine() -> PPESelectionEngine:
    return PPESelectionEngine()


@pytest.fixture
def chemical_inputs() -> dict[str, object]:
    return {
        "task_description": "Drum transfer of solvent",
        "hazards": {"chemical": "high"},
        "task_duration": 8,
    }


@pytest.fixture
def work_at_height_inputs() -> dict[str, object]:
    return {
        "task_description": "Steel erection",
        "hazards": {"fall": "high", "mechanical": "high"},
        "task_duration": 10,
        "temperature": 30,
    }


# =============================================================================
# Hazard scoring and categories
# =============================================================================


class TestHazardScoring:
    """Tests for hazard scores and the overall risk."""

    def test_duration_scaling(self, engine: PPESelectionEngine, chemical_inputs: dict) -> None:
        result = engine.calculate(chemical_inputs)
        (assessment,) = result.hazard_assessments

        assert assessment.risk_score == pytest.approx(10.8)
        assert assessment.level == "High"
        assert result.classification.label == "High"

    def test_level_uses_unscaled_score(self, engine: PPESelectionEngine) -> None:
        (assessment,) = engine.assess_hazards(
            {HazardType.MECHANICAL: HazardSeverity.MEDIUM}, 10.0
        )
        assert assessment.risk_score == pytest.approx(9.0)
        assert assessment.level == "Medium"
        assert assessment.description == "Moderate mechanical hazard risk"

    def test_hazards_in_canonical_order(
        self, engine: PPESelectionEngine, work_at_height_inputs: dict
    ) -> None:
        result = engine.calculate(work_at_height_inputs)
        assert [a.hazard for a in result.hazard_assessments] == [
            HazardType.MECHANICAL,
            HazardType.FALL,
        ]

    def test_overall_low(self, engine: PPESelectionEngine) -> None:
        result = engine.calculate(
            {"task_description": "Sorting", "hazards": "thermal:medium", "task_duration": 4}
        )
        assert result.classification.label == "Low"
        assert result.classification.score == pytest.approx(4.0)

    def test_hazards_required(self, engine: PPESelectionEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate({"task_description": "Painting", "hazards": {}})
        assert exc_info.value.field == "hazards"

    def test_task_description_required(self, engine: PPESelectionEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate({"hazards": {"chemical": "low"}})
        assert exc_info.value.field == "task_description"

    def test_unknown_hazard(self, engine: PPESelectionEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate({"task_description": "x", "hazards": {"sonic": "high"}})
        assert exc_info.value.constraint == "choice"


class TestRequiredCategories:
    """Tests for category triggers and score gates."""

    def test_chemical_categories(
        self, engine: PPESelectionEngine, chemical_inputs: dict
    ) -> None:
        assert engine.calculate(chemical_inputs).required_categories == (
            PPECategory.EYE,
            PPECategory.RESPIRATORY,
            PPECategory.HAND,
            PPECategory.FOOT,
            PPECategory.BODY,
        )

    def test_score_gated_categories(
        self, engine: PPESelectionEngine, work_at_height_inputs: dict
    ) -> None:
        assert engine.calculate(work_at_height_inputs).required_categories == (
            PPECategory.HEAD,
            PPECategory.EYE,
            PPECategory.HEARING,
            PPECategory.HAND,
            PPECategory.FOOT,
            PPECategory.FALL,
        )

    def test_low_mechanical_score_skips_hearing(self, engine: PPESelectionEngine) -> None:
        result = engine.calculate(
            {"task_description": "Assembly", "hazards": {"mechanical": "low"}, "task_duration": 2}
        )
        assert PPECategory.HEARING not in result.required_categories

    def test_missing_selector_reported(self) -> None:
        selectors = {k: v for k, v in DEFAULT_SELECTORS.items() if k != PPECategory.EYE}
        result = PPESelectionEngine(selectors=selectors).calculate(
            {"task_description": "Grinding", "hazards": {"mechanical": "low"}}
        )

        assert PPECategory.EYE not in result.selected
        assert "eye" in result.compliance.violations

    def test_default_selectors_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_SELECTORS[PPECategory.EYE] = select_head  # type: ignore[index]
        with pytest.raises(TypeError):
            del DEFAULT_SELECTORS[PPECategory.HEAD]  # type: ignore[attr-defined]
        assert len(DEFAULT_SELECTORS) == len(PPECategory)

    def test_engine_selectors_do_not_leak_into_defaults(self) -> None:
        engine = PPESelectionEngine()
        del engine.selectors[PPECategory.EYE]

        assert PPECategory.EYE in DEFAULT_SELECTORS
        assert PPECategory.EYE in PPESelectionEngine().selectors


# =============================================================================
# Selectors
# =============================================================================


class TestSelectors:
    """Tests for selector priority order."""

    def test_electrical_head_protection_wins(self) -> None:
        item = select_head(
            {HazardType.CHEMICAL: HazardSeverity.LOW, HazardType.ELECTRICAL: HazardSeverity.LOW},
            20.0,
        )
        assert item.item_type == "Class E Hard Hat"

    def test_respiratory_severity(self) -> None:
        assert select_respiratory(
            {HazardType.CHEMICAL: HazardSeverity.MEDIUM}, 20.0
        ).item_type == "Half Mask Respirator with Cartridges"
        assert select_respiratory(
            {HazardType.CHEMICAL: HazardSeverity.LOW}, 20.0
        ).item_type == "N95 Respirator"

    def test_combined_chemical_and_biological_needs_papr(self) -> None:
        item = select_respiratory(
            {HazardType.CHEMICAL: HazardSeverity.LOW, HazardType.BIOLOGICAL: HazardSeverity.LOW},
            20.0,
        )
        assert item.protection_level == ProtectionLevel.VERY_HIGH
        assert item.protection_factor == 1000

    def test_cold_hand_protection(self) -> None:
        assert select_hand({}, 5.0).item_type == "Insulated Gloves"
        assert select_hand({}, 20.0).item_type == "General Purpose Gloves"

    def test_body_protection_by_temperature(self) -> None:
        assert select_body({}, 35.0).item_type == "Cooling Vest"
        assert select_body({}, 0.0).item_type == "Insulated Jacket"
        assert select_body({}, 20.0).item_type == "High Visibility Vest"

    def test_selected_items(
        self, engine: PPESelectionEngine, work_at_height_inputs: dict
    ) -> None:
        selected = engine.calculate(work_at_height_inputs).selected

        assert selected[PPECategory.HEAD].item_type == "Type II Hard Hat"
        assert selected[PPECategory.HEARING].item_type == "Earmuffs"
        assert selected[PPECategory.FOOT].standard == "ASTM F2413 I/75 C/75"
        assert selected[PPECategory.FALL].item_type == (
            "Full Body Harness with Shock-Absorbing Lanyard"
        )

    def test_item_validation(self) -> None:
        with pytest.raises(ValueError, match="item_type"):
            PPEItem(PPECategory.HEAD, "", "", "", ProtectionLevel.LOW)
        with pytest.raises(ValueError, match="protection_factor"):
            PPEItem(
                PPECategory.RESPIRATORY, "Mask", "", "", ProtectionLevel.LOW,
                protection_factor=0.5,
            )


# =============================================================================
# Ensemble ratings
# =============================================================================


class TestEnsembleRatings:
    """Tests for protection, standards, comfort and cost."""

    def test_protection_factors(
        self, engine: PPESelectionEngine, chemical_inputs: dict
    ) -> None:
        result = engine.calculate(chemical_inputs)

        assert result.protection_factors[PPECategory.RESPIRATORY] == pytest.approx(0.999)
        assert result.protection_factors[PPECategory.EYE] == pytest.approx(0.85)
        assert result.overall_protection == pytest.approx(1 - 0.15**4 * 0.001)

    def test_standards_buckets(
        self, engine: PPESelectionEngine, chemical_inputs: dict
    ) -> None:
        standards = engine.calculate(chemical_inputs).standards

        assert standards.osha == ("respiratory: Compliant",)
        assert standards.nfpa == ("body: NFPA 1991/1992",)
        assert "eye: ANSI Z87.1 D3" in standards.ansi
        assert standards.missing == ()

    def test_construction_requires_head_and_foot(self, engine: PPESelectionEngine) -> None:
        result = engine.calculate(
            {
                "task_description": "Hot tar roofing",
                "hazards": {"thermal": "medium"},
                "industry": "construction",
                "task_duration": 4,
            }
        )

        assert result.compliance.violations == (
            "head (hard hat required)",
            "foot (safety boots required)",
        )
        assert (
            "Address missing PPE: head (hard hat required), foot (safety boots required)"
            in result.recommendations
        )

    def test_healthcare_face_shield_warning(self, engine: PPESelectionEngine) -> None:
        result = engine.calculate(
            {
                "task_description": "Equipment servicing",
                "hazards": {"electrical": "low"},
                "industry": "healthcare",
            }
        )
        assert "Consider face shield for droplet protection" in result.compliance.warnings

    def test_unlisted_industry_checked_as_general(self, engine: PPESelectionEngine) -> None:
        result = engine.calculate(
            {
                "task_description": "Substation switching",
                "hazards": {"electrical": "high"},
                "industry": "utilities",
            }
        )

        assert result.inputs.industry == Industry.GENERAL
        assert ("industries", "utilities") in [(gap.table, gap.key) for gap in result.gaps]
        assert "head (hard hat required)" not in result.compliance.violations

    def test_comfort(self, engine: PPESelectionEngine, work_at_height_inputs: dict) -> None:
        comfort = engine.calculate(work_at_height_inputs).comfort

        assert comfort.score == 65.0
        assert comfort.level == "Moderate"
        assert "Consider PPE rotation for tasks >8 hours" in comfort.issues

    def test_warm_body_protection_is_uncomfortable(self, engine: PPESelectionEngine) -> None:
        selected = {PPECategory.BODY: select_body({HazardType.THERMAL: HazardSeverity.LOW}, 30)}
        comfort = engine.assess_comfort(selected, 30.0, 2.0)
        assert comfort.score == 80.0
        assert comfort.level == "Good"

    def test_cost_estimate(self, engine: PPESelectionEngine, chemical_inputs: dict) -> None:
        cost = engine.calculate(chemical_inputs).cost

        assert cost.items[PPECategory.RESPIRATORY] == 800.0
        assert cost.items[PPECategory.FOOT] == pytest.approx(120.0)
        assert cost.purchase == pytest.approx(1190.0)
        assert cost.daily == pytest.approx(119.0)
        assert cost.task == pytest.approx(119.0)

    def test_cost_scales_with_duration(
        self, engine: PPESelectionEngine, work_at_height_inputs: dict
    ) -> None:
        cost = engine.calculate(work_at_height_inputs).cost

        assert cost.items[PPECategory.EYE] == pytest.approx(52.5)
        assert cost.purchase == pytest.approx(652.5)
        assert cost.task == pytest.approx(81.5625)

    def test_high_risk_recommendations(
        self, engine: PPESelectionEngine, chemical_inputs: dict
    ) -> None:
        recs = engine.calculate(chemical_inputs).recommendations

        assert recs[:3] == (
            "Conduct PPE fit testing for all items",
            "Train workers on proper donning/doffing procedures",
            "Establish PPE inspection and maintenance program",
        )
        assert "Implement buddy system for high-risk tasks" in recs
        assert recs[-1] == "Store PPE properly to maintain effectiveness"
