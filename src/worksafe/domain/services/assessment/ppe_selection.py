"""PPE selection engine.

Scores each declared hazard, derives the PPE categories the hazards
require, and runs one selector per category to pick an item. Selectors
check their conditions in a fixed priority order; the first match wins.
The selected ensemble is then rated for protection, standards compliance,
comfort and cost.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from worksafe.domain.value_objects import (
    AssessmentKind,
    HazardSeverity,
    HazardType,
    Industry,
    PPECategory,
    ProtectionLevel,
)

from ..validation import FieldKind, FieldSpec, InputValidator
from .models import (
    AssessmentResult,
    ClassificationResult,
    ComplianceReport,
    ConfigurationGap,
)
from .tables import (
    DEFAULT_PPE_SELECTION_TABLES,
    PPESelectionTables,
    classify_floor,
    frozen,
    lookup,
    resolve_industry,
)

logger = logging.getLogger(__name__)

PPE_SELECTION_FIELDS = (
    FieldSpec("task_description", FieldKind.TEXT, required=True),
    FieldSpec(
        "hazards", FieldKind.ENUM_MAP, required=True,
        choices=HazardType, value_choices=HazardSeverity,
    ),
    FieldSpec(
        "industry", FieldKind.OPEN_ENUM, choices=Industry, default=Industry.GENERAL
    ),
    FieldSpec(
        "task_duration", FieldKind.NUMBER,
        minimum=0, exclusive_minimum=True, maximum=24, default=8.0,
    ),
    FieldSpec("temperature", FieldKind.NUMBER, minimum=-40, maximum=60, default=20.0),
)

Hazards = Mapping[HazardType, HazardSeverity]


@dataclass(frozen=True)
class PPESelectionInput:
    """Validated PPE inputs; hazards are in canonical ``HazardType`` order."""

    task_description: str
    hazards: Hazards
    industry: Industry
    task_duration: float
    temperature: float


@dataclass(frozen=True)
class HazardAssessment:
    """Scored hazard.

    Attributes:
        hazard: Hazard type.
        severity: Declared severity.
        level: Level derived from the unscaled score (High, Medium, Low).
        description: Level description.
        risk_score: Score after task duration scaling.
    """

    hazard: HazardType
    severity: HazardSeverity
    level: str
    description: str
    risk_score: float


@dataclass(frozen=True)
class PPEItem:
    """A selected PPE item.

    Attributes:
        category: Body region covered.
        item_type: Item name (e.g., "Class E Hard Hat").
        description: What the item protects against.
        standard: Applicable standard, empty if none.
        protection_level: Protection rating.
        protection_factor: Assigned protection factor (respirators only).
        detail: Material or rating detail, when relevant.
    """

    category: PPECategory
    item_type: str
    description: str
    standard: str
    protection_level: ProtectionLevel
    protection_factor: float | None = None
    detail: str | None = None

    def __post_init__(self) -> None:
        if not self.item_type:
            raise ValueError("item_type must not be empty")
        if self.protection_factor is not None and self.protection_factor < 1:
            raise ValueError("protection_factor must be at least 1")


@dataclass(frozen=True)
class StandardsCompliance:
    """Standards buckets for the selected ensemble."""

    osha: tuple[str, ...]
    ansi: tuple[str, ...]
    nfpa: tuple[str, ...]
    missing: tuple[str, ...]
    warnings: tuple[str, ...]


@dataclass(frozen=True)
class ComfortAssessment:
    """Ensemble comfort rating (score out of 100)."""

    level: str
    score: float
    issues: tuple[str, ...]


@dataclass(frozen=True)
class PPECostEstimate:
    """Estimated PPE cost (USD)."""

    purchase: float
    daily: float
    task: float
    items: Mapping[PPECategory, float]


@dataclass(frozen=True)
class PPESelectionResult(AssessmentResult):
    """Complete PPE selection."""

    kind: ClassVar[AssessmentKind] = AssessmentKind.PPE_SELECTION

    inputs: PPESelectionInput
    hazard_assessments: tuple[HazardAssessment, ...]
    classification: ClassificationResult
    required_categories: tuple[PPECategory, ...]
    selected: Mapping[PPECategory, PPEItem]
    protection_factors: Mapping[PPECategory, float]
    overall_protection: float
    standards: StandardsCompliance
    compliance: ComplianceReport
    comfort: ComfortAssessment
    cost: PPECostEstimate
    recommendations: tuple[str, ...]
    gaps: tuple[ConfigurationGap, ...] = field(default_factory=tuple)


Selector = Callable[[Hazards, float], PPEItem]


def select_head(hazards: Hazards, temperature: float) -> PPEItem:
    if HazardType.ELECTRICAL in hazards:
        return PPEItem(
            PPECategory.HEAD, "Class E Hard Hat", "Electrical hazard protection (20,000V)",
            "ANSI/ISEA Z89.1 Class E", ProtectionLevel.HIGH,
        )
    if HazardType.CHEMICAL in hazards:
        return PPEItem(
            PPECategory.HEAD, "Bump Cap with Face Shield", "Chemical splash protection",
            "ANSI/ISEA Z89.1 Type 1", ProtectionLevel.MEDIUM,
        )
    if HazardType.MECHANICAL in hazards:
        return PPEItem(
            PPECategory.HEAD, "Type II Hard Hat", "Lateral impact protection",
            "ANSI/ISEA Z89.1 Type II", ProtectionLevel.HIGH,
        )
    return PPEItem(
        PPECategory.HEAD, "Basic Hard Hat", "General head protection",
        "ANSI/ISEA Z89.1 Type I", ProtectionLevel.LOW,
    )


def select_eye(hazards: Hazards, temperature: float) -> PPEItem:
    if HazardType.CHEMICAL in hazards:
        return PPEItem(
            PPECategory.EYE, "Chemical Splash Goggles", "Sealed splash protection",
            "ANSI Z87.1 D3", ProtectionLevel.HIGH,
        )
    if HazardType.MECHANICAL in hazards:
        return PPEItem(
            PPECategory.EYE, "Safety Glasses with Side Shields", "Impact protection",
            "ANSI Z87.1+", ProtectionLevel.MEDIUM,
        )
    if HazardType.RADIOLOGICAL in hazards:
        return PPEItem(
            PPECategory.EYE, "Welding Helmet", "UV/IR radiation protection",
            "ANSI Z87.1 & Z49.1", ProtectionLevel.HIGH,
        )
    return PPEItem(
        PPECategory.EYE, "Basic Safety Glasses", "General eye protection",
        "ANSI Z87.1", ProtectionLevel.LOW,
    )


def select_hearing(hazards: Hazards, temperature: float) -> PPEItem:
    if hazards.get(HazardType.MECHANICAL) == HazardSeverity.HIGH:
        return PPEItem(
            PPECategory.HEARING, "Earmuffs", "High attenuation hearing protection",
            "ANSI S3.19", ProtectionLevel.HIGH, detail="NRR 30 dB",
        )
    return PPEItem(
        PPECategory.HEARING, "Foam Earplugs", "Disposable hearing protection",
        "ANSI S3.19", ProtectionLevel.MEDIUM, detail="NRR 29 dB",
    )


def select_respiratory(hazards: Hazards, temperature: float) -> PPEItem:
    has_chemical = HazardType.CHEMICAL in hazards
    has_biological = HazardType.BIOLOGICAL in hazards
    # Severity of the first chemical or biological hazard in canonical order
    severity = next(
        (
            level
            for hazard, level in hazards.items()
            if hazard in (HazardType.CHEMICAL, HazardType.BIOLOGICAL)
        ),
        HazardSeverity.LOW,
    )
    if severity == HazardSeverity.HIGH or (has_chemical and has_biological):
        return PPEItem(
            PPECategory.RESPIRATORY, "PAPR with Full Facepiece",
            "Powered Air Purifying Respirator", "NIOSH 42 CFR 84",
            ProtectionLevel.VERY_HIGH, protection_factor=1000,
        )
    if severity == HazardSeverity.MEDIUM:
        return PPEItem(
            PPECategory.RESPIRATORY, "Half Mask Respirator with Cartridges",
            "Chemical/organic vapor protection", "NIOSH 42 CFR 84",
            ProtectionLevel.HIGH, protection_factor=10,
        )
    if has_chemical or has_biological:
        return PPEItem(
            PPECategory.RESPIRATORY, "N95 Respirator", "Particulate filtration",
            "NIOSH 42 CFR 84", ProtectionLevel.MEDIUM, protection_factor=10,
        )
    return PPEItem(
        PPECategory.RESPIRATORY, "Disposable Dust Mask", "Light dust protection",
        "NIOSH 42 CFR 84", ProtectionLevel.LOW, protection_factor=5,
    )


def select_hand(hazards: Hazards, temperature: float) -> PPEItem:
    if HazardType.CHEMICAL in hazards:
        return PPEItem(
            PPECategory.HAND, "Chemical Resistant Gloves",
            "Nitrile or neoprene, 18 mil thickness", "ANSI/ISEA 105-2016",
            ProtectionLevel.HIGH, detail=f"{temperature:g}°C",
        )
    if HazardType.MECHANICAL in hazards:
        return PPEItem(
            PPECategory.HAND, "Cut Resistant Gloves", "Level 5 cut protection",
            "ANSI/ISEA 105-2016 A9", ProtectionLevel.HIGH, detail=f"{temperature:g}°C",
        )
    if HazardType.THERMAL in hazards:
        return PPEItem(
            PPECategory.HAND, "Heat Resistant Gloves", "Kevlar/leather, 500°F rating",
            "ANSI/ISEA 105-2016", ProtectionLevel.HIGH, detail="High",
        )
    if temperature < 10:
        return PPEItem(
            PPECategory.HAND, "Insulated Gloves", "Cold weather protection",
            "ANSI/ISEA 105-2016", ProtectionLevel.MEDIUM, detail="Low",
        )
    return PPEItem(
        PPECategory.HAND, "General Purpose Gloves", "Leather or fabric",
        "ANSI/ISEA 105-2016", ProtectionLevel.LOW, detail=f"{temperature:g}°C",
    )


def select_foot(hazards: Hazards, temperature: float) -> PPEItem:
    if HazardType.ELECTRICAL in hazards:
        return PPEItem(
            PPECategory.FOOT, "Electrical Hazard Safety Boots",
            "Electrical hazard rated, non-conductive sole", "ASTM F2413 EH",
            ProtectionLevel.HIGH,
        )
    if HazardType.CHEMICAL in hazards:
        return PPEItem(
            PPECategory.FOOT, "Chemical Resistant Boots",
            "PVC or rubber, chemical splash protection", "ASTM F2413",
            ProtectionLevel.HIGH,
        )
    if HazardType.MECHANICAL in hazards:
        return PPEItem(
            PPECategory.FOOT, "Steel Toe Safety Boots",
            "Impact and compression protection", "ASTM F2413 I/75 C/75",
            ProtectionLevel.HIGH,
        )
    return PPEItem(
        PPECategory.FOOT, "Basic Safety Shoes", "Slip resistant footwear",
        "ASTM F2413", ProtectionLevel.LOW,
    )


def select_body(hazards: Hazards, temperature: float) -> PPEItem:
    if HazardType.CHEMICAL in hazards or HazardType.BIOLOGICAL in hazards:
        return PPEItem(
            PPECategory.BODY, "Chemical Protective Coverall",
            "Type 3/4 with sealed seams", "NFPA 1991/1992",
            ProtectionLevel.HIGH, detail="Tychem or similar",
        )
    if HazardType.THERMAL in hazards:
        return PPEItem(
            PPECategory.BODY, "Flame Resistant Coverall", "Arc flash protection",
            "NFPA 70E", ProtectionLevel.HIGH, detail="Nomex or FR cotton",
        )
    if temperature > 30:
        return PPEItem(
            PPECategory.BODY, "Cooling Vest", "Heat stress prevention",
            "General Use", ProtectionLevel.MEDIUM, detail="Mesh with cooling packs",
        )
    if temperature < 5:
        return PPEItem(
            PPECategory.BODY, "Insulated Jacket", "Cold weather protection",
            "General Use", ProtectionLevel.MEDIUM, detail="Insulated synthetic",
        )
    return PPEItem(
        PPECategory.BODY, "High Visibility Vest", "Visibility enhancement",
        "ANSI/ISEA 107-2020", ProtectionLevel.LOW, detail="Fluorescent mesh",
    )


def select_fall(hazards: Hazards, temperature: float) -> PPEItem:
    if hazards.get(HazardType.FALL) == HazardSeverity.HIGH:
        return PPEItem(
            PPECategory.FALL, "Full Body Harness with Shock-Absorbing Lanyard",
            "Personal fall arrest system", "OSHA 1926.502 & ANSI/ASSP Z359.1",
            ProtectionLevel.HIGH,
        )
    return PPEItem(
        PPECategory.FALL, "Restraint Harness with Positioning Lanyard",
        "Fall restraint system", "OSHA 1926.502 & ANSI/ASSP Z359.1",
        ProtectionLevel.MEDIUM,
    )


DEFAULT_SELECTORS: Mapping[PPECategory, Selector] = frozen(
    {
        PPECategory.HEAD: select_head,
        PPECategory.EYE: select_eye,
        PPECategory.HEARING: select_hearing,
        PPECategory.RESPIRATORY: select_respiratory,
        PPECategory.HAND: select_hand,
        PPECategory.FOOT: select_foot,
        PPECategory.BODY: select_body,
        PPECategory.FALL: select_fall,
    }
)


class PPESelectionEngine:
    """Hazard-driven PPE selector.

    Args:
        tables: Scoring, protection, comfort and cost tables.
        selectors: Item selector per category. Categories without a
            selector are reported as missing PPE.
    """

    def __init__(
        self,
        tables: PPESelectionTables = DEFAULT_PPE_SELECTION_TABLES,
        selectors: Mapping[PPECategory, Selector] | None = None,
    ) -> None:
        self.tables = tables
        self.selectors = dict(DEFAULT_SELECTORS if selectors is None else selectors)
        self.validator = InputValidator(PPE_SELECTION_FIELDS)

    def calculate(self, inputs: Mapping[str, Any]) -> PPESelectionResult:
        """Select PPE for the declared hazards.

        Raises:
            InputValidationError: If the task description or hazards are
                missing, or any input is out of range.
        """
        values = self.validator.validate(inputs)
        gaps: list[ConfigurationGap] = []
        values["industry"] = resolve_industry(values["industry"], gaps)
        data = PPESelectionInput(**values)

        assessments = self.assess_hazards(data.hazards, data.task_duration, gaps)
        overall = self.overall_risk(assessments)
        required = self.required_categories(assessments)

        selected: dict[PPECategory, PPEItem] = {}
        for category in required:
            selector = self.selectors.get(category)
            if selector is None:
                logger.warning(f"No PPE selector registered for {category.value}")
                continue
            selected[category] = selector(data.hazards, data.temperature)

        factors = self.protection_factors(selected)
        overall_protection = 1.0
        for factor in factors.values():
            overall_protection *= 1 - factor
        overall_protection = 1 - overall_protection

        standards = self.check_standards(required, selected, data.industry)
        compliance = ComplianceReport(
            violations=standards.missing,
            warnings=standards.warnings,
            compliant=standards.ansi + standards.nfpa + standards.osha,
        )
        comfort = self.assess_comfort(selected, data.temperature, data.task_duration)

        logger.debug(
            f"PPE selection for '{data.task_description}': overall={overall.label} "
            f"items={[c.value for c in selected]}"
        )
        return PPESelectionResult(
            inputs=data,
            hazard_assessments=assessments,
            classification=overall,
            required_categories=required,
            selected=selected,
            protection_factors=factors,
            overall_protection=overall_protection,
            standards=standards,
            compliance=compliance,
            comfort=comfort,
            cost=self.estimate_cost(selected, data.task_duration),
            recommendations=self.recommend(overall, standards, comfort),
            gaps=tuple(gaps),
        )

    def assess_hazards(
        self,
        hazards: Hazards,
        task_duration: float,
        gaps: list[ConfigurationGap] | None = None,
    ) -> tuple[HazardAssessment, ...]:
        """Score each hazard; the level uses the unscaled score."""
        t = self.tables
        gaps = gaps if gaps is not None else []
        results: list[HazardAssessment] = []
        for hazard, severity in hazards.items():
            scoring = lookup("hazard_scoring", t.hazard_scoring, hazard, None, gaps,
                             fallback="general hazard score 2")
            if scoring is None:
                score, level, description = 2.0, "Low", "General hazard"
            else:
                score = float(scoring.scores[severity])
                if score >= scoring.high_threshold:
                    level = "High"
                elif score >= scoring.medium_threshold:
                    level = "Medium"
                else:
                    level = "Low"
                description = scoring.descriptions[level]

            if task_duration > t.long_task_hours:
                score *= t.long_task_factor
            if task_duration > t.extended_task_hours:
                score *= t.extended_task_factor
            results.append(HazardAssessment(hazard, severity, level, description, score))
        return tuple(results)

    def overall_risk(
        self, assessments: tuple[HazardAssessment, ...]
    ) -> ClassificationResult:
        top = max((a.risk_score for a in assessments), default=0.0)
        if top > self.tables.overall_high_score:
            return ClassificationResult("High", 2, "High risk task - full PPE ensemble", top)
        if top > self.tables.overall_medium_score:
            return ClassificationResult("Medium", 1, "Moderate risk task", top)
        return ClassificationResult("Low", 0, "Low risk task", top)

    def required_categories(
        self, assessments: tuple[HazardAssessment, ...]
    ) -> tuple[PPECategory, ...]:
        """Categories triggered by the hazards, in ``PPECategory`` order."""
        t = self.tables
        present = {a.hazard: a for a in assessments}
        required: list[PPECategory] = []
        for category in PPECategory:
            triggers = t.category_triggers.get(category)
            if triggers is not None and triggers & present.keys():
                required.append(category)
                continue
            gate = t.score_gated_categories.get(category)
            if gate is not None:
                hazard, threshold = gate
                if hazard in present and present[hazard].risk_score > threshold:
                    required.append(category)
        return tuple(required)

    def protection_factors(
        self, selected: Mapping[PPECategory, PPEItem]
    ) -> dict[PPECategory, float]:
        t = self.tables
        factors: dict[PPECategory, float] = {}
        for category, item in selected.items():
            factor = t.protection_factors.get(item.protection_level, t.default_protection_factor)
            if category == PPECategory.RESPIRATORY and item.protection_factor:
                factor = 1 - 1 / item.protection_factor
            factors[category] = factor
        return factors

    @staticmethod
    def check_standards(
        required: tuple[PPECategory, ...],
        selected: Mapping[PPECategory, PPEItem],
        industry: Industry,
    ) -> StandardsCompliance:
        osha: list[str] = []
        ansi: list[str] = []
        nfpa: list[str] = []
        warnings: list[str] = []
        missing = [c.value for c in required if c not in selected]

        for category, item in selected.items():
            if not item.standard:
                warnings.append(f"{category.value}: No standard specified")
                continue
            if "ANSI" in item.standard:
                ansi.append(f"{category.value}: {item.standard}")
            if "NFPA" in item.standard:
                nfpa.append(f"{category.value}: {item.standard}")
            if "NIOSH" in item.standard or "OSHA" in item.standard:
                osha.append(f"{category.value}: Compliant")

        if industry == Industry.CONSTRUCTION:
            if PPECategory.HEAD not in selected:
                missing.append("head (hard hat required)")
            if PPECategory.FOOT not in selected:
                missing.append("foot (safety boots required)")
        if industry == Industry.HEALTHCARE:
            if PPECategory.RESPIRATORY not in selected and PPECategory.EYE not in selected:
                warnings.append("Consider face shield for droplet protection")

        return StandardsCompliance(
            osha=tuple(osha),
            ansi=tuple(ansi),
            nfpa=tuple(nfpa),
            missing=tuple(missing),
            warnings=tuple(warnings),
        )

    def assess_comfort(
        self,
        selected: Mapping[PPECategory, PPEItem],
        temperature: float,
        duration: float,
    ) -> ComfortAssessment:
        t = self.tables
        score = 100.0
        issues: list[str] = []

        if temperature > 25 and PPECategory.BODY in selected:
            score -= 20
            issues.append("Body protection may cause heat stress in warm conditions")
        if temperature < 10 and PPECategory.BODY not in selected:
            score -= 15
            issues.append("Consider additional insulation for cold conditions")
        if duration > 4:
            score -= 10
            issues.append("Extended wear may reduce comfort")
        if duration > 8:
            score -= 15
            issues.append("Consider PPE rotation for tasks >8 hours")
        if len(selected) > t.max_items_before_penalty:
            score -= (len(selected) - t.max_items_before_penalty) * t.per_item_penalty
            issues.append("Multiple PPE items may reduce mobility")

        _, level, _ = classify_floor(score, t.comfort_floors, t.comfort_fallback)
        return ComfortAssessment(level=level, score=score, issues=tuple(issues))

    def estimate_cost(
        self, selected: Mapping[PPECategory, PPEItem], task_duration: float
    ) -> PPECostEstimate:
        t = self.tables
        items: dict[PPECategory, float] = {}
        for category, item in selected.items():
            low, high = t.cost_ranges[category]
            if item.protection_level == ProtectionLevel.VERY_HIGH:
                cost = high * 0.8
            elif item.protection_level == ProtectionLevel.HIGH:
                cost = high * 0.6
            elif item.protection_level == ProtectionLevel.MEDIUM:
                cost = (low + high) / 2
            else:
                cost = low * 1.2
            for keyword, specialty_cost in t.specialty_costs.items():
                if keyword in item.item_type:
                    cost = specialty_cost
            items[category] = cost

        purchase = sum(items.values())
        daily = purchase * t.daily_cost_ratio
        return PPECostEstimate(
            purchase=purchase,
            daily=daily,
            task=daily * task_duration / t.shift_hours,
            items=items,
        )

    @staticmethod
    def recommend(
        overall: ClassificationResult,
        standards: StandardsCompliance,
        comfort: ComfortAssessment,
    ) -> tuple[str, ...]:
        recs = [
            "Conduct PPE fit testing for all items",
            "Train workers on proper donning/doffing procedures",
            "Establish PPE inspection and maintenance program",
        ]
        if overall.label == "High":
            recs.append("Implement buddy system for high-risk tasks")
            recs.append("Consider additional engineering controls")
            recs.append("Establish emergency response procedures")
        if standards.missing:
            recs.append(f"Address missing PPE: {', '.join(standards.missing)}")
        if standards.warnings:
            recs.append(f"Address standards issues: {', '.join(standards.warnings)}")
        if comfort.level in ("Poor", "Uncomfortable"):
            recs.extend(f"Address comfort: {issue}" for issue in comfort.issues)
            recs.append("Consider PPE with better ergonomics")
            recs.append("Implement regular comfort breaks")
        recs.append("Establish PPE replacement schedule based on manufacturer guidelines")
        recs.append("Store PPE properly to maintain effectiveness")
        return tuple(recs)


__all__ = [
    "ComfortAssessment",
    "DEFAULT_SELECTORS",
    "HazardAssessment",
    "PPECostEstimate",
    "PPEItem",
    "PPESelectionEngine",
    "PPESelectionInput",
    "PPESelectionResult",
    "PPE_SELECTION_FIELDS",
    "StandardsCompliance",
]
