"""Anchor point capacity estimates against the OSHA 2268 kg (5000 lbs) rule.

Each anchor type has its own capacity model, registered as a selector
keyed by ``AnchorType``. Estimates are advisory; pull testing is always
recommended for critical applications.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from worksafe.domain.value_objects import AnchorMaterial, AnchorType, AssessmentKind

from ..validation import FieldKind, FieldSpec, InputValidator
from .models import AssessmentResult, ComplianceReport, ConfigurationGap
from .tables import DEFAULT_ANCHOR_STRENGTH_TABLES, AnchorStrengthTables

logger = logging.getLogger(__name__)

ANCHOR_STRENGTH_FIELDS = (
    FieldSpec("anchor_type", FieldKind.ENUM, required=True, choices=AnchorType),
    FieldSpec("material", FieldKind.ENUM, required=True, choices=AnchorMaterial),
    FieldSpec(
        "diameter", FieldKind.NUMBER, required=True,
        minimum=0, exclusive_minimum=True, maximum=100,
    ),
    FieldSpec(
        "depth", FieldKind.NUMBER, required=True,
        minimum=0, exclusive_minimum=True, maximum=1000,
    ),
)


@dataclass(frozen=True)
class AnchorStrengthInput:
    """Validated anchor inputs (millimeters)."""

    anchor_type: AnchorType
    material: AnchorMaterial
    diameter: float
    depth: float


@dataclass(frozen=True)
class AnchorCapacity:
    """Capacity estimate produced by one anchor selector.

    Attributes:
        anchor_type: Anchor design evaluated.
        capacity_kg: Estimated capacity in kilograms.
        description: Capacity statement.
        osha_compliant: True if capacity meets the OSHA minimum.
        recommendation: Installation or suitability guidance.
    """

    anchor_type: AnchorType
    capacity_kg: float
    description: str
    osha_compliant: bool
    recommendation: str

    def __post_init__(self) -> None:
        if self.capacity_kg < 0:
            raise ValueError("capacity_kg must be non-negative")


@dataclass(frozen=True)
class AnchorStrengthResult(AssessmentResult):
    """Anchor capacity assessment."""

    kind: ClassVar[AssessmentKind] = AssessmentKind.ANCHOR_STRENGTH

    inputs: AnchorStrengthInput
    capacity: AnchorCapacity
    compliance: ComplianceReport
    recommendations: tuple[str, ...]
    classification: None = None
    gaps: tuple[ConfigurationGap, ...] = field(default_factory=tuple)


class AnchorStrengthEngine:
    """Anchor capacity estimator.

    Args:
        tables: Capacity model constants.
    """

    def __init__(
        self, tables: AnchorStrengthTables = DEFAULT_ANCHOR_STRENGTH_TABLES
    ) -> None:
        self.tables = tables
        self.validator = InputValidator(ANCHOR_STRENGTH_FIELDS)
        self._selectors: dict[
            AnchorType, Callable[[AnchorMaterial, float, float], AnchorCapacity]
        ] = {
            AnchorType.BEAM_CLAMP: self.beam_clamp,
            AnchorType.CONCRETE_ANCHOR: self.concrete_anchor,
            AnchorType.ROOF_ANCHOR: self.roof_anchor,
        }

    def calculate(self, inputs: Mapping[str, Any]) -> AnchorStrengthResult:
        """Estimate anchor capacity and check it against the OSHA minimum.

        Raises:
            InputValidationError: If any input is missing or out of range.
        """
        data = AnchorStrengthInput(**self.validator.validate(inputs))
        capacity = self._selectors[data.anchor_type](
            data.material, data.diameter, data.depth
        )
        logger.debug(
            f"Anchor {data.anchor_type.value}: {capacity.capacity_kg:.0f} kg "
            f"(compliant={capacity.osha_compliant})"
        )

        threshold = "OSHA minimum anchor strength of 2268 kg (5000 lbs)"
        if capacity.osha_compliant:
            compliance = ComplianceReport(compliant=(f"Meets {threshold}",))
        else:
            compliance = ComplianceReport(violations=(f"Below {threshold}",))

        return AnchorStrengthResult(
            inputs=data,
            capacity=capacity,
            compliance=compliance,
            recommendations=(capacity.recommendation, self.tables.note),
        )

    def beam_clamp(
        self, material: AnchorMaterial, diameter: float, depth: float
    ) -> AnchorCapacity:
        t = self.tables
        capacity = t.beam_clamp_base_kg * t.beam_clamp_material_factors.get(material, 1.0)
        if diameter >= t.beam_clamp_large_diameter_mm:
            capacity *= t.beam_clamp_large_diameter_factor
        compliant = capacity >= t.osha_minimum_kg
        return AnchorCapacity(
            anchor_type=AnchorType.BEAM_CLAMP,
            capacity_kg=capacity,
            description=f"Beam clamp capacity: {capacity:g} kg",
            osha_compliant=compliant,
            recommendation=(
                "Meets OSHA 2268 kg (5000 lbs) requirement"
                if compliant
                else "Does not meet OSHA requirements - use stronger anchor"
            ),
        )

    def concrete_anchor(
        self, material: AnchorMaterial, diameter: float, depth: float
    ) -> AnchorCapacity:
        t = self.tables
        capacity = t.concrete_base_kg_per_mm2 * diameter * depth
        capacity *= t.concrete_material_factors.get(material, 1.0)
        return AnchorCapacity(
            anchor_type=AnchorType.CONCRETE_ANCHOR,
            capacity_kg=capacity,
            description=f"Concrete anchor capacity: {capacity:.0f} kg",
            osha_compliant=capacity >= t.osha_minimum_kg,
            recommendation=f"Installation depth: {depth:g}mm, Diameter: {diameter:g}mm",
        )

    def roof_anchor(
        self, material: AnchorMaterial, diameter: float, depth: float
    ) -> AnchorCapacity:
        t = self.tables
        capacity = t.roof_anchor_base_kg * t.roof_anchor_material_factors.get(material, 1.0)
        if diameter >= t.roof_anchor_large_diameter_mm:
            capacity *= t.roof_anchor_large_diameter_factor
        compliant = capacity >= t.osha_minimum_kg
        return AnchorCapacity(
            anchor_type=AnchorType.ROOF_ANCHOR,
            capacity_kg=capacity,
            description=f"Roof anchor capacity: {capacity:g} kg",
            osha_compliant=compliant,
            recommendation=(
                "Suitable for fall arrest"
                if compliant
                else "Only suitable for restraint systems"
            ),
        )


__all__ = [
    "ANCHOR_STRENGTH_FIELDS",
    "AnchorCapacity",
    "AnchorStrengthEngine",
    "AnchorStrengthInput",
    "AnchorStrengthResult",
]
