"""Versioned threshold tables for the assessment engines.

Each engine reads its regulatory constants, band edges and lookup
values from one frozen table dataclass. Mapping fields are wrapped in
``MappingProxyType`` so a table can be shared between engines and
calls without any chance of mutation. The ``DEFAULT_*`` instances are
injected into engines at construction; tests and callers with other
jurisdictions can pass their own.

Band lists are ordered by their upper edge. An upper edge of ``None``
marks the open-ended final band.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar

from worksafe.domain.value_objects import (
    Acclimatization,
    ActivityLevel,
    AnchorMaterial,
    ClothingType,
    Department,
    ExperienceLevel,
    HazardSeverity,
    HazardType,
    Industry,
    Location,
    PPECategory,
    ProtectionLevel,
    Regulation,
    SolarLoad,
    SurfaceType,
    TrainingFrequency,
    TrainingMethod,
    WorkIntensity,
)

from .models import ConfigurationGap

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

TABLE_VERSION = "2024.1"


def frozen(mapping: Mapping[K, V]) -> Mapping[K, V]:
    """Wrap a mapping in a read-only proxy."""
    return MappingProxyType(dict(mapping))


def lookup(
    table: str,
    mapping: Mapping[Any, V],
    key: Any,
    default: V,
    gaps: list[ConfigurationGap],
    fallback: str | None = None,
) -> V:
    """Look up a table entry, recording a configuration gap on a miss.

    Args:
        table: Table name used in the gap record and log line.
        mapping: Table mapping to consult.
        key: Lookup key.
        default: Value returned when the key has no entry.
        gaps: Gap list of the calculation in progress; appended to on a miss.
        fallback: Description of the default for the gap record.

    Returns:
        The table entry, or ``default``.
    """
    if key in mapping:
        return mapping[key]
    key_text = getattr(key, "value", str(key))
    description = fallback or f"default {default!r}"
    logger.info(f"No {table} entry for '{key_text}', falling back to {description}")
    gaps.append(ConfigurationGap(table=table, key=key_text, fallback=description))
    return default


INDUSTRIES: Mapping[str, Industry] = frozen({member.value: member for member in Industry})


def resolve_industry(value: Industry | str, gaps: list[ConfigurationGap]) -> Industry:
    """Resolve an industry name to a tabled sector.

    Names with no table entry fall back to ``Industry.GENERAL`` and are
    recorded as an ``industries`` gap.
    """
    if isinstance(value, Industry):
        return value
    return lookup("industries", INDUSTRIES, value, Industry.GENERAL, gaps, fallback="general")


@dataclass(frozen=True)
class Band:
    """One band of a banded classification.

    Attributes:
        upper: Upper edge of the band, or None for the open final band.
        label: Band label.
        description: Band description.
    """

    upper: float | None
    label: str
    description: str = ""


def classify_band(
    value: float, bands: tuple[Band, ...], *, inclusive: bool
) -> tuple[int, Band]:
    """Find the band a value falls into.

    Args:
        value: Value to classify.
        bands: Bands ordered by ascending upper edge, the last one open.
        inclusive: Whether a value equal to an upper edge belongs to that
            band (``<=``) rather than the next one (``<``).

    Returns:
        Tuple of (rank, band).
    """
    for rank, band in enumerate(bands):
        if band.upper is None:
            return rank, band
        if (value <= band.upper) if inclusive else (value < band.upper):
            return rank, band
    raise ValueError("band table must end with an open band")


def classify_floor(
    value: float, floors: tuple[tuple[float, str, str], ...], fallback: tuple[str, str]
) -> tuple[int, str, str]:
    """Classify against descending ``>=`` floors (best band first).

    Returns:
        Tuple of (rank, label, description).
    """
    for rank, (floor, label, description) in enumerate(floors):
        if value >= floor:
            return rank, label, description
    return len(floors), fallback[0], fallback[1]


# =============================================================================
# Fall Protection (OSHA 1926.502)
# =============================================================================


@dataclass(frozen=True)
class FallProtectionTables:
    """Constants for fall clearance, impact force and risk banding."""

    version: str
    harness_stretch_m: float
    safety_margin_m: float
    d_ring_shift_m: float
    surface_factors: Mapping[SurfaceType, float]
    default_surface_factor: float
    gravity: float
    max_free_fall_m: float
    personal_max_free_fall_m: float
    max_impact_force_n: float
    impact_warning_n: float
    available_clearance_ratio: float
    safety_factor_floors: tuple[tuple[float, str, str], ...]
    risk_bands: tuple[Band, ...]
    guardrail_height_m: float
    tie_off_height_m: float
    clearance_ratio_trigger: float


DEFAULT_FALL_PROTECTION_TABLES = FallProtectionTables(
    version=TABLE_VERSION,
    harness_stretch_m=0.5,
    safety_margin_m=1.0,
    d_ring_shift_m=0.5,
    surface_factors=frozen(
        {
            SurfaceType.CONCRETE: 0.3,
            SurfaceType.STEEL: 0.5,
            SurfaceType.GROUND: 0.8,
            SurfaceType.WATER: 2.0,
        }
    ),
    default_surface_factor=0.5,
    gravity=9.81,
    max_free_fall_m=1.8,
    personal_max_free_fall_m=0.6,
    max_impact_force_n=8000.0,
    impact_warning_n=6000.0,
    available_clearance_ratio=1.5,
    safety_factor_floors=(
        (2.0, "Adequate", "Available clearance comfortably exceeds requirement"),
        (1.5, "Marginal", "Available clearance only slightly exceeds requirement"),
    ),
    risk_bands=(
        Band(3.0, "Low Risk", "Minimal fall risk with current setup"),
        Band(6.0, "Moderate Risk", "Moderate fall risk - review required"),
        Band(10.0, "High Risk", "High fall risk - immediate action needed"),
        Band(None, "Extreme Risk", "Extreme fall risk - STOP WORK"),
    ),
    guardrail_height_m=3.0,
    tie_off_height_m=6.0,
    clearance_ratio_trigger=0.8,
)


@dataclass(frozen=True)
class AnchorStrengthTables:
    """Anchor capacity model constants (kg)."""

    version: str
    osha_minimum_kg: float
    beam_clamp_base_kg: float
    beam_clamp_material_factors: Mapping[AnchorMaterial, float]
    beam_clamp_large_diameter_mm: float
    beam_clamp_large_diameter_factor: float
    concrete_base_kg_per_mm2: float
    concrete_material_factors: Mapping[AnchorMaterial, float]
    roof_anchor_base_kg: float
    roof_anchor_material_factors: Mapping[AnchorMaterial, float]
    roof_anchor_large_diameter_mm: float
    roof_anchor_large_diameter_factor: float
    note: str


DEFAULT_ANCHOR_STRENGTH_TABLES = AnchorStrengthTables(
    version=TABLE_VERSION,
    osha_minimum_kg=2268.0,
    beam_clamp_base_kg=1000.0,
    beam_clamp_material_factors=frozen({AnchorMaterial.STEEL: 2.0}),
    beam_clamp_large_diameter_mm=20.0,
    beam_clamp_large_diameter_factor=1.5,
    concrete_base_kg_per_mm2=500.0,
    concrete_material_factors=frozen(
        {AnchorMaterial.EPOXY: 1.5, AnchorMaterial.WEDGE: 1.2}
    ),
    roof_anchor_base_kg=800.0,
    roof_anchor_material_factors=frozen({AnchorMaterial.THROUGH_BOLT: 2.0}),
    roof_anchor_large_diameter_mm=12.0,
    roof_anchor_large_diameter_factor=1.3,
    note="Always conduct pull testing for critical applications",
)


# =============================================================================
# Heat Stress (ACGIH TLV, Cal/OSHA, WA L&I)
# =============================================================================


@dataclass(frozen=True)
class WorkRestBand:
    """Work-rest regime for a WBGT band."""

    upper: float | None
    work_percentage: float
    cycle: str


@dataclass(frozen=True)
class HeatRiskBand:
    """Heat risk band with symptom and action text."""

    upper: float | None
    label: str
    symptoms: str
    action: str


@dataclass(frozen=True)
class HeatStressTables:
    """WBGT band edges, sweat model and compliance thresholds."""

    version: str
    solar_globe_offsets: Mapping[SolarLoad, float]
    heat_index_coefficients: tuple[float, ...]
    sweat_rate_models: Mapping[WorkIntensity, tuple[float, float]]
    default_sweat_rate: float
    clothing_factors: Mapping[ClothingType, float]
    work_rest_bands: tuple[WorkRestBand, ...]
    intensity_adjustments: Mapping[WorkIntensity, float]
    acclimatization_adjustments: Mapping[Acclimatization, float]
    risk_bands: tuple[HeatRiskBand, ...]
    acclimatized_shifts: Mapping[str, str]
    unacclimatized_shifts: Mapping[str, str]
    intensity_risk_points: Mapping[WorkIntensity, float]
    work_hours_per_day: float
    intake_multiplier: float
    pre_shift_liters: float
    cal_osha_program_wbgt: float
    cal_osha_rest_wbgt: float
    wa_precaution_wbgt: float
    acclimatization_program_wbgt: float


DEFAULT_HEAT_STRESS_TABLES = HeatStressTables(
    version=TABLE_VERSION,
    solar_globe_offsets=frozen(
        {SolarLoad.NONE: 0.0, SolarLoad.MEDIUM: 5.0, SolarLoad.HIGH: 10.0}
    ),
    heat_index_coefficients=(
        -8.78469475556,
        1.61139411,
        2.33854883889,
        -0.14611605,
        -0.012308094,
        -0.0164248277778,
        0.002211732,
        0.00072546,
        -0.000003582,
    ),
    sweat_rate_models=frozen(
        {
            WorkIntensity.LIGHT: (0.3, 0.01),
            WorkIntensity.MODERATE: (0.5, 0.02),
            WorkIntensity.HEAVY: (0.8, 0.03),
            WorkIntensity.VERY_HEAVY: (1.2, 0.04),
        }
    ),
    default_sweat_rate=0.5,
    clothing_factors=frozen(
        {
            ClothingType.NONE: 1.0,
            ClothingType.COVERALLS: 1.3,
            ClothingType.IMPERMEABLE: 1.5,
            ClothingType.DOUBLE_LAYER: 1.8,
            ClothingType.CHEMICAL_PROTECTIVE: 2.0,
        }
    ),
    work_rest_bands=(
        WorkRestBand(26.0, 100.0, "Continuous"),
        WorkRestBand(28.0, 75.0, "45 min work / 15 min rest"),
        WorkRestBand(30.0, 50.0, "30 min work / 30 min rest"),
        WorkRestBand(32.0, 25.0, "15 min work / 45 min rest"),
        WorkRestBand(None, 0.0, "No work in heat"),
    ),
    intensity_adjustments=frozen(
        {WorkIntensity.HEAVY: -25.0, WorkIntensity.VERY_HEAVY: -25.0}
    ),
    acclimatization_adjustments=frozen(
        {Acclimatization.ACCLIMATIZED: 10.0, Acclimatization.UNACCLIMATIZED: -15.0}
    ),
    risk_bands=(
        HeatRiskBand(
            26.0,
            "Low Risk",
            "Normal work, maintain hydration",
            "General heat awareness",
        ),
        HeatRiskBand(
            28.0,
            "Moderate Risk",
            "Increased sweating, thirst, mild discomfort",
            "Implement work-rest schedule, increase hydration",
        ),
        HeatRiskBand(
            30.0,
            "High Risk",
            "Heat cramps, fatigue, headache, nausea",
            "Mandatory work-rest cycles, close supervision",
        ),
        HeatRiskBand(
            32.0,
            "Very High Risk",
            "Heat exhaustion, dizziness, vomiting, confusion",
            "Limited work only, medical supervision required",
        ),
        HeatRiskBand(
            None,
            "Extreme Risk",
            "Heat stroke - medical emergency",
            "NO WORK ALLOWED - Immediate cooling required",
        ),
    ),
    acclimatized_shifts=frozen(
        {"Very High Risk": "High Risk", "High Risk": "Moderate Risk"}
    ),
    unacclimatized_shifts=frozen(
        {"Moderate Risk": "High Risk", "Low Risk": "Moderate Risk"}
    ),
    intensity_risk_points=frozen(
        {WorkIntensity.HEAVY: 5.0, WorkIntensity.VERY_HEAVY: 10.0}
    ),
    work_hours_per_day=8.0,
    intake_multiplier=1.5,
    pre_shift_liters=0.5,
    cal_osha_program_wbgt=27.0,
    cal_osha_rest_wbgt=30.0,
    wa_precaution_wbgt=29.0,
    acclimatization_program_wbgt=26.0,
)


@dataclass(frozen=True)
class UrineColor:
    """One entry of the urine color hydration guide."""

    color: str
    description: str


@dataclass(frozen=True)
class HydrationTables:
    """Personal hydration model constants."""

    version: str
    ml_per_kg: float
    activity_multipliers: Mapping[ActivityLevel, float]
    heat_threshold_c: float
    heat_increase_per_degree: float
    work_hours_per_day: float
    pre_shift_liters: float
    post_shift_liters: float
    urine_color_guide: tuple[UrineColor, ...]


DEFAULT_HYDRATION_TABLES = HydrationTables(
    version=TABLE_VERSION,
    ml_per_kg=30.0,
    activity_multipliers=frozen(
        {
            ActivityLevel.SEDENTARY: 1.0,
            ActivityLevel.LIGHT: 1.2,
            ActivityLevel.MODERATE: 1.5,
            ActivityLevel.HEAVY: 2.0,
            ActivityLevel.VERY_HEAVY: 2.5,
        }
    ),
    heat_threshold_c=25.0,
    heat_increase_per_degree=0.04,
    work_hours_per_day=8.0,
    pre_shift_liters=0.5,
    post_shift_liters=0.5,
    urine_color_guide=(
        UrineColor("#e6f7ff", "Clear: Overhydrated, reduce intake"),
        UrineColor("#b3e0ff", "Pale Yellow: Well hydrated"),
        UrineColor("#66c2ff", "Yellow: Normal hydration"),
        UrineColor("#3399ff", "Dark Yellow: Mild dehydration"),
        UrineColor("#0066cc", "Amber: Dehydrated, drink water"),
        UrineColor("#004080", "Brown: Severely dehydrated, medical attention"),
    ),
)


# =============================================================================
# Incident Rates (OSHA recordkeeping)
# =============================================================================


@dataclass(frozen=True)
class IndustryBenchmark:
    """Industry TRIR/DART benchmark and TRIR target."""

    trir: float
    dart: float
    target: float


@dataclass(frozen=True)
class IncidentRateTables:
    """Rate multipliers, benchmarks, scoring and cost model."""

    version: str
    osha_hours_base: float
    ltifr_hours_base: float
    benchmarks: Mapping[Industry, IndustryBenchmark]
    fallback_industry: Industry
    comparison_bands: tuple[tuple[float, str], ...]
    comparison_fallback: str
    ltifr_points: tuple[tuple[float, int], ...]
    ltifr_fallback_points: int
    dart_target_ratio: float
    rating_floors: tuple[tuple[float, str, str], ...]
    rating_fallback: tuple[str, str]
    recordable_cost: float
    lost_time_cost: float
    indirect_multiplier: float
    trir_training_trigger: float
    dart_ergonomics_trigger: float


DEFAULT_INCIDENT_RATE_TABLES = IncidentRateTables(
    version=TABLE_VERSION,
    osha_hours_base=200_000.0,
    ltifr_hours_base=1_000_000.0,
    benchmarks=frozen(
        {
            Industry.CONSTRUCTION: IndustryBenchmark(3.0, 2.0, 2.5),
            Industry.MANUFACTURING: IndustryBenchmark(2.5, 1.8, 2.0),
            Industry.TRANSPORTATION: IndustryBenchmark(4.0, 2.5, 3.0),
            Industry.HEALTHCARE: IndustryBenchmark(4.5, 3.0, 3.5),
            Industry.OIL_GAS: IndustryBenchmark(0.8, 0.5, 0.6),
            Industry.MINING: IndustryBenchmark(2.0, 1.2, 1.5),
            Industry.AGRICULTURE: IndustryBenchmark(5.0, 3.5, 4.0),
            Industry.RETAIL: IndustryBenchmark(3.5, 2.2, 2.8),
            Industry.EDUCATION: IndustryBenchmark(2.8, 1.9, 2.2),
            Industry.GENERAL: IndustryBenchmark(3.2, 2.1, 2.5),
        }
    ),
    fallback_industry=Industry.GENERAL,
    comparison_bands=(
        (0.5, "Excellent"),
        (0.8, "Good"),
        (1.0, "Average"),
        (1.2, "Below Average"),
    ),
    comparison_fallback="Poor",
    ltifr_points=((0.5, 40), (1.0, 30), (2.0, 20)),
    ltifr_fallback_points=10,
    dart_target_ratio=0.8,
    rating_floors=(
        (90.0, "World Class", "Performance among the best in the industry"),
        (80.0, "Excellent", "Performance well ahead of industry benchmarks"),
        (70.0, "Good", "Performance at or better than industry benchmarks"),
        (60.0, "Fair", "Performance near industry benchmarks"),
    ),
    rating_fallback=("Needs Improvement", "Performance behind industry benchmarks"),
    recordable_cost=38_000.0,
    lost_time_cost=75_000.0,
    indirect_multiplier=4.0,
    trir_training_trigger=3.0,
    dart_ergonomics_trigger=2.0,
)


# =============================================================================
# Noise Exposure (OSHA 1910.95)
# =============================================================================


@dataclass(frozen=True)
class NoiseBand:
    """Noise dose band with its action tag and fixed recommendations."""

    upper: float | None
    label: str
    action_required: str
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class NoiseExposureTables:
    """OSHA dose model constants and decibel reference table."""

    version: str
    criterion_level_db: float
    criterion_hours: float
    exchange_rate_db: float
    standard_work_days: float
    action_level_db: float
    bands: tuple[NoiseBand, ...]
    reference_levels: tuple[tuple[int, str], ...]


DEFAULT_NOISE_EXPOSURE_TABLES = NoiseExposureTables(
    version=TABLE_VERSION,
    criterion_level_db=85.0,
    criterion_hours=8.0,
    exchange_rate_db=3.0,
    standard_work_days=5.0,
    action_level_db=85.0,
    bands=(
        NoiseBand(
            50.0,
            "Low Risk",
            "None",
            (
                "Noise levels are acceptable",
                "Continue routine monitoring",
                "Maintain hearing conservation program",
            ),
        ),
        NoiseBand(
            100.0,
            "Moderate Risk",
            "Recommended",
            (
                "Consider implementing engineering controls",
                "Provide hearing protection",
                "Conduct annual audiometric testing",
            ),
        ),
        NoiseBand(
            None,
            "High Risk",
            "Required",
            (
                "Implement engineering controls immediately",
                "Mandatory hearing protection use",
                "Post warning signs",
                "Conduct quarterly audiometric testing",
                "Implement hearing conservation program",
            ),
        ),
    ),
    reference_levels=(
        (30, "Whisper, quiet library"),
        (60, "Normal conversation"),
        (85, "OSHA Action Level (8 hours)"),
        (90, "OSHA PEL (8 hours)"),
        (100, "Power tools, lawn mower"),
        (115, "Rock concert, chainsaw"),
        (140, "Jet engine (pain threshold)"),
    ),
)


# =============================================================================
# PPE Selection (OSHA 1910 Subpart I)
# =============================================================================


@dataclass(frozen=True)
class HazardScoring:
    """Score table and level thresholds for one hazard type.

    Attributes:
        scores: Base risk score per severity.
        high_threshold: Minimum score for the "High" level.
        medium_threshold: Minimum score for the "Medium" level.
        descriptions: Description per level (High, Medium, Low).
    """

    scores: Mapping[HazardSeverity, float]
    high_threshold: float
    medium_threshold: float
    descriptions: Mapping[str, str]


def _hazard(
    high: float,
    medium: float,
    low: float,
    thresholds: tuple[float, float],
    descriptions: tuple[str, str, str],
) -> HazardScoring:
    return HazardScoring(
        scores=frozen(
            {
                HazardSeverity.HIGH: high,
                HazardSeverity.MEDIUM: medium,
                HazardSeverity.LOW: low,
            }
        ),
        high_threshold=thresholds[0],
        medium_threshold=thresholds[1],
        descriptions=frozen(
            {"High": descriptions[0], "Medium": descriptions[1], "Low": descriptions[2]}
        ),
    )


@dataclass(frozen=True)
class PPESelectionTables:
    """Hazard scoring, category rules, protection, comfort and cost tables."""

    version: str
    hazard_scoring: Mapping[HazardType, HazardScoring]
    long_task_hours: float
    long_task_factor: float
    extended_task_hours: float
    extended_task_factor: float
    overall_high_score: float
    overall_medium_score: float
    category_triggers: Mapping[PPECategory, frozenset[HazardType]]
    score_gated_categories: Mapping[PPECategory, tuple[HazardType, float]]
    protection_factors: Mapping[ProtectionLevel, float]
    default_protection_factor: float
    cost_ranges: Mapping[PPECategory, tuple[float, float]]
    specialty_costs: Mapping[str, float]
    daily_cost_ratio: float
    shift_hours: float
    comfort_floors: tuple[tuple[float, str, str], ...]
    comfort_fallback: tuple[str, str]
    max_items_before_penalty: int
    per_item_penalty: float


DEFAULT_PPE_SELECTION_TABLES = PPESelectionTables(
    version=TABLE_VERSION,
    hazard_scoring=frozen(
        {
            HazardType.CHEMICAL: _hazard(
                9, 6, 3, (7, 4),
                (
                    "Chemical exposure requires highest level protection",
                    "Chemical exposure requires adequate protection",
                    "Minimal chemical exposure risk",
                ),
            ),
            HazardType.MECHANICAL: _hazard(
                8, 5, 2, (6, 3),
                (
                    "High risk of impact/cut hazards",
                    "Moderate mechanical hazard risk",
                    "Low mechanical hazard risk",
                ),
            ),
            HazardType.THERMAL: _hazard(
                7, 4, 1, (5, 2),
                (
                    "Extreme temperature exposure",
                    "Moderate temperature exposure",
                    "Normal temperature conditions",
                ),
            ),
            HazardType.BIOLOGICAL: _hazard(
                10, 7, 4, (8, 5),
                (
                    "Biological hazard requires isolation",
                    "Biological hazard requires protection",
                    "Low biological hazard risk",
                ),
            ),
            HazardType.RADIOLOGICAL: _hazard(
                9, 6, 3, (7, 4),
                (
                    "Radiological hazard - specialized PPE required",
                    "Moderate radiological hazard",
                    "Low radiological hazard risk",
                ),
            ),
            HazardType.ELECTRICAL: _hazard(
                8, 5, 2, (6, 3),
                (
                    "Electrical hazard - arc flash/electrocution risk",
                    "Electrical hazard present",
                    "Minimal electrical hazard",
                ),
            ),
            HazardType.FALL: _hazard(
                9, 6, 3, (7, 4),
                (
                    "Fall hazard requires full arrest system",
                    "Fall hazard requires restraint system",
                    "Minimal fall hazard",
                ),
            ),
        }
    ),
    long_task_hours=4.0,
    long_task_factor=1.2,
    extended_task_hours=8.0,
    extended_task_factor=1.5,
    overall_high_score=7.0,
    overall_medium_score=4.0,
    category_triggers=frozen(
        {
            PPECategory.HEAD: frozenset(
                {HazardType.MECHANICAL, HazardType.ELECTRICAL, HazardType.FALL}
            ),
            PPECategory.EYE: frozenset(
                {
                    HazardType.CHEMICAL,
                    HazardType.MECHANICAL,
                    HazardType.THERMAL,
                    HazardType.RADIOLOGICAL,
                }
            ),
            PPECategory.RESPIRATORY: frozenset(
                {HazardType.CHEMICAL, HazardType.BIOLOGICAL, HazardType.RADIOLOGICAL}
            ),
            PPECategory.HAND: frozenset(
                {HazardType.CHEMICAL, HazardType.MECHANICAL, HazardType.THERMAL}
            ),
            PPECategory.FOOT: frozenset(
                {HazardType.MECHANICAL, HazardType.ELECTRICAL, HazardType.CHEMICAL}
            ),
            PPECategory.BODY: frozenset(
                {
                    HazardType.CHEMICAL,
                    HazardType.THERMAL,
                    HazardType.RADIOLOGICAL,
                    HazardType.BIOLOGICAL,
                }
            ),
        }
    ),
    score_gated_categories=frozen(
        {
            PPECategory.HEARING: (HazardType.MECHANICAL, 5.0),
            PPECategory.FALL: (HazardType.FALL, 4.0),
        }
    ),
    protection_factors=frozen(
        {
            ProtectionLevel.VERY_HIGH: 0.95,
            ProtectionLevel.HIGH: 0.85,
            ProtectionLevel.MEDIUM: 0.70,
            ProtectionLevel.LOW: 0.50,
        }
    ),
    default_protection_factor=0.30,
    cost_ranges=frozen(
        {
            PPECategory.HEAD: (15.0, 50.0),
            PPECategory.EYE: (5.0, 100.0),
            PPECategory.HEARING: (2.0, 200.0),
            PPECategory.RESPIRATORY: (1.0, 1000.0),
            PPECategory.HAND: (5.0, 50.0),
            PPECategory.FOOT: (50.0, 200.0),
            PPECategory.BODY: (20.0, 300.0),
            PPECategory.FALL: (100.0, 500.0),
        }
    ),
    specialty_costs=frozen({"PAPR": 800.0, "Welding": 150.0}),
    daily_cost_ratio=0.1,
    shift_hours=8.0,
    comfort_floors=(
        (80.0, "Good", "PPE ensemble is comfortable for the task"),
        (60.0, "Moderate", "Some comfort issues, monitor wearers"),
        (40.0, "Poor", "Comfort issues likely to affect compliance"),
    ),
    comfort_fallback=("Uncomfortable", "PPE ensemble is likely to be removed or misused"),
    max_items_before_penalty=4,
    per_item_penalty=5.0,
)


# =============================================================================
# Training Needs (OSHA, ISO 45001, RCRA, DOT)
# =============================================================================


@dataclass(frozen=True)
class TrainingNeedsTables:
    """Course catalogs, hours, cost model and ROI assumptions."""

    version: str
    baseline_courses: tuple[str, ...]
    industry_courses: Mapping[Industry, tuple[str, ...]]
    regulation_courses: Mapping[Regulation, tuple[str, ...]]
    leadership_courses: tuple[str, ...]
    onboarding_courses: tuple[str, ...]
    new_hire_ratio_trigger: float
    course_hours: Mapping[str, float]
    default_course_hours: float
    experience_factors: Mapping[ExperienceLevel, float]
    certification_hours: float
    cycle_years: float
    method_cost_factors: Mapping[TrainingMethod, Mapping[str, float]]
    fallback_method: TrainingMethod
    productivity_rate: float
    employee_rate: float
    development_rate: float
    development_methods: frozenset[TrainingMethod]
    method_effectiveness: Mapping[TrainingMethod, float]
    default_method_effectiveness: float
    frequency_effectiveness: Mapping[TrainingFrequency, float]
    default_frequency_effectiveness: float
    effectiveness_floors: tuple[tuple[float, str, str], ...]
    effectiveness_fallback: tuple[str, str]
    minimum_annual_hours: Mapping[Location, float]
    default_minimum_annual_hours: float
    osha_recommended_hours: float
    iso_required_course: str
    documentation: tuple[str, ...]
    injury_costs: Mapping[Industry, float]
    fallback_injury_industry: Industry
    baseline_injury_rate: float
    injury_reduction: float
    turnover_replacement_cost: float
    turnover_reduction: float
    average_salary: float
    productivity_improvement: float
    timeline: Mapping[str, str]
    resources: tuple[str, ...]
    evaluation_methods: tuple[str, ...]
    department_courses: Mapping[Department, tuple[str, ...]]
    general_department_courses: tuple[str, ...]
    high_risk_courses: tuple[str, ...]
    frequent_incident_courses: tuple[str, ...]
    skill_gap_courses: tuple[str, ...]
    department_recommendations: tuple[str, ...]


DEFAULT_TRAINING_NEEDS_TABLES = TrainingNeedsTables(
    version=TABLE_VERSION,
    baseline_courses=(
        "Hazard Communication",
        "Emergency Action Plan",
        "Fire Prevention",
        "Personal Protective Equipment",
        "Lockout/Tagout",
        "Electrical Safety",
        "Machine Guarding",
        "Bloodborne Pathogens",
        "Confined Space",
        "Fall Protection",
        "Respiratory Protection",
        "Hearing Conservation",
    ),
    industry_courses=frozen(
        {
            Industry.CONSTRUCTION: (
                "Scaffold Safety",
                "Excavation Safety",
                "Crane Safety",
                "Steel Erection",
                "Powered Industrial Trucks",
            ),
            Industry.MANUFACTURING: (
                "Process Safety Management",
                "Machine Safety",
                "Chemical Safety",
                "Noise Control",
                "Ergonomics",
            ),
            Industry.HEALTHCARE: (
                "Infection Control",
                "Sharps Safety",
                "Patient Handling",
                "Radiation Safety",
                "Laboratory Safety",
            ),
            Industry.OIL_GAS: (
                "Process Safety",
                "H2S Safety",
                "Well Control",
                "Offshore Safety",
                "Hot Work",
            ),
            Industry.TRANSPORTATION: (
                "Defensive Driving",
                "Hazardous Materials",
                "Hours of Service",
                "Vehicle Maintenance",
                "Loading/Unloading",
            ),
        }
    ),
    regulation_courses=frozen(
        {
            Regulation.ISO45001: (
                "OH&S Management System",
                "Risk Assessment Training",
                "Incident Investigation",
            ),
            Regulation.RCRA: ("Hazardous Waste Management", "Waste Minimization"),
            Regulation.DOT: ("Hazardous Materials Transportation",),
        }
    ),
    leadership_courses=(
        "Safety Leadership Training",
        "Behavior-Based Safety",
        "Root Cause Analysis",
        "Audit and Inspection",
    ),
    onboarding_courses=(
        "New Employee Orientation",
        "Mentorship Program",
        "On-the-Job Training",
    ),
    new_hire_ratio_trigger=0.1,
    course_hours=frozen(
        {
            "Hazard Communication": 4,
            "Emergency Action Plan": 2,
            "Fire Prevention": 2,
            "Personal Protective Equipment": 4,
            "Lockout/Tagout": 8,
            "Electrical Safety": 8,
            "Machine Guarding": 4,
            "Bloodborne Pathogens": 4,
            "Confined Space": 8,
            "Fall Protection": 8,
            "Respiratory Protection": 8,
            "Hearing Conservation": 2,
            "Scaffold Safety": 8,
            "Excavation Safety": 8,
            "Crane Safety": 16,
            "Steel Erection": 8,
            "Powered Industrial Trucks": 8,
            "Process Safety Management": 16,
            "Machine Safety": 8,
            "Chemical Safety": 8,
            "Noise Control": 4,
            "Ergonomics": 4,
            "Infection Control": 4,
            "Sharps Safety": 2,
            "Patient Handling": 8,
            "Radiation Safety": 16,
            "Laboratory Safety": 8,
            "Process Safety": 16,
            "H2S Safety": 8,
            "Well Control": 40,
            "Offshore Safety": 16,
            "Hot Work": 4,
            "Defensive Driving": 8,
            "Hazardous Materials": 8,
            "Hours of Service": 4,
            "Vehicle Maintenance": 4,
            "Loading/Unloading": 4,
            "OH&S Management System": 16,
            "Risk Assessment Training": 8,
            "Incident Investigation": 8,
            "Hazardous Waste Management": 8,
            "Waste Minimization": 4,
            "Hazardous Materials Transportation": 16,
            "Safety Leadership Training": 16,
            "Behavior-Based Safety": 8,
            "Root Cause Analysis": 8,
            "Audit and Inspection": 8,
            "New Employee Orientation": 8,
            "Mentorship Program": 4,
            "On-the-Job Training": 40,
        }
    ),
    default_course_hours=4.0,
    experience_factors=frozen(
        {
            ExperienceLevel.NOVICE: 1.5,
            ExperienceLevel.INTERMEDIATE: 1.0,
            ExperienceLevel.EXPERIENCED: 0.8,
            ExperienceLevel.EXPERT: 0.6,
        }
    ),
    certification_hours=40.0,
    cycle_years=3.0,
    method_cost_factors=frozen(
        {
            TrainingMethod.IN_PERSON: frozen(
                {"instructor": 100, "materials": 25, "facility": 50, "travel": 75}
            ),
            TrainingMethod.ONLINE: frozen(
                {"platform": 50, "development": 100, "administration": 25, "support": 15}
            ),
            TrainingMethod.BLENDED: frozen(
                {
                    "instructor": 50,
                    "platform": 25,
                    "materials": 20,
                    "facility": 25,
                    "development": 50,
                }
            ),
            TrainingMethod.ON_THE_JOB: frozen(
                {"mentor": 75, "materials": 10, "productivity": 50}
            ),
        }
    ),
    fallback_method=TrainingMethod.IN_PERSON,
    productivity_rate=50.0,
    employee_rate=35.0,
    development_rate=150.0,
    development_methods=frozenset({TrainingMethod.ONLINE, TrainingMethod.BLENDED}),
    method_effectiveness=frozen(
        {
            TrainingMethod.IN_PERSON: 0.85,
            TrainingMethod.ONLINE: 0.75,
            TrainingMethod.BLENDED: 0.90,
            TrainingMethod.ON_THE_JOB: 0.80,
        }
    ),
    default_method_effectiveness=0.75,
    frequency_effectiveness=frozen(
        {
            TrainingFrequency.DAILY: 0.95,
            TrainingFrequency.WEEKLY: 0.90,
            TrainingFrequency.MONTHLY: 0.85,
            TrainingFrequency.QUARTERLY: 0.80,
            TrainingFrequency.YEARLY: 0.70,
            TrainingFrequency.AS_NEEDED: 0.60,
        }
    ),
    default_frequency_effectiveness=0.70,
    effectiveness_floors=(
        (90.0, "Excellent", "Comprehensive and effective training program"),
        (80.0, "Good", "Effective training with room for improvement"),
        (70.0, "Fair", "Basic training coverage, needs enhancement"),
        (60.0, "Poor", "Inadequate training, significant improvements needed"),
    ),
    effectiveness_fallback=(
        "Very Poor",
        "Critical training deficiencies - immediate action required",
    ),
    minimum_annual_hours=frozen(
        {
            Location.USA: 10.0,
            Location.EU: 8.0,
            Location.CANADA: 12.0,
            Location.AUSTRALIA: 10.0,
            Location.UK: 8.0,
        }
    ),
    default_minimum_annual_hours=8.0,
    osha_recommended_hours=40.0,
    iso_required_course="OH&S Management System",
    documentation=(
        "Training records for all employees",
        "Certification documentation",
        "Training program evaluation records",
    ),
    injury_costs=frozen(
        {
            Industry.CONSTRUCTION: 75_000.0,
            Industry.MANUFACTURING: 50_000.0,
            Industry.HEALTHCARE: 40_000.0,
            Industry.OIL_GAS: 100_000.0,
            Industry.TRANSPORTATION: 60_000.0,
            Industry.GENERAL: 40_000.0,
        }
    ),
    fallback_injury_industry=Industry.GENERAL,
    baseline_injury_rate=0.05,
    injury_reduction=0.3,
    turnover_replacement_cost=15_000.0,
    turnover_reduction=0.2,
    average_salary=50_000.0,
    productivity_improvement=0.05,
    timeline=frozen(
        {
            "immediate": "First 30 days: High-risk training",
            "short_term": "3-6 months: Core compliance training",
            "medium_term": "6-12 months: Skill development",
            "long_term": "1-3 years: Advanced and specialized training",
        }
    ),
    resources=(
        "Qualified instructors or training providers",
        "Training facilities or online platform",
        "Training materials and equipment",
        "Assessment and testing tools",
        "Record-keeping system",
    ),
    evaluation_methods=(
        "Pre- and post-training assessments",
        "Skills demonstration",
        "On-the-job observation",
        "Incident rate monitoring",
        "Employee feedback surveys",
        "Management review",
    ),
    department_courses=frozen(
        {
            Department.PRODUCTION: (
                "Machine Safety",
                "Lockout/Tagout",
                "PPE",
                "Emergency Procedures",
            ),
            Department.MAINTENANCE: (
                "Confined Space",
                "Electrical Safety",
                "Hot Work",
                "Fall Protection",
            ),
            Department.LABORATORY: (
                "Chemical Safety",
                "Laboratory Safety",
                "Emergency Response",
                "Waste Management",
            ),
            Department.WAREHOUSE: (
                "Powered Industrial Trucks",
                "Material Handling",
                "Fire Safety",
                "Ergonomics",
            ),
            Department.OFFICE: (
                "Ergonomics",
                "Emergency Evacuation",
                "First Aid",
                "Workplace Violence",
            ),
        }
    ),
    general_department_courses=("General Safety Awareness", "Emergency Procedures", "PPE"),
    high_risk_courses=("Risk Assessment", "Incident Investigation", "Safety Leadership"),
    frequent_incident_courses=(
        "Root Cause Analysis",
        "Behavior-Based Safety",
        "Safety Observation",
    ),
    skill_gap_courses=("On-the-Job Training", "Mentorship Program", "Skills Assessment"),
    department_recommendations=(
        "Prioritize high-risk area training first",
        "Schedule training based on risk assessment results",
        "Include both classroom and practical components",
        "Assess competency after training completion",
        "Document all training and assessment results",
    ),
)


__all__ = [
    "AnchorStrengthTables",
    "Band",
    "DEFAULT_ANCHOR_STRENGTH_TABLES",
    "DEFAULT_FALL_PROTECTION_TABLES",
    "DEFAULT_HEAT_STRESS_TABLES",
    "DEFAULT_HYDRATION_TABLES",
    "DEFAULT_INCIDENT_RATE_TABLES",
    "DEFAULT_NOISE_EXPOSURE_TABLES",
    "DEFAULT_PPE_SELECTION_TABLES",
    "DEFAULT_TRAINING_NEEDS_TABLES",
    "FallProtectionTables",
    "HazardScoring",
    "HeatRiskBand",
    "HeatStressTables",
    "HydrationTables",
    "INDUSTRIES",
    "IncidentRateTables",
    "IndustryBenchmark",
    "NoiseBand",
    "NoiseExposureTables",
    "PPESelectionTables",
    "TABLE_VERSION",
    "TrainingNeedsTables",
    "UrineColor",
    "WorkRestBand",
    "classify_band",
    "classify_floor",
    "frozen",
    "lookup",
    "resolve_industry",
]
