"""Assessment-wide value objects shared by every engine."""

from __future__ import annotations

from enum import Enum


class AssessmentKind(str, Enum):
    """Identifier for each calculation offered by the assessment service.

    Attributes:
        FALL_PROTECTION: Fall clearance, impact force and OSHA 1926.502 checks.
        ANCHOR_STRENGTH: Anchor capacity estimate against the 2268 kg threshold.
        HEAT_STRESS: WBGT, heat index, work-rest schedule and hydration plan.
        PERSONAL_HYDRATION: Daily water intake for an individual worker.
        INCIDENT_RATE: TRIR/DART/LTIFR and benchmark comparison.
        NOISE_EXPOSURE: OSHA noise dose and time-weighted average.
        PPE_SELECTION: Hazard-driven PPE recommendation.
        TRAINING_NEEDS: Training hours, cost, effectiveness and ROI.
    """

    FALL_PROTECTION = "fall_protection"
    ANCHOR_STRENGTH = "anchor_strength"
    HEAT_STRESS = "heat_stress"
    PERSONAL_HYDRATION = "personal_hydration"
    INCIDENT_RATE = "incident_rate"
    NOISE_EXPOSURE = "noise_exposure"
    PPE_SELECTION = "ppe_selection"
    TRAINING_NEEDS = "training_needs"


class Industry(str, Enum):
    """Industry sector used for benchmark and requirement lookups.

    Not every table has an entry for every sector; lookups that miss fall
    back to the table's ``general`` entry and record a configuration gap.
    """

    CONSTRUCTION = "construction"
    MANUFACTURING = "manufacturing"
    TRANSPORTATION = "transportation"
    HEALTHCARE = "healthcare"
    OIL_GAS = "oil_gas"
    MINING = "mining"
    AGRICULTURE = "agriculture"
    RETAIL = "retail"
    EDUCATION = "education"
    GENERAL = "general"
