"""Heat stress and hydration value objects."""

from __future__ import annotations

from enum import Enum


class SolarLoad(str, Enum):
    """Solar radiation level used to estimate globe temperature."""

    NONE = "none"
    MEDIUM = "medium"
    HIGH = "high"


class WorkIntensity(str, Enum):
    """Metabolic workload of the task."""

    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    VERY_HEAVY = "very-heavy"


class ClothingType(str, Enum):
    """Clothing ensemble worn, scaling sweat loss."""

    NONE = "none"
    COVERALLS = "coveralls"
    IMPERMEABLE = "impermeable"
    DOUBLE_LAYER = "double-layer"
    CHEMICAL_PROTECTIVE = "chemical-protective"


class Acclimatization(str, Enum):
    """Worker heat acclimatization status."""

    ACCLIMATIZED = "acclimatized"
    PARTIAL = "partial"
    UNACCLIMATIZED = "unacclimatized"


class ActivityLevel(str, Enum):
    """Physical activity level for personal hydration needs."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    VERY_HEAVY = "very-heavy"
