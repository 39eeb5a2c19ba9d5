"""PPE selection value objects."""

from __future__ import annotations

from enum import Enum


class HazardType(str, Enum):
    """Hazard families considered by PPE selection.

    Declaration order is the canonical evaluation order.
    """

    CHEMICAL = "chemical"
    MECHANICAL = "mechanical"
    THERMAL = "thermal"
    BIOLOGICAL = "biological"
    RADIOLOGICAL = "radiological"
    ELECTRICAL = "electrical"
    FALL = "fall"


class HazardSeverity(str, Enum):
    """Severity of a single hazard."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PPECategory(str, Enum):
    """Body region covered by a PPE item, in selection order."""

    HEAD = "head"
    EYE = "eye"
    HEARING = "hearing"
    RESPIRATORY = "respiratory"
    HAND = "hand"
    FOOT = "foot"
    BODY = "body"
    FALL = "fall"


class ProtectionLevel(str, Enum):
    """Protection rating assigned to a selected PPE item."""

    VERY_HIGH = "Very High"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
