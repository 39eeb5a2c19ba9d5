"""Value objects for the workplace safety domain.

This module provides the enumerated tags used throughout the assessment
engines. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Shared
from ._assessment import AssessmentKind, Industry

# Fall protection
from ._fall import AnchorMaterial, AnchorType, FallSystemType, SurfaceType

# Heat stress
from ._heat import (
    Acclimatization,
    ActivityLevel,
    ClothingType,
    SolarLoad,
    WorkIntensity,
)

# Incident rates
from ._incident import ReportingPeriod

# PPE
from ._ppe import HazardSeverity, HazardType, PPECategory, ProtectionLevel

# Training
from ._training import (
    CompanySize,
    Department,
    DepartmentRisk,
    ExperienceLevel,
    IncidentHistory,
    Location,
    Regulation,
    SkillGap,
    TrainingFrequency,
    TrainingMethod,
)

__all__ = [
    "Acclimatization",
    "ActivityLevel",
    "AnchorMaterial",
    "AnchorType",
    "AssessmentKind",
    "ClothingType",
    "CompanySize",
    "Department",
    "DepartmentRisk",
    "ExperienceLevel",
    "FallSystemType",
    "HazardSeverity",
    "HazardType",
    "IncidentHistory",
    "Industry",
    "Location",
    "PPECategory",
    "ProtectionLevel",
    "Regulation",
    "ReportingPeriod",
    "SkillGap",
    "SolarLoad",
    "SurfaceType",
    "TrainingFrequency",
    "TrainingMethod",
    "WorkIntensity",
]
