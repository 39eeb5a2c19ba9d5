"""Workplace safety assessment package.

This package provides the calculation engines behind every assessment:
- Fall protection clearance, impact force and OSHA 1926.502 checks
- Anchor capacity estimates against the 2268 kg (5000 lbs) threshold
- WBGT heat stress with work-rest schedule and hydration plan
- Personal daily water requirement
- TRIR/DART/LTIFR incident rates against industry benchmarks
- OSHA 1910.95 noise dose and TWA
- Hazard-driven PPE selection
- Training needs, cost, effectiveness and ROI

Each engine validates its raw inputs, computes derived metrics,
classifies them against versioned threshold tables and returns an
immutable result record with compliance findings and recommendations.
All results are advisory and do not replace a qualified safety
professional's review.

The AssessmentService facade dispatches to the engines by kind.

Example:
    from worksafe.domain.services.assessment import AssessmentService

    service = AssessmentService()
    result = service.calculate("fall_protection", {
        "fall_height": 6, "lanyard_length": 1.8,
    })

    if not result.compliance.is_compliant:
        for violation in result.compliance.violations:
            print(violation)
"""

# Facade
from .assessment_facade import (
    AssessmentEngine,
    AssessmentService,
    UnknownAssessmentError,
)

# Engines
from .anchor_strength import AnchorStrengthEngine, AnchorStrengthResult
from .fall_protection import FallProtectionEngine, FallProtectionResult
from .heat_stress import HeatStressEngine, HeatStressResult
from .incident_rate import IncidentRateEngine, IncidentRateResult
from .noise_exposure import NoiseExposureEngine, NoiseExposureResult
from .personal_hydration import PersonalHydrationEngine, PersonalHydrationResult
from .ppe_selection import PPEItem, PPESelectionEngine, PPESelectionResult
from .training_needs import TrainingNeedsEngine, TrainingNeedsResult

# Shared result types
from .models import (
    AssessmentResult,
    ClassificationResult,
    ComplianceReport,
    ConfigurationGap,
    to_serializable,
)

# Tables
from .tables import TABLE_VERSION

__all__ = [
    # Facade
    "AssessmentEngine",
    "AssessmentService",
    "UnknownAssessmentError",
    # Engines
    "AnchorStrengthEngine",
    "AnchorStrengthResult",
    "FallProtectionEngine",
    "FallProtectionResult",
    "HeatStressEngine",
    "HeatStressResult",
    "IncidentRateEngine",
    "IncidentRateResult",
    "NoiseExposureEngine",
    "NoiseExposureResult",
    "PersonalHydrationEngine",
    "PersonalHydrationResult",
    "PPEItem",
    "PPESelectionEngine",
    "PPESelectionResult",
    "TrainingNeedsEngine",
    "TrainingNeedsResult",
    # Shared result types
    "AssessmentResult",
    "ClassificationResult",
    "ComplianceReport",
    "ConfigurationGap",
    "to_serializable",
    # Tables
    "TABLE_VERSION",
]
