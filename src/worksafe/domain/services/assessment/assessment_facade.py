"""Assessment service facade that dispatches to the individual engines.

This module provides the AssessmentService class, the single entry point
the application, CLI and web layers use to run any assessment by kind.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from worksafe.domain.value_objects import AssessmentKind

from ..validation import InputValidator
from .anchor_strength import AnchorStrengthEngine
from .fall_protection import FallProtectionEngine
from .heat_stress import HeatStressEngine
from .incident_rate import IncidentRateEngine
from .models import AssessmentResult
from .noise_exposure import NoiseExposureEngine
from .personal_hydration import PersonalHydrationEngine
from .ppe_selection import PPESelectionEngine
from .training_needs import TrainingNeedsEngine

logger = logging.getLogger(__name__)


class AssessmentEngine(Protocol):
    """Structural type every registered engine satisfies."""

    validator: InputValidator

    def calculate(self, inputs: Mapping[str, Any]) -> AssessmentResult: ...


class UnknownAssessmentError(KeyError):
    """Raised when no engine is registered for the requested kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(kind)

    def __str__(self) -> str:
        available = ", ".join(k.value for k in AssessmentKind)
        return f"Unknown assessment '{self.kind}'. Available: {available}"


class AssessmentService:
    """Runs any registered assessment by kind.

    Engines are stateless, so one service instance can be shared by any
    number of callers.

    Example:
        service = AssessmentService()
        result = service.calculate("noise_exposure", {
            "noise_level": 100, "exposure_duration": 2,
        })
        print(result.classification.label)   # "High Risk"
    """

    def __init__(self, engines: Mapping[AssessmentKind, AssessmentEngine] | None = None) -> None:
        """Initialize the service.

        Args:
            engines: Engine per kind. Defaults to every built-in engine
                with its default tables.
        """
        self._engines: dict[AssessmentKind, AssessmentEngine] = {}
        source = engines if engines is not None else self._default_engines()
        for kind, engine in source.items():
            self.register(kind, engine)

    @staticmethod
    def _default_engines() -> dict[AssessmentKind, AssessmentEngine]:
        return {
            AssessmentKind.FALL_PROTECTION: FallProtectionEngine(),
            AssessmentKind.ANCHOR_STRENGTH: AnchorStrengthEngine(),
            AssessmentKind.HEAT_STRESS: HeatStressEngine(),
            AssessmentKind.PERSONAL_HYDRATION: PersonalHydrationEngine(),
            AssessmentKind.INCIDENT_RATE: IncidentRateEngine(),
            AssessmentKind.NOISE_EXPOSURE: NoiseExposureEngine(),
            AssessmentKind.PPE_SELECTION: PPESelectionEngine(),
            AssessmentKind.TRAINING_NEEDS: TrainingNeedsEngine(),
        }

    def register(self, kind: AssessmentKind, engine: AssessmentEngine) -> None:
        """Register or replace the engine for a kind."""
        self._engines[kind] = engine
        logger.debug(f"Registered {type(engine).__name__} for {kind.value}")

    def resolve_kind(self, kind: AssessmentKind | str) -> AssessmentKind:
        """Normalize a kind name, accepting hyphens for underscores.

        Raises:
            UnknownAssessmentError: If the kind is not registered.
        """
        if isinstance(kind, AssessmentKind):
            resolved = kind
        else:
            try:
                resolved = AssessmentKind(kind.strip().lower().replace("-", "_"))
            except ValueError:
                raise UnknownAssessmentError(kind) from None
        if resolved not in self._engines:
            raise UnknownAssessmentError(resolved.value)
        return resolved

    def engine(self, kind: AssessmentKind | str) -> AssessmentEngine:
        return self._engines[self.resolve_kind(kind)]

    def calculate(
        self, kind: AssessmentKind | str, inputs: Mapping[str, Any]
    ) -> AssessmentResult:
        """Validate inputs and run the engine registered for ``kind``.

        Raises:
            UnknownAssessmentError: If the kind is not registered.
            InputValidationError: If the inputs fail validation.
        """
        resolved = self.resolve_kind(kind)
        logger.debug(f"Running {resolved.value} assessment")
        return self._engines[resolved].calculate(inputs)

    def available_assessments(self) -> list[dict[str, Any]]:
        """Describe every registered engine and its declared inputs."""
        catalog: list[dict[str, Any]] = []
        for kind, engine in self._engines.items():
            fields = []
            for spec in engine.validator.fields:
                entry: dict[str, Any] = {
                    "name": spec.name,
                    "kind": spec.kind.value,
                    "required": spec.required,
                }
                if spec.range_text:
                    entry["range"] = spec.range_text
                if spec.choices is not None:
                    entry["choices"] = [member.value for member in spec.choices]
                if not spec.required and spec.default is not None:
                    default = spec.default
                    entry["default"] = getattr(default, "value", default)
                fields.append(entry)
            catalog.append({"assessment": kind.value, "fields": fields})
        return catalog


__all__ = [
    "AssessmentEngine",
    "AssessmentService",
    "UnknownAssessmentError",
]
