"""Shared result types for the assessment engines.

This module contains the dataclasses every engine uses in its result
record: the banded classification, the compliance report, configuration
gaps recorded when a table lookup falls back to a default, and the
serialization helpers used by formatters and the web layer.

Engine-specific input, metric and result records live beside each engine.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from worksafe.domain.value_objects import AssessmentKind


@dataclass(frozen=True)
class ClassificationResult:
    """Banded classification of a computed value.

    Attributes:
        label: Band label (e.g., "High", "Moderate Risk").
        rank: Ordinal position of the band, 0 being the most favorable.
        rationale: Description of what the band means.
        score: Numeric value that was classified, when the engine has one.
    """

    label: str
    rank: int
    rationale: str = ""
    score: float | None = None

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("label must not be empty")
        if self.rank < 0:
            raise ValueError("rank must be non-negative")

    @property
    def formatted_message(self) -> str:
        """Label with the rationale appended when present."""
        if self.rationale:
            return f"{self.label}: {self.rationale}"
        return self.label


@dataclass(frozen=True)
class ComplianceReport:
    """Regulatory compliance findings.

    ``is_compliant`` is derived from the violations so it can never
    disagree with them.

    Attributes:
        violations: Findings that breach a regulatory limit.
        warnings: Findings that approach a limit or need review.
        compliant: Checks that passed.
    """

    violations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    compliant: tuple[str, ...] = ()

    serialized_properties: ClassVar[tuple[str, ...]] = ("is_compliant",)

    @property
    def is_compliant(self) -> bool:
        """True when no violations were found."""
        return len(self.violations) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def summary(self) -> str:
        """One-line compliance summary."""
        status = "COMPLIANT" if self.is_compliant else "NON-COMPLIANT"
        return (
            f"{status}: {len(self.violations)} violation(s), "
            f"{len(self.warnings)} warning(s), {len(self.compliant)} passed"
        )


@dataclass(frozen=True)
class ConfigurationGap:
    """Record of a table lookup that fell back to a default entry.

    Attributes:
        table: Name of the table that was consulted.
        key: Key that had no entry.
        fallback: Description of the value used instead.
    """

    table: str
    key: str
    fallback: str

    @property
    def formatted_message(self) -> str:
        return f"No '{self.key}' entry in {self.table}; using {self.fallback}"


def to_serializable(value: Any) -> Any:
    """Convert result records into JSON-compatible structures.

    Dataclasses become dictionaries (including their properties listed in
    ``serialized_properties``), enums become their values, mappings keep
    string keys, tuples and sets become lists, and floats pass through.
    """
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = {
            f.name: to_serializable(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
        for name in getattr(value, "serialized_properties", ()):
            data[name] = to_serializable(getattr(value, name))
        return data
    if isinstance(value, Mapping):
        return {
            (k.value if isinstance(k, Enum) else str(k)): to_serializable(v)
            for k, v in value.items()
        }
    if isinstance(value, (frozenset, set)):
        items = [to_serializable(item) for item in value]
        return sorted(items, key=str)
    if isinstance(value, (list, tuple)):
        return [to_serializable(item) for item in value]
    return value


class AssessmentResult:
    """Mixin for engine result records.

    Subclasses are frozen dataclasses that set ``kind``. Every result
    exposes ``recommendations`` and ``gaps``; ``classification`` and
    ``compliance`` are None for engines without them.
    """

    kind: ClassVar[AssessmentKind]
    serialized_properties: ClassVar[tuple[str, ...]] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize the result for JSON output."""
        data: dict[str, Any] = {"assessment": self.kind.value}
        data.update(to_serializable(self))
        return data


__all__ = [
    "AssessmentResult",
    "ClassificationResult",
    "ComplianceReport",
    "ConfigurationGap",
    "to_serializable",
]
