"""Output formatters and exporters for assessment results."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from worksafe.application.dtos import AssessmentOutput
from worksafe.domain.services.assessment import (
    AnchorStrengthResult,
    AssessmentResult,
    FallProtectionResult,
    HeatStressResult,
    IncidentRateResult,
    NoiseExposureResult,
    PersonalHydrationResult,
    PPESelectionResult,
    TrainingNeedsResult,
)
from worksafe.domain.services.assessment.tables import TABLE_VERSION
from worksafe.domain.value_objects import AssessmentKind

ADVISORY_DISCLAIMER = (
    "Results are advisory estimates based on published regulatory formulas "
    "and do not replace an assessment by a qualified safety professional."
)

Figures = list[tuple[str, str]]


class AssessmentReportFormatter:
    """Formatter for human-readable assessment reports.

    Renders plain text by default, or markdown when ``markdown=True``.

    Example:
        ```python
        formatter = AssessmentReportFormatter(markdown=True)
        output = RunAssessmentCommand().execute("noise_exposure", inputs)
        print(formatter.format(output))
        ```
    """

    def __init__(self, markdown: bool = False) -> None:
        self.markdown = markdown
        self._figure_builders: dict[AssessmentKind, Callable[[Any], Figures]] = {
            AssessmentKind.FALL_PROTECTION: self._fall_figures,
            AssessmentKind.ANCHOR_STRENGTH: self._anchor_figures,
            AssessmentKind.HEAT_STRESS: self._heat_figures,
            AssessmentKind.PERSONAL_HYDRATION: self._hydration_figures,
            AssessmentKind.INCIDENT_RATE: self._incident_figures,
            AssessmentKind.NOISE_EXPOSURE: self._noise_figures,
            AssessmentKind.PPE_SELECTION: self._ppe_figures,
            AssessmentKind.TRAINING_NEEDS: self._training_figures,
        }

    def format(self, output: AssessmentOutput, title: str | None = None) -> str:
        """Generate the report for an assessment output.

        Args:
            output: Command output, either a result or errors.
            title: Report title; defaults to the assessment name.

        Returns:
            Formatted report string.
        """
        heading = title or output.kind.replace("_", " ").title() + " Assessment"
        sections: list[str] = [self._heading(heading, 1)]

        if not output.is_valid or output.result is None:
            sections.append(self._heading("Errors", 2))
            sections.append("\n".join(self._bullet(e) for e in output.errors))
            return "\n\n".join(sections) + "\n"

        result = output.result
        sections.append(self._format_summary(result))

        figures = self._figure_builders[result.kind](result)
        if figures:
            sections.append(self._heading("Key Figures", 2))
            sections.append(self._format_figures(figures))

        compliance = getattr(result, "compliance", None)
        if compliance is not None:
            sections.append(self._heading("Compliance", 2))
            lines = [self._bullet(f"[FAIL] {v}") for v in compliance.violations]
            lines.extend(self._bullet(f"[WARN] {w}") for w in compliance.warnings)
            lines.extend(self._bullet(f"[PASS] {c}") for c in compliance.compliant)
            sections.append("\n".join(lines) if lines else "No compliance checks apply.")

        if result.recommendations:
            sections.append(self._heading("Recommendations", 2))
            sections.append(
                "\n".join(
                    f"{i}. {rec}" for i, rec in enumerate(result.recommendations, 1)
                )
            )

        if result.gaps:
            sections.append(self._heading("Configuration Notes", 2))
            sections.append("\n".join(self._bullet(g.formatted_message) for g in result.gaps))

        sections.append(self._heading("Disclaimer", 2))
        sections.append(f"{ADVISORY_DISCLAIMER} (tables {TABLE_VERSION})")
        return "\n\n".join(sections) + "\n"

    # -------------------------------------------------------------------------
    # Layout helpers
    # -------------------------------------------------------------------------

    def _heading(self, text: str, level: int) -> str:
        if self.markdown:
            return f"{'#' * level} {text}"
        rule = "=" * 60 if level == 1 else "-" * 60
        return f"{rule}\n{text.upper() if level == 1 else text}\n{rule}"

    def _bullet(self, text: str) -> str:
        return f"- {text}" if self.markdown else f"  * {text}"

    def _format_figures(self, figures: Figures) -> str:
        if self.markdown:
            rows = ["| Figure | Value |", "|---|---|"]
            rows.extend(f"| {label} | {value} |" for label, value in figures)
            return "\n".join(rows)
        width = max(len(label) for label, _ in figures)
        return "\n".join(f"  {label:<{width}}  {value}" for label, value in figures)

    def _format_summary(self, result: AssessmentResult) -> str:
        lines: list[str] = []
        classification = getattr(result, "classification", None)
        if classification is not None:
            label = f"**{classification.label}**" if self.markdown else classification.label
            lines.append(f"Rating: {label}")
            if classification.rationale:
                lines.append(classification.rationale)
        compliance = getattr(result, "compliance", None)
        if compliance is not None:
            lines.append(compliance.summary)
        return "\n".join(lines) if lines else "Calculation complete."

    # -------------------------------------------------------------------------
    # Per-assessment figures
    # -------------------------------------------------------------------------

    def _fall_figures(self, result: FallProtectionResult) -> Figures:
        m = result.metrics
        return [
            ("Free fall distance", f"{m.free_fall_distance:.2f} m"),
            ("Total fall distance", f"{m.total_fall_distance:.2f} m"),
            ("Clearance required", f"{m.clearance_required:.2f} m"),
            ("Impact force", f"{m.impact_force:.1f} N"),
            ("Safety factor", f"{m.safety_factor:.2f} ({result.safety_factor_rating.label})"),
            ("Risk score", f"{m.risk_score:.1f}"),
        ]

    def _anchor_figures(self, result: AnchorStrengthResult) -> Figures:
        c = result.capacity
        return [
            ("Anchor type", c.anchor_type.value),
            ("Estimated capacity", f"{c.capacity_kg:,.0f} kg"),
            ("OSHA compliant", "yes" if c.osha_compliant else "no"),
        ]

    def _heat_figures(self, result: HeatStressResult) -> Figures:
        m = result.metrics
        schedule = result.work_rest
        return [
            ("WBGT", f"{m.wbgt:.1f} °C"),
            ("Heat index", f"{m.heat_index:.1f}"),
            ("Sweat rate", f"{m.sweat_rate:.2f} L/hr"),
            ("Work/rest", f"{schedule.work_percentage:.0f}% / {schedule.rest_percentage:.0f}%"),
            ("Work-rest cycle", schedule.cycle),
            ("Hydration", result.hydration.schedule),
            ("Symptoms", result.risk_detail.symptoms),
        ]

    def _hydration_figures(self, result: PersonalHydrationResult) -> Figures:
        return [
            ("Daily requirement", f"{result.daily_liters:.2f} L"),
            ("Per hour of work", f"{result.hourly_liters:.2f} L"),
            ("Before shift", f"{result.pre_shift_liters:.1f} L"),
            ("After shift", f"{result.post_shift_liters:.1f} L"),
        ]

    def _incident_figures(self, result: IncidentRateResult) -> Figures:
        m = result.metrics
        return [
            ("TRIR", f"{m.trir:.2f} (benchmark {result.benchmark.trir}, {result.trir_comparison.level})"),
            ("DART", f"{m.dart:.2f} (benchmark {result.benchmark.dart}, {result.dart_comparison.level})"),
            ("LTIFR", f"{m.ltifr:.2f}"),
            ("Severity rate", f"{m.severity_rate:.1f}%"),
            ("Improvement needed", f"{result.improvement.percentage:.1f}%"),
            ("Estimated cost", f"${result.cost_impact.total:,.0f}"),
        ]

    def _noise_figures(self, result: NoiseExposureResult) -> Figures:
        m = result.metrics
        figures = [
            ("Permissible time", f"{m.permissible_time:.2f} h"),
            ("Daily dose", f"{m.daily_dose:.1f}%"),
            ("Weekly dose", f"{m.weekly_dose:.1f}%"),
            ("TWA", f"{m.twa:.1f} dBA"),
            ("Action required", result.action_required),
        ]
        if result.inputs.hearing_protection:
            figures.append(("Protected level", f"{m.protected_level:.1f} dBA"))
            figures.append(("Protected dose", f"{m.protected_dose:.1f}%"))
        return figures

    def _ppe_figures(self, result: PPESelectionResult) -> Figures:
        figures = [
            (category.value.title(), f"{item.item_type} ({item.standard})")
            for category, item in result.selected.items()
        ]
        figures.append(("Overall protection", f"{result.overall_protection * 100:.1f}%"))
        figures.append(("Comfort", f"{result.comfort.level} ({result.comfort.score:.0f}/100)"))
        figures.append(("Purchase cost", f"${result.cost.purchase:,.2f}"))
        return figures

    def _training_figures(self, result: TrainingNeedsResult) -> Figures:
        figures = [
            ("Mandatory courses", str(len(result.needs.mandatory))),
            ("Recommended courses", str(len(result.needs.recommended))),
            ("Total hours", f"{result.hours.total:.1f} h"),
            ("Annual hours/employee", f"{result.hours.annual_per_employee:.1f} h"),
            ("Total cost", f"${result.costs.total:,.0f}"),
            ("Effectiveness score", f"{result.classification.score:.1f}"),
            ("ROI (3 years)", f"{result.roi.roi:.1f}%"),
            ("Payback", f"{result.roi.payback_years:.1f} years"),
        ]
        department = result.department_assessment
        if department is not None:
            name = getattr(department.department, "value", department.department)
            figures.append((f"Department needs ({name})", ", ".join(department.needs)))
        return figures


class AssessmentJsonExporter:
    """Exports assessment output as JSON."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def to_dict(self, output: AssessmentOutput) -> dict[str, Any]:
        if not output.is_valid or output.result is None:
            data: dict[str, Any] = {"assessment": output.kind, "errors": output.errors}
            if output.field_errors:
                data["field_errors"] = output.field_errors
            return data
        data = output.result.to_dict()
        data["table_version"] = TABLE_VERSION
        return data

    def export(self, output: AssessmentOutput) -> str:
        """Export assessment output as JSON string."""
        return json.dumps(self.to_dict(output), indent=self.indent, ensure_ascii=False)


__all__ = [
    "ADVISORY_DISCLAIMER",
    "AssessmentJsonExporter",
    "AssessmentReportFormatter",
]
