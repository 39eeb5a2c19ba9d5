"""Unit tests for the incident rate engine."""

from __future__ import annotations

import pytest

from worksafe.domain.services.assessment import IncidentRateEngine
from worksafe.domain.services.validation import InputValidationError
from worksafe.domain.value_objects import Industry


@pytest.fixture
def engine() -> IncidentRateEngine:
    return IncidentRateEngine()


@pytest.fixture
def construction_inputs() -> dict[str, object]:
    return {
        "recordable_injuries": 5,
        "lost_time_injuries": 2,
        "total_hours_worked": 400_000,
        "total_employees": 200,
        "industry": "construction",
    }


class TestRates:
    """Tests for TRIR, DART and LTIFR."""

    def test_rates(self, engine: IncidentRateEngine, construction_inputs: dict) -> None:
        metrics = engine.calculate(construction_inputs).metrics

        assert metrics.trir == pytest.approx(2.5)
        assert metrics.dart == pytest.approx(1.0)
        assert metrics.ltifr == pytest.approx(5.0)
        assert metrics.severity_rate == pytest.approx(40.0)
        assert metrics.frequency_rate == pytest.approx(12.5)
        assert metrics.avg_hours_per_employee == pytest.approx(2000.0)

    def test_zero_recordables(self, engine: IncidentRateEngine) -> None:
        result = engine.calculate({"total_hours_worked": 100_000})

        assert result.metrics.trir == 0.0
        assert result.metrics.severity_rate == 0.0
        assert result.improvement.percentage == 0.0

    def test_lost_time_cannot_exceed_recordable(self, engine: IncidentRateEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate(
                {
                    "recordable_injuries": 1,
                    "lost_time_injuries": 2,
                    "total_hours_worked": 100_000,
                }
            )
        assert exc_info.value.field == "lost_time_injuries"
        assert exc_info.value.message == "Lost time injuries cannot exceed recordable injuries."

    def test_hours_required(self, engine: IncidentRateEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate({"recordable_injuries": 1})
        assert exc_info.value.field == "total_hours_worked"

    def test_more_injuries_never_lower_trir(self, engine: IncidentRateEngine) -> None:
        rates = [
            engine.calculate(
                {"recordable_injuries": n, "total_hours_worked": 200_000}
            ).metrics.trir
            for n in range(5)
        ]
        assert rates == sorted(rates)


class TestBenchmarks:
    """Tests for benchmark comparison and the performance rating."""

    def test_comparison_levels(
        self, engine: IncidentRateEngine, construction_inputs: dict
    ) -> None:
        result = engine.calculate(construction_inputs)

        assert result.benchmark.trir == 3.0
        assert result.trir_comparison.level == "Average"
        assert result.trir_comparison.difference == pytest.approx(-0.5)
        assert result.dart_comparison.level == "Excellent"

    def test_comparison_edge_is_inclusive(self, engine: IncidentRateEngine) -> None:
        assert engine.compare(1.5, 3.0).level == "Excellent"
        assert engine.compare(3.5, 3.0).level == "Below Average"
        assert engine.compare(3.7, 3.0).level == "Poor"

    def test_performance_rating(
        self, engine: IncidentRateEngine, construction_inputs: dict
    ) -> None:
        classification = engine.calculate(construction_inputs).classification

        assert classification.score == 70.0
        assert classification.label == "Good"

    def test_world_class_without_injuries(self, engine: IncidentRateEngine) -> None:
        result = engine.calculate({"total_hours_worked": 500_000, "industry": "mining"})

        assert result.classification.score == 100.0
        assert result.classification.label == "World Class"
        assert "Maintain current safety programs" in result.recommendations

    def test_needs_improvement(self, engine: IncidentRateEngine) -> None:
        result = engine.calculate(
            {
                "recordable_injuries": 20,
                "lost_time_injuries": 10,
                "total_hours_worked": 200_000,
                "industry": "oil_gas",
            }
        )

        assert result.classification.score == 30.0
        assert result.classification.label == "Needs Improvement"
        assert len(result.compliance.warnings) == 2
        assert result.compliance.is_compliant
        assert "Develop comprehensive safety improvement plan" in result.recommendations
        assert "Focus on ergonomic improvements" in result.recommendations

    def test_every_industry_has_benchmark(self, engine: IncidentRateEngine) -> None:
        for industry in ("healthcare", "retail", "education", "agriculture", "general"):
            result = engine.calculate(
                {"total_hours_worked": 200_000, "industry": industry}
            )
            assert result.gaps == ()

    def test_unlisted_industry_falls_back_to_general(self, engine: IncidentRateEngine) -> None:
        result = engine.calculate(
            {"recordable_injuries": 2, "total_hours_worked": 200_000, "industry": "utilities"}
        )

        assert result.inputs.industry == Industry.GENERAL
        assert result.benchmark == engine.tables.benchmarks[Industry.GENERAL]
        assert [(gap.table, gap.key, gap.fallback) for gap in result.gaps] == [
            ("industries", "utilities", "general")
        ]

    def test_hyphenated_industry_name(self, engine: IncidentRateEngine) -> None:
        result = engine.calculate({"total_hours_worked": 200_000, "industry": " Oil-Gas "})

        assert result.inputs.industry == Industry.OIL_GAS
        assert result.gaps == ()

    def test_non_text_industry_rejected(self, engine: IncidentRateEngine) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            engine.calculate({"total_hours_worked": 200_000, "industry": 7})
        assert exc_info.value.field == "industry"
        assert exc_info.value.constraint == "type"


class TestImprovementAndCost:
    """Tests for the improvement target and cost estimate."""

    def test_improvement_target(self, engine: IncidentRateEngine) -> None:
        improvement = engine.improvement_needed(4.0, 2.5)

        assert improvement.reduction == pytest.approx(1.5)
        assert improvement.percentage == pytest.approx(37.5)

    def test_cost_impact(self, engine: IncidentRateEngine, construction_inputs: dict) -> None:
        cost = engine.calculate(construction_inputs).cost_impact

        assert cost.direct == pytest.approx(340_000.0)
        assert cost.indirect == pytest.approx(1_020_000.0)
        assert cost.total == pytest.approx(1_360_000.0)
        assert cost.per_injury == pytest.approx(272_000.0)

    def test_cost_per_injury_without_injuries(self, engine: IncidentRateEngine) -> None:
        assert engine.cost_impact(0, 0).per_injury == 0.0

    def test_closing_recommendations(
        self, engine: IncidentRateEngine, construction_inputs: dict
    ) -> None:
        recs = engine.calculate(construction_inputs).recommendations

        assert recs[0] == "Conduct incident investigation for all recordable injuries"
        assert recs[-1] == "Participate in industry safety groups and forums"
