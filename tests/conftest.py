"""Pytest configuration and shared fixtures for assessment tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from worksafe.domain.services import AssessmentService

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that exercise the CLI or HTTP layers end-to-end"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def service() -> AssessmentService:
    """Create an AssessmentService with the default engines and tables."""
    return AssessmentService()


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def fall_inputs() -> dict[str, object]:
    """Fall arrest at 6 m with a 1.8 m lanyard and default equipment."""
    return {"fall_height": 6, "lanyard_length": 1.8}


@pytest.fixture
def noise_inputs() -> dict[str, object]:
    """100 dBA for two hours, unprotected."""
    return {"noise_level": 100, "exposure_duration": 2}
