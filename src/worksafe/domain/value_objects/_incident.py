"""Incident rate value objects."""

from __future__ import annotations

from enum import Enum


class ReportingPeriod(str, Enum):
    """Period the injury and hours figures cover.

    Informational only; the rate formulas normalize by hours worked.
    """

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
