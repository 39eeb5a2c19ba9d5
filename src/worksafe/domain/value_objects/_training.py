"""Training needs value objects."""

from __future__ import annotations

from enum import Enum


class CompanySize(str, Enum):
    """Organization size bracket."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    VERY_LARGE = "very_large"


class Location(str, Enum):
    """Jurisdiction used for minimum annual training hours."""

    USA = "usa"
    EU = "eu"
    CANADA = "canada"
    AUSTRALIA = "australia"
    UK = "uk"
    OTHER = "other"


class ExperienceLevel(str, Enum):
    """Average workforce experience, scaling required hours."""

    NOVICE = "novice"
    INTERMEDIATE = "intermediate"
    EXPERIENCED = "experienced"
    EXPERT = "expert"


class TrainingMethod(str, Enum):
    """Delivery method for training."""

    IN_PERSON = "in-person"
    ONLINE = "online"
    BLENDED = "blended"
    ON_THE_JOB = "on-the-job"


class TrainingFrequency(str, Enum):
    """How often training sessions are run."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    AS_NEEDED = "as-needed"


class Regulation(str, Enum):
    """Regulatory frameworks the organization is subject to."""

    OSHA = "osha"
    ISO45001 = "iso45001"
    RCRA = "rcra"
    DOT = "dot"
    EPA = "epa"


class Department(str, Enum):
    """Department profiled by the needs assessment.

    Departments outside this list get the general course set.
    """

    PRODUCTION = "production"
    MAINTENANCE = "maintenance"
    LABORATORY = "laboratory"
    WAREHOUSE = "warehouse"
    OFFICE = "office"


class DepartmentRisk(str, Enum):
    """Risk level of a department's work."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IncidentHistory(str, Enum):
    """How often a department has had incidents."""

    RARE = "rare"
    OCCASIONAL = "occasional"
    FREQUENT = "frequent"


class SkillGap(str, Enum):
    """Size of the gap between current and required skills."""

    MINIMAL = "minimal"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"
