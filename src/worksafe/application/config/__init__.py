"""Request file schema and loading for assessments.

Public API:
    - AssessmentConfiguration: Root request model
    - OutputConfig: Output format configuration model
    - SUPPORTED_VERSIONS: Accepted schema versions
    - load_config: Load a request from a JSON file
    - parse_request: Validate already-decoded request data
    - check_inputs: Check request inputs against the assessment engine
    - ConfigError: Exception for request file errors

Example:
    >>> from pathlib import Path
    >>> from worksafe.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("noise.json"))
    ...     print(config.assessment.value)
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from worksafe.application.config.loader import (
    ConfigError,
    check_inputs,
    load_config,
    parse_request,
)
from worksafe.application.config.schema import (
    SUPPORTED_VERSIONS,
    AssessmentConfiguration,
    OutputConfig,
)

__all__ = [
    "AssessmentConfiguration",
    "ConfigError",
    "OutputConfig",
    "SUPPORTED_VERSIONS",
    "check_inputs",
    "load_config",
    "parse_request",
]
