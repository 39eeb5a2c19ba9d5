"""CLI command implementations for the worksafe application.

This package contains subcommands for the worksafe CLI, including:
- validate: Validate an assessment request file
"""

from worksafe.cli.commands.validate import validate_command

__all__ = ["validate_command"]
