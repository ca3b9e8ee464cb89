"""CLI command implementations for the ledwall application.

This package contains subcommands for the ledwall CLI, including:
- validate: Validate a wall plan file
"""

from ledwall.cli.commands.validate import (
    display_load_error,
    display_validation_result,
    validate_command,
)

__all__ = ["display_load_error", "display_validation_result", "validate_command"]
