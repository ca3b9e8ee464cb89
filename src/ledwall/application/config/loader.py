"""Loading and saving of wall plan configuration files.

File system problems, malformed JSON and schema violations are all
reported as ``ConfigError`` with a category and, for schema violations,
one detail entry per offending JSON path.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ledwall.application.config.schema import PlanConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a wall plan configuration cannot be loaded.

    Attributes:
        message: Human-readable summary.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation.
        path: Configuration file, when loading from disk.
        details: Extra information: line/column for JSON errors, or
            path/message/value entries for validation errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic error location as a JSON path.

    Examples:
        >>> _format_json_path(("wall", "width_units"))
        'wall.width_units'
        >>> _format_json_path(("cells", 3, "x"))
        'cells[3].x'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path = f"{path}.{segment}" if path else str(segment)
    return path


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        value = detail.get("value")
        # Whole-object inputs are too noisy to echo back
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> PlanConfiguration:
    try:
        return PlanConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def load_config(path: Path) -> PlanConfiguration:
    """Load and validate a wall plan configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        A validated PlanConfiguration.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid JSON,
            or does not match the schema. ``error_type`` tells which.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in config file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    config = _validate(data, path)
    logger.debug(f"Loaded config for wall '{config.wall.id}' from {path}")
    return config


def load_config_from_dict(data: dict[str, Any]) -> PlanConfiguration:
    """Validate a wall plan configuration held in memory.

    Raises:
        ConfigError: If the data does not match the schema.
    """
    return _validate(data)


def dump_config(config: PlanConfiguration, path: Path) -> None:
    """Write a configuration back to disk as indented JSON.

    Unset optional fields are left out so the file stays close to what a
    person would write by hand.
    """
    payload = config.model_dump(mode="json", exclude_none=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    logger.debug(f"Wrote config for wall '{config.wall.id}' to {path}")
