"""Configuration schema and loading system for wall plans.

This package provides JSON-based configuration loading and validation
for LED wall plans: Pydantic models for the file schema, a loader with
categorized errors, an adapter to domain objects, and layout checks.

Public API:
    - PlanConfiguration: Root configuration model
    - load_config / load_config_from_dict / dump_config
    - ConfigError: Exception for configuration errors
    - validate_config / ValidationResult
    - config_to_*: Conversion to domain objects and options

Example:
    >>> from pathlib import Path
    >>> from ledwall.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("main-wall.json"))
    ...     print(f"Wall: {config.wall.id}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from ledwall.application.config.adapter import (
    cells_to_config,
    config_to_cells,
    config_to_data_options,
    config_to_power_options,
    config_to_processor,
    config_to_variants,
    config_to_wall,
)
from ledwall.application.config.loader import (
    ConfigError,
    dump_config,
    load_config,
    load_config_from_dict,
)
from ledwall.application.config.schema import (
    SUPPORTED_VERSIONS,
    AutofillConfig,
    CellConfig,
    DataConfig,
    PlanConfiguration,
    PowerConfig,
    PowerProfileConfig,
    ProcessorConfig,
    RecommendedPerCircuitConfig,
    VariantConfig,
    WallConfig,
)
from ledwall.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "AutofillConfig",
    "CellConfig",
    "DataConfig",
    "PlanConfiguration",
    "PowerConfig",
    "PowerProfileConfig",
    "ProcessorConfig",
    "RecommendedPerCircuitConfig",
    "VariantConfig",
    "WallConfig",
    # Loader
    "ConfigError",
    "dump_config",
    "load_config",
    "load_config_from_dict",
    # Adapter
    "cells_to_config",
    "config_to_cells",
    "config_to_data_options",
    "config_to_power_options",
    "config_to_processor",
    "config_to_variants",
    "config_to_wall",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
]
