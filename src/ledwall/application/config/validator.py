"""Validation structures and wall layout checks.

Pydantic already enforces field types and ranges. The checks here need
the whole configuration at once: variant references, the cell layout
against the wall grid, and IMAG settings that are legal but suspicious.
"""

from dataclasses import dataclass, field
from typing import Any

from ledwall.application.config.adapter import config_to_variants, config_to_wall
from ledwall.application.config.schema import PlanConfiguration
from ledwall.domain.catalog import DEFAULT_PROCESSORS
from ledwall.domain.entities import CabinetVariant
from ledwall.domain.services.grid import variant_fits_in_wall, variant_footprint
from ledwall.domain.value_objects import GridRect, ImagRole


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "cells[3].variant_id")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: Blocking validation errors
        warnings: Non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_catalog_references(
    config: PlanConfiguration, variants_by_id: dict[str, CabinetVariant]
) -> ValidationResult:
    """Check that processor and variant ids resolve."""
    result = ValidationResult()

    if config.processor_id is not None:
        known = {processor.id for processor in DEFAULT_PROCESSORS}
        if config.processor_id not in known:
            result.add_error(
                path="processor_id",
                message=f"Unknown processor '{config.processor_id}'. Known: {sorted(known)}",
                value=config.processor_id,
            )

    for i, cell in enumerate(config.cells):
        if cell.variant_id is not None and cell.variant_id not in variants_by_id:
            result.add_error(
                path=f"cells[{i}].variant_id",
                message=f"Unknown cabinet variant '{cell.variant_id}'",
                value=cell.variant_id,
            )

    if config.autofill is not None:
        for name in ("primary_variant_id", "secondary_variant_id"):
            variant_id = getattr(config.autofill, name)
            if variant_id is not None and variant_id not in variants_by_id:
                result.add_error(
                    path=f"autofill.{name}",
                    message=f"Unknown cabinet variant '{variant_id}'",
                    value=variant_id,
                )

    return result


def check_layout(
    config: PlanConfiguration, variants_by_id: dict[str, CabinetVariant]
) -> ValidationResult:
    """Check listed cells against the wall grid and each other.

    Out-of-bounds cells and overlapping active/spare cells are errors. A
    footprint that disagrees with its variant's size is a warning.
    """
    result = ValidationResult()
    wall = config_to_wall(config)

    placed: list[tuple[int, GridRect]] = []
    for i, cell in enumerate(config.cells):
        path = f"cells[{i}]"
        variant = variants_by_id.get(cell.variant_id or "")
        footprint = (
            variant_footprint(variant, wall.base_unit_width_mm, wall.base_unit_height_mm)
            if variant is not None
            else None
        )
        unit_width = cell.unit_width or (footprint[0] if footprint else 1)
        unit_height = cell.unit_height or (footprint[1] if footprint else 1)
        rect = GridRect(cell.x, cell.y, unit_width, unit_height)

        if footprint is not None and (unit_width, unit_height) != footprint:
            result.add_warning(
                path=path,
                message=(
                    f"Footprint {unit_width}x{unit_height} does not match "
                    f"{cell.variant_id} ({footprint[0]}x{footprint[1]} units)"
                ),
                suggestion="Remove unit_width/unit_height to use the variant's size",
            )

        if not rect.within(wall.width_units, wall.height_units):
            result.add_error(
                path=path,
                message=(
                    f"Cell at ({cell.x}, {cell.y}) size {unit_width}x{unit_height} "
                    f"is outside the {wall.width_units}x{wall.height_units} wall grid"
                ),
            )
            continue

        if not cell.status.is_physical:
            continue
        for other_index, other in placed:
            if other.overlaps(rect):
                result.add_error(
                    path=path,
                    message=f"Cell overlaps cells[{other_index}]",
                )
        placed.append((i, rect))

    if config.autofill is not None and not config.cells:
        primary = variants_by_id.get(config.autofill.primary_variant_id)
        if primary is not None and not variant_fits_in_wall(primary, wall):
            result.add_error(
                path="autofill.primary_variant_id",
                message=(
                    f"{primary.variant_name} does not fit the "
                    f"{wall.width_units}x{wall.height_units} wall grid"
                ),
                value=primary.id,
            )

    return result


def check_wall_advisories(config: PlanConfiguration) -> ValidationResult:
    """Warn about settings that are legal but probably unintended."""
    result = ValidationResult()
    wall = config.wall

    if wall.imag_role != ImagRole.MIRROR:
        if wall.mirror_port_order or wall.mirror_circuit_mapping:
            result.add_warning(
                path="wall",
                message="Mirror flags are set but the wall is not a mirror wall",
                suggestion="Set imag_role to 'mirror' or clear the mirror flags",
            )
        if wall.imag_master_wall_id:
            result.add_warning(
                path="wall.imag_master_wall_id",
                message="imag_master_wall_id is ignored unless imag_role is 'mirror'",
            )

    if not config.cells and config.autofill is None:
        result.add_warning(
            path="cells",
            message="Wall has no cells and no autofill section; plans will be empty",
            suggestion="List cells or add an autofill section",
        )
    elif config.cells and config.autofill is not None:
        result.add_warning(
            path="autofill",
            message="autofill is ignored because cells are listed",
        )

    return result


def validate_config(config: PlanConfiguration) -> ValidationResult:
    """Perform full validation of a wall plan configuration.

    Args:
        config: A PlanConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    variants_by_id = config_to_variants(config)

    result.merge(check_catalog_references(config, variants_by_id))
    result.merge(check_layout(config, variants_by_id))
    result.merge(check_wall_advisories(config))

    return result
