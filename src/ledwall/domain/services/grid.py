"""Grid placement services for LED wall layouts.

This module places cabinets on a wall's unit grid, rejecting placements
that leave the grid or overlap physical cabinets, and provides the
companion operations used while editing a layout:
- footprint calculation from a variant's physical size
- point-based cell removal
- monotonic cell labelling
- whole-layout validation and grid derivation from physical sizes
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..catalog import BASE_UNIT_MM
from ..conversions import feet_to_meters
from ..entities import CabinetVariant, Wall, WallCell
from ..results import PlacementResult
from ..value_objects import CellStatus, GridRect, PlacementFailure
from .identifiers import UuidIdGenerator

if TYPE_CHECKING:
    from ledwall.contracts.protocols import IdGenerator

__all__ = [
    "GridPlacementService",
    "WallGrid",
    "derive_grid",
    "next_cell_label",
    "place_variant_on_grid",
    "remove_cell_at_coordinate",
    "validate_layout",
    "variant_fits_in_wall",
    "variant_footprint",
    "wall_area_sq_m",
]

logger = logging.getLogger(__name__)

_LABEL_PATTERN = re.compile(r"C(\d+)")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def variant_footprint(
    variant: CabinetVariant,
    base_unit_width_mm: float = BASE_UNIT_MM,
    base_unit_height_mm: float = BASE_UNIT_MM,
) -> tuple[int, int]:
    """Footprint of a variant in grid units for a given base unit.

    Physical size is divided by the base unit and rounded, never below 1.

    Args:
        variant: Cabinet variant to measure.
        base_unit_width_mm: Width of one grid unit.
        base_unit_height_mm: Height of one grid unit.

    Returns:
        Tuple of (unit_width, unit_height).
    """
    unit_width = max(1, _round_half_up(variant.width_mm / base_unit_width_mm))
    unit_height = max(1, _round_half_up(variant.height_mm / base_unit_height_mm))
    return unit_width, unit_height


def variant_fits_in_wall(variant: CabinetVariant, wall: Wall) -> bool:
    """Check whether a variant's footprint fits the wall grid at all."""
    unit_width, unit_height = variant_footprint(
        variant, wall.base_unit_width_mm, wall.base_unit_height_mm
    )
    return unit_width <= wall.width_units and unit_height <= wall.height_units


def next_cell_label(cells: list[WallCell]) -> str:
    """Next sequential label after the highest ``C<n>`` label present.

    Labels that do not match ``C<digits>`` exactly are ignored.
    """
    highest = 0
    for cell in cells:
        match = _LABEL_PATTERN.fullmatch(cell.label)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"C{highest + 1:03d}"


def _find_physical_overlap(
    rect: GridRect, cells: list[WallCell]
) -> WallCell | None:
    for cell in cells:
        if cell.is_physical and cell.rect.overlaps(rect):
            return cell
    return None


def place_variant_on_grid(
    wall: Wall,
    cells: list[WallCell],
    variant: CabinetVariant,
    x: int,
    y: int,
    status: CellStatus = CellStatus.ACTIVE,
    *,
    id_generator: IdGenerator | None = None,
    label: str | None = None,
) -> PlacementResult:
    """Place a cabinet variant with its top-left corner at (x, y).

    The candidate is checked against the wall bounds and against every
    existing active or spare cell. Void and cutout markers are ignored by
    the overlap check. The input list is never modified.

    Args:
        wall: Wall whose grid receives the cabinet.
        cells: Cells already on the wall.
        variant: Variant to place.
        x: Left column.
        y: Top row.
        status: Status tag for the new cell.
        id_generator: Source of the new cell id. Defaults to random UUIDs.
        label: Explicit label; defaults to the next ``C<n>`` label.

    Returns:
        PlacementResult carrying the new cell list, or the failure reason.
    """
    unit_width, unit_height = variant_footprint(
        variant, wall.base_unit_width_mm, wall.base_unit_height_mm
    )
    rect = GridRect(x, y, unit_width, unit_height)

    if not rect.within(wall.width_units, wall.height_units):
        logger.debug(
            f"Rejected {variant.id} at ({x}, {y}): outside "
            f"{wall.width_units}x{wall.height_units} grid"
        )
        return PlacementResult.fail(
            cells,
            PlacementFailure.OUT_OF_BOUNDS,
            f"{variant.variant_name} at ({x}, {y}) does not fit inside the "
            f"{wall.width_units}x{wall.height_units} wall grid",
        )

    blocking = _find_physical_overlap(rect, cells)
    if blocking is not None:
        logger.debug(f"Rejected {variant.id} at ({x}, {y}): overlaps {blocking.label}")
        return PlacementResult.fail(
            cells,
            PlacementFailure.OVERLAP,
            f"{variant.variant_name} at ({x}, {y}) overlaps {blocking.label}",
        )

    generator = id_generator or UuidIdGenerator()
    cell = WallCell(
        id=generator.new_id(),
        wall_id=wall.id,
        variant_id=variant.id,
        label=label or next_cell_label(cells),
        unit_x=x,
        unit_y=y,
        unit_width=unit_width,
        unit_height=unit_height,
        status=status,
    )
    return PlacementResult.success([*cells, cell], cell)


def remove_cell_at_coordinate(
    cells: list[WallCell] | tuple[WallCell, ...], x: int, y: int
) -> list[WallCell]:
    """Remove the cell whose footprint contains the grid point (x, y).

    When several cells cover the point (a cabinet stacked over a marker),
    the most recently added one is removed. Returns a copy of the input
    when no cell contains the point.
    """
    for index in range(len(cells) - 1, -1, -1):
        if cells[index].rect.contains_point(x, y):
            return [*cells[:index], *cells[index + 1 :]]
    return list(cells)


def validate_layout(wall: Wall, cells: list[WallCell]) -> list[str]:
    """Check a complete layout for bounds and overlap violations.

    Args:
        wall: Wall the cells belong to.
        cells: Cells to check.

    Returns:
        List of error messages; empty when the layout is valid.
    """
    errors: list[str] = []
    placed: list[WallCell] = []
    for cell in cells:
        if not cell.rect.within(wall.width_units, wall.height_units):
            errors.append(f"{cell.label} is out of wall bounds")
            continue
        if not cell.is_physical:
            continue
        for other in placed:
            if other.rect.overlaps(cell.rect):
                errors.append(f"{cell.label} overlaps with {other.label}")
        placed.append(cell)
    return errors


@dataclass(frozen=True)
class WallGrid:
    """Grid size derived from a physical wall size, snapped to whole units."""

    width_units: int
    height_units: int
    snapped_width_meters: float
    snapped_height_meters: float


def derive_grid(
    *,
    width_meters: float | None = None,
    height_meters: float | None = None,
    width_feet: float | None = None,
    height_feet: float | None = None,
    base_unit_width_mm: float = BASE_UNIT_MM,
    base_unit_height_mm: float = BASE_UNIT_MM,
) -> WallGrid:
    """Derive a unit grid from a requested physical size.

    Each axis accepts meters or feet; meters win when both are given.
    Sizes round up to whole units so the wall is never smaller than asked.

    Raises:
        ValueError: If an axis has no usable size.
    """
    def _axis(meters: float | None, feet: float | None, axis: str) -> float:
        if meters is not None:
            return meters
        if feet is not None:
            return feet_to_meters(feet)
        raise ValueError(f"Wall {axis} must be given in meters or feet")

    width_m = _axis(width_meters, width_feet, "width")
    height_m = _axis(height_meters, height_feet, "height")
    if width_m <= 0 or height_m <= 0:
        raise ValueError("Wall size must be positive")

    width_units = max(1, math.ceil(width_m * 1000 / base_unit_width_mm))
    height_units = max(1, math.ceil(height_m * 1000 / base_unit_height_mm))
    return WallGrid(
        width_units=width_units,
        height_units=height_units,
        snapped_width_meters=width_units * base_unit_width_mm / 1000,
        snapped_height_meters=height_units * base_unit_height_mm / 1000,
    )


def wall_area_sq_m(wall: Wall) -> float:
    return wall.width_meters * wall.height_meters


class GridPlacementService:
    """Edits wall layouts with a fixed id generator.

    Attributes:
        id_generator: Source of ids for placed cells.
    """

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self.id_generator = id_generator or UuidIdGenerator()

    def place(
        self,
        wall: Wall,
        cells: list[WallCell],
        variant: CabinetVariant,
        x: int,
        y: int,
        status: CellStatus = CellStatus.ACTIVE,
    ) -> PlacementResult:
        return place_variant_on_grid(
            wall, cells, variant, x, y, status, id_generator=self.id_generator
        )

    def remove_at(self, cells: list[WallCell], x: int, y: int) -> list[WallCell]:
        return remove_cell_at_coordinate(cells, x, y)

    def replace_at(
        self,
        wall: Wall,
        cells: list[WallCell],
        variant: CabinetVariant,
        x: int,
        y: int,
        status: CellStatus = CellStatus.ACTIVE,
    ) -> PlacementResult:
        """Clear whatever sits at (x, y), then place the variant there.

        On failure the original cell list is returned untouched.
        """
        cleared = remove_cell_at_coordinate(cells, x, y)
        result = self.place(wall, cleared, variant, x, y, status)
        if not result.ok:
            return PlacementResult.fail(cells, result.failure, result.message or "")
        return result

    def validate(self, wall: Wall, cells: list[WallCell]) -> list[str]:
        return validate_layout(wall, cells)
