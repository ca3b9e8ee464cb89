"""Auto-fill of a wall grid with cabinets.

The populator is a greedy raster packer: it scans the grid row by row and
drops the first cabinet that fits at each free position. It never
backtracks, so a grid can finish with gaps smaller than any configured
variant. That is the expected behavior for quick first-pass layouts.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..catalog import BASE_UNIT_MM
from ..entities import CabinetVariant, WallCell
from ..value_objects import CellStatus
from .grid import variant_footprint
from .identifiers import UuidIdGenerator

if TYPE_CHECKING:
    from ledwall.contracts.protocols import IdGenerator

__all__ = ["LayoutPopulator", "auto_fill_wall"]

logger = logging.getLogger(__name__)

DEFAULT_SECONDARY_EVERY_N_COLUMNS = 4


class LayoutPopulator:
    """Fills a wall grid with a primary cabinet and an optional secondary one.

    The secondary variant is tried on the last column of every period of
    ``max(2, secondary_every_n_columns)`` columns, typically to mix tall
    cabinets into a field of square ones.

    Attributes:
        base_unit_width_mm: Width of one grid unit.
        base_unit_height_mm: Height of one grid unit.
        id_generator: Source of ids for created cells.
    """

    def __init__(
        self,
        base_unit_width_mm: float = BASE_UNIT_MM,
        base_unit_height_mm: float = BASE_UNIT_MM,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self.base_unit_width_mm = base_unit_width_mm
        self.base_unit_height_mm = base_unit_height_mm
        self.id_generator = id_generator or UuidIdGenerator()

    def fill(
        self,
        wall_id: str,
        width_units: int,
        height_units: int,
        primary_variant: CabinetVariant,
        secondary_variant: CabinetVariant | None = None,
        secondary_every_n_columns: int = DEFAULT_SECONDARY_EVERY_N_COLUMNS,
    ) -> list[WallCell]:
        """Generate active cells covering the grid.

        Args:
            wall_id: Wall the cells belong to.
            width_units: Grid width.
            height_units: Grid height.
            primary_variant: Default cabinet.
            secondary_variant: Optional cabinet mixed in on a column period.
            secondary_every_n_columns: Column period for the secondary variant.

        Returns:
            Cells labelled ``C001``, ``C002``... in raster order.
        """
        if width_units < 1 or height_units < 1:
            raise ValueError("Grid dimensions must be at least 1 unit")

        occupied = [[False] * width_units for _ in range(height_units)]
        primary = variant_footprint(
            primary_variant, self.base_unit_width_mm, self.base_unit_height_mm
        )
        secondary = (
            variant_footprint(
                secondary_variant, self.base_unit_width_mm, self.base_unit_height_mm
            )
            if secondary_variant is not None
            else None
        )
        period = max(2, secondary_every_n_columns)

        cells: list[WallCell] = []
        skipped = 0
        for y in range(height_units):
            for x in range(width_units):
                if occupied[y][x]:
                    continue

                variant, (unit_width, unit_height) = primary_variant, primary
                if (
                    secondary_variant is not None
                    and secondary is not None
                    and x % period == period - 1
                    and self._fits_vertically(occupied, x, y, secondary[1])
                ):
                    variant, (unit_width, unit_height) = secondary_variant, secondary

                if x + unit_width > width_units or y + unit_height > height_units:
                    skipped += 1
                    continue
                if not self._is_free(occupied, x, y, unit_width, unit_height):
                    skipped += 1
                    continue

                for yy in range(y, y + unit_height):
                    for xx in range(x, x + unit_width):
                        occupied[yy][xx] = True

                cells.append(
                    WallCell(
                        id=self.id_generator.new_id(),
                        wall_id=wall_id,
                        variant_id=variant.id,
                        label=f"C{len(cells) + 1:03d}",
                        unit_x=x,
                        unit_y=y,
                        unit_width=unit_width,
                        unit_height=unit_height,
                        status=CellStatus.ACTIVE,
                    )
                )

        logger.debug(
            f"Auto-filled {width_units}x{height_units} grid with {len(cells)} "
            f"cabinets ({skipped} positions left unfilled)"
        )
        return cells

    @staticmethod
    def _fits_vertically(
        occupied: list[list[bool]], x: int, y: int, unit_height: int
    ) -> bool:
        if y + unit_height > len(occupied):
            return False
        return not any(occupied[yy][x] for yy in range(y + 1, y + unit_height))

    @staticmethod
    def _is_free(
        occupied: list[list[bool]], x: int, y: int, unit_width: int, unit_height: int
    ) -> bool:
        return not any(
            occupied[yy][xx]
            for yy in range(y, y + unit_height)
            for xx in range(x, x + unit_width)
        )


def auto_fill_wall(
    wall_id: str,
    width_units: int,
    height_units: int,
    primary_variant: CabinetVariant,
    secondary_variant: CabinetVariant | None = None,
    secondary_every_n_columns: int = DEFAULT_SECONDARY_EVERY_N_COLUMNS,
    *,
    base_unit_width_mm: float = BASE_UNIT_MM,
    base_unit_height_mm: float = BASE_UNIT_MM,
    id_generator: IdGenerator | None = None,
) -> list[WallCell]:
    """Fill a wall grid in one call. See ``LayoutPopulator.fill``."""
    populator = LayoutPopulator(base_unit_width_mm, base_unit_height_mm, id_generator)
    return populator.fill(
        wall_id,
        width_units,
        height_units,
        primary_variant,
        secondary_variant,
        secondary_every_n_columns,
    )
