"""Summary totals for wall reports."""

from __future__ import annotations

import logging

from ..conversions import feet_inches_label, kg_to_lbs, meters_to_feet, round_to
from ..entities import CabinetVariant, Wall, WallCell
from ..results import VariantRollup, WallTotals
from ..value_objects import CellStatus, PixelDimensions, PowerProfile

__all__ = ["TotalsAggregator", "compute_wall_totals"]

logger = logging.getLogger(__name__)

# Pitches closer than this are treated as the same pitch
_PITCH_DECIMALS = 3


class TotalsAggregator:
    """Rolls up counts, weight, pixels and power for a wall.

    Only active cabinets with a known variant are counted. The wall
    resolution is the physical wall size divided by the plain average of
    the distinct pixel pitches present, so it is approximate whenever
    pitches are mixed; a warning is attached in that case.
    """

    def aggregate(
        self,
        wall: Wall,
        cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
    ) -> WallTotals:
        """Compute the totals for a wall.

        Args:
            wall: Wall being reported on.
            cells: Cells on the wall.
            variants_by_id: Catalog of cabinet variants.

        Returns:
            WallTotals for the active cabinets.
        """
        counts: dict[str, int] = {}
        for cell in cells:
            if cell.is_active_cabinet and cell.variant_id in variants_by_id:
                counts[cell.variant_id] = counts.get(cell.variant_id, 0) + 1

        total_power = PowerProfile.zero()
        total_weight_kg = 0.0
        total_pixels = 0
        pitches: set[float] = set()
        breakdown: list[VariantRollup] = []
        for variant_id in sorted(counts):
            variant = variants_by_id[variant_id]
            count = counts[variant_id]
            power = PowerProfile.zero()
            for _ in range(count):
                power = power + variant.power
            weight_kg = variant.weight_kg * count
            pixels = variant.pixel_count * count

            total_power = total_power + power
            total_weight_kg += weight_kg
            total_pixels += pixels
            if variant.pixel_pitch_mm is not None:
                pitches.add(round(variant.pixel_pitch_mm, _PITCH_DECIMALS))

            breakdown.append(
                VariantRollup(
                    variant_id=variant.id,
                    variant_name=variant.variant_name,
                    count=count,
                    weight_kg=round_to(weight_kg),
                    weight_lbs=round_to(kg_to_lbs(weight_kg)),
                    pixels=pixels,
                    power=power,
                )
            )

        resolution = PixelDimensions(0, 0)
        if pitches:
            mean_pitch = sum(pitches) / len(pitches)
            resolution = PixelDimensions(
                width=round(wall.width_meters * 1000 / mean_pitch),
                height=round(wall.height_meters * 1000 / mean_pitch),
            )

        mixed_pitch_warning = None
        if len(pitches) > 1:
            listed = ", ".join(f"{p:g}mm" for p in sorted(pitches))
            mixed_pitch_warning = (
                f"Wall mixes {len(pitches)} pixel pitches ({listed}); "
                f"the wall resolution is an estimate."
            )

        spare_count = sum(
            1
            for cell in cells
            if cell.status == CellStatus.SPARE and cell.variant_id is not None
        )

        logger.debug(
            f"Totals for wall {wall.id}: {sum(counts.values())} cabinets, "
            f"{len(pitches)} distinct pitches"
        )
        return WallTotals(
            width_meters=round_to(wall.width_meters),
            height_meters=round_to(wall.height_meters),
            width_feet=round_to(meters_to_feet(wall.width_meters)),
            height_feet=round_to(meters_to_feet(wall.height_meters)),
            width_feet_inches_label=feet_inches_label(wall.width_meters),
            height_feet_inches_label=feet_inches_label(wall.height_meters),
            total_cabinets=sum(counts.values()),
            spare_cabinets=spare_count,
            total_weight_kg=round_to(total_weight_kg),
            total_weight_lbs=round_to(kg_to_lbs(total_weight_kg)),
            wall_resolution=resolution,
            total_pixels=total_pixels,
            total_power=total_power,
            total_current=total_power.divided_by(int(wall.voltage_mode)),
            variant_breakdown=tuple(breakdown),
            mixed_pitch_warning=mixed_pitch_warning,
        )


def compute_wall_totals(
    wall: Wall,
    cells: list[WallCell],
    variants_by_id: dict[str, CabinetVariant],
) -> WallTotals:
    return TotalsAggregator().aggregate(wall, cells, variants_by_id)
