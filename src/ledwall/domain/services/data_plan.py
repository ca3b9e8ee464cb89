"""Data plan generation: row banding and processor port assignment.

The wall is cut into horizontal bands along rows that no cabinet
straddles. Each band becomes one data run on one processor port. Runs
that exceed the per-port pixel budget, or that only exist because the
processor ran out of ports and wrapped around, are flagged and reported
as warnings; the plan is always returned in full.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..conversions import meters_to_feet, round_to
from ..entities import CabinetVariant, ProcessorModel, Wall, WallCell
from ..results import DataPlanResult, DataRun, RowBand
from ..value_objects import DataPathMode, RackLocation, ReceivingCardModel

__all__ = [
    "DataPlanBuilder",
    "DataPlanOptions",
    "build_data_plan",
    "compute_row_bands",
    "compute_safe_boundaries",
    "estimate_home_run_distance_meters",
    "order_cabinets",
    "port_label",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataPlanOptions:
    """Options for data plan generation.

    Attributes:
        data_path_mode: Cabinet visiting order inside a run.
        loom_bundle_size: Ports bundled into one loom.
        port_group_size: Ports per planning group.
        rack_location: Overrides the wall's rack location when set.
    """

    data_path_mode: DataPathMode = DataPathMode.SNAKE_ROWS
    loom_bundle_size: int = 4
    port_group_size: int = 2
    rack_location: RackLocation | None = None

    def __post_init__(self) -> None:
        if self.loom_bundle_size < 1:
            raise ValueError("Loom bundle size must be at least 1")
        if self.port_group_size < 1:
            raise ValueError("Port group size must be at least 1")


def port_label(port_index: int) -> str:
    return f"Port {port_index + 1}"


def estimate_home_run_distance_meters(
    width_meters: float, height_meters: float, rack_location: RackLocation
) -> float:
    """Coarse rack-to-wall cable distance for planning.

    Side-stage racks run along the wall edge and up, upstage-center racks
    sit right behind the wall, and front-of-house runs go the long way
    around. This is an order-of-magnitude estimate, not a routing result.
    """
    if rack_location in (RackLocation.SL, RackLocation.SR):
        return max(width_meters * 0.3, height_meters * 0.75)
    if rack_location == RackLocation.USC:
        return max(height_meters * 0.5, width_meters * 0.25)
    return width_meters + height_meters


def compute_safe_boundaries(cells: list[WallCell], height_units: int) -> list[int]:
    """Rows where a horizontal cut would not split any cabinet.

    Row ``0`` and ``height_units`` are always included.
    """
    return [
        row
        for row in range(height_units + 1)
        if row in (0, height_units)
        or not any(
            cell.unit_y < row < cell.unit_y + cell.unit_height for cell in cells
        )
    ]


def _cell_pixels(cell: WallCell, variants_by_id: dict[str, CabinetVariant]) -> int:
    variant = variants_by_id.get(cell.variant_id or "")
    return variant.pixel_count if variant is not None else 0


def order_cabinets(cells: list[WallCell], mode: DataPathMode) -> list[WallCell]:
    """Sort cabinets into cable visiting order.

    SNAKE_ROWS runs left to right on even rows and right to left on odd
    rows; SNAKE_COLUMNS does the same down and up alternating columns;
    CUSTOM follows label order.
    """
    if mode == DataPathMode.CUSTOM:
        return sorted(cells, key=lambda c: (c.label, c.id))
    if mode == DataPathMode.SNAKE_COLUMNS:
        return sorted(
            cells,
            key=lambda c: (
                c.unit_x,
                c.unit_y if c.unit_x % 2 == 0 else -c.unit_y,
                c.id,
            ),
        )
    return sorted(
        cells,
        key=lambda c: (
            c.unit_y,
            c.unit_x if c.unit_y % 2 == 0 else -c.unit_x,
            c.id,
        ),
    )


def compute_row_bands(
    cells: list[WallCell],
    height_units: int,
    variants_by_id: dict[str, CabinetVariant],
    mode: DataPathMode = DataPathMode.SNAKE_ROWS,
) -> list[RowBand]:
    """Split the wall into non-empty bands between safe boundaries.

    Cabinet ids inside each band follow the data path order.
    """
    boundaries = compute_safe_boundaries(cells, height_units)
    ordered = order_cabinets(cells, mode)

    bands: list[RowBand] = []
    for start, end in zip(boundaries, boundaries[1:]):
        members = [
            cell
            for cell in ordered
            if cell.unit_y < end and cell.unit_y + cell.unit_height > start
        ]
        if not members:
            continue
        bands.append(
            RowBand(
                row_start=start,
                row_end=end,
                cabinet_ids=tuple(cell.id for cell in members),
                pixel_load=sum(_cell_pixels(cell, variants_by_id) for cell in members),
            )
        )
    return bands


class DataPlanBuilder:
    """Builds data plans for LED walls.

    Runs are generated one per row band, in band order, and assigned to
    processor ports round-robin. A run is over limit when its pixel load
    exceeds the per-port budget for the receiving card, or when its index
    is past the processor's port count.
    """

    def build(
        self,
        wall: Wall,
        cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
        receiving_card: ReceivingCardModel,
        options: DataPlanOptions | None = None,
    ) -> DataPlanResult:
        """Generate the data plan.

        Args:
            wall: Wall being planned.
            cells: Cells on the wall. Only active cabinets take part.
            variants_by_id: Catalog of cabinet variants.
            processor: Processor driving the wall.
            receiving_card: Receiving card fitted to the cabinets.
            options: Path mode, loom and port group sizes.

        Returns:
            DataPlanResult with one run per band and any warnings.
        """
        options = options or DataPlanOptions()
        rack_location = options.rack_location or wall.rack_location
        warnings: list[str] = []

        active = [cell for cell in cells if cell.is_active_cabinet]
        cabinets: list[WallCell] = []
        for cell in active:
            if cell.variant_id in variants_by_id:
                cabinets.append(cell)
            else:
                warnings.append(
                    f"{cell.label} references unknown cabinet variant "
                    f"'{cell.variant_id}' and was left out of the data plan."
                )

        bands = compute_row_bands(
            cabinets, wall.height_units, variants_by_id, options.data_path_mode
        )
        budget = processor.max_pixels_per_port(receiving_card)
        home_run_m = round_to(
            estimate_home_run_distance_meters(
                wall.width_meters, wall.height_meters, rack_location
            )
        )
        home_run_ft = round_to(meters_to_feet(home_run_m))
        cable_origin = "ground" if wall.is_ground_stacked else "air"

        runs: list[DataRun] = []
        for index, band in enumerate(bands):
            port_index = index % processor.ethernet_ports
            label = port_label(port_index)
            over_budget = band.pixel_load > budget
            ports_exhausted = index >= processor.ethernet_ports

            if over_budget:
                warnings.append(
                    f"Run {index + 1} ({label}) carries {band.pixel_load:,} pixels, "
                    f"over the {receiving_card.value} per-port budget of {budget:,}."
                )
            if ports_exhausted:
                warnings.append(
                    f"Run {index + 1} exceeds the {processor.ethernet_ports} ports of "
                    f"{processor.model_name} and wraps onto {label}."
                )

            cabinet_count = len(band.cabinet_ids)
            runs.append(
                DataRun(
                    run_number=index + 1,
                    processor_port=label,
                    port_index=port_index,
                    cabinet_ids=band.cabinet_ids,
                    cabinet_count=cabinet_count,
                    jumper_count=max(0, cabinet_count - 1),
                    estimated_home_run_meters=home_run_m,
                    estimated_home_run_feet=home_run_ft,
                    loom_bundle=port_index // options.loom_bundle_size + 1,
                    port_group=port_index // options.port_group_size + 1,
                    cable_origin=cable_origin,
                    pixel_load=band.pixel_load,
                    row_start=band.row_start,
                    row_end=band.row_end,
                    over_limit=over_budget or ports_exhausted,
                )
            )

        if active and not runs:
            warnings.append(
                "Wall has active cabinets but no data runs were generated; "
                "check the cabinet variants in the catalog."
            )

        logger.debug(
            f"Data plan for wall {wall.id}: {len(runs)} runs on "
            f"{processor.id}, {len(warnings)} warnings"
        )
        return DataPlanResult(
            processor_id=processor.id,
            port_count=processor.ethernet_ports,
            per_port_budget=budget,
            receiving_card=receiving_card,
            data_path_mode=options.data_path_mode,
            rack_location=rack_location,
            runs=tuple(runs),
            total_pixels=sum(band.pixel_load for band in bands),
            warnings=tuple(warnings),
        )


def build_data_plan(
    wall: Wall,
    cells: list[WallCell],
    variants_by_id: dict[str, CabinetVariant],
    processor: ProcessorModel,
    receiving_card: ReceivingCardModel,
    options: DataPlanOptions | None = None,
) -> DataPlanResult:
    """Generate a data plan in one call. See ``DataPlanBuilder.build``."""
    return DataPlanBuilder().build(
        wall, cells, variants_by_id, processor, receiving_card, options
    )
