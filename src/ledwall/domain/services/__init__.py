"""Domain services for LED wall planning.

This package provides the planning engine:
- Grid placement, removal and layout validation
- Raster auto-fill of a wall grid
- Data plans (row bands, processor ports, cable runs)
- Power plans (circuit bucketing, derating)
- Master/mirror remapping for IMAG walls
- Report totals
"""

from .data_plan import (
    DataPlanBuilder,
    DataPlanOptions,
    build_data_plan,
    compute_row_bands,
    compute_safe_boundaries,
    estimate_home_run_distance_meters,
    order_cabinets,
    port_label,
)
from .grid import (
    GridPlacementService,
    WallGrid,
    derive_grid,
    next_cell_label,
    place_variant_on_grid,
    remove_cell_at_coordinate,
    validate_layout,
    variant_fits_in_wall,
    variant_footprint,
    wall_area_sq_m,
)
from .identifiers import SequentialIdGenerator, UuidIdGenerator
from .layout_populator import LayoutPopulator, auto_fill_wall
from .mirroring import (
    MirrorMismatchError,
    MirrorTransform,
    build_mirrored_data_plan,
    build_mirrored_power_plan,
    mirror_circuit_index,
    mirror_port_index,
)
from .power_plan import (
    DERATE_FACTOR,
    POWER_SOURCE_SPECS,
    PowerPlanBuilder,
    PowerPlanOptions,
    PowerSourceSpec,
    build_power_plan,
    circuit_label,
    clamp_thresholds,
)
from .totals import TotalsAggregator, compute_wall_totals

__all__ = [
    # Grid
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
    # Identifiers
    "SequentialIdGenerator",
    "UuidIdGenerator",
    # Auto-fill
    "LayoutPopulator",
    "auto_fill_wall",
    # Data plan
    "DataPlanBuilder",
    "DataPlanOptions",
    "build_data_plan",
    "compute_row_bands",
    "compute_safe_boundaries",
    "estimate_home_run_distance_meters",
    "order_cabinets",
    "port_label",
    # Power plan
    "DERATE_FACTOR",
    "POWER_SOURCE_SPECS",
    "PowerPlanBuilder",
    "PowerPlanOptions",
    "PowerSourceSpec",
    "build_power_plan",
    "circuit_label",
    "clamp_thresholds",
    # Mirroring
    "MirrorMismatchError",
    "MirrorTransform",
    "build_mirrored_data_plan",
    "build_mirrored_power_plan",
    "mirror_circuit_index",
    "mirror_port_index",
    # Totals
    "TotalsAggregator",
    "compute_wall_totals",
]
