"""Adapter from PlanConfiguration to domain objects.

These functions turn a validated configuration into the Wall, catalog,
cells and options consumed by the planning services. Anything the file
leaves out (built-in catalog, cell ids, labels, footprints) is filled in
here so the domain layer always sees complete objects.
"""

from dataclasses import replace

from ledwall.application.config.schema import (
    CellConfig,
    PlanConfiguration,
    VariantConfig,
)
from ledwall.contracts.protocols import IdGenerator
from ledwall.domain.catalog import default_variants_by_id, get_default_processor
from ledwall.domain.entities import CabinetVariant, ProcessorModel, Wall, WallCell
from ledwall.domain.services.data_plan import DataPlanOptions
from ledwall.domain.services.grid import derive_grid, next_cell_label, variant_footprint
from ledwall.domain.services.identifiers import SequentialIdGenerator
from ledwall.domain.services.layout_populator import auto_fill_wall
from ledwall.domain.services.power_plan import PowerPlanOptions
from ledwall.domain.value_objects import PixelDimensions, PowerProfile


def config_to_wall(config: PlanConfiguration) -> Wall:
    """Build the Wall entity, deriving grid units from a physical size if needed.

    Args:
        config: A validated PlanConfiguration instance

    Returns:
        Wall with grid dimensions in base units.
    """
    wall = config.wall
    width_units = wall.width_units
    height_units = wall.height_units
    if width_units is None or height_units is None:
        # An axis already given in units only needs a placeholder size here
        grid = derive_grid(
            width_meters=wall.width_meters if width_units is None else 1.0,
            height_meters=wall.height_meters if height_units is None else 1.0,
            width_feet=wall.width_feet,
            height_feet=wall.height_feet,
            base_unit_width_mm=wall.base_unit_width_mm,
            base_unit_height_mm=wall.base_unit_height_mm,
        )
        width_units = width_units or grid.width_units
        height_units = height_units or grid.height_units

    return Wall(
        id=wall.id,
        name=wall.name or wall.id,
        width_units=width_units,
        height_units=height_units,
        base_unit_width_mm=wall.base_unit_width_mm,
        base_unit_height_mm=wall.base_unit_height_mm,
        voltage_mode=wall.voltage,
        rack_location=wall.rack_location,
        deployment_type=wall.deployment_type,
        power_strategy=wall.power_strategy,
        imag_role=wall.imag_role,
        imag_master_wall_id=wall.imag_master_wall_id,
        mirror_port_order=wall.mirror_port_order,
        mirror_circuit_mapping=wall.mirror_circuit_mapping,
        planning_threshold_percent=wall.planning_threshold_percent,
        hard_limit_percent=wall.hard_limit_percent,
        notes=wall.notes,
    )


def _variant_from_config(variant: VariantConfig) -> CabinetVariant:
    recommended = variant.recommended_per_circuit
    cabinet = CabinetVariant(
        id=variant.id,
        variant_name=variant.variant_name,
        family_id=variant.family_id,
        width_mm=variant.width_mm,
        height_mm=variant.height_mm,
        depth_mm=variant.depth_mm,
        pixels=PixelDimensions(variant.pixels_width, variant.pixels_height),
        weight_kg=variant.weight_kg,
        power=PowerProfile(
            min=variant.power.min,
            typ=variant.power.typ,
            max=variant.power.max,
            peak=variant.power.peak,
        ),
        peak_factor=variant.peak_factor,
        recommended_per_20a_120=recommended.edison_20a_120,
        recommended_per_20a_208=recommended.edison_20a_208,
        recommended_per_soca_120=recommended.socapex_120,
        recommended_per_soca_208=recommended.socapex_208,
        recommended_per_l2130=recommended.l21_30,
        notes=variant.notes,
    )
    unit_width, unit_height = variant_footprint(cabinet)
    return replace(cabinet, unit_width=unit_width, unit_height=unit_height)


def config_to_variants(config: PlanConfiguration) -> dict[str, CabinetVariant]:
    """Build the variant catalog keyed by id.

    The built-in catalog is used when the configuration lists no variants.
    """
    if not config.variants:
        return default_variants_by_id()
    return {variant.id: _variant_from_config(variant) for variant in config.variants}


def config_to_processor(config: PlanConfiguration) -> ProcessorModel:
    """Build the processor from an inline definition or a built-in id.

    Raises:
        UnknownCatalogItemError: If ``processor_id`` is not in the built-in catalog.
    """
    if config.processor is not None:
        processor = config.processor
        return ProcessorModel(
            id=processor.id,
            model_name=processor.model_name,
            manufacturer=processor.manufacturer,
            ethernet_ports=processor.ethernet_ports,
            max_pixels_per_port_a8s=processor.max_pixels_per_port_a8s,
            max_pixels_per_port_a10s=processor.max_pixels_per_port_a10s,
        )
    return get_default_processor(config.processor_id or "")


def config_to_cells(
    config: PlanConfiguration,
    wall: Wall | None = None,
    variants_by_id: dict[str, CabinetVariant] | None = None,
    id_generator: IdGenerator | None = None,
) -> list[WallCell]:
    """Build the wall cells.

    Listed cells are used as given, with ids, labels and footprints filled
    in where missing. With no listed cells and an ``autofill`` section,
    the wall is auto-filled. Otherwise the wall is empty.

    Args:
        config: A validated PlanConfiguration instance
        wall: Wall built from the same config; built here when omitted.
        variants_by_id: Catalog built from the same config; built here when omitted.
        id_generator: Source of generated cell ids. Defaults to
            ``<wall id>-cell-<n>`` ids so repeated runs match.

    Returns:
        Cells in configuration order, or raster order for auto-fill.
    """
    wall = wall or config_to_wall(config)
    variants_by_id = variants_by_id if variants_by_id is not None else config_to_variants(config)
    id_generator = id_generator or SequentialIdGenerator(prefix=f"{wall.id}-cell")

    if not config.cells:
        if config.autofill is None:
            return []
        autofill = config.autofill
        secondary = (
            variants_by_id.get(autofill.secondary_variant_id)
            if autofill.secondary_variant_id
            else None
        )
        return auto_fill_wall(
            wall.id,
            wall.width_units,
            wall.height_units,
            variants_by_id[autofill.primary_variant_id],
            secondary,
            autofill.secondary_every_n_columns,
            base_unit_width_mm=wall.base_unit_width_mm,
            base_unit_height_mm=wall.base_unit_height_mm,
            id_generator=id_generator,
        )

    cells: list[WallCell] = []
    for cell in config.cells:
        unit_width, unit_height = _cell_footprint(cell, wall, variants_by_id)
        cells.append(
            WallCell(
                id=cell.id or id_generator.new_id(),
                wall_id=wall.id,
                variant_id=cell.variant_id,
                label=cell.label or next_cell_label(cells),
                unit_x=cell.x,
                unit_y=cell.y,
                unit_width=unit_width,
                unit_height=unit_height,
                status=cell.status,
                notes=cell.notes,
            )
        )
    return cells


def _cell_footprint(
    cell: CellConfig, wall: Wall, variants_by_id: dict[str, CabinetVariant]
) -> tuple[int, int]:
    variant = variants_by_id.get(cell.variant_id or "")
    if variant is not None:
        default_width, default_height = variant_footprint(
            variant, wall.base_unit_width_mm, wall.base_unit_height_mm
        )
    else:
        default_width, default_height = 1, 1
    return cell.unit_width or default_width, cell.unit_height or default_height


def cells_to_config(cells: list[WallCell]) -> list[CellConfig]:
    """Convert domain cells back into explicit configuration entries."""
    return [
        CellConfig(
            id=cell.id,
            label=cell.label,
            variant_id=cell.variant_id,
            x=cell.unit_x,
            y=cell.unit_y,
            unit_width=cell.unit_width,
            unit_height=cell.unit_height,
            status=cell.status,
            notes=cell.notes,
        )
        for cell in cells
    ]


def config_to_data_options(config: PlanConfiguration) -> DataPlanOptions:
    data = config.data
    return DataPlanOptions(
        data_path_mode=data.data_path_mode,
        loom_bundle_size=data.loom_bundle_size,
        port_group_size=data.port_group_size,
        rack_location=data.rack_location,
    )


def config_to_power_options(config: PlanConfiguration) -> PowerPlanOptions:
    power = config.power
    return PowerPlanOptions(
        strategy=power.strategy,
        voltage_mode=power.voltage,
        grouping_mode=power.grouping_mode,
    )
