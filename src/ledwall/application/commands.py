"""Application commands (use cases) for wall planning."""

from __future__ import annotations

import logging

from ledwall.contracts.protocols import (
    DataPlanBuilderProtocol,
    PowerPlanBuilderProtocol,
    TotalsAggregatorProtocol,
)
from ledwall.domain import (
    CabinetVariant,
    DataPlanBuilder,
    DataPlanOptions,
    MirrorMismatchError,
    MirrorTransform,
    PowerPlanBuilder,
    PowerPlanOptions,
    ProcessorModel,
    ReceivingCardModel,
    TotalsAggregator,
    Wall,
    WallCell,
)
from ledwall.domain.catalog import UnknownCatalogItemError
from ledwall.domain.services.power_plan import POWER_SOURCE_SPECS

from .config import (
    PlanConfiguration,
    config_to_cells,
    config_to_data_options,
    config_to_power_options,
    config_to_processor,
    config_to_variants,
    config_to_wall,
    validate_config,
)
from .dtos import WallPlanOutput

logger = logging.getLogger(__name__)


class PlanWallCommand:
    """Command to produce the data plan, power plan and totals for a wall.

    For a mirror wall with a master plan available, the data and power
    plans are derived from the master's plans instead of being built from
    the wall's own cells.
    """

    def __init__(
        self,
        data_plan_builder: DataPlanBuilderProtocol | None = None,
        power_plan_builder: PowerPlanBuilderProtocol | None = None,
        totals_aggregator: TotalsAggregatorProtocol | None = None,
        mirror_transform: MirrorTransform | None = None,
    ) -> None:
        self.data_plan_builder = data_plan_builder or DataPlanBuilder()
        self.power_plan_builder = power_plan_builder or PowerPlanBuilder()
        self.totals_aggregator = totals_aggregator or TotalsAggregator()
        self.mirror_transform = mirror_transform or MirrorTransform()

    def execute(
        self,
        wall: Wall,
        cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
        receiving_card: ReceivingCardModel,
        data_options: DataPlanOptions | None = None,
        power_options: PowerPlanOptions | None = None,
        master: WallPlanOutput | None = None,
    ) -> WallPlanOutput:
        """Execute the planning command.

        Args:
            wall: Wall to plan.
            cells: Cells on the wall.
            variants_by_id: Cabinet catalog keyed by variant id.
            processor: Processor driving the wall.
            receiving_card: Receiving card fitted to the cabinets.
            data_options: Data plan options.
            power_options: Power plan options.
            master: Plans of the master wall, used when ``wall`` is a mirror.

        Returns:
            WallPlanOutput with the plans, or with errors if mirroring failed.
        """
        warnings: list[str] = []
        totals = self.totals_aggregator.aggregate(wall, cells, variants_by_id)

        if wall.is_mirror and master is not None and master.is_valid:
            if master.wall.id != wall.imag_master_wall_id:
                warnings.append(
                    f"Wall {wall.id} names master '{wall.imag_master_wall_id}' "
                    f"but was mirrored from '{master.wall.id}'."
                )
            strategy = (
                power_options.strategy if power_options and power_options.strategy
                else wall.power_strategy
            )
            try:
                data_plan, power_plan = self.mirror_transform.apply(
                    wall,
                    master.data_plan,  # type: ignore[arg-type]
                    master.power_plan,  # type: ignore[arg-type]
                    POWER_SOURCE_SPECS[strategy].circuit_count,
                )
            except MirrorMismatchError as e:
                logger.info(f"Could not mirror wall {wall.id}: {e}")
                return WallPlanOutput(
                    wall=wall, cells=cells, totals=totals, errors=[str(e)]
                )
            mirrored_from: str | None = master.wall.id
        else:
            if wall.is_mirror:
                warnings.append(
                    f"Wall {wall.id} is a mirror wall but no master plan was "
                    f"supplied; it was planned from its own cells."
                )
            elif master is not None:
                warnings.append(
                    f"Wall {wall.id} is not a mirror wall; the master plan was ignored."
                )
            data_plan = self.data_plan_builder.build(
                wall, cells, variants_by_id, processor, receiving_card, data_options
            )
            power_plan = self.power_plan_builder.build(
                wall, cells, variants_by_id, power_options
            )
            mirrored_from = None

        warnings.extend(data_plan.warnings)
        warnings.extend(power_plan.warnings)
        if totals.mixed_pitch_warning:
            warnings.append(totals.mixed_pitch_warning)

        logger.info(
            f"Planned wall {wall.id}: {len(data_plan.runs)} data runs, "
            f"{len(power_plan.circuits)} circuits, {len(warnings)} warnings"
        )
        return WallPlanOutput(
            wall=wall,
            cells=cells,
            data_plan=data_plan,
            power_plan=power_plan,
            totals=totals,
            warnings=warnings,
            mirrored_from=mirrored_from,
        )

    def execute_config(
        self, config: PlanConfiguration, master: WallPlanOutput | None = None
    ) -> WallPlanOutput:
        """Validate a configuration, build its domain objects and plan the wall.

        Validation errors are returned on the output instead of raised.
        Validation warnings are carried into the output's warnings.
        """
        wall = config_to_wall(config)
        validation = validate_config(config)
        if not validation.is_valid:
            return WallPlanOutput(
                wall=wall,
                cells=[],
                errors=[f"{e.path}: {e.message}" for e in validation.errors],
            )

        variants_by_id = config_to_variants(config)
        try:
            processor = config_to_processor(config)
        except UnknownCatalogItemError as e:
            return WallPlanOutput(wall=wall, cells=[], errors=[str(e)])
        cells = config_to_cells(config, wall, variants_by_id)

        output = self.execute(
            wall,
            cells,
            variants_by_id,
            processor,
            config.receiving_card,
            config_to_data_options(config),
            config_to_power_options(config),
            master=master,
        )
        output.warnings[:0] = [f"{w.path}: {w.message}" for w in validation.warnings]
        return output
