"""Domain layer - LED wall planning logic."""

from .catalog import (
    BASE_UNIT_MM,
    DEFAULT_PROCESSORS,
    DEFAULT_VARIANTS,
    UnknownCatalogItemError,
    default_variants_by_id,
    get_default_processor,
)
from .entities import CabinetVariant, ProcessorModel, Wall, WallCell
from .results import (
    DataPlanResult,
    DataRun,
    PlacementResult,
    PowerCircuit,
    PowerPlanResult,
    RowBand,
    VariantRollup,
    WallTotals,
)
from .services import (
    DataPlanBuilder,
    DataPlanOptions,
    GridPlacementService,
    LayoutPopulator,
    MirrorMismatchError,
    MirrorTransform,
    PowerPlanBuilder,
    PowerPlanOptions,
    TotalsAggregator,
)
from .value_objects import (
    CellStatus,
    CircuitGroupingMode,
    DataPathMode,
    DeploymentType,
    GridRect,
    ImagRole,
    PixelDimensions,
    PlacementFailure,
    PowerProfile,
    PowerStrategy,
    RackLocation,
    ReceivingCardModel,
    VoltageMode,
)

__all__ = [
    "BASE_UNIT_MM",
    "CabinetVariant",
    "CellStatus",
    "CircuitGroupingMode",
    "DEFAULT_PROCESSORS",
    "DEFAULT_VARIANTS",
    "DataPathMode",
    "DataPlanBuilder",
    "DataPlanOptions",
    "DataPlanResult",
    "DataRun",
    "DeploymentType",
    "GridPlacementService",
    "GridRect",
    "ImagRole",
    "LayoutPopulator",
    "MirrorMismatchError",
    "MirrorTransform",
    "PixelDimensions",
    "PlacementFailure",
    "PlacementResult",
    "PowerCircuit",
    "PowerPlanBuilder",
    "PowerPlanOptions",
    "PowerPlanResult",
    "PowerProfile",
    "PowerStrategy",
    "ProcessorModel",
    "RackLocation",
    "ReceivingCardModel",
    "RowBand",
    "TotalsAggregator",
    "UnknownCatalogItemError",
    "VariantRollup",
    "VoltageMode",
    "Wall",
    "WallCell",
    "WallTotals",
    "default_variants_by_id",
    "get_default_processor",
]
