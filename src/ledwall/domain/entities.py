"""Domain entities: walls, catalog items and placed cells."""

from __future__ import annotations

from dataclasses import dataclass

from .value_objects import (
    CellStatus,
    DeploymentType,
    GridRect,
    ImagRole,
    PixelDimensions,
    PowerProfile,
    PowerStrategy,
    RackLocation,
    ReceivingCardModel,
    VoltageMode,
)


@dataclass(frozen=True)
class Wall:
    """An LED wall: a rectangular grid of base units plus deployment settings.

    Attributes:
        id: Wall identifier.
        name: Display name.
        width_units: Grid width in base units.
        height_units: Grid height in base units.
        base_unit_width_mm: Physical width of one grid unit.
        base_unit_height_mm: Physical height of one grid unit.
        voltage_mode: Service voltage.
        rack_location: Where the processor/power rack sits.
        deployment_type: Ground-stacked or flown.
        power_strategy: Power source type feeding the wall.
        imag_role: IMAG pairing role.
        imag_master_wall_id: Master wall id for a mirror wall, None otherwise.
        mirror_port_order: Reverse processor port order when mirroring.
        mirror_circuit_mapping: Reverse circuit numbering when mirroring.
        planning_threshold_percent: Planning limit as a percentage of breaker rating.
        hard_limit_percent: Hard limit as a percentage of breaker rating.
        notes: Free text.
    """

    id: str
    name: str
    width_units: int
    height_units: int
    base_unit_width_mm: float = 500.0
    base_unit_height_mm: float = 500.0
    voltage_mode: VoltageMode = VoltageMode.V208
    rack_location: RackLocation = RackLocation.SL
    deployment_type: DeploymentType = DeploymentType.GROUND_STACK
    power_strategy: PowerStrategy = PowerStrategy.SOCAPEX
    imag_role: ImagRole = ImagRole.NONE
    imag_master_wall_id: str | None = None
    mirror_port_order: bool = False
    mirror_circuit_mapping: bool = False
    planning_threshold_percent: float = 80.0
    hard_limit_percent: float = 100.0
    notes: str = ""

    def __post_init__(self) -> None:
        if self.width_units < 1 or self.height_units < 1:
            raise ValueError("Wall grid dimensions must be at least 1 unit")
        if self.base_unit_width_mm <= 0 or self.base_unit_height_mm <= 0:
            raise ValueError("Base unit size must be positive")
        if self.planning_threshold_percent <= 0 or self.hard_limit_percent <= 0:
            raise ValueError("Threshold percentages must be positive")

    @property
    def width_meters(self) -> float:
        return self.width_units * self.base_unit_width_mm / 1000

    @property
    def height_meters(self) -> float:
        return self.height_units * self.base_unit_height_mm / 1000

    @property
    def is_ground_stacked(self) -> bool:
        return self.deployment_type == DeploymentType.GROUND_STACK

    @property
    def is_mirror(self) -> bool:
        return self.imag_role == ImagRole.MIRROR


@dataclass(frozen=True)
class CabinetVariant:
    """A cabinet model from the catalog. Read-only to the engine.

    Attributes:
        id: Variant identifier referenced by wall cells.
        family_id: Owning panel family.
        variant_name: Display name.
        width_mm: Physical width.
        height_mm: Physical height.
        depth_mm: Physical depth.
        unit_width: Nominal footprint width in grid units.
        unit_height: Nominal footprint height in grid units.
        pixels: Pixel resolution of one cabinet.
        weight_kg: Weight of one cabinet.
        power: Power profile in watts.
        peak_factor: Optional inrush multiplier; None when the catalog has no figure.
        recommended_per_20a_120: Recommended cabinets per 20A circuit at 120V.
        recommended_per_20a_208: Recommended cabinets per 20A circuit at 208V.
        recommended_per_soca_120: Recommended cabinets per Socapex circuit at 120V.
        recommended_per_soca_208: Recommended cabinets per Socapex circuit at 208V.
        recommended_per_l2130: Recommended cabinets per L21-30 circuit.
    """

    id: str
    variant_name: str
    width_mm: float
    height_mm: float
    pixels: PixelDimensions
    power: PowerProfile
    weight_kg: float = 0.0
    family_id: str = ""
    depth_mm: float = 0.0
    unit_width: int = 1
    unit_height: int = 1
    peak_factor: float | None = None
    recommended_per_20a_120: int = 0
    recommended_per_20a_208: int = 0
    recommended_per_soca_120: int = 0
    recommended_per_soca_208: int = 0
    recommended_per_l2130: int = 0
    notes: str = ""

    def __post_init__(self) -> None:
        if self.width_mm <= 0 or self.height_mm <= 0:
            raise ValueError("Cabinet dimensions must be positive")
        if self.unit_width < 1 or self.unit_height < 1:
            raise ValueError("Cabinet unit footprint must be at least 1x1")
        if self.weight_kg < 0:
            raise ValueError("Cabinet weight must be non-negative")

    @property
    def pixel_count(self) -> int:
        return self.pixels.count

    @property
    def pixel_pitch_mm(self) -> float | None:
        """Horizontal distance between pixels, or None without pixel data."""
        if self.pixels.width <= 0:
            return None
        return self.width_mm / self.pixels.width

    def recommended_per_circuit(
        self, strategy: PowerStrategy, voltage: VoltageMode
    ) -> int:
        """Catalog figure for cabinets per circuit; 0 means unknown."""
        if strategy == PowerStrategy.SOCAPEX:
            if voltage == VoltageMode.V120:
                return self.recommended_per_soca_120
            return self.recommended_per_soca_208
        if strategy == PowerStrategy.L21_30:
            return self.recommended_per_l2130
        if voltage == VoltageMode.V120:
            return self.recommended_per_20a_120
        return self.recommended_per_20a_208


@dataclass(frozen=True)
class WallCell:
    """One placed cabinet, or a void/cutout marker, on a wall grid.

    Attributes:
        id: Cell identifier.
        wall_id: Owning wall.
        variant_id: Cabinet variant, None for an unoccupied marker.
        label: Human label such as ``C001``.
        unit_x: Left column of the footprint.
        unit_y: Top row of the footprint.
        unit_width: Footprint width in grid units.
        unit_height: Footprint height in grid units.
        status: Status tag.
        notes: Free text.
    """

    id: str
    wall_id: str
    variant_id: str | None
    label: str
    unit_x: int
    unit_y: int
    unit_width: int = 1
    unit_height: int = 1
    status: CellStatus = CellStatus.ACTIVE
    notes: str = ""

    def __post_init__(self) -> None:
        if self.unit_width < 1 or self.unit_height < 1:
            raise ValueError("Cell footprint must be at least 1x1")

    @property
    def rect(self) -> GridRect:
        return GridRect(self.unit_x, self.unit_y, self.unit_width, self.unit_height)

    @property
    def is_physical(self) -> bool:
        return self.status.is_physical

    @property
    def is_active_cabinet(self) -> bool:
        """Active and referencing a cabinet variant."""
        return self.status == CellStatus.ACTIVE and self.variant_id is not None


@dataclass(frozen=True)
class ProcessorModel:
    """A video processor and its port capacities.

    Attributes:
        id: Processor identifier.
        model_name: Display name.
        ethernet_ports: Number of output ports.
        max_pixels_per_port_a8s: Per-port pixel budget with A8s receiving cards.
        max_pixels_per_port_a10s: Per-port pixel budget with A10s receiving cards.
        manufacturer: Manufacturer name.
    """

    id: str
    model_name: str
    ethernet_ports: int
    max_pixels_per_port_a8s: int
    max_pixels_per_port_a10s: int
    manufacturer: str = ""
    notes: str = ""

    def __post_init__(self) -> None:
        if self.ethernet_ports < 1:
            raise ValueError("Processor must have at least one ethernet port")
        if self.max_pixels_per_port_a8s <= 0 or self.max_pixels_per_port_a10s <= 0:
            raise ValueError("Per-port pixel budgets must be positive")

    def max_pixels_per_port(self, card: ReceivingCardModel) -> int:
        if card == ReceivingCardModel.A8S:
            return self.max_pixels_per_port_a8s
        return self.max_pixels_per_port_a10s
