"""Pydantic configuration schema models for wall plans.

This module defines the schema for JSON wall plan files. It uses Pydantic
v2 for validation and serialization.

Enums are reused from the domain layer so that configuration values and
domain values never drift apart.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ledwall.domain.value_objects import (
    CellStatus,
    CircuitGroupingMode,
    DataPathMode,
    DeploymentType,
    ImagRole,
    PowerStrategy,
    RackLocation,
    ReceivingCardModel,
    VoltageMode,
)

# Supported schema versions for configuration files
# Version 1.0: Initial schema with wall, cells, data and power options
# Version 1.1: Added auto-fill and circuit grouping modes
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

# Spellings accepted for power strategies besides the enum values
POWER_STRATEGY_ALIASES: dict[str, str] = {
    "20A": PowerStrategy.EDISON_20A.value,
    "EDISON": PowerStrategy.EDISON_20A.value,
    "L21-30": PowerStrategy.L21_30.value,
    "SOCA": PowerStrategy.SOCAPEX.value,
    "CAMLOCK": PowerStrategy.CAMLOCK_DISTRO.value,
}


def _normalize_strategy(v: Any) -> Any:
    if isinstance(v, str):
        return POWER_STRATEGY_ALIASES.get(v.upper(), v.upper())
    return v


class PowerProfileConfig(BaseModel):
    """Power draw of one cabinet in watts.

    Attributes:
        min: Minimum draw (black screen).
        typ: Typical draw.
        max: Maximum draw (full white).
        peak: Inrush peak.
    """

    model_config = ConfigDict(extra="forbid")

    min: float = Field(default=0.0, ge=0)
    typ: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    peak: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def validate_ordering(self) -> "PowerProfileConfig":
        """Validate that typical draw does not exceed max draw."""
        if self.typ > self.max:
            raise ValueError(
                f"typ ({self.typ}) must be less than or equal to max ({self.max})"
            )
        return self


class RecommendedPerCircuitConfig(BaseModel):
    """Catalog figures for cabinets per circuit. Zero means unknown."""

    model_config = ConfigDict(extra="forbid")

    edison_20a_120: int = Field(default=0, ge=0)
    edison_20a_208: int = Field(default=0, ge=0)
    socapex_120: int = Field(default=0, ge=0)
    socapex_208: int = Field(default=0, ge=0)
    l21_30: int = Field(default=0, ge=0)


class VariantConfig(BaseModel):
    """Configuration for a cabinet variant in the catalog.

    Attributes:
        id: Variant identifier referenced by cells.
        variant_name: Display name.
        family_id: Owning panel family (optional).
        width_mm: Physical width in millimeters.
        height_mm: Physical height in millimeters.
        depth_mm: Physical depth in millimeters.
        pixels_width: Horizontal pixel count.
        pixels_height: Vertical pixel count.
        weight_kg: Weight of one cabinet.
        power: Power profile in watts.
        peak_factor: Inrush multiplier (optional).
        recommended_per_circuit: Cabinets-per-circuit figures.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    variant_name: str = Field(..., min_length=1)
    family_id: str = ""
    width_mm: float = Field(..., gt=0)
    height_mm: float = Field(..., gt=0)
    depth_mm: float = Field(default=0.0, ge=0)
    pixels_width: int = Field(..., ge=0)
    pixels_height: int = Field(..., ge=0)
    weight_kg: float = Field(default=0.0, ge=0)
    power: PowerProfileConfig
    peak_factor: float | None = Field(default=None, gt=0)
    recommended_per_circuit: RecommendedPerCircuitConfig = Field(
        default_factory=RecommendedPerCircuitConfig
    )
    notes: str = ""


class ProcessorConfig(BaseModel):
    """Configuration for a custom video processor.

    Attributes:
        id: Processor identifier.
        model_name: Display name.
        manufacturer: Manufacturer name.
        ethernet_ports: Output port count (at least 1).
        max_pixels_per_port_a8s: Per-port budget with A8s cards.
        max_pixels_per_port_a10s: Per-port budget with A10s cards.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    model_name: str = Field(..., min_length=1)
    manufacturer: str = ""
    ethernet_ports: int = Field(..., ge=1, le=256)
    max_pixels_per_port_a8s: int = Field(..., gt=0)
    max_pixels_per_port_a10s: int = Field(..., gt=0)


class WallConfig(BaseModel):
    """Configuration for the wall being planned.

    The grid is given either directly in base units or as a physical size
    in meters or feet, which is rounded up to whole units.

    Attributes:
        id: Wall identifier.
        name: Display name.
        width_units: Grid width in base units (optional).
        height_units: Grid height in base units (optional).
        width_meters: Physical width, used when width_units is unset.
        height_meters: Physical height, used when height_units is unset.
        width_feet: Physical width in feet, used when no other width is set.
        height_feet: Physical height in feet, used when no other height is set.
        base_unit_width_mm: Width of one grid unit.
        base_unit_height_mm: Height of one grid unit.
        voltage: Service voltage (120 or 208).
        rack_location: Where the processor/power rack sits.
        deployment_type: Ground-stacked or flown.
        power_strategy: Power source type.
        imag_role: IMAG pairing role.
        imag_master_wall_id: Master wall id, required for a mirror wall.
        mirror_port_order: Reverse port order when mirroring.
        mirror_circuit_mapping: Reverse circuit numbering when mirroring.
        planning_threshold_percent: Planning limit, 40 to 95 percent.
        hard_limit_percent: Hard limit, 80 to 120 percent.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    width_units: int | None = Field(default=None, ge=1, le=500)
    height_units: int | None = Field(default=None, ge=1, le=500)
    width_meters: float | None = Field(default=None, gt=0)
    height_meters: float | None = Field(default=None, gt=0)
    width_feet: float | None = Field(default=None, gt=0)
    height_feet: float | None = Field(default=None, gt=0)
    base_unit_width_mm: float = Field(default=500.0, gt=0)
    base_unit_height_mm: float = Field(default=500.0, gt=0)
    voltage: VoltageMode = VoltageMode.V208
    rack_location: RackLocation = RackLocation.SL
    deployment_type: DeploymentType = DeploymentType.GROUND_STACK
    power_strategy: PowerStrategy = PowerStrategy.SOCAPEX
    imag_role: ImagRole = ImagRole.NONE
    imag_master_wall_id: str | None = None
    mirror_port_order: bool = False
    mirror_circuit_mapping: bool = False
    planning_threshold_percent: float = Field(default=80.0, ge=40, le=95)
    hard_limit_percent: float = Field(default=100.0, ge=80, le=120)
    notes: str = ""

    @field_validator("power_strategy", mode="before")
    @classmethod
    def normalize_power_strategy(cls, v: Any) -> Any:
        """Accept common spellings such as ``20A`` and ``L21-30``."""
        return _normalize_strategy(v)

    @model_validator(mode="after")
    def validate_size_given(self) -> "WallConfig":
        """Validate that each axis has a size in units, meters or feet."""
        if self.width_units is None and self.width_meters is None and self.width_feet is None:
            raise ValueError("wall width must be given as width_units, width_meters or width_feet")
        if self.height_units is None and self.height_meters is None and self.height_feet is None:
            raise ValueError("wall height must be given as height_units, height_meters or height_feet")
        return self

    @model_validator(mode="after")
    def validate_thresholds(self) -> "WallConfig":
        """Validate that the hard limit is not below the planning threshold."""
        if self.hard_limit_percent < self.planning_threshold_percent:
            raise ValueError(
                f"hard_limit_percent ({self.hard_limit_percent}) must be greater than "
                f"or equal to planning_threshold_percent ({self.planning_threshold_percent})"
            )
        return self

    @model_validator(mode="after")
    def validate_mirror_master(self) -> "WallConfig":
        """Validate that a mirror wall names its master wall."""
        if self.imag_role == ImagRole.MIRROR and not self.imag_master_wall_id:
            raise ValueError("a mirror wall must set imag_master_wall_id")
        return self


class CellConfig(BaseModel):
    """Configuration for one placed cell.

    Attributes:
        id: Cell identifier; generated when omitted.
        label: Cell label; the next ``C<n>`` label when omitted.
        variant_id: Cabinet variant, None for a void or cutout marker.
        x: Left column.
        y: Top row.
        unit_width: Footprint width; taken from the variant when omitted.
        unit_height: Footprint height; taken from the variant when omitted.
        status: Status tag.
    """

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    label: str | None = None
    variant_id: str | None = None
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    unit_width: int | None = Field(default=None, ge=1)
    unit_height: int | None = Field(default=None, ge=1)
    status: CellStatus = CellStatus.ACTIVE
    notes: str = ""

    @model_validator(mode="after")
    def validate_marker_footprint(self) -> "CellConfig":
        """Validate that cells without a variant carry their own footprint."""
        if self.variant_id is None and (self.unit_width is None or self.unit_height is None):
            raise ValueError("cells without variant_id must set unit_width and unit_height")
        return self


class AutofillConfig(BaseModel):
    """Auto-fill settings used when no cells are listed.

    Attributes:
        primary_variant_id: Default cabinet.
        secondary_variant_id: Cabinet mixed in on a column period (optional).
        secondary_every_n_columns: Column period for the secondary cabinet.
    """

    model_config = ConfigDict(extra="forbid")

    primary_variant_id: str = Field(..., min_length=1)
    secondary_variant_id: str | None = None
    secondary_every_n_columns: int = Field(default=4, ge=2, le=100)


class DataConfig(BaseModel):
    """Data plan options.

    Attributes:
        data_path_mode: Cabinet visiting order inside a run.
        loom_bundle_size: Ports bundled into one loom.
        port_group_size: Ports per planning group.
        rack_location: Overrides the wall's rack location (optional).
    """

    model_config = ConfigDict(extra="forbid")

    data_path_mode: DataPathMode = DataPathMode.SNAKE_ROWS
    loom_bundle_size: int = Field(default=4, ge=1, le=64)
    port_group_size: int = Field(default=2, ge=1, le=64)
    rack_location: RackLocation | None = None


class PowerConfig(BaseModel):
    """Power plan options.

    Attributes:
        strategy: Overrides the wall's power strategy (optional).
        voltage: Overrides the wall's voltage (optional).
        grouping_mode: Cabinet visiting order for circuit assignment.
    """

    model_config = ConfigDict(extra="forbid")

    strategy: PowerStrategy | None = None
    voltage: VoltageMode | None = None
    grouping_mode: CircuitGroupingMode = CircuitGroupingMode.ROW_MAJOR

    @field_validator("strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, v: Any) -> Any:
        """Accept common spellings such as ``20A`` and ``L21-30``."""
        return _normalize_strategy(v)


class PlanConfiguration(BaseModel):
    """Root configuration model for a wall plan.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        wall: Wall dimensions and deployment settings
        variants: Cabinet catalog; the built-in catalog when empty
        processor: Custom processor definition
        processor_id: Id of a built-in processor
        receiving_card: Receiving card fitted to the cabinets
        cells: Placed cells
        autofill: Auto-fill settings, used when cells is empty
        data: Data plan options
        power: Power plan options

    Example:
        >>> config = PlanConfiguration(
        ...     schema_version="1.0",
        ...     wall=WallConfig(id="main", width_units=8, height_units=4),
        ...     processor_id="MX40",
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    wall: WallConfig
    variants: list[VariantConfig] = Field(default_factory=list)
    processor: ProcessorConfig | None = None
    processor_id: str | None = None
    receiving_card: ReceivingCardModel = ReceivingCardModel.A8S
    cells: list[CellConfig] = Field(default_factory=list)
    autofill: AutofillConfig | None = None
    data: DataConfig = Field(default_factory=DataConfig)
    power: PowerConfig = Field(default_factory=PowerConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("variants")
    @classmethod
    def validate_unique_variant_ids(cls, v: list[VariantConfig]) -> list[VariantConfig]:
        """Validate that variant ids are unique."""
        seen: set[str] = set()
        for variant in v:
            if variant.id in seen:
                raise ValueError(f"duplicate variant id '{variant.id}'")
            seen.add(variant.id)
        return v

    @field_validator("cells")
    @classmethod
    def validate_unique_cell_ids(cls, v: list[CellConfig]) -> list[CellConfig]:
        """Validate that explicit cell ids are unique."""
        ids = [cell.id for cell in v if cell.id is not None]
        duplicates = sorted({cell_id for cell_id in ids if ids.count(cell_id) > 1})
        if duplicates:
            raise ValueError(f"duplicate cell ids: {duplicates}")
        return v

    @model_validator(mode="after")
    def validate_processor_choice(self) -> "PlanConfiguration":
        """Validate that exactly one of processor and processor_id is set."""
        if (self.processor is None) == (self.processor_id is None):
            raise ValueError("exactly one of 'processor' or 'processor_id' must be set")
        return self
