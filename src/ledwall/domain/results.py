"""Result types returned by the planning services.

Every result is a frozen dataclass built only from primitives, tuples,
enums and other frozen results, so callers can serialize or cache it
without worrying about references back into their inputs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from .entities import WallCell
from .value_objects import (
    DataPathMode,
    PixelDimensions,
    PlacementFailure,
    PowerProfile,
    PowerStrategy,
    RackLocation,
    ReceivingCardModel,
    VoltageMode,
)


def _primitive(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_primitive(item) for item in value]
    if isinstance(value, dict):
        return {key: _primitive(item) for key, item in value.items()}
    return value


def _dict_factory(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: _primitive(value) for key, value in items}


class _Serializable:
    """Mixin giving frozen results a JSON-ready ``to_dict``."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self, dict_factory=_dict_factory)  # type: ignore[call-overload]


@dataclass(frozen=True)
class PlacementResult(_Serializable):
    """Outcome of placing a cabinet on the grid.

    On success ``cells`` holds the new cell list and ``cell`` the placed
    cell. On failure ``failure`` names the reason and ``cells`` is the
    unchanged input.

    Attributes:
        cells: Cell list after the operation.
        cell: The newly placed cell, None on failure.
        failure: Failure reason, None on success.
        message: Human-readable explanation of a failure.
    """

    cells: tuple[WallCell, ...]
    cell: WallCell | None = None
    failure: PlacementFailure | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, cells: list[WallCell], cell: WallCell) -> PlacementResult:
        return cls(cells=tuple(cells), cell=cell)

    @classmethod
    def fail(
        cls, cells: list[WallCell], failure: PlacementFailure, message: str
    ) -> PlacementResult:
        return cls(cells=tuple(cells), failure=failure, message=message)


@dataclass(frozen=True)
class RowBand(_Serializable):
    """A horizontal band of the wall that no cabinet straddles."""

    row_start: int
    row_end: int  # exclusive
    cabinet_ids: tuple[str, ...]
    pixel_load: int


@dataclass(frozen=True)
class DataRun(_Serializable):
    """One data run: a row band wired to a single processor port.

    Attributes:
        run_number: 1-based run number.
        processor_port: Port label such as ``Port 3``.
        port_index: 0-based processor port index.
        cabinet_ids: Cabinets in cable order.
        cabinet_count: Number of cabinets on the run.
        jumper_count: Cabinet-to-cabinet jumpers needed.
        estimated_home_run_meters: Rack-to-wall cable estimate.
        estimated_home_run_feet: Same estimate in feet.
        loom_bundle: 1-based loom bundle number.
        port_group: 1-based port group number.
        cable_origin: ``ground`` or ``air``.
        pixel_load: Pixels driven by the run.
        row_start: First grid row of the band.
        row_end: Grid row after the band.
        over_limit: True when the run exceeds the port budget or port count.
    """

    run_number: int
    processor_port: str
    port_index: int
    cabinet_ids: tuple[str, ...]
    cabinet_count: int
    jumper_count: int
    estimated_home_run_meters: float
    estimated_home_run_feet: float
    loom_bundle: int
    port_group: int
    cable_origin: str
    pixel_load: int
    row_start: int
    row_end: int
    over_limit: bool


@dataclass(frozen=True)
class DataPlanResult(_Serializable):
    """Data plan for one wall."""

    processor_id: str
    port_count: int
    per_port_budget: int
    receiving_card: ReceivingCardModel
    data_path_mode: DataPathMode
    rack_location: RackLocation
    runs: tuple[DataRun, ...]
    total_pixels: int
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_overload(self) -> bool:
        return any(run.over_limit for run in self.runs)


@dataclass(frozen=True)
class PowerCircuit(_Serializable):
    """One electrical circuit and the cabinets it feeds.

    Attributes:
        circuit_number: 1-based circuit number.
        label: Circuit label such as ``SOC-01``.
        phase: Phase label.
        breaker_amps: Breaker rating.
        derated_amps: Continuous-load limit (80% of breaker).
        planning_amps: Planning threshold from the wall settings.
        hard_limit_amps: Hard threshold from the wall settings.
        cabinet_ids: Cabinets on the circuit.
        watts: Summed power profile in watts.
        amps: Summed power profile in amps.
        over_limit: Typical draw above the derated limit, or max draw above the breaker.
        over_planning: Typical draw above the planning threshold.
        over_hard_limit: Max draw above the hard threshold.
    """

    circuit_number: int
    label: str
    phase: str
    breaker_amps: float
    derated_amps: float
    planning_amps: float
    hard_limit_amps: float
    cabinet_ids: tuple[str, ...]
    watts: PowerProfile
    amps: PowerProfile
    over_limit: bool
    over_planning: bool
    over_hard_limit: bool


@dataclass(frozen=True)
class PowerPlanResult(_Serializable):
    """Power plan for one wall."""

    strategy: PowerStrategy
    voltage_mode: VoltageMode
    circuit_count: int
    planning_threshold_percent: float
    hard_limit_percent: float
    circuits: tuple[PowerCircuit, ...]
    totals_watts: PowerProfile
    totals_amps: PowerProfile
    estimated_circuit_count: int
    sources_required: int
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_overload(self) -> bool:
        return any(circuit.over_limit for circuit in self.circuits)


@dataclass(frozen=True)
class VariantRollup(_Serializable):
    """Per-variant totals for a wall."""

    variant_id: str
    variant_name: str
    count: int
    weight_kg: float
    weight_lbs: float
    pixels: int
    power: PowerProfile


@dataclass(frozen=True)
class WallTotals(_Serializable):
    """Summary figures for reporting on a wall."""

    width_meters: float
    height_meters: float
    width_feet: float
    height_feet: float
    width_feet_inches_label: str
    height_feet_inches_label: str
    total_cabinets: int
    spare_cabinets: int
    total_weight_kg: float
    total_weight_lbs: float
    wall_resolution: PixelDimensions
    total_pixels: int
    total_power: PowerProfile
    total_current: PowerProfile
    variant_breakdown: tuple[VariantRollup, ...]
    mixed_pitch_warning: str | None = None
