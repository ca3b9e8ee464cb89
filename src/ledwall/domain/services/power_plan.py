"""Power plan generation: circuit bucketing and breaker checks.

Cabinets are dealt into the circuits of the wall's power source
round-robin. The assignment is not balanced by wattage; circuits that end
up overloaded are flagged so the planner can rework the wall.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..entities import CabinetVariant, Wall, WallCell
from ..results import PowerCircuit, PowerPlanResult
from ..value_objects import (
    CircuitGroupingMode,
    PowerProfile,
    PowerStrategy,
    VoltageMode,
)

__all__ = [
    "DERATE_FACTOR",
    "POWER_SOURCE_SPECS",
    "PowerPlanBuilder",
    "PowerPlanOptions",
    "PowerSourceSpec",
    "build_power_plan",
    "circuit_label",
    "clamp_thresholds",
]

logger = logging.getLogger(__name__)

# Continuous load limit as a fraction of breaker rating
DERATE_FACTOR = 0.8

# Columns per section for BY_SECTION grouping
SECTION_WIDTH_UNITS = 4


@dataclass(frozen=True)
class PowerSourceSpec:
    """Fixed electrical characteristics of a power source type.

    Attributes:
        circuit_count: Independent circuits provided by one source.
        breaker_amps: Breaker rating of each circuit.
        phases: Phase label of each circuit, in circuit order.
        label_prefix: Prefix for circuit labels.
    """

    circuit_count: int
    breaker_amps: float
    phases: tuple[str, ...]
    label_prefix: str

    def __post_init__(self) -> None:
        if self.circuit_count < 1:
            raise ValueError("Power source must provide at least one circuit")
        if len(self.phases) != self.circuit_count:
            raise ValueError("Phase sequence must match circuit count")

    @property
    def derated_amps(self) -> float:
        return self.breaker_amps * DERATE_FACTOR


POWER_SOURCE_SPECS: dict[PowerStrategy, PowerSourceSpec] = {
    PowerStrategy.EDISON_20A: PowerSourceSpec(
        circuit_count=1, breaker_amps=20, phases=("A",), label_prefix="EDI"
    ),
    PowerStrategy.SOCAPEX: PowerSourceSpec(
        circuit_count=6,
        breaker_amps=20,
        phases=("A", "B", "C", "A", "B", "C"),
        label_prefix="SOC",
    ),
    PowerStrategy.L21_30: PowerSourceSpec(
        circuit_count=3, breaker_amps=30, phases=("A", "B", "C"), label_prefix="L21"
    ),
    PowerStrategy.CAMLOCK_DISTRO: PowerSourceSpec(
        circuit_count=3, breaker_amps=20, phases=("A", "B", "C"), label_prefix="CAM"
    ),
}


@dataclass(frozen=True)
class PowerPlanOptions:
    """Options for power plan generation.

    Attributes:
        strategy: Overrides the wall's power strategy when set.
        voltage_mode: Overrides the wall's voltage when set.
        grouping_mode: Cabinet visiting order for the round-robin.
    """

    strategy: PowerStrategy | None = None
    voltage_mode: VoltageMode | None = None
    grouping_mode: CircuitGroupingMode = CircuitGroupingMode.ROW_MAJOR


def circuit_label(strategy: PowerStrategy, index: int) -> str:
    """Label for the circuit at 0-based ``index``, e.g. ``SOC-01``."""
    return f"{POWER_SOURCE_SPECS[strategy].label_prefix}-{index + 1:02d}"


def clamp_thresholds(planning_percent: float, hard_limit_percent: float) -> tuple[float, float]:
    """Keep planning within 40-95% and the hard limit between planning and 120%."""
    planning = max(40.0, min(95.0, planning_percent))
    hard_limit = max(planning, min(120.0, hard_limit_percent))
    return planning, hard_limit


def _sort_for_grouping(
    cells: list[WallCell], mode: CircuitGroupingMode
) -> list[WallCell]:
    if mode == CircuitGroupingMode.BY_LABEL:
        return sorted(cells, key=lambda c: (c.label, c.id))
    if mode == CircuitGroupingMode.BY_SECTION:
        return sorted(
            cells,
            key=lambda c: (c.unit_x // SECTION_WIDTH_UNITS, c.unit_y, c.unit_x, c.id),
        )
    return sorted(cells, key=lambda c: (c.unit_y, c.unit_x, c.id))


class PowerPlanBuilder:
    """Builds power plans for LED walls.

    Every circuit of the power source is emitted, including empty ones,
    so circuit numbering is stable for a given source type.
    """

    def build(
        self,
        wall: Wall,
        cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        options: PowerPlanOptions | None = None,
    ) -> PowerPlanResult:
        """Generate the power plan.

        Args:
            wall: Wall being planned.
            cells: Cells on the wall. Only active cabinets draw power.
            variants_by_id: Catalog of cabinet variants.
            options: Strategy/voltage overrides and grouping mode.

        Returns:
            PowerPlanResult with one entry per source circuit.
        """
        options = options or PowerPlanOptions()
        strategy = options.strategy or wall.power_strategy
        voltage = options.voltage_mode or wall.voltage_mode
        source = POWER_SOURCE_SPECS[strategy]
        planning_percent, hard_limit_percent = clamp_thresholds(
            wall.planning_threshold_percent, wall.hard_limit_percent
        )
        planning_amps = source.breaker_amps * planning_percent / 100
        hard_limit_amps = source.breaker_amps * hard_limit_percent / 100
        warnings: list[str] = []

        cabinets: list[tuple[WallCell, CabinetVariant]] = []
        for cell in _sort_for_grouping(
            [c for c in cells if c.is_active_cabinet], options.grouping_mode
        ):
            variant = variants_by_id.get(cell.variant_id or "")
            if variant is None:
                warnings.append(
                    f"{cell.label} references unknown cabinet variant "
                    f"'{cell.variant_id}' and was left out of the power plan."
                )
                continue
            cabinets.append((cell, variant))

        buckets: list[list[tuple[WallCell, CabinetVariant]]] = [
            [] for _ in range(source.circuit_count)
        ]
        for index, entry in enumerate(cabinets):
            buckets[index % source.circuit_count].append(entry)

        circuits: list[PowerCircuit] = []
        for index, members in enumerate(buckets):
            watts = PowerProfile.zero()
            for _, variant in members:
                watts = watts + variant.power
            amps = watts.divided_by(int(voltage))
            label = circuit_label(strategy, index)
            over_limit = amps.typ > source.derated_amps or amps.max > source.breaker_amps

            if amps.typ > source.derated_amps:
                warnings.append(
                    f"{label} typical draw {amps.typ:.1f}A exceeds the "
                    f"{source.derated_amps:.1f}A derated limit."
                )
            if amps.max > source.breaker_amps:
                warnings.append(
                    f"{label} max draw {amps.max:.1f}A exceeds the "
                    f"{source.breaker_amps:.0f}A breaker."
                )
            recommended = [
                n
                for n in (
                    variant.recommended_per_circuit(strategy, voltage)
                    for _, variant in members
                )
                if n > 0
            ]
            if recommended and len(members) > min(recommended):
                warnings.append(
                    f"{label} feeds {len(members)} cabinets; the catalog "
                    f"recommends at most {min(recommended)}."
                )

            circuits.append(
                PowerCircuit(
                    circuit_number=index + 1,
                    label=label,
                    phase=source.phases[index],
                    breaker_amps=source.breaker_amps,
                    derated_amps=source.derated_amps,
                    planning_amps=planning_amps,
                    hard_limit_amps=hard_limit_amps,
                    cabinet_ids=tuple(cell.id for cell, _ in members),
                    watts=watts,
                    amps=amps,
                    over_limit=over_limit,
                    over_planning=amps.typ > planning_amps,
                    over_hard_limit=amps.max > hard_limit_amps,
                )
            )

        totals_watts = PowerProfile.zero()
        for circuit in circuits:
            totals_watts = totals_watts + circuit.watts
        totals_amps = totals_watts.divided_by(int(voltage))
        estimated_circuit_count = max(
            1, math.ceil(totals_amps.typ / source.derated_amps)
        )
        sources_required = math.ceil(estimated_circuit_count / source.circuit_count)
        if sources_required > 1:
            warnings.append(
                f"Typical load of {totals_amps.typ:.1f}A needs about "
                f"{estimated_circuit_count} circuits ({sources_required} "
                f"{strategy.value} sources); one source provides {source.circuit_count}."
            )

        logger.debug(
            f"Power plan for wall {wall.id}: {len(cabinets)} cabinets over "
            f"{source.circuit_count} {strategy.value} circuits at {int(voltage)}V"
        )
        return PowerPlanResult(
            strategy=strategy,
            voltage_mode=voltage,
            circuit_count=source.circuit_count,
            planning_threshold_percent=planning_percent,
            hard_limit_percent=hard_limit_percent,
            circuits=tuple(circuits),
            totals_watts=totals_watts,
            totals_amps=totals_amps,
            estimated_circuit_count=estimated_circuit_count,
            sources_required=sources_required,
            warnings=tuple(warnings),
        )


def build_power_plan(
    wall: Wall,
    cells: list[WallCell],
    variants_by_id: dict[str, CabinetVariant],
    options: PowerPlanOptions | None = None,
) -> PowerPlanResult:
    """Generate a power plan in one call. See ``PowerPlanBuilder.build``."""
    return PowerPlanBuilder().build(wall, cells, variants_by_id, options)
