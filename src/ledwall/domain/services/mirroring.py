"""Master/mirror remapping for paired IMAG walls.

A mirror wall reuses its master's plans with processor ports and circuits
numbered from the opposite end, so the two walls can be cabled as mirror
images of each other.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from ..entities import Wall
from ..results import DataPlanResult, PowerPlanResult
from .data_plan import port_label

__all__ = [
    "MirrorMismatchError",
    "MirrorTransform",
    "build_mirrored_data_plan",
    "build_mirrored_power_plan",
    "mirror_circuit_index",
    "mirror_port_index",
]

logger = logging.getLogger(__name__)

_PORT_REFERENCE = re.compile(r"\bPort (\d+)\b")


class MirrorMismatchError(ValueError):
    """Raised when a mirror wall's circuit count differs from its master's."""

    def __init__(self, master_count: int, mirror_count: int) -> None:
        self.master_count = master_count
        self.mirror_count = mirror_count
        super().__init__(
            f"Mirror wall has {mirror_count} circuits but master has "
            f"{master_count}; circuit mapping cannot be mirrored"
        )


def _mirror_index(index: int, total: int, enabled: bool) -> int:
    if not enabled:
        return index
    if total < 1:
        raise ValueError("Total must be at least 1")
    if not 0 <= index < total:
        raise ValueError(f"Index {index} is outside 0..{total - 1}")
    return total - 1 - index


def mirror_port_index(port_index: int, total_ports: int, enabled: bool) -> int:
    """Port index seen from the opposite end. Identity when disabled."""
    return _mirror_index(port_index, total_ports, enabled)


def mirror_circuit_index(circuit_index: int, total_circuits: int, enabled: bool) -> int:
    """Circuit index seen from the opposite end. Identity when disabled."""
    return _mirror_index(circuit_index, total_circuits, enabled)


def build_mirrored_data_plan(
    master: DataPlanResult, enabled: bool, total_ports: int | None = None
) -> DataPlanResult:
    """Copy a master data plan with port indexes mirrored.

    Only the port index and its ``Port N`` label change, in the runs and
    in the warnings that name them. Cabinets, pixel loads, loom bundles
    and port groups are inherited from the master.

    Args:
        master: Master wall's data plan.
        enabled: The mirror wall's port-order flag.
        total_ports: Port count to mirror across. Defaults to the master's.

    Returns:
        New DataPlanResult; the master itself when mirroring is disabled.
    """
    if not enabled:
        return master
    total = total_ports if total_ports is not None else master.port_count
    runs = tuple(
        replace(
            run,
            port_index=mirrored,
            processor_port=port_label(mirrored),
        )
        for run in master.runs
        for mirrored in (mirror_port_index(run.port_index, total, True),)
    )

    def swap_port(match: re.Match[str]) -> str:
        return port_label(mirror_port_index(int(match.group(1)) - 1, total, True))

    warnings = tuple(_PORT_REFERENCE.sub(swap_port, w) for w in master.warnings)
    return replace(master, runs=runs, warnings=warnings)


def build_mirrored_power_plan(
    master: PowerPlanResult, enabled: bool, mirror_circuit_count: int | None = None
) -> PowerPlanResult:
    """Copy a master power plan with circuit numbers mirrored.

    Each circuit moves to the mirrored slot and takes the label and phase
    of the master circuit already in that slot, suffixed ``-MIR``. Warnings
    that name a circuit are rewritten to the mirrored label.

    Args:
        master: Master wall's power plan.
        enabled: The mirror wall's circuit-mapping flag.
        mirror_circuit_count: Circuit count of the mirror wall's source, when known.

    Returns:
        New PowerPlanResult ordered by circuit number; the master itself
        when mirroring is disabled.

    Raises:
        MirrorMismatchError: If ``mirror_circuit_count`` differs from the master's.
    """
    if not enabled:
        return master
    total = len(master.circuits)
    if mirror_circuit_count is not None and mirror_circuit_count != total:
        raise MirrorMismatchError(total, mirror_circuit_count)

    circuits = []
    mirrored_labels: dict[str, str] = {}
    for index, circuit in enumerate(master.circuits):
        target = master.circuits[mirror_circuit_index(index, total, True)]
        mirrored_labels[circuit.label] = f"{target.label}-MIR"
        circuits.append(
            replace(
                circuit,
                circuit_number=target.circuit_number,
                label=mirrored_labels[circuit.label],
                phase=target.phase,
            )
        )
    circuits.sort(key=lambda c: c.circuit_number)

    warnings = master.warnings
    if mirrored_labels:
        pattern = re.compile(
            r"(?<![\w-])("
            + "|".join(re.escape(label) for label in mirrored_labels)
            + r")(?![\w-])"
        )
        warnings = tuple(
            pattern.sub(lambda m: mirrored_labels[m.group(1)], w) for w in warnings
        )
    return replace(master, circuits=tuple(circuits), warnings=warnings)


class MirrorTransform:
    """Derives a mirror wall's plans from its master's plans."""

    def apply(
        self,
        wall: Wall,
        master_data: DataPlanResult,
        master_power: PowerPlanResult,
        mirror_circuit_count: int | None = None,
    ) -> tuple[DataPlanResult, PowerPlanResult]:
        """Mirror both plans according to the wall's flags.

        Raises:
            ValueError: If the wall is not a mirror wall.
            MirrorMismatchError: If circuit counts differ.
        """
        if not wall.is_mirror:
            raise ValueError(f"Wall {wall.id} is not a mirror wall")

        logger.debug(
            f"Mirroring wall {wall.id} from {wall.imag_master_wall_id}: "
            f"ports={wall.mirror_port_order} circuits={wall.mirror_circuit_mapping}"
        )
        data = build_mirrored_data_plan(master_data, wall.mirror_port_order)
        power = build_mirrored_power_plan(
            master_power, wall.mirror_circuit_mapping, mirror_circuit_count
        )
        return data, power
