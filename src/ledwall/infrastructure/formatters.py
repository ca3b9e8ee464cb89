"""Output formatters and exporters for wall plans."""

from __future__ import annotations

import json
import logging
from typing import Any

from ledwall.application import WallPlanOutput
from ledwall.application.config import SUPPORTED_VERSIONS
from ledwall.domain import DataPlanResult, PowerPlanResult, Wall, WallCell, WallTotals
from ledwall.domain.value_objects import CellStatus

logger = logging.getLogger(__name__)

# Shown in place of the cabinet id list when a run or circuit has many cabinets
MAX_LISTED_CABINETS = 8


def _cabinet_list(cabinet_ids: tuple[str, ...], labels_by_id: dict[str, str]) -> str:
    labels = [labels_by_id.get(cabinet_id, cabinet_id) for cabinet_id in cabinet_ids]
    if len(labels) > MAX_LISTED_CABINETS:
        return f"{labels[0]}..{labels[-1]} ({len(labels)})"
    return ", ".join(labels) or "-"


class DataPlanFormatter:
    """Formats data plans for display."""

    def format(
        self, plan: DataPlanResult, labels_by_id: dict[str, str] | None = None
    ) -> str:
        """Format a data plan as a run table.

        Args:
            plan: Data plan to display.
            labels_by_id: Cell labels to show instead of cell ids.
        """
        labels_by_id = labels_by_id or {}
        lines = [
            "DATA PLAN",
            "=" * 70,
            f"Processor: {plan.processor_id} ({plan.port_count} ports, "
            f"{plan.per_port_budget:,} px/port on {plan.receiving_card.value})",
            f"Path: {plan.data_path_mode.value}   Rack: {plan.rack_location.value}",
            "",
        ]
        if not plan.runs:
            lines.append("No data runs.")
            return "\n".join(lines)

        lines.append(
            f"{'Run':<5} {'Port':<9} {'Rows':<8} {'Cabs':<6} {'Pixels':<11} "
            f"{'Loom':<6} {'Group':<6} {'Home run':<10}"
        )
        lines.append("-" * 70)
        for run in plan.runs:
            flag = "  !" if run.over_limit else ""
            lines.append(
                f"{run.run_number:<5} {run.processor_port:<9} "
                f"{f'{run.row_start}-{run.row_end - 1}':<8} {run.cabinet_count:<6} "
                f"{run.pixel_load:<11,} {run.loom_bundle:<6} {run.port_group:<6} "
                f"{run.estimated_home_run_meters:.1f} m{flag}"
            )
            lines.append(f"      {_cabinet_list(run.cabinet_ids, labels_by_id)}")
        lines.append("-" * 70)
        lines.append(f"{'TOTAL':<29} {plan.total_pixels:<11,}")
        return "\n".join(lines)


class PowerPlanFormatter:
    """Formats power plans for display."""

    def format(
        self, plan: PowerPlanResult, labels_by_id: dict[str, str] | None = None
    ) -> str:
        """Format a power plan as a circuit table."""
        labels_by_id = labels_by_id or {}
        lines = [
            "POWER PLAN",
            "=" * 70,
            f"Source: {plan.strategy.value} at {int(plan.voltage_mode)}V "
            f"({plan.circuit_count} circuits)",
            f"Thresholds: planning {plan.planning_threshold_percent:g}%, "
            f"hard limit {plan.hard_limit_percent:g}%",
            "",
            f"{'Circuit':<9} {'Phase':<6} {'Cabs':<6} {'Typ W':<9} {'Max W':<9} "
            f"{'Typ A':<8} {'Max A':<8} {'Limit A':<8}",
            "-" * 70,
        ]
        for circuit in plan.circuits:
            flag = "  !" if circuit.over_limit else ""
            lines.append(
                f"{circuit.label:<9} {circuit.phase:<6} {len(circuit.cabinet_ids):<6} "
                f"{circuit.watts.typ:<9.0f} {circuit.watts.max:<9.0f} "
                f"{circuit.amps.typ:<8.2f} {circuit.amps.max:<8.2f} "
                f"{circuit.derated_amps:<8.1f}{flag}"
            )
            if circuit.cabinet_ids:
                lines.append(f"          {_cabinet_list(circuit.cabinet_ids, labels_by_id)}")
        lines.append("-" * 70)
        lines.append(
            f"{'TOTAL':<22} {plan.totals_watts.typ:<9.0f} {plan.totals_watts.max:<9.0f} "
            f"{plan.totals_amps.typ:<8.2f} {plan.totals_amps.max:<8.2f}"
        )
        lines.append(
            f"Estimated circuits: {plan.estimated_circuit_count} "
            f"({plan.sources_required} source{'s' if plan.sources_required != 1 else ''})"
        )
        return "\n".join(lines)


class TotalsFormatter:
    """Formats wall totals reports."""

    def format(self, totals: WallTotals) -> str:
        lines = [
            "WALL TOTALS",
            "=" * 60,
            "",
            f"Size: {totals.width_meters:.2f} m x {totals.height_meters:.2f} m "
            f"({totals.width_feet_inches_label} x {totals.height_feet_inches_label})",
            f"Cabinets: {totals.total_cabinets} active, {totals.spare_cabinets} spare",
            f"Resolution: {totals.wall_resolution.width} x {totals.wall_resolution.height} "
            f"({totals.total_pixels:,} cabinet pixels)",
            f"Weight: {totals.total_weight_kg:.1f} kg ({totals.total_weight_lbs:.1f} lbs)",
            f"Power: {totals.total_power.typ:.0f} W typ / {totals.total_power.max:.0f} W max",
            f"Current: {totals.total_current.typ:.2f} A typ / {totals.total_current.max:.2f} A max",
        ]
        if totals.mixed_pitch_warning:
            lines.append(f"Note: {totals.mixed_pitch_warning}")

        if totals.variant_breakdown:
            lines.append("")
            lines.append(f"{'Variant':<24} {'Qty':<6} {'Weight kg':<11} {'Typ W':<9}")
            lines.append("-" * 60)
            for rollup in totals.variant_breakdown:
                lines.append(
                    f"{rollup.variant_name:<24} {rollup.count:<6} "
                    f"{rollup.weight_kg:<11.1f} {rollup.power.typ:<9.0f}"
                )
        return "\n".join(lines)


class WallGridFormatter:
    """Formats an ASCII map of the wall grid.

    Each unit shows the first character of its cell's status: ``#`` for an
    active cabinet, ``s`` spare, ``v`` void, ``x`` cutout, ``.`` empty.
    """

    SYMBOLS = {
        CellStatus.ACTIVE: "#",
        CellStatus.SPARE: "s",
        CellStatus.VOID: "v",
        CellStatus.CUTOUT: "x",
    }

    def format(self, wall: Wall, cells: list[WallCell]) -> str:
        grid = [["." for _ in range(wall.width_units)] for _ in range(wall.height_units)]
        for cell in cells:
            for y in range(cell.unit_y, min(cell.rect.bottom, wall.height_units)):
                for x in range(cell.unit_x, min(cell.rect.right, wall.width_units)):
                    # Physical cabinets win over markers sharing the unit
                    if grid[y][x] in ("#", "s"):
                        continue
                    grid[y][x] = self.SYMBOLS[cell.status]

        lines = [
            f"WALL {wall.name} ({wall.width_units} x {wall.height_units} units)",
            "=" * max(20, wall.width_units + 2),
            "+" + "-" * wall.width_units + "+",
        ]
        lines.extend("|" + "".join(row) + "|" for row in grid)
        lines.append("+" + "-" * wall.width_units + "+")
        return "\n".join(lines)


class JsonPlanExporter:
    """Exports wall plans as JSON."""

    SCHEMA_VERSION = max(SUPPORTED_VERSIONS)

    def to_payload(self, output: WallPlanOutput) -> dict[str, Any]:
        if not output.is_valid:
            return {
                "schema_version": self.SCHEMA_VERSION,
                "wall_id": output.wall.id,
                "errors": list(output.errors),
            }
        payload = {"schema_version": self.SCHEMA_VERSION}
        payload.update(output.to_dict())
        payload["cells"] = [
            {
                "id": cell.id,
                "label": cell.label,
                "variant_id": cell.variant_id,
                "x": cell.unit_x,
                "y": cell.unit_y,
                "unit_width": cell.unit_width,
                "unit_height": cell.unit_height,
                "status": cell.status.value,
            }
            for cell in output.cells
        ]
        return payload

    def export(self, output: WallPlanOutput) -> str:
        """Export plan output as a JSON string."""
        logger.debug(f"Exporting plan for wall {output.wall.id} as JSON")
        return json.dumps(self.to_payload(output), indent=2)

    def export_many(self, outputs: list[WallPlanOutput]) -> str:
        """Export a master and its mirror (or any set of walls) as one document."""
        return json.dumps(
            {
                "schema_version": self.SCHEMA_VERSION,
                "walls": [self.to_payload(output) for output in outputs],
            },
            indent=2,
        )
