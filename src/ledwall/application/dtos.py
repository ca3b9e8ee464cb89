"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ledwall.domain import (
    DataPlanResult,
    PowerPlanResult,
    Wall,
    WallCell,
    WallTotals,
)


@dataclass
class WallPlanOutput:
    """Output DTO containing every plan for one wall.

    Attributes:
        wall: The wall that was planned.
        cells: Cells the plans were computed from.
        data_plan: Data plan, None when planning failed.
        power_plan: Power plan, None when planning failed.
        totals: Report totals, None when planning failed.
        warnings: Warnings from every plan, in data, power, totals order.
        errors: Error messages if planning failed.
        mirrored_from: Master wall id when the plans were mirrored.
    """

    wall: Wall
    cells: list[WallCell]
    data_plan: DataPlanResult | None = None
    power_plan: PowerPlanResult | None = None
    totals: WallTotals | None = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    mirrored_from: str | None = None

    @property
    def is_valid(self) -> bool:
        """Check if the plans were generated successfully."""
        return len(self.errors) == 0

    @property
    def has_overload(self) -> bool:
        return bool(
            (self.data_plan and self.data_plan.has_overload)
            or (self.power_plan and self.power_plan.has_overload)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "wall_id": self.wall.id,
            "wall_name": self.wall.name,
            "mirrored_from": self.mirrored_from,
            "data_plan": self.data_plan.to_dict() if self.data_plan else None,
            "power_plan": self.power_plan.to_dict() if self.power_plan else None,
            "totals": self.totals.to_dict() if self.totals else None,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }
