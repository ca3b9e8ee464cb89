"""Service protocols for dependency injection.

The planning services depend on these protocols rather than on concrete
implementations so tests and callers can swap in their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ledwall.domain.entities import CabinetVariant, ProcessorModel, Wall, WallCell
    from ledwall.domain.results import DataPlanResult, PowerPlanResult, WallTotals
    from ledwall.domain.services.data_plan import DataPlanOptions
    from ledwall.domain.services.power_plan import PowerPlanOptions
    from ledwall.domain.value_objects import ReceivingCardModel


@runtime_checkable
class IdGenerator(Protocol):
    """Source of identifiers for newly created cells.

    Example:
        ```python
        class FixedIds:
            def __init__(self) -> None:
                self._n = 0

            def new_id(self) -> str:
                self._n += 1
                return f"cell-{self._n}"
        ```
    """

    def new_id(self) -> str:
        """Return a fresh identifier."""
        ...


class DataPlanBuilderProtocol(Protocol):
    """Protocol for data plan generation."""

    def build(
        self,
        wall: Wall,
        cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
        receiving_card: ReceivingCardModel,
        options: DataPlanOptions | None = None,
    ) -> DataPlanResult:
        """Partition active cabinets into runs and assign processor ports."""
        ...


class PowerPlanBuilderProtocol(Protocol):
    """Protocol for power plan generation."""

    def build(
        self,
        wall: Wall,
        cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        options: PowerPlanOptions | None = None,
    ) -> PowerPlanResult:
        """Bucket active cabinets into circuits and check breaker limits."""
        ...


class TotalsAggregatorProtocol(Protocol):
    """Protocol for wall summary totals."""

    def aggregate(
        self,
        wall: Wall,
        cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
    ) -> WallTotals:
        """Summarize counts, weight, power and resolution for a wall."""
        ...
