"""Contracts shared between layers."""

from .protocols import (
    DataPlanBuilderProtocol,
    IdGenerator,
    PowerPlanBuilderProtocol,
    TotalsAggregatorProtocol,
)

__all__ = [
    "DataPlanBuilderProtocol",
    "IdGenerator",
    "PowerPlanBuilderProtocol",
    "TotalsAggregatorProtocol",
]
