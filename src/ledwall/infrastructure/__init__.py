"""Infrastructure layer - output formatting and export."""

from .formatters import (
    DataPlanFormatter,
    JsonPlanExporter,
    PowerPlanFormatter,
    TotalsFormatter,
    WallGridFormatter,
)

__all__ = [
    "DataPlanFormatter",
    "JsonPlanExporter",
    "PowerPlanFormatter",
    "TotalsFormatter",
    "WallGridFormatter",
]
