"""Pytest configuration and shared fixtures for wall planning tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from ledwall.domain import (
    CabinetVariant,
    CellStatus,
    PixelDimensions,
    PowerProfile,
    PowerStrategy,
    ProcessorModel,
    VoltageMode,
    Wall,
    WallCell,
)
from ledwall.domain.services import SequentialIdGenerator


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Catalog fixtures
# =============================================================================


@pytest.fixture
def square_variant() -> CabinetVariant:
    """500x500 mm cabinet, 192x192 px, 1x1 grid units."""
    return CabinetVariant(
        id="sq",
        variant_name="Square 500",
        width_mm=500,
        height_mm=500,
        pixels=PixelDimensions(192, 192),
        power=PowerProfile(min=50, typ=100, max=150, peak=180),
        weight_kg=8.0,
        recommended_per_soca_120=12,
        recommended_per_soca_208=20,
    )


@pytest.fixture
def tall_variant() -> CabinetVariant:
    """500x1000 mm cabinet, 192x384 px, 1x2 grid units."""
    return CabinetVariant(
        id="tall",
        variant_name="Tall 500x1000",
        width_mm=500,
        height_mm=1000,
        unit_height=2,
        pixels=PixelDimensions(192, 384),
        power=PowerProfile(min=90, typ=180, max=260, peak=300),
        weight_kg=14.0,
    )


@pytest.fixture
def coarse_variant() -> CabinetVariant:
    """500x500 mm cabinet at a coarser 128x128 px pitch."""
    return CabinetVariant(
        id="coarse",
        variant_name="Square 3.9mm",
        width_mm=500,
        height_mm=500,
        pixels=PixelDimensions(128, 128),
        power=PowerProfile(min=40, typ=80, max=120, peak=150),
        weight_kg=7.5,
    )


@pytest.fixture
def variants_by_id(
    square_variant: CabinetVariant,
    tall_variant: CabinetVariant,
    coarse_variant: CabinetVariant,
) -> dict[str, CabinetVariant]:
    return {
        v.id: v for v in (square_variant, tall_variant, coarse_variant)
    }


@pytest.fixture
def processor() -> ProcessorModel:
    """Processor with plenty of ports and a generous budget."""
    return ProcessorModel(
        id="proc",
        model_name="Test Processor",
        ethernet_ports=8,
        max_pixels_per_port_a8s=650_000,
        max_pixels_per_port_a10s=850_000,
    )


# =============================================================================
# Wall fixtures
# =============================================================================


@pytest.fixture
def wall() -> Wall:
    """8x4 unit wall (4 m x 2 m) at 120V on Socapex."""
    return Wall(
        id="main",
        name="Main Wall",
        width_units=8,
        height_units=4,
        voltage_mode=VoltageMode.V120,
        power_strategy=PowerStrategy.SOCAPEX,
    )


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def make_cell() -> Callable[..., WallCell]:
    """Factory for cells with sensible defaults.

    Ids default to ``c<x>-<y>`` and labels to ``C<x><y>`` so tests can
    refer to cells by position.
    """

    def _make(
        x: int,
        y: int,
        variant_id: str | None = "sq",
        width: int = 1,
        height: int = 1,
        status: CellStatus = CellStatus.ACTIVE,
        cell_id: str | None = None,
        label: str | None = None,
    ) -> WallCell:
        return WallCell(
            id=cell_id or f"c{x}-{y}",
            wall_id="main",
            variant_id=variant_id,
            label=label or f"C{x}{y}",
            unit_x=x,
            unit_y=y,
            unit_width=width,
            unit_height=height,
            status=status,
        )

    return _make


@pytest.fixture
def full_square_cells(
    wall: Wall, make_cell: Callable[..., WallCell]
) -> list[WallCell]:
    """Every unit of the 8x4 wall covered by a square cabinet."""
    return [
        make_cell(x, y)
        for y in range(wall.height_units)
        for x in range(wall.width_units)
    ]
