"""Unit tests for the wall plan configuration schema."""

from typing import Any

import pytest
from pydantic import ValidationError

from ledwall.application.config import (
    CellConfig,
    PlanConfiguration,
    PowerConfig,
    PowerProfileConfig,
    WallConfig,
)
from ledwall.domain import (
    CellStatus,
    ImagRole,
    PowerStrategy,
    ReceivingCardModel,
    VoltageMode,
)


def _plan(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "schema_version": "1.0",
        "wall": {"id": "main", "width_units": 8, "height_units": 4},
        "processor_id": "MX40",
    }
    data.update(overrides)
    return data


class TestPlanConfiguration:
    """Tests for the root configuration model."""

    def test_minimal_config_defaults(self) -> None:
        config = PlanConfiguration.model_validate(_plan())

        assert config.wall.voltage == VoltageMode.V208
        assert config.wall.power_strategy == PowerStrategy.SOCAPEX
        assert config.receiving_card == ReceivingCardModel.A8S
        assert config.variants == []
        assert config.cells == []
        assert config.autofill is None

    @pytest.mark.parametrize("version", ["1.0", "1.1", "1.7"])
    def test_supported_versions(self, version: str) -> None:
        config = PlanConfiguration.model_validate(_plan(schema_version=version))
        assert config.schema_version == version

    @pytest.mark.parametrize("version", ["2.0", "0.9"])
    def test_unsupported_major_version_rejected(self, version: str) -> None:
        with pytest.raises(ValidationError, match="Unsupported schema version"):
            PlanConfiguration.model_validate(_plan(schema_version=version))

    def test_malformed_version_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlanConfiguration.model_validate(_plan(schema_version="v1"))

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlanConfiguration.model_validate(_plan(extra_field=True))

    def test_processor_required(self) -> None:
        data = _plan()
        del data["processor_id"]
        with pytest.raises(ValidationError, match="exactly one"):
            PlanConfiguration.model_validate(data)

    def test_processor_and_id_are_exclusive(self) -> None:
        processor = {
            "id": "custom",
            "model_name": "Custom",
            "ethernet_ports": 4,
            "max_pixels_per_port_a8s": 500000,
            "max_pixels_per_port_a10s": 700000,
        }
        with pytest.raises(ValidationError, match="exactly one"):
            PlanConfiguration.model_validate(_plan(processor=processor))

    def test_duplicate_variant_ids_rejected(self) -> None:
        variant = {
            "id": "v",
            "variant_name": "V",
            "width_mm": 500,
            "height_mm": 500,
            "pixels_width": 192,
            "pixels_height": 192,
            "power": {"typ": 100, "max": 150},
        }
        with pytest.raises(ValidationError, match="duplicate variant id"):
            PlanConfiguration.model_validate(_plan(variants=[variant, variant]))

    def test_duplicate_cell_ids_rejected(self) -> None:
        cells = [
            {"id": "a", "variant_id": "P500x500", "x": 0, "y": 0},
            {"id": "a", "variant_id": "P500x500", "x": 1, "y": 0},
        ]
        with pytest.raises(ValidationError, match="duplicate cell ids"):
            PlanConfiguration.model_validate(_plan(cells=cells))


class TestWallConfig:
    """Tests for wall settings."""

    def test_size_in_meters_accepted(self) -> None:
        wall = WallConfig(id="w", width_meters=4.0, height_meters=2.0)
        assert wall.width_units is None

    def test_mixed_units_per_axis_accepted(self) -> None:
        wall = WallConfig(id="w", width_units=8, height_feet=6.5)
        assert wall.height_feet == 6.5

    def test_missing_height_rejected(self) -> None:
        with pytest.raises(ValidationError, match="wall height"):
            WallConfig(id="w", width_units=8)

    def test_zero_units_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WallConfig(id="w", width_units=0, height_units=4)

    @pytest.mark.parametrize(
        "alias, expected",
        [
            ("20A", PowerStrategy.EDISON_20A),
            ("edison", PowerStrategy.EDISON_20A),
            ("L21-30", PowerStrategy.L21_30),
            ("soca", PowerStrategy.SOCAPEX),
            ("CAMLOCK", PowerStrategy.CAMLOCK_DISTRO),
            ("socapex", PowerStrategy.SOCAPEX),
        ],
    )
    def test_power_strategy_aliases(self, alias: str, expected: PowerStrategy) -> None:
        wall = WallConfig(id="w", width_units=1, height_units=1, power_strategy=alias)
        assert wall.power_strategy == expected

    def test_unknown_power_strategy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WallConfig(id="w", width_units=1, height_units=1, power_strategy="GENERATOR")

    def test_voltage_must_be_known(self) -> None:
        with pytest.raises(ValidationError):
            WallConfig(id="w", width_units=1, height_units=1, voltage=240)

    @pytest.mark.parametrize(
        "planning, hard",
        [(30, 100), (96, 100), (80, 79), (80, 121)],
    )
    def test_threshold_ranges(self, planning: float, hard: float) -> None:
        with pytest.raises(ValidationError):
            WallConfig(
                id="w",
                width_units=1,
                height_units=1,
                planning_threshold_percent=planning,
                hard_limit_percent=hard,
            )

    def test_hard_limit_below_planning_rejected(self) -> None:
        with pytest.raises(ValidationError, match="hard_limit_percent"):
            WallConfig(
                id="w",
                width_units=1,
                height_units=1,
                planning_threshold_percent=90,
                hard_limit_percent=85,
            )

    def test_mirror_requires_master(self) -> None:
        with pytest.raises(ValidationError, match="imag_master_wall_id"):
            WallConfig(id="w", width_units=1, height_units=1, imag_role="mirror")

    def test_mirror_with_master_accepted(self) -> None:
        wall = WallConfig(
            id="w",
            width_units=1,
            height_units=1,
            imag_role="mirror",
            imag_master_wall_id="main",
        )
        assert wall.imag_role == ImagRole.MIRROR


class TestCellAndPowerConfig:
    """Tests for cell, power profile and power option models."""

    def test_cell_defaults(self) -> None:
        cell = CellConfig(variant_id="P500x500", x=0, y=0)
        assert cell.status == CellStatus.ACTIVE
        assert cell.unit_width is None

    def test_negative_coordinates_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CellConfig(variant_id="P500x500", x=-1, y=0)

    def test_marker_needs_footprint(self) -> None:
        with pytest.raises(ValidationError, match="unit_width and unit_height"):
            CellConfig(x=0, y=0, status="void")

    def test_marker_with_footprint_accepted(self) -> None:
        cell = CellConfig(x=0, y=0, status="cutout", unit_width=2, unit_height=1)
        assert cell.variant_id is None
        assert cell.status == CellStatus.CUTOUT

    def test_typ_above_max_rejected(self) -> None:
        with pytest.raises(ValidationError, match="typ"):
            PowerProfileConfig(typ=200, max=150)

    def test_power_strategy_override_alias(self) -> None:
        assert PowerConfig(strategy="L21-30").strategy == PowerStrategy.L21_30
        assert PowerConfig().strategy is None
