"""Unit tests for power plan generation."""

import pytest

from ledwall.domain import (
    CabinetVariant,
    CircuitGroupingMode,
    PixelDimensions,
    PowerProfile,
    PowerStrategy,
    VoltageMode,
    Wall,
    WallCell,
)
from ledwall.domain.services import (
    DERATE_FACTOR,
    POWER_SOURCE_SPECS,
    PowerPlanBuilder,
    PowerPlanOptions,
    build_power_plan,
    circuit_label,
    clamp_thresholds,
)


def _variant(typ: float, max_: float) -> CabinetVariant:
    return CabinetVariant(
        id="v",
        variant_name="Load Test",
        width_mm=500,
        height_mm=500,
        pixels=PixelDimensions(192, 192),
        power=PowerProfile(min=typ / 2, typ=typ, max=max_, peak=max_ * 1.2),
    )


def _grid(make_cell, width: int, height: int, variant_id: str = "v") -> list[WallCell]:
    return [
        make_cell(x, y, variant_id=variant_id)
        for y in range(height)
        for x in range(width)
    ]


@pytest.fixture
def socapex_wall() -> Wall:
    """6x6 wall at 120V on a single Socapex."""
    return Wall(
        id="soca",
        name="Socapex Wall",
        width_units=6,
        height_units=6,
        voltage_mode=VoltageMode.V120,
        power_strategy=PowerStrategy.SOCAPEX,
    )


class TestPowerSourceSpecs:
    """Tests for the fixed power source table."""

    def test_socapex_phases(self) -> None:
        source = POWER_SOURCE_SPECS[PowerStrategy.SOCAPEX]
        assert source.circuit_count == 6
        assert source.phases == ("A", "B", "C", "A", "B", "C")
        assert source.derated_amps == 20 * DERATE_FACTOR

    def test_l21_breaker(self) -> None:
        source = POWER_SOURCE_SPECS[PowerStrategy.L21_30]
        assert source.breaker_amps == 30
        assert source.derated_amps == pytest.approx(24.0)

    def test_every_strategy_has_a_spec(self) -> None:
        assert set(POWER_SOURCE_SPECS) == set(PowerStrategy)

    @pytest.mark.parametrize(
        "strategy, index, expected",
        [
            (PowerStrategy.SOCAPEX, 0, "SOC-01"),
            (PowerStrategy.SOCAPEX, 5, "SOC-06"),
            (PowerStrategy.EDISON_20A, 0, "EDI-01"),
            (PowerStrategy.L21_30, 2, "L21-03"),
            (PowerStrategy.CAMLOCK_DISTRO, 1, "CAM-02"),
        ],
    )
    def test_circuit_labels(
        self, strategy: PowerStrategy, index: int, expected: str
    ) -> None:
        assert circuit_label(strategy, index) == expected


class TestClampThresholds:
    """Tests for threshold clamping."""

    def test_out_of_range_values_clamped(self) -> None:
        assert clamp_thresholds(30, 150) == (40.0, 120.0)

    def test_hard_limit_never_below_planning(self) -> None:
        assert clamp_thresholds(90, 85) == (90.0, 90.0)

    def test_in_range_values_kept(self) -> None:
        assert clamp_thresholds(80, 100) == (80.0, 100.0)


class TestPowerPlanBuilder:
    """Tests for PowerPlanBuilder.build."""

    def test_overloaded_socapex_is_flagged(self, socapex_wall: Wall, make_cell) -> None:
        """Six 340 W cabinets per circuit at 120V draw 17A, over the 16A derated limit."""
        variant = _variant(typ=340, max_=400)
        cells = _grid(make_cell, 6, 6)

        plan = PowerPlanBuilder().build(socapex_wall, cells, {"v": variant})

        assert len(plan.circuits) == 6
        for circuit in plan.circuits:
            assert len(circuit.cabinet_ids) == 6
            assert circuit.amps.typ == pytest.approx(17.0)
            assert circuit.over_limit
        assert plan.has_overload
        assert any("exceeds the 16.0A derated limit" in w for w in plan.warnings)

    def test_within_limits_not_flagged(self, socapex_wall: Wall, make_cell) -> None:
        """Six 300 W cabinets per circuit at 120V draw 15A."""
        variant = _variant(typ=300, max_=380)
        cells = _grid(make_cell, 6, 6)

        plan = build_power_plan(socapex_wall, cells, {"v": variant})

        for circuit in plan.circuits:
            assert circuit.amps.typ == pytest.approx(15.0)
            assert not circuit.over_limit
        assert not plan.has_overload
        assert plan.estimated_circuit_count == 6
        assert plan.sources_required == 1
        assert plan.warnings == ()

    def test_max_draw_over_breaker_is_flagged(self, socapex_wall: Wall, make_cell) -> None:
        variant = _variant(typ=200, max_=420)
        cells = _grid(make_cell, 6, 6)

        plan = build_power_plan(socapex_wall, cells, {"v": variant})

        assert all(c.over_limit for c in plan.circuits)
        assert all(c.over_hard_limit for c in plan.circuits)
        assert not any(c.over_planning for c in plan.circuits)
        assert any("exceeds the 20A breaker" in w for w in plan.warnings)

    def test_sources_required_when_load_exceeds_one_source(
        self, socapex_wall: Wall, make_cell
    ) -> None:
        """102A typical over 16A circuits needs 7 circuits, so two Socapex."""
        variant = _variant(typ=340, max_=400)
        plan = build_power_plan(socapex_wall, _grid(make_cell, 6, 6), {"v": variant})

        assert plan.totals_amps.typ == pytest.approx(102.0)
        assert plan.estimated_circuit_count == 7
        assert plan.sources_required == 2
        assert any("2 SOCAPEX sources" in w for w in plan.warnings)

    def test_phases_and_labels(self, socapex_wall: Wall, make_cell) -> None:
        plan = build_power_plan(
            socapex_wall, _grid(make_cell, 6, 1), {"v": _variant(100, 150)}
        )
        assert [c.phase for c in plan.circuits] == ["A", "B", "C", "A", "B", "C"]
        assert [c.label for c in plan.circuits] == [
            "SOC-01",
            "SOC-02",
            "SOC-03",
            "SOC-04",
            "SOC-05",
            "SOC-06",
        ]
        assert [c.circuit_number for c in plan.circuits] == [1, 2, 3, 4, 5, 6]

    def test_empty_circuits_are_emitted(self, socapex_wall: Wall, make_cell) -> None:
        plan = build_power_plan(
            socapex_wall, _grid(make_cell, 2, 1), {"v": _variant(100, 150)}
        )
        assert len(plan.circuits) == 6
        assert [len(c.cabinet_ids) for c in plan.circuits] == [1, 1, 0, 0, 0, 0]
        assert plan.circuits[5].watts == PowerProfile.zero()

    def test_round_robin_assignment(self, socapex_wall: Wall, make_cell) -> None:
        cells = _grid(make_cell, 6, 2)
        plan = build_power_plan(socapex_wall, cells, {"v": _variant(100, 150)})
        assert plan.circuits[0].cabinet_ids == ("c0-0", "c0-1")
        assert plan.circuits[5].cabinet_ids == ("c5-0", "c5-1")

    def test_every_cabinet_assigned_once(self, socapex_wall: Wall, make_cell) -> None:
        cells = _grid(make_cell, 5, 5)
        plan = build_power_plan(socapex_wall, cells, {"v": _variant(100, 150)})
        assigned = [cid for c in plan.circuits for cid in c.cabinet_ids]
        assert sorted(assigned) == sorted(c.id for c in cells)

    def test_strategy_and_voltage_override(
        self, socapex_wall: Wall, make_cell
    ) -> None:
        options = PowerPlanOptions(
            strategy=PowerStrategy.L21_30, voltage_mode=VoltageMode.V208
        )
        plan = build_power_plan(
            socapex_wall, _grid(make_cell, 3, 1), {"v": _variant(208, 312)}, options
        )
        assert plan.strategy == PowerStrategy.L21_30
        assert plan.voltage_mode == VoltageMode.V208
        assert [c.label for c in plan.circuits] == ["L21-01", "L21-02", "L21-03"]
        assert plan.circuits[0].amps.typ == pytest.approx(1.0)
        assert plan.circuits[0].breaker_amps == 30

    def test_thresholds_from_wall(self, make_cell) -> None:
        wall = Wall(
            id="w",
            name="w",
            width_units=1,
            height_units=1,
            voltage_mode=VoltageMode.V120,
            power_strategy=PowerStrategy.EDISON_20A,
            planning_threshold_percent=50,
            hard_limit_percent=60,
        )
        plan = build_power_plan(wall, _grid(make_cell, 1, 1), {"v": _variant(1320, 1320)})
        circuit = plan.circuits[0]
        assert circuit.planning_amps == pytest.approx(10.0)
        assert circuit.hard_limit_amps == pytest.approx(12.0)
        assert circuit.over_planning
        assert not circuit.over_hard_limit
        assert not circuit.over_limit

    def test_recommended_count_warning(
        self, make_cell, square_variant: CabinetVariant
    ) -> None:
        """Thirteen cabinets per Socapex circuit at 120V beats the catalog's 12."""
        wall = Wall(
            id="w",
            name="w",
            width_units=13,
            height_units=6,
            voltage_mode=VoltageMode.V120,
            power_strategy=PowerStrategy.SOCAPEX,
        )
        plan = build_power_plan(
            wall, _grid(make_cell, 13, 6, "sq"), {"sq": square_variant}
        )
        assert all(len(c.cabinet_ids) == 13 for c in plan.circuits)
        assert any("recommends at most 12" in w for w in plan.warnings)

    def test_unknown_variant_excluded(self, socapex_wall: Wall, make_cell) -> None:
        cells = [make_cell(0, 0, variant_id="v"), make_cell(1, 0, variant_id="ghost")]
        plan = build_power_plan(socapex_wall, cells, {"v": _variant(100, 150)})
        assigned = [cid for c in plan.circuits for cid in c.cabinet_ids]
        assert assigned == ["c0-0"]
        assert any("ghost" in w for w in plan.warnings)

    def test_build_is_idempotent(self, socapex_wall: Wall, make_cell) -> None:
        cells = _grid(make_cell, 6, 6)
        variants = {"v": _variant(340, 400)}
        assert build_power_plan(socapex_wall, cells, variants) == build_power_plan(
            socapex_wall, list(reversed(cells)), variants
        )


class TestGroupingModes:
    """Tests for circuit grouping order."""

    @pytest.fixture
    def edison_wall(self) -> Wall:
        return Wall(
            id="e",
            name="e",
            width_units=8,
            height_units=2,
            voltage_mode=VoltageMode.V120,
            power_strategy=PowerStrategy.EDISON_20A,
        )

    def test_row_major(self, edison_wall: Wall, make_cell) -> None:
        plan = build_power_plan(
            edison_wall, _grid(make_cell, 8, 2), {"v": _variant(10, 10)}
        )
        ids = plan.circuits[0].cabinet_ids
        assert ids[:2] == ("c0-0", "c1-0")
        assert ids[8] == "c0-1"

    def test_by_section(self, edison_wall: Wall, make_cell) -> None:
        """Four-column sections are visited one at a time."""
        options = PowerPlanOptions(grouping_mode=CircuitGroupingMode.BY_SECTION)
        plan = build_power_plan(
            edison_wall, _grid(make_cell, 8, 2), {"v": _variant(10, 10)}, options
        )
        ids = plan.circuits[0].cabinet_ids
        assert ids[:8] == (
            "c0-0",
            "c1-0",
            "c2-0",
            "c3-0",
            "c0-1",
            "c1-1",
            "c2-1",
            "c3-1",
        )
        assert ids[8] == "c4-0"

    def test_by_label(self, edison_wall: Wall, make_cell) -> None:
        cells = [
            make_cell(0, 0, variant_id="v", label="C003"),
            make_cell(1, 0, variant_id="v", label="C001"),
            make_cell(2, 0, variant_id="v", label="C002"),
        ]
        options = PowerPlanOptions(grouping_mode=CircuitGroupingMode.BY_LABEL)
        plan = build_power_plan(edison_wall, cells, {"v": _variant(10, 10)}, options)
        assert plan.circuits[0].cabinet_ids == ("c1-0", "c2-0", "c0-0")
