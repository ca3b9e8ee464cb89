"""Unit tests for data plan generation."""

import pytest

from ledwall.domain import (
    CabinetVariant,
    CellStatus,
    DataPathMode,
    DeploymentType,
    ProcessorModel,
    RackLocation,
    ReceivingCardModel,
    Wall,
    WallCell,
)
from ledwall.domain.services import (
    DataPlanBuilder,
    DataPlanOptions,
    build_data_plan,
    compute_row_bands,
    compute_safe_boundaries,
    estimate_home_run_distance_meters,
    order_cabinets,
    port_label,
)


@pytest.fixture
def two_port_processor() -> ProcessorModel:
    return ProcessorModel(
        id="tiny",
        model_name="Two Port",
        ethernet_ports=2,
        max_pixels_per_port_a8s=650_000,
        max_pixels_per_port_a10s=850_000,
    )


class TestSafeBoundaries:
    """Tests for row banding."""

    def test_every_row_is_safe_for_square_cabinets(
        self, wall: Wall, full_square_cells: list[WallCell]
    ) -> None:
        assert compute_safe_boundaries(full_square_cells, wall.height_units) == [
            0,
            1,
            2,
            3,
            4,
        ]

    def test_tall_cabinet_removes_boundary(self, make_cell) -> None:
        """A 1x2 cabinet at the top covers rows 0-1, so row 1 is not safe."""
        cells = [
            make_cell(0, 0, variant_id="tall", height=2),
            make_cell(1, 0),
            make_cell(1, 1),
            make_cell(0, 2),
            make_cell(0, 3),
        ]
        assert compute_safe_boundaries(cells, 4) == [0, 2, 3, 4]

    def test_empty_wall_keeps_outer_boundaries(self) -> None:
        assert compute_safe_boundaries([], 3) == [0, 1, 2, 3]

    def test_bands_skip_empty_rows(
        self, make_cell, variants_by_id: dict[str, CabinetVariant]
    ) -> None:
        cells = [make_cell(0, 0), make_cell(0, 2)]
        bands = compute_row_bands(cells, 3, variants_by_id)
        assert [(b.row_start, b.row_end) for b in bands] == [(0, 1), (2, 3)]

    def test_band_pixel_load(
        self, make_cell, variants_by_id: dict[str, CabinetVariant]
    ) -> None:
        cells = [make_cell(0, 0, variant_id="tall", height=2), make_cell(1, 0)]
        bands = compute_row_bands(cells, 2, variants_by_id)
        assert len(bands) == 1
        assert bands[0].pixel_load == 192 * 384 + 192 * 192


class TestOrderCabinets:
    """Tests for data path ordering."""

    def test_snake_rows(self, make_cell) -> None:
        cells = [make_cell(x, y) for y in range(2) for x in range(3)]
        ordered = order_cabinets(cells, DataPathMode.SNAKE_ROWS)
        assert [c.id for c in ordered] == [
            "c0-0",
            "c1-0",
            "c2-0",
            "c2-1",
            "c1-1",
            "c0-1",
        ]

    def test_snake_columns(self, make_cell) -> None:
        cells = [make_cell(x, y) for y in range(2) for x in range(2)]
        ordered = order_cabinets(cells, DataPathMode.SNAKE_COLUMNS)
        assert [c.id for c in ordered] == ["c0-0", "c0-1", "c1-1", "c1-0"]

    def test_custom_follows_labels(self, make_cell) -> None:
        cells = [make_cell(0, 0, label="B"), make_cell(1, 0, label="A")]
        ordered = order_cabinets(cells, DataPathMode.CUSTOM)
        assert [c.label for c in ordered] == ["A", "B"]


class TestDataPlanBuilder:
    """Tests for DataPlanBuilder.build."""

    def test_one_run_per_row(
        self,
        wall: Wall,
        full_square_cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        plan = DataPlanBuilder().build(
            wall, full_square_cells, variants_by_id, processor, ReceivingCardModel.A8S
        )

        assert len(plan.runs) == 4
        assert [r.run_number for r in plan.runs] == [1, 2, 3, 4]
        assert [r.processor_port for r in plan.runs] == [
            "Port 1",
            "Port 2",
            "Port 3",
            "Port 4",
        ]
        assert all(r.cabinet_count == 8 for r in plan.runs)
        assert all(r.jumper_count == 7 for r in plan.runs)
        assert plan.total_pixels == 32 * 192 * 192
        assert not plan.has_overload
        assert plan.warnings == ()

    def test_port_exhaustion_wraps_and_flags(
        self,
        make_cell,
        variants_by_id: dict[str, CabinetVariant],
        two_port_processor: ProcessorModel,
    ) -> None:
        """Three rows on a two-port processor: the third run wraps to Port 1."""
        wall = Wall(id="w", name="w", width_units=4, height_units=3)
        cells = [make_cell(x, y) for y in range(3) for x in range(4)]

        plan = build_data_plan(
            wall, cells, variants_by_id, two_port_processor, ReceivingCardModel.A8S
        )

        assert len(plan.runs) == 3
        assert not plan.runs[0].over_limit
        assert not plan.runs[1].over_limit
        third = plan.runs[2]
        assert third.over_limit
        assert third.port_index == 0
        assert third.processor_port == "Port 1"
        assert any("wraps onto Port 1" in w for w in plan.warnings)

    def test_pixel_budget_exceeded(
        self,
        wall: Wall,
        full_square_cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
    ) -> None:
        small = ProcessorModel(
            id="small",
            model_name="Small",
            ethernet_ports=8,
            max_pixels_per_port_a8s=200_000,
            max_pixels_per_port_a10s=400_000,
        )
        a8s = build_data_plan(
            wall, full_square_cells, variants_by_id, small, ReceivingCardModel.A8S
        )
        a10s = build_data_plan(
            wall, full_square_cells, variants_by_id, small, ReceivingCardModel.A10S
        )

        assert all(r.over_limit for r in a8s.runs)
        assert a8s.per_port_budget == 200_000
        assert len(a8s.warnings) == 4
        assert not a10s.has_overload

    def test_band_boundaries_respect_tall_cabinets(
        self,
        make_cell,
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        wall = Wall(id="w", name="w", width_units=3, height_units=2)
        cells = [
            make_cell(0, 0, variant_id="tall", height=2),
            make_cell(1, 0),
            make_cell(2, 0),
            make_cell(1, 1),
            make_cell(2, 1),
        ]

        plan = build_data_plan(
            wall, cells, variants_by_id, processor, ReceivingCardModel.A8S
        )

        assert len(plan.runs) == 1
        run = plan.runs[0]
        assert (run.row_start, run.row_end) == (0, 2)
        assert run.cabinet_ids == ("c0-0", "c1-0", "c2-0", "c2-1", "c1-1")

    def test_loom_bundle_and_port_group(
        self,
        make_cell,
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        wall = Wall(id="w", name="w", width_units=1, height_units=6)
        cells = [make_cell(0, y) for y in range(6)]
        options = DataPlanOptions(loom_bundle_size=4, port_group_size=2)

        plan = build_data_plan(
            wall, cells, variants_by_id, processor, ReceivingCardModel.A8S, options
        )

        assert [r.loom_bundle for r in plan.runs] == [1, 1, 1, 1, 2, 2]
        assert [r.port_group for r in plan.runs] == [1, 1, 2, 2, 3, 3]

    def test_home_run_and_cable_origin(
        self,
        wall: Wall,
        full_square_cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        """An 8x4 wall (4 m x 2 m) racked stage left needs about 1.5 m."""
        plan = build_data_plan(
            wall, full_square_cells, variants_by_id, processor, ReceivingCardModel.A8S
        )
        run = plan.runs[0]
        assert run.estimated_home_run_meters == 1.5
        assert run.estimated_home_run_feet == pytest.approx(4.92)
        assert run.cable_origin == "ground"

        flown = Wall(
            id="f",
            name="f",
            width_units=8,
            height_units=4,
            deployment_type=DeploymentType.FLOWN,
        )
        flown_plan = build_data_plan(
            flown, full_square_cells, variants_by_id, processor, ReceivingCardModel.A8S
        )
        assert flown_plan.runs[0].cable_origin == "air"

    def test_rack_override(
        self,
        wall: Wall,
        full_square_cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        options = DataPlanOptions(rack_location=RackLocation.FOH)
        plan = build_data_plan(
            wall,
            full_square_cells,
            variants_by_id,
            processor,
            ReceivingCardModel.A8S,
            options,
        )
        assert plan.rack_location == RackLocation.FOH
        assert plan.runs[0].estimated_home_run_meters == 6.0

    def test_inactive_cells_ignored(
        self,
        wall: Wall,
        make_cell,
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        cells = [
            make_cell(0, 0),
            make_cell(1, 0, status=CellStatus.SPARE),
            make_cell(2, 0, variant_id=None, status=CellStatus.VOID),
        ]
        plan = build_data_plan(
            wall, cells, variants_by_id, processor, ReceivingCardModel.A8S
        )
        assert plan.runs[0].cabinet_ids == ("c0-0",)

    def test_unknown_variants_warn_when_no_runs(
        self,
        wall: Wall,
        make_cell,
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        cells = [make_cell(0, 0, variant_id="ghost")]
        plan = build_data_plan(
            wall, cells, variants_by_id, processor, ReceivingCardModel.A8S
        )
        assert plan.runs == ()
        assert len(plan.warnings) == 2
        assert "ghost" in plan.warnings[0]
        assert "no data runs" in plan.warnings[1]

    def test_empty_wall_has_no_runs_and_no_warnings(
        self,
        wall: Wall,
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        plan = build_data_plan(wall, [], variants_by_id, processor, ReceivingCardModel.A8S)
        assert plan.runs == ()
        assert plan.warnings == ()
        assert plan.total_pixels == 0

    def test_build_is_deterministic(
        self,
        wall: Wall,
        full_square_cells: list[WallCell],
        variants_by_id: dict[str, CabinetVariant],
        processor: ProcessorModel,
    ) -> None:
        first = build_data_plan(
            wall, full_square_cells, variants_by_id, processor, ReceivingCardModel.A8S
        )
        second = build_data_plan(
            wall,
            list(reversed(full_square_cells)),
            variants_by_id,
            processor,
            ReceivingCardModel.A8S,
        )
        assert first == second


class TestHelpers:
    """Tests for small data plan helpers."""

    def test_port_label_is_one_based(self) -> None:
        assert port_label(0) == "Port 1"
        assert port_label(9) == "Port 10"

    @pytest.mark.parametrize(
        "rack, expected",
        [
            (RackLocation.SL, 1.5),
            (RackLocation.SR, 1.5),
            (RackLocation.USC, 1.0),
            (RackLocation.FOH, 6.0),
        ],
    )
    def test_home_run_estimates(self, rack: RackLocation, expected: float) -> None:
        assert estimate_home_run_distance_meters(4.0, 2.0, rack) == pytest.approx(expected)

    def test_options_reject_zero_sizes(self) -> None:
        with pytest.raises(ValueError):
            DataPlanOptions(loom_bundle_size=0)
        with pytest.raises(ValueError):
            DataPlanOptions(port_group_size=0)
