"""Built-in catalog defaults: base unit size, processors and stock cabinets."""

from __future__ import annotations

from .entities import CabinetVariant, ProcessorModel
from .value_objects import PixelDimensions, PowerProfile

BASE_UNIT_MM = 500.0

DEFAULT_PROCESSORS: tuple[ProcessorModel, ...] = (
    ProcessorModel(
        id="MX20",
        manufacturer="Novastar",
        model_name="Novastar MX20",
        ethernet_ports=10,
        max_pixels_per_port_a8s=650_000,
        max_pixels_per_port_a10s=850_000,
    ),
    ProcessorModel(
        id="MX30",
        manufacturer="Novastar",
        model_name="Novastar MX30",
        ethernet_ports=16,
        max_pixels_per_port_a8s=700_000,
        max_pixels_per_port_a10s=900_000,
    ),
    ProcessorModel(
        id="MX40",
        manufacturer="Novastar",
        model_name="Novastar MX40",
        ethernet_ports=20,
        max_pixels_per_port_a8s=750_000,
        max_pixels_per_port_a10s=950_000,
    ),
)

DEFAULT_VARIANTS: tuple[CabinetVariant, ...] = (
    CabinetVariant(
        id="P500x500",
        variant_name="500x500 Cabinet",
        width_mm=500,
        height_mm=500,
        depth_mm=80,
        unit_width=1,
        unit_height=1,
        pixels=PixelDimensions(192, 192),
        power=PowerProfile(min=55, typ=95, max=130, peak=160),
        weight_kg=8.2,
        recommended_per_20a_120=12,
        recommended_per_20a_208=20,
        recommended_per_soca_120=12,
        recommended_per_soca_208=20,
        recommended_per_l2130=20,
    ),
    CabinetVariant(
        id="P500x1000",
        variant_name="500x1000 Cabinet",
        width_mm=500,
        height_mm=1000,
        depth_mm=80,
        unit_width=1,
        unit_height=2,
        pixels=PixelDimensions(192, 384),
        power=PowerProfile(min=95, typ=180, max=250, peak=320),
        weight_kg=13.9,
        recommended_per_20a_120=6,
        recommended_per_20a_208=10,
        recommended_per_soca_120=6,
        recommended_per_soca_208=10,
        recommended_per_l2130=10,
    ),
)


class UnknownCatalogItemError(KeyError):
    """Raised when a catalog id does not exist."""

    def __init__(self, kind: str, item_id: str) -> None:
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"Unknown {kind}: {item_id}")

    def __str__(self) -> str:
        return f"Unknown {self.kind}: {self.item_id}"


def get_default_processor(processor_id: str) -> ProcessorModel:
    for processor in DEFAULT_PROCESSORS:
        if processor.id == processor_id:
            return processor
    raise UnknownCatalogItemError("processor", processor_id)


def default_variants_by_id() -> dict[str, CabinetVariant]:
    return {variant.id: variant for variant in DEFAULT_VARIANTS}
