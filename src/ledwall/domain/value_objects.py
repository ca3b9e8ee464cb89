"""Enumerations and immutable value objects for LED wall planning."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class RackLocation(str, Enum):
    """Where the processor/power rack sits relative to the wall.

    Attributes:
        SL: Stage left.
        SR: Stage right.
        USC: Upstage center, directly behind the wall.
        FOH: Front of house.
    """

    SL = "SL"
    SR = "SR"
    USC = "USC"
    FOH = "FOH"


class DeploymentType(str, Enum):
    """How the wall is supported."""

    GROUND_STACK = "GROUND_STACK"
    FLOWN = "FLOWN"


class VoltageMode(IntEnum):
    """Service voltage feeding the wall."""

    V120 = 120
    V208 = 208


class ReceivingCardModel(str, Enum):
    """Receiving card fitted to the cabinets; selects the per-port pixel budget."""

    A8S = "A8s"
    A10S = "A10s"


class PowerStrategy(str, Enum):
    """Power source type used to feed the wall."""

    EDISON_20A = "EDISON_20A"
    L21_30 = "L21_30"
    SOCAPEX = "SOCAPEX"
    CAMLOCK_DISTRO = "CAMLOCK_DISTRO"


class DataPathMode(str, Enum):
    """Order in which cabinets are visited along a data run."""

    SNAKE_ROWS = "SNAKE_ROWS"
    SNAKE_COLUMNS = "SNAKE_COLUMNS"
    CUSTOM = "CUSTOM"


class CircuitGroupingMode(str, Enum):
    """Order in which cabinets are dealt into circuit buckets.

    Only the visiting order changes; assignment is always round-robin.

    Attributes:
        ROW_MAJOR: Top row first, left to right.
        BY_SECTION: Four-column vertical sections, row-major inside each.
        BY_LABEL: Lexicographic by cabinet label.
    """

    ROW_MAJOR = "ROW_MAJOR"
    BY_SECTION = "BY_SECTION"
    BY_LABEL = "BY_LABEL"


class CellStatus(str, Enum):
    """Status tag of a placed wall cell."""

    ACTIVE = "active"
    SPARE = "spare"
    VOID = "void"
    CUTOUT = "cutout"

    @property
    def is_physical(self) -> bool:
        """True for statuses that occupy real space on the grid."""
        return self in (CellStatus.ACTIVE, CellStatus.SPARE)


class ImagRole(str, Enum):
    """Role of a wall in an IMAG master/mirror pairing."""

    NONE = "none"
    MASTER = "master"
    MIRROR = "mirror"


class PlacementFailure(str, Enum):
    """Reasons a grid placement can be rejected."""

    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    OVERLAP = "OVERLAP"


@dataclass(frozen=True)
class PowerProfile:
    """Power draw figures for a cabinet or a group of cabinets.

    Used for both watts and amps; the unit is implied by context.
    """

    min: float = 0.0
    typ: float = 0.0
    max: float = 0.0
    peak: float = 0.0

    @classmethod
    def zero(cls) -> PowerProfile:
        return cls()

    def __add__(self, other: PowerProfile) -> PowerProfile:
        return PowerProfile(
            min=self.min + other.min,
            typ=self.typ + other.typ,
            max=self.max + other.max,
            peak=self.peak + other.peak,
        )

    def divided_by(self, divisor: float) -> PowerProfile:
        """Scale every figure down, e.g. watts to amps at a voltage."""
        if divisor <= 0:
            raise ValueError("Divisor must be positive")
        return PowerProfile(
            min=self.min / divisor,
            typ=self.typ / divisor,
            max=self.max / divisor,
            peak=self.peak / divisor,
        )

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "typ": self.typ, "max": self.max, "peak": self.peak}


@dataclass(frozen=True)
class PixelDimensions:
    """Pixel resolution of a cabinet or a whole wall."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Pixel dimensions must be non-negative")

    @property
    def count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class GridRect:
    """Axis-aligned rectangle on the wall's unit grid.

    The origin is the top-left unit; y grows downward.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def overlaps(self, other: GridRect) -> bool:
        """Check whether two rectangles share any area.

        Rectangles that only touch along an edge do not overlap.
        """
        return not (
            self.right <= other.x
            or other.right <= self.x
            or self.bottom <= other.y
            or other.bottom <= self.y
        )

    def contains_point(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def within(self, width_units: int, height_units: int) -> bool:
        """Check that the rectangle lies inside a grid of the given size."""
        return (
            self.x >= 0
            and self.y >= 0
            and self.right <= width_units
            and self.bottom <= height_units
        )
