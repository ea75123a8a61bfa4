"""Internal representation (IR) primitives for breadboard geometry.

All coordinates are in integer nanometers (nm) to ensure:
- Determinism across platforms (no floating-point drift)
- Exact half-pitch and centering arithmetic
- Stable millimeter output with no rounding noise

The coordinate frame is centred on the board:
- Origin at the board centre
- +x to the right along the board width
- +y upward (right-handed 2D)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class PositionNM:
    """2D position in integer nanometers.

    Attributes:
        x: X coordinate in nanometers.
        y: Y coordinate in nanometers.
    """

    x: int
    y: int

    def __add__(self, other: PositionNM) -> PositionNM:
        return PositionNM(self.x + other.x, self.y + other.y)

    def __sub__(self, other: PositionNM) -> PositionNM:
        return PositionNM(self.x - other.x, self.y - other.y)

    def scale(self, factor: int) -> PositionNM:
        """Scale position by an integer factor."""
        return PositionNM(self.x * factor, self.y * factor)

    def to_tuple(self) -> tuple[int, int]:
        """Return position as (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Wire:
    """Straight wire (trace or drawn line) between two points.

    Attributes:
        start: Start position in nm.
        end: End position in nm.
        width_nm: Line width in nm.
        layer: EAGLE layer number.
    """

    start: PositionNM
    end: PositionNM
    width_nm: int
    layer: int


@dataclass(frozen=True, slots=True)
class Arc:
    """Curved wire between two points.

    Attributes:
        start: Start position in nm.
        end: End position in nm.
        width_nm: Line width in nm.
        layer: EAGLE layer number.
        curve_deg: Sweep angle in degrees; positive is counter-clockwise.
        cap: Optional end cap style ("flat" or "round").
    """

    start: PositionNM
    end: PositionNM
    width_nm: int
    layer: int
    curve_deg: int
    cap: str | None = None


@dataclass(frozen=True, slots=True)
class Circle:
    center: PositionNM
    radius_nm: int
    width_nm: int
    layer: int


@dataclass(frozen=True, slots=True)
class Label:
    """Text label.

    Attributes:
        position: Anchor position in nm.
        size_nm: Text height in nm.
        layer: EAGLE layer number.
        text: Label content.
    """

    position: PositionNM
    size_nm: int
    layer: int
    text: str


@dataclass(frozen=True, slots=True)
class Via:
    """Plated through-hole pad.

    Attributes:
        position: Centre position in nm.
        drill_nm: Drill diameter in nm.
        diameter_nm: Copper pad diameter in nm.
        extent: EAGLE layer extent code (e.g. "1-16").
    """

    position: PositionNM
    drill_nm: int
    diameter_nm: int
    extent: str


@dataclass(frozen=True, slots=True)
class Rectangle:
    corner1: PositionNM
    corner2: PositionNM
    layer: int


@dataclass(frozen=True, slots=True)
class Polygon:
    vertices: tuple[PositionNM, ...]
    width_nm: int
    layer: int

    def __post_init__(self) -> None:
        if len(self.vertices) < 3:
            raise ValueError(f"Polygon needs at least 3 vertices, got {len(self.vertices)}")


@dataclass(frozen=True, slots=True)
class ElementInstance:
    """Placement of a library package on the board.

    Attributes:
        name: Reference designator (e.g. "H1").
        library: Library name.
        package: Package name within the library.
        value: Value string.
        position: Placement position in nm.
    """

    name: str
    library: str
    package: str
    value: str
    position: PositionNM


SignalItem = Union[Via, Wire]


@dataclass(frozen=True, slots=True)
class Signal:
    """One net: vias and the wires joining them, in emission order.

    Attributes:
        name: Unique net name (``N$<k>``).
        items: Vias and wires in the order they are written.
    """

    name: str
    items: tuple[SignalItem, ...]

    @property
    def vias(self) -> tuple[Via, ...]:
        return tuple(item for item in self.items if isinstance(item, Via))

    @property
    def wires(self) -> tuple[Wire, ...]:
        return tuple(item for item in self.items if isinstance(item, Wire))


OutlineElement = Union[Wire, Arc]
PlainElement = Union[Wire, Arc, Circle, Label, Rectangle, Polygon]
