"""Layout plan for the breadboard.

``compute_layout`` is the single place that turns a validated BoardSpec into
board geometry: the outline, the mounting-hole placements, the plain-layer
decorations and every signal group with its vias and wires. The document
writer only converts this plan into EAGLE elements; no geometry math happens
after this point.

Signal groups are emitted in a fixed order (main chains, then power buses,
then prototyping pads) and named ``N$1``, ``N$2``, ... from a NetCounter
owned by the call.

All coordinates are integer nanometers in the board-centred frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..constraints import LOGO_TOP_MARGIN_NM, enforce_constraints, label_box_half_width_nm, logo_size_nm
from ..eagle.layers import B_STOP, DIMENSION, T_PLACE
from ..eagle.library import MOUNTING_HOLE_LIBRARY, MOUNTING_HOLE_PACKAGE, MOUNTING_HOLE_VALUE
from .primitives import (
    Arc,
    ElementInstance,
    Label,
    OutlineElement,
    PlainElement,
    Polygon,
    PositionNM,
    Rectangle,
    Signal,
    SignalItem,
    Via,
    Wire,
)

if TYPE_CHECKING:
    from ..resolve import GridPlan
    from ..spec import BoardSpec, PadSpec

logger = logging.getLogger(__name__)

OUTLINE_WIDTH_NM = 127_000
OUTLINE_CORNER_DEG = 90

# Label box edges measured down from the top board edge.
LABEL_BOX_TOP_MARGIN_NM = 500_000
LABEL_BOX_BOTTOM_MARGIN_NM = 1_500_000
LABEL_TEXT_INDENT_NM = 2_000_000
LABEL_TEXT_RAISE_NM = 1_000_000

LOGO_LINE_WIDTH_NM = 406_400


class NetCounter:
    """Issues sequential net names for one layout.

    Each layout call gets its own counter, so every board starts at
    ``N$1`` regardless of what was generated before it.
    """

    def __init__(self, start: int = 1, prefix: str = "N$") -> None:
        self._next = start
        self._start = start
        self._prefix = prefix

    def next_name(self) -> str:
        name = f"{self._prefix}{self._next}"
        self._next += 1
        return name

    @property
    def issued(self) -> int:
        return self._next - self._start


@dataclass(frozen=True, slots=True)
class LayoutPlan:
    """Complete board geometry, ready to be written.

    Attributes:
        grid: Derived grid values the plan was built from.
        solder_stop: Bottom solder-stop rectangle covering the whole board.
        outline: Corner arcs and edges of the board outline.
        decorations: Label box, label text and logo, as enabled.
        mounting_holes: Mounting-hole element placements H1 to H4.
        signals: Signal groups in emission order.
    """

    grid: GridPlan
    solder_stop: Rectangle
    outline: tuple[OutlineElement, ...]
    decorations: tuple[PlainElement, ...]
    mounting_holes: tuple[ElementInstance, ...]
    signals: tuple[Signal, ...]

    @property
    def plain(self) -> tuple[PlainElement, ...]:
        """Plain-section items in document order."""
        return (self.solder_stop, *self.outline, *self.decorations)

    @property
    def via_count(self) -> int:
        return sum(len(signal.vias) for signal in self.signals)

    @property
    def signal_names(self) -> tuple[str, ...]:
        return tuple(signal.name for signal in self.signals)


def compute_layout(spec: BoardSpec, nets: NetCounter | None = None) -> LayoutPlan:
    """Build the full layout plan for a spec.

    Args:
        spec: Board parameters.
        nets: Net-name source; a fresh counter starting at ``N$1`` when omitted.

    Returns:
        The layout plan.

    Raises:
        InvalidParameterError: If ``spec`` cannot produce a valid board.
    """
    proof = enforce_constraints(spec)
    grid = proof.grid
    nets = nets or NetCounter()

    if grid.horizontal:
        signals = [
            *_horizontal_main(grid, spec.pads, nets),
            *_horizontal_buses(grid, spec.pads, nets),
            *_horizontal_proto(grid, spec.pads, nets),
        ]
    else:
        signals = [
            *_vertical_main(grid, spec.pads, nets),
            *_vertical_buses(grid, spec.pads, nets),
            *_vertical_proto(grid, spec.pads, nets),
        ]

    plan = LayoutPlan(
        grid=grid,
        solder_stop=Rectangle(
            PositionNM(-grid.half_width_nm, -grid.half_length_nm),
            PositionNM(grid.half_width_nm, grid.half_length_nm),
            B_STOP,
        ),
        outline=board_outline(grid),
        decorations=_decorations(spec, grid),
        mounting_holes=mounting_holes(grid),
        signals=tuple(signals),
    )
    logger.info(
        "Laid out %s board: %d rows, %d signals, %d vias",
        "horizontal" if grid.horizontal else "vertical",
        grid.row_count,
        len(plan.signals),
        plan.via_count,
    )
    return plan


def make_link(
    nets: NetCounter,
    pads: PadSpec,
    start: PositionNM,
    step: PositionNM,
    count: int,
) -> Signal:
    """Build one signal group of ``count`` vias spaced by ``step``.

    Every via after the first is followed by a wire back to the via before
    it, so a group of n vias has n - 1 wires.
    """
    items: list[SignalItem] = []
    for index in range(count):
        current = start + step.scale(index)
        items.append(Via(current, pads.drill_nm, pads.diameter_nm, pads.extent))
        if index:
            items.append(Wire(current, current - step, pads.trace_width_nm, pads.trace_layer))
    return Signal(nets.next_name(), tuple(items))


def board_outline(grid: GridPlan) -> tuple[OutlineElement, ...]:
    """Rounded-rectangle outline: four corner arcs and four edges."""
    hw = grid.half_width_nm
    hl = grid.half_length_nm
    inset = grid.inset_nm

    def corner(x1: int, y1: int, x2: int, y2: int) -> Arc:
        return Arc(PositionNM(x1, y1), PositionNM(x2, y2), OUTLINE_WIDTH_NM, DIMENSION, OUTLINE_CORNER_DEG)

    def edge(x1: int, y1: int, x2: int, y2: int) -> Wire:
        return Wire(PositionNM(x1, y1), PositionNM(x2, y2), OUTLINE_WIDTH_NM, DIMENSION)

    return (
        corner(hw, hl - inset, hw - inset, hl),
        edge(hw - inset, hl, -hw + inset, hl),
        corner(hw - inset, -hl, hw, -hl + inset),
        edge(hw, -hl + inset, hw, hl - inset),
        corner(-hw + inset, hl, -hw, hl - inset),
        edge(hw - inset, -hl, -hw + inset, -hl),
        corner(-hw, -hl + inset, -hw + inset, -hl),
        edge(-hw, -hl + inset, -hw, hl - inset),
    )


def mounting_holes(grid: GridPlan) -> tuple[ElementInstance, ...]:
    x = grid.half_width_nm - grid.inset_nm
    y = grid.half_length_nm - grid.inset_nm
    corners = (PositionNM(x, y), PositionNM(-x, y), PositionNM(x, -y), PositionNM(-x, -y))
    return tuple(
        ElementInstance(
            name=f"H{index}",
            library=MOUNTING_HOLE_LIBRARY,
            package=MOUNTING_HOLE_PACKAGE,
            value=MOUNTING_HOLE_VALUE,
            position=position,
        )
        for index, position in enumerate(corners, start=1)
    )


def logo_polygon(grid: GridPlan, scale_permille: int) -> Polygon:
    """Banner-shaped logo outline centred on the vertical axis near the top."""
    width, height, flex = logo_size_nm(scale_permille)
    half = width // 2
    top = grid.half_length_nm - LOGO_TOP_MARGIN_NM
    vertices = (
        PositionNM(-half, top),
        PositionNM(0, top - flex),
        PositionNM(half, top),
        PositionNM(half, top - height),
        PositionNM(0, top - (height + flex)),
        PositionNM(-half, top - height),
    )
    return Polygon(vertices, LOGO_LINE_WIDTH_NM, T_PLACE)


def _decorations(spec: BoardSpec, grid: GridPlan) -> tuple[PlainElement, ...]:
    decoration = spec.decoration
    hrw = label_box_half_width_nm(spec)
    hl = grid.half_length_nm
    items: list[PlainElement] = []
    if decoration.name_box:
        items.append(
            Rectangle(
                PositionNM(-hrw, hl - LABEL_BOX_TOP_MARGIN_NM),
                PositionNM(hrw, hl - grid.inset_nm - LABEL_BOX_BOTTOM_MARGIN_NM),
                T_PLACE,
            )
        )
    if decoration.label:
        items.append(
            Label(
                PositionNM(-(hrw - LABEL_TEXT_INDENT_NM), -hl + LABEL_TEXT_RAISE_NM),
                decoration.label_size_nm,
                T_PLACE,
                decoration.label,
            )
        )
    if decoration.logo:
        items.append(logo_polygon(grid, decoration.logo_scale_permille))
    return tuple(items)


def _horizontal_main(grid: GridPlan, pads: PadSpec, nets: NetCounter) -> list[Signal]:
    p = grid.pitch_nm
    signals: list[Signal] = []
    x = grid.start_offset_nm
    for _ in range(grid.main_steps):
        signals.append(make_link(nets, pads, PositionNM(x, grid.chain_offset_nm), PositionNM(0, -p), grid.holes_per_group))
        signals.append(make_link(nets, pads, PositionNM(x, -grid.chain_offset_nm), PositionNM(0, p), grid.holes_per_group))
        x -= p
    return signals


def _vertical_main(grid: GridPlan, pads: PadSpec, nets: NetCounter) -> list[Signal]:
    p = grid.pitch_nm
    signals: list[Signal] = []
    y = grid.start_offset_nm
    for _ in range(grid.main_steps):
        signals.append(make_link(nets, pads, PositionNM(-grid.chain_offset_nm, y), PositionNM(p, 0), grid.holes_per_group))
        signals.append(make_link(nets, pads, PositionNM(grid.chain_offset_nm, y), PositionNM(-p, 0), grid.holes_per_group))
        y -= p
    return signals


def _horizontal_buses(grid: GridPlan, pads: PadSpec, nets: NetCounter) -> list[Signal]:
    # Buses run between the two rows of main chains.
    p = grid.pitch_nm
    x = grid.start_offset_nm
    return [
        make_link(nets, pads, PositionNM(x, grid.half_pitch_nm - count * p), PositionNM(-p, 0), grid.bus_length)
        for count in range(grid.bus_count)
    ]


def _vertical_buses(grid: GridPlan, pads: PadSpec, nets: NetCounter) -> list[Signal]:
    # Bus column pairs sit outside the main chains.
    p = grid.pitch_nm
    y = grid.start_offset_nm - p
    lx = -grid.chain_offset_nm
    rx = grid.chain_offset_nm
    signals: list[Signal] = []
    for count in range(grid.bus_count):
        offset = (count - grid.bus_count) * p
        signals.append(make_link(nets, pads, PositionNM(lx + offset, y), PositionNM(0, -p), grid.bus_length))
        signals.append(make_link(nets, pads, PositionNM(rx - offset, y), PositionNM(0, -p), grid.bus_length))
    return signals


def _horizontal_proto(grid: GridPlan, pads: PadSpec, nets: NetCounter) -> list[Signal]:
    p = grid.pitch_nm
    top = (grid.proto_ranks - 1) * p // 2
    signals: list[Signal] = []
    for column in range(grid.proto_columns):
        x = grid.start_offset_nm + (grid.proto_columns - column) * p
        for rank in range(grid.proto_ranks):
            y = top - rank * p
            signals.append(make_link(nets, pads, PositionNM(x, y), PositionNM(p, p), 1))
            signals.append(make_link(nets, pads, PositionNM(-x, y), PositionNM(p, p), 1))
    return signals


def _vertical_proto(grid: GridPlan, pads: PadSpec, nets: NetCounter) -> list[Signal]:
    p = grid.pitch_nm
    y = grid.start_offset_nm - p
    signals: list[Signal] = []
    for column in range(grid.proto_columns):
        x = grid.chain_offset_nm + (grid.bus_count + column + 1) * p
        for rank in range(grid.proto_ranks):
            signals.append(make_link(nets, pads, PositionNM(-x, y - rank * p), PositionNM(p, p), 1))
            signals.append(make_link(nets, pads, PositionNM(x, y - rank * p), PositionNM(p, p), 1))
    return signals
