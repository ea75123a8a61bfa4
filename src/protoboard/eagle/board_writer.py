"""EAGLE board writer.

Converts a LayoutPlan into the EAGLE document tree and its text form. The
plan is the single source of geometry; this module only maps primitives to
elements and arranges them in EAGLE's section order:

    eagle > drawing > grid, layers, board
    board > plain, libraries, elements, signals

Output is deterministic: the same spec always produces byte-identical text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ..geom.layout import LayoutPlan, compute_layout
from . import elements
from .layers import LAYER_TABLE
from .library import mounting_hole_library
from .xml import Node, XmlWriter, document_text

if TYPE_CHECKING:
    from ..spec import BoardSpec

logger = logging.getLogger(__name__)

BOARD_FILE_NAME = "protoboard.brd"

# Editor grid: 0.005 in with 0.001 in alternate, drawn as lines, hidden.
GRID_SETTINGS: tuple[tuple[str, str | int | float | bool], ...] = (
    ("distance", 0.005),
    ("unitdist", "inch"),
    ("unit", "inch"),
    ("altdistance", 0.001),
    ("altunitdist", "inch"),
    ("altunit", "inch"),
    ("style", "lines"),
    ("multiple", 1),
    ("display", False),
)


class BoardWriter:
    """EAGLE board document builder.

    All geometry is read from the LayoutPlan; nothing is recomputed here.
    """

    def __init__(self, spec: BoardSpec, plan: LayoutPlan | None = None) -> None:
        """Initialize the board writer.

        Args:
            spec: Board parameters.
            plan: Precomputed layout. Computed from ``spec`` when omitted.

        Raises:
            InvalidParameterError: If ``plan`` is omitted and ``spec`` is invalid.
        """
        self.spec = spec
        self.plan = plan if plan is not None else compute_layout(spec)

    def build_document(self) -> Node:
        """Build the root ``eagle`` element."""
        root = Node("eagle")
        root.set_attribute("version", self.spec.eagle_version)
        drawing = root.add_child(Node("drawing"))
        drawing.add_child(self._build_grid())
        drawing.add_child(self._build_layers())
        drawing.add_child(self._build_board())
        return root

    def build_text(self, writer: XmlWriter | None = None) -> str:
        """Return the complete document text including the header lines."""
        return document_text(self.build_document(), writer)

    def write(self, path: Path) -> None:
        text = self.build_text()
        path.write_text(text, encoding="utf-8")
        logger.info("Wrote %s (%d signals, %d bytes)", path, len(self.plan.signals), len(text.encode("utf-8")))

    @staticmethod
    def _build_grid() -> Node:
        grid = Node("grid")
        for key, value in GRID_SETTINGS:
            grid.set_attribute(key, value)
        return grid

    @staticmethod
    def _build_layers() -> Node:
        layers = Node("layers")
        layers.extend(elements.layer(definition) for definition in LAYER_TABLE)
        return layers

    def _build_board(self) -> Node:
        board = Node("board")
        board.add_child(self._build_plain())
        libraries = board.add_child(Node("libraries"))
        libraries.add_child(mounting_hole_library())
        board.add_child(self._build_elements())
        board.add_child(self._build_signals())
        return board

    def _build_plain(self) -> Node:
        plain = Node("plain")
        plain.extend(elements.primitive_node(item) for item in self.plan.plain)
        return plain

    def _build_elements(self) -> Node:
        placed = Node("elements")
        placed.extend(elements.primitive_node(instance) for instance in self.plan.mounting_holes)
        return placed

    def _build_signals(self) -> Node:
        signals = Node("signals")
        signals.extend(elements.signal(group) for group in self.plan.signals)
        return signals


def build_board_document(spec: BoardSpec, plan: LayoutPlan | None = None) -> Node:
    return BoardWriter(spec, plan).build_document()


def build_board_text(
    spec: BoardSpec,
    plan: LayoutPlan | None = None,
    writer: XmlWriter | None = None,
) -> str:
    """Build board file content from a spec.

    Args:
        spec: Board parameters.
        plan: Optional precomputed layout.
        writer: Optional XML writer; the default uses two-space indentation
            and ``key = "value"`` attributes.

    Returns:
        The complete EAGLE document text.
    """
    return BoardWriter(spec, plan).build_text(writer)


def board_output_path(out_path: Path) -> Path:
    """Map an existing directory to ``<dir>/protoboard.brd``; files pass through."""
    if out_path.is_dir():
        return out_path / BOARD_FILE_NAME
    return out_path


def write_board(spec: BoardSpec, out_path: Path, plan: LayoutPlan | None = None) -> Path:
    """Write the board document to ``out_path``.

    A directory path receives a file named ``protoboard.brd``.

    Returns:
        Path to the written board file.
    """
    out_path = board_output_path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    BoardWriter(spec, plan).write(out_path)
    return out_path
