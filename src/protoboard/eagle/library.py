"""Embedded ``holes`` library with the 3.0 mm mounting-hole package."""

from __future__ import annotations

from . import elements
from .layers import DOCUMENT, T_DOCU, T_KEEPOUT, T_PLACE, V_RESTRICT
from .xml import Node

MOUNTING_HOLE_LIBRARY = "holes"
MOUNTING_HOLE_PACKAGE = "3,0"
MOUNTING_HOLE_VALUE = "MOUNT-HOLE3.0"
MOUNTING_HOLE_DESCRIPTION = "<b>MOUNTING HOLE</b> 3.0 mm with drill center"

MOUNTING_HOLE_DRILL_NM = 3_000_000

# Documentation cross-hair arcs on tDocu.
_DOCU_ARC_OFFSET_NM = 2_159_000
_DOCU_ARC_WIDTH_NM = 2_489_200

# (layer, width, radius)
_RING_CIRCLES: tuple[tuple[int, int, int], ...] = (
    (T_DOCU, 457_200, 762_000),
    (T_PLACE, 152_400, 3_429_000),
    (T_PLACE, 2_032_000, 1_600_000),
    *((layer, 2_032_000, 3_048_000) for layer in range(T_KEEPOUT, V_RESTRICT + 1)),
)

_NAME_TEXT_SIZE_NM = 1_270_000
_NAME_TEXT_X_NM = -1_270_000
_NAME_TEXT_Y_NM = -3_810_000


def mounting_hole_package() -> Node:
    """Build the ``3,0`` package: keepout rings, silkscreen, docu and drill."""
    package = elements.named("package", MOUNTING_HOLE_PACKAGE)
    package.add_child(Node("description")).set_text(MOUNTING_HOLE_DESCRIPTION)

    offset = _DOCU_ARC_OFFSET_NM
    package.add_child(elements.arc(T_DOCU, _DOCU_ARC_WIDTH_NM, -offset, 0, 0, -offset, 90, cap="flat"))
    package.add_child(elements.arc(T_DOCU, _DOCU_ARC_WIDTH_NM, 0, offset, offset, 0, -90, cap="flat"))

    for layer, width_nm, radius_nm in _RING_CIRCLES:
        package.add_child(elements.circle(layer, width_nm, 0, 0, radius_nm))

    package.add_child(
        elements.text(DOCUMENT, _NAME_TEXT_SIZE_NM, _NAME_TEXT_X_NM, _NAME_TEXT_Y_NM, MOUNTING_HOLE_PACKAGE)
    )
    package.add_child(elements.hole(0, 0, MOUNTING_HOLE_DRILL_NM))
    return package


def mounting_hole_library() -> Node:
    """Build ``<library name="holes">`` holding the mounting-hole package."""
    library = elements.named("library", MOUNTING_HOLE_LIBRARY)
    packages = library.add_child(Node("packages"))
    packages.add_child(mounting_hole_package())
    return library
