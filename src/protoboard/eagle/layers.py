"""EAGLE layer table.

The board file carries the full layer table so that EAGLE opens it with the
usual colours and visibility. Only a handful of layers are drawn on by the
generator; those have named constants below.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LayerDef:
    """One row of the EAGLE layer table.

    Attributes:
        number: EAGLE layer number.
        name: Layer name.
        color: Display colour index.
        fill: Fill pattern index.
        visible: Whether the layer is shown.
        active: Whether the layer is active.
    """

    number: int
    name: str
    color: int
    fill: int
    visible: bool
    active: bool


TOP = 1
BOTTOM = 16
DIMENSION = 20
T_PLACE = 21
B_STOP = 30
T_KEEPOUT = 39
B_KEEPOUT = 40
T_RESTRICT = 41
B_RESTRICT = 42
V_RESTRICT = 43
DOCUMENT = 48
T_DOCU = 51

# Copper extent of a through via, top to bottom.
THROUGH_EXTENT = f"{TOP}-{BOTTOM}"

LAYER_TABLE: tuple[LayerDef, ...] = (
    LayerDef(1, "Top", 4, 1, True, True),
    LayerDef(2, "Route2", 1, 3, False, True),
    LayerDef(3, "Route3", 4, 3, False, True),
    LayerDef(4, "Route4", 1, 4, False, True),
    LayerDef(5, "Route5", 4, 4, False, True),
    LayerDef(6, "Route6", 1, 8, False, True),
    LayerDef(7, "Route7", 4, 8, False, True),
    LayerDef(8, "Route8", 1, 2, False, True),
    LayerDef(9, "Route9", 4, 2, False, True),
    LayerDef(10, "Route10", 1, 7, False, True),
    LayerDef(11, "Route11", 4, 7, False, True),
    LayerDef(12, "Route12", 1, 5, False, True),
    LayerDef(13, "Route13", 4, 5, False, True),
    LayerDef(14, "Route14", 1, 6, False, True),
    LayerDef(15, "Route15", 4, 6, False, True),
    LayerDef(16, "Bottom", 1, 1, True, True),
    LayerDef(17, "Pads", 2, 1, True, True),
    LayerDef(18, "Vias", 2, 1, True, True),
    LayerDef(19, "Unrouted", 6, 1, True, True),
    LayerDef(20, "Dimension", 15, 1, True, True),
    LayerDef(21, "tPlace", 7, 1, True, True),
    LayerDef(22, "bPlace", 7, 1, True, True),
    LayerDef(23, "tOrigins", 15, 1, True, True),
    LayerDef(24, "bOrigins", 15, 1, True, True),
    LayerDef(25, "tNames", 7, 1, True, True),
    LayerDef(26, "bNames", 7, 1, True, True),
    LayerDef(27, "tValues", 7, 1, True, True),
    LayerDef(28, "bValues", 7, 1, True, True),
    LayerDef(29, "tStop", 7, 3, False, True),
    LayerDef(30, "bStop", 7, 6, False, True),
    LayerDef(31, "tCream", 7, 4, False, True),
    LayerDef(32, "bCream", 7, 5, False, True),
    LayerDef(33, "tFinish", 6, 3, False, True),
    LayerDef(34, "bFinish", 6, 6, False, True),
    LayerDef(35, "tGlue", 7, 4, False, True),
    LayerDef(36, "bGlue", 7, 5, False, True),
    LayerDef(37, "tTest", 7, 1, False, True),
    LayerDef(38, "bTest", 7, 1, False, True),
    LayerDef(39, "tKeepout", 4, 11, True, True),
    LayerDef(40, "bKeepout", 1, 11, True, True),
    LayerDef(41, "tRestrict", 4, 10, True, True),
    LayerDef(42, "bRestrict", 1, 10, True, True),
    LayerDef(43, "vRestrict", 2, 10, True, True),
    LayerDef(44, "Drills", 7, 1, False, True),
    LayerDef(45, "Holes", 7, 1, True, True),
    LayerDef(46, "Milling", 3, 1, False, True),
    LayerDef(47, "Measures", 7, 1, False, True),
    LayerDef(48, "Document", 7, 1, True, True),
    LayerDef(49, "Reference", 7, 1, True, True),
    LayerDef(50, "dxf", 7, 1, False, True),
    LayerDef(51, "tDocu", 7, 1, True, True),
    LayerDef(52, "bDocu", 7, 1, True, True),
    LayerDef(53, "tGND_GNDA", 7, 9, False, False),
    LayerDef(54, "bGND_GNDA", 1, 9, False, False),
    LayerDef(56, "wert", 7, 1, True, True),
    LayerDef(91, "Nets", 2, 1, False, False),
    LayerDef(92, "Busses", 1, 1, False, False),
    LayerDef(93, "Pins", 2, 1, False, False),
    LayerDef(94, "Symbols", 4, 1, False, False),
    LayerDef(95, "Names", 7, 1, False, False),
    LayerDef(96, "Values", 7, 1, False, False),
    LayerDef(97, "Info", 7, 1, False, False),
    LayerDef(98, "Guide", 6, 1, False, False),
    LayerDef(100, "Muster", 7, 1, False, False),
    LayerDef(101, "Patch_Top", 12, 4, True, True),
    LayerDef(102, "Vscore", 7, 1, True, True),
    LayerDef(103, "fp3", 7, 1, False, True),
    LayerDef(104, "Name", 7, 1, True, True),
    LayerDef(105, "Beschreib", 9, 1, True, True),
    LayerDef(106, "BGA-Top", 4, 1, True, True),
    LayerDef(107, "BD-Top", 5, 1, True, True),
    LayerDef(108, "fp8", 7, 1, False, True),
    LayerDef(109, "fp9", 7, 1, False, True),
    LayerDef(110, "fp0", 7, 1, False, True),
    LayerDef(111, "LPC17xx", 7, 1, True, True),
    LayerDef(112, "tPlaceRed", 12, 1, True, True),
    LayerDef(113, "tPlaceBlue", 9, 1, True, True),
    LayerDef(116, "Patch_BOT", 9, 4, True, True),
    LayerDef(121, "_tsilk", 7, 1, True, True),
    LayerDef(122, "_bsilk", 7, 1, True, True),
    LayerDef(123, "tTestmark", 7, 1, False, True),
    LayerDef(124, "bTestmark", 7, 1, False, True),
    LayerDef(125, "_tNames", 7, 1, True, True),
    LayerDef(126, "_bNames", 7, 1, True, True),
    LayerDef(127, "_tValues", 7, 1, True, True),
    LayerDef(128, "_bValues", 7, 1, True, True),
    LayerDef(131, "tAdjust", 7, 1, False, True),
    LayerDef(132, "bAdjust", 7, 1, False, True),
    LayerDef(144, "Drill_legend", 7, 1, True, True),
    LayerDef(151, "HeatSink", 7, 1, True, True),
    LayerDef(152, "_bDocu", 7, 1, True, True),
    LayerDef(199, "Contour", 7, 1, True, True),
    LayerDef(200, "200bmp", 1, 10, True, True),
    LayerDef(201, "201bmp", 2, 1, False, False),
    LayerDef(202, "202bmp", 3, 1, False, False),
    LayerDef(203, "203bmp", 4, 10, True, True),
    LayerDef(204, "204bmp", 5, 10, True, True),
    LayerDef(205, "205bmp", 6, 10, True, True),
    LayerDef(206, "206bmp", 7, 10, True, True),
    LayerDef(207, "207bmp", 8, 10, True, True),
    LayerDef(208, "208bmp", 9, 10, True, True),
    LayerDef(209, "209bmp", 7, 1, False, True),
    LayerDef(210, "210bmp", 7, 1, False, True),
    LayerDef(211, "211bmp", 7, 1, True, True),
    LayerDef(212, "212bmp", 7, 1, True, True),
    LayerDef(213, "213bmp", 7, 1, True, True),
    LayerDef(214, "214bmp", 7, 1, True, True),
    LayerDef(215, "215bmp", 7, 1, True, True),
    LayerDef(216, "216bmp", 7, 1, True, True),
    LayerDef(217, "217bmp", 18, 1, False, False),
    LayerDef(218, "218bmp", 19, 1, False, False),
    LayerDef(219, "219bmp", 20, 1, False, False),
    LayerDef(220, "220bmp", 21, 1, False, False),
    LayerDef(221, "221bmp", 22, 1, False, False),
    LayerDef(222, "222bmp", 23, 1, False, False),
    LayerDef(223, "223bmp", 24, 1, False, False),
    LayerDef(224, "224bmp", 25, 1, False, False),
    LayerDef(248, "Housing", 7, 1, True, True),
    LayerDef(249, "Edge", 7, 1, True, True),
    LayerDef(250, "Descript", 7, 1, False, False),
    LayerDef(251, "SMDround", 7, 1, False, False),
    LayerDef(254, "cooling", 7, 1, True, True),
)

_LAYERS_BY_NUMBER: dict[int, LayerDef] = {layer.number: layer for layer in LAYER_TABLE}


def get_layer(number: int) -> LayerDef:
    """Look up a layer definition by number.

    Raises:
        KeyError: If the layer is not in the table.
    """
    try:
        return _LAYERS_BY_NUMBER[number]
    except KeyError:
        raise KeyError(f"Unknown EAGLE layer number: {number}") from None


def layer_name(number: int) -> str:
    return get_layer(number).name
