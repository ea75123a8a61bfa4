"""EAGLE element builders.

Each builder returns a plain :class:`~protoboard.eagle.xml.Node` with the
element's fixed, ordered attribute set. Lengths are taken in integer
nanometers and stored as exact millimeter Decimals, so the writer decides
the final text form.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..geom.primitives import (
    Arc,
    Circle,
    ElementInstance,
    Label,
    Polygon,
    PositionNM,
    Rectangle,
    Signal,
    Via,
    Wire,
)
from ..units import nm_to_mm
from .xml import Node

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .layers import LayerDef


def wire(layer: int, width_nm: int, x1_nm: int, y1_nm: int, x2_nm: int, y2_nm: int) -> Node:
    """Build a straight ``wire`` element."""
    node = Node("wire")
    node.set_attribute("x1", nm_to_mm(x1_nm))
    node.set_attribute("y1", nm_to_mm(y1_nm))
    node.set_attribute("x2", nm_to_mm(x2_nm))
    node.set_attribute("y2", nm_to_mm(y2_nm))
    node.set_attribute("width", nm_to_mm(width_nm))
    node.set_attribute("layer", layer)
    return node


def arc(
    layer: int,
    width_nm: int,
    x1_nm: int,
    y1_nm: int,
    x2_nm: int,
    y2_nm: int,
    curve_deg: int,
    cap: str | None = None,
) -> Node:
    """Build a curved ``wire`` element with a ``curve`` sweep angle."""
    node = wire(layer, width_nm, x1_nm, y1_nm, x2_nm, y2_nm)
    node.set_attribute("curve", curve_deg)
    if cap is not None:
        node.set_attribute("cap", cap)
    return node


def circle(layer: int, width_nm: int, x_nm: int, y_nm: int, radius_nm: int) -> Node:
    node = Node("circle")
    node.set_attribute("x", nm_to_mm(x_nm))
    node.set_attribute("y", nm_to_mm(y_nm))
    node.set_attribute("radius", nm_to_mm(radius_nm))
    node.set_attribute("width", nm_to_mm(width_nm))
    node.set_attribute("layer", layer)
    return node


def text(layer: int, size_nm: int, x_nm: int, y_nm: int, content: str) -> Node:
    node = Node("text")
    node.set_attribute("x", nm_to_mm(x_nm))
    node.set_attribute("y", nm_to_mm(y_nm))
    node.set_attribute("size", nm_to_mm(size_nm))
    node.set_attribute("layer", layer)
    node.set_text(content)
    return node


def via(x_nm: int, y_nm: int, extent: str, drill_nm: int, diameter_nm: int) -> Node:
    """Build a ``via`` element (plated through-hole pad)."""
    node = Node("via")
    node.set_attribute("x", nm_to_mm(x_nm))
    node.set_attribute("y", nm_to_mm(y_nm))
    node.set_attribute("extent", extent)
    node.set_attribute("drill", nm_to_mm(drill_nm))
    node.set_attribute("diameter", nm_to_mm(diameter_nm))
    return node


def element(name: str, library: str, package: str, value: str, x_nm: int, y_nm: int) -> Node:
    """Build an ``element`` instance of a library package."""
    node = Node("element")
    node.set_attribute("name", name)
    node.set_attribute("library", library)
    node.set_attribute("package", package)
    node.set_attribute("value", value)
    node.set_attribute("x", nm_to_mm(x_nm))
    node.set_attribute("y", nm_to_mm(y_nm))
    return node


def vertex(x_nm: int, y_nm: int) -> Node:
    node = Node("vertex")
    node.set_attribute("x", nm_to_mm(x_nm))
    node.set_attribute("y", nm_to_mm(y_nm))
    return node


def polygon(layer: int, width_nm: int, vertices: Iterable[PositionNM]) -> Node:
    node = Node("polygon")
    node.set_attribute("layer", layer)
    node.set_attribute("width", nm_to_mm(width_nm))
    node.extend(vertex(point.x, point.y) for point in vertices)
    return node


def rectangle(layer: int, x1_nm: int, y1_nm: int, x2_nm: int, y2_nm: int) -> Node:
    node = Node("rectangle")
    node.set_attribute("x1", nm_to_mm(x1_nm))
    node.set_attribute("y1", nm_to_mm(y1_nm))
    node.set_attribute("x2", nm_to_mm(x2_nm))
    node.set_attribute("y2", nm_to_mm(y2_nm))
    node.set_attribute("layer", layer)
    return node


def layer(definition: LayerDef) -> Node:
    """Build a ``layer`` record for the drawing's layer table."""
    node = Node("layer")
    node.set_attribute("number", definition.number)
    node.set_attribute("name", definition.name)
    node.set_attribute("color", definition.color)
    node.set_attribute("fill", definition.fill)
    node.set_attribute("visible", definition.visible)
    node.set_attribute("active", definition.active)
    return node


def hole(x_nm: int, y_nm: int, drill_nm: int) -> Node:
    node = Node("hole")
    node.set_attribute("x", nm_to_mm(x_nm))
    node.set_attribute("y", nm_to_mm(y_nm))
    node.set_attribute("drill", nm_to_mm(drill_nm))
    return node


def named(tag: str, name: str) -> Node:
    """Build an empty container element carrying only a ``name``."""
    node = Node(tag)
    node.set_attribute("name", name)
    return node


def signal(group: Signal) -> Node:
    """Build a ``signal`` element holding a net's vias and wires in order."""
    node = named("signal", group.name)
    node.extend(primitive_node(item) for item in group.items)
    return node


def primitive_node(item: Wire | Arc | Circle | Label | Via | Rectangle | Polygon | ElementInstance) -> Node:
    """Convert one geometry primitive into its EAGLE element.

    Raises:
        TypeError: If the primitive has no EAGLE counterpart.
    """
    if isinstance(item, Wire):
        return wire(item.layer, item.width_nm, item.start.x, item.start.y, item.end.x, item.end.y)
    if isinstance(item, Arc):
        return arc(
            item.layer,
            item.width_nm,
            item.start.x,
            item.start.y,
            item.end.x,
            item.end.y,
            item.curve_deg,
            item.cap,
        )
    if isinstance(item, Circle):
        return circle(item.layer, item.width_nm, item.center.x, item.center.y, item.radius_nm)
    if isinstance(item, Label):
        return text(item.layer, item.size_nm, item.position.x, item.position.y, item.text)
    if isinstance(item, Via):
        return via(item.position.x, item.position.y, item.extent, item.drill_nm, item.diameter_nm)
    if isinstance(item, Rectangle):
        return rectangle(item.layer, item.corner1.x, item.corner1.y, item.corner2.x, item.corner2.y)
    if isinstance(item, Polygon):
        return polygon(item.layer, item.width_nm, item.vertices)
    if isinstance(item, ElementInstance):
        return element(item.name, item.library, item.package, item.value, item.position.x, item.position.y)
    raise TypeError(f"No EAGLE element for {type(item).__name__}")
