"""Geometry primitives for the breadboard.

All coordinates are integer nanometers in a board-centred frame. The layout
generator is in ``protoboard.geom.layout``.
"""

from __future__ import annotations

from .primitives import (
    Arc,
    Circle,
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

__all__ = [
    "Arc",
    "Circle",
    "ElementInstance",
    "Label",
    "OutlineElement",
    "PlainElement",
    "Polygon",
    "PositionNM",
    "Rectangle",
    "Signal",
    "SignalItem",
    "Via",
    "Wire",
]
