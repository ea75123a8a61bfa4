"""EAGLE document support.

This package provides:
- A minimal XML element tree and writer (xml)
- Typed builders for EAGLE elements (elements)
- The static layer table (layers)
- The embedded mounting-hole library (library)

The board writer lives in ``protoboard.eagle.board_writer`` and is imported
from there directly, since it depends on the layout module.
"""

from __future__ import annotations

from .layers import LAYER_TABLE, LayerDef, get_layer, layer_name
from .library import (
    MOUNTING_HOLE_LIBRARY,
    MOUNTING_HOLE_PACKAGE,
    MOUNTING_HOLE_VALUE,
    mounting_hole_library,
    mounting_hole_package,
)
from .xml import (
    EAGLE_DOCTYPE,
    XML_DECLARATION,
    InvariantViolationError,
    Node,
    XmlWriter,
    document_text,
    dump,
    format_decimal,
    format_value,
)

__all__ = [
    "EAGLE_DOCTYPE",
    "InvariantViolationError",
    "LAYER_TABLE",
    "LayerDef",
    "MOUNTING_HOLE_LIBRARY",
    "MOUNTING_HOLE_PACKAGE",
    "MOUNTING_HOLE_VALUE",
    "Node",
    "XML_DECLARATION",
    "XmlWriter",
    "document_text",
    "dump",
    "format_decimal",
    "format_value",
    "get_layer",
    "layer_name",
    "mounting_hole_library",
    "mounting_hole_package",
]
