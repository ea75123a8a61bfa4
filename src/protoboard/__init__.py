"""Prototyping breadboard generator for EAGLE.

Builds the board outline, mounting holes, wired hole groups, power buses,
prototyping pads and decorations from a BoardSpec, and writes them as an
EAGLE board document.
"""

from __future__ import annotations

from .api import (
    BoardResult,
    default_spec,
    generate_board,
    load_spec,
    plan_board,
    validate_spec,
    write_board,
)
from .constraints import InvalidParameterError
from .spec import BoardSpec

__all__ = [
    "BoardResult",
    "BoardSpec",
    "InvalidParameterError",
    "default_spec",
    "generate_board",
    "load_spec",
    "plan_board",
    "validate_spec",
    "write_board",
]
