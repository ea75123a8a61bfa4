"""Public API for breadboard generation.

This module provides:
- load_spec: Load a BoardSpec from a YAML/JSON file
- validate_spec: Check a spec against every layout precondition
- plan_board: Compute the layout plan (pure geometry)
- generate_board: Produce the EAGLE document text with its hash and id
- write_board: Generate and write the document to disk
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .constraints import ConstraintProof, enforce_constraints
from .eagle import board_writer
from .geom.layout import LayoutPlan, compute_layout
from .hashing import board_hash, board_id_from_hash, spec_hash
from .spec import BoardSpec, default_spec, load_board_spec_from_file

logger = logging.getLogger(__name__)

__all__ = [
    "BoardResult",
    "default_spec",
    "generate_board",
    "load_spec",
    "plan_board",
    "plan_summary",
    "validate_spec",
    "write_board",
]


@dataclass(frozen=True)
class BoardResult:
    """Generated board document.

    Attributes:
        text: Complete EAGLE document, header lines included.
        board_hash: SHA256 of the document text.
        board_id: 12-character identifier derived from ``board_hash``.
        spec_hash: SHA256 of the canonical spec JSON.
        plan: Layout the document was written from.
        path: File the document was written to, if any.
    """

    text: str
    board_hash: str
    board_id: str
    spec_hash: str
    plan: LayoutPlan
    path: Path | None = None

    @property
    def signal_count(self) -> int:
        return len(self.plan.signals)


def load_spec(path: Path | str) -> BoardSpec:
    return load_board_spec_from_file(path)


def validate_spec(spec: BoardSpec) -> ConstraintProof:
    """Validate a spec.

    Raises:
        InvalidParameterError: If any constraint fails.
    """
    return enforce_constraints(spec)


def plan_board(spec: BoardSpec) -> LayoutPlan:
    return compute_layout(spec)


def generate_board(spec: BoardSpec) -> BoardResult:
    """Generate the EAGLE document for a spec.

    Raises:
        InvalidParameterError: If ``spec`` cannot produce a valid board.
    """
    plan = compute_layout(spec)
    text = board_writer.BoardWriter(spec, plan).build_text()
    digest = board_hash(text)
    result = BoardResult(
        text=text,
        board_hash=digest,
        board_id=board_id_from_hash(digest),
        spec_hash=spec_hash(spec.model_dump(mode="json")),
        plan=plan,
    )
    logger.debug("Generated board %s (%d signals)", result.board_id, result.signal_count)
    return result


def write_board(spec: BoardSpec, path: Path | str) -> BoardResult:
    """Generate the document and write it to ``path``.

    Parent directories are created as needed; an existing directory
    receives ``protoboard.brd``. The written location is ``result.path``.
    """
    result = generate_board(spec)
    out_path = board_writer.write_board(spec, Path(path), plan=result.plan)
    return replace(result, path=out_path)


def plan_summary(plan: LayoutPlan) -> dict[str, Any]:
    """JSON-ready summary of the derived grid values and group counts."""
    grid = plan.grid
    return {
        "orientation": "horizontal" if grid.horizontal else "vertical",
        "pitch_nm": grid.pitch_nm,
        "span_nm": grid.span_nm,
        "row_count": grid.row_count,
        "start_offset_nm": grid.start_offset_nm,
        "chain_offset_nm": grid.chain_offset_nm,
        "main_steps": grid.main_steps,
        "bus_length": grid.bus_length,
        "proto_columns": grid.proto_columns,
        "proto_ranks": grid.proto_ranks,
        "groups": {
            "main": grid.main_group_count,
            "bus": grid.bus_group_count,
            "proto": grid.proto_group_count,
        },
        "signal_count": len(plan.signals),
        "via_count": plan.via_count,
    }
