from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .eagle.layers import BOTTOM, THROUGH_EXTENT
from .units import LengthNM

DEFAULT_LABEL = "Brunswick Hackerspace"


class _SpecBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class BoardDimensions(_SpecBase):
    """Overall board size and orientation.

    ``inset_nm`` is the distance from each edge to the mounting-hole centres
    and also the corner radius of the outline.
    """

    width_nm: LengthNM = 54_000_000
    length_nm: LengthNM = 33_000_000
    inset_nm: LengthNM = 4_000_000
    horizontal: bool = True


class GridSpec(_SpecBase):
    """Hole grid parameters.

    The optional fields override the orientation profile defaults; leave
    them unset to get the standard horizontal or vertical board.
    """

    pitch_nm: LengthNM = 2_540_000
    holes_per_group: int = 5
    bus_gap_rows: int = 1
    bus_count: int = 2
    edge_clearance_nm: LengthNM | None = None
    extra_rows: int | None = None
    bus_trim_rows: int | None = None
    proto_columns: int | None = None
    proto_ranks: int | None = None


class PadSpec(_SpecBase):
    drill_nm: LengthNM = 1_200_000
    diameter_nm: LengthNM = 1_930_400
    extent: str = Field(THROUGH_EXTENT, min_length=1)
    trace_width_nm: LengthNM = 406_400
    trace_layer: int = BOTTOM


class DecorationSpec(_SpecBase):
    label: str = DEFAULT_LABEL
    label_size_nm: LengthNM = 2_000_000
    name_box: bool = True
    logo: bool = True
    logo_scale_permille: int = Field(1400, ge=1)


class BoardSpec(_SpecBase):
    schema_version: int = Field(1, ge=1)
    eagle_version: str = Field("6.0", min_length=1)
    board: BoardDimensions = Field(default_factory=BoardDimensions)
    grid: GridSpec = Field(default_factory=GridSpec)
    pads: PadSpec = Field(default_factory=PadSpec)
    decoration: DecorationSpec = Field(default_factory=DecorationSpec)


BOARD_SPEC_SCHEMA = BoardSpec.model_json_schema()


def default_spec() -> BoardSpec:
    """Return the standard 54 x 33 mm horizontal board."""
    return BoardSpec()


def load_board_spec(data: dict[str, Any]) -> BoardSpec:
    """Validate and load a BoardSpec from a dictionary.

    Args:
        data: Dictionary containing the BoardSpec data.

    Returns:
        Validated BoardSpec instance with all lengths normalized to integer nm.

    Raises:
        pydantic.ValidationError: If the data fails validation.
    """
    return BoardSpec.model_validate(data)


def load_board_spec_from_file(path: Path | str) -> BoardSpec:
    """Load and validate a BoardSpec from a YAML or JSON file.

    Args:
        path: Path to the YAML (.yaml, .yml) or JSON (.json) file.

    Returns:
        Validated BoardSpec instance with all lengths normalized to integer nm.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file extension is not supported or the document
            is not a mapping.
        pydantic.ValidationError: If the data fails validation.
        yaml.YAMLError: If YAML parsing fails.
        json.JSONDecodeError: If JSON parsing fails.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"BoardSpec file not found: {path}")

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json")

    # An empty YAML document means "all defaults"
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"BoardSpec file must contain a mapping, got {type(data).__name__}")

    return load_board_spec(data)


def apply_board_overrides(
    spec: BoardSpec,
    *,
    width_nm: int | None = None,
    length_nm: int | None = None,
    inset_nm: int | None = None,
    horizontal: bool | None = None,
) -> BoardSpec:
    """Return a copy of ``spec`` with the given board fields replaced.

    The copy is re-validated, so overrides go through the same checks as
    values read from a file.
    """
    overrides = {
        "width_nm": width_nm,
        "length_nm": length_nm,
        "inset_nm": inset_nm,
        "horizontal": horizontal,
    }
    payload = spec.model_dump(mode="json")
    for key, value in overrides.items():
        if value is not None:
            payload["board"][key] = value
    return BoardSpec.model_validate(payload)
