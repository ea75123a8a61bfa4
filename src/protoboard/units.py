"""Board length units.

Every length in a BoardSpec is an integer number of nanometers. Spec files
may write lengths the way a board designer would (``"54mm"``, ``"100mil"``,
``"0.1in"``); they are converted once, on load, and never rounded: a value
that does not land on a whole nanometer is rejected.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Annotated

from pydantic import BeforeValidator, WithJsonSchema

NM_PER_MM = 1_000_000

# Nanometers per unit; "mil" and "thou" are both 1/1000 inch.
LENGTH_UNITS_NM: dict[str, int] = {
    "nm": 1,
    "um": 1_000,
    "mm": NM_PER_MM,
    "mil": 25_400,
    "thou": 25_400,
    "in": 25_400_000,
    "inch": 25_400_000,
}

_PLAIN_NM_RE = re.compile(r"[+-]?\d+")
_WITH_UNIT_RE = re.compile(r"(?P<number>[+-]?\d+(?:\.\d+)?)\s*(?P<unit>[A-Za-z]+)")

_NM_LIMIT = 2**63

_UNIT_PATTERN = "|".join(LENGTH_UNITS_NM)

_LENGTH_JSON_SCHEMA = {
    "anyOf": [
        {"type": "integer"},
        {"type": "string", "pattern": r"^\s*[+-]?\d+\s*$"},
        {
            "type": "string",
            "pattern": rf"^\s*[+-]?\d+(?:\.\d+)?\s*({_UNIT_PATTERN})\s*$",
        },
    ],
    "title": "LengthNM",
    "description": f"Whole nanometers, or a decimal number with a unit ({', '.join(LENGTH_UNITS_NM)}).",
}


def parse_length_nm(value: str | int | float) -> int:
    """Convert a spec length to integer nanometers.

    Accepts:
      - int: already nanometers
      - float: nanometers, only if it has no fractional part
      - "1930400": nanometers
      - "1.9304mm", "100mil", "0.1in", "250um": scaled to nanometers

    Raises:
        ValueError: For booleans, malformed text, unknown units, values that
            are not a whole number of nanometers, or values outside the
            signed 64-bit range.
    """
    if isinstance(value, bool):
        raise ValueError("Length must be a number or a string, not a boolean.")
    if isinstance(value, int):
        return _bounded(value)
    if isinstance(value, float):
        return _whole_nm(_to_decimal(repr(value)))
    if isinstance(value, str):
        return _length_from_text(value)
    raise ValueError(f"Unsupported length value: {value!r}")


def mm_to_nm(value_mm: float | int | str) -> int:
    """Convert a millimeter quantity (as typed on the command line) to nm."""
    return _length_from_text(f"{str(value_mm).strip()}mm")


def nm_to_mm(value_nm: int) -> Decimal:
    """Convert integer nanometers to an exact millimeter Decimal."""
    return Decimal(value_nm) / Decimal(NM_PER_MM)


def _length_from_text(text: str) -> int:
    text = text.strip()
    if not text:
        raise ValueError("Length string is empty.")
    if _PLAIN_NM_RE.fullmatch(text):
        return _bounded(int(text))
    match = _WITH_UNIT_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"Cannot read length {text!r}; write it like '54mm', '100mil' or '0.1in'.")
    unit = match["unit"].lower()
    scale = LENGTH_UNITS_NM.get(unit)
    if scale is None:
        raise ValueError(f"Unknown length unit {unit!r}; expected one of {', '.join(LENGTH_UNITS_NM)}.")
    return _whole_nm(_to_decimal(match["number"]) * scale)


def _to_decimal(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric length: {text!r}") from exc


def _whole_nm(value: Decimal) -> int:
    if not value.is_finite() or value != value.to_integral_value():
        raise ValueError(f"Length {value} nm is not a whole number of nanometers.")
    return _bounded(int(value))


def _bounded(value_nm: int) -> int:
    if not -_NM_LIMIT <= value_nm < _NM_LIMIT:
        raise ValueError(f"Length {value_nm} nm is outside the signed 64-bit range.")
    return value_nm


LengthNM = Annotated[int, BeforeValidator(parse_length_nm), WithJsonSchema(_LENGTH_JSON_SCHEMA)]
