"""Hole grid resolution.

Turns a BoardSpec into the derived numbers every later stage works from:
usable span, row count, centering offset and the per-orientation block
sizes. The horizontal and vertical boards share one algorithm; what differs
between them lives in an OrientationProfile.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .spec import BoardSpec


@dataclass(frozen=True, slots=True)
class OrientationProfile:
    """Orientation-specific layout constants.

    Attributes:
        edge_clearance_nm: Extra clearance added to the inset on each end of
            the primary axis before the grid starts.
        extra_rows: Main-chain steps beyond the row count.
        bus_trim_rows: Rows dropped from each bus chain.
        proto_columns: Prototyping pad columns on each side.
        proto_ranks: Prototyping pads per column; None means one per bus row.
    """

    edge_clearance_nm: int
    extra_rows: int
    bus_trim_rows: int
    proto_columns: int
    proto_ranks: int | None


HORIZONTAL_PROFILE = OrientationProfile(
    edge_clearance_nm=3_000_000,
    extra_rows=0,
    bus_trim_rows=0,
    proto_columns=3,
    proto_ranks=6,
)

VERTICAL_PROFILE = OrientationProfile(
    edge_clearance_nm=1_500_000,
    extra_rows=1,
    bus_trim_rows=2,
    proto_columns=2,
    proto_ranks=None,
)


@dataclass(frozen=True, slots=True)
class GridPlan:
    """Derived grid values for one board.

    ``start_offset_nm`` is ``(row_count - 1) * pitch / 2`` and
    ``chain_offset_nm`` is ``(holes_per_group + bus_gap_rows / 2) * pitch``.
    Both are exact integers because the pitch is an even number of
    nanometers (checked by the constraint pass). The half dimensions are
    exact for the same reason: odd board dimensions are rejected.

    Attributes:
        horizontal: True when the main grid runs along the board width.
        pitch_nm: Hole-to-hole spacing.
        half_width_nm: Half the board width.
        half_length_nm: Half the board length.
        inset_nm: Mounting-hole inset and corner radius.
        span_nm: Usable length along the primary axis.
        row_count: Whole pitches that fit in the span.
        start_offset_nm: Primary-axis position of the first row.
        chain_offset_nm: Secondary-axis position of the outer end of a chain.
        holes_per_group: Vias per main-chain group.
        bus_count: Bus chains (horizontal) or bus column pairs (vertical).
        bus_length: Vias per bus chain.
        main_steps: Main-chain steps (each emits two groups).
        proto_columns: Prototyping columns per side.
        proto_ranks: Prototyping pads per column.
    """

    horizontal: bool
    pitch_nm: int
    half_width_nm: int
    half_length_nm: int
    inset_nm: int
    span_nm: int
    row_count: int
    start_offset_nm: int
    chain_offset_nm: int
    holes_per_group: int
    bus_count: int
    bus_length: int
    main_steps: int
    proto_columns: int
    proto_ranks: int

    @property
    def half_pitch_nm(self) -> int:
        return self.pitch_nm // 2

    @property
    def main_group_count(self) -> int:
        return 2 * self.main_steps

    @property
    def bus_group_count(self) -> int:
        return self.bus_count if self.horizontal else 2 * self.bus_count

    @property
    def proto_group_count(self) -> int:
        return 2 * self.proto_columns * self.proto_ranks

    @property
    def signal_count(self) -> int:
        return self.main_group_count + self.bus_group_count + self.proto_group_count

    @property
    def main_via_count(self) -> int:
        return self.main_group_count * self.holes_per_group

    @property
    def primary_half_nm(self) -> int:
        return self.half_width_nm if self.horizontal else self.half_length_nm

    @property
    def cross_half_nm(self) -> int:
        return self.half_length_nm if self.horizontal else self.half_width_nm

    @property
    def chain_inner_offset_nm(self) -> int:
        """Secondary-axis position of the inner end of a main chain."""
        return self.chain_offset_nm - (self.holes_per_group - 1) * self.pitch_nm

    @property
    def row_reach_nm(self) -> int:
        """Furthest via centre from the board centre along the primary axis.

        Horizontal prototyping columns are left out; ``proto_reach_nm``
        covers them.
        """
        p = self.pitch_nm
        lows = [self.start_offset_nm - (self.main_steps - 1) * p]
        if self.horizontal:
            if self.bus_count:
                lows.append(self.start_offset_nm - (self.bus_length - 1) * p)
        else:
            if self.bus_count:
                lows.append(self.start_offset_nm - self.bus_length * p)
            if self.proto_columns:
                lows.append(self.start_offset_nm - self.proto_ranks * p)
        return max(self.start_offset_nm, -min(lows))

    @property
    def proto_reach_nm(self) -> int:
        """Centre of the outermost prototyping (or vertical bus) column."""
        if self.horizontal:
            return self.start_offset_nm + self.proto_columns * self.pitch_nm
        return self.chain_offset_nm + (self.bus_count + self.proto_columns) * self.pitch_nm


def orientation_profile(spec: BoardSpec) -> OrientationProfile:
    """Return the orientation defaults with any grid overrides applied."""
    base = HORIZONTAL_PROFILE if spec.board.horizontal else VERTICAL_PROFILE
    grid = spec.grid
    return OrientationProfile(
        edge_clearance_nm=_pick(grid.edge_clearance_nm, base.edge_clearance_nm),
        extra_rows=_pick(grid.extra_rows, base.extra_rows),
        bus_trim_rows=_pick(grid.bus_trim_rows, base.bus_trim_rows),
        proto_columns=_pick(grid.proto_columns, base.proto_columns),
        proto_ranks=grid.proto_ranks if grid.proto_ranks is not None else base.proto_ranks,
    )


def resolve_grid(spec: BoardSpec) -> GridPlan:
    """Compute the derived grid values for a spec.

    This never raises for out-of-range inputs; the constraint pass reads the
    result to decide whether the parameters are usable.
    """
    board = spec.board
    grid = spec.grid
    profile = orientation_profile(spec)

    primary_nm = board.width_nm if board.horizontal else board.length_nm
    span_nm = primary_nm - 2 * (board.inset_nm + profile.edge_clearance_nm)
    pitch_nm = grid.pitch_nm

    # floor(span / pitch), truncated toward zero for negative spans
    if pitch_nm > 0 and span_nm > 0:
        row_count = span_nm // pitch_nm
    else:
        row_count = 0

    bus_length = row_count - profile.bus_trim_rows
    proto_ranks = profile.proto_ranks if profile.proto_ranks is not None else bus_length

    return GridPlan(
        horizontal=board.horizontal,
        pitch_nm=pitch_nm,
        half_width_nm=board.width_nm // 2,
        half_length_nm=board.length_nm // 2,
        inset_nm=board.inset_nm,
        span_nm=span_nm,
        row_count=row_count,
        start_offset_nm=(row_count - 1) * pitch_nm // 2,
        chain_offset_nm=(2 * grid.holes_per_group + grid.bus_gap_rows) * pitch_nm // 2,
        holes_per_group=grid.holes_per_group,
        bus_count=grid.bus_count,
        bus_length=bus_length,
        main_steps=row_count + profile.extra_rows,
        proto_columns=profile.proto_columns,
        proto_ranks=proto_ranks,
    )


def _pick(value: int | None, default: int) -> int:
    return default if value is None else value
