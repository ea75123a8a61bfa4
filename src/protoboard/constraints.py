from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from .resolve import GridPlan, resolve_grid

if TYPE_CHECKING:
    from .spec import BoardSpec

logger = logging.getLogger(__name__)

ConstraintCategory = Literal["BOARD", "GRID", "PADS", "DECORATION"]

_CATEGORIES: tuple[ConstraintCategory, ...] = ("BOARD", "GRID", "PADS", "DECORATION")

# Clearance between the label box and the mounting-hole inset, per side.
LABEL_BOX_CLEARANCE_NM = 3_000_000

# Logo outline at scale 1.0, drawn as a chevron-topped banner.
LOGO_WIDTH_NM = 26_600_000
LOGO_HEIGHT_NM = 10_100_000
LOGO_FLEX_NM = 6_100_000
LOGO_TOP_MARGIN_NM = 6_000_000


@dataclass(frozen=True)
class ConstraintResult:
    constraint_id: str
    description: str
    category: ConstraintCategory
    value: float
    limit: float
    margin: float
    passed: bool


@dataclass(frozen=True)
class ConstraintProof:
    constraints: tuple[ConstraintResult, ...]
    categories: dict[ConstraintCategory, tuple[ConstraintResult, ...]]
    grid: GridPlan
    passed: bool

    @property
    def violations(self) -> tuple[ConstraintResult, ...]:
        return tuple(result for result in self.constraints if not result.passed)


class InvalidParameterError(ValueError):
    """Raised when board parameters cannot produce a valid layout.

    Attributes:
        violations: The failed constraint results.
    """

    def __init__(self, violations: list[ConstraintResult]) -> None:
        self.violations = tuple(violations)
        details = "; ".join(
            f"{result.constraint_id} (value={result.value:g}, limit={result.limit:g})" for result in violations
        )
        super().__init__(f"Invalid board parameters: {details}")


def evaluate_constraints(spec: BoardSpec) -> ConstraintProof:
    """Check a spec against every layout precondition.

    Returns a proof listing each check; nothing is raised here.
    """
    grid = resolve_grid(spec)
    board = spec.board
    results: list[ConstraintResult] = []

    results.append(
        _min_constraint(
            "BOARD_WIDTH_POSITIVE",
            "Board width must be positive.",
            category="BOARD",
            value=board.width_nm,
            limit=1,
        )
    )
    results.append(
        _min_constraint(
            "BOARD_LENGTH_POSITIVE",
            "Board length must be positive.",
            category="BOARD",
            value=board.length_nm,
            limit=1,
        )
    )
    results.append(
        _min_constraint(
            "BOARD_INSET_POSITIVE",
            "Mounting-hole inset (corner radius) must be positive.",
            category="BOARD",
            value=board.inset_nm,
            limit=1,
        )
    )
    results.append(
        _min_constraint(
            "BOARD_INSET_MAX",
            "Inset must be less than half the smaller board dimension.",
            category="BOARD",
            value=min(board.width_nm, board.length_nm) - 2 * board.inset_nm,
            limit=1,
        )
    )
    results.append(
        _equal_constraint(
            "BOARD_WIDTH_EVEN",
            "Board width must be an even number of nanometers so the outline stays centred.",
            category="BOARD",
            value=board.width_nm % 2,
            expected=0,
        )
    )
    results.append(
        _equal_constraint(
            "BOARD_LENGTH_EVEN",
            "Board length must be an even number of nanometers so the outline stays centred.",
            category="BOARD",
            value=board.length_nm % 2,
            expected=0,
        )
    )

    results.extend(_grid_constraints(spec, grid))
    results.extend(_fit_constraints(spec, grid))

    pads = spec.pads
    results.append(
        _min_constraint(
            "PADS_DRILL_POSITIVE",
            "Pad drill diameter must be positive.",
            category="PADS",
            value=pads.drill_nm,
            limit=1,
        )
    )
    results.append(
        _min_constraint(
            "PADS_ANNULAR_RING",
            "Pad diameter must exceed the drill diameter.",
            category="PADS",
            value=pads.diameter_nm - pads.drill_nm,
            limit=1,
        )
    )
    results.append(
        _min_constraint(
            "PADS_TRACE_WIDTH_POSITIVE",
            "Trace width must be positive.",
            category="PADS",
            value=pads.trace_width_nm,
            limit=1,
        )
    )

    decoration = spec.decoration
    if decoration.name_box or decoration.label:
        results.append(
            _min_constraint(
                "DECORATION_LABEL_BOX",
                "Label box must have positive width inside the mounting holes.",
                category="DECORATION",
                value=label_box_half_width_nm(spec),
                limit=1,
            )
        )
    if decoration.label:
        results.append(
            _min_constraint(
                "DECORATION_LABEL_SIZE",
                "Label text size must be positive.",
                category="DECORATION",
                value=decoration.label_size_nm,
                limit=1,
            )
        )
    if decoration.logo:
        width, height, flex = logo_size_nm(decoration.logo_scale_permille)
        results.append(
            _min_constraint(
                "DECORATION_LOGO_FITS",
                "Logo must lie inside the board outline.",
                category="DECORATION",
                value=min(
                    grid.half_width_nm - width // 2,
                    2 * grid.half_length_nm - (LOGO_TOP_MARGIN_NM + height + flex),
                ),
                limit=1,
            )
        )

    proof = _build_proof(results, grid)
    logger.debug(
        "Evaluated %d constraints (%d failed)",
        len(proof.constraints),
        len(proof.violations),
    )
    return proof


def enforce_constraints(spec: BoardSpec) -> ConstraintProof:
    """Evaluate constraints and fail fast on any violation.

    Raises:
        InvalidParameterError: If any constraint fails.
    """
    proof = evaluate_constraints(spec)
    if not proof.passed:
        raise InvalidParameterError(list(proof.violations))
    return proof


def constraint_proof_payload(proof: ConstraintProof) -> dict[str, Any]:
    return {
        "passed": proof.passed,
        "categories": {
            category: [result.constraint_id for result in proof.categories[category]] for category in _CATEGORIES
        },
        "constraints": [
            {
                "id": result.constraint_id,
                "description": result.description,
                "category": result.category,
                "value": result.value,
                "limit": result.limit,
                "margin": result.margin,
                "passed": result.passed,
            }
            for result in proof.constraints
        ],
    }


def label_box_half_width_nm(spec: BoardSpec) -> int:
    return spec.board.width_nm // 2 - (spec.board.inset_nm + LABEL_BOX_CLEARANCE_NM)


def logo_size_nm(scale_permille: int) -> tuple[int, int, int]:
    """Scaled logo width, banner height and chevron depth."""
    return (
        LOGO_WIDTH_NM * scale_permille // 1000,
        LOGO_HEIGHT_NM * scale_permille // 1000,
        LOGO_FLEX_NM * scale_permille // 1000,
    )


def _fit_constraints(spec: BoardSpec, grid: GridPlan) -> list[ConstraintResult]:
    """Keep every pad on the board and pads of different nets apart.

    Pad edges must stay strictly inside the board edge on both axes.
    """
    pad_radius = (spec.pads.diameter_nm + 1) // 2
    results: list[ConstraintResult] = [
        _min_constraint(
            "GRID_CHAIN_FITS",
            "Main chains must fit across the board.",
            category="GRID",
            value=grid.cross_half_nm - (grid.chain_offset_nm + pad_radius),
            limit=1,
        ),
        _min_constraint(
            "GRID_ROWS_FIT",
            "Every hole row must fit along the board.",
            category="GRID",
            value=grid.primary_half_nm - (grid.row_reach_nm + pad_radius),
            limit=1,
        ),
        _min_constraint(
            "GRID_PROTO_FITS",
            "The outermost prototyping column must fit on the board.",
            category="GRID",
            value=grid.half_width_nm - (grid.proto_reach_nm + pad_radius),
            limit=1,
        ),
    ]
    if not grid.horizontal:
        return results

    if grid.proto_columns:
        proto_half_height = (grid.proto_ranks - 1) * grid.pitch_nm // 2
        results.append(
            _min_constraint(
                "GRID_PROTO_RANKS_FIT",
                "Prototyping pad columns must fit across the board.",
                category="GRID",
                value=grid.half_length_nm - (proto_half_height + pad_radius),
                limit=1,
            )
        )
        results.append(
            _min_constraint(
                "GRID_PROTO_CLEAR",
                "Main chains and buses must stop short of the prototyping columns.",
                category="GRID",
                value=grid.row_count - max(grid.main_steps, grid.bus_length if grid.bus_count else 0),
                limit=0,
            )
        )
    if grid.bus_count > 0:
        # In half pitches: buses sit at 1, -1, -3, ... and chains end at
        # +-(bus_gap_rows + 2); each bus keeps one pitch from both chain ends.
        chain_end = spec.grid.bus_gap_rows + 2
        top_bus = 1
        bottom_bus = 3 - 2 * grid.bus_count
        results.append(
            _min_constraint(
                "GRID_BUS_CLEARANCE",
                "Bus rows must keep one pitch from the main chains.",
                category="GRID",
                value=min(chain_end - 2 - top_bus, bottom_bus + chain_end - 2),
                limit=0,
            )
        )
    return results


def _grid_constraints(spec: BoardSpec, grid: GridPlan) -> list[ConstraintResult]:
    results: list[ConstraintResult] = []
    results.append(
        _min_constraint(
            "GRID_PITCH_POSITIVE",
            "Hole pitch must be positive.",
            category="GRID",
            value=grid.pitch_nm,
            limit=1,
        )
    )
    results.append(
        _equal_constraint(
            "GRID_PITCH_EVEN",
            "Hole pitch must be an even number of nanometers so half-pitch offsets stay exact.",
            category="GRID",
            value=grid.pitch_nm % 2,
            expected=0,
        )
    )
    results.append(
        _min_constraint(
            "GRID_SPAN_POSITIVE",
            "Usable grid span (board minus inset and edge clearance) must be positive.",
            category="GRID",
            value=grid.span_nm,
            limit=1,
        )
    )
    results.append(
        _min_constraint(
            "GRID_ROW_COUNT_MIN",
            "At least one row of holes must fit in the usable span.",
            category="GRID",
            value=grid.row_count,
            limit=1,
        )
    )
    if grid.bus_count > 0:
        results.append(
            _min_constraint(
                "GRID_BUS_LENGTH_MIN",
                "Each power bus must have at least one hole.",
                category="GRID",
                value=grid.bus_length,
                limit=1,
            )
        )
    results.append(
        _min_constraint(
            "GRID_HOLES_PER_GROUP_MIN",
            "Each main-chain group must have at least one hole.",
            category="GRID",
            value=grid.holes_per_group,
            limit=1,
        )
    )

    profile_counts = (
        ("GRID_BUS_GAP_NONNEGATIVE", "Bus gap rows must not be negative.", spec.grid.bus_gap_rows),
        ("GRID_BUS_COUNT_NONNEGATIVE", "Bus count must not be negative.", grid.bus_count),
        ("GRID_EXTRA_ROWS_NONNEGATIVE", "Extra rows must not be negative.", grid.main_steps - grid.row_count),
        ("GRID_PROTO_COLUMNS_NONNEGATIVE", "Prototyping columns must not be negative.", grid.proto_columns),
        ("GRID_PROTO_RANKS_NONNEGATIVE", "Prototyping ranks must not be negative.", grid.proto_ranks),
    )
    for constraint_id, description, value in profile_counts:
        results.append(_min_constraint(constraint_id, description, category="GRID", value=value, limit=0))
    return results


def _min_constraint(
    constraint_id: str,
    description: str,
    *,
    category: ConstraintCategory,
    value: int,
    limit: int,
) -> ConstraintResult:
    margin = float(value - limit)
    return ConstraintResult(
        constraint_id=constraint_id,
        description=description,
        category=category,
        value=float(value),
        limit=float(limit),
        margin=margin,
        passed=margin >= 0,
    )


def _equal_constraint(
    constraint_id: str,
    description: str,
    *,
    category: ConstraintCategory,
    value: int,
    expected: int,
) -> ConstraintResult:
    margin = -float(abs(value - expected))
    return ConstraintResult(
        constraint_id=constraint_id,
        description=description,
        category=category,
        value=float(value),
        limit=float(expected),
        margin=margin,
        passed=margin == 0,
    )


def _build_proof(results: list[ConstraintResult], grid: GridPlan) -> ConstraintProof:
    categories: dict[ConstraintCategory, list[ConstraintResult]] = {category: [] for category in _CATEGORIES}
    for result in results:
        categories[result.category].append(result)
    frozen = {category: tuple(items) for category, items in categories.items()}
    passed = all(result.passed for result in results)
    return ConstraintProof(constraints=tuple(results), categories=frozen, grid=grid, passed=passed)
