"""Tests for layout preconditions."""

from __future__ import annotations

import pytest

from protoboard.constraints import (
    InvalidParameterError,
    constraint_proof_payload,
    enforce_constraints,
    evaluate_constraints,
    label_box_half_width_nm,
)
from protoboard.geom.layout import compute_layout
from protoboard.spec import BoardSpec, load_board_spec


def _failed_ids(spec: BoardSpec) -> set[str]:
    return {result.constraint_id for result in evaluate_constraints(spec).violations}


class TestEvaluateConstraints:
    def test_default_passes(self, horizontal_spec: BoardSpec) -> None:
        proof = evaluate_constraints(horizontal_spec)
        assert proof.passed
        assert proof.violations == ()

    def test_vertical_default_passes(self, vertical_spec: BoardSpec) -> None:
        assert evaluate_constraints(vertical_spec).passed

    def test_categories_partition_results(self, horizontal_spec: BoardSpec) -> None:
        proof = evaluate_constraints(horizontal_spec)
        total = sum(len(items) for items in proof.categories.values())
        assert total == len(proof.constraints)
        assert set(proof.categories) == {"BOARD", "GRID", "PADS", "DECORATION"}

    def test_span_too_small(self) -> None:
        spec = load_board_spec({"board": {"width_nm": "14mm"}})
        failed = _failed_ids(spec)
        assert "GRID_SPAN_POSITIVE" in failed
        assert "GRID_ROW_COUNT_MIN" in failed

    def test_zero_width(self) -> None:
        assert "BOARD_WIDTH_POSITIVE" in _failed_ids(load_board_spec({"board": {"width_nm": 0}}))

    def test_negative_inset(self) -> None:
        assert "BOARD_INSET_POSITIVE" in _failed_ids(load_board_spec({"board": {"inset_nm": "-1mm"}}))

    def test_inset_too_large(self) -> None:
        spec = load_board_spec({"board": {"inset_nm": "16.5mm"}})
        assert "BOARD_INSET_MAX" in _failed_ids(spec)

    def test_odd_pitch(self) -> None:
        spec = load_board_spec({"grid": {"pitch_nm": 2_540_001}})
        assert _failed_ids(spec) == {"GRID_PITCH_EVEN"}

    def test_zero_pitch(self) -> None:
        failed = _failed_ids(load_board_spec({"grid": {"pitch_nm": 0}}))
        assert "GRID_PITCH_POSITIVE" in failed
        assert "GRID_ROW_COUNT_MIN" in failed

    def test_vertical_bus_needs_rows(self) -> None:
        # 7 mm span gives 2 rows, and both are trimmed from the buses
        spec = load_board_spec({"board": {"horizontal": False, "length_nm": "18mm"}})
        assert "GRID_BUS_LENGTH_MIN" in _failed_ids(spec)

    def test_no_buses_skips_bus_length(self) -> None:
        spec = load_board_spec({"board": {"horizontal": False, "length_nm": "18mm"}, "grid": {"bus_count": 0}})
        failed = _failed_ids(spec)
        assert "GRID_BUS_LENGTH_MIN" not in failed
        assert "GRID_PROTO_RANKS_NONNEGATIVE" not in failed

    def test_negative_counts(self) -> None:
        spec = load_board_spec({"grid": {"bus_gap_rows": -1, "proto_columns": -1, "extra_rows": -2}})
        failed = _failed_ids(spec)
        assert {
            "GRID_BUS_GAP_NONNEGATIVE",
            "GRID_PROTO_COLUMNS_NONNEGATIVE",
            "GRID_EXTRA_ROWS_NONNEGATIVE",
        } <= failed

    def test_annular_ring(self) -> None:
        spec = load_board_spec({"pads": {"drill_nm": "2mm", "diameter_nm": "2mm"}})
        assert _failed_ids(spec) == {"PADS_ANNULAR_RING"}

    def test_label_box_must_fit(self) -> None:
        # 14 mm of width leaves no room between the mounting holes
        spec = load_board_spec({"board": {"width_nm": "14mm"}})
        assert label_box_half_width_nm(spec) == 0
        assert "DECORATION_LABEL_BOX" in _failed_ids(spec)

    def test_label_box_ignored_without_label(self) -> None:
        spec = load_board_spec(
            {"board": {"width_nm": "30mm"}, "decoration": {"label": "", "name_box": False}},
        )
        assert "DECORATION_LABEL_BOX" not in _failed_ids(spec)

    def test_odd_board_dimensions(self) -> None:
        assert "BOARD_WIDTH_EVEN" in _failed_ids(load_board_spec({"board": {"width_nm": 54_000_001}}))
        assert "BOARD_LENGTH_EVEN" in _failed_ids(load_board_spec({"board": {"length_nm": 33_000_001}}))

    def test_logo_must_fit_length(self) -> None:
        # shorter chains keep the grid on a 28 mm board; the logo needs 28.68 mm
        spec = load_board_spec({"board": {"length_nm": "28mm"}, "grid": {"holes_per_group": 4}})
        assert _failed_ids(spec) == {"DECORATION_LOGO_FITS"}

    def test_logo_must_fit_width(self) -> None:
        spec = load_board_spec({"board": {"width_nm": "36mm"}})
        assert _failed_ids(spec) == {"DECORATION_LOGO_FITS"}

    def test_smaller_or_disabled_logo_fits(self) -> None:
        base = {"board": {"length_nm": "28mm"}, "grid": {"holes_per_group": 4}}
        assert evaluate_constraints(load_board_spec({**base, "decoration": {"logo": False}})).passed
        assert evaluate_constraints(load_board_spec({**base, "decoration": {"logo_scale_permille": 1000}})).passed

    def test_payload_lists_every_constraint(self, horizontal_spec: BoardSpec) -> None:
        proof = evaluate_constraints(horizontal_spec)
        payload = constraint_proof_payload(proof)
        assert payload["passed"] is True
        assert len(payload["constraints"]) == len(proof.constraints)
        assert payload["constraints"][0]["id"] == "BOARD_WIDTH_POSITIVE"


class TestEnforceConstraints:
    def test_returns_proof_when_valid(self, horizontal_spec: BoardSpec) -> None:
        proof = enforce_constraints(horizontal_spec)
        assert proof.grid.row_count == 15

    def test_raises_with_violations(self) -> None:
        spec = load_board_spec({"grid": {"pitch_nm": 2_540_001}})
        with pytest.raises(InvalidParameterError) as excinfo:
            enforce_constraints(spec)
        assert [r.constraint_id for r in excinfo.value.violations] == ["GRID_PITCH_EVEN"]
        assert "GRID_PITCH_EVEN" in str(excinfo.value)

    def test_error_is_value_error(self) -> None:
        assert issubclass(InvalidParameterError, ValueError)


class TestPadsStayOnBoard:
    def test_chains_too_long_for_board(self) -> None:
        # chain ends reach 14.94 mm from the centre line of a 25 mm board
        spec = load_board_spec({"board": {"length_nm": "25mm"}})
        assert "GRID_CHAIN_FITS" in _failed_ids(spec)

    def test_small_inset_pushes_proto_columns_off_board(self) -> None:
        spec = load_board_spec({"board": {"inset_nm": "1mm"}})
        assert "GRID_PROTO_FITS" in _failed_ids(spec)
        with pytest.raises(InvalidParameterError):
            compute_layout(spec)

    def test_too_many_proto_columns(self) -> None:
        spec = load_board_spec({"grid": {"proto_columns": 5}})
        assert _failed_ids(spec) == {"GRID_PROTO_FITS"}

    def test_vertical_outer_columns_need_width(self) -> None:
        spec = load_board_spec({"board": {"width_nm": "40mm", "horizontal": False}})
        failed = _failed_ids(spec)
        assert "GRID_PROTO_FITS" in failed
        assert "GRID_CHAIN_FITS" not in failed

    def test_vertical_extra_rows_run_off_board(self) -> None:
        spec = load_board_spec({"board": {"horizontal": False}, "grid": {"extra_rows": 4}})
        assert _failed_ids(spec) == {"GRID_ROWS_FIT"}

    def test_too_many_proto_ranks(self) -> None:
        spec = load_board_spec({"grid": {"proto_ranks": 20}})
        assert _failed_ids(spec) == {"GRID_PROTO_RANKS_FIT"}

    def test_fit_margins_reported(self, horizontal_spec: BoardSpec) -> None:
        results = {r.constraint_id: r for r in evaluate_constraints(horizontal_spec).constraints}
        # 16.5 - (13.97 + 0.9652) and 27 - (17.78 + 3 * 2.54 + 0.9652)
        assert results["GRID_CHAIN_FITS"].value == 1_564_800
        assert results["GRID_PROTO_FITS"].value == 634_800


class TestPadsStayApart:
    def test_third_bus_meets_bottom_chains(self) -> None:
        spec = load_board_spec({"grid": {"bus_count": 3}})
        assert _failed_ids(spec) == {"GRID_BUS_CLEARANCE"}
        with pytest.raises(InvalidParameterError):
            compute_layout(spec)

    def test_buses_need_a_gap_row(self) -> None:
        spec = load_board_spec({"grid": {"bus_gap_rows": 0}})
        assert _failed_ids(spec) == {"GRID_BUS_CLEARANCE"}

    def test_wider_gap_makes_room_for_a_third_bus(self) -> None:
        spec = load_board_spec({"grid": {"bus_count": 3, "bus_gap_rows": 3, "holes_per_group": 4}})
        assert evaluate_constraints(spec).passed
        positions = [via.position for signal in compute_layout(spec).signals for via in signal.vias]
        assert len(positions) == len(set(positions))

    def test_extra_main_rows_meet_proto_columns(self) -> None:
        spec = load_board_spec({"grid": {"extra_rows": 1}})
        assert _failed_ids(spec) == {"GRID_PROTO_CLEAR"}

    def test_extra_rows_allowed_without_proto_columns(self) -> None:
        spec = load_board_spec({"grid": {"extra_rows": 1, "proto_columns": 0}})
        assert evaluate_constraints(spec).passed
