from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .api import generate_board, load_spec, plan_board, plan_summary, write_board
from .constraints import constraint_proof_payload, evaluate_constraints
from .hashing import canonical_json_dumps
from .spec import BoardSpec, apply_board_overrides, default_spec
from .units import mm_to_nm, nm_to_mm

logger = logging.getLogger(__name__)


def millimeters(value: str) -> int:
    """argparse type: a millimeter length, returned as integer nm."""
    return mm_to_nm(value)


def build_parser() -> argparse.ArgumentParser:
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("spec", type=Path, nargs="?", help="BoardSpec YAML or JSON file (defaults if omitted)")
    shared.add_argument("--board-width", type=millimeters, metavar="MM", help="Board width in mm")
    shared.add_argument("--board-length", type=millimeters, metavar="MM", help="Board length in mm")
    shared.add_argument("--inset", type=millimeters, metavar="MM", help="Mounting-hole inset and corner radius in mm")
    orientation = shared.add_mutually_exclusive_group()
    orientation.add_argument("--horizontal", dest="horizontal", action="store_true", default=None)
    orientation.add_argument("--vertical", dest="horizontal", action="store_false")

    parser = argparse.ArgumentParser(prog="protoboard", description="EAGLE prototyping breadboard generator")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", parents=[shared], help="Write the EAGLE board document")
    generate.add_argument("--out", type=Path, help="Output file; stdout when omitted")

    plan = subparsers.add_parser("plan", parents=[shared], help="Show derived grid values and group counts")
    plan.add_argument("--json", action="store_true", default=False, help="Emit canonical JSON")

    subparsers.add_parser("validate", parents=[shared], help="Check the board parameters and emit the constraint proof")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.WARNING
    if args.verbose >= 1:
        log_level = logging.INFO
    if args.verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    try:
        spec = _resolve_spec(args)
        if args.command == "generate":
            return _cmd_generate(spec, args.out)
        if args.command == "plan":
            return _cmd_plan(spec, as_json=args.json)
        if args.command == "validate":
            return _cmd_validate(spec)
    except (OSError, ValueError, yaml.YAMLError) as e:
        # pydantic.ValidationError and InvalidParameterError are ValueErrors
        logger.error("Error: %s", e)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2


def _resolve_spec(args: argparse.Namespace) -> BoardSpec:
    spec = load_spec(args.spec) if args.spec is not None else default_spec()
    return apply_board_overrides(
        spec,
        width_nm=args.board_width,
        length_nm=args.board_length,
        inset_nm=args.inset,
        horizontal=args.horizontal,
    )


def _cmd_generate(spec: BoardSpec, out: Path | None) -> int:
    if out is None:
        result = generate_board(spec)
        sys.stdout.write(result.text)
        return 0
    result = write_board(spec, out)
    payload = canonical_json_dumps(
        {
            "output": str(result.path),
            "board_hash": result.board_hash,
            "board_id": result.board_id,
            "signal_count": result.signal_count,
        }
    )
    sys.stdout.write(payload + "\n")
    return 0


def _cmd_plan(spec: BoardSpec, *, as_json: bool) -> int:
    summary = plan_summary(plan_board(spec))
    if as_json:
        sys.stdout.write(canonical_json_dumps(summary) + "\n")
        return 0
    groups = summary["groups"]
    lines = [
        f"orientation:   {summary['orientation']}",
        f"rows:          {summary['row_count']}",
        f"span:          {nm_to_mm(summary['span_nm'])} mm",
        f"start offset:  {nm_to_mm(summary['start_offset_nm'])} mm",
        f"chain offset:  {nm_to_mm(summary['chain_offset_nm'])} mm",
        f"groups:        main={groups['main']} bus={groups['bus']} proto={groups['proto']}",
        f"signals:       {summary['signal_count']}",
        f"vias:          {summary['via_count']}",
    ]
    sys.stdout.write("\n".join(lines) + "\n")
    return 0


def _cmd_validate(spec: BoardSpec) -> int:
    proof = evaluate_constraints(spec)
    sys.stdout.write(canonical_json_dumps(constraint_proof_payload(proof)) + "\n")
    if not proof.passed:
        for result in proof.violations:
            logger.error("%s: %s", result.constraint_id, result.description)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
