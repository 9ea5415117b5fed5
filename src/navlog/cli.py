from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from contracts.extraction import ExtractError, ExtractionResult
from derivation.config import DerivationConfig
from extract_pdf.artifacts import read_extraction_json
from extract_pdf.contracts import ExtractPdfConfig
from extract_pdf.module import run_extract_pdf_file
from rows.config import RowConfig

from .artifacts import serialize_payload, write_json_artifact
from .tracker import NavlogTracker

logger = logging.getLogger(__name__)

_ROW_DEFAULTS = RowConfig()
_DERIVATION_DEFAULTS = DerivationConfig()


def _parse_actual(value: str) -> tuple[int, str, str]:
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected INDEX,TIME,FUEL, got {value!r}")
    try:
        index = int(parts[0])
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"waypoint index must be an integer, got {parts[0]!r}") from e
    return index, parts[1], parts[2]


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="navlog-parse",
        description="Parse a flight release navlog and compute planned vs. actual ETA and fuel per waypoint.",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--pdf", type=Path, help="Flight release PDF file.")
    src.add_argument("--tokens", type=Path, help="Token JSON written by navlog-extract-pdf.")
    p.add_argument("--output", type=Path, default=None, help="Write the tracker snapshot JSON here.")
    p.add_argument("--takeoff-time", default=None, help="Actual takeoff time, e.g. 1232.")
    p.add_argument("--takeoff-fuel", default=None, help="Actual takeoff fuel, e.g. 152.0.")
    p.add_argument(
        "--actual",
        action="append",
        type=_parse_actual,
        default=[],
        metavar="INDEX,TIME,FUEL",
        help="Actual time and fuel at a waypoint (0-based index). Repeatable.",
    )
    p.add_argument("--y-tolerance", type=float, default=_ROW_DEFAULTS.y_tolerance, help="Row bucket height.")
    p.add_argument("--gap-threshold", type=float, default=_ROW_DEFAULTS.gap_threshold, help="Cell merge gap.")
    p.add_argument("--eet-tolerance-min", type=int, default=_DERIVATION_DEFAULTS.eet_tolerance_min)
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        row_config = RowConfig(y_tolerance=args.y_tolerance, gap_threshold=args.gap_threshold)
        derivation_config = DerivationConfig(eet_tolerance_min=args.eet_tolerance_min)
    except ValueError as e:
        parser.error(str(e))

    if args.pdf is not None:
        pdf_file = args.pdf.expanduser().resolve()
        extraction = run_extract_pdf_file(
            config=ExtractPdfConfig(data_root=pdf_file.parent),
            pdf_file=pdf_file,
            pdf_relpath=pdf_file.name,
        )
    else:
        try:
            extraction = read_extraction_json(args.tokens)
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Token file %s could not be read: %r", args.tokens, e)
            extraction = ExtractionResult(
                ok=False,
                errors=[ExtractError(code="EXTRACT_TOKENS_UNREADABLE", message=str(e), detail={"path": str(args.tokens)})],
                meta={},
                pages=[],
            )

    tracker = NavlogTracker(row_config=row_config, derivation_config=derivation_config)

    errors: list[str] = []
    res = tracker.submit_document(extraction)
    errors.extend(e.code for e in res.errors)

    if res.ok and (args.takeoff_time is not None or args.takeoff_fuel is not None):
        res = tracker.set_actual_takeoff(args.takeoff_time or "", args.takeoff_fuel or "")
        errors.extend(e.code for e in res.errors)

    if res.ok:
        for index, time, fuel in args.actual:
            res = tracker.set_actual_waypoint(index, time, fuel)
            errors.extend(e.code for e in res.errors)
            if not res.ok:
                break

    snapshot = tracker.snapshot()
    if args.output is not None:
        write_json_artifact(payload=snapshot, out_file=args.output)
    else:
        print(serialize_payload(snapshot), end="")

    summary = {
        "ok": not errors,
        "status": tracker.status,
        "waypoints": len(tracker.waypoints),
        "current_waypoint": tracker.current_waypoint,
        "errors": errors,
    }
    if args.output is not None:
        summary["out"] = str(args.output)
    print(json.dumps(summary, sort_keys=True))
    return 0 if not errors else 2


if __name__ == "__main__":
    raise SystemExit(main())
