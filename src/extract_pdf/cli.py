from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .artifacts import write_extraction_json
from .contracts import ExtractEngineName, ExtractPdfConfig
from .module import run_extract_pdf_relpath


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="navlog-extract-pdf",
        description="Extract positioned text tokens from a flight release PDF into JSON.",
    )
    p.add_argument("--data-root", required=True, type=Path, help="Resolved DATA_ROOT path.")
    p.add_argument("--pdf-relpath", required=True, help="PDF path relative to --data-root.")
    p.add_argument("--out", required=True, type=Path, help="Output token JSON file.")
    p.add_argument(
        "--engine",
        choices=[e.value for e in ExtractEngineName],
        default=ExtractEngineName.PYPDFIUM2.value,
        help="Text extraction backend.",
    )
    p.add_argument(
        "--page-selection",
        default=None,
        help='Optional page selection like "1,3-5". Default: all pages.',
    )
    p.add_argument(
        "--compute-source-sha256",
        action="store_true",
        help="Include SHA-256 of the source PDF in meta for auditing.",
    )
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ExtractPdfConfig(
        data_root=args.data_root,
        engine=ExtractEngineName(args.engine),
        page_selection=args.page_selection,
        compute_source_sha256=args.compute_source_sha256,
    )

    result = run_extract_pdf_relpath(config=config, pdf_relpath=args.pdf_relpath)
    write_extraction_json(result=result, out_file=args.out)

    summary = {
        "ok": result.ok,
        "pages": len(result.pages),
        "tokens": sum(len(p.tokens) for p in result.pages),
        "errors": [e.code for e in result.errors],
        "out": str(args.out),
    }
    print(json.dumps(summary, sort_keys=True))
    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
