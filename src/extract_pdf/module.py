from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from contracts.extraction import ExtractError, ExtractionResult

from .contracts import ExtractEngineName, ExtractPdfConfig
from .data_access import DataAccessError, resolve_pdf_under_data_root, sha256_file
from .engines import Pypdfium2Engine

logger = logging.getLogger(__name__)


def _canonical_page_selection(selection: str | None) -> str:
    if selection is None:
        return "all"
    s = "".join(selection.split())
    return s if s != "" else "all"


def _parse_page_selection(selection: str | None, *, page_count: int) -> list[int]:
    """
    Parse "1,3-5" into a sorted list of unique 1-indexed page numbers.
    None or blank => all pages.
    """

    if selection is None or selection.strip() == "":
        return list(range(1, page_count + 1))

    pages: set[int] = set()
    for part in selection.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            a_str, b_str = part.split("-", 1)
            a = int(a_str.strip())
            b = int(b_str.strip())
            if a <= 0 or b <= 0:
                raise ValueError("page numbers must be >= 1")
            if b < a:
                raise ValueError(f"invalid range: {part!r}")
            pages.update(range(a, b + 1))
        else:
            p = int(part)
            if p <= 0:
                raise ValueError("page numbers must be >= 1")
            pages.add(p)

    ordered = sorted(pages)
    if ordered and ordered[-1] > page_count:
        raise ValueError(f"page selection out of bounds (1..{page_count})")
    return ordered


def _get_engine(engine: ExtractEngineName):
    if engine == ExtractEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported extraction engine: {engine}")


def _failed(
    *, pdf_relpath: str, code: str, message: str, detail: dict[str, Any] | None, meta: dict[str, Any]
) -> ExtractionResult:
    logger.warning("PDF text extraction failed: %s (%s)", code, pdf_relpath)
    return ExtractionResult(
        ok=False,
        errors=[ExtractError(code=code, message=message, detail=detail)],
        meta=meta,
        pages=[],
        source_pdf_relpath=pdf_relpath,
    )


def run_extract_pdf_relpath(*, config: ExtractPdfConfig, pdf_relpath: str) -> ExtractionResult:
    """
    Extract positioned text tokens from a flight release PDF.

    Input: PDF relpath under `config.data_root`
    Output: one ExtractedPage per selected page, tokens in backend order

    Every failure comes back as `ok=False` with a single EXTRACT_* error and no
    pages; this function does not raise for bad input.
    """

    meta: dict[str, Any] = {}
    engine = _get_engine(config.engine)
    meta["backend"] = engine.backend_id()

    if not pdf_relpath.lower().endswith(".pdf"):
        return _failed(
            pdf_relpath=pdf_relpath,
            code="EXTRACT_INPUT_NOT_PDF",
            message="Only PDFs are accepted (by .pdf extension)",
            detail={"pdf_relpath": pdf_relpath},
            meta=meta,
        )

    try:
        pdf_file = resolve_pdf_under_data_root(data_root=config.data_root, relpath=pdf_relpath)
    except DataAccessError as e:
        return _failed(
            pdf_relpath=pdf_relpath,
            code="EXTRACT_DATA_ACCESS_ERROR",
            message=str(e),
            detail={"data_root": str(config.data_root), "relpath": pdf_relpath},
            meta=meta,
        )

    if not pdf_file.exists():
        return _failed(
            pdf_relpath=pdf_relpath,
            code="EXTRACT_INPUT_NOT_FOUND",
            message="Input PDF not found",
            detail={"source_pdf_relpath": pdf_relpath},
            meta=meta,
        )

    return run_extract_pdf_file(config=config, pdf_file=pdf_file, pdf_relpath=pdf_relpath, engine=engine, meta=meta)


def run_extract_pdf_file(
    *,
    config: ExtractPdfConfig,
    pdf_file: Path,
    pdf_relpath: str | None = None,
    engine=None,
    meta: dict[str, Any] | None = None,
) -> ExtractionResult:
    """
    Extract from an already-resolved PDF path (no data_root confinement).
    """

    meta = {} if meta is None else meta
    if engine is None:
        engine = _get_engine(config.engine)
        meta["backend"] = engine.backend_id()
    label = pdf_relpath if pdf_relpath is not None else str(pdf_file)

    try:
        page_count = engine.get_page_count(pdf_file=pdf_file)
    except Exception as e:
        return _failed(
            pdf_relpath=label,
            code="EXTRACT_BACKEND_PAGECOUNT_FAILED",
            message="Failed to read PDF page count",
            detail={"error": repr(e)},
            meta=meta,
        )

    try:
        pages_to_read = _parse_page_selection(config.page_selection, page_count=page_count)
    except ValueError as e:
        return _failed(
            pdf_relpath=label,
            code="EXTRACT_BAD_PAGE_SELECTION",
            message="Invalid page_selection",
            detail={"page_selection": config.page_selection, "error": str(e)},
            meta=meta,
        )

    try:
        pages = engine.extract_pages(pdf_file=pdf_file, pages=pages_to_read)
    except Exception as e:
        return _failed(
            pdf_relpath=label,
            code="EXTRACT_BACKEND_TEXT_FAILED",
            message="PDF text extraction failed",
            detail={"error": repr(e)},
            meta=meta,
        )

    meta["backend_version"] = engine.backend_version()
    meta["page_count"] = page_count
    meta["page_selection"] = _canonical_page_selection(config.page_selection)
    meta["token_count"] = sum(len(p.tokens) for p in pages)

    if config.compute_source_sha256:
        try:
            meta["source_sha256"] = sha256_file(pdf_file)
        except OSError as e:
            meta.setdefault("audit_warnings", []).append({"code": "EXTRACT_SOURCE_HASH_FAILED", "error": repr(e)})

    logger.info("Extracted %d tokens from %d page(s) of %s", meta["token_count"], len(pages), label)
    return ExtractionResult(
        ok=True,
        errors=[],
        meta=meta,
        pages=sorted(pages, key=lambda p: p.page_num),
        source_pdf_relpath=pdf_relpath,
    )
