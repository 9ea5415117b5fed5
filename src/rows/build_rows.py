from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Any

from contracts.extraction import ExtractedPage, ExtractionResult, PositionedToken
from contracts.rows import Cell, Row, RowsResult, normalize_spaces

from .config import RowConfig

logger = logging.getLogger(__name__)


def _y_bucket(y: float, tol: float) -> float:
    # Half-up rounding so buckets do not flip between even/odd multiples.
    return math.floor(y / tol + 0.5) * tol


def _merge_fragments(tokens: list[tuple[float, str]], *, gap_threshold: float) -> list[Cell]:
    """
    Merge x-sorted fragments left to right. A fragment joins the current cell when
    its distance to the previous fragment is below `gap_threshold`.
    """

    cells: list[Cell] = []
    cur_x: float | None = None
    cur_text = ""
    prev_x = 0.0

    for x, text in tokens:
        if cur_x is not None and x - prev_x < gap_threshold:
            cur_text = normalize_spaces(cur_text + " " + text)
        else:
            if cur_x is not None:
                cells.append(Cell(x=cur_x, text=cur_text))
            cur_x = x
            cur_text = text
        prev_x = x

    if cur_x is not None:
        cells.append(Cell(x=cur_x, text=cur_text))
    return cells


def group_tokens_into_rows(
    *, tokens: list[PositionedToken], page_num: int, cfg: RowConfig
) -> tuple[list[Row], list[dict[str, Any]]]:
    """
    Deterministic token -> row grouping for one page.

    Returns (rows top-to-bottom, dropped_tokens). The page-break sentinel is NOT
    appended here.
    """

    dropped: list[dict[str, Any]] = []
    by_y: dict[float, list[tuple[int, float, str]]] = defaultdict(list)

    for i, t in enumerate(tokens):
        text = normalize_spaces(t.text)
        if text == "":
            dropped.append({"index": i, "reason": "BLANK"})
            continue
        by_y[_y_bucket(t.y, cfg.y_tolerance)].append((i, t.x, text))

    rows: list[Row] = []
    # Larger y is higher on the page, so reading order is descending y.
    for y_key in sorted(by_y.keys(), reverse=True):
        # Tie on x keeps extraction order.
        frags = sorted(by_y[y_key], key=lambda f: (f[1], f[0]))
        cells = _merge_fragments([(x, text) for _, x, text in frags], gap_threshold=cfg.gap_threshold)
        rows.append(Row(page_num=page_num, y=y_key, cells=cells))

    return rows, dropped


def build_rows_for_pages(pages: list[ExtractedPage], cfg: RowConfig | None = None) -> RowsResult:
    cfg = RowConfig() if cfg is None else cfg

    meta: dict[str, Any] = {
        "params": {"y_tolerance": cfg.y_tolerance, "gap_threshold": cfg.gap_threshold},
        "counts": {},
        "dropped_tokens": [],
    }

    out: list[Row] = []
    for page in sorted(pages, key=lambda p: p.page_num):
        rows, dropped = group_tokens_into_rows(tokens=list(page.tokens), page_num=page.page_num, cfg=cfg)
        out.extend(rows)
        out.append(Row.page_break(page.page_num))

        meta["dropped_tokens"].extend({"page_num": page.page_num, **d} for d in dropped)
        meta["counts"][f"page_{page.page_num:03d}"] = {
            "tokens_in": len(page.tokens),
            "tokens_used": len(page.tokens) - len(dropped),
            "rows": len(rows),
            "cells": sum(len(r.cells) for r in rows),
        }
        logger.debug("page %d: %d tokens -> %d rows", page.page_num, len(page.tokens), len(rows))

    return RowsResult(ok=True, errors=[], meta=meta, rows=out)


def build_rows(extraction: ExtractionResult, cfg: RowConfig | None = None) -> RowsResult:
    """
    Rebuild visual rows from an extraction result.

    A failed extraction yields a failed result carrying the extraction error codes;
    no rows are invented.
    """

    if not extraction.ok:
        return RowsResult(
            ok=False,
            errors=[e.code for e in extraction.errors] or ["EXTRACTION_FAILED"],
            meta={},
            rows=[],
        )
    return build_rows_for_pages(extraction.pages, cfg)
