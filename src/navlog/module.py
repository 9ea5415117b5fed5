from __future__ import annotations

import logging
from typing import Any

from contracts.navlog import NavlogError, NavlogParseResult
from contracts.rows import Row

from .assemble import assemble_waypoints
from .classify import classify_line
from .header import find_two_line_header
from .section import slice_navlog_section

logger = logging.getLogger(__name__)

_NAVLOG_VERSION = "navlog_v1"


def document_text(rows: list[Row]) -> str:
    """Full document text, one row per line, page-break sentinels removed."""
    return "\n".join(r.text for r in rows if r.text and not r.is_page_break)


def _failed(error: NavlogError, meta: dict[str, Any], section: tuple[int, int] | None = None) -> NavlogParseResult:
    logger.warning("navlog parse failed: %s (%s)", error.message, error.code)
    return NavlogParseResult(ok=False, errors=[error], meta=meta, waypoints=[], section=section)


def parse_navlog_rows(rows: list[Row]) -> NavlogParseResult:
    """
    Rows of a whole document -> one WaypointRecord per identifier.

    Structural failures (section markers, header) produce `ok=False` with no
    waypoints at all.
    """

    meta: dict[str, Any] = {"version": _NAVLOG_VERSION, "rows_in": len(rows)}

    sliced = slice_navlog_section(rows)
    if sliced.error is not None:
        return _failed(sliced.error, meta)

    section = (sliced.start or 0, sliced.end or 0)
    meta["section_rows"] = len(sliced.rows)

    header_idx = find_two_line_header(sliced.rows)
    if header_idx is None:
        return _failed(
            NavlogError(
                code="NAVLOG_HEADER_NOT_FOUND",
                message="Exact 2-line header not found (must match the navlog header exactly).",
                detail={"section": list(section)},
            ),
            meta,
            section,
        )

    body = sliced.rows[header_idx + 2 :]
    waypoints, asm_meta = assemble_waypoints(classify_line(r.text) for r in body)
    meta.update(asm_meta)
    meta["waypoints"] = len(waypoints)
    logger.debug("parsed %d waypoints from %d table lines", len(waypoints), len(body))

    return NavlogParseResult(
        ok=True,
        errors=[],
        meta=meta,
        waypoints=waypoints,
        header_index=header_idx,
        section=section,
    )
