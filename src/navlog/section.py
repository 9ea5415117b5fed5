from __future__ import annotations

import re
from dataclasses import dataclass

from contracts.navlog import NavlogError
from contracts.rows import Row

SECTION_START_RE = re.compile(r"PIC\s+\.{10,}|\(FPL-")
SECTION_END_MARKER = "----------------------- ALTERNATE"


@dataclass(frozen=True, slots=True)
class SectionSlice:
    ok: bool
    start: int | None
    end: int | None
    rows: list[Row]
    error: NavlogError | None = None


def _fail(code: str, message: str, **detail: object) -> SectionSlice:
    return SectionSlice(ok=False, start=None, end=None, rows=[], error=NavlogError(code, message, dict(detail)))


def slice_navlog_section(rows: list[Row]) -> SectionSlice:
    """
    Cut the navlog table out of the full row stream: [start marker, end marker).

    The end marker is searched only after the start marker. Any missing or
    misordered marker is a hard failure with no partial rows.
    """

    start = -1
    end = -1
    end_before_start = -1

    for i, row in enumerate(rows):
        t = row.text
        if start == -1:
            if SECTION_START_RE.search(t):
                start = i
            elif end_before_start == -1 and SECTION_END_MARKER in t:
                end_before_start = i
            continue
        if SECTION_END_MARKER in t:
            end = i
            break

    if start == -1 and end_before_start == -1:
        return _fail(
            "NAVLOG_SECTION_MARKERS_MISSING",
            'Could not find start ("PIC ...." or "(FPL-") and end marker ("ALTERNATE").',
        )
    if start == -1:
        return _fail(
            "NAVLOG_SECTION_START_MISSING",
            'Could not find start marker ("PIC ...." or "(FPL-").',
            end_index=end_before_start,
        )
    if end == -1 and end_before_start != -1:
        return _fail(
            "NAVLOG_SECTION_END_BEFORE_START",
            'End marker ("ALTERNATE") appears before the start marker ("PIC ...." or "(FPL-").',
            start_index=start,
            end_index=end_before_start,
        )
    if end == -1:
        return _fail(
            "NAVLOG_SECTION_END_MISSING",
            'Could not find end marker ("ALTERNATE") after the start marker.',
            start_index=start,
        )

    return SectionSlice(ok=True, start=start, end=end, rows=list(rows[start:end]))
