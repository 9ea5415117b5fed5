from __future__ import annotations

import re

from contracts.rows import Row

HEADER_LINE_1 = "IDENT  DIST MC  FL  WIND   CMP  TAS/MAC TIME  ETA ATA TBO  FRMG EFB"
HEADER_LINE_2 = "FRQ    DTGO MH      W/S    OAT  G/S     T/TME REV REM ABO  AFOB DSTN"


def normalize_header_line(s: str) -> str:
    return re.sub(r"\s+", " ", str(s).upper()).strip()


_H1 = normalize_header_line(HEADER_LINE_1)
_H2 = normalize_header_line(HEADER_LINE_2)


def find_two_line_header(rows: list[Row]) -> int | None:
    """
    Index of the first line of the exact two-line column header, or None.

    Column positions downstream depend on this header, so no fuzzy match is tried.
    """

    for i in range(len(rows) - 1):
        if normalize_header_line(rows[i].text) != _H1:
            continue
        if normalize_header_line(rows[i + 1].text) == _H2:
            return i
    return None
