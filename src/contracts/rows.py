from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

PAGE_BREAK_TEXT = "__PAGE_BREAK__"
PAGE_BREAK_Y = -999999.0

_WS_RE = re.compile(r"\s+")


def normalize_spaces(s: str | None) -> str:
    return _WS_RE.sub(" ", str(s or "")).strip()


@dataclass(frozen=True, slots=True)
class Cell:
    x: float
    text: str  # whitespace-normalized, never empty

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "text": self.text}


@dataclass(frozen=True, slots=True)
class Row:
    """
    One visual line. Cells are ordered by x.

    `y` is the rounded bucket key shared by every fragment of the line.
    """

    page_num: int
    y: float
    cells: list[Cell]

    @property
    def text(self) -> str:
        return normalize_spaces(" ".join(c.text for c in self.cells))

    @property
    def is_page_break(self) -> bool:
        return len(self.cells) == 1 and self.cells[0].text == PAGE_BREAK_TEXT

    @staticmethod
    def page_break(page_num: int) -> "Row":
        return Row(page_num=page_num, y=PAGE_BREAK_Y, cells=[Cell(x=0.0, text=PAGE_BREAK_TEXT)])

    def to_dict(self) -> dict[str, Any]:
        return {"page_num": self.page_num, "y": self.y, "cells": [c.to_dict() for c in self.cells]}


@dataclass(frozen=True, slots=True)
class RowsResult:
    ok: bool
    errors: list[str]
    meta: dict[str, Any]  # counts per page, dropped tokens
    rows: list[Row]  # reading order across all pages, page-break sentinels included

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": list(self.errors),
            "meta": dict(self.meta),
            "rows": [r.to_dict() for r in self.rows],
        }
