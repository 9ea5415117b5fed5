"""
Row reconstruction: positioned tokens -> visual rows -> x-merged cells.

Geometry only; no navlog semantics live here.
"""

from .build_rows import build_rows, build_rows_for_pages, group_tokens_into_rows
from .config import RowConfig

__all__ = ["RowConfig", "build_rows", "build_rows_for_pages", "group_tokens_into_rows"]
