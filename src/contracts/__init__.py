"""
Canonical pipeline contracts.

These models are the schema boundary between stages:
- extraction: positioned text tokens per page
- rows: visual lines rebuilt from tokens
- navlog: waypoint records, flight plan, pilot entries, derived rows

Stage code should consume/produce these contract objects (not ad-hoc dicts).
"""

from .extraction import ExtractedPage, ExtractError, ExtractionResult, PositionedToken
from .rows import PAGE_BREAK_TEXT, Cell, Row, RowsResult, normalize_spaces
from .navlog import (
    WAYPOINT_FIELDS,
    ActualTakeoff,
    DerivedFields,
    DerivedRow,
    FlightPlan,
    NavlogError,
    NavlogParseResult,
    SignClass,
    WaypointRecord,
)

__all__ = [
    "PositionedToken",
    "ExtractedPage",
    "ExtractError",
    "ExtractionResult",
    "PAGE_BREAK_TEXT",
    "Cell",
    "Row",
    "RowsResult",
    "normalize_spaces",
    "WAYPOINT_FIELDS",
    "NavlogError",
    "WaypointRecord",
    "NavlogParseResult",
    "FlightPlan",
    "ActualTakeoff",
    "SignClass",
    "DerivedFields",
    "DerivedRow",
]
