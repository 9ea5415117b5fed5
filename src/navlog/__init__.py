"""
Navlog table parsing: sliced rows -> exact header -> classified lines ->
one WaypointRecord per identifier. `tracker` wires parsing and derivation
behind the pilot-facing commands.
"""

from .assemble import AssemblyState, assemble_waypoints, merge_fields
from .classify import ClassifiedLine, LineKind, classify_line
from .header import HEADER_LINE_1, HEADER_LINE_2, find_two_line_header
from .module import document_text, parse_navlog_rows
from .section import SECTION_END_MARKER, slice_navlog_section
from .tracker import CommandResult, NavlogTracker

__all__ = [
    "AssemblyState",
    "ClassifiedLine",
    "CommandResult",
    "HEADER_LINE_1",
    "HEADER_LINE_2",
    "LineKind",
    "NavlogTracker",
    "SECTION_END_MARKER",
    "assemble_waypoints",
    "classify_line",
    "document_text",
    "find_two_line_header",
    "merge_fields",
    "parse_navlog_rows",
    "slice_navlog_section",
]
