from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from contracts.navlog import WAYPOINT_FIELDS, WaypointRecord

from .classify import ClassifiedLine, LineKind

logger = logging.getLogger(__name__)

PLACEHOLDERS = frozenset({"...", "....", "---", "----", "------", "--/---"})

RAW_SEPARATOR = " | "

# Kinds that never touch the coordinate context.
_NO_CONTEXT_KINDS = (LineKind.PAGE_BREAK, LineKind.FIELD_HEADING, LineKind.FORMATTING)


def is_placeholder(value: str | None) -> bool:
    return value in PLACEHOLDERS


def merge_fields(current: dict[str, str], incoming: dict[str, str]) -> dict[str, str]:
    """
    Fill-empty-or-replace-placeholder merge.

    A field is written only when it is empty, or when it holds a placeholder and
    the incoming value is real. Captured real data is never overwritten, so
    applying the same line twice is a no-op. `ident` is the merge key and is
    never rewritten here.
    """

    out = dict(current)
    for k, v in incoming.items():
        if k == "ident" or k not in out or v is None:
            continue
        cur = out[k]
        if cur == "":
            out[k] = v
        elif is_placeholder(cur) and v and not is_placeholder(v):
            out[k] = v
    return out


@dataclass(frozen=True, slots=True)
class AssemblyState:
    current_coord: str = ""
    current_ident: str = ""


def step(state: AssemblyState, line: ClassifiedLine) -> tuple[AssemblyState, str]:
    """
    Advance the carry-forward context by one classified line.

    Returns (next_state, ident the line attaches to or "").
    """

    if line.kind in _NO_CONTEXT_KINDS:
        return state, ""

    coord = line.coord or state.current_coord
    if line.kind == LineKind.COORDINATE:
        return AssemblyState(current_coord=coord, current_ident=state.current_ident), ""

    ident = state.current_ident
    target = ""
    if line.sets_ident:
        if line.ident:
            ident = line.ident
            target = line.ident
    elif line.carries_ident:
        target = state.current_ident

    return AssemblyState(current_coord=coord, current_ident=ident), target


def _empty_record_dict(*, ident: str, coord: str) -> dict[str, str]:
    d = {k: "" for k in WAYPOINT_FIELDS}
    d["ident"] = ident
    d["coord"] = coord
    return d


def assemble_waypoints(lines: Iterable[ClassifiedLine]) -> tuple[list[WaypointRecord], dict[str, Any]]:
    """
    Fold classified lines into one record per identifier, in first-appearance order.

    A repeated identifier (e.g. a fix flown twice) collapses into its first record.
    """

    state = AssemblyState()
    acc: dict[str, dict[str, str]] = {}  # insertion ordered
    raw_by_ident: dict[str, list[str]] = {}
    kinds: dict[str, int] = {}
    unattached = 0

    for line in lines:
        kinds[line.kind.value] = kinds.get(line.kind.value, 0) + 1
        state, ident = step(state, line)
        if not ident:
            if line.carries_ident:
                unattached += 1
            continue

        if ident not in acc:
            acc[ident] = _empty_record_dict(ident=ident, coord=state.current_coord)
            raw_by_ident[ident] = []

        cur = acc[ident]
        if not cur["coord"] and state.current_coord:
            cur["coord"] = state.current_coord

        acc[ident] = merge_fields(cur, line.fields)
        raw_by_ident[ident].append(line.text)

    waypoints = [
        WaypointRecord(**rec, raw=RAW_SEPARATOR.join(raw_by_ident[ident])) for ident, rec in acc.items()
    ]
    if unattached:
        logger.debug("%d frequency/continuation lines had no identifier to attach to", unattached)

    meta = {"line_kinds": dict(sorted(kinds.items())), "unattached_lines": unattached}
    return waypoints, meta
