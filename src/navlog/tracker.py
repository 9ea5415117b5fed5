from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from contracts.extraction import ExtractionResult
from contracts.navlog import ActualTakeoff, DerivedRow, FlightPlan, NavlogError, WaypointRecord
from derivation.config import DerivationConfig
from derivation.engine import derive_rows
from derivation.units import eet_to_ttme_display, hhmm_to_display, tenths_to_display
from flightplan.extract import parse_flight_plan
from rows.build_rows import build_rows
from rows.config import RowConfig

from .module import document_text, parse_navlog_rows

logger = logging.getLogger(__name__)

INITIAL_STATUS = "Upload flight release PDF."


@dataclass(frozen=True, slots=True)
class CommandResult:
    ok: bool
    errors: list[NavlogError] = field(default_factory=list)


def _reject(code: str, message: str, **detail: Any) -> CommandResult:
    logger.info("command rejected: %s", message)
    return CommandResult(ok=False, errors=[NavlogError(code=code, message=message, detail=dict(detail))])


def _blank(s: str | None) -> bool:
    return not str(s or "").strip()


class NavlogTracker:
    """
    Single-writer command surface over the parse + derive pipeline.

    Every accepted command recomputes all derived rows from scratch. Rejected
    commands leave every piece of state untouched.
    """

    def __init__(
        self,
        *,
        row_config: RowConfig | None = None,
        derivation_config: DerivationConfig | None = None,
    ) -> None:
        self.row_config = RowConfig() if row_config is None else row_config
        self.derivation_config = DerivationConfig() if derivation_config is None else derivation_config
        self.waypoints: list[WaypointRecord] = []
        self.flight_plan = FlightPlan()
        self.actual_takeoff = ActualTakeoff()
        self.computed: list[DerivedRow] = []
        self.current_waypoint: int | None = None
        self.status = INITIAL_STATUS

    def _derive(self, waypoints: list[WaypointRecord], takeoff: ActualTakeoff) -> list[DerivedRow]:
        return derive_rows(waypoints, self.flight_plan, takeoff, self.derivation_config)

    def _next_incomplete(self, *, after: int = -1) -> int | None:
        for i, w in enumerate(self.waypoints):
            if i > after and not w.has_actuals:
                return i
        return None

    def submit_document(self, extraction: ExtractionResult) -> CommandResult:
        """Replace everything with a freshly parsed document; pilot entries reset."""

        rows_result = build_rows(extraction, self.row_config)
        if not rows_result.ok:
            err = NavlogError(
                code="NAVLOG_EXTRACTION_FAILED",
                message=f"Failed: document text could not be extracted ({', '.join(rows_result.errors)}).",
                detail={"extraction_errors": list(rows_result.errors)},
            )
            self._clear(err.message)
            return CommandResult(ok=False, errors=[err])

        parsed = parse_navlog_rows(rows_result.rows)
        if not parsed.ok:
            self._clear(parsed.message)
            return CommandResult(ok=False, errors=list(parsed.errors))

        self.waypoints = list(parsed.waypoints)
        self.flight_plan = parse_flight_plan(document_text(rows_result.rows))
        self.actual_takeoff = ActualTakeoff()
        self.current_waypoint = None
        self.computed = self._derive(self.waypoints, self.actual_takeoff)
        self.status = f"Parsed {len(self.waypoints)} waypoints (one row each). Enter takeoff data."
        logger.info(self.status)
        return CommandResult(ok=True)

    def _clear(self, status: str) -> None:
        self.waypoints = []
        self.flight_plan = FlightPlan()
        self.actual_takeoff = ActualTakeoff()
        self.current_waypoint = None
        self.computed = []
        self.status = status

    def set_actual_takeoff(self, time: str, fuel: str) -> CommandResult:
        if _blank(time) or _blank(fuel):
            return _reject("TRACKER_TAKEOFF_INPUT_MISSING", "Takeoff time and fuel are both required.")

        takeoff = ActualTakeoff(time=time.strip(), fuel=fuel.strip())
        computed = self._derive(self.waypoints, takeoff)
        self.actual_takeoff = takeoff
        self.computed = computed
        self.current_waypoint = self._next_incomplete()
        self.status = f"Takeoff recorded at {self.actual_takeoff.time} with {self.actual_takeoff.fuel}."
        return CommandResult(ok=True)

    def set_actual_waypoint(self, index: int, time: str, fuel: str) -> CommandResult:
        if _blank(time) or _blank(fuel):
            return _reject("TRACKER_WAYPOINT_INPUT_MISSING", "Waypoint time and fuel are both required.", index=index)
        if not 0 <= index < len(self.waypoints):
            return _reject(
                "TRACKER_WAYPOINT_INDEX_OUT_OF_RANGE",
                f"No waypoint at index {index}.",
                index=index,
                waypoints=len(self.waypoints),
            )

        wps = list(self.waypoints)
        wps[index] = replace(wps[index], actual_time=time.strip(), actual_fuel=fuel.strip())
        computed = self._derive(wps, self.actual_takeoff)
        self.waypoints = wps
        self.computed = computed
        self.current_waypoint = self._next_incomplete(after=index)
        self.status = f"Recorded actuals for {wps[index].ident}."
        return CommandResult(ok=True)

    def _display(self, row: DerivedRow) -> dict[str, str]:
        d = row.derived
        fpl_eet = self.flight_plan.eet_by_fir.get(row.record.ident[1:], "") if row.record.is_fir else ""
        return {
            "planned_eta": hhmm_to_display(d.planned_eta_hhmm),
            "updated_eta": hhmm_to_display(d.updated_eta_hhmm),
            "eta_diff": d.eta_diff_display,
            "planned_fuel": tenths_to_display(d.planned_fuel_tenths),
            "updated_fuel": tenths_to_display(d.updated_fuel_tenths),
            "actual_burn": tenths_to_display(d.actual_burn_tenths),
            "delta": tenths_to_display(d.delta_tenths),
            "efoa": tenths_to_display(d.efoa_tenths),
            "efoa_minus_est_landing": tenths_to_display(d.efoa_minus_est_landing_tenths),
            "fpl_eet": eet_to_ttme_display(fpl_eet),
        }

    def snapshot(self) -> dict[str, Any]:
        rows = []
        for r in self.computed:
            row = r.to_dict()
            row["display"] = self._display(r)
            rows.append(row)
        return {
            "status": self.status,
            "flight_plan": self.flight_plan.to_dict(),
            "actual_takeoff": {
                "time": self.actual_takeoff.time,
                "fuel": self.actual_takeoff.fuel,
                "set": self.actual_takeoff.is_set,
            },
            "current_waypoint": self.current_waypoint,
            "rows": rows,
        }
