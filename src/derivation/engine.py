from __future__ import annotations

import logging
from dataclasses import dataclass

from contracts.navlog import ActualTakeoff, DerivedFields, DerivedRow, FlightPlan, SignClass, WaypointRecord

from .config import DerivationConfig
from .guardrails import row_advisories
from .units import (
    clock_diff,
    decimal_to_tenths,
    format_signed_minutes,
    fuel_digits_to_tenths,
    minutes_to_hhmm,
    time_to_minutes,
    ttme_to_minutes,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FuelAnchor:
    planned_burn_tenths: int
    actual_fuel_tenths: int


def _diff(a: int | None, b: int | None) -> int | None:
    if a is None or b is None:
        return None
    return a - b


def burn_delta_class(delta_tenths: int | None) -> SignClass:
    if delta_tenths is None or delta_tenths == 0:
        return SignClass.NEUTRAL
    return SignClass.OVER_PLAN if delta_tenths < 0 else SignClass.UNDER_PLAN


def landing_fuel_class(diff_tenths: int | None) -> SignClass:
    if diff_tenths is None or diff_tenths == 0:
        return SignClass.NEUTRAL
    return SignClass.SHORT if diff_tenths < 0 else SignClass.EXCESS


def tas_mac_display(record: WaypointRecord) -> str:
    return " ".join(v for v in (record.tas.strip(), record.mac.strip()) if v)


def updated_fuel(
    *, takeoff_fuel_tenths: int | None, planned_burn_tenths: int | None, anchor: FuelAnchor | None
) -> int | None:
    if takeoff_fuel_tenths is None or not planned_burn_tenths:
        return None
    if anchor is not None:
        return anchor.actual_fuel_tenths - (planned_burn_tenths - anchor.planned_burn_tenths)
    return takeoff_fuel_tenths - planned_burn_tenths


def derive_rows(
    records: list[WaypointRecord],
    flight_plan: FlightPlan,
    actual_takeoff: ActualTakeoff,
    config: DerivationConfig | None = None,
) -> list[DerivedRow]:
    """
    One left-to-right pass over the waypoints carries two anchors:
    - a time bias: actual minus planned at the last waypoint with an actual time,
      added to every later planned ETA;
    - a fuel anchor: (planned burn, actual fuel) at the last waypoint with an actual
      fuel figure; later updated fuel is that actual less the extra planned burn since.

    The whole list is recomputed on every pilot entry.
    """

    cfg = DerivationConfig() if config is None else config

    dep_min = time_to_minutes(flight_plan.dep_time_hhmm)
    to_min = time_to_minutes(actual_takeoff.time)
    # No flight plan departure time: planned ETAs run from the actual takeoff.
    base_min = dep_min if dep_min is not None else to_min
    to_fuel = decimal_to_tenths(actual_takeoff.fuel)
    est_landing = flight_plan.est_landing_fuel_tenths

    time_bias = 0
    anchor: FuelAnchor | None = None
    prev_updated_fuel: int | None = None

    out: list[DerivedRow] = []
    for rec in records:
        # Time
        ttme = ttme_to_minutes(rec.t_tme)
        planned_eta = base_min + ttme if base_min is not None and ttme is not None else None
        updated_eta = planned_eta + time_bias if planned_eta is not None else None

        actual_min = time_to_minutes(rec.actual_time)
        if actual_min is not None:
            if planned_eta is not None:
                time_bias = clock_diff(actual_min, planned_eta)
            updated_eta = actual_min

        eta_diff = None
        if planned_eta is not None and updated_eta is not None:
            eta_diff = clock_diff(planned_eta, updated_eta)

        # Fuel
        planned_fuel = fuel_digits_to_tenths(rec.frmg)
        planned_burn = fuel_digits_to_tenths(rec.tbo)
        upd_fuel = updated_fuel(takeoff_fuel_tenths=to_fuel, planned_burn_tenths=planned_burn, anchor=anchor)

        afob = decimal_to_tenths(rec.actual_fuel)
        actual_burn = _diff(to_fuel, afob)
        delta = _diff(planned_burn, actual_burn)

        if afob is not None and planned_burn:
            anchor = FuelAnchor(planned_burn_tenths=planned_burn, actual_fuel_tenths=afob)

        efoa = _diff(afob, fuel_digits_to_tenths(rec.dstn))
        efoa_vs_landing = _diff(efoa, est_landing)

        derived = DerivedFields(
            tas_mac=tas_mac_display(rec),
            planned_eta_hhmm=minutes_to_hhmm(planned_eta),
            updated_eta_hhmm=minutes_to_hhmm(updated_eta),
            eta_diff_min=eta_diff,
            eta_diff_display=format_signed_minutes(eta_diff),
            planned_fuel_tenths=planned_fuel,
            planned_burn_tenths=planned_burn,
            updated_fuel_tenths=upd_fuel,
            actual_burn_tenths=actual_burn,
            delta_tenths=delta,
            delta_class=burn_delta_class(delta),
            abo_tenths=actual_burn,
            efoa_tenths=efoa,
            burn_diff_tenths=_diff(planned_burn, actual_burn),
            fuel_diff_tenths=_diff(afob, planned_fuel),
            est_landing_fuel_tenths=est_landing,
            efoa_minus_est_landing_tenths=efoa_vs_landing,
            efoa_vs_est_landing_class=landing_fuel_class(efoa_vs_landing),
            advisories=row_advisories(
                record=rec,
                updated_fuel_tenths=upd_fuel,
                prev_updated_fuel_tenths=prev_updated_fuel,
                flight_plan=flight_plan,
                cfg=cfg,
            ),
        )
        out.append(DerivedRow(record=rec, derived=derived))

        if upd_fuel is not None:
            prev_updated_fuel = upd_fuel

    logger.debug("derived %d rows (time bias %d min, fuel anchor %s)", len(out), time_bias, anchor)
    return out
