from __future__ import annotations

from contracts.navlog import FlightPlan, WaypointRecord

from .config import DerivationConfig
from .units import ttme_to_minutes

FUEL_NEGATIVE = "FUEL_NEGATIVE"
FUEL_INCREASING = "FUEL_INCREASING"
FIR_EET_MISMATCH = "FIR_EET_MISMATCH"


def eet_minutes(flight_plan: FlightPlan, fir_code: str) -> int | None:
    eet = flight_plan.eet_by_fir.get(fir_code, "")
    if len(eet) != 4 or not eet.isdigit():
        return None
    return int(eet[:2]) * 60 + int(eet[2:])


def fir_eet_mismatch(record: WaypointRecord, flight_plan: FlightPlan, cfg: DerivationConfig) -> bool:
    if not record.is_fir:
        return False
    eet = eet_minutes(flight_plan, record.ident[1:])
    ttme = ttme_to_minutes(record.t_tme)
    if eet is None or ttme is None:
        return False
    return abs(ttme - eet) > cfg.eet_tolerance_min


def row_advisories(
    *,
    record: WaypointRecord,
    updated_fuel_tenths: int | None,
    prev_updated_fuel_tenths: int | None,
    flight_plan: FlightPlan,
    cfg: DerivationConfig,
) -> tuple[str, ...]:
    """Advisory codes for one derived row. Flags only; never rejects or alters a value."""
    out: list[str] = []
    if updated_fuel_tenths is not None:
        if updated_fuel_tenths < 0:
            out.append(FUEL_NEGATIVE)
        if prev_updated_fuel_tenths is not None and updated_fuel_tenths > prev_updated_fuel_tenths:
            out.append(FUEL_INCREASING)
    if fir_eet_mismatch(record, flight_plan, cfg):
        out.append(FIR_EET_MISMATCH)
    return tuple(out)
