from __future__ import annotations

import logging
import re

from contracts.navlog import FlightPlan
from derivation.units import decimal_to_tenths

logger = logging.getLogger(__name__)

_FPL_RE = re.compile(r"\(FPL-.*?\)", re.DOTALL)
_AIRCRAFT_ID_RE = re.compile(r"\(FPL-([A-Z0-9]+)-", re.IGNORECASE)
# Item 13: -PANC1230- (items may be split across printed lines)
_ITEM13_RE = re.compile(r"-([A-Z]{4})(\d{4})\s*-")
# Item 16: -KORD0450 KRFD-
_ITEM16_RE = re.compile(r"-([A-Z]{4})(\d{4})\s+([A-Z]{4})\s*-")
# Item 18 EET/CZEG0034 KZMP0316
_EET_RE = re.compile(r"EET/([^-)]*)")
_EET_PAIR_RE = re.compile(r"^([A-Z0-9]{3,6})(\d{4})$")
_EST_LANDING_FUEL_RE = re.compile(r"\bEST\.?\s+LANDING\s+FUEL\b[^0-9]*([0-9]+(?:\.[0-9]+)?)", re.IGNORECASE)


def parse_est_landing_fuel_tenths(text: str) -> int | None:
    """`EST LANDING FUEL 12.3` anywhere in the document -> 123."""
    m = _EST_LANDING_FUEL_RE.search(str(text or ""))
    return decimal_to_tenths(m.group(1)) if m else None


def parse_eet_by_fir(fpl: str) -> dict[str, str]:
    out: dict[str, str] = {}
    m = _EET_RE.search(fpl)
    if not m:
        return out
    for pair in m.group(1).split():
        pm = _EET_PAIR_RE.match(pair)
        if pm:
            out[pm.group(1)] = pm.group(2)
    return out


def parse_flight_plan(text: str) -> FlightPlan:
    """
    Pull the few ICAO flight-plan fields the navlog needs out of document text.

    A missing `(FPL-...)` block is not an error: the result carries only the
    estimated landing fuel (if printed) and `found` is False.
    """

    t = str(text or "")
    est_landing = parse_est_landing_fuel_tenths(t)

    m = _FPL_RE.search(t)
    if not m:
        logger.debug("no (FPL-...) block in document text")
        return FlightPlan(est_landing_fuel_tenths=est_landing)

    fpl = re.sub(r"\s+", " ", m.group(0)).strip()

    dep13 = _ITEM13_RE.search(fpl)
    item16 = _ITEM16_RE.search(fpl)
    acid = _AIRCRAFT_ID_RE.search(fpl)

    return FlightPlan(
        dep=dep13.group(1) if dep13 else "",
        dep_time_hhmm=dep13.group(2) if dep13 else "",
        dest=item16.group(1) if item16 else "",
        alt=item16.group(3) if item16 else "",
        eet_by_fir=parse_eet_by_fir(fpl),
        est_landing_fuel_tenths=est_landing,
        aircraft_id=acid.group(1).upper() if acid else "",
        raw=fpl,
    )
