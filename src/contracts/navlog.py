from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

# Printed navlog columns, in table order. Identifier is the merge key.
WAYPOINT_FIELDS: tuple[str, ...] = (
    "coord",
    "ident",
    "dist",
    "mc",
    "fl",
    "wind",
    "cmp",
    "tas",
    "mac",
    "time",
    "eta",
    "ata",
    "tbo",
    "frmg",
    "efb",
    "frq",
    "dtgo",
    "mh",
    "w_s",
    "oat",
    "g_s",
    "t_tme",
    "rev",
    "rem",
    "abo",
    "afob",
    "dstn",
)


@dataclass(frozen=True, slots=True)
class NavlogError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class WaypointRecord:
    """
    One navlog waypoint, merged from every physical line printed for it.

    All fields are strings; "" means the column was never printed, which is
    distinct from a printed zero.
    """

    coord: str = ""
    ident: str = ""
    dist: str = ""
    mc: str = ""
    fl: str = ""
    wind: str = ""
    cmp: str = ""
    tas: str = ""
    mac: str = ""
    time: str = ""
    eta: str = ""
    ata: str = ""
    tbo: str = ""
    frmg: str = ""
    efb: str = ""
    frq: str = ""
    dtgo: str = ""
    mh: str = ""
    w_s: str = ""
    oat: str = ""
    g_s: str = ""
    t_tme: str = ""
    rev: str = ""
    rem: str = ""
    abo: str = ""
    afob: str = ""
    dstn: str = ""
    raw: str = ""  # pipe-joined source lines (audit trail)
    actual_time: str = ""  # pilot entry
    actual_fuel: str = ""  # pilot entry

    @property
    def is_fir(self) -> bool:
        return self.ident.startswith("-")

    @property
    def has_actuals(self) -> bool:
        return bool(self.actual_time) and bool(self.actual_fuel)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class NavlogParseResult:
    ok: bool
    errors: list[NavlogError]
    meta: dict[str, Any]
    waypoints: list[WaypointRecord]
    header_index: int | None = None  # index into the sliced rows
    section: tuple[int, int] | None = None  # [start, end) into the full row stream

    @property
    def message(self) -> str:
        return "; ".join(e.message for e in self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": [asdict(e) for e in self.errors],
            "meta": dict(self.meta),
            "waypoints": [w.to_dict() for w in self.waypoints],
            "header_index": self.header_index,
            "section": None if self.section is None else list(self.section),
        }


@dataclass(frozen=True, slots=True)
class FlightPlan:
    dep: str = ""
    dest: str = ""
    alt: str = ""
    dep_time_hhmm: str = ""
    eet_by_fir: dict[str, str] = field(default_factory=dict)  # FIR code -> HHMM
    est_landing_fuel_tenths: int | None = None
    aircraft_id: str = ""
    raw: str = ""

    @property
    def found(self) -> bool:
        return self.raw != ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "dep": self.dep,
            "dest": self.dest,
            "alt": self.alt,
            "dep_time_hhmm": self.dep_time_hhmm,
            "eet_by_fir": dict(self.eet_by_fir),
            "est_landing_fuel_tenths": self.est_landing_fuel_tenths,
            "aircraft_id": self.aircraft_id,
            "raw": self.raw,
        }


@dataclass(frozen=True, slots=True)
class ActualTakeoff:
    time: str = ""  # HHMM as entered
    fuel: str = ""  # display units as entered, e.g. "152.0"

    @property
    def is_set(self) -> bool:
        return bool(self.time.strip()) and bool(self.fuel.strip())


class SignClass(str, Enum):
    OVER_PLAN = "over_plan"  # burned more than planned
    UNDER_PLAN = "under_plan"
    SHORT = "short"  # below estimated landing fuel
    EXCESS = "excess"
    NEUTRAL = "neutral"


@dataclass(frozen=True, slots=True)
class DerivedFields:
    # Fuel quantities are integer tenths of the display unit, times are minutes.
    # None means "unknown", never zero.
    tas_mac: str = ""
    planned_eta_hhmm: str = ""
    updated_eta_hhmm: str = ""
    eta_diff_min: int | None = None
    eta_diff_display: str = "-"
    planned_fuel_tenths: int | None = None
    planned_burn_tenths: int | None = None
    updated_fuel_tenths: int | None = None
    actual_burn_tenths: int | None = None
    delta_tenths: int | None = None
    delta_class: SignClass = SignClass.NEUTRAL
    abo_tenths: int | None = None
    efoa_tenths: int | None = None
    burn_diff_tenths: int | None = None
    fuel_diff_tenths: int | None = None
    est_landing_fuel_tenths: int | None = None
    efoa_minus_est_landing_tenths: int | None = None
    efoa_vs_est_landing_class: SignClass = SignClass.NEUTRAL
    advisories: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["delta_class"] = self.delta_class.value
        out["efoa_vs_est_landing_class"] = self.efoa_vs_est_landing_class.value
        out["advisories"] = list(self.advisories)
        return out


@dataclass(frozen=True, slots=True)
class DerivedRow:
    record: WaypointRecord
    derived: DerivedFields

    def to_dict(self) -> dict[str, Any]:
        return {**self.record.to_dict(), "derived": self.derived.to_dict()}
