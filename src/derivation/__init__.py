"""
Derivation engine: waypoint records + flight plan + pilot entries -> derived rows.

Pure functions only; state between pilot entries lives in `navlog.tracker`.
"""

from .config import DerivationConfig
from .engine import FuelAnchor, derive_rows
from .units import (
    decimal_to_tenths,
    fuel_digits_to_tenths,
    hhmm_to_display,
    minutes_to_hhmm,
    tenths_to_display,
    time_to_minutes,
    ttme_to_minutes,
)

__all__ = [
    "DerivationConfig",
    "FuelAnchor",
    "derive_rows",
    "decimal_to_tenths",
    "fuel_digits_to_tenths",
    "hhmm_to_display",
    "minutes_to_hhmm",
    "tenths_to_display",
    "time_to_minutes",
    "ttme_to_minutes",
]
