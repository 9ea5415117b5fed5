from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation

# Time is integer minutes, fuel integer tenths of the display unit. Parsers return
# None for anything they cannot read.

MINUTES_PER_DAY = 24 * 60

_HHMM_RE = re.compile(r"^\d{3,4}$")
_HH_SEP_MM_RE = re.compile(r"^(\d{1,2})[.:](\d{1,2})$")
_TTME_RE = re.compile(r"^(\d{1,2})\.(\d{2})$")
_DIGITS_RE = re.compile(r"^\d+$")


def time_to_minutes(s: str | None) -> int | None:
    """Clock time as HHMM, HH.MM or HH:MM -> minutes after midnight."""
    t = str(s or "").strip()
    if not t:
        return None

    if _HHMM_RE.match(t):
        p = t.zfill(4)
        hh, mm = int(p[:2]), int(p[2:])
    else:
        m = _HH_SEP_MM_RE.match(t)
        if not m:
            return None
        hh, mm = int(m.group(1)), int(m.group(2))

    if hh > 23 or mm > 59:
        return None
    return hh * 60 + mm


def minutes_to_hhmm(minutes: int | None) -> str:
    if minutes is None:
        return ""
    m = minutes % MINUTES_PER_DAY
    return f"{m // 60:02d}{m % 60:02d}"


def ttme_to_minutes(s: str | None) -> int | None:
    """Printed elapsed time `H.MM` / `HH.MM` -> minutes. Not wrapped at 24h."""
    m = _TTME_RE.match(str(s or "").strip())
    if not m:
        return None
    hh, mm = int(m.group(1)), int(m.group(2))
    if mm > 59:
        return None
    return hh * 60 + mm


def clock_diff(a: int, b: int) -> int:
    """Signed a - b on a 24h clock, taking the short way round (-719..720)."""
    d = (a - b) % MINUTES_PER_DAY
    return d - MINUTES_PER_DAY if d > MINUTES_PER_DAY // 2 else d


def fuel_digits_to_tenths(s: str | None) -> int | None:
    """Navlog fuel columns are printed as bare digits in tenths: "1518" -> 1518."""
    t = str(s or "").strip()
    if not _DIGITS_RE.match(t):
        return None
    return int(t)


def decimal_to_tenths(s: str | None) -> int | None:
    """Decimal in display units -> tenths, half-up: "152.0" -> 1520, "12.34" -> 123."""
    t = str(s or "").strip()
    if not t:
        return None
    try:
        d = Decimal(t)
    except InvalidOperation:
        return None
    if not d.is_finite():
        return None
    try:
        return int((d * 10).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except DecimalException:
        # beyond the context precision or exponent range
        return None


def tenths_to_display(tenths: int | None) -> str:
    if tenths is None:
        return "-"
    sign = "-" if tenths < 0 else ""
    a = abs(tenths)
    return f"{sign}{a // 10}.{a % 10}"


def hhmm_to_display(hhmm: str | None) -> str:
    """"1304" -> "13.04"; anything else -> ""."""
    t = str(hhmm or "").strip()
    if not _HHMM_RE.match(t):
        return ""
    p = t.zfill(4)
    return f"{p[:2]}.{p[2:]}"


def eet_to_ttme_display(eet_hhmm: str | None) -> str:
    """Flight-plan EET "0034" in the navlog's T/TME layout: "00.34"."""
    t = str(eet_hhmm or "").strip()
    if not re.match(r"^\d{4}$", t):
        return ""
    return f"{t[:2]}.{t[2:]}"


def format_signed_minutes(minutes: int | None) -> str:
    if minutes is None:
        return "-"
    return f"+{minutes}" if minutes > 0 else str(minutes)
