from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from contracts.rows import PAGE_BREAK_TEXT

_FIELD_HEADING_RE = re.compile(r"^\s*[A-Z0-9]{1,8}\s+FIELD\b", re.IGNORECASE)
_COORD_BODY = r"[NS]\d{1,2}\s+\d{1,2}(?:\.\d+)?\s+[EW]\d{2,3}\s+\d{1,2}(?:\.\d+)?"
_COORD_RE = re.compile(rf"({_COORD_BODY})")
_PURE_COORD_RE = re.compile(rf"^{_COORD_BODY}$")
_FL_BANNER_RE = re.compile(r"^-?\s*_?\s*FL\s*[-–]\s*\d{2,3}\s*$")
_FIR_LINE_RE = re.compile(r"^FIR\b|FIR->", re.IGNORECASE)
_FIR_IDENT_RE = re.compile(r"FIR\s*-?>\s*([A-Z0-9]{3,6})\s*(?:<-)?")

_FREQ_RE = re.compile(r"^\d{1,3}\.\d{2}$")
_INT_RE = re.compile(r"^-?\d+$")
_NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")
_FL_RE = re.compile(r"^\d{2,3}$")
_MACH_RE = re.compile(r"^M\.?\d{2,3}$|^\.\d{2,3}$", re.IGNORECASE)
_HEADING_RE = re.compile(r"^\d{3}$")
_WIND_COMPONENT_RE = re.compile(r"^-?\d{1,3}$")
_IDENT_RE = re.compile(r"^[A-Z0-9][A-Z0-9-]{2,7}$", re.IGNORECASE)
_TRAILING_PUNCT_RE = re.compile(r"[|,;]+$")

# Tokens after IDENT and DIST inspected for a flight level or speed.
LOOKAHEAD_WINDOW = 8

# Positional layout of the second header line, after FRQ.
_SECOND_LINE_FIELDS = ("dtgo", "mh", "w_s", "oat", "g_s", "t_tme", "rev", "rem", "abo", "afob", "dstn")


class LineKind(str, Enum):
    PAGE_BREAK = "page_break"
    FIELD_HEADING = "field_heading"
    COORDINATE = "coordinate"
    FORMATTING = "formatting"
    FIR = "fir"
    FREQUENCY = "frequency"
    CONTINUATION = "continuation"
    MAIN = "main"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    kind: LineKind
    text: str
    ident: str = ""
    fields: dict[str, str] = field(default_factory=dict)
    coord: str = ""  # coordinate found anywhere on the line

    @property
    def sets_ident(self) -> bool:
        return self.kind in (LineKind.MAIN, LineKind.FIR)

    @property
    def carries_ident(self) -> bool:
        return self.kind in (LineKind.FREQUENCY, LineKind.CONTINUATION)


def extract_coord(text: str) -> str:
    m = _COORD_RE.search(str(text))
    return m.group(1).strip() if m else ""


def is_pure_coord_line(text: str) -> bool:
    return bool(_PURE_COORD_RE.match(str(text).strip()))


def is_formatting_only(text: str) -> bool:
    return bool(_FL_BANNER_RE.match(str(text).upper().strip()))


def extract_fir_ident(text: str) -> str:
    m = _FIR_IDENT_RE.search(str(text).upper())
    return f"-{m.group(1)}" if m else ""


def clean_token(s: str) -> str:
    return _TRAILING_PUNCT_RE.sub("", s or "")


def is_ident_token(s: str) -> bool:
    if not s or _INT_RE.match(s) or s.upper() == PAGE_BREAK_TEXT:
        return False
    return bool(_IDENT_RE.match(clean_token(s)))


def has_level_or_speed(window: list[str]) -> bool:
    """True when any token in the window is shaped like a flight level or a Mach/TAS."""
    return any(_FL_RE.match(tok) or _MACH_RE.match(tok) for tok in window)


def _tok(toks: list[str], i: int) -> str:
    return toks[i] if 0 <= i < len(toks) else ""


def _is_main_line(toks: list[str]) -> bool:
    if not is_ident_token(_tok(toks, 0)):
        return False
    t1 = _tok(toks, 1)
    if not (_INT_RE.match(t1) or _NUMBER_RE.match(t1)):
        return False
    return has_level_or_speed(toks[2 : 2 + LOOKAHEAD_WINDOW])


def _is_continuation_line(toks: list[str]) -> bool:
    if not _INT_RE.match(_tok(toks, 0)) or len(toks) < 5:
        return False
    return bool(_HEADING_RE.match(_tok(toks, 1)) or _WIND_COMPONENT_RE.match(_tok(toks, 2)))


def _frequency_fields(toks: list[str]) -> dict[str, str]:
    out = {"frq": _tok(toks, 0)}
    for i, name in enumerate(_SECOND_LINE_FIELDS, start=1):
        out[name] = _tok(toks, i)
    return out


def _continuation_fields(toks: list[str]) -> dict[str, str]:
    tail = toks[6:]
    return {
        "dtgo": _tok(toks, 0),
        "mh": _tok(toks, 1),
        "w_s": _tok(toks, 2),
        "oat": _tok(toks, 3),
        "g_s": _tok(toks, 4),
        "t_tme": _tok(toks, 5),
        "rev": _tok(tail, 0),
        "rem": _tok(tail, 1),
        "abo": _tok(tail, 2),
        "afob": _tok(tail, 3),
        # DSTN is always the last column even when a middle column is blank.
        "dstn": tail[-1] if tail else "",
    }


def _main_fields(toks: list[str]) -> dict[str, str]:
    tail = toks[6:]
    return {
        "ident": clean_token(_tok(toks, 0)),
        "dist": _tok(toks, 1),
        "mc": _tok(toks, 2),
        "fl": _tok(toks, 3),
        "wind": _tok(toks, 4),
        "cmp": _tok(toks, 5),
        "tas": _tok(tail, 0),
        "mac": _tok(tail, 1),
        "time": _tok(tail, 2),
        "eta": _tok(tail, 3),
        "ata": _tok(tail, 4),
        "tbo": _tok(tail, 5),
        "frmg": _tok(tail, 6),
        "efb": _tok(tail, 7),
    }


def classify_line(text: str) -> ClassifiedLine:
    """
    Classify one physical table line on its own; first match wins:

    page break / blank  -> skipped
    "xxx FIELD" heading -> skipped, touches no context
    coordinate-only     -> updates the current coordinate, no record
    FL banner           -> skipped
    FIR label           -> sets the current identifier ("-CZEG")
    frequency line      -> attaches to the current identifier
    continuation line   -> attaches to the current identifier
    main line           -> sets the current identifier
    anything else       -> discarded

    Lines that merely contain a coordinate report it in `coord` and are still
    classified normally.
    """

    t = str(text or "").strip()
    if not t or t == PAGE_BREAK_TEXT:
        return ClassifiedLine(kind=LineKind.PAGE_BREAK, text=t)

    if _FIELD_HEADING_RE.match(t):
        return ClassifiedLine(kind=LineKind.FIELD_HEADING, text=t)

    coord = extract_coord(t)
    if coord and is_pure_coord_line(t):
        return ClassifiedLine(kind=LineKind.COORDINATE, text=t, coord=coord)

    if is_formatting_only(t):
        return ClassifiedLine(kind=LineKind.FORMATTING, text=t, coord=coord)

    if _FIR_LINE_RE.search(t):
        fir = extract_fir_ident(t)
        return ClassifiedLine(kind=LineKind.FIR, text=t, ident=fir, fields={"ident": fir}, coord=coord)

    toks = t.split()

    if _FREQ_RE.match(toks[0]):
        return ClassifiedLine(kind=LineKind.FREQUENCY, text=t, fields=_frequency_fields(toks), coord=coord)

    if _is_continuation_line(toks):
        return ClassifiedLine(kind=LineKind.CONTINUATION, text=t, fields=_continuation_fields(toks), coord=coord)

    if _is_main_line(toks):
        fields = _main_fields(toks)
        return ClassifiedLine(kind=LineKind.MAIN, text=t, ident=fields["ident"], fields=fields, coord=coord)

    return ClassifiedLine(kind=LineKind.OTHER, text=t, coord=coord)
