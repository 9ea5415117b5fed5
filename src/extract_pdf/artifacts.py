from __future__ import annotations

import json
from pathlib import Path

from contracts.extraction import ExtractionResult


def serialize_extraction_result(result: ExtractionResult) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_extraction_json(*, result: ExtractionResult, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_extraction_result(result), encoding="utf-8")


def read_extraction_json(path: Path) -> ExtractionResult:
    """
    Accepts either a serialized ExtractionResult or the bare per-page token
    list shape `[[{text, x, y}, ...], ...]`.
    """

    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        return ExtractionResult.from_pages(payload)
    if not isinstance(payload, dict):
        raise TypeError("Token file must hold a JSON object or a list of pages")
    return ExtractionResult.from_dict(payload)
