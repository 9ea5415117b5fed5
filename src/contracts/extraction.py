from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PositionedToken:
    """
    Single text fragment as placed on a page by the extraction backend.

    Coordinates are in PDF user space: `y` grows upwards, so a larger `y` is
    higher on the page. `text` is kept exactly as extracted.
    """

    page_num: int
    x: float
    y: float
    text: str

    @staticmethod
    def from_dict(d: dict[str, Any], *, page_num: int | None = None) -> "PositionedToken":
        return PositionedToken(
            page_num=int(d.get("page_num", page_num if page_num is not None else 0)),
            x=float(d.get("x", 0.0)),
            y=float(d.get("y", 0.0)),
            text=str(d.get("text", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"page_num": self.page_num, "x": self.x, "y": self.y, "text": self.text}


@dataclass(frozen=True, slots=True)
class ExtractedPage:
    page_num: int  # 1-indexed
    tokens: list[PositionedToken]  # extraction order

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ExtractedPage":
        tokens_raw = d.get("tokens") or []
        if not isinstance(tokens_raw, list):
            raise TypeError("ExtractedPage.tokens must be a list")
        page_num = int(d["page_num"])
        return ExtractedPage(
            page_num=page_num,
            tokens=[PositionedToken.from_dict(t, page_num=page_num) for t in tokens_raw],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"page_num": self.page_num, "tokens": [t.to_dict() for t in self.tokens]}


@dataclass(frozen=True, slots=True)
class ExtractError:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """
    Output of the document-to-text collaborator.

    On failure, `ok` is False and pages are empty. Nothing is fabricated to fill
    in pages that could not be read.
    """

    ok: bool
    errors: list[ExtractError]
    meta: dict[str, Any]
    pages: list[ExtractedPage]
    source_pdf_relpath: str | None = None

    @staticmethod
    def from_pages(pages: list[list[dict[str, Any]]]) -> "ExtractionResult":
        """
        Build a result from the bare collaborator shape: one list of
        `{text, x, y}` dicts per page, in page order.
        """
        out: list[ExtractedPage] = []
        for i, toks in enumerate(pages, start=1):
            out.append(ExtractedPage(page_num=i, tokens=[PositionedToken.from_dict(t, page_num=i) for t in toks]))
        return ExtractionResult(ok=True, errors=[], meta={}, pages=out)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ExtractionResult":
        pages_raw = d.get("pages") or []
        if not isinstance(pages_raw, list):
            raise TypeError("ExtractionResult.pages must be a list")

        errors_raw = d.get("errors") or []
        if not isinstance(errors_raw, list):
            raise TypeError("ExtractionResult.errors must be a list")

        errors: list[ExtractError] = []
        for e in errors_raw:
            if isinstance(e, str):
                errors.append(ExtractError(code=e, message=e))
            elif isinstance(e, dict):
                if "code" not in e:
                    raise TypeError("ExtractionResult.errors dict entries must include 'code'")
                errors.append(
                    ExtractError(code=str(e["code"]), message=str(e.get("message", "")), detail=e.get("detail"))
                )
            else:
                raise TypeError("ExtractionResult.errors entries must be str or dict-with-code")

        return ExtractionResult(
            ok=bool(d.get("ok", False)),
            errors=errors,
            meta=dict(d.get("meta") or {}),
            pages=[ExtractedPage.from_dict(p) for p in pages_raw],
            source_pdf_relpath=(None if d.get("source_pdf_relpath") is None else str(d.get("source_pdf_relpath"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": [e.to_dict() for e in self.errors],
            "meta": dict(self.meta),
            "pages": [p.to_dict() for p in self.pages],
            "source_pdf_relpath": self.source_pdf_relpath,
        }
