from __future__ import annotations

from pathlib import Path

from contracts.extraction import ExtractedPage, PositionedToken

from .base import PdfTextEngine


class Pypdfium2Engine(PdfTextEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore

            return getattr(pdfium, "__version__", None)
        except Exception:
            return None

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise RuntimeError("Missing dependency: pypdfium2 is required for PDF text extraction.") from e

    def get_page_count(self, *, pdf_file: Path) -> int:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(str(pdf_file))
        try:
            return len(doc)
        finally:
            doc.close()

    def extract_pages(self, *, pdf_file: Path, pages: list[int]) -> list[ExtractedPage]:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(str(pdf_file))
        try:
            page_count = len(doc)
            out: list[ExtractedPage] = []
            for page_num in pages:
                if page_num < 1 or page_num > page_count:
                    raise ValueError(f"Page out of range: {page_num} (1..{page_count})")

                page = doc[page_num - 1]
                textpage = page.get_textpage()
                try:
                    tokens: list[PositionedToken] = []
                    # One rect per contiguous text run on a baseline.
                    for i in range(textpage.count_rects()):
                        left, bottom, right, top = textpage.get_rect(i)
                        text = textpage.get_text_bounded(left=left, bottom=bottom, right=right, top=top)
                        if not text or not text.strip():
                            continue
                        tokens.append(PositionedToken(page_num=page_num, x=float(left), y=float(bottom), text=text))
                finally:
                    textpage.close()
                    page.close()

                out.append(ExtractedPage(page_num=page_num, tokens=tokens))
            return out
        finally:
            doc.close()
