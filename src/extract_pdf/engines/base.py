from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from contracts.extraction import ExtractedPage


class PdfTextEngine(ABC):
    """
    Text extraction backend.

    Engines must:
    - emit one positioned token per text run, text exactly as stored in the PDF
    - report coordinates in PDF user space (y grows upwards)
    - perform NO row grouping or navlog interpretation
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def get_page_count(self, *, pdf_file: Path) -> int:
        raise NotImplementedError

    @abstractmethod
    def extract_pages(self, *, pdf_file: Path, pages: list[int]) -> list[ExtractedPage]:
        """
        Return one ExtractedPage per requested 1-indexed page, in the same order.
        """

        raise NotImplementedError
