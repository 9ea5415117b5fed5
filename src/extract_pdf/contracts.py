from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ExtractEngineName(str, Enum):
    """
    Text extraction backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


@dataclass(frozen=True, slots=True)
class ExtractPdfConfig:
    """
    PDF text extraction configuration.

    - `data_root` must be passed explicitly; no environment variable reads here
    - the PDF is addressed by a path relative to `data_root`
    """

    data_root: Path
    engine: ExtractEngineName = ExtractEngineName.PYPDFIUM2
    page_selection: str | None = None  # e.g. "1,3-5"; None => all pages
    compute_source_sha256: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.data_root, Path):
            raise TypeError("data_root must be pathlib.Path")
