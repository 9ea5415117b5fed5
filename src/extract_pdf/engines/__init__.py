from .base import PdfTextEngine
from .pypdfium2_engine import Pypdfium2Engine

__all__ = ["PdfTextEngine", "Pypdfium2Engine"]
