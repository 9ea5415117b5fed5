from .contracts import ExtractEngineName, ExtractPdfConfig
from .module import run_extract_pdf_file, run_extract_pdf_relpath

__all__ = [
    "ExtractEngineName",
    "ExtractPdfConfig",
    "run_extract_pdf_file",
    "run_extract_pdf_relpath",
]
