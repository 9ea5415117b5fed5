from __future__ import annotations

import hashlib
from pathlib import Path


class DataAccessError(Exception):
    pass


def resolve_pdf_under_data_root(*, data_root: Path, relpath: str) -> Path:
    """
    Resolve a flight release PDF given relative to an explicit data_root.

    Absolute paths and anything resolving outside data_root (`..`, symlinks)
    are refused.
    """

    rel = relpath.replace("\\", "/")
    if rel.startswith("/") or (len(rel) > 1 and rel[1] == ":"):
        raise DataAccessError(f"Expected a path relative to data_root, got: {relpath!r}")

    root = data_root.expanduser().resolve()
    candidate = (root / rel).resolve()
    if not candidate.is_relative_to(root):
        raise DataAccessError(f"Path escapes data_root: relpath={relpath!r}")
    return candidate


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()
