from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RowConfig:
    """
    Row reconstruction parameters, in PDF user-space units.

    Defaults are explicit constants (no time/randomness).
    """

    # Tokens whose rounded y bucket matches share a row: key = round(y / tol) * tol
    y_tolerance: float = 2.0
    # A fragment closer than this to the previous fragment joins its cell.
    gap_threshold: float = 10.0

    def validate(self) -> None:
        if self.y_tolerance <= 0:
            raise ValueError("y_tolerance must be > 0")
        if self.gap_threshold <= 0:
            raise ValueError("gap_threshold must be > 0")

    def __post_init__(self) -> None:
        self.validate()
