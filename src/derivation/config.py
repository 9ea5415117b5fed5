from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DerivationConfig:
    # FIR rows whose printed T/TME is further than this from the flight plan's
    # EET/ entry are flagged (advisory only).
    eet_tolerance_min: int = 1

    def validate(self) -> None:
        if self.eet_tolerance_min < 0:
            raise ValueError("eet_tolerance_min must be >= 0")

    def __post_init__(self) -> None:
        self.validate()
