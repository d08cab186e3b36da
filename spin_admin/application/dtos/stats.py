"""DTOs for projected prize statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PrizeShare:
    """One row of the projected distribution."""

    label: str
    count: int
    percentage: int
    """Whole-number share of the total, rounded half up."""
