"""Project a prize label -> count mapping into sorted percentage shares."""

from __future__ import annotations

from collections.abc import Mapping

from spin_admin.application.dtos.stats import PrizeShare


def _percent_half_up(count: int, total: int) -> int:
    """round(100 * count / total) with .5 rounding up, in integer arithmetic."""
    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


def project_distribution(mapping: Mapping[str, int]) -> list[PrizeShare]:
    """Sort by count descending, then label ascending, and attach whole percentages.

    An empty mapping or a zero total yields 0% for every row.
    """
    total = sum(mapping.values())
    ordered = sorted(mapping.items(), key=lambda item: (-item[1], item[0]))
    return [
        PrizeShare(label=label, count=count, percentage=_percent_half_up(count, total))
        for label, count in ordered
    ]
