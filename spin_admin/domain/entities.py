"""Domain entities: spin events and the prize distribution aggregate.

Entities are immutable and built from raw store documents by the
from_document constructors, which own the field-name mapping and the
decoding rules (missing prize label, timestamp normalization, count
filtering).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from spin_admin.core.constants import PRIZE_LABEL_FALLBACK
from spin_admin.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

# Field names as written by the spin producer.
FIELD_PRINCIPAL_ID = "userId"
FIELD_PRIZE = "prize"
FIELD_TIMESTAMP = "timestamp"

_MAPPED_FIELDS = frozenset({FIELD_PRINCIPAL_ID, FIELD_PRIZE, FIELD_TIMESTAMP})


def _decode_timestamp(value: Any) -> datetime | None:
    """Normalize a stored timestamp to aware UTC; None if absent or unparseable."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str) and value:
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class SpinEvent:
    """One recorded reward outcome."""

    id: str
    principal_id: str | None
    prize_label: str
    occurred_at: datetime | None
    attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> SpinEvent:
        """Build from a store document; extra fields land in attributes."""
        principal = data.get(FIELD_PRINCIPAL_ID)
        prize = data.get(FIELD_PRIZE)
        return cls(
            id=doc_id,
            principal_id=str(principal) if principal else None,
            prize_label=str(prize) if prize not in (None, "") else PRIZE_LABEL_FALLBACK,
            occurred_at=_decode_timestamp(data.get(FIELD_TIMESTAMP)),
            attributes={k: v for k, v in data.items() if k not in _MAPPED_FIELDS},
        )


@dataclass(frozen=True)
class PrizeDistribution:
    """Singleton aggregate: prize label -> number of spins that won it."""

    counts: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @classmethod
    def from_document(cls, data: dict[str, Any] | None) -> PrizeDistribution:
        """Decode the aggregate document; None (missing document) yields an empty mapping.

        Non-numeric fields are skipped (the aggregator may store metadata
        next to the counts). Negative counts violate the aggregate's
        contract and are skipped with a warning.
        """
        counts: dict[str, int] = {}
        for label, value in (data or {}).items():
            if isinstance(value, bool):
                continue
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            if not isinstance(value, int):
                continue
            if value < 0:
                logger.warning("Skipping negative prize count: %s=%s", label, value)
                continue
            counts[label] = value
        return cls(counts=counts)
