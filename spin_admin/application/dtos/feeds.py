"""DTOs delivered to live feed consumers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from spin_admin.domain.enums import FeedName
from spin_admin.domain.exceptions import SubscriptionDeliveryFailure


@dataclass(frozen=True)
class FeedEvent:
    """One delivery on a feed: either data or an error, never both."""

    feed: FeedName
    data: Any = None
    error: SubscriptionDeliveryFailure | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None
