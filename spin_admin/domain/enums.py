"""Domain enums for live feeds."""

from enum import Enum


class FeedName(str, Enum):
    """Logical live feeds owned by a FeedManager."""

    RECENT_SPINS = "recent_spins"
    PRIZE_STATS = "prize_stats"


class FeedState(str, Enum):
    """Lifecycle state of one subscription handle."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    ERRORED = "errored"
