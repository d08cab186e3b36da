"""Application DTOs."""

from spin_admin.application.dtos.delete import BulkDeleteResult
from spin_admin.application.dtos.feeds import FeedEvent
from spin_admin.application.dtos.principal import ADMIN_CLAIM, Principal
from spin_admin.application.dtos.stats import PrizeShare

__all__ = [
    "ADMIN_CLAIM",
    "BulkDeleteResult",
    "FeedEvent",
    "Principal",
    "PrizeShare",
]
