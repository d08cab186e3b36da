"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from spin_admin.domain.entities import PrizeDistribution, SpinEvent
from spin_admin.domain.enums import FeedName, FeedState
from spin_admin.domain.exceptions import (
    ConfigurationException,
    InvalidRequestException,
    PermissionDeniedException,
    ResourceNotFoundException,
    SpinAdminException,
    StoreCommitFailure,
    StoreUnavailableException,
    SubscriptionDeliveryFailure,
    UnauthenticatedException,
)

__all__ = [
    # Entities
    "PrizeDistribution",
    "SpinEvent",
    # Enums
    "FeedName",
    "FeedState",
    # Exceptions
    "ConfigurationException",
    "InvalidRequestException",
    "PermissionDeniedException",
    "ResourceNotFoundException",
    "SpinAdminException",
    "StoreCommitFailure",
    "StoreUnavailableException",
    "SubscriptionDeliveryFailure",
    "UnauthenticatedException",
]
