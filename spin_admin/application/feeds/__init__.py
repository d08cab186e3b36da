"""Live feeds: subscription handles and the feed manager."""

from spin_admin.application.feeds.manager import FeedCallback, FeedManager
from spin_admin.application.feeds.subscription import SubscriptionHandle

__all__ = ["FeedCallback", "FeedManager", "SubscriptionHandle"]
