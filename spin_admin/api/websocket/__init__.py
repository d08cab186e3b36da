"""WebSocket support: live dashboard feed sessions."""

from spin_admin.api.websocket.sessions import FeedSession, FeedSessionRegistry

__all__ = ["FeedSession", "FeedSessionRegistry"]
