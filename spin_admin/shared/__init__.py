"""Cross-cutting helpers: request context, telemetry, datetime utilities."""

from spin_admin.shared.context import get_request_id, reset_request_id, set_request_id
from spin_admin.shared.utils import ensure_utc, time_ago, utc_now

__all__ = [
    "ensure_utc",
    "get_request_id",
    "reset_request_id",
    "set_request_id",
    "time_ago",
    "utc_now",
]
