"""stdout logging with the request id on every line."""

import logging
import sys

from spin_admin.core.config import get_settings
from spin_admin.shared.context import get_request_id

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(request_id)s] %(message)s"

# Per-request chatter from these is noise next to our own records.
_QUIET_LOGGERS = ("httpx", "httpcore", "google.auth")


class RequestIdFilter(logging.Filter):
    """Set record.request_id to the current HTTP/WebSocket request id, or '-'."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def setup_logging() -> None:
    """Configure the root logger once; DEBUG when settings.debug, else INFO."""
    level = logging.DEBUG if get_settings().debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler])
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
