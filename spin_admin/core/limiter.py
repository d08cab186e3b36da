"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules use the same
instance without circular imports. Limit strings live here only.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

CLAIM_ISSUANCE_LIMIT = "5/minute"
BULK_DELETE_LIMIT = "30/minute"
READ_ENDPOINT_LIMIT = "120/minute"

limit_claims = limiter.limit(CLAIM_ISSUANCE_LIMIT)
limit_bulk_delete = limiter.limit(BULK_DELETE_LIMIT)
limit_reads = limiter.limit(READ_ENDPOINT_LIMIT)
