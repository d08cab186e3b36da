"""Core constants: store limits and feed defaults shared across layers."""

# Firestore rejects commits with more than 500 writes.
STORE_MAX_WRITES_PER_BATCH = 500

# Deletes per batch commit; stays under the store ceiling.
DEFAULT_DELETE_CHUNK_SIZE = 400

DEFAULT_RECENT_SPINS_LIMIT = 10

# Upper bound on the recent-spins window a dashboard may request.
MAX_RECENT_SPINS_LIMIT = 500

# Shown for spins that carry no prize field.
PRIZE_LABEL_FALLBACK = "N/A"
