"""Firestore collection and document names (schema-in-code).

The spin producer and the prize aggregator own these collections; this
service reads them and deletes spins. Use these constants so names stay
consistent across feeds, use cases, and scripts.

Example:
    db.collection(COLLECTION_STATS).document(DOC_PRIZE_DISTRIBUTION).on_snapshot(cb)
"""

# Event log written by the spin producer
COLLECTION_SPINS = "spins"

# Aggregates maintained by the prize aggregator
COLLECTION_STATS = "stats"
DOC_PRIZE_DISTRIBUTION = "prizeDistribution"

# Dashboard reference data
COLLECTION_PRIZES = "prizes"
COLLECTION_USERS = "users"
