"""Console live view of recent spins and the prize distribution.

Usage:
    python -m scripts.watch_feeds [limit]
Prints each update as it arrives until interrupted (Ctrl+C). Uses the same
FeedManager and projector as the dashboard WebSocket.
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from spin_admin.application.dtos.feeds import FeedEvent
from spin_admin.application.feeds import FeedManager
from spin_admin.application.services.stats_projector import project_distribution
from spin_admin.core.config import get_settings
from spin_admin.domain.enums import FeedName
from spin_admin.infrastructure.firebase import init_firebase
from spin_admin.shared.telemetry import setup_logging
from spin_admin.shared.utils.datetime import time_ago, utc_now


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _print_event(event: FeedEvent) -> None:
    if event.is_error:
        print(f"[{event.feed.value}] error: {event.error.message}", file=sys.stderr)
        return
    if event.feed is FeedName.RECENT_SPINS:
        now = utc_now()
        print(f"--- recent spins ({len(event.data)}) ---")
        for spin in event.data:
            age = time_ago(spin.occurred_at, now) if spin.occurred_at else "-"
            print(f"{spin.id:<24} {spin.principal_id or 'N/A':<30} {spin.prize_label:<16} {age}")
        return
    print(f"--- prize distribution (total {sum(event.data.values())}) ---")
    for share in project_distribution(event.data):
        print(f"{share.label:<16} {share.count:>8} {share.percentage:>4}%")


async def main(limit: int | None) -> int:
    settings = get_settings()
    firebase = init_firebase(settings)
    if firebase is None:
        print("Firebase credentials are not configured", file=sys.stderr)
        return 1
    feeds = FeedManager(firebase.firestore, recent_limit=settings.recent_spins_limit)
    try:
        feeds.recent_events(_print_event, limit=limit)
        feeds.distribution_stats(_print_event)
        await asyncio.Event().wait()
    finally:
        feeds.teardown_all()
        await firebase.aclose()
    return 0


if __name__ == "__main__":
    load_dotenv(_project_root() / ".env")
    get_settings.cache_clear()
    setup_logging()
    arg = int(sys.argv[1]) if len(sys.argv) > 1 else None
    try:
        sys.exit(asyncio.run(main(arg)))
    except KeyboardInterrupt:
        sys.exit(130)
