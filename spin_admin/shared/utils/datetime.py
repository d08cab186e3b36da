"""UTC helpers. Everything the service stores or renders is aware UTC."""

from datetime import UTC, datetime

# Calendar-free unit sizes, largest first.
_AGE_UNITS: tuple[tuple[int, str], ...] = (
    (31_536_000, "y"),
    (2_592_000, "mo"),
    (86_400, "d"),
    (3_600, "h"),
    (60, "m"),
)


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Naive values are taken as UTC; aware ones are converted. None passes through."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def time_ago(dt: datetime, now: datetime | None = None) -> str:
    """
    Render the age of dt as a short relative string ("3h ago", "just now").

    Uses fixed unit sizes (365-day years, 30-day months) and floors to the
    largest unit that fits. Future timestamps render as "just now".

    Args:
        dt: Moment to describe (naive values are treated as UTC)
        now: Reference time; defaults to utc_now()

    Returns:
        Relative age string
    """
    reference = ensure_utc(now) if now is not None else utc_now()
    seconds = int((reference - ensure_utc(dt)).total_seconds())
    for size, suffix in _AGE_UNITS:
        count = seconds // size
        if count >= 1:
            return f"{count}{suffix} ago"
    return "just now"
