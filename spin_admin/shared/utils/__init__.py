"""Datetime helpers."""

from spin_admin.shared.utils.datetime import ensure_utc, time_ago, utc_now

__all__ = ["ensure_utc", "time_ago", "utc_now"]
