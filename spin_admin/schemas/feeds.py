"""Messages pushed to dashboard WebSocket sessions."""

from typing import Literal

from pydantic import BaseModel, Field


class SpinItem(BaseModel):
    id: str
    user_id: str | None = None
    prize: str
    timestamp: str | None = Field(None, description="ISO 8601, UTC")
    time_ago: str | None = Field(None, description="Relative age, e.g. '5m ago'")


class RecentSpinsMessage(BaseModel):
    type: Literal["recent_spins"] = "recent_spins"
    spins: list[SpinItem] = Field(default_factory=list)


class PrizeShareItem(BaseModel):
    label: str
    count: int
    percentage: int


class PrizeStatsMessage(BaseModel):
    type: Literal["prize_stats"] = "prize_stats"
    total: int = 0
    shares: list[PrizeShareItem] = Field(default_factory=list)


class FeedErrorMessage(BaseModel):
    type: Literal["feed_error"] = "feed_error"
    feed: str
    error: str
