"""Admin claim issuance and dashboard lookup schemas."""

from pydantic import BaseModel, ConfigDict, Field


class AdminClaimResponse(BaseModel):
    """Response envelope for /admin/claims; error is set when ok is False."""

    ok: bool
    uid: str | None = None
    error: str | None = None


class PrizeItem(BaseModel):
    """One prize document; stored fields pass through."""

    model_config = ConfigDict(extra="allow")

    id: str


class PrizeListResponse(BaseModel):
    items: list[PrizeItem] = Field(default_factory=list)
    total: int = 0


class UserDetailsResponse(BaseModel):
    """A users/{id} document; stored fields pass through."""

    model_config = ConfigDict(extra="allow")

    id: str
