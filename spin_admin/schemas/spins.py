"""Spin deletion schemas."""

from typing import Any

from pydantic import BaseModel, Field


class DeleteSpinsRequest(BaseModel):
    """Body for POST /spins/delete.

    Entries may be any scalar; empty ones are dropped and the rest
    coerced to strings by the coordinator.
    """

    ids: list[Any] = Field(default_factory=list, description="Spin document ids")


class DeleteSpinsResponse(BaseModel):
    deleted: int = Field(..., ge=0, description="Ids submitted in committed chunks")
