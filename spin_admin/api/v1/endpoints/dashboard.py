"""Dashboard lookups: prize catalogue and user details (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from spin_admin.api.v1.dependencies import get_dashboard_queries, require_admin
from spin_admin.application.dtos.principal import Principal
from spin_admin.application.use_cases.dashboard_queries import DashboardQueries
from spin_admin.core.limiter import limit_reads
from spin_admin.schemas.admin import PrizeItem, PrizeListResponse, UserDetailsResponse

router = APIRouter()


@router.get("/prizes", response_model=PrizeListResponse)
@limit_reads
async def list_prizes(
    request: Request,
    _: Annotated[Principal, Depends(require_admin)],
    queries: Annotated[DashboardQueries, Depends(get_dashboard_queries)],
) -> PrizeListResponse:
    items = await queries.list_prizes()
    return PrizeListResponse(
        items=[PrizeItem(**item) for item in items], total=len(items)
    )


@router.get(
    "/users/{user_id}",
    response_model=UserDetailsResponse,
    responses={404: {"description": "No such user document"}},
)
@limit_reads
async def get_user_details(
    request: Request,
    user_id: str,
    _: Annotated[Principal, Depends(require_admin)],
    queries: Annotated[DashboardQueries, Depends(get_dashboard_queries)],
) -> UserDetailsResponse:
    """Return the users/{user_id} document."""
    return UserDetailsResponse(**await queries.get_user_details(user_id))
