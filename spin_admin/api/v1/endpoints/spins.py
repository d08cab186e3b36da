"""Spins API: privileged bulk delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from spin_admin.api.v1.dependencies import get_bulk_delete_coordinator, require_admin
from spin_admin.application.dtos.principal import Principal
from spin_admin.application.use_cases.delete_spins import BulkDeleteCoordinator
from spin_admin.core.limiter import limit_bulk_delete
from spin_admin.schemas.spins import DeleteSpinsRequest, DeleteSpinsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/delete",
    response_model=DeleteSpinsResponse,
    responses={
        401: {"description": "Missing or invalid ID token"},
        403: {"description": "Caller lacks the admin claim"},
        502: {"description": "A chunk failed to commit; earlier chunks stay deleted"},
    },
)
@limit_bulk_delete
async def delete_spins(
    request: Request,
    body: DeleteSpinsRequest,
    principal: Annotated[Principal, Depends(require_admin)],
    coordinator: Annotated[BulkDeleteCoordinator, Depends(get_bulk_delete_coordinator)],
) -> DeleteSpinsResponse:
    """Delete spins by id, in atomic chunks of at most DELETE_CHUNK_SIZE.

    Returns the number of ids submitted in committed chunks. Ids of
    documents that no longer exist are counted too. On a failed chunk
    the response is 502 and its details carry the confirmed count.
    """
    result = await coordinator.delete_spins(body.ids)
    logger.info("uid %s deleted %d spins", principal.uid, result.deleted)
    return DeleteSpinsResponse(deleted=result.deleted)
