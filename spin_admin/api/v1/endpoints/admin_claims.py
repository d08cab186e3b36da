"""Admin claim issuance: grants {admin: true} to a user, guarded by a setup secret.

Usage: GET/POST /api/v1/admin/claims?uid=<UID>&secret=<SECRET>
The secret may also come from the JSON or form body, or the
X-Admin-Setup-Secret header. Responses are always {ok, uid | error}.
"""

import logging
from typing import Annotated, Any

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from spin_admin.api.v1.dependencies import get_privilege_gate
from spin_admin.application.services.privilege_gate import PrivilegeGate
from spin_admin.core.config import get_settings
from spin_admin.core.exception_handlers import status_for
from spin_admin.core.limiter import limit_claims
from spin_admin.domain.exceptions import SpinAdminException
from spin_admin.schemas.admin import AdminClaimResponse

logger = logging.getLogger(__name__)

router = APIRouter()

_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
}


async def _read_body(request: Request) -> dict[str, Any]:
    """JSON object or form fields from the body; {} for anything else."""
    if request.method != "POST":
        return {}
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}
    if content_type.startswith(
        ("application/x-www-form-urlencoded", "multipart/form-data")
    ):
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}
    return {}


def _claim_response(status_code: int, **fields: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=AdminClaimResponse(ok=status_code == 200, **fields).model_dump(
            exclude_none=True
        ),
    )


@router.api_route(
    "/claims",
    methods=["GET", "POST"],
    response_model=AdminClaimResponse,
    responses={
        400: {"description": "uid is required"},
        403: {"description": "Forbidden: invalid secret"},
        500: {"description": "Server secret missing or identity provider failure"},
    },
)
@limit_claims
async def issue_admin_claim(
    request: Request,
    gate: Annotated[PrivilegeGate, Depends(get_privilege_gate)],
) -> JSONResponse:
    """Grant the admin claim to uid and revoke its refresh tokens."""
    body = await _read_body(request)
    header_name = get_settings().admin_setup_secret_header
    secret = (
        request.query_params.get("secret")
        or body.get("secret")
        or request.headers.get(header_name)
        or ""
    )
    uid = request.query_params.get("uid") or body.get("uid") or ""
    try:
        granted = await gate.issue_admin_claim(str(uid), str(secret))
    except SpinAdminException as e:
        return _claim_response(status_for(e), error=e.message)
    except (httpx.HTTPError, ValueError) as e:
        logger.exception("Admin claim issuance failed for uid %s", uid)
        return _claim_response(500, error=str(e) or e.__class__.__name__)
    return _claim_response(200, uid=granted)


@router.options("/claims", status_code=204)
async def claims_preflight() -> Response:
    """Answer manual CORS preflight with 204 and no body."""
    return Response(status_code=204, headers=_PREFLIGHT_HEADERS)
