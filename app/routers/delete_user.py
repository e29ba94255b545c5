# app/routers/delete_user.py
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.core.auth_gateway import SupabaseAuthGateway, get_auth_gateway
from app.core.errors import AccountEraserError, ErrorKind
from app.database import get_session
from app.repositories.cleanup_repo import CleanupRepository
from app.repositories.profile_repo import RoleRepository
from app.services.account_eraser import AccountEraser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Functions"])

eraser = AccountEraser(RoleRepository(), CleanupRepository())

# Sent on every response, including errors, so browser clients can read
# the error body without going through CORSMiddleware.
CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def _json(body: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


def _bearer_token(header: str | None) -> str | None:
    if header is None:
        return None
    return header.removeprefix("Bearer ").strip()


@router.options("/delete-user")
def delete_user_preflight():
    """CORS preflight: empty 200 with permissive headers."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/delete-user")
async def delete_user(
    request: Request,
    session: Session = Depends(get_session),
    auth: SupabaseAuthGateway = Depends(get_auth_gateway),
):
    """
    Delete a user and every row that references them (admin only).

    Headers:
      - Authorization: Bearer <access token of an admin>

    Body:
      - {"userId": "<auth user uuid>"}

    Responses:
      - 200 {"success": true} or {"success": true, "alreadyDeleted": true}
      - 400 / 401 / 403 / 500 {"error": "<message>"}
    """
    try:
        token = _bearer_token(request.headers.get("Authorization"))
        await run_in_threadpool(eraser.authorize, session, auth, token)

        # Body is only read once the caller is known to be an admin
        body = await request.json()
        target = body.get("userId") if isinstance(body, dict) else None

        result = await run_in_threadpool(eraser.erase, session, auth, target)
        return _json(result.to_json())
    except AccountEraserError as e:
        return _json({"error": e.message}, status_code=e.status_code)
    except Exception as e:
        logger.exception("delete-user failed")
        return _json(
            {"error": str(e)},
            status_code=ErrorKind.INTERNAL_ERROR.status_code,
        )
