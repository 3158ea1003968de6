"""Auth API: login, logout and session introspection for page clients.

A client id only names a session slot. Reading or ending a session also needs
the token stored in that slot, sent as ``Authorization: Bearer <token>``.
"""
import secrets
import uuid

from fastapi import APIRouter, Depends, Header, HTTPException, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from loginkit.auth.context import HandlerContext
from loginkit.auth.handler import LoginHandler
from loginkit.auth.queries import SqlUserQueries
from loginkit.core.alerts import alert_engine
from loginkit.core.errors import InvalidCredentialsError
from loginkit.core.jwt_auth import decode_token
from loginkit.core.logging import DOMAIN_SESSION, get_domain_logger
from loginkit.core.settings import settings
from loginkit.memory.database import get_db
from loginkit.memory.session_store import SessionStore
from loginkit.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, SessionResponse

router = APIRouter(prefix="/auth", tags=["auth"])
bearer = HTTPBearer(auto_error=False)
logger = get_domain_logger(__name__, DOMAIN_SESSION)


def _build_handler(db: AsyncSession, client_id: str) -> LoginHandler:
    return LoginHandler(
        HandlerContext(
            users=SqlUserQueries(db),
            store=SessionStore(client_id),
            alerts=alert_engine,
            client_id=client_id,
        )
    )


def _require_client_id(client_id: str | None) -> str:
    if not client_id:
        raise HTTPException(status_code=400, detail="x-client-id header is required")
    return client_id


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def _presented_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials else None


def _matches(stored: str | None, presented: str | None) -> bool:
    if not stored or not presented:
        return False
    return secrets.compare_digest(stored.encode(), presented.encode())


async def require_session(
    x_client_id: str | None = Header(default=None),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> tuple[str, dict]:
    client_id = _require_client_id(x_client_id)
    presented = _presented_token(credentials)
    if not presented:
        raise _unauthorized("Not authenticated")
    stored = await SessionStore(client_id).get_value(settings.token_store_key)
    if not _matches(stored, presented):
        raise _unauthorized("No active session")
    claims = decode_token(stored)
    if not claims:
        raise _unauthorized("Invalid or expired session")
    return client_id, claims


async def _claim_client_id(requested: str | None, presented: str | None) -> str:
    """Reuse ``requested`` unless it holds another session's token."""
    if not requested:
        return str(uuid.uuid4())
    stored = await SessionStore(requested).get_value(settings.token_store_key)
    if stored and not _matches(stored, presented):
        logger.warning("Client id already holds a session; issuing a new one")
        return str(uuid.uuid4())
    return requested


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    x_client_id: str | None = Header(default=None),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
):
    client_id = await _claim_client_id(x_client_id, _presented_token(credentials))
    result = await _build_handler(db, client_id).sign_in(payload.email, payload.password)
    if not result.success:
        raise InvalidCredentialsError(result.alert)

    response.headers["x-client-id"] = client_id
    return LoginResponse(
        success=True,
        token=result.token,
        user_id=str(result.user_id),
        client_id=client_id,
        alert=result.alert,
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(session: tuple[str, dict] = Depends(require_session)):
    client_id, _claims = session
    await SessionStore(client_id).remove_value(settings.token_store_key)
    alert = alert_engine.show_alert("Logged out", "info", client_id=client_id)
    return LogoutResponse(success=True, alert=alert)


@router.get("/session", response_model=SessionResponse)
async def current_session(session: tuple[str, dict] = Depends(require_session)):
    client_id, claims = session
    return SessionResponse(client_id=client_id, claims=claims)
