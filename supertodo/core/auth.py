"""Caller identity resolution for local-token and trusted-proxy auth modes.

Authentication itself happens elsewhere. This module only turns an inbound
request into a verified user row whose id scopes every todo and tag query.
"""

from __future__ import annotations

from dataclasses import dataclass
from hmac import compare_digest
from typing import TYPE_CHECKING, Literal

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from supertodo.core.auth_mode import AuthMode
from supertodo.core.config import settings
from supertodo.core.logging import get_logger
from supertodo.db import crud
from supertodo.db.session import get_session
from supertodo.models.users import User

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)
SECURITY_DEP = Depends(security)
SESSION_DEP = Depends(get_session)
LOCAL_AUTH_USER_ID = "local-auth-user"
LOCAL_AUTH_EMAIL = "admin@home.local"
LOCAL_AUTH_NAME = "Local User"
PROXY_USER_ID_MAX_LENGTH = 255


@dataclass
class AuthContext:
    """Authenticated user context resolved from inbound auth headers."""

    actor_type: Literal["user"]
    user: User | None = None


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    value = authorization.strip()
    if not value:
        return None
    if not value.lower().startswith("bearer "):
        return None
    token = value.split(" ", maxsplit=1)[1].strip()
    return token or None


async def _get_or_create_local_user(session: AsyncSession) -> User:
    defaults: dict[str, object] = {
        "email": LOCAL_AUTH_EMAIL,
        "name": LOCAL_AUTH_NAME,
    }
    user, created = await crud.get_or_create(
        session,
        User,
        id=LOCAL_AUTH_USER_ID,
        defaults=defaults,
    )
    if created:
        logger.info("auth.local.user_created id=%s", user.id)
    return user


async def _resolve_local_auth_context(
    *,
    request: Request,
    session: AsyncSession,
) -> AuthContext:
    token = _extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    expected = settings.local_auth_token.strip()
    if not expected or not compare_digest(token, expected):
        logger.debug("auth.local.rejected reason=token_mismatch")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    user = await _get_or_create_local_user(session)
    return AuthContext(actor_type="user", user=user)


async def _resolve_proxy_auth_context(
    *,
    request: Request,
    session: AsyncSession,
) -> AuthContext:
    user_id = (request.headers.get(settings.proxy_user_header) or "").strip()
    if not user_id or len(user_id) > PROXY_USER_ID_MAX_LENGTH:
        logger.debug("auth.proxy.rejected header=%s", settings.proxy_user_header)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    user, created = await crud.get_or_create(session, User, id=user_id)
    if created:
        logger.info("auth.proxy.user_created id=%s", user.id)
    return AuthContext(actor_type="user", user=user)


async def get_auth_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = SECURITY_DEP,
    session: AsyncSession = SESSION_DEP,
) -> AuthContext:
    """Resolve required authenticated user context for the configured auth mode."""
    del credentials
    if settings.auth_mode == AuthMode.PROXY:
        return await _resolve_proxy_auth_context(request=request, session=session)
    return await _resolve_local_auth_context(request=request, session=session)
