"""Reusable FastAPI dependencies for the session and the calling owner.

Routes never accept an owner id from the client. They depend on
`require_owner_id`, which derives it from the authenticated request.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, status

from supertodo.core.auth import AuthContext, get_auth_context
from supertodo.db.session import get_session

AUTH_DEP = Depends(get_auth_context)
SESSION_DEP = Depends(get_session)


def require_owner_id(auth: AuthContext = AUTH_DEP) -> str:
    """Return the authenticated user's id, the owner scope for every query."""
    if auth.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return auth.user.id


OWNER_DEP = Depends(require_owner_id)
