"""Identity probe for the authenticated caller."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from supertodo.api.deps import AUTH_DEP
from supertodo.core.auth import AuthContext
from supertodo.schemas.users import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=UserRead)
async def read_current_user(auth: AuthContext = AUTH_DEP) -> UserRead:
    """Return the user the request authenticated as."""
    if auth.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return UserRead.model_validate(auth.user, from_attributes=True)
