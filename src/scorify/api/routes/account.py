"""Account API endpoint.

GET /api/auth/me - Account of the authenticated caller
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from scorify.api.app import get_db_session
from scorify.api.auth import Caller, get_current_user
from scorify.db import repo
from scorify.db.repo import DbSession
from scorify.models.types import MeResponse, UserDetail

router = APIRouter()


@router.get("/auth/me", response_model=MeResponse)
def get_me(
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> MeResponse:
    """Get the caller's account without sensitive fields.

    Raises:
        HTTPException: 404 if the token refers to a deleted account.
    """
    user = repo.get_user(session, caller.id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    return MeResponse(
        user=UserDetail(
            id=user.id,
            email=user.email,
            name=user.name,
            phone=user.phone,
            role=user.role,
            created_at=user.created_at,
        )
    )
