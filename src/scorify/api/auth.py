"""Caller identity and role scoping.

Tokens are HS256 JWTs issued by the external auth service and sent either
as a bearer token or in the `token` cookie. Claims used: id, role
("Admin" | "Sales"), and optionally email and name.
"""

from __future__ import annotations

from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from scorify.aggregation.filters import parse_owner
from scorify.core.config import get_settings

ADMIN_ROLE = "Admin"
TOKEN_COOKIE = "token"

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """Authenticated caller."""

    id: str
    role: str
    email: str | None = None
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str) -> dict:
    """Verify a token and return its claims.

    Raises:
        HTTPException: 401 if the token is expired or invalid.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": True},
        )
    except jwt.ExpiredSignatureError as e:
        raise _unauthorized("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise _unauthorized("Invalid token") from e


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Caller:
    """FastAPI dependency resolving the caller from bearer token or cookie."""
    token = credentials.credentials if credentials else request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise _unauthorized()

    claims = decode_token(token)
    user_id = claims.get("id")
    if not user_id:
        raise _unauthorized("Invalid token")

    return Caller(
        id=str(user_id),
        role=str(claims.get("role") or ""),
        email=claims.get("email"),
        name=claims.get("name"),
    )


def require_admin(caller: Caller = Depends(get_current_user)) -> Caller:
    """Dependency for admin-only endpoints."""
    if not caller.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permissions. Required role: {ADMIN_ROLE}",
        )
    return caller


def resolve_owner_scope(caller: Caller, requested_owner: str | None) -> str | None:
    """Owner filter to apply for this caller.

    Non-admin callers always see only their own records; admins may pick an
    owner or pass nothing/"all" to see everyone.
    """
    if caller.is_admin:
        return parse_owner(requested_owner)
    return caller.id
