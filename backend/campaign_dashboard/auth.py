"""
Request authentication.

Callers send a signed JWT in the ``x-auth-token`` header carrying ``userId``
(campaign owners) or ``adminUserId`` (administrators). When no ``JWT_SECRET``
is configured authentication is skipped (dev mode).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Optional

import jwt
from fastapi import Depends, Header, Request

from .errors import ForbiddenError, UnauthorizedError
from .settings import Settings, get_settings


@dataclass(frozen=True)
class Principal:
    user_id: str | None = None
    admin_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.admin_id is not None

    def owns(self, identity: str) -> bool:
        return identity in (self.user_id, self.admin_id)


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def decode_token(token: str, settings: Settings) -> Principal:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError(f"Invalid token: {e}") from None
    user_id = payload.get("userId")
    admin_id = payload.get("adminUserId")
    if not user_id and not admin_id:
        raise UnauthorizedError("Token carries no user identity")
    return Principal(
        user_id=str(user_id) if user_id else None,
        admin_id=str(admin_id) if admin_id else None,
    )


def get_principal(
    request: Request,
    x_auth_token: Optional[str] = Header(default=None),
) -> Principal | None:
    """Authenticated caller, or None in dev mode."""
    settings = _settings(request)
    # Skip auth if no secret configured (dev mode)
    if not settings.jwt_secret:
        return None
    if not x_auth_token:
        raise UnauthorizedError("Not authenticated")
    return decode_token(x_auth_token, settings)


def require_user(principal: Principal | None = Depends(get_principal)) -> Principal | None:
    return principal


def require_admin(principal: Principal | None = Depends(get_principal)) -> Principal | None:
    if principal is not None and not principal.is_admin:
        raise ForbiddenError("Admin access required")
    return principal


def ensure_identity(principal: Principal | None, identity: str) -> None:
    """Reject bodies that act on behalf of somebody other than the token holder."""
    if principal is not None and not principal.owns(identity):
        raise ForbiddenError("Token does not match the acting user")


UserDep = Annotated[Optional[Principal], Depends(require_user)]
AdminDep = Annotated[Optional[Principal], Depends(require_admin)]
