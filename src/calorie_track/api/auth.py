"""Bearer token authentication for API routes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from calorie_track.domain.models import UserRecord

if TYPE_CHECKING:
    from calorie_track.containers import AppContainer

_logger = logging.getLogger(__name__)


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UserRecord:
    """Resolve the calling user from the ``Authorization: Bearer`` header."""
    container = get_container(request)
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: no token provided",
        )
    auth_user = container.token_verifier.verify(token)
    if auth_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: invalid token",
        )
    try:
        return container.user_service.ensure_user(auth_user)
    except Exception:
        _logger.exception("Failed to ensure user exists", extra={"uid": auth_user.uid})
        return UserRecord(
            id=auth_user.uid,
            email=auth_user.email,
            display_name=auth_user.display_name,
            calorie_goal=container.user_service.default_calorie_goal,
        )


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
