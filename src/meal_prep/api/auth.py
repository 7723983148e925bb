"""Bearer token authentication dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from meal_prep.domain.models import UserIdentity  # noqa: TC001

if TYPE_CHECKING:
    from meal_prep.containers import AppContainer


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_user(request: Request, token: str | None) -> UserIdentity | None:
    container: AppContainer = request.app.state.container
    return container.identity_provider.get_current_user(token)


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> UserIdentity:
    """Return the authenticated caller or respond with 401."""
    user = resolve_user(request, bearer_token(authorization))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="auth_required"
        )
    return user
