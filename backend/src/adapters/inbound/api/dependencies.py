"""FastAPI dependencies for authentication and authorization."""
from __future__ import annotations

from typing import Optional

from fastapi import Request

from backend.src.core.entities.identity import AuthenticatedIdentity
from backend.src.core.exceptions import AuthenticationError, ForbiddenError


async def get_current_identity(request: Request) -> AuthenticatedIdentity:
    """Return the identity attached by the Bearer token middleware in fastapi_app.py."""
    identity: Optional[AuthenticatedIdentity] = getattr(request.state, "identity", None)
    if identity is None:
        raise AuthenticationError("Authentication required")
    return identity


def require_owner(identity: AuthenticatedIdentity, user_id: str) -> None:
    """Reject access to another subject's record."""
    if not identity.owns(user_id):
        raise ForbiddenError("Forbidden: cannot access another user's record")
