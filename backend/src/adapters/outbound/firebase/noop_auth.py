"""Development identity verifier used when Firebase auth is disabled.

Accepts any bearer token and treats its text as the subject UID, so local
clients and tests can act as any user with ``Authorization: Bearer <uid>``.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.core.entities.identity import AuthenticatedIdentity

logger = logging.getLogger(__name__)

DEV_UID = "dev-user"


class DevIdentityVerifier:
    """Development stub - never use with real traffic."""

    def __init__(self, default_uid: str = DEV_UID) -> None:
        self._default_uid = default_uid

    async def verify_token(self, id_token: str) -> Optional[AuthenticatedIdentity]:
        uid = id_token.strip() or self._default_uid
        logger.debug("DevIdentity: accepting token as uid=%s", uid)
        return AuthenticatedIdentity(
            uid=uid,
            email=f"{uid}@example.com",
            name="Developer",
            provider="dev",
        )
