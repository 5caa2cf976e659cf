"""Firebase Authentication adapter.

Verifies Firebase ID tokens and reduces them to an authenticated identity.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from firebase_admin import auth

from backend.src.core.entities.identity import AuthenticatedIdentity

logger = logging.getLogger(__name__)


class FirebaseIdentityVerifier:
    """Implements IdentityVerifierPort with ``firebase_admin.auth``."""

    def __init__(self, app: Any = None, check_revoked: bool = False) -> None:
        self._app = app
        self._check_revoked = check_revoked

    async def verify_token(self, id_token: str) -> Optional[AuthenticatedIdentity]:
        """Verify a Firebase ID token.

        Returns None if the token is empty, invalid, expired or revoked.
        """
        if not id_token:
            return None
        loop = asyncio.get_running_loop()
        try:
            decoded = await loop.run_in_executor(None, self._verify_sync, id_token)
        except auth.ExpiredIdTokenError as e:
            logger.warning("Expired Firebase token: %s", e)
            return None
        except auth.RevokedIdTokenError as e:
            logger.warning("Revoked Firebase token: %s", e)
            return None
        except auth.InvalidIdTokenError as e:
            logger.warning("Invalid Firebase token: %s", e)
            return None
        except (ValueError, auth.CertificateFetchError) as e:
            logger.error("Firebase token verification failed: %s (type=%s)", e, type(e).__name__)
            return None

        logger.debug("Token decoded OK: uid=%s", decoded.get("uid"))
        return AuthenticatedIdentity(
            uid=decoded["uid"],
            email=decoded.get("email", "") or "",
            name=decoded.get("name", "") or "",
            provider=decoded.get("firebase", {}).get("sign_in_provider", ""),
        )

    def _verify_sync(self, id_token: str) -> dict:
        return auth.verify_id_token(id_token, app=self._app, check_revoked=self._check_revoked)
