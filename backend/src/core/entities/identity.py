"""Authenticated identity returned by the token verifier."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Trusted subject of a verified bearer token.

    ``uid`` is the Firebase UID and doubles as the user document id.
    """

    uid: str
    email: str = ""
    name: str = ""
    provider: str = ""

    def owns(self, user_id: str) -> bool:
        return bool(user_id) and self.uid == user_id
