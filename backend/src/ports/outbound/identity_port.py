"""Port for bearer-token identity verification."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.identity import AuthenticatedIdentity


@runtime_checkable
class IdentityVerifierPort(Protocol):
    async def verify_token(self, id_token: str) -> Optional[AuthenticatedIdentity]: ...
