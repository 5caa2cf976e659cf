"""Port for user document persistence."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from backend.src.core.entities.user import User


@dataclass(frozen=True)
class UserSnapshot:
    """A user as read from the store, with the store-native write version."""

    user: User
    version: Any


@runtime_checkable
class UserRepositoryPort(Protocol):
    async def get(self, user_id: str) -> Optional[UserSnapshot]: ...
    async def create(self, user: User) -> UserSnapshot: ...
    async def replace(self, user: User, expected_version: Any) -> UserSnapshot: ...
    async def delete(self, user_id: str) -> bool: ...
    async def list_by_score(self, limit: int, start_after: Optional[User] = None) -> list[User]: ...
