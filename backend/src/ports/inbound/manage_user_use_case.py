"""Inbound port for user profile management."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.application.dto.profile_update import ProfileUpdate
    from backend.src.core.entities.user import User


@runtime_checkable
class ManageUserUseCase(Protocol):
    async def get_user(self, user_id: str) -> Optional[User]: ...
    async def get_or_create_user(self, user_id: str, email: str = "", name: str = "") -> tuple[User, bool]: ...
    async def register_user(self, user_id: str, name: str = "", email: str = "") -> tuple[User, bool]: ...
    async def upsert_profile(self, user_id: str, patch: ProfileUpdate) -> tuple[User, bool]: ...
    async def update_profile(self, user_id: str, patch: ProfileUpdate) -> User: ...
    async def delete_user(self, user_id: str) -> bool: ...
