"""
User profile use cases: lazy creation, registration, profile edits, delete.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.application.dto.profile_update import ProfileUpdate
from backend.src.application.user_writer import UserWriter
from backend.src.core.entities.user import User
from backend.src.core.exceptions import InvalidArgumentError
from backend.src.core.value_objects.preferences import Preferences

logger = logging.getLogger(__name__)


def _merge_profile(user: User, patch: ProfileUpdate, now: int) -> None:
    """Apply non-empty patch values over the existing ones."""
    user.name = patch.name or user.name
    user.email = patch.email or user.email
    user.preferences = user.preferences.updated(patch.theme, patch.notifications)
    user.mark_updated(now)


class UserService:
    """Manages the user profile document around its potential score."""

    def __init__(self, repository, writer: UserWriter):
        self._repository = repository
        self._writer = writer

    async def get_user(self, user_id: str) -> Optional[User]:
        snapshot = await self._repository.get(user_id)
        return snapshot.user if snapshot else None

    async def get_or_create_user(
        self, user_id: str, email: str = "", name: str = ""
    ) -> tuple[User, bool]:
        """Return the user, creating it with defaults on first access.

        An existing record is returned unchanged. Returns ``(user, created)``.
        """
        def create(now: int) -> User:
            user = User.new(user_id, now, name=name, email=email)
            user.recently_active = now
            return user

        user, created = await self._writer.write(
            user_id, None, create=create, description="lazy creation"
        )
        if created:
            logger.info("Lazily created user %s", user_id)
        return user, created

    async def upsert_profile(self, user_id: str, patch: ProfileUpdate) -> tuple[User, bool]:
        """Create the profile or merge non-empty patch values into it.

        ``created_at`` is never overwritten. Returns ``(user, created)``.
        """
        def create(now: int) -> User:
            preferences = Preferences().updated(patch.theme, patch.notifications)
            user = User.new(user_id, now, name=patch.name or "", email=patch.email or "", preferences=preferences)
            user.recently_active = now
            return user

        return await self._writer.write(
            user_id,
            lambda u, now: _merge_profile(u, patch, now),
            create=create,
            description="profile upsert",
        )

    async def register_user(self, user_id: str, name: str = "", email: str = "") -> tuple[User, bool]:
        """Explicit registration; idempotent for an existing user."""
        if not email:
            raise InvalidArgumentError("Email is required")
        return await self.upsert_profile(user_id, ProfileUpdate(name=name or None, email=email))

    async def update_profile(self, user_id: str, patch: ProfileUpdate) -> User:
        """Update-only path.

        Raises:
            InvalidArgumentError: If the patch carries no values.
            UserNotFoundError: If the user does not exist.
        """
        if patch.is_empty():
            raise InvalidArgumentError("No user data provided")
        user, _ = await self._writer.write(
            user_id,
            lambda u, now: _merge_profile(u, patch, now),
            description="profile update",
        )
        return user

    async def delete_user(self, user_id: str) -> bool:
        deleted = await self._repository.delete(user_id)
        if deleted:
            logger.info("User deleted: %s", user_id)
        return deleted
