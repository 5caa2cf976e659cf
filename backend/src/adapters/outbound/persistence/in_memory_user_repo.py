"""In-memory implementation of UserRepositoryPort for development and tests."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Optional

from backend.src.core.entities.user import User
from backend.src.core.exceptions import ConflictError
from backend.src.ports.outbound.user_repository_port import UserSnapshot

logger = logging.getLogger(__name__)


def _score_key(user: User) -> tuple[float, str]:
    # Firestore breaks order_by ties on the document id, in the same direction
    return (user.potential_score or 0.0, user.id)


class InMemoryUserRepository:
    """Async-safe in-memory user store with per-document versions.

    Mirrors the Firestore adapter's semantics: conditional writes fail with
    :class:`ConflictError` when the stored version moved on, and score
    queries skip documents that have no ``potential_score``.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[User, int]] = {}
        self._lock = asyncio.Lock()

    # -- UserRepositoryPort implementation -------------------------------------

    async def get(self, user_id: str) -> Optional[UserSnapshot]:
        async with self._lock:
            entry = self._store.get(user_id)
            if entry is None:
                logger.debug("User %s not found", user_id)
                return None
            user, version = entry
            return UserSnapshot(user=copy.deepcopy(user), version=version)

    async def create(self, user: User) -> UserSnapshot:
        """Insert a new user; fails if the id is already taken."""
        async with self._lock:
            if user.id in self._store:
                raise ConflictError(f"User already exists: {user.id}")
            self._store[user.id] = (copy.deepcopy(user), 1)
            logger.debug("Created user %s", user.id)
            return UserSnapshot(user=copy.deepcopy(user), version=1)

    async def replace(self, user: User, expected_version: Any) -> UserSnapshot:
        """Overwrite a user if its stored version still matches."""
        async with self._lock:
            entry = self._store.get(user.id)
            if entry is None or entry[1] != expected_version:
                raise ConflictError(f"User {user.id} changed since it was read")
            version = entry[1] + 1
            self._store[user.id] = (copy.deepcopy(user), version)
            logger.debug("Replaced user %s (version=%d)", user.id, version)
            return UserSnapshot(user=copy.deepcopy(user), version=version)

    async def delete(self, user_id: str) -> bool:
        async with self._lock:
            removed = self._store.pop(user_id, None)
            if removed is None:
                logger.warning("Attempted to delete non-existent user %s", user_id)
                return False
            logger.debug("Deleted user %s", user_id)
            return True

    async def list_by_score(self, limit: int, start_after: Optional[User] = None) -> list[User]:
        """Return users ordered by potential score, then id, both descending."""
        async with self._lock:
            ranked = sorted(
                (u for u, _ in self._store.values() if u.potential_score is not None),
                key=_score_key,
                reverse=True,
            )
            if start_after is not None:
                cursor = _score_key(start_after)
                ranked = [u for u in ranked if _score_key(u) < cursor]
            return [copy.deepcopy(u) for u in ranked[:limit]]
