"""Firestore implementation of UserRepositoryPort.

Each user is one document in a single collection keyed by the Firebase UID.
The document ``update_time`` serves as the optimistic-concurrency version.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from backend.src.core.entities.user import User
from backend.src.core.exceptions import ConflictError, StorageUnavailableError
from backend.src.ports.outbound.user_repository_port import UserSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FirestoreUserRepository:
    """Stores users in Firestore via the synchronous google-cloud-firestore client.

    SDK calls block, so each one runs in the default executor.
    """

    def __init__(self, client: firestore.Client, collection: str = "USERS") -> None:
        self._client = client
        self._collection = collection

    @classmethod
    def from_firebase(cls, app: Any, collection: str = "USERS") -> FirestoreUserRepository:
        from firebase_admin import firestore as admin_firestore
        return cls(admin_firestore.client(app), collection)

    # -- helpers ---------------------------------------------------------------

    def _doc(self, user_id: str) -> firestore.DocumentReference:
        return self._client.collection(self._collection).document(user_id)

    async def _run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
        except (
            google_exceptions.AlreadyExists,
            google_exceptions.FailedPrecondition,
            google_exceptions.NotFound,
        ) as exc:
            # Lost a create race, or the document moved on / was deleted since it was read
            raise ConflictError(str(exc)) from exc
        except google_exceptions.GoogleAPICallError as exc:
            logger.error("Firestore call %s failed: %s", getattr(func, "__name__", func), exc)
            raise StorageUnavailableError("Document store request failed") from exc

    # -- UserRepositoryPort implementation -------------------------------------

    async def get(self, user_id: str) -> Optional[UserSnapshot]:
        snapshot = await self._run(self._doc(user_id).get)
        if not snapshot.exists:
            return None
        return UserSnapshot(
            user=User.from_document(snapshot.id, snapshot.to_dict() or {}),
            version=snapshot.update_time,
        )

    async def create(self, user: User) -> UserSnapshot:
        """Create the document; Firestore rejects it if the id already exists."""
        result = await self._run(self._doc(user.id).create, user.to_document())
        logger.debug("Created user document %s/%s", self._collection, user.id)
        return UserSnapshot(user=user, version=result.update_time)

    async def replace(self, user: User, expected_version: Any) -> UserSnapshot:
        """Write every field, conditional on the document's last update time."""
        option = self._client.write_option(last_update_time=expected_version)
        result = await self._run(self._doc(user.id).update, user.to_document(), option=option)
        logger.debug("Updated user document %s/%s", self._collection, user.id)
        return UserSnapshot(user=user, version=result.update_time)

    async def delete(self, user_id: str) -> bool:
        doc = self._doc(user_id)
        snapshot = await self._run(doc.get)
        if not snapshot.exists:
            logger.warning("Attempted to delete non-existent user %s", user_id)
            return False
        await self._run(doc.delete)
        return True

    async def list_by_score(self, limit: int, start_after: Optional[User] = None) -> list[User]:
        """Query by ``potentialScore`` descending; Firestore breaks ties on document id."""
        query = (
            self._client.collection(self._collection)
            .order_by("potentialScore", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        if start_after is not None:
            cursor = await self._run(self._doc(start_after.id).get)
            if cursor.exists:
                query = query.start_after(cursor)
            else:
                query = query.start_after({"potentialScore": start_after.potential_score or 0.0})

        snapshots = await self._run(query.get)
        return [User.from_document(s.id, s.to_dict() or {}) for s in snapshots]
