"""Unit tests for InMemoryUserRepository."""
from __future__ import annotations

import pytest

from backend.src.adapters.outbound.persistence.in_memory_user_repo import InMemoryUserRepository
from backend.src.core.entities.user import User
from backend.src.core.exceptions import ConflictError
from backend.src.ports.outbound.user_repository_port import UserRepositoryPort


def _user(user_id: str, score: float | None = None) -> User:
    user = User.new(user_id, 1000)
    user.potential_score = score
    return user


class TestInMemoryUserRepository:
    """Versioned create / replace semantics."""

    def test_satisfies_port(self, user_repository):
        assert isinstance(user_repository, UserRepositoryPort)

    @pytest.mark.asyncio
    async def test_get_missing(self, user_repository):
        assert await user_repository.get("ghost") is None

    @pytest.mark.asyncio
    async def test_create_then_get(self, user_repository):
        await user_repository.create(_user("u1"))

        snapshot = await user_repository.get("u1")

        assert snapshot.user.id == "u1"
        assert snapshot.version == 1

    @pytest.mark.asyncio
    async def test_create_duplicate_conflicts(self, user_repository):
        await user_repository.create(_user("u1"))
        with pytest.raises(ConflictError):
            await user_repository.create(_user("u1"))

    @pytest.mark.asyncio
    async def test_replace_bumps_version(self, user_repository):
        await user_repository.create(_user("u1"))
        snapshot = await user_repository.get("u1")
        snapshot.user.name = "Ada"

        result = await user_repository.replace(snapshot.user, snapshot.version)

        assert result.version == 2
        assert (await user_repository.get("u1")).user.name == "Ada"

    @pytest.mark.asyncio
    async def test_replace_stale_version_conflicts(self, user_repository):
        await user_repository.create(_user("u1"))
        stale = await user_repository.get("u1")
        fresh = await user_repository.get("u1")
        await user_repository.replace(fresh.user, fresh.version)

        with pytest.raises(ConflictError):
            await user_repository.replace(stale.user, stale.version)

    @pytest.mark.asyncio
    async def test_replace_deleted_user_conflicts(self, user_repository):
        await user_repository.create(_user("u1"))
        snapshot = await user_repository.get("u1")
        await user_repository.delete("u1")

        with pytest.raises(ConflictError):
            await user_repository.replace(snapshot.user, snapshot.version)

    @pytest.mark.asyncio
    async def test_returned_users_are_copies(self, user_repository):
        await user_repository.create(_user("u1"))
        snapshot = await user_repository.get("u1")
        snapshot.user.name = "mutated"

        assert (await user_repository.get("u1")).user.name == "New User"

    @pytest.mark.asyncio
    async def test_delete(self, user_repository):
        await user_repository.create(_user("u1"))
        assert await user_repository.delete("u1") is True
        assert await user_repository.delete("u1") is False


class TestListByScore:
    """Score ordering and cursor handling."""

    @pytest.fixture
    async def seeded(self) -> InMemoryUserRepository:
        repo = InMemoryUserRepository()
        for user in (_user("a", 0.5), _user("b", 0.5), _user("c", 0.9), _user("d", None)):
            await repo.create(user)
        return repo

    @pytest.mark.asyncio
    async def test_ties_broken_by_id_descending(self, seeded):
        users = await seeded.list_by_score(10)
        assert [u.id for u in users] == ["c", "b", "a"]

    @pytest.mark.asyncio
    async def test_limit(self, seeded):
        users = await seeded.list_by_score(1)
        assert [u.id for u in users] == ["c"]

    @pytest.mark.asyncio
    async def test_start_after_tie(self, seeded):
        cursor = (await seeded.get("b")).user
        users = await seeded.list_by_score(10, start_after=cursor)
        assert [u.id for u in users] == ["a"]
