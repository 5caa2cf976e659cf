"""Unit tests for LeaderboardService pagination."""
from __future__ import annotations

import pytest

from backend.src.application.leaderboard_service import LeaderboardService
from backend.src.core.entities.user import User
from backend.src.core.exceptions import InvalidArgumentError
from backend.src.ports.inbound.query_leaderboard_use_case import QueryLeaderboardUseCase


async def _seed(repo, scores: dict[str, float | None]) -> None:
    for user_id, score in scores.items():
        user = User.new(user_id, 0)
        user.potential_score = score
        await repo.create(user)


class TestGetTopUsers:
    """Ordering, cursors and limits."""

    def test_satisfies_port(self, leaderboard_service):
        assert isinstance(leaderboard_service, QueryLeaderboardUseCase)

    @pytest.mark.asyncio
    async def test_orders_by_score_descending(self, leaderboard_service, user_repository):
        await _seed(user_repository, {"a": 0.1, "b": 0.9, "c": 0.5})

        page = await leaderboard_service.get_top_users(limit=10)

        assert [u.id for u in page.users] == ["b", "c", "a"]
        assert page.next_cursor is None
        assert page.has_more is False

    @pytest.mark.asyncio
    async def test_unscored_users_not_ranked(self, leaderboard_service, user_repository):
        await _seed(user_repository, {"a": 0.1, "b": None})

        page = await leaderboard_service.get_top_users()

        assert [u.id for u in page.users] == ["a"]

    @pytest.mark.asyncio
    async def test_full_page_returns_cursor(self, leaderboard_service, user_repository):
        await _seed(user_repository, {"a": 0.1, "b": 0.9, "c": 0.5})

        page = await leaderboard_service.get_top_users(limit=2)

        assert [u.id for u in page.users] == ["b", "c"]
        assert page.next_cursor == "c"
        assert page.has_more is True

    @pytest.mark.asyncio
    async def test_pagination_visits_every_user_once(self, leaderboard_service, user_repository):
        scores = {f"user-{i:02d}": round((i % 7) / 10, 1) for i in range(23)}
        await _seed(user_repository, scores)

        seen: list[str] = []
        cursor = None
        while True:
            page = await leaderboard_service.get_top_users(limit=5, cursor=cursor)
            seen.extend(u.id for u in page.users)
            if not page.has_more:
                break
            cursor = page.next_cursor

        assert sorted(seen) == sorted(scores)
        assert len(seen) == len(set(seen))
        ranked = [scores[user_id] for user_id in seen]
        assert ranked == sorted(ranked, reverse=True)

    @pytest.mark.asyncio
    async def test_exact_multiple_has_no_cursor(self, leaderboard_service, user_repository):
        await _seed(user_repository, {"a": 0.3, "b": 0.2})

        page = await leaderboard_service.get_top_users(limit=2)

        assert [u.id for u in page.users] == ["a", "b"]
        assert page.next_cursor is None
        assert page.has_more is False

    @pytest.mark.asyncio
    async def test_last_full_page_has_no_cursor(self, leaderboard_service, user_repository):
        await _seed(user_repository, {"a": 0.4, "b": 0.3, "c": 0.2, "d": 0.1})

        first = await leaderboard_service.get_top_users(limit=2)
        second = await leaderboard_service.get_top_users(limit=2, cursor=first.next_cursor)

        assert first.next_cursor == "b"
        assert [u.id for u in second.users] == ["c", "d"]
        assert second.next_cursor is None

    @pytest.mark.asyncio
    async def test_unknown_cursor_rejected(self, leaderboard_service):
        with pytest.raises(InvalidArgumentError, match="Invalid pagination token"):
            await leaderboard_service.get_top_users(cursor="ghost")


class TestEffectiveLimit:
    """Limit defaulting and capping."""

    @pytest.fixture
    def service(self, mock_user_repository) -> LeaderboardService:
        return LeaderboardService(repository=mock_user_repository, default_limit=10, max_limit=100)

    @pytest.mark.parametrize("limit,expected", [(None, 10), (0, 10), (-3, 10), (25, 25), (1000, 100)])
    def test_effective_limit(self, service, limit, expected):
        assert service.effective_limit(limit) == expected

    @pytest.mark.asyncio
    async def test_repository_called_with_capped_limit(self, service, mock_user_repository):
        await service.get_top_users(limit=500)
        mock_user_repository.list_by_score.assert_awaited_once_with(101, start_after=None)
