"""
High-potential leaderboard query.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.application.dto.leaderboard_page import LeaderboardPage
from backend.src.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class LeaderboardService:
    """Pages through users by stored potential score, highest first."""

    def __init__(self, repository, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT):
        self._repository = repository
        self._default_limit = default_limit
        self._max_limit = max_limit

    def effective_limit(self, limit: Optional[int]) -> int:
        if not limit or limit <= 0:
            return self._default_limit
        return min(limit, self._max_limit)

    async def get_top_users(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> LeaderboardPage:
        """Return one page and the cursor for the next one.

        ``cursor`` is the id of the last user on the previous page. The
        returned ``next_cursor`` is ``None`` once the collection is exhausted.

        Raises:
            InvalidArgumentError: If ``cursor`` names a user that does not exist.
        """
        page_size = self.effective_limit(limit)

        start_after = None
        if cursor:
            snapshot = await self._repository.get(cursor)
            if snapshot is None:
                raise InvalidArgumentError("Invalid pagination token")
            start_after = snapshot.user

        # One extra row tells whether another page exists
        users = await self._repository.list_by_score(page_size + 1, start_after=start_after)
        has_more = len(users) > page_size
        users = users[:page_size]
        next_cursor = users[-1].id if has_more else None
        logger.debug("Leaderboard page size=%d returned=%d cursor=%s", page_size, len(users), cursor)
        return LeaderboardPage(users=users, next_cursor=next_cursor)
