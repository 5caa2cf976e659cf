"""Inbound port for the potential-score leaderboard."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.application.dto.leaderboard_page import LeaderboardPage


@runtime_checkable
class QueryLeaderboardUseCase(Protocol):
    async def get_top_users(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> LeaderboardPage: ...
