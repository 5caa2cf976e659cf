"""Inbound port for metric-changing user operations."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.user import User


@runtime_checkable
class ScoreUserUseCase(Protocol):
    async def record_rating(self, user_id: str, rating: float) -> User: ...
    async def touch_activity(self, user_id: str) -> User: ...
    async def recalculate_score(self, user_id: str) -> User: ...
