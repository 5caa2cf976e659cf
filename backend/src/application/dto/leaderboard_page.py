"""DTO for one page of the potential-score leaderboard."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from backend.src.core.entities.user import User


@dataclass
class LeaderboardPage:
    users: list[User] = field(default_factory=list)
    next_cursor: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None
