from backend.src.ports.inbound.manage_user_use_case import ManageUserUseCase
from backend.src.ports.inbound.query_leaderboard_use_case import QueryLeaderboardUseCase
from backend.src.ports.inbound.score_user_use_case import ScoreUserUseCase

__all__ = [
    "ManageUserUseCase",
    "ScoreUserUseCase",
    "QueryLeaderboardUseCase",
]
