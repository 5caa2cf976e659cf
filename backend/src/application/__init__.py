from backend.src.application.leaderboard_service import LeaderboardService
from backend.src.application.scoring_service import ScoringService
from backend.src.application.user_service import UserService
from backend.src.application.user_writer import UserWriter

__all__ = [
    "UserService",
    "ScoringService",
    "LeaderboardService",
    "UserWriter",
]
