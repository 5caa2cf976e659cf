"""
Metric-changing use cases: ratings, activity touches and score repair.
"""
from __future__ import annotations

import logging

from backend.src.application.user_writer import UserWriter
from backend.src.core.entities.user import MAX_RATING, MIN_RATING, User
from backend.src.core.exceptions import InvalidArgumentError
from backend.src.core.value_objects.score_breakdown import ScoreBreakdown

logger = logging.getLogger(__name__)


def _validate_rating(rating: float) -> float:
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise InvalidArgumentError("Invalid rating value")
    if rating != rating or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidArgumentError(
            f"Invalid rating value: must be between {MIN_RATING:g} and {MAX_RATING:g}"
        )
    return float(rating)


class ScoringService:
    """Keeps ``potential_score`` in step with the metrics it is derived from."""

    def __init__(self, writer: UserWriter):
        self._writer = writer

    async def record_rating(self, user_id: str, rating: float) -> User:
        """Fold a 0-5 rating into the user's running average and rent count."""
        value = _validate_rating(rating)

        def create(now: int) -> User:
            user = User.new(user_id, now)
            user.total_average_weight_ratings = value
            user.number_of_rents = 1
            user.recently_active = now
            return user

        user, _ = await self._writer.write(
            user_id,
            lambda u, now: u.apply_rating(value, now),
            create=create,
            description="rating",
        )
        return user

    async def touch_activity(self, user_id: str) -> User:
        """Stamp the user as active now, creating a bare record if needed."""

        def create(now: int) -> User:
            user = User.new(user_id, now)
            user.recently_active = now
            return user

        user, _ = await self._writer.write(
            user_id,
            lambda u, now: u.touch(now),
            create=create,
            description="activity",
        )
        return user

    async def recalculate_score(self, user_id: str) -> User:
        """Recompute and persist the score unconditionally.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        user, _ = await self._writer.write(
            user_id,
            lambda u, now: u.mark_updated(now),
            description="score recalculation",
        )
        return user

    def score_details(self, user: User) -> ScoreBreakdown:
        """Component breakdown of the user's score as of now."""
        return self._writer.calculator.breakdown_for(user, self._writer.now())
