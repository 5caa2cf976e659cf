"""
Potential score calculation.
Normalizes rating, rent volume and recency into a single 0-1 ranking value.
"""
from __future__ import annotations

from typing import Optional

from backend.src.core.entities.user import User
from backend.src.core.value_objects.score_breakdown import DEFAULT_WEIGHTS, ScoreBreakdown

MAX_RATING = 5.0
MAX_RENTS = 100
MAX_AGE_MS = 30 * 24 * 60 * 60 * 1000  # 30 days


class PotentialScoreCalculator:
    """Pure scoring function over a user's raw metrics.

    The weights are expected to sum to 1.0 so that the total stays within
    [0, 1]; :class:`ScoringSettings` enforces that at startup.
    """

    def __init__(
        self,
        weights: Optional[dict[str, float]] = None,
        max_rating: float = MAX_RATING,
        max_rents: int = MAX_RENTS,
        max_age_ms: int = MAX_AGE_MS,
    ):
        self.weights = weights or DEFAULT_WEIGHTS.copy()
        self.max_rating = max_rating
        self.max_rents = max_rents
        self.max_age_ms = max_age_ms

    def breakdown(
        self,
        rating: Optional[float],
        rents: Optional[int],
        last_active_at: Optional[int],
        now: int,
    ) -> ScoreBreakdown:
        rating_score = min(rating / self.max_rating, 1.0) if rating else 0.0
        rents_score = min(rents / self.max_rents, 1.0) if rents else 0.0

        recency_score = 0.0
        if last_active_at:
            # Activity stamped ahead of our clock counts as "now"
            age_ms = max(0, now - last_active_at)
            recency_score = max(0.0, 1.0 - age_ms / self.max_age_ms)

        return ScoreBreakdown(
            rating=max(0.0, rating_score),
            rents=max(0.0, rents_score),
            recency=recency_score,
            weights=self.weights,
        )

    def compute(
        self,
        rating: Optional[float],
        rents: Optional[int],
        last_active_at: Optional[int],
        now: int,
    ) -> float:
        return self.breakdown(rating, rents, last_active_at, now).total

    def breakdown_for(self, user: User, now: int) -> ScoreBreakdown:
        return self.breakdown(
            user.total_average_weight_ratings,
            user.number_of_rents,
            user.recently_active,
            now,
        )

    def score_user(self, user: User, now: int) -> float:
        """Recompute and store ``potential_score`` on the entity. Returns it."""
        user.potential_score = self.breakdown_for(user, now).total
        return user.potential_score


def compute_score(
    rating: Optional[float],
    rents: Optional[int],
    last_active_at: Optional[int],
    now: int,
) -> float:
    """Score with the default weights and normalization maxima."""
    return PotentialScoreCalculator().compute(rating, rents, last_active_at, now)
