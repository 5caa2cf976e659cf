"""Unit tests for the potential score engine."""
from __future__ import annotations

import pytest

from backend.src.core.entities.user import User
from backend.src.core.services.potential_score import (
    MAX_AGE_MS,
    PotentialScoreCalculator,
    compute_score,
)

NOW_MS = 1_700_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


class TestComputeScore:
    """Tests for the default-weighted score function."""

    def test_empty_metrics_score_zero(self):
        assert compute_score(None, None, None, NOW_MS) == 0.0

    def test_perfect_metrics_score_one(self):
        assert compute_score(5.0, 100, NOW_MS, NOW_MS) == pytest.approx(1.0)

    def test_two_ratings_scenario(self):
        # avg 3.0 over 2 rents, active just now
        score = compute_score(3.0, 2, NOW_MS, NOW_MS)
        assert score == pytest.approx(0.506)

    def test_rents_clamped_at_max(self):
        assert compute_score(None, 500, None, NOW_MS) == pytest.approx(0.3)

    def test_recency_decays_linearly(self):
        half = compute_score(None, None, NOW_MS - 15 * DAY_MS, NOW_MS)
        assert half == pytest.approx(0.1)

    def test_recency_zero_after_max_age(self):
        assert compute_score(None, None, NOW_MS - MAX_AGE_MS, NOW_MS) == 0.0
        assert compute_score(None, None, NOW_MS - 31 * DAY_MS, NOW_MS) == 0.0

    def test_future_activity_counts_as_now(self):
        assert compute_score(None, None, NOW_MS + DAY_MS, NOW_MS) == pytest.approx(0.2)

    def test_zero_rating_contributes_nothing(self):
        assert compute_score(0.0, None, None, NOW_MS) == 0.0

    @pytest.mark.parametrize(
        "rating,rents,age_days",
        [(0.0, 0, 0), (2.5, 1, 5), (5.0, 100, 0), (4.9, 250, 29), (1.0, 3, 400)],
    )
    def test_score_bounded(self, rating, rents, age_days):
        score = compute_score(rating, rents, NOW_MS - age_days * DAY_MS, NOW_MS)
        assert 0.0 <= score <= 1.0 + 1e-12

    def test_monotonic_in_rating(self):
        scores = [compute_score(r, 10, NOW_MS, NOW_MS) for r in (0.0, 1.0, 2.5, 4.0, 5.0)]
        assert scores == sorted(scores)

    def test_monotonic_in_rents(self):
        scores = [compute_score(3.0, n, NOW_MS, NOW_MS) for n in (0, 1, 10, 99, 100, 150)]
        assert scores == sorted(scores)

    def test_monotonic_in_recency(self):
        ages = (40, 30, 20, 10, 1, 0)
        scores = [compute_score(3.0, 10, NOW_MS - a * DAY_MS, NOW_MS) for a in ages]
        assert scores == sorted(scores)


class TestPotentialScoreCalculator:
    """Tests for the configurable calculator."""

    def test_breakdown_components(self):
        calc = PotentialScoreCalculator()
        breakdown = calc.breakdown(4.0, 50, NOW_MS - 3 * DAY_MS, NOW_MS)

        assert breakdown.rating == pytest.approx(0.8)
        assert breakdown.rents == pytest.approx(0.5)
        assert breakdown.recency == pytest.approx(0.9)
        assert breakdown.total == pytest.approx(0.5 * 0.8 + 0.3 * 0.5 + 0.2 * 0.9)

    def test_custom_weights(self):
        calc = PotentialScoreCalculator(weights={"rating": 0.0, "rents": 0.0, "recency": 1.0})
        assert calc.compute(5.0, 100, NOW_MS, NOW_MS) == pytest.approx(1.0)
        assert calc.compute(5.0, 100, None, NOW_MS) == 0.0

    def test_custom_maxima(self):
        calc = PotentialScoreCalculator(max_rating=10.0, max_rents=10, max_age_ms=DAY_MS)
        breakdown = calc.breakdown(5.0, 5, NOW_MS - DAY_MS // 2, NOW_MS)
        assert breakdown.rating == pytest.approx(0.5)
        assert breakdown.rents == pytest.approx(0.5)
        assert breakdown.recency == pytest.approx(0.5)

    def test_score_user_sets_potential_score(self):
        user = User(id="u1", total_average_weight_ratings=3.0, number_of_rents=2, recently_active=NOW_MS)
        calc = PotentialScoreCalculator()

        score = calc.score_user(user, NOW_MS)

        assert score == pytest.approx(0.506)
        assert user.potential_score == score

    def test_deterministic(self):
        calc = PotentialScoreCalculator()
        first = calc.compute(3.3, 7, NOW_MS - DAY_MS, NOW_MS)
        second = calc.compute(3.3, 7, NOW_MS - DAY_MS, NOW_MS)
        assert first == second
