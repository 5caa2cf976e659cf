"""User aggregate - the profile document keyed by the Firebase UID."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from backend.src.core.value_objects.preferences import Preferences

DEFAULT_NAME = "New User"
MIN_RATING = 0.0
MAX_RATING = 5.0


def round_rating(value: float) -> float:
    """Round a rating average to one decimal place, halves away from zero."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass
class User:
    """User profile with the metrics that feed the potential score.

    Timestamps are epoch milliseconds. ``potential_score`` is derived from
    ``total_average_weight_ratings``, ``number_of_rents`` and
    ``recently_active`` and must be refreshed whenever one of them changes.
    """

    id: str
    name: str = DEFAULT_NAME
    email: str = ""
    total_average_weight_ratings: Optional[float] = None
    number_of_rents: Optional[int] = None
    recently_active: Optional[int] = None
    created_at: int = 0
    updated_at: int = 0
    potential_score: Optional[float] = None
    preferences: Preferences = field(default_factory=Preferences)

    @classmethod
    def new(
        cls,
        user_id: str,
        now: int,
        name: str = "",
        email: str = "",
        preferences: Optional[Preferences] = None,
    ) -> User:
        return cls(
            id=user_id,
            name=name or DEFAULT_NAME,
            email=email or "",
            created_at=now,
            updated_at=now,
            preferences=preferences or Preferences(),
        )

    # ── Metric mutations ──────────────────────────────────────────

    def apply_rating(self, rating: float, now: int) -> None:
        """Fold one rating into the running average and count it as a rent."""
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"Rating must be between {MIN_RATING:g} and {MAX_RATING:g}, got {rating}")
        current_avg = self.total_average_weight_ratings or 0.0
        current_count = self.number_of_rents or 0
        new_avg = (current_avg * current_count + rating) / (current_count + 1)
        self.total_average_weight_ratings = round_rating(new_avg)
        self.number_of_rents = current_count + 1
        self.touch(now)

    def touch(self, now: int) -> None:
        self.recently_active = now
        self.mark_updated(now)

    def mark_updated(self, now: int) -> None:
        # createdAt may come from a clock that ran ahead of ours
        self.updated_at = max(now, self.created_at)

    # ── Document mapping ──────────────────────────────────────────

    def to_document(self) -> dict[str, Any]:
        """Serialize to the flat camelCase document shape, omitting unset metrics."""
        doc: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "preferences": self.preferences.to_dict(),
        }
        optional = {
            "totalAverageWeightRatings": self.total_average_weight_ratings,
            "numberOfRents": self.number_of_rents,
            "recentlyActive": self.recently_active,
            "potentialScore": self.potential_score,
        }
        doc.update({k: v for k, v in optional.items() if v is not None})
        return doc

    @classmethod
    def from_document(cls, user_id: str, data: dict[str, Any]) -> User:
        return cls(
            id=user_id,
            name=data.get("name") or DEFAULT_NAME,
            email=data.get("email") or "",
            total_average_weight_ratings=data.get("totalAverageWeightRatings"),
            number_of_rents=data.get("numberOfRents"),
            recently_active=data.get("recentlyActive"),
            created_at=int(data.get("createdAt") or 0),
            updated_at=int(data.get("updatedAt") or 0),
            potential_score=data.get("potentialScore"),
            preferences=Preferences.from_dict(data.get("preferences")),
        )
