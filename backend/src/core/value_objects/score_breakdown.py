"""ScoreBreakdown value object - the components behind a potential score."""

from __future__ import annotations

from dataclasses import dataclass, field


DEFAULT_WEIGHTS: dict[str, float] = {
    "rating": 0.5,
    "rents": 0.3,
    "recency": 0.2,
}


@dataclass(frozen=True)
class ScoreBreakdown:
    """Normalized 0-1 component scores and their weighted total."""

    rating: float = 0.0
    rents: float = 0.0
    recency: float = 0.0
    weights: dict[str, float] = field(default_factory=lambda: DEFAULT_WEIGHTS.copy())

    @property
    def components(self) -> dict[str, float]:
        return {"rating": self.rating, "rents": self.rents, "recency": self.recency}

    @property
    def total(self) -> float:
        components = self.components
        return sum(self.weights.get(k, 0.0) * v for k, v in components.items())
