from backend.src.core.services.potential_score import PotentialScoreCalculator, compute_score

__all__ = [
    "PotentialScoreCalculator",
    "compute_score",
]
