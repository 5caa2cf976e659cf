from backend.src.core.value_objects.preferences import Preferences
from backend.src.core.value_objects.score_breakdown import ScoreBreakdown

__all__ = ["Preferences", "ScoreBreakdown"]
