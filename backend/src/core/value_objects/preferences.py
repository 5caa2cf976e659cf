"""Preferences value object - per-user UI settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_THEME = "light"


@dataclass(frozen=True)
class Preferences:
    """Theme and notification settings stored as a nested document."""

    theme: str = DEFAULT_THEME
    notifications: bool = True

    def updated(
        self, theme: Optional[str] = None, notifications: Optional[bool] = None
    ) -> Preferences:
        """Return a copy with the provided (non-empty) values replaced."""
        return Preferences(
            theme=theme or self.theme,
            notifications=self.notifications if notifications is None else notifications,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"theme": self.theme, "notifications": self.notifications}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> Preferences:
        if not data:
            return cls()
        return cls(
            theme=data.get("theme") or DEFAULT_THEME,
            notifications=bool(data.get("notifications", True)),
        )
