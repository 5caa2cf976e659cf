"""DTO for partial profile updates."""
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional


@dataclass(frozen=True)
class ProfileUpdate:
    """Allow-listed profile fields; ``None`` or empty means "leave unchanged"."""

    name: Optional[str] = None
    email: Optional[str] = None
    theme: Optional[str] = None
    notifications: Optional[bool] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) in (None, "") for f in fields(self))
