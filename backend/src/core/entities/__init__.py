from backend.src.core.entities.identity import AuthenticatedIdentity
from backend.src.core.entities.user import User

__all__ = ["AuthenticatedIdentity", "User"]
