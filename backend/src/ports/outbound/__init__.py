from backend.src.ports.outbound.clock_port import ClockPort
from backend.src.ports.outbound.identity_port import IdentityVerifierPort
from backend.src.ports.outbound.user_repository_port import UserRepositoryPort, UserSnapshot

__all__ = [
    "UserRepositoryPort",
    "UserSnapshot",
    "IdentityVerifierPort",
    "ClockPort",
]
