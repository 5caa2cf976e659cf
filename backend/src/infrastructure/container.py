"""
Dependency injection container.
Wires together ports and adapters based on configuration.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Built once at startup and held on ``app.state.container`` for the
    lifetime of the process.

    Usage::

        container = ApplicationContainer(settings)
        service = container.scoring_service()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    def override(self, key: str, instance: object) -> None:
        """Replace a cached component (tests, scripts)."""
        self._cache[key] = instance

    # ── Lazy factory helpers ──────────────────────────────────────

    def _build_firebase_app(self, settings: Settings):
        from backend.src.adapters.outbound.firebase.firebase_app import get_firebase_app
        return get_firebase_app(
            credentials_path=settings.firebase.credentials_path,
            project_id=settings.firebase.project_id,
        )

    def _build_identity_verifier(self, settings: Settings):
        if settings.firebase.enabled:
            from backend.src.adapters.outbound.firebase.firebase_auth import FirebaseIdentityVerifier
            return FirebaseIdentityVerifier(
                app=self.firebase_app(),
                check_revoked=settings.firebase.check_revoked,
            )
        from backend.src.adapters.outbound.firebase.noop_auth import DevIdentityVerifier
        logger.warning("Firebase auth disabled: bearer tokens are trusted as user ids")
        return DevIdentityVerifier()

    def _build_user_repository(self, settings: Settings):
        if settings.persistence_backend == "firestore":
            from backend.src.adapters.outbound.persistence.firestore_user_repo import FirestoreUserRepository
            return FirestoreUserRepository.from_firebase(
                self.firebase_app(), collection=settings.firestore.collection
            )
        from backend.src.adapters.outbound.persistence.in_memory_user_repo import InMemoryUserRepository
        return InMemoryUserRepository()

    @staticmethod
    def _build_clock(settings: Settings):
        from backend.src.adapters.outbound.clock.system_clock import SystemClock
        return SystemClock()

    @staticmethod
    def _build_score_calculator(settings: Settings):
        from backend.src.core.services.potential_score import PotentialScoreCalculator
        return PotentialScoreCalculator(
            weights=settings.scoring.weights,
            max_rating=settings.scoring.max_rating,
            max_rents=settings.scoring.max_rents,
            max_age_ms=settings.scoring.max_age_ms,
        )

    # ── Port accessors ─────────────────────────────────────────────

    def firebase_app(self):
        return self._get_or_create("firebase_app", self._build_firebase_app)

    def identity_verifier(self):
        return self._get_or_create("identity_verifier", self._build_identity_verifier)

    def user_repository(self):
        return self._get_or_create("user_repository", self._build_user_repository)

    def clock(self):
        return self._get_or_create("clock", self._build_clock)

    def score_calculator(self):
        return self._get_or_create("score_calculator", self._build_score_calculator)

    # ── Application services ───────────────────────────────────────

    def user_writer(self):
        from backend.src.application.user_writer import UserWriter
        return UserWriter(
            repository=self.user_repository(),
            calculator=self.score_calculator(),
            clock=self.clock(),
            max_attempts=self.settings.concurrency.max_attempts,
            initial_backoff=self.settings.concurrency.base_delay_seconds,
        )

    def user_service(self):
        from backend.src.application.user_service import UserService
        return UserService(repository=self.user_repository(), writer=self.user_writer())

    def scoring_service(self):
        from backend.src.application.scoring_service import ScoringService
        return ScoringService(writer=self.user_writer())

    def leaderboard_service(self):
        from backend.src.application.leaderboard_service import LeaderboardService
        return LeaderboardService(
            repository=self.user_repository(),
            default_limit=self.settings.leaderboard.default_limit,
            max_limit=self.settings.leaderboard.max_limit,
        )
