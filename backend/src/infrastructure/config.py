"""
User profile backend configuration using Pydantic Settings.
Every section reads its own environment prefix; a local .env is honoured.
"""

from __future__ import annotations

import math

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()


class FirebaseSettings(BaseSettings):
    enabled: bool = False
    credentials_path: str = ""
    project_id: str = ""
    api_key: str = ""
    auth_domain: str = ""
    check_revoked: bool = False

    model_config = {"env_prefix": "FIREBASE_"}


class FirestoreSettings(BaseSettings):
    collection: str = "USERS"

    model_config = {"env_prefix": "FIRESTORE_"}


class ScoringSettings(BaseSettings):
    rating_weight: float = 0.5
    rents_weight: float = 0.3
    recency_weight: float = 0.2
    max_rating: float = 5.0
    max_rents: int = 100
    max_age_days: int = 30

    model_config = {"env_prefix": "SCORING_"}

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> ScoringSettings:
        total = self.rating_weight + self.rents_weight + self.recency_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}")
        if self.max_rating <= 0 or self.max_rents <= 0 or self.max_age_days <= 0:
            raise ValueError("Scoring maxima must be positive")
        return self

    @property
    def weights(self) -> dict[str, float]:
        return {
            "rating": self.rating_weight,
            "rents": self.rents_weight,
            "recency": self.recency_weight,
        }

    @property
    def max_age_ms(self) -> int:
        return self.max_age_days * 24 * 60 * 60 * 1000


class LeaderboardSettings(BaseSettings):
    default_limit: int = 10
    max_limit: int = 100

    model_config = {"env_prefix": "LEADERBOARD_"}


class ConcurrencySettings(BaseSettings):
    max_attempts: int = 3
    base_delay_seconds: float = 0.05

    model_config = {"env_prefix": "CONCURRENCY_"}


class WebSettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])

    model_config = {"env_prefix": "WEB_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    app_env: str = "development"
    version: str = "1.0.0"
    persistence_backend: str = "memory"  # "firestore" or "memory"

    # Authentication / Google Cloud
    firebase: FirebaseSettings = Field(default_factory=FirebaseSettings)
    firestore: FirestoreSettings = Field(default_factory=FirestoreSettings)

    # Domain
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    leaderboard: LeaderboardSettings = Field(default_factory=LeaderboardSettings)
    concurrency: ConcurrencySettings = Field(default_factory=ConcurrencySettings)

    # Web server
    web: WebSettings = Field(default_factory=WebSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def validate_production(self) -> None:
        """Validate critical settings for production environment."""
        if self.app_env != "production":
            return
        if not self.firebase.enabled:
            raise RuntimeError(
                "FATAL: Firebase authentication must be enabled in production. "
                "Set FIREBASE_ENABLED=true."
            )
        if self.persistence_backend != "firestore":
            raise RuntimeError(
                "FATAL: the in-memory store cannot be used in production. "
                "Set PERSISTENCE_BACKEND=firestore."
            )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
