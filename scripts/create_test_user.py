#!/usr/bin/env python3
"""
Seed a test user through the configured backend.

    python -m scripts.create_test_user --name "Test User" --email test@example.com

Uses PERSISTENCE_BACKEND / FIREBASE_* from the environment, so the same
command writes to the in-memory store locally or to Firestore when configured.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

from backend.src.core.entities.user import User
from backend.src.infrastructure.config import Settings
from backend.src.infrastructure.container import ApplicationContainer
from backend.src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def create_test_user(
    container: ApplicationContainer,
    user_id: str = "",
    name: str = "Test User",
    email: str = "test@example.com",
) -> User:
    """Register a user; the id defaults to ``test-user-<epoch ms>``."""
    user_id = user_id or f"test-user-{container.clock().now_ms()}"
    user, created = await container.user_service().register_user(user_id, name=name, email=email)
    if created:
        logger.info("Test user created with ID: %s", user.id)
    else:
        logger.info("Test user already existed, profile merged: %s", user.id)
    return user


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a test user")
    parser.add_argument("--id", dest="user_id", default="", help="user id (default: test-user-<timestamp>)")
    parser.add_argument("--name", default="Test User")
    parser.add_argument("--email", default="test@example.com")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    setup_logging(settings.logging.level)
    container = ApplicationContainer(settings)
    try:
        asyncio.run(create_test_user(container, args.user_id, args.name, args.email))
    except Exception as exc:
        logger.error("Failed to create test user: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
