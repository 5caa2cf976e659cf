"""
Read-modify-write-score sequence shared by the user use cases.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from backend.src.application.optimistic import INITIAL_BACKOFF, MAX_ATTEMPTS, run_optimistic
from backend.src.core.entities.user import User
from backend.src.core.exceptions import UserNotFoundError
from backend.src.core.services.potential_score import PotentialScoreCalculator

logger = logging.getLogger(__name__)

Mutation = Callable[[User, int], None]
Factory = Callable[[int], User]


class UserWriter:
    """Applies a change to one user and persists it with a fresh potential score.

    Fields and score go out in a single conditional write keyed on the
    version read at the start, so a concurrent writer forces a retry
    instead of silently overwriting (or being overwritten by) this one.
    """

    def __init__(
        self,
        repository,
        calculator: PotentialScoreCalculator,
        clock,
        max_attempts: int = MAX_ATTEMPTS,
        initial_backoff: float = INITIAL_BACKOFF,
    ):
        self._repository = repository
        self._calculator = calculator
        self._clock = clock
        self._max_attempts = max_attempts
        self._initial_backoff = initial_backoff

    @property
    def calculator(self) -> PotentialScoreCalculator:
        return self._calculator

    def now(self) -> int:
        return self._clock.now_ms()

    async def write(
        self,
        user_id: str,
        mutate: Optional[Mutation],
        create: Optional[Factory] = None,
        description: str = "user update",
    ) -> tuple[User, bool]:
        """Run one optimistic read-modify-write-score cycle.

        ``mutate`` edits an existing user in place; ``None`` returns the
        existing record untouched. ``create`` builds the record when it is
        absent; without it a missing user raises :class:`UserNotFoundError`.
        Returns the persisted user and whether it was created.
        """

        async def attempt() -> tuple[User, bool]:
            now = self._clock.now_ms()
            snapshot = await self._repository.get(user_id)

            if snapshot is None:
                if create is None:
                    raise UserNotFoundError(user_id)
                user = create(now)
                self._calculator.score_user(user, now)
                await self._repository.create(user)
                logger.info("Created user %s (score=%.3f)", user_id, user.potential_score)
                return user, True

            user = snapshot.user
            if mutate is None:
                return user, False
            mutate(user, now)
            self._calculator.score_user(user, now)
            await self._repository.replace(user, snapshot.version)
            logger.info("Updated user %s via %s (score=%.3f)", user_id, description, user.potential_score)
            return user, False

        return await run_optimistic(
            attempt,
            description=f"{description} for {user_id}",
            max_attempts=self._max_attempts,
            initial_backoff=self._initial_backoff,
        )
