"""Progress ledger (F2).

Responsibilities:
- Record planet visits (visit bonus only on the first visit)
- Record quiz results (points per correct answer, every attempt), stored
  together with the attempt itself
- Serialize read-modify-write cycles per user

Each user's record is guarded by its own ``asyncio.Lock``; store calls run
in a worker thread so the lock is held across real suspension points.
"""

from __future__ import annotations

import asyncio
import weakref
from typing import Sequence

import structlog

from solar_explorer.config.app_config import PointsConfig, get_points_config
from solar_explorer.core.errors import InvalidPlanet, ValidationError
from solar_explorer.core.models import Progress, QuestionResult, QuizAttempt, now_iso
from solar_explorer.db import attempts_repository, planets_repository, progress_repository

logger = structlog.get_logger(__name__)


# =============================================================================
# PURE UPDATE RULES
# =============================================================================


def _touch(progress: Progress) -> None:
    now = now_iso()
    # updated_at is monotonic per record
    progress.updated_at = max(now, progress.updated_at or "")


def apply_visit(progress: Progress, planet_id: str, visit_bonus: int) -> int:
    """Mark a planet visited on an in-memory record.

    Returns:
        Points added (``visit_bonus`` on first visit, 0 otherwise)
    """
    added = 0
    if planet_id not in progress.visited_planets:
        progress.visited_planets.add(planet_id)
        added = max(visit_bonus, 0)
        progress.points += added
    _touch(progress)
    return added


def apply_quiz_result(
    progress: Progress,
    planet_id: str,
    score: int,
    per_correct_answer: int,
) -> int:
    """Award quiz points and mark the planet visited (no visit bonus).

    Returns:
        Points added (``score * per_correct_answer``)
    """
    if score < 0:
        raise ValidationError("score must not be negative", field="score")
    added = score * max(per_correct_answer, 0)
    progress.points += added
    progress.visited_planets.add(planet_id)
    _touch(progress)
    return added


# =============================================================================
# LEDGER
# =============================================================================


class ProgressLedger:
    """Applies point deltas to per-user progress records.

    Thread-unsafe by itself; safe within one event loop thanks to the
    per-user locks.
    """

    def __init__(self, points: PointsConfig | None = None):
        self.points = points or get_points_config()
        # Locks live only while some coroutine holds or awaits them
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    async def _require_planet(self, planet_id: str) -> None:
        if not planet_id or not await asyncio.to_thread(planets_repository.planet_exists, planet_id):
            raise InvalidPlanet(planet_id)

    async def get_or_create(self, user_id: str) -> Progress:
        """Fetch-or-create the progress record of a user."""
        async with self._lock_for(user_id):
            return await asyncio.to_thread(progress_repository.ensure_progress, user_id)

    async def record_visit(self, user_id: str, planet_id: str) -> Progress:
        """Record a planet visit.

        Raises:
            InvalidPlanet: If the planet does not exist
        """
        await self._require_planet(planet_id)

        async with self._lock_for(user_id):
            progress = await asyncio.to_thread(progress_repository.ensure_progress, user_id)
            added = apply_visit(progress, planet_id, self.points.visit_bonus)
            await asyncio.to_thread(progress_repository.save_progress, progress)

        logger.info(
            "progress.visit_recorded",
            user_id=user_id,
            planet_id=planet_id,
            points_added=added,
            points=progress.points,
        )
        return progress

    async def record_quiz_result(
        self,
        user_id: str,
        planet_id: str,
        score: int,
        total: int,
        results: Sequence[QuestionResult] = (),
    ) -> tuple[Progress, int, QuizAttempt]:
        """Record a graded quiz attempt and award its points.

        The attempt and the progress update are written in one transaction
        while the user's lock is held; a store failure leaves neither.

        Returns:
            Tuple of (updated Progress, points added, stored QuizAttempt)

        Raises:
            InvalidPlanet: If the planet does not exist
            StoreError: If the write fails
        """
        if total < 0 or score > total:
            raise ValidationError("score must be between 0 and total", field="score")
        await self._require_planet(planet_id)

        async with self._lock_for(user_id):
            progress = await asyncio.to_thread(progress_repository.ensure_progress, user_id)
            added = apply_quiz_result(progress, planet_id, score, self.points.per_correct_answer)
            attempt = attempts_repository.new_attempt(user_id, planet_id, score, total, results)
            await asyncio.to_thread(
                attempts_repository.save_attempt_with_progress, attempt, progress
            )

        logger.info(
            "progress.quiz_recorded",
            user_id=user_id,
            planet_id=planet_id,
            attempt_id=attempt.id,
            score=score,
            total=total,
            points_added=added,
            points=progress.points,
        )
        return progress, added, attempt


# Global ledger instance
_ledger: ProgressLedger | None = None


def get_ledger() -> ProgressLedger:
    """Get the global progress ledger instance."""
    global _ledger
    if _ledger is None:
        _ledger = ProgressLedger()
    return _ledger


def reset_ledger() -> None:
    """Reset the ledger (for testing)."""
    global _ledger
    _ledger = None
