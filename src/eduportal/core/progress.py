"""Progress statistics for a user's selected class.

Counts are always scoped to the class: a question counts as attempted or
correct only if it belongs to one of the class's chapters.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import structlog

from eduportal.backend.records import ProgressRecord
from eduportal.backend.repository import ContentRepository

logger = structlog.get_logger(__name__)

CORRECT_STATUS = "correct"
RECENT_ACTIVITY_LIMIT = 5


def percent(part: int, whole: int) -> int:
    """Whole-number percentage, rounded half-up and kept within 0..100."""
    if whole <= 0:
        return 0
    value = (Decimal(100 * part) / Decimal(whole)).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return max(0, min(100, int(value)))


@dataclass
class ProgressStats:
    """Attempt counts for one user in one class."""

    total: int
    attempted: int
    correct: int

    @property
    def completion_pct(self) -> int:
        return percent(self.attempted, self.total)

    @property
    def accuracy_pct(self) -> int:
        return percent(self.correct, self.attempted)


def compute_stats(
    repo: ContentRepository,
    user_id: str,
    class_id: int,
) -> ProgressStats:
    """Compute total/attempted/correct for a user's class.

    Args:
        repo: Repository bound to the request's client
        user_id: The user whose progress is counted
        class_id: The class to scope the counts to

    Returns:
        ProgressStats; percentages are derived properties.
    """
    total = repo.count_class_questions(class_id)
    if total == 0:
        return ProgressStats(total=0, attempted=0, correct=0)

    attempted = repo.count_class_progress(user_id, class_id)
    correct = repo.count_class_progress(user_id, class_id, status=CORRECT_STATUS)

    stats = ProgressStats(total=total, attempted=attempted, correct=correct)
    logger.debug(
        "progress_computed",
        user_id=user_id,
        class_id=class_id,
        total=stats.total,
        attempted=stats.attempted,
        correct=stats.correct,
    )
    return stats


def recent_activity(
    repo: ContentRepository,
    user_id: str,
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> list[ProgressRecord]:
    """The user's latest attempts, newest first."""
    return repo.recent_progress(user_id, limit=limit)
