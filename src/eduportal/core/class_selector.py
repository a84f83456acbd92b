"""Persist the class a user has chosen to study."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from eduportal.backend.repository import ContentRepository

logger = structlog.get_logger(__name__)


def select_class(
    repo: ContentRepository,
    user_id: str,
    class_id: int,
    now: datetime | None = None,
) -> None:
    """Record `class_id` as the user's selected class.

    Upserts on user_id, so repeated calls keep a single profile row and the
    last call wins.

    Raises:
        StoreError: If the upsert fails.
    """
    updated_at = (now or datetime.now(timezone.utc)).isoformat()
    repo.upsert_profile(user_id, class_id, updated_at)
    logger.info("class_selected", user_id=user_id, class_id=class_id)
