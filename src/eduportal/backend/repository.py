"""Repository for the content, profile, progress and admin tables.

Every backend read and write the application performs goes through
ContentRepository. Each method issues exactly one store request.
"""

from __future__ import annotations

from typing import Any

import structlog
from postgrest.types import CountMethod
from supabase import Client

from eduportal.backend.client import store_call
from eduportal.backend.records import (
    ChapterRecord,
    ClassRecord,
    ProgressRecord,
    QuestionRecord,
    SubjectRecord,
)

logger = structlog.get_logger(__name__)

QUESTION_COLUMNS = (
    "id, chapter_id, question, answer, difficulty, question_type, "
    "options, correct_option, explanation"
)


def _maybe_row(response) -> dict[str, Any] | None:
    # maybe_single() yields no response at all for zero rows on some
    # postgrest releases and a response with data=None on others.
    if response is None:
        return None
    return response.data


class ContentRepository:
    """Table access bound to one request-scoped client."""

    def __init__(self, client: Client):
        self._client = client

    # -------------------------------------------------------------------------
    # Content hierarchy
    # -------------------------------------------------------------------------

    def list_classes(self) -> list[ClassRecord]:
        with store_call("list_classes"):
            response = (
                self._client.table("classes")
                .select("id, name")
                .order("id")
                .execute()
            )
        return [ClassRecord.from_row(r) for r in response.data or []]

    def get_class(self, class_id: int) -> ClassRecord | None:
        with store_call("get_class"):
            response = (
                self._client.table("classes")
                .select("id, name")
                .eq("id", class_id)
                .maybe_single()
                .execute()
            )
        row = _maybe_row(response)
        return ClassRecord.from_row(row) if row else None

    def list_subjects(self, class_id: int | None = None) -> list[SubjectRecord]:
        """List subjects, optionally only those of one class."""
        with store_call("list_subjects"):
            query = self._client.table("subjects").select(
                "id, name, class_id, is_preview"
            )
            if class_id is not None:
                query = query.eq("class_id", class_id)
            response = query.order("id").execute()
        return [SubjectRecord.from_row(r) for r in response.data or []]

    def get_subject(self, subject_id: int) -> SubjectRecord | None:
        with store_call("get_subject"):
            response = (
                self._client.table("subjects")
                .select("id, name, class_id, is_preview")
                .eq("id", subject_id)
                .maybe_single()
                .execute()
            )
        row = _maybe_row(response)
        return SubjectRecord.from_row(row) if row else None

    def list_chapters(self, subject_id: int | None = None) -> list[ChapterRecord]:
        """List chapters, optionally only those of one subject."""
        with store_call("list_chapters"):
            query = self._client.table("chapters").select(
                "id, name, subject_id, is_preview"
            )
            if subject_id is not None:
                query = query.eq("subject_id", subject_id)
            response = query.order("id").execute()
        return [ChapterRecord.from_row(r) for r in response.data or []]

    def get_chapter(self, chapter_id: int) -> ChapterRecord | None:
        with store_call("get_chapter"):
            response = (
                self._client.table("chapters")
                .select("id, name, subject_id, is_preview")
                .eq("id", chapter_id)
                .maybe_single()
                .execute()
            )
        row = _maybe_row(response)
        return ChapterRecord.from_row(row) if row else None

    def list_questions(self, chapter_id: int) -> list[QuestionRecord]:
        with store_call("list_questions"):
            response = (
                self._client.table("questions")
                .select(QUESTION_COLUMNS)
                .eq("chapter_id", chapter_id)
                .order("id")
                .execute()
            )
        return [QuestionRecord.from_row(r) for r in response.data or []]

    # -------------------------------------------------------------------------
    # Class-scoped counts (used by progress stats)
    # -------------------------------------------------------------------------

    def count_class_questions(self, class_id: int) -> int:
        """Count the questions under the class's subjects and chapters."""
        with store_call("count_class_questions"):
            response = (
                self._client.table("questions")
                .select(
                    "id, chapters!inner(subjects!inner(class_id))",
                    count=CountMethod.exact,
                    head=True,
                )
                .eq("chapters.subjects.class_id", class_id)
                .execute()
            )
        return response.count or 0

    # -------------------------------------------------------------------------
    # Profiles, progress, admins
    # -------------------------------------------------------------------------

    def get_selected_class_id(self, user_id: str) -> int | None:
        with store_call("get_selected_class_id"):
            response = (
                self._client.table("user_profiles")
                .select("selected_class_id")
                .eq("user_id", user_id)
                .maybe_single()
                .execute()
            )
        row = _maybe_row(response)
        if not row or row.get("selected_class_id") is None:
            return None
        return int(row["selected_class_id"])

    def upsert_profile(self, user_id: str, class_id: int, updated_at: str) -> None:
        """Insert or replace the user's profile row (conflict on user_id)."""
        with store_call("upsert_profile"):
            (
                self._client.table("user_profiles")
                .upsert(
                    {
                        "user_id": user_id,
                        "selected_class_id": class_id,
                        "updated_at": updated_at,
                    },
                    on_conflict="user_id",
                )
                .execute()
            )

    def count_class_progress(
        self,
        user_id: str,
        class_id: int,
        status: str | None = None,
    ) -> int:
        """Count the user's progress rows on questions of one class."""
        with store_call("count_class_progress"):
            query = (
                self._client.table("user_question_progress")
                .select(
                    "question_id, questions!inner(chapters!inner(subjects!inner(class_id)))",
                    count=CountMethod.exact,
                    head=True,
                )
                .eq("user_id", user_id)
                .eq("questions.chapters.subjects.class_id", class_id)
            )
            if status is not None:
                query = query.eq("status", status)
            response = query.execute()
        return response.count or 0

    def recent_progress(self, user_id: str, limit: int = 5) -> list[ProgressRecord]:
        with store_call("recent_progress"):
            response = (
                self._client.table("user_question_progress")
                .select("question_id, status, updated_at")
                .eq("user_id", user_id)
                .order("updated_at", desc=True)
                .limit(limit)
                .execute()
            )
        return [ProgressRecord.from_row(r) for r in response.data or []]

    def is_admin(self, user_id: str) -> bool:
        with store_call("is_admin"):
            response = (
                self._client.table("admins")
                .select("user_id")
                .eq("user_id", user_id)
                .maybe_single()
                .execute()
            )
        return _maybe_row(response) is not None

    # -------------------------------------------------------------------------
    # Inserts
    # -------------------------------------------------------------------------

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        with store_call(f"insert_{table}"):
            response = self._client.table(table).insert(row).execute()

        inserted = (response.data or [row])[0]
        logger.debug("row_inserted", table=table, row_id=inserted.get("id"))
        return inserted
