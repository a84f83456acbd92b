"""Typed records for rows read from the backend tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ClassRecord:
    """Row from `classes`."""

    id: int
    name: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ClassRecord:
        return cls(id=int(row["id"]), name=row["name"])


@dataclass
class SubjectRecord:
    """Row from `subjects`."""

    id: int
    name: str
    class_id: int
    is_preview: bool = False

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> SubjectRecord:
        return cls(
            id=int(row["id"]),
            name=row.get("name", ""),
            class_id=int(row["class_id"]),
            is_preview=bool(row.get("is_preview") or False),
        )


@dataclass
class ChapterRecord:
    """Row from `chapters`."""

    id: int
    name: str
    subject_id: int
    is_preview: bool = False

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ChapterRecord:
        return cls(
            id=int(row["id"]),
            name=row.get("name", ""),
            subject_id=int(row["subject_id"]),
            is_preview=bool(row.get("is_preview") or False),
        )


@dataclass
class QuestionRecord:
    """Row from `questions`.

    `options` and `correct_option` are only set for MCQ rows.
    """

    id: int
    chapter_id: int
    question: str
    answer: str
    difficulty: str = "easy"
    question_type: str = "theory"
    options: list[str] | None = None
    correct_option: int | None = None
    explanation: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> QuestionRecord:
        return cls(
            id=int(row["id"]),
            chapter_id=int(row["chapter_id"]),
            question=row.get("question", ""),
            answer=row.get("answer") or "",
            difficulty=row.get("difficulty") or "easy",
            question_type=row.get("question_type") or "theory",
            options=row.get("options"),
            correct_option=row.get("correct_option"),
            explanation=row.get("explanation"),
        )


@dataclass
class ProgressRecord:
    """Row from `user_question_progress`."""

    question_id: int
    status: str
    updated_at: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ProgressRecord:
        return cls(
            question_id=int(row["question_id"]),
            status=row["status"],
            updated_at=str(row.get("updated_at") or ""),
        )
