"""Admin content forms: validation and inserts.

Validation runs before anything is written. A missing field raises
FormValidationError and the store is never contacted.

Questions come in two shapes that share the `questions` table:

- TheoryAnswer: a free-text reference answer
- McqAnswer: four options and the index of the correct one

They are mapped to the flat row (nullable `options`/`correct_option`) only
in `question_row`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from eduportal.backend.repository import ContentRepository
from eduportal.errors import FormValidationError

logger = structlog.get_logger(__name__)

MCQ_OPTION_COUNT = 4
DIFFICULTIES = ("easy", "medium", "hard")


@dataclass
class TheoryAnswer:
    """Reference answer for a theory question."""

    answer: str


@dataclass
class McqAnswer:
    """Options for a multiple-choice question."""

    options: list[str]
    correct_index: int = 0


QuestionBody = TheoryAnswer | McqAnswer


@dataclass
class NewQuestion:
    """A question as submitted by the admin form."""

    chapter_id: int | None
    question: str
    body: QuestionBody
    difficulty: str = "easy"
    explanation: str = ""


# =============================================================================
# ROW BUILDERS (pure, validate only)
# =============================================================================


def class_row(name: str) -> dict[str, Any]:
    name = (name or "").strip()
    if not name:
        raise FormValidationError("Class name is required.")
    return {"name": name}


def subject_row(class_id: int | None, name: str) -> dict[str, Any]:
    if class_id is None:
        raise FormValidationError("Please select a class.")
    name = (name or "").strip()
    if not name:
        raise FormValidationError("Subject name is required.")
    return {"class_id": class_id, "name": name}


def chapter_row(subject_id: int | None, name: str) -> dict[str, Any]:
    if subject_id is None:
        raise FormValidationError("Please select a subject.")
    name = (name or "").strip()
    if not name:
        raise FormValidationError("Chapter name is required.")
    return {"subject_id": subject_id, "name": name}


def question_row(new: NewQuestion) -> dict[str, Any]:
    """Validate a question and flatten it into a `questions` row.

    MCQ rows duplicate the chosen option's text into `answer`.
    """
    if new.chapter_id is None:
        raise FormValidationError("Please select a chapter.")

    question = (new.question or "").strip()
    if not question:
        raise FormValidationError("Question is required.")

    if new.difficulty not in DIFFICULTIES:
        raise FormValidationError(
            f"Difficulty must be one of: {', '.join(DIFFICULTIES)}."
        )

    row: dict[str, Any] = {
        "chapter_id": new.chapter_id,
        "question": question,
        "difficulty": new.difficulty,
        "explanation": (new.explanation or "").strip() or None,
    }

    body = new.body
    if isinstance(body, TheoryAnswer):
        answer = (body.answer or "").strip()
        if not answer:
            raise FormValidationError("Answer is required for theory questions.")
        row.update(
            question_type="theory",
            answer=answer,
            options=None,
            correct_option=None,
        )
    else:
        options = [(opt or "").strip() for opt in body.options]
        if len(options) != MCQ_OPTION_COUNT or not all(options):
            raise FormValidationError("All 4 options are required for MCQ.")
        if not 0 <= body.correct_index < MCQ_OPTION_COUNT:
            raise FormValidationError("Correct option must be A, B, C or D.")
        row.update(
            question_type="mcq",
            options=options,
            correct_option=body.correct_index,
            answer=options[body.correct_index],
        )

    return row


# =============================================================================
# HANDLERS
# =============================================================================


def add_class(repo: ContentRepository, name: str) -> dict[str, Any]:
    row = repo.insert("classes", class_row(name))
    logger.info("class_added", class_id=row.get("id"), name=row.get("name"))
    return row


def add_subject(
    repo: ContentRepository, class_id: int | None, name: str
) -> dict[str, Any]:
    row = repo.insert("subjects", subject_row(class_id, name))
    logger.info("subject_added", subject_id=row.get("id"), class_id=class_id)
    return row


def add_chapter(
    repo: ContentRepository, subject_id: int | None, name: str
) -> dict[str, Any]:
    row = repo.insert("chapters", chapter_row(subject_id, name))
    logger.info("chapter_added", chapter_id=row.get("id"), subject_id=subject_id)
    return row


def add_question(repo: ContentRepository, new: NewQuestion) -> dict[str, Any]:
    """Validate and insert a question.

    Raises:
        FormValidationError: Before any store call, if a field is missing.
        StoreError: If the insert fails.
    """
    row = repo.insert("questions", question_row(new))
    logger.info(
        "question_added",
        question_id=row.get("id"),
        chapter_id=new.chapter_id,
        question_type=row.get("question_type"),
    )
    return row
