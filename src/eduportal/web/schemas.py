"""Pydantic schemas for the web layer.

Page payloads, form bodies and admin responses.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Union

from pydantic import BaseModel, Field

from eduportal import __version__
from eduportal.core.content_forms import McqAnswer, NewQuestion, TheoryAnswer


# =============================================================================
# CONTENT SCHEMAS
# =============================================================================


class ClassResponse(BaseModel):
    """A class."""

    id: int
    name: str

    model_config = {"from_attributes": True}


class SubjectResponse(BaseModel):
    """A subject within a class."""

    id: int
    name: str
    class_id: int
    is_preview: bool = False

    model_config = {"from_attributes": True}


class ChapterResponse(BaseModel):
    """A chapter within a subject."""

    id: int
    name: str
    subject_id: int
    is_preview: bool = False

    model_config = {"from_attributes": True}


class QuestionResponse(BaseModel):
    """A practice question with its answer."""

    id: int
    chapter_id: int
    question: str
    answer: str
    difficulty: str
    question_type: str = "theory"
    options: list[str] | None = None
    correct_option: int | None = None
    explanation: str | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# PAGE SCHEMAS
# =============================================================================


class ClassListResponse(BaseModel):
    """Home page and class-selection page."""

    classes: list[ClassResponse]
    count: int


class ClassPageResponse(BaseModel):
    """Subjects of the selected class."""

    class_id: int
    class_name: str
    subjects: list[SubjectResponse]


class SubjectPageResponse(BaseModel):
    """Chapters of one subject."""

    class_id: int
    subject: SubjectResponse
    chapters: list[ChapterResponse]


class ChapterPageResponse(BaseModel):
    """Questions of one chapter."""

    class_id: int
    subject_id: int
    chapter: ChapterResponse
    questions: list[QuestionResponse]


class ProgressStatsResponse(BaseModel):
    """Completion and accuracy for the selected class."""

    total: int
    attempted: int
    correct: int
    completion_pct: int = Field(..., ge=0, le=100)
    accuracy_pct: int = Field(..., ge=0, le=100)


class ActivityResponse(BaseModel):
    """One recent attempt."""

    question_id: int
    status: str
    updated_at: str

    model_config = {"from_attributes": True}


class DashboardResponse(BaseModel):
    """Student dashboard."""

    email: str | None
    class_id: int
    class_name: str
    stats: ProgressStatsResponse
    recent_activity: list[ActivityResponse]


class AuthPageResponse(BaseModel):
    """Login / signup page descriptor."""

    title: str
    subtitle: str
    submit_to: str
    next: str | None = None


# =============================================================================
# FORM SCHEMAS
# =============================================================================


class CredentialsRequest(BaseModel):
    """Email and password for login or signup."""

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=200)


class SelectClassRequest(BaseModel):
    """Class chosen on the selection page."""

    class_id: int


class ClassCreate(BaseModel):
    """Admin: add a class."""

    name: str = ""


class SubjectCreate(BaseModel):
    """Admin: add a subject to a class."""

    class_id: int | None = None
    name: str = ""


class ChapterCreate(BaseModel):
    """Admin: add a chapter to a subject."""

    subject_id: int | None = None
    name: str = ""


class _QuestionCreateBase(BaseModel):
    chapter_id: int | None = None
    question: str = ""
    difficulty: Literal["easy", "medium", "hard"] = "easy"
    explanation: str = ""


class TheoryQuestionCreate(_QuestionCreateBase):
    """Admin: add a theory question."""

    question_type: Literal["theory"]
    answer: str = ""

    def to_new_question(self) -> NewQuestion:
        return NewQuestion(
            chapter_id=self.chapter_id,
            question=self.question,
            body=TheoryAnswer(answer=self.answer),
            difficulty=self.difficulty,
            explanation=self.explanation,
        )


class McqQuestionCreate(_QuestionCreateBase):
    """Admin: add a multiple-choice question."""

    question_type: Literal["mcq"]
    options: list[str] = Field(default_factory=lambda: ["", "", "", ""])
    correct_option: int = Field(default=0, ge=0, le=3)

    def to_new_question(self) -> NewQuestion:
        return NewQuestion(
            chapter_id=self.chapter_id,
            question=self.question,
            body=McqAnswer(options=list(self.options), correct_index=self.correct_option),
            difficulty=self.difficulty,
            explanation=self.explanation,
        )


QuestionCreate = Union[TheoryQuestionCreate, McqQuestionCreate]


# =============================================================================
# ADMIN SCHEMAS
# =============================================================================


class AdminDashboardResponse(BaseModel):
    """All three content lists for the admin forms."""

    classes: list[ClassResponse]
    subjects: list[SubjectResponse]
    chapters: list[ChapterResponse]


class AdminActionResponse(BaseModel):
    """Result of an admin insert."""

    message: str
    record: dict[str, Any]
    lists: AdminDashboardResponse | None = None
    warning: str | None = None


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = __version__
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
