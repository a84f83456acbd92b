"""Class, subject and chapter pages.

All three run the navigation guard first and only then load content.
"""

from fastapi import APIRouter, Depends

from eduportal.core.navigation import RedirectTo, authorize
from eduportal.web.context import RequestContext, get_request_context, redirect
from eduportal.web.schemas import (
    ChapterPageResponse,
    ChapterResponse,
    ClassPageResponse,
    QuestionResponse,
    SubjectPageResponse,
    SubjectResponse,
)

router = APIRouter(prefix="/class", tags=["classes"])


@router.get("/{class_id}", response_model=ClassPageResponse)
def class_page(
    class_id: int,
    ctx: RequestContext = Depends(get_request_context),
):
    """Subjects of the user's selected class."""
    result = authorize(ctx.repo, ctx.user, class_id)
    if isinstance(result, RedirectTo):
        return redirect(result.path)

    selected = result.selected_class_id
    cls = ctx.repo.get_class(selected)
    subjects = ctx.repo.list_subjects(class_id=selected)

    return ClassPageResponse(
        class_id=selected,
        class_name=cls.name if cls else f"Class {selected}",
        subjects=[SubjectResponse.model_validate(s) for s in subjects],
    )


@router.get("/{class_id}/subject/{subject_id}", response_model=SubjectPageResponse)
def subject_page(
    class_id: int,
    subject_id: int,
    ctx: RequestContext = Depends(get_request_context),
):
    """Chapters of a subject in the selected class."""
    result = authorize(ctx.repo, ctx.user, class_id, subject_id)
    if isinstance(result, RedirectTo):
        return redirect(result.path)

    chapters = ctx.repo.list_chapters(subject_id=subject_id)

    return SubjectPageResponse(
        class_id=result.selected_class_id,
        subject=SubjectResponse.model_validate(result.subject),
        chapters=[ChapterResponse.model_validate(c) for c in chapters],
    )


@router.get(
    "/{class_id}/subject/{subject_id}/chapter/{chapter_id}",
    response_model=ChapterPageResponse,
)
def chapter_page(
    class_id: int,
    subject_id: int,
    chapter_id: int,
    ctx: RequestContext = Depends(get_request_context),
):
    """Questions and answers of a chapter."""
    result = authorize(ctx.repo, ctx.user, class_id, subject_id, chapter_id)
    if isinstance(result, RedirectTo):
        return redirect(result.path)

    questions = ctx.repo.list_questions(chapter_id)

    return ChapterPageResponse(
        class_id=result.selected_class_id,
        subject_id=subject_id,
        chapter=ChapterResponse.model_validate(result.chapter),
        questions=[QuestionResponse.model_validate(q) for q in questions],
    )
