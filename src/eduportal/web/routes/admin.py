"""Admin dashboard and content forms.

Every admin endpoint requires a session and membership in the `admins`
allow-list. Form fields are validated before the allow-list lookup, so an
incomplete form never reaches the store.
"""

import asyncio
from typing import Annotated

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, status

from eduportal.backend.repository import ContentRepository
from eduportal.core import content_forms
from eduportal.errors import StoreError
from eduportal.web.context import RequestContext, get_request_context, redirect
from eduportal.web.schemas import (
    AdminActionResponse,
    AdminDashboardResponse,
    ChapterCreate,
    ChapterResponse,
    ClassCreate,
    ClassResponse,
    QuestionCreate,
    SubjectCreate,
    SubjectResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_LOGIN_PATH = "/admin/login"
NOT_ADMIN_MESSAGE = "Your account is not in the admin list."


async def _load_lists(repo: ContentRepository) -> AdminDashboardResponse:
    """Fetch classes, subjects and chapters concurrently."""
    classes, subjects, chapters = await asyncio.gather(
        asyncio.to_thread(repo.list_classes),
        asyncio.to_thread(repo.list_subjects),
        asyncio.to_thread(repo.list_chapters),
    )
    return AdminDashboardResponse(
        classes=[ClassResponse.model_validate(c) for c in classes],
        subjects=[SubjectResponse.model_validate(s) for s in subjects],
        chapters=[ChapterResponse.model_validate(c) for c in chapters],
    )


def _require_admin(ctx: RequestContext) -> None:
    """Raise unless the request comes from an allow-listed admin."""
    if ctx.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in.",
        )
    if not ctx.repo.is_admin(ctx.user.id):
        logger.info("admin_denied", user_id=ctx.user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=NOT_ADMIN_MESSAGE,
        )


async def _saved(
    repo: ContentRepository,
    message: str,
    record: dict,
    reload_lists: bool = True,
) -> AdminActionResponse:
    """Build the 201 body for a committed insert.

    The row is already stored, so a failing list reload only adds a warning.
    """
    if not reload_lists:
        return AdminActionResponse(message=message, record=record)

    try:
        lists = await _load_lists(repo)
    except StoreError as exc:
        logger.warning("admin_lists_reload_failed", error=exc.message)
        return AdminActionResponse(
            message=message,
            record=record,
            warning=f"Saved, but the lists could not be reloaded: {exc.message}",
        )
    return AdminActionResponse(message=message, record=record, lists=lists)


@router.get("", response_model=AdminDashboardResponse)
async def admin_dashboard(ctx: RequestContext = Depends(get_request_context)):
    """Lists backing the class/subject/chapter selectors."""
    if ctx.user is None:
        return redirect(ADMIN_LOGIN_PATH)

    await asyncio.to_thread(_require_admin, ctx)
    return await _load_lists(ctx.repo)


@router.post(
    "/classes",
    response_model=AdminActionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_class(
    form: ClassCreate,
    ctx: RequestContext = Depends(get_request_context),
) -> AdminActionResponse:
    """Add a class."""
    content_forms.class_row(form.name)
    await asyncio.to_thread(_require_admin, ctx)

    record = await asyncio.to_thread(content_forms.add_class, ctx.repo, form.name)
    return await _saved(ctx.repo, "Class added!", record)


@router.post(
    "/subjects",
    response_model=AdminActionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_subject(
    form: SubjectCreate,
    ctx: RequestContext = Depends(get_request_context),
) -> AdminActionResponse:
    """Add a subject to a class."""
    content_forms.subject_row(form.class_id, form.name)
    await asyncio.to_thread(_require_admin, ctx)

    record = await asyncio.to_thread(
        content_forms.add_subject, ctx.repo, form.class_id, form.name
    )
    return await _saved(ctx.repo, "Subject added!", record)


@router.post(
    "/chapters",
    response_model=AdminActionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_chapter(
    form: ChapterCreate,
    ctx: RequestContext = Depends(get_request_context),
) -> AdminActionResponse:
    """Add a chapter to a subject."""
    content_forms.chapter_row(form.subject_id, form.name)
    await asyncio.to_thread(_require_admin, ctx)

    record = await asyncio.to_thread(
        content_forms.add_chapter, ctx.repo, form.subject_id, form.name
    )
    return await _saved(ctx.repo, "Chapter added!", record)


@router.post(
    "/questions",
    response_model=AdminActionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    form: Annotated[QuestionCreate, Body(discriminator="question_type")],
    ctx: RequestContext = Depends(get_request_context),
) -> AdminActionResponse:
    """Add a theory or multiple-choice question."""
    new_question = form.to_new_question()
    content_forms.question_row(new_question)
    await asyncio.to_thread(_require_admin, ctx)

    record = await asyncio.to_thread(content_forms.add_question, ctx.repo, new_question)
    return await _saved(ctx.repo, "Question added!", record, reload_lists=False)
