"""Home, dashboard and class-selection pages."""

from fastapi import APIRouter, Depends, status

from eduportal.core.class_selector import select_class
from eduportal.core.navigation import LOGIN_PATH, SELECT_CLASS_PATH, class_path
from eduportal.core.progress import compute_stats, recent_activity
from eduportal.web.context import RequestContext, get_request_context, redirect
from eduportal.web.schemas import (
    ActivityResponse,
    ClassListResponse,
    ClassResponse,
    DashboardResponse,
    ProgressStatsResponse,
    SelectClassRequest,
)

router = APIRouter(tags=["pages"])


def _class_list(ctx: RequestContext) -> ClassListResponse:
    classes = [ClassResponse.model_validate(c) for c in ctx.repo.list_classes()]
    return ClassListResponse(classes=classes, count=len(classes))


@router.get("/", response_model=ClassListResponse)
def home(ctx: RequestContext = Depends(get_request_context)):
    """Public list of all classes."""
    return _class_list(ctx)


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(ctx: RequestContext = Depends(get_request_context)):
    """Progress for the user's selected class plus recent attempts."""
    if ctx.user is None:
        return redirect(LOGIN_PATH)

    class_id = ctx.repo.get_selected_class_id(ctx.user.id)
    if class_id is None:
        return redirect(SELECT_CLASS_PATH)

    cls = ctx.repo.get_class(class_id)
    stats = compute_stats(ctx.repo, ctx.user.id, class_id)
    recent = recent_activity(ctx.repo, ctx.user.id)

    return DashboardResponse(
        email=ctx.user.email,
        class_id=class_id,
        class_name=cls.name if cls else f"Class {class_id}",
        stats=ProgressStatsResponse(
            total=stats.total,
            attempted=stats.attempted,
            correct=stats.correct,
            completion_pct=stats.completion_pct,
            accuracy_pct=stats.accuracy_pct,
        ),
        recent_activity=[ActivityResponse.model_validate(r) for r in recent],
    )


@router.get("/select-class", response_model=ClassListResponse)
def select_class_page(
    change: bool = False,
    ctx: RequestContext = Depends(get_request_context),
):
    """Classes to choose from.

    A user who already picked a class goes straight to it unless `change`
    is set.
    """
    if ctx.user is None:
        return redirect(LOGIN_PATH)

    if not change:
        selected = ctx.repo.get_selected_class_id(ctx.user.id)
        if selected is not None:
            return redirect(class_path(selected))

    return _class_list(ctx)


@router.post("/select-class")
def choose_class(
    request: SelectClassRequest,
    ctx: RequestContext = Depends(get_request_context),
):
    """Store the chosen class and open it."""
    if ctx.user is None:
        return redirect(LOGIN_PATH, status.HTTP_303_SEE_OTHER)

    select_class(ctx.repo, ctx.user.id, request.class_id)
    return redirect(class_path(request.class_id), status.HTTP_303_SEE_OTHER)
