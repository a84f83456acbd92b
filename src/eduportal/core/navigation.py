"""Class-lock navigation guard.

Every class-scoped page runs `authorize` before loading content. The checks
run in a fixed order and the first failing one decides the redirect:

    session -> selected class -> class in URL -> subject -> chapter

A user may only browse the class stored in their profile. Asking for any
other class, or for a subject/chapter outside the hierarchy in the URL,
sends them back to the nearest valid page instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from eduportal.backend.client import AuthUser
from eduportal.backend.records import ChapterRecord, SubjectRecord
from eduportal.backend.repository import ContentRepository

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/login"
SELECT_CLASS_PATH = "/select-class"


def class_path(class_id: int) -> str:
    return f"/class/{class_id}"


def subject_path(class_id: int, subject_id: int) -> str:
    return f"/class/{class_id}/subject/{subject_id}"


def chapter_path(class_id: int, subject_id: int, chapter_id: int) -> str:
    return f"/class/{class_id}/subject/{subject_id}/chapter/{chapter_id}"


@dataclass
class Allow:
    """The page may be served.

    Carries the rows fetched while checking so the page does not re-read them.
    """

    selected_class_id: int
    subject: SubjectRecord | None = None
    chapter: ChapterRecord | None = None


@dataclass
class RedirectTo:
    """The user must be sent elsewhere."""

    path: str


GuardResult = Allow | RedirectTo


def _redirect(path: str, reason: str, **context) -> RedirectTo:
    logger.info("guard_redirect", reason=reason, target=path, **context)
    return RedirectTo(path)


def authorize(
    repo: ContentRepository,
    user: AuthUser | None,
    class_id: int,
    subject_id: int | None = None,
    chapter_id: int | None = None,
) -> GuardResult:
    """Decide whether a class/subject/chapter page may be served.

    Args:
        repo: Repository bound to the request's client
        user: Authenticated user, or None
        class_id: Class id from the URL
        subject_id: Subject id from the URL, if the route has one
        chapter_id: Chapter id from the URL, if the route has one

    Returns:
        Allow, or RedirectTo with the path to send the user to.

    Raises:
        StoreError: If any lookup fails. Not retried.
    """
    if user is None:
        return _redirect(LOGIN_PATH, "no_session")

    selected = repo.get_selected_class_id(user.id)
    if selected is None:
        return _redirect(SELECT_CLASS_PATH, "no_selected_class", user_id=user.id)

    if class_id != selected:
        return _redirect(
            class_path(selected),
            "class_locked",
            user_id=user.id,
            requested=class_id,
        )

    if subject_id is None:
        return Allow(selected_class_id=selected)

    subject = repo.get_subject(subject_id)
    if subject is None or subject.class_id != selected:
        return _redirect(
            class_path(selected),
            "subject_outside_class",
            user_id=user.id,
            subject_id=subject_id,
        )

    if chapter_id is None:
        return Allow(selected_class_id=selected, subject=subject)

    chapter = repo.get_chapter(chapter_id)
    if chapter is None or chapter.subject_id != subject_id:
        return _redirect(
            subject_path(selected, subject_id),
            "chapter_outside_subject",
            user_id=user.id,
            chapter_id=chapter_id,
        )

    return Allow(selected_class_id=selected, subject=subject, chapter=chapter)
