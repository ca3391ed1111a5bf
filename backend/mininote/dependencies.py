"""
MiniNote Backend - Request Dependencies
========================================

What:  FastAPI dependencies handing route handlers the per-app components.
How:   `create_app()` builds the settings, stores and services once and puts
       them on `app.state`; these functions read them back for each request.
       Nothing here touches the environment or module-level globals, so two
       apps with different settings can live in one process (tests do this).

Usage:
    @router.get("/{slug:path}")
    async def get_note(
        slug: str = Depends(valid_slug),
        notes: NoteService = Depends(get_note_service),
    ): ...
"""

from fastapi import Request

from mininote.config import Settings
from mininote.exceptions import SlugValidationError, UnsupportedMediaTypeError
from mininote.services.assets import StaticAssets
from mininote.services.note_store import NoteStore
from mininote.services.notes import NoteService
from mininote.services.slugs import validate_slug
from mininote.services.upload_store import UploadStore

FORM_MEDIA_TYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.note_store


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


def get_upload_store(request: Request) -> UploadStore:
    return request.app.state.upload_store


def get_static_assets(request: Request) -> StaticAssets:
    return request.app.state.static_assets


def valid_slug(slug: str) -> str:
    """
    Path parameter `slug`, checked against the slug grammar.

    Raises:
        SlugValidationError: handled globally by redirecting to a new id
    """
    if not validate_slug(slug):
        raise SlugValidationError(slug)
    return slug


def form_body(request: Request) -> None:
    """
    Require a form-encoded request body.

    Starlette parses any other body as an empty form, which would turn a
    stray POST into a delete.

    Raises:
        UnsupportedMediaTypeError: the Content-Type is missing or not a form type
    """
    content_type = request.headers.get("content-type")
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type not in FORM_MEDIA_TYPES:
        raise UnsupportedMediaTypeError(content_type)
