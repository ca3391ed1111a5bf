"""
MiniNote Backend - Note Route Handlers
=======================================

What:  GET / (new note), GET /{slug} (read), POST /{slug} (save/delete).
How:   Slugs are validated by the `valid_slug` dependency; an invalid one
       raises SlugValidationError, which the global handler turns into a
       redirect to a fresh id. Notes are created only by navigating to an
       id and saving text: GET never changes state.

Response matrix for GET /{slug}:
    invalid slug                   → 303 to /{new-id}
    ?raw or CLI user agent, found  → 200 text/plain, stored bytes
    ?raw or CLI user agent, absent → 404, empty body
    otherwise                      → 200 HTML editor page (empty if absent)
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from mininote.config import Settings
from mininote.dependencies import form_body, get_app_settings, get_note_service, valid_slug
from mininote.exceptions import NotFoundError
from mininote.services.negotiation import RAW_MEDIA_TYPE, render_note_page, wants_raw
from mininote.services.notes import NoteService
from mininote.services.slugs import generate_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


def redirect_to_new_note(settings: Settings) -> RedirectResponse:
    """303 to a freshly generated id. The id is not checked for existence."""
    return RedirectResponse(url=f"/{generate_id(settings.id_length)}", status_code=303)


@router.get("/", summary="Start a new note", response_class=RedirectResponse, status_code=303)
async def new_note(settings: Settings = Depends(get_app_settings)) -> RedirectResponse:
    return redirect_to_new_note(settings)


@router.get(
    "/{slug:path}",
    summary="Read a note",
    responses={
        200: {"description": "Editor page, or raw text in raw mode"},
        303: {"description": "Invalid id, redirected to a new note"},
        404: {"description": "Raw mode and the note does not exist"},
    },
)
async def read_note(
    request: Request,
    slug: str = Depends(valid_slug),
    notes: NoteService = Depends(get_note_service),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Serve a note as raw text or as the HTML editor.

    Raw mode returns the stored bytes unchanged (no escaping, no wrapper).
    The editor page is always 200: an absent note is just an empty editor.
    """
    content = await notes.load(slug)

    raw_flag = "raw" in request.query_params
    if wants_raw(raw_flag, request.headers.get("user-agent")):
        if content is None:
            raise NotFoundError(resource="note", resource_id=slug)
        return Response(content=content, media_type=RAW_MEDIA_TYPE)

    return HTMLResponse(render_note_page(slug, content, settings.excerpt_length))


@router.post(
    "/{slug:path}",
    summary="Save or delete a note",
    responses={
        200: {"description": "Saved (or deleted when text is empty)"},
        303: {"description": "Invalid id, redirected to a new note"},
        403: {"description": "Note too large, or note limit reached"},
        415: {"description": "Body is not form-encoded"},
    },
)
async def save_note(
    slug: str = Depends(valid_slug),
    _form: None = Depends(form_body),
    text: str = Form(default=""),
    notes: NoteService = Depends(get_note_service),
) -> Response:
    """
    Save the submitted text, or delete the note if the text is empty.

    Limits are enforced by NoteService; violations surface as 403 through
    the CapacityError handler. A body that is not a form is refused with
    415 before anything is written or deleted.
    """
    outcome = await notes.save(slug, text)
    logger.debug("Note %s %s", slug, outcome.value)
    return Response(status_code=200)
